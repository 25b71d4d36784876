import pytest

from albert_encoder.models.config import AlbertConfig


@pytest.fixture
def tiny_config() -> AlbertConfig:
    """Small encoder: 4 depth steps over 2 groups of 2 blocks."""
    return AlbertConfig(
        vocab_size=50,
        embedding_size=8,
        hidden_size=16,
        num_hidden_layers=4,
        num_hidden_groups=2,
        num_attention_heads=4,
        intermediate_size=32,
        inner_group_num=2,
        max_position_embeddings=32,
    )
