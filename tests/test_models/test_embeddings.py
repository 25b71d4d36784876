import pytest
import torch

from albert_encoder.models.embeddings import AlbertEmbeddings


class TestAlbertEmbeddings:
    def test_output_shape(self, tiny_config):
        embeddings = AlbertEmbeddings(tiny_config)
        input_ids = torch.randint(0, tiny_config.vocab_size, (3, 9))
        out = embeddings(input_ids)
        assert out.shape == (3, 9, tiny_config.embedding_size)

    def test_token_types_change_output(self, tiny_config):
        torch.manual_seed(0)
        embeddings = AlbertEmbeddings(tiny_config).eval()
        input_ids = torch.randint(1, tiny_config.vocab_size, (1, 4))
        segment_a = embeddings(input_ids)
        segment_b = embeddings(input_ids, token_type_ids=torch.ones_like(input_ids))
        assert not torch.allclose(segment_a, segment_b)

    def test_rejects_sequences_past_max_positions(self, tiny_config):
        embeddings = AlbertEmbeddings(tiny_config)
        too_long = torch.ones(1, tiny_config.max_position_embeddings + 1, dtype=torch.long)
        with pytest.raises(ValueError):
            embeddings(too_long)

    def test_position_ids_buffer_is_not_saved(self, tiny_config):
        assert "position_ids" not in AlbertEmbeddings(tiny_config).state_dict()
