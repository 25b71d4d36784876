"""
Factorized input embeddings for the ALBERT encoder.

Token, learned absolute position and token-type embeddings all live in the
small embedding_size space; the encoder stack projects them up to
hidden_size.
"""

from typing import Optional

import torch
import torch.nn as nn

from .config import AlbertConfig


class AlbertEmbeddings(nn.Module):
    """
    Embeddings = Dropout(LayerNorm(word + position + token_type)).

    Args:
        config: encoder configuration (vocab_size, embedding_size,
                max_position_embeddings, type_vocab_size, pad_token_id)
    """

    def __init__(self, config: AlbertConfig):
        super().__init__()
        self.max_position_embeddings = config.max_position_embeddings
        self.word_embeddings = nn.Embedding(
            config.vocab_size, config.embedding_size, padding_idx=config.pad_token_id
        )
        self.position_embeddings = nn.Embedding(
            config.max_position_embeddings, config.embedding_size
        )
        self.token_type_embeddings = nn.Embedding(config.type_vocab_size, config.embedding_size)

        self.LayerNorm = nn.LayerNorm(config.embedding_size, eps=config.layer_norm_eps)
        self.dropout = nn.Dropout(config.hidden_dropout_prob)

        self.register_buffer(
            "position_ids",
            torch.arange(config.max_position_embeddings).unsqueeze(0),
            persistent=False,
        )

    def forward(
        self,
        input_ids: torch.Tensor,
        token_type_ids: Optional[torch.Tensor] = None,
        position_ids: Optional[torch.Tensor] = None,
    ) -> torch.Tensor:
        """
        Args:
            input_ids: (batch, seq) token ids
            token_type_ids: optional (batch, seq) segment ids, zeros if omitted
            position_ids: optional (batch, seq) positions, 0..seq-1 if omitted

        Returns:
            (batch, seq, embedding_size)
        """
        seq_len = input_ids.size(1)
        if seq_len > self.max_position_embeddings:
            raise ValueError(
                f"Sequence length {seq_len} exceeds max_position_embeddings ({self.max_position_embeddings})"
            )

        if position_ids is None:
            position_ids = self.position_ids[:, :seq_len]
        if token_type_ids is None:
            token_type_ids = torch.zeros_like(input_ids)

        embeddings = (
            self.word_embeddings(input_ids)
            + self.position_embeddings(position_ids)
            + self.token_type_embeddings(token_type_ids)
        )
        embeddings = self.LayerNorm(embeddings)
        return self.dropout(embeddings)
