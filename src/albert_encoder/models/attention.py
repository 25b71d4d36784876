"""
Self-attention for the ALBERT encoder.

This module implements the attention sublayer of an ALBERT block:
- extend_attention_mask: broadcast boolean or additive masks to score shape
- AlbertSelfAttention: multi-head self-attention with output projection,
  residual connection and LayerNorm

Attention probabilities are always computed so that the encoder stack can
collect them whenever diagnostics are requested.
"""

import math
from typing import Optional, Tuple

import torch
import torch.nn as nn
import torch.nn.functional as F

from .config import AlbertConfig


def extend_attention_mask(mask: torch.Tensor, dtype: torch.dtype) -> torch.Tensor:
    """
    Convert a mask into an additive mask broadcastable to (batch, heads, seq_q, seq_k).

    Boolean and integer masks are keep-masks: True / nonzero = attend, so a tokenizer's
    0/1 attention_mask can be passed directly. Float masks are taken as already additive
    (0 = attend, large negative = masked); an already extended 4-D float mask is only cast.
    """
    if not mask.is_floating_point():
        mask = mask.to(dtype=torch.bool)

    if mask.dim() == 2:
        # (batch, seq_k) padding mask -> (batch, 1, 1, seq_k)
        mask = mask.unsqueeze(1).unsqueeze(2)
    elif mask.dim() == 3:
        # (batch, seq_q, seq_k) -> (batch, 1, seq_q, seq_k)
        mask = mask.unsqueeze(1)

    if mask.dtype == torch.bool:
        additive = torch.zeros(mask.shape, dtype=dtype, device=mask.device)
        return additive.masked_fill(~mask, torch.finfo(dtype).min)
    return mask.to(dtype=dtype)


class AlbertSelfAttention(nn.Module):
    """
    Multi-head self-attention with a post-attention residual and LayerNorm.

    output = LayerNorm(x + Dropout(Dense(Attention(xW_Q, xW_K, xW_V))))

    Args:
        config: encoder configuration (hidden_size, num_attention_heads,
                attention_probs_dropout_prob, hidden_dropout_prob, layer_norm_eps)
    """

    def __init__(self, config: AlbertConfig):
        super().__init__()
        self.num_attention_heads = config.num_attention_heads
        self.hidden_size = config.hidden_size
        self.attention_head_size = config.head_dim

        self.query = nn.Linear(config.hidden_size, config.hidden_size)
        self.key = nn.Linear(config.hidden_size, config.hidden_size)
        self.value = nn.Linear(config.hidden_size, config.hidden_size)
        self.dense = nn.Linear(config.hidden_size, config.hidden_size)

        self.attention_dropout = nn.Dropout(config.attention_probs_dropout_prob)
        self.output_dropout = nn.Dropout(config.hidden_dropout_prob)
        self.LayerNorm = nn.LayerNorm(config.hidden_size, eps=config.layer_norm_eps)

    def _split_heads(self, x: torch.Tensor) -> torch.Tensor:
        # (batch, seq, hidden) -> (batch, heads, seq, head_size)
        batch_size = x.size(0)
        x = x.view(batch_size, -1, self.num_attention_heads, self.attention_head_size)
        return x.transpose(1, 2)

    def forward(
        self,
        hidden_states: torch.Tensor,
        mask: Optional[torch.Tensor] = None,
    ) -> Tuple[torch.Tensor, torch.Tensor]:
        """
        Args:
            hidden_states: (batch, seq_len, hidden_size)
            mask: optional boolean (True = attend) or additive mask of shape
                  (batch, seq_k), (batch, seq_q, seq_k) or (batch, 1, seq_q, seq_k)

        Returns:
            output: (batch, seq_len, hidden_size)
            attention_probs: (batch, num_heads, seq_len, seq_len)
        """
        batch_size = hidden_states.size(0)

        query = self._split_heads(self.query(hidden_states))
        key = self._split_heads(self.key(hidden_states))
        value = self._split_heads(self.value(hidden_states))

        scores = torch.matmul(query, key.transpose(-2, -1)) / math.sqrt(self.attention_head_size)
        if mask is not None:
            if mask.dim() != 4 or mask.dtype != scores.dtype:
                mask = extend_attention_mask(mask.to(scores.device), scores.dtype)
            scores = scores + mask

        # Softmax in float32 for numerical stability
        attention_probs = F.softmax(scores.float(), dim=-1).type_as(scores)
        attention_probs = self.attention_dropout(attention_probs)

        context = torch.matmul(attention_probs, value)
        # (batch, heads, seq, head_size) -> (batch, seq, hidden)
        context = context.transpose(1, 2).contiguous().view(batch_size, -1, self.hidden_size)

        projected = self.output_dropout(self.dense(context))
        output = self.LayerNorm(hidden_states + projected)
        return output, attention_probs
