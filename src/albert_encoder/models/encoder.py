"""
ALBERT encoder with cross-layer parameter sharing (Post-LN).

Contains:
- AlbertLayer: one block (self-attention + FFN, residual + LayerNorm after each sublayer)
- AlbertLayerGroup: inner_group_num blocks whose parameters are reused at several depth steps
- AlbertTransformer: embedding -> hidden projection + depth loop over the layer groups
- AlbertEncoder: embeddings + AlbertTransformer, accepting token ids or embeddings

Design choices:
- Post-LN, matching the reference ALBERT numerics: the FFN residual adds the attention
  output (not the block input) and LayerNorm follows the sum.
- Depth step i runs group i // (num_hidden_layers // num_hidden_groups). Both divisions
  truncate; trailing steps whose index runs past the last group reuse the last group.
- "Sharing" means re-invoking the same group at several depth steps. No parameter tensor
  is aliased between groups.
- Diagnostics are opt-in. Histories are lists when requested and None otherwise, so
  nothing is accumulated on the default path. Hidden-state entries are copies, so later
  in-place edits by the caller do not reach them.
- The attention mask is extended to its additive 4-D form once per stack call.
- Dropout follows module mode: call .eval() for deterministic outputs.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import torch
import torch.nn as nn

from .activations import get_activation
from .attention import AlbertSelfAttention, extend_attention_mask
from .config import AlbertConfig
from .embeddings import AlbertEmbeddings

LayerOutput = Tuple[torch.Tensor, Optional[List[torch.Tensor]], Optional[List[torch.Tensor]]]
StackOutput = Tuple[
    torch.Tensor, Optional[List[torch.Tensor]], Optional[List[List[torch.Tensor]]]
]


def init_albert_weights(module: nn.Module, initializer_range: float) -> None:
    """Initialize one module the ALBERT way (use with nn.Module.apply)."""
    if isinstance(module, nn.Linear):
        nn.init.normal_(module.weight, mean=0.0, std=initializer_range)
        if module.bias is not None:
            nn.init.zeros_(module.bias)
    elif isinstance(module, nn.Embedding):
        nn.init.normal_(module.weight, mean=0.0, std=initializer_range)
        if module.padding_idx is not None:
            with torch.no_grad():
                module.weight[module.padding_idx].zero_()
    elif isinstance(module, nn.LayerNorm):
        nn.init.ones_(module.weight)
        nn.init.zeros_(module.bias)


def group_index(layer_idx: int, num_hidden_layers: int, num_hidden_groups: int) -> int:
    """
    Layer group used at depth step ``layer_idx``.

    Raises ZeroDivisionError when num_hidden_groups is zero or exceeds num_hidden_layers.
    """
    layers_per_group = num_hidden_layers // num_hidden_groups
    return min(layer_idx // layers_per_group, num_hidden_groups - 1)


class AlbertLayer(nn.Module):
    """
    Single ALBERT block.

    out = LayerNorm(attn + W_out(act(W_ffn(attn))))  where  attn = SelfAttention(x)

    Args:
        config: encoder configuration (hidden_size, intermediate_size, hidden_act, layer_norm_eps)
    """

    def __init__(self, config: AlbertConfig):
        super().__init__()
        self.attention = AlbertSelfAttention(config)
        self.ffn = nn.Linear(config.hidden_size, config.intermediate_size)
        self.activation = get_activation(config.hidden_act)
        self.ffn_output = nn.Linear(config.intermediate_size, config.hidden_size)
        self.full_layer_layer_norm = nn.LayerNorm(config.hidden_size, eps=config.layer_norm_eps)

    def forward(
        self,
        hidden_states: torch.Tensor,
        mask: Optional[torch.Tensor] = None,
    ) -> Tuple[torch.Tensor, Optional[torch.Tensor]]:
        """
        Args:
            hidden_states: (batch, seq_len, hidden_size)
            mask: optional attention mask, see AlbertSelfAttention

        Returns:
            hidden_states: (batch, seq_len, hidden_size)
            attention_weights: (batch, num_heads, seq_len, seq_len), as produced by the attention
        """
        attention_output, attention_weights = self.attention(hidden_states, mask)

        ffn_output = self.ffn(attention_output)  # (batch, seq_len, intermediate_size)
        ffn_output = self.activation(ffn_output)
        ffn_output = self.ffn_output(ffn_output)  # (batch, seq_len, hidden_size)

        # Residual is the attention output, not the block input
        hidden_states = self.full_layer_layer_norm(ffn_output + attention_output)
        return hidden_states, attention_weights


class AlbertLayerGroup(nn.Module):
    """
    Ordered blocks applied once each per call. The group is the unit of parameter sharing.

    Args:
        config: encoder configuration (inner_group_num and per-layer settings)
    """

    def __init__(self, config: AlbertConfig):
        super().__init__()
        self.output_hidden_states = config.output_hidden_states
        self.output_attentions = config.output_attentions
        self.albert_layers = nn.ModuleList(
            [AlbertLayer(config) for _ in range(config.inner_group_num)]
        )

    def forward(
        self,
        hidden_states: torch.Tensor,
        mask: Optional[torch.Tensor] = None,
        output_attentions: Optional[bool] = None,
        output_hidden_states: Optional[bool] = None,
    ) -> LayerOutput:
        """
        Returns:
            hidden_states: output of the last block
            layer_hidden_states: input of every block (pre-block snapshots) or None
            layer_attentions: attention weights of every block or None
        """
        if output_attentions is None:
            output_attentions = self.output_attentions
        if output_hidden_states is None:
            output_hidden_states = self.output_hidden_states

        layer_hidden_states: Optional[List[torch.Tensor]] = [] if output_hidden_states else None
        layer_attentions: Optional[List[torch.Tensor]] = [] if output_attentions else None

        for layer in self.albert_layers:
            if layer_hidden_states is not None:
                layer_hidden_states.append(hidden_states.clone())

            hidden_states, attention_weights = layer(hidden_states, mask)

            if layer_attentions is not None:
                if attention_weights is None:
                    raise RuntimeError(
                        "Attention weights were requested but the attention sublayer returned none"
                    )
                layer_attentions.append(attention_weights)

        return hidden_states, layer_hidden_states, layer_attentions


class AlbertTransformer(nn.Module):
    """
    Encoder stack: project embeddings to hidden size, then run num_hidden_layers depth
    steps, each one invoking a single layer group.

    Args:
        config: encoder configuration (embedding_size, hidden_size, num_hidden_layers,
                num_hidden_groups, output flags and per-layer settings)
    """

    def __init__(self, config: AlbertConfig):
        super().__init__()
        self.num_hidden_layers = config.num_hidden_layers
        self.num_hidden_groups = config.num_hidden_groups
        self.output_hidden_states = config.output_hidden_states
        self.output_attentions = config.output_attentions

        self.embedding_hidden_mapping_in = nn.Linear(config.embedding_size, config.hidden_size)
        self.albert_layer_groups = nn.ModuleList(
            [AlbertLayerGroup(config) for _ in range(config.num_hidden_groups)]
        )

        self.apply(lambda module: init_albert_weights(module, config.initializer_range))

    def forward(
        self,
        hidden_states: torch.Tensor,
        mask: Optional[torch.Tensor] = None,
        output_attentions: Optional[bool] = None,
        output_hidden_states: Optional[bool] = None,
    ) -> StackOutput:
        """
        Args:
            hidden_states: (batch, seq_len, embedding_size)
            mask: optional attention mask (see extend_attention_mask), extended once and
                  threaded unchanged through every block
            output_attentions: collect attention weights (defaults to the config flag)
            output_hidden_states: collect the input of every depth step (defaults to the config flag)

        Returns:
            hidden_states: (batch, seq_len, hidden_size)
            all_hidden_states: num_hidden_layers tensors or None
            all_attentions: num_hidden_layers lists of inner_group_num tensors or None
        """
        if output_attentions is None:
            output_attentions = self.output_attentions
        if output_hidden_states is None:
            output_hidden_states = self.output_hidden_states

        hidden_states = self.embedding_hidden_mapping_in(hidden_states)
        if mask is not None:
            # Built once; blocks only add the additive (batch, 1, seq_q, seq_k) mask
            mask = extend_attention_mask(mask.to(hidden_states.device), hidden_states.dtype)

        all_hidden_states: Optional[List[torch.Tensor]] = [] if output_hidden_states else None
        all_attentions: Optional[List[List[torch.Tensor]]] = [] if output_attentions else None

        for i in range(self.num_hidden_layers):
            group_idx = group_index(i, self.num_hidden_layers, self.num_hidden_groups)

            if all_hidden_states is not None:
                all_hidden_states.append(hidden_states.clone())

            # The group's own hidden-state history is not part of the stack output
            hidden_states, _, layer_attentions = self.albert_layer_groups[group_idx](
                hidden_states,
                mask,
                output_attentions=output_attentions,
                output_hidden_states=False,
            )

            if all_attentions is not None:
                all_attentions.append(layer_attentions)

        return hidden_states, all_hidden_states, all_attentions


@dataclass
class EncoderOutput:
    """Final hidden states plus the optional diagnostics of an AlbertEncoder call."""

    last_hidden_state: torch.Tensor
    hidden_states: Optional[List[torch.Tensor]] = None
    attentions: Optional[List[List[torch.Tensor]]] = None


class AlbertEncoder(nn.Module):
    """
    Full encoder: factorized embeddings + shared-parameter transformer stack.

    Accepts either token ids (LongTensor of shape (batch, seq)) or precomputed
    embeddings (FloatTensor of shape (batch, seq, embedding_size)).

    Args:
        config: encoder configuration
    """

    def __init__(self, config: AlbertConfig):
        super().__init__()
        self.config = config
        self.pad_token_id = config.pad_token_id
        self.embeddings = AlbertEmbeddings(config)
        self.encoder = AlbertTransformer(config)

        self.embeddings.apply(lambda module: init_albert_weights(module, config.initializer_range))

    def _build_padding_mask(self, input_ids: torch.Tensor) -> torch.Tensor:
        """(batch, seq) boolean mask, True for real tokens."""
        assert self.pad_token_id is not None, "pad_token_id must be set to build padding mask from ids."
        return input_ids != self.pad_token_id

    def forward(
        self,
        inputs: torch.Tensor,
        mask: Optional[torch.Tensor] = None,
        token_type_ids: Optional[torch.Tensor] = None,
        output_attentions: Optional[bool] = None,
        output_hidden_states: Optional[bool] = None,
    ) -> EncoderOutput:
        """
        Args:
            inputs: token ids (batch, seq) or embeddings (batch, seq, embedding_size)
            mask: optional attention mask. If None and inputs are token ids with pad_token_id
                  set, a padding mask is built automatically.
            token_type_ids: optional segment ids, only used with token-id input

        Returns:
            EncoderOutput with last_hidden_state of shape (batch, seq, hidden_size)
        """
        if inputs.dim() == 2:  # token ids
            x = self.embeddings(inputs, token_type_ids=token_type_ids)
            if mask is None and self.pad_token_id is not None:
                mask = self._build_padding_mask(inputs)
        elif inputs.dim() == 3:  # already embeddings
            x = inputs
        else:
            raise ValueError(
                "inputs must be (batch, seq) token ids or (batch, seq, embedding_size) embeddings"
            )

        last_hidden_state, hidden_states, attentions = self.encoder(
            x,
            mask,
            output_attentions=output_attentions,
            output_hidden_states=output_hidden_states,
        )
        return EncoderOutput(
            last_hidden_state=last_hidden_state,
            hidden_states=hidden_states,
            attentions=attentions,
        )
