"""
ALBERT encoder with cross-layer parameter sharing.

This package provides a from-scratch ALBERT implementation with:
- AlbertLayer, AlbertLayerGroup, AlbertTransformer (shared-group encoder stack)
- AlbertSelfAttention, AlbertEmbeddings
- AlbertEncoder: embeddings + encoder stack, built by build_encoder
- AlbertConfig / load_model_config
"""

from .activations import SUPPORTED_ACTIVATIONS, get_activation
from .attention import AlbertSelfAttention, extend_attention_mask
from .config import AlbertConfig, load_model_config
from .embeddings import AlbertEmbeddings
from .encoder import (
    AlbertEncoder,
    AlbertLayer,
    AlbertLayerGroup,
    AlbertTransformer,
    EncoderOutput,
    group_index,
)
from .factory import build_encoder, count_parameters

__all__ = [
    "AlbertConfig",
    "load_model_config",
    "AlbertSelfAttention",
    "extend_attention_mask",
    "AlbertEmbeddings",
    "AlbertLayer",
    "AlbertLayerGroup",
    "AlbertTransformer",
    "AlbertEncoder",
    "EncoderOutput",
    "group_index",
    "get_activation",
    "SUPPORTED_ACTIVATIONS",
    "build_encoder",
    "count_parameters",
]
