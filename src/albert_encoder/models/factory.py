"""Factory helpers to assemble an ALBERT encoder from a config or a YAML file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ..utils.logging import get_logger
from .config import AlbertConfig, load_model_config
from .encoder import AlbertEncoder

logger = get_logger(__name__)


def count_parameters(model) -> int:
    """Number of trainable parameters."""
    return sum(p.numel() for p in model.parameters() if p.requires_grad)


def build_encoder(config: Optional[Union[AlbertConfig, str, Path]] = None) -> AlbertEncoder:
    """
    Construct an AlbertEncoder.

    Args:
        config: an AlbertConfig, a path to a YAML model config, or None for defaults
    """
    if not isinstance(config, AlbertConfig):
        config = load_model_config(config)

    encoder = AlbertEncoder(config)
    logger.info(
        "Built ALBERT encoder: %d layers over %d group(s) x %d block(s), hidden_size=%d, %d parameters",
        config.num_hidden_layers,
        config.num_hidden_groups,
        config.inner_group_num,
        config.hidden_size,
        count_parameters(encoder),
    )
    return encoder
