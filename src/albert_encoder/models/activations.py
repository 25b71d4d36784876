"""Activation functions for the ALBERT feed-forward sublayer.

The supported set is closed: every name resolves once, at layer construction,
to a unary tensor callable from the transformers ACT2FN registry.
"""

from typing import Callable, Literal, Tuple, get_args

import torch
from transformers.activations import ACT2FN

ActivationType = Literal["gelu_new", "gelu", "relu", "mish"]

SUPPORTED_ACTIVATIONS: Tuple[str, ...] = get_args(ActivationType)


def get_activation(name: str) -> Callable[[torch.Tensor], torch.Tensor]:
    """
    Resolve an activation name to a callable.

    Args:
        name: one of "gelu_new" (tanh approximation), "gelu" (exact erf), "relu", "mish"

    Returns:
        A module mapping a tensor to a tensor of the same shape.
    """
    if name not in SUPPORTED_ACTIVATIONS:
        raise ValueError(
            f"Unsupported activation '{name}', expected one of {', '.join(SUPPORTED_ACTIVATIONS)}"
        )
    return ACT2FN[name]
