"""Configuration for the ALBERT encoder.

AlbertConfig describes the architecture; load_model_config reads it from YAML.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from ..utils.config import load_yaml
from .activations import SUPPORTED_ACTIVATIONS


@dataclass(frozen=True)
class AlbertConfig:
    """Architecture of an ALBERT encoder. Defaults match albert-base-v2."""

    vocab_size: int = 30000
    embedding_size: int = 128
    hidden_size: int = 768
    num_hidden_layers: int = 12
    num_hidden_groups: int = 1
    num_attention_heads: int = 12
    intermediate_size: int = 3072
    inner_group_num: int = 1
    hidden_act: str = "gelu_new"
    hidden_dropout_prob: float = 0.0
    attention_probs_dropout_prob: float = 0.0
    max_position_embeddings: int = 512
    type_vocab_size: int = 2
    initializer_range: float = 0.02
    layer_norm_eps: float = 1e-12
    pad_token_id: Optional[int] = 0
    output_hidden_states: bool = False
    output_attentions: bool = False

    def __post_init__(self):
        sizes = {
            "vocab_size": self.vocab_size,
            "embedding_size": self.embedding_size,
            "hidden_size": self.hidden_size,
            "num_hidden_layers": self.num_hidden_layers,
            "num_attention_heads": self.num_attention_heads,
            "intermediate_size": self.intermediate_size,
            "inner_group_num": self.inner_group_num,
            "max_position_embeddings": self.max_position_embeddings,
            "type_vocab_size": self.type_vocab_size,
        }
        for name, value in sizes.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.num_hidden_groups < 1:
            raise ValueError(f"num_hidden_groups must be at least 1, got {self.num_hidden_groups}")
        if self.hidden_size % self.num_attention_heads != 0:
            raise ValueError(
                f"hidden_size ({self.hidden_size}) must be divisible by num_attention_heads ({self.num_attention_heads})"
            )
        for name in ("hidden_dropout_prob", "attention_probs_dropout_prob"):
            value = getattr(self, name)
            if not 0 <= value <= 1:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.hidden_act not in SUPPORTED_ACTIVATIONS:
            raise ValueError(
                f"hidden_act must be one of {', '.join(SUPPORTED_ACTIVATIONS)}, got {self.hidden_act}"
            )
        if self.layer_norm_eps <= 0:
            raise ValueError(f"layer_norm_eps must be positive, got {self.layer_norm_eps}")

    @property
    def head_dim(self) -> int:
        return self.hidden_size // self.num_attention_heads

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlbertConfig":
        """Build a config from a mapping, ignoring keys that are not config fields."""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known}
        # Some exported configs carry an explicit null for layer_norm_eps
        if kwargs.get("layer_norm_eps") is None:
            kwargs.pop("layer_norm_eps", None)
        return cls(**kwargs)


def load_model_config(path: Optional[str | Path]) -> AlbertConfig:
    """Load a model configuration from YAML; missing keys keep their defaults."""

    if path is None:
        return AlbertConfig()

    data = load_yaml(path, section="model").data
    return AlbertConfig.from_dict(data)
