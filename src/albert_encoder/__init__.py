"""ALBERT encoder: a transformer stack with cross-layer parameter sharing."""

from .models import AlbertConfig, AlbertEncoder, build_encoder, load_model_config

__version__ = "0.1.0"

__all__ = ["AlbertConfig", "AlbertEncoder", "build_encoder", "load_model_config"]
