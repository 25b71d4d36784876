"""General utilities for the ALBERT encoder."""

from .config import Config, load_yaml
from .logging import configure_logging, get_logger
from .random import set_seed

__all__ = [
    "Config",
    "load_yaml",
    "configure_logging",
    "get_logger",
    "set_seed",
]
