"""
Randomness utilities.

Provides seed management for reproducible parameter initialization.
"""

import random

import numpy as np
import torch


def set_seed(seed: int) -> None:
    """Seed python, numpy and torch RNGs (including all CUDA devices)."""
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(seed)
