"""
Configuration utilities.

Provides YAML configuration loading with validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class Config:
    data: Dict[str, Any]


def load_yaml(path: str | Path, section: Optional[str] = None) -> Config:
    """
    Load a YAML mapping.

    If ``section`` is given and the root mapping has that key, the nested
    mapping under it is returned instead of the root.
    """
    with Path(path).open("r", encoding="utf-8") as handle:
        content = yaml.safe_load(handle)
    if not isinstance(content, dict):
        raise ValueError(f"YAML configuration '{path}' must contain a mapping at the root")
    if section is not None and section in content:
        content = content[section]
        if not isinstance(content, dict):
            raise ValueError(f"Section '{section}' of '{path}' must be a mapping")
    return Config(data=content)
