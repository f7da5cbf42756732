"""Configuration management utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent


class ConfigManager:
    """Simple YAML-backed configuration loader."""

    def __init__(self, base_path: str | Path = DEFAULT_CONFIG_DIR):
        self._base_path = Path(base_path)

    def load(self, name: str) -> dict[str, Any]:
        """Load a YAML configuration by name without file extension."""
        return load_yaml(self._base_path / f"{name}.yaml")


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML mapping from an explicit path."""
    with Path(path).open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{path} must contain a YAML mapping")
    return loaded


__all__ = ["ConfigManager", "DEFAULT_CONFIG_DIR", "load_yaml"]
