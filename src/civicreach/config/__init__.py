"""YAML configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..schemas.config import load_config


def load_settings(path: str | Path) -> dict[str, Any]:
    """Read a YAML file and return validated container settings."""
    with Path(path).open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid config YAML: {exc}") from exc
    return load_config(raw).to_settings()


__all__ = ["load_settings"]
