from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from squadform.core.config import settings

_FORMATION_CONFIG_CACHE: dict[str, Any] | None = None
_DEFAULT_FORMATION_CONFIG_PATH = Path(__file__).with_name("formation.yaml")


def _config_path() -> Path:
    if settings.formation_config_path:
        return Path(settings.formation_config_path)
    return _DEFAULT_FORMATION_CONFIG_PATH


def get_formation_config() -> dict[str, Any]:
    """Load formation tuning from formation.yaml (or FORMATION_CONFIG_PATH) and cache it."""
    global _FORMATION_CONFIG_CACHE

    if _FORMATION_CONFIG_CACHE is not None:
        return _FORMATION_CONFIG_CACHE

    path = _config_path()
    if not path.exists():
        raise RuntimeError(
            f"Formation config not found at '{path}'. "
            "Set FORMATION_CONFIG_PATH or restore squadform/core/formation.yaml"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read formation config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in formation config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(
            f"Invalid formation config '{path}': expected a top-level mapping."
        )

    _FORMATION_CONFIG_CACHE = parsed
    return _FORMATION_CONFIG_CACHE


def get_formation_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'formation.max_participants'."""
    if not path:
        return default

    current: Any = get_formation_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current


def clear_formation_config_cache() -> None:
    global _FORMATION_CONFIG_CACHE
    _FORMATION_CONFIG_CACHE = None
