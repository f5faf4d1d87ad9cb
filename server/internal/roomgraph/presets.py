"""
Layout Presets Module
Loads named configuration overlays ("Dungeon", "Tower", ...) from JSON.

A preset is plain data: a mapping of LayoutConfig field names to values.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import ConfigurationError, LayoutConfig, overridable_fields

# Cache for loaded presets
_presets_cache: Optional[Dict[str, Any]] = None


def _get_presets_path() -> Path:
    """Get the path to the layout-presets.json file."""
    override = os.getenv("LAYOUT_PRESETS_PATH")
    if override:
        return Path(override)
    # __file__ = server/internal/roomgraph/presets.py, config lives at server/config/
    return Path(__file__).resolve().parents[2] / "config" / "layout-presets.json"


def load_presets() -> Dict[str, Any]:
    """
    Load layout presets from JSON file.

    Returns:
        Dictionary mapping preset names to {"description", "settings"}

    Raises:
        FileNotFoundError: If the JSON file doesn't exist
        json.JSONDecodeError: If the JSON file is invalid
    """
    global _presets_cache

    if _presets_cache is not None:
        return _presets_cache

    presets_path = _get_presets_path()

    if not presets_path.exists():
        raise FileNotFoundError(f"Layout presets file not found: {presets_path}")

    with open(presets_path, "r", encoding="utf-8") as f:
        _presets_cache = json.load(f)

    return _presets_cache


def list_presets() -> List[str]:
    """Names of all available presets, in file order."""
    return list(load_presets().keys())


def get_preset(name: str) -> Dict[str, Any]:
    """
    Get the settings overlay for a preset.

    Args:
        name: Preset name (e.g. "Dungeon")

    Returns:
        Copy of the preset's settings mapping

    Raises:
        ConfigurationError: If the preset is unknown or overrides fixed settings
    """
    presets = load_presets()
    preset = presets.get(name)
    if preset is None:
        raise ConfigurationError(f"Unknown preset: {name}")

    settings = dict(preset.get("settings", {}))
    unknown = sorted(set(settings) - overridable_fields())
    if unknown:
        raise ConfigurationError(f"Preset {name} sets unknown or fixed settings: {unknown}")
    return settings


def apply_preset(config: LayoutConfig, name: str, keep_explicit: bool = False) -> LayoutConfig:
    """
    Overlay a preset onto a config.

    Args:
        config: Config to overlay
        name: Preset name
        keep_explicit: If True, fields the caller set explicitly on `config`
            win over the preset (used for LayoutConfig.preset). Phase
            switches pass False so the preset always applies.

    Returns:
        New validated LayoutConfig
    """
    settings = get_preset(name)
    if keep_explicit:
        settings = {k: v for k, v in settings.items() if k not in config.model_fields_set}
    try:
        return config.with_overrides(settings)
    except ValueError as e:
        raise ConfigurationError(f"Preset {name} produced an invalid config: {e}") from e


def clear_cache() -> None:
    """Clear the presets cache (useful for testing or reloading)."""
    global _presets_cache
    _presets_cache = None
