"""
YAML → typed config loader.

Loads progression settings from settings.yaml (bundled with the package)
and optionally merges user overrides from ~/.lift-metrics/settings.yaml.

Usage:
    from lift_metrics.core.engine.config_loader import load_user_settings
    settings = load_user_settings()
    settings.increment_unit

If the bundled YAML cannot be read, the Python defaults from config.py are
used.  If the user override file exists but cannot be parsed, a warning is
issued and the file is ignored.
"""

from __future__ import annotations

import importlib.resources
import logging
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..models import UserSettings

logger = logging.getLogger(__name__)

USER_DIR_NAME = ".lift-metrics"
SETTINGS_FILE_NAME = "settings.yaml"

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML mapping.

    Raises:
        OSError: If the file cannot be read
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def load_optional_yaml(path: Path, label: str) -> dict[str, Any]:
    """Load a YAML file, warning and returning {} if it is unreadable."""
    try:
        return load_yaml_file(path)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(
            f"lift-metrics: ignoring {label} {path} ({exc})",
            stacklevel=3,
        )
        return {}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def get_user_dir() -> Path:
    """Return ~/.lift-metrics (may not exist)."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / USER_DIR_NAME


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_settings_path() -> Path | None:
    """Return the path to the bundled settings.yaml, or None if not found."""
    candidate = Path(str(importlib.resources.files("lift_metrics").joinpath(SETTINGS_FILE_NAME)))
    return candidate if candidate.is_file() else None


def get_user_settings_path() -> Path | None:
    """Return ~/.lift-metrics/settings.yaml if it exists, else None."""
    p = get_user_dir() / SETTINGS_FILE_NAME
    return p if p.exists() else None


def load_model_config(user_path: Path | None = None) -> dict[str, Any]:
    """
    Load and merge configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/lift_metrics/settings.yaml
    2. User override (``user_path`` or ~/.lift-metrics/settings.yaml)

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_settings_path()
    if bundled is not None:
        config = deep_merge(config, load_optional_yaml(bundled, "bundled settings"))
    else:
        logger.warning("Bundled settings.yaml not found; using built-in defaults")

    user = user_path if user_path is not None else get_user_settings_path()
    if user is not None and user.exists():
        config = deep_merge(config, load_optional_yaml(user, "user settings"))

    return config


def settings_from_dict(section: dict[str, Any]) -> UserSettings:
    """
    Build UserSettings from the ``progression`` config section.

    Missing keys keep the UserSettings defaults.

    Raises:
        ValueError: If a value is present but invalid
    """
    kwargs: dict[str, Any] = {}
    if "increment_unit" in section:
        kwargs["increment_unit"] = float(section["increment_unit"])
    if "rounding_unit" in section:
        kwargs["rounding_unit"] = float(section["rounding_unit"])
    if section.get("percentage_table") is not None:
        kwargs["percentage_table"] = [float(p) for p in section["percentage_table"]]
    if section.get("wave_pattern") is not None:
        kwargs["wave_pattern"] = [
            (float(step["factor"]), int(step.get("rep_offset", 0)))
            for step in section["wave_pattern"]
        ]
    if "rpe_band" in section:
        low, high = section["rpe_band"]
        kwargs["rpe_band"] = (float(low), float(high))
    if "rep_range" in section:
        low, high = section["rep_range"]
        kwargs["rep_range"] = (int(low), int(high))
    return UserSettings(**kwargs)


def load_user_settings(user_path: Path | None = None) -> UserSettings:
    """
    Load UserSettings from the merged YAML configuration.

    Raises:
        ValueError: If the merged configuration holds invalid values
    """
    config = load_model_config(user_path)
    section = config.get("progression") or {}
    if not isinstance(section, dict):
        raise ValueError("'progression' section of settings.yaml must be a mapping")
    return settings_from_dict(section)
