# vouch/config/loader.py
"""
Settings loader.

Loads ``VouchSettings`` from a YAML file with code defaults as fallback.
The path comes from the argument or the ``VOUCH_CONFIG`` environment
variable; without either, the defaults are returned. A file that is named
but cannot be read or does not match the settings model is an error.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from ..errors import ConfigError
from .settings import VouchSettings


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "VOUCH_CONFIG"


def load_settings(path: Optional[Union[str, Path]] = None) -> VouchSettings:
    """
    Load settings from YAML.

    Args:
        path: YAML file; defaults to ``$VOUCH_CONFIG``

    Returns:
        VouchSettings (code defaults when no file is configured)

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return VouchSettings.default()

    data = _load_yaml(Path(path))
    try:
        settings = VouchSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError.invalid(
            f"Invalid settings in {path}",
            errors=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()],
        ) from e
    logger.debug("Loaded settings from %s", path)
    return settings


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError.invalid(f"Cannot read settings file: {path}", error=str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError.invalid(f"Invalid settings YAML: {path}", error=str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.invalid(f"Settings file must contain a mapping: {path}")
    return data


__all__ = ["load_settings", "CONFIG_ENV_VAR"]
