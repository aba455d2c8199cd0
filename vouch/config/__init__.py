# vouch/config/__init__.py
"""
Configuration: settings model and YAML loader.
"""

from .settings import DateStyle, VouchSettings
from .loader import CONFIG_ENV_VAR, load_settings

__all__ = ["VouchSettings", "DateStyle", "load_settings", "CONFIG_ENV_VAR"]
