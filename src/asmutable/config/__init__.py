"""
Configuration module for asmutable.

Uses pydantic-settings for environment variable and YAML file loading.
"""

from asmutable.config.settings import (
    Settings,
    get_settings,
    reset_settings,
    set_settings,
)
from asmutable.config.types import AncestorPolicy

__all__ = ["AncestorPolicy", "Settings", "get_settings", "reset_settings", "set_settings"]
