"""Application state models."""

from nginxgate.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)
from nginxgate.models.state.config_manager import ConfigManager
from nginxgate.models.state.selection import FileSelection, SelectionContext

__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "FileSelection",
    "SelectionContext",
]
