"""Settings persistence - YAML file under the user config directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from platformdirs import user_config_dir
from pydantic import ValidationError

from nginxgate.constants.values import API_BASE_ENV_VAR, APP_NAME
from nginxgate.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.yaml"


class ConfigManager:
    """Load, save and reset :class:`AppSettings`.

    The file location defaults to ``user_config_dir("nginxgate")`` and can be
    redirected by assigning ``ConfigManager.config_path`` (tests do this).
    """

    config_path: Path = Path(user_config_dir(APP_NAME, appauthor=False)) / SETTINGS_FILENAME

    @classmethod
    def load(cls) -> AppSettings:
        """Load settings from disk, applying the environment override.

        A missing file yields defaults.

        Raises:
            ConfigLoadError: The file exists but is unreadable or invalid.
        """
        data: dict = {}
        path = cls.config_path
        if path.exists():
            try:
                with path.open(encoding="utf-8") as handle:
                    loaded = yaml.safe_load(handle) or {}
            except (OSError, yaml.YAMLError) as exc:
                raise ConfigLoadError(f"Cannot read {path}: {exc}") from exc
            if not isinstance(loaded, dict):
                raise ConfigLoadError(f"{path} does not contain a mapping")
            data = loaded

        env_base = os.environ.get(API_BASE_ENV_VAR)
        if env_base:
            data["api_base"] = env_base

        try:
            settings = AppSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {path}: {exc}") from exc
        logger.debug("Loaded settings from %s", path)
        return settings

    @classmethod
    def save(cls, settings: AppSettings) -> None:
        """Write settings to disk.

        Raises:
            ConfigSaveError: The file could not be written.
        """
        path = cls.config_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as handle:
                yaml.safe_dump(settings.model_dump(mode="json"), handle, sort_keys=True)
        except OSError as exc:
            raise ConfigSaveError(f"Cannot write {path}: {exc}") from exc
        logger.debug("Saved settings to %s", path)

    @classmethod
    def reset(cls) -> AppSettings:
        """Restore defaults on disk and return them."""
        settings = AppSettings()
        cls.save(settings)
        return settings


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
]
