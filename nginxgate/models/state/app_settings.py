"""Application settings models."""

from pydantic import BaseModel, ConfigDict, field_validator

from nginxgate.constants.defaults import (
    API_BASE,
    API_PREFIX,
    AUTO_REFRESH_DEFAULT,
    LOG_LEVEL_DEFAULT,
    MODE_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
    REQUEST_TIMEOUT_SECONDS_DEFAULT,
    SHOW_ALL_FILES_DEFAULT,
    THEME_DEFAULT,
)
from nginxgate.constants.enums import DeployMode
from nginxgate.constants.limits import REFRESH_INTERVAL_MIN, REQUEST_TIMEOUT_MIN


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    # Backend
    api_base: str = API_BASE
    api_prefix: str = API_PREFIX
    request_timeout_seconds: int = REQUEST_TIMEOUT_SECONDS_DEFAULT

    # UI preferences
    theme: str = THEME_DEFAULT
    refresh_interval: int = REFRESH_INTERVAL_DEFAULT  # seconds
    auto_refresh: bool = AUTO_REFRESH_DEFAULT
    show_all_files: bool = SHOW_ALL_FILES_DEFAULT
    default_mode: DeployMode = DeployMode(MODE_DEFAULT)

    # Logging
    log_level: str = LOG_LEVEL_DEFAULT

    @field_validator("refresh_interval")
    @classmethod
    def _clamp_refresh_interval(cls, value: int) -> int:
        return max(REFRESH_INTERVAL_MIN, value)

    @field_validator("request_timeout_seconds")
    @classmethod
    def _clamp_request_timeout(cls, value: int) -> int:
        return max(REQUEST_TIMEOUT_MIN, value)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSaveError",
]
