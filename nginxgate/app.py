"""Main application class for nginxgate TUI."""

from __future__ import annotations

import inspect
import logging

import httpx
from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen

from nginxgate.constants import APP_TITLE
from nginxgate.constants.enums import DeployMode
from nginxgate.controllers import ConsoleApiClient, ConsoleController
from nginxgate.keyboard.app import APP_BINDINGS
from nginxgate.models.state.config_manager import (
    AppSettings,
    ConfigLoadError,
    ConfigManager,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)


class NginxGateApp(App[None]):
    """Main TUI application for nginxgate."""

    TITLE = APP_TITLE
    CSS_PATH = "css/app.tcss"
    BINDINGS: list[Binding] = APP_BINDINGS

    settings: AppSettings

    def __init__(
        self,
        api_base: str | None = None,
        api_prefix: str | None = None,
        mode: DeployMode | None = None,
        auto_refresh: bool | None = None,
        refresh_interval: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._cli_api_base = api_base
        self._cli_api_prefix = api_prefix
        self._cli_mode = mode
        self._cli_auto_refresh = auto_refresh
        self._cli_refresh_interval = refresh_interval

        # Load settings on startup
        self._load_settings()

        self.api = ConsoleApiClient(
            self.settings.api_base,
            self.settings.api_prefix,
            timeout=float(self.settings.request_timeout_seconds),
            transport=transport,
        )
        self.controller = ConsoleController(
            self.api,
            mode=self.settings.default_mode,
            show_all=self.settings.show_all_files,
            refresh_interval=self.settings.refresh_interval,
        )

    def _load_settings(self) -> None:
        """Load application settings from persistent storage."""
        try:
            self.settings = ConfigManager.load()
        except ConfigLoadError as exc:
            # Use defaults if loading fails
            logger.warning("Using default settings: %s", exc)
            self.settings = AppSettings()

        # Apply CLI overrides if provided
        if self._cli_api_base:
            self.settings.api_base = self._cli_api_base
        if self._cli_api_prefix is not None:
            self.settings.api_prefix = self._cli_api_prefix
        if self._cli_mode is not None:
            self.settings.default_mode = self._cli_mode
        if self._cli_auto_refresh is not None:
            self.settings.auto_refresh = self._cli_auto_refresh
        if self._cli_refresh_interval is not None:
            self.settings.refresh_interval = self._cli_refresh_interval

    def _apply_theme(self) -> None:
        theme_name = str(self.settings.theme or "").strip()
        if theme_name in self.available_themes:
            self.theme = theme_name
        else:
            logger.warning("Unknown theme %r, keeping %s", theme_name, self.theme)

    def on_mount(self) -> None:
        """Called when app is mounted."""
        from nginxgate.screens import ConsoleScreen

        self._apply_theme()
        self.sub_title = self.api.base_url
        self.push_screen(ConsoleScreen(self.controller, auto_refresh=self.settings.auto_refresh))

    async def action_refresh(self) -> None:
        """Refresh data."""
        # Trigger refresh on current screen if it has a refresh action
        refresh_method = getattr(self.screen, "action_refresh", None)
        if refresh_method is None:
            return
        if inspect.iscoroutinefunction(refresh_method):
            await refresh_method()
        else:
            refresh_method()

    async def action_back(self) -> None:
        """Close the topmost modal, if any."""
        if isinstance(self.screen, ModalScreen):
            self.pop_screen()

    async def on_unmount(self) -> None:
        """Save settings and release the HTTP client when app exits."""
        try:
            ConfigManager.save(self.settings)
        except ConfigSaveError as e:
            logger.error("Failed to save settings: %s", e)
            self.notify(f"Failed to save settings: {e}", severity="error")
        await self.controller.aclose()


__all__ = [
    "NginxGateApp",
]
