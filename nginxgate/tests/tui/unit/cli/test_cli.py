"""Tests for the command line interface.

This module tests:
- The groups listing
- The check command exit codes and output
- The update command (confirmation, refusal when the check fails)
- Backend failures and settings fallbacks
- Logging setup
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest
from click.testing import CliRunner

from nginxgate import __version__, cli
from nginxgate.controllers.api.client import ConsoleApiClient
from nginxgate.models.state.config_manager import ConfigManager

REAL_SETUP_LOGGING = cli.setup_logging

GROUPS_BODY = {
    "groups": [
        {
            "name": "edge",
            "hosts": [
                {"name": "edge-1", "host": "10.0.0.1", "config_dir_suffix": "edge1"},
                {"name": "edge-2", "host": "10.0.0.2"},
            ],
        },
        {"name": "internal", "hosts": [{"name": "int-1", "host": "10.1.0.1"}]},
    ]
}

NGINX_OK = {"command": "nginx -t", "ok": True, "output": "syntax is ok"}
NGINX_FAIL = {"command": "nginx -t", "ok": False, "output": "emerg: unknown directive"}


class FakeBackend:
    """MockTransport handler keyed by request path."""

    def __init__(self, routes: dict[str, tuple[int, dict]]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v1")
        status, body = self.routes.get(path, (404, {"detail": "not found"}))
        return httpx.Response(status, json=body)

    def paths(self) -> list[str]:
        return [request.url.path.removeprefix("/api/v1") for request in self.requests]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings and logging away from the user's real files."""
    monkeypatch.setattr(ConfigManager, "config_path", tmp_path / "settings.yaml")
    monkeypatch.delenv("NGINXGATE_API_BASE", raising=False)
    monkeypatch.setattr(cli, "setup_logging", MagicMock())


def _use_backend(monkeypatch: pytest.MonkeyPatch, backend: FakeBackend) -> None:
    def make_client(settings) -> ConsoleApiClient:
        return ConsoleApiClient(
            settings.api_base,
            settings.api_prefix,
            transport=httpx.MockTransport(backend),
        )

    monkeypatch.setattr(cli, "_make_client", make_client)


def _invoke(*args: str, input: str | None = None):
    return CliRunner().invoke(cli.main, list(args), input=input)


# =============================================================================
# Group options
# =============================================================================


class TestMainGroup:
    """Tests for the top-level command group."""

    def test_version(self) -> None:
        """Test --version output."""
        result = _invoke("--version")

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self) -> None:
        """Test that every subcommand is listed."""
        result = _invoke("--help")

        assert result.exit_code == 0
        for command in ("ui", "groups", "check", "update"):
            assert command in result.output

    def test_invalid_settings_fall_back_to_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a broken settings file warns and continues."""
        (tmp_path / "settings.yaml").write_text("- not a mapping\n", encoding="utf-8")
        _use_backend(monkeypatch, FakeBackend({"/groups": (200, GROUPS_BODY)}))

        result = _invoke("groups")

        assert result.exit_code == 0
        assert "using defaults" in result.output

    def test_log_options_are_passed_to_setup(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that --log-level and --log-file reach setup_logging."""
        _use_backend(monkeypatch, FakeBackend({"/groups": (200, GROUPS_BODY)}))
        log_file = tmp_path / "out.log"

        result = _invoke("--log-level", "debug", "--log-file", str(log_file), "groups")

        assert result.exit_code == 0
        cli.setup_logging.assert_called_once_with("DEBUG", log_file)


# =============================================================================
# groups
# =============================================================================


class TestGroupsCommand:
    """Tests for the groups command."""

    def test_lists_groups_and_hosts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the listing format."""
        _use_backend(monkeypatch, FakeBackend({"/groups": (200, GROUPS_BODY)}))

        result = _invoke("--api-base", "http://admin:9000", "groups")

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "edge (2 hosts)"
        assert lines[1] == "  10.0.0.1  edge-1  [edge1]"
        assert lines[2] == "  10.0.0.2  edge-2"
        assert lines[-1] == "2 groups, 3 hosts"

    def test_backend_failure_exits_non_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a failed request is reported."""
        _use_backend(monkeypatch, FakeBackend({"/groups": (503, {"detail": "down"})}))

        result = _invoke("groups")

        assert result.exit_code == 1
        assert "failed to list groups" in result.output


# =============================================================================
# check
# =============================================================================


class TestCheckCommand:
    """Tests for the check command."""

    def test_passing_check(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a passing check in the requested mode."""
        backend = FakeBackend({"/check": (200, {"ok": True, "mode": "prod", "nginx": NGINX_OK})})
        _use_backend(monkeypatch, backend)

        result = _invoke("check", "-g", "edge", "-H", "10.0.0.1", "--mode", "prod")

        assert result.exit_code == 0
        assert "Status: PASSED" in result.output
        assert "Mode: Production" in result.output
        request = backend.requests[0]
        assert request.url.params["mode"] == "prod"
        assert json.loads(request.content) == {"server": "10.0.0.1", "group": "edge"}

    def test_failing_check_exits_one(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a failed nginx check sets the exit code."""
        body = {"ok": False, "mode": "preview", "sync": {"total": 1}, "nginx": NGINX_FAIL}
        _use_backend(monkeypatch, FakeBackend({"/check": (200, body)}))

        result = _invoke("check", "-g", "edge", "-H", "10.0.0.1")

        assert result.exit_code == 1
        assert "Status: FAILED" in result.output
        assert "emerg: unknown directive" in result.output

    def test_error_response_prints_diagnostic(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a non-2xx body is still shown."""
        body = {"ok": False, "nginx": NGINX_FAIL}
        _use_backend(monkeypatch, FakeBackend({"/check": (500, body)}))

        result = _invoke("check", "-g", "edge", "-H", "10.0.0.1")

        assert result.exit_code == 1
        assert "nginx -t: ERROR" in result.output
        assert "Configuration check failed" in result.output

    def test_host_is_required(self) -> None:
        """Test option validation."""
        result = _invoke("check", "-g", "edge")

        assert result.exit_code == 2


# =============================================================================
# update
# =============================================================================


class TestUpdateCommand:
    """Tests for the update command."""

    ROUTES = {
        "/update/prepare": (200, {"success": True, "nginx": NGINX_OK, "sync": {"total": 2}}),
        "/update/apply": (
            200,
            {"success": True, "message": "reloaded", "nginx": {"command": "nginx -s reload", "ok": True}},
        ),
    }

    def test_update_with_yes_applies(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test prepare then apply without a prompt."""
        backend = FakeBackend(self.ROUTES)
        _use_backend(monkeypatch, backend)

        result = _invoke("update", "-g", "edge", "-H", "10.0.0.1", "--yes")

        assert result.exit_code == 0
        assert backend.paths() == ["/update/prepare", "/update/apply"]
        assert all(r.url.params["mode"] == "prod" for r in backend.requests)
        assert "Stage: Prepare (sync + nginx -t)" in result.output
        assert "Message: reloaded" in result.output

    def test_update_confirmation_declined(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that declining the prompt skips apply."""
        backend = FakeBackend(self.ROUTES)
        _use_backend(monkeypatch, backend)

        result = _invoke("update", "-g", "edge", "-H", "10.0.0.1", input="n\n")

        assert result.exit_code == 1
        assert backend.paths() == ["/update/prepare"]
        assert "aborted" in result.output

    def test_update_confirmation_accepted(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that accepting the prompt applies."""
        backend = FakeBackend(self.ROUTES)
        _use_backend(monkeypatch, backend)

        result = _invoke("update", "-g", "edge", "-H", "10.0.0.1", input="y\n")

        assert result.exit_code == 0
        assert backend.paths() == ["/update/prepare", "/update/apply"]

    def test_update_prompt_runs_outside_event_loop(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that the blocking prompt does not stall the event loop thread."""
        backend = FakeBackend(self.ROUTES)
        _use_backend(monkeypatch, backend)
        seen: dict[str, object] = {}

        def confirm(question: str) -> bool:
            seen["question"] = question
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                seen["in_loop"] = False
            else:
                seen["in_loop"] = True
            return True

        monkeypatch.setattr(cli.click, "confirm", confirm)

        result = _invoke("update", "-g", "edge", "-H", "10.0.0.1")

        assert result.exit_code == 0
        assert seen == {"question": "Apply and reload nginx on edge/10.0.0.1?", "in_loop": False}
        assert backend.paths() == ["/update/prepare", "/update/apply"]

    def test_failing_check_never_applies(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that apply is not requested when nginx -t fails."""
        routes = dict(self.ROUTES)
        routes["/update/prepare"] = (200, {"success": True, "nginx": NGINX_FAIL})
        backend = FakeBackend(routes)
        _use_backend(monkeypatch, backend)

        result = _invoke("update", "-g", "edge", "-H", "10.0.0.1", "--yes")

        assert result.exit_code == 1
        assert backend.paths() == ["/update/prepare"]
        assert "reload is unavailable" in result.output

    def test_failed_reload_exits_one(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that an unsuccessful reload sets the exit code."""
        routes = dict(self.ROUTES)
        routes["/update/apply"] = (200, {"success": False, "message": "reload failed"})
        _use_backend(monkeypatch, FakeBackend(routes))

        result = _invoke("update", "-g", "edge", "-H", "10.0.0.1", "--yes")

        assert result.exit_code == 1
        assert "Message: reload failed" in result.output


# =============================================================================
# Logging
# =============================================================================


class TestSetupLogging:
    """Tests for the file logging setup."""

    def test_setup_logging_writes_to_file(self, tmp_path: Path) -> None:
        """Test that records land in the requested file."""
        log_path = tmp_path / "logs" / "nginxgate.log"
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            REAL_SETUP_LOGGING("warning", log_path)
            logging.getLogger("nginxgate.test").warning("hello from test")
            logging.getLogger("nginxgate.test").info("not recorded")
            for handler in root.handlers:
                handler.flush()

            content = log_path.read_text(encoding="utf-8")
            assert root.level == logging.WARNING
            assert "WARNING nginxgate.test: hello from test" in content
            assert "not recorded" not in content
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)

    def test_default_log_path_name(self) -> None:
        """Test the default log file name."""
        assert cli.default_log_path().name == "nginxgate.log"
