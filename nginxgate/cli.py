"""Command line entry point: the TUI plus scriptable check/update commands."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

import click
from platformdirs import user_log_dir

from nginxgate import __version__
from nginxgate.constants.defaults import LOG_FILE_NAME
from nginxgate.constants.enums import DeployMode
from nginxgate.constants.values import APP_NAME
from nginxgate.controllers import (
    ApiError,
    ConfigCheckController,
    ConsoleApiClient,
    DeploymentGate,
    PolicyViolationError,
)
from nginxgate.models.state.config_manager import AppSettings, ConfigLoadError, ConfigManager
from nginxgate.models.state.selection import SelectionContext
from nginxgate.screens.console.presenter import format_check_result, format_update_result

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class CliState:
    settings: AppSettings


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILE_NAME


def setup_logging(level: str, log_path: Path) -> None:
    """Send all logging to ``log_path``; the TUI owns the terminal."""
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.FileHandler(log_path, encoding="utf-8")],
        force=True,
    )


def _make_client(settings: AppSettings) -> ConsoleApiClient:
    return ConsoleApiClient(
        settings.api_base,
        settings.api_prefix,
        timeout=float(settings.request_timeout_seconds),
    )


def _echo_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


def _report(message: str) -> int:
    click.echo(f"{APP_NAME}: {message}", err=True)
    return 1


def _fail(message: str) -> None:
    raise SystemExit(_report(message))


# =============================================================================
# Group
# =============================================================================


@click.group(context_settings={"help_option_names": ["-h", "--help"]}, invoke_without_command=True)
@click.option("--api-base", help="Backend base URL, e.g. http://127.0.0.1:8080.")
@click.option("--api-prefix", help="API router prefix (default /api/v1).")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level (default from settings).",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Log file path (default under the user log directory).",
)
@click.version_option(__version__, prog_name=APP_NAME)
@click.pass_context
def main(
    ctx: click.Context,
    api_base: str | None,
    api_prefix: str | None,
    log_level: str | None,
    log_file: Path | None,
) -> None:
    """nginxgate: review and roll out nginx configuration changes."""
    try:
        settings = ConfigManager.load()
    except ConfigLoadError as exc:
        click.echo(f"{APP_NAME}: {exc}; using defaults", err=True)
        settings = AppSettings()
    if api_base:
        settings.api_base = api_base
    if api_prefix is not None:
        settings.api_prefix = api_prefix

    setup_logging(log_level or settings.log_level, log_file or default_log_path())
    logger.debug("Backend %s%s", settings.api_base, settings.api_prefix)
    ctx.obj = CliState(settings=settings)

    if ctx.invoked_subcommand is None:
        ctx.invoke(ui)


# =============================================================================
# TUI
# =============================================================================


@main.command()
@click.option(
    "--mode",
    type=click.Choice([m.value for m in DeployMode]),
    help="Initial comparison mode.",
)
@click.option("--auto-refresh/--no-auto-refresh", default=None, help="Start with auto-refresh.")
@click.option("--refresh-interval", type=int, help="Auto-refresh interval in seconds (min 3).")
@click.pass_obj
def ui(
    state: CliState,
    mode: str | None = None,
    auto_refresh: bool | None = None,
    refresh_interval: int | None = None,
) -> None:
    """Open the interactive console (default command)."""
    from nginxgate.app import NginxGateApp

    app = NginxGateApp(
        api_base=state.settings.api_base,
        api_prefix=state.settings.api_prefix,
        mode=DeployMode(mode) if mode else None,
        auto_refresh=auto_refresh,
        refresh_interval=refresh_interval,
    )
    app.run()


# =============================================================================
# Scriptable commands
# =============================================================================


@main.command()
@click.pass_obj
def groups(state: CliState) -> None:
    """List host groups and their hosts."""

    async def _run() -> None:
        async with _make_client(state.settings) as api:
            response = await api.fetch_groups()
        host_total = 0
        for group in response.groups:
            click.echo(f"{group.name} ({len(group.hosts)} hosts)")
            for host in group.hosts:
                suffix = f"  [{host.config_dir_suffix}]" if host.config_dir_suffix else ""
                click.echo(f"  {host.host}  {host.name}{suffix}")
            host_total += len(group.hosts)
        click.echo(f"{len(response.groups)} groups, {host_total} hosts")

    try:
        asyncio.run(_run())
    except ApiError as exc:
        _fail(f"failed to list groups: {exc}")


@main.command()
@click.option("--group", "-g", required=True, help="Host group name.")
@click.option("--host", "-H", "host", required=True, help="Host address.")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in DeployMode]),
    help="Mode to check (default from settings).",
)
@click.pass_obj
def check(state: CliState, group: str, host: str, mode: str | None) -> None:
    """Run the nginx configuration check for one host."""
    context = SelectionContext(group, host, DeployMode(mode or state.settings.default_mode))

    async def _run():
        async with _make_client(state.settings) as api:
            return await ConfigCheckController(api).run(context)

    try:
        outcome = asyncio.run(_run())
    except PolicyViolationError as exc:
        _fail(str(exc))
    if outcome.data is not None:
        _echo_lines(format_check_result(outcome.data))
    if not outcome.success:
        _fail(outcome.error or "check failed")
    if not outcome.data.ok:
        raise SystemExit(1)


@main.command()
@click.option("--group", "-g", required=True, help="Host group name.")
@click.option("--host", "-H", "host", required=True, help="Host address.")
@click.option("--yes", "-y", is_flag=True, help="Apply without asking when the check passes.")
@click.pass_obj
def update(state: CliState, group: str, host: str, yes: bool) -> None:
    """Prepare an update on production and apply it if the check passes."""

    async def _run() -> int:
        async with _make_client(state.settings) as api:
            gate = DeploymentGate(api)
            prepared = await gate.prepare(group, host)
            if prepared.data is not None:
                _echo_lines(format_update_result(prepared.data))
            if not prepared.success:
                return _report(prepared.error or "prepare failed")
            if not gate.can_apply:
                return _report("configuration check failed, reload is unavailable")
            if not yes:
                question = f"Apply and reload nginx on {group}/{host}?"
                if not await asyncio.to_thread(click.confirm, question):
                    return _report("aborted")

            applied = await gate.apply(group, host)
            if applied.data is not None:
                _echo_lines(format_update_result(applied.data))
            if not applied.success:
                return _report(applied.error or "apply failed")
            return 0 if applied.data.success else 1

    try:
        code = asyncio.run(_run())
    except PolicyViolationError as exc:
        _fail(str(exc))
    if code:
        raise SystemExit(code)


__all__ = [
    "main",
    "setup_logging",
]
