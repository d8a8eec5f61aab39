"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

import typer

from usbctl.core.errors import UsbctlError, error_chain
from usbctl.core.model import Action
from usbctl.core.service import UsbService

app = typer.Typer(help="USB devices management via sysfs bind/unbind")

LOGGER = logging.getLogger("usbctl")
_DETAILED_FORMAT = "[%(name)s] [%(levelname)s] %(message)s"

SEARCH_ARGUMENT = typer.Argument(None, help="Search strings matched against both port and device name")
EXACT_OPTION = typer.Option(False, "--exact", "-e", help="Match only when port or name equals a search string")
DRY_RUN_OPTION = typer.Option(False, "--dry-run", help="Log what would happen without writing control files")


@dataclass(frozen=True)
class CliOptions:
    allow_host: bool = False


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


class _StdoutFormatter(logging.Formatter):
    """Plain messages for INFO, detailed ones for DEBUG."""

    def __init__(self) -> None:
        super().__init__("%(message)s")
        self._detailed = logging.Formatter(_DETAILED_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno < logging.INFO:
            return self._detailed.format(record)
        return super().format(record)


def setup_logging(debug: bool = False) -> None:
    """Route warnings and errors to stderr and everything below to stdout."""
    for handler in list(LOGGER.handlers):
        LOGGER.removeHandler(handler)

    errors = logging.StreamHandler(sys.stderr)
    errors.setLevel(logging.WARNING)
    errors.setFormatter(logging.Formatter(_DETAILED_FORMAT))

    infos = logging.StreamHandler(sys.stdout)
    infos.addFilter(_BelowWarning())
    infos.setFormatter(_StdoutFormatter())

    LOGGER.addHandler(errors)
    LOGGER.addHandler(infos)
    LOGGER.setLevel(logging.DEBUG if debug else logging.INFO)


def _fail(exc: UsbctlError) -> None:
    LOGGER.error("Terminating with error: %s", error_chain(exc))
    raise typer.Exit(code=1) from None


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", "-d", help="Debug output"),
    allow_host: bool = typer.Option(False, "--allow-host", help='Enable acting on "host" and hub devices'),
) -> None:
    setup_logging(debug)
    ctx.obj = CliOptions(allow_host=allow_host)


@app.command("list")
def list_devices(ctx: typer.Context) -> None:
    """List available devices."""
    try:
        service = UsbService()
        devices = service.list_devices(allow_host=ctx.obj.allow_host)
        LOGGER.info("Found %d device(s):", len(devices))
        for device in devices:
            LOGGER.info("%s", device)
    except UsbctlError as exc:
        _fail(exc)


def _run_action(ctx: typer.Context, action: Action, search: list[str] | None, exact: bool, dry_run: bool) -> None:
    try:
        service = UsbService()
        if not dry_run:
            for warning in getattr(service, "runtime_warnings", ()):
                typer.echo(f"Warning: {warning}", err=True)
        outcomes = service.apply(
            action,
            search or [],
            exact=exact,
            allow_host=ctx.obj.allow_host,
            dry_run=dry_run,
        )
        if not outcomes:
            LOGGER.warning("No device matched %s", ", ".join(repr(s) for s in search or []) or "an empty search")
    except UsbctlError as exc:
        _fail(exc)


@app.command("on")
def turn_on(
    ctx: typer.Context,
    search: list[str] | None = SEARCH_ARGUMENT,
    exact: bool = EXACT_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Turn on devices."""
    _run_action(ctx, Action.ON, search, exact, dry_run)


@app.command("off")
def turn_off(
    ctx: typer.Context,
    search: list[str] | None = SEARCH_ARGUMENT,
    exact: bool = EXACT_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Turn off devices."""
    _run_action(ctx, Action.OFF, search, exact, dry_run)


@app.command("toggle")
def toggle(
    ctx: typer.Context,
    search: list[str] | None = SEARCH_ARGUMENT,
    exact: bool = EXACT_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Toggle devices: turn on the inactive ones and turn off the active ones."""
    _run_action(ctx, Action.TOGGLE, search, exact, dry_run)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
