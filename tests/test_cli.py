from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from usbctl import cli
from usbctl.core.model import Action, ActionOutcome, Device, Status

MOUSE = Device(port="1-1", name="Example Mouse", status=Status.OFFLINE)
HOST = Device(port="usb1", name="xHCI Host Controller", status=Status.ONLINE)


class FakeService:
    def __init__(self) -> None:
        self.runtime_warnings: tuple[str, ...] = ()
        self.applied: list[tuple] = []

    def list_devices(self, *, allow_host: bool = True):
        return [MOUSE, HOST] if allow_host else [MOUSE]

    def apply(self, action, search, *, exact=False, allow_host=False, dry_run=False):
        self.applied.append((action, list(search), exact, allow_host, dry_run))
        if "Mouse" not in search:
            return []
        return [ActionOutcome(device=MOUSE, action=action, transition=Status.ONLINE, dry_run=dry_run)]


runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_cli_logger():
    yield
    for handler in list(cli.LOGGER.handlers):
        cli.LOGGER.removeHandler(handler)
    cli.LOGGER.setLevel(logging.NOTSET)


@pytest.fixture
def service(monkeypatch: pytest.MonkeyPatch) -> FakeService:
    fake = FakeService()
    monkeypatch.setattr(cli, "UsbService", lambda: fake)
    return fake


def test_list_command_hides_hosts(service: FakeService) -> None:
    result = runner.invoke(cli.app, ["list"])
    assert result.exit_code == 0
    assert "Found 1 device(s):" in result.stdout
    assert "1-1   (offline): Example Mouse" in result.stdout
    assert "Host Controller" not in result.stdout


def test_list_command_allow_host(service: FakeService) -> None:
    result = runner.invoke(cli.app, ["--allow-host", "list"])
    assert result.exit_code == 0
    assert "Found 2 device(s):" in result.stdout
    assert "usb1  (online): xHCI Host Controller" in result.stdout


@pytest.mark.parametrize(("command", "action"), [("on", Action.ON), ("off", Action.OFF), ("toggle", Action.TOGGLE)])
def test_action_commands_pass_options(service: FakeService, command: str, action: Action) -> None:
    result = runner.invoke(cli.app, ["--allow-host", command, "Mouse", "1-2", "--exact", "--dry-run"])
    assert result.exit_code == 0
    assert service.applied == [(action, ["Mouse", "1-2"], True, True, True)]


def test_no_match_is_a_warning_not_an_error(service: FakeService) -> None:
    result = runner.invoke(cli.app, ["off", "Trackball"])
    assert result.exit_code == 0
    assert "No device matched 'Trackball'" in result.stderr


def test_runtime_warning_is_printed(service: FakeService) -> None:
    service.runtime_warnings = ("No write access to /sys/bus/usb/drivers/usb/bind",)
    result = runner.invoke(cli.app, ["on", "Mouse"])
    assert result.exit_code == 0
    assert "Warning: No write access" in result.stderr

    result = runner.invoke(cli.app, ["on", "Mouse", "--dry-run"])
    assert "Warning: No write access" not in result.stderr


def test_error_chain_is_clean(monkeypatch: pytest.MonkeyPatch) -> None:
    class FailingService(FakeService):
        def apply(self, action, search, *, exact=False, allow_host=False, dry_run=False):
            from usbctl.core.errors import BindError, TurnOnError

            try:
                raise BindError(Path("/sys/bus/usb/drivers/usb/bind")) from PermissionError("Permission denied")
            except BindError as exc:
                raise TurnOnError(MOUSE) from exc

    monkeypatch.setattr(cli, "UsbService", FailingService)
    result = runner.invoke(cli.app, ["on", "Mouse"])
    assert result.exit_code == 1
    assert "Terminating with error: Unable to turn on 1-1" in result.stderr
    assert "Unable to write status ON to /sys/bus/usb/drivers/usb/bind: Permission denied" in result.stderr
    assert "Traceback" not in result.stdout
    assert "Traceback" not in result.stderr


def test_end_to_end_against_fake_sysfs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    device_dir = tmp_path / "bus/usb/devices/1-1"
    device_dir.mkdir(parents=True)
    (device_dir / "product").write_text("Example Mouse\n", encoding="utf-8")
    driver_dir = tmp_path / "bus/usb/drivers/usb"
    driver_dir.mkdir(parents=True)
    (driver_dir / "bind").touch()
    (driver_dir / "unbind").touch()
    monkeypatch.setenv("USBCTL_SYSFS_ROOT", str(tmp_path))

    result = runner.invoke(cli.app, ["on", "--dry-run", "Mouse"])
    assert result.exit_code == 0
    assert 'Turned on device "Example Mouse" at "1-1"' in result.stdout
    assert (driver_dir / "bind").read_bytes() == b""

    result = runner.invoke(cli.app, ["on", "Mouse"])
    assert result.exit_code == 0
    assert (driver_dir / "bind").read_bytes() == b"1-1"

    result = runner.invoke(cli.app, ["off", "Mouse"])
    assert result.exit_code == 0
    assert 'Refusing to turn off an inactive device "Example Mouse" at "1-1"' in result.stderr
    assert (driver_dir / "unbind").read_bytes() == b""


def test_missing_registry_exits_non_zero(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("USBCTL_SYSFS_ROOT", str(tmp_path))
    result = runner.invoke(cli.app, ["list"])
    assert result.exit_code == 1
    devices_dir = tmp_path / "bus/usb/devices"
    assert f"Terminating with error: Looking for devices: Unable to open {devices_dir}: [Errno 2]" in result.stderr

    result = runner.invoke(cli.app, ["on", "Mouse"])
    assert result.exit_code == 1
    assert f"Terminating with error: Looking for devices: Unable to open {devices_dir}" in result.stderr


def _fake_sysfs(root: Path) -> Path:
    device_dir = root / "bus/usb/devices/1-1"
    device_dir.mkdir(parents=True)
    (device_dir / "product").write_text("Example Mouse\n", encoding="utf-8")
    (root / "bus/usb/drivers/usb").mkdir(parents=True)
    return device_dir


def test_unreadable_product_is_a_clean_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    product = _fake_sysfs(tmp_path) / "product"
    monkeypatch.setenv("USBCTL_SYSFS_ROOT", str(tmp_path))
    real_stat = os.stat

    def fake_stat(path, *args, **kwargs):
        if Path(path) == product:
            raise PermissionError(13, "Permission denied")
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(os, "stat", fake_stat)

    result = runner.invoke(cli.app, ["off", "Mouse"])
    assert result.exit_code == 1
    assert not isinstance(result.exception, PermissionError)
    assert f"Terminating with error: Fetching a device: Unable to read product file: {product}" in result.stderr


def test_list_reports_collection_context(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    device_dir = _fake_sysfs(tmp_path)
    monkeypatch.setenv("USBCTL_SYSFS_ROOT", str(tmp_path))
    real_stat = os.stat

    def fake_stat(path, *args, **kwargs):
        if Path(path) == device_dir:
            raise PermissionError(13, "Permission denied")
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(os, "stat", fake_stat)

    result = runner.invoke(cli.app, ["list"])
    assert result.exit_code == 1
    assert f"Terminating with error: Collecting devices: Unable to get metadata of {device_dir}" in result.stderr
