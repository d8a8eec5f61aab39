"""Service layer used by CLI and the public API."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator

from usbctl.core.actions import apply_action
from usbctl.core.device_match import is_host_device, match_filter
from usbctl.core.discovery import discover, find_device
from usbctl.core.errors import (
    DeviceCollectionError,
    DeviceLookupError,
    DirectoryOpenError,
    DiscoveryError,
)
from usbctl.core.layout import SysfsLayout, default_layout
from usbctl.core.model import Action, ActionOutcome, Device
from usbctl.drivers.base import DriverControl
from usbctl.drivers.sysfs import SysfsDriverControl


class UsbService:
    def __init__(
        self,
        *,
        layout: SysfsLayout | None = None,
        driver: DriverControl | None = None,
    ) -> None:
        self.layout = layout or default_layout()
        self.driver = driver or SysfsDriverControl(self.layout)
        self.runtime_warnings = _runtime_warnings(self.layout)

    def list_devices(self, *, allow_host: bool = True) -> list[Device]:
        discovered = self._discover()
        try:
            devices = list(discovered)
        except DiscoveryError as exc:
            raise DeviceCollectionError() from exc
        if allow_host:
            return devices
        return [device for device in devices if not is_host_device(device)]

    def find_device(self, search: str, *, exact: bool = False) -> Device | None:
        try:
            return find_device(search, exact, self.layout)
        except (DirectoryOpenError, DiscoveryError) as exc:
            raise DeviceLookupError() from exc

    def apply(
        self,
        action: Action,
        search: Iterable[str],
        *,
        exact: bool = False,
        allow_host: bool = False,
        dry_run: bool = False,
    ) -> list[ActionOutcome]:
        return apply_action(
            action,
            self._discover(),
            match_filter(search, exact, allow_host),
            driver=self.driver,
            dry_run=dry_run,
        )

    def _discover(self) -> Iterator[Device]:
        try:
            return discover(self.layout)
        except DirectoryOpenError as exc:
            raise DeviceLookupError() from exc


def _runtime_warnings(layout: SysfsLayout) -> tuple[str, ...]:
    warnings: list[str] = []
    for path in (layout.bind_file, layout.unbind_file):
        if not os.access(path, os.W_OK):
            warnings.append(f"No write access to {path}; only --dry-run actions will succeed.")
    return tuple(warnings)
