"""Stable public API for building tooling on top of usbctl.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from collections.abc import Iterable

from usbctl.core.errors import (
    ActionError,
    BindError,
    DeviceCollectionError,
    DeviceLookupError,
    DirectoryOpenError,
    DiscoveryError,
    DriverControlError,
    FetchDeviceError,
    FetchEntryError,
    MetadataError,
    ReadProductError,
    TurnOffError,
    TurnOnError,
    UnbindError,
    UsbctlError,
)
from usbctl.core.filters import ChainFilter, DeviceFilter, NoOpFilter, PredicateFilter, chain
from usbctl.core.layout import SysfsLayout
from usbctl.core.model import Action, ActionOutcome, Device, Status
from usbctl.core.service import UsbService
from usbctl.drivers.base import DriverControl

__all__ = [
    "UsbctlError",
    "DeviceLookupError",
    "DeviceCollectionError",
    "DirectoryOpenError",
    "DiscoveryError",
    "FetchEntryError",
    "MetadataError",
    "ReadProductError",
    "DriverControlError",
    "BindError",
    "UnbindError",
    "ActionError",
    "FetchDeviceError",
    "TurnOnError",
    "TurnOffError",
    "Action",
    "ActionOutcome",
    "Device",
    "Status",
    "SysfsLayout",
    "DeviceFilter",
    "NoOpFilter",
    "PredicateFilter",
    "ChainFilter",
    "chain",
    "DriverControl",
    "Client",
]


class Client:
    """Public client for interacting with usbctl core capabilities.

    A `Client` instance wraps sysfs discovery, search matching, and bind/unbind
    control behind a stable API intended for third-party tools (GUI/TUI/scripts).
    """

    def __init__(
        self,
        *,
        layout: SysfsLayout | None = None,
        driver: DriverControl | None = None,
    ) -> None:
        self._service = UsbService(layout=layout, driver=driver)

    @property
    def runtime_warnings(self) -> tuple[str, ...]:
        return self._service.runtime_warnings

    def list_devices(self, *, allow_host: bool = True) -> list[Device]:
        return self._service.list_devices(allow_host=allow_host)

    def find_device(self, search: str, *, exact: bool = False) -> Device | None:
        return self._service.find_device(search, exact=exact)

    def turn_on(
        self,
        *search: str,
        exact: bool = False,
        allow_host: bool = False,
        dry_run: bool = False,
    ) -> list[ActionOutcome]:
        return self.apply(Action.ON, search, exact=exact, allow_host=allow_host, dry_run=dry_run)

    def turn_off(
        self,
        *search: str,
        exact: bool = False,
        allow_host: bool = False,
        dry_run: bool = False,
    ) -> list[ActionOutcome]:
        return self.apply(Action.OFF, search, exact=exact, allow_host=allow_host, dry_run=dry_run)

    def toggle(
        self,
        *search: str,
        exact: bool = False,
        allow_host: bool = False,
        dry_run: bool = False,
    ) -> list[ActionOutcome]:
        return self.apply(Action.TOGGLE, search, exact=exact, allow_host=allow_host, dry_run=dry_run)

    def apply(
        self,
        action: Action,
        search: Iterable[str],
        *,
        exact: bool = False,
        allow_host: bool = False,
        dry_run: bool = False,
    ) -> list[ActionOutcome]:
        return self._service.apply(
            action,
            search,
            exact=exact,
            allow_host=allow_host,
            dry_run=dry_run,
        )
