"""Search-string matching for USB devices."""

from __future__ import annotations

from collections.abc import Iterable

from usbctl.core.filters import ChainableFilter, ChainFilter
from usbctl.core.model import Device

_HOST_TOKEN = "host"


def device_matches(device: Device, search: str, exact: bool = False) -> bool:
    port = device.display_port
    if exact:
        return port == search or device.name == search
    return search in port or search in device.name


def is_host_device(device: Device) -> bool:
    return _HOST_TOKEN in device.name.lower()


class SearchFilter(ChainableFilter):
    """Selects devices matching any of the search strings.

    An empty search set selects nothing.
    """

    def __init__(self, search: Iterable[str], exact: bool = False) -> None:
        self.search = tuple(search)
        self.exact = exact

    def select(self, device: Device) -> bool:
        return any(device_matches(device, term, self.exact) for term in self.search)


class HostFilter(ChainableFilter):
    """Rejects host controllers and hubs unless explicitly allowed."""

    def __init__(self, allow_host: bool = False) -> None:
        self.allow_host = allow_host

    def select(self, device: Device) -> bool:
        return self.allow_host or not is_host_device(device)


def match_filter(search: Iterable[str], exact: bool = False, allow_host: bool = False) -> ChainFilter:
    return HostFilter(allow_host).chain(SearchFilter(search, exact))
