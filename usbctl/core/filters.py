"""Composable device filters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Protocol

from usbctl.core.model import Device


class DeviceFilter(Protocol):
    def select(self, device: Device) -> bool:
        """Return True when the action should be applied to ``device``."""


class ChainableFilter(ABC):
    """Base for filters offering fluent AND chaining."""

    @abstractmethod
    def select(self, device: Device) -> bool:
        """Return True when the action should be applied to ``device``."""

    def chain(self, next_filter: DeviceFilter) -> ChainFilter:
        return ChainFilter(self, next_filter)


class NoOpFilter(ChainableFilter):
    def select(self, device: Device) -> bool:
        return True


class PredicateFilter(ChainableFilter):
    def __init__(self, predicate: Callable[[Device], bool]) -> None:
        self._predicate = predicate

    def select(self, device: Device) -> bool:
        return bool(self._predicate(device))


class ChainFilter(ChainableFilter):
    """Selects a device only if both filters select it.

    ``second`` is not consulted when ``first`` rejects the device.
    """

    def __init__(self, first: DeviceFilter, second: DeviceFilter) -> None:
        self.first = first
        self.second = second

    def select(self, device: Device) -> bool:
        return self.first.select(device) and self.second.select(device)


def chain(first: DeviceFilter, *rest: DeviceFilter) -> DeviceFilter:
    combined = first
    for next_filter in rest:
        combined = ChainFilter(combined, next_filter)
    return combined
