"""Domain-specific errors for usbctl."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from usbctl.core.model import Device


class UsbctlError(Exception):
    """Base error for usbctl."""


class DirectoryOpenError(UsbctlError):
    """Raised when the device registry directory cannot be opened."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Unable to open {path}")
        self.path = path


class DiscoveryError(UsbctlError):
    """Base error for a single registry entry that could not be inspected."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class FetchEntryError(DiscoveryError):
    """Raised when the next entry cannot be fetched from the registry listing."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Unable to fetch an entry from {path}", path)


class MetadataError(DiscoveryError):
    """Raised when metadata of a registry entry cannot be read."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Unable to get metadata of {path}", path)


class ReadProductError(DiscoveryError):
    """Raised when a product descriptor file cannot be read."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Unable to read product file: {path}", path)


class DriverControlError(UsbctlError):
    """Base error for bind/unbind control file writes."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class BindError(DriverControlError):
    """Raised when writing to the bind control file fails."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Unable to write status ON to {path}", path)


class UnbindError(DriverControlError):
    """Raised when writing to the unbind control file fails."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Unable to write status OFF to {path}", path)


class DeviceLookupError(UsbctlError):
    """Raised when discovery cannot be started."""

    def __init__(self) -> None:
        super().__init__("Looking for devices")


class DeviceCollectionError(UsbctlError):
    """Raised when discovered devices cannot be collected into a list."""

    def __init__(self) -> None:
        super().__init__("Collecting devices")


class ActionError(UsbctlError):
    """Base error for the action pipeline."""


class FetchDeviceError(ActionError):
    """Raised when discovery fails while the pipeline pulls the next device."""

    def __init__(self) -> None:
        super().__init__("Fetching a device")


class TurnOnError(ActionError):
    """Raised when a device could not be turned on."""

    def __init__(self, device: Device) -> None:
        super().__init__(f"Unable to turn on {device}")
        self.device = device


class TurnOffError(ActionError):
    """Raised when a device could not be turned off."""

    def __init__(self, device: Device) -> None:
        super().__init__(f"Unable to turn off {device}")
        self.device = device


def error_chain(exc: BaseException) -> str:
    """Render an exception and every ``__cause__`` behind it on one line."""
    messages: list[str] = []
    current: BaseException | None = exc
    while current is not None:
        messages.append(str(current) or type(current).__name__)
        current = current.__cause__
    return ": ".join(messages)
