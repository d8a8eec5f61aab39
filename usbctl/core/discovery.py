"""USB device discovery over the sysfs device registry."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from usbctl.core.device_match import device_matches
from usbctl.core.errors import (
    DirectoryOpenError,
    FetchEntryError,
    MetadataError,
    ReadProductError,
)
from usbctl.core.layout import SysfsLayout, default_layout
from usbctl.core.model import Device, Status

if TYPE_CHECKING:
    from os import _ScandirIterator

LOGGER = logging.getLogger(__name__)


def discover(layout: SysfsLayout | None = None) -> Iterator[Device]:
    """Open the device registry and return a lazy iterator of devices.

    The registry directory is opened before this function returns, so a missing
    or unreadable registry raises ``DirectoryOpenError`` right away. Problems
    with individual entries raise a ``DiscoveryError`` subclass from the
    iterator and end the walk.
    """
    layout = layout or default_layout()
    base_path = layout.devices_dir
    try:
        entries = os.scandir(base_path)
    except OSError as exc:
        raise DirectoryOpenError(base_path) from exc
    return _walk(entries, layout)


def find_device(search: str, exact: bool = False, layout: SysfsLayout | None = None) -> Device | None:
    """Return the first discovered device whose port or name matches ``search``."""
    for device in discover(layout):
        if device_matches(device, search, exact):
            return device
    return None


def _walk(entries: _ScandirIterator[str], layout: SysfsLayout) -> Iterator[Device]:
    with entries:
        while True:
            try:
                entry = next(entries)
            except StopIteration:
                return
            except OSError as exc:
                raise FetchEntryError(layout.devices_dir) from exc

            device = _read_device(Path(entry.path), layout)
            if device is not None:
                yield device


def _read_device(path: Path, layout: SysfsLayout) -> Device | None:
    try:
        metadata = os.stat(path)
    except FileNotFoundError:
        LOGGER.debug("Skipping %s, it disappeared during discovery", path)
        return None
    except OSError as exc:
        raise MetadataError(path) from exc

    if not stat.S_ISDIR(metadata.st_mode):
        return None

    # Hubs and root buses may lack a product string.
    product_file = path / "product"
    try:
        os.stat(product_file)
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise ReadProductError(product_file) from exc

    try:
        contents = product_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadProductError(product_file) from exc

    port = path.name
    return Device(
        port=port,
        name=contents.strip(),
        status=Status.from_bool(os.path.exists(layout.driver_dir / port)),
    )
