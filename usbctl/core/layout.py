"""Locations of the sysfs USB registry and driver control files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_SYSFS_ROOT = Path("/sys")
SYSFS_ROOT_ENV = "USBCTL_SYSFS_ROOT"


@dataclass(frozen=True)
class SysfsLayout:
    root: Path = DEFAULT_SYSFS_ROOT

    @property
    def devices_dir(self) -> Path:
        return self.root / "bus/usb/devices"

    @property
    def driver_dir(self) -> Path:
        return self.root / "bus/usb/drivers/usb"

    @property
    def bind_file(self) -> Path:
        return self.driver_dir / "bind"

    @property
    def unbind_file(self) -> Path:
        return self.driver_dir / "unbind"


def default_layout() -> SysfsLayout:
    return SysfsLayout(root=Path(os.environ.get(SYSFS_ROOT_ENV, DEFAULT_SYSFS_ROOT)))
