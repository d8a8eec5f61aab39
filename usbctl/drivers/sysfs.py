"""Driver control through the sysfs bind/unbind files."""

from __future__ import annotations

import os
from pathlib import Path

from usbctl.core.errors import BindError, UnbindError
from usbctl.core.layout import SysfsLayout, default_layout


class SysfsDriverControl:
    def __init__(self, layout: SysfsLayout | None = None) -> None:
        self.layout = layout or default_layout()

    def bind(self, port: str) -> None:
        path = self.layout.bind_file
        try:
            _write_port(path, port)
        except OSError as exc:
            raise BindError(path) from exc

    def unbind(self, port: str) -> None:
        path = self.layout.unbind_file
        try:
            _write_port(path, port)
        except OSError as exc:
            raise UnbindError(path) from exc


def _write_port(path: Path, port: str) -> None:
    # Control files accept exactly one write; no read-back.
    path.write_bytes(os.fsencode(port))
