"""Driver control interfaces."""

from __future__ import annotations

from typing import Protocol


class DriverControl(Protocol):
    def bind(self, port: str) -> None:
        """Attach the default driver to the device at ``port``."""

    def unbind(self, port: str) -> None:
        """Detach the driver from the device at ``port``."""
