"""Core data models used across discovery, actions, and CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum


class Status(Enum):
    ONLINE = "online"
    OFFLINE = "offline"

    @classmethod
    def from_bool(cls, online: bool) -> Status:
        return cls.ONLINE if online else cls.OFFLINE

    def __str__(self) -> str:
        return self.value


class Action(Enum):
    ON = "on"
    OFF = "off"
    TOGGLE = "toggle"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Device:
    port: str
    name: str
    status: Status

    @property
    def online(self) -> bool:
        return self.status is Status.ONLINE

    @property
    def port_bytes(self) -> bytes:
        return os.fsencode(self.port)

    @property
    def display_port(self) -> str:
        return self.port_bytes.decode("utf-8", errors="replace")

    def __str__(self) -> str:
        return f"{self.display_port:<5} ({self.status}): {self.name}"


@dataclass(frozen=True)
class ActionOutcome:
    device: Device
    action: Action
    transition: Status | None
    dry_run: bool = False

    @property
    def refused(self) -> bool:
        return self.transition is None
