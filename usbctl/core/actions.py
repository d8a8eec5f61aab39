"""Apply on/off/toggle actions to discovered devices."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from usbctl.core.errors import (
    DiscoveryError,
    DriverControlError,
    FetchDeviceError,
    TurnOffError,
    TurnOnError,
)
from usbctl.core.filters import DeviceFilter, NoOpFilter
from usbctl.core.model import Action, ActionOutcome, Device, Status
from usbctl.drivers.base import DriverControl

LOGGER = logging.getLogger(__name__)

# Target status per (action, current status); None means the action is refused.
_TRANSITIONS: dict[tuple[Action, Status], Status | None] = {
    (Action.ON, Status.ONLINE): None,
    (Action.ON, Status.OFFLINE): Status.ONLINE,
    (Action.OFF, Status.ONLINE): Status.OFFLINE,
    (Action.OFF, Status.OFFLINE): None,
    (Action.TOGGLE, Status.ONLINE): Status.OFFLINE,
    (Action.TOGGLE, Status.OFFLINE): Status.ONLINE,
}


def transition_for(action: Action, status: Status) -> Status | None:
    return _TRANSITIONS[(action, status)]


def apply_action(
    action: Action,
    devices: Iterable[Device],
    device_filter: DeviceFilter | None = None,
    *,
    driver: DriverControl,
    dry_run: bool = False,
) -> list[ActionOutcome]:
    """Apply ``action`` to every device selected by ``device_filter``.

    Devices are pulled from ``devices`` one at a time. The first discovery
    error or failed control file write aborts the run. In dry-run mode the
    confirmation messages are logged but ``driver`` is never called.
    """
    device_filter = device_filter or NoOpFilter()
    outcomes: list[ActionOutcome] = []
    iterator = iter(devices)
    while True:
        try:
            device = next(iterator)
        except StopIteration:
            break
        except DiscoveryError as exc:
            raise FetchDeviceError() from exc

        if not device_filter.select(device):
            LOGGER.debug("Skipping %s", device)
            continue
        outcomes.append(_apply_one(action, device, driver, dry_run))
    return outcomes


def _apply_one(action: Action, device: Device, driver: DriverControl, dry_run: bool) -> ActionOutcome:
    target = transition_for(action, device.status)

    if target is None:
        if device.online:
            LOGGER.warning(
                'Refusing to turn on an active device "%s" at "%s"', device.name, device.display_port
            )
        else:
            LOGGER.warning(
                'Refusing to turn off an inactive device "%s" at "%s"', device.name, device.display_port
            )
    elif target is Status.ONLINE:
        if not dry_run:
            try:
                driver.bind(device.port)
            except DriverControlError as exc:
                raise TurnOnError(device) from exc
        LOGGER.info('Turned on device "%s" at "%s"', device.name, device.display_port)
    else:
        if not dry_run:
            try:
                driver.unbind(device.port)
            except DriverControlError as exc:
                raise TurnOffError(device) from exc
        LOGGER.info('Turned off device "%s" at "%s"', device.name, device.display_port)

    return ActionOutcome(device=device, action=action, transition=target, dry_run=dry_run)
