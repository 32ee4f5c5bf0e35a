"""
Brightness dispatch with per-device fault isolation.

A failing device is logged and skipped; the remaining devices still
receive the command.
"""

import logging
from dataclasses import dataclass, field

from ..errors import ActuatorError
from ..models import BrightnessActuator, BrightnessCommand

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome of applying one command across all devices."""

    percent: int
    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def dispatch_brightness(
    actuator: BrightnessActuator, command: BrightnessCommand
) -> DispatchResult:
    """
    Set every known device to the command's brightness.

    Args:
        actuator: Brightness backend
        command: Command emitted by the presence controller

    Returns:
        DispatchResult listing devices that succeeded and failed
    """
    result = DispatchResult(percent=command.percent)

    try:
        devices = actuator.enumerate_devices()
    except ActuatorError as e:
        logger.error(f"Could not enumerate brightness devices: {e}")
        result.failed["*"] = str(e)
        return result

    if not devices:
        logger.warning("No brightness devices found")
        return result

    for device in devices:
        try:
            actuator.set_brightness(device, command.percent)
        except ActuatorError as e:
            logger.error(f"Failed to set {device} to {command.percent}%: {e}")
            result.failed[device] = str(e)
        else:
            logger.debug(f"Set {device} to {command.percent}%")
            result.succeeded.append(device)

    return result
