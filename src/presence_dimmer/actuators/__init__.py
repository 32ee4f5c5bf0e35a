"""
Brightness actuators.

Backends:
  sysfs     - Linux /sys/class/backlight devices
  command   - Arbitrary shell command per device (ddcutil, brightnessctl, ...)
"""

from ..config import ActuatorConfig
from ..models import BrightnessActuator
from .command import CommandBrightness
from .dispatch import DispatchResult, dispatch_brightness
from .sysfs import SysfsBacklight


def build_actuator(config: ActuatorConfig) -> BrightnessActuator:
    """Create the brightness backend selected in config."""
    if config.backend == "command":
        return CommandBrightness(
            command=config.command,
            devices=config.devices,
            timeout=config.timeout_seconds,
        )
    return SysfsBacklight(
        root=config.sysfs_root,
        devices=config.devices,
        timeout=config.timeout_seconds,
    )


__all__ = [
    "CommandBrightness",
    "DispatchResult",
    "SysfsBacklight",
    "build_actuator",
    "dispatch_brightness",
]
