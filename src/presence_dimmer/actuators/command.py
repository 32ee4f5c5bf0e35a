"""
Command Brightness - set brightness by running a shell command.

The command runs once per configured device with the target passed as
environment variables:
  BRIGHTNESS_DEVICE   device name from config
  BRIGHTNESS_PERCENT  integer in [0, 100]

Example:
  actuator:
    backend: command
    command: 'ddcutil --display "$BRIGHTNESS_DEVICE" setvcp 10 "$BRIGHTNESS_PERCENT"'
    devices: ["1", "2"]
"""

import logging
import os
import subprocess

from ..errors import ActuatorError
from ..utils.constants import DEFAULT_ACTUATOR_TIMEOUT

logger = logging.getLogger(__name__)


class CommandBrightness:
    """Brightness backend that shells out per device."""

    def __init__(
        self,
        command: str,
        devices: list[str] | None = None,
        timeout: float = DEFAULT_ACTUATOR_TIMEOUT,
    ):
        if not command:
            raise ValueError("No brightness command configured")
        self.command = command
        self.devices = list(devices) if devices else ["default"]
        self.timeout = timeout

    def enumerate_devices(self) -> list[str]:
        return list(self.devices)

    def set_brightness(self, device: str, percent: int) -> None:
        env = os.environ.copy()
        env["BRIGHTNESS_DEVICE"] = device
        env["BRIGHTNESS_PERCENT"] = str(percent)

        logger.debug(f"Running brightness command for {device}: {self.command}")

        try:
            result = subprocess.run(
                self.command,
                shell=True,
                timeout=self.timeout,
                capture_output=True,
                text=True,
                env=env,
            )
        except subprocess.TimeoutExpired as e:
            raise ActuatorError(
                f"Command timed out after {self.timeout}s", device
            ) from e
        except OSError as e:
            raise ActuatorError(f"Command execution error: {e}", device) from e

        if result.returncode != 0:
            error_msg = f"Command failed with code {result.returncode}"
            if result.stderr:
                error_msg += f": {result.stderr.strip()}"
            raise ActuatorError(error_msg, device)

        if result.stdout:
            logger.debug(f"Command stdout: {result.stdout.strip()}")
