"""
Linux backlight control through /sys/class/backlight.

Sysfs reads and writes are plain blocking file I/O; a wedged display driver
can hold them indefinitely. With a timeout set, each set_brightness call is
abandoned after that many seconds and reported as an ActuatorError, so a hung
device costs the loop at most one timeout per tick. Without one, a hung write
stalls the control loop.
"""

import logging
from pathlib import Path

from ..errors import ActuatorError
from ..utils.constants import DEFAULT_SYSFS_BACKLIGHT_ROOT
from ..utils.numeric import round_half_away
from ..utils.timeouts import CallTimeout, call_with_timeout

logger = logging.getLogger(__name__)


class SysfsBacklight:
    """
    Backlight devices exposed by the kernel.

    Each device directory holds ``max_brightness`` and a writable
    ``brightness`` file. Percentages are scaled to the device range.
    """

    def __init__(
        self,
        root: str = DEFAULT_SYSFS_BACKLIGHT_ROOT,
        devices: list[str] | None = None,
        timeout: float | None = None,
    ):
        self.root = Path(root)
        self.allowed = set(devices) if devices else None
        self.timeout = timeout

    def enumerate_devices(self) -> list[str]:
        try:
            entries = sorted(p for p in self.root.iterdir() if p.is_dir())
        except OSError as e:
            raise ActuatorError(f"Cannot list {self.root}: {e}") from e

        names = [p.name for p in entries if (p / "brightness").exists()]
        if self.allowed is not None:
            names = [n for n in names if n in self.allowed]
        return names

    def set_brightness(self, device: str, percent: int) -> None:
        if not 0 <= percent <= 100:
            raise ActuatorError(f"Brightness {percent}% out of range", device)

        try:
            value, max_brightness = call_with_timeout(
                self._write, self.timeout, self.root / device, percent
            )
        except CallTimeout as e:
            raise ActuatorError(
                f"Setting brightness on {device} timed out after {self.timeout}s",
                device,
            ) from e
        except (OSError, ValueError) as e:
            raise ActuatorError(f"Cannot set brightness on {device}: {e}", device) from e

        logger.debug(f"{device}: brightness={value}/{max_brightness}")

    @staticmethod
    def _write(device_dir: Path, percent: int) -> tuple[int, int]:
        max_brightness = int((device_dir / "max_brightness").read_text().strip())
        value = round_half_away(percent / 100 * max_brightness)
        (device_dir / "brightness").write_text(f"{value}\n")
        return value, max_brightness
