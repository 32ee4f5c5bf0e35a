"""
Presence Controller - hysteresis state machine for display brightness.

A single detection restores brightness immediately. Dimming needs a
continuous absence longer than the hysteresis window, so one missed frame
never darkens the display.
"""

import logging
import time
from collections.abc import Callable

from ..models import BrightnessCommand, DetectionSet, PresenceMode, PresenceState
from ..utils.constants import (
    DEFAULT_ACTIVE_BRIGHTNESS,
    DEFAULT_HYSTERESIS_WINDOW,
    DEFAULT_POWER_SAVING_BRIGHTNESS,
    HUMAN_CLASS_INDEX,
)

logger = logging.getLogger(__name__)


class PresenceController:
    """
    Two-state (ACTIVE / POWER_SAVING) presence controller.

    Owned by the control loop and updated once per tick. Starts ACTIVE
    with the last sighting set to construction time.
    """

    def __init__(
        self,
        hysteresis_window: float = DEFAULT_HYSTERESIS_WINDOW,
        human_class_index: int = HUMAN_CLASS_INDEX,
        active_brightness: int = DEFAULT_ACTIVE_BRIGHTNESS,
        power_saving_brightness: int = DEFAULT_POWER_SAVING_BRIGHTNESS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.hysteresis_window = hysteresis_window
        self.human_class_index = human_class_index
        self.active_brightness = active_brightness
        self.power_saving_brightness = power_saving_brightness
        self._clock = clock
        self.state = PresenceState(mode=PresenceMode.ACTIVE, last_human_seen=clock())

    @property
    def mode(self) -> PresenceMode:
        return self.state.mode

    def update(
        self, detections: DetectionSet, now: float | None = None
    ) -> BrightnessCommand | None:
        """
        Consume one tick's detections.

        Args:
            detections: Final detection set for the tick
            now: Monotonic timestamp (defaults to the controller clock)

        Returns:
            Brightness command to apply to every device, or None
        """
        human_present = detections.contains_class(self.human_class_index)
        return self.observe(human_present, now)

    def observe(
        self, human_present: bool, now: float | None = None
    ) -> BrightnessCommand | None:
        """Apply the transition rules for one presence observation."""
        if now is None:
            now = self._clock()

        if human_present:
            self.state.last_human_seen = now
            if self.state.mode == PresenceMode.POWER_SAVING:
                self.state.mode = PresenceMode.ACTIVE
                logger.info(f"Human detected, raising brightness to {self.active_brightness}%")
                return BrightnessCommand(self.active_brightness, PresenceMode.ACTIVE)
            return None

        elapsed = now - self.state.last_human_seen
        if elapsed > self.hysteresis_window and self.state.mode == PresenceMode.ACTIVE:
            self.state.mode = PresenceMode.POWER_SAVING
            logger.info(
                f"No human for {elapsed:.1f}s, lowering brightness to "
                f"{self.power_saving_brightness}%"
            )
            return BrightnessCommand(
                self.power_saving_brightness, PresenceMode.POWER_SAVING
            )
        return None
