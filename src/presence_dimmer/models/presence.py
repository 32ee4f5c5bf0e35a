"""
Presence state models.
"""

from dataclasses import dataclass
from enum import Enum


class PresenceMode(Enum):
    """Display mode driven by human presence."""

    ACTIVE = "active"
    POWER_SAVING = "power_saving"


@dataclass
class PresenceState:
    """
    Mutable presence state, owned by a single PresenceController.

    Attributes:
        mode: Current display mode
        last_human_seen: Monotonic timestamp of the last human detection
    """

    mode: PresenceMode
    last_human_seen: float


@dataclass(frozen=True)
class BrightnessCommand:
    """Request to set every known brightness device to the same level."""

    percent: int
    mode: PresenceMode
