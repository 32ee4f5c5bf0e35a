"""
Data models for the presence dimmer.

Detection models flow through post-processing once per tick, presence
models persist across ticks, and boundary protocols describe the
collaborators the control loop drives.
"""

from .boundaries import BrightnessActuator, Frame, FrameSource, InferenceEngine
from .detection import (
    Candidate,
    Detection,
    DetectionSet,
    FrameBox,
    FrameInfo,
    NetworkBox,
)
from .presence import BrightnessCommand, PresenceMode, PresenceState

__all__ = [
    # Protocols
    "BrightnessActuator",
    "Frame",
    "FrameSource",
    "InferenceEngine",
    # Detection models
    "Candidate",
    "Detection",
    "DetectionSet",
    "FrameBox",
    "FrameInfo",
    "NetworkBox",
    # Presence models
    "BrightnessCommand",
    "PresenceMode",
    "PresenceState",
]
