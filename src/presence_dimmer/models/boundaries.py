"""
Boundary Protocols - Interfaces for the collaborators around the core.

The camera, the inference engine and the brightness hardware are all
swappable. Tests use small fakes; production uses the OpenCV and
sysfs/command adapters.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np


@dataclass
class Frame:
    """One captured frame."""

    pixels: np.ndarray
    width: int
    height: int


@runtime_checkable
class FrameSource(Protocol):
    """Capture boundary."""

    def acquire_frame(self) -> Frame | None:
        """
        Read the next frame.

        Returns:
            The frame, or None when the stream has ended

        Raises:
            BoundaryFatalError: If the device cannot be read
        """
        ...

    def release(self) -> None:
        """Release the underlying device."""
        ...


@runtime_checkable
class InferenceEngine(Protocol):
    """Inference boundary."""

    def infer(self, pixels: np.ndarray) -> Sequence[np.ndarray]:
        """
        Run the network on one frame.

        Args:
            pixels: BGR frame from the capture boundary

        Returns:
            Output tensors; only the first is interpreted

        Raises:
            BoundaryFatalError: If the network cannot be executed
        """
        ...


@runtime_checkable
class BrightnessActuator(Protocol):
    """Actuator boundary."""

    def enumerate_devices(self) -> list[str]:
        """
        List device handles currently known to the backend.

        Raises:
            ActuatorError: If devices cannot be listed
        """
        ...

    def set_brightness(self, device: str, percent: int) -> None:
        """
        Set one device to a brightness percentage in [0, 100].

        Raises:
            ActuatorError: If the device rejects the change
        """
        ...
