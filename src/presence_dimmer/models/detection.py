"""
Detection data models - from raw network candidates to frame-space boxes.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class NetworkBox:
    """Box geometry in network input pixels (center format)."""

    cx: float
    cy: float
    w: float
    h: float


@dataclass(frozen=True)
class Candidate:
    """
    Unscaled detection candidate decoded from one tensor row.

    Attributes:
        box: Geometry in network input space
        class_index: Index of the best-scoring class
        composite_score: Raw class score multiplied by objectness (not a
            normalized probability)
    """

    box: NetworkBox
    class_index: int
    composite_score: float


@dataclass(frozen=True)
class FrameInfo:
    """Dimensions of the current source frame."""

    width: int
    height: int


@dataclass(frozen=True)
class FrameBox:
    """Box in frame pixel space (top-left corner plus size)."""

    x: int
    y: int
    width: int
    height: int

    @property
    def xmax(self) -> int:
        return self.x + self.width

    @property
    def ymax(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return max(0, self.width) * max(0, self.height)


@dataclass(frozen=True)
class Detection:
    """Final detection in frame pixel coordinates."""

    xmin: int
    ymin: int
    xmax: int
    ymax: int
    class_index: int
    confidence: float

    @classmethod
    def from_frame_box(
        cls, box: FrameBox, class_index: int, confidence: float
    ) -> "Detection":
        return cls(
            xmin=box.x,
            ymin=box.y,
            xmax=box.xmax,
            ymax=box.ymax,
            class_index=class_index,
            confidence=confidence,
        )


@dataclass(frozen=True)
class DetectionSet:
    """Detections of one tick, ordered by descending confidence."""

    detections: tuple[Detection, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Detection]:
        return iter(self.detections)

    def __len__(self) -> int:
        return len(self.detections)

    def contains_class(self, class_index: int) -> bool:
        """Check whether any detection belongs to the given class."""
        return any(d.class_index == class_index for d in self.detections)
