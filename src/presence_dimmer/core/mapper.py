"""
Coordinate mapping from network input space to frame pixels.
"""

from ..models import FrameBox, FrameInfo, NetworkBox
from ..utils.constants import DEFAULT_INPUT_HEIGHT, DEFAULT_INPUT_WIDTH
from ..utils.numeric import round_half_away


class CoordinateMapper:
    """
    Rescales network-space boxes to a frame of arbitrary size.

    Boxes are not clamped to the frame; coordinates may be negative or
    exceed the frame extent.
    """

    def __init__(
        self,
        input_width: int = DEFAULT_INPUT_WIDTH,
        input_height: int = DEFAULT_INPUT_HEIGHT,
    ):
        if input_width <= 0 or input_height <= 0:
            raise ValueError(
                f"Network input size must be positive, got {input_width}x{input_height}"
            )
        self.input_width = input_width
        self.input_height = input_height

    def scale_factors(self, frame: FrameInfo) -> tuple[float, float]:
        return frame.width / self.input_width, frame.height / self.input_height

    def map(self, box: NetworkBox, frame: FrameInfo) -> FrameBox:
        """
        Map one box into frame space.

        Each of x, y, width and height is rounded on its own; the max
        corner is derived from the rounded values.
        """
        scale_x, scale_y = self.scale_factors(frame)
        return FrameBox(
            x=round_half_away((box.cx - box.w / 2) * scale_x),
            y=round_half_away((box.cy - box.h / 2) * scale_y),
            width=round_half_away(box.w * scale_x),
            height=round_half_away(box.h * scale_y),
        )
