"""
Camera initialization and frame acquisition.
"""

import logging
import time

import cv2

from ..errors import BoundaryFatalError
from ..models import Frame
from ..utils.constants import CAMERA_RECONNECT_DELAY, MAX_CAMERA_RECONNECT_ATTEMPTS

logger = logging.getLogger(__name__)


def initialize_camera(
    source: int | str,
    max_attempts: int = MAX_CAMERA_RECONNECT_ATTEMPTS,
    delay: float = CAMERA_RECONNECT_DELAY,
) -> cv2.VideoCapture:
    """
    Initialize camera with retry logic.

    Args:
        source: Device index, URL or file path
        max_attempts: Reconnect attempts after the first failure
        delay: Seconds between attempts

    Returns:
        OpenCV VideoCapture object

    Raises:
        BoundaryFatalError: If camera cannot be opened after retries
    """
    for attempt in range(max_attempts + 1):
        logger.info(f"Connecting to camera: {source} (attempt {attempt + 1})")
        try:
            cap = cv2.VideoCapture(source)
        except cv2.error as e:
            raise BoundaryFatalError(f"Cannot open camera {source}: {e}") from e

        if cap.isOpened():
            logger.info("Camera connected successfully")
            return cap

        cap.release()
        if attempt < max_attempts:
            logger.warning(f"Failed to connect, retrying in {delay}s...")
            time.sleep(delay)

    logger.error(f"Failed to connect to camera after {max_attempts + 1} attempts")
    raise BoundaryFatalError(f"Cannot connect to camera: {source}")


class CameraSource:
    """OpenCV capture device behind the FrameSource protocol."""

    def __init__(
        self,
        source: int | str = 0,
        max_attempts: int = MAX_CAMERA_RECONNECT_ATTEMPTS,
        delay: float = CAMERA_RECONNECT_DELAY,
    ):
        self.source = source
        self.cap = initialize_camera(source, max_attempts, delay)

    def acquire_frame(self) -> Frame | None:
        try:
            ret, pixels = self.cap.read()
        except cv2.error as e:
            raise BoundaryFatalError(f"Failed to read from camera: {e}") from e

        if not ret or pixels is None:
            logger.info("Camera stream ended")
            return None

        height, width = pixels.shape[:2]
        return Frame(pixels=pixels, width=width, height=height)

    def release(self) -> None:
        if self.cap is not None:
            self.cap.release()
            self.cap = None
