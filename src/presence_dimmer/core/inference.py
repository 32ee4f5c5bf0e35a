"""
ONNX inference through OpenCV DNN.
"""

import logging
from pathlib import Path

import cv2
import numpy as np

from ..errors import BoundaryFatalError
from ..utils.constants import DEFAULT_INPUT_HEIGHT, DEFAULT_INPUT_WIDTH

logger = logging.getLogger(__name__)


def _cuda_available() -> bool:
    try:
        return cv2.cuda.getCudaEnabledDeviceCount() > 0
    except (AttributeError, cv2.error):
        return False


class OnnxInferenceEngine:
    """
    Runs a YOLO-style ONNX network on BGR frames.

    Frames are resized to the network input, scaled to [0, 1] and
    converted to RGB before inference.
    """

    def __init__(
        self,
        model_file: str,
        input_width: int = DEFAULT_INPUT_WIDTH,
        input_height: int = DEFAULT_INPUT_HEIGHT,
    ):
        self.model_file = model_file
        self.input_size = (input_width, input_height)

        if not Path(model_file).is_file():
            raise BoundaryFatalError(f"Model file not found: {model_file}")

        try:
            self.net = cv2.dnn.readNetFromONNX(model_file)
        except cv2.error as e:
            raise BoundaryFatalError(f"Failed to load model {model_file}: {e}") from e

        if _cuda_available():
            self.net.setPreferableBackend(cv2.dnn.DNN_BACKEND_CUDA)
            self.net.setPreferableTarget(cv2.dnn.DNN_TARGET_CUDA)
            device = "cuda"
        else:
            self.net.setPreferableBackend(cv2.dnn.DNN_BACKEND_OPENCV)
            self.net.setPreferableTarget(cv2.dnn.DNN_TARGET_CPU)
            device = "cpu"

        self.output_names = self.net.getUnconnectedOutLayersNames()

        logger.info(f"Model initialized: {model_file}")
        logger.info(f"Device: {device}")
        if device == "cpu":
            logger.warning("Running on CPU - inference may be slow")

    def infer(self, pixels: np.ndarray) -> list[np.ndarray]:
        try:
            blob = cv2.dnn.blobFromImage(
                pixels,
                scalefactor=1.0 / 255.0,
                size=self.input_size,
                mean=(0, 0, 0),
                swapRB=True,
                crop=False,
                ddepth=cv2.CV_32F,
            )
            self.net.setInput(blob)
            return list(self.net.forward(self.output_names))
        except cv2.error as e:
            raise BoundaryFatalError(f"Inference failed: {e}") from e
