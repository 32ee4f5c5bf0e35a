"""
Core detection and presence components.

Post-processing (tensor -> detections) is pure and hardware-free; the
camera and inference adapters wrap OpenCV; the loop ties them together.
"""

from .camera import CameraSource, initialize_camera
from .decoder import decode_candidates
from .inference import OnnxInferenceEngine
from .loop import LoopStats, PresenceLoop, build_loop
from .mapper import CoordinateMapper
from .pipeline import DetectionPipeline
from .presence import PresenceController
from .suppressor import iou, suppress
from .tensor import TensorView

__all__ = [
    # Post-processing
    "CoordinateMapper",
    "DetectionPipeline",
    "TensorView",
    "decode_candidates",
    "iou",
    "suppress",
    # Presence
    "PresenceController",
    # Boundaries
    "CameraSource",
    "OnnxInferenceEngine",
    "initialize_camera",
    # Loop
    "LoopStats",
    "PresenceLoop",
    "build_loop",
]
