"""
Presence Dimmer

Dims the display when nobody is in front of the camera and restores it as
soon as a person reappears. Built on an ONNX YOLO model run through OpenCV.

Package structure:
  core/       - Post-processing, presence controller, capture/inference, loop
  actuators/  - Brightness backends (sysfs, shell command)
  config/     - Configuration loading and validation
  models/     - Data models and boundary protocols
  utils/      - Constants and helpers
"""

__version__ = "1.0.0"

from .config import Config, load_config
from .core import (
    CoordinateMapper,
    DetectionPipeline,
    PresenceController,
    PresenceLoop,
    build_loop,
    decode_candidates,
    suppress,
)
from .errors import (
    ActuatorError,
    BoundaryFatalError,
    ConfigValidationError,
    DecodeError,
    PresenceDimmerError,
)
from .models import BrightnessCommand, Detection, DetectionSet, PresenceMode

__all__ = [
    # Config
    "Config",
    "load_config",
    # Core
    "CoordinateMapper",
    "DetectionPipeline",
    "PresenceController",
    "PresenceLoop",
    "build_loop",
    "decode_candidates",
    "suppress",
    # Errors
    "ActuatorError",
    "BoundaryFatalError",
    "ConfigValidationError",
    "DecodeError",
    "PresenceDimmerError",
    # Models
    "BrightnessCommand",
    "Detection",
    "DetectionSet",
    "PresenceMode",
]
