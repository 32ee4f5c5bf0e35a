"""
Constants used throughout the presence dimmer
"""

# Network input
DEFAULT_INPUT_WIDTH = 640
DEFAULT_INPUT_HEIGHT = 640
MIN_TENSOR_COLUMNS = 5  # cx, cy, w, h, objectness
OBJECTNESS_COLUMN = 4
FIRST_CLASS_COLUMN = 5

# Detection thresholds
DEFAULT_CONF_THRESH = 0.1
DEFAULT_NMS_THRESH = 0.1
HUMAN_CLASS_INDEX = 0  # COCO "person"

# Presence hysteresis
DEFAULT_HYSTERESIS_WINDOW = 5.0  # Seconds of continuous absence before dimming
DEFAULT_ACTIVE_BRIGHTNESS = 100
DEFAULT_POWER_SAVING_BRIGHTNESS = 0

# Loop timing
DEFAULT_POLL_INTERVAL_MS = 100
STATUS_REPORT_INTERVAL = 100  # Log status every N ticks
INFERENCE_WINDOW_SIZE = 100  # Ticks averaged for inference time

# Camera reconnection
MAX_CAMERA_RECONNECT_ATTEMPTS = 2
CAMERA_RECONNECT_DELAY = 2.0  # Seconds between reconnection attempts

# Actuators
DEFAULT_SYSFS_BACKLIGHT_ROOT = "/sys/class/backlight"
DEFAULT_ACTUATOR_TIMEOUT = 5  # Seconds per brightness write, any backend

# Config discovery
DEFAULT_CONFIG_NAME = "presence.yaml"
USER_CONFIG_DIR = "presence-dimmer"
DEFAULT_MODEL_FILE = "yolov5n.onnx"

# Environment variables
ENV_CAMERA_SOURCE = "CAMERA_SOURCE"
ENV_MODEL_FILE = "MODEL_FILE"
