"""
Utility modules for constants, numeric helpers and bounded calls.
"""

from .constants import (
    DEFAULT_CONF_THRESH,
    DEFAULT_HYSTERESIS_WINDOW,
    DEFAULT_NMS_THRESH,
    DEFAULT_POLL_INTERVAL_MS,
    HUMAN_CLASS_INDEX,
    STATUS_REPORT_INTERVAL,
)
from .numeric import round_half_away
from .timeouts import CallTimeout, call_with_timeout

__all__ = [
    "DEFAULT_CONF_THRESH",
    "DEFAULT_HYSTERESIS_WINDOW",
    "DEFAULT_NMS_THRESH",
    "DEFAULT_POLL_INTERVAL_MS",
    "HUMAN_CLASS_INDEX",
    "STATUS_REPORT_INTERVAL",
    # Bounded boundary calls
    "CallTimeout",
    "call_with_timeout",
    "round_half_away",
]
