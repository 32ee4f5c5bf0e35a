"""
Pydantic schemas for configuration validation.

Provides type-safe, declarative validation with clear error messages.
Every field has a default, so an empty file is a valid configuration.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.constants import (
    CAMERA_RECONNECT_DELAY,
    DEFAULT_ACTIVE_BRIGHTNESS,
    DEFAULT_ACTUATOR_TIMEOUT,
    DEFAULT_CONF_THRESH,
    DEFAULT_HYSTERESIS_WINDOW,
    DEFAULT_INPUT_HEIGHT,
    DEFAULT_INPUT_WIDTH,
    DEFAULT_MODEL_FILE,
    DEFAULT_NMS_THRESH,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_POWER_SAVING_BRIGHTNESS,
    DEFAULT_SYSFS_BACKLIGHT_ROOT,
    HUMAN_CLASS_INDEX,
    MAX_CAMERA_RECONNECT_ATTEMPTS,
    STATUS_REPORT_INTERVAL,
)


class StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class DetectionConfig(StrictModel):
    """Network and post-processing settings."""

    model_file: str = Field(
        default=DEFAULT_MODEL_FILE, description="ONNX model file path"
    )
    conf_thresh: float = Field(
        default=DEFAULT_CONF_THRESH,
        ge=0.0,
        le=1.0,
        description="Minimum objectness / composite score",
    )
    nms_thresh: float = Field(
        default=DEFAULT_NMS_THRESH, ge=0.0, le=1.0, description="NMS IoU threshold"
    )
    input_width: int = Field(default=DEFAULT_INPUT_WIDTH, gt=0)
    input_height: int = Field(default=DEFAULT_INPUT_HEIGHT, gt=0)
    human_class_index: int = Field(default=HUMAN_CLASS_INDEX, ge=0)

    @field_validator("model_file")
    @classmethod
    def validate_model_file(cls, v: str) -> str:
        if not v.endswith(".onnx"):
            raise ValueError("Model file must be .onnx format")
        return v


class PresenceConfig(StrictModel):
    """Hysteresis and brightness levels."""

    hysteresis_window_seconds: float = Field(
        default=DEFAULT_HYSTERESIS_WINDOW, ge=0.0
    )
    active_brightness: int = Field(default=DEFAULT_ACTIVE_BRIGHTNESS, ge=0, le=100)
    power_saving_brightness: int = Field(
        default=DEFAULT_POWER_SAVING_BRIGHTNESS, ge=0, le=100
    )


class CameraConfig(StrictModel):
    """Capture device settings."""

    source: int | str = Field(default=0, description="Device index, URL or path")
    max_reconnect_attempts: int = Field(default=MAX_CAMERA_RECONNECT_ATTEMPTS, ge=0)
    reconnect_delay: float = Field(default=CAMERA_RECONNECT_DELAY, ge=0.0)


class RuntimeConfig(StrictModel):
    """Control loop timing."""

    poll_interval_ms: int = Field(default=DEFAULT_POLL_INTERVAL_MS, ge=0)
    boundary_timeout_seconds: float | None = Field(
        default=None, gt=0.0, description="Per-call limit for camera and inference"
    )
    status_report_interval: int = Field(default=STATUS_REPORT_INTERVAL, gt=0)


class ActuatorConfig(StrictModel):
    """Brightness backend settings."""

    backend: Literal["sysfs", "command"] = "sysfs"
    sysfs_root: str = DEFAULT_SYSFS_BACKLIGHT_ROOT
    devices: list[str] = Field(default_factory=list)
    command: str | None = None
    timeout_seconds: float = Field(default=DEFAULT_ACTUATOR_TIMEOUT, gt=0.0)

    @model_validator(mode="after")
    def validate_command(self):
        if self.backend == "command" and not self.command:
            raise ValueError("actuator.command is required when backend is 'command'")
        return self


class Config(StrictModel):
    """Complete configuration schema."""

    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    presence: PresenceConfig = Field(default_factory=PresenceConfig)
    camera: CameraConfig = Field(default_factory=CameraConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    actuator: ActuatorConfig = Field(default_factory=ActuatorConfig)


def validate_config_pydantic(config: dict) -> Config:
    """
    Validate configuration using Pydantic.

    Args:
        config: Raw configuration dictionary

    Returns:
        Validated Config object

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return Config(**config)
