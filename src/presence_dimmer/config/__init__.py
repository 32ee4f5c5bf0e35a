"""
Configuration loading and validation.

- load_config: Discover, read, override and validate the YAML config
- load_config_with_env: Apply environment variable overrides
- validate_config: Turn a raw dict into a validated Config

Pydantic schemas available for type-safe validation:
- Config: Complete configuration schema
- validate_config_pydantic: Validate and parse config to Pydantic model
"""

from .loader import (
    find_config_file,
    load_config,
    load_config_with_env,
    read_config_file,
    validate_config,
)
from .schemas import (
    ActuatorConfig,
    CameraConfig,
    Config,
    DetectionConfig,
    PresenceConfig,
    RuntimeConfig,
    validate_config_pydantic,
)

__all__ = [
    # Pydantic validation
    "ActuatorConfig",
    "CameraConfig",
    "Config",
    "DetectionConfig",
    "PresenceConfig",
    "RuntimeConfig",
    "validate_config_pydantic",
    # Config loading
    "find_config_file",
    "load_config",
    "load_config_with_env",
    "read_config_file",
    "validate_config",
]
