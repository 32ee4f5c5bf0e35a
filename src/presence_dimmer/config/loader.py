"""
Configuration loading - file discovery, YAML parsing, env overrides.

Search order for the config file:
1. Path given with --config (must exist)
2. ./presence.yaml
3. ~/.config/presence-dimmer/presence.yaml

When no file is found the built-in defaults apply.
"""

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..errors import ConfigValidationError
from ..utils.constants import (
    DEFAULT_CONFIG_NAME,
    ENV_CAMERA_SOURCE,
    ENV_MODEL_FILE,
    USER_CONFIG_DIR,
)
from .schemas import Config, validate_config_pydantic

logger = logging.getLogger(__name__)


def config_search_paths() -> list[Path]:
    return [
        Path.cwd() / DEFAULT_CONFIG_NAME,
        Path.home() / ".config" / USER_CONFIG_DIR / DEFAULT_CONFIG_NAME,
    ]


def find_config_file(config_path: str | None = None) -> Path | None:
    """
    Find config file in standard locations.

    Args:
        config_path: User-specified config path

    Returns:
        Path to config file, or None to use defaults

    Raises:
        ConfigValidationError: If a user-specified path does not exist
    """
    if config_path:
        specified = Path(config_path)
        if not specified.exists():
            raise ConfigValidationError([f"Config file not found: {config_path}"])
        return specified

    for path in config_search_paths():
        if path.exists():
            logger.info(f"Using config: {path}")
            return path

    logger.info("No config file found, using defaults")
    return None


def read_config_file(config_file: Path) -> dict:
    """
    Read a YAML config file.

    Supports pointer files: if the file only contains ``use: other.yaml``,
    that file (relative to the pointer) is loaded instead.
    """
    try:
        with open(config_file, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        if isinstance(config, dict) and list(config.keys()) == ["use"]:
            pointer_path = Path(config_file).parent / config["use"]
            logger.info(f"Config pointer: {config_file} -> {pointer_path}")
            with open(pointer_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}

    except yaml.YAMLError as e:
        raise ConfigValidationError([f"Invalid YAML in {config_file}: {e}"]) from e
    except OSError as e:
        raise ConfigValidationError([f"Cannot read {config_file}: {e}"]) from e

    if not isinstance(config, dict):
        raise ConfigValidationError([f"{config_file} must contain a mapping"])
    return config


def load_config_with_env(config: dict) -> dict:
    """
    Apply environment variable overrides.

    CAMERA_SOURCE: digits select a device index, anything else is a URL/path
    MODEL_FILE: ONNX model path
    """
    camera_source = os.environ.get(ENV_CAMERA_SOURCE)
    if camera_source:
        source: int | str = int(camera_source) if camera_source.isdigit() else camera_source
        config.setdefault("camera", {})["source"] = source
        logger.info(f"Camera source from environment: {source}")

    model_file = os.environ.get(ENV_MODEL_FILE)
    if model_file:
        config.setdefault("detection", {})["model_file"] = model_file
        logger.info(f"Model file from environment: {model_file}")

    return config


def validate_config(raw: dict) -> Config:
    """
    Validate a raw config dict.

    Raises:
        ConfigValidationError: With one message per invalid field
    """
    try:
        return validate_config_pydantic(raw)
    except ValidationError as e:
        errors = []
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"]) or "config"
            errors.append(f"{location}: {err['msg']}")
        raise ConfigValidationError(errors) from e


def load_config(config_path: str | None = None) -> Config:
    """
    Load, override and validate configuration.

    Args:
        config_path: Optional explicit path to a YAML config

    Returns:
        Validated Config

    Raises:
        ConfigValidationError: If the file is missing, unreadable or invalid
    """
    config_file = find_config_file(config_path)
    raw = read_config_file(config_file) if config_file else {}
    raw = load_config_with_env(raw)
    config = validate_config(raw)
    logger.info("Configuration validated")
    return config
