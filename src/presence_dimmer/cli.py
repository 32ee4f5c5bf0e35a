"""
Presence Dimmer CLI
Main entry point for running the presence loop.
"""

import argparse
import logging
import signal
import sys
from threading import Event

from .config import Config, load_config
from .core import build_loop
from .errors import BoundaryFatalError, ConfigValidationError

logger = logging.getLogger(__name__)

# Module-level shutdown signal for SIGTERM/SIGINT handling
_shutdown_signal = Event()


def _handle_shutdown_signal(signum, _frame):
    """Handle SIGTERM/SIGINT for graceful shutdown."""
    signal_name = "SIGTERM" if signum == signal.SIGTERM else "SIGINT"
    # Note: print is safer than logger in signal handlers
    print(f"\nReceived {signal_name}, initiating graceful shutdown...")
    _shutdown_signal.set()


def _setup_signal_handlers():
    """Register signal handlers for graceful shutdown."""
    signal.signal(signal.SIGTERM, _handle_shutdown_signal)
    signal.signal(signal.SIGINT, _handle_shutdown_signal)


def setup_logging(quiet: bool = False) -> None:
    """
    Setup logging configuration.

    Args:
        quiet: If True, only show warnings and errors
    """
    level = logging.WARNING if quiet else logging.INFO

    # Custom formatter with shorter module names
    class ShortNameFormatter(logging.Formatter):
        def format(self, record):
            record.name = record.name.replace("presence_dimmer.", "pd.")
            return super().format(record)

    handler = logging.StreamHandler()
    handler.setFormatter(
        ShortNameFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s", datefmt="%H:%M:%S"
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(level)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Presence Dimmer - dim the display when nobody is around",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  CAMERA_SOURCE - Override camera source (device index or URL)
  MODEL_FILE    - Override ONNX model path
        """,
    )

    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to config file (default: presence.yaml if present)",
    )

    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Quiet mode - only show warnings and errors",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and show resolved settings",
    )

    return parser.parse_args(argv)


def print_config(config: Config) -> None:
    """Print the resolved configuration."""
    detection = config.detection
    presence = config.presence

    print("\n" + "=" * 70)
    print("PRESENCE DIMMER CONFIGURATION")
    print("=" * 70)
    print(f"\nModel: {detection.model_file}")
    print(f"  Input: {detection.input_width}x{detection.input_height}")
    print(f"  conf_thresh={detection.conf_thresh} nms_thresh={detection.nms_thresh}")
    print(f"  Human class: {detection.human_class_index}")
    print("\nPresence:")
    print(f"  Hysteresis: {presence.hysteresis_window_seconds}s")
    print(
        f"  Brightness: {presence.active_brightness}% active / "
        f"{presence.power_saving_brightness}% power saving"
    )
    print(f"\nCamera: {config.camera.source}")
    print(f"Poll interval: {config.runtime.poll_interval_ms}ms")
    print(f"Actuator: {config.actuator.backend}")
    print("=" * 70 + "\n")


def run_validate(config_path: str | None) -> int:
    """Run validation mode."""
    try:
        config = load_config(config_path)
    except ConfigValidationError as e:
        print("Configuration invalid:")
        for error in e.errors:
            print(f"  - {error}")
        return 1

    print_config(config)
    print("Configuration valid")
    return 0


def run(config_path: str | None) -> int:
    """Load config, build boundaries and run the loop."""
    try:
        config = load_config(config_path)
    except ConfigValidationError as e:
        for error in e.errors:
            logger.error(f"Config: {error}")
        return 1

    try:
        loop = build_loop(config)
    except BoundaryFatalError as e:
        logger.error(f"Startup failed: {e}")
        return 1

    _setup_signal_handlers()

    try:
        reason = loop.run(_shutdown_signal)
    except BoundaryFatalError as e:
        logger.error(f"Fatal error in presence loop: {e}", exc_info=True)
        return 1

    logger.info(f"Stopped: {reason}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main orchestrator function."""
    args = parse_args(argv)
    setup_logging(quiet=args.quiet or args.validate)

    if args.validate:
        sys.exit(run_validate(args.config))

    sys.exit(run(args.config))


if __name__ == "__main__":
    main()
