"""
Presence Loop - the single-threaded control loop.

One tick: sleep -> acquire frame -> inference -> post-process -> presence
update -> brightness dispatch. Only one tick is ever in flight, so the
presence state needs no locking.

Error policy:
- BoundaryFatalError propagates and ends the loop
- DecodeError skips the tick and leaves presence state untouched
- ActuatorError is isolated per device by dispatch_brightness
"""

import logging
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from threading import Event

from ..actuators import build_actuator, dispatch_brightness
from ..config import Config
from ..errors import BoundaryFatalError, DecodeError
from ..models import BrightnessActuator, FrameInfo, FrameSource, InferenceEngine
from ..utils.constants import INFERENCE_WINDOW_SIZE, STATUS_REPORT_INTERVAL
from ..utils.timeouts import CallTimeout, call_with_timeout
from .camera import CameraSource
from .inference import OnnxInferenceEngine
from .mapper import CoordinateMapper
from .pipeline import DetectionPipeline
from .presence import PresenceController

logger = logging.getLogger(__name__)


@dataclass
class LoopStats:
    """Counters reported periodically and on exit."""

    ticks: int = 0
    skipped_ticks: int = 0
    transitions: int = 0
    actuator_failures: int = 0
    inference_ms: deque = field(
        default_factory=lambda: deque(maxlen=INFERENCE_WINDOW_SIZE)
    )

    @property
    def avg_inference_ms(self) -> float:
        if not self.inference_ms:
            return 0.0
        return sum(self.inference_ms) / len(self.inference_ms)


class PresenceLoop:
    """
    Drives the presence controller from camera frames.

    Args:
        camera: Capture boundary
        engine: Inference boundary
        pipeline: Post-processing for raw outputs
        controller: Presence state machine (owned by this loop)
        actuator: Brightness boundary
        poll_interval: Seconds to sleep before each tick
        boundary_timeout: Per-call limit for camera and inference, or None
        status_interval: Log a status line every N ticks
    """

    def __init__(
        self,
        camera: FrameSource,
        engine: InferenceEngine,
        pipeline: DetectionPipeline,
        controller: PresenceController,
        actuator: BrightnessActuator,
        poll_interval: float = 0.1,
        boundary_timeout: float | None = None,
        status_interval: int = STATUS_REPORT_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.camera = camera
        self.engine = engine
        self.pipeline = pipeline
        self.controller = controller
        self.actuator = actuator
        self.poll_interval = poll_interval
        self.boundary_timeout = boundary_timeout
        self.status_interval = status_interval
        self._sleep = sleep
        self._clock = clock
        self.stats = LoopStats()
        # Set when a timed-out read may still be running inside the camera
        self._camera_abandoned = False

    def run(self, shutdown_event: Event | None = None) -> str:
        """
        Run ticks until the stream ends or shutdown is requested.

        Returns:
            Reason for stopping ('end_of_stream', 'signal', 'interrupted')

        Raises:
            BoundaryFatalError: If the camera or inference engine fails
        """
        logger.info(
            f"Presence loop started (mode={self.controller.mode.value}, "
            f"poll={self.poll_interval * 1000:.0f}ms)"
        )
        reason = "end_of_stream"
        try:
            while True:
                if shutdown_event is not None and shutdown_event.is_set():
                    logger.info("Shutdown signal received")
                    reason = "signal"
                    break
                if not self.tick():
                    break
        except KeyboardInterrupt:
            logger.info("Presence loop stopped by user")
            reason = "interrupted"
        finally:
            self._release_camera()
            self._log_final_stats()
        return reason

    def tick(self) -> bool:
        """
        Run one tick.

        Returns:
            False when the capture stream has ended, True otherwise
        """
        self._sleep(self.poll_interval)

        frame = self._bounded(self.camera.acquire_frame, holds_camera=True)
        if frame is None:
            return False
        self.stats.ticks += 1

        start = time.perf_counter()
        outputs = self._bounded(self.engine.infer, frame.pixels)
        self.stats.inference_ms.append((time.perf_counter() - start) * 1000)

        try:
            detections = self.pipeline.process(
                outputs, FrameInfo(width=frame.width, height=frame.height)
            )
        except DecodeError as e:
            self.stats.skipped_ticks += 1
            logger.warning(f"Skipping tick {self.stats.ticks}: {e}")
            return True

        command = self.controller.update(detections, self._clock())
        if command is not None:
            self.stats.transitions += 1
            result = dispatch_brightness(self.actuator, command)
            self.stats.actuator_failures += len(result.failed)

        if self.stats.ticks % self.status_interval == 0:
            self._log_status()
        return True

    def _bounded(self, func, *args, holds_camera: bool = False):
        try:
            return call_with_timeout(func, self.boundary_timeout, *args)
        except CallTimeout as e:
            if holds_camera:
                self._camera_abandoned = True
            raise BoundaryFatalError(str(e)) from e

    def _release_camera(self) -> None:
        # VideoCapture is not thread-safe; never release under a running read
        if self._camera_abandoned:
            logger.warning("Camera release skipped: a timed-out read is still running")
            return
        self.camera.release()

    def _log_status(self) -> None:
        logger.info(
            f"Tick {self.stats.ticks} | mode={self.controller.mode.value} | "
            f"skipped={self.stats.skipped_ticks} | "
            f"inference={self.stats.avg_inference_ms:.1f}ms"
        )

    def _log_final_stats(self) -> None:
        logger.info(
            f"Complete: {self.stats.ticks} ticks, {self.stats.skipped_ticks} skipped, "
            f"{self.stats.transitions} transitions, "
            f"{self.stats.actuator_failures} actuator failures"
        )


def build_loop(config: Config) -> PresenceLoop:
    """
    Create every boundary and the loop from a validated config.

    Raises:
        BoundaryFatalError: If the model or camera cannot be opened
    """
    detection = config.detection
    presence = config.presence

    engine = OnnxInferenceEngine(
        detection.model_file, detection.input_width, detection.input_height
    )
    camera = CameraSource(
        config.camera.source,
        config.camera.max_reconnect_attempts,
        config.camera.reconnect_delay,
    )

    pipeline = DetectionPipeline(
        mapper=CoordinateMapper(detection.input_width, detection.input_height),
        conf_thresh=detection.conf_thresh,
        nms_thresh=detection.nms_thresh,
    )
    controller = PresenceController(
        hysteresis_window=presence.hysteresis_window_seconds,
        human_class_index=detection.human_class_index,
        active_brightness=presence.active_brightness,
        power_saving_brightness=presence.power_saving_brightness,
    )

    return PresenceLoop(
        camera=camera,
        engine=engine,
        pipeline=pipeline,
        controller=controller,
        actuator=build_actuator(config.actuator),
        poll_interval=config.runtime.poll_interval_ms / 1000,
        boundary_timeout=config.runtime.boundary_timeout_seconds,
        status_interval=config.runtime.status_report_interval,
    )
