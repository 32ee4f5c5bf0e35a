"""
Detection Pipeline - post-processing for one tick.

raw outputs -> TensorView -> candidates -> frame boxes -> NMS -> DetectionSet
"""

import logging
from collections.abc import Sequence

import numpy as np

from ..models import Detection, DetectionSet, FrameInfo
from ..utils.constants import DEFAULT_CONF_THRESH, DEFAULT_NMS_THRESH
from .decoder import decode_candidates
from .mapper import CoordinateMapper
from .suppressor import suppress
from .tensor import TensorView

logger = logging.getLogger(__name__)


class DetectionPipeline:
    """
    Decodes, maps and suppresses one inference result.

    Raises DecodeError for malformed output; nothing is returned for a
    partially decoded tensor.
    """

    def __init__(
        self,
        mapper: CoordinateMapper | None = None,
        conf_thresh: float = DEFAULT_CONF_THRESH,
        nms_thresh: float = DEFAULT_NMS_THRESH,
    ):
        self.mapper = mapper or CoordinateMapper()
        self.conf_thresh = conf_thresh
        self.nms_thresh = nms_thresh

    def process(
        self, outputs: Sequence[np.ndarray], frame: FrameInfo
    ) -> DetectionSet:
        tensor = TensorView.from_outputs(outputs)
        candidates = decode_candidates(tensor, self.conf_thresh)

        boxes = [self.mapper.map(c.box, frame) for c in candidates]
        scores = [c.composite_score for c in candidates]
        kept = suppress(boxes, scores, self.conf_thresh, self.nms_thresh)

        detections = tuple(
            Detection.from_frame_box(
                boxes[i], candidates[i].class_index, candidates[i].composite_score
            )
            for i in kept
        )

        if detections:
            logger.debug(
                f"{len(candidates)} candidates -> {len(detections)} detections"
            )
        return DetectionSet(detections)
