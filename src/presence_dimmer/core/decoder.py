"""
Tensor Decoder - turns raw output rows into scored candidates.
"""

import logging

import numpy as np

from ..errors import DecodeError
from ..models import Candidate, NetworkBox
from .tensor import TensorView

logger = logging.getLogger(__name__)


def decode_candidates(tensor: TensorView, conf_thresh: float) -> list[Candidate]:
    """
    Decode every row whose objectness reaches the confidence threshold.

    The class score of each kept row is the raw class score multiplied by
    objectness. When several classes tie for the maximum, the lowest class
    index wins (np.argmax returns the first occurrence).

    Args:
        tensor: Output tensor view
        conf_thresh: Minimum objectness for a row to be considered

    Returns:
        Candidates in tensor row order

    Raises:
        DecodeError: If a kept row holds a NaN or infinite box or score
    """
    objectness = tensor.objectness()

    # Cheap early reject before the per-class scan
    kept_rows = np.flatnonzero(objectness >= conf_thresh)
    if kept_rows.size == 0:
        return []

    scaled = tensor.class_scores()[kept_rows] * objectness[kept_rows, np.newaxis]
    boxes = tensor.boxes()[kept_rows]

    finite = np.isfinite(boxes).all(axis=1) & np.isfinite(scaled).all(axis=1)
    if not finite.all():
        bad_row = int(kept_rows[np.argmin(finite)])
        raise DecodeError(
            f"Row {bad_row} holds non-finite values: {tensor.row(bad_row)}"
        )

    class_indices = np.argmax(scaled, axis=1)
    scores = scaled[np.arange(kept_rows.size), class_indices]

    candidates = []
    for (cx, cy, w, h), class_index, score in zip(boxes, class_indices, scores):
        candidates.append(
            Candidate(
                box=NetworkBox(float(cx), float(cy), float(w), float(h)),
                class_index=int(class_index),
                composite_score=float(score),
            )
        )

    logger.debug(f"Decoded {len(candidates)}/{tensor.rows} rows above {conf_thresh}")
    return candidates
