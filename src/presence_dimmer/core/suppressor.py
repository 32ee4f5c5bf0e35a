"""
Greedy non-maximum suppression.

Suppression is class-agnostic: every box competes in one pool, so a
confident box of one class removes an overlapping weaker box of another.
"""

from collections.abc import Sequence

import numpy as np

from ..models import FrameBox


def _corners(boxes: Sequence[FrameBox]) -> np.ndarray:
    """(n, 4) array of x1, y1, x2, y2."""
    return np.array(
        [[b.x, b.y, b.xmax, b.ymax] for b in boxes], dtype=np.float64
    ).reshape(-1, 4)


def _iou_one_to_many(box: np.ndarray, others: np.ndarray) -> np.ndarray:
    """IoU of one corner row against each row of ``others`` (0 on empty union)."""
    x1, y1, x2, y2 = box
    ox1, oy1, ox2, oy2 = others.T

    iw = np.maximum(0, np.minimum(x2, ox2) - np.maximum(x1, ox1))
    ih = np.maximum(0, np.minimum(y2, oy2) - np.maximum(y1, oy1))
    inter = iw * ih

    area = max(0.0, x2 - x1) * max(0.0, y2 - y1)
    other_areas = np.maximum(0, ox2 - ox1) * np.maximum(0, oy2 - oy1)
    union = area + other_areas - inter
    return np.divide(inter, union, out=np.zeros_like(inter), where=union > 0)


def iou(a: FrameBox, b: FrameBox) -> float:
    """Intersection over union of two frame boxes (0 when the union is empty)."""
    corners = _corners([a, b])
    return float(_iou_one_to_many(corners[0], corners[1:])[0])


def suppress(
    boxes: Sequence[FrameBox],
    scores: Sequence[float],
    conf_thresh: float,
    nms_thresh: float,
) -> list[int]:
    """
    Select a non-redundant subset of boxes.

    Args:
        boxes: Frame-space boxes
        scores: Composite score per box
        conf_thresh: Boxes scoring below this are dropped first
        nms_thresh: Boxes whose IoU with a kept box exceeds this are removed

    Returns:
        Indices into ``boxes`` of the kept entries, highest score first
    """
    if len(boxes) != len(scores):
        raise ValueError(f"Got {len(boxes)} boxes but {len(scores)} scores")
    if not boxes:
        return []

    score_arr = np.asarray(scores, dtype=np.float64)
    corners = _corners(boxes)

    eligible = np.flatnonzero(score_arr >= conf_thresh)
    # Stable sort so equal scores keep input order
    order = eligible[np.argsort(-score_arr[eligible], kind="stable")]

    keep: list[int] = []
    while order.size > 0:
        i = order[0]
        keep.append(int(i))
        rest = order[1:]
        if rest.size == 0:
            break

        overlap = _iou_one_to_many(corners[i], corners[rest])
        order = rest[overlap <= nms_thresh]

    return keep
