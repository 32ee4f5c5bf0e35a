"""
Read-only typed view over a network output tensor.

The inference engine hands back plain arrays. Nothing here assumes the
buffer is contiguous or row-major: all access goes through numpy indexing,
which honors whatever strides the engine produced.
"""

from collections.abc import Sequence

import numpy as np

from ..errors import DecodeError
from ..utils.constants import FIRST_CLASS_COLUMN, MIN_TENSOR_COLUMNS, OBJECTNESS_COLUMN


class TensorView:
    """
    Read-only (rows, cols) view of a detection output tensor.

    Each row is one candidate: cx, cy, w, h, objectness, then one raw
    score per class.
    """

    def __init__(self, data: np.ndarray):
        array = np.asarray(data)

        if array.ndim == 3:
            if array.shape[0] != 1:
                raise DecodeError(
                    f"Expected a batch of 1, got tensor shape {array.shape}"
                )
            array = array[0]
        elif array.ndim != 2:
            raise DecodeError(f"Expected a 2D or batched 3D tensor, got {array.ndim}D")

        rows, cols = array.shape
        if rows == 0:
            raise DecodeError("Tensor has no rows")
        if cols < MIN_TENSOR_COLUMNS:
            raise DecodeError(
                f"Tensor has {cols} columns, need at least {MIN_TENSOR_COLUMNS}"
            )
        if cols == MIN_TENSOR_COLUMNS:
            raise DecodeError("Tensor has no class score columns")
        if not np.issubdtype(array.dtype, np.number):
            raise DecodeError(f"Tensor dtype {array.dtype} is not numeric")

        view = array.view()
        view.flags.writeable = False
        self._data = view

    @classmethod
    def from_outputs(cls, outputs: Sequence[np.ndarray]) -> "TensorView":
        """Wrap the first output of an inference call."""
        if outputs is None or len(outputs) == 0:
            raise DecodeError("Inference returned no output tensors")
        return cls(outputs[0])

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    @property
    def strides(self) -> tuple[int, int]:
        return self._data.strides

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def num_classes(self) -> int:
        return self.cols - FIRST_CLASS_COLUMN

    def at(self, row: int, col: int) -> float:
        """Bounds-checked element access."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"({row}, {col}) outside tensor shape {self.shape}")
        return float(self._data[row, col])

    def row(self, row: int) -> np.ndarray:
        """Bounds-checked read-only row access."""
        if not 0 <= row < self.rows:
            raise IndexError(f"Row {row} outside tensor with {self.rows} rows")
        return self._data[row]

    def objectness(self) -> np.ndarray:
        return self._data[:, OBJECTNESS_COLUMN]

    def boxes(self) -> np.ndarray:
        return self._data[:, :OBJECTNESS_COLUMN]

    def class_scores(self) -> np.ndarray:
        return self._data[:, FIRST_CLASS_COLUMN:]
