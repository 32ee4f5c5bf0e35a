"""
Tests for tensor view and candidate decoding
"""

import unittest

import numpy as np

from presence_dimmer.core.decoder import decode_candidates
from presence_dimmer.core.tensor import TensorView
from presence_dimmer.errors import DecodeError
from presence_dimmer.models import NetworkBox

from fakes import make_tensor, person_row


class TestTensorView(unittest.TestCase):
    """Test shape checks and read-only access."""

    def test_batched_tensor_is_squeezed(self):
        """Test a (1, rows, cols) tensor is viewed as (rows, cols)."""
        view = TensorView(make_tensor([person_row(), person_row()]))

        self.assertEqual(view.shape, (2, 7))
        self.assertEqual(view.num_classes, 2)

    def test_unbatched_tensor(self):
        """Test a plain 2D tensor is accepted."""
        view = TensorView(make_tensor([person_row()], batched=False))

        self.assertEqual(view.rows, 1)
        self.assertEqual(view.cols, 7)

    def test_view_is_read_only(self):
        """Test writes through the view are rejected and the source is untouched."""
        source = make_tensor([person_row()], batched=False)
        view = TensorView(source)

        with self.assertRaises(ValueError):
            view.row(0)[4] = 0.0

        self.assertTrue(source.flags.writeable)
        self.assertAlmostEqual(float(source[0, 4]), 0.9, places=5)

    def test_bounds_checked_access(self):
        """Test out-of-range element and row access raise IndexError."""
        view = TensorView(make_tensor([person_row()]))

        self.assertAlmostEqual(view.at(0, 4), 0.9, places=5)
        with self.assertRaises(IndexError):
            view.at(1, 0)
        with self.assertRaises(IndexError):
            view.at(0, 7)
        with self.assertRaises(IndexError):
            view.row(-1)

    def test_non_contiguous_tensor(self):
        """Test a transposed (column-major) buffer decodes like a contiguous one."""
        contiguous = make_tensor([person_row(), person_row(objectness=0.5)], batched=False)
        strided = np.asfortranarray(contiguous)

        self.assertFalse(strided.flags.c_contiguous)
        self.assertEqual(
            decode_candidates(TensorView(strided), 0.1),
            decode_candidates(TensorView(contiguous), 0.1),
        )

    def test_too_few_columns(self):
        """Test a tensor with fewer than 5 columns is a DecodeError."""
        with self.assertRaises(DecodeError):
            TensorView(np.zeros((3, 4), dtype=np.float32))

    def test_no_class_columns(self):
        """Test a tensor with only geometry and objectness is a DecodeError."""
        with self.assertRaises(DecodeError):
            TensorView(np.zeros((3, 5), dtype=np.float32))

    def test_zero_rows(self):
        """Test an empty tensor is a DecodeError."""
        with self.assertRaises(DecodeError):
            TensorView(np.zeros((1, 0, 85), dtype=np.float32))

    def test_wrong_rank(self):
        """Test 1D and 4D tensors are rejected."""
        with self.assertRaises(DecodeError):
            TensorView(np.zeros(85, dtype=np.float32))
        with self.assertRaises(DecodeError):
            TensorView(np.zeros((1, 1, 3, 85), dtype=np.float32))

    def test_batch_larger_than_one(self):
        """Test a batch of two is rejected."""
        with self.assertRaises(DecodeError):
            TensorView(np.zeros((2, 3, 85), dtype=np.float32))

    def test_no_outputs(self):
        """Test an empty output list is a DecodeError."""
        with self.assertRaises(DecodeError):
            TensorView.from_outputs([])

    def test_first_output_is_used(self):
        """Test only the first output tensor is interpreted."""
        first = make_tensor([person_row()])
        second = np.zeros((2,), dtype=np.float32)

        view = TensorView.from_outputs([first, second])

        self.assertEqual(view.shape, (1, 7))


class TestDecodeCandidates(unittest.TestCase):
    """Test decoding rows into candidates."""

    def test_single_person_row(self):
        """Test objectness 0.9 with class scores [0.9, 0.1] gives class 0 at 0.81."""
        tensor = TensorView(make_tensor([[320, 320, 100, 100, 0.9, 0.9, 0.1]]))

        candidates = decode_candidates(tensor, conf_thresh=0.1)

        self.assertEqual(len(candidates), 1)
        self.assertEqual(candidates[0].class_index, 0)
        self.assertAlmostEqual(candidates[0].composite_score, 0.81, places=5)

    def test_box_is_unmodified(self):
        """Test geometry columns are copied through as-is."""
        tensor = TensorView(make_tensor([[12.5, 40.0, 8.0, 16.0, 0.6, 0.2, 0.8]]))

        candidate = decode_candidates(tensor, conf_thresh=0.1)[0]

        self.assertEqual(candidate.box, NetworkBox(12.5, 40.0, 8.0, 16.0))
        self.assertEqual(candidate.class_index, 1)

    def test_low_objectness_rows_are_skipped(self):
        """Test rows with objectness below the threshold emit nothing."""
        rows = [
            person_row(objectness=0.05),
            person_row(cx=100.0, objectness=0.5),
            person_row(objectness=0.0999),
        ]
        tensor = TensorView(make_tensor(rows))

        candidates = decode_candidates(tensor, conf_thresh=0.1)

        self.assertEqual(len(candidates), 1)
        self.assertEqual(candidates[0].box.cx, 100.0)

    def test_objectness_at_threshold_is_kept(self):
        """Test objectness equal to the threshold passes the filter."""
        tensor = TensorView(make_tensor([person_row(objectness=0.5)]))

        self.assertEqual(len(decode_candidates(tensor, conf_thresh=0.5)), 1)

    def test_raw_class_scores_do_not_gate_rows(self):
        """Test a row is decoded from objectness alone, even with tiny class scores."""
        tensor = TensorView(make_tensor([[10, 10, 5, 5, 0.9, 0.01, 0.02]]))

        candidates = decode_candidates(tensor, conf_thresh=0.1)

        self.assertEqual(len(candidates), 1)
        self.assertAlmostEqual(candidates[0].composite_score, 0.018, places=5)

    def test_tie_break_picks_lowest_class(self):
        """Test equal top class scores resolve to the lowest index."""
        tensor = TensorView(make_tensor([[10, 10, 5, 5, 0.8, 0.3, 0.7, 0.7]]))

        candidate = decode_candidates(tensor, conf_thresh=0.1)[0]

        self.assertEqual(candidate.class_index, 1)

    def test_all_rows_filtered(self):
        """Test an all-background tensor decodes to no candidates."""
        tensor = TensorView(make_tensor([person_row(objectness=0.0)] * 3))

        self.assertEqual(decode_candidates(tensor, conf_thresh=0.1), [])

    def test_non_finite_box_is_decode_error(self):
        """Test a kept row with a NaN or infinite coordinate raises DecodeError."""
        for bad in (float("nan"), float("inf"), float("-inf")):
            with self.subTest(value=bad):
                tensor = TensorView(make_tensor([[bad, 320, 100, 100, 0.9, 0.9, 0.1]]))

                with self.assertRaises(DecodeError):
                    decode_candidates(tensor, conf_thresh=0.1)

    def test_non_finite_class_score_is_decode_error(self):
        """Test a kept row with a NaN class score raises DecodeError."""
        tensor = TensorView(make_tensor([[320, 320, 100, 100, 0.9, float("nan"), 0.1]]))

        with self.assertRaises(DecodeError):
            decode_candidates(tensor, conf_thresh=0.1)

    def test_non_finite_filtered_row_is_ignored(self):
        """Test garbage in a row below the objectness threshold is never read."""
        rows = [
            [float("nan"), float("inf"), 1, 1, 0.0, 0.5, 0.5],
            person_row(cx=100.0),
        ]
        tensor = TensorView(make_tensor(rows))

        candidates = decode_candidates(tensor, conf_thresh=0.1)

        self.assertEqual([c.box.cx for c in candidates], [100.0])

    def test_row_order_is_preserved(self):
        """Test candidates come out in tensor row order."""
        rows = [person_row(cx=float(i), objectness=0.2 + i * 0.1) for i in range(4)]
        tensor = TensorView(make_tensor(rows))

        candidates = decode_candidates(tensor, conf_thresh=0.1)

        self.assertEqual([c.box.cx for c in candidates], [0.0, 1.0, 2.0, 3.0])


if __name__ == "__main__":
    unittest.main()
