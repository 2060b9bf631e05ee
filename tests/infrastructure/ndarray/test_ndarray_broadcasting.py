from unittest import TestCase
import unittest

import numpy as np

from src.keynd.domain._dtype import DType
from src.keynd.domain._errors import BroadcastError
from src.keynd.infrastructure.ndarray import NDArray, from_slice, from_slice_float64


class TestBroadcastTo(TestCase):

    def test_row_vector_to_matrix(self):
        row = from_slice_float64([1, 2, 3])
        out = row.broadcast_to((2, 3))
        self.assertEqual(out.shape, (2, 3))
        self.assertEqual(out.tolist(), [[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]])

    def test_matches_numpy(self):
        cases = [((3, 1), (3, 4)), ((1, 4), (2, 3, 4)), ((2, 1, 3), (2, 5, 3)), ((1,), (4,))]
        for src_shape, target in cases:
            ref = np.arange(int(np.prod(src_shape)), dtype=np.float64).reshape(src_shape)
            out = NDArray.from_numpy(ref).broadcast_to(target)
            np.testing.assert_array_equal(out.to_numpy(), np.broadcast_to(ref, target))

    def test_broadcast_copies_and_is_contiguous(self):
        col = from_slice_float64([1, 2], 2, 1)
        out = col.broadcast_to((2, 3))
        self.assertEqual(out.strides, (24, 8))
        out.set_float64(9.0, 0, 2)
        self.assertEqual(out.get_float64(0, 0), 1.0)
        self.assertEqual(col.get_float64(0, 0), 1.0)

    def test_elements_are_not_rounded(self):
        big = 2**60 + 3
        arr = from_slice([big], 1, dtype=DType.INT64)
        out = arr.broadcast_to((2, 2))
        self.assertEqual(out.to_list_int64(), [big] * 4)

    def test_incompatible_axis(self):
        with self.assertRaises(BroadcastError) as ctx:
            from_slice_float64([1, 2, 3]).broadcast_to((4,))
        self.assertEqual(ctx.exception.shape_a, (3,))
        self.assertEqual(ctx.exception.shape_b, (4,))

    def test_more_source_dims_than_target(self):
        with self.assertRaises(BroadcastError):
            NDArray((2, 3)).broadcast_to((3,))

    def test_empty_source(self):
        self.assertEqual(NDArray((0,)).broadcast_to((2, 0)).shape, (2, 0))
        with self.assertRaises(BroadcastError):
            NDArray(()).broadcast_to((2, 2))


class TestBinaryBroadcasting(TestCase):

    def test_matrix_plus_row(self):
        a = from_slice_float64([1, 2, 3, 4, 5, 6], 2, 3)
        b = from_slice_float64([10, 20, 30], 3)
        out = a.add(b)
        self.assertEqual(out.shape, (2, 3))
        self.assertEqual(out.tolist(), [[11.0, 22.0, 33.0], [14.0, 25.0, 36.0]])

    def test_column_times_row(self):
        col = from_slice_float64([1, 2, 3], 3, 1)
        row = from_slice_float64([1, 10], 1, 2)
        out = col * row
        np.testing.assert_array_equal(
            out.to_numpy(), np.array([[1, 2, 3]]).T * np.array([[1, 10]])
        )

    def test_both_sides_broadcast(self):
        a = NDArray.from_numpy(np.arange(4.0).reshape(4, 1, 1))
        b = NDArray.from_numpy(np.arange(6.0).reshape(2, 3))
        out = a - b
        self.assertEqual(out.shape, (4, 2, 3))
        np.testing.assert_array_equal(
            out.to_numpy(), np.arange(4.0).reshape(4, 1, 1) - np.arange(6.0).reshape(2, 3)
        )

    def test_incompatible_shapes(self):
        a = NDArray((2, 3))
        b = NDArray((4, 5))
        with self.assertRaises(BroadcastError) as ctx:
            a.add(b)
        self.assertEqual(ctx.exception.shape_a, (2, 3))
        self.assertEqual(ctx.exception.shape_b, (4, 5))


if __name__ == "__main__":
    unittest.main()
