from unittest import TestCase
import copy
import math
import unittest

import numpy as np

from src.keynd.domain._dtype import DType
from src.keynd.domain._errors import (
    IndexOutOfBoundsError,
    ShapeError,
    UnsupportedDTypeError,
)
from src.keynd.domain._ndarray import INDArray
from src.keynd.infrastructure.ndarray import NDArray, from_slice, from_slice_float64


class TestNDArrayConstruction(TestCase):

    def test_zero_initialized_buffer(self):
        arr = NDArray((2, 3))
        self.assertEqual(arr.shape, (2, 3))
        self.assertIs(arr.dtype, DType.FLOAT64)
        self.assertEqual(arr.size, 6)
        self.assertEqual(arr.ndim, 2)
        self.assertEqual(arr.itemsize, 8)
        self.assertEqual(arr.nbytes, 48)
        self.assertEqual(arr.tobytes(), bytes(48))

    def test_strides_are_c_contiguous(self):
        for dt in (DType.FLOAT64, DType.INT16, DType.BOOL, DType.COMPLEX128):
            arr = NDArray((2, 3, 4), dt)
            expected = np.zeros((2, 3, 4), dtype=dt.value).strides
            self.assertEqual(arr.strides, expected)

    def test_buffer_length_invariant(self):
        for dt in DType:
            arr = NDArray((3, 5), dt)
            self.assertEqual(arr.nbytes, arr.size * dt.itemsize)

    def test_buffer_is_copied(self):
        raw = bytearray(np.array([1, 2], dtype="<i4").tobytes())
        arr = NDArray((2,), "int32", raw)
        raw[0] = 99
        self.assertEqual(arr.item(0), 1)
        self.assertEqual(arr.item(1), 2)

    def test_buffer_length_mismatch(self):
        with self.assertRaises(ShapeError):
            NDArray((3,), DType.INT32, bytes(8))

    def test_negative_extent_rejected(self):
        with self.assertRaises(ShapeError):
            NDArray((2, -1))

    def test_empty_shape_is_degenerate(self):
        arr = NDArray(())
        self.assertEqual(arr.size, 0)
        self.assertEqual(arr.ndim, 0)
        self.assertEqual(arr.nbytes, 0)
        self.assertEqual(arr.tolist(), [])

    def test_satisfies_protocol(self):
        self.assertIsInstance(NDArray((1,)), INDArray)

    def test_len_and_repr(self):
        arr = from_slice_float64([1, 2, 3, 4], 2, 2)
        self.assertEqual(len(arr), 2)
        self.assertEqual(
            repr(arr), "NDArray([[1.0, 2.0], [3.0, 4.0]], shape=(2, 2), dtype=float64)"
        )
        with self.assertRaises(TypeError):
            len(NDArray(()))

    def test_data_view_is_read_only(self):
        arr = from_slice_float64([1.0, 2.0])
        view = arr.data
        self.assertEqual(bytes(view), arr.tobytes())
        with self.assertRaises(TypeError):
            view[0] = 1
        arr.set_float64(5.0, 0)
        self.assertEqual(np.frombuffer(view, dtype="<f8")[0], 5.0)


class TestNDArrayElementAccess(TestCase):

    def test_negative_indices(self):
        arr = from_slice_float64([1, 2, 3, 4], 2, 2)
        self.assertEqual(arr.get_float64(-1, -1), 4.0)
        self.assertEqual(arr.get_float64(-2, -2), 1.0)
        self.assertEqual(arr.get_float64(0, -1), 2.0)

    def test_out_of_bounds(self):
        arr = NDArray((2, 3))
        with self.assertRaises(IndexOutOfBoundsError) as ctx:
            arr.get_float64(0, 3)
        self.assertEqual(ctx.exception.axis, 1)
        self.assertEqual(ctx.exception.extent, 3)
        with self.assertRaises(IndexError):
            arr.get_float64(-3, 0)

    def test_wrong_index_arity(self):
        arr = NDArray((2, 3))
        with self.assertRaises(ShapeError):
            arr.get_float64(1)
        with self.assertRaises(ShapeError):
            arr.set_float64(1.0, 0, 0, 0)

    def test_set_then_get(self):
        arr = NDArray((2, 3), DType.INT32)
        arr.set_float64(7.9, 1, 2)
        self.assertEqual(arr.get_int64(1, 2), 7)
        self.assertEqual(arr.get_float64(1, 2), 7.0)
        arr.set_int64(-5, 0, 0)
        self.assertEqual(arr.item(0, 0), -5)

    def test_set_converts_per_dtype(self):
        arr = NDArray((1,), DType.UINT8)
        arr.set_int64(-1, 0)
        self.assertEqual(arr.get_int64(0), 255)

        flags = NDArray((2,), DType.BOOL)
        flags.set_float64(math.nan, 0)
        self.assertIs(flags.item(0), True)
        self.assertIs(flags.item(1), False)

    def test_set_non_finite_into_integer_raises(self):
        arr = NDArray((1,), DType.INT64)
        with self.assertRaises(ValueError):
            arr.set_float64(math.inf, 0)

    def test_complex_accessors(self):
        arr = NDArray((2,), DType.COMPLEX128)
        arr.set_complex(1 + 2j, 0)
        self.assertEqual(arr.get_complex(0), 1 + 2j)
        self.assertEqual(arr.item(0), 1 + 2j)
        with self.assertRaises(UnsupportedDTypeError):
            arr.get_float64(0)
        with self.assertRaises(UnsupportedDTypeError):
            arr.get_int64(0)

        real = NDArray((1,))
        with self.assertRaises(UnsupportedDTypeError):
            real.set_complex(1j, 0)
        self.assertEqual(real.get_complex(0), 0j)

    def test_subscript_access(self):
        arr = from_slice_float64([1, 2, 3, 4, 5, 6], 2, 3)
        self.assertEqual(arr[1, 2], 6.0)
        self.assertEqual(arr[-1, 0], 4.0)
        arr[0, 1] = 20
        self.assertEqual(arr.get_float64(0, 1), 20.0)

        vec = from_slice_float64([7, 8, 9])
        self.assertEqual(vec[-1], 9.0)

    def test_subscript_rejects_slices(self):
        arr = from_slice_float64([1, 2, 3])
        with self.assertRaises(TypeError):
            arr[0:2]
        with self.assertRaises(TypeError):
            arr[None]


class TestNDArrayCopiesAndConversion(TestCase):

    def test_copy_is_independent(self):
        a = from_slice_float64([1, 2, 3])
        for b in (a.copy(), copy.copy(a), copy.deepcopy(a)):
            b.set_float64(99.0, 0)
            self.assertEqual(a.get_float64(0), 1.0)
            self.assertEqual(b.shape, a.shape)

    def test_astype_truncates_and_wraps(self):
        a = from_slice_float64([1.7, -1.7, 300.0])
        b = a.astype(DType.INT8)
        self.assertIs(b.dtype, DType.INT8)
        self.assertEqual(b.tolist(), [1, -1, 44])

    def test_astype_to_bool(self):
        a = from_slice_float64([0.0, 0.5, -2.0])
        self.assertEqual(a.astype("bool").tolist(), [False, True, True])

    def test_astype_same_dtype_copies(self):
        a = from_slice_float64([1.0])
        b = a.astype(DType.FLOAT64)
        b.set_float64(2.0, 0)
        self.assertEqual(a.get_float64(0), 1.0)

    def test_astype_errors(self):
        with self.assertRaises(ValueError):
            from_slice_float64([math.nan]).astype(DType.INT32)
        c = from_slice([1 + 1j], dtype=DType.COMPLEX64)
        with self.assertRaises(UnsupportedDTypeError):
            c.astype(DType.FLOAT64)

    def test_numpy_roundtrip_is_lossless(self):
        for dt in (np.int8, np.uint64, np.float32, np.complex128, np.bool_):
            src = (np.arange(6) % 3).astype(dt).reshape(2, 3)
            arr = NDArray.from_numpy(src)
            self.assertEqual(arr.shape, (2, 3))
            out = arr.to_numpy()
            self.assertEqual(out.dtype, np.dtype(dt))
            np.testing.assert_array_equal(out, src)

    def test_from_numpy_handles_big_endian_and_non_contiguous(self):
        src = np.arange(6, dtype=">i4").reshape(2, 3).T
        arr = NDArray.from_numpy(src)
        self.assertIs(arr.dtype, DType.INT32)
        np.testing.assert_array_equal(arr.to_numpy(), src)

    def test_from_numpy_zero_dim(self):
        arr = NDArray.from_numpy(np.float64(3.5))
        self.assertEqual(arr.shape, (1,))
        self.assertEqual(arr.get_float64(0), 3.5)

    def test_to_numpy_does_not_alias(self):
        arr = from_slice_float64([1.0, 2.0])
        out = arr.to_numpy()
        out[0] = 10.0
        self.assertEqual(arr.get_float64(0), 1.0)

    def test_lists(self):
        arr = from_slice_float64([1.9, -1.9, 3.0, 4.0], 2, 2)
        self.assertEqual(arr.to_list_float64(), [1.9, -1.9, 3.0, 4.0])
        self.assertEqual(arr.to_list_int64(), [1, -1, 3, 4])
        self.assertEqual(arr.tolist(), [[1.9, -1.9], [3.0, 4.0]])

        ints = from_slice([5, 6], dtype=DType.UINT16)
        self.assertEqual(ints.to_list_int64(), [5, 6])
        self.assertEqual(ints.to_list_float64(), [5.0, 6.0])

    def test_to_list_int64_rejects_nan(self):
        with self.assertRaises(ValueError):
            from_slice_float64([1.0, math.nan]).to_list_int64()


if __name__ == "__main__":
    unittest.main()
