from unittest import TestCase
import unittest

from src.keynd.domain._dtype import DType
from src.keynd.domain._errors import (
    AxisError,
    BroadcastError,
    DimensionError,
    IndexOutOfBoundsError,
    KeyNDError,
    ShapeError,
    SingularMatrixError,
    UnsupportedDTypeError,
    UnsupportedRankError,
)


class TestErrorHierarchy(TestCase):

    def test_all_errors_share_a_base(self):
        errors = [
            ShapeError("bad"),
            IndexOutOfBoundsError(5, 3),
            AxisError(2, 1),
            BroadcastError((2,), (3,)),
            DimensionError("matmul", "bad"),
            UnsupportedRankError("dot", [(1, 2, 3), (3,)]),
            SingularMatrixError(0, 0.0, 1e-10),
            UnsupportedDTypeError("sum", DType.COMPLEX128),
        ]
        for err in errors:
            self.assertIsInstance(err, KeyNDError)

    def test_builtin_bases(self):
        self.assertIsInstance(ShapeError("x"), ValueError)
        self.assertIsInstance(IndexOutOfBoundsError(1, 1), IndexError)
        self.assertIsInstance(AxisError(1, 1), ValueError)
        self.assertIsInstance(AxisError(1, 1), IndexError)
        self.assertIsInstance(BroadcastError((), ()), ValueError)
        self.assertIsInstance(DimensionError("op", "x"), ValueError)
        self.assertIsInstance(UnsupportedRankError("op", []), DimensionError)
        self.assertIsInstance(SingularMatrixError(0, 0.0, 1.0), ArithmeticError)
        self.assertIsInstance(UnsupportedDTypeError("op", None), TypeError)

    def test_context_attributes(self):
        err = IndexOutOfBoundsError(-7, 3, axis=1)
        self.assertEqual((err.index, err.extent, err.axis), (-7, 3, 1))
        self.assertIn("-7", str(err))
        self.assertIn("axis 1", str(err))

        err = DimensionError("matmul", "dimension mismatch", [(2, 3), (2, 2)])
        self.assertEqual(err.op, "matmul")
        self.assertEqual(err.shapes, ((2, 3), (2, 2)))
        self.assertTrue(str(err).startswith("matmul: "))

        err = UnsupportedRankError("dot", [(2, 2, 2), (2,)])
        self.assertEqual(err.ranks, (3, 1))
        self.assertIn("3D and 1D", str(err))

        err = SingularMatrixError(1, 1e-12, 1e-10)
        self.assertEqual(err.row, 1)
        self.assertEqual(err.pivot, 1e-12)
        self.assertEqual(err.tolerance, 1e-10)

        err = UnsupportedDTypeError("get_float64", DType.COMPLEX64)
        self.assertEqual(err.op, "get_float64")
        self.assertIs(err.dtype, DType.COMPLEX64)
        self.assertIn("complex64", str(err))

        err = ShapeError("mismatch", shape=[2, 3], expected=5)
        self.assertEqual(err.shape, (2, 3))
        self.assertEqual(err.expected, 5)


if __name__ == "__main__":
    unittest.main()
