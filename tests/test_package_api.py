from unittest import TestCase
import unittest

import src.keynd as keynd
from src.keynd import linalg, random


class TestPackageSurface(TestCase):

    def test_exports_resolve(self):
        for name in keynd.__all__:
            self.assertTrue(hasattr(keynd, name), name)

    def test_dtype_aliases(self):
        self.assertIs(keynd.float64, keynd.DType.FLOAT64)
        self.assertIs(keynd.bool_, keynd.DType.BOOL)
        self.assertIs(keynd.complex64, keynd.DType.COMPLEX64)

    def test_broadcast_add_example(self):
        a = keynd.from_slice_float64([1, 2, 3, 4, 5, 6], 2, 3)
        b = keynd.from_slice_float64([10, 20, 30], 3)
        self.assertEqual((a + b).tolist(), [[11.0, 22.0, 33.0], [14.0, 25.0, 36.0]])
        self.assertEqual(keynd.broadcast_shapes(a.shape, b.shape), (2, 3))

    def test_linalg_facade(self):
        m = keynd.from_slice_float64([1, 2, 3, 0, 1, 4, 5, 6, 0], 3, 3)
        self.assertAlmostEqual(linalg.det(m), 1.0)
        with self.assertRaises(keynd.SingularMatrixError):
            linalg.inv(keynd.zeros((2, 2)))
        with self.assertRaises(keynd.DimensionError):
            linalg.matmul(keynd.zeros((2, 3)), keynd.zeros((2, 2)))

    def test_random_facade(self):
        rng = random.new(42)
        self.assertIsInstance(rng, random.Generator)
        self.assertEqual(rng.normal(0.0, 1.0, 2, 3).shape, (2, 3))

    def test_errors_catchable_as_builtins(self):
        with self.assertRaises(IndexError):
            keynd.zeros(3).get_float64(3)
        with self.assertRaises(ValueError):
            keynd.zeros(6).reshape(4, 2)
        with self.assertRaises(ValueError):
            keynd.zeros((2, 3)) + keynd.zeros((4, 5))


if __name__ == "__main__":
    unittest.main()
