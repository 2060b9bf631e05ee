from unittest import TestCase
import math
import unittest

import numpy as np

from src.keynd.domain._dtype import DType
from src.keynd.domain._errors import UnsupportedDTypeError
from src.keynd.infrastructure.dtype._codecs import (
    ElementCodec,
    as_dtype,
    from_numpy_dtype,
    get_codec,
    to_numpy_dtype,
)


def _roundtrip(dtype: DType, value):
    codec = get_codec(dtype)
    buf = bytearray(codec.itemsize)
    codec.encode(buf, 0, value)
    return codec.decode(buf, 0)


class TestCodecRegistry(TestCase):

    def test_every_dtype_has_a_codec(self):
        self.assertEqual(set(ElementCodec.available()), set(DType))
        for dt in DType:
            codec = get_codec(dt)
            self.assertIs(codec.dtype, dt)
            self.assertEqual(codec.itemsize, dt.itemsize)

    def test_duplicate_registration_is_rejected(self):
        with self.assertRaises(ValueError):

            @ElementCodec.register(DType.FLOAT64)
            class _Dup(ElementCodec):
                def decode(self, buffer, offset):
                    return 0.0

                def encode(self, buffer, offset, value):
                    pass

    def test_codecs_are_shared_instances(self):
        self.assertIs(get_codec(DType.INT32), get_codec(DType.INT32))


class TestCodecConversions(TestCase):

    def test_float64_bytes_are_little_endian_ieee(self):
        codec = get_codec(DType.FLOAT64)
        buf = bytearray(8)
        codec.encode(buf, 0, 1.5)
        self.assertEqual(bytes(buf), np.array([1.5], dtype="<f8").tobytes())

    def test_offsets_address_individual_elements(self):
        codec = get_codec(DType.INT16)
        buf = bytearray(6)
        for i, v in enumerate([7, -8, 300]):
            codec.encode(buf, i * 2, v)
        self.assertEqual(np.frombuffer(bytes(buf), dtype="<i2").tolist(), [7, -8, 300])
        self.assertEqual(codec.decode(buf, 2), -8)

    def test_bool_nonzero_is_true(self):
        self.assertIs(_roundtrip(DType.BOOL, 0), False)
        self.assertIs(_roundtrip(DType.BOOL, 0.0), False)
        self.assertIs(_roundtrip(DType.BOOL, 2), True)
        self.assertIs(_roundtrip(DType.BOOL, -0.5), True)
        self.assertIs(_roundtrip(DType.BOOL, math.nan), True)

    def test_integer_truncates_toward_zero(self):
        self.assertEqual(_roundtrip(DType.INT32, 2.9), 2)
        self.assertEqual(_roundtrip(DType.INT32, -2.9), -2)
        self.assertEqual(_roundtrip(DType.UINT8, 7.99), 7)

    def test_integer_wraps_modulo_width(self):
        self.assertEqual(_roundtrip(DType.INT8, 300), 44)
        self.assertEqual(_roundtrip(DType.INT8, 128), -128)
        self.assertEqual(_roundtrip(DType.UINT8, -1), 255)
        self.assertEqual(_roundtrip(DType.UINT16, 65536 + 5), 5)
        self.assertEqual(_roundtrip(DType.INT64, 2**63), -(2**63))
        self.assertEqual(_roundtrip(DType.UINT64, -1), 2**64 - 1)

    def test_integer_rejects_non_finite(self):
        for bad in (math.nan, math.inf, -math.inf):
            with self.assertRaises(ValueError):
                _roundtrip(DType.INT64, bad)

    def test_float32_rounds(self):
        self.assertEqual(_roundtrip(DType.FLOAT32, 0.1), float(np.float32(0.1)))
        self.assertEqual(_roundtrip(DType.FLOAT32, 1e40), math.inf)

    def test_complex_accepts_real_and_complex(self):
        self.assertEqual(_roundtrip(DType.COMPLEX128, 3), 3 + 0j)
        self.assertEqual(_roundtrip(DType.COMPLEX128, 1 - 2j), 1 - 2j)
        self.assertEqual(_roundtrip(DType.COMPLEX64, 0.5 + 0.25j), 0.5 + 0.25j)

    def test_complex_into_real_dtype_is_rejected(self):
        for dt in (DType.BOOL, DType.INT32, DType.FLOAT64):
            with self.assertRaises(UnsupportedDTypeError):
                _roundtrip(dt, 1 + 1j)

    def test_complex_has_no_real_accessors(self):
        codec = get_codec(DType.COMPLEX128)
        buf = bytearray(16)
        codec.encode(buf, 0, 1 + 2j)
        with self.assertRaises(UnsupportedDTypeError):
            codec.to_float(buf, 0)
        with self.assertRaises(UnsupportedDTypeError):
            codec.to_int(buf, 0)

    def test_to_int_from_float(self):
        codec = get_codec(DType.FLOAT64)
        buf = bytearray(8)
        codec.encode(buf, 0, -3.7)
        self.assertEqual(codec.to_int(buf, 0), -3)
        codec.encode(buf, 0, math.nan)
        with self.assertRaises(ValueError):
            codec.to_int(buf, 0)

    def test_non_number_is_rejected(self):
        with self.assertRaises(TypeError):
            _roundtrip(DType.FLOAT64, "1.0")


class TestVectorizedEncoding(TestCase):

    def test_encode_array_matches_scalar_encode(self):
        values = [0.0, 1.9, -1.9, 255.5, 256.0, -129.0, 1e3]
        for dt in (DType.BOOL, DType.INT8, DType.UINT8, DType.INT64, DType.FLOAT32):
            codec = get_codec(dt)
            expected = bytearray(len(values) * codec.itemsize)
            for i, v in enumerate(values):
                codec.encode(expected, i * codec.itemsize, v)
            self.assertEqual(
                codec.encode_array(np.array(values)), bytes(expected), dt
            )

    def test_encode_array_integers_wrap(self):
        codec = get_codec(DType.UINT8)
        out = codec.encode_array(np.array([-1, 256, 511], dtype=np.int64))
        self.assertEqual(list(out), [255, 0, 255])

    def test_encode_array_rejects_nan_for_integers(self):
        with self.assertRaises(ValueError):
            get_codec(DType.INT32).encode_array(np.array([1.0, math.nan]))

    def test_decode_array_copies(self):
        codec = get_codec(DType.FLOAT64)
        buf = bytearray(codec.encode_array([1.0, 2.0]))
        values = codec.decode_array(buf, 2)
        values[0] = 99.0
        self.assertEqual(codec.decode(buf, 0), 1.0)
        self.assertEqual(codec.decode_array(buf, 0).size, 0)


class TestDTypeCoercion(TestCase):

    def test_as_dtype(self):
        self.assertIs(as_dtype(DType.INT8), DType.INT8)
        self.assertIs(as_dtype("float32"), DType.FLOAT32)
        self.assertIs(as_dtype(np.float64), DType.FLOAT64)
        self.assertIs(as_dtype("<i4"), DType.INT32)
        self.assertIs(as_dtype(np.bool_), DType.BOOL)
        self.assertIs(as_dtype(np.complex64), DType.COMPLEX64)

    def test_as_dtype_rejects_unknown(self):
        with self.assertRaises(UnsupportedDTypeError):
            as_dtype(np.float16)
        with self.assertRaises(UnsupportedDTypeError):
            as_dtype(object())

    def test_numpy_dtype_mapping_roundtrip(self):
        for dt in DType:
            self.assertIs(from_numpy_dtype(to_numpy_dtype(dt)), dt)
        self.assertIs(from_numpy_dtype(np.dtype(">f8")), DType.FLOAT64)


if __name__ == "__main__":
    unittest.main()
