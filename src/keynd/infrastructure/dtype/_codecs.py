"""
Per-dtype element codecs and the codec registry.

Every array buffer is an untyped ``bytearray``; the meaning of its bytes is
given entirely by the array's :class:`~keynd.domain._dtype.DType`. This
module provides one :class:`ElementCodec` instance per dtype that knows how
to read (decode) and write (encode) a single element at a byte offset.

Design
------
- Codec classes are registered for one or more dtypes via a decorator-based
  registry (:meth:`ElementCodec.register`), and resolved with
  :func:`get_codec`.
- Encoding and decoding go through NumPy scalar types with explicit
  little-endian dtypes, so the byte layout is identical on every platform.
- Conversions follow a small set of fixed rules:

  * bool: any non-zero value (including NaN) is stored as ``1``;
  * integers: floats truncate toward zero, then wrap modulo ``2**bits``;
    non-finite floats cannot be stored;
  * floats: IEEE conversion (float32 rounds, overflow becomes ``inf``);
  * complex: accept any real or complex number; complex values cannot be
    stored into real dtypes.

Usage example
-------------
    codec = get_codec(DType.INT8)
    codec.encode(buf, 0, 300)      # wraps to 44
    codec.decode(buf, 0)           # -> 44
"""

from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, TypeVar

import numpy as np

from ...domain._dtype import DType
from ...domain._errors import UnsupportedDTypeError

C = TypeVar("C", bound=type)

_NUMPY_DTYPES: Dict[DType, np.dtype] = {
    DType.BOOL: np.dtype("?"),
    DType.INT8: np.dtype("<i1"),
    DType.INT16: np.dtype("<i2"),
    DType.INT32: np.dtype("<i4"),
    DType.INT64: np.dtype("<i8"),
    DType.UINT8: np.dtype("<u1"),
    DType.UINT16: np.dtype("<u2"),
    DType.UINT32: np.dtype("<u4"),
    DType.UINT64: np.dtype("<u8"),
    DType.FLOAT32: np.dtype("<f4"),
    DType.FLOAT64: np.dtype("<f8"),
    DType.COMPLEX64: np.dtype("<c8"),
    DType.COMPLEX128: np.dtype("<c16"),
}


def to_numpy_dtype(dtype: DType) -> np.dtype:
    """
    Return the little-endian NumPy dtype matching ``dtype``.
    """
    return _NUMPY_DTYPES[dtype]


def from_numpy_dtype(np_dtype: Any) -> DType:
    """
    Map a NumPy dtype (any byte order) onto the engine's :class:`DType`.

    Raises
    ------
    UnsupportedDTypeError
        If NumPy's dtype has no engine counterpart (e.g. ``float16``,
        strings or objects).
    """
    nd = np.dtype(np_dtype)
    for dtype, candidate in _NUMPY_DTYPES.items():
        if nd.kind == candidate.kind and nd.itemsize == candidate.itemsize:
            return dtype
    raise UnsupportedDTypeError("from_numpy", nd)


def as_dtype(dtype: Any) -> DType:
    """
    Coerce a dtype-like value into a :class:`DType`.

    Accepts a ``DType`` member, a canonical name (``"float64"``) or anything
    NumPy understands as a dtype (``np.float32``, ``"<i4"``).

    Raises
    ------
    UnsupportedDTypeError
        If the value does not name a supported dtype.
    """
    if isinstance(dtype, DType):
        return dtype
    if isinstance(dtype, str):
        try:
            return DType.from_name(dtype)
        except ValueError:
            pass
    try:
        nd = np.dtype(dtype)
    except TypeError as e:
        raise UnsupportedDTypeError("dtype", dtype) from e
    return from_numpy_dtype(nd)


def _as_number(value: Any) -> Any:
    """
    Normalize a Python or NumPy scalar into ``int``, ``float`` or ``complex``.
    """
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, numbers.Complex):
        return complex(value)
    raise TypeError(f"expected a number, got {type(value).__name__}")


class ElementCodec(ABC):
    """
    Abstract per-dtype element codec with a class-level registry.

    Usage
    -----
    Register:
        @ElementCodec.register(DType.FLOAT32, DType.FLOAT64)
        class FloatCodec(ElementCodec): ...

    Resolve:
        codec = ElementCodec.get(DType.FLOAT64)

    Notes
    -----
    - One codec instance exists per dtype; instances are stateless apart from
      their dtype and may be shared freely.
    - ``offset`` is always a byte offset into the buffer.
    """

    CODECS: ClassVar[Dict[DType, "ElementCodec"]] = {}

    def __init__(self, dtype: DType) -> None:
        self.dtype = dtype
        self.itemsize = dtype.itemsize
        self.np_dtype = _NUMPY_DTYPES[dtype]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.dtype})"

    @classmethod
    def register(cls, *dtypes: DType, overwrite: bool = False) -> Callable[[C], C]:
        """
        Decorator to register a codec class for one or more dtypes.

        Parameters
        ----------
        *dtypes : DType
            Dtypes handled by the decorated class. One instance is created per
            dtype.
        overwrite : bool, optional
            If False (default), raises if a dtype already has a codec.
        """
        if not dtypes:
            raise ValueError("At least one dtype must be given")

        def decorator(codec_cls: C) -> C:
            for dtype in dtypes:
                if not overwrite and dtype in cls.CODECS:
                    raise ValueError(f"Codec already registered: {dtype}")
                cls.CODECS[dtype] = codec_cls(dtype)
            return codec_cls

        return decorator

    @classmethod
    def get(cls, dtype: DType) -> "ElementCodec":
        """Get the registered codec for ``dtype``."""
        try:
            return cls.CODECS[dtype]
        except KeyError as e:
            raise UnsupportedDTypeError("codec lookup", dtype) from e

    @classmethod
    def available(cls) -> tuple[DType, ...]:
        """Return dtypes that have a registered codec."""
        return tuple(cls.CODECS)

    def _read(self, buffer: Any, offset: int) -> Any:
        return np.frombuffer(buffer, dtype=self.np_dtype, count=1, offset=offset)[0]

    def _write(self, buffer: bytearray, offset: int, scalar: Any) -> None:
        buffer[offset : offset + self.itemsize] = scalar.tobytes()

    @abstractmethod
    def decode(self, buffer: Any, offset: int) -> Any:
        """
        Read the element at ``offset`` as a native Python value.

        Returns
        -------
        bool | int | float | complex
            The decoded element.
        """
        raise NotImplementedError

    @abstractmethod
    def encode(self, buffer: bytearray, offset: int, value: Any) -> None:
        """
        Convert ``value`` to this dtype and write it at ``offset``.

        Raises
        ------
        ValueError
            If the value cannot be represented (e.g. NaN into an integer dtype).
        UnsupportedDTypeError
            If a complex value is written into a real dtype.
        """
        raise NotImplementedError

    def to_float(self, buffer: Any, offset: int) -> float:
        """Read the element at ``offset`` converted to a Python float."""
        return float(self.decode(buffer, offset))

    def to_int(self, buffer: Any, offset: int) -> int:
        """Read the element at ``offset`` converted to a Python int."""
        return int(self.decode(buffer, offset))

    def decode_array(self, buffer: Any, count: int) -> np.ndarray:
        """
        Decode the first ``count`` elements of ``buffer`` into a new 1-D array.

        Returns
        -------
        np.ndarray
            A writable copy with this codec's NumPy dtype.
        """
        if count == 0:
            return np.empty(0, dtype=self.np_dtype)
        return np.frombuffer(buffer, dtype=self.np_dtype, count=count).copy()

    def encode_array(self, values: Any) -> bytes:
        """
        Encode a sequence of values, in order, using the scalar rules.

        Subclasses override this with vectorized conversions that produce the
        same bytes as calling :meth:`encode` element by element.
        """
        flat = np.asarray(values).reshape(-1)
        out = bytearray(flat.size * self.itemsize)
        for i, value in enumerate(flat.tolist()):
            self.encode(out, i * self.itemsize, value)
        return bytes(out)

    def _reject_complex(self, value: Any) -> Any:
        number = _as_number(value)
        if isinstance(number, complex):
            raise UnsupportedDTypeError("encode complex value", self.dtype)
        return number

    def _real_array(self, values: Any) -> np.ndarray:
        arr = np.asarray(values).reshape(-1)
        if arr.dtype.kind == "c":
            raise UnsupportedDTypeError("encode complex value", self.dtype)
        return arr


@ElementCodec.register(DType.BOOL)
class BoolCodec(ElementCodec):
    """Single-byte boolean codec; any non-zero value encodes as ``1``."""

    def decode(self, buffer: Any, offset: int) -> bool:
        return buffer[offset] != 0

    def encode(self, buffer: bytearray, offset: int, value: Any) -> None:
        number = self._reject_complex(value)
        # NaN compares unequal to zero, so it encodes as True
        buffer[offset] = 1 if number != 0 else 0

    def encode_array(self, values: Any) -> bytes:
        arr = self._real_array(values)
        if arr.dtype.kind == "O":
            return super().encode_array(arr)
        return (arr != 0).astype(self.np_dtype).tobytes()


@ElementCodec.register(
    DType.INT8,
    DType.INT16,
    DType.INT32,
    DType.INT64,
    DType.UINT8,
    DType.UINT16,
    DType.UINT32,
    DType.UINT64,
)
class IntegerCodec(ElementCodec):
    """
    Fixed-width integer codec.

    Floats are truncated toward zero; out-of-range values wrap modulo
    ``2**bits`` (two's complement for signed dtypes).
    """

    def __init__(self, dtype: DType) -> None:
        super().__init__(dtype)
        self._bits = 8 * self.itemsize
        self._signed = dtype.is_signed_int()

    def wrap(self, value: int) -> int:
        """Wrap an arbitrary Python int into this dtype's range."""
        v = value & ((1 << self._bits) - 1)
        if self._signed and v >= 1 << (self._bits - 1):
            v -= 1 << self._bits
        return v

    def decode(self, buffer: Any, offset: int) -> int:
        return int(self._read(buffer, offset))

    def encode(self, buffer: bytearray, offset: int, value: Any) -> None:
        number = self._reject_complex(value)
        if isinstance(number, float):
            if not math.isfinite(number):
                raise ValueError(f"cannot convert {number!r} to {self.dtype}")
            number = int(number)
        self._write(buffer, offset, self.np_dtype.type(self.wrap(number)))

    def encode_array(self, values: Any) -> bytes:
        arr = self._real_array(values)
        if arr.dtype.kind in "iub":
            # fixed-width integer casts wrap modulo 2**bits
            return arr.astype(self.np_dtype).tobytes()
        if arr.dtype.kind == "f":
            bad = arr[~np.isfinite(arr)]
            if bad.size:
                raise ValueError(f"cannot convert {float(bad[0])!r} to {self.dtype}")
            wrapped = [self.wrap(int(v)) for v in np.trunc(arr).tolist()]
            return np.array(wrapped, dtype=self.np_dtype).tobytes()
        return super().encode_array(arr)


@ElementCodec.register(DType.FLOAT32, DType.FLOAT64)
class FloatCodec(ElementCodec):
    """IEEE-754 binary32/binary64 codec."""

    def decode(self, buffer: Any, offset: int) -> float:
        return float(self._read(buffer, offset))

    def encode(self, buffer: bytearray, offset: int, value: Any) -> None:
        number = self._reject_complex(value)
        with np.errstate(over="ignore"):
            scalar = self.np_dtype.type(float(number))
        self._write(buffer, offset, scalar)

    def encode_array(self, values: Any) -> bytes:
        arr = self._real_array(values)
        if arr.dtype.kind == "O":
            return super().encode_array(arr)
        with np.errstate(over="ignore"):
            return arr.astype(self.np_dtype).tobytes()

    def to_int(self, buffer: Any, offset: int) -> int:
        value = self.decode(buffer, offset)
        if not math.isfinite(value):
            raise ValueError(f"cannot convert {value!r} to int64")
        return int(value)


@ElementCodec.register(DType.COMPLEX64, DType.COMPLEX128)
class ComplexCodec(ElementCodec):
    """
    Complex codec storing (real, imaginary) pairs of float32/float64.

    The real-valued accessors are not defined for complex elements.
    """

    def decode(self, buffer: Any, offset: int) -> complex:
        return complex(self._read(buffer, offset))

    def encode(self, buffer: bytearray, offset: int, value: Any) -> None:
        number = _as_number(value)
        with np.errstate(over="ignore"):
            scalar = self.np_dtype.type(complex(number))
        self._write(buffer, offset, scalar)

    def encode_array(self, values: Any) -> bytes:
        arr = np.asarray(values).reshape(-1)
        if arr.dtype.kind == "O":
            return super().encode_array(arr)
        with np.errstate(over="ignore"):
            return arr.astype(self.np_dtype).tobytes()

    def to_float(self, buffer: Any, offset: int) -> float:
        raise UnsupportedDTypeError("get_float64", self.dtype)

    def to_int(self, buffer: Any, offset: int) -> int:
        raise UnsupportedDTypeError("get_int64", self.dtype)


def get_codec(dtype: DType) -> ElementCodec:
    """
    Resolve the codec registered for ``dtype``.

    Parameters
    ----------
    dtype : DType
        Element encoding.

    Returns
    -------
    ElementCodec
        The shared codec instance.
    """
    return ElementCodec.get(dtype)
