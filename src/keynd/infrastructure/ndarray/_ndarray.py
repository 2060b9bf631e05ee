"""
Concrete strided N-dimensional array (byte-buffer backend).

This module provides :class:`NDArray`, the concrete implementation of the
domain-level :class:`~keynd.domain._ndarray.INDArray` protocol. An array owns
exactly one contiguous ``bytearray`` and interprets it through:

- a shape (extent per axis),
- C-contiguous byte strides, and
- a :class:`~keynd.domain._dtype.DType` whose codec encodes/decodes elements.

Design notes
------------
- Every operation that produces an array allocates a fresh buffer. There are
  no aliasing views; reshape, transpose and broadcast all copy.
- Element access goes through the dtype's codec, so conversion rules
  (truncation, wrap-around, bool normalization) are applied uniformly.
- Bulk operations decode the whole buffer into a NumPy array, compute, and
  re-encode through the codec's vectorized path. The NumPy arrays are private
  scratch space and never share memory with the result.
- Most of the public API lives in mixins (see ``mixins``); this module holds
  storage, introspection and element access.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np

from ...domain._dtype import DType
from ...domain._errors import ShapeError, UnsupportedDTypeError
from ...domain._ndarray import INDArray
from ...domain.utils._shape import (
    broadcast_shapes,
    compute_size,
    compute_strides,
    normalize_shape_args,
    ravel_offset,
    validate_shape,
)
from ..dtype._codecs import ElementCodec, as_dtype, get_codec
from .mixins import _NDArrayAllMixin

Number = Union[int, float, complex]
DTypeLike = Union[DType, str, Any]


class NDArray(_NDArrayAllMixin, INDArray):
    """
    Typed N-dimensional array over an exclusively owned byte buffer.

    Parameters
    ----------
    shape : Sequence[int]
        Extent of each axis. Must be non-negative. The empty shape ``()`` is
        the degenerate case holding no elements.
    dtype : DType | str, optional
        Element encoding. Defaults to ``DType.FLOAT64``.
    buffer : bytes-like, optional
        Initial contents, copied into a new buffer. Must hold exactly
        ``size * itemsize`` bytes. Defaults to all-zero bytes.

    Raises
    ------
    ShapeError
        If an extent is negative or ``buffer`` has the wrong length.

    Notes
    -----
    - ``strides`` are always C-contiguous for arrays created by the engine.
    - Instances are not thread-safe for concurrent mutation through
      ``set_*`` methods.
    """

    # NumPy defers binary operators to this class's reflected methods
    __array_ufunc__ = None

    def __init__(
        self,
        shape: Sequence[int],
        dtype: DTypeLike = DType.FLOAT64,
        buffer: Optional[Any] = None,
    ) -> None:
        self._shape = validate_shape(shape)
        self._dtype = as_dtype(dtype)
        self._codec: ElementCodec = get_codec(self._dtype)
        self._size = compute_size(self._shape)
        self._strides = compute_strides(self._shape, self._dtype.itemsize)

        nbytes = self._size * self._dtype.itemsize
        if buffer is None:
            self._buffer = bytearray(nbytes)
        else:
            self._buffer = bytearray(buffer)
            if len(self._buffer) != nbytes:
                raise ShapeError(
                    f"buffer of {len(self._buffer)} bytes does not match shape "
                    f"{self._shape} with dtype {self._dtype} ({nbytes} bytes)",
                    shape=self._shape,
                    expected=nbytes,
                )

    # ---------------------------------------------------------------------
    # Internal constructors
    # ---------------------------------------------------------------------
    @classmethod
    def _wrap_buffer(
        cls, shape: Sequence[int], dtype: DType, buffer: bytearray
    ) -> "NDArray":
        """
        Build an array that takes ownership of ``buffer`` without copying.

        Callers must not retain any other reference to ``buffer``.
        """
        out = cls.__new__(cls)
        out._shape = tuple(shape)
        out._dtype = dtype
        out._codec = get_codec(dtype)
        out._size = compute_size(out._shape)
        out._strides = compute_strides(out._shape, dtype.itemsize)
        if len(buffer) != out._size * dtype.itemsize:
            raise ShapeError(
                f"buffer of {len(buffer)} bytes does not match shape {out._shape}",
                shape=out._shape,
                expected=out._size * dtype.itemsize,
            )
        out._buffer = buffer
        return out

    @classmethod
    def _from_values(
        cls, shape: Sequence[int], dtype: DType, values: Any
    ) -> "NDArray":
        """
        Encode ``values`` (row-major order) into a new array.

        Values are converted with the target dtype's codec rules.
        """
        shape = validate_shape(shape)
        flat = np.asarray(values).reshape(-1)
        size = compute_size(shape)
        if flat.size != size:
            raise ShapeError(
                f"got {flat.size} values for shape {shape} (size {size})",
                shape=shape,
                expected=size,
            )
        return cls._wrap_buffer(
            shape, dtype, bytearray(get_codec(dtype).encode_array(flat))
        )

    # ---------------------------------------------------------------------
    # Introspection
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the array.

        Returns
        -------
        tuple[int, ...]
            Extent of each axis.
        """
        return self._shape

    @property
    def strides(self) -> tuple[int, ...]:
        """
        Return the byte strides of the array.

        Returns
        -------
        tuple[int, ...]
            Bytes to step along each axis to reach the next element.
        """
        return self._strides

    @property
    def dtype(self) -> DType:
        """Return the element encoding."""
        return self._dtype

    @property
    def size(self) -> int:
        """Return the number of elements (0 for the empty shape)."""
        return self._size

    @property
    def ndim(self) -> int:
        """Return the number of axes."""
        return len(self._shape)

    @property
    def itemsize(self) -> int:
        """Return the byte width of one element."""
        return self._dtype.itemsize

    @property
    def nbytes(self) -> int:
        """Return the byte length of the buffer."""
        return len(self._buffer)

    @property
    def data(self) -> memoryview:
        """
        Return a read-only view of the raw buffer.

        Returns
        -------
        memoryview
            Little-endian element bytes in row-major order.

        Notes
        -----
        The view shares memory with the array; it reflects later ``set_*``
        calls but cannot be used to write.
        """
        return memoryview(self._buffer).toreadonly()

    def __len__(self) -> int:
        if not self._shape:
            raise TypeError("len() of unsized array")
        return self._shape[0]

    def __repr__(self) -> str:
        return f"NDArray({self.tolist()!r}, shape={self._shape}, dtype={self._dtype})"

    # ---------------------------------------------------------------------
    # Element access
    # ---------------------------------------------------------------------
    def _offset(self, indices: Sequence[int]) -> int:
        return ravel_offset(normalize_shape_args(indices), self._shape, self._strides)

    def get_float64(self, *indices: int) -> float:
        """
        Read one element converted to float.

        Parameters
        ----------
        *indices : int
            One index per axis; negative indices count from the end.

        Returns
        -------
        float
            The element value.

        Raises
        ------
        ShapeError
            If ``len(indices) != ndim``.
        IndexOutOfBoundsError
            If an index is out of bounds.
        UnsupportedDTypeError
            If the array is complex.
        """
        return self._codec.to_float(self._buffer, self._offset(indices))

    def get_int64(self, *indices: int) -> int:
        """
        Read one element converted to int.

        Floats are truncated toward zero; non-finite floats raise
        ``ValueError``.
        """
        return self._codec.to_int(self._buffer, self._offset(indices))

    def get_complex(self, *indices: int) -> complex:
        """Read one element converted to complex."""
        return complex(self._codec.decode(self._buffer, self._offset(indices)))

    def item(self, *indices: int) -> Any:
        """
        Read one element as its native Python type.

        ``bool`` for BOOL, ``int`` for integer dtypes, ``float`` for floating
        dtypes and ``complex`` for complex dtypes.
        """
        return self._codec.decode(self._buffer, self._offset(indices))

    def set_float64(self, value: float, *indices: int) -> None:
        """
        Convert ``value`` to this array's dtype and store it at ``indices``.

        Raises
        ------
        ShapeError
            If ``len(indices) != ndim``.
        IndexOutOfBoundsError
            If an index is out of bounds.
        ValueError
            If a non-finite value is stored into an integer dtype.
        """
        self._codec.encode(self._buffer, self._offset(indices), float(value))

    def set_int64(self, value: int, *indices: int) -> None:
        """Convert ``value`` to this array's dtype and store it at ``indices``."""
        self._codec.encode(self._buffer, self._offset(indices), int(value))

    def set_complex(self, value: complex, *indices: int) -> None:
        """
        Store a complex value at ``indices``.

        Raises
        ------
        UnsupportedDTypeError
            If the array is not complex.
        """
        self._codec.encode(self._buffer, self._offset(indices), complex(value))

    def set_item(self, value: Any, *indices: int) -> None:
        """Store a native Python value at ``indices``."""
        self._codec.encode(self._buffer, self._offset(indices), value)

    # ---------------------------------------------------------------------
    # Bulk decoding
    # ---------------------------------------------------------------------
    def _values(self) -> np.ndarray:
        """Decode every element into a new 1-D NumPy array (native dtype)."""
        return self._codec.decode_array(self._buffer, self._size)

    def _float64_values(self, op: str) -> np.ndarray:
        """Decode every element as float64; complex arrays are rejected."""
        if self._dtype.is_complex():
            raise UnsupportedDTypeError(op, self._dtype)
        return self._values().astype(np.float64)

    def _numeric_values(self) -> np.ndarray:
        """Decode as complex128 for complex arrays, float64 otherwise."""
        if self._dtype.is_complex():
            return self._values().astype(np.complex128)
        return self._values().astype(np.float64)

    def _raw_view(self) -> np.ndarray:
        """
        Shape-aware NumPy view sharing this array's buffer.

        Used to move raw element bytes without decoding; never returned to
        callers.
        """
        if self._size == 0:
            return np.empty(self._shape or (0,), dtype=self._codec.np_dtype)
        flat = np.frombuffer(self._buffer, dtype=self._codec.np_dtype, count=self._size)
        return flat.reshape(self._shape)

    def _nd_values(self) -> np.ndarray:
        """Decoded values reshaped to ``shape`` (1-D for the empty shape)."""
        values = self._values()
        return values.reshape(self._shape) if self._shape else values

    def _operand_values(
        self, other: Any, op: str, *, real: bool = False
    ) -> tuple[tuple[int, ...], np.ndarray, np.ndarray]:
        """
        Materialize both operands of a binary operation at a joint shape.

        Arrays are broadcast against this array; numbers are lifted to this
        array's shape.

        Returns
        -------
        tuple
            ``(shape, lhs_values, rhs_values)`` with flat NumPy operands.
        """
        decode = (lambda a: a._float64_values(op)) if real else (
            lambda a: a._numeric_values()
        )
        if isinstance(other, NDArray):
            shape = broadcast_shapes(self._shape, other._shape)
            lhs = self if shape == self._shape else self.broadcast_to(shape)
            rhs = other if shape == other._shape else other.broadcast_to(shape)
            return shape, decode(lhs), decode(rhs)

        if isinstance(other, np.generic):
            other = other.item()
        if not isinstance(other, (int, float, complex)):
            raise TypeError(
                f"unsupported operand type for {op}: {type(other).__name__}"
            )
        if real and isinstance(other, complex):
            raise UnsupportedDTypeError(op, "complex scalar")
        lhs_values = decode(self)
        if isinstance(other, complex):
            lhs_values = lhs_values.astype(np.complex128)
        rhs_values = np.full(lhs_values.shape, other, dtype=lhs_values.dtype)
        return self._shape, lhs_values, rhs_values
