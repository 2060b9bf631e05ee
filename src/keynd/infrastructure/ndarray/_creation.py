"""
Array creation functions.

Every function here allocates a fresh C-contiguous buffer. Shapes may be
given as an int, as a sequence, or (for the ``from_slice*`` family)
variadically after the data.
"""

from __future__ import annotations

import math
from typing import Any, Sequence, Union

import numpy as np

from ...domain._dtype import DType
from ...domain._errors import ShapeError
from ...domain.utils._shape import compute_size, normalize_shape_args, validate_shape
from ..dtype._codecs import as_dtype, get_codec
from ._ndarray import NDArray

ShapeLike = Union[int, Sequence[int]]


def _shape_of(shape: ShapeLike) -> tuple[int, ...]:
    return validate_shape(normalize_shape_args((shape,)))


def zeros(shape: ShapeLike, dtype: Any = DType.FLOAT64) -> NDArray:
    """
    Return a new array of the given shape filled with zeros.

    Parameters
    ----------
    shape : int or Sequence[int]
        Array shape.
    dtype : DType | str, optional
        Element encoding. Defaults to ``DType.FLOAT64``.
    """
    return NDArray(_shape_of(shape), dtype)


def ones(shape: ShapeLike, dtype: Any = DType.FLOAT64) -> NDArray:
    """Return a new array of the given shape filled with ones."""
    return full(shape, 1, dtype)


def full(shape: ShapeLike, value: Any, dtype: Any = DType.FLOAT64) -> NDArray:
    """
    Return a new array of the given shape filled with ``value``.

    ``value`` is converted once with the dtype's codec (e.g. truncated for
    integer dtypes) and the encoded bytes are replicated.

    Raises
    ------
    ValueError
        If a non-finite value is requested for an integer dtype.
    UnsupportedDTypeError
        If a complex value is requested for a real dtype.
    """
    shape = _shape_of(shape)
    dtype = as_dtype(dtype)
    cell = bytearray(dtype.itemsize)
    get_codec(dtype).encode(cell, 0, value)
    return NDArray._wrap_buffer(shape, dtype, cell * compute_size(shape))


def from_slice(data: Any, *shape: Any, dtype: Any = DType.FLOAT64) -> NDArray:
    """
    Build an array from a flat (or nested) sequence of values.

    Parameters
    ----------
    data : Sequence
        Values in row-major order. Nested sequences are flattened.
    *shape : int or Sequence[int]
        Target shape. When omitted, a 1-D array of ``len(data)`` elements is
        built.
    dtype : DType | str, optional
        Element encoding. Defaults to ``DType.FLOAT64``.

    Returns
    -------
    NDArray
        New array holding the converted values.

    Raises
    ------
    ShapeError
        If the number of values does not match the shape's element count.
    """
    flat = np.asarray(data).reshape(-1)
    target = validate_shape(normalize_shape_args(shape)) if shape else (flat.size,)
    size = compute_size(target)
    if flat.size != size:
        raise ShapeError(
            f"data length {flat.size} does not match shape size {size}",
            shape=target,
            expected=size,
        )
    return NDArray._from_values(target, as_dtype(dtype), flat)


def from_slice_float64(data: Sequence[float], *shape: Any) -> NDArray:
    """Build a FLOAT64 array from ``data`` (see :func:`from_slice`)."""
    return from_slice(data, *shape, dtype=DType.FLOAT64)


def from_slice_int64(data: Sequence[int], *shape: Any) -> NDArray:
    """Build an INT64 array from ``data`` (see :func:`from_slice`)."""
    return from_slice(data, *shape, dtype=DType.INT64)


def from_slice_float32(data: Sequence[float], *shape: Any) -> NDArray:
    """Build a FLOAT32 array from ``data`` (see :func:`from_slice`)."""
    return from_slice(data, *shape, dtype=DType.FLOAT32)


def arange(start: float, stop: float, step: float = 1.0) -> NDArray:
    """
    Evenly spaced values in ``[start, stop)``.

    The element count is ``max(0, ceil((stop - start) / step))`` and element
    ``i`` is ``start + i * step``.

    Returns
    -------
    NDArray
        1-D FLOAT64 array.

    Raises
    ------
    ValueError
        If ``step`` is zero.
    """
    if step == 0:
        raise ValueError("step cannot be zero")
    n = max(0, math.ceil((stop - start) / step))
    values = start + np.arange(n, dtype=np.float64) * step
    return NDArray._from_values((n,), DType.FLOAT64, values)


def int_range(start: int, stop: int) -> NDArray:
    """
    Consecutive integers ``start, start + 1, ..., stop - 1``.

    Returns
    -------
    NDArray
        1-D INT64 array; empty when ``stop <= start``.
    """
    start, stop = int(start), int(stop)
    n = max(0, stop - start)
    values = np.arange(start, start + n, dtype=np.int64)
    return NDArray._from_values((n,), DType.INT64, values)


def eye(n: int, dtype: Any = DType.FLOAT64) -> NDArray:
    """
    Return an ``n x n`` identity matrix.

    Raises
    ------
    ShapeError
        If ``n`` is negative.
    """
    out = zeros((n, n), dtype)
    codec = out._codec
    for i in range(n):
        codec.encode(out._buffer, (i * n + i) * out.itemsize, 1)
    return out


def from_numpy(array: Any) -> NDArray:
    """
    Build an array from a NumPy array (see :meth:`NDArray.from_numpy`).
    """
    return NDArray.from_numpy(array)
