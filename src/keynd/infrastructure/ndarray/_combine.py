"""
Set and combine utilities for NDArray.

This module provides:

- :class:`NDArrayCombineMixin` with per-array utilities (``clip``,
  ``unique``, ``repeat``, ``tile``);
- module-level functions that combine several arrays (``where``,
  ``concatenate``, ``stack``).

Design notes
------------
- Like the other mixins, nothing here imports `NDArray`; new arrays are built
  via ``type(first)`` so the module can be imported while the concrete class
  is still being defined.
- Structural operations (``concatenate``, ``stack``, ``tile``) move raw
  element bytes. ``concatenate`` converts operands of other dtypes to the
  first operand's dtype explicitly with ``astype`` before copying.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

import numpy as np

from ...domain._dtype import DType
from ...domain._errors import ShapeError, UnsupportedDTypeError
from ...domain.utils._shape import (
    broadcast_shapes,
    compute_size,
    normalize_axis,
    normalize_shape_args,
)

if TYPE_CHECKING:
    from ._ndarray import NDArray


class NDArrayCombineMixin:
    """
    Per-array set and combine utilities.
    """

    def clip(self: "NDArray", min_value: float, max_value: float) -> "NDArray":
        """
        Limit every element to ``[min_value, max_value]``.

        Elements below ``min_value`` become ``min_value``; otherwise elements
        above ``max_value`` become ``max_value``. Other elements (including
        ``nan``) are copied unchanged.

        Parameters
        ----------
        min_value : float
            Lower bound.
        max_value : float
            Upper bound.

        Returns
        -------
        NDArray
            Clipped copy with this array's dtype.
        """
        values = self._float64_values("clip")
        result = self.copy()
        below = values < min_value
        above = (values > max_value) & ~below
        itemsize = self.itemsize
        for i in np.flatnonzero(below).tolist():
            result._codec.encode(result._buffer, i * itemsize, float(min_value))
        for i in np.flatnonzero(above).tolist():
            result._codec.encode(result._buffer, i * itemsize, float(max_value))
        return result

    def unique(self: "NDArray") -> "NDArray":
        """
        Sorted unique values.

        Returns
        -------
        NDArray
            1-D FLOAT64 array in ascending order. All ``nan`` elements
            collapse into a single trailing ``nan``.
        """
        values = self._float64_values("unique")
        nan_mask = np.isnan(values)
        out = np.unique(values[~nan_mask])
        if nan_mask.any():
            out = np.append(out, np.nan)
        return type(self)._from_values((out.size,), DType.FLOAT64, out)

    def repeat(self: "NDArray", repeats: int) -> "NDArray":
        """
        Repeat each element ``repeats`` times.

        Returns
        -------
        NDArray
            1-D FLOAT64 array of length ``size * repeats`` in row-major order.

        Raises
        ------
        ValueError
            If ``repeats`` is negative.
        """
        repeats = int(repeats)
        if repeats < 0:
            raise ValueError(f"repeats cannot be negative, got {repeats}")
        out = np.repeat(self._float64_values("repeat"), repeats)
        return type(self)._from_values((out.size,), DType.FLOAT64, out)

    def tile(self: "NDArray", *reps: Any) -> "NDArray":
        """
        Construct an array by repeating this one ``reps[i]`` times along axis i.

        If ``reps`` is shorter than ``ndim`` it is padded with leading 1s; if
        it is longer, this array's shape is padded with leading 1s.

        Parameters
        ----------
        *reps : int or Sequence[int]
            Repetitions per axis.

        Returns
        -------
        NDArray
            Tiled array with this array's dtype.

        Raises
        ------
        ValueError
            If ``reps`` is empty or contains a negative count.
        """
        reps = normalize_shape_args(reps)
        if not reps:
            raise ValueError("reps cannot be empty")
        if any(r < 0 for r in reps):
            raise ValueError(f"reps cannot be negative, got {reps}")

        src = self
        if len(reps) < self.ndim:
            reps = (1,) * (self.ndim - len(reps)) + reps
        elif len(reps) > self.ndim:
            src = self.reshape((1,) * (len(reps) - self.ndim) + self.shape)

        out_shape = tuple(d * r for d, r in zip(src.shape, reps))
        cls = type(self)
        if compute_size(out_shape) == 0:
            return cls(out_shape, self._dtype)
        data = np.tile(src._raw_view(), reps).tobytes()
        return cls._wrap_buffer(out_shape, self._dtype, bytearray(data))


def where(cond: "NDArray", a: "NDArray", b: "NDArray") -> "NDArray":
    """
    Select elements from ``a`` where ``cond`` is true, else from ``b``.

    ``cond``, ``a`` and ``b`` are broadcast to a joint shape.

    Parameters
    ----------
    cond : NDArray
        BOOL condition array.
    a, b : NDArray
        Value sources.

    Returns
    -------
    NDArray
        Array of the joint shape with ``a``'s dtype.

    Raises
    ------
    UnsupportedDTypeError
        If ``cond`` is not a BOOL array.
    BroadcastError
        If the three shapes cannot be broadcast together.
    """
    if cond.dtype is not DType.BOOL:
        raise UnsupportedDTypeError("where condition", cond.dtype)
    shape = broadcast_shapes(broadcast_shapes(cond.shape, a.shape), b.shape)
    c_vals, a_vals, b_vals = (
        (arr if arr.shape == shape else arr.broadcast_to(shape)) for arr in (cond, a, b)
    )
    out = np.where(c_vals._values(), a_vals._numeric_values(), b_vals._numeric_values())
    return type(a)._from_values(shape, a.dtype, out)


def concatenate(arrays: Sequence["NDArray"], axis: int = 0) -> "NDArray":
    """
    Join arrays along an existing axis.

    Parameters
    ----------
    arrays : Sequence[NDArray]
        Arrays with the same rank and equal extents on every axis except
        ``axis``.
    axis : int, optional
        Axis to join along; negative values count from the end. Defaults to 0.

    Returns
    -------
    NDArray
        Joined array with the first array's dtype.

    Raises
    ------
    ShapeError
        If ``arrays`` is empty, an array is zero-dimensional, the ranks
        differ, or a non-joined extent differs.
    AxisError
        If ``axis`` is out of range.
    """
    arrays = list(arrays)
    if not arrays:
        raise ShapeError("need at least one array to concatenate")

    first = arrays[0]
    ndim = first.ndim
    if ndim == 0:
        raise ShapeError("zero-dimensional arrays cannot be concatenated", shape=())
    axis = normalize_axis(axis, ndim)

    for i, arr in enumerate(arrays[1:], start=1):
        if arr.ndim != ndim:
            raise ShapeError(
                f"all arrays must have the same number of dimensions: array 0 "
                f"has {ndim}, array {i} has {arr.ndim}",
                shape=arr.shape,
                expected=ndim,
            )
        for d in range(ndim):
            if d != axis and arr.shape[d] != first.shape[d]:
                raise ShapeError(
                    f"array dimensions must match except on axis {axis}: "
                    f"array 0 has shape {first.shape}, array {i} has "
                    f"shape {arr.shape}",
                    shape=arr.shape,
                    expected=first.shape,
                )

    dtype = first.dtype
    parts = [arr if arr.dtype is dtype else arr.astype(dtype) for arr in arrays]
    out_shape = list(first.shape)
    out_shape[axis] = sum(arr.shape[axis] for arr in arrays)

    data = np.concatenate([p._raw_view() for p in parts], axis=axis).tobytes()
    return type(first)._wrap_buffer(tuple(out_shape), dtype, bytearray(data))


def stack(arrays: Sequence["NDArray"], axis: int = 0) -> "NDArray":
    """
    Join same-shaped arrays along a new axis.

    Each array is expanded with a unit axis at ``axis`` and the results are
    concatenated along it.

    Raises
    ------
    ShapeError
        If ``arrays`` is empty or the shapes differ.
    AxisError
        If ``axis`` is outside ``[-(ndim + 1), ndim]``.
    """
    arrays = list(arrays)
    if not arrays:
        raise ShapeError("need at least one array to stack")
    shape = arrays[0].shape
    for i, arr in enumerate(arrays[1:], start=1):
        if arr.shape != shape:
            raise ShapeError(
                f"all input arrays must have the same shape: array 0 has "
                f"shape {shape}, array {i} has shape {arr.shape}",
                shape=arr.shape,
                expected=shape,
            )
    return concatenate([arr.expand_dims(axis) for arr in arrays], axis=axis)
