"""
Reduction mixin for NDArray.

This module defines :class:`NDArrayMixinReduction`, which provides
whole-array reductions returning Python scalars (``sum``, ``mean``, ``min``,
``max``, ``argmin``, ``argmax``, ``prod``, ``var``, ``std``, ``all``,
``any``) and single-axis reductions returning arrays (``sum_axis``,
``mean_axis``).

All reductions decode elements as float64 in row-major order; complex arrays
are rejected with ``UnsupportedDTypeError``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from .....domain._dtype import DType
from .....domain.utils._shape import normalize_axis

if TYPE_CHECKING:
    from ..._ndarray import NDArray


class NDArrayMixinReduction:
    """
    Mixin implementing reductions.

    Notes
    -----
    Empty arrays reduce to neutral or undefined values instead of raising:

    - ``sum`` is ``0.0`` and ``prod`` is ``1.0``;
    - ``mean``, ``min``, ``max``, ``var`` and ``std`` are ``nan``;
    - ``argmin`` and ``argmax`` are ``-1``;
    - ``all`` is True and ``any`` is False.
    """

    # ----------------------------
    # Whole-array reductions
    # ----------------------------
    def sum(self: "NDArray") -> float:
        """
        Sum of all elements.

        Returns
        -------
        float
            The total, ``0.0`` for an empty array.
        """
        return float(np.sum(self._float64_values("sum")))

    def mean(self: "NDArray") -> float:
        """Arithmetic mean of all elements (``nan`` if empty)."""
        if self.size == 0:
            return math.nan
        return self.sum() / self.size

    def prod(self: "NDArray") -> float:
        """Product of all elements (``1.0`` if empty)."""
        with np.errstate(over="ignore", invalid="ignore"):
            return float(np.prod(self._float64_values("prod")))

    def min(self: "NDArray") -> float:
        """
        Minimum element (``nan`` if empty).

        Elements are scanned in row-major order and a candidate replaces the
        current minimum only when strictly smaller, so a leading ``nan`` is
        returned as-is and later ``nan`` values are skipped.
        """
        values = self._float64_values("min").tolist()
        if not values:
            return math.nan
        best = values[0]
        for v in values[1:]:
            if v < best:
                best = v
        return best

    def max(self: "NDArray") -> float:
        """Maximum element (``nan`` if empty); see :meth:`min` for ordering."""
        values = self._float64_values("max").tolist()
        if not values:
            return math.nan
        best = values[0]
        for v in values[1:]:
            if v > best:
                best = v
        return best

    def argmin(self: "NDArray") -> int:
        """
        Row-major position of the first minimum (``-1`` if empty).
        """
        values = self._float64_values("argmin").tolist()
        if not values:
            return -1
        best, idx = values[0], 0
        for i, v in enumerate(values):
            if v < best:
                best, idx = v, i
        return idx

    def argmax(self: "NDArray") -> int:
        """Row-major position of the first maximum (``-1`` if empty)."""
        values = self._float64_values("argmax").tolist()
        if not values:
            return -1
        best, idx = values[0], 0
        for i, v in enumerate(values):
            if v > best:
                best, idx = v, i
        return idx

    def var(self: "NDArray") -> float:
        """
        Population variance of all elements (``nan`` if empty).

        Computed as ``sum((x - mean)**2) / n``.
        """
        if self.size == 0:
            return math.nan
        values = self._float64_values("var")
        diff = values - values.sum() / values.size
        return float(np.sum(diff * diff) / values.size)

    def std(self: "NDArray") -> float:
        """Population standard deviation, ``sqrt(var())``."""
        return math.sqrt(self.var())

    def all(self: "NDArray") -> bool:
        """True if no element equals zero (``nan`` counts as non-zero)."""
        return bool(np.all(self._float64_values("all") != 0.0))

    def any(self: "NDArray") -> bool:
        """True if some element is non-zero (``nan`` counts as non-zero)."""
        return bool(np.any(self._float64_values("any") != 0.0))

    # ----------------------------
    # Axis reductions
    # ----------------------------
    def sum_axis(self: "NDArray", axis: int) -> "NDArray":
        """
        Sum along one axis.

        Parameters
        ----------
        axis : int
            Axis to reduce; negative values count from the end.

        Returns
        -------
        NDArray
            Array with ``axis`` removed and this array's dtype. Reducing the
            only axis of a 1-D array yields a FLOAT64 array of shape ``(1,)``.

        Raises
        ------
        AxisError
            If ``axis`` is out of range.
        """
        axis = normalize_axis(axis, self.ndim)
        out = np.sum(self._float64_values("sum_axis").reshape(self.shape), axis=axis)
        return self._axis_result(axis, out)

    def mean_axis(self: "NDArray", axis: int) -> "NDArray":
        """
        Arithmetic mean along one axis.

        Same shape and dtype rules as :meth:`sum_axis`. Reducing an axis of
        extent 0 produces ``nan``.
        """
        axis = normalize_axis(axis, self.ndim)
        values = self._float64_values("mean_axis").reshape(self.shape)
        with np.errstate(invalid="ignore", divide="ignore"):
            out = np.sum(values, axis=axis) / np.float64(self.shape[axis])
        return self._axis_result(axis, out)

    def _axis_result(self: "NDArray", axis: int, out: np.ndarray) -> "NDArray":
        shape = self.shape[:axis] + self.shape[axis + 1 :]
        if not shape:
            return type(self)._from_values((1,), DType.FLOAT64, out)
        return type(self)._from_values(shape, self._dtype, out)
