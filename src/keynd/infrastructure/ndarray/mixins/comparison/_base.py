"""
Comparison mixin for NDArray.

This module defines :class:`NDArrayMixinComparison`, which provides:

- elementwise ordering comparisons with broadcasting (``gt``, ``lt`` and the
  ``>``/``<`` operators), producing BOOL arrays;
- scalar comparisons (``gt_scalar``, ``lt_scalar``);
- whole-array predicates (``equal``, ``allclose``) returning Python bools.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional, Union

import numpy as np

from .....domain._dtype import DType
from ...._config import get_config

if TYPE_CHECKING:
    from ..._ndarray import NDArray

Number = Union[int, float]


class NDArrayMixinComparison:
    """
    Mixin implementing elementwise and whole-array comparisons.

    Notes
    -----
    - Ordering comparisons decode both operands as float64; complex arrays
      are rejected with ``UnsupportedDTypeError``.
    - Any comparison involving ``nan`` is false.
    """

    def _compare(
        self: "NDArray",
        other: Any,
        op: str,
        ufunc: Callable[[np.ndarray, np.ndarray], np.ndarray],
    ) -> "NDArray":
        shape, lhs, rhs = self._operand_values(other, op, real=True)
        with np.errstate(invalid="ignore"):
            out = ufunc(lhs, rhs)
        return type(self)._from_values(shape, DType.BOOL, out)

    def gt(self: "NDArray", other: Union["NDArray", Number]) -> "NDArray":
        """
        Elementwise ``self > other`` with broadcasting.

        Returns
        -------
        NDArray
            BOOL array of the broadcast shape.

        Raises
        ------
        BroadcastError
            If the shapes cannot be broadcast together.
        """
        return self._compare(other, "gt", np.greater)

    def lt(self: "NDArray", other: Union["NDArray", Number]) -> "NDArray":
        """Elementwise ``self < other`` with broadcasting (BOOL result)."""
        return self._compare(other, "lt", np.less)

    def gt_scalar(self: "NDArray", scalar: Number) -> "NDArray":
        """Elementwise ``self > scalar`` (BOOL result, same shape)."""
        return self._compare(float(scalar), "gt_scalar", np.greater)

    def lt_scalar(self: "NDArray", scalar: Number) -> "NDArray":
        """Elementwise ``self < scalar`` (BOOL result, same shape)."""
        return self._compare(float(scalar), "lt_scalar", np.less)

    def __gt__(self: "NDArray", other: Any) -> "NDArray":
        if not isinstance(other, (int, float, np.generic)) and not hasattr(
            other, "_numeric_values"
        ):
            return NotImplemented
        return self.gt(other)

    def __lt__(self: "NDArray", other: Any) -> "NDArray":
        if not isinstance(other, (int, float, np.generic)) and not hasattr(
            other, "_numeric_values"
        ):
            return NotImplemented
        return self.lt(other)

    def equal(self: "NDArray", other: "NDArray") -> bool:
        """
        Return True if both arrays have the same shape and equal elements.

        Dtypes may differ; elements are compared by value. ``nan`` never
        equals anything.
        """
        if self.shape != other.shape:
            return False
        return bool(np.all(self._numeric_values() == other._numeric_values()))

    def allclose(
        self: "NDArray",
        other: "NDArray",
        rtol: Optional[float] = None,
        atol: Optional[float] = None,
    ) -> bool:
        """
        Return True if both arrays have the same shape and are elementwise
        close.

        Two elements ``a`` and ``b`` are close when
        ``|a - b| <= atol + rtol * |b|``.

        Parameters
        ----------
        other : NDArray
            Array to compare against (the reference ``b``).
        rtol : Optional[float], optional
            Relative tolerance. Defaults to the configured value (``1e-5``).
        atol : Optional[float], optional
            Absolute tolerance. Defaults to the configured value (``1e-8``).

        Returns
        -------
        bool
            False on any shape mismatch or if any element is ``nan``.
        """
        config = get_config()
        rtol = config.allclose_rtol if rtol is None else rtol
        atol = config.allclose_atol if atol is None else atol
        if self.shape != other.shape:
            return False
        a = self._numeric_values()
        b = other._numeric_values()
        with np.errstate(invalid="ignore"):
            return bool(np.all(np.abs(a - b) <= atol + rtol * np.abs(b)))
