"""
Arithmetic mixin defining elementwise NDArray operators.

This module declares :class:`NDArrayMixinArithmetic`, which implements the
broadcasting binary operations (``add``, ``sub``, ``mul``, ``div``), their
scalar forms, and the Python operator overloads built on them.

Every operation follows the same recipe:

1. compute the broadcast shape of both operands,
2. materialize both operands at that shape,
3. evaluate in double precision (complex128 when either side is complex),
4. encode the result into a fresh array typed as the left operand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Union

import numpy as np

if TYPE_CHECKING:
    from ..._ndarray import NDArray

Number = Union[int, float, complex]
Operand = Union["NDArray", Number]


def _is_operand(other: Any) -> bool:
    return isinstance(other, (int, float, complex, np.generic)) or hasattr(
        other, "_numeric_values"
    )


class NDArrayMixinArithmetic:
    """
    Mixin implementing elementwise arithmetic with broadcasting.

    Notes
    -----
    - Division follows IEEE-754: ``x / 0`` is ``±inf`` and ``0 / 0`` is
      ``nan``; no ``ZeroDivisionError`` is raised.
    - Integer results are truncated toward zero and wrapped into the
      receiver's dtype. Storing ``inf``/``nan`` into an integer dtype raises
      ``ValueError``.
    - Scalars are lifted to arrays matching the receiver's shape.
    """

    def _elementwise(
        self: "NDArray",
        other: Operand,
        op: str,
        ufunc: Callable[[np.ndarray, np.ndarray], np.ndarray],
        *,
        reflected: bool = False,
    ) -> "NDArray":
        shape, lhs, rhs = self._operand_values(other, op)
        if reflected:
            lhs, rhs = rhs, lhs
        with np.errstate(all="ignore"):
            out = ufunc(lhs, rhs)
        return type(self)._from_values(shape, self._dtype, out)

    # ----------------------------
    # Named operations
    # ----------------------------
    def add(self: "NDArray", other: Operand) -> "NDArray":
        """
        Elementwise addition with broadcasting.

        Parameters
        ----------
        other : NDArray or number
            Right-hand operand.

        Returns
        -------
        NDArray
            Array of the broadcast shape with this array's dtype.

        Raises
        ------
        BroadcastError
            If the shapes cannot be broadcast together.
        """
        return self._elementwise(other, "add", np.add)

    def sub(self: "NDArray", other: Operand) -> "NDArray":
        """Elementwise subtraction with broadcasting."""
        return self._elementwise(other, "sub", np.subtract)

    def mul(self: "NDArray", other: Operand) -> "NDArray":
        """Elementwise multiplication with broadcasting."""
        return self._elementwise(other, "mul", np.multiply)

    def div(self: "NDArray", other: Operand) -> "NDArray":
        """
        Elementwise true division with broadcasting.

        Division by zero yields ``inf``/``nan`` per IEEE-754.
        """
        return self._elementwise(other, "div", np.true_divide)

    def add_scalar(self: "NDArray", scalar: Number) -> "NDArray":
        """Add ``scalar`` to every element of a copy of this array."""
        return self._elementwise(scalar, "add_scalar", np.add)

    def mul_scalar(self: "NDArray", scalar: Number) -> "NDArray":
        """Multiply every element of a copy of this array by ``scalar``."""
        return self._elementwise(scalar, "mul_scalar", np.multiply)

    # ----------------------------
    # Operator overloads
    # ----------------------------
    def __add__(self: "NDArray", other: Any) -> "NDArray":
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self: "NDArray", other: Any) -> "NDArray":
        if not _is_operand(other):
            return NotImplemented
        return self._elementwise(other, "add", np.add, reflected=True)

    def __sub__(self: "NDArray", other: Any) -> "NDArray":
        if not _is_operand(other):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self: "NDArray", other: Any) -> "NDArray":
        if not _is_operand(other):
            return NotImplemented
        return self._elementwise(other, "sub", np.subtract, reflected=True)

    def __mul__(self: "NDArray", other: Any) -> "NDArray":
        if not _is_operand(other):
            return NotImplemented
        return self.mul(other)

    def __rmul__(self: "NDArray", other: Any) -> "NDArray":
        if not _is_operand(other):
            return NotImplemented
        return self._elementwise(other, "mul", np.multiply, reflected=True)

    def __truediv__(self: "NDArray", other: Any) -> "NDArray":
        if not _is_operand(other):
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self: "NDArray", other: Any) -> "NDArray":
        if not _is_operand(other):
            return NotImplemented
        return self._elementwise(other, "div", np.true_divide, reflected=True)

    def __matmul__(self: "NDArray", other: Any) -> "NDArray":
        """Matrix product of two 2-D arrays (see ``keynd.linalg.matmul``)."""
        if not hasattr(other, "_numeric_values"):
            return NotImplemented
        from ....linalg._linalg import matmul

        return matmul(self, other)
