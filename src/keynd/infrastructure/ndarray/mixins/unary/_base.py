"""
Unary elementwise math mixin for NDArray.

Each operation decodes every element, applies the scalar function in double
precision (complex128 for complex arrays), and writes the result into a fresh
array of the same shape and dtype.

IEEE results are returned rather than raised: ``log(0)`` is ``-inf``,
``log(-1)`` and ``sqrt(-1)`` are ``nan`` for real arrays.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Union

import numpy as np

if TYPE_CHECKING:
    from ..._ndarray import NDArray

Number = Union[int, float]


class NDArrayMixinUnary:
    """
    Mixin implementing unary elementwise functions.

    Notes
    -----
    Results are written back into the receiver's dtype, so ``exp`` on an
    integer array truncates, and functions producing ``nan``/``inf`` on an
    integer array raise ``ValueError``.
    """

    def _unary(
        self: "NDArray", func: Callable[[np.ndarray], np.ndarray]
    ) -> "NDArray":
        values = self._numeric_values()
        with np.errstate(all="ignore"):
            out = func(values)
        return type(self)._from_values(self.shape, self._dtype, out)

    def exp(self: "NDArray") -> "NDArray":
        """Elementwise ``e**x``."""
        return self._unary(np.exp)

    def log(self: "NDArray") -> "NDArray":
        """
        Elementwise natural logarithm.

        Returns
        -------
        NDArray
            ``log(x)``; ``-inf`` at zero and ``nan`` for negative reals.
        """
        return self._unary(np.log)

    def sin(self: "NDArray") -> "NDArray":
        """Elementwise sine (radians)."""
        return self._unary(np.sin)

    def cos(self: "NDArray") -> "NDArray":
        """Elementwise cosine (radians)."""
        return self._unary(np.cos)

    def sqrt(self: "NDArray") -> "NDArray":
        """Elementwise square root; ``nan`` for negative reals."""
        return self._unary(np.sqrt)

    def pow(self: "NDArray", exponent: Number) -> "NDArray":
        """
        Raise every element to ``exponent``.

        Parameters
        ----------
        exponent : float
            Exponent applied to each element.

        Returns
        -------
        NDArray
            ``x ** exponent`` in the receiver's dtype.
        """
        return self._unary(lambda v: np.power(v, exponent))

    def abs(self: "NDArray") -> "NDArray":
        """
        Elementwise absolute value.

        For complex arrays this is the modulus stored as a complex number
        with zero imaginary part.
        """
        return self._unary(np.abs)

    def neg(self: "NDArray") -> "NDArray":
        """Elementwise negation."""
        return self._unary(np.negative)

    def __neg__(self: "NDArray") -> "NDArray":
        return self.neg()

    def __pos__(self: "NDArray") -> "NDArray":
        return self.copy()

    def __abs__(self: "NDArray") -> "NDArray":
        return self.abs()

    def __pow__(self: "NDArray", exponent: Number) -> "NDArray":
        if not isinstance(exponent, (int, float, np.generic)):
            return NotImplemented
        return self.pow(exponent)
