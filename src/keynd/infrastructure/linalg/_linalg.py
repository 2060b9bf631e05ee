"""
Linear-algebra primitives over NDArray.

All functions decode their operands as float64 and return FLOAT64 arrays (or
Python floats), regardless of the input dtypes. Complex operands are rejected
with ``UnsupportedDTypeError``.

Algorithms
----------
- ``det`` uses recursive cofactor expansion along the first row. Its cost
  grows factorially with the matrix order; a ``RuntimeWarning`` is emitted
  at or above the configured order (``KEYND_DET_WARN_ORDER``, default 9).
- ``inv`` uses Gauss-Jordan elimination on ``[A | I]`` pivoting on the
  diagonal only. A diagonal entry below the configured tolerance
  (``KEYND_SINGULAR_TOL``, default ``1e-10``) raises
  :class:`SingularMatrixError`, even when a usable pivot exists lower in the
  same column.
"""

from __future__ import annotations

import math
import warnings

import numpy as np

from ...domain._dtype import DType
from ...domain._errors import (
    DimensionError,
    ShapeError,
    SingularMatrixError,
    UnsupportedRankError,
)
from .._config import get_config
from ..ndarray._ndarray import NDArray


def _matrix(a: NDArray, op: str) -> np.ndarray:
    return a._float64_values(op).reshape(a.shape)


def _require_ndim(op: str, ndim: int, *arrays: NDArray) -> None:
    if any(a.ndim != ndim for a in arrays):
        ranks = ", ".join(f"{a.ndim}-D" for a in arrays)
        raise DimensionError(
            op, f"requires {ndim}-D arrays, got {ranks}", [a.shape for a in arrays]
        )


def _require_square(op: str, a: NDArray) -> int:
    _require_ndim(op, 2, a)
    n, m = a.shape
    if n != m:
        raise DimensionError(op, f"requires a square matrix, got {a.shape}", [a.shape])
    return n


def _result(shape: tuple[int, ...], values: np.ndarray) -> NDArray:
    return NDArray._from_values(shape, DType.FLOAT64, values)


def dot(a: NDArray, b: NDArray) -> NDArray:
    """
    Dot product of two arrays.

    - 1-D with 1-D: sum of elementwise products, returned as a shape ``(1,)``
      array.
    - 2-D with 2-D: matrix product (see :func:`matmul`).
    - 2-D with 1-D: matrix-vector product of shape ``(rows,)``.

    Raises
    ------
    ShapeError
        If two vectors have different lengths.
    DimensionError
        If a matrix-vector or matrix-matrix pair has mismatched inner
        dimensions.
    UnsupportedRankError
        For any other rank combination.
    """
    if a.ndim == 1 and b.ndim == 1:
        if a.size != b.size:
            raise ShapeError(
                f"arrays must have same length: {a.size} vs {b.size}",
                shape=b.shape,
                expected=a.shape,
            )
        total = float(np.dot(_matrix(a, "dot"), _matrix(b, "dot")))
        return _result((1,), np.array([total]))

    if a.ndim == 2 and b.ndim == 2:
        return matmul(a, b)

    if a.ndim == 2 and b.ndim == 1:
        rows, cols = a.shape
        if cols != b.size:
            raise DimensionError(
                "dot",
                f"dimension mismatch: {a.shape} x ({b.size},)",
                [a.shape, b.shape],
            )
        return _result((rows,), _matrix(a, "dot") @ _matrix(b, "dot"))

    raise UnsupportedRankError("dot", [a.shape, b.shape])


def matmul(a: NDArray, b: NDArray) -> NDArray:
    """
    Matrix product of two 2-D arrays.

    Parameters
    ----------
    a : NDArray
        Left matrix of shape ``(m, n)``.
    b : NDArray
        Right matrix of shape ``(n, p)``.

    Returns
    -------
    NDArray
        FLOAT64 array of shape ``(m, p)``.

    Raises
    ------
    DimensionError
        If either operand is not 2-D or the inner dimensions differ.
    """
    _require_ndim("matmul", 2, a, b)
    if a.shape[1] != b.shape[0]:
        raise DimensionError(
            "matmul",
            f"dimension mismatch: {a.shape} x {b.shape}",
            [a.shape, b.shape],
        )
    out = _matrix(a, "matmul") @ _matrix(b, "matmul")
    return _result((a.shape[0], b.shape[1]), out)


def outer(a: NDArray, b: NDArray) -> NDArray:
    """
    Outer product of two vectors, ``out[i, j] = a[i] * b[j]``.

    Raises
    ------
    DimensionError
        If either operand is not 1-D.
    """
    _require_ndim("outer", 1, a, b)
    out = np.outer(_matrix(a, "outer"), _matrix(b, "outer"))
    return _result((a.size, b.size), out)


def inner(a: NDArray, b: NDArray) -> float:
    """
    Inner product of two vectors.

    Raises
    ------
    DimensionError
        If either operand is not 1-D.
    ShapeError
        If the lengths differ.
    """
    _require_ndim("inner", 1, a, b)
    if a.size != b.size:
        raise ShapeError(
            f"arrays must have same length: {a.size} vs {b.size}",
            shape=b.shape,
            expected=a.shape,
        )
    return float(np.dot(_matrix(a, "inner"), _matrix(b, "inner")))


def norm(a: NDArray) -> float:
    """
    Euclidean (L2) norm over all elements, in row-major order.
    """
    values = a._float64_values("norm")
    return math.sqrt(float(np.sum(values * values)))


def trace(a: NDArray) -> float:
    """
    Sum of the main diagonal of a 2-D array (``min(rows, cols)`` entries).

    Raises
    ------
    DimensionError
        If ``a`` is not 2-D.
    """
    _require_ndim("trace", 2, a)
    m = _matrix(a, "trace")
    n = min(a.shape)
    return float(sum(m[i, i] for i in range(n)))


def det(a: NDArray) -> float:
    """
    Determinant of a square matrix by cofactor expansion.

    Parameters
    ----------
    a : NDArray
        Square 2-D array.

    Returns
    -------
    float
        The determinant; ``1.0`` for a ``0 x 0`` matrix.

    Raises
    ------
    DimensionError
        If ``a`` is not a square 2-D array.

    Warns
    -----
    RuntimeWarning
        If the order reaches the configured warning threshold.
    """
    n = _require_square("det", a)
    limit = get_config().det_warn_order
    if n >= limit:
        warnings.warn(
            f"det: cofactor expansion of a {n}x{n} matrix performs O(n!) work "
            f"(warning threshold is order {limit})",
            RuntimeWarning,
            stacklevel=2,
        )
    if n == 0:
        return 1.0
    return _cofactor_det(_matrix(a, "det"))


def _cofactor_det(m: np.ndarray) -> float:
    n = m.shape[0]
    if n == 1:
        return float(m[0, 0])
    if n == 2:
        return float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])

    total = 0.0
    rest = m[1:]
    for j in range(n):
        minor = np.delete(rest, j, axis=1)
        cofactor = m[0, j] * _cofactor_det(minor)
        total = total + cofactor if j % 2 == 0 else total - cofactor
    return float(total)


def inv(a: NDArray) -> NDArray:
    """
    Inverse of a square matrix by Gauss-Jordan elimination.

    Parameters
    ----------
    a : NDArray
        Square 2-D array.

    Returns
    -------
    NDArray
        FLOAT64 inverse of the same shape.

    Raises
    ------
    DimensionError
        If ``a`` is not a square 2-D array.
    SingularMatrixError
        If a diagonal pivot's magnitude falls below the singularity
        tolerance. Rows are never swapped.
    """
    n = _require_square("inv", a)
    tol = get_config().singular_tol

    aug = np.zeros((n, 2 * n), dtype=np.float64)
    aug[:, :n] = _matrix(a, "inv")
    aug[:, n:] = np.eye(n)

    with np.errstate(all="ignore"):
        for i in range(n):
            pivot = float(aug[i, i])
            if not abs(pivot) >= tol:
                raise SingularMatrixError(i, pivot, tol)
            aug[i] = aug[i] / pivot
            for k in range(n):
                if k == i:
                    continue
                aug[k] = aug[k] - aug[k, i] * aug[i]

    return _result((n, n), aug[:, n:])


def transpose(a: NDArray) -> NDArray:
    """Reverse the axes of ``a`` (see :meth:`NDArray.transpose`)."""
    return a.transpose()
