"""
Array-engine exceptions for KeyND.

This module defines the structured errors raised by the array engine. Each
error is unrecoverable at the point of detection: the failing call aborts and
the error propagates to the caller with enough context (offending shapes,
indices, axes, dtypes) to diagnose the failure.

Every error derives from :class:`KeyNDError` and from the closest built-in
exception, so callers may catch either the engine-specific type or the
familiar Python one (e.g. ``except IndexError``).
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class KeyNDError(Exception):
    """
    Base class for all errors raised by the KeyND array engine.
    """


class ShapeError(KeyNDError, ValueError):
    """
    Raised when a shape or element count does not match what an operation needs.

    Typical sources are reshape size mismatches, wrong index arity, data
    length mismatches during construction, and concatenation of arrays with
    incompatible extents.

    Attributes
    ----------
    shape : Optional[tuple[int, ...]]
        The offending shape, when one is available.
    expected : Any
        The shape, size or arity the operation required, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        shape: Optional[Sequence[int]] = None,
        expected: Any = None,
    ) -> None:
        """
        Initialize the ShapeError.

        Parameters
        ----------
        message : str
            Human-readable description of the mismatch.
        shape : Optional[Sequence[int]], optional
            The offending shape.
        expected : Any, optional
            What the operation expected instead.
        """
        super().__init__(message)
        self.shape = tuple(shape) if shape is not None else None
        self.expected = expected


class IndexOutOfBoundsError(KeyNDError, IndexError):
    """
    Raised when an index is outside ``[0, extent)`` after negative wrapping.

    Attributes
    ----------
    index : int
        The index as supplied by the caller (before normalization).
    axis : Optional[int]
        The axis the index addresses, if applicable.
    extent : int
        The extent of that axis.
    """

    def __init__(self, index: int, extent: int, axis: Optional[int] = None) -> None:
        where = f" for axis {axis}" if axis is not None else ""
        super().__init__(
            f"index {index} is out of bounds{where} with size {extent}"
        )
        self.index = index
        self.axis = axis
        self.extent = extent


class AxisError(KeyNDError, ValueError, IndexError):
    """
    Raised when an axis argument is out of range or repeated.

    Attributes
    ----------
    axis : int
        The axis as supplied by the caller.
    ndim : int
        Rank of the array (or of the result, for axis-inserting operations).
    """

    def __init__(self, axis: int, ndim: int, message: Optional[str] = None) -> None:
        super().__init__(
            message
            or f"axis {axis} is out of bounds for array of dimension {ndim}"
        )
        self.axis = axis
        self.ndim = ndim


class BroadcastError(KeyNDError, ValueError):
    """
    Raised when two shapes cannot be broadcast together.

    Attributes
    ----------
    shape_a : tuple[int, ...]
        Left-hand (or source) shape.
    shape_b : tuple[int, ...]
        Right-hand (or target) shape.
    """

    def __init__(
        self,
        shape_a: Sequence[int],
        shape_b: Sequence[int],
        message: Optional[str] = None,
    ) -> None:
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)
        super().__init__(
            message
            or f"shapes {self.shape_a} and {self.shape_b} cannot be broadcast together"
        )


class DimensionError(KeyNDError, ValueError):
    """
    Raised when an operation receives arrays of the wrong rank or extents.

    Examples include matrix multiplication on non-2D inputs, or inner
    dimensions that do not agree.

    Attributes
    ----------
    op : str
        The operation that rejected its inputs (e.g. ``"matmul"``).
    shapes : tuple[tuple[int, ...], ...]
        Shapes of the offending operands.
    """

    def __init__(
        self, op: str, message: str, shapes: Sequence[Sequence[int]] = ()
    ) -> None:
        super().__init__(f"{op}: {message}")
        self.op = op
        self.shapes = tuple(tuple(s) for s in shapes)


class UnsupportedRankError(DimensionError):
    """
    Raised when an operation has no definition for the given rank combination.

    Attributes
    ----------
    ranks : tuple[int, ...]
        Ranks of the operands.
    """

    def __init__(self, op: str, shapes: Sequence[Sequence[int]]) -> None:
        ranks = tuple(len(s) for s in shapes)
        dims = " and ".join(f"{r}D" for r in ranks)
        super().__init__(op, f"unsupported dimensions: {dims}", shapes)
        self.ranks = ranks


class SingularMatrixError(KeyNDError, ArithmeticError):
    """
    Raised when matrix inversion meets a zero or near-zero pivot.

    Attributes
    ----------
    row : int
        Pivot row at which elimination stopped.
    pivot : float
        The pivot value that fell under the singularity tolerance.
    tolerance : float
        Pivot magnitude below which the matrix is treated as singular.
    """

    def __init__(self, row: int, pivot: float, tolerance: float) -> None:
        super().__init__(
            f"matrix is singular (not invertible): pivot {pivot!r} at row {row} "
            f"is below tolerance {tolerance!r}"
        )
        self.row = row
        self.pivot = pivot
        self.tolerance = tolerance


class UnsupportedDTypeError(KeyNDError, TypeError):
    """
    Raised when an operation is invoked on a dtype it cannot handle.

    For example, reading a complex element through the Float64 accessor, or
    passing a non-boolean condition array to ``where``.

    Attributes
    ----------
    op : str
        The operation that was attempted.
    dtype : Any
        The rejected dtype.
    """

    def __init__(self, op: str, dtype: Any) -> None:
        super().__init__(f"unsupported dtype for {op}: {dtype}")
        self.op = op
        self.dtype = dtype
