"""
N-dimensional array interface definitions.

This module defines the domain-level interface for array-like objects using
structural typing. The interface captures the backend-agnostic surface that
the linear-algebra and random-sampling components rely on: introspection of
shape/strides/dtype, typed element access by multi-index, and the handful of
shape operations they call.

Notes
-----
The concrete implementation (``keynd.infrastructure.ndarray.NDArray``)
exposes a much larger public API. Components that only need to read and
write elements should type against :class:`INDArray` so alternative storage
backends can satisfy the same contract.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, Union, runtime_checkable

from typing_extensions import Self

from ._dtype import DType

Number = Union[int, float]


@runtime_checkable
class INDArray(Protocol):
    """
    Strided N-dimensional array interface.

    An ``INDArray`` is a typed view of a single contiguous byte buffer. Each
    element occupies ``dtype.itemsize`` bytes and is addressed by a
    multi-index whose byte offset is ``sum(index[k] * strides[k])``.

    Notes
    -----
    - Every accessor accepts negative indices, which wrap once.
    - Implementations must not alias buffers between arrays: every operation
      returning an array returns a fresh buffer.
    """

    # ---------------------------------------------------------------------
    # Introspection
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the extents of each axis.

        Returns
        -------
        tuple[int, ...]
            The array's shape.
        """
        ...

    @property
    def strides(self) -> tuple[int, ...]:
        """
        Return the byte step per unit index along each axis.

        Returns
        -------
        tuple[int, ...]
            The array's strides, in bytes.
        """
        ...

    @property
    def dtype(self) -> DType:
        """Return the element encoding."""
        ...

    @property
    def size(self) -> int:
        """Return the total number of elements."""
        ...

    @property
    def ndim(self) -> int:
        """Return the number of axes."""
        ...

    @property
    def itemsize(self) -> int:
        """Return the byte width of one element."""
        ...

    # ---------------------------------------------------------------------
    # Element access
    # ---------------------------------------------------------------------
    def get_float64(self, *indices: int) -> float:
        """
        Read the element at ``indices`` converted to float.

        Raises
        ------
        ShapeError
            If the number of indices does not match ``ndim``.
        IndexOutOfBoundsError
            If an index is out of bounds.
        UnsupportedDTypeError
            If the array holds complex elements.
        """
        ...

    def get_int64(self, *indices: int) -> int:
        """Read the element at ``indices`` converted to int."""
        ...

    def set_float64(self, value: float, *indices: int) -> None:
        """Convert ``value`` to the array's dtype and store it at ``indices``."""
        ...

    def set_int64(self, value: int, *indices: int) -> None:
        """Convert ``value`` to the array's dtype and store it at ``indices``."""
        ...

    def item(self, *indices: int) -> Any:
        """Read the element at ``indices`` as a native Python value."""
        ...

    def set_item(self, value: Any, *indices: int) -> None:
        """Store a native Python value at ``indices``."""
        ...

    # ---------------------------------------------------------------------
    # Shape operations
    # ---------------------------------------------------------------------
    def reshape(self, *shape: Any) -> Self:
        """Return a copy with a new shape (one ``-1`` may be inferred)."""
        ...

    def transpose(self, *axes: int) -> Self:
        """Return a copy with axes permuted (reversed by default)."""
        ...

    def flatten(self) -> Self:
        """Return a 1-D copy."""
        ...

    def copy(self) -> Self:
        """Return a deep copy with a fresh buffer."""
        ...

    def broadcast_to(self, shape: Sequence[int]) -> Self:
        """Materialize a copy broadcast to ``shape``."""
        ...
