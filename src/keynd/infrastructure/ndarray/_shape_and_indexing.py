"""
NDArray shape, indexing and structural ops mixin.

This module defines `NDArrayShapeAndIndexingMixin`, a cohesive mixin that
implements shape-transforming and indexing-related NDArray methods.

Design notes
------------
- This mixin is intended to be inherited by the concrete `NDArray` class.
- To avoid circular imports, the implementation does not import `NDArray`
  directly; new arrays are built via `type(self)`.
- Every transform copies. Element bytes are moved verbatim (never decoded),
  so no value is rounded or reinterpreted by a shape change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...domain._errors import AxisError, DimensionError, ShapeError
from ...domain.utils._shape import (
    normalize_axis,
    normalize_shape_args,
    resolve_shape,
)

if TYPE_CHECKING:
    from ._ndarray import NDArray


class NDArrayShapeAndIndexingMixin:
    """
    Shape and indexing operations for the concrete NDArray implementation.

    This mixin groups together NDArray methods that primarily:
    - change the logical shape of arrays (reshape, transpose, squeeze, ...),
    - provide subscript access to single elements (``arr[i, j]``).

    Notes
    -----
    The host class must provide ``_buffer``, ``_shape``, ``_dtype``,
    ``_raw_view`` and ``_wrap_buffer``.
    """

    # ----------------------------
    # Subscript access
    # ----------------------------
    def __getitem__(self: "NDArray", key: Any) -> Any:
        """
        Read one element by a full integer multi-index.

        ``arr[i, j]`` is equivalent to ``arr.item(i, j)``; negative indices
        wrap once. Slices and partial indexing are not supported.
        """
        key = key if isinstance(key, tuple) else (key,)
        _require_integer_key(key)
        return self.item(*key)

    def __setitem__(self: "NDArray", key: Any, value: Any) -> None:
        """Store one element by a full integer multi-index."""
        key = key if isinstance(key, tuple) else (key,)
        _require_integer_key(key)
        self.set_item(value, *key)

    # ----------------------------
    # Reshape family
    # ----------------------------
    def reshape(self: "NDArray", *shape: Any) -> "NDArray":
        """
        Return a copy of this array with a new shape.

        Parameters
        ----------
        *shape : int or Sequence[int]
            Target shape, passed variadically (``reshape(2, 3)``) or as one
            sequence (``reshape((2, 3))``). At most one extent may be ``-1``
            and is inferred from the element count.

        Returns
        -------
        NDArray
            New array with the same dtype, C-contiguous strides and a copy of
            the data.

        Raises
        ------
        ShapeError
            If the element counts differ or the placeholder is invalid.
        """
        new_shape = resolve_shape(normalize_shape_args(shape), self.size)
        return type(self)._wrap_buffer(new_shape, self._dtype, bytearray(self._buffer))

    def flatten(self: "NDArray") -> "NDArray":
        """Return a 1-D copy of this array."""
        return self.reshape(self.size)

    def ravel(self: "NDArray") -> "NDArray":
        """Return a 1-D copy of this array (same as :meth:`flatten`)."""
        return self.flatten()

    def squeeze(self: "NDArray") -> "NDArray":
        """
        Remove every axis of extent 1.

        If all axes have extent 1 the result keeps a minimum rank of one and
        has shape ``(1,)``.
        """
        if self.ndim == 0:
            return self.copy()
        new_shape = [d for d in self.shape if d != 1] or [1]
        return self.reshape(new_shape)

    def expand_dims(self: "NDArray", axis: int) -> "NDArray":
        """
        Insert a new axis of extent 1 at ``axis``.

        ``axis`` is normalized against ``ndim + 1``, so ``-1`` appends a
        trailing axis.

        Raises
        ------
        AxisError
            If ``axis`` is outside ``[-(ndim + 1), ndim]``.
        ShapeError
            If this is the degenerate empty-shape array, which has no
            elements to place along a new unit axis.
        """
        if self.ndim == 0:
            raise ShapeError(
                "cannot expand_dims the degenerate empty-shape array", shape=()
            )
        axis = normalize_axis(axis, self.ndim + 1)
        new_shape = list(self.shape)
        new_shape.insert(axis, 1)
        return type(self)._wrap_buffer(
            tuple(new_shape), self._dtype, bytearray(self._buffer)
        )

    # ----------------------------
    # Axis permutation
    # ----------------------------
    def transpose(self: "NDArray", *axes: Any) -> "NDArray":
        """
        Permute the axes of this array.

        Parameters
        ----------
        *axes : int or Sequence[int]
            Permutation of ``range(ndim)``; negative axes are allowed. When
            omitted, the axis order is reversed.

        Returns
        -------
        NDArray
            New array whose data is physically reordered into C order.

        Raises
        ------
        ShapeError
            If the number of axes does not equal ``ndim``.
        AxisError
            If an axis is out of range or repeated.
        """
        ndim = self.ndim
        if not axes:
            perm = tuple(range(ndim - 1, -1, -1))
        else:
            requested = normalize_shape_args(axes)
            if len(requested) != ndim:
                raise ShapeError(
                    f"axes don't match array: expected {ndim} axes, "
                    f"got {len(requested)}",
                    shape=self.shape,
                    expected=ndim,
                )
            perm = tuple(normalize_axis(a, ndim) for a in requested)
            if len(set(perm)) != ndim:
                raise AxisError(
                    requested, ndim, f"repeated axis in transpose: {requested}"
                )

        new_shape = tuple(self.shape[a] for a in perm)
        if self.size == 0:
            return type(self)._wrap_buffer(new_shape, self._dtype, bytearray())
        data = self._raw_view().transpose(perm).tobytes()
        return type(self)._wrap_buffer(new_shape, self._dtype, bytearray(data))

    def swapaxes(self: "NDArray", axis1: int, axis2: int) -> "NDArray":
        """
        Interchange two axes.

        Raises
        ------
        AxisError
            If either axis is out of range.
        """
        a = normalize_axis(axis1, self.ndim)
        b = normalize_axis(axis2, self.ndim)
        perm = list(range(self.ndim))
        perm[a], perm[b] = perm[b], perm[a]
        return self.transpose(perm)

    @property
    def T(self: "NDArray") -> "NDArray":
        """
        Matrix transpose of a 2-D array.

        Raises
        ------
        DimensionError
            If the array is not 2-D.
        """
        if self.ndim != 2:
            raise DimensionError(
                "T",
                f"requires a 2-D array, got {self.ndim}-D shape {self.shape}",
                [self.shape],
            )
        return self.transpose()


def _require_integer_key(key: tuple) -> None:
    for k in key:
        if isinstance(k, bool) or not hasattr(k, "__index__"):
            raise TypeError(
                f"only full integer multi-indices are supported, got {key!r}"
            )
