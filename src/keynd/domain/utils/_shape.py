"""
Index, stride and shape arithmetic for strided arrays.

This module holds the pure integer arithmetic the array engine is built on:

- index and axis normalization (negative indices wrap once),
- C-contiguous stride computation and element counts,
- multi-index <-> byte offset / linear position conversion,
- reshape target resolution (a single ``-1`` placeholder), and
- the NumPy broadcasting rule for two shapes.

Nothing here touches a buffer; the functions operate on shape and stride
tuples only, so they can be shared by every array operation and tested in
isolation.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .._errors import AxisError, BroadcastError, IndexOutOfBoundsError, ShapeError

Shape = tuple[int, ...]


def normalize_shape_args(args: Sequence[Any]) -> Shape:
    """
    Accept a shape given either variadically or as a single sequence.

    ``f(2, 3)`` and ``f((2, 3))`` both yield ``(2, 3)``; ``f()`` yields ``()``.

    Parameters
    ----------
    args : Sequence[Any]
        The positional arguments received by the caller.

    Returns
    -------
    tuple[int, ...]
        The shape as a tuple of ints.
    """
    if len(args) == 1 and isinstance(args[0], (tuple, list)):
        args = args[0]
    return tuple(int(d) for d in args)


def validate_shape(shape: Sequence[int]) -> Shape:
    """
    Validate that every extent is a non-negative integer.

    Raises
    ------
    ShapeError
        If any extent is negative.
    """
    shape = tuple(int(d) for d in shape)
    for d in shape:
        if d < 0:
            raise ShapeError(
                f"negative dimensions are not allowed: {shape}", shape=shape
            )
    return shape


def compute_size(shape: Sequence[int]) -> int:
    """
    Total element count of ``shape``.

    The empty shape ``()`` is the degenerate case and holds no elements.
    """
    if len(shape) == 0:
        return 0
    size = 1
    for d in shape:
        size *= d
    return size


def compute_strides(shape: Sequence[int], itemsize: int) -> Shape:
    """
    C-contiguous (row-major) byte strides for ``shape``.

    ``stride[i] = itemsize * product(shape[i+1:])``.
    """
    strides = [0] * len(shape)
    stride = itemsize
    for i in range(len(shape) - 1, -1, -1):
        strides[i] = stride
        stride *= shape[i]
    return tuple(strides)


def normalize_index(index: int, extent: int, axis: Optional[int] = None) -> int:
    """
    Wrap a negative index once and bounds-check it.

    Parameters
    ----------
    index : int
        Index as supplied by the caller; may be negative.
    extent : int
        Extent of the addressed axis.
    axis : Optional[int], optional
        Axis number, used only for the error message.

    Returns
    -------
    int
        The index in ``[0, extent)``.

    Raises
    ------
    IndexOutOfBoundsError
        If the index is still out of range after wrapping.
    """
    i = int(index)
    if i < 0:
        i += extent
    if i < 0 or i >= extent:
        raise IndexOutOfBoundsError(index, extent, axis)
    return i


def normalize_axis(axis: int, ndim: int) -> int:
    """
    Wrap a negative axis once and bounds-check it against ``ndim``.

    Raises
    ------
    AxisError
        If the axis is out of range.
    """
    a = int(axis)
    if a < 0:
        a += ndim
    if a < 0 or a >= ndim:
        raise AxisError(axis, ndim)
    return a


def ravel_offset(
    indices: Sequence[int], shape: Sequence[int], strides: Sequence[int]
) -> int:
    """
    Byte offset of the element at ``indices``.

    Each index is normalized against its axis, then the offset is
    ``sum(indices[k] * strides[k])``.

    Raises
    ------
    ShapeError
        If ``len(indices) != len(shape)``.
    IndexOutOfBoundsError
        If any index is out of bounds.
    """
    if len(indices) != len(shape):
        raise ShapeError(
            f"expected {len(shape)} indices, got {len(indices)}",
            shape=tuple(shape),
            expected=len(shape),
        )
    offset = 0
    for axis, (idx, extent, stride) in enumerate(zip(indices, shape, strides)):
        offset += normalize_index(idx, extent, axis) * stride
    return offset


def unravel_index(flat: int, shape: Sequence[int]) -> list[int]:
    """
    Row-major multi-index of linear position ``flat``.

    The last axis varies fastest.
    """
    indices = [0] * len(shape)
    remaining = flat
    for i in range(len(shape) - 1, -1, -1):
        indices[i] = remaining % shape[i]
        remaining //= shape[i]
    return indices


def resolve_shape(new_shape: Sequence[int], size: int) -> Shape:
    """
    Resolve a reshape target against an element count.

    At most one extent may be ``-1``; it is replaced by
    ``size / product(others)``.

    Parameters
    ----------
    new_shape : Sequence[int]
        Requested shape, possibly containing one ``-1``.
    size : int
        Element count of the array being reshaped.

    Returns
    -------
    tuple[int, ...]
        The concrete target shape.

    Raises
    ------
    ShapeError
        If more than one ``-1`` is given, another negative extent is given,
        the placeholder cannot be inferred, or the element counts differ.
    """
    shape = [int(d) for d in new_shape]
    infer_at = -1
    known = 1
    for i, d in enumerate(shape):
        if d == -1:
            if infer_at != -1:
                raise ShapeError(
                    "can only specify one unknown dimension", shape=shape
                )
            infer_at = i
        elif d < 0:
            raise ShapeError(
                f"negative dimensions not allowed except -1: {d}", shape=shape
            )
        else:
            known *= d

    if infer_at != -1:
        if known == 0 or size % known != 0:
            raise ShapeError(
                f"cannot reshape array of size {size} into shape {tuple(shape)}",
                shape=shape,
                expected=size,
            )
        shape[infer_at] = size // known

    new_size = compute_size(shape)
    if new_size != size:
        raise ShapeError(
            f"cannot reshape array of size {size} into shape {tuple(shape)} "
            f"(size {new_size})",
            shape=shape,
            expected=size,
        )
    return tuple(shape)


def broadcast_shapes(shape_a: Sequence[int], shape_b: Sequence[int]) -> Shape:
    """
    Joint shape of two shapes under NumPy broadcasting rules.

    Both shapes are right-aligned and the shorter one is padded on the left
    with 1s. Along each aligned axis the extents must be equal, or one of
    them must be 1 (and is replaced by the other).

    Parameters
    ----------
    shape_a, shape_b : Sequence[int]
        The operand shapes.

    Returns
    -------
    tuple[int, ...]
        The broadcast shape.

    Raises
    ------
    BroadcastError
        If some aligned pair of extents differs and neither is 1.
    """
    n = max(len(shape_a), len(shape_b))
    a = (1,) * (n - len(shape_a)) + tuple(shape_a)
    b = (1,) * (n - len(shape_b)) + tuple(shape_b)

    result = []
    for da, db in zip(a, b):
        if da == db:
            result.append(da)
        elif da == 1:
            result.append(db)
        elif db == 1:
            result.append(da)
        else:
            raise BroadcastError(shape_a, shape_b)
    return tuple(result)
