"""
Memory/copy-related mixin for NDArray.

This module defines :class:`NDArrayMixinMemory`, which groups operations that
move whole buffers around without applying arithmetic:

- copying and explicit dtype conversion (``copy``, ``astype``),
- broadcasting materialization (``broadcast_to``),
- export to bytes, Python lists and NumPy arrays, and import from NumPy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

import numpy as np

from .....domain._errors import BroadcastError, UnsupportedDTypeError
from .....domain.utils._shape import (
    compute_size,
    normalize_shape_args,
    validate_shape,
)
from ....dtype._codecs import as_dtype, from_numpy_dtype, to_numpy_dtype

if TYPE_CHECKING:
    from ..._ndarray import NDArray


class NDArrayMixinMemory:
    """
    Mixin implementing copy, conversion and broadcasting materialization.
    """

    # ----------------------------
    # Copies
    # ----------------------------
    def copy(self: "NDArray") -> "NDArray":
        """
        Return a deep copy with a freshly allocated buffer.
        """
        return type(self)._wrap_buffer(self.shape, self._dtype, bytearray(self._buffer))

    def __copy__(self: "NDArray") -> "NDArray":
        return self.copy()

    def __deepcopy__(self: "NDArray", memo: dict) -> "NDArray":
        return self.copy()

    def astype(self: "NDArray", dtype: Any) -> "NDArray":
        """
        Convert every element to another dtype.

        Each element is decoded with this array's codec and re-encoded with
        the target codec, so the usual conversion rules apply (truncation and
        wrap-around into integers, non-zero into ``True``).

        Parameters
        ----------
        dtype : DType | str
            Target element encoding.

        Returns
        -------
        NDArray
            New array of the same shape.

        Raises
        ------
        ValueError
            If a non-finite float is converted to an integer dtype.
        UnsupportedDTypeError
            If a complex array is converted to a real dtype.
        """
        target = as_dtype(dtype)
        if target is self._dtype:
            return self.copy()
        return type(self)._from_values(self.shape, target, self._values())

    # ----------------------------
    # Broadcasting
    # ----------------------------
    def broadcast_to(self: "NDArray", shape: Sequence[int]) -> "NDArray":
        """
        Materialize this array at a broadcast target shape.

        The source is right-aligned against ``shape``; each source axis must
        either equal the aligned target axis or have extent 1, in which case
        every target position along it reads source index 0.

        Parameters
        ----------
        shape : Sequence[int]
            Target shape.

        Returns
        -------
        NDArray
            A full copy at ``shape``. Elements are copied as raw bytes.

        Raises
        ------
        BroadcastError
            If the source has more axes than the target, or some axis is
            neither 1 nor equal to its target extent.
        """
        target = validate_shape(normalize_shape_args((shape,)))
        src = self.shape
        if len(src) > len(target):
            raise BroadcastError(
                src,
                target,
                f"cannot broadcast shape {src} to {target}: source has more "
                f"dimensions than target",
            )
        offset = len(target) - len(src)
        for j, d in enumerate(src):
            if d != 1 and d != target[offset + j]:
                raise BroadcastError(
                    src,
                    target,
                    f"cannot broadcast shape {src} to {target}: axis {j} has "
                    f"extent {d}, target has {target[offset + j]}",
                )

        cls = type(self)
        if self.size == 0:
            if compute_size(target) > 0:
                raise BroadcastError(
                    src, target, "cannot broadcast an empty array to a non-empty shape"
                )
            return cls(target, self._dtype)
        data = np.broadcast_to(self._raw_view(), target).tobytes()
        return cls._wrap_buffer(target, self._dtype, bytearray(data))

    # ----------------------------
    # Export / import
    # ----------------------------
    def tobytes(self: "NDArray") -> bytes:
        """Return a copy of the raw little-endian buffer."""
        return bytes(self._buffer)

    def to_numpy(self: "NDArray") -> np.ndarray:
        """
        Return a NumPy array holding a copy of this array's elements.

        The NumPy dtype is the little-endian counterpart of :attr:`dtype`.
        The degenerate empty shape ``()`` converts to an empty 1-D array.
        """
        return self._raw_view().copy()

    @classmethod
    def from_numpy(cls, array: Any) -> "NDArray":
        """
        Build an array from a NumPy array (or anything ``np.asarray`` accepts).

        A 0-d NumPy array becomes a one-element array of shape ``(1,)``.

        Raises
        ------
        UnsupportedDTypeError
            If the NumPy dtype has no engine counterpart.
        """
        arr = np.asarray(array)
        dtype = from_numpy_dtype(arr.dtype)
        shape = arr.shape if arr.ndim > 0 else (1,)
        data = np.ascontiguousarray(arr, dtype=to_numpy_dtype(dtype)).tobytes()
        return cls._wrap_buffer(shape, dtype, bytearray(data))

    def to_list_float64(self: "NDArray") -> list[float]:
        """Return every element as a float, in row-major order."""
        return self._float64_values("to_list_float64").tolist()

    def to_list_int64(self: "NDArray") -> list[int]:
        """
        Return every element as an int, in row-major order.

        Raises
        ------
        ValueError
            If a float element is not finite.
        UnsupportedDTypeError
            If the array is complex.
        """
        if self._dtype.is_complex():
            raise UnsupportedDTypeError("to_list_int64", self._dtype)
        values = self._values()
        if values.dtype.kind == "f":
            return [
                self._codec.to_int(self._buffer, i * self.itemsize)
                for i in range(self.size)
            ]
        return [int(v) for v in values.tolist()]

    def tolist(self: "NDArray") -> Any:
        """
        Return the elements as nested Python lists of native values.

        The empty shape ``()`` yields ``[]``.
        """
        return self._nd_values().tolist()
