"""
Element encodings supported by the array engine.

This module defines :class:`DType`, a closed enumeration of the element
encodings an array buffer may hold, together with their fixed byte widths.
It is a pure lookup table with no state and no dependency on numerical
backends; the per-dtype encode/decode routines live in the infrastructure
layer (``keynd.infrastructure.dtype``).
"""

from __future__ import annotations

from enum import Enum


class DType(Enum):
    """
    Enumeration of element encodings.

    Each member's value is its canonical lowercase name. The byte width of
    one element is available via :attr:`itemsize`.

    Attributes
    ----------
    BOOL, INT8, INT16, INT32, INT64 : DType
        Boolean and signed integer encodings.
    UINT8, UINT16, UINT32, UINT64 : DType
        Unsigned integer encodings.
    FLOAT32, FLOAT64 : DType
        IEEE-754 binary32 / binary64.
    COMPLEX64, COMPLEX128 : DType
        Pairs of FLOAT32 / FLOAT64 (real, imaginary).
    """

    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"keynd.{self.value}"

    @property
    def itemsize(self) -> int:
        """
        Size in bytes of one element of this dtype.

        Returns
        -------
        int
            Element width in bytes.
        """
        return _ITEMSIZE[self]

    def is_bool(self) -> bool:
        """Return True for the boolean encoding."""
        return self is DType.BOOL

    def is_int(self) -> bool:
        """Return True for signed and unsigned integer encodings."""
        return self in _SIGNED_INTS or self in _UNSIGNED_INTS

    def is_signed_int(self) -> bool:
        """Return True for signed integer encodings."""
        return self in _SIGNED_INTS

    def is_unsigned_int(self) -> bool:
        """Return True for unsigned integer encodings."""
        return self in _UNSIGNED_INTS

    def is_float(self) -> bool:
        """Return True for real floating point encodings."""
        return self is DType.FLOAT32 or self is DType.FLOAT64

    def is_complex(self) -> bool:
        """Return True for complex encodings."""
        return self is DType.COMPLEX64 or self is DType.COMPLEX128

    @classmethod
    def from_name(cls, name: str) -> "DType":
        """
        Parse a dtype from its canonical name.

        Parameters
        ----------
        name : str
            Lowercase dtype name such as ``"float64"`` or ``"uint8"``.

        Returns
        -------
        DType
            The matching enum member.

        Raises
        ------
        ValueError
            If ``name`` is not a supported dtype name.
        """
        try:
            return cls(name)
        except ValueError as e:
            available = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unsupported dtype name: {name!r}. Available: {available}"
            ) from e


_ITEMSIZE = {
    DType.BOOL: 1,
    DType.INT8: 1,
    DType.INT16: 2,
    DType.INT32: 4,
    DType.INT64: 8,
    DType.UINT8: 1,
    DType.UINT16: 2,
    DType.UINT32: 4,
    DType.UINT64: 8,
    DType.FLOAT32: 4,
    DType.FLOAT64: 8,
    DType.COMPLEX64: 8,
    DType.COMPLEX128: 16,
}

_SIGNED_INTS = frozenset({DType.INT8, DType.INT16, DType.INT32, DType.INT64})
_UNSIGNED_INTS = frozenset({DType.UINT8, DType.UINT16, DType.UINT32, DType.UINT64})
