"""
Unary elementwise math mixin for NDArray.

Covers ``exp``, ``log``, ``sin``, ``cos``, ``sqrt``, ``pow``, ``abs`` and
``neg``.

Public API
----------
- ``NDArrayMixinUnary``
"""

from ._base import NDArrayMixinUnary

__all__ = [
    NDArrayMixinUnary.__name__,
]
