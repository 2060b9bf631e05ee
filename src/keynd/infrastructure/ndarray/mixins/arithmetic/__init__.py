"""
Arithmetic mixin for NDArray.

Covers addition, subtraction, multiplication and true division with NumPy
broadcasting, their scalar forms, and the matching Python operators
(``+``, ``-``, ``*``, ``/`` and ``@``).

Public API
----------
Only the mixin class is exported:

- ``NDArrayMixinArithmetic``
"""

from ._base import NDArrayMixinArithmetic

__all__ = [
    NDArrayMixinArithmetic.__name__,
]
