"""
Reduction mixin for NDArray.

Public API
----------
Only the mixin class is exported as part of the public interface:

- ``NDArrayMixinReduction``
"""

from ._base import NDArrayMixinReduction

__all__ = [
    NDArrayMixinReduction.__name__,
]
