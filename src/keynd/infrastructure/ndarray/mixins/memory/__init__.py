"""
Memory, copy and broadcasting mixin for NDArray.

Public API
----------
- ``NDArrayMixinMemory``
"""

from ._base import NDArrayMixinMemory

__all__ = [
    NDArrayMixinMemory.__name__,
]
