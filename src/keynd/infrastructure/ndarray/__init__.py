"""
Concrete NDArray implementation, creation functions and combine utilities.

Public API
----------
- ``NDArray``
- creation: ``zeros``, ``ones``, ``full``, ``from_slice``,
  ``from_slice_float64``, ``from_slice_int64``, ``from_slice_float32``,
  ``arange``, ``int_range``, ``eye``, ``from_numpy``
- combine: ``where``, ``concatenate``, ``stack``
"""

from ._ndarray import NDArray
from ._creation import (
    arange,
    eye,
    from_numpy,
    from_slice,
    from_slice_float32,
    from_slice_float64,
    from_slice_int64,
    full,
    int_range,
    ones,
    zeros,
)
from ._combine import concatenate, stack, where

__all__ = [
    NDArray.__name__,
    zeros.__name__,
    ones.__name__,
    full.__name__,
    from_slice.__name__,
    from_slice_float64.__name__,
    from_slice_int64.__name__,
    from_slice_float32.__name__,
    arange.__name__,
    int_range.__name__,
    eye.__name__,
    from_numpy.__name__,
    where.__name__,
    concatenate.__name__,
    stack.__name__,
]
