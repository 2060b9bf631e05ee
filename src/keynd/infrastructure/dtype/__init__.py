"""
Element codecs for every supported dtype.

Public API
----------
- ``ElementCodec``    : abstract codec base with the dtype registry
- ``get_codec``       : resolve the codec for a dtype
- ``as_dtype``        : coerce a dtype-like value into a ``DType``
- ``to_numpy_dtype``  : engine dtype -> little-endian NumPy dtype
- ``from_numpy_dtype``: NumPy dtype -> engine dtype
"""

from ._codecs import (
    ElementCodec,
    as_dtype,
    from_numpy_dtype,
    get_codec,
    to_numpy_dtype,
)

__all__ = [
    ElementCodec.__name__,
    get_codec.__name__,
    as_dtype.__name__,
    to_numpy_dtype.__name__,
    from_numpy_dtype.__name__,
]
