"""
KeyND: an N-dimensional array engine with NumPy-style semantics.

Arrays are typed, strided views over one exclusively owned byte buffer.
The package supports thirteen element encodings, broadcasting, shape
transforms, elementwise math, reductions, linear algebra (``keynd.linalg``)
and seeded random sampling (``keynd.random``).

Examples
--------
>>> import keynd
>>> a = keynd.from_slice_float64([1, 2, 3, 4, 5, 6], 2, 3)
>>> b = keynd.from_slice_float64([10, 20, 30], 3)
>>> (a + b).tolist()
[[11.0, 22.0, 33.0], [14.0, 25.0, 36.0]]
"""

from .domain._dtype import DType
from .domain._errors import (
    AxisError,
    BroadcastError,
    DimensionError,
    IndexOutOfBoundsError,
    KeyNDError,
    ShapeError,
    SingularMatrixError,
    UnsupportedDTypeError,
    UnsupportedRankError,
)
from .domain._ndarray import INDArray
from .domain.utils._shape import broadcast_shapes
from .infrastructure._config import EngineConfig, get_config, set_config
from .infrastructure.ndarray import (
    NDArray,
    arange,
    concatenate,
    eye,
    from_numpy,
    from_slice,
    from_slice_float32,
    from_slice_float64,
    from_slice_int64,
    full,
    int_range,
    ones,
    stack,
    where,
    zeros,
)
from . import linalg, random

bool_ = DType.BOOL
int8 = DType.INT8
int16 = DType.INT16
int32 = DType.INT32
int64 = DType.INT64
uint8 = DType.UINT8
uint16 = DType.UINT16
uint32 = DType.UINT32
uint64 = DType.UINT64
float32 = DType.FLOAT32
float64 = DType.FLOAT64
complex64 = DType.COMPLEX64
complex128 = DType.COMPLEX128

__version__ = "0.1.0"

__all__ = [
    "DType",
    "INDArray",
    "NDArray",
    "bool_",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float32",
    "float64",
    "complex64",
    "complex128",
    "zeros",
    "ones",
    "full",
    "from_slice",
    "from_slice_float64",
    "from_slice_int64",
    "from_slice_float32",
    "arange",
    "int_range",
    "eye",
    "from_numpy",
    "broadcast_shapes",
    "where",
    "concatenate",
    "stack",
    "KeyNDError",
    "ShapeError",
    "IndexOutOfBoundsError",
    "AxisError",
    "BroadcastError",
    "DimensionError",
    "UnsupportedRankError",
    "SingularMatrixError",
    "UnsupportedDTypeError",
    "EngineConfig",
    "get_config",
    "set_config",
    "linalg",
    "random",
]
