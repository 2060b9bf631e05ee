from .arithmetic import NDArrayMixinArithmetic
from .comparison import NDArrayMixinComparison
from .memory import NDArrayMixinMemory
from .reduction import NDArrayMixinReduction
from .unary import NDArrayMixinUnary
from .._shape_and_indexing import NDArrayShapeAndIndexingMixin
from .._combine import NDArrayCombineMixin


class _NDArrayAllMixin(
    NDArrayMixinMemory,
    NDArrayShapeAndIndexingMixin,
    NDArrayMixinArithmetic,
    NDArrayMixinUnary,
    NDArrayMixinComparison,
    NDArrayMixinReduction,
    NDArrayCombineMixin,
):
    pass


__all__ = [_NDArrayAllMixin.__name__]
