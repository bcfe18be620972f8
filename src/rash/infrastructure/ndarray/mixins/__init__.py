"""
Operation-family mixins composed into :class:`~rash.infrastructure.ndarray.NDArray`.

Each mixin relies on the host class providing the flat buffer (``_data``),
the shape (``_shape``), the ``_wrap`` constructor, operand coercion
(``_coerce``) and the shared ``_broadcast_binary`` procedure.
"""

from ._arithmetic import NDArrayMixinArithmetic
from ._comparison import NDArrayMixinComparison
from ._unary import NDArrayMixinUnary
from ._reduction import NDArrayMixinReduction
from ._memory import NDArrayMixinMemory
from ._linalg import NDArrayMixinLinalg

__all__ = [
    NDArrayMixinArithmetic.__name__,
    NDArrayMixinComparison.__name__,
    NDArrayMixinUnary.__name__,
    NDArrayMixinReduction.__name__,
    NDArrayMixinMemory.__name__,
    NDArrayMixinLinalg.__name__,
]
