"""
Domain layer: backend-agnostic contracts (errors, protocols, op tags).
"""

from ._errors import (
    RashError,
    ShapeMismatchError,
    BroadcastError,
    RankError,
    ScalarConversionError,
)
from ._ops import OpKind
from ._ndarray import INDArray
from ._tensor import ITensor
from ._activation import Activation

__all__ = [
    RashError.__name__,
    ShapeMismatchError.__name__,
    BroadcastError.__name__,
    RankError.__name__,
    ScalarConversionError.__name__,
    OpKind.__name__,
    INDArray.__name__,
    ITensor.__name__,
    Activation.__name__,
]
