"""
Axis-reordering mixin and backward rule for Tensor operations.

``permute``, ``transpose`` and ``T`` all record ``OpKind.PERMUTE`` with the
applied axis order, so a single rule (``_tensor_permute``) covers them.
"""

from ._tensor_permute import *
from ._base import TensorMixinMemory

__all__ = [
    TensorMixinMemory.__name__,
]
