"""
Linear-algebra mixin and backward rule for Tensor operations.

- ``matmul`` / ``@`` -> ``OpKind.MATMUL``
"""

from ._tensor_matmul import *
from ._base import TensorMixinLinalg

__all__ = [
    TensorMixinLinalg.__name__,
]
