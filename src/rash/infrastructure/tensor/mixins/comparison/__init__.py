"""
Comparison mixin for Tensor operations.

Comparisons are not differentiable, so this package registers no backward
rules.
"""

from ._base import TensorMixinComparison

__all__ = [
    TensorMixinComparison.__name__,
]
