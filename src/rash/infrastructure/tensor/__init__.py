"""
Gradient-tracking Tensor handle and its operation mixins.
"""

from ._tensor import Tensor

__all__ = [
    Tensor.__name__,
]
