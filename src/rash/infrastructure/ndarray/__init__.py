"""
NumPy-backed n-dimensional array used as the value and gradient storage of
every autograd node.
"""

from ._ndarray import NDArray

__all__ = [
    NDArray.__name__,
]
