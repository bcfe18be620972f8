"""
Infrastructure layer: NumPy-backed arrays, the autograd core, the Tensor
handle and composed operators.
"""

from .ndarray import NDArray
from .autograd import ComputationNode, node_backward_path
from .tensor import Tensor
from ._activations import ReLU

__all__ = [
    NDArray.__name__,
    ComputationNode.__name__,
    "node_backward_path",
    Tensor.__name__,
    ReLU.__name__,
]
