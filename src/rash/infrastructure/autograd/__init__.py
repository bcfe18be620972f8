"""
Autograd core: computation nodes, the backward-rule registry and the
reverse-mode traversal engine.
"""

from ._node import ComputationNode
from ._node_builder import node_backward_path
from ._engine import backward

__all__ = [
    ComputationNode.__name__,
    "node_backward_path",
    backward.__name__,
]
