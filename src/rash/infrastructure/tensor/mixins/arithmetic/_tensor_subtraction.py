"""
Backward rule for elementwise subtraction (``OpKind.SUB``).
"""

from ....autograd import ComputationNode, node_backward_path
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.SUB)
def tensor_sub_backward(node: ComputationNode, grad):
    return grad, -grad
