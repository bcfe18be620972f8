"""
Backward rule for elementwise multiplication (``OpKind.MUL``).

Each operand receives the upstream gradient scaled by the other operand's
forward value.
"""

from ....autograd import ComputationNode, node_backward_path
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.MUL)
def tensor_mul_backward(node: ComputationNode, grad):
    a, b = node.parents
    return grad * b.value, grad * a.value
