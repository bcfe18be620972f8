"""
Backward rule for elementwise addition (``OpKind.ADD``).

The upstream gradient flows unchanged to both operands; broadcast operands
receive it summed down to their own shape during accumulation.
"""

from ....autograd import ComputationNode, node_backward_path
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.ADD)
def tensor_add_backward(node: ComputationNode, grad):
    return grad, grad
