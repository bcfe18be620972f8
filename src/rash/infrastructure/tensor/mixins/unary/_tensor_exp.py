"""
Backward rule for the elementwise exponential (``OpKind.EXP``).

The derivative of ``exp`` is the forward result itself, which the node
already holds as its value.
"""

from ....autograd import ComputationNode, node_backward_path
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.EXP)
def tensor_exp_backward(node: ComputationNode, grad):
    return (grad * node.value,)
