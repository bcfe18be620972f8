"""
Backward rule for negation (``OpKind.NEG``).
"""

from ....autograd import ComputationNode, node_backward_path
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.NEG)
def tensor_neg_backward(node: ComputationNode, grad):
    return (-grad,)
