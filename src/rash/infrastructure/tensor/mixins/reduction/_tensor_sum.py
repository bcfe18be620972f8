"""
Backward rule for summation (``OpKind.SUM``).
"""

from ....autograd import ComputationNode, node_backward_path
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.SUM)
def tensor_sum_backward(node: ComputationNode, grad):
    (x,) = node.parents
    return (grad.reshape(node.meta["kept_shape"]).broadcast_to(x.value.shape),)
