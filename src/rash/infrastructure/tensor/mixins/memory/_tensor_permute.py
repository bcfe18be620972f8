"""
Backward rule for axis permutation (``OpKind.PERMUTE``).

If the forward pass applied ``order``, the gradient is mapped back with the
inverse permutation ``inv`` where ``inv[order[i]] = i``.
"""

from ....autograd import ComputationNode, node_backward_path
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.PERMUTE)
def tensor_permute_backward(node: ComputationNode, grad):
    order = node.meta["order"]
    inverse = [0] * len(order)
    for i, axis in enumerate(order):
        inverse[axis] = i
    return (grad.permute(inverse),)
