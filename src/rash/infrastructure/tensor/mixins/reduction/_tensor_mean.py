"""
Backward rule for the arithmetic mean (``OpKind.MEAN``).

Every input element contributed ``1 / count`` of its reduced group, where
``count`` is the number of reduced elements recorded at forward time.
"""

from ....autograd import ComputationNode, node_backward_path
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.MEAN)
def tensor_mean_backward(node: ComputationNode, grad):
    (x,) = node.parents
    expanded = grad.reshape(node.meta["kept_shape"]).broadcast_to(x.value.shape)
    return (expanded / node.meta["count"],)
