"""
Backward rule for integer power (``OpKind.POW``).

The exponent is stored in ``node.meta["exponent"]``.
"""

from ....autograd import ComputationNode, node_backward_path
from ....ndarray import NDArray
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.POW)
def tensor_pow_backward(node: ComputationNode, grad):
    (x,) = node.parents
    n = node.meta["exponent"]
    if n == 0:
        return (NDArray.zeros(x.value.shape),)
    return (grad * x.value.pow(n - 1) * n,)
