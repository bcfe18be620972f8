"""
Backward rule for elementwise true division (``OpKind.DIV``).

For ``y = a / b``:

- ``dL/da = g / b``
- ``dL/db = -g * a / b^2``

Division by zero propagates ``inf`` / ``nan`` into the gradients without
raising.
"""

from ....autograd import ComputationNode, node_backward_path
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.DIV)
def tensor_truediv_backward(node: ComputationNode, grad):
    a, b = node.parents
    grad_a = grad / b.value if a.requires_grad else None
    grad_b = -(grad * a.value) / (b.value * b.value) if b.requires_grad else None
    return grad_a, grad_b
