"""
Backward rule for matrix multiplication (``OpKind.MATMUL``).

Gradients are computed on the rank-promoted operands, summed over any batch
axes the operand was broadcast along, and reshaped back to the operand's
original shape (dropping promoted axes).
"""

from ....autograd import ComputationNode, node_backward_path
from .....domain._ops import OpKind


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.MATMUL)
def tensor_matmul_backward(node: ComputationNode, grad):
    a, b = node.parents
    pa, pb = node.meta["promoted_a"], node.meta["promoted_b"]
    g2 = grad.reshape(node.meta["promoted_out"])

    grad_a = grad_b = None
    if a.requires_grad:
        b2 = b.value.reshape(pb)
        grad_a = g2.matmul(b2.transpose()).sum_to_shape(pa).reshape(a.value.shape)
    if b.requires_grad:
        a2 = a.value.reshape(pa)
        grad_b = a2.transpose().matmul(g2).sum_to_shape(pb).reshape(b.value.shape)
    return grad_a, grad_b
