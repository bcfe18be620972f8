"""
Activation operators composed on top of the tensor core.

Activations follow the same pattern as every built-in operation: compute the
forward value from NDArray primitives, cache what the backward rule needs on
the result node, and tag the node with an op whose rule is registered through
`node_backward_path`. Nothing in the core has to know about them.
"""

from ..domain._activation import Activation
from ..domain._ops import OpKind
from .autograd import ComputationNode, node_backward_path
from .tensor import Tensor


class ReLU(Activation):
    """
    ReLU activation.

    This operator applies the rectified linear unit elementwise:

        relu(x) = max(0, x)

    Notes
    -----
    The forward pass computes ``mask = (x > 0)`` as an untracked 0/1 array,
    caches it as ``saved["mask"]`` and returns ``mask * x``. The output tag
    is ``RELU(<tag of x>)``.
    """

    def forward(self, x: Tensor) -> Tensor:
        """
        Apply the ReLU activation to the input tensor.

        Parameters
        ----------
        x : Tensor
            Input tensor.

        Returns
        -------
        Tensor
            Output tensor containing relu(x) elementwise.
        """
        value = x.node.value
        mask = value > 0
        return x._from_op(
            mask * value,
            OpKind.RELU,
            (x,),
            tag=f"RELU({x.tag})",
            saved={"mask": mask},
        )


@node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.RELU)
def relu_backward(node: ComputationNode, grad):
    """
    d(relu)/dx = 1 if x > 0 else 0, read from the cached mask.
    """
    return (grad * node.saved["mask"],)
