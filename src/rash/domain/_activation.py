"""
Activation interface definitions.

This module defines the abstract base class for operators composed on top of
the tensor core. An activation computes its forward value from tensor and
array primitives, caches whatever its backward rule needs on the result node,
and tags the node with an op whose backward rule it registers.
"""

from abc import ABC, abstractmethod

from ._tensor import ITensor


class Activation(ABC):
    """
    Abstract base class for activation operators.

    Subclasses implement `forward`. Calling the instance is equivalent to
    calling `forward`.

    Notes
    -----
    The backward rule for an activation must be expressed purely in terms of
    values cached during `forward` and the incoming gradient.
    """

    @abstractmethod
    def forward(self, x: ITensor) -> ITensor:
        """
        Apply the activation to `x`.

        Parameters
        ----------
        x : ITensor
            Input tensor.

        Returns
        -------
        ITensor
            Output tensor with the same shape as `x`.
        """
        ...

    def __call__(self, x: ITensor) -> ITensor:
        return self.forward(x)
