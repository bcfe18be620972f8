"""
Linear-algebra mixin defining Tensor matrix multiplication.

This module declares :class:`TensorMixinLinalg`. The forward product is the
NDArray ``matmul`` (rank-1 promotion, batch broadcasting, BLAS-backed
multiply). The promoted operand shapes are recorded in ``meta`` so the
backward rule can work in the promoted space and then restore each operand's
own shape.
"""

from typing import Union

import numpy as np

from .....domain._ops import OpKind
from .....domain._tensor import ITensor
from ....ndarray import NDArray
from ....ndarray._shape_utils import matmul_shapes


class TensorMixinLinalg:
    """
    Mixin defining matrix multiplication for tensors.
    """

    def matmul(self: ITensor, other: Union["ITensor", NDArray, np.ndarray]) -> "ITensor":
        """
        Matrix product ``self @ other``. Tag: ``(a@b)``.

        Also callable as ``Tensor.matmul(a, b)``.

        Parameters
        ----------
        other : ITensor | NDArray | numpy.ndarray
            Right operand. Non-tensors are lifted to untracked constants.

        Returns
        -------
        ITensor
            Product tensor. Vector-vector products have shape ``(1,)``.

        Raises
        ------
        ShapeMismatchError
            If the contraction sizes differ or the batch prefixes do not
            broadcast.

        Notes
        -----
        Backward rule, in the rank-promoted space:
        - ``dL/dA = sum_to_shape(G @ B^T, A.shape)``
        - ``dL/dB = sum_to_shape(A^T @ G, B.shape)``
        """
        o = self._as_tensor_like(other)
        a, b = self._node.value, o._node.value
        pa, pb, promoted_out, _ = matmul_shapes(a.shape, b.shape)
        return self._from_op(
            a.matmul(b),
            OpKind.MATMUL,
            (self, o),
            tag=f"({self.tag}@{o.tag})",
            meta={"promoted_a": pa, "promoted_b": pb, "promoted_out": promoted_out},
        )

    def __matmul__(self: ITensor, other: Union["ITensor", NDArray]) -> "ITensor":
        return self.matmul(other)

    def __rmatmul__(self: ITensor, other: Union[NDArray, np.ndarray]) -> "ITensor":
        return self._as_tensor_like(other).matmul(self)
