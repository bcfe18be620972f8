"""
Matrix multiplication for NDArray.

Supported rank combinations follow NumPy ``matmul``: vector-vector (dot
product, shape ``(1,)``), vector-matrix, matrix-vector, matrix-matrix and
batched N-D operands whose leading axes broadcast. Shapes are validated with
`_shape_utils.matmul_shapes` before the BLAS-backed multiply runs.
"""

from typing import Any

import numpy as np

from .._shape_utils import matmul_shapes


class NDArrayMixinLinalg:
    """Mixin providing ``matmul`` and the ``@`` operator."""

    def matmul(self, other):
        """
        Matrix product of `self` and `other`.

        Rank-1 operands are promoted (``(K,)`` to ``(1, K)`` on the left and to
        ``(K, 1)`` on the right) and the promoted axes are removed from the
        result.

        Raises
        ------
        ShapeMismatchError
            If the contraction sizes differ or the batch prefixes do not
            broadcast.
        TypeError
            If `other` is not array-like.
        """
        o = self._coerce(other)
        if o is None:
            raise TypeError(f"matmul operand must be array-like, got {type(other)!r}")
        pa, pb, _, out_shape = matmul_shapes(self._shape, o.shape)
        res = np.matmul(self._data.reshape(pa), o._data.reshape(pb))
        return self._wrap(res, out_shape)

    def __matmul__(self, other: Any):
        if self._coerce(other) is None:
            return NotImplemented
        return self.matmul(other)

    def __rmatmul__(self, other: Any):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o.matmul(self)
