"""
Arithmetic mixin defining elementwise Tensor operators.

This module declares :class:`TensorMixinArithmetic`, the mixin that provides
the public API for elementwise arithmetic on tensors. Forward values are
computed with broadcasting NDArray arithmetic; backward rules are registered
per op tag in the sibling ``_tensor_*`` modules.

Scalars, NDArrays and array-likes on either side of an operator are lifted to
untracked constant tensors.
"""

from typing import Union

from .....domain._ops import OpKind
from .....domain._tensor import ITensor

Number = Union[int, float]


class TensorMixinArithmetic:
    """
    Mixin defining elementwise arithmetic operations for tensors.

    Notes
    -----
    - Operands broadcast against each other. Gradients flowing back to a
      broadcast operand are summed down to its shape.
    - Tags compose as ``(a+b)``, ``(a-b)``, ``(a*b)``, ``(a/b)``.
    """

    def _binary(self: ITensor, other, op: OpKind, symbol: str, fn, reflected=False):
        a, b = self, self._as_tensor_like(other)
        if reflected:
            a, b = b, a
        return self._from_op(
            fn(a._node.value, b._node.value),
            op,
            (a, b),
            tag=f"({a.tag}{symbol}{b.tag})",
        )

    # ----------------------------
    # Addition
    # ----------------------------
    def __add__(self: ITensor, other: Union["ITensor", Number]) -> "ITensor":
        """
        Elementwise addition.

        Notes
        -----
        Backward rule:
        - ``d(a + b) / da = 1``
        - ``d(a + b) / db = 1``
        """
        return self._binary(other, OpKind.ADD, "+", lambda x, y: x + y)

    def __radd__(self: ITensor, other: Number) -> "ITensor":
        return self._binary(other, OpKind.ADD, "+", lambda x, y: x + y, reflected=True)

    # ----------------------------
    # Subtraction
    # ----------------------------
    def __sub__(self: ITensor, other: Union["ITensor", Number]) -> "ITensor":
        """
        Elementwise subtraction.

        Notes
        -----
        Backward rule:
        - ``d(a - b) / da = 1``
        - ``d(a - b) / db = -1``
        """
        return self._binary(other, OpKind.SUB, "-", lambda x, y: x - y)

    def __rsub__(self: ITensor, other: Number) -> "ITensor":
        return self._binary(other, OpKind.SUB, "-", lambda x, y: x - y, reflected=True)

    # ----------------------------
    # Multiplication
    # ----------------------------
    def __mul__(self: ITensor, other: Union["ITensor", Number]) -> "ITensor":
        """
        Elementwise multiplication.

        Notes
        -----
        Backward rule:
        - ``d(a * b) / da = b``
        - ``d(a * b) / db = a``
        """
        return self._binary(other, OpKind.MUL, "*", lambda x, y: x * y)

    def __rmul__(self: ITensor, other: Number) -> "ITensor":
        return self._binary(other, OpKind.MUL, "*", lambda x, y: x * y, reflected=True)

    # ----------------------------
    # True division
    # ----------------------------
    def __truediv__(self: ITensor, other: Union["ITensor", Number]) -> "ITensor":
        """
        Elementwise true division.

        Notes
        -----
        Backward rule:
        - ``d(a / b) / da = 1 / b``
        - ``d(a / b) / db = -a / (b^2)``
        """
        return self._binary(other, OpKind.DIV, "/", lambda x, y: x / y)

    def __rtruediv__(self: ITensor, other: Number) -> "ITensor":
        return self._binary(other, OpKind.DIV, "/", lambda x, y: x / y, reflected=True)
