"""
Comparison mixin defining elementwise Tensor comparison operators.

This module declares :class:`TensorMixinComparison`, the mixin providing
greater-than, greater-than-or-equal, less-than and less-than-or-equal.

Comparison operations are **non-differentiable**: every result has
``requires_grad=False`` and no parents. The outputs are numeric masks
(``1.0`` / ``0.0``) rather than booleans, which makes them convenient for use
in subsequent arithmetic expressions.
"""

from typing import Union

from .....domain._ops import OpKind
from .....domain._tensor import ITensor

Number = Union[int, float]
"""Scalar types accepted by Tensor comparison operators."""


class TensorMixinComparison:
    """
    Mixin defining elementwise comparison operations for tensors.

    Notes
    -----
    - Operands broadcast like arithmetic operands.
    - Comparison results never require gradients.
    """

    def _compare(self: ITensor, other, symbol: str, fn) -> "ITensor":
        o = self._as_tensor_like(other)
        mask = fn(self._node.value, o._node.value)
        return self._from_op(mask, OpKind.LEAF, (), tag=f"({self.tag}{symbol}{o.tag})")

    def __gt__(self: ITensor, other: Union["ITensor", Number]) -> "ITensor":
        """
        Compute the elementwise greater-than comparison.

        Returns
        -------
        ITensor
            ``1.0`` where ``self > other`` and ``0.0`` elsewhere.
        """
        return self._compare(other, ">", lambda x, y: x > y)

    def __ge__(self: ITensor, other: Union["ITensor", Number]) -> "ITensor":
        return self._compare(other, ">=", lambda x, y: x >= y)

    def __lt__(self: ITensor, other: Union["ITensor", Number]) -> "ITensor":
        return self._compare(other, "<", lambda x, y: x < y)

    def __le__(self: ITensor, other: Union["ITensor", Number]) -> "ITensor":
        return self._compare(other, "<=", lambda x, y: x <= y)
