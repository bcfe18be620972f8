"""
Unary mixin defining elementwise unary Tensor operations.
"""

from .....domain._ops import OpKind
from .....domain._tensor import ITensor


class TensorMixinUnary:
    """
    Mixin defining negation, exponential and integer power for tensors.
    """

    def __neg__(self: ITensor) -> "ITensor":
        """
        Elementwise negation. Tag: ``(-a)``.

        Notes
        -----
        Backward rule: ``d(-a) / da = -1``.
        """
        return self._from_op(-self._node.value, OpKind.NEG, (self,), tag=f"(-{self.tag})")

    def exp(self: ITensor) -> "ITensor":
        """
        Elementwise natural exponential. Tag: ``exp(a)``.

        Notes
        -----
        Backward rule: ``d(exp(a)) / da = exp(a)``, read from the result's own
        forward value, so nothing extra is cached.
        """
        return self._from_op(
            self._node.value.exp(), OpKind.EXP, (self,), tag=f"exp({self.tag})"
        )

    def pow(self: ITensor, exponent: int) -> "ITensor":
        """
        Raise every element to an integer power. Tag: ``(a^n)``.

        Parameters
        ----------
        exponent : int
            Integer exponent (negative allowed).

        Raises
        ------
        TypeError
            If `exponent` is not an integer.

        Notes
        -----
        Backward rule: ``d(a^n) / da = n * a^(n-1)``; zero for ``n == 0``.
        """
        value = self._node.value.pow(exponent)
        return self._from_op(
            value,
            OpKind.POW,
            (self,),
            tag=f"({self.tag}^{int(exponent)})",
            meta={"exponent": int(exponent)},
        )

    def __pow__(self: ITensor, exponent: int) -> "ITensor":
        return self.pow(exponent)
