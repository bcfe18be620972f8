"""
Memory/layout mixin defining axis reordering for tensors.

All three public operations reduce to a permutation of axes; the applied
order is recorded in ``meta["order"]``.
"""

from typing import Sequence

from .....domain._ops import OpKind
from .....domain._tensor import ITensor
from ....ndarray._shape_utils import normalize_axis


class TensorMixinMemory:
    """
    Mixin defining ``permute``, ``transpose`` and ``T`` for tensors.
    """

    def _record_permute(self: ITensor, out, order: Sequence[int], tag: str) -> "ITensor":
        ndim = self._node.value.ndim
        return self._from_op(
            out,
            OpKind.PERMUTE,
            (self,),
            tag=tag,
            meta={"order": tuple(normalize_axis(a, ndim) for a in order)},
        )

    def permute(self: ITensor, order: Sequence[int]) -> "ITensor":
        """
        Reorder axes so that output axis ``i`` is input axis ``order[i]``.

        Raises
        ------
        RankError
            If `order` is not a permutation of ``0..ndim-1``.

        Notes
        -----
        Backward rule: the upstream gradient is permuted by the inverse order.
        """
        order = tuple(order)
        out = self._node.value.permute(order)
        return self._record_permute(out, order, f"permute({self.tag})")

    def transpose(self: ITensor, dim0: int = -1, dim1: int = -2) -> "ITensor":
        """
        Swap two axes (the last two by default).

        Raises
        ------
        RankError
            If the tensor has fewer than two axes.
        """
        x = self._node.value
        out = x.transpose(dim0, dim1)
        a, b = normalize_axis(dim0, x.ndim), normalize_axis(dim1, x.ndim)
        order = list(range(x.ndim))
        order[a], order[b] = order[b], order[a]
        return self._record_permute(out, order, f"transpose({self.tag})")

    def T(self: ITensor) -> "ITensor":
        """Reverse every axis. ``x.T().T()`` equals ``x``."""
        order = tuple(reversed(range(self._node.value.ndim)))
        return self._record_permute(
            self._node.value.permute(order), order, f"T({self.tag})"
        )
