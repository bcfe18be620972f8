"""
Reduction mixin defining Tensor reductions.

This module declares :class:`TensorMixinReduction`, which provides `sum` and
`mean` over any set of axes. The reduced axes and the keepdims-shaped view of
the result are recorded in the node's ``meta`` so that the backward rules can
expand the upstream gradient back to the input shape.
"""

from typing import Optional, Sequence, Union

from .....domain._ops import OpKind
from .....domain._tensor import ITensor
from ....ndarray._shape_utils import normalize_axes, numel


def _reduction_meta(shape: tuple[int, ...], axes: tuple[int, ...]) -> dict:
    kept = tuple(1 if i in axes else d for i, d in enumerate(shape))
    return {
        "axes": axes,
        "kept_shape": kept,
        "count": numel(shape[a] for a in axes),
    }


class TensorMixinReduction:
    """
    Mixin defining reductions for tensors.

    Notes
    -----
    - ``axis=None`` (or an empty sequence) reduces over every axis.
    - Without keepdims a full reduction yields shape ``(1,)``.
    """

    def sum(
        self: ITensor,
        axis: Optional[Union[int, Sequence[int]]] = None,
        keepdims: bool = False,
    ) -> "ITensor":
        """
        Sum over the given axes. Tag: ``sum(a)``.

        Parameters
        ----------
        axis : int | Sequence[int] | None, optional
            Axes to reduce. Negative axes count from the end.
        keepdims : bool, optional
            Keep reduced axes with size 1.

        Raises
        ------
        RankError
            If an axis is out of range.

        Notes
        -----
        Backward rule: the upstream gradient is reshaped to the keepdims shape
        and broadcast back to the input shape.
        """
        x = self._node.value
        axes = normalize_axes(axis, x.ndim)
        return self._from_op(
            x.sum(axes, keepdims),
            OpKind.SUM,
            (self,),
            tag=f"sum({self.tag})",
            meta=_reduction_meta(x.shape, axes),
        )

    def mean(
        self: ITensor,
        axis: Optional[Union[int, Sequence[int]]] = None,
        keepdims: bool = False,
    ) -> "ITensor":
        """
        Arithmetic mean over the given axes. Tag: ``mean(a)``.

        Notes
        -----
        Backward rule: as for `sum`, divided by the number of reduced
        elements.
        """
        x = self._node.value
        axes = normalize_axes(axis, x.ndim)
        return self._from_op(
            x.mean(axes, keepdims),
            OpKind.MEAN,
            (self,),
            tag=f"mean({self.tag})",
            meta=_reduction_meta(x.shape, axes),
        )
