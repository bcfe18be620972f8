"""
Shape and layout operations for NDArray.

Every operation here returns a new array with its own contiguous row-major
buffer; axis reordering materializes the permuted layout.
"""

from typing import Optional, Sequence, Union

import numpy as np

from ....domain._errors import BroadcastError, RankError, ShapeMismatchError
from .._shape_utils import (
    broadcast_shapes,
    normalize_axis,
    normalize_shape,
    numel,
    sum_to_shape_axes,
)


class NDArrayMixinMemory:
    """Mixin providing reshape, (un)squeeze, axis permutation and broadcasting."""

    def reshape(self, shape: Union[int, Sequence[int]]):
        """
        Return the same elements under a new shape.

        A single ``-1`` entry is inferred from the element count.

        Raises
        ------
        ShapeMismatchError
            If the new shape holds a different number of elements.
        """
        dims = [shape] if isinstance(shape, int) else list(shape)
        if dims.count(-1) == 1:
            known = numel(d for d in dims if d != -1)
            if known > 0 and self._data.size % known == 0:
                dims[dims.index(-1)] = self._data.size // known
        new_shape = normalize_shape(dims)
        if numel(new_shape) != self._data.size:
            raise ShapeMismatchError(
                f"Cannot reshape array of shape {self._shape} into {new_shape}",
                expected=self._shape,
                actual=new_shape,
            )
        return self._wrap(self._data.copy(), new_shape)

    def squeeze(self, axis: Optional[Union[int, Sequence[int]]] = None):
        """
        Remove size-1 axes.

        With ``axis=None`` every size-1 axis is removed. Named axes whose size
        is not 1 are left in place. Squeezing everything yields ``(1,)``.
        """
        ndim = len(self._shape)
        if axis is None:
            drop = {i for i, d in enumerate(self._shape) if d == 1}
        else:
            named = [axis] if isinstance(axis, (int, np.integer)) else axis
            drop = {
                ax
                for ax in (normalize_axis(a, ndim) for a in named)
                if self._shape[ax] == 1
            }
        new_shape = tuple(d for i, d in enumerate(self._shape) if i not in drop)
        return self._wrap(self._data.copy(), new_shape or (1,))

    def unsqueeze(self, axis: int):
        """Insert a size-1 axis at `axis` (``-1`` appends)."""
        ax = normalize_axis(axis, len(self._shape) + 1)
        new_shape = self._shape[:ax] + (1,) + self._shape[ax:]
        return self._wrap(self._data.copy(), new_shape)

    def permute(self, order: Sequence[int]):
        """
        Reorder axes so that output axis ``i`` is input axis ``order[i]``.

        Raises
        ------
        RankError
            If `order` is not a permutation of ``0..ndim-1``.
        """
        ndim = len(self._shape)
        order = tuple(order)
        if len(order) != ndim:
            raise RankError(
                f"permute order {order} has {len(order)} axes, array has {ndim}",
                ndim=ndim,
            )
        norm = tuple(normalize_axis(a, ndim) for a in order)
        if sorted(norm) != list(range(ndim)):
            raise RankError(
                f"permute order {order} is not a permutation of 0..{ndim - 1}",
                ndim=ndim,
            )
        out = np.transpose(self._data.reshape(self._shape), norm).copy()
        return self._wrap(out, out.shape)

    def transpose(self, dim0: int = -1, dim1: int = -2):
        """
        Swap two axes (the last two by default).

        Raises
        ------
        RankError
            If the array has fewer than two axes or an axis is out of range.
        """
        ndim = len(self._shape)
        if ndim < 2:
            raise RankError(f"transpose requires ndim >= 2, got {ndim}", ndim=ndim)
        a, b = normalize_axis(dim0, ndim), normalize_axis(dim1, ndim)
        order = list(range(ndim))
        order[a], order[b] = order[b], order[a]
        return self.permute(order)

    def T(self):
        """Reverse every axis. Rank-1 arrays are returned as a copy."""
        return self.permute(tuple(reversed(range(len(self._shape)))))

    def broadcast_to(self, shape: Sequence[int]):
        """
        Materialize this array broadcast to `shape`.

        Raises
        ------
        BroadcastError
            If this array cannot be broadcast to exactly `shape`.
        """
        target = normalize_shape(shape)
        if broadcast_shapes(self._shape, target) != target:
            raise BroadcastError(self._shape, target)
        out = np.broadcast_to(self._data.reshape(self._shape), target)
        return self._wrap(out, target)

    def sum_to_shape(self, shape: Sequence[int]):
        """
        Reduce a broadcast result back to `shape`.

        Axes where `shape` (left-padded with ones) has size 1 but this array
        does not are summed with keepdims; the padded leading axes are then
        dropped. This is the inverse of `broadcast_to` for gradients.

        Raises
        ------
        BroadcastError
            If `shape` could not have been broadcast to this array's shape.
        """
        target = normalize_shape(shape)
        if target == self._shape:
            return self._wrap(self._data.copy(), target)
        reduce_axes, _ = sum_to_shape_axes(self._shape, target)
        out = self.sum(reduce_axes, keepdims=True) if reduce_axes else self
        return self._wrap(out._data.copy(), target)
