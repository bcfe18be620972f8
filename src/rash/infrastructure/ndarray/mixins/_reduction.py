"""
Axis reductions for NDArray.

Reductions fold one axis at a time, starting from the largest axis index so
that earlier axis indices stay valid. For an axis of size ``size`` the buffer
is viewed as ``(batch, size, jump)`` where ``batch`` is the product of the
leading dimensions and ``jump`` the product of the trailing ones; the fold then
runs over the middle dimension starting from the operation's identity.

Shape rules
-----------
- ``keepdims=True`` keeps each reduced axis with size 1.
- ``keepdims=False`` removes reduced axes; removing every axis yields ``(1,)``.
"""

from typing import Optional, Sequence, Union

import numpy as np

from .._shape_utils import normalize_axes, numel

Axes = Optional[Union[int, Sequence[int]]]


class NDArrayMixinReduction:
    """Mixin providing ``sum``, ``mean``, ``max`` and ``min``."""

    def _reduce(self, ufunc: np.ufunc, identity: float, axis: Axes, keepdims: bool):
        axes = normalize_axes(axis, len(self._shape))
        flat = self._data
        shape = list(self._shape)
        for ax in sorted(axes, reverse=True):
            batch = numel(shape[:ax])
            size = shape[ax]
            jump = numel(shape[ax + 1 :])
            flat = ufunc.reduce(
                flat.reshape(batch, size, jump), axis=1, initial=identity
            ).reshape(-1)
            shape[ax] = 1

        if not keepdims:
            shape = [d for i, d in enumerate(shape) if i not in axes] or [1]
        return self._wrap(flat, tuple(shape))

    def sum(self, axis: Axes = None, keepdims: bool = False):
        """
        Sum over the given axes.

        Parameters
        ----------
        axis : int | Sequence[int] | None, optional
            Axis or axes to reduce. ``None`` (or an empty sequence) reduces
            every axis. Negative axes count from the end.
        keepdims : bool, optional
            Keep reduced axes with size 1.

        Raises
        ------
        RankError
            If any axis is out of range.
        """
        return self._reduce(np.add, 0.0, axis, keepdims)

    def mean(self, axis: Axes = None, keepdims: bool = False):
        """Arithmetic mean over the given axes (sum divided by the reduced count)."""
        axes = normalize_axes(axis, len(self._shape))
        count = numel(self._shape[a] for a in axes)
        out = self.sum(axes, keepdims)
        out._data /= count
        return out

    def max(self, axis: Axes = None, keepdims: bool = False):
        return self._reduce(np.maximum, -np.inf, axis, keepdims)

    def min(self, axis: Axes = None, keepdims: bool = False):
        return self._reduce(np.minimum, np.inf, axis, keepdims)
