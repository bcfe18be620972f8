"""
Elementwise comparisons for NDArray.

Comparisons broadcast like arithmetic and return numeric masks: ``1.0`` where
the predicate holds and ``0.0`` elsewhere, so results can be fed straight back
into arithmetic.
"""

from typing import Any

import numpy as np

from .... import config


class NDArrayMixinComparison:
    """Mixin providing ``>``, ``>=``, ``<`` and ``<=`` as 0/1 masks."""

    def _compare(self, other: Any, fn):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._broadcast_binary(
            o, lambda x, y: fn(x, y).astype(config.DEFAULT_DTYPE)
        )

    def __gt__(self, other: Any):
        return self._compare(other, np.greater)

    def __ge__(self, other: Any):
        return self._compare(other, np.greater_equal)

    def __lt__(self, other: Any):
        return self._compare(other, np.less)

    def __le__(self, other: Any):
        return self._compare(other, np.less_equal)
