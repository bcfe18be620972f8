"""
Elementwise arithmetic for NDArray.

All binary operators broadcast their operands. Python scalars, lists and NumPy
arrays are coerced to NDArray first; any other operand type makes the operator
return ``NotImplemented`` so that Python can try the reflected operator of the
other operand (this is how ``NDArray + Tensor`` reaches ``Tensor.__radd__``).
"""

from typing import Any

import numpy as np

from ....domain._errors import BroadcastError


class NDArrayMixinArithmetic:
    """Mixin providing ``+``, ``-``, ``*``, ``/`` and their in-place forms."""

    def __add__(self, other: Any):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._broadcast_binary(o, np.add)

    def __radd__(self, other: Any):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o._broadcast_binary(self, np.add)

    def __sub__(self, other: Any):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._broadcast_binary(o, np.subtract)

    def __rsub__(self, other: Any):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o._broadcast_binary(self, np.subtract)

    def __mul__(self, other: Any):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._broadcast_binary(o, np.multiply)

    def __rmul__(self, other: Any):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o._broadcast_binary(self, np.multiply)

    def __truediv__(self, other: Any):
        """
        Elementwise true division.

        Division by zero follows IEEE-754 (``inf`` / ``nan``) and does not
        emit NumPy runtime warnings.
        """
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return self._broadcast_binary(o, np.true_divide)

    def __rtruediv__(self, other: Any):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return o._broadcast_binary(self, np.true_divide)

    # ----------------------------
    # In-place
    # ----------------------------
    def _inplace(self, other: Any, fn):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        res = self._broadcast_binary(o, fn)
        if res.shape != self._shape:
            # the receiver's buffer cannot grow
            raise BroadcastError(self._shape, o.shape)
        self._data[...] = res._data
        return self

    def __iadd__(self, other: Any):
        """
        In-place addition. `other` is broadcast against the receiver; the
        broadcast result must keep the receiver's shape.

        Raises
        ------
        BroadcastError
            If the shapes are incompatible or broadcasting would change the
            receiver's shape.
        """
        return self._inplace(other, np.add)

    def __isub__(self, other: Any):
        return self._inplace(other, np.subtract)
