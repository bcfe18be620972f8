"""
Unary elementwise operations for NDArray (negation, exp, abs, integer power).
"""

import numpy as np


class NDArrayMixinUnary:
    """Mixin providing elementwise unary math."""

    def __neg__(self):
        return self._wrap(np.negative(self._data), self._shape)

    def exp(self):
        """Elementwise natural exponential. Overflow yields ``inf``."""
        with np.errstate(over="ignore"):
            return self._wrap(np.exp(self._data), self._shape)

    def abs(self):
        return self._wrap(np.abs(self._data), self._shape)

    def __abs__(self):
        return self.abs()

    def pow(self, exponent: int):
        """
        Raise every element to an integer power.

        Parameters
        ----------
        exponent : int
            Integer exponent; negative values are allowed (``0 ** -1`` gives
            ``inf``).

        Raises
        ------
        TypeError
            If `exponent` is not an integer.
        """
        if isinstance(exponent, bool) or not isinstance(exponent, (int, np.integer)):
            raise TypeError(f"exponent must be int, got {type(exponent)!r}")
        with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
            return self._wrap(np.power(self._data, float(exponent)), self._shape)

    def __pow__(self, exponent: int):
        return self.pow(exponent)
