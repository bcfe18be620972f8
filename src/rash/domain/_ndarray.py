"""
Array interface definitions.

This module defines the domain-level interface for n-dimensional numeric
arrays using structural typing. The interface captures the operations the
autograd layer relies on, so that the node and tensor code can be typed
against the contract rather than the NumPy-backed implementation.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, Union, runtime_checkable

import numpy as np

Number = Union[int, float]
Axes = Optional[Union[int, Sequence[int]]]


@runtime_checkable
class INDArray(Protocol):
    """
    N-dimensional array interface.

    An `INDArray` is a flat row-major buffer of floating-point values paired
    with a shape. The invariant ``len(data) == prod(shape)`` always holds, and
    shapes are never empty (a scalar has shape ``(1,)``).

    Notes
    -----
    - Binary operations broadcast their operands (trailing-dimension
      alignment, size-1 axes stretch, missing leading axes count as 1).
    - Most operations return a new array; only `fill`, ``+=`` and ``-=``
      mutate the receiver.
    """

    # ---------------------------------------------------------------------
    # Core identity
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """Return the array shape."""
        ...

    @property
    def ndim(self) -> int:
        """Return the number of axes."""
        ...

    @property
    def data(self) -> np.ndarray:
        """Return a read-only flat view of the underlying buffer."""
        ...

    def numel(self) -> int:
        """Return the total number of elements."""
        ...

    def to_numpy(self) -> np.ndarray:
        """Return a shaped copy of the array as a NumPy ndarray."""
        ...

    def item(self) -> float:
        """Return the single element of a one-element array."""
        ...

    def fill(self, value: Number) -> None:
        """Overwrite every element with `value`."""
        ...

    # ---------------------------------------------------------------------
    # Elementwise arithmetic
    # ---------------------------------------------------------------------
    def __add__(self, other: Union["INDArray", Number]) -> "INDArray": ...

    def __sub__(self, other: Union["INDArray", Number]) -> "INDArray": ...

    def __mul__(self, other: Union["INDArray", Number]) -> "INDArray": ...

    def __truediv__(self, other: Union["INDArray", Number]) -> "INDArray": ...

    def __neg__(self) -> "INDArray": ...

    def exp(self) -> "INDArray": ...

    def pow(self, exponent: int) -> "INDArray": ...

    # ---------------------------------------------------------------------
    # Reductions and shape manipulation
    # ---------------------------------------------------------------------
    def sum(self, axis: Axes = None, keepdims: bool = False) -> "INDArray": ...

    def reshape(self, shape: Sequence[int]) -> "INDArray": ...

    def broadcast_to(self, shape: Sequence[int]) -> "INDArray": ...

    def sum_to_shape(self, shape: Sequence[int]) -> "INDArray":
        """
        Sum a broadcast result back down to `shape` (the un-broadcast
        reduction used when accumulating gradients).
        """
        ...

    def permute(self, order: Sequence[int]) -> "INDArray": ...

    def transpose(self, dim0: int = -1, dim1: int = -2) -> "INDArray": ...

    def unsqueeze(self, axis: int) -> "INDArray": ...

    def matmul(self, other: "INDArray") -> "INDArray": ...
