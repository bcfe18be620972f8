"""
Tensor interface definitions.

This module defines the domain-level interface for gradient-tracking tensor
handles using structural typing. A tensor handle wraps one computation node;
copying the handle shares the node, so every copy observes the same value and
gradient.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, Union, runtime_checkable

from ._ndarray import INDArray, Number


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor handle interface.

    Notes
    -----
    - Arithmetic on handles records a node per operation; `backward` replays
      the recorded graph from this handle's node toward the leaves.
    - `fetch_data` / `fetch_grad` return copies; use `update_data` /
      `update_grad` to write.
    """

    # ---------------------------------------------------------------------
    # Introspection
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the wrapped value."""
        ...

    @property
    def requires_grad(self) -> bool:
        """Return True if gradients are tracked for this tensor."""
        ...

    @property
    def tag(self) -> str:
        """Return the human-readable label of this tensor."""
        ...

    def fetch_data(self) -> INDArray:
        """Return a copy of the wrapped value."""
        ...

    def fetch_grad(self) -> INDArray:
        """Return a copy of the accumulated gradient."""
        ...

    # ---------------------------------------------------------------------
    # Mutation
    # ---------------------------------------------------------------------
    def update_data(self, value: Union[INDArray, Number, Sequence]) -> None:
        """Replace the wrapped value; the shape must not change."""
        ...

    def update_grad(self, value: Union[INDArray, Number, Sequence]) -> None:
        """Replace the gradient buffer; the shape must not change."""
        ...

    def zero_grad(self) -> None:
        """Reset the gradient buffer to zeros."""
        ...

    # ---------------------------------------------------------------------
    # Differentiation
    # ---------------------------------------------------------------------
    def backward(self, release_graph: bool = False) -> None:
        """Propagate gradients from this tensor to every tracked input."""
        ...

    # ---------------------------------------------------------------------
    # Operations
    # ---------------------------------------------------------------------
    def __add__(self, other: Union["ITensor", INDArray, Number]) -> "ITensor": ...

    def __sub__(self, other: Union["ITensor", INDArray, Number]) -> "ITensor": ...

    def __mul__(self, other: Union["ITensor", INDArray, Number]) -> "ITensor": ...

    def __truediv__(
        self, other: Union["ITensor", INDArray, Number]
    ) -> "ITensor": ...

    def __neg__(self) -> "ITensor": ...

    def __gt__(self, other: Union["ITensor", INDArray, Number]) -> "ITensor": ...

    def exp(self) -> "ITensor": ...

    def pow(self, exponent: int) -> "ITensor": ...

    def matmul(self, other: "ITensor") -> "ITensor": ...

    def transpose(self, dim0: int = -1, dim1: int = -2) -> "ITensor": ...

    def T(self) -> "ITensor": ...

    def sum(
        self, axis: Optional[Union[int, Sequence[int]]] = None, keepdims: bool = False
    ) -> "ITensor": ...
