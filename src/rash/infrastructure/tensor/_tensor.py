"""
Concrete Tensor handle (NumPy backend) over a shared computation node.

A `Tensor` is a thin handle around one :class:`ComputationNode`. All state
(value, gradient, recorded operation) lives on the node; copying a handle with
`copy.copy` yields a second handle on the same node, so both observe the same
value and gradient.

Operations are grouped into mixins per family (arithmetic, unary, comparison,
reduction, memory, linear algebra). Each operation computes its forward value
with NDArray primitives and records a result node through `_from_op`; the
matching backward rule is registered for the op tag in the family's
``_tensor_*`` modules.

Design notes
------------
- A result is tracked iff any operand is tracked. Untracked results are
  recorded as leaves without parents, so constant subexpressions never keep
  inputs alive.
- Numbers, NDArrays and array-likes mixed into an expression are lifted to
  untracked constant tensors by `_as_tensor_like`.
"""

from __future__ import annotations

from typing import Any, Hashable, Optional, Sequence, Union

import numpy as np

from ...domain._tensor import ITensor
from ...domain._ops import OpKind
from ..autograd import ComputationNode, backward as _run_backward
from ..ndarray import NDArray

from .mixins.arithmetic import TensorMixinArithmetic
from .mixins.unary import TensorMixinUnary
from .mixins.comparison import TensorMixinComparison
from .mixins.reduction import TensorMixinReduction
from .mixins.memory import TensorMixinMemory
from .mixins.linalg import TensorMixinLinalg

Number = Union[int, float]


class Tensor(
    TensorMixinArithmetic,
    TensorMixinUnary,
    TensorMixinComparison,
    TensorMixinReduction,
    TensorMixinMemory,
    TensorMixinLinalg,
    ITensor,
):
    """
    Gradient-tracking handle over a computation node.

    Parameters
    ----------
    data : NDArray | Number | Sequence | numpy.ndarray
        Initial value. It is copied, so later changes to `data` do not affect
        the tensor.
    shape : Optional[Sequence[int]], optional
        Declared shape for flat `data`.
    requires_grad : bool, optional
        Whether gradients are accumulated for this tensor. Defaults to False.
    tag : Optional[str], optional
        Human-readable label. Defaults to ``tensor_<uid>``.

    Examples
    --------
    >>> a = Tensor([1.0, 2.0], requires_grad=True, tag="a")
    >>> (a * a).sum().backward()
    >>> a.fetch_grad().tolist()
    [2.0, 4.0]
    """

    __array_ufunc__ = None

    def __init__(
        self,
        data: Union[NDArray, Number, Sequence, np.ndarray],
        *,
        shape: Optional[Sequence[int]] = None,
        requires_grad: bool = False,
        tag: Optional[str] = None,
    ) -> None:
        self._node = ComputationNode(
            NDArray(data, shape), requires_grad=bool(requires_grad), tag=tag
        )

    # ----------------------------
    # Factories
    # ----------------------------
    @classmethod
    def _from_node(cls, node: ComputationNode) -> "Tensor":
        obj = cls.__new__(cls)
        obj._node = node
        return obj

    @classmethod
    def rand(
        cls,
        shape: Union[int, Sequence[int]],
        *,
        requires_grad: bool = False,
        tag: Optional[str] = None,
    ) -> "Tensor":
        """Uniform ``[0, 1)`` values drawn from `config.get_rng()`."""
        return cls._from_node(
            ComputationNode(NDArray.rand(shape), requires_grad=bool(requires_grad), tag=tag)
        )

    @classmethod
    def zeros(
        cls,
        shape: Union[int, Sequence[int]],
        *,
        requires_grad: bool = False,
        tag: Optional[str] = None,
    ) -> "Tensor":
        return cls._from_node(
            ComputationNode(NDArray.zeros(shape), requires_grad=bool(requires_grad), tag=tag)
        )

    @classmethod
    def ones(
        cls,
        shape: Union[int, Sequence[int]],
        *,
        requires_grad: bool = False,
        tag: Optional[str] = None,
    ) -> "Tensor":
        return cls._from_node(
            ComputationNode(NDArray.ones(shape), requires_grad=bool(requires_grad), tag=tag)
        )

    # ----------------------------
    # Introspection
    # ----------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        return self._node.value.shape

    @property
    def requires_grad(self) -> bool:
        return self._node.requires_grad

    @property
    def tag(self) -> str:
        return self._node.tag

    @property
    def node(self) -> ComputationNode:
        """The computation node this handle refers to."""
        return self._node

    def update_tag(self, tag: str) -> None:
        self._node.tag = str(tag)

    def fetch_data(self) -> NDArray:
        """Return a copy of the value."""
        return self._node.value.copy()

    def fetch_grad(self) -> NDArray:
        """Return a copy of the accumulated gradient."""
        return self._node.grad.copy()

    def numel(self) -> int:
        return self._node.value.numel()

    def item(self) -> float:
        """
        Return the value of a one-element tensor as a Python float.

        Raises
        ------
        ScalarConversionError
            If the tensor holds more than one element.
        """
        return self._node.value.item()

    def to_numpy(self) -> np.ndarray:
        return self._node.value.to_numpy()

    # ----------------------------
    # Mutation
    # ----------------------------
    def update_data(self, value: Union[NDArray, Number, Sequence, np.ndarray]) -> None:
        """
        Replace the value (copied). Scalars are broadcast to the current shape.

        Raises
        ------
        ShapeMismatchError
            If the new value has a different shape.
        """
        self._node.set_value(self._coerce_like(value))

    def update_grad(self, value: Union[NDArray, Number, Sequence, np.ndarray]) -> None:
        """
        Replace the gradient buffer (copied). Scalars are broadcast to the
        current shape.

        Raises
        ------
        ShapeMismatchError
            If the new gradient has a different shape.
        """
        self._node.set_grad(self._coerce_like(value))

    def zero_grad(self) -> None:
        self._node.zero_grad()

    def _coerce_like(self, value: Any) -> NDArray:
        if isinstance(value, bool) or isinstance(value, (int, float, np.number)):
            return NDArray.full(self.shape, float(value))
        return NDArray(value)

    # ----------------------------
    # Differentiation
    # ----------------------------
    def backward(self, release_graph: bool = False) -> None:
        """
        Backpropagate from this tensor.

        The gradient of this tensor is seeded with ones (for any shape) and
        gradients of every tracked tensor it depends on are accumulated.

        Parameters
        ----------
        release_graph : bool, optional
            Drop the recorded graph after the pass, turning every visited
            intermediate into a leaf.

        Notes
        -----
        Calling `backward` twice without `zero_grad` on the inputs
        accumulates gradients a second time.
        """
        _run_backward(self._node, release_graph=release_graph)

    # ----------------------------
    # Graph recording helpers
    # ----------------------------
    @staticmethod
    def _result_requires_grad(*parents: "Tensor") -> bool:
        return any(p.requires_grad for p in parents)

    @staticmethod
    def _as_tensor_like(x: Any) -> "Tensor":
        """
        Convert an operand into a Tensor.

        Tensors are returned as-is. Numbers, NDArrays, sequences and NumPy
        arrays become untracked constant tensors.

        Raises
        ------
        TypeError
            If `x` is not a supported operand type.
        """
        if isinstance(x, Tensor):
            return x
        if isinstance(x, (bool, int, float, np.number)):
            return Tensor(float(x), tag=f"{float(x):g}")
        if isinstance(x, (NDArray, list, tuple, np.ndarray)):
            return Tensor(x)
        raise TypeError(f"Unsupported operand type: {type(x)!r}")

    @classmethod
    def _from_op(
        cls,
        value: NDArray,
        op: Hashable,
        parents: Sequence["Tensor"],
        *,
        tag: str,
        saved: Optional[dict[str, NDArray]] = None,
        meta: Optional[dict[str, Any]] = None,
    ) -> "Tensor":
        """
        Record the result of an operation.

        The result node is tracked iff any parent is tracked; only tracked
        results keep their parents, cached arrays and op tag.
        """
        if not cls._result_requires_grad(*parents):
            return cls._from_node(ComputationNode(value, tag=tag))
        node = ComputationNode(
            value,
            requires_grad=True,
            op=op,
            parents=tuple(p._node for p in parents),
            saved=dict(saved or {}),
            meta=dict(meta or {}),
            tag=tag,
        )
        return cls._from_node(node)

    # ----------------------------
    # Copy / rendering
    # ----------------------------
    def __copy__(self) -> "Tensor":
        return self._from_node(self._node)

    def __repr__(self) -> str:
        parts = [str(self._node.value), f"requires_grad={self.requires_grad}"]
        if self.requires_grad:
            parts.append(f"grad={self._node.grad}")
        parts.append(f"tag={self.tag!r}")
        return "Tensor(" + ", ".join(parts) + ")"
