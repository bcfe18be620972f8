"""
Computation node: one vertex of the recorded autograd graph.

A `ComputationNode` owns the forward value of an operation and the gradient
accumulated for it, plus everything the backward rule of its `op` needs:
parent nodes, cached arrays (`saved`) and non-array attributes (`meta`).

Nodes do not carry closures. The rule for ``node.op`` is looked up through the
control-path registry in :mod:`._node_builder` when `backward_step` is called.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Optional, Sequence
import itertools

from ...domain._errors import ShapeMismatchError
from ...domain._ops import OpKind
from ..ndarray import NDArray

_uid_counter = itertools.count()


@dataclass(eq=False)
class ComputationNode:
    """
    Graph vertex holding a value, its gradient and the recorded operation.

    Attributes
    ----------
    value : NDArray
        Forward value.
    requires_grad : bool
        Whether gradients are tracked for this node.
    op : Hashable
        Operation tag (an `OpKind` member, or a tag registered by an
        external operator). ``OpKind.LEAF`` for user-created nodes.
    parents : tuple[Optional[ComputationNode], ...]
        Input nodes, in operand order. Empty for leaves and untracked results.
    saved : dict[str, NDArray]
        Arrays cached at forward time for the backward rule.
    meta : dict[str, Any]
        Non-array attributes needed by the backward rule (axes, exponent, ...).
    tag : str
        Human-readable label. Defaults to ``tensor_<uid>``.
    uid : int
        Process-wide monotonic identity used by the traversal.
    grad : NDArray
        Accumulated gradient, same shape as `value`, zero-initialized.
    """

    value: NDArray
    requires_grad: bool = False
    op: Hashable = OpKind.LEAF
    parents: tuple = ()
    saved: dict[str, NDArray] = field(default_factory=dict)
    meta: dict[str, Any] = field(default_factory=dict)
    tag: Optional[str] = None
    uid: int = field(init=False)
    grad: NDArray = field(init=False)

    def __post_init__(self) -> None:
        self.uid = next(_uid_counter)
        self.grad = NDArray.zeros(self.value.shape)
        self.parents = tuple(self.parents)
        if self.tag is None:
            self.tag = f"tensor_{self.uid}"

    @property
    def is_leaf(self) -> bool:
        return self.op == OpKind.LEAF

    @property
    def shape(self) -> tuple[int, ...]:
        return self.value.shape

    # ----------------------------
    # Gradient buffer
    # ----------------------------
    def accumulate_grad(self, contribution: NDArray) -> None:
        """
        Add `contribution` into `grad`.

        A contribution computed in a broadcast shape is first summed down to
        this node's shape. Accumulation never overwrites.

        Raises
        ------
        BroadcastError
            If the contribution cannot be reduced to this node's shape.
        """
        if contribution.shape != self.value.shape:
            contribution = contribution.sum_to_shape(self.value.shape)
        self.grad += contribution

    def seed_grad(self) -> None:
        """Set the gradient to ones (the seed of a backward pass)."""
        self.grad.fill(1.0)

    def zero_grad(self) -> None:
        self.grad.fill(0.0)

    def set_value(self, value: NDArray) -> None:
        if value.shape != self.value.shape:
            raise ShapeMismatchError(
                f"Cannot replace value of shape {self.value.shape} with {value.shape}",
                expected=self.value.shape,
                actual=value.shape,
            )
        self.value = value

    def set_grad(self, grad: NDArray) -> None:
        if grad.shape != self.value.shape:
            raise ShapeMismatchError(
                f"Gradient shape {grad.shape} does not match value shape {self.value.shape}",
                expected=self.value.shape,
                actual=grad.shape,
            )
        self.grad = grad

    # ----------------------------
    # Backward
    # ----------------------------
    def backward_step(self, grad: NDArray) -> Sequence[Optional[NDArray]]:
        """
        Compute this node's contributions to its parents' gradients.

        Dispatches on ``self.op`` to the rule registered with
        `node_backward_path`. The returned sequence is aligned with
        `parents`; ``None`` entries contribute nothing.

        Raises
        ------
        NotImplementedError
            If no rule is registered for ``self.op``.
        """
        raise NotImplementedError(f"No backward rule for op {self.op!r}")

    def release(self) -> None:
        """Drop graph state and turn this node into a leaf."""
        self.parents = ()
        self.saved = {}
        self.meta = {}
        self.op = OpKind.LEAF

    def __repr__(self) -> str:
        return (
            f"ComputationNode(uid={self.uid}, op={getattr(self.op, 'value', self.op)!r}, "
            f"tag={self.tag!r}, shape={self.value.shape}, "
            f"requires_grad={self.requires_grad})"
        )
