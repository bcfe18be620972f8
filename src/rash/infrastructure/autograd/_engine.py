"""
Reverse-mode traversal over the recorded computation graph.

`backward` seeds the root gradient with ones, orders the tracked subgraph
reachable from the root so that every node comes after all nodes that consume
it, and runs each non-leaf node's backward rule exactly once in that order.
Contributions are accumulated into parent gradients, reduced to the parent's
shape when the forward operation broadcast.
"""

from __future__ import annotations

import logging
import warnings

from ._node import ComputationNode
from ._node_builder import node_backward_path

logger = logging.getLogger(__name__)


def _post_order(root: ComputationNode) -> list[ComputationNode]:
    """
    Return the tracked nodes reachable from `root` in post-order.

    Uses an explicit stack so that deep graphs do not hit the recursion limit.
    Untracked parents and absent (``None``) parents are not visited.
    """
    visited: set[int] = set()
    order: list[ComputationNode] = []
    stack: list[tuple[ComputationNode, bool]] = [(root, False)]

    while stack:
        node, expanded = stack.pop()
        if expanded:
            order.append(node)
            continue
        if node.uid in visited:
            continue
        visited.add(node.uid)
        stack.append((node, True))
        for parent in reversed(node.parents):
            if parent is not None and parent.requires_grad and parent.uid not in visited:
                stack.append((parent, False))

    return order


def backward(root: ComputationNode, *, release_graph: bool = False) -> None:
    """
    Backpropagate from `root` to every tracked node it depends on.

    Parameters
    ----------
    root : ComputationNode
        Node to differentiate. Its gradient is overwritten with ones.
        Intermediate gradients are recomputed from zero; leaf gradients are
        accumulated into.
    release_graph : bool, optional
        If True, every visited non-leaf node drops its parents and cached
        state after the pass and becomes a leaf.

    Raises
    ------
    NotImplementedError
        If a reached node's op has no registered backward rule. This is
        checked before any gradient is modified.
    BroadcastError
        If a contribution cannot be reduced to its parent's shape.

    Notes
    -----
    Calling this on an untracked root emits a ``RuntimeWarning`` and only
    seeds the root gradient.
    """
    if not root.requires_grad:
        root.seed_grad()
        warnings.warn(
            f"backward() called on {root.tag!r}, which does not require grad; "
            "no gradients were propagated.",
            RuntimeWarning,
            stacklevel=3,
        )
        return

    order = _post_order(root)
    logger.debug("backward from %s: %d reachable nodes", root.tag, len(order))

    missing = sorted(
        {
            str(node.op)
            for node in order
            if not node.is_leaf
            and not node_backward_path.has_path(
                ComputationNode, ComputationNode.backward_step, node.op
            )
        }
    )
    if missing:
        raise NotImplementedError(
            f"No backward rule registered for op(s) {missing} reachable from {root.tag!r}"
        )

    # Intermediate gradients hold only this pass; leaves keep accumulating.
    for node in order:
        if not node.is_leaf:
            node.zero_grad()
    root.seed_grad()

    for node in reversed(order):
        if node.is_leaf:
            continue
        logger.debug("backward step op=%s tag=%s", node.op, node.tag)
        contributions = node.backward_step(node.grad)
        for parent, contribution in zip(node.parents, contributions):
            if parent is None or contribution is None or not parent.requires_grad:
                continue
            parent.accumulate_grad(contribution)

    if release_graph:
        for node in order:
            if not node.is_leaf:
                node.release()
