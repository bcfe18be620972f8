"""
Shape helpers shared by NDArray operations and the gradient path.

All helpers work on plain tuples of ints and raise the domain errors directly,
so every caller validates shapes before touching a buffer.
"""

from typing import Optional, Sequence, Union
from functools import reduce
import operator

import numpy as np

from ...domain._errors import BroadcastError, RankError, ShapeMismatchError


def numel(shape: Sequence[int]) -> int:
    """Return the number of elements described by `shape`."""
    return reduce(operator.mul, shape, 1)


def normalize_shape(shape: Union[int, Sequence[int]]) -> tuple[int, ...]:
    """
    Validate and canonicalize a shape.

    An int is treated as a rank-1 shape. An empty shape is promoted to ``(1,)``
    so that arrays always have at least one axis.

    Raises
    ------
    ShapeMismatchError
        If any dimension is not a positive integer.
    """
    if isinstance(shape, int):
        shape = (shape,)
    dims = tuple(shape)
    for d in dims:
        if isinstance(d, bool) or not isinstance(d, int) or d < 1:
            raise ShapeMismatchError(
                f"Shape dimensions must be positive integers, got {dims}",
                actual=tuple(int(x) if isinstance(x, int) else -1 for x in dims),
            )
    return dims or (1,)


def broadcast_shapes(
    shape_a: Sequence[int], shape_b: Sequence[int]
) -> tuple[int, ...]:
    """
    Compute the broadcast result shape of two shapes.

    Shapes are walked from the trailing dimension. For each aligned pair the
    sizes must be equal or one of them must be 1; a dimension present in only
    one shape is taken as-is.

    Raises
    ------
    BroadcastError
        If an aligned pair has two different sizes, neither of them 1.
    """
    rev_a, rev_b = tuple(reversed(shape_a)), tuple(reversed(shape_b))
    out = []
    for idx in range(max(len(rev_a), len(rev_b))):
        if idx >= len(rev_a):
            out.append(rev_b[idx])
        elif idx >= len(rev_b):
            out.append(rev_a[idx])
        elif rev_a[idx] == rev_b[idx] or rev_b[idx] == 1:
            out.append(rev_a[idx])
        elif rev_a[idx] == 1:
            out.append(rev_b[idx])
        else:
            raise BroadcastError(shape_a, shape_b)
    return tuple(reversed(out))


def normalize_axis(axis: int, ndim: int) -> int:
    """
    Map a possibly negative axis into ``range(ndim)``.

    Raises
    ------
    RankError
        If `axis` is out of range for `ndim`.
    """
    if isinstance(axis, bool) or not isinstance(axis, (int, np.integer)):
        raise TypeError(f"axis must be int, got {type(axis)!r}")
    axis = int(axis)
    ax = axis + ndim if axis < 0 else axis
    if ax < 0 or ax >= ndim:
        raise RankError(f"axis {axis} out of bounds for ndim {ndim}", ndim=ndim)
    return ax


def normalize_axes(
    axis: Optional[Union[int, Sequence[int]]], ndim: int
) -> tuple[int, ...]:
    """
    Normalize a reduction axis argument to a sorted tuple of unique axes.

    ``None`` and an empty sequence both select every axis.
    """
    if axis is None:
        return tuple(range(ndim))
    if isinstance(axis, (int, np.integer)):
        return (normalize_axis(axis, ndim),)
    axes = tuple(sorted({normalize_axis(a, ndim) for a in axis}))
    return axes or tuple(range(ndim))


def sum_to_shape_axes(
    src_shape: Sequence[int], target_shape: Sequence[int]
) -> tuple[tuple[int, ...], int]:
    """
    Compute the reduction plan for summing `src_shape` down to `target_shape`.

    `target_shape` is left-padded with ones to the rank of `src_shape`. An axis
    is reduced (with keepdims) when the padded target has size 1 there while
    the source does not. The padded leading axes are then dropped.

    Returns
    -------
    reduce_axes:
        Axes of the source to sum over with ``keepdims=True``.
    pad:
        Number of leading axes that exist in the source only.

    Raises
    ------
    BroadcastError
        If `target_shape` could not have been broadcast to `src_shape`.
    """
    src = tuple(src_shape)
    tgt = tuple(target_shape)
    if len(tgt) > len(src):
        # only leading size-1 axes of the target may be missing in the source
        extra = len(tgt) - len(src)
        if any(d != 1 for d in tgt[:extra]):
            raise BroadcastError(src, tgt)
        tgt = tgt[extra:]

    pad = len(src) - len(tgt)
    padded = (1,) * pad + tgt
    for sd, td in zip(src, padded):
        if td not in (1, sd):
            raise BroadcastError(src, target_shape)

    reduce_axes = tuple(
        i for i, (sd, td) in enumerate(zip(src, padded)) if td == 1 and sd != 1
    )
    return reduce_axes, pad


def matmul_shapes(
    shape_a: Sequence[int], shape_b: Sequence[int]
) -> tuple[tuple[int, ...], tuple[int, ...], tuple[int, ...], tuple[int, ...]]:
    """
    Validate a matmul and compute the promoted operand and result shapes.

    A rank-1 left operand ``(K,)`` is promoted to ``(1, K)`` and a rank-1 right
    operand ``(K,)`` to ``(K, 1)``. The promoted operands must agree on ``K``
    and have broadcastable batch prefixes.

    Returns
    -------
    promoted_a, promoted_b:
        Operand shapes after rank-1 promotion.
    promoted_out:
        ``batch + (M, N)``; the batch prefix is empty when both promoted
        operands are 2-D.
    out:
        `promoted_out` with the promoted axes removed again (never empty).

    Raises
    ------
    RankError
        If either operand has rank 0.
    ShapeMismatchError
        If the contraction sizes differ or the batch prefixes cannot be
        broadcast.
    """
    a, b = tuple(shape_a), tuple(shape_b)
    if len(a) == 0 or len(b) == 0:
        raise RankError(
            f"matmul requires operands of rank >= 1, got {a} and {b}",
            ndim=min(len(a), len(b)),
        )

    pa = (1,) + a if len(a) == 1 else a
    pb = b + (1,) if len(b) == 1 else b

    if pa[-1] != pb[-2]:
        raise ShapeMismatchError(
            f"matmul shape mismatch: {a} @ {b} (contraction sizes {pa[-1]} vs {pb[-2]})",
            expected=(pa[-1],),
            actual=(pb[-2],),
        )

    batch_a, batch_b = pa[:-2], pb[:-2]
    try:
        batch = broadcast_shapes(batch_a, batch_b)
    except BroadcastError as exc:
        raise ShapeMismatchError(
            f"matmul batch dimensions {batch_a} and {batch_b} are not broadcastable",
            expected=batch_a,
            actual=batch_b,
        ) from exc

    promoted_out = batch + (pa[-2], pb[-1])
    out = list(promoted_out)
    if len(b) == 1:
        del out[-1]
    if len(a) == 1:
        del out[-1 if len(b) == 1 else -2]
    return pa, pb, promoted_out, tuple(out) or (1,)
