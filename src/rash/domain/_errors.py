"""
Shape- and value-related exceptions for rash.

This module defines the error kinds raised by array and autograd operations.
Every check that can raise one of these errors runs before an output buffer is
allocated, so a failing call never produces a partial result.

All errors derive from :class:`RashError` and from ``ValueError``. Callers that
only care about "bad input" can keep catching ``ValueError``; callers that want
to distinguish the failure kind can catch the specific subclass.
"""

from typing import Optional, Sequence


class RashError(Exception):
    """
    Base class for all errors raised by rash array and autograd operations.
    """


class ShapeMismatchError(RashError, ValueError):
    """
    Raised when a shape does not satisfy an operation's contract.

    Typical causes:
    - the number of raw values does not match the declared shape,
    - an update replaces data or gradient with a differently-shaped value,
    - matmul operands disagree on the contraction size or batch prefix,
    - reshape changes the element count.

    Attributes
    ----------
    expected : Optional[tuple[int, ...]]
        The shape (or element count, as a 1-tuple) the operation required.
    actual : Optional[tuple[int, ...]]
        The shape (or element count) that was supplied.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: Optional[Sequence[int]] = None,
        actual: Optional[Sequence[int]] = None,
    ) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        message : str
            Human-readable description of the mismatch.
        expected : Optional[Sequence[int]], optional
            Required shape, if known.
        actual : Optional[Sequence[int]], optional
            Supplied shape, if known.
        """
        super().__init__(message)
        self.expected = tuple(expected) if expected is not None else None
        self.actual = tuple(actual) if actual is not None else None


class BroadcastError(RashError, ValueError):
    """
    Raised when two shapes cannot be aligned under the broadcasting rule.

    Shapes are aligned by their trailing dimension. A pair of aligned sizes is
    compatible when the sizes are equal or one of them is 1. Any other pair
    makes the shapes incompatible.

    Attributes
    ----------
    shape_a : tuple[int, ...]
        Left operand shape.
    shape_b : tuple[int, ...]
        Right operand shape.
    """

    def __init__(self, shape_a: Sequence[int], shape_b: Sequence[int]) -> None:
        """
        Initialize the BroadcastError.

        Parameters
        ----------
        shape_a : Sequence[int]
            Left operand shape.
        shape_b : Sequence[int]
            Right operand shape.
        """
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)
        super().__init__(
            f"Cannot broadcast shapes {self.shape_a} and {self.shape_b}."
        )


class RankError(RashError, ValueError):
    """
    Raised when an operation receives an array of unsuitable rank, or axes
    that are inconsistent with the array's rank.

    Examples are transposing a rank-1 array with two explicit axes, reducing
    over an out-of-range axis, or permuting with an order that is not a
    permutation of ``0..ndim-1``.

    Attributes
    ----------
    ndim : int
        Rank of the array the operation was applied to.
    """

    def __init__(self, message: str, *, ndim: int) -> None:
        """
        Initialize the RankError.

        Parameters
        ----------
        message : str
            Human-readable description of the failure.
        ndim : int
            Rank of the offending array.
        """
        super().__init__(message)
        self.ndim = int(ndim)


class ScalarConversionError(RashError, ValueError):
    """
    Raised when a multi-element array is read as a single scalar value.

    Attributes
    ----------
    shape : tuple[int, ...]
        Shape of the array that could not be converted.
    """

    def __init__(self, shape: Sequence[int]) -> None:
        self.shape = tuple(shape)
        super().__init__(
            f"Only single-element arrays can be converted to a scalar, got shape {self.shape}."
        )
