"""
Concrete NDArray implementation (NumPy flat-buffer backend).

An `NDArray` owns a contiguous one-dimensional NumPy buffer plus a shape
tuple. The buffer is interpreted in row-major order with respect to the shape,
and ``buffer.size == prod(shape)`` holds for every instance.

The operation families live in mixins (arithmetic, comparison, unary,
reduction, memory/shape, linear algebra). This module provides construction,
factories, introspection, the shared broadcasting procedure used by every
binary elementwise operation, and the debug rendering.

Design notes
------------
- Broadcasting shapes are validated with our own rule
  (`_shape_utils.broadcast_shapes`) before NumPy computes anything, so errors
  are the domain `BroadcastError` rather than NumPy's.
- NumPy's own ufunc dispatch is disabled (``__array_ufunc__ = None``) so that
  ``numpy_scalar + NDArray`` falls back to our reflected operators.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Union

import numpy as np

from ... import config
from ...domain._ndarray import INDArray
from ...domain._errors import ScalarConversionError, ShapeMismatchError
from ._shape_utils import broadcast_shapes, normalize_shape, numel

from .mixins import (
    NDArrayMixinArithmetic,
    NDArrayMixinComparison,
    NDArrayMixinUnary,
    NDArrayMixinReduction,
    NDArrayMixinMemory,
    NDArrayMixinLinalg,
)

Number = Union[int, float]


class NDArray(
    NDArrayMixinArithmetic,
    NDArrayMixinComparison,
    NDArrayMixinUnary,
    NDArrayMixinReduction,
    NDArrayMixinMemory,
    NDArrayMixinLinalg,
    INDArray,
):
    """
    Flat-buffer n-dimensional array of float64 values.

    Parameters
    ----------
    values : Number | Sequence | numpy.ndarray | NDArray
        Source values. A number creates a one-element array of shape ``(1,)``.
        A (possibly nested) sequence or ndarray is read in row-major order.
    shape : Optional[Sequence[int]], optional
        Declared shape. If omitted, the shape is inferred from `values`.

    Raises
    ------
    ShapeMismatchError
        If the number of values does not match the declared shape, or the
        shape contains a non-positive dimension.

    Examples
    --------
    >>> NDArray([1, 2, 3, 4, 5, 6], shape=(2, 3)).shape
    (2, 3)
    >>> NDArray(5.0).shape
    (1,)
    """

    __array_ufunc__ = None

    def __init__(
        self,
        values: Union[Number, Sequence, np.ndarray, "NDArray"],
        shape: Optional[Sequence[int]] = None,
    ) -> None:
        if isinstance(values, NDArray):
            flat, inferred = values._data, values.shape
        elif isinstance(values, (int, float, np.number)):
            flat, inferred = np.array([values], dtype=config.DEFAULT_DTYPE), (1,)
        else:
            arr = np.asarray(values, dtype=config.DEFAULT_DTYPE)
            flat, inferred = arr.reshape(-1), arr.shape

        shape_ = normalize_shape(inferred if shape is None else shape)
        if flat.size != numel(shape_):
            raise ShapeMismatchError(
                f"Data size {flat.size} does not match shape {shape_} "
                f"({numel(shape_)} elements)",
                expected=(numel(shape_),),
                actual=(int(flat.size),),
            )

        self._data: np.ndarray = np.array(flat, dtype=config.DEFAULT_DTYPE, copy=True)
        self._shape: tuple[int, ...] = shape_

    @classmethod
    def _wrap(cls, flat: np.ndarray, shape: tuple[int, ...]) -> "NDArray":
        """
        Build an array around an already-validated flat buffer (no copy of
        `flat` unless it needs a dtype or contiguity conversion, or is a
        read-only view).
        """
        buf = np.ascontiguousarray(flat, dtype=config.DEFAULT_DTYPE).reshape(-1)
        if not buf.flags.writeable:
            buf = buf.copy()
        obj = cls.__new__(cls)  # bypass __init__
        obj._data = buf
        obj._shape = tuple(shape)
        return obj

    # ----------------------------
    # Factories
    # ----------------------------
    @classmethod
    def zeros(cls, shape: Union[int, Sequence[int]]) -> "NDArray":
        """Return a zero-filled array of `shape`."""
        s = normalize_shape(shape)
        return cls._wrap(np.zeros(numel(s), dtype=config.DEFAULT_DTYPE), s)

    @classmethod
    def ones(cls, shape: Union[int, Sequence[int]]) -> "NDArray":
        """Return a one-filled array of `shape`."""
        s = normalize_shape(shape)
        return cls._wrap(np.ones(numel(s), dtype=config.DEFAULT_DTYPE), s)

    @classmethod
    def full(cls, shape: Union[int, Sequence[int]], value: Number) -> "NDArray":
        """Return an array of `shape` with every element set to `value`."""
        s = normalize_shape(shape)
        return cls._wrap(np.full(numel(s), float(value), dtype=config.DEFAULT_DTYPE), s)

    @classmethod
    def rand(cls, shape: Union[int, Sequence[int]]) -> "NDArray":
        """
        Return an array of `shape` filled with values drawn uniformly from
        ``[0, 1)`` using the generator from `config.get_rng()`.
        """
        s = normalize_shape(shape)
        return cls._wrap(config.get_rng().random(numel(s)), s)

    @classmethod
    def scalar(cls, value: Number) -> "NDArray":
        """Return a one-element array of shape ``(1,)``."""
        return cls._wrap(np.array([float(value)]), (1,))

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "NDArray":
        """Copy a NumPy array (any shape, rank 0 becomes ``(1,)``)."""
        return cls(np.asarray(arr))

    # ----------------------------
    # Introspection
    # ----------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def ndim(self) -> int:
        return len(self._shape)

    @property
    def data(self) -> np.ndarray:
        """
        Return a read-only flat view of the underlying row-major buffer.
        """
        view = self._data.view()
        view.flags.writeable = False
        return view

    def numel(self) -> int:
        return int(self._data.size)

    def to_numpy(self) -> np.ndarray:
        """Return a shaped copy of the array."""
        return self._data.reshape(self._shape).copy()

    def tolist(self) -> list:
        return self._data.reshape(self._shape).tolist()

    def copy(self) -> "NDArray":
        return self._wrap(self._data.copy(), self._shape)

    def item(self) -> float:
        """
        Return the value of a one-element array as a Python float.

        Raises
        ------
        ScalarConversionError
            If the array holds more than one element.
        """
        if self._data.size != 1:
            raise ScalarConversionError(self._shape)
        return float(self._data[0])

    def __float__(self) -> float:
        return self.item()

    # ----------------------------
    # In-place mutation
    # ----------------------------
    def fill(self, value: Number) -> None:
        """Overwrite every element with `value`."""
        self._data.fill(float(value))

    # ----------------------------
    # Shared broadcasting procedure
    # ----------------------------
    @staticmethod
    def _coerce(other: Any) -> Optional["NDArray"]:
        """
        Convert a supported operand to an NDArray, or return None if the
        operand type is not supported (so operators can return NotImplemented).
        """
        if isinstance(other, NDArray):
            return other
        if isinstance(other, bool):
            return NDArray.scalar(float(other))
        if isinstance(other, (int, float, np.number)):
            return NDArray.scalar(other)
        if isinstance(other, (list, tuple, np.ndarray)):
            return NDArray(other)
        return None

    def _broadcast_binary(
        self, other: "NDArray", fn: Callable[[np.ndarray, np.ndarray], np.ndarray]
    ) -> "NDArray":
        """
        Apply an elementwise binary function under broadcasting.

        The result shape is computed and validated first; `fn` then receives
        both operands viewed in their natural shapes.

        Raises
        ------
        BroadcastError
            If the operand shapes are not broadcast-compatible.
        """
        out_shape = broadcast_shapes(self._shape, other._shape)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            res = fn(self._data.reshape(self._shape), other._data.reshape(other._shape))
        return self._wrap(res, out_shape)

    # ----------------------------
    # Rendering
    # ----------------------------
    def __str__(self) -> str:
        precision = config.get_print_precision()
        return _render(self._data, self._shape, lambda v: f"{v:.{precision}g}", 0)

    def __repr__(self) -> str:
        return f"NDArray(shape={self._shape}, data={self})"


def _render(
    flat: np.ndarray, shape: tuple[int, ...], fmt: Callable[[float], str], depth: int
) -> str:
    """
    Render a flat buffer as nested brackets following `shape`.

    Rows of a rank-2 block are separated by a newline; higher-rank blocks add
    one blank line per extra level.
    """
    if len(shape) == 1:
        return "[" + ", ".join(fmt(float(v)) for v in flat) + "]"
    step = numel(shape[1:])
    sep = "," + "\n" * (len(shape) - 1) + " " * (depth + 1)
    return (
        "["
        + sep.join(
            _render(flat[i * step : (i + 1) * step], shape[1:], fmt, depth + 1)
            for i in range(shape[0])
        )
        + "]"
    )
