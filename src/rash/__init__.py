"""
rash: a small reverse-mode automatic differentiation engine.

Public entry points
-------------------
- ``NDArray``: float64 n-dimensional array with broadcasting, reductions,
  axis permutation and batched matrix multiplication.
- ``Tensor``: gradient-tracking handle; arithmetic records a computation graph
  and ``backward()`` accumulates gradients into every tracked input.
- ``ReLU``: example activation composed on top of the core.

Logging goes through the ``rash`` logger hierarchy, which carries a
``NullHandler``; attach a handler to see the engine's DEBUG trace.
"""

import logging

from . import config
from .domain import (
    RashError,
    ShapeMismatchError,
    BroadcastError,
    RankError,
    ScalarConversionError,
    OpKind,
)
from .infrastructure import NDArray, Tensor, ReLU

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "config",
    NDArray.__name__,
    Tensor.__name__,
    ReLU.__name__,
    OpKind.__name__,
    RashError.__name__,
    ShapeMismatchError.__name__,
    BroadcastError.__name__,
    RankError.__name__,
    ScalarConversionError.__name__,
]
