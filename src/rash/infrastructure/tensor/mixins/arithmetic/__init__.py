"""
Arithmetic mixin and backward rules for Tensor operations.

This package aggregates the arithmetic Tensor mixin and the modules that
register the backward rule of each arithmetic op tag:

- addition           (``__add__`` / ``__radd__``)      -> ``OpKind.ADD``
- subtraction        (``__sub__`` / ``__rsub__``)      -> ``OpKind.SUB``
- multiplication     (``__mul__`` / ``__rmul__``)      -> ``OpKind.MUL``
- true division      (``__truediv__`` / ``__rtruediv__``) -> ``OpKind.DIV``

Design notes
------------
- Rule modules are imported for their *side effects*: registering backward
  rules with `node_backward_path`.
- Rule modules are not part of the public API.

Public API
----------
- ``TensorMixinArithmetic``
"""

from ._tensor_addition import *
from ._tensor_subtraction import *
from ._tensor_multiplication import *
from ._tensor_division import *
from ._base import TensorMixinArithmetic

__all__ = [
    TensorMixinArithmetic.__name__,
]
