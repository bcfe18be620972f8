"""
Unary mixin and backward rules for Tensor operations.

- negation      (``__neg__``)           -> ``OpKind.NEG``
- exponential   (``exp``)               -> ``OpKind.EXP``
- integer power (``pow`` / ``__pow__``) -> ``OpKind.POW``

Rule modules are imported for their side effects (rule registration).
"""

from ._tensor_neg import *
from ._tensor_exp import *
from ._tensor_pow import *
from ._base import TensorMixinUnary

__all__ = [
    TensorMixinUnary.__name__,
]
