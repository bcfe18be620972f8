"""
Reduction mixin and backward rules for Tensor operations.

- ``sum``  : summation reduction      -> ``OpKind.SUM``
- ``mean`` : arithmetic mean reduction -> ``OpKind.MEAN``

The rule modules (``_tensor_sum``, ``_tensor_mean``) are imported for side
effects so that their rules are registered; they are not intended to be used
directly.
"""

from ._tensor_mean import *
from ._tensor_sum import *
from ._base import TensorMixinReduction

__all__ = [
    TensorMixinReduction.__name__,
]
