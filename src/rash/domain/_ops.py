"""
Operation tags recorded on computation nodes.

Each node produced by a differentiable operation stores one `OpKind` tag. The
backward pass dispatches on that tag to the rule registered for it, so a node
never has to carry its own closure and a graph can be inspected by walking the
tags and parents.

Operators defined outside the core (e.g. activation layers) may register rules
for their own hashable tags; `OpKind` only enumerates the built-in ones.
"""

from enum import Enum


class OpKind(str, Enum):
    """
    Built-in operation tags.

    Notes
    -----
    ``LEAF`` marks nodes created directly by the user (or released after a
    backward pass); no rule runs for them.
    """

    LEAF = "leaf"

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"

    NEG = "neg"
    EXP = "exp"
    POW = "pow"

    SUM = "sum"
    MEAN = "mean"

    PERMUTE = "permute"
    MATMUL = "matmul"

    RELU = "relu"
