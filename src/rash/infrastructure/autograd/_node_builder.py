"""
Backward-rule registry for computation nodes.

The registry is the generic `create_path_builder` specialized on the node
attribute ``"op"``: calling ``node.backward_step(grad)`` dispatches to the
rule registered for ``node.op``.

Typical usage
-------------
Each operation module registers the rule for its own tag:

    @node_backward_path(ComputationNode, ComputationNode.backward_step, OpKind.EXP)
    def exp_backward(node, grad):
        return (grad * node.value,)

A rule receives the node and the node's complete gradient and returns one
contribution per parent (or ``None`` for no contribution).
"""

from ...domain.utils._control_path import create_path_builder

# Registry that dispatches ComputationNode.backward_step on `node.op`
node_backward_path = create_path_builder("op")
