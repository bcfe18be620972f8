import gc
import unittest
import weakref

import numpy as np

from rash.domain import OpKind
from rash.infrastructure.autograd import ComputationNode, backward, node_backward_path
from rash.infrastructure.autograd._engine import _post_order
from rash.infrastructure.ndarray import NDArray
from rash.infrastructure.tensor import Tensor


@node_backward_path(ComputationNode, ComputationNode.backward_step, "test_engine.double")
def _double_backward(node, grad):
    return tuple(grad * 2 for _ in node.parents)


class TestComputationNode(unittest.TestCase):
    def test_new_node_has_zero_gradient_of_value_shape(self):
        node = ComputationNode(NDArray.ones((2, 3)), requires_grad=True)
        self.assertEqual(node.grad.shape, (2, 3))
        np.testing.assert_array_equal(node.grad.to_numpy(), np.zeros((2, 3)))
        self.assertTrue(node.is_leaf)
        self.assertEqual(node.tag, f"tensor_{node.uid}")

    def test_uids_are_monotonic(self):
        a = ComputationNode(NDArray.ones(1))
        b = ComputationNode(NDArray.ones(1))
        self.assertGreater(b.uid, a.uid)

    def test_accumulate_adds_and_reduces_broadcast_shape(self):
        node = ComputationNode(NDArray.zeros((3, 1)), requires_grad=True)
        node.accumulate_grad(NDArray.ones((3, 1)))
        node.accumulate_grad(NDArray.ones((2, 3, 4)))
        self.assertEqual(node.grad.shape, (3, 1))
        np.testing.assert_array_equal(node.grad.to_numpy(), np.full((3, 1), 9.0))

    def test_release_turns_node_into_leaf(self):
        parent = ComputationNode(NDArray.ones(1), requires_grad=True)
        node = ComputationNode(
            NDArray.ones(1),
            requires_grad=True,
            op=OpKind.EXP,
            parents=(parent,),
            saved={"x": NDArray.ones(1)},
            meta={"k": 1},
        )
        node.release()
        self.assertEqual(node.op, OpKind.LEAF)
        self.assertEqual(node.parents, ())
        self.assertEqual(node.saved, {})
        self.assertEqual(node.meta, {})


class TestBackwardEngine(unittest.TestCase):
    def test_post_order_visits_shared_nodes_once(self):
        a = Tensor(2.0, requires_grad=True)
        b = a * a
        c = b * b + b
        order = _post_order(c.node)
        uids = [n.uid for n in order]
        self.assertEqual(len(uids), len(set(uids)))
        self.assertIs(order[-1], c.node)
        self.assertIs(order[0], a.node)
        self.assertLess(uids.index(b.node.uid), len(uids) - 1)

    def test_post_order_skips_untracked_parents(self):
        a = Tensor(1.0, requires_grad=True)
        k = Tensor(3.0)
        order = _post_order((a * k).node)
        self.assertNotIn(k.node, order)
        self.assertEqual(len(order), 2)

    def test_untracked_root_warns_and_seeds_only_root(self):
        t = Tensor([1.0, 2.0])
        with self.assertWarns(RuntimeWarning):
            t.backward()
        self.assertEqual(t.fetch_grad().tolist(), [1.0, 1.0])

    def test_non_scalar_root_is_seeded_with_ones(self):
        a = Tensor([1.0, 2.0, 3.0], requires_grad=True)
        y = a * 3
        y.backward()
        self.assertEqual(y.fetch_grad().tolist(), [1.0, 1.0, 1.0])
        self.assertEqual(a.fetch_grad().tolist(), [3.0, 3.0, 3.0])

    def test_release_graph(self):
        a = Tensor(1.0, requires_grad=True)
        b = Tensor(2.0, requires_grad=True)
        y = (a * b).exp()
        y.backward(release_graph=True)

        expected = np.exp(2.0)
        self.assertAlmostEqual(a.fetch_grad().item(), 2 * expected)
        self.assertAlmostEqual(b.fetch_grad().item(), expected)
        self.assertEqual(y.node.op, OpKind.LEAF)
        self.assertEqual(y.node.parents, ())

        # nothing left to propagate through
        y.backward()
        self.assertAlmostEqual(a.fetch_grad().item(), 2 * expected)

    def test_deep_chain_does_not_recurse(self):
        x = Tensor(0.0, requires_grad=True, tag="x")
        y = x
        for _ in range(3000):
            y = y + 1
        y.backward()
        self.assertEqual(x.fetch_grad().item(), 1.0)
        self.assertEqual(y.item(), 3000.0)

    def test_external_rule_and_absent_parent(self):
        leaf = ComputationNode(NDArray([1.0, 2.0]), requires_grad=True)
        root = ComputationNode(
            NDArray([0.0, 0.0]),
            requires_grad=True,
            op="test_engine.double",
            parents=(None, leaf),
        )
        backward(root)
        self.assertEqual(leaf.grad.tolist(), [2.0, 2.0])

    def test_unregistered_op_raises(self):
        leaf = ComputationNode(NDArray.ones(1), requires_grad=True)
        root = ComputationNode(
            NDArray.ones(1),
            requires_grad=True,
            op="test_engine.unregistered",
            parents=(leaf,),
        )
        with self.assertRaises(NotImplementedError):
            backward(root)

    def test_unregistered_op_leaves_gradients_untouched(self):
        leaf = ComputationNode(NDArray.ones(1), requires_grad=True)
        mid = ComputationNode(
            NDArray.ones(1), requires_grad=True, op=OpKind.MUL, parents=(leaf, leaf)
        )
        root = ComputationNode(
            NDArray.ones(1),
            requires_grad=True,
            op="test_engine.unregistered",
            parents=(mid,),
        )
        with self.assertRaises(NotImplementedError) as ctx:
            backward(root)
        self.assertIn("test_engine.unregistered", str(ctx.exception))
        self.assertEqual(leaf.grad.tolist(), [0.0])
        self.assertEqual(root.grad.tolist(), [0.0])

    def test_repeated_pass_recomputes_intermediate_gradients(self):
        leaf = ComputationNode(NDArray([1.0]), requires_grad=True)
        mid = ComputationNode(
            NDArray([1.0]), requires_grad=True, op="test_engine.double", parents=(leaf,)
        )
        root = ComputationNode(
            NDArray([1.0]), requires_grad=True, op="test_engine.double", parents=(mid,)
        )
        backward(root)
        backward(root)
        self.assertEqual(mid.grad.tolist(), [2.0])
        self.assertEqual(leaf.grad.tolist(), [8.0])

    def test_debug_logging(self):
        a = Tensor(1.0, requires_grad=True, tag="a")
        y = a.exp()
        with self.assertLogs("rash.infrastructure.autograd._engine", level="DEBUG") as cm:
            y.backward()
        output = "\n".join(cm.output)
        self.assertIn("2 reachable nodes", output)
        self.assertIn("exp(a)", output)

    def test_graph_is_freed_with_its_root(self):
        a = Tensor([1.0, 2.0], requires_grad=True)
        b = a * 2
        c = b.exp()
        ref = weakref.ref(b.node)
        del b
        gc.collect()
        # still reachable through c's parents
        self.assertIsNotNone(ref())
        del c
        gc.collect()
        self.assertIsNone(ref())


if __name__ == "__main__":
    unittest.main()
