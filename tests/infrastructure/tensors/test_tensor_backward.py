import math
import unittest

import numpy as np

from rash.infrastructure.ndarray import NDArray
from rash.infrastructure.tensor import Tensor


class TestTensorBackwardScenarios(unittest.TestCase):
    def test_exp_of_sum(self):
        a = Tensor(5, requires_grad=True, tag="a")
        b = Tensor(1, requires_grad=True, tag="b")
        c = (a + b).exp()
        c.backward()

        expected = math.exp(6.0)
        self.assertAlmostEqual(c.item(), expected, places=9)
        self.assertAlmostEqual(a.fetch_grad().item(), expected, places=9)
        self.assertAlmostEqual(b.fetch_grad().item(), expected, places=9)
        self.assertAlmostEqual(expected, 403.4288, places=4)

    def test_diamond_accumulates_both_edges(self):
        a = Tensor(5, requires_grad=True)
        d = a + a
        d.backward()
        self.assertEqual(a.fetch_grad().item(), 2.0)

    def test_shared_intermediate_is_complete_before_propagating(self):
        a = Tensor(2.0, requires_grad=True)
        b = a * a
        c = b * b + b
        c.backward()
        # dc/da = (2b + 1) * 2a = 9 * 4
        self.assertAlmostEqual(a.fetch_grad().item(), 36.0)

    def test_unbroadcast_reduces_gradient_shapes(self):
        a = Tensor(np.arange(3.0).reshape(3, 1), requires_grad=True)
        b = Tensor(np.arange(4.0).reshape(1, 4), requires_grad=True)
        c = a + b
        c.backward()

        ga, gb = a.fetch_grad(), b.fetch_grad()
        self.assertEqual(ga.shape, (3, 1))
        self.assertEqual(gb.shape, (1, 4))
        np.testing.assert_array_equal(ga.to_numpy(), np.full((3, 1), 4.0))
        np.testing.assert_array_equal(gb.to_numpy(), np.full((1, 4), 3.0))

    def test_unbroadcast_drops_added_leading_axes(self):
        x = Tensor(np.ones((2, 3, 4)), requires_grad=True)
        bias = Tensor(np.zeros(4), requires_grad=True)
        (x * 2 + bias).backward()
        np.testing.assert_array_equal(bias.fetch_grad().to_numpy(), np.full(4, 6.0))
        np.testing.assert_array_equal(x.fetch_grad().to_numpy(), np.full((2, 3, 4), 2.0))

    def test_repeated_backward_accumulates(self):
        a = Tensor(3.0, requires_grad=True)
        y = a * 2
        y.backward()
        y.backward()
        self.assertEqual(a.fetch_grad().item(), 4.0)

    def test_repeated_backward_through_intermediate_adds_one_gradient(self):
        x = Tensor(1.0, requires_grad=True)
        y = x * 2
        z = y * 3
        z.backward()
        z.backward()
        self.assertEqual(x.fetch_grad().item(), 12.0)
        self.assertEqual(y.fetch_grad().item(), 3.0)

    def test_second_root_sharing_an_intermediate(self):
        x = Tensor([1.0, 2.0], requires_grad=True)
        y = x * x
        (y * 2).sum().backward()
        (y * 5).sum().backward()
        np.testing.assert_allclose(x.fetch_grad().to_numpy(), [14.0, 28.0])

    def test_constant_operand_receives_nothing(self):
        a = Tensor([1.0, 2.0], requires_grad=True)
        w = Tensor([3.0, 4.0])
        (a * w).backward()
        self.assertEqual(a.fetch_grad().tolist(), [3.0, 4.0])
        self.assertEqual(w.fetch_grad().tolist(), [0.0, 0.0])

    def test_ndarray_operand_is_a_constant(self):
        a = Tensor([1.0, 2.0], requires_grad=True)
        (NDArray([5.0, 6.0]) * a).backward()
        self.assertEqual(a.fetch_grad().tolist(), [5.0, 6.0])


class TestTensorBackwardRules(unittest.TestCase):
    def setUp(self):
        rng = np.random.default_rng(7)
        self.x_np = rng.standard_normal((2, 3))
        self.y_np = rng.standard_normal((2, 3)) + 3.0

    def _pair(self):
        return (
            Tensor(self.x_np, requires_grad=True, tag="x"),
            Tensor(self.y_np, requires_grad=True, tag="y"),
        )

    def test_sub(self):
        x, y = self._pair()
        (x - y).backward()
        np.testing.assert_allclose(x.fetch_grad().to_numpy(), np.ones((2, 3)))
        np.testing.assert_allclose(y.fetch_grad().to_numpy(), -np.ones((2, 3)))

    def test_mul(self):
        x, y = self._pair()
        (x * y).backward()
        np.testing.assert_allclose(x.fetch_grad().to_numpy(), self.y_np)
        np.testing.assert_allclose(y.fetch_grad().to_numpy(), self.x_np)

    def test_div(self):
        x, y = self._pair()
        (x / y).backward()
        np.testing.assert_allclose(x.fetch_grad().to_numpy(), 1.0 / self.y_np)
        np.testing.assert_allclose(
            y.fetch_grad().to_numpy(), -self.x_np / (self.y_np**2)
        )

    def test_neg(self):
        x, _ = self._pair()
        (-x).backward()
        np.testing.assert_allclose(x.fetch_grad().to_numpy(), -np.ones((2, 3)))

    def test_exp(self):
        x, _ = self._pair()
        x.exp().backward()
        np.testing.assert_allclose(x.fetch_grad().to_numpy(), np.exp(self.x_np))

    def test_pow(self):
        x, _ = self._pair()
        x.pow(3).backward()
        np.testing.assert_allclose(x.fetch_grad().to_numpy(), 3 * self.x_np**2)

        _, y = self._pair()
        (y**-2).backward()
        np.testing.assert_allclose(y.fetch_grad().to_numpy(), -2 * self.y_np**-3)

    def test_pow_zero_has_zero_gradient(self):
        x, _ = self._pair()
        x.pow(0).backward()
        np.testing.assert_array_equal(x.fetch_grad().to_numpy(), np.zeros((2, 3)))

    def test_non_integer_pow_raises(self):
        x, _ = self._pair()
        with self.assertRaises(TypeError):
            x.pow(0.5)

    def test_sum_and_mean(self):
        x, _ = self._pair()
        x.sum(axis=1).sum().backward()
        np.testing.assert_array_equal(x.fetch_grad().to_numpy(), np.ones((2, 3)))

        x, _ = self._pair()
        x.mean().backward()
        np.testing.assert_allclose(x.fetch_grad().to_numpy(), np.full((2, 3), 1 / 6))

        x, _ = self._pair()
        m = x.mean(axis=0, keepdims=True)
        self.assertEqual(m.shape, (1, 3))
        m.sum().backward()
        np.testing.assert_allclose(x.fetch_grad().to_numpy(), np.full((2, 3), 0.5))

    def test_sum_values(self):
        x, _ = self._pair()
        np.testing.assert_allclose(
            x.sum(axis=0).fetch_data().to_numpy(), self.x_np.sum(axis=0)
        )
        np.testing.assert_allclose(x.mean().item(), self.x_np.mean())

    def test_permute_uses_inverse_order(self):
        rng = np.random.default_rng(3)
        x_np = rng.standard_normal((2, 3, 4))
        w_np = rng.standard_normal((3, 4, 2))
        x = Tensor(x_np, requires_grad=True)

        (x.permute((1, 2, 0)) * Tensor(w_np)).sum().backward()
        np.testing.assert_allclose(
            x.fetch_grad().to_numpy(), np.transpose(w_np, (2, 0, 1))
        )

    def test_transpose_and_T_round_trip(self):
        rng = np.random.default_rng(4)
        for shape in ((2, 3), (2, 3, 4), (1, 2, 3, 2)):
            x_np = rng.standard_normal(shape)
            x = Tensor(x_np, requires_grad=True)
            back = x.T().T()
            self.assertEqual(back.shape, x.shape)
            np.testing.assert_array_equal(back.to_numpy(), x_np)

            t = x.transpose()
            np.testing.assert_array_equal(t.to_numpy(), np.swapaxes(x_np, -1, -2))
            t.backward()
            np.testing.assert_array_equal(x.fetch_grad().to_numpy(), np.ones(shape))

    def test_matmul_matrix(self):
        rng = np.random.default_rng(5)
        a_np, b_np = rng.standard_normal((3, 4)), rng.standard_normal((4, 2))
        a = Tensor(a_np, requires_grad=True)
        b = Tensor(b_np, requires_grad=True)
        y = a @ b
        np.testing.assert_allclose(y.to_numpy(), a_np @ b_np)
        y.backward()

        g = np.ones((3, 2))
        np.testing.assert_allclose(a.fetch_grad().to_numpy(), g @ b_np.T)
        np.testing.assert_allclose(b.fetch_grad().to_numpy(), a_np.T @ g)

    def test_matmul_vector_vector(self):
        a = Tensor([1.0, 2.0, 3.0], requires_grad=True)
        b = Tensor([4.0, 5.0, 6.0], requires_grad=True)
        y = Tensor.matmul(a, b)
        self.assertEqual(y.shape, (1,))
        self.assertEqual(y.item(), 32.0)
        y.backward()
        self.assertEqual(a.fetch_grad().tolist(), [4.0, 5.0, 6.0])
        self.assertEqual(b.fetch_grad().tolist(), [1.0, 2.0, 3.0])

    def test_matmul_batched_right_operand_broadcast(self):
        rng = np.random.default_rng(6)
        a_np, b_np = rng.standard_normal((5, 3, 4)), rng.standard_normal((4, 2))
        a = Tensor(a_np, requires_grad=True)
        b = Tensor(b_np, requires_grad=True)
        y = a @ b
        self.assertEqual(y.shape, (5, 3, 2))
        y.backward()

        g = np.ones((5, 3, 2))
        self.assertEqual(b.fetch_grad().shape, (4, 2))
        np.testing.assert_allclose(
            b.fetch_grad().to_numpy(), np.einsum("bmk,bmn->kn", a_np, g)
        )
        np.testing.assert_allclose(a.fetch_grad().to_numpy(), g @ b_np.T)

    def test_mask_from_comparison_blocks_gradient(self):
        x = Tensor([-1.0, 2.0, -3.0, 4.0], requires_grad=True)
        (x * (x > 0)).backward()
        self.assertEqual(x.fetch_grad().tolist(), [0.0, 1.0, 0.0, 1.0])


if __name__ == "__main__":
    unittest.main()
