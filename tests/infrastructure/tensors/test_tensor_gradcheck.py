"""
Central finite-difference checks of the analytic gradients.

Each check builds ``loss = sum(f(*inputs) * W)`` for a fixed random weight
``W`` (so every output element contributes differently), backpropagates, and
compares every input gradient with ``(loss(x + eps) - loss(x - eps)) / 2eps``.
"""

import unittest

import numpy as np

from rash.infrastructure.tensor import Tensor

EPS = 1e-6
RTOL = 1e-4
ATOL = 1e-7

SCALAR, VECTOR, MATRIX, BATCHED = (1,), (3,), (2, 3), (2, 2, 3)


class _GradCheckMixin:
    rng: np.random.Generator

    def _gradcheck(self, fn, *arrays):
        arrays = [np.asarray(a, dtype=np.float64) for a in arrays]
        out_shape = fn(*[Tensor(a) for a in arrays]).shape
        weight = Tensor(self.rng.standard_normal(out_shape))

        def loss(*xs):
            return (fn(*[Tensor(x) for x in xs]) * weight).sum().item()

        inputs = [Tensor(a, requires_grad=True) for a in arrays]
        (fn(*inputs) * weight).sum().backward()

        for idx, (arr, t) in enumerate(zip(arrays, inputs)):
            analytic = t.fetch_grad().to_numpy()
            self.assertEqual(analytic.shape, arr.shape)
            numeric = np.zeros_like(arr)
            for pos in np.ndindex(arr.shape):
                plus = [a.copy() for a in arrays]
                minus = [a.copy() for a in arrays]
                plus[idx][pos] += EPS
                minus[idx][pos] -= EPS
                numeric[pos] = (loss(*plus) - loss(*minus)) / (2 * EPS)
            np.testing.assert_allclose(
                analytic, numeric, rtol=RTOL, atol=ATOL, err_msg=f"input {idx}"
            )

    def _normal(self, shape):
        return self.rng.standard_normal(shape)

    def _away_from_zero(self, shape):
        x = self.rng.uniform(0.5, 2.0, size=shape)
        return x * self.rng.choice([-1.0, 1.0], size=shape)


class TestElementwiseGradcheck(_GradCheckMixin, unittest.TestCase):
    def setUp(self):
        self.rng = np.random.default_rng(2024)

    def test_add_sub_mul_div_per_rank(self):
        for shape in (SCALAR, VECTOR, MATRIX, BATCHED):
            with self.subTest(shape=shape):
                a, b = self._normal(shape), self._away_from_zero(shape)
                self._gradcheck(lambda x, y: x + y, a, b)
                self._gradcheck(lambda x, y: x - y, a, b)
                self._gradcheck(lambda x, y: x * y, a, b)
                self._gradcheck(lambda x, y: x / y, a, b)

    def test_exp_and_pow_per_rank(self):
        for shape in (SCALAR, VECTOR, MATRIX, BATCHED):
            with self.subTest(shape=shape):
                self._gradcheck(lambda x: x.exp(), self._normal(shape))
                self._gradcheck(lambda x: x.pow(3), self._normal(shape))
                self._gradcheck(lambda x: x.pow(-2), self._away_from_zero(shape))

    def test_broadcast_operands(self):
        self._gradcheck(
            lambda x, y: x * y, self._normal((3, 1)), self._normal((1, 4))
        )
        self._gradcheck(
            lambda x, y: x / y, self._normal((2, 3, 4)), self._away_from_zero((4,))
        )
        self._gradcheck(
            lambda x, y: x - y, self._normal((3,)), self._normal((2, 1, 3))
        )

    def test_composite_expression(self):
        self._gradcheck(
            lambda x, y: ((x * y).exp() + x.pow(2)) / (y * y + 1),
            self._normal(MATRIX),
            self._normal(MATRIX),
        )


class TestMatmulGradcheck(_GradCheckMixin, unittest.TestCase):
    def setUp(self):
        self.rng = np.random.default_rng(99)

    def test_matmul_rank_combinations(self):
        cases = [
            ((1,), (1,)),
            ((3,), (3,)),
            ((3,), (3, 2)),
            ((2, 3), (3,)),
            ((2, 3), (3, 4)),
            ((2, 2, 3), (3, 4)),
            ((2, 3), (2, 3, 4)),
            ((2, 1, 2, 3), (3, 3, 2)),
        ]
        for shape_a, shape_b in cases:
            with self.subTest(a=shape_a, b=shape_b):
                self._gradcheck(
                    lambda x, y: x @ y, self._normal(shape_a), self._normal(shape_b)
                )


class TestShapeOpsGradcheck(_GradCheckMixin, unittest.TestCase):
    def setUp(self):
        self.rng = np.random.default_rng(11)

    def test_reductions(self):
        x = self._normal((2, 3, 4))
        self._gradcheck(lambda t: t.sum(axis=1), x)
        self._gradcheck(lambda t: t.sum(axis=(0, 2), keepdims=True), x)
        self._gradcheck(lambda t: t.mean(axis=-1), x)
        self._gradcheck(lambda t: t.mean(), x)

    def test_permutations(self):
        x = self._normal((2, 3, 4))
        self._gradcheck(lambda t: t.permute((2, 0, 1)), x)
        self._gradcheck(lambda t: t.transpose(0, 1), x)
        self._gradcheck(lambda t: t.T(), x)


if __name__ == "__main__":
    unittest.main()
