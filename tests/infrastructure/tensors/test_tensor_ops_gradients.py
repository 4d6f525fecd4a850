import unittest
import numpy as np

from neuroforge import (
    DimensionMismatchError,
    ShapeMismatchError,
    Tensor,
    add,
    broadcast_rows,
    matmul,
    relu,
)


def _numerical_grad(f, x: np.ndarray, eps: float = 1e-6) -> np.ndarray:
    grad = np.zeros_like(x)
    it = np.nditer(x, flags=["multi_index"])
    while not it.finished:
        idx = it.multi_index
        orig = x[idx]
        x[idx] = orig + eps
        plus = f(x)
        x[idx] = orig - eps
        minus = f(x)
        x[idx] = orig
        grad[idx] = (plus - minus) / (2.0 * eps)
        it.iternext()
    return grad


class TestAdd(unittest.TestCase):
    def test_forward_and_shape(self):
        a = Tensor([[1.0, 2.0]])
        b = Tensor([[3.0, 4.0]])
        c = add(a, b)
        self.assertEqual(c.shape, (1, 2))
        np.testing.assert_allclose(c.value, [[4.0, 6.0]])
        self.assertEqual(c.parents, (a, b))
        self.assertFalse(c.is_leaf)

    def test_operator_and_method_forms(self):
        a = Tensor([1.0, 2.0])
        b = Tensor([3.0, 4.0])
        np.testing.assert_allclose((a + b).value, [4.0, 6.0])
        np.testing.assert_allclose(a.add(b).value, [4.0, 6.0])

    def test_gradient_flows_unchanged_to_both_operands(self):
        a = Tensor([[1.0, 2.0]])
        b = Tensor([[3.0, 4.0]])
        g = np.array([[0.5, -2.0]])
        add(a, b).backward(g)
        np.testing.assert_allclose(a.gradient, g)
        np.testing.assert_allclose(b.gradient, g)

    def test_shape_mismatch_rejected(self):
        with self.assertRaises(ShapeMismatchError):
            add(Tensor([[1.0, 2.0]]), Tensor([[1.0], [2.0]]))

    def test_no_implicit_broadcasting(self):
        with self.assertRaises(ShapeMismatchError):
            add(Tensor(np.ones((3, 2))), Tensor(np.ones((1, 2))))

    def test_constant_operand_receives_no_gradient(self):
        a = Tensor([[1.0]])
        c = Tensor([[2.0]], requires_grad=False)
        (a + c).backward()
        np.testing.assert_allclose(a.gradient, [[1.0]])
        np.testing.assert_allclose(c.gradient, [[0.0]])

    def test_result_requires_grad_only_if_a_parent_does(self):
        a = Tensor([1.0], requires_grad=False)
        b = Tensor([1.0], requires_grad=False)
        self.assertFalse((a + b).requires_grad)
        self.assertTrue((a + Tensor([1.0])).requires_grad)


class TestMatmul(unittest.TestCase):
    def test_forward(self):
        a = Tensor([[1.0, 2.0]])
        b = Tensor([[3.0], [4.0]])
        c = matmul(a, b)
        self.assertEqual(c.shape, (1, 1))
        self.assertAlmostEqual(c.item(), 11.0)
        np.testing.assert_allclose((a @ b).value, [[11.0]])

    def test_gradients_match_finite_differences(self):
        rng = np.random.default_rng(0)
        a0 = rng.standard_normal((2, 3))
        b0 = rng.standard_normal((3, 2))

        a = Tensor(a0)
        b = Tensor(b0)
        matmul(a, b).backward(np.ones((2, 2)))

        num_a = _numerical_grad(lambda x: float(np.sum(x @ b0)), a0.copy())
        num_b = _numerical_grad(lambda x: float(np.sum(a0 @ x)), b0.copy())

        np.testing.assert_allclose(a.gradient, num_a, atol=1e-4)
        np.testing.assert_allclose(b.gradient, num_b, atol=1e-4)

    def test_analytic_gradient_formula(self):
        a0 = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        b0 = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
        g = np.array([[1.0, 2.0], [3.0, 4.0]])

        a = Tensor(a0)
        b = Tensor(b0)
        matmul(a, b).backward(g)

        np.testing.assert_allclose(a.gradient, g @ b0.T)
        np.testing.assert_allclose(b.gradient, a0.T @ g)

    def test_inner_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatchError) as cm:
            matmul(Tensor(np.ones((2, 3))), Tensor(np.ones((2, 3))))
        self.assertEqual(cm.exception.shape_a, (2, 3))
        self.assertEqual(cm.exception.shape_b, (2, 3))

    def test_non_matrix_operands_rejected(self):
        with self.assertRaises(DimensionMismatchError):
            matmul(Tensor([1.0, 2.0]), Tensor(np.ones((2, 1))))


class TestRelu(unittest.TestCase):
    def test_forward_and_subgradient_at_zero(self):
        x = Tensor([-1.0, 0.0, 1.0])
        y = relu(x)
        np.testing.assert_allclose(y.value, [0.0, 0.0, 1.0])

        y.backward(np.ones(3))
        np.testing.assert_allclose(x.gradient, [0.0, 0.0, 1.0])

    def test_method_form(self):
        x = Tensor([[-2.0, 3.0]])
        np.testing.assert_allclose(x.relu().value, [[0.0, 3.0]])

    def test_shape_preserved(self):
        x = Tensor(np.ones((4, 5)))
        self.assertEqual(relu(x).shape, (4, 5))


class TestBroadcastRows(unittest.TestCase):
    def test_forward_repeats_row(self):
        b = Tensor([[1.0, 2.0]])
        out = broadcast_rows(b, 3)
        np.testing.assert_allclose(out.value, [[1.0, 2.0]] * 3)

    def test_gradient_is_column_sum(self):
        b = Tensor([[1.0, 2.0]])
        g = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        broadcast_rows(b, 3).backward(g)
        np.testing.assert_allclose(b.gradient, [[9.0, 12.0]])

    def test_requires_single_row(self):
        with self.assertRaises(ShapeMismatchError):
            broadcast_rows(Tensor(np.ones((2, 2))), 3)

    def test_rows_must_be_positive(self):
        with self.assertRaises(ValueError):
            broadcast_rows(Tensor([[1.0]]), 0)


if __name__ == "__main__":
    unittest.main()
