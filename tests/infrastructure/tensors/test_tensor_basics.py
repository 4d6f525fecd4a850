import unittest
import numpy as np

from neuroforge import Tensor, ShapeMismatchError, UnsupportedRankError
from neuroforge.domain._tensor import ITensor
from neuroforge.infrastructure.tensor import OpKind


class TestTensorConstruction(unittest.TestCase):
    def test_scalar_vector_matrix_shapes(self):
        self.assertEqual(Tensor(3.0).shape, ())
        self.assertEqual(Tensor([1.0, 2.0]).shape, (2,))
        self.assertEqual(Tensor([[1.0, 2.0], [3.0, 4.0]]).shape, (2, 2))

    def test_gradient_starts_at_zero_with_value_shape(self):
        t = Tensor([[1.0, 2.0, 3.0]])
        self.assertEqual(t.gradient.shape, t.shape)
        np.testing.assert_array_equal(t.gradient, np.zeros((1, 3)))

    def test_rank_three_rejected(self):
        with self.assertRaises(UnsupportedRankError):
            Tensor(np.zeros((2, 2, 2)))

    def test_ragged_input_rejected(self):
        with self.assertRaises(ValueError):
            Tensor([[1.0, 2.0], [3.0]])

    def test_none_rejected(self):
        with self.assertRaises(ValueError):
            Tensor(None)
        with self.assertRaises(ValueError):
            Tensor([[1.0, None]])

    def test_strings_rejected(self):
        with self.assertRaises(ValueError):
            Tensor("1.5")
        with self.assertRaises(ValueError):
            Tensor(["1.0", "2.0"])

    def test_integer_and_bool_values_become_float(self):
        t = Tensor([[1, 0], [True, False]])
        self.assertEqual(t.value.dtype, np.float64)
        np.testing.assert_array_equal(t.value, [[1.0, 0.0], [1.0, 0.0]])

    def test_copy_from_numpy_rejects_non_numeric(self):
        t = Tensor.zeros(())
        with self.assertRaises(ValueError):
            t.copy_from_numpy(None)

    def test_value_is_copied(self):
        src = np.array([[1.0, 2.0]])
        t = Tensor(src)
        src[0, 0] = 100.0
        self.assertEqual(t.value[0, 0], 1.0)

    def test_value_and_gradient_are_read_only(self):
        t = Tensor([[1.0, 2.0]])
        with self.assertRaises(ValueError):
            t.value[0, 0] = 5.0
        with self.assertRaises(ValueError):
            t.gradient[0, 0] = 5.0

    def test_defaults_and_flags(self):
        t = Tensor([1.0])
        self.assertTrue(t.requires_grad)
        self.assertTrue(t.requires_gradient)
        self.assertTrue(t.is_leaf)
        self.assertEqual(t.parents, ())

        c = Tensor([1.0], requires_grad=False)
        self.assertFalse(c.requires_grad)

    def test_context_records_op_and_parents(self):
        a = Tensor([[1.0]])
        b = Tensor([[2.0]])
        c = a + b
        self.assertIsNone(a.ctx)
        self.assertEqual(c.ctx.op, OpKind.ADD)
        self.assertEqual(tuple(c.ctx.parents), (a, b))

    def test_satisfies_protocol(self):
        self.assertIsInstance(Tensor(1.0), ITensor)

    def test_item_and_numel(self):
        self.assertEqual(Tensor([[2.5]]).item(), 2.5)
        self.assertEqual(Tensor([[1.0, 2.0]]).numel(), 2)
        with self.assertRaises(ValueError):
            Tensor([1.0, 2.0]).item()

    def test_factories(self):
        np.testing.assert_array_equal(Tensor.zeros((2, 3)).value, np.zeros((2, 3)))
        np.testing.assert_array_equal(Tensor.ones((3,)).value, np.ones(3))


class TestTensorMutators(unittest.TestCase):
    def test_copy_from_numpy_in_place(self):
        t = Tensor.zeros((1, 2))
        t.copy_from_numpy([[3.0, 4.0]])
        np.testing.assert_array_equal(t.to_numpy(), [[3.0, 4.0]])

    def test_copy_from_numpy_shape_mismatch(self):
        t = Tensor.zeros((1, 2))
        with self.assertRaises(ShapeMismatchError):
            t.copy_from_numpy([[1.0, 2.0, 3.0]])

    def test_apply_update_adds_delta(self):
        t = Tensor([[1.0, 2.0]])
        t.apply_update_(np.array([[0.5, -1.0]]))
        np.testing.assert_allclose(t.value, [[1.5, 1.0]])

    def test_zero_grad_resets_gradient(self):
        t = Tensor([[1.0, 2.0]])
        (t + t).backward(np.ones((1, 2)))
        self.assertFalse(np.all(t.gradient == 0.0))
        t.zero_grad()
        np.testing.assert_array_equal(t.gradient, np.zeros((1, 2)))

    def test_to_numpy_returns_copy(self):
        t = Tensor([[1.0]])
        arr = t.to_numpy()
        arr[0, 0] = 9.0
        self.assertEqual(t.item(), 1.0)

    def test_transpose_is_constant(self):
        t = Tensor([[1.0, 2.0, 3.0]])
        tt = t.T
        self.assertEqual(tt.shape, (3, 1))
        self.assertFalse(tt.requires_grad)
        self.assertTrue(tt.is_leaf)


if __name__ == "__main__":
    unittest.main()
