import unittest
from unittest import mock

import numpy as np

from neuroforge import (
    BackwardRegistry,
    BackwardRuleNotFoundError,
    NonScalarBackwardError,
    ShapeMismatchError,
    Tensor,
    mse,
    relu,
)
from neuroforge.infrastructure.tensor import OpKind, topological_order


class TestTopologicalOrder(unittest.TestCase):
    def test_root_last_and_parents_first(self):
        x = Tensor([[1.0, 2.0]])
        w = Tensor([[1.0], [1.0]])
        h = x @ w
        y = relu(h)

        order = topological_order(y)
        self.assertIs(order[-1], y)
        pos = {id(t): i for i, t in enumerate(order)}
        for node in order:
            for p in node.parents:
                self.assertLess(pos[id(p)], pos[id(node)])

    def test_shared_node_appears_once(self):
        a = Tensor([1.0])
        h = a + a
        d = h + h
        order = topological_order(d)
        self.assertEqual(len(order), 3)
        self.assertEqual(sum(1 for t in order if t is h), 1)

    def test_deep_chain_does_not_recurse(self):
        x = Tensor([1.0])
        y = x
        for _ in range(5000):
            y = y + Tensor([0.0], requires_grad=False)
        y.backward()
        np.testing.assert_allclose(x.gradient, [1.0])


class TestBackwardRuleInvocation(unittest.TestCase):
    def _recording_rules(self, calls):
        rules = {}
        for op, rule in BackwardRegistry.RULES.items():

            def wrapped(ctx, grad_out, _op=op, _rule=rule):
                calls.append(_op)
                return _rule(ctx, grad_out)

            rules[op] = wrapped
        return rules

    def test_each_rule_fires_once_in_reverse_order(self):
        calls = []
        with mock.patch.dict(BackwardRegistry.RULES, self._recording_rules(calls)):
            x = Tensor([[1.0, -2.0]])
            w = Tensor([[1.0], [1.0]])
            b = Tensor([[0.5]])
            out = mse(relu(x @ w) + b, [[1.0]])
            out.backward()

        self.assertEqual(
            calls, [OpKind.MSE_LOSS, OpKind.ADD, OpKind.RELU, OpKind.MATMUL]
        )

    def test_shared_intermediate_rule_fires_once(self):
        calls = []
        with mock.patch.dict(BackwardRegistry.RULES, self._recording_rules(calls)):
            a = Tensor([2.0])
            h = a + a
            d = h + h
            d.backward()

        self.assertEqual(calls, [OpKind.ADD, OpKind.ADD])
        np.testing.assert_allclose(h.gradient, [2.0])
        np.testing.assert_allclose(a.gradient, [4.0])

    def test_builtin_rules_registered(self):
        self.assertIn("add", BackwardRegistry.available())
        self.assertIn("mse_loss", BackwardRegistry.available())

    def test_duplicate_registration_rejected(self):
        with self.assertRaises(ValueError):
            BackwardRegistry.register(OpKind.ADD)(lambda ctx, g: (g, g))

    def test_missing_rule_is_lookup_error(self):
        with mock.patch.dict(BackwardRegistry.RULES, clear=True):
            with self.assertRaises(BackwardRuleNotFoundError) as cm:
                BackwardRegistry.get(OpKind.RELU)
        self.assertIsInstance(cm.exception, LookupError)
        self.assertEqual(cm.exception.op, "relu")

    def test_unknown_tag_is_lookup_error(self):
        with self.assertRaises(BackwardRuleNotFoundError):
            BackwardRegistry.get("conv2d")

    def test_backward_without_rule_raises(self):
        x = Tensor([[1.0]])
        y = relu(x)
        with mock.patch.dict(BackwardRegistry.RULES, clear=True):
            with self.assertRaises(BackwardRuleNotFoundError):
                y.backward()


class TestBackwardSemantics(unittest.TestCase):
    def test_diamond_accumulates_contributions(self):
        a = Tensor([[1.0, 2.0]])
        c = (a + a) + a
        c.backward(np.ones((1, 2)))
        np.testing.assert_allclose(a.gradient, [[3.0, 3.0]])

    def test_leaf_gradients_accumulate_across_calls(self):
        x = Tensor([[1.0]])
        y = x + x
        y.backward()
        y.backward()
        np.testing.assert_allclose(x.gradient, [[4.0]])
        np.testing.assert_allclose(y.gradient, [[1.0]])

    def test_non_scalar_root_requires_seed(self):
        y = relu(Tensor([[1.0, 2.0]]))
        with self.assertRaises(NonScalarBackwardError):
            y.backward()

    def test_single_element_matrix_is_scalar(self):
        x = Tensor([[3.0]])
        relu(x).backward()
        np.testing.assert_allclose(x.gradient, [[1.0]])

    def test_seed_shape_checked(self):
        y = relu(Tensor([[1.0, 2.0]]))
        with self.assertRaises(ShapeMismatchError):
            y.backward(np.ones((2, 1)))

    def test_seed_accepts_tensor(self):
        x = Tensor([1.0, 2.0])
        relu(x).backward(Tensor([3.0, 4.0]))
        np.testing.assert_allclose(x.gradient, [3.0, 4.0])

    def test_backward_on_leaf_sets_seed(self):
        x = Tensor(2.0)
        x.backward()
        np.testing.assert_allclose(x.gradient, 1.0)

    def test_frozen_subgraph_skipped(self):
        x = Tensor([[1.0]], requires_grad=False)
        y = relu(x)
        self.assertFalse(y.requires_grad)
        y.backward()
        np.testing.assert_allclose(x.gradient, [[0.0]])


if __name__ == "__main__":
    unittest.main()
