"""
Reverse-mode automatic differentiation engine.

This module contains

- `BackwardRegistry`: a registry mapping each `OpKind` tag to its backward
  rule. A rule is a pure function `(ctx, grad_out) -> parent deltas` that
  reads parent values and saved arrays from the context and returns one
  gradient contribution (or None) per parent, in operand order.
- `topological_order(root)`: depth-first post-order over parent links.
- `backward(root, gradient)`: seeds the root and applies every rule exactly
  once, walking the order from the root back to the leaves.

Gradient semantics
------------------
- Leaf tensors that require gradients accumulate contributions across
  `backward()` calls until `zero_grad()` is called.
- Non-leaf tensors reached by a pass have their gradient reset at the start
  of that pass, so repeated calls never re-propagate stale intermediate
  gradients.
- Contributions are only added into tensors with `requires_grad=True`.
- Backward rules operate on materialised NumPy arrays and never build new
  graph nodes.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Dict, Optional, Sequence, TypeVar

import numpy as np

from ...domain._errors import (
    BackwardRuleNotFoundError,
    InvalidNumericError,
    NonScalarBackwardError,
    ShapeMismatchError,
)
from .._config import get_config
from ._ops import transpose
from ._tensor import Tensor
from ._tensor_context import Context, OpKind

logger = logging.getLogger(__name__)

BackwardRule = Callable[[Context, np.ndarray], Sequence[Optional[np.ndarray]]]
R = TypeVar("R", bound=BackwardRule)


class BackwardRegistry:
    """
    Registry of backward rules keyed by operation tag.

    Usage
    -----
    Register:
        @BackwardRegistry.register(OpKind.ADD)
        def _add_backward(ctx, grad_out): ...

    Dispatch:
        rule = BackwardRegistry.get(ctx.op)
        deltas = rule(ctx, grad_out)
    """

    RULES: ClassVar[Dict[OpKind, BackwardRule]] = {}

    @classmethod
    def register(cls, op: OpKind, *, overwrite: bool = False) -> Callable[[R], R]:
        """
        Decorator to register a backward rule for `op`.

        Parameters
        ----------
        op:
            Operation tag the rule handles.
        overwrite:
            If False (default), raises if `op` already has a rule.
        """
        op = OpKind(op)

        def decorator(func: R) -> R:
            if not overwrite and op in cls.RULES:
                raise ValueError(f"Backward rule already registered: {op.value!r}")
            cls.RULES[op] = func
            return func

        return decorator

    @classmethod
    def get(cls, op: OpKind) -> BackwardRule:
        """
        Return the backward rule registered for `op`.

        Raises
        ------
        BackwardRuleNotFoundError
            If `op` is not a known tag or has no rule.
        """
        try:
            return cls.RULES[OpKind(op)]
        except (KeyError, ValueError) as e:
            raise BackwardRuleNotFoundError(getattr(op, "value", str(op))) from e

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return the tags that have a registered rule (sorted)."""
        return tuple(sorted(op.value for op in cls.RULES))


@BackwardRegistry.register(OpKind.ADD)
def _add_backward(ctx: Context, grad_out: np.ndarray):
    # d(a+b)/da = d(a+b)/db = 1
    return grad_out.copy(), grad_out.copy()


@BackwardRegistry.register(OpKind.MATMUL)
def _matmul_backward(ctx: Context, grad_out: np.ndarray):
    a, b = ctx.parents
    grad_a = grad_out @ transpose(b._data)
    grad_b = transpose(a._data) @ grad_out
    return grad_a, grad_b


@BackwardRegistry.register(OpKind.RELU)
def _relu_backward(ctx: Context, grad_out: np.ndarray):
    (a,) = ctx.parents
    return ((a._data > 0.0).astype(np.float64) * grad_out,)


@BackwardRegistry.register(OpKind.BROADCAST_ROWS)
def _broadcast_rows_backward(ctx: Context, grad_out: np.ndarray):
    return (grad_out.sum(axis=0, keepdims=True),)


@BackwardRegistry.register(OpKind.MSE_LOSS)
def _mse_backward(ctx: Context, grad_out: np.ndarray):
    """
    dMSE/dpred = (2/n) * (pred - target), scaled by the upstream scalar.

    The target is a constant saved at forward time and receives no gradient.
    """
    (pred,) = ctx.parents
    (target,) = ctx.saved_arrays
    n = int(ctx.saved_meta["n"])
    g = float(np.asarray(grad_out).reshape(-1)[0])
    diff = pred._data.reshape(-1) - target.reshape(-1)
    return ((2.0 / n) * g * diff.reshape(pred.shape),)


def topological_order(root: Tensor) -> list[Tensor]:
    """
    Return the tensors reachable from `root`, each after all of its parents.

    The traversal is a depth-first post-order over parent links, implemented
    with an explicit stack so deep graphs do not hit the recursion limit.
    The root is always the last element.

    Parameters
    ----------
    root : Tensor
        Tensor to start from.

    Returns
    -------
    list[Tensor]
        Linearised graph, leaves first.
    """
    order: list[Tensor] = []
    visited: set[int] = set()
    stack: list[tuple[Tensor, bool]] = [(root, False)]

    while stack:
        node, expanded = stack.pop()
        if expanded:
            order.append(node)
            continue
        if id(node) in visited:
            continue
        visited.add(id(node))
        stack.append((node, True))
        for parent in reversed(node.parents):
            if id(parent) not in visited:
                stack.append((parent, False))

    return order


def _seed_gradient(root: Tensor, gradient: Optional[Any]) -> np.ndarray:
    if gradient is None:
        if root.numel() != 1:
            raise NonScalarBackwardError(root.shape)
        return np.ones(root.shape, dtype=np.float64)

    if isinstance(gradient, Tensor):
        gradient = gradient._data
    seed = np.array(gradient, dtype=np.float64)
    if seed.shape != root.shape:
        raise ShapeMismatchError("backward", root.shape, seed.shape)
    return seed


def backward(root: Tensor, gradient: Optional[Any] = None) -> None:
    """
    Backpropagate from `root` through the computational graph.

    Parameters
    ----------
    root : Tensor
        Output tensor, typically a scalar loss.
    gradient : optional
        Seed gradient shaped like `root`. Must be provided unless `root`
        holds exactly one element, in which case the seed is 1.

    Raises
    ------
    NonScalarBackwardError
        If `gradient` is None and `root` has more than one element.
    ShapeMismatchError
        If `gradient` does not match the shape of `root`.
    InvalidNumericError
        If anomaly detection is enabled and a rule produces NaN/inf.
    RuntimeError
        If a backward rule returns the wrong number of gradients.
    """
    seed = _seed_gradient(root, gradient)
    order = topological_order(root)
    logger.debug("backward: %d nodes reachable from %r", len(order), root.shape)

    for node in order:
        if not node.is_leaf:
            node.zero_grad()
    root._grad[...] = seed

    detect = get_config().detect_anomaly

    for node in reversed(order):
        ctx = node._get_ctx()
        if ctx is None or not node.requires_grad:
            continue

        rule = BackwardRegistry.get(ctx.op)
        deltas = rule(ctx, node._grad)
        if len(deltas) != len(ctx.parents):
            raise RuntimeError(
                "backward rule must return one gradient per parent. "
                f"Got {len(deltas)} for {len(ctx.parents)} parents of {ctx.op.value!r}."
            )

        for parent, delta in zip(ctx.parents, deltas):
            if delta is None or not parent.requires_grad:
                continue
            if detect and not np.all(np.isfinite(delta)):
                raise InvalidNumericError(ctx.op.value, "backward")
            parent._accumulate_grad_(delta)
