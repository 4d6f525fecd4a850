"""
Loss functions for NeuroForge.

Currently implemented losses:
- mse : Mean Squared Error

Design notes
------------
- Losses are terminal nodes in the computation graph: they return a rank-0
  tensor intended to be the root of `backward()`.
- The target is treated as a constant. It is copied into the context at
  forward time and never becomes a parent, so it never receives a gradient.
- Operands are flattened before comparison: only the element counts must
  agree, not the shapes.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from ..domain._errors import ShapeMismatchError
from .tensor._tensor import Tensor
from .tensor._tensor_context import Context, OpKind
from .tensor._ops import make_result


def mse(prediction: Tensor, target: Any) -> Tensor:
    """
    Mean Squared Error.

    Computes the scalar loss:

        MSE(pred, target) = mean((pred_i - target_i)^2)

    over all elements of both operands.

    Parameters
    ----------
    prediction : Tensor
        Predicted values.
    target : Tensor | array-like
        Ground-truth values with the same number of elements.

    Returns
    -------
    Tensor
        A rank-0 tensor whose only parent is `prediction`.

    Raises
    ------
    ShapeMismatchError
        If the element counts differ.
    ValueError
        If the operands are empty.

    Notes
    -----
    Backward rule (see `_autograd.py`):

        dMSE/dpred = (2/n) * (pred - target)
    """
    if not isinstance(prediction, Tensor):
        raise TypeError(f"mse expects a Tensor prediction, got {type(prediction)!r}")
    if not isinstance(target, Tensor):
        target = Tensor(target, requires_grad=False)

    pred_flat = prediction._data.reshape(-1)
    target_flat = target._data.reshape(-1)
    if pred_flat.size != target_flat.size:
        raise ShapeMismatchError("mse", prediction.shape, target.shape)
    n = int(pred_flat.size)
    if n == 0:
        raise ValueError("mse requires at least one element")

    diff = pred_flat - target_flat
    loss = np.array(np.mean(diff * diff), dtype=np.float64)

    ctx = Context(op=OpKind.MSE_LOSS, parents=(prediction,))
    ctx.save_for_backward(target._data)
    ctx.saved_meta["n"] = n
    return make_result(loss, ctx, prediction)

