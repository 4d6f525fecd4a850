"""
Single-step training primitive.

`train_step` runs one iteration of the training protocol

    zero_gradient -> forward -> loss -> backward -> step

strictly in that order and returns the scalar loss measured before the
update. It has no hidden state: the caller owns the model, the optimizer and
the batch, and drives the loop (a UI animation frame, a script, `Model.fit`).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Tuple

from ...domain._module import IModule
from ...domain._optimizers import IOptimizer
from .._losses import mse
from ..tensor._tensor import Tensor

logger = logging.getLogger(__name__)

LossFn = Callable[[Tensor, Any], Tensor]


def _as_constant(x: Any) -> Tensor:
    if isinstance(x, Tensor):
        return x
    return Tensor(x, requires_grad=False)


def train_step(
    model: IModule,
    optimizer: IOptimizer,
    batch: Tuple[Any, Any],
    *,
    loss: LossFn = mse,
) -> float:
    """
    Run one training iteration on a single batch.

    Parameters
    ----------
    model : IModule
        Model exposing `forward`, `parameters` and `zero_gradient`.
    optimizer : IOptimizer
        Optimizer exposing `step()`.
    batch : tuple
        `(inputs, targets)`; raw arrays are wrapped as constant tensors.
    loss : Callable, optional
        `loss(prediction, target) -> scalar Tensor`. Defaults to `mse`.

    Returns
    -------
    float
        Loss value computed by the forward pass of this step.

    Raises
    ------
    ValueError
        If `batch` is not an `(inputs, targets)` pair.
    """
    try:
        x, y = batch
    except (TypeError, ValueError) as e:
        raise ValueError("batch must be an (inputs, targets) pair") from e

    x = _as_constant(x)
    y = _as_constant(y)

    model.zero_gradient()
    prediction = model.forward(x)
    loss_tensor = loss(prediction, y)
    loss_tensor.backward()
    optimizer.step()

    value = loss_tensor.item()
    logger.debug("train_step: loss=%.6f", value)
    return value
