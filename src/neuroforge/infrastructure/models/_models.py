"""
Model base class and lightweight training loop.

`Model` is a `Module` that represents a complete network rather than an
individual layer. On top of the `Module` behaviour it provides:

- `predict` for inference-style forward passes
- `train_on_batch` for one optimisation step on one batch
- `fit` for a multi-epoch mini-batch loop that records a `History`

The training APIs are optimizer-agnostic: an optimizer only needs `step()`.
Gradients are cleared through the model itself before every forward pass.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

import numpy as np

from .._losses import mse
from .._module import Module
from ..tensor._tensor import Tensor
from ._history import History
from ._training import train_step

logger = logging.getLogger(__name__)


def _as_rows(x: Any, name: str) -> np.ndarray:
    """
    Convert a dataset operand to a 2D float64 array of rows.

    Raises
    ------
    ValueError
        If the operand is not 2D after conversion.
    """
    arr = x.to_numpy() if isinstance(x, Tensor) else np.asarray(x, dtype=np.float64)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be 2D (samples, features), got shape {arr.shape}")
    return arr


def _iter_minibatches_xy(
    x: np.ndarray,
    y: np.ndarray,
    *,
    batch_size: int,
    shuffle: bool = False,
) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
    """
    Yield row mini-batches from `(x, y)` arrays.

    Parameters
    ----------
    x : np.ndarray
        Inputs of shape `(N, in_features)`.
    y : np.ndarray
        Targets of shape `(N, out_features)`.
    batch_size : int
        Desired mini-batch size. The last batch may be smaller.
    shuffle : bool, optional
        If True, visit rows in a random order drawn from `np.random`.

    Raises
    ------
    ValueError
        If `x` and `y` have a different number of rows.
    """
    n = x.shape[0]
    if y.shape[0] != n:
        raise ValueError(
            f"x and y must have same length, got len(x)={n}, len(y)={y.shape[0]}"
        )

    idxs = np.random.permutation(n) if shuffle else np.arange(n)
    for start in range(0, n, batch_size):
        batch_ids = idxs[start : start + batch_size]
        yield x[batch_ids], y[batch_ids]


class Model(Module):
    """
    Base class for top-level neural network models.

    Subclasses implement `forward()`. `Sequential` is the ready-made
    feedforward container.
    """

    def predict(self, x: Any) -> Tensor:
        """
        Perform an inference-style forward pass.

        Parameters
        ----------
        x : Tensor | array-like
            Input batch. Raw arrays are wrapped as constant tensors.

        Returns
        -------
        Tensor
            Output produced by the model's forward computation.
        """
        if not isinstance(x, Tensor):
            x = Tensor(x, requires_grad=False)
        return self.forward(x)

    def train_on_batch(
        self,
        x: Any,
        y: Any,
        *,
        optimizer: Any,
        loss: Callable[[Tensor, Any], Tensor] = mse,
    ) -> Dict[str, float]:
        """
        Run a single optimisation step on one batch.

        Parameters
        ----------
        x : Tensor | array-like
            Batch inputs.
        y : Tensor | array-like
            Batch targets.
        optimizer : Any
            Optimizer exposing `step()`.
        loss : Callable, optional
            Scalar loss `loss(prediction, target)`. Defaults to `mse`.

        Returns
        -------
        Dict[str, float]
            Batch logs, currently ``{"loss": value}``.
        """
        value = train_step(self, optimizer, (x, y), loss=loss)
        return {"loss": value}

    def fit(
        self,
        x: Any,
        y: Any,
        *,
        optimizer: Any,
        loss: Callable[[Tensor, Any], Tensor] = mse,
        epochs: int = 1,
        batch_size: Optional[int] = None,
        shuffle: bool = False,
        verbose: int = 0,
    ) -> History:
        """
        Train the model for a fixed number of epochs.

        Parameters
        ----------
        x : Tensor | array-like
            Inputs of shape `(N, in_features)`.
        y : Tensor | array-like
            Targets of shape `(N, out_features)`.
        optimizer : Any
            Optimizer exposing `step()`.
        loss : Callable, optional
            Scalar loss. Defaults to `mse`.
        epochs : int, optional
            Number of passes over the data. Default is 1.
        batch_size : Optional[int], optional
            Rows per mini-batch. ``None`` trains on the whole dataset at once.
        shuffle : bool, optional
            Whether to shuffle rows each epoch. Default is False.
        verbose : int, optional
            If non-zero, log an INFO summary after each epoch.

        Returns
        -------
        History
            Per-epoch ``loss`` values, each the batch-size weighted mean of
            the batch losses of that epoch.

        Raises
        ------
        ValueError
            If `epochs < 1`, `batch_size < 1`, or the datasets disagree.
        """
        if epochs < 1:
            raise ValueError("epochs must be >= 1")
        if batch_size is not None and batch_size < 1:
            raise ValueError("batch_size must be >= 1")

        x_arr = _as_rows(x, "x")
        y_arr = _as_rows(y, "y")
        if x_arr.shape[0] == 0:
            raise ValueError("fit requires at least one sample")
        bs = x_arr.shape[0] if batch_size is None else int(batch_size)

        hist = History()
        for epoch_idx in range(epochs):
            total = 0.0
            seen = 0
            for xb, yb in _iter_minibatches_xy(
                x_arr, y_arr, batch_size=bs, shuffle=shuffle
            ):
                logs = self.train_on_batch(xb, yb, optimizer=optimizer, loss=loss)
                n = xb.shape[0]
                total += logs["loss"] * n
                seen += n

            epoch_logs = {"loss": total / seen}
            hist.append_epoch(epoch_idx, epoch_logs)

            if verbose:
                logger.info(
                    "Epoch %d/%d - loss: %.6f - seen: %d",
                    epoch_idx + 1,
                    epochs,
                    epoch_logs["loss"],
                    seen,
                )

        return hist
