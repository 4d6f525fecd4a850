"""
Stochastic Gradient Descent (SGD) optimizer implementation.

This module provides a minimal SGD optimizer. The optimizer updates tensors
in place using their accumulated gradients and a fixed learning rate.

Design notes
------------
- Optimizers read gradients from `p.gradient` and never modify them; clearing
  gradients before the next forward pass is the caller's responsibility
  (`Sequential.zero_gradient()` or `SGD.zero_gradient()`).
- Updates are applied in place through `apply_update_`, so layers keep
  referring to the same parameter objects across steps.
- Momentum, weight decay and per-parameter learning rates are intentionally
  omitted.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Iterable, List

from ...domain._parameter import IParameter

logger = logging.getLogger(__name__)


@dataclass
class SGD:
    """
    Stochastic Gradient Descent (SGD) optimizer.

    Update rule
    -----------
    For each parameter ``p`` with gradient ``g``:

        ``p <- p - learning_rate * g``

    Parameters
    ----------
    parameters : Iterable[IParameter]
        Tensors to be optimized, typically `model.parameters()`. The iterable
        is consumed and stored in order.
    learning_rate : float, optional
        Step size. Must be positive. Defaults to 0.01.
    """

    parameters: List[IParameter]
    learning_rate: float = 0.01

    def __init__(
        self,
        parameters: Iterable[IParameter],
        learning_rate: float = 0.01,
    ) -> None:
        """
        Construct an SGD optimizer.

        Raises
        ------
        ValueError
            If ``learning_rate <= 0``.
        """
        self.parameters = list(parameters)
        self.learning_rate = float(learning_rate)

        if not self.learning_rate > 0.0:
            raise ValueError(f"learning_rate must be > 0, got {self.learning_rate}")
        if not self.parameters:
            warnings.warn(
                "SGD was constructed with an empty parameter list; step() will do nothing.",
                stacklevel=2,
            )

    def zero_gradient(self) -> None:
        """
        Reset the gradients of all managed parameters to zeros.
        """
        for p in self.parameters:
            p.zero_grad()

    def zero_grad(self) -> None:
        """Alias of `zero_gradient`."""
        self.zero_gradient()

    def step(self) -> None:
        """
        Apply one SGD update step to all managed parameters.

        Notes
        -----
        The gradient is read but not modified.
        """
        for p in self.parameters:
            p.apply_update_(-self.learning_rate * p.gradient)
        logger.debug(
            "SGD step: %d parameters, learning_rate=%g",
            len(self.parameters),
            self.learning_rate,
        )
