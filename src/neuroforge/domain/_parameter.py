"""
Trainable parameter interface definitions.

This module defines the domain-level interface for trainable parameters used
by optimization algorithms. The interface abstracts over concrete tensor
implementations, providing a minimal, structural contract for parameter
management during training.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class IParameter(Protocol):
    """
    Domain-level interface for trainable parameters.

    An `IParameter` is a persistent leaf tensor that survives across training
    steps and is mutated in place by an optimizer.

    Notes
    -----
    - Parameters may be frozen or unfrozen via the `requires_grad` flag.
    - Optimizers rely on this interface to read gradients and apply updates.
    """

    @property
    def requires_grad(self) -> bool:
        """
        Indicate whether this parameter should accumulate gradients.
        """
        ...

    @property
    def value(self) -> np.ndarray:
        """
        Return the current parameter value (read-only view).
        """
        ...

    @property
    def gradient(self) -> np.ndarray:
        """
        Return the accumulated gradient (read-only view).
        """
        ...

    def zero_grad(self) -> None:
        """
        Reset the accumulated gradient to zeros.

        Training loops call this before the next forward pass so gradients do
        not accumulate across iterations.
        """
        ...

    def apply_update_(self, delta: np.ndarray) -> None:
        """
        Add `delta` to the parameter value in place.

        Parameters
        ----------
        delta : np.ndarray
            Update with the same shape as `value`.
        """
        ...
