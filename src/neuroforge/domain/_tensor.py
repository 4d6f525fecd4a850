"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. The interface captures the minimal properties required
for tensors to participate in computation graphs, modules, and optimization
workflows, independent of the NumPy-backed implementation.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` represents a scalar, vector or matrix that participates in
    numerical computation and, optionally, automatic differentiation.

    Notes
    -----
    - `value` and `gradient` are read-only views from the caller's
      perspective; only documented operations mutate them.
    - `gradient` always has the same shape as `value`.
    """

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the tensor.

        Returns
        -------
        tuple[int, ...]
            The tensor's shape.
        """
        ...

    @property
    def value(self) -> np.ndarray:
        """
        Return the tensor's numeric value.

        Returns
        -------
        np.ndarray
            Read-only float64 array.
        """
        ...

    @property
    def gradient(self) -> np.ndarray:
        """
        Return the accumulated gradient of the tensor.

        Returns
        -------
        np.ndarray
            Read-only float64 array shaped like `value`.
        """
        ...

    @property
    def requires_grad(self) -> bool:
        """
        Indicate whether this tensor accumulates gradients.

        Returns
        -------
        bool
            True if gradients are accumulated into this tensor.
        """
        ...

    @property
    def parents(self) -> Sequence["ITensor"]:
        """
        Return the tensors this tensor was computed from.

        Returns
        -------
        Sequence[ITensor]
            Empty for leaf tensors.
        """
        ...

    def backward(self, gradient: Optional[np.ndarray] = None) -> None:
        """
        Backpropagate gradients from this tensor through the graph.

        Parameters
        ----------
        gradient : Optional[np.ndarray], optional
            Seed gradient. Required unless this tensor holds a single element.
        """
        ...

    def zero_grad(self) -> None:
        """
        Reset the gradient to zeros.
        """
        ...
