"""
Concrete trainable parameter implementation.

This module defines `Parameter`, an infrastructure-level implementation of the
domain contract `IParameter`. A `Parameter` is a leaf `Tensor` intended to be
optimized by training algorithms (e.g., SGD). It survives across training
steps and is mutated in place by the optimizer.

Design notes
------------
- `Parameter` subclasses `Tensor` to reuse storage, gradient buffers and all
  differentiable operations.
- Assigning a `Parameter` as an attribute of a `Module` registers it
  automatically, which is how `Module.parameters()` discovers it.
- The `requires_grad` flag enables freezing/unfreezing parameters without
  changing module structure.
"""

from __future__ import annotations

from typing import Any

from ..domain._parameter import IParameter
from .tensor._tensor import Tensor


class Parameter(Tensor, IParameter):
    """
    Trainable leaf tensor.

    Parameters
    ----------
    value : Number | Sequence | np.ndarray
        Initial value (copied).
    requires_grad : bool, optional
        Whether this parameter should accumulate gradients. Defaults to True.
    """

    def __init__(self, value: Any, *, requires_grad: bool = True) -> None:
        super().__init__(value, requires_grad=requires_grad, ctx=None)

    def __repr__(self) -> str:
        return (
            f"Parameter(shape={self.shape}, requires_grad={self.requires_grad})"
        )
