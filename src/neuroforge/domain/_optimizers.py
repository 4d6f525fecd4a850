"""
Optimizer interface definitions.

Optimizers are duck-typed: the training utilities only require `step()` and
`zero_grad()`. This protocol documents that contract for type checking.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IOptimizer(Protocol):
    """
    Domain-level optimizer interface.

    Notes
    -----
    - `step()` updates parameter values in place from their gradients and
      must not modify the gradients themselves.
    - `zero_grad()` clears the gradients of every managed parameter.
    """

    def step(self) -> None:
        """Apply one update to all managed parameters."""
        ...

    def zero_grad(self) -> None:
        """Reset the gradients of all managed parameters."""
        ...
