"""
Module (layer) interface definitions.

This module defines the domain-level interface for neural network modules
(layers) using structural subtyping via `typing.Protocol`.

Any object that implements the required methods is considered a valid module,
independent of inheritance, so `Sequential` can compose user-defined layers
as long as they honour this contract.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from ._tensor import ITensor
from ._parameter import IParameter


@runtime_checkable
class IModule(Protocol):
    """
    Domain-level module (layer) interface.

    Notes
    -----
    - `parameters()` must return parameters in a stable order; optimizers
      iterate over them in that order.
    - This interface is safe to use with `isinstance` checks due to the
      `@runtime_checkable` decorator.
    """

    def forward(self, x: ITensor) -> ITensor:
        """
        Execute the forward computation of the module.

        Parameters
        ----------
        x : ITensor
            Input tensor to the module.

        Returns
        -------
        ITensor
            Output tensor produced by the module.
        """
        ...

    def parameters(self) -> List[IParameter]:
        """
        Return the trainable parameters of the module.

        Returns
        -------
        List[IParameter]
            Parameters in deterministic registration order.
        """
        ...

    def zero_gradient(self) -> None:
        """
        Reset the gradients of every parameter owned by the module.
        """
        ...
