"""
Activation layers.

Stateless modules wrapping the differentiable elementwise activations so they
can be composed inside `Sequential`.
"""

from __future__ import annotations

from ._module import Module
from .tensor._tensor import Tensor
from .tensor._ops import relu


class ReLU(Module):
    """
    ReLU activation module.

    This layer applies the rectified linear unit elementwise:

        relu(x) = max(0, x)

    Notes
    -----
    The module owns no parameters, so `parameters()` is empty and
    `zero_gradient()` is a no-op.
    """

    def forward(self, x: Tensor) -> Tensor:
        """
        Apply the ReLU activation to the input tensor.

        Parameters
        ----------
        x : Tensor
            Input tensor.

        Returns
        -------
        Tensor
            Output tensor containing relu(x) elementwise.
        """
        return relu(x)

    def __repr__(self) -> str:
        return "ReLU()"
