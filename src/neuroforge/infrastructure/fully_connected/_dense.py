"""
Dense (fully connected) layer.

This module defines `Dense`, a linear layer computing

    Y = X @ W + B

with `W` of shape `(in_size, out_size)` and `B` of shape `(1, out_size)`.

Design Notes
------------
- Inputs must be 2D tensors of shape `(batch, in_size)`.
- Weights are initialised once with a Xavier/Glorot-scaled uniform
  distribution (`scale = sqrt(2 / (in_size + out_size))`); the bias starts at
  zero. Both are mutated in place by the optimizer and never resized.
- `add` never broadcasts. For batches with more than one row the bias is
  expanded explicitly with `broadcast_rows`, whose backward rule sums the
  gradient back into the single bias row.
"""

from __future__ import annotations

from .._module import Module
from .._parameter import Parameter
from ..tensor._tensor import Tensor
from ..utils.weight_initializer import WeightInitializer
from ...domain._errors import DimensionMismatchError


class Dense(Module):
    """
    Fully connected layer `Y = X @ W + B`.

    Parameters
    ----------
    in_size : int
        Number of input features per example.
    out_size : int
        Number of output features per example.
    weight_init : str, optional
        Registered initializer name for the weights.
        Defaults to ``"xavier_scaled_uniform"``.
    bias_init : str, optional
        Registered initializer name for the bias. Defaults to ``"zeros"``.

    Attributes
    ----------
    weights : Parameter
        Shape `(in_size, out_size)`.
    bias : Parameter
        Shape `(1, out_size)`.
    """

    def __init__(
        self,
        in_size: int,
        out_size: int,
        *,
        weight_init: str = "xavier_scaled_uniform",
        bias_init: str = "zeros",
    ) -> None:
        """
        Initialize the layer and allocate its parameters.

        Raises
        ------
        ValueError
            If `in_size` or `out_size` is not a positive integer.
        """
        super().__init__()
        if int(in_size) <= 0 or int(out_size) <= 0:
            raise ValueError(
                f"in_size and out_size must be positive, got {in_size}, {out_size}"
            )

        self.in_size = int(in_size)
        self.out_size = int(out_size)

        self.weights = Parameter(Tensor.zeros((self.in_size, self.out_size)))
        self.bias = Parameter(Tensor.zeros((1, self.out_size)))

        WeightInitializer(weight_init)(self.weights)
        WeightInitializer(bias_init)(self.bias)

    def forward(self, x: Tensor) -> Tensor:
        """
        Apply the affine transformation to a batch.

        Parameters
        ----------
        x : Tensor
            Input tensor of shape `(batch, in_size)`.

        Returns
        -------
        Tensor
            Output tensor of shape `(batch, out_size)`.

        Raises
        ------
        DimensionMismatchError
            If `x` is not 2D or its feature dimension differs from `in_size`.
        ValueError
            If the batch is empty.
        """
        if not isinstance(x, Tensor):
            x = Tensor(x, requires_grad=False)
        if x.ndim != 2 or x.shape[1] != self.in_size:
            raise DimensionMismatchError("Dense.forward", x.shape, self.weights.shape)
        batch = x.shape[0]
        if batch < 1:
            raise ValueError(
                f"Dense.forward requires at least one example, got input shape {x.shape}"
            )

        out = x.matmul(self.weights)
        bias = self.bias if batch == 1 else self.bias.broadcast_rows(batch)
        return out.add(bias)

    def __repr__(self) -> str:
        return f"Dense(in_size={self.in_size}, out_size={self.out_size})"
