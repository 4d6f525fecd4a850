from enum import Enum
from typing import Any, Sequence
from dataclasses import dataclass, field

import numpy as np

from ...domain._tensor import ITensor


class OpKind(str, Enum):
    """
    Tag identifying which differentiable operation produced a tensor.

    The autograd engine dispatches on this tag to the matching backward rule
    (see `_autograd.py`), so a backward step depends only on the tag, the
    parents' values, anything saved in the context, and the output gradient.
    """

    ADD = "add"
    MATMUL = "matmul"
    RELU = "relu"
    BROADCAST_ROWS = "broadcast_rows"
    MSE_LOSS = "mse_loss"


@dataclass
class Context:
    """
    Backward context attached to a Tensor produced by an operation.

    A `Context` records the information required to compute gradients for an
    operation during backpropagation.

    Attributes
    ----------
    op : OpKind
        Tag of the operation that produced the output tensor.
    parents : Sequence[Tensor]
        The input tensors used to compute the output tensor, in operand order.
        Gradients will be produced for these parents during the backward pass.
    saved_arrays : list[np.ndarray]
        Arrays explicitly saved during the forward pass for use in backward
        (e.g., a constant target). They are copies, so later in-place
        parameter updates cannot change what backward sees.
    saved_meta : dict[str, Any]
        Non-array metadata required for backward (e.g., element counts).
    """

    op: OpKind
    parents: Sequence["ITensor"]
    saved_arrays: list[np.ndarray] = field(default_factory=list)
    saved_meta: dict[str, Any] = field(default_factory=dict)

    def save_for_backward(self, *arrays: np.ndarray) -> None:
        """
        Save arrays for use during the backward computation.

        Parameters
        ----------
        *arrays : np.ndarray
            Any number of arrays to be stored in `saved_arrays`.
        """
        self.saved_arrays.extend(np.array(a, dtype=np.float64) for a in arrays)
