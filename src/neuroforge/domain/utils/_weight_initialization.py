"""
Weight initialization contract.

An initializer is a sampling strategy: given a parameter shape it produces a
fresh array of values. Writing those values into a tensor is shared by every
strategy and implemented once here, through the tensor's documented
`copy_from_numpy` mutator, so a strategy never touches tensor internals.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

import numpy as np


class _Initializable(Protocol):
    shape: tuple[int, ...]

    def copy_from_numpy(self, arr: np.ndarray) -> None: ...


class IWeightInitializer(ABC):
    """
    Abstract weight initialization strategy.

    Subclasses implement `sample`. Calling an initializer on a tensor fills
    the tensor in place and returns it.
    """

    @abstractmethod
    def sample(self, shape: tuple[int, ...]) -> np.ndarray:
        """
        Draw initial values for a parameter of the given shape.

        Parameters
        ----------
        shape : tuple[int, ...]
            Parameter shape, `(in_size, out_size)` for dense weights.

        Returns
        -------
        np.ndarray
            Array of exactly `shape`.
        """

    def __call__(self, tensor: _Initializable) -> _Initializable:
        tensor.copy_from_numpy(self.sample(tuple(tensor.shape)))
        return tensor


def fan_in_and_fan_out(shape: tuple[int, ...]) -> tuple[int, int]:
    """
    Return `(fan_in, fan_out)` for a parameter shape.

    Dense weights are stored as `(in_size, out_size)` because the forward
    pass is `x @ W`, so the first axis is the fan-in. Scalars count as one
    unit on each side and vectors as `n` on each side. Both values are at
    least 1.
    """
    if len(shape) == 0:
        return 1, 1
    if len(shape) == 1:
        n = max(1, int(shape[0]))
        return n, n
    return max(1, int(shape[0])), max(1, int(shape[1]))
