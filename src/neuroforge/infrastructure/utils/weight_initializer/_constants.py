"""
Constant-fill initializers (``zeros``, ``ones``).

`Dense` uses ``zeros`` for its bias.
"""

import numpy as np

from ....domain.utils._weight_initialization import IWeightInitializer
from ._base import WeightInitializer


class Constant(IWeightInitializer):
    """Fill every element with `fill_value`."""

    fill_value: float = 0.0

    def sample(self, shape: tuple[int, ...]) -> np.ndarray:
        return np.full(shape, self.fill_value, dtype=np.float64)


@WeightInitializer.register("zeros")
class Zeros(Constant):
    fill_value = 0.0


@WeightInitializer.register("ones")
class Ones(Constant):
    fill_value = 1.0
