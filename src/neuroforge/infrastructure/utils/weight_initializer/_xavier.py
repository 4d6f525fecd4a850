"""
Xavier/Glorot initializers.

All three variants derive their spread from ``fan_in + fan_out`` and draw
from NumPy's global random state (seed with ``np.random.seed`` for
reproducible runs).

- ``xavier_scaled_uniform``: ``U(-s, s)`` with ``s = sqrt(2 / (fan_in + fan_out))``.
  This is the `Dense` weight default.
- ``xavier_uniform``: ``U(-b, b)`` with ``b = sqrt(6 / (fan_in + fan_out))``.
- ``xavier``: ``N(0, std^2)`` with ``std = sqrt(2 / (fan_in + fan_out))``.
"""

import math

import numpy as np

from ....domain.utils._weight_initialization import (
    IWeightInitializer,
    fan_in_and_fan_out,
)
from ._base import WeightInitializer


class _UniformByFans(IWeightInitializer):
    """Uniform on ``[-limit, limit]`` with ``limit = sqrt(gain / (fan_in + fan_out))``."""

    gain: float = 2.0

    def limit(self, shape: tuple[int, ...]) -> float:
        fan_in, fan_out = fan_in_and_fan_out(shape)
        return math.sqrt(self.gain / float(fan_in + fan_out))

    def sample(self, shape: tuple[int, ...]) -> np.ndarray:
        bound = self.limit(shape)
        return np.random.uniform(-bound, bound, size=shape)


@WeightInitializer.register("xavier_scaled_uniform")
class XavierScaledUniform(_UniformByFans):
    gain = 2.0


@WeightInitializer.register("xavier_uniform")
class XavierUniform(_UniformByFans):
    gain = 6.0


@WeightInitializer.register("xavier")
class XavierNormal(IWeightInitializer):
    def sample(self, shape: tuple[int, ...]) -> np.ndarray:
        fan_in, fan_out = fan_in_and_fan_out(shape)
        std = math.sqrt(2.0 / float(fan_in + fan_out))
        return np.random.normal(0.0, std, size=shape)
