"""
Domain layer: abstract contracts and the error taxonomy.

Nothing in this package depends on NumPy or on concrete implementations.
"""

from ._errors import (
    ShapeMismatchError,
    DimensionMismatchError,
    UnsupportedRankError,
    NonScalarBackwardError,
    InvalidNumericError,
    BackwardRuleNotFoundError,
)
from ._tensor import ITensor
from ._parameter import IParameter
from ._module import IModule
from ._optimizers import IOptimizer
from .utils._weight_initialization import IWeightInitializer

__all__ = [
    ShapeMismatchError.__name__,
    DimensionMismatchError.__name__,
    UnsupportedRankError.__name__,
    NonScalarBackwardError.__name__,
    InvalidNumericError.__name__,
    BackwardRuleNotFoundError.__name__,
    ITensor.__name__,
    IParameter.__name__,
    IModule.__name__,
    IOptimizer.__name__,
    IWeightInitializer.__name__,
]
