"""
Weight initialization strategies.

Importing this package registers the built-in strategies (the Xavier
variants, ``zeros`` and ``ones``) with `WeightInitializer`.
"""

from ._base import WeightInitializer
from ._constants import Constant, Zeros, Ones
from ._xavier import XavierScaledUniform, XavierUniform, XavierNormal

__all__ = [
    WeightInitializer.__name__,
    Constant.__name__,
    Zeros.__name__,
    Ones.__name__,
    XavierScaledUniform.__name__,
    XavierUniform.__name__,
    XavierNormal.__name__,
]
