"""
Infrastructure layer: NumPy-backed implementations of the domain contracts.
"""

from ._config import EngineConfig, get_config, set_detect_anomaly, detect_anomaly
from .tensor import (
    Tensor,
    Context,
    OpKind,
    BackwardRegistry,
    add,
    matmul,
    relu,
    broadcast_rows,
    transpose,
    backward,
    topological_order,
)
from ._parameter import Parameter
from ._module import Module
from ._activations import ReLU
from ._losses import mse
from .utils.weight_initializer import WeightInitializer
from .fully_connected import Dense
from .optimizers import SGD
from .models import History, Model, Sequential, train_step

__all__ = [
    EngineConfig.__name__,
    get_config.__name__,
    set_detect_anomaly.__name__,
    detect_anomaly.__name__,
    Tensor.__name__,
    Context.__name__,
    OpKind.__name__,
    BackwardRegistry.__name__,
    add.__name__,
    matmul.__name__,
    relu.__name__,
    broadcast_rows.__name__,
    transpose.__name__,
    backward.__name__,
    topological_order.__name__,
    Parameter.__name__,
    Module.__name__,
    ReLU.__name__,
    mse.__name__,
    WeightInitializer.__name__,
    Dense.__name__,
    SGD.__name__,
    History.__name__,
    Model.__name__,
    Sequential.__name__,
    train_step.__name__,
]
