"""
NeuroForge: a miniature reverse-mode automatic differentiation engine.

Tensors of rank 0 to 2 record the operations that produce them; calling
`backward()` on a scalar result accumulates gradients into every tensor that
contributed to it. On top of the engine sit a `Dense` layer, a `ReLU`
activation, a `Sequential` container, the `mse` loss and an `SGD` optimizer.

Example
-------
    import numpy as np
    from neuroforge import Dense, ReLU, Sequential, SGD, train_step

    model = Sequential(Dense(2, 6), ReLU(), Dense(6, 1))
    optimizer = SGD(model.parameters(), learning_rate=0.05)
    loss = train_step(model, optimizer, (np.random.randn(8, 2), np.ones((8, 1))))
"""

from .domain import (
    ShapeMismatchError,
    DimensionMismatchError,
    UnsupportedRankError,
    NonScalarBackwardError,
    InvalidNumericError,
    BackwardRuleNotFoundError,
)
from .infrastructure import (
    EngineConfig,
    get_config,
    set_detect_anomaly,
    detect_anomaly,
    Tensor,
    BackwardRegistry,
    add,
    matmul,
    relu,
    broadcast_rows,
    Parameter,
    Module,
    ReLU,
    mse,
    WeightInitializer,
    Dense,
    SGD,
    History,
    Model,
    Sequential,
    train_step,
)

__version__ = "0.1.0"

__all__ = [
    ShapeMismatchError.__name__,
    DimensionMismatchError.__name__,
    UnsupportedRankError.__name__,
    NonScalarBackwardError.__name__,
    InvalidNumericError.__name__,
    BackwardRuleNotFoundError.__name__,
    EngineConfig.__name__,
    get_config.__name__,
    set_detect_anomaly.__name__,
    detect_anomaly.__name__,
    Tensor.__name__,
    BackwardRegistry.__name__,
    add.__name__,
    matmul.__name__,
    relu.__name__,
    broadcast_rows.__name__,
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
