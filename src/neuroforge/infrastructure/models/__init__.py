from ._history import History
from ._training import train_step
from ._models import Model
from ._sequential import Sequential

__all__ = [
    History.__name__,
    train_step.__name__,
    Model.__name__,
    Sequential.__name__,
]
