"""
Name-based lookup for weight initialization strategies.

Layers refer to initializers by name (`Dense(..., weight_init="xavier")`).
`WeightInitializer` resolves the name to a registered `IWeightInitializer`
subclass, instantiates it, and applies it:

    WeightInitializer("xavier_scaled_uniform")(dense.weights)

Strategies register themselves with the class decorator

    @WeightInitializer.register("zeros")
    class Zeros(Constant): ...
"""

from __future__ import annotations

from typing import Callable, ClassVar, Dict, Type, TypeVar

import numpy as np

from ....domain.utils._weight_initialization import IWeightInitializer
from ...tensor._tensor import Tensor

S = TypeVar("S", bound=Type[IWeightInitializer])


class WeightInitializer:
    """
    Apply the initialization strategy registered under `name`.

    Parameters
    ----------
    name : str
        Registered strategy name (see `available()`).

    Raises
    ------
    ValueError
        If no strategy is registered under `name`.
    """

    STRATEGIES: ClassVar[Dict[str, Type[IWeightInitializer]]] = {}

    def __init__(self, name: str) -> None:
        strategy_cls = self.STRATEGIES.get(name)
        if strategy_cls is None:
            known = ", ".join(self.available()) or "<none>"
            raise ValueError(f"Unknown initializer {name!r}. Available: {known}")
        self.name = name
        self.strategy: IWeightInitializer = strategy_cls()

    @classmethod
    def register(cls, name: str, *, overwrite: bool = False) -> Callable[[S], S]:
        """
        Class decorator registering an `IWeightInitializer` subclass.

        Raises
        ------
        ValueError
            If `name` is empty, or already taken and `overwrite` is False.
        TypeError
            If the decorated class is not an `IWeightInitializer`.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Initializer name must be a non-empty string")

        def decorator(strategy_cls: S) -> S:
            if not (
                isinstance(strategy_cls, type)
                and issubclass(strategy_cls, IWeightInitializer)
            ):
                raise TypeError(
                    f"{strategy_cls!r} is not an IWeightInitializer subclass"
                )
            if not overwrite and name in cls.STRATEGIES:
                raise ValueError(f"Initializer already registered: {name!r}")
            cls.STRATEGIES[name] = strategy_cls
            return strategy_cls

        return decorator

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return registered names, sorted."""
        return tuple(sorted(cls.STRATEGIES))

    def sample(self, shape: tuple[int, ...]) -> np.ndarray:
        return self.strategy.sample(shape)

    def __call__(self, tensor: Tensor) -> Tensor:
        return self.strategy(tensor)

    def __repr__(self) -> str:
        return f"WeightInitializer({self.name!r})"
