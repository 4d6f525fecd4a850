"""
Sequential container model.

`Sequential` composes an ordered list of layers into a single `Model` by
applying them in order:

    y = L_n(...L_2(L_1(x)))

Layers are duck-typed: anything exposing `forward`, `parameters` and
`zero_gradient` can be appended. `Module` instances are also recorded as
child modules under their position ("0", "1", ...).

Notes
-----
- The `_layers` list is the authoritative ordered view used by `forward()`,
  `parameters()` and `zero_gradient()`.
- Training utilities live on `Model` (`fit`, `train_on_batch`, `predict`).
"""

from typing import Any, Iterator, List, Tuple

from ...domain._parameter import IParameter
from .._module import Module
from ._models import Model

_LAYER_METHODS = ("forward", "parameters", "zero_gradient")


class Sequential(Model):
    """
    Sequential container model.

    Examples
    --------
    >>> model = Sequential(Dense(2, 6), ReLU(), Dense(6, 1))
    >>> model.add(ReLU())
    >>> len(model)
    4
    """

    def __init__(self, *layers: Any) -> None:
        """
        Initialize a `Sequential` container.

        Parameters
        ----------
        *layers : Any
            Zero or more layers appended in order via `add()`.
        """
        super().__init__()
        self._layers: List[Any] = []
        for layer in layers:
            self.add(layer)

    def add(self, layer: Any) -> None:
        """
        Append a layer to the end of the container.

        Parameters
        ----------
        layer : Any
            Layer exposing `forward`, `parameters` and `zero_gradient`.

        Raises
        ------
        TypeError
            If `layer` does not provide the layer methods.
        """
        missing = [m for m in _LAYER_METHODS if not callable(getattr(layer, m, None))]
        if missing:
            raise TypeError(
                f"Sequential.add expects a layer with {', '.join(_LAYER_METHODS)}; "
                f"{type(layer).__name__} is missing {', '.join(missing)}"
            )

        idx = len(self._layers)
        self._layers.append(layer)
        if isinstance(layer, Module):
            self._modules[str(idx)] = layer

    def forward(self, x):
        """
        Apply all layers sequentially.

        Parameters
        ----------
        x : Tensor
            Input tensor to the first layer.

        Returns
        -------
        Tensor
            Output of the final layer, or `x` itself for an empty container.
        """
        out = x
        for layer in self._layers:
            out = layer.forward(out)
        return out

    def parameters(self) -> List[IParameter]:
        """
        Concatenate the parameters of every layer, in layer order.

        A layer added more than once contributes its parameters only at its
        first position, so optimizers update each parameter once per step.

        Returns
        -------
        List[IParameter]
            Parameter references; mutating them mutates the layers.
        """
        params: List[IParameter] = []
        seen: set[int] = set()
        for layer in self._layers:
            for p in layer.parameters():
                if id(p) not in seen:
                    seen.add(id(p))
                    params.append(p)
        return params

    def zero_gradient(self) -> None:
        for layer in self._layers:
            layer.zero_gradient()

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._layers)

    def __getitem__(self, idx: int) -> Any:
        """
        Retrieve a layer by index.

        Raises
        ------
        IndexError
            If `idx` is out of range.
        """
        return self._layers[idx]

    def layers(self) -> Tuple[Any, ...]:
        """
        Return all layers as an immutable tuple in execution order.
        """
        return tuple(self._layers)

    def summary(self) -> str:
        """
        Generate a lightweight textual summary of the container.

        Returns
        -------
        str
            One line per layer with its index, repr and parameter count,
            followed by the total number of trainable scalars.
        """
        lines = [f"{self.__class__.__name__}("]
        for i, layer in enumerate(self._layers):
            count = sum(int(p.value.size) for p in layer.parameters())
            lines.append(f"  ({i}): {layer!r}  params={count}")
        lines.append(")")
        total = sum(int(p.value.size) for p in self.parameters())
        lines.append(f"Total params: {total}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Sequential(layers={len(self._layers)})"
