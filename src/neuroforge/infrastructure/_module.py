"""
Layer base class.

`Module` is the concrete base for every NeuroForge layer (`Dense`, `ReLU`)
and model (`Sequential`). It satisfies the `IModule` protocol and takes care
of the bookkeeping layers share:

- assigning a `Parameter` or a child `Module` to an attribute records it,
- `parameters()` returns own parameters first, then each child's, in
  assignment order, so optimizers see a stable ordering,
- `zero_gradient()` clears every recorded parameter,
- calling the module runs `forward`.
"""

from __future__ import annotations

from typing import List

from ..domain._module import IModule
from ..domain._parameter import IParameter


class Module(IModule):
    """
    Base class for layers and models.

    Attributes
    ----------
    _parameters : Dict[str, IParameter]
        Parameters assigned directly on this module, keyed by attribute name.
    _modules : Dict[str, Module]
        Child modules, keyed by attribute name (or position for `Sequential`).

    Notes
    -----
    Re-assigning an attribute replaces the recorded entry in place, and
    assigning None removes it.
    """

    def __init__(self) -> None:
        # Bypass __setattr__ so the registries exist before any assignment.
        object.__setattr__(self, "_parameters", {})
        object.__setattr__(self, "_modules", {})

    def __setattr__(self, name: str, value) -> None:
        if name in {"_parameters", "_modules"}:
            object.__setattr__(self, name, value)
            return

        # Parameter imports Tensor, which must not import this module.
        from ._parameter import Parameter

        if isinstance(value, Parameter):
            self._modules.pop(name, None)
            self._parameters[name] = value
        elif isinstance(value, Module):
            self._parameters.pop(name, None)
            self._modules[name] = value
        else:
            self._parameters.pop(name, None)
            self._modules.pop(name, None)

        object.__setattr__(self, name, value)

    def parameters(self) -> List[IParameter]:
        """
        Return this module's parameters followed by those of its children.

        Returns
        -------
        List[IParameter]
            References to the live parameters; each appears once.
        """
        params: List[IParameter] = []
        seen: set[int] = set()
        for p in self._parameters.values():
            if id(p) not in seen:
                seen.add(id(p))
                params.append(p)
        for child in self._modules.values():
            for p in child.parameters():
                if id(p) not in seen:
                    seen.add(id(p))
                    params.append(p)
        return params

    def zero_gradient(self) -> None:
        """Reset the gradient of every parameter to zeros."""
        for p in self.parameters():
            p.zero_grad()

    def zero_grad(self) -> None:
        """Alias of `zero_gradient`."""
        self.zero_gradient()

    def forward(self, x):
        """
        Compute the module output. Subclasses must override this.
        """
        raise NotImplementedError(f"{type(self).__name__} does not implement forward")

    def __call__(self, x):
        return self.forward(x)
