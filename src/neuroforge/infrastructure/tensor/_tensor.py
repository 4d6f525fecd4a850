"""
Concrete Tensor implementation (NumPy backend).

This module provides the `Tensor` class: a node in a dynamically-built
computational graph. Each tensor owns

- its value (a float64 NumPy array of rank 0, 1 or 2),
- a gradient buffer of identical shape, initialised to zeros, and
- an optional `Context` recording the operation tag and parent tensors that
  produced it.

Design notes
------------
- The value and gradient buffers are owned exclusively by the tensor. The
  public `value` / `gradient` properties return read-only views; only the
  documented mutators (`copy_from_numpy`, `apply_update_`, `zero_grad`) and
  the autograd engine write to them.
- Differentiable operations live in `_ops.py` and return new tensors with a
  `Context` attached. Backward rules are dispatched by operation tag in
  `_autograd.py`; no closures over live tensors are stored.
- Broadcasting is not implemented by `add`; binary ops require exact shape
  matches. Row broadcasting is available as the explicit `broadcast_rows` op.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np

from ...domain._tensor import ITensor
from ...domain._errors import ShapeMismatchError, UnsupportedRankError
from ._tensor_context import Context

Number = Union[int, float]


def _as_value_array(value: Any) -> np.ndarray:
    """
    Convert raw numeric input into an owned float64 array of rank <= 2.

    Parameters
    ----------
    value : Any
        Python number, (nested) sequence of numbers, NumPy array, or Tensor.

    Returns
    -------
    np.ndarray
        A fresh, writeable float64 array.

    Raises
    ------
    UnsupportedRankError
        If the value has more than two dimensions.
    ValueError
        If the value is ragged or not numeric.
    """
    if isinstance(value, Tensor):
        value = value._data
    if value is None or isinstance(value, (str, bytes)):
        raise ValueError(f"Cannot build a tensor from {type(value)!r}")
    try:
        raw = np.asarray(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Cannot build a tensor from {type(value)!r}: {e}") from e
    # bool, signed/unsigned int, float
    if raw.dtype.kind not in "biuf":
        raise ValueError(
            f"Tensor values must be numeric, got dtype {raw.dtype} from {type(value)!r}"
        )
    arr = np.array(raw, dtype=np.float64)
    if arr.ndim > 2:
        raise UnsupportedRankError(arr.ndim)
    return arr


def _readonly(arr: np.ndarray) -> np.ndarray:
    view = arr.view()
    view.flags.writeable = False
    return view


class Tensor(ITensor):
    """
    Graph node holding a value, its accumulated gradient and its history.

    Parameters
    ----------
    value : Number | Sequence | np.ndarray
        Scalar, vector or matrix. The data is copied.
    requires_grad : bool, optional
        Whether gradients are accumulated into this tensor during backward.
        Defaults to True; constants (e.g., fixed targets or inputs) may opt
        out to skip backward work.
    ctx : Optional[Context], optional
        Backward context. Set internally by differentiable operations.

    Notes
    -----
    - Leaf tensors have no context; their backward rule is a no-op.
    - The rank of a tensor never changes after construction.
    """

    def __init__(
        self,
        value: Any,
        *,
        requires_grad: bool = True,
        ctx: Optional[Context] = None,
    ) -> None:
        self._data: np.ndarray = _as_value_array(value)
        self._grad: np.ndarray = np.zeros_like(self._data)
        self._requires_grad: bool = bool(requires_grad)
        self._ctx: Optional[Context] = ctx

    def __repr__(self) -> str:
        """
        Return a human-readable string representation of the tensor.
        """
        op = f", op={self._ctx.op.value}" if self._ctx is not None else ""
        return (
            f"Tensor(shape={self.shape}, requires_grad={self._requires_grad}{op}, "
            f"value={self._data.tolist()})"
        )

    # ----------------------------
    # Factories
    # ----------------------------
    @staticmethod
    def zeros(shape: tuple[int, ...], *, requires_grad: bool = True) -> "Tensor":
        """
        Create a tensor filled with zeros.

        Parameters
        ----------
        shape : tuple[int, ...]
            Target shape (rank 0, 1 or 2).
        requires_grad : bool, optional
            Whether the new tensor accumulates gradients.

        Returns
        -------
        Tensor
            A new leaf tensor.
        """
        return Tensor(np.zeros(tuple(shape)), requires_grad=requires_grad)

    @staticmethod
    def ones(shape: tuple[int, ...], *, requires_grad: bool = True) -> "Tensor":
        """
        Create a tensor filled with ones.

        Parameters
        ----------
        shape : tuple[int, ...]
            Target shape (rank 0, 1 or 2).
        requires_grad : bool, optional
            Whether the new tensor accumulates gradients.

        Returns
        -------
        Tensor
            A new leaf tensor.
        """
        return Tensor(np.ones(tuple(shape)), requires_grad=requires_grad)

    # ----------------------------
    # Read access
    # ----------------------------
    @property
    def value(self) -> np.ndarray:
        """
        Return the tensor's value as a read-only float64 array.
        """
        return _readonly(self._data)

    @property
    def gradient(self) -> np.ndarray:
        """
        Return the accumulated gradient as a read-only float64 array.

        The gradient always has the same shape as `value`.
        """
        return _readonly(self._grad)

    @property
    def grad(self) -> np.ndarray:
        """Alias of `gradient`."""
        return self.gradient

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the tensor shape.

        Returns
        -------
        tuple[int, ...]
            `()` for scalars, `(n,)` for vectors, `(rows, cols)` for matrices.
        """
        return tuple(self._data.shape)

    @property
    def ndim(self) -> int:
        """Return the rank of the tensor (0, 1 or 2)."""
        return int(self._data.ndim)

    @property
    def requires_grad(self) -> bool:
        """
        Indicate whether this tensor accumulates gradients.
        """
        return self._requires_grad

    @requires_grad.setter
    def requires_grad(self, value: bool) -> None:
        self._requires_grad = bool(value)

    @property
    def requires_gradient(self) -> bool:
        """Alias of `requires_grad`."""
        return self._requires_grad

    @property
    def parents(self) -> tuple["Tensor", ...]:
        """
        Return the tensors this tensor was computed from.

        Returns
        -------
        tuple[Tensor, ...]
            Parents in operand order; empty for leaf tensors.
        """
        if self._ctx is None:
            return ()
        return tuple(self._ctx.parents)

    @property
    def ctx(self) -> Optional[Context]:
        """Return the backward context, or None for leaf tensors."""
        return self._ctx

    @property
    def is_leaf(self) -> bool:
        """Return True if this tensor was not produced by an operation."""
        return self._ctx is None

    def numel(self) -> int:
        """
        Return the total number of elements in the tensor.
        """
        return int(self._data.size)

    def item(self) -> float:
        """
        Return the single element of a one-element tensor as a Python float.

        Raises
        ------
        ValueError
            If the tensor holds more than one element.
        """
        if self._data.size != 1:
            raise ValueError(
                f"item() requires a single-element tensor, got shape={self.shape}"
            )
        return float(self._data.reshape(-1)[0])

    def to_numpy(self) -> np.ndarray:
        """
        Return a writeable copy of the value.
        """
        return self._data.copy()

    def tolist(self) -> Any:
        """
        Return the value as (nested) Python floats.
        """
        return self._data.tolist()

    # ----------------------------
    # Autograd hooks
    # ----------------------------
    def _set_ctx(self, ctx: Optional[Context]) -> None:
        """
        Attach or detach the backward context.

        Notes
        -----
        This is an internal hook intended for use by differentiable operations.
        """
        self._ctx = ctx

    def _get_ctx(self) -> Optional[Context]:
        """
        Return the backward context attached to this tensor, if any.
        """
        return self._ctx

    def _accumulate_grad_(self, delta: np.ndarray) -> None:
        """
        In-place accumulate `delta` into this tensor's gradient buffer.

        Raises
        ------
        ShapeMismatchError
            If `delta` does not have the same shape as the tensor.
        """
        if delta.shape != self._grad.shape:
            raise ShapeMismatchError("accumulate_grad", self._grad.shape, delta.shape)
        self._grad += delta

    def zero_grad(self) -> None:
        """
        Reset the gradient to an all-zero array shaped like the value.

        Notes
        -----
        Training loops call this before the next forward pass to avoid
        unintentional accumulation across iterations.
        """
        self._grad.fill(0.0)

    def zero_gradient(self) -> None:
        """Alias of `zero_grad`."""
        self.zero_grad()

    def backward(self, gradient: Optional[Any] = None) -> None:
        """
        Backpropagate gradients from this tensor through the graph.

        Parameters
        ----------
        gradient : optional
            Seed gradient shaped like this tensor. If omitted, this tensor
            must hold exactly one element and the seed is 1.

        Raises
        ------
        NonScalarBackwardError
            If `gradient` is omitted for a multi-element tensor.
        ShapeMismatchError
            If `gradient` does not match this tensor's shape.
        """
        from ._autograd import backward

        backward(self, gradient)

    # ----------------------------
    # Documented mutators
    # ----------------------------
    def copy_from_numpy(self, arr: Any) -> None:
        """
        Overwrite the value in place with `arr`.

        Parameters
        ----------
        arr : array-like
            New value with exactly the same shape.

        Raises
        ------
        ShapeMismatchError
            If the shapes differ.
        """
        src = _as_value_array(arr)
        if src.shape != self._data.shape:
            raise ShapeMismatchError("copy_from_numpy", self._data.shape, src.shape)
        self._data[...] = src

    def apply_update_(self, delta: Any) -> None:
        """
        Add `delta` to the value in place (used by optimizers).

        Parameters
        ----------
        delta : array-like
            Update with the same shape as the value.

        Raises
        ------
        ShapeMismatchError
            If the shapes differ.
        """
        d = np.asarray(delta, dtype=np.float64)
        if d.shape != self._data.shape:
            raise ShapeMismatchError("apply_update", self._data.shape, d.shape)
        self._data += d

    # ----------------------------
    # Differentiable operations
    # ----------------------------
    @staticmethod
    def _as_tensor(x: Union["Tensor", Number, Sequence]) -> "Tensor":
        """
        Lift a raw operand into a constant tensor.
        """
        if isinstance(x, Tensor):
            return x
        return Tensor(x, requires_grad=False)

    def add(self, other: Union["Tensor", Number, Sequence]) -> "Tensor":
        """
        Elementwise addition; see `neuroforge.add`.
        """
        from ._ops import add

        return add(self, self._as_tensor(other))

    def __add__(self, other: Union["Tensor", Number, Sequence]) -> "Tensor":
        return self.add(other)

    def __radd__(self, other: Union[Number, Sequence]) -> "Tensor":
        from ._ops import add

        return add(self._as_tensor(other), self)

    def matmul(self, other: "Tensor") -> "Tensor":
        """
        Matrix multiplication (2D); see `neuroforge.matmul`.
        """
        from ._ops import matmul

        return matmul(self, self._as_tensor(other))

    def __matmul__(self, other: "Tensor") -> "Tensor":
        return self.matmul(other)

    def relu(self) -> "Tensor":
        """
        Elementwise rectified linear unit; see `neuroforge.relu`.
        """
        from ._ops import relu

        return relu(self)

    def broadcast_rows(self, rows: int) -> "Tensor":
        """
        Repeat a `(1, N)` tensor into `(rows, N)`; see `neuroforge.broadcast_rows`.
        """
        from ._ops import broadcast_rows

        return broadcast_rows(self, rows)

    def transpose(self) -> "Tensor":
        """
        Return a constant tensor holding the transposed value.

        Notes
        -----
        This helper does not record autograd history.
        """
        from ._ops import transpose

        return Tensor(transpose(self._data), requires_grad=False)

    @property
    def T(self) -> "Tensor":
        """
        Convenience property for `transpose()`.
        """
        return self.transpose()
