"""
Differentiable tensor operations (forward kernels).

Each public function validates its operands, computes the output value with
NumPy, and returns a new `Tensor` whose `Context` records the operation tag
and parents. The matching backward rules live in `_autograd.py` and are
looked up by tag, so nothing here captures live tensors in closures.

Implemented operations
----------------------
- `add(a, b)`            : elementwise sum, exact shape match required
- `matmul(a, b)`         : rank-2 matrix product
- `relu(a)`              : elementwise max(0, x)
- `broadcast_rows(a, n)` : explicit (1, N) -> (n, N) row broadcast

`transpose` is a plain helper over materialised arrays and is also used by
the backward rules. `make_result` is the shared constructor for operation
outputs; operations defined outside this module (e.g. `mse`) use it too.
"""

from __future__ import annotations

import numpy as np

from ...domain._errors import (
    DimensionMismatchError,
    InvalidNumericError,
    ShapeMismatchError,
)
from .._config import get_config
from ._tensor import Tensor
from ._tensor_context import Context, OpKind


def _check_finite(arr: np.ndarray, op: str, phase: str) -> None:
    """
    Raise `InvalidNumericError` for NaN/inf values when anomaly detection is on.
    """
    if get_config().detect_anomaly and not np.all(np.isfinite(arr)):
        raise InvalidNumericError(op, phase)


def make_result(
    data: np.ndarray, ctx: Context, *parents: Tensor
) -> Tensor:
    """
    Wrap a freshly computed value into an output tensor with history.

    The output requires a gradient iff any parent does.
    """
    _check_finite(data, ctx.op.value, "forward")
    requires_grad = any(p.requires_grad for p in parents)
    return Tensor(data, requires_grad=requires_grad, ctx=ctx)


def transpose(arr: np.ndarray) -> np.ndarray:
    """
    Return the transpose of a rank-2 array (rank 0/1 arrays are returned as-is).

    Parameters
    ----------
    arr : np.ndarray
        Materialised value.

    Returns
    -------
    np.ndarray
        A new array.
    """
    return np.array(np.asarray(arr).T, dtype=np.float64)


def add(a: Tensor, b: Tensor) -> Tensor:
    """
    Elementwise addition `c = a + b`.

    Parameters
    ----------
    a, b : Tensor
        Operands of identical shape.

    Returns
    -------
    Tensor
        New tensor with parents `(a, b)`.

    Raises
    ------
    ShapeMismatchError
        If the shapes differ. No broadcasting is performed.
    """
    if not isinstance(a, Tensor) or not isinstance(b, Tensor):
        raise TypeError(
            f"add expects Tensor operands, got {type(a)!r} and {type(b)!r}"
        )
    if a.shape != b.shape:
        raise ShapeMismatchError("add", a.shape, b.shape)

    ctx = Context(op=OpKind.ADD, parents=(a, b))
    return make_result(a._data + b._data, ctx, a, b)


def matmul(a: Tensor, b: Tensor) -> Tensor:
    """
    Matrix multiplication `c = a @ b`.

    Requirements
    ------------
    Both operands are rank 2 and `a.shape[1] == b.shape[0]`.

    Backward
    --------
    If c = A @ B, then:
    - dL/dA = dL/dc @ B^T
    - dL/dB = A^T @ dL/dc

    Raises
    ------
    DimensionMismatchError
        If either operand is not rank 2 or the inner dimensions differ.
    """
    if not isinstance(a, Tensor) or not isinstance(b, Tensor):
        raise TypeError(
            f"matmul expects Tensor operands, got {type(a)!r} and {type(b)!r}"
        )
    if a.ndim != 2 or b.ndim != 2 or a.shape[1] != b.shape[0]:
        raise DimensionMismatchError("matmul", a.shape, b.shape)

    ctx = Context(op=OpKind.MATMUL, parents=(a, b))
    return make_result(a._data @ b._data, ctx, a, b)


def relu(a: Tensor) -> Tensor:
    """
    Elementwise rectified linear unit `c = max(0, a)`.

    The backward rule uses the subgradient 0 at exactly zero.
    """
    if not isinstance(a, Tensor):
        raise TypeError(f"relu expects a Tensor, got {type(a)!r}")

    ctx = Context(op=OpKind.RELU, parents=(a,))
    return make_result(np.maximum(a._data, 0.0), ctx, a)


def broadcast_rows(a: Tensor, rows: int) -> Tensor:
    """
    Repeat a single-row matrix `(1, N)` into `(rows, N)`.

    This is the only broadcasting the engine performs, and it is always
    explicit. `Dense` uses it to add its `(1, out)` bias to a batch.

    Backward
    --------
    The gradient w.r.t. `a` is the column-wise sum of the output gradient.

    Raises
    ------
    ShapeMismatchError
        If `a` is not of shape `(1, N)`.
    ValueError
        If `rows < 1`.
    """
    if not isinstance(a, Tensor):
        raise TypeError(f"broadcast_rows expects a Tensor, got {type(a)!r}")
    rows = int(rows)
    if rows < 1:
        raise ValueError(f"broadcast_rows requires rows >= 1, got {rows}")
    if a.ndim != 2 or a.shape[0] != 1:
        raise ShapeMismatchError("broadcast_rows", a.shape, (1, -1))

    ctx = Context(op=OpKind.BROADCAST_ROWS, parents=(a,))
    data = np.repeat(a._data, rows, axis=0)
    return make_result(data, ctx, a)
