"""
Shape- and numeric-related exceptions for NeuroForge.

This module defines the error taxonomy raised by tensor operations, the
autograd engine and the layers built on top of them. All of these errors
signal programming or usage mistakes detected at the point of the offending
operation; none of them are transient, so nothing in the framework retries
after catching them.

The shape errors subclass `ValueError` so that callers written against
generic "bad argument" handling keep working, while still allowing precise
`except` clauses.
"""


class ShapeMismatchError(ValueError):
    """
    Raised when operand shapes (or element counts) are incompatible.

    Used by elementwise operations such as `add`, by `mse`, and by the
    autograd engine when an explicit seed gradient does not match its root.

    Attributes
    ----------
    op : str
        The name of the operation that was attempted (e.g., "add", "mse").
    shape_a : tuple[int, ...]
        Shape of the first operand.
    shape_b : tuple[int, ...]
        Shape of the second operand.
    """

    def __init__(self, op: str, shape_a: tuple, shape_b: tuple) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        op : str
            The operation name that rejected its operands.
        shape_a : tuple[int, ...]
            Shape of the first operand.
        shape_b : tuple[int, ...]
            Shape of the second operand.
        """
        super().__init__(
            f"{op}: shape mismatch {tuple(shape_a)} vs {tuple(shape_b)}."
        )
        self.op = op
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)


class DimensionMismatchError(ValueError):
    """
    Raised when matrix operands have incompatible ranks or inner dimensions.

    `matmul` requires two rank-2 operands with `a.shape[1] == b.shape[0]`;
    `Dense.forward` requires a rank-2 input whose column count equals the
    layer's input size.
    """

    def __init__(self, op: str, shape_a: tuple, shape_b: tuple) -> None:
        """
        Initialize the DimensionMismatchError.

        Parameters
        ----------
        op : str
            The operation name that rejected its operands.
        shape_a : tuple[int, ...]
            Shape of the left operand.
        shape_b : tuple[int, ...]
            Shape of the right operand (or expected shape).
        """
        super().__init__(
            f"{op}: dimension mismatch {tuple(shape_a)} vs {tuple(shape_b)}."
        )
        self.op = op
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)


class UnsupportedRankError(ValueError):
    """
    Raised when a tensor value has more than two dimensions.

    The engine only supports scalars, vectors and matrices.
    """

    def __init__(self, ndim: int) -> None:
        super().__init__(
            f"Tensors of rank {ndim} are not supported (expected rank 0, 1 or 2)."
        )
        self.ndim = int(ndim)


class NonScalarBackwardError(ValueError):
    """
    Raised when `backward()` is called on a multi-element tensor without an
    explicit seed gradient.

    Seeding a non-scalar root with ones does not compute the derivative of
    any well-defined scalar, so the engine treats it as a precondition
    violation instead of silently producing meaningless gradients.
    """

    def __init__(self, shape: tuple) -> None:
        super().__init__(
            "backward() without an explicit gradient requires a single-element "
            f"root tensor, got shape={tuple(shape)}."
        )
        self.shape = tuple(shape)


class InvalidNumericError(FloatingPointError):
    """
    Raised when an operation produces NaN or infinite values while anomaly
    detection is enabled.

    Attributes
    ----------
    op : str
        Name of the operation (or backward rule) that produced the values.
    phase : str
        Either "forward" or "backward".
    """

    def __init__(self, op: str, phase: str) -> None:
        super().__init__(f"{op} produced NaN or inf values during {phase} pass.")
        self.op = op
        self.phase = phase


class BackwardRuleNotFoundError(LookupError):
    """
    Raised when a tensor's operation tag has no registered backward rule.

    Attributes
    ----------
    op : str
        The tag that was looked up.
    """

    def __init__(self, op: str) -> None:
        super().__init__(f"No backward rule registered for op {op!r}.")
        self.op = op
