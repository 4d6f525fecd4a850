from ._tensor import Tensor
from ._tensor_context import Context, OpKind
from ._ops import add, matmul, relu, broadcast_rows, transpose
from ._autograd import BackwardRegistry, backward, topological_order

__all__ = [
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
]
