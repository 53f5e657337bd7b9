"""Array operations: constructors, elementwise arithmetic and matmul."""

from ndstride.ops.creation import arange, random, sample_uniform
from ndstride.ops.elementwise import add, multiply, broadcast_shape, broadcast_array
from ndstride.ops.enums import BinaryOp
from ndstride.ops.matmul import matmul

__all__ = [
    "arange",
    "random",
    "sample_uniform",
    "add",
    "multiply",
    "broadcast_shape",
    "broadcast_array",
    "BinaryOp",
    "matmul",
]
