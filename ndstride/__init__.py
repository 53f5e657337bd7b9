"""
ndstride - strided N-dimensional arrays

Owned, row-major arrays with explicit strides, numpy-style broadcasting
and batched matrix multiplication, compiled with Numba.
"""

__version__ = "0.1.0"

from ndstride.base.array import Array, create, reshape_copy, asarray, array_equal
from ndstride.ops.creation import arange, random, sample_uniform
from ndstride.ops.elementwise import add, multiply, broadcast_shape, broadcast_array
from ndstride.ops.matmul import matmul
from ndstride.display.format import format_array, format_info
from ndstride.display.frame import to_frame
from ndstride.plotting.core import plot_array, plot_batch
from ndstride.utils.config import Config
from ndstride.errors import (
    NdStrideError,
    InvalidShape,
    InvalidRange,
    InvalidReshape,
    BroadcastIncompatible,
    RankTooLow,
    DimensionMismatch,
    UnsupportedDtype,
)

__all__ = [
    "Array",
    "create",
    "reshape_copy",
    "asarray",
    "array_equal",
    "arange",
    "random",
    "sample_uniform",
    "add",
    "multiply",
    "broadcast_shape",
    "broadcast_array",
    "matmul",
    "format_array",
    "format_info",
    "to_frame",
    "plot_array",
    "plot_batch",
    "Config",
    "NdStrideError",
    "InvalidShape",
    "InvalidRange",
    "InvalidReshape",
    "BroadcastIncompatible",
    "RankTooLow",
    "DimensionMismatch",
    "UnsupportedDtype",
]
