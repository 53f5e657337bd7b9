"""Array container and the index geometry it is built on."""

from ndstride.base.array import Array, create, reshape_copy, asarray, array_equal
from ndstride.base.geometry import (
    ArrayIndices,
    LinearIndices,
    compute_strides,
    compute_backstrides,
    enumerate_coordinates,
    linear_offsets,
)

__all__ = [
    "Array",
    "create",
    "reshape_copy",
    "asarray",
    "array_equal",
    "ArrayIndices",
    "LinearIndices",
    "compute_strides",
    "compute_backstrides",
    "enumerate_coordinates",
    "linear_offsets",
]
