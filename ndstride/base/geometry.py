"""
Index geometry for strided, row-major buffers.

Includes:
- Shape validation and element counts
- Strides and back-strides (byte-scaled, C order)
- Coordinate enumeration (odometer order, last axis fastest)
- Linear element offsets for every enumerated coordinate
"""

import operator

import numpy as np
import numba
from typing import Iterator, Optional, Sequence, Tuple

from ndstride.errors import InvalidShape


MAX_SIZE = int(np.iinfo(np.intp).max)


class ArrayIndices:
    """
    Every coordinate tuple of a shape, in row-major enumeration order.

    ``indices`` is an int64 table of shape ``(count, ndim)``.
    """

    def __init__(self, indices: np.ndarray):
        indices.setflags(write=False)
        self.indices = indices
        self.count = indices.shape[0]

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        for row in self.indices:
            yield tuple(int(v) for v in row)

    def __getitem__(self, i: int) -> Tuple[int, ...]:
        return tuple(int(v) for v in self.indices[i])

    def __repr__(self) -> str:
        return f"ArrayIndices(count={self.count}, ndim={self.indices.shape[1]})"


class LinearIndices:
    """
    Element offset into the backing buffer for each enumeration position.

    ``indices`` is an int64 vector of length ``count``.
    """

    def __init__(self, indices: np.ndarray):
        indices.setflags(write=False)
        self.indices = indices
        self.count = indices.shape[0]

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[int]:
        for v in self.indices:
            yield int(v)

    def __getitem__(self, i: int) -> int:
        return int(self.indices[i])

    def __repr__(self) -> str:
        return f"LinearIndices(count={self.count})"


def validate_shape(shape: Sequence[int], ndim: Optional[int] = None) -> Tuple[int, ...]:
    """
    Normalize a shape to a tuple of Python ints, rejecting invalid ones.

    Parameters
    ----------
    shape : sequence of int
        Per-axis extents
    ndim : int, optional
        Expected number of dimensions (checked against ``len(shape)``)

    Returns
    -------
    tuple of int
        Validated shape

    Raises
    ------
    InvalidShape
        Empty shape, rank mismatch, non-integer or non-positive extents,
        or an element count that does not fit the platform's index type
    """
    try:
        dims = list(shape)
    except TypeError:
        raise InvalidShape(f"Shape must be a sequence of ints, got {shape!r}") from None

    if ndim is not None and ndim != len(dims):
        raise InvalidShape(
            f"Cannot initialize array with ndim {ndim} from shape {tuple(dims)}"
        )
    if len(dims) == 0:
        raise InvalidShape("Cannot initialize array with ndim 0")

    result = []
    for dim in dims:
        if isinstance(dim, (bool, np.bool_)):
            raise InvalidShape(f"Shape entries must be ints, got {dim!r}")
        try:
            dim = operator.index(dim)
        except TypeError:
            raise InvalidShape(f"Shape entries must be ints, got {dim!r}") from None
        if dim <= 0:
            raise InvalidShape(f"Shape dimensions must be positive, got {tuple(dims)}")
        result.append(dim)

    shape_size(result)
    return tuple(result)


def shape_size(shape: Sequence[int]) -> int:
    """
    Number of elements held by ``shape`` (product of its extents).

    Raises
    ------
    InvalidShape
        If the product overflows the platform's index type
    """
    total = 1
    for dim in shape:
        total *= int(dim)
        if total > MAX_SIZE:
            raise InvalidShape(f"Shape {tuple(shape)} overflows the maximum array size")
    return total


def compute_strides(shape: Sequence[int], itemsize: int) -> Tuple[int, ...]:
    """
    Byte strides of a C-contiguous buffer.

    Parameters
    ----------
    shape : sequence of int
        Per-axis extents
    itemsize : int
        Size of one element in bytes

    Returns
    -------
    tuple of int
        One stride per axis

    Examples
    --------
    >>> compute_strides((2, 3, 4), 4)
    (48, 16, 4)
    """
    ndim = len(shape)
    strides = [0] * ndim
    strides[ndim - 1] = itemsize
    for i in range(ndim - 2, -1, -1):
        strides[i] = strides[i + 1] * shape[i + 1]
    return tuple(strides)


def compute_backstrides(shape: Sequence[int], strides: Sequence[int]) -> Tuple[int, ...]:
    """
    Offset applied when an axis index wraps from its maximum back to zero.

    Examples
    --------
    >>> compute_backstrides((2, 3), (24, 8))
    (-24, -16)
    """
    return tuple(-strides[i] * (shape[i] - 1) for i in range(len(shape)))


@numba.jit(nopython=True, cache=True)
def _enumerate_coordinates_nb(shape: np.ndarray, count: int) -> np.ndarray:
    """
    Odometer walk over ``shape``.

    Starts at the all-zero tuple; each step bumps the last axis and carries
    into the axis on its left whenever an axis reaches its extent.
    """
    ndim = shape.shape[0]
    indices = np.zeros((count, ndim), dtype=np.int64)
    current = np.zeros(ndim, dtype=np.int64)

    for i in range(count):
        for j in range(ndim):
            indices[i, j] = current[j]
        for j in range(ndim - 1, -1, -1):
            current[j] += 1
            if current[j] < shape[j]:
                break
            current[j] = 0

    return indices


@numba.jit(nopython=True, cache=True, parallel=True)
def _linear_offsets_nb(coords: np.ndarray, strides: np.ndarray, itemsize: int) -> np.ndarray:
    """Dot each coordinate row with the strides, in element units."""
    count = coords.shape[0]
    ndim = coords.shape[1]
    offsets = np.empty(count, dtype=np.int64)

    for i in numba.prange(count):
        offset = 0
        for j in range(ndim):
            offset += coords[i, j] * strides[j]
        offsets[i] = offset // itemsize

    return offsets


def enumerate_coordinates(shape: Sequence[int]) -> ArrayIndices:
    """
    Enumerate every coordinate tuple of ``shape`` in row-major order.

    Parameters
    ----------
    shape : sequence of int
        Per-axis extents (validated)

    Returns
    -------
    ArrayIndices
        ``prod(shape)`` tuples, last axis varying fastest

    Examples
    --------
    >>> list(enumerate_coordinates((2, 2)))
    [(0, 0), (0, 1), (1, 0), (1, 1)]
    """
    shape = validate_shape(shape)
    count = shape_size(shape)
    return ArrayIndices(_enumerate_coordinates_nb(np.asarray(shape, dtype=np.int64), count))


def linear_offsets(
    shape: Sequence[int],
    strides: Sequence[int],
    itemsize: int,
    coords: Optional[ArrayIndices] = None,
) -> LinearIndices:
    """
    Linear element offset of every enumerated coordinate.

    Parameters
    ----------
    shape : sequence of int
        Per-axis extents
    strides : sequence of int
        Byte strides, one per axis
    itemsize : int
        Element size in bytes
    coords : ArrayIndices, optional
        Precomputed enumeration of ``shape`` (recomputed when omitted)

    Returns
    -------
    LinearIndices
        ``sum(coord[j] * strides[j]) // itemsize`` per coordinate
    """
    if coords is None:
        coords = enumerate_coordinates(shape)
    return LinearIndices(
        _linear_offsets_nb(coords.indices, np.asarray(strides, dtype=np.int64), itemsize)
    )
