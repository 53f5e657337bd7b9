"""
Owned, strided N-dimensional array container.

An Array keeps a flat numpy buffer together with the metadata that describes
how the buffer is laid out:
- shape, strides and back-strides (byte-scaled, C order)
- the coordinate table (ArrayIndices) and linear offset table (LinearIndices)
- C/F contiguity flags

Dimensional metadata is fixed at construction; only buffer contents change.
"""

import numpy as np
from typing import Optional, Sequence, Tuple, Union

from ndstride.base.geometry import (
    ArrayIndices,
    LinearIndices,
    compute_backstrides,
    compute_strides,
    enumerate_coordinates,
    linear_offsets,
    shape_size,
    validate_shape,
)
from ndstride.errors import InvalidReshape, InvalidShape, UnsupportedDtype
from ndstride.utils.config import Config


SUPPORTED_DTYPES = frozenset(
    np.dtype(name)
    for name in (
        "int8", "int16", "int32", "int64",
        "uint8", "uint16", "uint32", "uint64",
        "float32", "float64",
        "complex64", "complex128",
    )
)


def resolve_dtype(dtype=None) -> np.dtype:
    """
    Turn a dtype-like into a supported numpy dtype.

    ``None`` resolves to ``Config.get("dtype.default")``.

    Raises
    ------
    UnsupportedDtype
        For bool, object, string, datetime, half and extended precision types
    """
    if dtype is None:
        dtype = Config.get("dtype.default", "float64")
    try:
        dtype = np.dtype(dtype)
    except TypeError:
        raise UnsupportedDtype(f"Not a numpy dtype: {dtype!r}") from None
    if dtype not in SUPPORTED_DTYPES:
        raise UnsupportedDtype(f"Unsupported element type: {dtype}")
    return dtype


class Array:
    """
    Dense N-dimensional array that exclusively owns its buffer.

    Parameters
    ----------
    shape : sequence of int
        Positive per-axis extents
    ndim : int, optional
        Expected number of dimensions; must equal ``len(shape)`` when given
    dtype : dtype-like, optional
        Numeric element type (defaults to ``Config`` ``dtype.default``)

    Examples
    --------
    >>> arr = Array((2, 3), dtype="float32")
    >>> arr.strides
    (12, 4)
    >>> arr.c_order, arr.f_order
    (True, False)
    """

    def __init__(
        self,
        shape: Sequence[int],
        ndim: Optional[int] = None,
        dtype=None,
    ):
        shape = validate_shape(shape, ndim)
        dtype = resolve_dtype(dtype)

        self._shape = shape
        self._ndim = len(shape)
        self._dtype = dtype
        self._itemsize = dtype.itemsize
        self._totalsize = shape_size(shape)
        self._data = np.zeros(self._totalsize, dtype=dtype)

        self._strides = compute_strides(shape, self._itemsize)
        self._backstrides = compute_backstrides(shape, self._strides)

        self._idxs = enumerate_coordinates(shape)
        self._lidxs = linear_offsets(shape, self._strides, self._itemsize, coords=self._idxs)

        self._c_order = self._strides[-1] == self._itemsize
        self._f_order = self._strides[0] == self._itemsize

    @property
    def data(self) -> np.ndarray:
        """Flat backing buffer (owned by this array)."""
        return self._data

    @property
    def shape(self) -> Tuple[int, ...]:
        return self._shape

    @property
    def strides(self) -> Tuple[int, ...]:
        """Byte step per axis."""
        return self._strides

    @property
    def backstrides(self) -> Tuple[int, ...]:
        """Byte offset applied when an axis index wraps back to zero."""
        return self._backstrides

    @property
    def ndim(self) -> int:
        return self._ndim

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def itemsize(self) -> int:
        return self._itemsize

    @property
    def totalsize(self) -> int:
        return self._totalsize

    @property
    def size(self) -> int:
        return self._totalsize

    @property
    def idxs(self) -> ArrayIndices:
        """Coordinate tuples in enumeration order."""
        return self._idxs

    @property
    def lidxs(self) -> LinearIndices:
        """Buffer offset for each enumeration position."""
        return self._lidxs

    @property
    def c_order(self) -> bool:
        return self._c_order

    @property
    def f_order(self) -> bool:
        return self._f_order

    def item(self, *coords: int):
        """
        Read the element at a coordinate tuple.

        Raises
        ------
        IndexError
            Wrong number of coordinates or a coordinate out of range
        """
        if len(coords) == 1 and isinstance(coords[0], tuple):
            coords = coords[0]
        if len(coords) != self._ndim:
            raise IndexError(
                f"Expected {self._ndim} coordinates for shape {self._shape}, got {len(coords)}"
            )
        offset = 0
        for axis, (c, extent) in enumerate(zip(coords, self._shape)):
            if not 0 <= c < extent:
                raise IndexError(f"Index {c} out of range for axis {axis} with extent {extent}")
            offset += c * self._strides[axis]
        return self._data[offset // self._itemsize]

    def to_numpy(self) -> np.ndarray:
        """Independent numpy copy laid out with this array's shape."""
        return self._data[self._lidxs.indices].reshape(self._shape)

    def tolist(self) -> list:
        return self.to_numpy().tolist()

    def show(self, precision: Optional[int] = None) -> None:
        """Print the array contents, one innermost row per line."""
        from ndstride.display.format import format_array

        print(format_array(self, precision=precision))

    def print_info(self) -> None:
        """Print shape, strides and contiguity flags."""
        from ndstride.display.format import format_info

        print(format_info(self))

    def __len__(self) -> int:
        return self._shape[0]

    def __add__(self, other: "Array") -> "Array":
        from ndstride.ops.elementwise import add

        if not isinstance(other, Array):
            return NotImplemented
        return add(self, other)

    def __mul__(self, other: "Array") -> "Array":
        from ndstride.ops.elementwise import multiply

        if not isinstance(other, Array):
            return NotImplemented
        return multiply(self, other)

    def __matmul__(self, other: "Array") -> "Array":
        from ndstride.ops.matmul import matmul

        if not isinstance(other, Array):
            return NotImplemented
        return matmul(self, other)

    def __repr__(self) -> str:
        return f"Array(shape={self._shape}, dtype={self._dtype})"


def create(shape: Sequence[int], ndim: Optional[int] = None, dtype=None) -> Array:
    """
    Create a zero-filled array.

    Parameters
    ----------
    shape : sequence of int
        Positive per-axis extents
    ndim : int, optional
        Expected number of dimensions
    dtype : dtype-like, optional
        Element type

    Returns
    -------
    Array
        Fully populated array (zeros, strides, index tables, flags)

    Examples
    --------
    >>> create([2, 3], 2).totalsize
    6
    """
    return Array(shape, ndim=ndim, dtype=dtype)


def reshape_copy(src: Array, shape: Sequence[int], ndim: Optional[int] = None) -> Array:
    """
    Copy ``src`` into a fresh array of a different shape.

    The buffer is copied verbatim; all arrays are created C-contiguous, so
    the copy preserves row-major element order.

    Parameters
    ----------
    src : Array
        Source array (left untouched)
    shape : sequence of int
        Target shape
    ndim : int, optional
        Expected number of dimensions of the target shape

    Returns
    -------
    Array
        New array with ``src``'s dtype and data

    Raises
    ------
    InvalidReshape
        If ``prod(shape) != src.totalsize``

    Examples
    --------
    >>> reshape_copy(arange(1, 7, 1), [2, 3]).tolist()
    [[1, 2, 3], [4, 5, 6]]
    """
    shape = validate_shape(shape, ndim)
    new_size = shape_size(shape)
    if new_size != src.totalsize:
        raise InvalidReshape(
            f"Cannot reshape array of size {src.totalsize} into shape {shape}"
        )
    arr = Array(shape, dtype=src.dtype)
    arr.data[:] = src.data
    return arr


def asarray(
    values,
    shape: Optional[Sequence[int]] = None,
    dtype=None,
) -> Array:
    """
    Build an owned Array from a nested sequence or numpy array.

    Parameters
    ----------
    values : array-like
        Source values (copied in row-major order)
    shape : sequence of int, optional
        Target shape for the flattened values (defaults to the input's shape)
    dtype : dtype-like, optional
        Element type (defaults to the type numpy infers for ``values``)

    Returns
    -------
    Array

    Raises
    ------
    InvalidShape
        For scalars, empty or ragged input
    InvalidReshape
        If ``shape`` holds a different number of elements

    Examples
    --------
    >>> asarray([1, 2, 3, 4], shape=(2, 2)).shape
    (2, 2)
    """
    try:
        src = np.asarray(values)
    except ValueError as err:
        raise InvalidShape(f"Cannot build an array from ragged input: {err}") from err
    if src.ndim == 0:
        raise InvalidShape("Cannot build an array from a scalar")

    if shape is None:
        shape = src.shape
    else:
        shape = validate_shape(shape)
        if shape_size(shape) != src.size:
            raise InvalidReshape(
                f"Cannot reshape {src.size} values into shape {shape}"
            )

    arr = Array(shape, dtype=src.dtype if dtype is None else dtype)
    arr.data[:] = src.ravel(order="C")
    return arr


def array_equal(a: Array, b: Array) -> bool:
    """True when both arrays have the same shape and the same elements."""
    return a.shape == b.shape and bool(np.array_equal(a.to_numpy(), b.to_numpy()))
