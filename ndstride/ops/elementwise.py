"""
Broadcasting-aware elementwise operations.

Same-shape operands are combined position by position through each operand's
linear offset table. Otherwise both operands are materialized into full-size
temporaries of the broadcast shape and combined positionwise.
"""

import logging

import numpy as np
import numba
from typing import Sequence, Tuple

from ndstride.base.array import Array, resolve_dtype
from ndstride.base.geometry import validate_shape
from ndstride.errors import BroadcastIncompatible
from ndstride.ops.enums import BinaryOp

log = logging.getLogger("ndstride.ops.elementwise")


@numba.jit(nopython=True, cache=True, parallel=True)
def _binary_op_nb(
    a_data: np.ndarray,
    a_offsets: np.ndarray,
    b_data: np.ndarray,
    b_offsets: np.ndarray,
    out: np.ndarray,
    op: int,
) -> None:
    """
    Combine two buffers position by position.

    Parameters
    ----------
    a_data, b_data : np.ndarray
        Operand buffers
    a_offsets, b_offsets : np.ndarray
        Buffer offset of each enumeration position, per operand
    out : np.ndarray
        Result buffer (written once per position)
    op : int
        BinaryOp value
    """
    for i in numba.prange(out.shape[0]):
        x = a_data[a_offsets[i]]
        y = b_data[b_offsets[i]]
        if op == 0:
            out[i] = x + y
        else:
            out[i] = x * y


@numba.jit(nopython=True, cache=True, parallel=True)
def _broadcast_expand_nb(
    src: np.ndarray,
    src_shape: np.ndarray,
    src_strides: np.ndarray,
    itemsize: int,
    out_coords: np.ndarray,
    out_offsets: np.ndarray,
    n_prepend: int,
    out: np.ndarray,
) -> None:
    """
    Replicate ``src`` over a larger shape.

    Axes of extent 1 collapse to index 0 through the modulo; the
    ``n_prepend`` leading output axes have no source axis at all.
    """
    ndim = src_shape.shape[0]
    for i in numba.prange(out_coords.shape[0]):
        offset = 0
        for d in range(ndim):
            offset += (out_coords[i, n_prepend + d] % src_shape[d]) * src_strides[d]
        out[out_offsets[i]] = src[offset // itemsize]


def _as_shape(shape: Sequence[int]) -> Tuple[int, ...]:
    # An empty shape is a scalar (no batch axes); it broadcasts against anything
    shape = tuple(shape)
    return validate_shape(shape) if shape else ()


def broadcast_shape(a_shape: Sequence[int], b_shape: Sequence[int]) -> Tuple[int, ...]:
    """
    Shape two operands broadcast to.

    Shapes are right-aligned and the shorter one is padded on the left with
    ones. Each aligned axis must be equal, or one of them must be 1.

    Parameters
    ----------
    a_shape, b_shape : sequence of int
        Operand shapes

    Returns
    -------
    tuple of int
        Broadcast shape

    Raises
    ------
    InvalidShape
        If either shape has non-positive or non-integer extents
    BroadcastIncompatible
        If some aligned axis pair is neither equal nor contains a 1

    Examples
    --------
    >>> broadcast_shape((1, 3), (2, 1))
    (2, 3)
    >>> broadcast_shape((4, 1, 5), (3, 1))
    (4, 3, 5)
    """
    a_shape = _as_shape(a_shape)
    b_shape = _as_shape(b_shape)
    if a_shape == b_shape:
        return a_shape

    ndim = max(len(a_shape), len(b_shape))
    a_padded = (1,) * (ndim - len(a_shape)) + a_shape
    b_padded = (1,) * (ndim - len(b_shape)) + b_shape

    result = []
    for a_dim, b_dim in zip(a_padded, b_padded):
        if a_dim == b_dim or a_dim == 1 or b_dim == 1:
            result.append(max(a_dim, b_dim))
        else:
            raise BroadcastIncompatible(
                f"Operands could not be broadcast together with shapes {a_shape} {b_shape}"
            )
    return tuple(result)


def broadcast_array(arr: Array, shape: Sequence[int]) -> Array:
    """
    Materialize ``arr`` replicated over ``shape``.

    Parameters
    ----------
    arr : Array
        Source array (left untouched)
    shape : sequence of int
        Target shape; ``arr.shape`` must broadcast to it

    Returns
    -------
    Array
        New array of ``shape`` with ``arr``'s dtype

    Examples
    --------
    >>> broadcast_array(asarray([1, 2, 3]), (2, 3)).tolist()
    [[1, 2, 3], [1, 2, 3]]
    """
    shape = validate_shape(shape)
    if len(shape) < arr.ndim or broadcast_shape(arr.shape, shape) != shape:
        raise BroadcastIncompatible(f"Cannot broadcast shape {arr.shape} to {shape}")

    res = Array(shape, dtype=arr.dtype)
    _broadcast_expand_nb(
        arr.data,
        np.asarray(arr.shape, dtype=np.int64),
        np.asarray(arr.strides, dtype=np.int64),
        arr.itemsize,
        res.idxs.indices,
        res.lidxs.indices,
        len(shape) - arr.ndim,
        res.data,
    )
    return res


def _apply_binary(a: Array, b: Array, op: BinaryOp) -> Array:
    if not isinstance(a, Array) or not isinstance(b, Array):
        raise TypeError(
            f"{op.name.lower()} expects two Arrays, got {type(a).__name__} and {type(b).__name__}"
        )
    dtype = resolve_dtype(np.result_type(a.dtype, b.dtype))

    if a.shape == b.shape:
        res = Array(a.shape, dtype=dtype)
        _binary_op_nb(a.data, a.lidxs.indices, b.data, b.lidxs.indices, res.data, int(op))
        return res

    shape = broadcast_shape(a.shape, b.shape)
    log.debug("%s: broadcasting %s and %s to %s", op.name.lower(), a.shape, b.shape, shape)

    a_full = broadcast_array(a, shape)
    b_full = broadcast_array(b, shape)
    res = Array(shape, dtype=dtype)
    _binary_op_nb(
        a_full.data, a_full.lidxs.indices, b_full.data, b_full.lidxs.indices, res.data, int(op)
    )
    return res


def add(a: Array, b: Array) -> Array:
    """
    Elementwise sum with broadcasting.

    Raises
    ------
    BroadcastIncompatible
        If the operand shapes do not broadcast

    Examples
    --------
    >>> add(arange(1, 7, 1), arange(1, 7, 1)).tolist()
    [2, 4, 6, 8, 10, 12]
    """
    return _apply_binary(a, b, BinaryOp.ADD)


def multiply(a: Array, b: Array) -> Array:
    """
    Elementwise product with broadcasting.

    Raises
    ------
    BroadcastIncompatible
        If the operand shapes do not broadcast
    """
    return _apply_binary(a, b, BinaryOp.MULTIPLY)
