"""
Batched matrix multiplication.

The last two axes of each operand are the matrices; any leading axes are
batch axes, broadcast against each other the same way elementwise operands
are (right-aligned, extents equal or 1).
"""

import logging

import numpy as np
import numba

from ndstride.base.array import Array, resolve_dtype
from ndstride.base.geometry import enumerate_coordinates
from ndstride.errors import BroadcastIncompatible, DimensionMismatch, RankTooLow
from ndstride.ops.elementwise import broadcast_shape

log = logging.getLogger("ndstride.ops.matmul")


@numba.jit(nopython=True, cache=True, parallel=True)
def _matmul_nb(
    a_data: np.ndarray,
    a_batch_shape: np.ndarray,
    a_strides: np.ndarray,
    a_itemsize: int,
    b_data: np.ndarray,
    b_batch_shape: np.ndarray,
    b_strides: np.ndarray,
    b_itemsize: int,
    batch_coords: np.ndarray,
    out: np.ndarray,
    out_strides: np.ndarray,
    out_itemsize: int,
    m: int,
    n: int,
    p: int,
) -> None:
    """
    Fill ``out`` with ``a[batch] @ b[batch]`` for every batch coordinate.

    One prange iteration per output cell ``(batch, i, j)``; the inner
    reduction runs over ``k`` in ascending order.

    Parameters
    ----------
    a_data, b_data : np.ndarray
        Operand buffers
    a_batch_shape, b_batch_shape : np.ndarray
        Leading (batch) extents of each operand, possibly empty
    a_strides, b_strides, out_strides : np.ndarray
        Byte strides over all axes
    a_itemsize, b_itemsize, out_itemsize : int
        Element sizes in bytes
    batch_coords : np.ndarray
        Enumerated coordinates of the broadcast batch shape, (n_batch, n_axes)
    out : np.ndarray
        Zero-filled result buffer
    m, n, p : int
        ``a`` is (m, n) and ``b`` is (n, p) per batch entry
    """
    n_batch = batch_coords.shape[0]
    n_axes = batch_coords.shape[1]
    a_nb = a_batch_shape.shape[0]
    b_nb = b_batch_shape.shape[0]
    a_pre = n_axes - a_nb
    b_pre = n_axes - b_nb
    a_row = a_strides[a_nb]
    a_col = a_strides[a_nb + 1]
    b_row = b_strides[b_nb]
    b_col = b_strides[b_nb + 1]
    out_row = out_strides[n_axes]
    out_col = out_strides[n_axes + 1]
    cells = m * p

    for t in numba.prange(n_batch * cells):
        bi = t // cells
        rem = t - bi * cells
        i = rem // p
        j = rem - i * p

        # Absent or size-1 batch axes contribute nothing to an operand's offset
        a_base = 0
        for d in range(a_nb):
            a_base += (batch_coords[bi, a_pre + d] % a_batch_shape[d]) * a_strides[d]
        b_base = 0
        for d in range(b_nb):
            b_base += (batch_coords[bi, b_pre + d] % b_batch_shape[d]) * b_strides[d]
        out_base = 0
        for d in range(n_axes):
            out_base += batch_coords[bi, d] * out_strides[d]

        o = (out_base + i * out_row + j * out_col) // out_itemsize
        acc = out[o]
        for k in range(n):
            ai = (a_base + i * a_row + k * a_col) // a_itemsize
            bk = (b_base + k * b_row + j * b_col) // b_itemsize
            acc += a_data[ai] * b_data[bk]
        out[o] = acc


def matmul(a: Array, b: Array) -> Array:
    """
    Matrix product of two arrays, broadcasting any batch axes.

    Parameters
    ----------
    a : Array
        Left operand, shape (..., m, n)
    b : Array
        Right operand, shape (..., n, p)

    Returns
    -------
    Array
        New array of shape (broadcast batch..., m, p)

    Raises
    ------
    RankTooLow
        If either operand has fewer than two dimensions
    DimensionMismatch
        If ``a.shape[-1] != b.shape[-2]``
    BroadcastIncompatible
        If the batch axes do not broadcast

    Examples
    --------
    >>> a = asarray([[1, 2], [3, 4]])
    >>> b = asarray([[5, 6], [7, 8]])
    >>> matmul(a, b).tolist()
    [[19, 22], [43, 50]]
    """
    if not isinstance(a, Array) or not isinstance(b, Array):
        raise TypeError(
            f"matmul expects two Arrays, got {type(a).__name__} and {type(b).__name__}"
        )
    if a.ndim < 2 or b.ndim < 2:
        raise RankTooLow(
            f"Both arrays must have at least 2 dimensions for matmul, got {a.ndim} and {b.ndim}"
        )
    if a.shape[-1] != b.shape[-2]:
        raise DimensionMismatch(
            f"Last dimension of {a.shape} must match second-to-last dimension of {b.shape}"
        )

    m, n = a.shape[-2:]
    p = b.shape[-1]
    a_batch = a.shape[:-2]
    b_batch = b.shape[:-2]
    try:
        batch = broadcast_shape(a_batch, b_batch)
    except BroadcastIncompatible as err:
        raise BroadcastIncompatible(
            f"matmul batch dimensions {a_batch} and {b_batch} do not broadcast"
        ) from err
    if batch != a_batch or batch != b_batch:
        log.debug("matmul: broadcasting batch axes %s and %s to %s", a_batch, b_batch, batch)

    dtype = resolve_dtype(np.result_type(a.dtype, b.dtype))
    res = Array(batch + (m, p), dtype=dtype)

    if batch:
        batch_coords = enumerate_coordinates(batch).indices
    else:
        batch_coords = np.zeros((1, 0), dtype=np.int64)

    _matmul_nb(
        a.data,
        np.asarray(a_batch, dtype=np.int64),
        np.asarray(a.strides, dtype=np.int64),
        a.itemsize,
        b.data,
        np.asarray(b_batch, dtype=np.int64),
        np.asarray(b.strides, dtype=np.int64),
        b.itemsize,
        batch_coords,
        res.data,
        np.asarray(res.strides, dtype=np.int64),
        res.itemsize,
        m,
        n,
        p,
    )
    return res
