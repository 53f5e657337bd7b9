"""
Array constructors that fill a fresh buffer.

Includes:
- arange (evenly spaced values)
- random (uniform fill from a seeded generator)
- sample_uniform (single uniform draw)
"""

import logging
import math

import numpy as np
from typing import Optional, Sequence

from ndstride.base.array import Array, resolve_dtype
from ndstride.base.geometry import MAX_SIZE
from ndstride.errors import InvalidRange
from ndstride.utils.config import Config

log = logging.getLogger("ndstride.ops.creation")


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def arange(start, end, step=1, dtype=None) -> Array:
    """
    1-D array of evenly spaced values in ``[start, end)``.

    Parameters
    ----------
    start : int or float
        First value
    end : int or float
        Exclusive upper bound (must be greater than ``start``)
    step : int or float
        Positive spacing between values
    dtype : dtype-like, optional
        Element type. Defaults to int64 when all bounds are ints, otherwise
        to ``Config`` ``dtype.default``

    Returns
    -------
    Array
        ``ceil((end - start) / step)`` elements, ``start + i * step``

    Raises
    ------
    InvalidRange
        If ``start >= end``, ``step <= 0``, a bound is not finite, or the
        range holds more elements than an array can index

    Examples
    --------
    >>> arange(1, 7, 1).tolist()
    [1, 2, 3, 4, 5, 6]
    >>> arange(0.0, 1.0, 0.25).tolist()
    [0.0, 0.25, 0.5, 0.75]
    """
    for name, value in (("start", start), ("end", end), ("step", step)):
        try:
            finite = math.isfinite(value)
        except OverflowError:
            finite = False
        if not finite:
            raise InvalidRange(f"{name} must be finite, got {value!r}")
    if start >= end:
        raise InvalidRange(f"Start value must be less than end value, got {start} >= {end}")
    if step <= 0:
        raise InvalidRange(f"Step value must be positive, got {step}")

    if dtype is None and _is_int(start) and _is_int(end) and _is_int(step):
        dtype = np.int64
    dtype = resolve_dtype(dtype)

    try:
        length = math.ceil((end - start) / step)
    except OverflowError:
        length = MAX_SIZE + 1
    if length > MAX_SIZE:
        raise InvalidRange(f"Range [{start}, {end}) with step {step} has too many elements")

    arr = Array((length,), dtype=dtype)
    arr.data[:] = start + np.arange(length) * step
    return arr


def sample_uniform(low: float, high: float, rng: Optional[np.random.Generator] = None) -> float:
    """
    Draw one value uniformly from ``[low, high)``.

    Parameters
    ----------
    low, high : float
        Bounds, ``low < high``
    rng : np.random.Generator, optional
        Source of randomness (a fresh unseeded generator when omitted)

    Returns
    -------
    float
    """
    if not low < high:
        raise InvalidRange(f"low must be less than high, got {low} >= {high}")
    if rng is None:
        rng = np.random.default_rng()
    return float(rng.uniform(low, high))


def random(
    shape: Sequence[int],
    ndim: Optional[int] = None,
    low: Optional[float] = None,
    high: Optional[float] = None,
    seed: Optional[int] = None,
    dtype=None,
) -> Array:
    """
    Array filled with uniform random values from ``[low, high)``.

    Parameters
    ----------
    shape : sequence of int
        Array shape
    ndim : int, optional
        Expected number of dimensions
    low, high : float, optional
        Bounds (default: ``Config`` ``random.low`` / ``random.high``)
    seed : int, optional
        Random seed for reproducibility
    dtype : dtype-like, optional
        Element type; integer types draw integers from ``[low, high)``,
        which must lie within the type's range

    Returns
    -------
    Array

    Examples
    --------
    >>> random((2, 3), seed=42).shape
    (2, 3)
    """
    if low is None:
        low = Config.get("random.low", 0.0)
    if high is None:
        high = Config.get("random.high", 1.0)
    if not low < high:
        raise InvalidRange(f"low must be less than high, got {low} >= {high}")

    dtype = resolve_dtype(dtype)
    integral = bool(np.issubdtype(dtype, np.integer))
    if integral:
        low, high = math.ceil(low), math.ceil(high)
        if not low < high:
            raise InvalidRange("No integers between the requested bounds")
        info = np.iinfo(dtype)
        if low < info.min or high - 1 > info.max:
            raise InvalidRange(
                f"Bounds [{low}, {high}) do not fit in {dtype} [{info.min}, {info.max}]"
            )

    arr = Array(shape, ndim=ndim, dtype=dtype)
    if seed is not None:
        log.debug("random: seeding generator with %d for shape %s", seed, arr.shape)
    rng = np.random.default_rng(seed)

    if integral:
        arr.data[:] = rng.integers(low, high, size=arr.totalsize, dtype=dtype)
    else:
        arr.data[:] = rng.uniform(low, high, size=arr.totalsize)
    return arr
