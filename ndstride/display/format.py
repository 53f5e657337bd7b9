"""Plain-text rendering of array contents and layout."""

import numpy as np
from typing import List, Optional

from ndstride.utils.config import Config


def _format_value(value, precision: int) -> str:
    return f"{value:.{precision}f}"


def _format_block(values: np.ndarray, precision: int) -> List[str]:
    # Innermost axis is one line; outer axes stack their sub-blocks and
    # separate them with one blank line per remaining level of nesting.
    if values.ndim == 1:
        return [" ".join(_format_value(v, precision) for v in values)]

    lines: List[str] = []
    for i, sub in enumerate(values):
        if i > 0 and values.ndim > 2:
            lines.extend([""] * (values.ndim - 2))
        lines.extend(_format_block(sub, precision))
    return lines


def format_array(arr, precision: Optional[int] = None) -> str:
    """
    Render array contents, one innermost row per line.

    Parameters
    ----------
    arr : Array
        Array to render (read only)
    precision : int, optional
        Digits after the decimal point (default: ``Config`` ``display.precision``)

    Returns
    -------
    str

    Examples
    --------
    >>> print(format_array(asarray([[1.0, 2.0], [3.0, 4.0]])))
    1.000 2.000
    3.000 4.000
    """
    if precision is None:
        precision = Config.get("display.precision", 3)
    return "\n".join(_format_block(arr.to_numpy(), precision))


def format_info(arr) -> str:
    """Shape, strides and contiguity flags, one per line."""
    return "\n".join([
        f"Shape: {list(arr.shape)}",
        f"Strides: {list(arr.strides)}",
        f"Array is C-contiguous? {arr.c_order}",
        f"Array is F-contiguous? {arr.f_order}",
    ])
