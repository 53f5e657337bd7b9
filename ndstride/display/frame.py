"""
Export of 1-D and 2-D arrays to labelled pandas objects.

Rows and columns default to ``pd.RangeIndex`` labels when none are given.
"""

import pandas as pd
from typing import Optional, Union


def to_frame(
    arr,
    index: Optional[pd.Index] = None,
    columns: Optional[pd.Index] = None,
) -> Union[pd.Series, pd.DataFrame]:
    """
    Convert an array to a Series (1-D) or DataFrame (2-D).

    Parameters
    ----------
    arr : Array
        Source array (values are copied)
    index : pd.Index, optional
        Row labels
    columns : pd.Index, optional
        Column labels (2-D only)

    Returns
    -------
    pd.Series or pd.DataFrame
        Wrapped data with index and columns

    Examples
    --------
    >>> to_frame(asarray([[1, 2, 3], [4, 5, 6]]), columns=['a', 'b', 'c']).shape
    (2, 3)
    """
    values = arr.to_numpy()

    if index is None:
        index = pd.RangeIndex(arr.shape[0])

    if arr.ndim == 1:
        if columns is not None:
            raise ValueError("columns are only supported for 2-D arrays")
        return pd.Series(values, index=index)
    elif arr.ndim == 2:
        if columns is None:
            columns = pd.RangeIndex(arr.shape[1])
        return pd.DataFrame(values, index=index, columns=columns)
    else:
        raise ValueError(f"Unsupported ndim: {arr.ndim}")
