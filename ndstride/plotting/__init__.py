"""Plotly views of arrays."""

from ndstride.plotting.core import plot_array, plot_batch

__all__ = [
    "plot_array",
    "plot_batch",
]
