"""
Core plotting functions using Plotly.

Interactive views of array contents.
"""

import plotly.graph_objects as go
from plotly.subplots import make_subplots
from typing import Optional

from ndstride.utils.config import Config


def _apply_layout(fig: go.Figure, title: str) -> None:
    fig.update_layout(
        title=title,
        template=Config.get("plotting.theme", "plotly_dark"),
        width=Config.get("plotting.width", 800),
        height=Config.get("plotting.height", 600),
    )


def plot_array(arr, title: Optional[str] = None) -> go.Figure:
    """
    Plot a 1-D array as a line or a 2-D array as a heatmap.

    Parameters
    ----------
    arr : Array
        Array to plot (read only)
    title : str, optional
        Figure title (defaults to the array's shape)

    Returns
    -------
    go.Figure
        Plotly figure
    """
    values = arr.to_numpy()

    if arr.ndim == 1:
        fig = go.Figure(data=go.Scatter(
            y=values,
            mode='lines+markers',
            name='value',
            line=dict(color='#00D9FF', width=2),
        ))
        fig.update_xaxes(title_text='Index')
        fig.update_yaxes(title_text='Value')
    elif arr.ndim == 2:
        fig = go.Figure(data=go.Heatmap(
            z=values,
            colorscale='Viridis',
            hovertemplate='row: %{y}<br>col: %{x}<br>value: %{z}<extra></extra>',
        ))
        # Row 0 at the top, as the array is printed
        fig.update_yaxes(autorange='reversed', title_text='Row')
        fig.update_xaxes(title_text='Column')
    else:
        raise ValueError(f"Unsupported ndim: {arr.ndim}, use plot_batch for stacked matrices")

    _apply_layout(fig, title or f'Array {arr.shape}')
    return fig


def plot_batch(arr, title: Optional[str] = None) -> go.Figure:
    """
    Plot a 3-D array as one heatmap per leading index.

    Parameters
    ----------
    arr : Array
        Stack of matrices, shape (batch, rows, cols)
    title : str, optional
        Figure title

    Returns
    -------
    go.Figure
        Plotly figure with ``batch`` subplots side by side
    """
    if arr.ndim != 3:
        raise ValueError(f"Expected 3D array, got {arr.ndim}D")

    values = arr.to_numpy()
    n_batch = arr.shape[0]
    fig = make_subplots(
        rows=1,
        cols=n_batch,
        subplot_titles=[f'[{b}]' for b in range(n_batch)],
    )
    zmin, zmax = float(values.min()), float(values.max())
    for b in range(n_batch):
        fig.add_trace(
            go.Heatmap(
                z=values[b],
                zmin=zmin,
                zmax=zmax,
                colorscale='Viridis',
                showscale=(b == n_batch - 1),
            ),
            row=1, col=b + 1,
        )
        fig.update_yaxes(autorange='reversed', row=1, col=b + 1)

    _apply_layout(fig, title or f'Array {arr.shape}')
    return fig
