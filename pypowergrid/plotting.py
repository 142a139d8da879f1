import math
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgba
from pypowergrid.Interconnection import Interconnection
from typing import Any, Optional
from matplotlib.axes import Axes
import numpy as np
import plotly.graph_objects as go


def grid_layout(
    interconnection: Interconnection,
    radius: float = 1.0,
    spacing: float = 3.0,
) -> np.ndarray:
    """
    Compute 2D positions for every station, one circle per grid.

    Grids are placed on a square lattice in grid-index order; within a grid,
    stations are spread evenly around a circle in ascending id order.

    Parameters
    ----------
    interconnection : Interconnection
        The interconnection to lay out.
    radius : float, optional
        Radius of each grid's circle, by default 1.0.
    spacing : float, optional
        Distance between neighbouring grid centres, by default 3.0.

    Returns
    -------
    np.ndarray
        Array of shape (station_count + 1, 2); row ``i`` is the position of
        station ``i`` and row 0 is NaN.
    """

    positions = np.full((len(interconnection) + 1, 2), np.nan)
    columns = max(1, math.ceil(math.sqrt(interconnection.num_grids)))
    for grid in interconnection.grids:
        row, col = divmod(grid.index, columns)
        center = np.array([col * spacing, -row * spacing])
        members = grid.members
        if len(members) == 1:
            positions[members[0]] = center
            continue
        angles = np.linspace(0, 2 * np.pi, len(members), endpoint=False)
        positions[members] = center + radius * np.column_stack(
            [np.cos(angles), np.sin(angles)]
        )
    return positions


def plot_interconnection(
    interconnection: Interconnection,
    title: str = "Power Grid Interconnection",
    fig: Optional[go.Figure] = None,
    ax: Optional[Axes] = None,
    marker_size: float = 8,
    offline_color: Any = "lightgrey",
    line_width: float = 1.0,
    line_color: Any = "grey",
    show_labels: bool = True,
):
    """
    Visualize an interconnection's grids using either Matplotlib or Plotly.

    Online stations are filled with their grid's colour, offline stations are
    drawn in ``offline_color``.

    Parameters
    ----------
    interconnection : Interconnection
        The interconnection to draw.
    title : str, optional
        Title of the plot. Default is "Power Grid Interconnection".
    fig : plotly.graph_objects.Figure, optional
        A Plotly figure to add to. If None and ``ax`` is None, a new figure is
        created.
    ax : matplotlib.axes.Axes, optional
        A Matplotlib axis to plot on. If provided, Matplotlib is used.
    marker_size : float, optional
        Size of the station markers. Default is 8.
    offline_color : Any, optional
        Colour of offline stations. Default is "lightgrey".
    line_width : float, optional
        Width of connection lines. Default is 1.0.
    line_color : Any, optional
        Colour of connection lines. Default is "grey".
    show_labels : bool, optional
        Whether to annotate stations with their ids. Default is True.

    Returns
    -------
    plotly.graph_objects.Figure or matplotlib.axes.Axes
        The figure or axis object used for plotting.
    """

    positions = grid_layout(interconnection)
    labels = interconnection.grid_labels()
    online = interconnection.pool.online
    ids = np.arange(1, len(interconnection) + 1)

    if ax is not None:
        ax.set_title(title)
        ax.set_aspect("equal")
        ax.axis("off")
        cmap = plt.get_cmap("tab10")

        for u, v in interconnection.connections:
            ax.plot(
                positions[[u, v], 0],
                positions[[u, v], 1],
                linestyle="-",
                color=line_color,
                linewidth=line_width,
                zorder=1,
            )

        colors = [
            cmap(labels[i] % cmap.N) if online[i] else to_rgba(offline_color)
            for i in ids
        ]
        ax.scatter(
            positions[ids, 0],
            positions[ids, 1],
            c=colors,
            s=marker_size**2,
            edgecolors="k",
            zorder=2,
        )
        if show_labels:
            for i in ids:
                ax.annotate(
                    str(i),
                    positions[i],
                    ha="center",
                    va="center",
                    fontsize=marker_size,
                    zorder=3,
                )
        return ax

    return _plot_interconnection_plotly(
        interconnection, positions, title, fig,
        marker_size, offline_color, line_width, line_color, show_labels
    )


def _plot_interconnection_plotly(
    interconnection: Interconnection,
    positions: np.ndarray,
    title: str,
    fig: Optional[go.Figure],
    marker_size: float,
    offline_color: Any,
    line_width: float,
    line_color: Any,
    show_labels: bool,
):
    """
    Internal helper to render an interconnection using Plotly.

    Returns
    -------
    plotly.graph_objects.Figure
        The updated or newly created Plotly figure.
    """

    if fig is None:
        fig = go.Figure()

    edges = interconnection.connections
    if len(edges):
        # None breaks the line between consecutive connections
        xs = np.column_stack(
            [positions[edges[:, 0], 0], positions[edges[:, 1], 0],
             np.full(len(edges), None)]
        ).ravel()
        ys = np.column_stack(
            [positions[edges[:, 0], 1], positions[edges[:, 1], 1],
             np.full(len(edges), None)]
        ).ravel()
        fig.add_trace(go.Scatter(
            x=xs, y=ys,
            mode='lines',
            line=dict(color=line_color, width=line_width),
            hoverinfo='skip',
            showlegend=False
        ))

    online = interconnection.pool.online
    mode = 'markers+text' if show_labels else 'markers'
    for grid in interconnection.grids:
        members = grid.members
        active = members[online[members]]
        fig.add_trace(go.Scatter(
            x=positions[active, 0], y=positions[active, 1],
            mode=mode,
            text=[str(i) for i in active],
            textposition='top center',
            marker=dict(size=marker_size),
            name=f'Grid {grid.index}'
        ))

    offline = np.flatnonzero(~online[1:]) + 1
    if len(offline):
        fig.add_trace(go.Scatter(
            x=positions[offline, 0], y=positions[offline, 1],
            mode=mode,
            text=[str(i) for i in offline],
            textposition='top center',
            marker=dict(size=marker_size, color=offline_color,
                        line=dict(color='black', width=1)),
            name='Offline'
        ))

    fig.update_layout(
        title=title,
        xaxis=dict(showgrid=False, zeroline=False, visible=False),
        yaxis=dict(showgrid=False, zeroline=False, visible=False,
                   scaleanchor='x'),
        margin=dict(l=0, r=0, b=0, t=30)
    )
    return fig
