"""
plotting.py
-----------

Line charts of density series over the shared grid.

The only contract: render each named series as a line over the same
x-axis. Figures are never saved here; callers decide what to do with
the returned Axes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

import matplotlib.pyplot as plt
import numpy as np

from betaquap.errors import InvalidParameter

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from betaquap.session.walkthrough import ComparisonResult


def plot_density_series(
    grid,
    series: Mapping[str, object],
    ax: Axes | None = None,
    title: str | None = None,
    xlabel: str = "proportion q",
    ylabel: str = "density",
) -> Axes:
    """
    Plot one or more named density series against the grid.

    Parameters
    ----------
    grid : array-like, shape (N,)
        Shared x-axis.
    series : mapping of str -> array-like, shape (N,)
        Label -> density values. Non-finite values are not drawn.
    ax : matplotlib Axes, optional
        Axes to draw into. A new figure is created when omitted.
    title, xlabel, ylabel : str
        Axis decorations.

    Returns
    -------
    matplotlib.axes.Axes
    """
    if not series:
        raise InvalidParameter("series must contain at least one named density")
    x = np.asarray(grid, dtype=float)
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4))

    for label, values in series.items():
        y = np.asarray(values, dtype=float)
        if y.shape != x.shape:
            raise InvalidParameter(
                f"series {label!r} has shape {y.shape}, grid has shape {x.shape}"
            )
        ax.plot(x, np.where(np.isfinite(y), y, np.nan), label=label)

    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_xlim(x[0], x[-1])
    if title:
        ax.set_title(title)
    ax.legend()
    return ax


def plot_comparison(
    result: ComparisonResult, ax: Axes | None = None, include_prior: bool = True
) -> Axes:
    """
    Plot prior, exact posterior and quadratic approximation of one comparison.

    Parameters
    ----------
    result : ComparisonResult
        Output of run_comparison().
    ax : matplotlib Axes, optional
        Axes to draw into.
    include_prior : bool, default=True
        Draw the prior as well.
    """
    series = {}
    if include_prior:
        series["prior"] = result.prior_density
    series["exact posterior"] = result.posterior_density
    series["quadratic approximation"] = result.approx_density

    obs = result.observation
    title = f"n = {obs.n}, y = {obs.y}"
    return plot_density_series(result.grid, series, ax=ax, title=title)
