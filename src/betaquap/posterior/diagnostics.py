"""
diagnostics.py
--------------

Exact-versus-approximate density diagnostics.

Provides functions to check how well the quadratic approximation tracks
the exact posterior over the shared grid.

- density_discrepancy : absolute and integrated differences, mass in [0, 1].
- log_density_gap     : pointwise |log exact - log approx|.

The normal approximation puts some mass outside [0, 1] and is symmetric,
so it is closest near the mode and degrades towards the boundaries;
the log gap makes that visible where both densities are tiny.
"""

from __future__ import annotations

import jax.numpy as jnp

from betaquap.errors import InvalidParameter
from betaquap.utils.math import trapezoid


def density_discrepancy(
    grid: jnp.ndarray,
    exact: jnp.ndarray,
    approx: jnp.ndarray,
    center: float | None = None,
    window: float = 0.05,
) -> dict[str, float]:
    """
    Summarize the difference between two density series on a grid.

    Parameters
    ----------
    grid : jnp.ndarray, shape (N,)
        Shared evaluation grid.
    exact, approx : jnp.ndarray, shape (N,)
        Density series aligned with the grid.
    center : float | None, optional
        Point around which `max_abs_near_center` is measured
        (usually the posterior mode). Defaults to the argmax of `exact`.
    window : float, default=0.05
        Half-width of the neighbourhood around `center`.

    Returns
    -------
    dict
        - max_abs             : max |exact - approx| over finite grid points
        - max_abs_near_center : same, restricted to |x - center| <= window
        - l1                  : trapezoidal integral of |exact - approx|
        - exact_mass          : trapezoidal integral of exact
        - approx_mass         : trapezoidal integral of approx

    Raises
    ------
    InvalidParameter
        If the grid has fewer than 2 points, the series are not aligned
        with it, or window <= 0.
    """
    grid = jnp.asarray(grid)
    exact = jnp.asarray(exact)
    approx = jnp.asarray(approx)
    if exact.shape != grid.shape or approx.shape != grid.shape:
        raise InvalidParameter(
            f"series must align with the grid: grid {grid.shape}, "
            f"exact {exact.shape}, approx {approx.shape}"
        )
    if grid.ndim != 1 or grid.shape[0] < 2:
        raise InvalidParameter(
            f"grid must be 1-D with at least 2 points, got shape {grid.shape}"
        )
    if window <= 0:
        raise InvalidParameter(f"window must be positive, got {window}")

    # boundary singularities (alpha < 1 or beta < 1) are left out
    finite = jnp.isfinite(exact) & jnp.isfinite(approx)
    diff = jnp.where(finite, jnp.abs(exact - approx), 0.0)

    if center is None:
        center = float(grid[jnp.argmax(jnp.where(finite, exact, -jnp.inf))])
    near = jnp.abs(grid - center) <= window

    return {
        "max_abs": float(jnp.max(diff)),
        "max_abs_near_center": float(jnp.max(jnp.where(near, diff, 0.0))),
        "l1": float(trapezoid(diff, grid)),
        "exact_mass": float(trapezoid(jnp.where(finite, exact, 0.0), grid)),
        "approx_mass": float(trapezoid(approx, grid)),
    }


def log_density_gap(exact: jnp.ndarray, approx: jnp.ndarray) -> jnp.ndarray:
    """
    Pointwise absolute difference of log densities.

    Parameters
    ----------
    exact, approx : jnp.ndarray
        Density values at the same points.

    Returns
    -------
    jnp.ndarray
        |log exact - log approx|; +inf where exactly one of them is 0,
        nan where both are.
    """
    return jnp.abs(jnp.log(jnp.asarray(exact)) - jnp.log(jnp.asarray(approx)))
