"""
grid.py
-------

Evaluation grids over the probability interval.

Definition
----------
A grid is the ordered set of probability values at which every density
series (prior, exact posterior, quadratic approximation) is evaluated.
It is built once and shared read-only, so all series stay aligned 1:1.

MVP implementation
------------------
- Fixed step between `lower` and `upper` (default: 0, 0.001, ..., 1).
- Optional removal of the exact endpoints 0 and 1, for priors with
  alpha < 1 or beta < 1 whose density diverges at the boundary.
"""

from __future__ import annotations

import jax.numpy as jnp

from betaquap.errors import InvalidParameter

DEFAULT_STEP = 0.001


def probability_grid(
    step: float = DEFAULT_STEP,
    lower: float = 0.0,
    upper: float = 1.0,
    *,
    include_endpoints: bool = True,
) -> jnp.ndarray:
    """
    Build an evenly spaced grid on [lower, upper].

    Parameters
    ----------
    step : float, default=0.001
        Spacing between consecutive points. (upper - lower) / step is rounded
        to the nearest integer number of intervals.
    lower, upper : float
        Grid bounds, 0 <= lower < upper <= 1.
    include_endpoints : bool, default=True
        When False, drop the first and last point (open interval).

    Returns
    -------
    jnp.ndarray, shape (N,)
        Grid points.

    Raises
    ------
    InvalidParameter
        If the bounds lie outside [0, 1], the step is not positive, or
        fewer than 2 points remain after dropping the endpoints.
    """
    if not 0.0 <= lower < upper <= 1.0:
        raise InvalidParameter(
            f"grid bounds must satisfy 0 <= lower < upper <= 1, got ({lower}, {upper})"
        )
    if step <= 0 or step > upper - lower:
        raise InvalidParameter(f"step must lie in (0, upper - lower], got {step}")

    # linspace avoids the drift of accumulating a float step with arange
    num_intervals = int(round((upper - lower) / step))
    grid = jnp.linspace(lower, upper, num_intervals + 1)
    if not include_endpoints:
        grid = grid[1:-1]
    if grid.shape[0] < 2:
        raise InvalidParameter(
            f"step {step} leaves {grid.shape[0]} grid point(s); at least 2 are needed"
        )
    return grid


def validate_grid(grid: jnp.ndarray) -> jnp.ndarray:
    """
    Check that a grid is 1-D and lies inside [0, 1].

    Returns the grid as a jnp.ndarray.
    """
    grid = jnp.asarray(grid)
    if grid.ndim != 1:
        raise InvalidParameter(f"grid must be 1-D (shape (N,)), got shape {grid.shape}")
    if grid.size and (bool(jnp.any(grid < 0.0)) or bool(jnp.any(grid > 1.0))):
        raise InvalidParameter("grid points must lie in [0, 1]")
    return grid
