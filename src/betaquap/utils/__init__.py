"""
utils
=====

Shared utility functions and helpers for betaquap.

This subpackage provides:
- grid : the shared probability grid every density is evaluated on.
- math : log Beta function, Beta / normal log densities, trapezoid rule.
- plotting : line charts of named density series (matplotlib).
- rng : random number handling for reproducibility.
"""

from .grid import DEFAULT_STEP, probability_grid, validate_grid
from .math import (
    beta_log_kernel,
    beta_log_pdf,
    log_beta_function,
    normal_log_pdf,
    trapezoid,
)
from .plotting import plot_comparison, plot_density_series
from .rng import ensure_key, seed, split

__all__ = [
    # grid
    "DEFAULT_STEP",
    "probability_grid",
    "validate_grid",
    # math
    "log_beta_function",
    "beta_log_kernel",
    "beta_log_pdf",
    "normal_log_pdf",
    "trapezoid",
    # plotting
    "plot_density_series",
    "plot_comparison",
    # rng
    "seed",
    "split",
    "ensure_key",
]
