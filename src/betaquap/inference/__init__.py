"""
inference
=========

Mode finding and quadratic approximation for the Beta posterior.

This subpackage provides the two numeric steps of the walkthrough:
locating the posterior mode, and building the normal approximation from
the log-kernel curvature at that mode.

Implementations
---------------
- ClosedFormModeFinder : (alpha - 1) / (alpha + beta - 2).
- BoundedScalarModeFinder : bounded Brent search with SciPy.
- MAPOptimizer : gradient ascent with Optax optimizers.
- LaplaceApproximation : N(mode, -1 / d2), analytic or autodiff curvature.
"""

from .base import ModeFinder, ModeResult
from .laplace import LaplaceApproximation, build_quadratic_approximation
from .map_optimizer import MAPOptimizer
from .mode import (
    MODE_FINDERS,
    BoundedScalarModeFinder,
    ClosedFormModeFinder,
    find_posterior_mode,
    get_mode_finder,
)

__all__ = [
    "ModeFinder",
    "ModeResult",
    "ClosedFormModeFinder",
    "BoundedScalarModeFinder",
    "MAPOptimizer",
    "MODE_FINDERS",
    "get_mode_finder",
    "find_posterior_mode",
    "LaplaceApproximation",
    "build_quadratic_approximation",
]
