"""
posterior
=========

Posterior representations and diagnostics.

This subpackage provides:
- BasePosterior: common interface (mean, variance, log_prob, pdf, sample)
- BetaPosterior: exact conjugate posterior Beta(alpha, beta)
- NormalApproximation: quadratic (Laplace) approximation N(mode, sigma^2)
- evaluate_beta_density: Beta density over a grid (prior or posterior)
- diagnostics: exact-vs-approximate discrepancy summaries
"""

from .base_posterior import BasePosterior
from .beta_posterior import BetaPosterior, evaluate_beta_density
from .diagnostics import density_discrepancy, log_density_gap
from .laplace_posterior import NormalApproximation

__all__ = [
    # Core interface
    "BasePosterior",
    # Implementations
    "BetaPosterior",
    "NormalApproximation",
    # Density evaluation
    "evaluate_beta_density",
    # Diagnostics
    "density_discrepancy",
    "log_density_gap",
]
