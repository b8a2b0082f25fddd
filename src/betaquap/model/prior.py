"""
prior.py
--------

Beta prior over a binomial success probability.

Connections
-----------
- compute_posterior_parameters() combines a PriorParameters with an
  Observation into PosteriorParameters (conjugate update).
- PriorParameters.density(grid) gives the prior DensitySeries plotted next
  to the exact posterior and its quadratic approximation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import jax.numpy as jnp

from betaquap.errors import InvalidParameter


def check_shape_parameters(alpha, beta, *, names: tuple[str, str] = ("alpha", "beta")):
    """
    Raise InvalidParameter unless both shape parameters are finite and > 0.

    Parameters
    ----------
    alpha, beta : float
        Beta shape parameters.
    names : tuple of str
        Names used in the error message.
    """
    for name, value in zip(names, (alpha, beta)):
        if isinstance(value, (str, bytes, bool)):
            raise InvalidParameter(f"{name} must be a real number, got {value!r}")
        try:
            value = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidParameter(
                f"{name} must be a real number, got {value!r}"
            ) from exc
        if not math.isfinite(value) or value <= 0.0:
            raise InvalidParameter(f"{name} must be positive and finite, got {value}")


@dataclass(frozen=True)
class PriorParameters:
    """
    Beta(a, b) prior.

    Parameters
    ----------
    a : float
        First shape parameter (pseudo-successes), > 0.
    b : float
        Second shape parameter (pseudo-failures), > 0.
    """

    a: float = 1.0
    b: float = 1.0

    def __post_init__(self):
        """Validate shape parameters."""
        check_shape_parameters(self.a, self.b, names=("a", "b"))

    @classmethod
    def uniform(cls) -> PriorParameters:
        """Flat prior Beta(1, 1)."""
        return cls(a=1.0, b=1.0)

    def density(self, grid: jnp.ndarray) -> jnp.ndarray:
        """
        Prior density over a grid.

        Parameters
        ----------
        grid : jnp.ndarray, shape (N,)
            Points in [0, 1].

        Returns
        -------
        jnp.ndarray, shape (N,)
            Beta(a, b) density at each grid point.
        """
        from betaquap.posterior.beta_posterior import evaluate_beta_density

        return evaluate_beta_density(self.a, self.b, grid)
