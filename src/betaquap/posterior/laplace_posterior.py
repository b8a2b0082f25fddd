"""
laplace_posterior.py
--------------------

Gaussian (quadratic / Laplace) approximation to a one-dimensional posterior.

    N(mean = mode, variance = -1 / d2)

where d2 is the second derivative of the log kernel at the mode. Built by
betaquap.inference.laplace.LaplaceApproximation.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
import jax.random as jr
from jax.scipy.special import ndtri

from betaquap.errors import InvalidParameter
from betaquap.posterior.base_posterior import BasePosterior
from betaquap.utils.math import normal_log_pdf


class NormalApproximation(BasePosterior):
    """
    Normal approximation N(mean, sigma^2).

    Parameters
    ----------
    mean : float
        Posterior mode the approximation is centred on.
    sigma : float
        Standard deviation, sqrt(-1 / curvature).
    curvature : float
        Second derivative of the log kernel at the mode (strictly negative).
    """

    def __init__(self, mean: float, sigma: float, curvature: float):
        if not sigma > 0.0:
            raise InvalidParameter(f"sigma must be positive, got {sigma}")
        self._mean = float(mean)
        self._sigma = float(sigma)
        self._curvature = float(curvature)

    def __repr__(self) -> str:
        return (
            f"NormalApproximation(mean={self._mean}, sigma={self._sigma}, "
            f"curvature={self._curvature})"
        )

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def sigma(self) -> float:
        return self._sigma

    @property
    def curvature(self) -> float:
        return self._curvature

    @property
    def variance(self) -> float:
        return self._sigma**2

    @property
    def std(self) -> float:
        return self._sigma

    def log_prob(self, q: jnp.ndarray) -> jnp.ndarray:
        return normal_log_pdf(jnp.asarray(q), self._mean, self._sigma)

    def sample(self, n: int, *, key: jax.Array) -> jnp.ndarray:
        """Draw n samples from N(mean, sigma^2). Samples may fall outside [0, 1]."""
        return self._mean + self._sigma * jr.normal(key, shape=(n,))

    def interval(self, level: float = 0.89) -> tuple[float, float]:
        """
        Central credible interval of the approximation.

        Parameters
        ----------
        level : float, default=0.89
            Probability mass inside the interval, in (0, 1).

        Returns
        -------
        tuple of float
            (lower, upper) = mean -/+ z * sigma. Not clipped to [0, 1].
        """
        if not 0.0 < level < 1.0:
            raise InvalidParameter(f"level must lie in (0, 1), got {level}")
        z = float(ndtri(0.5 + level / 2.0))
        return self.mean - z * self.sigma, self.mean + z * self.sigma
