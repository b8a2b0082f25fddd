"""
beta_posterior.py
-----------------

Exact Beta posterior and the parameter-agnostic Beta density evaluator.

evaluate_beta_density() is used identically for the prior and for the
exact posterior:

    f(x) = x^(alpha-1) (1-x)^(beta-1) / B(alpha, beta)

Boundary points take the limit value: 0 when the exponent is positive,
+inf when alpha < 1 (at x = 0) or beta < 1 (at x = 1). Callers plotting
such priors should use an open grid (probability_grid(include_endpoints=False)).
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
import jax.random as jr

from betaquap.model.conjugate import PosteriorParameters
from betaquap.model.prior import check_shape_parameters
from betaquap.posterior.base_posterior import BasePosterior
from betaquap.utils.grid import validate_grid
from betaquap.utils.math import beta_log_kernel, beta_log_pdf


def evaluate_beta_density(alpha, beta, grid: jnp.ndarray) -> jnp.ndarray:
    """
    Beta probability density over a grid.

    Parameters
    ----------
    alpha, beta : float
        Positive shape parameters.
    grid : jnp.ndarray, shape (N,)
        Points in [0, 1].

    Returns
    -------
    jnp.ndarray, shape (N,)
        Density values (non-negative, possibly +inf at a boundary when a
        shape parameter is below 1).

    Raises
    ------
    InvalidParameter
        If alpha or beta is not positive, or the grid leaves [0, 1].

    Notes
    -----
    Evaluated in float64: at large alpha + beta the log kernel and log B
    are large and nearly equal, and float32 loses the normalization.
    """
    check_shape_parameters(alpha, beta)
    grid = validate_grid(grid).astype(jnp.float64)
    return jnp.exp(beta_log_pdf(grid, float(alpha), float(beta)))


class BetaPosterior(BasePosterior):
    """
    Exact conjugate posterior Beta(alpha, beta).

    Parameters
    ----------
    alpha, beta : float
        Positive shape parameters.

    Notes
    -----
    Build one from a conjugate update with BetaPosterior.from_parameters().
    """

    def __init__(self, alpha: float, beta: float):
        check_shape_parameters(alpha, beta)
        self._alpha = float(alpha)
        self._beta = float(beta)

    @classmethod
    def from_parameters(cls, params: PosteriorParameters) -> BetaPosterior:
        return cls(params.alpha, params.beta)

    def __repr__(self) -> str:
        return f"BetaPosterior(alpha={self._alpha}, beta={self._beta})"

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def beta(self) -> float:
        return self._beta

    @property
    def parameters(self) -> PosteriorParameters:
        return PosteriorParameters(self._alpha, self._beta)

    # ------------------------------------------------------------------
    # SUMMARIES
    # ------------------------------------------------------------------
    @property
    def mean(self) -> float:
        """E[q] = alpha / (alpha + beta)."""
        return self._alpha / (self._alpha + self._beta)

    @property
    def variance(self) -> float:
        """Var[q] = alpha beta / ((alpha + beta)^2 (alpha + beta + 1))."""
        a, b = self._alpha, self._beta
        return (a * b) / ((a + b) ** 2 * (a + b + 1.0))

    @property
    def mode(self) -> float:
        """
        Posterior mode (closed form).

        Raises
        ------
        NoInteriorMode
            If alpha <= 1 or beta <= 1.
        """
        from betaquap.inference.mode import find_posterior_mode

        return find_posterior_mode(self._alpha, self._beta)

    # ------------------------------------------------------------------
    # DENSITY
    # ------------------------------------------------------------------
    def log_kernel(self, q: jnp.ndarray) -> jnp.ndarray:
        """Unnormalized log density (alpha-1) log q + (beta-1) log(1-q)."""
        return beta_log_kernel(jnp.asarray(q), self._alpha, self._beta)

    def kernel(self, q: jnp.ndarray) -> jnp.ndarray:
        """Unnormalized density q^(alpha-1) (1-q)^(beta-1)."""
        return jnp.exp(self.log_kernel(q))

    def log_prob(self, q: jnp.ndarray) -> jnp.ndarray:
        q = jnp.asarray(q)
        inside = (q >= 0.0) & (q <= 1.0)
        return jnp.where(inside, beta_log_pdf(q, self._alpha, self._beta), -jnp.inf)

    def pdf(self, grid: jnp.ndarray) -> jnp.ndarray:
        return evaluate_beta_density(self._alpha, self._beta, grid)

    # ------------------------------------------------------------------
    # SAMPLING
    # ------------------------------------------------------------------
    def sample(self, n: int, *, key: jax.Array) -> jnp.ndarray:
        """Draw n samples with jax.random.beta."""
        return jr.beta(key, self._alpha, self._beta, shape=(n,))
