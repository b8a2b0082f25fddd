"""
math.py
-------

Math utilities for betaquap.

Includes:
- log_beta_function : log B(alpha, beta) via gammaln.
- beta_log_kernel   : unnormalized log density (alpha-1) log q + (beta-1) log(1-q).
- beta_log_pdf      : normalized Beta log density.
- normal_log_pdf    : Gaussian log density.
- trapezoid         : trapezoidal integral of a series over a grid.

All functions use JAX (jax.numpy) for compatibility with autodiff.

Notes
-----
- Log densities are computed with xlogy / xlog1py, so the grid endpoints
  0 and 1 evaluate to the correct limits (0, finite, or +inf) instead of nan.

Examples
--------
>>> import jax.numpy as jnp
>>> from betaquap.utils import math
>>> x = jnp.linspace(0, 1, 5)
>>> jnp.exp(math.beta_log_pdf(x, 1.0, 1.0))
Array([1., 1., 1., 1., 1.], dtype=float64)
"""

from __future__ import annotations

import jax.numpy as jnp
from jax.scipy.special import gammaln, xlog1py, xlogy

LOG_SQRT_2PI = 0.5 * jnp.log(2.0 * jnp.pi)


def log_beta_function(alpha, beta) -> jnp.ndarray:
    """
    Log of the Beta function.

    Parameters
    ----------
    alpha, beta : float
        Positive shape parameters.

    Returns
    -------
    jnp.ndarray
        log B(alpha, beta)
        = log Gamma(alpha) + log Gamma(beta) - log Gamma(alpha + beta).
    """
    return gammaln(alpha) + gammaln(beta) - gammaln(alpha + beta)


def beta_log_kernel(q: jnp.ndarray, alpha, beta) -> jnp.ndarray:
    """
    Unnormalized Beta log density.

    Parameters
    ----------
    q : jnp.ndarray
        Points in [0, 1].
    alpha, beta : float
        Shape parameters.

    Returns
    -------
    jnp.ndarray
        (alpha - 1) log q + (beta - 1) log(1 - q), same shape as q.
    """
    return xlogy(alpha - 1.0, q) + xlog1py(beta - 1.0, -q)


def beta_log_pdf(q: jnp.ndarray, alpha, beta) -> jnp.ndarray:
    """Normalized Beta(alpha, beta) log density at q."""
    return beta_log_kernel(q, alpha, beta) - log_beta_function(alpha, beta)


def normal_log_pdf(x: jnp.ndarray, mean, sigma) -> jnp.ndarray:
    """
    Gaussian log density.

    Parameters
    ----------
    x : jnp.ndarray
        Evaluation points.
    mean : float
        Mean of the normal.
    sigma : float
        Standard deviation (> 0).

    Returns
    -------
    jnp.ndarray
        log N(x | mean, sigma^2).
    """
    z = (x - mean) / sigma
    return -0.5 * z**2 - jnp.log(sigma) - LOG_SQRT_2PI


def trapezoid(y: jnp.ndarray, x: jnp.ndarray) -> jnp.ndarray:
    """
    Trapezoidal integral of y over x.

    Parameters
    ----------
    y : jnp.ndarray, shape (N,)
        Series values aligned with x.
    x : jnp.ndarray, shape (N,)
        Ordered evaluation points.

    Returns
    -------
    jnp.ndarray
        Scalar integral estimate.
    """
    return jnp.sum(0.5 * (y[1:] + y[:-1]) * jnp.diff(x))
