"""
laplace.py
----------

Laplace (quadratic) approximation to the Beta posterior.

Approximates the posterior with a Gaussian:
    N(mean = mode, variance = -1 / d2)

where d2 is the second derivative of the log kernel at the mode:

    d2 = -(alpha - 1) / q*^2 - (beta - 1) / (1 - q*)^2

A Taylor expansion of log g around its maximum is quadratic in q, and
exponentiating a quadratic gives a normal density. d2 must be strictly
negative (a genuine maximum), otherwise DegenerateApproximation is raised.

Curvature can be computed analytically (default) or by differentiating
the log kernel twice with jax.grad; both give the same value.
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import Literal

import jax
import jax.numpy as jnp

from betaquap.errors import DegenerateApproximation, InvalidParameter
from betaquap.inference.mode import find_posterior_mode
from betaquap.model.conjugate import PosteriorParameters
from betaquap.model.prior import check_shape_parameters
from betaquap.posterior.laplace_posterior import NormalApproximation
from betaquap.utils.grid import validate_grid
from betaquap.utils.math import beta_log_kernel

logger = logging.getLogger(__name__)

# Gradient * sigma above this means the expansion point is off the maximum
# by more than 1% of a standard deviation.
OFF_MODE_WARNING_THRESHOLD = 1e-2


def log_kernel_gradient(alpha: float, beta: float, q: float) -> float:
    """d/dq log g at q: (alpha - 1) / q - (beta - 1) / (1 - q)."""
    return (alpha - 1.0) / q - (beta - 1.0) / (1.0 - q)


def log_kernel_curvature(alpha: float, beta: float, q: float) -> float:
    """d^2/dq^2 log g at q: -(alpha - 1) / q^2 - (beta - 1) / (1 - q)^2."""
    return -(alpha - 1.0) / q**2 - (beta - 1.0) / (1.0 - q) ** 2


def autodiff_curvature(alpha: float, beta: float, q: float) -> float:
    """Second derivative of the log kernel at q computed with jax.grad."""

    def log_kernel(x):
        return beta_log_kernel(x, alpha, beta)

    return float(jax.grad(jax.grad(log_kernel))(jnp.asarray(q, dtype=jnp.float32)))


class LaplaceApproximation:
    """
    Laplace approximation around the posterior mode.

    Parameters
    ----------
    curvature : {"analytic", "autodiff"}, default="analytic"
        How the second derivative of the log kernel is obtained.

    Methods
    -------
    fit(params, mode=None) -> NormalApproximation
        Construct a Gaussian approximation centred at the mode.
    """

    CURVATURE_METHODS = ("analytic", "autodiff")

    def __init__(self, curvature: Literal["analytic", "autodiff"] = "analytic"):
        if curvature not in self.CURVATURE_METHODS:
            raise InvalidParameter(
                f"curvature must be one of {self.CURVATURE_METHODS}, got {curvature!r}"
            )
        self.curvature = curvature

    def curvature_at(self, alpha: float, beta: float, mode: float) -> float:
        """
        Second derivative of the log kernel at `mode`.

        Raises
        ------
        InvalidParameter
            If alpha or beta is not positive, or mode lies outside (0, 1).
        """
        check_shape_parameters(alpha, beta)
        mode = float(mode)
        if not 0.0 < mode < 1.0:
            raise InvalidParameter(
                f"mode must lie in the open interval (0, 1), got {mode}"
            )
        alpha, beta = float(alpha), float(beta)
        if self.curvature == "autodiff":
            return autodiff_curvature(alpha, beta, mode)
        return log_kernel_curvature(alpha, beta, mode)

    def approximate(
        self, alpha: float, beta: float, mode: float
    ) -> NormalApproximation:
        """
        Normal approximation N(mode, -1 / d2) for Beta(alpha, beta).

        Parameters
        ----------
        alpha, beta : float
            Posterior shape parameters.
        mode : float
            Expansion point, normally the posterior mode.

        Returns
        -------
        NormalApproximation

        Raises
        ------
        InvalidParameter
            If inputs are out of range.
        DegenerateApproximation
            If d2 >= 0 or is not finite.
        """
        d2 = self.curvature_at(alpha, beta, mode)
        if not (math.isfinite(d2) and d2 < 0.0):
            raise DegenerateApproximation(
                f"log-kernel curvature at q={mode} is {d2}; a maximum needs d2 < 0"
            )
        variance = -1.0 / d2
        sigma = math.sqrt(variance)

        grad = log_kernel_gradient(float(alpha), float(beta), float(mode))
        if abs(grad) * sigma > OFF_MODE_WARNING_THRESHOLD:
            warnings.warn(
                f"q={mode} is not the kernel maximum (d log g / dq = {grad:.4g}); "
                "the quadratic approximation is centred off the mode",
                RuntimeWarning,
                stacklevel=2,
            )
        logger.debug(
            "laplace (%s): alpha=%s beta=%s mode=%.8f d2=%.6g sigma=%.6g",
            self.curvature,
            alpha,
            beta,
            mode,
            d2,
            sigma,
        )
        return NormalApproximation(mean=float(mode), sigma=sigma, curvature=d2)

    def fit(
        self,
        params: PosteriorParameters,
        mode: float | None = None,
        *,
        mode_method: str = "closed_form",
    ) -> NormalApproximation:
        """
        Approximate the posterior described by `params`.

        Parameters
        ----------
        params : PosteriorParameters
            Exact posterior shape parameters.
        mode : float | None, optional
            Posterior mode. Located with `mode_method` when omitted.
        mode_method : str, default="closed_form"
            Registry key passed to find_posterior_mode().

        Returns
        -------
        NormalApproximation
        """
        if mode is None:
            mode = find_posterior_mode(params.alpha, params.beta, method=mode_method)
        return self.approximate(params.alpha, params.beta, mode)


def build_quadratic_approximation(
    alpha: float,
    beta: float,
    mode: float,
    grid: jnp.ndarray,
    *,
    curvature: Literal["analytic", "autodiff"] = "analytic",
) -> tuple[float, jnp.ndarray]:
    """
    Quadratic approximation of Beta(alpha, beta) evaluated over a grid.

    Parameters
    ----------
    alpha, beta : float
        Posterior shape parameters.
    mode : float
        Posterior mode q* in (0, 1).
    grid : jnp.ndarray, shape (N,)
        Shared evaluation grid.
    curvature : {"analytic", "autodiff"}, default="analytic"
        How d2 is computed.

    Returns
    -------
    sigma : float
        Standard deviation sqrt(-1 / d2).
    series : jnp.ndarray, shape (N,)
        N(q*, sigma^2) density at each grid point.

    Raises
    ------
    InvalidParameter
        If alpha/beta are not positive, mode is outside (0, 1), or the grid
        leaves [0, 1].
    DegenerateApproximation
        If d2 >= 0.

    Examples
    --------
    >>> grid = probability_grid()
    >>> sigma, series = build_quadratic_approximation(21, 11, 2 / 3, grid)
    >>> round(sigma, 4)
    0.0861
    """
    grid = validate_grid(grid)
    approx = LaplaceApproximation(curvature=curvature).approximate(alpha, beta, mode)
    return approx.sigma, approx.pdf(grid)
