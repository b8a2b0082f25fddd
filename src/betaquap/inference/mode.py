"""
mode.py
-------

Posterior mode of a Beta kernel.

General contract: maximize g(q) = q^(alpha-1) (1-q)^(beta-1) over (0, 1).
Three interchangeable paths implement it:

- "closed_form" : q* = (alpha - 1) / (alpha + beta - 2)            (default)
- "brent"       : bounded Brent search (scipy.optimize.minimize_scalar)
                  on the negative log kernel over (EPS, 1 - EPS)
- "optax"       : gradient ascent with Optax over logit(q) (MAPOptimizer)

The closed form is exact for this family; the numeric paths exist so the
same contract holds for kernels without one. The path used is logged at
DEBUG level and recorded in ModeResult.method.

Both shape parameters must exceed 1, otherwise the kernel is monotone,
flat or U-shaped and NoInteriorMode is raised. There is no
boundary-reporting fallback.
"""

from __future__ import annotations

import logging

import numpy as np
from scipy.optimize import minimize_scalar

from betaquap.errors import ConvergenceError, InvalidParameter
from betaquap.inference.base import EPS, ModeFinder, ModeResult, check_interior_mode
from betaquap.inference.map_optimizer import MAPOptimizer

logger = logging.getLogger(__name__)

DEFAULT_TOL = 1e-8


class ClosedFormModeFinder(ModeFinder):
    """
    Analytic mode of the Beta kernel.

    Setting d/dq log g = (alpha-1)/q - (beta-1)/(1-q) to zero gives
    q* = (alpha - 1) / (alpha + beta - 2).

    Parameters
    ----------
    tol : float | None, optional
        Ignored: the result is exact. Accepted so every entry of
        MODE_FINDERS takes the same keyword arguments.
    """

    method = "closed_form"

    def __init__(self, tol: float | None = None):
        pass

    def maximize(self, alpha: float, beta: float) -> ModeResult:
        check_interior_mode(alpha, beta)
        alpha, beta = float(alpha), float(beta)
        mode = (alpha - 1.0) / (alpha + beta - 2.0)
        logger.debug("closed-form mode: alpha=%s beta=%s mode=%.10f", alpha, beta, mode)
        return ModeResult(mode=mode, method=self.method)


class BoundedScalarModeFinder(ModeFinder):
    """
    Bounded Brent search on the negative log kernel.

    Parameters
    ----------
    tol : float, default=1e-8
        Absolute tolerance on q* (passed as `xatol`).
    maxiter : int, default=500
        Maximum number of iterations.
    """

    method = "brent"

    def __init__(self, tol: float = DEFAULT_TOL, maxiter: int = 500):
        if tol <= 0:
            raise InvalidParameter(f"tol must be positive, got {tol}")
        self.tol = tol
        self.maxiter = maxiter

    def maximize(self, alpha: float, beta: float) -> ModeResult:
        check_interior_mode(alpha, beta)
        alpha, beta = float(alpha), float(beta)

        def neg_log_kernel(q: float) -> float:
            return -((alpha - 1.0) * np.log(q) + (beta - 1.0) * np.log1p(-q))

        res = minimize_scalar(
            neg_log_kernel,
            bounds=(EPS, 1.0 - EPS),
            method="bounded",
            options={"xatol": self.tol, "maxiter": self.maxiter},
        )
        logger.debug(
            "brent mode search: alpha=%s beta=%s mode=%.10f nfev=%d success=%s",
            alpha,
            beta,
            res.x,
            res.nfev,
            res.success,
        )
        if not res.success:
            raise ConvergenceError(f"bounded Brent search failed: {res.message}")
        return ModeResult(
            mode=float(res.x),
            method=self.method,
            converged=True,
            iterations=int(res.nfev),
        )


# Registry for string-based mode finder selection
MODE_FINDERS = {
    "closed_form": ClosedFormModeFinder,
    "brent": BoundedScalarModeFinder,
    "optax": MAPOptimizer,
}


def get_mode_finder(method: str = "closed_form", **kwargs) -> ModeFinder:
    """
    Instantiate a mode finder by registry name.

    Parameters
    ----------
    method : {"closed_form", "brent", "optax"}
        Registry key.
    **kwargs
        Forwarded to the finder's constructor (e.g. tol, steps).

    Raises
    ------
    InvalidParameter
        If `method` is not registered.
    """
    try:
        finder_cls = MODE_FINDERS[method]
    except KeyError:
        raise InvalidParameter(
            f"Unknown mode finder: {method!r}. Use one of {sorted(MODE_FINDERS)}."
        ) from None
    return finder_cls(**kwargs)


def find_posterior_mode(
    alpha: float, beta: float, method: str = "closed_form", tol: float | None = None
) -> float:
    """
    Posterior mode of Beta(alpha, beta).

    Parameters
    ----------
    alpha, beta : float
        Posterior shape parameters, both > 1.
    method : {"closed_form", "brent", "optax"}, default="closed_form"
        Which path maximizes the kernel.
    tol : float | None, optional
        Absolute tolerance on q* for numeric paths. Defaults to 1e-8 for
        "brent" and 1e-5 for "optax" (float32). Ignored by "closed_form",
        which is exact.

    Returns
    -------
    float
        q* in (0, 1).

    Raises
    ------
    InvalidParameter
        If alpha or beta is not positive, or the method is unknown.
    NoInteriorMode
        If alpha <= 1 or beta <= 1.
    ConvergenceError
        If a numeric path does not converge.

    Examples
    --------
    >>> find_posterior_mode(21, 11)
    0.6666666666666666
    """
    kwargs = {} if tol is None else {"tol": tol}
    return get_mode_finder(method, **kwargs).maximize(alpha, beta).mode
