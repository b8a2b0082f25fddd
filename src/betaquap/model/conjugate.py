"""
conjugate.py
------------

Conjugate Beta-Binomial update.

A Beta(a, b) prior combined with y successes in n binomial trials gives
the posterior Beta(a + y, b + n - y) in closed form. No numerics needed.
"""

from __future__ import annotations

from dataclasses import dataclass

from betaquap.data.observation import Observation
from betaquap.errors import InvalidParameter
from betaquap.model.prior import PriorParameters, check_shape_parameters


@dataclass(frozen=True)
class PosteriorParameters:
    """
    Shape parameters of the exact Beta posterior.

    Parameters
    ----------
    alpha : float
        a + y
    beta : float
        b + n - y
    """

    alpha: float
    beta: float

    def __post_init__(self):
        check_shape_parameters(self.alpha, self.beta)

    @property
    def has_interior_mode(self) -> bool:
        """True when the kernel has a strict maximum inside (0, 1)."""
        return self.alpha > 1.0 and self.beta > 1.0


def compute_posterior_parameters(
    prior: PriorParameters, obs: Observation
) -> PosteriorParameters:
    """
    Conjugate update of a Beta prior with binomial data.

    Parameters
    ----------
    prior : PriorParameters
        Beta(a, b) prior.
    obs : Observation
        n trials with y successes.

    Returns
    -------
    PosteriorParameters
        Beta(a + y, b + n - y).

    Raises
    ------
    InvalidParameter
        If a or b is not positive, or y lies outside [0, n].

    Examples
    --------
    >>> compute_posterior_parameters(PriorParameters(1, 1), Observation(30, 20))
    PosteriorParameters(alpha=21.0, beta=11.0)
    """
    # re-checked here so duck-typed inputs fail the same way as the dataclasses
    check_shape_parameters(prior.a, prior.b, names=("a", "b"))
    if obs.n < 0 or not 0 <= obs.y <= obs.n:
        raise InvalidParameter(
            f"observation must satisfy 0 <= y <= n, got n={obs.n}, y={obs.y}"
        )
    return PosteriorParameters(
        alpha=float(prior.a) + obs.y,
        beta=float(prior.b) + obs.n - obs.y,
    )
