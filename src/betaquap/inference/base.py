"""
base.py
-------

Abstract base class for mode finders.

All mode finders implement `maximize(alpha, beta)`, which locates the
maximum of the unnormalized Beta kernel

    g(q) = q^(alpha-1) (1-q)^(beta-1)

on the open interval (0, 1) and returns a ModeResult recording which
path (closed form or numeric search) produced it.

All mode finders (ClosedFormModeFinder, BoundedScalarModeFinder,
MAPOptimizer) subclass from this base.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from betaquap.errors import NoInteriorMode
from betaquap.model.conjugate import PosteriorParameters
from betaquap.model.prior import check_shape_parameters

# Search interval is (EPS, 1 - EPS) so 0^negative is never evaluated.
EPS = 1e-9


@dataclass(frozen=True)
class ModeResult:
    """
    Located posterior mode.

    Attributes
    ----------
    mode : float
        Maximizer q* of the kernel, in (0, 1).
    method : str
        Registry name of the path that produced it.
    converged : bool
        Whether the numeric search met its tolerance (always True for the closed form).
    iterations : int
        Objective evaluations / optimizer steps used (0 for the closed form).
    """

    mode: float
    method: str
    converged: bool = True
    iterations: int = 0


def check_interior_mode(alpha, beta) -> None:
    """
    Raise unless the Beta kernel has a strict interior maximum.

    Raises
    ------
    InvalidParameter
        If alpha or beta is not positive.
    NoInteriorMode
        If alpha <= 1 or beta <= 1 (kernel monotone, flat or U-shaped).
    """
    check_shape_parameters(alpha, beta)
    if alpha <= 1.0 or beta <= 1.0:
        raise NoInteriorMode(
            f"Beta kernel has no interior maximum for alpha={alpha}, beta={beta}; "
            "both shape parameters must exceed 1"
        )


class ModeFinder(ABC):
    """
    Abstract interface for posterior mode finders.

    Methods
    -------
    maximize(alpha, beta) -> ModeResult
        Maximize the Beta kernel over (0, 1).
    fit(params) -> ModeResult
        Same, taking PosteriorParameters.
    """

    method: str = "abstract"

    @abstractmethod
    def maximize(self, alpha: float, beta: float) -> ModeResult:
        """
        Locate the kernel maximum.

        Parameters
        ----------
        alpha, beta : float
            Posterior shape parameters, both > 1.

        Returns
        -------
        ModeResult
        """
        ...

    def fit(self, params: PosteriorParameters) -> ModeResult:
        return self.maximize(params.alpha, params.beta)
