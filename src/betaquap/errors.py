"""
errors.py
---------

Error taxonomy for betaquap.

All errors derive from BetaquapError, which itself subclasses ValueError,
so callers that already guard numeric code with `except ValueError` keep
working.

- InvalidParameter        : bad prior / observation / grid inputs.
- NoInteriorMode          : kernel has no interior maximum (alpha <= 1 or beta <= 1).
- DegenerateApproximation : non-negative log-kernel curvature at the located mode.
- ConvergenceError        : a numeric mode finder failed to converge.
"""

from __future__ import annotations


class BetaquapError(ValueError):
    """Base class for all betaquap errors."""


class InvalidParameter(BetaquapError):
    """Raised when prior parameters, observations or grids violate their invariants."""


class NoInteriorMode(BetaquapError):
    """
    Raised when the Beta kernel has no strictly interior maximum.

    For alpha <= 1 or beta <= 1 the kernel q^(alpha-1) (1-q)^(beta-1) is
    monotone, flat, or U-shaped on (0, 1).
    """


class DegenerateApproximation(BetaquapError):
    """Raised when the log-kernel curvature at the mode is not strictly negative."""


class ConvergenceError(BetaquapError):
    """Raised when a numeric optimizer does not reach the requested tolerance."""
