"""
observation.py
--------------

Binomial observations: n trials, y successes.

Observation objects are the only data the conjugate update consumes.
They can be built directly from counts or from a sequence of per-trial
outcomes (1 / True = success, 0 / False = failure).

Examples
--------
>>> from betaquap.data import Observation
>>> obs = Observation(n=9, y=6)
>>> Observation.from_outcomes([1, 0, 1, 1, 1, 0, 1, 0, 1]) == obs
True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from betaquap.errors import InvalidParameter


@dataclass(frozen=True)
class Observation:
    """
    Observed binomial data.

    Parameters
    ----------
    n : int
        Number of trials (>= 0).
    y : int
        Number of successes, 0 <= y <= n.
    """

    n: int
    y: int

    def __post_init__(self):
        """Validate counts."""
        for name in ("n", "y"):
            value = getattr(self, name)
            try:
                integral = int(value) == value
            except (TypeError, ValueError, OverflowError) as exc:
                raise InvalidParameter(
                    f"{name} must be an integer, got {value!r}"
                ) from exc
            if isinstance(value, bool) or not integral:
                raise InvalidParameter(f"{name} must be an integer, got {value!r}")
        if self.n < 0:
            raise InvalidParameter(f"n must be non-negative, got {self.n}")
        if not 0 <= self.y <= self.n:
            raise InvalidParameter(f"y must lie in [0, n={self.n}], got {self.y}")
        # normalise e.g. 30.0 -> 30
        object.__setattr__(self, "n", int(self.n))
        object.__setattr__(self, "y", int(self.y))

    @property
    def failures(self) -> int:
        """Number of failed trials (n - y)."""
        return self.n - self.y

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[int | bool]) -> Observation:
        """
        Build an observation from per-trial outcomes.

        Parameters
        ----------
        outcomes : iterable of {0, 1} or bool
            One entry per trial.

        Returns
        -------
        Observation
            Counts of trials and successes.

        Raises
        ------
        InvalidParameter
            If an outcome is neither 0 nor 1.
        """
        n = 0
        y = 0
        for outcome in outcomes:
            if outcome not in (0, 1):
                raise InvalidParameter(f"outcomes must be 0 or 1, got {outcome!r}")
            n += 1
            y += int(outcome)
        return cls(n=n, y=y)
