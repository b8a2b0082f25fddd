"""
base_posterior.py
-----------------

Abstract base class for one-dimensional posterior densities in betaquap.

Defines the common interface for:

- BetaPosterior        : exact conjugate posterior Beta(alpha, beta)
- NormalApproximation  : quadratic (Laplace) approximation N(mode, sigma^2)

Why this matters
----------------
The walkthrough compares the two densities point by point. A common
interface lets the session, diagnostics and plotting code evaluate either
one over the shared grid without caring how it was derived.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import jax
import jax.numpy as jnp


class BasePosterior(ABC):
    """
    Abstract base class for posterior densities over a probability q.

    Notes
    -----
    - Each concrete posterior must provide mean, variance, log_prob and sample.
    - pdf() is derived from log_prob() and evaluates a whole grid at once.
    """

    # ------------------------------------------------------------------
    # SUMMARIES
    # ------------------------------------------------------------------
    @property
    @abstractmethod
    def mean(self) -> float:
        """Posterior mean."""
        ...

    @property
    @abstractmethod
    def variance(self) -> float:
        """Posterior variance."""
        ...

    @property
    def std(self) -> float:
        """Posterior standard deviation."""
        return float(jnp.sqrt(self.variance))

    # ------------------------------------------------------------------
    # DENSITY
    # ------------------------------------------------------------------
    @abstractmethod
    def log_prob(self, q: jnp.ndarray) -> jnp.ndarray:
        """
        Log density at q.

        Parameters
        ----------
        q : jnp.ndarray
            Evaluation points.

        Returns
        -------
        jnp.ndarray
            Log density, same shape as q.
        """
        ...

    def pdf(self, grid: jnp.ndarray) -> jnp.ndarray:
        """
        Density over a grid (DensitySeries).

        Parameters
        ----------
        grid : jnp.ndarray, shape (N,)
            Evaluation points.

        Returns
        -------
        jnp.ndarray, shape (N,)
            exp(log_prob(grid)).
        """
        return jnp.exp(self.log_prob(jnp.asarray(grid)))

    # ------------------------------------------------------------------
    # SAMPLING
    # ------------------------------------------------------------------
    @abstractmethod
    def sample(self, n: int, *, key: jax.Array) -> jnp.ndarray:
        """
        Draw n samples.

        Parameters
        ----------
        n : int
            Number of samples.
        key : jax.Array
            PRNG key.

        Returns
        -------
        jnp.ndarray, shape (n,)
        """
        ...
