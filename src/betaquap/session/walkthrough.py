"""
walkthrough.py
--------------

End-to-end comparison of the exact Beta posterior with its quadratic
approximation.

Steps (each a pure function of the previous step's output):
1. compute_posterior_parameters : Beta(a, b) + (n, y) -> Beta(a + y, b + n - y)
2. evaluate_beta_density        : prior and exact posterior over the grid
3. find_posterior_mode          : q* maximizing the kernel
4. build_quadratic_approximation: N(q*, -1 / d2) over the same grid

MVP implementation
------------------
- run_comparison() : one prior / observation pair.
- sample_size_sweep() : same success proportion at growing n, showing the
  approximation tighten as the posterior becomes more normal.
- sample_comparison() : Monte Carlo summaries of both distributions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

import jax
import jax.numpy as jnp

from betaquap.data.observation import Observation
from betaquap.errors import InvalidParameter
from betaquap.inference.laplace import LaplaceApproximation
from betaquap.inference.mode import MODE_FINDERS, get_mode_finder
from betaquap.model.conjugate import PosteriorParameters, compute_posterior_parameters
from betaquap.model.prior import PriorParameters
from betaquap.posterior.beta_posterior import BetaPosterior
from betaquap.posterior.diagnostics import density_discrepancy
from betaquap.posterior.laplace_posterior import NormalApproximation
from betaquap.utils.grid import DEFAULT_STEP, probability_grid
from betaquap.utils.rng import ensure_key, split

logger = logging.getLogger(__name__)


@dataclass
class ComparisonConfig:
    """
    Configuration for a posterior-versus-approximation comparison.

    Attributes
    ----------
    step : float
        Grid spacing on [0, 1]. Default 0.001 (1001 points).
    include_endpoints : bool
        Keep 0 and 1 in the grid. Switch off for priors with a or b < 1.
    mode_method : {"closed_form", "brent", "optax"}
        Mode finder registry key.
    curvature : {"analytic", "autodiff"}
        How the log-kernel second derivative is computed.
    tol : float | None
        Tolerance forwarded to numeric mode finders (None: finder default).
    window : float
        Half-width of the neighbourhood around the mode used by the
        discrepancy summary.

    Examples
    --------
    >>> config = ComparisonConfig(mode_method="brent", tol=1e-10)
    """

    step: float = DEFAULT_STEP
    include_endpoints: bool = True
    mode_method: str = "closed_form"
    curvature: str = "analytic"
    tol: float | None = None
    window: float = 0.05

    def __post_init__(self):
        """Validate configuration."""
        if not 0.0 < self.step < 1.0:
            raise InvalidParameter(f"step must lie in (0, 1), got {self.step}")
        if self.mode_method not in MODE_FINDERS:
            raise InvalidParameter(
                f"mode_method must be one of {sorted(MODE_FINDERS)}, "
                f"got {self.mode_method!r}"
            )
        if self.curvature not in LaplaceApproximation.CURVATURE_METHODS:
            raise InvalidParameter(
                f"curvature must be one of {LaplaceApproximation.CURVATURE_METHODS}, "
                f"got {self.curvature!r}"
            )
        if self.tol is not None and self.tol <= 0:
            raise InvalidParameter(f"tol must be positive, got {self.tol}")
        if self.window <= 0:
            raise InvalidParameter(f"window must be positive, got {self.window}")


@dataclass(frozen=True)
class ComparisonResult:
    """
    Every intermediate value of one comparison.

    Attributes
    ----------
    prior, observation, posterior_parameters
        Inputs and the conjugate update.
    grid : jnp.ndarray
        Shared evaluation grid.
    prior_density, posterior_density, approx_density : jnp.ndarray
        The three DensitySeries aligned with `grid`.
    mode : float
        Posterior mode q*.
    mode_method : str
        Path that located the mode.
    approximation : NormalApproximation
        N(mode, sigma^2) with its curvature.
    discrepancy : dict
        density_discrepancy() of exact vs approximate series.
    """

    prior: PriorParameters
    observation: Observation
    posterior_parameters: PosteriorParameters
    grid: jnp.ndarray
    prior_density: jnp.ndarray
    posterior_density: jnp.ndarray
    approx_density: jnp.ndarray
    mode: float
    mode_method: str
    approximation: NormalApproximation
    discrepancy: dict = field(default_factory=dict)

    @property
    def sigma(self) -> float:
        return self.approximation.sigma

    @property
    def posterior(self) -> BetaPosterior:
        return BetaPosterior.from_parameters(self.posterior_parameters)


def run_comparison(
    prior: PriorParameters,
    observation: Observation,
    config: ComparisonConfig | None = None,
    grid: jnp.ndarray | None = None,
) -> ComparisonResult:
    """
    Run the four steps for one prior / observation pair.

    Parameters
    ----------
    prior : PriorParameters
        Beta prior.
    observation : Observation
        Binomial data.
    config : ComparisonConfig | None, optional
        Defaults to ComparisonConfig().
    grid : jnp.ndarray | None, optional
        Evaluation grid. Built from `config` when omitted.

    Returns
    -------
    ComparisonResult

    Raises
    ------
    InvalidParameter, NoInteriorMode, DegenerateApproximation, ConvergenceError
        Propagated from the step that failed; nothing partial is returned.
    """
    config = config or ComparisonConfig()
    if grid is None:
        grid = probability_grid(config.step, include_endpoints=config.include_endpoints)

    # 1) conjugate update
    params = compute_posterior_parameters(prior, observation)
    posterior = BetaPosterior.from_parameters(params)

    # 2) exact densities
    prior_density = prior.density(grid)
    posterior_density = posterior.pdf(grid)

    # 3) mode
    finder_kwargs = {} if config.tol is None else {"tol": config.tol}
    mode_result = get_mode_finder(config.mode_method, **finder_kwargs).fit(params)

    # 4) quadratic approximation
    approximation = LaplaceApproximation(curvature=config.curvature).approximate(
        params.alpha, params.beta, mode_result.mode
    )
    approx_density = approximation.pdf(grid)

    discrepancy = density_discrepancy(
        grid,
        posterior_density,
        approx_density,
        center=mode_result.mode,
        window=config.window,
    )
    logger.info(
        "Beta(%s, %s) + (n=%d, y=%d) -> Beta(%s, %s); mode=%.4f (%s) sigma=%.4f "
        "max|diff| near mode=%.4f",
        prior.a,
        prior.b,
        observation.n,
        observation.y,
        params.alpha,
        params.beta,
        mode_result.mode,
        mode_result.method,
        approximation.sigma,
        discrepancy["max_abs_near_center"],
    )

    return ComparisonResult(
        prior=prior,
        observation=observation,
        posterior_parameters=params,
        grid=grid,
        prior_density=prior_density,
        posterior_density=posterior_density,
        approx_density=approx_density,
        mode=mode_result.mode,
        mode_method=mode_result.method,
        approximation=approximation,
        discrepancy=discrepancy,
    )


def sample_size_sweep(
    prior: PriorParameters,
    proportion: float,
    sizes: Iterable[int],
    config: ComparisonConfig | None = None,
) -> list[ComparisonResult]:
    """
    Compare exact and approximate posteriors at growing sample sizes.

    Parameters
    ----------
    prior : PriorParameters
        Beta prior shared by every comparison.
    proportion : float
        Observed success proportion in [0, 1]; y = round(proportion * n).
    sizes : iterable of int
        Trial counts, e.g. (9, 18, 36).
    config : ComparisonConfig | None, optional
        Shared configuration.

    Returns
    -------
    list of ComparisonResult
        One per size, in the given order, all on the same grid.
    """
    if not 0.0 <= proportion <= 1.0:
        raise InvalidParameter(f"proportion must lie in [0, 1], got {proportion}")
    sizes = list(sizes)
    if not sizes:
        raise InvalidParameter("sizes must contain at least one trial count")

    config = config or ComparisonConfig()
    grid = probability_grid(config.step, include_endpoints=config.include_endpoints)
    results = []
    for n in sizes:
        obs = Observation(n=n, y=int(round(proportion * n)))
        results.append(run_comparison(prior, obs, config=config, grid=grid))
    return results


def comparison_summary(result: ComparisonResult) -> dict[str, float]:
    """
    Flat numeric summary of a comparison.

    Returns
    -------
    dict
        posterior_alpha, posterior_beta, posterior_mean, posterior_std, mode,
        sigma, variance, curvature, plus every key of result.discrepancy.
    """
    posterior = result.posterior
    summary = {
        "posterior_alpha": result.posterior_parameters.alpha,
        "posterior_beta": result.posterior_parameters.beta,
        "posterior_mean": posterior.mean,
        "posterior_std": posterior.std,
        "mode": result.mode,
        "sigma": result.approximation.sigma,
        "variance": result.approximation.variance,
        "curvature": result.approximation.curvature,
    }
    summary.update(result.discrepancy)
    return summary


def print_comparison_summary(result: ComparisonResult) -> None:
    """Print a readable summary of a comparison."""
    obs = result.observation
    params = result.posterior_parameters
    print(
        f"Prior Beta({result.prior.a:g}, {result.prior.b:g}), "
        f"n = {obs.n}, y = {obs.y}\n"
    )
    print(f"Exact posterior: Beta({params.alpha:g}, {params.beta:g})")
    print(f"  Mean: {result.posterior.mean:.4f} ± {result.posterior.std:.4f}")
    print(f"Quadratic approximation ({result.mode_method} mode):")
    d2 = result.approximation.curvature
    print(f"  N({result.mode:.4f}, {result.sigma:.4f}^2), d2 = {d2:.3f}")
    lower, upper = result.approximation.interval(0.89)
    print(f"  89% interval: [{lower:.3f}, {upper:.3f}]")
    print("Discrepancy:")
    for key, value in result.discrepancy.items():
        print(f"  {key}: {value:.4f}")


def sample_comparison(
    result: ComparisonResult, n: int = 10_000, key: jax.Array | int | None = None
) -> dict[str, dict[str, float]]:
    """
    Monte Carlo summaries of the exact posterior and its approximation.

    Parameters
    ----------
    result : ComparisonResult
        Output of run_comparison().
    n : int, default=10000
        Samples per distribution.
    key : jax.Array | int | None
        PRNG key or integer seed (None: seed 0).

    Returns
    -------
    dict
        {"exact": {...}, "approx": {...}} each with mean, std, q055, q945
        (89% interval) and outside_unit (fraction of samples outside [0, 1]).
    """
    if n <= 0:
        raise InvalidParameter(f"n must be positive, got {n}")
    k_exact, k_approx = split(ensure_key(key))
    draws = {
        "exact": result.posterior.sample(n, key=k_exact),
        "approx": result.approximation.sample(n, key=k_approx),
    }
    summary = {}
    for name, samples in draws.items():
        q055, q945 = jnp.quantile(samples, jnp.array([0.055, 0.945]))
        summary[name] = {
            "mean": float(jnp.mean(samples)),
            "std": float(jnp.std(samples)),
            "q055": float(q055),
            "q945": float(q945),
            "outside_unit": float(jnp.mean((samples < 0.0) | (samples > 1.0))),
        }
    return summary
