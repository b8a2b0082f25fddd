"""
test_posteriors.py
------------------

Tests for the posterior objects:
- BetaPosterior (exact conjugate posterior)
- NormalApproximation (quadratic approximation)
- exact-vs-approximate discrepancy diagnostics
"""

import jax.numpy as jnp
import jax.random as jr
import pytest

from betaquap.errors import InvalidParameter
from betaquap.posterior import (
    BasePosterior,
    BetaPosterior,
    NormalApproximation,
    density_discrepancy,
    evaluate_beta_density,
    log_density_gap,
)
from betaquap.utils import log_beta_function


class TestBetaPosterior:
    @pytest.fixture
    def posterior(self, worked_params):
        return BetaPosterior.from_parameters(worked_params)

    def test_is_base_posterior(self, posterior):
        assert isinstance(posterior, BasePosterior)

    def test_moments(self, posterior):
        assert posterior.mean == pytest.approx(21.0 / 32.0)
        assert posterior.variance == pytest.approx(21.0 * 11.0 / (32.0**2 * 33.0))
        assert posterior.std == pytest.approx((21.0 * 11.0 / (32.0**2 * 33.0)) ** 0.5, rel=1e-6)

    def test_pdf_uses_density_evaluator(self, posterior, grid):
        assert jnp.array_equal(posterior.pdf(grid), evaluate_beta_density(21.0, 11.0, grid))

    def test_log_prob_outside_support(self, posterior):
        log_p = posterior.log_prob(jnp.array([-0.1, 1.1]))
        assert bool(jnp.all(jnp.isneginf(log_p)))

    def test_kernel_proportional_to_pdf(self, posterior):
        q = jnp.linspace(0.2, 0.9, 8)
        log_ratio = posterior.log_kernel(q) - posterior.log_prob(q)
        assert jnp.allclose(log_ratio, log_beta_function(21.0, 11.0), atol=1e-4)
        assert jnp.allclose(posterior.kernel(q), jnp.exp(posterior.log_kernel(q)))

    def test_sample(self, posterior):
        samples = posterior.sample(20_000, key=jr.PRNGKey(0))
        assert samples.shape == (20_000,)
        assert bool(jnp.all((samples > 0.0) & (samples < 1.0)))
        assert float(jnp.mean(samples)) == pytest.approx(posterior.mean, abs=5e-3)

    def test_parameters_roundtrip(self, posterior, worked_params):
        assert posterior.parameters == worked_params

    def test_invalid(self):
        with pytest.raises(InvalidParameter):
            BetaPosterior(0.0, 1.0)


class TestNormalApproximation:
    @pytest.fixture
    def approx(self):
        return NormalApproximation(mean=2.0 / 3.0, sigma=(1.0 / 135.0) ** 0.5, curvature=-135.0)

    def test_is_base_posterior(self, approx):
        assert isinstance(approx, BasePosterior)

    def test_moments(self, approx):
        assert approx.std == approx.sigma
        assert approx.variance == pytest.approx(1.0 / 135.0)

    def test_log_prob_at_mean(self, approx):
        expected = -jnp.log(approx.sigma) - 0.5 * jnp.log(2.0 * jnp.pi)
        assert jnp.allclose(approx.log_prob(approx.mean), expected, atol=1e-5)

    def test_interval_symmetric(self, approx):
        lower, upper = approx.interval(0.89)
        assert approx.mean - lower == pytest.approx(upper - approx.mean)
        # z_{0.945} ~ 1.598
        assert (upper - lower) / (2 * approx.sigma) == pytest.approx(1.598, abs=1e-3)

    def test_invalid_interval_level(self, approx):
        with pytest.raises(InvalidParameter):
            approx.interval(1.5)

    def test_sample(self, approx):
        samples = approx.sample(20_000, key=jr.PRNGKey(1))
        assert float(jnp.mean(samples)) == pytest.approx(approx.mean, abs=5e-3)
        assert float(jnp.std(samples)) == pytest.approx(approx.sigma, rel=0.05)

    def test_invalid_sigma(self):
        with pytest.raises(InvalidParameter):
            NormalApproximation(mean=0.5, sigma=0.0, curvature=-1.0)


class TestDiscrepancy:
    def test_identical_series(self, grid):
        density = evaluate_beta_density(21.0, 11.0, grid)
        result = density_discrepancy(grid, density, density)
        assert result["max_abs"] == 0.0
        assert result["max_abs_near_center"] == 0.0
        assert result["l1"] == 0.0
        assert result["exact_mass"] == pytest.approx(1.0, abs=1e-3)

    def test_keys(self, grid):
        density = evaluate_beta_density(21.0, 11.0, grid)
        result = density_discrepancy(grid, density, 0.9 * density, center=2.0 / 3.0)
        assert set(result) == {"max_abs", "max_abs_near_center", "l1", "exact_mass", "approx_mass"}
        assert result["max_abs"] >= result["max_abs_near_center"] > 0.0
        assert result["l1"] == pytest.approx(0.1, abs=1e-3)

    def test_boundary_singularities_ignored(self, grid):
        exact = evaluate_beta_density(0.5, 0.5, grid)
        result = density_discrepancy(grid, exact, jnp.ones_like(grid))
        assert all(jnp.isfinite(jnp.asarray(v)) for v in result.values())

    def test_misaligned(self, grid):
        with pytest.raises(InvalidParameter):
            density_discrepancy(grid, jnp.ones(3), jnp.ones_like(grid))

    def test_grid_too_short(self):
        with pytest.raises(InvalidParameter):
            density_discrepancy(jnp.array([]), jnp.array([]), jnp.array([]))
        with pytest.raises(InvalidParameter):
            density_discrepancy(jnp.array([0.5]), jnp.ones(1), jnp.ones(1))

    def test_invalid_window(self, grid):
        with pytest.raises(InvalidParameter):
            density_discrepancy(grid, jnp.ones_like(grid), jnp.ones_like(grid), window=0.0)

    def test_log_density_gap(self):
        gap = log_density_gap(jnp.array([1.0, 2.0, 0.0]), jnp.array([1.0, 1.0, 1.0]))
        assert jnp.allclose(gap[:2], jnp.array([0.0, jnp.log(2.0)]))
        assert bool(jnp.isposinf(gap[2]))
