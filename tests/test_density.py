"""
test_density.py
---------------

Tests for the probability grid and the exact Beta density evaluator.
"""

import jax.numpy as jnp
import numpy as np
import pytest
from scipy import stats

from betaquap.errors import InvalidParameter
from betaquap.model import PriorParameters
from betaquap.posterior import evaluate_beta_density
from betaquap.utils import probability_grid, trapezoid


class TestProbabilityGrid:
    def test_reference_grid(self, grid):
        assert grid.shape == (1001,)
        assert float(grid[0]) == 0.0
        assert float(grid[-1]) == 1.0
        assert jnp.allclose(jnp.diff(grid), 0.001, atol=1e-6)

    def test_open_grid_drops_endpoints(self):
        grid = probability_grid(step=0.01, include_endpoints=False)
        assert grid.shape == (99,)
        assert float(grid[0]) > 0.0
        assert float(grid[-1]) < 1.0

    @pytest.mark.parametrize("step", [0.9, 0.4])
    def test_open_grid_needs_two_points(self, step):
        with pytest.raises(InvalidParameter):
            probability_grid(step=step, include_endpoints=False)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"step": 0.0},
            {"step": -0.1},
            {"step": 2.0},
            {"lower": -0.1},
            {"upper": 1.5},
            {"lower": 0.6, "upper": 0.4},
        ],
    )
    def test_invalid_grid(self, kwargs):
        with pytest.raises(InvalidParameter):
            probability_grid(**kwargs)


class TestBetaDensity:
    @pytest.mark.parametrize(
        "alpha, beta",
        [
            (21.0, 11.0),
            (2.0, 2.0),
            (1.0, 1.0),
            (5.0, 40.0),
            (2001.0, 1001.0),
            (20001.0, 10001.0),
        ],
    )
    def test_integrates_to_one(self, grid, alpha, beta):
        density = evaluate_beta_density(alpha, beta, grid)
        assert abs(float(trapezoid(density, grid)) - 1.0) < 1e-3

    def test_evaluated_in_float64(self, grid):
        assert evaluate_beta_density(21.0, 11.0, grid).dtype == jnp.float64
        # float32 grids are promoted too
        density = evaluate_beta_density(21.0, 11.0, grid.astype(jnp.float32))
        assert density.dtype == jnp.float64

    def test_matches_scipy(self, grid):
        interior = grid[1:-1]
        density = evaluate_beta_density(21.0, 11.0, interior)
        expected = stats.beta.pdf(np.asarray(interior, dtype=float), 21.0, 11.0)
        assert np.allclose(np.asarray(density), expected, rtol=1e-3, atol=1e-6)

    def test_non_negative(self, grid):
        density = evaluate_beta_density(21.0, 11.0, grid)
        assert bool(jnp.all(density >= 0.0))

    def test_uniform_is_flat(self, grid):
        density = evaluate_beta_density(1.0, 1.0, grid)
        assert jnp.allclose(density, 1.0, atol=1e-5)

    def test_boundary_limits(self):
        ends = jnp.array([0.0, 1.0])
        # positive exponents: density vanishes at both ends
        assert jnp.array_equal(evaluate_beta_density(21.0, 11.0, ends), jnp.zeros(2))
        # alpha, beta < 1: density diverges at both ends
        assert bool(jnp.all(jnp.isposinf(evaluate_beta_density(0.5, 0.5, ends))))

    def test_prior_density_uses_same_evaluator(self, grid):
        prior = PriorParameters(2.0, 3.0)
        assert jnp.array_equal(prior.density(grid), evaluate_beta_density(2.0, 3.0, grid))

    def test_repeated_calls_bit_identical(self, grid):
        first = evaluate_beta_density(21.0, 11.0, grid)
        second = evaluate_beta_density(21.0, 11.0, grid)
        assert jnp.array_equal(first, second)

    @pytest.mark.parametrize("alpha, beta", [(0.0, 1.0), (2.0, -1.0)])
    def test_invalid_shape_parameters(self, grid, alpha, beta):
        with pytest.raises(InvalidParameter):
            evaluate_beta_density(alpha, beta, grid)

    def test_grid_outside_unit_interval(self):
        with pytest.raises(InvalidParameter):
            evaluate_beta_density(2.0, 2.0, jnp.array([-0.1, 0.5]))
        with pytest.raises(InvalidParameter):
            evaluate_beta_density(2.0, 2.0, jnp.array([0.5, 1.1]))

    def test_grid_must_be_1d(self):
        with pytest.raises(InvalidParameter):
            evaluate_beta_density(2.0, 2.0, jnp.full((3, 3), 0.5))
