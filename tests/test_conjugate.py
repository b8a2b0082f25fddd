"""
test_conjugate.py
-----------------

Tests for the Beta prior, binomial observations and the conjugate update.
"""

from types import SimpleNamespace

import pytest

from betaquap.data import Observation
from betaquap.errors import InvalidParameter
from betaquap.model import PosteriorParameters, PriorParameters, compute_posterior_parameters


class TestConjugateUpdate:
    """posterior_a = a + y, posterior_b = b + n - y."""

    def test_worked_example(self, worked_params):
        assert worked_params == PosteriorParameters(alpha=21.0, beta=11.0)

    @pytest.mark.parametrize(
        "a, b, n, y",
        [
            (1.0, 1.0, 0, 0),
            (1.0, 1.0, 9, 6),
            (0.5, 0.5, 10, 0),
            (2.0, 5.0, 10, 10),
            (3.7, 0.2, 1000, 412),
        ],
    )
    def test_update_formula(self, a, b, n, y):
        params = compute_posterior_parameters(PriorParameters(a, b), Observation(n, y))
        assert params.alpha == pytest.approx(a + y)
        assert params.beta == pytest.approx(b + n - y)
        assert params.alpha > 0 and params.beta > 0

    def test_has_interior_mode(self, worked_params):
        assert worked_params.has_interior_mode
        flat = compute_posterior_parameters(PriorParameters(1, 1), Observation(0, 0))
        assert not flat.has_interior_mode

    def test_repeated_calls_identical(self, flat_prior, worked_observation):
        first = compute_posterior_parameters(flat_prior, worked_observation)
        second = compute_posterior_parameters(flat_prior, worked_observation)
        assert first == second


class TestValidation:
    """Invalid inputs fail fast with InvalidParameter."""

    @pytest.mark.parametrize(
        "a, b",
        [
            (0.0, 1.0),
            (1.0, 0.0),
            (-1.0, 2.0),
            (float("nan"), 1.0),
            (float("inf"), 1.0),
            ("2", 1.0),
            (True, 1.0),
            (None, 1.0),
        ],
    )
    def test_invalid_prior(self, a, b):
        with pytest.raises(InvalidParameter):
            PriorParameters(a, b)

    @pytest.mark.parametrize(
        "n, y",
        [
            (5, 6),
            (-1, 0),
            (3, -1),
            (2.5, 1),
            (True, 0),
            (float("nan"), 0),
            (float("inf"), 0),
            (None, 0),
            ("3", 1),
        ],
    )
    def test_invalid_observation(self, n, y):
        with pytest.raises(InvalidParameter):
            Observation(n, y)

    def test_integral_floats_are_normalised(self):
        obs = Observation(30.0, 20.0)
        assert obs.n == 30 and isinstance(obs.n, int)
        assert obs.failures == 10

    def test_duck_typed_inputs_are_checked(self):
        with pytest.raises(InvalidParameter):
            compute_posterior_parameters(SimpleNamespace(a=-1.0, b=1.0), Observation(3, 1))
        with pytest.raises(InvalidParameter):
            compute_posterior_parameters(PriorParameters(), SimpleNamespace(n=3, y=5))

    def test_uniform_prior(self):
        assert PriorParameters.uniform() == PriorParameters(1.0, 1.0)


class TestObservationFromOutcomes:
    def test_counts(self):
        obs = Observation.from_outcomes([1, 0, 1, 1, 1, 0, 1, 0, 1])
        assert obs == Observation(n=9, y=6)

    def test_booleans(self):
        assert Observation.from_outcomes([True, False, True]) == Observation(3, 2)

    def test_empty(self):
        assert Observation.from_outcomes([]) == Observation(0, 0)

    def test_rejects_non_binary(self):
        with pytest.raises(InvalidParameter):
            Observation.from_outcomes([1, 0, 2])
