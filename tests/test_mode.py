"""
test_mode.py
------------

Tests for the posterior mode finders (closed form, bounded Brent, Optax).
"""

import pytest

from betaquap.errors import ConvergenceError, InvalidParameter, NoInteriorMode
from betaquap.inference import (
    MODE_FINDERS,
    BoundedScalarModeFinder,
    ClosedFormModeFinder,
    MAPOptimizer,
    find_posterior_mode,
    get_mode_finder,
)
from betaquap.posterior import BetaPosterior

SHAPES = [
    (21.0, 11.0),
    (2.0, 2.0),
    (3.0, 50.0),
    (100.0, 4.0),
    (7.0, 4.0),
    # strongly skewed
    (2.0, 2000.0),
    (1.5, 300.0),
    (2000.0, 2.0),
]


def closed_form(alpha, beta):
    return (alpha - 1.0) / (alpha + beta - 2.0)


class TestClosedForm:
    def test_worked_example(self):
        assert find_posterior_mode(21.0, 11.0) == pytest.approx(20.0 / 30.0)
        assert round(find_posterior_mode(21.0, 11.0), 4) == 0.6667

    def test_result_records_method(self):
        result = ClosedFormModeFinder().maximize(21.0, 11.0)
        assert result.method == "closed_form"
        assert result.converged
        assert result.iterations == 0

    def test_tolerance_is_ignored(self):
        assert find_posterior_mode(21.0, 11.0, tol=1e-3) == find_posterior_mode(21.0, 11.0)

    def test_fit_takes_posterior_parameters(self, worked_params):
        assert ClosedFormModeFinder().fit(worked_params).mode == pytest.approx(2.0 / 3.0)

    def test_beta_posterior_mode(self):
        assert BetaPosterior(21.0, 11.0).mode == pytest.approx(2.0 / 3.0)


class TestBoundedBrent:
    @pytest.mark.parametrize("alpha, beta", SHAPES)
    def test_agrees_with_closed_form(self, alpha, beta):
        mode = find_posterior_mode(alpha, beta, method="brent")
        assert mode == pytest.approx(closed_form(alpha, beta), abs=1e-6)

    def test_result_records_method(self):
        result = BoundedScalarModeFinder(tol=1e-10).maximize(21.0, 11.0)
        assert result.method == "brent"
        assert result.converged
        assert result.iterations > 0
        assert 0.0 < result.mode < 1.0

    def test_invalid_tolerance(self):
        with pytest.raises(InvalidParameter):
            BoundedScalarModeFinder(tol=0.0)


class TestOptaxMAP:
    @pytest.mark.parametrize("alpha, beta", SHAPES)
    def test_agrees_with_closed_form(self, alpha, beta):
        mode = find_posterior_mode(alpha, beta, method="optax")
        assert mode == pytest.approx(closed_form(alpha, beta), abs=1e-4)

    def test_custom_optimizer(self):
        import optax

        finder = MAPOptimizer(steps=2000, optimizer=optax.sgd(learning_rate=0.5))
        result = finder.maximize(21.0, 11.0)
        assert result.method == "optax"
        assert result.mode == pytest.approx(2.0 / 3.0, abs=1e-4)

    def test_history_tracking(self):
        finder = MAPOptimizer(steps=200, track_history=True, log_every=50)
        finder.maximize(21.0, 11.0)
        steps, losses = finder.get_history()
        assert steps == [0, 50, 100, 150, 199]
        assert len(losses) == len(steps)
        assert losses[-1] < losses[0]

    def test_too_few_steps_raise(self):
        with pytest.raises(ConvergenceError):
            MAPOptimizer(steps=1).maximize(21.0, 11.0)

    def test_explicit_init(self):
        result = MAPOptimizer().maximize(21.0, 11.0, init=0.5)
        assert result.mode == pytest.approx(2.0 / 3.0, abs=1e-4)

    def test_init_must_be_inside_unit_interval(self):
        with pytest.raises(InvalidParameter):
            MAPOptimizer().maximize(21.0, 11.0, init=1.0)


class TestNoInteriorMode:
    """alpha <= 1 or beta <= 1: monotone, flat or U-shaped kernel."""

    @pytest.mark.parametrize("method", sorted(MODE_FINDERS))
    @pytest.mark.parametrize("alpha, beta", [(1.0, 1.0), (1.0, 5.0), (5.0, 1.0), (0.5, 3.0), (0.5, 0.5)])
    def test_raises(self, method, alpha, beta):
        with pytest.raises(NoInteriorMode):
            find_posterior_mode(alpha, beta, method=method)

    def test_beta_posterior_mode_raises(self):
        with pytest.raises(NoInteriorMode):
            _ = BetaPosterior(1.0, 3.0).mode

    @pytest.mark.parametrize(
        "alpha, beta", [(0.0, 2.0), (-1.0, 3.0), ("2", 3.0), (3.0, False)]
    )
    def test_non_positive_or_non_numeric_is_invalid(self, alpha, beta):
        with pytest.raises(InvalidParameter):
            find_posterior_mode(alpha, beta)


class TestRegistry:
    def test_registry_keys(self):
        assert set(MODE_FINDERS) == {"closed_form", "brent", "optax"}

    def test_unknown_method(self):
        with pytest.raises(InvalidParameter):
            get_mode_finder("newton")

    @pytest.mark.parametrize("method", sorted(MODE_FINDERS))
    def test_repeated_calls_identical(self, method):
        first = find_posterior_mode(21.0, 11.0, method=method)
        second = find_posterior_mode(21.0, 11.0, method=method)
        assert first == second
