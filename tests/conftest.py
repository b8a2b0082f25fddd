"""
Central pytest configuration for this project.

This file is automatically discovered by pytest and is intended for:

- **Fixtures**: reusable objects or setup logic shared across multiple test files.
- **Pytest hooks**: project-wide customizations of pytest behavior (e.g., modifying CLI options, adding markers).

Notes
-----
- Contributors should
  install the package in editable mode (`pip install -e .`) so that imports are resolved
  consistently in local dev and CI environments.
- Keep this file focused on test setup. Do not add application logic here.
"""

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from betaquap.data import Observation  # noqa: E402
from betaquap.model import PriorParameters, compute_posterior_parameters  # noqa: E402
from betaquap.utils import probability_grid  # noqa: E402


@pytest.fixture
def grid():
    """Reference grid 0, 0.001, ..., 1 (1001 points)."""
    return probability_grid(step=0.001)


@pytest.fixture
def flat_prior():
    """Uniform Beta(1, 1) prior."""
    return PriorParameters(a=1.0, b=1.0)


@pytest.fixture
def worked_observation():
    """20 successes in 30 trials."""
    return Observation(n=30, y=20)


@pytest.fixture
def worked_params(flat_prior, worked_observation):
    """Posterior Beta(21, 11) of the worked example."""
    return compute_posterior_parameters(flat_prior, worked_observation)
