"""
betaquap
========

Exact Beta posterior versus its quadratic (Laplace) approximation.

This package works through the classic binomial-proportion example: a
Beta(a, b) prior on a success probability q, n binomial trials with y
successes, the exact conjugate posterior, and the normal approximation
obtained from the curvature of the log posterior at its mode. Both are
evaluated over a shared grid so they can be compared point by point.

----------------------------------------------------------------------
Workflow
----------------------------------------------------------------------

Core design
-----------
1. Posterior parameters (model/conjugate.py):
   - Beta(a, b) + (n, y) -> Beta(a + y, b + n - y), closed form.

2. Exact density (posterior/beta_posterior.py):
   - f(x) = x^(alpha-1) (1-x)^(beta-1) / B(alpha, beta) over the grid.
   - Used identically for the prior and the posterior.

3. Mode (inference/mode.py):
   - Maximizes the kernel q^(alpha-1) (1-q)^(beta-1) on (0, 1).
   - Closed form by default; bounded Brent (SciPy) and Optax gradient
     ascent share the same contract.

4. Quadratic approximation (inference/laplace.py):
   - d2 = -(alpha-1)/q*^2 - (beta-1)/(1-q*)^2, sigma = sqrt(-1 / d2).
   - N(q*, sigma^2) over the same grid.

Unified import style
--------------------
Top-level:
  from betaquap import PriorParameters, Observation, run_comparison
  from betaquap import compute_posterior_parameters, evaluate_beta_density
  from betaquap import find_posterior_mode, build_quadratic_approximation

Subpackages:
  from betaquap.model import PriorParameters, PosteriorParameters
  from betaquap.inference import MAPOptimizer, LaplaceApproximation, MODE_FINDERS
  from betaquap.posterior import BetaPosterior, NormalApproximation, density_discrepancy
  from betaquap.session import ComparisonConfig, sample_size_sweep
  from betaquap.utils import probability_grid, plot_density_series

Errors
------
InvalidParameter, NoInteriorMode, DegenerateApproximation and
ConvergenceError all derive from BetaquapError (a ValueError).

Precision
---------
Importing betaquap enables JAX 64-bit mode (jax_enable_x64). Grid
densities are evaluated in float64; the Optax mode search and the
autodiff curvature run in float32.

----------------------------------------------------------------------
"""

import jax

# log kernel - log B cancels to a few digits at large n; float32 is not enough
jax.config.update("jax_enable_x64", True)

# Re-export subpackages for unified import style (e.g., betaquap.model, betaquap.inference)
from . import data as data
from . import inference as inference
from . import model as model
from . import posterior as posterior
from . import session as session
from . import utils as utils
from .data.observation import Observation
from .errors import (
    BetaquapError,
    ConvergenceError,
    DegenerateApproximation,
    InvalidParameter,
    NoInteriorMode,
)

# Inference
from .inference.laplace import LaplaceApproximation, build_quadratic_approximation
from .inference.map_optimizer import MAPOptimizer
from .inference.mode import find_posterior_mode

# Model
from .model.conjugate import PosteriorParameters, compute_posterior_parameters
from .model.prior import PriorParameters

# Posterior
from .posterior.beta_posterior import BetaPosterior, evaluate_beta_density
from .posterior.laplace_posterior import NormalApproximation

# Walkthrough orchestration
from .session.walkthrough import ComparisonConfig, ComparisonResult, run_comparison
from .utils.grid import probability_grid

__all__ = [
    # Core data
    "PriorParameters",
    "Observation",
    "PosteriorParameters",
    # The four steps
    "compute_posterior_parameters",
    "evaluate_beta_density",
    "find_posterior_mode",
    "build_quadratic_approximation",
    # Inference
    "MAPOptimizer",
    "LaplaceApproximation",
    # Posterior
    "BetaPosterior",
    "NormalApproximation",
    # Session orchestration
    "ComparisonConfig",
    "ComparisonResult",
    "run_comparison",
    "probability_grid",
    # Errors
    "BetaquapError",
    "InvalidParameter",
    "NoInteriorMode",
    "DegenerateApproximation",
    "ConvergenceError",
    # Subpackages
    "model",
    "inference",
    "posterior",
    "utils",
    "data",
    "session",
]
