"""
Quadratic approximation walkthrough
-----------------------------------

Beta(1, 1) prior, 30 trials with 20 successes:
- exact posterior Beta(21, 11)
- mode 2/3 and curvature -135 at the mode
- normal approximation N(0.667, 0.0861^2)

Then the same success proportion at n = 9, 18, 36 to show the
approximation tightening as n grows. Plots are written to ./plots.
"""
from __future__ import annotations

import logging
import os
import sys

import matplotlib.pyplot as plt

# Ensure local src is importable when running directly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../src")))

from betaquap import (
    Observation,
    PriorParameters,
    build_quadratic_approximation,
    compute_posterior_parameters,
    evaluate_beta_density,
    find_posterior_mode,
    probability_grid,
)
from betaquap.session import ComparisonConfig, print_comparison_summary, run_comparison, sample_size_sweep
from betaquap.utils import plot_comparison, plot_density_series

PLOTS_DIR = os.path.join(os.path.dirname(__file__), "plots")

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# 1) The four steps, one call each
print("[1/3] Step by step...")
# --8<-- [start:steps]
prior = PriorParameters(a=1, b=1)
obs = Observation(n=30, y=20)
grid = probability_grid(step=0.001)

params = compute_posterior_parameters(prior, obs)                  # Beta(21, 11)
exact = evaluate_beta_density(params.alpha, params.beta, grid)
mode = find_posterior_mode(params.alpha, params.beta)              # 20 / 30
mode_brent = find_posterior_mode(params.alpha, params.beta, method="brent")
sigma, approx = build_quadratic_approximation(params.alpha, params.beta, mode, grid)
# --8<-- [end:steps]
print(f"  posterior Beta({params.alpha:g}, {params.beta:g})")
print(f"  mode (closed form) = {mode:.6f}, mode (brent) = {mode_brent:.6f}")
print(f"  sigma = {sigma:.4f}")

os.makedirs(PLOTS_DIR, exist_ok=True)
ax = plot_density_series(
    grid,
    {"prior": prior.density(grid), "exact posterior": exact, "quadratic approximation": approx},
    title="Beta(1, 1) prior, n = 30, y = 20",
)
ax.figure.savefig(os.path.join(PLOTS_DIR, "exact_vs_quadratic.png"), dpi=150, bbox_inches="tight")
plt.close(ax.figure)

# 2) Same thing via the session helper, with a numeric mode finder
print("[2/3] run_comparison with the Optax mode finder...")
result = run_comparison(prior, obs, config=ComparisonConfig(mode_method="optax"))
print_comparison_summary(result)

# 3) Growing sample size at a fixed success proportion
print("[3/3] Sample size sweep...")
results = sample_size_sweep(prior, proportion=6 / 9, sizes=(9, 18, 36))
fig, axes = plt.subplots(1, len(results), figsize=(12, 3.5), sharey=False)
for ax, res in zip(axes, results):
    plot_comparison(res, ax=ax, include_prior=False)
    print(f"  n = {res.observation.n:3d}: sigma = {res.sigma:.4f}, L1 gap = {res.discrepancy['l1']:.4f}")
fig.tight_layout()
fig.savefig(os.path.join(PLOTS_DIR, "sample_size_sweep.png"), dpi=150, bbox_inches="tight")
plt.close(fig)
