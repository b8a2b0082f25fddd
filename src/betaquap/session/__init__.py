"""
session
=======

Walkthrough orchestration.

This subpackage provides:
- ComparisonConfig / ComparisonResult : settings and outputs of one run.
- run_comparison : conjugate update, exact densities, mode, quadratic
  approximation and discrepancy summary in one call.
- sample_size_sweep : the same comparison at growing sample sizes.
- comparison_summary / print_comparison_summary / sample_comparison :
  reporting helpers.
"""

from .walkthrough import (
    ComparisonConfig,
    ComparisonResult,
    comparison_summary,
    print_comparison_summary,
    run_comparison,
    sample_comparison,
    sample_size_sweep,
)

__all__ = [
    "ComparisonConfig",
    "ComparisonResult",
    "run_comparison",
    "sample_size_sweep",
    "comparison_summary",
    "print_comparison_summary",
    "sample_comparison",
]
