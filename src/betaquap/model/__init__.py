"""
betaquap.model
==============

Model-layer API: prior and conjugate posterior parameters.

Includes
--------
- PriorParameters (Beta prior)
- PosteriorParameters (exact Beta posterior shape parameters)
- compute_posterior_parameters (conjugate Beta-Binomial update)

Typical usage
-------------
    from betaquap.model import PriorParameters, compute_posterior_parameters
"""

from .conjugate import PosteriorParameters, compute_posterior_parameters
from .prior import PriorParameters, check_shape_parameters

__all__ = [
    "PriorParameters",
    "PosteriorParameters",
    "compute_posterior_parameters",
    "check_shape_parameters",
]
