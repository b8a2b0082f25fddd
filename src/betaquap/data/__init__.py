"""
betaquap.data
=============

submodule for handling observed binomial data.

Includes:
- observation: Observation (n trials, y successes) and outcome loaders
"""

from .observation import Observation

__all__ = ["Observation"]
