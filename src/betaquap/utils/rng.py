"""
rng.py
------

Random number utilities for betaquap.

Posterior and approximation objects draw samples with JAX PRNG keys;
these helpers keep key handling in one place.

Examples
--------
>>> from betaquap.utils.rng import seed, split
>>> key = seed(0)
>>> k1, k2 = split(key)
"""

from __future__ import annotations

import jax
import jax.random as jr


def seed(seed_value: int) -> jax.Array:
    """
    Create a new PRNG key from an integer seed.

    Parameters
    ----------
    seed_value : int
        Seed for random number generation.

    Returns
    -------
    jax.Array
        New PRNG key.
    """
    return jr.PRNGKey(seed_value)


def split(key: jax.Array, num: int = 2) -> jax.Array:
    """
    Split a PRNG key into `num` independent keys.

    Parameters
    ----------
    key : jax.Array
        RNG key to split.
    num : int, default=2
        Number of new keys to return.

    Returns
    -------
    jax.Array
        Stacked keys; unpack with ``k1, k2 = split(key)``.
    """
    return jr.split(key, num=num)


def ensure_key(key: jax.Array | int | None) -> jax.Array:
    """Return `key` unchanged, or a fresh key for an int seed (None -> seed 0)."""
    if key is None:
        return seed(0)
    if isinstance(key, int):
        return seed(key)
    return key
