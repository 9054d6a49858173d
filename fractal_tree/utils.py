"""
Small numeric helpers.
"""

import numpy as np

from .constants import D2R, EPS


def round_eps(value: float) -> float:
    """Snap values within EPS of zero to exactly zero."""
    return value if abs(value) > EPS else 0.0


def to_radian(value: float) -> float:
    return D2R * value


def rand_int(rng: np.random.Generator, low: int, high: int) -> int:
    return int(np.floor(low + rng.random() * (high - low) + 0.5))


def rand_norm(rng: np.random.Generator, mean: float = 0.0, sigma: float = 1.0) -> float:
    """Random value with a half-normal magnitude and random sign around mean."""
    sign = -1.0 if rng.random() < 0.5 else 1.0
    return mean + sign * sigma * np.sqrt(-2 * np.log(1.0 - rng.random()))
