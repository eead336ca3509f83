"""Small numeric helpers used across the simulation."""

import math


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between ``a`` and ``b``."""
    return a + (b - a) * t


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp ``value`` into ``[minimum, maximum]``."""
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def sigmoid(x: float) -> float:
    """Logistic curve, safe for large magnitudes."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)


def normalize(
    value: float, old_min: float, old_max: float, new_min: float, new_max: float
) -> float:
    """Map ``value`` from one range onto another."""
    old_range = old_max - old_min
    new_range = new_max - new_min
    return ((value - old_min) * new_range) / old_range + new_min