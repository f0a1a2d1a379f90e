"""Module for miscellaneous multi-use numeric functions"""

__all__ = [
    'clamp', 'map_range', 'round_half_up', 'to_float_or_zero', 'wrap_number'
]

import math
from typing import Any, Tuple


def round_half_up(value: float, precision: int) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded away from zero.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = abs(value) + 10 ** -(precision + 12)

    return math.copysign(round(mod, precision), value)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Limits value to the closed range [minimum, maximum]"""
    return min(max(value, minimum), maximum)


def map_range(
    value: float,
    in_min: float,
    in_max: float,
    out_min: float,
    out_max: float
) -> float:
    """
    Linearly maps a value from one range onto another. Values outside the input range
    are extrapolated, not clamped.

    Args:
        value:
            The value to map

        in_min, in_max:
            The bounds of the input range

        out_min, out_max:
            The bounds of the output range

    Returns:
        float
    """
    return (value - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


def wrap_number(value: float, bounds: Tuple[float, float], include_max: bool = False) -> float:
    """
    Wraps a value into the half-open range [min, max), e.g. a longitude into [-180, 180).

    Args:
        value:
            The value to wrap

        bounds:
            A two-tuple of (min, max)

        include_max: (bool)
            (Default False) If True, a value exactly equal to max is returned as-is
            rather than wrapped to min

    Returns:
        float
    """
    lower, upper = bounds
    if value == upper and include_max:
        return value

    span = upper - lower
    return ((value - lower) % span + span) % span + lower


def to_float_or_zero(value: Any) -> float:
    """
    Coerces a value to float, treating NaN and anything that cannot be coerced as 0.

    Args:
        value:
            A number, numeric string, or None

    Returns:
        float
    """
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.

    if math.isnan(result):
        return 0.

    return result
