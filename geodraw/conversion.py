"""
Module for unit conversions
"""
__all__ = ['convert_to_meters']

_METERS_PER_UNIT = {
    'm': 1,
    'km': 1000,
    'mi': 1609.34,
    'ft': 0.3048,
    'nmi': 1852,
    'yd': 0.9144,
}


def convert_to_meters(distance: float, unit: str) -> float:
    """
    Converts distance to meters.

    Args:
        distance (float): The distance value.
        unit (str): The unit of distance (meter = 'm', kilometer = 'km', mile = 'mi',
            feet = 'ft', nautical mile = 'nmi', yard = 'yd').

    Returns:
        float: The distance in meters.
    """
    unit = unit.lower()
    if unit not in _METERS_PER_UNIT:
        raise ValueError(
            f"Unrecognized distance unit '{unit}'. Options: {list(_METERS_PER_UNIT.keys())}"
        )

    return distance * _METERS_PER_UNIT[unit]
