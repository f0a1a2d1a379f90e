"""
Bearing and surface-distance calculations
"""

__all__ = [
    'haversine_distance', 'rhumb_bearing_degrees', 'surface_distance',
    'vincenty_distance',
]

import math
from functools import partial
from typing import Literal, Tuple

import numpy as np

from geodraw._const import EARTH_RADIUS_METERS
from geodraw.coordinates import GeodeticPoint, Position3
from geodraw.ellipsoid import WGS84, Ellipsoid
from geodraw.utils.functions import round_half_up

_VINCENTY_MAX_ITERATIONS = 200
_VINCENTY_TOLERANCE = 1e-12


def rhumb_bearing_degrees(start: Position3, end: Position3, precision: int = 0) -> float:
    """
    The constant-heading (rhumb line) bearing from one position to another, in degrees
    clockwise from north.

    The longitude difference is not wrapped, so pairs straddling the antimeridian get
    the long way round.

    Args:
        start:
            The start position

        end:
            The end position

        precision: (int)
            (Default 0) The decimal precision to round the resulting bearing to

    Returns:
        (float) the bearing in degrees, within [0, 360]
    """
    geo1, geo2 = start.to_geodetic(), end.to_geodetic()
    if geo1 is None or geo2 is None:
        return math.nan

    d_lon = geo2.longitude - geo1.longitude
    with np.errstate(divide='ignore', invalid='ignore'):
        d_phi = float(np.log(
            np.tan(geo2.latitude / 2 + math.pi / 4) / np.tan(geo1.latitude / 2 + math.pi / 4)
        ))

    bearing = (math.degrees(math.atan2(d_lon, d_phi)) + 360) % 360
    return round_half_up(bearing, precision)


def haversine_distance(
    point1: GeodeticPoint,
    point2: GeodeticPoint,
    radius: float = EARTH_RADIUS_METERS
) -> float:
    """
    The great-circle distance in meters between two geodetic points on a sphere.
    Heights are ignored.

    Args:
        point1, point2:
            The GeodeticPoints to measure between

        radius: (float)
            (Default the Earth's mean radius) The sphere radius, in meters

    Returns:
        float
    """
    half_d_lat = (point2.latitude - point1.latitude) / 2
    half_d_lon = (point2.longitude - point1.longitude) / 2
    chord = (
        math.sin(half_d_lat) ** 2 +
        math.cos(point1.latitude) * math.cos(point2.latitude) * math.sin(half_d_lon) ** 2
    )

    return 2 * radius * math.asin(math.sqrt(min(chord, 1.)))


def vincenty_distance(
    point1: GeodeticPoint,
    point2: GeodeticPoint,
    ellipsoid: Ellipsoid = WGS84
) -> float:
    """
    The length in meters of the geodesic between two geodetic points, by Vincenty's
    inverse method on an ellipsoid. Heights are ignored.

    Nearly antipodal points, where the iteration does not converge, fall back to
    haversine_distance().

    Args:
        point1, point2:
            The GeodeticPoints to measure between

        ellipsoid: (Ellipsoid)
            (Default WGS84) The reference ellipsoid

    Returns:
        float
    """
    a, b = float(ellipsoid.radii[0]), float(ellipsoid.radii[2])
    f = (a - b) / a

    sin_u1, cos_u1 = _reduced_latitude(point1.latitude, f)
    sin_u2, cos_u2 = _reduced_latitude(point2.latitude, f)
    d_lon = point2.longitude - point1.longitude

    lam = d_lon
    for _ in range(_VINCENTY_MAX_ITERATIONS):
        sin_lam, cos_lam = math.sin(lam), math.cos(lam)
        sin_sigma = math.hypot(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
        if sin_sigma == 0.:
            return 0.

        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1. - sin_alpha ** 2

        # Zero only for equatorial lines
        cos_2sm = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha if cos_sq_alpha else 0.

        c = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
        previous = lam
        lam = d_lon + (1 - c) * f * sin_alpha * (
            sigma + c * sin_sigma * (cos_2sm + c * cos_sigma * (2 * cos_2sm ** 2 - 1))
        )
        if abs(lam - previous) < _VINCENTY_TOLERANCE:
            break
    else:
        return haversine_distance(point1, point2)

    u_sq = cos_sq_alpha * (a ** 2 - b ** 2) / b ** 2
    big_a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    big_b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    d_sigma = big_b * sin_sigma * (
        cos_2sm + big_b / 4 * (
            cos_sigma * (2 * cos_2sm ** 2 - 1) -
            big_b / 6 * cos_2sm * (4 * sin_sigma ** 2 - 3) * (4 * cos_2sm ** 2 - 3)
        )
    )

    return b * big_a * (sigma - d_sigma)


def _reduced_latitude(latitude: float, flattening: float) -> Tuple[float, float]:
    """The sine and cosine of the reduced (parametric) latitude"""
    reduced = math.atan((1 - flattening) * math.tan(latitude))
    return math.sin(reduced), math.cos(reduced)


def surface_distance(
    start: Position3,
    end: Position3,
    algorithm: Literal['haversine', 'vincenty'] = 'vincenty',
    ellipsoid: Ellipsoid = WGS84
) -> float:
    """
    The distance in meters along the ellipsoid surface between the geodetic
    footprints of two positions. Heights are ignored.

    Args:
        start:
            The start position

        end:
            The end position

        algorithm: (str)
            (Default 'vincenty') 'vincenty' for the ellipsoidal geodesic, or
            'haversine' for a great circle on the mean-radius sphere

        ellipsoid: (Ellipsoid)
            (Default WGS84) The reference ellipsoid

    Returns:
        float; NaN when either position is at the ellipsoid's center
    """
    if algorithm == 'vincenty':
        measure = partial(vincenty_distance, ellipsoid=ellipsoid)
    elif algorithm == 'haversine':
        measure = haversine_distance
    else:
        raise ValueError(f"Unknown algorithm '{algorithm}'. Options: ['haversine', 'vincenty']")

    geo1 = ellipsoid.cartesian_to_cartographic(start)
    geo2 = ellipsoid.cartesian_to_cartographic(end)
    if geo1 is None or geo2 is None:
        return math.nan

    return measure(geo1, geo2)
