"""
Reference ellipsoid math: surface normals, projection of points onto the surface,
and conversion between geodetic and Earth-fixed Cartesian coordinates
"""

__all__ = ['Ellipsoid', 'WGS84']

import math
from typing import Optional

import numpy as np

from geodraw._const import CENTER_TOLERANCE_SQUARED, EPSILON12, WGS84_A, WGS84_B
from geodraw.coordinates import GeodeticPoint, Position3


class Ellipsoid:
    """
    An ellipsoid of revolution defined by its equatorial (a) and polar (b) radii.

    Args:
        a:
            The equatorial radius, in meters

        b:
            The polar radius, in meters
    """

    def __init__(self, a: float, b: float):
        self.radii = np.array([a, a, b], dtype=np.float64)
        self.radii_squared = self.radii ** 2
        self.one_over_radii = 1. / self.radii
        self.one_over_radii_squared = 1. / self.radii_squared

    def __repr__(self):
        return f'<Ellipsoid({self.radii[0]}, {self.radii[2]})>'

    @property
    def maximum_radius(self) -> float:
        return float(self.radii.max())

    def geodetic_surface_normal(self, position: Position3) -> np.ndarray:
        """
        The unit normal to the ellipsoid surface at the geodetic surface point beneath
        (or above) a position.

        Args:
            position:
                A Position3

        Returns:
            numpy array of shape (3,)
        """
        normal = position.to_array() * self.one_over_radii_squared
        with np.errstate(divide='ignore', invalid='ignore'):
            return normal / np.linalg.norm(normal)

    def scale_to_geodetic_surface(self, position: Position3) -> Optional[Position3]:
        """
        Projects a position onto the ellipsoid surface along the geodetic surface normal,
        using Newton's method on the scaled distance to the surface.

        Args:
            position:
                A Position3

        Returns:
            The projected Position3, or None when the position lies within the center
            tolerance of the ellipsoid origin
        """
        pos = position.to_array()
        scaled_sq = (pos * self.one_over_radii) ** 2
        squared_norm = scaled_sq.sum()
        ratio = math.sqrt(1. / squared_norm) if squared_norm else math.inf

        # Initial guess: the point where the ray from the center meets the surface
        intersection = pos * ratio
        if squared_norm < CENTER_TOLERANCE_SQUARED:
            return Position3.from_array(intersection) if math.isfinite(ratio) else None

        gradient = 2. * intersection * self.one_over_radii_squared
        lam = (1. - ratio) * np.linalg.norm(pos) / (0.5 * np.linalg.norm(gradient))
        correction = 0.

        while True:
            lam -= correction
            multiplier = 1. / (1. + lam * self.one_over_radii_squared)
            multiplier_sq = multiplier ** 2
            func = float((scaled_sq * multiplier_sq).sum()) - 1.
            denominator = float(
                (scaled_sq * multiplier_sq * multiplier * self.one_over_radii_squared).sum()
            )
            correction = func / (-2. * denominator)
            if not abs(func) > EPSILON12:
                break

        return Position3.from_array(pos * multiplier)

    def cartesian_to_cartographic(self, position: Position3) -> Optional[GeodeticPoint]:
        """
        Converts an Earth-fixed position to geodetic longitude, latitude and height.

        Args:
            position:
                A Position3

        Returns:
            GeodeticPoint, or None when the position is at the ellipsoid center
        """
        surface = self.scale_to_geodetic_surface(position)
        if surface is None:
            return None

        normal = surface.to_array() * self.one_over_radii_squared
        normal = normal / np.linalg.norm(normal)
        offset = position.to_array() - surface.to_array()

        longitude = math.atan2(normal[1], normal[0])
        latitude = math.asin(normal[2])
        height = math.copysign(1., float(np.dot(offset, position.to_array()))) * float(
            np.linalg.norm(offset)
        )
        return GeodeticPoint(longitude, latitude, height)

    def cartographic_to_cartesian(self, point: GeodeticPoint) -> Position3:
        """
        Converts geodetic longitude, latitude (radians) and height (meters) to an
        Earth-fixed position.

        Args:
            point:
                A GeodeticPoint

        Returns:
            Position3
        """
        # numpy trig so that non-finite angles become NaN instead of raising
        with np.errstate(invalid='ignore'):
            cos_lat = np.cos(point.latitude)
            normal = np.array([
                cos_lat * np.cos(point.longitude),
                cos_lat * np.sin(point.longitude),
                np.sin(point.latitude),
            ])
            normal = normal / np.linalg.norm(normal)
            k = self.radii_squared * normal
            gamma = np.sqrt(np.dot(normal, k))
            return Position3.from_array(k / gamma + normal * point.height)


WGS84 = Ellipsoid(WGS84_A, WGS84_B)
