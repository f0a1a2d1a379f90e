"""
Representation of points in the Earth-fixed Cartesian frame and on the ellipsoid
"""

__all__ = ['GeodeticPoint', 'Position3']

import math
from typing import Iterable, Optional, Tuple

import numpy as np


class Position3:
    """
    A point in the Earth-centered, Earth-fixed Cartesian frame, in meters.

    Coordinates are not validated; NaN and infinite values are carried through
    every calculation unchanged.
    """

    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float, y: float, z: float):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __eq__(self, other):
        if not isinstance(other, Position3):
            return False

        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __repr__(self):
        return f'<Position3({self.x}, {self.y}, {self.z})>'

    @classmethod
    def from_array(cls, arr: Iterable[float]) -> 'Position3':
        """Creates a Position3 from any 3-length iterable (list, tuple, numpy array)"""
        x, y, z = arr
        return cls(x, y, z)

    @classmethod
    def from_degrees(cls, longitude: float, latitude: float, height: float = 0.) -> 'Position3':
        """
        Creates a Position3 on the WGS84 ellipsoid from geodetic degrees.

        Args:
            longitude:
                The longitude, in degrees

            latitude:
                The latitude, in degrees

            height: (float)
                (Default 0.) The height above the ellipsoid, in meters

        Returns:
            Position3
        """
        return GeodeticPoint.from_degrees(longitude, latitude, height).to_position()

    @classmethod
    def from_radians(cls, longitude: float, latitude: float, height: float = 0.) -> 'Position3':
        """Creates a Position3 on the WGS84 ellipsoid from geodetic radians"""
        return GeodeticPoint(longitude, latitude, height).to_position()

    def copy(self) -> 'Position3':
        return Position3(self.x, self.y, self.z)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def to_array(self) -> np.ndarray:
        """Converts the position to a numpy float64 array of shape (3,)"""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_float(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z

    def to_geodetic(self) -> Optional['GeodeticPoint']:
        """
        Converts the position to geodetic coordinates on the WGS84 ellipsoid.

        Returns:
            GeodeticPoint, or None if the position is at (or very near) the center
            of the ellipsoid, where no geodetic surface point exists
        """
        from geodraw.ellipsoid import WGS84  # pylint: disable=import-outside-toplevel
        return WGS84.cartesian_to_cartographic(self)


class GeodeticPoint:
    """
    A (longitude, latitude, height) triplet on the WGS84 ellipsoid. Longitude and latitude
    are stored in radians, height in meters above the ellipsoid.
    """

    __slots__ = ('longitude', 'latitude', 'height')

    def __init__(self, longitude: float, latitude: float, height: float = 0.):
        self.longitude = float(longitude)
        self.latitude = float(latitude)
        self.height = float(height)

    def __eq__(self, other):
        if not isinstance(other, GeodeticPoint):
            return False

        return (
            self.longitude == other.longitude and
            self.latitude == other.latitude and
            self.height == other.height
        )

    def __hash__(self):
        return hash((self.longitude, self.latitude, self.height))

    def __repr__(self):
        return f'<GeodeticPoint({self.longitude}, {self.latitude}, {self.height})>'

    @classmethod
    def from_degrees(cls, longitude: float, latitude: float, height: float = 0.) -> 'GeodeticPoint':
        return cls(math.radians(longitude), math.radians(latitude), height)

    @property
    def longitude_degrees(self) -> float:
        return math.degrees(self.longitude)

    @property
    def latitude_degrees(self) -> float:
        return math.degrees(self.latitude)

    def to_degrees(self) -> Tuple[float, float, float]:
        """
        Returns:
            Tuple of (longitude in degrees, latitude in degrees, height in meters)
        """
        return self.longitude_degrees, self.latitude_degrees, self.height

    def to_position(self) -> Position3:
        """Converts the geodetic point to a WGS84 Earth-fixed Position3"""
        from geodraw.ellipsoid import WGS84  # pylint: disable=import-outside-toplevel
        return WGS84.cartographic_to_cartesian(self)
