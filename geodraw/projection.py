"""
Mappings between Earth-fixed positions and a flat projected plane.

Circle fitting, arc tessellation and winding tests are only defined on a plane,
so the shape composers round-trip their inputs through one of these projectors.
Planar distances are not metric-accurate for shapes spanning very large extents
or lying near the poles; that distortion is inherent to the projection.
"""

__all__ = ['PlanarPoint', 'PlanarProjector', 'TransformerProjector', 'WebMercatorProjector']

from abc import ABC, abstractmethod
import math
from typing import Iterable, List, Optional

import numpy as np

from geodraw._const import WEB_MERCATOR_MAX_LATITUDE
from geodraw.coordinates import GeodeticPoint, Position3
from geodraw.ellipsoid import WGS84, Ellipsoid
from geodraw.utils.mixins import LoggingMixin


class PlanarPoint:
    """
    A point in a projected plane. `z` carries the height of the source position
    through a projection round trip and plays no part in planar math.

    PlanarPoints are only comparable with points produced by the same projector.
    """

    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float, y: float, z: float = 0.):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __eq__(self, other):
        if not isinstance(other, PlanarPoint):
            return False

        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __iter__(self):
        return iter((self.x, self.y))

    def __repr__(self):
        return f'<PlanarPoint({self.x}, {self.y})>'

    def is_nan(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y)


class PlanarProjector(ABC):
    """Base class for bidirectional Position3 <-> PlanarPoint projections"""

    @abstractmethod
    def project(self, position: Position3) -> Optional[PlanarPoint]:
        """
        Projects a position onto the plane. Returns None for positions that have no
        geodetic equivalent (the ellipsoid center).
        """

    @abstractmethod
    def unproject(self, point: PlanarPoint) -> Position3:
        """Maps a planar point back to an Earth-fixed position at height point.z"""

    def project_all(self, positions: Iterable[Position3]) -> List[PlanarPoint]:
        """Projects several positions, skipping any that cannot be projected"""
        return [
            point for point in map(self.project, positions)
            if point is not None
        ]

    def unproject_all(self, points: Iterable[PlanarPoint]) -> List[Position3]:
        """Unprojects several planar points, skipping any whose x or y is NaN"""
        return [self.unproject(point) for point in points if not point.is_nan()]


class WebMercatorProjector(PlanarProjector, LoggingMixin):
    """
    Spherical Web Mercator (EPSG:3857 equations) scaled by the ellipsoid's
    equatorial radius:

        x = a * longitude
        y = a * ln(tan(pi/4 + latitude/2))

    Latitudes beyond +/-85.0511287798 degrees are clamped to that limit.

    Args:
        ellipsoid: (Ellipsoid)
            (Default WGS84) The ellipsoid positions are referenced to
    """

    def __init__(self, ellipsoid: Ellipsoid = WGS84):
        self.ellipsoid = ellipsoid
        self.semimajor_axis = ellipsoid.maximum_radius
        self.one_over_semimajor_axis = 1. / self.semimajor_axis

    def __repr__(self):
        return f'<WebMercatorProjector({self.ellipsoid!r})>'

    def geodetic_latitude_to_mercator_angle(self, latitude: float) -> float:
        if abs(latitude) > WEB_MERCATOR_MAX_LATITUDE:
            self.warn_once(
                'Latitudes beyond +/-85.0511 degrees are clamped by the Web Mercator '
                'projection. (this warning will not repeat)'
            )
            latitude = math.copysign(WEB_MERCATOR_MAX_LATITUDE, latitude)

        sin_latitude = math.sin(latitude)
        return 0.5 * math.log((1. + sin_latitude) / (1. - sin_latitude))

    @staticmethod
    def mercator_angle_to_geodetic_latitude(angle: float) -> float:
        with np.errstate(over='ignore', invalid='ignore'):
            return float(np.pi / 2. - 2. * np.arctan(np.exp(-angle)))

    def project(self, position: Position3) -> Optional[PlanarPoint]:
        geodetic = self.ellipsoid.cartesian_to_cartographic(position)
        if geodetic is None:
            return None

        return self.project_geodetic(geodetic)

    def project_geodetic(self, point: GeodeticPoint) -> PlanarPoint:
        return PlanarPoint(
            point.longitude * self.semimajor_axis,
            self.geodetic_latitude_to_mercator_angle(point.latitude) * self.semimajor_axis,
            point.height,
        )

    def unproject(self, point: PlanarPoint) -> Position3:
        return self.ellipsoid.cartographic_to_cartesian(self.unproject_geodetic(point))

    def unproject_geodetic(self, point: PlanarPoint) -> GeodeticPoint:
        return GeodeticPoint(
            point.x * self.one_over_semimajor_axis,
            self.mercator_angle_to_geodetic_latitude(point.y * self.one_over_semimajor_axis),
            point.z,
        )


class TransformerProjector(PlanarProjector):
    """
    A projector backed by a pyproj Transformer from geodetic WGS84 (EPSG:4326) to an
    arbitrary projected CRS. Requires the optional 'pyproj' dependency
    (pip install geodraw[proj]).

    Args:
        crs:
            A string representing the target CRS, e.g. 'EPSG:3857'

        ellipsoid: (Ellipsoid)
            (Default WGS84) The ellipsoid positions are referenced to
    """

    def __init__(self, crs: str, ellipsoid: Ellipsoid = WGS84):
        from pyproj import Transformer  # pylint: disable=import-outside-toplevel

        self.crs = crs
        self.ellipsoid = ellipsoid
        self._transformer = Transformer.from_crs('EPSG:4326', crs, always_xy=True)

    def __repr__(self):
        return f'<TransformerProjector({self.crs})>'

    def project(self, position: Position3) -> Optional[PlanarPoint]:
        geodetic = self.ellipsoid.cartesian_to_cartographic(position)
        if geodetic is None:
            return None

        x, y = self._transformer.transform(geodetic.longitude_degrees, geodetic.latitude_degrees)
        return PlanarPoint(x, y, geodetic.height)

    def unproject(self, point: PlanarPoint) -> Position3:
        lon, lat = self._transformer.transform(point.x, point.y, direction='INVERSE')
        return self.ellipsoid.cartographic_to_cartesian(
            GeodeticPoint.from_degrees(lon, lat, point.z)
        )
