
import sys

from geodraw._version import __version__  # noqa: F401
from geodraw.utils.logging import LOGGER
from geodraw.coordinates import GeodeticPoint, Position3
from geodraw.ellipsoid import Ellipsoid, WGS84
from geodraw.frames import (
    LocalFrame, build_tangent_frame, rotate_about_center, translate_with_rotation
)
from geodraw.projection import PlanarPoint, TransformerProjector, WebMercatorProjector
from geodraw.composers import (
    compute_isosceles_triangle_positions, compute_lune_positions, compute_offset_line,
    compute_regular_positions, compute_sector_positions
)
from geodraw.utils.conditional_imports import ConditionalPackageInterceptor


ConditionalPackageInterceptor.permit_packages(
    {
        'pyproj': 'geodraw[proj]',
    }
)
sys.meta_path.append(ConditionalPackageInterceptor)  # type: ignore

__all__ = [
    'Ellipsoid',
    'GeodeticPoint',
    'LocalFrame',
    'PlanarPoint',
    'Position3',
    'TransformerProjector',
    'WGS84',
    'WebMercatorProjector',
    'build_tangent_frame',
    'compute_isosceles_triangle_positions',
    'compute_lune_positions',
    'compute_offset_line',
    'compute_regular_positions',
    'compute_sector_positions',
    'rotate_about_center',
    'translate_with_rotation',
    'LOGGER',
]
