"""
Shape composers: derive renderable outlines (isosceles triangles, lunes, sectors,
regular polygons, offset lines) from a few control points picked on the globe.

Every composer shares the same arity contract:
    - None or an empty list returns a new empty list
    - Fewer points than the shape needs returns the input list object unchanged
    - Points beyond those the shape needs are ignored

Degenerate geometry (collinear or coincident control points) never raises; it
propagates as very large or NaN coordinates.
"""

__all__ = [
    'ArcParams', 'IsoscelesTriangleParams', 'RegularParams',
    'compute_isosceles_triangle_positions', 'compute_lune_positions',
    'compute_offset_line', 'compute_regular_positions', 'compute_sector_positions',
    'get_isosceles_triangle_params', 'get_lune_arc_params', 'get_regular_params',
    'get_sector_params',
]

import math
from typing import List, NamedTuple, Optional, Sequence

import numpy as np

from geodraw._geometry import (
    Circle, Winding, planar_azimuth, planar_distance, solve_circumcircle, winding_of
)
from geodraw.arc import close, tessellate
from geodraw.calc import rhumb_bearing_degrees
from geodraw.conversion import convert_to_meters
from geodraw.coordinates import Position3
from geodraw.frames import rotate_about_center
from geodraw.positions import distance, midpoint
from geodraw.projection import PlanarPoint, PlanarProjector, WebMercatorProjector
from geodraw.utils.logging import warn_once

# Circumcircles larger than this (projected meters) come from near-collinear points
_COLLINEAR_RADIUS_WARNING = 1e9


class ArcParams(NamedTuple):
    """The planar circle and angles (radians) underlying a lune or sector"""
    center: PlanarPoint
    radius: float
    start_angle: float
    end_angle: float


class IsoscelesTriangleParams(NamedTuple):
    base1: Position3
    base2: Position3
    apex: Position3
    midpoint: Position3
    base_length: float
    height: float


class RegularParams(NamedTuple):
    center: Position3
    radius: float


def _insufficient(positions: Optional[Sequence[Position3]], required: int) -> bool:
    return not positions or len(positions) < required


# -------------------------------------------------------------------------
# Isosceles triangle
# -------------------------------------------------------------------------

def compute_isosceles_triangle_positions(
    positions: Optional[List[Position3]]
) -> List[Position3]:
    """
    Computes an isosceles triangle from three control points.

    The first two points form the base. The third is rotated about the base midpoint
    until it sits on the perpendicular bisector of the base, keeping its distance from
    the midpoint, and becomes the apex.

    Bearings are rhumb-line bearings rounded to whole degrees, so the legs are only
    approximately equal (to within roughly a percent at typical map scales).

    Args:
        positions:
            A list of at least three Position3s: two base points and an apex control
            point

    Returns:
        A list of [base1, base2, apex]
    """
    if _insufficient(positions, 3):
        return positions or []

    p1, p2, p3 = positions[:3]
    mid = midpoint(p1, p2)

    angle = rhumb_bearing_degrees(mid, p2) - rhumb_bearing_degrees(mid, p3) - 90
    return [p1, p2, rotate_about_center(mid, p3, angle)]


def get_isosceles_triangle_params(
    positions: Optional[List[Position3]]
) -> Optional[IsoscelesTriangleParams]:
    """
    The dimensions of the isosceles triangle built from three control points.

    Returns:
        IsoscelesTriangleParams, or None when fewer than three points are given
    """
    if _insufficient(positions, 3):
        return None

    base1, base2, apex = compute_isosceles_triangle_positions(positions)
    mid = midpoint(base1, base2)
    return IsoscelesTriangleParams(
        base1=base1,
        base2=base2,
        apex=apex,
        midpoint=mid,
        base_length=distance(base1, base2),
        height=distance(mid, apex),
    )


# -------------------------------------------------------------------------
# Lune
# -------------------------------------------------------------------------

def _lune_arc(points: List[PlanarPoint]) -> ArcParams:
    p1, p2, p3 = points[:3]
    circle = solve_circumcircle(p1, p2, p3)
    if not circle.radius < _COLLINEAR_RADIUS_WARNING:
        warn_once(
            'Lune control points are (nearly) collinear; the fitted arc is degenerate. '
            '(this warning will not repeat)'
        )

    angle1 = planar_azimuth(p1, circle.center)
    angle2 = planar_azimuth(p2, circle.center)

    # Sweep counter-clockwise from whichever chord end puts the third point on the arc
    if winding_of(p1, p2, p3) is Winding.COUNTER_CLOCKWISE:
        start_angle, end_angle = angle2, angle1
    else:
        start_angle, end_angle = angle1, angle2

    return ArcParams(circle.center, circle.radius, start_angle, end_angle)


def compute_lune_positions(
    positions: Optional[List[Position3]],
    segments: int = 100,
    projector: Optional[PlanarProjector] = None
) -> List[Position3]:
    """
    Computes a lune (the region between a chord and a circular arc) from three control
    points: the chord runs between the first two points and the arc passes through all
    three.

    The circle is fit in the Web Mercator plane, and the outline is returned on the
    ellipsoid surface (height 0).

    Args:
        positions:
            A list of at least three Position3s

        segments: (int)
            (Default 100) The number of arc segments

        projector: (PlanarProjector)
            (Default WebMercatorProjector()) The plane the arc is fit in

    Returns:
        A closed list of `segments + 2` positions (fewer if the circle is undefined)
    """
    if _insufficient(positions, 3):
        return positions or []

    projector = projector or WebMercatorProjector()
    points = projector.project_all(positions)
    if len(points) < 3:
        return positions

    params = _lune_arc(points)
    arc = tessellate(
        Circle(params.center, params.radius),
        params.start_angle,
        params.end_angle,
        segments
    )
    return projector.unproject_all(close(arc))


def get_lune_arc_params(
    positions: Optional[List[Position3]],
    projector: Optional[PlanarProjector] = None
) -> Optional[ArcParams]:
    """
    The planar circle and sweep angles of the lune built from three control points.

    Returns:
        ArcParams, or None when fewer than three points are given
    """
    if _insufficient(positions, 3):
        return None

    points = (projector or WebMercatorProjector()).project_all(positions)
    if len(points) < 3:
        return None

    return _lune_arc(points)


# -------------------------------------------------------------------------
# Sector
# -------------------------------------------------------------------------

def _sector_arc(points: List[PlanarPoint]) -> ArcParams:
    center, start, end = points[:3]
    return ArcParams(
        center,
        planar_distance(start, center),
        planar_azimuth(start, center),
        planar_azimuth(end, center),
    )


def compute_sector_positions(
    positions: Optional[List[Position3]],
    segments: int = 100,
    projector: Optional[PlanarProjector] = None
) -> List[Position3]:
    """
    Computes a circular sector from a center and two boundary points.

    The radius is the planar distance from the center to the first boundary point; the
    arc sweeps counter-clockwise (in the projected plane) from the first boundary
    direction to the second. The outline returns to the center and closes.

    Args:
        positions:
            A list of at least three Position3s: center, start boundary, end boundary

        segments: (int)
            (Default 100) The number of arc segments

        projector: (PlanarProjector)
            (Default WebMercatorProjector()) The plane the arc is built in

    Returns:
        A closed list of `segments + 3` positions. Arc points lie on the ellipsoid
        surface, the center keeps its height
    """
    if _insufficient(positions, 3):
        return positions or []

    projector = projector or WebMercatorProjector()
    points = projector.project_all(positions)
    if len(points) < 3:
        return positions

    params = _sector_arc(points)
    outline = list(tessellate(
        Circle(params.center, params.radius),
        params.start_angle,
        params.end_angle,
        segments
    ))
    outline += [params.center, outline[0]]
    return projector.unproject_all(outline)


def get_sector_params(
    positions: Optional[List[Position3]],
    projector: Optional[PlanarProjector] = None
) -> Optional[ArcParams]:
    """
    The planar center, radius and sweep angles of the sector built from three
    control points.

    Returns:
        ArcParams, or None when fewer than three points are given
    """
    if _insufficient(positions, 3):
        return None

    points = (projector or WebMercatorProjector()).project_all(positions)
    if len(points) < 3:
        return None

    return _sector_arc(points)


# -------------------------------------------------------------------------
# Regular polygon
# -------------------------------------------------------------------------

def compute_regular_positions(
    positions: Optional[List[Position3]],
    sides: int = 6
) -> List[Position3]:
    """
    Computes the vertices of a regular polygon from its center and one vertex, by
    rotating the vertex about the center in equal steps.

    Args:
        positions:
            A list of at least two Position3s: the center, then a vertex

        sides: (int)
            (Default 6) The number of sides; values below 3, and non-finite
            values, are treated as 3

    Returns:
        A list of `sides` vertices (not closed), the first being a copy of the given
        vertex
    """
    if _insufficient(positions, 2):
        return positions or []

    center, vertex = positions[:2]
    sides = max(3, int(sides)) if math.isfinite(sides) else 3
    step = 360 / sides

    return [rotate_about_center(center, vertex, step * i) for i in range(sides)]


def get_regular_params(positions: Optional[List[Position3]]) -> Optional[RegularParams]:
    """
    The center and circumradius of the regular polygon built from a center and one
    vertex.

    Returns:
        RegularParams, or None when fewer than two points are given
    """
    if _insufficient(positions, 2):
        return None

    center, vertex = positions[:2]
    return RegularParams(center, distance(center, vertex))


# -------------------------------------------------------------------------
# Offset line
# -------------------------------------------------------------------------

def _offset_point(origin: np.ndarray, direction: np.ndarray, meters: float) -> Position3:
    return Position3.from_array(origin + direction * meters)


def compute_offset_line(
    positions: Optional[List[Position3]],
    offset_km: float
) -> List[Position3]:
    """
    Computes a line parallel to a polyline.

    For each segment (a, b) the offset direction is the unit vector a x (a - b), which
    lies in the local horizontal plane, perpendicular to the segment. Both ends of the
    segment are moved `offset_km` kilometers along it; the sign of the offset selects
    the side. The first point follows the first segment, and every later point follows
    the segment ending at it, so the output has one point per input point.

    A zero-length segment has no direction and leaves its points in place.

    Args:
        positions:
            A list of Position3s

        offset_km:
            The offset distance, in kilometers

    Returns:
        A list of positions the same length as the input
    """
    if _insufficient(positions, 2):
        return positions or []

    meters = convert_to_meters(offset_km, 'km')
    offset_line: List[Position3] = []
    for i in range(1, len(positions)):
        start, end = positions[i - 1].to_array(), positions[i].to_array()

        direction = np.cross(start, start - end)
        norm = np.linalg.norm(direction)
        if norm:
            direction = direction / norm
        else:
            warn_once(
                'Offset line contains a zero-length segment, which is left in place. '
                '(this warning will not repeat)'
            )

        if i == 1:
            offset_line.append(_offset_point(start, direction, meters))

        offset_line.append(_offset_point(end, direction, meters))

    return offset_line
