"""
Aggregations and measurements over lists of positions: heights, distances,
centroids, interpolation and point-to-line projection.

All distances are straight-line (chord) distances in the Earth-fixed frame, and
all interpolation is linear in Cartesian space. These are approximations that
hold for points close together; use geodraw.calc.surface_distance for distances
along the ellipsoid.
"""

__all__ = [
    'add_height', 'add_height_all', 'average_height', 'centroid', 'distance',
    'interpolate', 'lerp', 'max_height', 'midpoint', 'min_height',
    'perpendicular_foot', 'point_to_line_distance', 'set_height',
    'set_height_all', 'total_distance',
]

from typing import List, Optional, Sequence

import numpy as np

from geodraw.coordinates import GeodeticPoint, Position3
from geodraw.utils.functions import round_half_up, to_float_or_zero


def _heights(positions: Sequence[Position3]) -> List[float]:
    return [position.to_geodetic().height for position in positions]


def max_height(positions: Optional[Sequence[Position3]], default: float = 0.) -> float:
    """
    The greatest height above the ellipsoid among the positions, rounded to 2 decimals.

    The search is seeded with `default`, so the result is never lower than it.

    Args:
        positions:
            A list of Position3s

        default: (float)
            (Default 0.) The starting value, returned unchanged for empty input

    Returns:
        float
    """
    if not positions:
        return default

    return round_half_up(max([default, *_heights(positions)]), 2)


def min_height(positions: Optional[Sequence[Position3]], default: float = 0.) -> float:
    """
    The lowest height above the ellipsoid among the positions, rounded to 2 decimals.

    Args:
        positions:
            A list of Position3s

        default: (float)
            (Default 0.) Returned unchanged for empty input

    Returns:
        float
    """
    if not positions:
        return default

    return round_half_up(min(_heights(positions)), 2)


def average_height(positions: Optional[Sequence[Position3]]) -> float:
    """The mean height above the ellipsoid, rounded to 2 decimals; 0 for empty input"""
    if not positions:
        return 0.

    heights = _heights(positions)
    return round_half_up(sum(heights) / len(heights), 2)


def _with_height(position: Position3, height: float) -> Position3:
    geodetic = position.to_geodetic()
    return GeodeticPoint(geodetic.longitude, geodetic.latitude, height).to_position()


def add_height(position: Position3, delta: float) -> Position3:
    """
    Raises (or lowers) a position by `delta` meters, keeping its longitude and latitude.

    `delta` is coerced to float; NaN and non-numeric values count as 0. A delta of 0
    returns the very same Position3 object rather than a copy.
    """
    delta = to_float_or_zero(delta)
    if delta == 0:
        return position

    return _with_height(position, position.to_geodetic().height + delta)


def add_height_all(positions: List[Position3], delta: float) -> List[Position3]:
    """
    Raises (or lowers) every position by `delta` meters. A delta of 0 (after coercion)
    returns the very same list object.
    """
    delta = to_float_or_zero(delta)
    if delta == 0:
        return positions

    return [add_height(position, delta) for position in positions]


def set_height(position: Position3, height: float) -> Position3:
    """
    Moves a position to `height` meters above the ellipsoid, keeping its longitude and
    latitude. Always returns a new Position3. NaN and non-numeric heights count as 0.
    """
    return _with_height(position, to_float_or_zero(height))


def set_height_all(positions: List[Position3], height: float) -> List[Position3]:
    """Moves every position to `height` meters above the ellipsoid, returning a new list"""
    height = to_float_or_zero(height)
    return [_with_height(position, height) for position in positions]


def distance(a: Position3, b: Position3) -> float:
    """Straight-line distance between two positions, in meters"""
    return float(np.linalg.norm(a.to_array() - b.to_array()))


def total_distance(positions: Optional[Sequence[Position3]]) -> float:
    """
    The length of the path through the positions (sum of straight-line distances
    between consecutive positions), rounded to 2 decimals. Fewer than two positions
    give 0.
    """
    if not positions or len(positions) < 2:
        return 0.

    return round_half_up(
        sum(distance(a, b) for a, b in zip(positions[:-1], positions[1:])),
        2
    )


def centroid(positions: Optional[Sequence[Position3]]) -> Optional[Position3]:
    """
    The arithmetic mean of the positions' Cartesian coordinates.

    This is not a geodesic centroid: the mean of points on the ellipsoid lies below
    the surface, increasingly so as the points spread out.

    Args:
        positions:
            A list of Position3s

    Returns:
        None for empty input, the very same object for a single position, otherwise
        a new Position3
    """
    if not positions:
        return None

    if len(positions) == 1:
        return positions[0]

    return Position3.from_array(
        np.mean([position.to_array() for position in positions], axis=0)
    )


def midpoint(a: Position3, b: Position3) -> Position3:
    """The Cartesian midpoint of two positions"""
    return Position3.from_array((a.to_array() + b.to_array()) * 0.5)


def lerp(a: Position3, b: Position3, t: float) -> Position3:
    """
    Linear interpolation between two positions. `t` is not clamped; t=0 gives `a`
    and t=1 gives `b` exactly.
    """
    return Position3.from_array((1. - t) * a.to_array() + t * b.to_array())


def interpolate(a: Position3, b: Position3, count: int) -> List[Position3]:
    """
    Evenly spaced points between two positions.

    Args:
        a:
            The start position

        b:
            The end position

        count:
            The number of intermediate points

    Returns:
        A list of `count + 2` positions; the first and last elements are `a` and `b`
        themselves
    """
    return [
        a,
        *(lerp(a, b, i / (count + 1)) for i in range(1, count + 1)),
        b,
    ]


def perpendicular_foot(point: Position3, line_start: Position3, line_end: Position3) -> Position3:
    """
    The foot of the perpendicular dropped from a point onto the line through
    `line_start` and `line_end`.

    The line is infinite: the foot may lie outside the segment between the two
    line points. Coincident line points give NaN.

    Args:
        point:
            The point to project

        line_start, line_end:
            Two distinct points on the line

    Returns:
        Position3
    """
    start = line_start.to_array()
    line_dir = line_end.to_array() - start
    point_dir = point.to_array() - start

    with np.errstate(divide='ignore', invalid='ignore'):
        t = np.dot(point_dir, line_dir) / np.dot(line_dir, line_dir)
        return Position3.from_array(start + line_dir * t)


def point_to_line_distance(point: Position3, line_start: Position3, line_end: Position3) -> float:
    """
    The distance from a point to the infinite line through `line_start` and `line_end`.
    See perpendicular_foot().
    """
    return distance(point, perpendicular_foot(point, line_start, line_end))
