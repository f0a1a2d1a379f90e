"""
Internal module defining the planar geometric functions used by geodraw.

All arithmetic here follows IEEE float semantics: degenerate configurations
(parallel lines, collinear or duplicated points) produce very large, infinite or
NaN values rather than raising.
"""

__all__ = [
    'Circle', 'Winding', 'line_intersection', 'planar_azimuth',
    'planar_cross_product', 'planar_distance', 'solve_circumcircle', 'winding_of',
]

from enum import Enum
import math

import numpy as np

from geodraw.projection import PlanarPoint


class Winding(Enum):
    """Rotational direction in a plane whose y axis points up"""
    CLOCKWISE = 'clockwise'
    COUNTER_CLOCKWISE = 'counter-clockwise'


class Circle:
    """
    A circle in a projected plane. Circles fit through (nearly) collinear points
    have enormous or non-finite radii; they are represented as-is.

    Args:
        center:
            The PlanarPoint at the center of the circle

        radius:
            The radius, in projected units
    """

    __slots__ = ('center', 'radius')

    def __init__(self, center: PlanarPoint, radius: float):
        self.center = center
        self.radius = float(radius)

    def __eq__(self, other):
        if not isinstance(other, Circle):
            return False

        return self.center == other.center and self.radius == other.radius

    def __hash__(self):
        return hash((self.center, self.radius))

    def __repr__(self):
        return f'<Circle({self.center.x}, {self.center.y}, r={self.radius})>'

    def is_finite(self) -> bool:
        return (
            math.isfinite(self.center.x) and
            math.isfinite(self.center.y) and
            math.isfinite(self.radius)
        )


def planar_distance(a: PlanarPoint, b: PlanarPoint) -> float:
    """Euclidean distance between two planar points"""
    return math.hypot(a.x - b.x, a.y - b.y)


def planar_cross_product(o: PlanarPoint, a: PlanarPoint, b: PlanarPoint) -> float:
    """
    2D cross product of OA and OB vectors, i.e. z-component of their 3D cross product.

    Args:
        o: (PlanarPoint)
            The origin point

        a: (PlanarPoint)
            The A point, forming the OA vector

        b: (PlanarPoint)
            The B point, forming the OB vector

    Returns:
        a positive value if OAB makes a counter-clockwise turn, negative for clockwise turn,
        and zero if the points are collinear.
    """
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def winding_of(p1: PlanarPoint, p2: PlanarPoint, p3: PlanarPoint) -> Winding:
    """
    The winding of the triangle p1 -> p2 -> p3. Collinear points are reported as
    clockwise.
    """
    if planar_cross_product(p1, p2, p3) > 0:
        return Winding.COUNTER_CLOCKWISE

    return Winding.CLOCKWISE


def planar_azimuth(start: PlanarPoint, end: PlanarPoint) -> float:
    """
    The polar angle, in radians within [0, 2*pi], of `start` as seen from `end`,
    i.e. the direction of the vector end -> start measured counter-clockwise from
    the +x axis.

    Args:
        start:
            The point whose angle is measured

        end:
            The point the angle is measured about (e.g. a circle center)

    Returns:
        float
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = np.float64(abs(end.y - start.y)) / np.float64(planar_distance(start, end))
        angle = float(np.arcsin(ratio))

    if end.y >= start.y and end.x >= start.x:
        return angle + math.pi

    if end.y >= start.y and end.x < start.x:
        return math.pi * 2 - angle

    if end.y < start.y and end.x < start.x:
        return angle

    return math.pi - angle


def line_intersection(
    a: PlanarPoint,
    b: PlanarPoint,
    c: PlanarPoint,
    d: PlanarPoint
) -> PlanarPoint:
    """
    Finds the point of intersection between the infinite lines AB and CD.

    Lines are parametrized by x as a function of y, so horizontal lines are handled
    by dedicated branches. Parallel lines produce infinite or NaN coordinates.

    Args:
        a, b:
            Two points on the first line

        c, d:
            Two points on the second line

    Returns:
        PlanarPoint
    """
    ax, ay, bx, by = map(np.float64, (a.x, a.y, b.x, b.y))
    cx, cy, dx, dy = map(np.float64, (c.x, c.y, d.x, d.y))

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        if ay == by:
            f = (dx - cx) / (dy - cy)
            return PlanarPoint(f * (ay - cy) + cx, ay)

        if cy == dy:
            e = (bx - ax) / (by - ay)
            return PlanarPoint(e * (cy - ay) + ax, cy)

        e = (bx - ax) / (by - ay)
        f = (dx - cx) / (dy - cy)
        y = (e * ay - ax - f * cy + cx) / (e - f)
        x = e * y - e * ay + ax
        return PlanarPoint(x, y)


def solve_circumcircle(p1: PlanarPoint, p2: PlanarPoint, p3: PlanarPoint) -> Circle:
    """
    Computes the circle passing through three planar points, as the intersection of
    the perpendicular bisectors of (p1, p2) and (p1, p3).

    Near-collinear points give a distant center and a very large (but finite) radius.
    Exactly collinear points give a NaN circle. Duplicated points leave a bisector
    undefined and give an arbitrary circle; callers must not pass duplicates if they
    need a usable result.

    Args:
        p1, p2, p3:
            Three PlanarPoints

    Returns:
        Circle
    """
    # Each bisector is defined by a segment midpoint and that midpoint shifted
    # along the segment direction rotated by 90 degrees
    mid12 = PlanarPoint((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)
    normal12 = PlanarPoint(mid12.x - p1.y + p2.y, mid12.y + p1.x - p2.x)
    mid13 = PlanarPoint((p1.x + p3.x) / 2, (p1.y + p3.y) / 2)
    normal13 = PlanarPoint(mid13.x - p1.y + p3.y, mid13.y + p1.x - p3.x)

    center = line_intersection(mid12, normal12, mid13, normal13)
    return Circle(center, planar_distance(p1, center))
