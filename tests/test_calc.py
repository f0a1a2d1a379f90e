
import math

import pytest
from pytest import approx

from geodraw.calc import *
from geodraw.coordinates import GeodeticPoint, Position3


def test_rhumb_bearing_degrees():
    origin = Position3.from_degrees(0., 0.)

    assert rhumb_bearing_degrees(origin, Position3.from_degrees(0.001, 0.001)) == 45.
    assert rhumb_bearing_degrees(origin, Position3.from_degrees(0.01, 0.)) == 90.
    assert rhumb_bearing_degrees(origin, Position3.from_degrees(-0.01, 0.)) == 270.
    assert rhumb_bearing_degrees(origin, Position3.from_degrees(-0.001, -0.001)) == 225.

    # Rounded to whole degrees by default
    bearing = rhumb_bearing_degrees(
        Position3.from_degrees(116.391, 39.907), Position3.from_degrees(116.3925, 39.909)
    )
    assert bearing == round(bearing)

    precise = rhumb_bearing_degrees(
        Position3.from_degrees(116.391, 39.907), Position3.from_degrees(116.3925, 39.909), 4
    )
    assert precise == approx(bearing, abs=0.5)
    assert 0. <= precise <= 360.

    # Heights play no part
    assert rhumb_bearing_degrees(
        Position3.from_degrees(0., 0., 500.), Position3.from_degrees(0.01, 0., 0.)
    ) == 90.


def test_rhumb_bearing_degrees_undefined():
    assert math.isnan(rhumb_bearing_degrees(Position3(0., 0., 0.), Position3.from_degrees(1., 1.)))


def test_haversine_distance():
    assert haversine_distance(
        GeodeticPoint.from_degrees(0., 0.), GeodeticPoint.from_degrees(1., 1.)
    ) == approx(157249.6, abs=2.)
    # Antimeridian
    assert haversine_distance(
        GeodeticPoint.from_degrees(179., 0.), GeodeticPoint.from_degrees(-179., 0.)
    ) == approx(222390., abs=1.)

    assert haversine_distance(
        GeodeticPoint.from_degrees(10., 10.), GeodeticPoint.from_degrees(10., 10.)
    ) == 0.

    # Custom sphere radius
    assert haversine_distance(
        GeodeticPoint.from_degrees(0., 0.), GeodeticPoint.from_degrees(90., 0.), radius=2.
    ) == approx(math.pi)


def test_vincenty_distance():
    assert vincenty_distance(
        GeodeticPoint.from_degrees(0., 0.), GeodeticPoint.from_degrees(1., 1.)
    ) == approx(156899.57, abs=1.)
    assert vincenty_distance(
        GeodeticPoint.from_degrees(10., 10.), GeodeticPoint.from_degrees(10., 10., 50.)
    ) == 0.

    # Along the equator the geodesic is a circular arc of the equatorial radius
    assert vincenty_distance(
        GeodeticPoint.from_degrees(0., 0.), GeodeticPoint.from_degrees(1., 0.)
    ) == approx(111319.49, abs=0.1)


def test_surface_distance():
    start, end = Position3.from_degrees(0., 0.), Position3.from_degrees(1., 1.)
    p1, p2 = GeodeticPoint.from_degrees(0., 0.), GeodeticPoint.from_degrees(1., 1.)

    assert surface_distance(start, end) == approx(vincenty_distance(p1, p2), abs=1e-3)
    assert surface_distance(start, end, 'haversine') == approx(
        haversine_distance(p1, p2), abs=1e-3
    )

    assert surface_distance(start, end, 'vincenty') == approx(156899.57, abs=1.)


def test_surface_distance_ignores_height():
    assert surface_distance(
        Position3.from_degrees(0., 0., 500.), Position3.from_degrees(1., 0.)
    ) == approx(111319.49, abs=0.1)


def test_surface_distance_undefined():
    assert math.isnan(surface_distance(Position3(0., 0., 0.), Position3.from_degrees(1., 1.)))


def test_surface_distance_invalid_algorithm():
    with pytest.raises(ValueError):
        surface_distance(Position3.from_degrees(0., 0.), Position3.from_degrees(1., 1.), 'flat')
