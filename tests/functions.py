
from pytest import approx

from geodraw.coordinates import Position3
from geodraw.positions import distance


def assert_positions_equal(p1: Position3, p2: Position3, abs_tol=1e-5):
    """
    Asserts that two positions are equal within a specified absolute tolerance.

    Args:
        p1: The first Position3
        p2: The second Position3
        abs_tol: The absolute tolerance, per axis, in meters.
                 Default is 1e-5 (ten micrometers).
    """
    try:
        assert p1.x == approx(p2.x, abs=abs_tol)
        assert p1.y == approx(p2.y, abs=abs_tol)
        assert p1.z == approx(p2.z, abs=abs_tol)
    except AssertionError as e:
        raise AssertionError(f"Positions not equal: {p1} != {p2}") from e


def assert_degrees_equal(position: Position3, longitude, latitude, height, abs_tol=1e-9):
    """
    Asserts that a position sits at the given geodetic degrees and height.
    Height is compared with a looser tolerance of 1e-5 meters.
    """
    lon, lat, h = position.to_geodetic().to_degrees()
    assert lon == approx(longitude, abs=abs_tol)
    assert lat == approx(latitude, abs=abs_tol)
    assert h == approx(height, abs=1e-5)


def assert_distance_preserved(a1: Position3, b1: Position3, a2: Position3, b2: Position3, rel=1e-9):
    """Asserts that the distance a1-b1 equals the distance a2-b2"""
    assert distance(a1, b1) == approx(distance(a2, b2), rel=rel)
