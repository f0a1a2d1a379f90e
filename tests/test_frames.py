
import math

import numpy as np
import pytest
from pytest import approx

from geodraw._const import WGS84_A, WGS84_B
from geodraw.coordinates import GeodeticPoint, Position3
from geodraw.frames import *
from geodraw.positions import distance

from tests.functions import assert_distance_preserved, assert_positions_equal


def test_east_north_up_frame():
    frame = east_north_up_frame(Position3(WGS84_A, 0., 0.))
    assert list(frame.east) == approx([0., 1., 0.])
    assert list(frame.north) == approx([0., 0., 1.])
    assert list(frame.up) == approx([1., 0., 0.])

    frame = east_north_up_frame(Position3.from_degrees(116.391, 39.907, 100.))
    assert float(np.dot(frame.east, frame.north)) == approx(0., abs=1e-12)
    assert float(np.dot(frame.east, frame.up)) == approx(0., abs=1e-12)
    assert float(np.dot(frame.north, frame.up)) == approx(0., abs=1e-12)
    for axis in (frame.east, frame.north, frame.up):
        assert float(np.linalg.norm(axis)) == approx(1.)

    # Right-handed
    assert list(np.cross(frame.east, frame.north)) == approx(list(frame.up))


def test_east_north_up_frame_poles():
    frame = east_north_up_frame(Position3(0., 0., WGS84_B))
    assert list(frame.east) == [0., 1., 0.]
    assert list(frame.north) == [-1., 0., 0.]
    assert list(frame.up) == [0., 0., 1.]

    frame = east_north_up_frame(Position3(0., 0., -WGS84_B))
    assert list(frame.east) == [0., 1., 0.]
    assert list(frame.north) == [1., 0., 0.]
    assert list(frame.up) == [0., 0., -1.]


def test_local_frame_transforms():
    origin = Position3.from_degrees(-45., 30., 10.)
    frame = east_north_up_frame(origin)
    assert repr(frame) == f'<LocalFrame at {origin!r}>'

    assert list(frame.to_local(origin)) == approx([0., 0., 0.], abs=1e-6)
    assert_positions_equal(frame.to_fixed([0., 0., 0.]), origin)

    pos = Position3.from_degrees(-44.99, 30.01, 55.)
    local = frame.to_local(pos)
    assert local[0] > 0  # east
    assert local[1] > 0  # north
    assert_positions_equal(frame.to_fixed(local), pos)

    matrix = frame.to_fixed_matrix()
    assert matrix.shape == (4, 4)
    assert list(matrix[3]) == [0., 0., 0., 1.]
    fixed = matrix @ np.array([*local, 1.])
    assert_positions_equal(Position3.from_array(fixed[:3]), pos)


def test_build_tangent_frame():
    origin = GeodeticPoint.from_degrees(10., 20., 30.)
    frame = build_tangent_frame(origin)
    assert frame.origin == origin.to_position()
    assert list(frame.up) == approx(
        list(east_north_up_frame(origin.to_position()).up)
    )


def test_quaternion_from_axis_angle():
    quaternion = quaternion_from_axis_angle(np.array([0., 0., 5.]), math.pi)
    assert list(quaternion) == approx([0., 0., 1., 0.], abs=1e-12)

    quaternion = quaternion_from_axis_angle(np.array([1., 0., 0.]), 0.)
    assert list(quaternion) == [0., 0., 0., 1.]


def test_rotation_matrix_from_quaternion():
    matrix = rotation_matrix_from_quaternion(
        quaternion_from_axis_angle(np.array([0., 0., 1.]), math.pi / 2)
    )
    # Right-handed: +x turns toward +y
    assert list(matrix @ np.array([1., 0., 0.])) == approx([0., 1., 0.], abs=1e-12)
    assert matrix @ matrix.T == approx(np.identity(3), abs=1e-12)


def test_rotate_about_center_identity():
    center = Position3.from_degrees(116.391, 39.907, 100.)
    point = Position3.from_degrees(116.392, 39.907, 100.)

    assert_positions_equal(rotate_about_center(center, point, 0.), point)
    assert_positions_equal(rotate_about_center(center, point, 360.), point)
    assert_positions_equal(rotate_about_center(center, point, -720.), point)


def test_rotate_about_center_preserves_distance():
    center = Position3.from_degrees(116.391, 39.907, 100.)
    point = Position3.from_degrees(116.392, 39.908, 150.)

    for angle in (15., 90., 137.5, -60., 400.):
        rotated = rotate_about_center(center, point, angle)
        assert_distance_preserved(center, rotated, center, point)


def test_rotate_about_center_direction():
    # A positive angle turns a point clockwise as seen from above: east goes south
    center = Position3.from_degrees(0., 0., 100.)
    point = Position3.from_degrees(0.001, 0., 100.)

    rotated = rotate_about_center(center, point, 90.).to_geodetic()
    assert rotated.longitude_degrees == approx(0., abs=1e-9)
    assert rotated.latitude_degrees == approx(-0.001, abs=2e-5)

    rotated = rotate_about_center(center, point, -90.).to_geodetic()
    assert rotated.latitude_degrees == approx(0.001, abs=2e-5)


def test_rotate_about_center_successive():
    center = Position3.from_degrees(116.391, 39.907, 100.)
    point = Position3.from_degrees(116.392, 39.907, 100.)

    twice = rotate_about_center(center, rotate_about_center(center, point, 30.), 30.)
    assert_positions_equal(twice, rotate_about_center(center, point, 60.))


def test_rotate_about_center_ground_level():
    # Centers on and below the surface turn the same way as centers above it
    for height in (0., -100.):
        center = Position3.from_degrees(0., 0., height)
        point = Position3.from_degrees(0.001, 0., height)

        assert_positions_equal(rotate_about_center(center, point, 0.), point)

        rotated = rotate_about_center(center, point, 90.)
        assert_distance_preserved(center, rotated, center, point)
        rotated = rotated.to_geodetic()
        assert rotated.longitude_degrees == approx(0., abs=1e-9)
        assert rotated.latitude_degrees == approx(-0.001, abs=2e-5)

    center = Position3(WGS84_A, 0., 0.)
    point = Position3.from_degrees(116.392, 39.907)
    assert_positions_equal(rotate_about_center(center, point, 0.), point)


def test_rotate_about_center_earth_center():
    # The Earth's center has no surface normal
    rotated = rotate_about_center(Position3(0., 0., 0.), Position3.from_degrees(0.001, 0.), 45.)
    assert math.isnan(rotated.x)


def test_rotate_about_center_into():
    center = Position3.from_degrees(116.391, 39.907, 100.)
    point = Position3.from_degrees(116.392, 39.907, 100.)
    dest = Position3(0., 0., 0.)

    result = rotate_about_center_into(dest, center, point, 45.)
    assert result is dest
    assert result == rotate_about_center(center, point, 45.)


def test_translate_with_rotation():
    position = Position3(WGS84_A, 0., 0.)

    assert_positions_equal(
        translate_with_rotation(position, {'x': 100.}),
        Position3(WGS84_A, 100., 0.)
    )
    assert_positions_equal(
        translate_with_rotation(position, {'y': 100., 'z': 5.}),
        Position3(WGS84_A + 5., 0., 100.)
    )

    # Heading rotation about the local up axis: east turns toward south
    assert_positions_equal(
        translate_with_rotation(position, {'x': 100.}, 90.),
        Position3(WGS84_A, 0., -100.)
    )
    assert_positions_equal(
        translate_with_rotation(position, {'x': 100.}, 90., 'z'),
        Position3(WGS84_A, 0., -100.)
    )

    # No offset leaves the position in place
    assert_positions_equal(translate_with_rotation(position, {}, 45.), position)

    assert math.isnan(translate_with_rotation(Position3(0., 0., 0.), {'x': 1.}).x)


def test_translate_with_rotation_axes():
    position = Position3(WGS84_A, 0., 0.)

    # Rotating about the north axis swings east toward up
    moved = translate_with_rotation(position, {'x': 100.}, 90., 'Y')
    assert_positions_equal(moved, Position3(WGS84_A + 100., 0., 0.))

    # Unknown axes fall back to up
    moved = translate_with_rotation(position, {'x': 100.}, 90., 'W')
    assert_positions_equal(moved, Position3(WGS84_A, 0., -100.))


def test_point_on_line_by_length():
    start = Position3.from_degrees(0., 0., 0.)
    end = Position3.from_degrees(0.01, 0., 0.)

    result = point_on_line_by_length(start, end, 100.)
    assert distance(start, result) == approx(100.)
    assert distance(result, end) == approx(distance(start, end) - 100.)

    result = point_on_line_by_length(start, end, 100., extend=True)
    assert distance(start, result) == approx(distance(start, end) + 100.)
    assert distance(end, result) == approx(100.)


@pytest.mark.parametrize('length', [0., 1., 2500.])
def test_point_on_line_by_length_collinear(length):
    start = Position3.from_degrees(5., 5., 0.)
    end = Position3.from_degrees(5.01, 5.01, 0.)

    result = point_on_line_by_length(start, end, length)
    # The result stays on the line through start and end
    line = end.to_array() - start.to_array()
    offset = result.to_array() - start.to_array()
    assert float(np.linalg.norm(np.cross(line, offset))) == approx(0., abs=1e-3)
