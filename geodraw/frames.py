"""
Local tangent frames and rotations about points on the ellipsoid.

Rotations are expressed as unit quaternions and applied as 3x3 matrices. Every
function allocates its own temporaries; nothing is shared between calls.
"""

__all__ = [
    'LocalFrame', 'build_tangent_frame', 'east_north_up_frame',
    'point_on_line_by_length', 'quaternion_from_axis_angle',
    'rotate_about_center', 'rotate_about_center_into',
    'rotation_matrix_from_quaternion', 'translate_with_rotation',
]

import math
from typing import Mapping, Optional

import numpy as np

from geodraw._const import EPSILON14
from geodraw.coordinates import GeodeticPoint, Position3
from geodraw.ellipsoid import WGS84, Ellipsoid

_UNIT_AXES = {
    'X': np.array([1., 0., 0.]),
    'Y': np.array([0., 1., 0.]),
    'Z': np.array([0., 0., 1.]),
}


class LocalFrame:
    """
    An East-North-Up tangent frame: an origin plus three mutually orthogonal
    unit vectors, all expressed in the Earth-fixed frame.

    Args:
        origin:
            The Position3 at which the frame is anchored

        east, north, up:
            Unit basis vectors (numpy arrays of shape (3,))
    """

    def __init__(self, origin: Position3, east: np.ndarray, north: np.ndarray, up: np.ndarray):
        self.origin = origin
        self.east = east
        self.north = north
        self.up = up

    def __repr__(self):
        return f'<LocalFrame at {self.origin!r}>'

    @property
    def rotation(self) -> np.ndarray:
        """The 3x3 local-to-fixed rotation; columns are east, north and up"""
        return np.column_stack((self.east, self.north, self.up))

    def to_fixed_matrix(self) -> np.ndarray:
        """The 4x4 homogeneous transform from local coordinates to the fixed frame"""
        matrix = np.identity(4)
        matrix[:3, :3] = self.rotation
        matrix[:3, 3] = self.origin.to_array()
        return matrix

    def to_fixed(self, local: np.ndarray) -> Position3:
        """Maps a point given in local (east, north, up) meters to the fixed frame"""
        return Position3.from_array(self.origin.to_array() + self.rotation @ np.asarray(local))

    def to_local(self, position: Position3) -> np.ndarray:
        """Maps a fixed-frame Position3 to local (east, north, up) meters"""
        return self.rotation.T @ (position.to_array() - self.origin.to_array())


def east_north_up_frame(position: Position3, ellipsoid: Ellipsoid = WGS84) -> LocalFrame:
    """
    Builds the East-North-Up frame anchored at a Cartesian position.

    At the poles, where east is undefined, a fixed basis is used:
    east = +Y, north = -X and up = +Z (mirrored through the equator for the
    south pole).

    Args:
        position:
            The frame origin

        ellipsoid: (Ellipsoid)
            (Default WGS84) The reference ellipsoid

    Returns:
        LocalFrame
    """
    if abs(position.x) < EPSILON14 and abs(position.y) < EPSILON14:
        sign = math.copysign(1., position.z) if position.z else 0.
        return LocalFrame(
            position,
            np.array([0., 1., 0.]),
            np.array([-1., 0., 0.]) * sign,
            np.array([0., 0., 1.]) * sign,
        )

    up = ellipsoid.geodetic_surface_normal(position)
    east = np.array([-position.y, position.x, 0.])
    east = east / np.linalg.norm(east)
    north = np.cross(up, east)
    return LocalFrame(position, east, north, up)


def build_tangent_frame(origin: GeodeticPoint, ellipsoid: Ellipsoid = WGS84) -> LocalFrame:
    """Builds the East-North-Up frame anchored at a geodetic point"""
    return east_north_up_frame(ellipsoid.cartographic_to_cartesian(origin), ellipsoid)


def quaternion_from_axis_angle(axis: np.ndarray, angle_radians: float) -> np.ndarray:
    """
    Creates a unit quaternion (x, y, z, w) representing a right-handed rotation
    about an axis. The axis does not need to be normalized.

    Args:
        axis:
            The rotation axis

        angle_radians:
            The rotation angle, in radians

    Returns:
        numpy array of shape (4,)
    """
    axis = np.asarray(axis, dtype=np.float64)
    with np.errstate(divide='ignore', invalid='ignore'):
        axis = axis / np.linalg.norm(axis)

    half = angle_radians / 2.
    return np.array([*(axis * math.sin(half)), math.cos(half)])


def rotation_matrix_from_quaternion(quaternion: np.ndarray) -> np.ndarray:
    """Converts a unit quaternion (x, y, z, w) to a 3x3 rotation matrix"""
    x, y, z, w = quaternion
    x2, y2, z2, w2 = x * x, y * y, z * z, w * w
    xy, xz, yz = x * y, x * z, y * z
    xw, yw, zw = x * w, y * w, z * w

    return np.array([
        [x2 - y2 - z2 + w2, 2. * (xy - zw), 2. * (xz + yw)],
        [2. * (xy + zw), -x2 + y2 - z2 + w2, 2. * (yz - xw)],
        [2. * (xz - yw), 2. * (yz + xw), -x2 - y2 + z2 + w2],
    ])


def _rotated_about_center(
    center: Position3,
    point: Position3,
    angle_degrees: float,
    ellipsoid: Ellipsoid
) -> np.ndarray:
    # Rotation axis points down the geodetic surface normal at the center
    axis = -ellipsoid.geodetic_surface_normal(center)

    rotation = rotation_matrix_from_quaternion(
        quaternion_from_axis_angle(axis, math.radians(angle_degrees))
    )
    return rotation @ (point.to_array() - center.to_array()) + center.to_array()


def rotate_about_center(
    center: Position3,
    point: Position3,
    angle_degrees: float,
    ellipsoid: Ellipsoid = WGS84
) -> Position3:
    """
    Rotates a point about the ellipsoid normal passing through a center point.

    The axis is the inward geodetic surface normal at `center`, so a positive angle
    moves the point clockwise as seen from above (i.e. increases its compass bearing
    from the center) whether the center lies above, on or below the surface. The
    distance between the point and the center is preserved.

    Only the Earth's center itself has no defined axis; it yields NaN.

    Args:
        center:
            The center of rotation

        point:
            The point to rotate

        angle_degrees:
            The rotation angle, in degrees

        ellipsoid: (Ellipsoid)
            (Default WGS84) The reference ellipsoid

    Returns:
        A new Position3
    """
    return Position3.from_array(_rotated_about_center(center, point, angle_degrees, ellipsoid))


def rotate_about_center_into(
    dest: Position3,
    center: Position3,
    point: Position3,
    angle_degrees: float,
    ellipsoid: Ellipsoid = WGS84
) -> Position3:
    """
    Same as rotate_about_center(), but writes the result into an existing Position3
    instead of allocating a new one.

    Returns:
        dest
    """
    dest.x, dest.y, dest.z = _rotated_about_center(center, point, angle_degrees, ellipsoid)
    return dest


def translate_with_rotation(
    position: Position3,
    offset: Mapping[str, float],
    angle_degrees: Optional[float] = None,
    axis: str = 'Z',
    ellipsoid: Ellipsoid = WGS84
) -> Position3:
    """
    Offsets a position within its local East-North-Up frame, after rotating the offset
    about one of the local axes.

    The offset is rotated by -angle_degrees, so that with the default 'Z' axis a
    positive angle acts as a clockwise heading (east turns toward south).

    Args:
        position:
            The reference position

        offset:
            A mapping with optional 'x' (east), 'y' (north) and 'z' (up) offsets in
            meters; missing components default to 0

        angle_degrees: (float)
            (Default None, i.e. 0) The rotation applied to the offset, in degrees

        axis: (str)
            (Default 'Z') The local axis to rotate about, one of 'X', 'Y' or 'Z'
            (case-insensitive). Unrecognized values fall back to 'Z'

        ellipsoid: (Ellipsoid)
            (Default WGS84) The reference ellipsoid

    Returns:
        A new Position3
    """
    normal = _UNIT_AXES.get((axis or 'Z').upper(), _UNIT_AXES['Z'])
    rotation = rotation_matrix_from_quaternion(
        quaternion_from_axis_angle(normal, math.radians(-(angle_degrees or 0.)))
    )
    local_offset = rotation @ np.array([
        offset.get('x') or 0.,
        offset.get('y') or 0.,
        offset.get('z') or 0.,
    ], dtype=np.float64)

    # Anchor the frame at the position as re-derived from its geodetic coordinates
    geodetic = ellipsoid.cartesian_to_cartographic(position)
    if geodetic is None:
        return Position3(math.nan, math.nan, math.nan)

    origin = ellipsoid.cartographic_to_cartesian(geodetic)
    return east_north_up_frame(origin, ellipsoid).to_fixed(local_offset)


def point_on_line_by_length(
    start: Position3,
    end: Position3,
    length: float,
    extend: bool = False
) -> Position3:
    """
    Finds the point a given distance from `start` in the direction of `end`, measured
    in the local tangent frame at `start`.

    Args:
        start:
            The start of the line

        end:
            A second point, giving the direction of travel

        length:
            The distance from `start`, in meters

        extend: (bool)
            (Default False) If True, `length` is measured beyond `end` rather than
            from `start`

    Returns:
        A new Position3
    """
    frame = east_north_up_frame(start)
    local_start = frame.to_local(start)
    direction = frame.to_local(end) - local_start

    with np.errstate(divide='ignore', invalid='ignore'):
        scale = np.float64(length) / np.linalg.norm(direction)
        if extend:
            scale += 1.

        return frame.to_fixed(direction * scale)
