"""
Tessellation of circular arcs into planar point sequences
"""

__all__ = ['Arc', 'close', 'tessellate']

import math
from typing import Iterator, List, Sequence

import numpy as np

from geodraw._geometry import Circle, Winding
from geodraw.projection import PlanarPoint


class Arc:
    """
    A circular arc, tessellated lazily into `segments + 1` evenly spaced points.

    A counter-clockwise arc sweeps from `start_angle` to `end_angle` in the positive
    direction; the sweep is `end_angle - start_angle`, plus 2*pi when that is negative.
    A clockwise arc sweeps from `start_angle` to `end_angle` in the negative
    direction instead.

    Iterating an Arc always starts over from the first point; no state is kept
    between iterations.

    Args:
        circle:
            The Circle the arc lies on

        start_angle:
            The start angle, in radians

        end_angle:
            The end angle, in radians

        winding: (Winding)
            (Default Winding.COUNTER_CLOCKWISE) The sweep direction

        segments: (int)
            (Default 100) The number of segments; must be at least 1
    """

    def __init__(
        self,
        circle: Circle,
        start_angle: float,
        end_angle: float,
        winding: Winding = Winding.COUNTER_CLOCKWISE,
        segments: int = 100,
    ):
        if int(segments) < 1:
            raise ValueError(f'Arcs require at least one segment, got {segments}')

        self.circle = circle
        self.start_angle = float(start_angle)
        self.end_angle = float(end_angle)
        self.winding = winding
        self.segments = int(segments)

    def __iter__(self) -> Iterator[PlanarPoint]:
        center, radius = self.circle.center, np.float64(self.circle.radius)
        sweep = self.sweep
        if self.winding is Winding.CLOCKWISE:
            sweep = -sweep

        for i in range(self.segments + 1):
            angle = self.start_angle + sweep * i / self.segments
            with np.errstate(invalid='ignore', over='ignore'):
                x = center.x + radius * np.cos(angle)
                y = center.y + radius * np.sin(angle)

            yield PlanarPoint(x, y)

    def __len__(self) -> int:
        return self.segments + 1

    def __repr__(self):
        return (
            f'<Arc({self.circle!r}, {self.start_angle}, {self.end_angle}, '
            f'{self.winding.value}, segments={self.segments})>'
        )

    @property
    def sweep(self) -> float:
        """The swept angle in radians, always within [0, 2*pi]"""
        if self.winding is Winding.CLOCKWISE:
            diff = self.start_angle - self.end_angle
        else:
            diff = self.end_angle - self.start_angle

        return diff + math.pi * 2 if diff < 0 else diff


def tessellate(
    circle: Circle,
    start_angle: float,
    end_angle: float,
    segments: int = 100
) -> Arc:
    """
    Creates the counter-clockwise arc from `start_angle` to `end_angle`. To get the
    complementary arc, swap the two angles.

    Args:
        circle:
            The Circle the arc lies on

        start_angle:
            The start angle, in radians

        end_angle:
            The end angle, in radians

        segments: (int)
            (Default 100) The number of segments

    Returns:
        Arc, a restartable iterable of `segments + 1` PlanarPoints
    """
    return Arc(circle, start_angle, end_angle, Winding.COUNTER_CLOCKWISE, segments)


def close(points: Sequence[PlanarPoint]) -> List[PlanarPoint]:
    """
    Returns a new list of the points with the first point repeated at the end,
    so the sequence forms a closed ring. Empty input returns an empty list.
    """
    closed = list(points)
    if closed:
        closed.append(closed[0])

    return closed
