"""
Data Probe
==========
Read-out tool that snaps to the recorded data point closest to its
position. Only "readable" points are reported: the apex, landing points
and points that fall on a minor time dot (every 100 ms), matching the
dots drawn along a trajectory.
"""

from typing import Iterable, Optional

import numpy as np

from .config import SENSING_RADIUS, TIME_PER_MINOR_DOT, DEFAULT_ZOOM, ZOOM_RANGE, check_range
from .data_point import DataPoint


def is_readable(point: Optional[DataPoint]) -> bool:
    return point is not None and (
        point.apex
        or point.y == 0
        or int(round(point.time * 1000)) % TIME_PER_MINOR_DOT == 0
    )


class DataProbe:

    def __init__(self, x: float = 10.0, y: float = 10.0, zoom: float = DEFAULT_ZOOM):
        self.initial_position = np.array([x, y], dtype=float)
        self.position = self.initial_position.copy()
        self.zoom = zoom
        self.is_active = False
        self.data_point: Optional[DataPoint] = None

    def reset(self):
        self.position = self.initial_position.copy()
        self.data_point = None
        self.is_active = False

    def move_to(self, x: float, y: float):
        self.position = np.array([x, y], dtype=float)

    def set_zoom(self, zoom: float):
        """Zoom of the view the probe lives in; a closer view narrows the sensing radius."""
        self.zoom = check_range('zoom', zoom, ZOOM_RANGE)

    def point_within_tolerance(self, point: DataPoint) -> bool:
        distance = np.hypot(*(point.position - self.position))
        return distance <= SENSING_RADIUS / self.zoom

    def update_data(self, trajectories: Iterable) -> Optional[DataPoint]:
        """
        Search the trajectories, newest first, for a readable point within
        the sensing radius and display it; clears the display if none is found.
        """
        for trajectory in reversed(list(trajectories)):
            apex = trajectory.apex_point
            if apex is not None and self.point_within_tolerance(apex):
                self.data_point = apex
                return apex
            point = trajectory.get_nearest_point(*self.position)
            if is_readable(point) and self.point_within_tolerance(point):
                self.data_point = point
                return point
        self.data_point = None
        return None

    def update_data_if_within_range(self, point: DataPoint):
        """Display ``point`` if it is readable and close enough."""
        if is_readable(point) and self.point_within_tolerance(point):
            self.data_point = point
