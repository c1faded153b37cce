"""
Trajectory Model
================
One launch of the cannon: the time-ordered DataPoints the projectile has
produced so far, plus the bookkeeping the host reads back (apex, landing,
maximum height, displacement, flight time, whether the target was hit).

Gravity, altitude and air resistance can change while the projectile is
in the air and immediately bend its path. Launch speed, angle, mass,
diameter and drag coefficient are recorded at fire time and never change
for an existing trajectory.

Units are meters, kilograms, and seconds.
"""

from typing import Callable, List, Optional

from .atmosphere import AtmosphereModel
from .data_point import DataPoint
from .events import Emitter
from .integrator import step_projectile
from .object_types import ProjectileObjectType
from .projectile import Projectile, LaunchConditions


class Trajectory:
    """
    Lifecycle: created on fire (flying) → a DataPoint or two appended per
    step → frozen once the projectile reaches the ground → disposed when
    evicted or erased.

    A mid-air change of the environment flags the trajectory and continues
    the flight with a new Projectile leg from the last recorded point, so
    earlier samples are kept exactly as they were.
    """

    def __init__(self, object_type: ProjectileObjectType, mass: float, diameter: float,
                 drag_coefficient: float, initial_speed: float, initial_height: float,
                 initial_angle: float, gravity: float, atmosphere: AtmosphereModel,
                 check_if_hit_target: Optional[Callable[[float], bool]] = None,
                 data_points: Optional[List[DataPoint]] = None):
        """
        Parameters
        ----------
        object_type : the type of projectile being launched
        mass, diameter, drag_coefficient : recorded body parameters (kg, m, -)
        initial_speed, initial_height, initial_angle : launch settings (m/s, m, degrees)
        gravity, atmosphere : environment at fire time
        check_if_hit_target : called with the landing x, returns whether it scored
        data_points : previously recorded samples, when restoring saved state
        """
        self.object_type = object_type
        self.mass = mass
        self.diameter = diameter
        self.drag_coefficient = drag_coefficient
        self.initial_speed = initial_speed
        self.initial_height = initial_height
        self.initial_angle = initial_angle
        self.check_if_hit_target = check_if_hit_target

        self.data_points: List[DataPoint] = []
        self.apex_point: Optional[DataPoint] = None
        self.max_height = initial_height
        self.horizontal_displacement = 0.0
        self.flight_time = 0.0
        self.has_hit_target = False
        self.changed_in_mid_air = False
        self.reached_ground = False

        # 0 for the most recent trajectory fired, 1 for the one before, ...
        self.rank = 0

        self.legs: List[Projectile] = []
        self.data_point_added_emitter = Emitter()
        self.landed_emitter = Emitter()
        self._fork_pending = False
        self._disposed = False

        if data_points:
            for point in data_points:
                self.add_data_point(point)
            last = self.data_points[-1]
            self.legs.append(Projectile.from_data_point(
                last, mass, diameter, drag_coefficient, gravity, atmosphere))
            if last.reached_ground:
                self.reached_ground = True
                self.projectile.land()
        else:
            conditions = LaunchConditions(initial_speed, initial_angle, initial_height)
            projectile = Projectile.launch(conditions, mass, diameter, drag_coefficient,
                                           gravity, atmosphere)
            self.legs.append(projectile)
            self.add_data_point(projectile.to_data_point())

    @property
    def projectile(self) -> Projectile:
        """The leg currently in flight (or landed)."""
        return self.legs[-1]

    @property
    def projectile_point(self) -> DataPoint:
        """The data point the projectile is currently at."""
        return self.data_points[-1]

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def step(self, dt: float, gravity: float, atmosphere: AtmosphereModel) -> List[DataPoint]:
        """
        Advance the projectile by ``dt`` and record the new samples.
        Returns the samples appended; empty once the projectile has landed.
        """
        if self._disposed:
            raise RuntimeError("Cannot step a disposed trajectory")
        if self.reached_ground or not dt > 0:
            return []

        if self._fork_pending:
            self.legs.append(Projectile.from_data_point(
                self.data_points[-1], self.mass, self.diameter, self.drag_coefficient,
                gravity, atmosphere))
            self._fork_pending = False

        points = step_projectile(self.projectile, dt, gravity, atmosphere,
                                 find_apex=self.apex_point is None)
        for point in points:
            self.add_data_point(point)

        if self.projectile.reached_ground:
            self.reached_ground = True
            self.landed_emitter.emit(self)
            if self.check_if_hit_target is not None:
                self.has_hit_target = self.check_if_hit_target(self.horizontal_displacement)
        return points

    def add_data_point(self, point: DataPoint):
        if self._disposed:
            raise RuntimeError("Cannot add data points to a disposed trajectory")

        if self.data_points:
            last = self.data_points[-1]
            if point.reached_ground and point.time == last.time and not last.apex:
                # launched from the ground heading down: the impact replaces the start
                self.data_points.pop()
            else:
                assert point.time > last.time, \
                    f"data point at t={point.time} does not follow t={last.time}"

        self.data_points.append(point)
        if point.apex:
            assert self.apex_point is None, 'already have an apex point'
            self.apex_point = point

        self.max_height = max(point.y, self.max_height)
        self.horizontal_displacement = point.x
        self.flight_time = point.time
        self.data_point_added_emitter.emit(point)

    def get_nearest_point(self, x: float, y: float) -> Optional[DataPoint]:
        """
        The data point with the least euclidean distance to (x, y), or None
        if nothing has been recorded. On equal distances the later point wins.
        """
        if not self.data_points:
            return None

        nearest_point = self.data_points[0]
        min_distance = nearest_point.distance_to(x, y)
        for point in self.data_points:
            distance = point.distance_to(x, y)
            if distance <= min_distance:
                nearest_point = point
                min_distance = distance
        return nearest_point

    def mark_changed_in_mid_air(self):
        """Flag a still-flying trajectory whose environment just changed."""
        if self.reached_ground or self._disposed:
            return
        self.changed_in_mid_air = True
        self._fork_pending = True

    def dispose(self):
        self.apex_point = None
        self.data_points = []
        self.legs = []
        self.data_point_added_emitter.dispose()
        self.landed_emitter.dispose()
        self._disposed = True
