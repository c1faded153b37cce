"""
Trajectory Manager
==================
The simulation core a host application instantiates: it holds the cannon,
projectile and environment settings, fires projectiles, steps every live
trajectory on a fixed clock and bounds how many trajectories are kept.

Clock
-----
The host calls ``step(dt)`` once per animation frame with wall-clock
seconds. Time is scaled by the slow-motion factor when the time speed is
SLOW, accumulated, and spent in fixed ticks of ``time_per_data_point``
(12 ms): each tick advances every flying projectile once and records one
data point per trajectory (two when the apex falls inside the tick).
The recorded trace therefore has the same granularity as the dynamics,
whatever the frame rate or time speed.

Bounded memory
--------------
At most ``max_projectiles`` trajectories are kept. Firing past the cap
evicts the oldest landed trajectory first, or the oldest one overall when
every trajectory is still flying.
"""

from typing import List, Optional

import numpy as np

from .atmosphere import AtmosphereModel
from .config import (
    SimulationConfig, TimeSpeed, check_range, clamp,
    CANNON_HEIGHT_RANGE, CANNON_ANGLE_RANGE, LAUNCH_VELOCITY_RANGE,
    SPEED_STANDARD_DEVIATION_RANGE, ANGLE_STANDARD_DEVIATION_RANGE,
    PROJECTILE_MASS_RANGE, PROJECTILE_DIAMETER_RANGE,
    PROJECTILE_DRAG_COEFFICIENT_RANGE, ALTITUDE_RANGE, GRAVITY_RANGE,
    GROUP_SIZE_MIN, GROUP_SIZE_MAX,
)
from .data_point import DataPoint
from .data_probe import DataProbe
from .events import Emitter
from .object_types import ProjectileObjectType, get_object_type
from .target import Target
from .trajectory import Trajectory


class TrajectoryManager:
    """
    Owns the collection of trajectories; nothing else adds, removes or
    reorders them. Single-threaded: listeners must not call back into
    ``step`` or ``fire``.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config if config is not None else SimulationConfig()
        self.max_projectiles = self.config.max_projectiles
        self.rng = np.random.default_rng(self.config.seed)

        self.object_types = {key: get_object_type(key) for key in self.config.object_types}
        self.target = Target(self.config.target_x, self.config.target_width)
        self.data_probe = DataProbe()
        self.atmosphere = AtmosphereModel()

        self.trajectories: List[Trajectory] = []
        self.trajectory_added_emitter = Emitter()
        self.trajectory_removed_emitter = Emitter()
        self.trajectory_landed_emitter = Emitter()

        self._residual_time = 0.0
        self._time_since_last_projectile = 0.0
        self._pending_launches = 0
        self._reset_settings()

    def _reset_settings(self):
        cfg = self.config
        self._cannon_height = cfg.default_cannon_height
        self._cannon_angle = cfg.default_cannon_angle
        self._initial_speed = cfg.default_initial_speed
        self._speed_standard_deviation = cfg.default_speed_standard_deviation
        self._angle_standard_deviation = cfg.default_angle_standard_deviation

        for object_type in self.object_types.values():
            object_type.reset()
        self._selected_object_type = self.object_types[cfg.default_object_type]
        self._mass = self._selected_object_type.mass
        self._diameter = self._selected_object_type.diameter
        self._drag_coefficient = self._selected_object_type.drag_coefficient

        self._gravity = cfg.default_gravity
        self.atmosphere.altitude = cfg.default_altitude
        self.atmosphere.air_resistance_on = cfg.default_air_resistance_on

        self._group_size = cfg.default_group_size
        self.time_speed = TimeSpeed.NORMAL
        self.is_playing = True
        self.rapid_fire_mode = False

    # ── Launch settings ───────────────────────────────────────────────────

    @property
    def cannon_height(self) -> float:
        return self._cannon_height

    @cannon_height.setter
    def cannon_height(self, value: float):
        self._cannon_height = check_range('cannon height', value, CANNON_HEIGHT_RANGE)

    @property
    def cannon_angle(self) -> float:
        return self._cannon_angle

    @cannon_angle.setter
    def cannon_angle(self, value: float):
        self._cannon_angle = check_range('cannon angle', value, CANNON_ANGLE_RANGE)

    @property
    def initial_speed(self) -> float:
        return self._initial_speed

    @initial_speed.setter
    def initial_speed(self, value: float):
        self._initial_speed = check_range('initial speed', value, LAUNCH_VELOCITY_RANGE)

    @property
    def speed_standard_deviation(self) -> float:
        return self._speed_standard_deviation

    @speed_standard_deviation.setter
    def speed_standard_deviation(self, value: float):
        self._speed_standard_deviation = check_range(
            'speed standard deviation', value, SPEED_STANDARD_DEVIATION_RANGE)

    @property
    def angle_standard_deviation(self) -> float:
        return self._angle_standard_deviation

    @angle_standard_deviation.setter
    def angle_standard_deviation(self, value: float):
        self._angle_standard_deviation = check_range(
            'angle standard deviation', value, ANGLE_STANDARD_DEVIATION_RANGE)

    @property
    def group_size(self) -> int:
        return self._group_size

    @group_size.setter
    def group_size(self, value: int):
        self._group_size = int(check_range('group size', value, (GROUP_SIZE_MIN, GROUP_SIZE_MAX)))

    # ── Projectile parameters ─────────────────────────────────────────────
    # Changing these only affects the next projectile fired; still-flying
    # trajectories keep their recorded values but are flagged.

    @property
    def selected_object_type(self) -> ProjectileObjectType:
        return self._selected_object_type

    def select_object_type(self, key: str):
        """Select one of this screen's object types and adopt its parameters."""
        if key not in self.object_types:
            raise ValueError(
                f"Object type '{key}' is not available. "
                f"Available: {list(self.object_types.keys())}"
            )
        self._selected_object_type = self.object_types[key]
        self.projectile_mass = self._selected_object_type.mass
        self.projectile_diameter = self._selected_object_type.diameter
        self.projectile_drag_coefficient = self._selected_object_type.drag_coefficient

    @property
    def projectile_mass(self) -> float:
        return self._mass

    @projectile_mass.setter
    def projectile_mass(self, value: float):
        check_range('projectile mass', value, PROJECTILE_MASS_RANGE)
        if self.config.editable_object_types:
            self._selected_object_type.mass = value
        if value != self._mass:
            self._mass = value
            self._mark_moving_trajectories_changed_mid_air()

    @property
    def projectile_diameter(self) -> float:
        return self._diameter

    @projectile_diameter.setter
    def projectile_diameter(self, value: float):
        check_range('projectile diameter', value, PROJECTILE_DIAMETER_RANGE)
        if self.config.editable_object_types:
            self._selected_object_type.diameter = value
        if value != self._diameter:
            self._diameter = value
            self._mark_moving_trajectories_changed_mid_air()

    @property
    def projectile_drag_coefficient(self) -> float:
        return self._drag_coefficient

    @projectile_drag_coefficient.setter
    def projectile_drag_coefficient(self, value: float):
        check_range('projectile drag coefficient', value, PROJECTILE_DRAG_COEFFICIENT_RANGE)
        if self.config.editable_object_types:
            self._selected_object_type.drag_coefficient = value
        if value != self._drag_coefficient:
            self._drag_coefficient = value
            self._mark_moving_trajectories_changed_mid_air()

    # ── Environment ───────────────────────────────────────────────────────
    # Changes bend the paths of projectiles already in the air.

    @property
    def gravity(self) -> float:
        return self._gravity

    @gravity.setter
    def gravity(self, value: float):
        check_range('gravity', value, GRAVITY_RANGE)
        if value != self._gravity:
            self._gravity = value
            self._mark_moving_trajectories_changed_mid_air()

    @property
    def altitude(self) -> float:
        return self.atmosphere.altitude

    @altitude.setter
    def altitude(self, value: float):
        check_range('altitude', value, ALTITUDE_RANGE)
        old_density = self.air_density
        self.atmosphere.altitude = value
        if self.air_density != old_density:
            self._mark_moving_trajectories_changed_mid_air()

    @property
    def air_resistance_on(self) -> bool:
        return self.atmosphere.air_resistance_on

    @air_resistance_on.setter
    def air_resistance_on(self, value: bool):
        if bool(value) != self.atmosphere.air_resistance_on:
            self.atmosphere.air_resistance_on = bool(value)
            self._mark_moving_trajectories_changed_mid_air()

    @property
    def air_density(self) -> float:
        """Air density at ground level (kg/m³); zero with air resistance off."""
        return self.atmosphere.density(0.0)

    # ── Derived state ─────────────────────────────────────────────────────

    @property
    def number_of_moving_projectiles(self) -> int:
        return sum(1 for t in self.trajectories if not t.reached_ground)

    @property
    def fire_enabled(self) -> bool:
        return not self.rapid_fire_mode and self.number_of_moving_projectiles < self.max_projectiles

    @property
    def fire_multiple_enabled(self) -> bool:
        return (not self.rapid_fire_mode
                and self.number_of_moving_projectiles + self.group_size <= self.max_projectiles)

    # ── Firing ────────────────────────────────────────────────────────────

    def _randomized(self, mean: float, standard_deviation: float, value_range) -> float:
        if standard_deviation <= 0:
            return mean
        return clamp(float(self.rng.normal(mean, standard_deviation)), value_range)

    def fire(self) -> Trajectory:
        """
        Launch one projectile with the current settings. Speed and angle are
        drawn from normal distributions around the settings when their
        standard deviations are non-zero.
        """
        initial_speed = self._randomized(self._initial_speed, self._speed_standard_deviation,
                                         LAUNCH_VELOCITY_RANGE)
        initial_angle = self._randomized(self._cannon_angle, self._angle_standard_deviation,
                                         CANNON_ANGLE_RANGE)

        trajectory = Trajectory(
            self._selected_object_type, self._mass, self._diameter, self._drag_coefficient,
            initial_speed, self._cannon_height, initial_angle,
            self._gravity, self.atmosphere,
            check_if_hit_target=self.target.check_if_hit_target,
        )
        self.add_trajectory(trajectory)
        return trajectory

    def fire_multiple(self, count: Optional[int] = None, staggered: bool = False) -> List[Trajectory]:
        """
        Launch ``count`` projectiles (the group size by default). All are
        fired now unless ``staggered``, in which case the first is fired now
        and the rest follow one every ``rapid_fire_delta_time`` of sim time.
        """
        count = self._group_size if count is None else count
        if count < 1:
            raise ValueError(f"count must be >= 1, got {count}")
        if staggered:
            self._pending_launches += count - 1
            self._time_since_last_projectile = 0.0
            return [self.fire()]
        return [self.fire() for _ in range(count)]

    @property
    def pending_launches(self) -> int:
        return self._pending_launches

    def add_trajectory(self, trajectory: Trajectory):
        """Start tracking ``trajectory`` as the newest one, evicting to stay under the cap."""
        self._make_room(1)
        for existing in self.trajectories:
            existing.rank += 1
        trajectory.data_point_added_emitter.add_listener(self._on_data_point_added)
        trajectory.landed_emitter.add_listener(self.trajectory_landed_emitter.emit)
        self.trajectories.append(trajectory)
        self.trajectory_added_emitter.emit(trajectory)

    def _on_data_point_added(self, point: DataPoint):
        if self.data_probe.is_active:
            self.data_probe.update_data_if_within_range(point)

    # ── Stepping ──────────────────────────────────────────────────────────

    @property
    def time_factor(self) -> float:
        return self.config.slow_motion_factor if self.time_speed is TimeSpeed.SLOW else 1.0

    def step(self, dt: float):
        """Advance the simulation by ``dt`` seconds of wall-clock time."""
        if not self.is_playing or not dt > 0:
            return

        scaled_dt = self.time_factor * dt
        period = self.config.time_per_data_point
        self._residual_time += scaled_dt
        while self._residual_time >= period:
            self._residual_time -= period
            self.step_model_elements(period)

        if self.rapid_fire_mode or self._pending_launches > 0:
            self._time_since_last_projectile += scaled_dt
            if self._time_since_last_projectile >= self.config.rapid_fire_delta_time:
                self._time_since_last_projectile = 0.0
                if self._pending_launches > 0:
                    self._pending_launches -= 1
                self.fire()

    def step_model_elements(self, dt: float):
        """Advance every flying projectile by the same ``dt`` (also the step button)."""
        for trajectory in list(self.trajectories):
            if not trajectory.reached_ground:
                trajectory.step(dt, self._gravity, self.atmosphere)

    # ── Bounding and clearing ─────────────────────────────────────────────

    def _oldest_evictable(self) -> Trajectory:
        for trajectory in self.trajectories:
            if trajectory.reached_ground:
                return trajectory
        return self.trajectories[0]

    def _make_room(self, count: int):
        while self.trajectories and len(self.trajectories) + count > self.max_projectiles:
            self._remove(self._oldest_evictable())

    def limit_trajectories(self):
        """Evict trajectories over the cap, oldest landed ones first."""
        self._make_room(0)

    def _remove(self, trajectory: Trajectory):
        self.trajectories.remove(trajectory)
        self.trajectory_removed_emitter.emit(trajectory)
        trajectory.dispose()
        if self.data_probe.is_active:
            self.data_probe.update_data(self.trajectories)

    def erase_trajectories(self):
        """Remove every trajectory, flying or not."""
        while self.trajectories:
            trajectory = self.trajectories.pop()
            self.trajectory_removed_emitter.emit(trajectory)
            trajectory.dispose()
        self._pending_launches = 0
        self._time_since_last_projectile = 0.0
        self.data_probe.data_point = None

    def _mark_moving_trajectories_changed_mid_air(self):
        for trajectory in self.trajectories:
            if not trajectory.reached_ground:
                trajectory.mark_changed_in_mid_air()

    def reset(self):
        """Back to the screen's initial state with no trajectories."""
        self.erase_trajectories()
        self._reset_settings()
        self.target.reset()
        self.data_probe.reset()
        self._residual_time = 0.0
