"""
Trajectory Data Points
======================
Immutable snapshot of a projectile's kinematic state at one instant.

Coordinate system:
  x = range  (horizontal distance from the cannon)
  y = height (above the ground, up positive)
"""

from dataclasses import dataclass

import numpy as np


_VECTOR_FIELDS = ('position', 'velocity', 'acceleration', 'drag_force')


@dataclass(frozen=True, eq=False)
class DataPoint:
    """One sample on a trajectory."""
    time: float                  # s since fire
    position: np.ndarray         # [x, y] m
    air_density: float           # kg/m³
    velocity: np.ndarray         # [vx, vy] m/s
    acceleration: np.ndarray     # [ax, ay] m/s²
    drag_force: np.ndarray       # [Fx, Fy] N, parallel to velocity
    force_gravity: float         # N, signed vertical component (−g·m)
    apex: bool = False
    reached_ground: bool = False

    def __post_init__(self):
        assert not np.isnan(self.time), f"DataPoint time is {self.time}"
        for name in _VECTOR_FIELDS:
            vector = np.array(getattr(self, name), dtype=float)
            vector.setflags(write=False)
            object.__setattr__(self, name, vector)
        assert self.time != 0 or self.position[0] == 0, \
            f"Time is {self.time}, but x is {self.position[0]}"

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def speed(self) -> float:
        return float(np.hypot(self.velocity[0], self.velocity[1]))

    def distance_to(self, x: float, y: float) -> float:
        return float(np.hypot(self.position[0] - x, self.position[1] - y))

    def equals(self, other: 'DataPoint') -> bool:
        """Whether both points carry the same kinematic data."""
        return (self.time == other.time
                and np.array_equal(self.position, other.position)
                and self.air_density == other.air_density
                and np.array_equal(self.velocity, other.velocity)
                and np.array_equal(self.acceleration, other.acceleration)
                and np.array_equal(self.drag_force, other.drag_force)
                and self.force_gravity == other.force_gravity)
