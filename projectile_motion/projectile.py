"""
Projectile Definition & Launch Conditions
=========================================
Defines the flight body that the integrator advances: its physical
parameters (mass, diameter, drag coefficient) and its integration state
(time, position, velocity, acceleration, drag force).

Coordinate system:
  x = range  (horizontal, away from the cannon)
  y = height (vertical, up positive, ground at y = 0)
"""

from dataclasses import dataclass, field

import numpy as np

from .atmosphere import AtmosphereModel
from .data_point import DataPoint
from .drag_model import cross_sectional_area, drag_force, acceleration_from_drag


@dataclass
class LaunchConditions:
    """
    Cannon settings for a single shot.
    """
    speed: float = 18.0             # m/s  launch speed
    angle_deg: float = 80.0         # degrees above horizontal
    height: float = 0.0             # m    cannon height above the ground

    def initial_velocity_vector(self) -> np.ndarray:
        """
        Convert launch speed + angle to [vx, vy].
        """
        angle = np.radians(self.angle_deg)
        return np.array([self.speed * np.cos(angle), self.speed * np.sin(angle)])

    def initial_position(self) -> np.ndarray:
        """Starting position [x, y]."""
        return np.array([0.0, self.height])


@dataclass
class Projectile:
    """
    A projectile in flight. Owned by exactly one Trajectory; a trajectory
    whose environment changes mid-air continues with a new Projectile leg
    started from its last data point.
    """
    mass: float                       # kg
    diameter: float                   # m
    drag_coefficient: float
    time: float = 0.0                 # s since fire
    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(2))
    drag_force: np.ndarray = field(default_factory=lambda: np.zeros(2))
    air_density: float = 0.0
    force_gravity: float = 0.0
    reached_ground: bool = False

    def __post_init__(self):
        if self.mass <= 0:
            raise ValueError(f"Projectile mass must be > 0, got {self.mass}")
        if self.diameter <= 0:
            raise ValueError(f"Projectile diameter must be > 0, got {self.diameter}")
        self.area = cross_sectional_area(self.diameter)
        self.position = np.array(self.position, dtype=float)
        self.velocity = np.array(self.velocity, dtype=float)
        self.acceleration = np.array(self.acceleration, dtype=float)
        self.drag_force = np.array(self.drag_force, dtype=float)

    def data_point_at(self, time: float, position: np.ndarray, velocity: np.ndarray,
                      gravity: float, atmosphere: AtmosphereModel,
                      apex: bool = False, reached_ground: bool = False) -> DataPoint:
        """
        Build a DataPoint for this body at the given kinematic state, with
        drag and acceleration derived from the velocity and the air density
        at the point's height.
        """
        rho = atmosphere.density(position[1])
        drag = drag_force(velocity, rho, self.drag_coefficient, self.area)
        return DataPoint(
            time=time,
            position=position,
            air_density=rho,
            velocity=velocity,
            acceleration=acceleration_from_drag(drag, self.mass, gravity),
            drag_force=drag,
            force_gravity=-gravity * self.mass,
            apex=apex,
            reached_ground=reached_ground,
        )

    @classmethod
    def launch(cls, conditions: LaunchConditions, mass: float, diameter: float,
               drag_coefficient: float, gravity: float,
               atmosphere: AtmosphereModel) -> 'Projectile':
        """Projectile sitting at the cannon mouth at t = 0."""
        projectile = cls(mass, diameter, drag_coefficient)
        projectile.sync(projectile.data_point_at(
            0.0, conditions.initial_position(), conditions.initial_velocity_vector(),
            gravity, atmosphere,
        ))
        return projectile

    @classmethod
    def from_data_point(cls, point: DataPoint, mass: float, diameter: float,
                        drag_coefficient: float, gravity: float,
                        atmosphere: AtmosphereModel) -> 'Projectile':
        """
        New leg continuing from ``point`` under the given environment. Forces
        are recomputed so the change takes effect from the next step.
        """
        projectile = cls(mass, diameter, drag_coefficient)
        projectile.sync(projectile.data_point_at(
            point.time, point.position, point.velocity, gravity, atmosphere,
        ))
        projectile.reached_ground = point.reached_ground
        return projectile

    def sync(self, point: DataPoint):
        """Adopt the state recorded in ``point``."""
        self.time = point.time
        self.position = point.position.copy()
        self.velocity = point.velocity.copy()
        self.acceleration = point.acceleration.copy()
        self.drag_force = point.drag_force.copy()
        self.air_density = point.air_density
        self.force_gravity = point.force_gravity

    def to_data_point(self) -> DataPoint:
        return DataPoint(
            time=self.time,
            position=self.position,
            air_density=self.air_density,
            velocity=self.velocity,
            acceleration=self.acceleration,
            drag_force=self.drag_force,
            force_gravity=self.force_gravity,
            reached_ground=self.reached_ground,
        )

    def land(self):
        """Terminal state: on the ground, no longer moving."""
        self.reached_ground = True
        self.position[1] = 0.0
        self.velocity = np.zeros(2)
        self.acceleration = np.zeros(2)
        self.drag_force = np.zeros(2)
