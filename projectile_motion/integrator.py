"""
Numerical Integration Engine
============================
Advances a projectile through one fixed time step under gravity and
quadratic drag, using the kinematic update

    x_{n+1} = x_n + v_n dt + ½ a_n dt²
    v_{n+1} = v_n + a_n dt
    a_{n+1} = a(v_{n+1}, y_{n+1})

i.e. position and velocity are advanced with the acceleration of the
previous sample, then drag and acceleration are recomputed from the new
velocity at the new height for use by the next step.

Two events are resolved inside a step instead of being left to the next
sample:

1. **Ground impact**: if the new height would be at or below zero, the
   exact time to ground within the step is solved from
   0 = y + vy t + ½ ay t², and the final sample lands at y = 0.
2. **Apex**: if vy changes sign from positive to negative, an extra
   sample is interpolated at the zero crossing and flagged as the apex.

Output: the list of new DataPoints, in time order.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .atmosphere import AtmosphereModel
from .data_point import DataPoint
from .drag_model import drag_force, acceleration_from_drag
from .projectile import Projectile, LaunchConditions


def next_position(position, velocity, acceleration, dt):
    """Basic kinematic position update; works on scalars and arrays."""
    return position + velocity * dt + 0.5 * acceleration * dt * dt


def _linear(a1: float, a2: float, b1: float, b2: float, a3: float) -> float:
    """Map a3 from the range [a1, a2] onto [b1, b2]."""
    return b1 + (a3 - a1) * (b2 - b1) / (a2 - a1)


def time_to_ground(y: float, vy: float, ay: float) -> float:
    """
    Time until height ``y`` reaches zero under constant vertical
    acceleration ``ay``, taking the physically valid (smallest
    non-negative) root of 0 = y + vy t + ½ ay t².

    Only meaningful when the ground is actually reached; callers check
    that first.
    """
    if ay == 0:
        # no vertical acceleration, e.g. zero gravity in vacuum
        if y == 0 or vy == 0:
            return 0.0
        return -y / vy
    discriminant = max(vy * vy - 2 * ay * y, 0.0)
    return (-np.sqrt(discriminant) - vy) / ay


def _apex_point(projectile: Projectile, new_position: np.ndarray,
                new_velocity: np.ndarray, dt: float, gravity: float,
                atmosphere: AtmosphereModel) -> DataPoint:
    """
    Interpolate the apex between the projectile's current state and the
    end of the step. Exact in vacuum; an approximation with drag.
    """
    p, v, a = projectile.position, projectile.velocity, projectile.acceleration
    dt_to_apex = _linear(v[1], new_velocity[1], 0.0, dt, 0.0)

    apex_x = _linear(0.0, dt, p[0], new_position[0], dt_to_apex)
    apex_y = next_position(p[1], v[1], a[1], dt_to_apex)
    apex_vx = _linear(0.0, dt, v[0], new_velocity[0], dt_to_apex)

    rho_new = atmosphere.density(new_position[1])
    new_drag = drag_force(new_velocity, rho_new, projectile.drag_coefficient, projectile.area)
    apex_drag = np.array([
        _linear(0.0, dt, projectile.drag_force[0], new_drag[0], dt_to_apex),
        _linear(0.0, dt, projectile.drag_force[1], new_drag[1], dt_to_apex),
    ])

    return DataPoint(
        time=projectile.time + dt_to_apex,
        position=np.array([apex_x, apex_y]),
        air_density=atmosphere.density(apex_y),
        velocity=np.array([apex_vx, 0.0]),
        acceleration=acceleration_from_drag(apex_drag, projectile.mass, gravity),
        drag_force=apex_drag,
        force_gravity=-gravity * projectile.mass,
        apex=True,
    )


def step_projectile(projectile: Projectile, dt: float, gravity: float,
                    atmosphere: AtmosphereModel,
                    find_apex: bool = True) -> List[DataPoint]:
    """
    Advance ``projectile`` by ``dt`` seconds in place and return the new
    samples: the next state, preceded by an interpolated apex sample when
    the apex falls inside this step and ``find_apex`` is set.

    A non-positive ``dt`` or a projectile already on the ground is a no-op.
    """
    if projectile.reached_ground or not dt > 0:
        return []

    p, v, a = projectile.position, projectile.velocity, projectile.acceleration

    new_position = next_position(p, v, a, dt)
    new_velocity = v + a * dt

    # If drag reverses the x-velocity in this step, stop horizontal motion
    # where vx reaches zero. Gravity already reverses vy, so no y counterpart.
    if np.sign(new_velocity[0]) != np.sign(v[0]):
        new_velocity[0] = 0.0
        stop_dt = -v[0] / a[0]
        new_position[0] = next_position(p[0], v[0], a[0], stop_dt)

    landed = new_position[1] <= 0
    if landed:
        t_ground = min(max(time_to_ground(p[1], v[1], a[1]), 0.0), dt)

    points = []
    passes_apex = find_apex and v[1] > 0 and new_velocity[1] < 0
    if passes_apex:
        apex = _apex_point(projectile, new_position, new_velocity, dt, gravity, atmosphere)
        if not landed or apex.time < projectile.time + t_ground:
            points.append(apex)

    if not landed:
        points.append(projectile.data_point_at(
            projectile.time + dt, new_position, new_velocity, gravity, atmosphere,
            apex=find_apex and v[1] > 0 and new_velocity[1] == 0,
        ))
    else:
        impact_position = np.array([next_position(p[0], v[0], a[0], t_ground), 0.0])
        impact_velocity = v + a * t_ground
        points.append(projectile.data_point_at(
            projectile.time + t_ground, impact_position, impact_velocity,
            gravity, atmosphere, reached_ground=True,
        ))

    projectile.sync(points[-1])
    if landed:
        projectile.land()
    return points


# ══════════════════════════════════════════════════════════════════════════
#  Stand-alone flights
# ══════════════════════════════════════════════════════════════════════════

@dataclass
class FlightResult:
    """Complete flight of one projectile, launch to impact."""
    conditions: LaunchConditions
    mass: float
    diameter: float
    drag_coefficient: float
    gravity: float
    dt: float
    points: List[DataPoint] = field(repr=False)

    # Arrays, each of shape (N,)
    time: np.ndarray = field(init=False, repr=False)
    x: np.ndarray = field(init=False, repr=False)
    y: np.ndarray = field(init=False, repr=False)
    vx: np.ndarray = field(init=False, repr=False)
    vy: np.ndarray = field(init=False, repr=False)
    speed: np.ndarray = field(init=False, repr=False)
    density: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        self.time = np.array([p.time for p in self.points])
        self.x = np.array([p.x for p in self.points])
        self.y = np.array([p.y for p in self.points])
        self.vx = np.array([p.velocity[0] for p in self.points])
        self.vy = np.array([p.velocity[1] for p in self.points])
        self.speed = np.hypot(self.vx, self.vy)
        self.density = np.array([p.air_density for p in self.points])

    @property
    def landed(self) -> bool:
        return self.points[-1].reached_ground

    @property
    def apex(self) -> Optional[DataPoint]:
        return next((p for p in self.points if p.apex), None)

    @property
    def range_total(self) -> float:
        """Horizontal distance at impact (m)."""
        return float(self.x[-1])

    @property
    def max_height(self) -> float:
        """Maximum height reached (m)."""
        return float(np.max(self.y))

    @property
    def flight_time(self) -> float:
        """Total flight time (s)."""
        return float(self.time[-1])

    @property
    def impact_speed(self) -> float:
        """Speed at impact (m/s)."""
        return float(self.speed[-1])

    @property
    def impact_angle_deg(self) -> float:
        """Angle of descent at impact (degrees below horizontal)."""
        return float(np.degrees(np.arctan2(-self.vy[-1], abs(self.vx[-1]))))

    def summary(self) -> str:
        """Human-readable summary string."""
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  FLIGHT SUMMARY{'':<38s}║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Mass         : {self.mass:>10.2f} kg{'':<23s} ║",
            f"║  Diameter     : {self.diameter:>10.2f} m{'':<24s} ║",
            f"║  Drag coeff   : {self.drag_coefficient:>10.2f}{'':<26s} ║",
            f"║  Timestep     : {self.dt:>10.4f} s{'':<24s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Launch speed : {self.conditions.speed:>10.1f} m/s{'':<22s} ║",
            f"║  Launch angle : {self.conditions.angle_deg:>10.1f} °{'':<24s} ║",
            f"║  Launch height: {self.conditions.height:>10.1f} m{'':<24s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Range        : {self.range_total:>10.2f} m{'':<24s} ║",
            f"║  Max height   : {self.max_height:>10.2f} m{'':<24s} ║",
            f"║  Flight time  : {self.flight_time:>10.2f} s{'':<24s} ║",
            f"║  Impact speed : {self.impact_speed:>10.2f} m/s{'':<22s} ║",
            f"║  Impact angle : {self.impact_angle_deg:>10.1f} °{'':<24s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def simulate(conditions: LaunchConditions, mass: float, diameter: float,
             drag_coefficient: float, gravity: float,
             atmosphere: AtmosphereModel, dt: float = 0.012,
             max_time: float = 300.0) -> FlightResult:
    """
    Fly one projectile from the cannon to the ground (or ``max_time``)
    with a fixed step ``dt``.
    """
    if not dt > 0:
        raise ValueError(f"dt must be > 0, got {dt}")

    projectile = Projectile.launch(conditions, mass, diameter, drag_coefficient,
                                   gravity, atmosphere)
    points = [projectile.to_data_point()]
    apex_found = False

    while not projectile.reached_ground and projectile.time < max_time:
        new_points = step_projectile(projectile, dt, gravity, atmosphere,
                                     find_apex=not apex_found)
        apex_found = apex_found or any(p.apex for p in new_points)
        # launched from the ground heading down: the impact replaces t = 0
        if new_points[-1].time == points[-1].time:
            points.pop()
        points.extend(new_points)

    return FlightResult(
        conditions=conditions,
        mass=mass,
        diameter=diameter,
        drag_coefficient=drag_coefficient,
        gravity=gravity,
        dt=dt,
        points=points,
    )
