"""
Projectile Motion Simulator with Air Resistance
===============================================
Simulation core for a cannon that fires projectiles across flat ground:
  - Gravity (adjustable, even while projectiles are in flight)
  - Quadratic air drag with a per-object drag coefficient
  - Standard atmosphere (air density from terrain altitude + height)
  - Apex and ground impact resolved inside the integration step

A TrajectoryManager owns the live trajectories, steps them on a fixed
12 ms clock (with slow motion), fires single shots, groups and rapid
fire with optional speed/angle dispersion, and evicts old trajectories
to keep memory bounded. Targets score landings; a data probe reads out
recorded samples; the whole state serializes to plain dicts/JSON.
"""

from .atmosphere import (
    air_temperature, air_pressure, air_density,
    atmosphere_profile, AtmosphereModel,
)
from .config import SimulationConfig, TimeSpeed, SCREEN_PRESETS
from .data_point import DataPoint
from .data_probe import DataProbe
from .drag_model import drag_force, cross_sectional_area
from .events import Emitter
from .integrator import step_projectile, simulate, FlightResult
from .manager import TrajectoryManager
from .object_types import ProjectileObjectType, ALL_OBJECT_TYPES, get_object_type
from .projectile import Projectile, LaunchConditions
from .serialization import manager_to_state, apply_manager_state, dumps, loads
from .target import Target
from .trajectory import Trajectory
from .validation import validate_against_closed_form, run_all_validations

__version__ = "1.0.0"
__all__ = [
    'TrajectoryManager', 'Trajectory', 'Projectile', 'LaunchConditions',
    'DataPoint', 'DataProbe', 'Target', 'Emitter',
    'SimulationConfig', 'TimeSpeed', 'SCREEN_PRESETS',
    'ProjectileObjectType', 'ALL_OBJECT_TYPES', 'get_object_type',
    'AtmosphereModel', 'air_temperature', 'air_pressure', 'air_density',
    'atmosphere_profile', 'drag_force', 'cross_sectional_area',
    'step_projectile', 'simulate', 'FlightResult',
    'manager_to_state', 'apply_manager_state', 'dumps', 'loads',
    'validate_against_closed_form', 'run_all_validations',
]
