"""
Simulation Configuration
========================
Constants, time-speed selection and per-screen presets for the
projectile motion simulation.

Everything the host application can tune is carried by a
``SimulationConfig`` instance; the module-level constants below are only
the defaults those configs are built from.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple


# ── Physical defaults ─────────────────────────────────────────────────────
GRAVITY_ON_EARTH             = 9.81        # m/s²

CANNONBALL_MASS              = 17.6        # kg
CANNONBALL_DIAMETER          = 0.18        # m
CANNONBALL_DRAG_COEFFICIENT  = 0.47

# ── Resource limits ───────────────────────────────────────────────────────
MAX_NUMBER_OF_TRAJECTORIES       = 10
MAX_NUMBER_OF_TRAJECTORIES_STATS = 20
RAPID_FIRE_DELTA_TIME            = 0.2     # s of sim time between launches

GROUP_SIZE_DEFAULT   = 10
GROUP_SIZE_MIN       = 1
GROUP_SIZE_MAX       = 20

# ── Ranges (min, max) ─────────────────────────────────────────────────────
CANNON_HEIGHT_RANGE                  = (0.0, 15.0)      # m
CANNON_ANGLE_RANGE                   = (-90.0, 90.0)    # degrees
LAUNCH_VELOCITY_RANGE                = (0.0, 30.0)      # m/s
SPEED_STANDARD_DEVIATION_RANGE       = (0.0, 10.0)      # m/s
ANGLE_STANDARD_DEVIATION_RANGE       = (0.0, 30.0)      # degrees
PROJECTILE_MASS_RANGE                = (0.01, 5000.0)   # kg
PROJECTILE_DIAMETER_RANGE            = (0.01, 3.0)      # m
PROJECTILE_DRAG_COEFFICIENT_RANGE    = (0.04, 1.2)      # teardrop to almost hemisphere
ALTITUDE_RANGE                       = (0.0, 5000.0)    # m
GRAVITY_RANGE                        = (1.0, 20.0)      # m/s²

# ── Data point collection ─────────────────────────────────────────────────
SLOW_MOTION_FACTOR   = 0.33
TIME_PER_DATA_POINT  = 12      # ms
TIME_PER_MINOR_DOT   = 100     # ms
TIME_PER_MAJOR_DOT   = 1000    # ms

# ── Target and tools ──────────────────────────────────────────────────────
TARGET_X_DEFAULT     = 15.0    # m
TARGET_X_STATS       = 20.0    # m
TARGET_WIDTH         = 3.0     # m
TARGET_X_RANGE       = (-100.0, 100.0)

SENSING_RADIUS       = 0.2     # m, scaled by 1 / zoom
ZOOM_RANGE           = (0.25, 2.0)
DEFAULT_ZOOM         = 1.0


class TimeSpeed(Enum):
    NORMAL = 'normal'
    SLOW = 'slow'


def in_range(value: float, value_range: Tuple[float, float]) -> bool:
    return value_range[0] <= value <= value_range[1]


def clamp(value: float, value_range: Tuple[float, float]) -> float:
    return min(max(value, value_range[0]), value_range[1])


def check_range(name: str, value: float, value_range: Tuple[float, float]) -> float:
    """Return ``value`` or raise ValueError if it lies outside ``value_range``."""
    if not in_range(value, value_range):
        raise ValueError(
            f"{name} must be within [{value_range[0]}, {value_range[1]}], got {value}"
        )
    return value


INTRO_OBJECT_TYPES = (
    'cannonball', 'tankShell', 'golfBall', 'baseball', 'football',
    'pumpkin', 'human', 'piano', 'car',
)

LAB_OBJECT_TYPES = ('custom',) + INTRO_OBJECT_TYPES


@dataclass
class SimulationConfig:
    """
    Everything a screen of the simulation is parameterised by.
    """
    max_projectiles: int = MAX_NUMBER_OF_TRAJECTORIES
    default_cannon_height: float = 0.0          # m
    default_cannon_angle: float = 80.0          # degrees
    default_initial_speed: float = 18.0         # m/s
    default_speed_standard_deviation: float = 0.0
    default_angle_standard_deviation: float = 0.0
    target_x: float = TARGET_X_DEFAULT
    target_width: float = TARGET_WIDTH

    object_types: Tuple[str, ...] = ('companionless',)
    default_object_type: str = 'companionless'
    editable_object_types: bool = False
    default_air_resistance_on: bool = True

    default_gravity: float = GRAVITY_ON_EARTH
    default_altitude: float = 0.0
    default_group_size: int = GROUP_SIZE_DEFAULT

    time_per_data_point: float = TIME_PER_DATA_POINT / 1000   # s
    slow_motion_factor: float = SLOW_MOTION_FACTOR
    rapid_fire_delta_time: float = RAPID_FIRE_DELTA_TIME

    seed: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        if self.max_projectiles < 1:
            raise ValueError(f"max_projectiles must be >= 1, got {self.max_projectiles}")
        if self.time_per_data_point <= 0:
            raise ValueError("time_per_data_point must be > 0")
        if self.rapid_fire_delta_time <= 0:
            raise ValueError("rapid_fire_delta_time must be > 0")
        if not 0 < self.slow_motion_factor <= 1:
            raise ValueError("slow_motion_factor must be within (0, 1]")
        if self.default_object_type not in self.object_types:
            raise ValueError(
                f"Default object type '{self.default_object_type}' is not one of "
                f"{list(self.object_types)}"
            )
        check_range('default_cannon_height', self.default_cannon_height, CANNON_HEIGHT_RANGE)
        check_range('default_cannon_angle', self.default_cannon_angle, CANNON_ANGLE_RANGE)
        check_range('default_initial_speed', self.default_initial_speed, LAUNCH_VELOCITY_RANGE)
        check_range('default_speed_standard_deviation',
                    self.default_speed_standard_deviation, SPEED_STANDARD_DEVIATION_RANGE)
        check_range('default_angle_standard_deviation',
                    self.default_angle_standard_deviation, ANGLE_STANDARD_DEVIATION_RANGE)
        check_range('default_gravity', self.default_gravity, GRAVITY_RANGE)
        check_range('default_altitude', self.default_altitude, ALTITUDE_RANGE)
        check_range('default_group_size', self.default_group_size,
                    (GROUP_SIZE_MIN, GROUP_SIZE_MAX))
        check_range('target_x', self.target_x, TARGET_X_RANGE)

    @classmethod
    def for_screen(cls, screen: str, **overrides) -> 'SimulationConfig':
        """Build the config of one of the named screens in SCREEN_PRESETS."""
        if screen not in SCREEN_PRESETS:
            raise ValueError(
                f"Unknown screen '{screen}'. Available: {list(SCREEN_PRESETS.keys())}"
            )
        return replace(SCREEN_PRESETS[screen], **overrides)


# ══════════════════════════════════════════════════════════════════════════
#  Screen presets
# ══════════════════════════════════════════════════════════════════════════

SCREEN_PRESETS = {
    'intro': SimulationConfig(
        default_cannon_height=10.0,
        default_cannon_angle=0.0,
        default_initial_speed=15.0,
        object_types=INTRO_OBJECT_TYPES,
        default_object_type='pumpkin',
        default_air_resistance_on=False,
    ),
    'vectors': SimulationConfig(),
    'drag': SimulationConfig(),
    'lab': SimulationConfig(
        object_types=LAB_OBJECT_TYPES,
        default_object_type='cannonball',
        editable_object_types=True,
        default_air_resistance_on=False,
    ),
    'stats': SimulationConfig(
        max_projectiles=MAX_NUMBER_OF_TRAJECTORIES_STATS,
        default_cannon_height=2.0,
        default_cannon_angle=60.0,
        default_initial_speed=15.0,
        default_speed_standard_deviation=1.0,
        default_angle_standard_deviation=2.0,
        target_x=TARGET_X_STATS,
        object_types=INTRO_OBJECT_TYPES,
        default_object_type='cannonball',
        default_air_resistance_on=False,
    ),
}
