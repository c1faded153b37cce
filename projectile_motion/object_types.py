"""
Projectile Object Types
=======================
Benchmark objects the cannon can fire, each with default mass, diameter
and drag coefficient plus the ranges a user may edit them within.

Drag coefficients are representative published values:
- Hoerner, "Fluid Dynamic Drag" (1965) for spheres and bluff bodies
- typical sports-ball and vehicle measurements for the rest
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .config import (
    CANNONBALL_MASS, CANNONBALL_DIAMETER, CANNONBALL_DRAG_COEFFICIENT,
    PROJECTILE_DRAG_COEFFICIENT_RANGE,
)


@dataclass
class ProjectileObjectType:
    """
    One selectable kind of projectile.

    ``mass``, ``diameter`` and ``drag_coefficient`` are writable (the lab
    screen edits them in place); the values given at construction are kept
    as the initial values that ``reset`` restores.
    """
    name: Optional[str]                   # e.g. 'Golf Ball', None for the single-object screens
    benchmark: Optional[str]              # key in ALL_OBJECT_TYPES, None for companionless
    mass: float                           # kg
    diameter: float                       # m
    drag_coefficient: float
    rotates: bool = False                 # whether the object rotates or just translates in air
    mass_range: Tuple[float, float] = (1.0, 10.0)
    mass_round: float = 1.0
    diameter_range: Tuple[float, float] = (0.1, 1.0)
    diameter_round: float = 0.1
    drag_coefficient_range: Tuple[float, float] = (PROJECTILE_DRAG_COEFFICIENT_RANGE[0], 1.0)

    initial_mass: float = field(init=False)
    initial_diameter: float = field(init=False)
    initial_drag_coefficient: float = field(init=False)

    def __post_init__(self):
        self.initial_mass = self.mass
        self.initial_diameter = self.diameter
        self.initial_drag_coefficient = self.drag_coefficient

    @property
    def key(self) -> str:
        return self.benchmark if self.benchmark is not None else 'companionless'

    def reset(self):
        self.mass = self.initial_mass
        self.diameter = self.initial_diameter
        self.drag_coefficient = self.initial_drag_coefficient

    def copy(self) -> 'ProjectileObjectType':
        """Independent copy whose initial values are this type's current values."""
        return replace(self)


# ══════════════════════════════════════════════════════════════════════════
#  Benchmark table
# ══════════════════════════════════════════════════════════════════════════

ALL_OBJECT_TYPES = {
    'cannonball': ProjectileObjectType(
        'Cannonball', 'cannonball',
        CANNONBALL_MASS, CANNONBALL_DIAMETER, CANNONBALL_DRAG_COEFFICIENT,
        mass_range=(1.0, 31.0), mass_round=0.01,
        diameter_range=(0.1, 1.0), diameter_round=0.01,
    ),
    'pumpkin': ProjectileObjectType(
        'Pumpkin', 'pumpkin', 5.0, 0.37, 0.6,
        mass_range=(1.0, 1000.0), mass_round=1.0,
        diameter_range=(0.1, 3.0), diameter_round=0.01,
    ),
    'baseball': ProjectileObjectType(
        'Baseball', 'baseball', 0.15, 0.07, 0.35,
        mass_range=(0.01, 5.0), mass_round=0.01,
        diameter_range=(0.01, 1.0), diameter_round=0.01,
    ),
    'car': ProjectileObjectType(
        'Car', 'car', 2000.0, 2.0, 0.55, rotates=True,
        mass_range=(100.0, 5000.0), mass_round=1.0,
        diameter_range=(0.5, 3.0), diameter_round=0.1,
    ),
    'football': ProjectileObjectType(
        'Football', 'football', 0.41, 0.17, 0.05, rotates=True,
        mass_range=(0.01, 5.0), mass_round=0.01,
        diameter_range=(0.01, 1.0), diameter_round=0.01,
    ),
    'human': ProjectileObjectType(
        'Human', 'human', 70.0, 0.5, 0.6, rotates=True,
        mass_range=(10.0, 200.0), mass_round=1.0,
        diameter_range=(0.1, 1.5), diameter_round=0.1,
    ),
    'piano': ProjectileObjectType(
        'Piano', 'piano', 400.0, 2.2, PROJECTILE_DRAG_COEFFICIENT_RANGE[1],
        mass_range=(50.0, 1000.0), mass_round=1.0,
        diameter_range=(0.5, 3.0), diameter_round=0.1,
        # the piano accepts the full drag coefficient range
        drag_coefficient_range=PROJECTILE_DRAG_COEFFICIENT_RANGE,
    ),
    'golfBall': ProjectileObjectType(
        'Golf Ball', 'golfBall', 0.05, 0.04, 0.25,
        mass_range=(0.01, 5.0), mass_round=0.01,
        diameter_range=(0.01, 1.0), diameter_round=0.01,
    ),
    'tankShell': ProjectileObjectType(
        'Tank Shell', 'tankShell', 42.0, 0.15, 0.06, rotates=True,
        mass_range=(5.0, 200.0), mass_round=1.0,
        diameter_range=(0.1, 1.0), diameter_round=0.01,
    ),
    'custom': ProjectileObjectType(
        'Custom', 'custom', 100.0, 1.0, CANNONBALL_DRAG_COEFFICIENT, rotates=True,
        mass_range=(1.0, 5000.0), mass_round=0.01,
        diameter_range=(0.01, 3.0), diameter_round=0.01,
        drag_coefficient_range=(0.04, 1.0),
    ),
    # Single, general object for screens without object selection
    'companionless': ProjectileObjectType(
        None, None, 5.0, 0.8, CANNONBALL_DRAG_COEFFICIENT, rotates=True,
    ),
}


def get_object_type(key: str) -> ProjectileObjectType:
    """
    Return a fresh copy of the benchmark object type ``key``.

    Copies keep edits made on one screen from leaking into the table.
    """
    if key not in ALL_OBJECT_TYPES:
        raise ValueError(
            f"Unknown object type '{key}'. "
            f"Available: {list(ALL_OBJECT_TYPES.keys())}"
        )
    return ALL_OBJECT_TYPES[key].copy()
