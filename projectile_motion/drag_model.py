"""
Aerodynamic Drag Model
======================
Quadratic air resistance on a projectile with a constant drag
coefficient:

    F_drag = ½ ρ A Cd |v| v

The force vector is stored pointing along the velocity; the equations of
motion subtract it, so the resulting acceleration opposes the motion:

    a_x = −F_x / m
    a_y = −g − F_y / m
"""

import numpy as np


def cross_sectional_area(diameter: float) -> float:
    """Reference area (m²) of a projectile with the given diameter (m)."""
    return np.pi * diameter * diameter / 4


def drag_force(velocity: np.ndarray, rho: float, cd: float,
               area: float) -> np.ndarray:
    """
    Compute the aerodynamic drag force vector (N).

    Parameters
    ----------
    velocity : np.ndarray
        Projectile velocity [vx, vy] (m/s)
    rho : float
        Air density (kg/m³); zero when air resistance is off
    cd : float
        Drag coefficient (dimensionless)
    area : float
        Cross-sectional area (m²)

    Returns
    -------
    np.ndarray
        Drag force [Fx, Fy] (N), parallel to ``velocity``
    """
    velocity = np.asarray(velocity, dtype=float)
    v_mag = float(np.hypot(velocity[0], velocity[1]))
    return velocity * (0.5 * rho * area * cd * v_mag)


def acceleration_from_drag(drag: np.ndarray, mass: float,
                           gravity: float) -> np.ndarray:
    """Net acceleration [ax, ay] (m/s²) under gravity and the given drag."""
    return np.array([-drag[0] / mass, -gravity - drag[1] / mass])
