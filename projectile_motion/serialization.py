"""
State Serialization
===================
Plain state objects (dicts of numbers, booleans, strings and ``{x, y}``
vectors) for data points, object types, trajectories and a whole
manager, and back. Floats are carried as-is, so a JSON round trip is
lossless.
"""

import json
from typing import Optional

import numpy as np

from .config import TimeSpeed
from .data_point import DataPoint
from .object_types import ProjectileObjectType, get_object_type
from .trajectory import Trajectory


def vector_to_state(vector) -> dict:
    return {'x': float(vector[0]), 'y': float(vector[1])}


def vector_from_state(state: dict) -> np.ndarray:
    return np.array([state['x'], state['y']], dtype=float)


# ── Data points ───────────────────────────────────────────────────────────

def data_point_to_state(point: DataPoint) -> dict:
    return {
        'time': float(point.time),
        'position': vector_to_state(point.position),
        'airDensity': float(point.air_density),
        'velocity': vector_to_state(point.velocity),
        'acceleration': vector_to_state(point.acceleration),
        'dragForce': vector_to_state(point.drag_force),
        'forceGravity': float(point.force_gravity),
        'apex': bool(point.apex),
        'reachedGround': bool(point.reached_ground),
    }


def data_point_from_state(state: dict) -> DataPoint:
    return DataPoint(
        time=state.get('time') or 0.0,
        position=vector_from_state(state['position']),
        air_density=state['airDensity'],
        velocity=vector_from_state(state['velocity']),
        acceleration=vector_from_state(state['acceleration']),
        drag_force=vector_from_state(state['dragForce']),
        force_gravity=state.get('forceGravity') or 0.0,
        apex=state.get('apex', False),
        reached_ground=state.get('reachedGround', False),
    )


# ── Object types ──────────────────────────────────────────────────────────

def object_type_to_state(object_type: ProjectileObjectType) -> dict:
    return {
        'name': object_type.name,
        'benchmark': object_type.benchmark,
        'mass': object_type.mass,
        'diameter': object_type.diameter,
        'dragCoefficient': object_type.drag_coefficient,
        'rotates': object_type.rotates,
        'massRange': list(object_type.mass_range),
        'massRound': object_type.mass_round,
        'diameterRange': list(object_type.diameter_range),
        'diameterRound': object_type.diameter_round,
        'dragCoefficientRange': list(object_type.drag_coefficient_range),
    }


def object_type_from_state(state: dict) -> ProjectileObjectType:
    return ProjectileObjectType(
        name=state['name'],
        benchmark=state['benchmark'],
        mass=state['mass'],
        diameter=state['diameter'],
        drag_coefficient=state['dragCoefficient'],
        rotates=state['rotates'],
        mass_range=tuple(state['massRange']),
        mass_round=state['massRound'],
        diameter_range=tuple(state['diameterRange']),
        diameter_round=state['diameterRound'],
        drag_coefficient_range=tuple(state['dragCoefficientRange']),
    )


# ── Trajectories ──────────────────────────────────────────────────────────

def trajectory_to_state(trajectory: Trajectory) -> dict:
    apex = trajectory.apex_point
    return {
        'projectileObjectType': trajectory.object_type.key,
        'mass': trajectory.mass,
        'diameter': trajectory.diameter,
        'dragCoefficient': trajectory.drag_coefficient,
        'initialSpeed': trajectory.initial_speed,
        'initialHeight': trajectory.initial_height,
        'initialAngle': trajectory.initial_angle,
        'changedInMidAir': trajectory.changed_in_mid_air,
        'reachedGround': trajectory.reached_ground,
        'apexPoint': data_point_to_state(apex) if apex is not None else None,
        'maxHeight': trajectory.max_height,
        'horizontalDisplacement': trajectory.horizontal_displacement,
        'flightTime': trajectory.flight_time,
        'hasHitTarget': trajectory.has_hit_target,
        'rank': trajectory.rank,
        'dataPoints': [data_point_to_state(p) for p in trajectory.data_points],
    }


def trajectory_from_state(state: dict, gravity: float, atmosphere,
                          object_type: Optional[ProjectileObjectType] = None,
                          check_if_hit_target=None) -> Trajectory:
    """
    Rebuild a trajectory. ``gravity`` and ``atmosphere`` are the environment
    it continues flying in if it had not landed yet.
    """
    if object_type is None:
        object_type = get_object_type(state['projectileObjectType'])
    trajectory = Trajectory(
        object_type, state['mass'], state['diameter'], state['dragCoefficient'],
        state['initialSpeed'], state['initialHeight'], state['initialAngle'],
        gravity, atmosphere,
        check_if_hit_target=check_if_hit_target,
        data_points=[data_point_from_state(p) for p in state['dataPoints']],
    )
    trajectory.changed_in_mid_air = state['changedInMidAir']
    trajectory.has_hit_target = state['hasHitTarget']
    trajectory.rank = state['rank']
    return trajectory


# ── Whole manager ─────────────────────────────────────────────────────────

def manager_to_state(manager) -> dict:
    return {
        'cannonHeight': manager.cannon_height,
        'cannonAngle': manager.cannon_angle,
        'initialSpeed': manager.initial_speed,
        'speedStandardDeviation': manager.speed_standard_deviation,
        'angleStandardDeviation': manager.angle_standard_deviation,
        'selectedObjectType': manager.selected_object_type.key,
        'objectTypes': {key: object_type_to_state(t) for key, t in manager.object_types.items()},
        'projectileMass': manager.projectile_mass,
        'projectileDiameter': manager.projectile_diameter,
        'projectileDragCoefficient': manager.projectile_drag_coefficient,
        'gravity': manager.gravity,
        'altitude': manager.altitude,
        'airResistanceOn': manager.air_resistance_on,
        'groupSize': manager.group_size,
        'timeSpeed': manager.time_speed.value,
        'isPlaying': manager.is_playing,
        'rapidFireMode': manager.rapid_fire_mode,
        'targetX': manager.target.x,
        'trajectories': [trajectory_to_state(t) for t in manager.trajectories],
    }


def apply_manager_state(manager, state: dict):
    """Replace ``manager``'s settings and trajectories with ``state``."""
    manager.erase_trajectories()

    for key, type_state in state['objectTypes'].items():
        if key in manager.object_types:
            restored = object_type_from_state(type_state)
            current = manager.object_types[key]
            current.mass = restored.mass
            current.diameter = restored.diameter
            current.drag_coefficient = restored.drag_coefficient
    manager.select_object_type(state['selectedObjectType'])

    manager.cannon_height = state['cannonHeight']
    manager.cannon_angle = state['cannonAngle']
    manager.initial_speed = state['initialSpeed']
    manager.speed_standard_deviation = state['speedStandardDeviation']
    manager.angle_standard_deviation = state['angleStandardDeviation']
    manager.projectile_mass = state['projectileMass']
    manager.projectile_diameter = state['projectileDiameter']
    manager.projectile_drag_coefficient = state['projectileDragCoefficient']
    manager.gravity = state['gravity']
    manager.altitude = state['altitude']
    manager.air_resistance_on = state['airResistanceOn']
    manager.group_size = state['groupSize']
    manager.time_speed = TimeSpeed(state['timeSpeed'])
    manager.is_playing = state['isPlaying']
    manager.rapid_fire_mode = state['rapidFireMode']
    manager.target.set_x(state['targetX'])

    for trajectory_state in state['trajectories']:
        key = trajectory_state['projectileObjectType']
        trajectory = trajectory_from_state(
            trajectory_state, manager.gravity, manager.atmosphere,
            object_type=manager.object_types.get(key),
            check_if_hit_target=manager.target.check_if_hit_target,
        )
        manager.add_trajectory(trajectory)
    # adding bumps the ranks of earlier trajectories; restore the saved ones
    for trajectory, trajectory_state in zip(manager.trajectories, state['trajectories']):
        trajectory.rank = trajectory_state['rank']


def dumps(manager, **kwargs) -> str:
    return json.dumps(manager_to_state(manager), **kwargs)


def loads(manager, text: str):
    apply_manager_state(manager, json.loads(text))
