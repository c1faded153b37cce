"""
Unit Tests for State Serialization
==================================
Run: python -m pytest tests/ -v
"""

import sys
import os
import json
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from projectile_motion.atmosphere import AtmosphereModel
from projectile_motion.config import SimulationConfig, TimeSpeed
from projectile_motion.manager import TrajectoryManager
from projectile_motion.object_types import get_object_type
from projectile_motion.serialization import (
    data_point_to_state, data_point_from_state,
    object_type_to_state, object_type_from_state,
    trajectory_to_state, trajectory_from_state,
    manager_to_state, apply_manager_state, dumps, loads,
)


def busy_lab_manager():
    """A lab manager with edited settings and landed plus flying trajectories."""
    manager = TrajectoryManager(SimulationConfig.for_screen('lab', seed=3))
    manager.select_object_type('golfBall')
    manager.projectile_mass = 0.5
    manager.air_resistance_on = True
    manager.altitude = 1200.0
    manager.cannon_angle = 50.0
    manager.initial_speed = 22.0
    manager.time_speed = TimeSpeed.SLOW
    manager.target.set_x(30.0)

    manager.fire()
    for _ in range(400):
        manager.step_model_elements(manager.config.time_per_data_point)
    manager.cannon_angle = 70.0
    manager.fire()
    for _ in range(40):
        manager.step_model_elements(manager.config.time_per_data_point)
    return manager


class TestPieces:

    def test_data_point_state_is_plain(self):
        manager = busy_lab_manager()
        point = manager.trajectories[0].apex_point
        state = data_point_to_state(point)
        assert state['position'] == {'x': point.x, 'y': point.y}
        assert state['apex'] is True
        restored = data_point_from_state(json.loads(json.dumps(state)))
        assert restored.equals(point)
        assert restored.apex and not restored.reached_ground

    def test_object_type_round_trip(self):
        piano = get_object_type('piano')
        restored = object_type_from_state(object_type_to_state(piano))
        assert restored == piano

    def test_companionless_round_trip(self):
        companionless = get_object_type('companionless')
        state = object_type_to_state(companionless)
        assert state['benchmark'] is None
        assert object_type_from_state(state).key == 'companionless'

    def test_trajectory_round_trip(self):
        manager = busy_lab_manager()
        original = manager.trajectories[0]
        state = trajectory_to_state(original)
        restored = trajectory_from_state(json.loads(json.dumps(state)),
                                         manager.gravity, manager.atmosphere)
        assert trajectory_to_state(restored) == state
        assert restored.reached_ground
        assert restored.apex_point.equals(original.apex_point)


class TestManagerState:

    def test_json_round_trip_is_lossless(self):
        manager = busy_lab_manager()
        text = dumps(manager)

        other = TrajectoryManager(SimulationConfig.for_screen('lab'))
        loads(other, text)
        assert manager_to_state(other) == manager_to_state(manager)
        assert other.projectile_mass == 0.5
        assert other.selected_object_type.key == 'golfBall'
        assert other.time_speed is TimeSpeed.SLOW

    def test_restored_manager_continues_identically(self):
        manager = busy_lab_manager()
        other = TrajectoryManager(SimulationConfig.for_screen('lab'))
        apply_manager_state(other, json.loads(dumps(manager)))

        for m in (manager, other):
            while m.number_of_moving_projectiles > 0:
                m.step_model_elements(m.config.time_per_data_point)

        a, b = manager.trajectories[-1], other.trajectories[-1]
        assert b.horizontal_displacement == pytest.approx(a.horizontal_displacement)
        assert b.flight_time == pytest.approx(a.flight_time)

    def test_ranks_preserved(self):
        manager = busy_lab_manager()
        other = TrajectoryManager(SimulationConfig.for_screen('lab'))
        loads(other, dumps(manager))
        assert [t.rank for t in other.trajectories] == [1, 0]

    def test_reset_after_restore_returns_to_screen_defaults(self):
        fresh = manager_to_state(TrajectoryManager(SimulationConfig.for_screen('lab')))
        other = TrajectoryManager(SimulationConfig.for_screen('lab'))
        loads(other, dumps(busy_lab_manager()))
        assert other.object_types['golfBall'].mass == 0.5
        other.reset()
        assert manager_to_state(other) == fresh
        assert other.object_types['golfBall'].mass == other.object_types['golfBall'].initial_mass

    def test_apply_replaces_existing_trajectories(self):
        empty = TrajectoryManager(SimulationConfig.for_screen('lab'))
        state = manager_to_state(empty)

        manager = busy_lab_manager()
        old = list(manager.trajectories)
        apply_manager_state(manager, state)
        assert manager.trajectories == []
        assert all(t.is_disposed for t in old)

    def test_vectors_serialize_as_xy(self):
        manager = busy_lab_manager()
        state = json.loads(dumps(manager))
        point = state['trajectories'][0]['dataPoints'][1]
        assert set(point['velocity']) == {'x', 'y'}
        assert np.isclose(point['airDensity'],
                          AtmosphereModel(altitude=1200.0).density(point['position']['y']))


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
