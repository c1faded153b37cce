"""
Unit Tests for Trajectories
===========================
Run: python -m pytest tests/ -v
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from projectile_motion.atmosphere import AtmosphereModel
from projectile_motion.data_point import DataPoint
from projectile_motion.events import Emitter
from projectile_motion.object_types import get_object_type
from projectile_motion.trajectory import Trajectory


DT = 0.012
AIR = AtmosphereModel()
VACUUM = AtmosphereModel(air_resistance_on=False)


def make_trajectory(speed=18.0, height=0.0, angle=80.0, gravity=9.81,
                    atmosphere=AIR, **kwargs):
    object_type = get_object_type('cannonball')
    return Trajectory(object_type, object_type.mass, object_type.diameter,
                      object_type.drag_coefficient, speed, height, angle,
                      gravity, atmosphere, **kwargs)


def fly(trajectory, gravity=9.81, atmosphere=AIR, max_steps=10000):
    steps = 0
    while not trajectory.reached_ground and steps < max_steps:
        trajectory.step(DT, gravity, atmosphere)
        steps += 1
    return steps


class TestTrajectoryLifecycle:

    def test_starts_at_cannon(self):
        t = make_trajectory(height=5.0)
        assert len(t.data_points) == 1
        first = t.data_points[0]
        assert first.time == 0.0
        assert np.allclose(first.position, [0.0, 5.0])
        assert t.max_height == 5.0
        assert t.rank == 0
        assert not t.reached_ground

    def test_lands_once(self):
        landed = []
        t = make_trajectory()
        t.landed_emitter.add_listener(landed.append)
        fly(t)
        assert t.reached_ground
        assert landed == [t]
        assert t.projectile_point.reached_ground
        assert t.projectile_point.y == 0.0
        assert t.flight_time == t.data_points[-1].time
        assert t.horizontal_displacement == t.data_points[-1].x

    def test_step_after_landing_is_noop(self):
        t = make_trajectory()
        fly(t)
        count = len(t.data_points)
        assert t.step(DT, 9.81, AIR) == []
        assert len(t.data_points) == count

    def test_target_checked_with_landing_x(self):
        seen = []

        def check(x):
            seen.append(x)
            return True

        t = make_trajectory(check_if_hit_target=check)
        fly(t)
        assert seen == [t.horizontal_displacement]
        assert t.has_hit_target

    def test_one_point_per_step_plus_apex(self):
        t = make_trajectory(atmosphere=VACUUM)
        steps = fly(t, atmosphere=VACUUM)
        # launch point + one per step + the apex
        assert len(t.data_points) == 1 + steps + 1
        assert t.apex_point is not None
        assert sum(p.apex for p in t.data_points) == 1

    def test_max_height_is_apex(self):
        t = make_trajectory()
        fly(t)
        assert t.max_height == pytest.approx(t.apex_point.y)

    def test_data_point_added_emitted(self):
        added = []
        t = make_trajectory()
        t.data_point_added_emitter.add_listener(added.append)
        t.step(DT, 9.81, AIR)
        assert added == t.data_points[1:]

    def test_downward_launch_from_ground(self):
        t = make_trajectory(angle=-45.0, height=0.0)
        t.step(DT, 9.81, AIR)
        assert t.reached_ground
        assert len(t.data_points) == 1
        assert t.data_points[0].reached_ground
        assert t.flight_time == 0.0


class TestTrajectoryInvariants:

    def test_out_of_order_point_rejected(self):
        t = make_trajectory()
        t.step(DT, 9.81, AIR)
        with pytest.raises(AssertionError):
            t.add_data_point(t.data_points[0])

    def test_disposed_trajectory_rejects_work(self):
        t = make_trajectory()
        t.dispose()
        assert t.is_disposed
        assert t.data_points == []
        with pytest.raises(RuntimeError):
            t.step(DT, 9.81, AIR)

    def test_nearest_point(self):
        t = make_trajectory(atmosphere=VACUUM)
        fly(t, atmosphere=VACUUM)
        apex = t.apex_point
        assert t.get_nearest_point(apex.x, apex.y + 0.001) is apex
        assert t.get_nearest_point(-5.0, 0.0) is t.data_points[0]

    def test_nearest_point_tie_goes_to_later_point(self):
        t = make_trajectory(atmosphere=VACUUM)
        for time, x in [(0.012, 1.0), (0.024, 3.0)]:
            t.add_data_point(DataPoint(time=time, position=[x, 1.0], air_density=0.0,
                                       velocity=[1.0, 0.0], acceleration=[0.0, -9.81],
                                       drag_force=[0.0, 0.0], force_gravity=-9.81))
        assert t.get_nearest_point(2.0, 1.0) is t.data_points[-1]

    def test_nearest_point_empty(self):
        t = make_trajectory()
        t.dispose()
        assert t.get_nearest_point(0.0, 0.0) is None


class TestMidAirChanges:

    def test_gravity_change_forks_a_new_leg(self):
        t = make_trajectory(atmosphere=VACUUM)
        for _ in range(20):
            t.step(DT, 9.81, VACUUM)
        before = list(t.data_points)

        t.mark_changed_in_mid_air()
        t.step(DT, 3.0, VACUUM)

        assert t.changed_in_mid_air
        assert len(t.legs) == 2
        assert t.data_points[:len(before)] == before
        assert t.projectile_point.acceleration[1] == pytest.approx(-3.0)

    def test_lower_gravity_flies_further(self):
        reference = make_trajectory(atmosphere=VACUUM)
        fly(reference, atmosphere=VACUUM)

        changed = make_trajectory(atmosphere=VACUUM)
        for _ in range(20):
            changed.step(DT, 9.81, VACUUM)
        changed.mark_changed_in_mid_air()
        fly(changed, gravity=3.0, atmosphere=VACUUM)

        assert changed.flight_time > reference.flight_time
        assert changed.max_height > reference.max_height

    def test_landed_trajectory_is_not_marked(self):
        t = make_trajectory()
        fly(t)
        t.mark_changed_in_mid_air()
        assert not t.changed_in_mid_air
        assert len(t.legs) == 1


class TestRestore:

    def test_restored_trajectory_continues_identically(self):
        original = make_trajectory()
        for _ in range(50):
            original.step(DT, 9.81, AIR)

        restored = make_trajectory(data_points=list(original.data_points))
        assert len(restored.data_points) == len(original.data_points)
        assert restored.max_height == original.max_height

        fly(original)
        fly(restored)
        assert restored.horizontal_displacement == pytest.approx(original.horizontal_displacement)
        assert restored.flight_time == pytest.approx(original.flight_time)

    def test_restored_landed_trajectory_stays_landed(self):
        original = make_trajectory()
        fly(original)
        restored = make_trajectory(data_points=list(original.data_points))
        assert restored.reached_ground
        assert restored.apex_point is not None
        assert restored.step(DT, 9.81, AIR) == []


class TestEmitter:

    def test_listeners_called_in_order(self):
        calls = []
        emitter = Emitter()
        emitter.add_listener(lambda x: calls.append(('a', x)))
        emitter.add_listener(lambda x: calls.append(('b', x)))
        emitter.emit(1)
        assert calls == [('a', 1), ('b', 1)]

    def test_listener_may_remove_itself(self):
        calls = []
        emitter = Emitter()

        def once(x):
            calls.append(x)
            emitter.remove_listener(once)

        emitter.add_listener(once)
        emitter.emit(1)
        emitter.emit(2)
        assert calls == [1]
        assert not emitter.has_listener(once)

    def test_dispose_drops_listeners(self):
        calls = []
        emitter = Emitter()
        emitter.add_listener(calls.append)
        emitter.dispose()
        emitter.emit(1)
        assert calls == []


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
