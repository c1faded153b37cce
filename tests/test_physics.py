"""
Unit Tests for the Physics Core
===============================
Atmosphere, drag, object types, data points, projectiles and the
integration step.
Run: python -m pytest tests/ -v
"""

import sys
import os
import dataclasses
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from projectile_motion.atmosphere import (
    air_temperature, air_pressure, air_density, AtmosphereModel, atmosphere_profile,
)
from projectile_motion.drag_model import (
    drag_force, cross_sectional_area, acceleration_from_drag,
)
from projectile_motion.data_point import DataPoint
from projectile_motion.object_types import ALL_OBJECT_TYPES, get_object_type
from projectile_motion.projectile import Projectile, LaunchConditions
from projectile_motion.integrator import (
    simulate, step_projectile, time_to_ground, next_position,
)


VACUUM = AtmosphereModel(air_resistance_on=False)
AIR = AtmosphereModel(altitude=0.0, air_resistance_on=True)


def make_point(time=0.0, x=0.0, y=0.0, **kwargs):
    values = dict(
        time=time,
        position=[x, y],
        air_density=0.0,
        velocity=[1.0, 1.0],
        acceleration=[0.0, -9.81],
        drag_force=[0.0, 0.0],
        force_gravity=-9.81,
    )
    values.update(kwargs)
    return DataPoint(**values)


class TestAtmosphere:
    """Verify the standard atmosphere against its defining formulas."""

    def test_sea_level_temperature(self):
        assert abs(air_temperature(0) - 15.04) < 1e-9

    def test_sea_level_pressure(self):
        assert abs(air_pressure(0) - 101.40) < 0.01

    def test_sea_level_density(self):
        assert abs(air_density(0) - 1.2266) < 0.001

    def test_density_decreases_with_altitude(self):
        """Air density must decrease monotonically."""
        rho_0 = air_density(0)
        rho_2 = air_density(2000)
        rho_5 = air_density(5000)
        assert rho_0 > rho_2 > rho_5

    def test_height_above_ground_adds_to_altitude(self):
        assert air_density(1000, 500) == pytest.approx(air_density(1500))

    def test_inputs_are_clamped(self):
        assert air_density(-100) == air_density(0)
        assert air_density(80000) == air_density(50000)

    def test_air_resistance_off_gives_zero_density(self):
        assert VACUUM.density(0) == 0.0
        assert VACUUM.density(10) == 0.0
        assert AIR.density(0) == pytest.approx(air_density(0))

    def test_profile_keys(self):
        profile = atmosphere_profile(np.array([0.0, 1000.0]))
        assert set(profile) == {'height', 'temperature', 'pressure', 'density'}
        assert profile['density'][0] > profile['density'][1]


class TestDragModel:
    """Verify the quadratic drag law."""

    def test_area(self):
        assert abs(cross_sectional_area(0.18) - np.pi * 0.09 ** 2) < 1e-12

    def test_drag_force_magnitude(self):
        F = drag_force(np.array([3.0, 4.0]), rho=1.0, cd=1.0, area=2.0)
        # ½ · 1 · 2 · 1 · |v|=5 · v
        assert np.allclose(F, [15.0, 20.0])

    def test_drag_force_parallel_to_velocity(self):
        v = np.array([10.0, 5.0])
        F = drag_force(v, rho=1.2, cd=0.47, area=0.03)
        assert np.dot(F, v) > 0
        assert abs(F[0] * v[1] - F[1] * v[0]) < 1e-12

    def test_acceleration_opposes_motion(self):
        v = np.array([10.0, 5.0])
        F = drag_force(v, rho=1.2, cd=0.47, area=0.03)
        a = acceleration_from_drag(F, mass=1.0, gravity=0.0)
        assert np.dot(a, v) < 0

    def test_drag_force_zero_at_rest(self):
        F = drag_force(np.array([0.0, 0.0]), rho=1.225, cd=0.3, area=0.01)
        assert np.allclose(F, 0.0)

    def test_drag_force_zero_in_vacuum(self):
        F = drag_force(np.array([20.0, -3.0]), rho=0.0, cd=0.3, area=0.01)
        assert np.allclose(F, 0.0)


class TestObjectTypes:

    def test_benchmark_values(self):
        cannonball = ALL_OBJECT_TYPES['cannonball']
        assert (cannonball.mass, cannonball.diameter, cannonball.drag_coefficient) == \
            (17.6, 0.18, 0.47)
        assert ALL_OBJECT_TYPES['companionless'].key == 'companionless'

    def test_get_returns_independent_copy(self):
        pumpkin = get_object_type('pumpkin')
        pumpkin.mass = 50.0
        assert ALL_OBJECT_TYPES['pumpkin'].mass == 5.0
        assert get_object_type('pumpkin').mass == 5.0

    def test_reset_restores_initial_values(self):
        car = get_object_type('car')
        car.mass, car.diameter, car.drag_coefficient = 100.0, 1.0, 0.3
        car.reset()
        assert (car.mass, car.diameter, car.drag_coefficient) == (2000.0, 2.0, 0.55)

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError):
            get_object_type('anvil')


class TestDataPoint:

    def test_vectors_are_read_only(self):
        point = make_point(time=1.0, x=2.0, y=3.0)
        with pytest.raises(ValueError):
            point.position[0] = 5.0
        with pytest.raises(dataclasses.FrozenInstanceError):
            point.time = 2.0

    def test_nan_time_rejected(self):
        with pytest.raises(AssertionError):
            make_point(time=float('nan'))

    def test_time_zero_requires_x_zero(self):
        with pytest.raises(AssertionError):
            make_point(time=0.0, x=1.0)

    def test_accessors(self):
        point = make_point(time=1.0, x=3.0, y=4.0, velocity=[3.0, 4.0])
        assert point.x == 3.0 and point.y == 4.0
        assert point.speed == pytest.approx(5.0)
        assert point.distance_to(0.0, 0.0) == pytest.approx(5.0)

    def test_equals_compares_kinematics(self):
        a = make_point(time=1.0, x=3.0)
        assert a.equals(make_point(time=1.0, x=3.0))
        assert not a.equals(make_point(time=1.0, x=3.5))


class TestProjectile:
    """Verify projectile construction and launch state."""

    def test_projectile_area(self):
        p = Projectile(mass=1.0, diameter=0.155, drag_coefficient=0.47)
        expected = np.pi * (0.155 / 2) ** 2
        assert abs(p.area - expected) < 1e-8

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            Projectile(mass=0.0, diameter=0.1, drag_coefficient=0.47)
        with pytest.raises(ValueError):
            Projectile(mass=1.0, diameter=-0.1, drag_coefficient=0.47)

    def test_initial_velocity_vector(self):
        cond = LaunchConditions(speed=20.0, angle_deg=30.0)
        v = cond.initial_velocity_vector()
        assert abs(np.linalg.norm(v) - 20.0) < 1e-9
        assert abs(v[1] - 10.0) < 1e-9

    def test_launch_state(self):
        cond = LaunchConditions(speed=15.0, angle_deg=0.0, height=10.0)
        p = Projectile.launch(cond, 17.6, 0.18, 0.47, 9.81, AIR)
        assert p.time == 0.0
        assert np.allclose(p.position, [0.0, 10.0])
        assert p.air_density == pytest.approx(air_density(0.0, 10.0))
        assert p.drag_force[0] > 0
        assert p.acceleration[0] < 0
        assert p.force_gravity == pytest.approx(-9.81 * 17.6)

    def test_gravity_only_in_vacuum(self):
        cond = LaunchConditions(speed=15.0, angle_deg=45.0)
        p = Projectile.launch(cond, 5.0, 0.8, 0.47, 9.81, VACUUM)
        assert np.allclose(p.acceleration, [0.0, -9.81])
        assert np.allclose(p.drag_force, 0.0)

    def test_land_zeroes_motion(self):
        p = Projectile.launch(LaunchConditions(), 5.0, 0.8, 0.47, 9.81, AIR)
        p.land()
        assert p.reached_ground
        assert p.position[1] == 0.0
        assert np.allclose(p.velocity, 0.0)
        assert np.allclose(p.acceleration, 0.0)


class TestIntegrator:
    """Verify the step function and complete flights."""

    def test_next_position(self):
        assert next_position(1.0, 2.0, -4.0, 0.5) == pytest.approx(1.5)

    def test_time_to_ground_from_rest(self):
        assert time_to_ground(10.0, 0.0, -10.0) == pytest.approx(np.sqrt(2.0))

    def test_time_to_ground_without_acceleration(self):
        assert time_to_ground(5.0, -5.0, 0.0) == pytest.approx(1.0)

    def test_deterministic_vacuum_flight(self):
        """45°, 20 m/s from the ground in vacuum."""
        cond = LaunchConditions(speed=20.0, angle_deg=45.0, height=0.0)
        result = simulate(cond, 5.0, 0.8, 0.47, 9.81, VACUUM)
        assert result.landed
        assert result.range_total == pytest.approx(40.77, abs=0.01)
        assert result.apex is not None
        assert result.apex.y == pytest.approx(10.19, abs=0.01)
        assert result.max_height == pytest.approx(10.19, abs=0.01)
        assert result.flight_time == pytest.approx(2 * 20 * np.sin(np.pi / 4) / 9.81, abs=1e-6)

    def test_horizontal_launch_matches_free_fall(self):
        cond = LaunchConditions(speed=15.0, angle_deg=0.0, height=10.0)
        result = simulate(cond, 5.0, 0.8, 0.47, 9.81, VACUUM)
        fall_time = np.sqrt(2 * 10.0 / 9.81)
        assert result.flight_time == pytest.approx(fall_time, rel=1e-9)
        assert result.range_total == pytest.approx(15.0 * fall_time, rel=1e-9)
        assert result.apex is None

    def test_projectile_hits_ground(self):
        """The final sample lies exactly on the ground and only it does."""
        result = simulate(LaunchConditions(speed=18.0, angle_deg=80.0), 5.0, 0.8, 0.47,
                          9.81, AIR)
        assert result.points[-1].y == 0.0
        assert result.points[-1].reached_ground
        assert all(p.y > 0 for p in result.points[1:-1])
        assert sum(p.reached_ground for p in result.points) == 1

    def test_time_strictly_increasing(self):
        result = simulate(LaunchConditions(speed=25.0, angle_deg=60.0, height=5.0),
                          17.6, 0.18, 0.47, 9.81, AIR)
        assert np.all(np.diff(result.time) > 0)

    def test_single_apex(self):
        result = simulate(LaunchConditions(speed=25.0, angle_deg=60.0), 0.05, 0.04, 0.25,
                          9.81, AIR)
        apexes = [p for p in result.points if p.apex]
        assert len(apexes) == 1
        assert apexes[0].velocity[1] == 0.0
        assert apexes[0].y == pytest.approx(result.max_height)

    def test_air_resistance_reduces_range(self):
        cond = LaunchConditions(speed=25.0, angle_deg=45.0)
        with_air = simulate(cond, 5.0, 0.8, 0.47, 9.81, AIR)
        without_air = simulate(cond, 5.0, 0.8, 0.47, 9.81, VACUUM)
        assert with_air.range_total < without_air.range_total
        assert with_air.max_height < without_air.max_height

    def test_thinner_air_increases_range(self):
        cond = LaunchConditions(speed=25.0, angle_deg=45.0)
        low = simulate(cond, 5.0, 0.8, 0.47, 9.81, AtmosphereModel(altitude=0.0))
        high = simulate(cond, 5.0, 0.8, 0.47, 9.81, AtmosphereModel(altitude=5000.0))
        assert high.range_total > low.range_total

    def test_downward_launch_from_ground_lands_at_once(self):
        cond = LaunchConditions(speed=10.0, angle_deg=-30.0, height=0.0)
        result = simulate(cond, 5.0, 0.8, 0.47, 9.81, AIR)
        assert len(result.points) == 1
        assert result.points[0].time == 0.0
        assert result.points[0].reached_ground
        assert result.range_total == 0.0

    def test_drag_stops_horizontal_motion(self):
        """A light, wide body launched sideways stops within a single step."""
        cond = LaunchConditions(speed=30.0, angle_deg=0.0, height=10.0)
        p = Projectile.launch(cond, 0.01, 1.0, 1.0, 9.81, AIR)
        ax = p.acceleration[0]
        points = step_projectile(p, 0.012, 9.81, AIR)
        assert points[-1].velocity[0] == 0.0
        assert points[-1].x == pytest.approx(30.0 ** 2 / (2 * abs(ax)))

    def test_step_is_noop_when_landed_or_dt_not_positive(self):
        p = Projectile.launch(LaunchConditions(), 5.0, 0.8, 0.47, 9.81, AIR)
        assert step_projectile(p, 0.0, 9.81, AIR) == []
        assert step_projectile(p, -1.0, 9.81, AIR) == []
        p.land()
        assert step_projectile(p, 0.012, 9.81, AIR) == []

    def test_invalid_dt(self):
        with pytest.raises(ValueError):
            simulate(LaunchConditions(), 5.0, 0.8, 0.47, 9.81, AIR, dt=0.0)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
