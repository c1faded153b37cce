"""
Validation Against Closed-Form Solutions
========================================
With air resistance off the integrator must reproduce the textbook
results for a projectile launched from the ground:

  range          R = v² sin(2θ) / g
  maximum height H = v² sin²(θ) / (2g)
  time of flight T = 2 v sin(θ) / g

The landing and apex are solved exactly inside the final step, so the
only error left is the position update's truncation, which vanishes for
constant acceleration.
"""

from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from .atmosphere import AtmosphereModel
from .config import GRAVITY_ON_EARTH, TIME_PER_DATA_POINT
from .integrator import simulate
from .object_types import get_object_type
from .projectile import LaunchConditions


# ══════════════════════════════════════════════════════════════════════════
#  Reference launches
# ══════════════════════════════════════════════════════════════════════════

# (speed_m_s, angle_deg)
VACUUM_EARTH = {
    'name': 'Vacuum, Earth gravity',
    'gravity': GRAVITY_ON_EARTH,
    'object_type': 'cannonball',
    'cases': [
        (10.0, 15.0),
        (15.0, 30.0),
        (20.0, 45.0),
        (25.0, 60.0),
        (30.0, 75.0),
    ],
}

VACUUM_MOON_LIKE = {
    'name': 'Vacuum, low gravity',
    'gravity': 1.62,
    'object_type': 'golfBall',
    'cases': [
        (5.0, 30.0),
        (10.0, 45.0),
        (15.0, 60.0),
    ],
}


def closed_form(speed: float, angle_deg: float, gravity: float):
    """(range, max height, time of flight) of a vacuum launch from the ground."""
    theta = np.radians(angle_deg)
    vy = speed * np.sin(theta)
    return (
        speed ** 2 * np.sin(2 * theta) / gravity,
        vy ** 2 / (2 * gravity),
        2 * vy / gravity,
    )


@dataclass
class ValidationResult:
    """Result of one validation comparison."""
    speed: float
    angle_deg: float
    ref_range: float
    sim_range: float
    range_error_pct: float
    ref_max_height: float
    sim_max_height: float
    height_error_pct: float
    ref_tof: float
    sim_tof: float
    tof_error_pct: float


def _error_pct(sim: float, ref: float) -> float:
    return 100.0 * (sim - ref) / ref


def validate_against_closed_form(reference: dict, dt: float = TIME_PER_DATA_POINT / 1000,
                                 verbose: bool = True) -> List[ValidationResult]:
    """
    Fly every case of ``reference`` with air resistance off and compare
    against the closed-form values.
    """
    gravity = reference['gravity']
    object_type = get_object_type(reference['object_type'])
    vacuum = AtmosphereModel(air_resistance_on=False)

    results = []

    if verbose:
        print(f"\n{'='*78}")
        print(f"  VALIDATION: {reference['name']}")
        print(f"  g = {gravity} m/s² | dt = {dt*1000:.0f} ms | body: {object_type.name}")
        print(f"{'='*78}")
        print(f"{'v0':>5} {'θ°':>5} {'Ref R':>8} {'Sim R':>8} {'Err %':>7} "
              f"{'Ref H':>7} {'Sim H':>7} {'Err %':>7} "
              f"{'Ref T':>6} {'Sim T':>6} {'Err %':>7}")
        print("-" * 78)

    for speed, angle in reference['cases']:
        ref_range, ref_height, ref_tof = closed_form(speed, angle, gravity)
        flight = simulate(
            LaunchConditions(speed=speed, angle_deg=angle, height=0.0),
            object_type.mass, object_type.diameter, object_type.drag_coefficient,
            gravity, vacuum, dt=dt,
        )

        vr = ValidationResult(
            speed=speed,
            angle_deg=angle,
            ref_range=ref_range,
            sim_range=flight.range_total,
            range_error_pct=_error_pct(flight.range_total, ref_range),
            ref_max_height=ref_height,
            sim_max_height=flight.max_height,
            height_error_pct=_error_pct(flight.max_height, ref_height),
            ref_tof=ref_tof,
            sim_tof=flight.flight_time,
            tof_error_pct=_error_pct(flight.flight_time, ref_tof),
        )
        results.append(vr)

        if verbose:
            print(f"{speed:>5.0f} {angle:>5.0f} {ref_range:>8.2f} {vr.sim_range:>8.2f} "
                  f"{vr.range_error_pct:>+7.3f} "
                  f"{ref_height:>7.2f} {vr.sim_max_height:>7.2f} {vr.height_error_pct:>+7.3f} "
                  f"{ref_tof:>6.2f} {vr.sim_tof:>6.2f} {vr.tof_error_pct:>+7.3f}")

    if verbose:
        worst = max(max(abs(r.range_error_pct), abs(r.height_error_pct), abs(r.tof_error_pct))
                    for r in results)
        print("-" * 78)
        print(f"  Worst absolute error: {worst:.4f}%")
        status = "✓ PASS" if worst < 1.0 else "✗ FAIL"
        print(f"  Status: {status}")
        print(f"{'='*78}\n")

    return results


def run_all_validations(verbose: bool = True) -> Dict[str, List[ValidationResult]]:
    """Run validation against all reference launch tables."""
    all_results = {}
    for reference in [VACUUM_EARTH, VACUUM_MOON_LIKE]:
        all_results[reference['name']] = validate_against_closed_form(reference, verbose=verbose)
    return all_results


if __name__ == "__main__":
    run_all_validations(verbose=True)
