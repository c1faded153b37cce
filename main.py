#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  PROJECTILE MOTION SIMULATOR: Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the complete simulation pipeline:
    1. Atmosphere model table
    2. Single launch with air resistance
    3. Air resistance on vs off for every object type
    4. Validation against the closed-form vacuum solutions
    5. Stats screen: group fire with speed/angle dispersion
    6. Mid-air gravity change
    7. Figure export

  Figures are saved to the outputs/ directory.

  Usage:
    python main.py              # Run everything
    python main.py --quick      # Skip figures (faster)
═══════════════════════════════════════════════════════════════════════════════
"""

import sys
import os
import time
import numpy as np

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from projectile_motion.atmosphere import (
    air_temperature, air_pressure, air_density, AtmosphereModel,
)
from projectile_motion.config import SimulationConfig, TimeSpeed
from projectile_motion.integrator import simulate
from projectile_motion.manager import TrajectoryManager
from projectile_motion.object_types import ALL_OBJECT_TYPES
from projectile_motion.projectile import LaunchConditions
from projectile_motion.validation import (
    validate_against_closed_form, VACUUM_EARTH, VACUUM_MOON_LIKE,
)


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║     PROJECTILE MOTION SIMULATOR WITH AIR RESISTANCE                   ║
║     ─────────────────────────────────────────────                     ║
║     Physics: Gravity · Quadratic drag · Standard atmosphere           ║
║     Clock: fixed 12 ms ticks │ Validated against closed form          ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def run_until_landed(manager: TrajectoryManager, frame_dt: float = 1 / 60,
                     max_frames: int = 10000) -> int:
    """Step the manager at a fixed frame rate until nothing is in flight."""
    frames = 0
    while (manager.number_of_moving_projectiles > 0 or manager.pending_launches > 0) \
            and frames < max_frames:
        manager.step(frame_dt)
        frames += 1
    return frames


def main():
    start_time = time.time()
    quick = '--quick' in sys.argv

    banner()

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Atmosphere
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Atmosphere Model")
    print(f"  {'Alt (m)':>8} {'T (°C)':>8} {'P (kPa)':>9} {'ρ (kg/m³)':>11}")
    for h in [0, 500, 1000, 2000, 3000, 4000, 5000]:
        print(f"  {h:>8} {air_temperature(h):>8.2f} {air_pressure(h):>9.3f} "
              f"{air_density(h):>11.5f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Single launch
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Single Launch (cannonball, air resistance on)")

    cannonball = ALL_OBJECT_TYPES['cannonball']
    cond = LaunchConditions(speed=25.0, angle_deg=45.0, height=0.0)
    air = AtmosphereModel(altitude=0.0, air_resistance_on=True)
    flight = simulate(cond, cannonball.mass, cannonball.diameter,
                      cannonball.drag_coefficient, 9.81, air)
    print(flight.summary())

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Air resistance on vs off
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Range With and Without Air Resistance (25 m/s, 45°)")

    vacuum = AtmosphereModel(air_resistance_on=False)
    for key, object_type in ALL_OBJECT_TYPES.items():
        with_air = simulate(cond, object_type.mass, object_type.diameter,
                            object_type.drag_coefficient, 9.81, air)
        without_air = simulate(cond, object_type.mass, object_type.diameter,
                               object_type.drag_coefficient, 9.81, vacuum)
        loss = 100.0 * (1 - with_air.range_total / without_air.range_total)
        print(f"  {object_type.name or key:<14s}  "
              f"Range: {with_air.range_total:>7.2f} m  "
              f"(vacuum {without_air.range_total:>6.2f} m, -{loss:>5.1f}%)  "
              f"Max H: {with_air.max_height:>6.2f} m")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Validation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Validation: Vacuum, Earth Gravity")
    val_earth = validate_against_closed_form(VACUUM_EARTH)
    section("PHASE 4b: Validation: Vacuum, Low Gravity")
    val_moon = validate_against_closed_form(VACUUM_MOON_LIKE)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Stats screen group fire
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Group Fire With Dispersion (stats screen)")

    stats = TrajectoryManager(SimulationConfig.for_screen('stats', seed=42))
    hits = []
    stats.target.scored_emitter.add_listener(hits.append)
    stats.fire_multiple()
    frames = run_until_landed(stats)

    ranges = np.array([t.horizontal_displacement for t in stats.trajectories])
    print(f"  Fired {len(stats.trajectories)} × {stats.selected_object_type.name} "
          f"at {stats.initial_speed} ± {stats.speed_standard_deviation} m/s, "
          f"{stats.cannon_angle} ± {stats.angle_standard_deviation}°")
    print(f"  All landed after {frames} frames")
    print(f"  Range: mean {ranges.mean():.2f} m | std {ranges.std():.2f} m | "
          f"min {ranges.min():.2f} m | max {ranges.max():.2f} m")
    print(f"  Target at x={stats.target.x} m: {len(hits)} hits, {sum(hits)} stars")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Mid-air gravity change
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 6: Gravity Change While in Flight (slow motion)")

    lab = TrajectoryManager(SimulationConfig.for_screen('lab'))
    lab.cannon_angle = 60.0
    lab.initial_speed = 20.0
    lab.time_speed = TimeSpeed.SLOW
    reference = lab.fire()
    run_until_landed(lab)

    changed = lab.fire()
    for _ in range(60):
        lab.step(1 / 60)
    lab.gravity = 3.0
    run_until_landed(lab)

    print(f"  Unchanged: range {reference.horizontal_displacement:.2f} m, "
          f"flight time {reference.flight_time:.2f} s")
    print(f"  Changed  : range {changed.horizontal_displacement:.2f} m, "
          f"flight time {changed.flight_time:.2f} s, "
          f"changed in mid air: {changed.changed_in_mid_air}, legs: {len(changed.legs)}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 7: Figures
    # ══════════════════════════════════════════════════════════════════════
    if not quick:
        section("PHASE 7: Figures")
        from projectile_motion.visualization import (
            plot_trajectories, plot_flight, plot_atmosphere, plot_validation,
            ensure_output_dir,
        )
        import matplotlib.pyplot as plt

        out = ensure_output_dir('outputs')
        figures = [
            ('01_atmosphere_profile.png', lambda p: plot_atmosphere(save_path=p)),
            ('02_single_flight.png', lambda p: plot_flight(flight, save_path=p)),
            ('03_validation_earth.png',
             lambda p: plot_validation(val_earth, VACUUM_EARTH, save_path=p)),
            ('04_validation_low_gravity.png',
             lambda p: plot_validation(val_moon, VACUUM_MOON_LIKE, save_path=p)),
            ('05_group_fire.png',
             lambda p: plot_trajectories(stats.trajectories, save_path=p,
                                         title='Group Fire With Dispersion',
                                         target=stats.target)),
            ('06_mid_air_change.png',
             lambda p: plot_trajectories(lab.trajectories, save_path=p,
                                         title='Gravity Changed Mid-Air')),
        ]
        for name, make in figures:
            fig = make(f'{out}/{name}')
            plt.close(fig)
            print(f"  ✓ Saved: {out}/{name}")
    else:
        section("PHASE 7: Figures SKIPPED (--quick mode)")

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"\n  Total runtime: {elapsed:.1f} seconds\n")


if __name__ == "__main__":
    main()
