"""
Standard Atmosphere Model
=========================
Air temperature, pressure and density as functions of height above sea
level, following the NASA Glenn Research Center earth atmosphere model:

- Troposphere (below 11 km): linear lapse of −6.49 °C/km
- Lower stratosphere (11–25 km): isothermal, exponential pressure decay
- Upper stratosphere (above 25 km): warming at +2.99 °C/km

The simulation only ever asks for heights between sea level and the
maximum altitude plus the tallest cannon, which lies well inside the
troposphere, but the upper layers are kept so the range can be raised.

Reference: https://www.grc.nasa.gov/www/k-12/airplane/atmosmet.html
"""

from dataclasses import dataclass

import numpy as np


# ── Model constants ───────────────────────────────────────────────────────
TROPOPAUSE_ALT         = 11000.0     # m
STRATOPAUSE_LOWER_ALT  = 25000.0     # m
MAX_MODEL_HEIGHT       = 50000.0     # m, inputs are clamped to this ceiling
KELVIN_OFFSET          = 273.1       # as used by the GRC fit
GAS_CONSTANT_KPA       = 0.2869      # kPa·m³/(kg·K), specific gas constant of air


def _clamp_height(height: float) -> float:
    return min(max(float(height), 0.0), MAX_MODEL_HEIGHT)


def air_temperature(height: float) -> float:
    """
    Temperature (°C) at a given height above sea level (m).
    """
    h = _clamp_height(height)
    if h < TROPOPAUSE_ALT:
        return 15.04 - 0.00649 * h
    elif h < STRATOPAUSE_LOWER_ALT:
        return -56.46
    else:
        return -131.21 + 0.00299 * h


def air_pressure(height: float) -> float:
    """
    Atmospheric pressure (kPa) at a given height above sea level (m).
    """
    h = _clamp_height(height)
    T = air_temperature(h)
    if h < TROPOPAUSE_ALT:
        return 101.29 * ((T + KELVIN_OFFSET) / 288.08) ** 5.256
    elif h < STRATOPAUSE_LOWER_ALT:
        return 22.65 * np.exp(1.73 - 0.000157 * h)
    else:
        return 2.488 * ((T + KELVIN_OFFSET) / 216.6) ** -11.388


def air_density(altitude: float, height_above_ground: float = 0.0) -> float:
    """
    Air density (kg/m³) at ``height_above_ground`` over terrain at
    ``altitude`` above sea level: ρ = P / (R × T).

    Out-of-range inputs are clamped rather than rejected, so a stray
    negative height yields the density at the terrain surface.
    """
    h = _clamp_height(altitude + max(height_above_ground, 0.0))
    T = air_temperature(h)
    P = air_pressure(h)
    return float(P / (GAS_CONSTANT_KPA * (T + KELVIN_OFFSET)))


@dataclass
class AtmosphereModel:
    """
    The air a projectile flies through: terrain altitude plus whether air
    resistance is modelled at all. With air resistance off the density is
    zero everywhere, which removes drag from the equations of motion.
    """
    altitude: float = 0.0            # m above sea level
    air_resistance_on: bool = True

    def density(self, height_above_ground: float = 0.0) -> float:
        if not self.air_resistance_on:
            return 0.0
        return air_density(self.altitude, height_above_ground)

    @staticmethod
    def density_at(altitude: float, height_above_ground: float) -> float:
        return air_density(altitude, height_above_ground)


# ── Vectorized version for plotting ───────────────────────────────────────
def atmosphere_profile(height_array: np.ndarray) -> dict:
    """
    Compute the atmospheric profile for an array of heights above sea level.
    Returns dict with keys: 'height', 'temperature', 'pressure', 'density'.
    """
    T = np.array([air_temperature(h) for h in height_array])
    P = np.array([air_pressure(h) for h in height_array])
    rho = np.array([air_density(h) for h in height_array])
    return {
        'height': np.asarray(height_array),
        'temperature': T,
        'pressure': P,
        'density': rho,
    }


if __name__ == "__main__":
    print("Atmosphere Model Verification")
    print("=" * 48)
    print(f"{'Alt (m)':>10} {'T (°C)':>10} {'P (kPa)':>12} {'ρ (kg/m³)':>12}")
    print("-" * 48)
    for h in [0, 1000, 2000, 3000, 4000, 5000]:
        print(f"{h:>10.0f} {air_temperature(h):>10.2f} {air_pressure(h):>12.3f} "
              f"{air_density(h):>12.5f}")
