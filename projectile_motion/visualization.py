"""
Visualization Engine
====================
Offline figures for the runner:
  1. Trajectories (height vs range) with time dots, apex and impact marks
  2. Single flight panels (path, speed and air density vs time)
  3. Atmospheric profile
  4. Validation errors against the closed-form solutions

Figures are rendered with the Agg backend and saved to disk.
"""

import os
from typing import List, Optional, Sequence

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .atmosphere import atmosphere_profile, MAX_MODEL_HEIGHT
from .config import TIME_PER_MINOR_DOT, TIME_PER_MAJOR_DOT
from .integrator import FlightResult
from .trajectory import Trajectory


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
    'font_family': 'monospace',
}


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _legend(ax, **kwargs):
    ax.legend(facecolor='#1a1a1a', edgecolor='#444',
              labelcolor=STYLE['text_color'], **kwargs)


def _save(fig, save_path: Optional[str]):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


def _time_dots(points, period_ms: int):
    """Points whose time falls on a multiple of ``period_ms``."""
    return [p for p in points if int(round(p.time * 1000)) % period_ms == 0]


# ══════════════════════════════════════════════════════════════════════════
#  1. Trajectories
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectories(trajectories: Sequence[Trajectory], save_path: str = None,
                      title: str = 'Trajectories', target=None) -> plt.Figure:
    """
    Height vs range for every trajectory, oldest first. Small dots every
    100 ms and large dots every second of flight, like the on-screen trace.
    """
    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)
    colors = STYLE['accent_colors']

    for i, trajectory in enumerate(trajectories):
        points = trajectory.data_points
        if not points:
            continue
        color = colors[i % len(colors)]
        x = np.array([p.x for p in points])
        y = np.array([p.y for p in points])
        ax.plot(x, y, color=color, linewidth=1.8,
                alpha=1.0 if trajectory.rank == 0 else 0.6,
                label=f'{trajectory.object_type.name or "Projectile"} ({trajectory.initial_angle:.0f}°, '
                      f'{trajectory.initial_speed:.1f} m/s)')

        minor = _time_dots(points, TIME_PER_MINOR_DOT)
        major = _time_dots(points, TIME_PER_MAJOR_DOT)
        ax.plot([p.x for p in minor], [p.y for p in minor], '.', color=color, markersize=3)
        ax.plot([p.x for p in major], [p.y for p in major], 'o', color=color, markersize=5)

        if trajectory.apex_point is not None:
            ax.plot(trajectory.apex_point.x, trajectory.apex_point.y, '^',
                    color='#ffeb3b', markersize=8, zorder=5)
        if trajectory.reached_ground:
            ax.plot(trajectory.horizontal_displacement, 0, 'x', color='#ff5252',
                    markersize=10, markeredgewidth=2, zorder=5)

    if target is not None:
        ax.axvspan(target.x - target.width / 2, target.x + target.width / 2,
                   ymax=0.03, color='#ff5252', alpha=0.8, label='Target')

    ax.set_xlabel('Range (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title(title, fontsize=13, fontweight='bold')
    if len(trajectories) <= 10:
        _legend(ax, loc='upper right', fontsize=8)
    ax.set_ylim(bottom=0)

    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Single flight
# ══════════════════════════════════════════════════════════════════════════

def plot_flight(result: FlightResult, save_path: str = None) -> plt.Figure:
    """Path, speed and air density of one stand-alone flight."""
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    _apply_dark_style(fig, axes)

    ax = axes[0]
    ax.plot(result.x, result.y, color='#00d4ff', linewidth=2.5)
    ax.plot(result.x[0], result.y[0], 'o', color='#00e676', markersize=9, label='Launch')
    if result.apex is not None:
        ax.plot(result.apex.x, result.apex.y, '^', color='#ffeb3b', markersize=9, label='Apex')
    ax.plot(result.x[-1], result.y[-1], 'x', color='#ff5252', markersize=11,
            markeredgewidth=3, label='Impact')
    ax.set_xlabel('Range (m)')
    ax.set_ylabel('Height (m)')
    ax.set_title('Trajectory', fontweight='bold')
    ax.set_ylim(bottom=0)
    _legend(ax, fontsize=9)

    ax = axes[1]
    ax.plot(result.time, result.speed, color='#ff6b35', linewidth=2)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Speed (m/s)')
    ax.set_title('Speed', fontweight='bold')

    ax = axes[2]
    ax.plot(result.time, result.density, color='#00e676', linewidth=2)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Air density (kg/m³)')
    ax.set_title('Air Density Along Path', fontweight='bold')

    fig.suptitle(f'v₀={result.conditions.speed:.1f} m/s, θ={result.conditions.angle_deg:.0f}°, '
                 f'm={result.mass} kg, Cd={result.drag_coefficient}',
                 fontsize=13, fontweight='bold', color=STYLE['text_color'])
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. Atmosphere
# ══════════════════════════════════════════════════════════════════════════

def plot_atmosphere(save_path: str = None) -> plt.Figure:
    """Temperature, pressure and density from sea level to the model ceiling."""
    heights = np.linspace(0, MAX_MODEL_HEIGHT, 500)
    profile = atmosphere_profile(heights)

    fig, axes = plt.subplots(1, 3, figsize=(15, 7), sharey=True)
    _apply_dark_style(fig, axes)

    height_km = heights / 1000
    params = [
        ('Temperature (°C)', profile['temperature'], '#ff6b35'),
        ('Pressure (kPa)', profile['pressure'], '#00d4ff'),
        ('Density (kg/m³)', profile['density'], '#00e676'),
    ]

    for ax, (title, data, color) in zip(axes, params):
        ax.plot(data, height_km, color=color, linewidth=2)
        ax.set_xlabel(title, fontsize=10)
        ax.fill_betweenx(height_km, min(0, np.min(data)), data, alpha=0.1, color=color)

    axes[0].set_ylabel('Altitude (km)', fontsize=12)
    fig.suptitle('Atmosphere Model (NASA GRC)',
                 fontsize=14, fontweight='bold', color=STYLE['text_color'])
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Validation
# ══════════════════════════════════════════════════════════════════════════

def plot_validation(validation_results: List, reference: dict,
                    save_path: str = None) -> plt.Figure:
    """Percent error of range, height and flight time per launch angle."""
    fig, ax = plt.subplots(figsize=(10, 5))
    _apply_dark_style(fig, ax)

    angles = [r.angle_deg for r in validation_results]
    ax.plot(angles, [r.range_error_pct for r in validation_results], 'o-',
            color='#00d4ff', label='Range')
    ax.plot(angles, [r.height_error_pct for r in validation_results], 's-',
            color='#ff6b35', label='Max height')
    ax.plot(angles, [r.tof_error_pct for r in validation_results], '^-',
            color='#00e676', label='Time of flight')
    ax.axhline(y=0, color='#555', linestyle='--', alpha=0.5)

    ax.set_xlabel('Launch angle (°)')
    ax.set_ylabel('Error vs closed form (%)')
    ax.set_title(f"Validation: {reference['name']}", fontweight='bold')
    _legend(ax, fontsize=9)

    _save(fig, save_path)
    return fig
