"""
Orbit Simulation - Trajectory Plots

Batch (non-interactive) plots of a headless run:
- Altitude and speed history with maneuver windows shaded
- Equatorial-plane track with the predicted orbit of the final state
- Specific energy drift
"""

import os
from dataclasses import dataclass
from typing import List, Optional

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for batch processing
import matplotlib.pyplot as plt
import numpy as np

from .config import SimulationConfig, create_default_config
from .state import StateVector
from .trajectory import predict_orbit


@dataclass
class TrajectoryData:
    """Logged arrays prepared for plotting.

    Attributes:
        time: Time (s)
        altitude: Altitude (km)
        speed: Inertial speed (m/s)
        position: Positions [n x 3] (m)
        thrust: Thrust acceleration magnitude (m/s^2)
        energy: Specific orbital energy (J/kg)
    """
    time: np.ndarray
    altitude: np.ndarray
    speed: np.ndarray
    position: np.ndarray
    thrust: np.ndarray
    energy: np.ndarray


def configure_plot_style() -> None:
    plt.rcParams.update({
        'figure.figsize': (10, 6),
        'savefig.dpi': 150,
        'axes.grid': True,
        'grid.alpha': 0.3,
        'font.size': 11,
        'axes.titlesize': 13,
        'lines.linewidth': 1.6,
    })


def extract_log_data(log) -> TrajectoryData:
    """Convert a SimulationLog into numpy arrays."""
    return TrajectoryData(
        time=np.array(log.time),
        altitude=np.array(log.altitude),
        speed=np.array(log.speed),
        position=np.column_stack([log.position_x, log.position_y, log.position_z]),
        thrust=np.array(log.thrust_magnitude),
        energy=np.array(log.specific_energy),
    )


def _shade_burns(ax, data: TrajectoryData) -> None:
    burning = data.thrust > 0
    if np.any(burning):
        ax.fill_between(data.time, 0, 1, where=burning, color='orange', alpha=0.2,
                        transform=ax.get_xaxis_transform(), label='Thrusting')


def plot_altitude_speed(data: TrajectoryData, output_dir: str) -> str:
    """Altitude and speed history on stacked axes."""
    fig, (ax_alt, ax_spd) = plt.subplots(2, 1, sharex=True)

    ax_alt.plot(data.time, data.altitude, 'b-', label='Altitude')
    _shade_burns(ax_alt, data)
    ax_alt.set_ylabel('Altitude (km)')
    ax_alt.set_title('Altitude and Speed', fontweight='bold')
    ax_alt.legend(loc='best')

    ax_spd.plot(data.time, data.speed, 'g-', label='Speed')
    _shade_burns(ax_spd, data)
    ax_spd.set_xlabel('Time (s)')
    ax_spd.set_ylabel('Speed (m/s)')

    plt.tight_layout()
    path = os.path.join(output_dir, '01_altitude_speed.png')
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path


def plot_orbit_track(data: TrajectoryData, final_state: StateVector,
                     output_dir: str, config: SimulationConfig) -> str:
    """Track in the equatorial (X-Z) plane with the predicted final orbit."""
    fig, ax = plt.subplots(figsize=(8, 8))

    body = plt.Circle((0.0, 0.0), config.body_radius / 1000.0,
                      color='#4a90d9', alpha=0.4, label='Central body')
    ax.add_patch(body)

    ax.plot(data.position[:, 0] / 1000.0, data.position[:, 2] / 1000.0,
            'k-', linewidth=1.0, label='Flown track')

    predicted = predict_orbit(final_state, config=config)
    ax.plot(predicted[:, 0] / 1000.0, predicted[:, 2] / 1000.0,
            'r--', linewidth=1.0, label='Predicted orbit')
    ax.scatter([final_state.r[0] / 1000.0], [final_state.r[2] / 1000.0],
               c='red', marker='*', s=90, zorder=5, label='Final position')

    ax.set_aspect('equal')
    ax.set_xlabel('X (km)')
    ax.set_ylabel('Z (km)')
    ax.set_title('Equatorial Plane Track', fontweight='bold')
    ax.legend(loc='upper right')

    path = os.path.join(output_dir, '02_orbit_track.png')
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path


def plot_energy(data: TrajectoryData, output_dir: str) -> str:
    """Specific orbital energy relative to the first sample."""
    fig, ax = plt.subplots()
    ax.plot(data.time, data.energy - data.energy[0], 'm-')
    _shade_burns(ax, data)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('ΔE (J/kg)')
    ax.set_title('Specific Energy Change', fontweight='bold')

    path = os.path.join(output_dir, '03_specific_energy.png')
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path


def generate_all_plots(log, final_state: StateVector, output_dir: str = "plots",
                       config: Optional[SimulationConfig] = None) -> List[str]:
    """
    Generate all plots for a run.

    Args:
        log: SimulationLog from run_simulation
        final_state: Final state of the run
        output_dir: Directory to save plots (created if needed)

    Returns:
        List of paths to saved plot files
    """
    if config is None:
        config = create_default_config()
    if len(log.time) == 0:
        return []

    os.makedirs(output_dir, exist_ok=True)
    configure_plot_style()
    data = extract_log_data(log)

    return [
        plot_altitude_speed(data, output_dir),
        plot_orbit_track(data, final_state, output_dir, config),
        plot_energy(data, output_dir),
    ]
