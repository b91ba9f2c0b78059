"""
Orbit Simulation - Acceleration Models

This module implements the specific-force (acceleration) models:
- Point-mass central gravity
- Exponential-atmosphere drag

All outputs are accelerations in the inertial frame (m/s^2).
"""

from typing import Optional

import numpy as np

from . import constants as C
from .config import SimulationConfig, create_default_config


def gravity_acceleration(r: np.ndarray, mu: float = C.MU_EARTH) -> np.ndarray:
    """
    Compute point-mass gravitational acceleration.

        a = -mu * r / ||r||^3

    The origin is a singularity; callers must never pass r = 0.

    Args:
        r: Position vector (m)
        mu: Gravitational parameter (m^3/s^2)

    Returns:
        Acceleration vector (m/s^2)
    """
    r2 = np.dot(r, r)
    r_norm = np.sqrt(r2)
    return (-mu / (r2 * r_norm)) * r


# =============================================================================
# ATMOSPHERE MODEL (exponential)
# =============================================================================

def atmospheric_density(altitude: float,
                        config: Optional[SimulationConfig] = None) -> float:
    """
    Exponential atmospheric density.

        rho = rho_0 * exp(-h / H)

    Returns 0 below the surface and above the atmosphere ceiling.

    Args:
        altitude: Altitude above the mean surface (m)

    Returns:
        Density (kg/m^3)
    """
    if config is None:
        config = create_default_config()
    if altitude > config.atmosphere_ceiling or altitude < 0:
        return 0.0
    return float(config.rho_0 * np.exp(-altitude / config.scale_height))


def drag_acceleration(r: np.ndarray, v: np.ndarray,
                      config: Optional[SimulationConfig] = None) -> np.ndarray:
    """
    Compute atmospheric drag acceleration.

        a_drag = -0.5 * rho * Cd * A * ||v||^2 / m * v_hat

    Zero outside the atmosphere band or when the speed is negligible.

    Args:
        r: Position vector (m)
        v: Velocity vector (m/s)

    Returns:
        Drag acceleration vector opposing velocity (m/s^2)
    """
    if config is None:
        config = create_default_config()

    altitude = np.linalg.norm(r) - config.body_radius
    if altitude > config.atmosphere_ceiling or altitude < 0:
        return np.zeros(3)

    speed = np.linalg.norm(v)
    if speed < C.SMALL_VELOCITY_TOL:
        return np.zeros(3)

    rho = atmospheric_density(altitude, config)
    drag_mag = (0.5 * rho * config.drag_coefficient * config.cross_section_area
                * speed ** 2 / config.spacecraft_mass)

    return -drag_mag * (v / speed)


def drag_magnitude(r: np.ndarray, v: np.ndarray,
                   config: Optional[SimulationConfig] = None) -> float:
    """Drag acceleration magnitude (m/s^2), for telemetry."""
    return float(np.linalg.norm(drag_acceleration(r, v, config)))


def total_acceleration(r: np.ndarray, v: np.ndarray,
                       thrust: np.ndarray,
                       config: Optional[SimulationConfig] = None) -> np.ndarray:
    """
    Sum of gravity, thrust and (if enabled) drag accelerations.

    Args:
        r: Position vector (m)
        v: Velocity vector (m/s)
        thrust: Thrust acceleration in the inertial frame (m/s^2)

    Returns:
        Total acceleration (m/s^2)
    """
    if config is None:
        config = create_default_config()

    a = gravity_acceleration(r, config.mu) + thrust
    if config.enable_drag:
        a = a + drag_acceleration(r, v, config)
    return a
