"""
Orbit Simulation - Trajectory Prediction

Closed-form orbit-line generation for display and planning. For bound
orbits the ellipse is sampled analytically from the current state, phase
locked so the line starts and ends exactly at the spacecraft position.
Unbound or degenerate trajectories are routed to a coarse numerical
propagation instead.

Never called from inside the integration hot path.
"""

import logging
from typing import Optional

import numpy as np

from . import constants as C
from .config import SimulationConfig, create_default_config
from .state import StateVector
from .elements import eccentricity_vector
from .integrators import rk4_step

logger = logging.getLogger(__name__)


def is_bound_orbit(state: StateVector,
                   config: Optional[SimulationConfig] = None) -> bool:
    """
    True when the state can be drawn as an analytic ellipse.

    False for escape trajectories (energy >= 0, e >= 1), degenerate
    position or velocity, and near-zero angular momentum.
    """
    if config is None:
        config = create_default_config()
    mu = config.mu

    r_mag = np.linalg.norm(state.r)
    v_mag = np.linalg.norm(state.v)
    if r_mag < C.DEGENERATE_VECTOR_TOL or v_mag < C.DEGENERATE_VECTOR_TOL:
        return False
    if np.linalg.norm(np.cross(state.r, state.v)) < C.ANGULAR_MOMENTUM_TOL:
        return False

    energy = 0.5 * v_mag ** 2 - mu / r_mag
    if energy >= 0:
        return False
    a = -mu / (2.0 * energy)
    e = np.linalg.norm(eccentricity_vector(state.r, state.v, mu))
    return bool(np.isfinite(a) and a > 0 and e < 1.0)


def predict_orbit(state: StateVector, num_points: Optional[int] = None,
                  config: Optional[SimulationConfig] = None) -> np.ndarray:
    """
    Sample the orbit through the current state.

    Bound orbits: builds the in-plane basis (p, q, h), measures the current
    true anomaly nu0 in that basis and samples
        r(nu) = a(1 - e^2) / (1 + e cos nu),  nu = nu0 + 2*pi*k/N
    for k = 0..N-1. The first point and an appended closing point are the
    exact input position, so the result has N + 1 rows.

    Unbound / degenerate: N positions from RK4 propagation with zero thrust
    at config.prediction_fallback_dt.

    Args:
        state: Current state
        num_points: Number of samples N (default config.prediction_points)
        config: Simulation configuration

    Returns:
        Array of positions, shape (N + 1, 3) or (N, 3) for the fallback

    Raises:
        ValueError: If num_points < 2
    """
    if config is None:
        config = create_default_config()
    if num_points is None:
        num_points = config.prediction_points
    if num_points < 2:
        raise ValueError(f"num_points must be at least 2, got {num_points}")

    if not is_bound_orbit(state, config):
        return predict_orbit_numerical(state, num_points, config)

    mu = config.mu
    position = np.array(state.r, dtype=np.float64)
    r_mag = np.linalg.norm(position)
    v_mag = np.linalg.norm(state.v)

    h = np.cross(position, state.v)
    h_hat = h / np.linalg.norm(h)

    e_vec = eccentricity_vector(position, state.v, mu)
    e = np.linalg.norm(e_vec)
    a = -mu / (2.0 * (0.5 * v_mag ** 2 - mu / r_mag))

    # Periapsis direction is undefined for near-circular orbits and would
    # jump between queries; anchor to the current radial direction instead.
    if e > C.CIRCULAR_ECCENTRICITY_TOL:
        p_hat = e_vec / e
    else:
        p_hat = position / r_mag

    # Re-orthogonalize p against h to suppress numerical drift
    p_hat = p_hat - np.dot(p_hat, h_hat) * h_hat
    p_norm = np.linalg.norm(p_hat)
    if p_norm < C.DEGENERATE_VECTOR_TOL:
        return predict_orbit_numerical(state, num_points, config)
    p_hat = p_hat / p_norm
    q_hat = np.cross(h_hat, p_hat)

    cos_nu0 = np.clip(np.dot(position, p_hat) / r_mag, -1.0, 1.0)
    sin_nu0 = np.dot(position, q_hat) / r_mag
    nu0 = np.arctan2(sin_nu0, cos_nu0)

    nu = nu0 + 2.0 * np.pi * np.arange(num_points) / num_points
    semi_latus_rectum = a * (1.0 - e * e)
    radius = semi_latus_rectum / (1.0 + e * np.cos(nu))

    points = np.empty((num_points + 1, 3))
    points[:num_points] = (np.outer(radius * np.cos(nu), p_hat)
                           + np.outer(radius * np.sin(nu), q_hat))
    # Line starts and ends exactly at the spacecraft
    points[0] = position
    points[num_points] = position
    return points


def predict_orbit_numerical(state: StateVector, num_points: int,
                            config: Optional[SimulationConfig] = None) -> np.ndarray:
    """
    Numerical fallback for escape / hyperbolic / degenerate trajectories.

    Returns:
        Array of num_points raw positions, the first being the input
        position.
    """
    if config is None:
        config = create_default_config()
    logger.debug("Unbound trajectory, propagating %d points numerically", num_points)

    points = np.empty((num_points, 3))
    if np.linalg.norm(state.r) < C.DEGENERATE_VECTOR_TOL:
        # Gravity is singular at the origin; nothing to propagate
        points[:] = state.r
        return points

    current = state
    dt = config.prediction_fallback_dt
    for i in range(num_points):
        points[i] = current.r
        if i < num_points - 1:
            current = rk4_step(current, dt, None, config)
    return points
