"""
Orbit Simulation - Translational Dynamics

This module assembles the first-order state derivative used by the
integrators. The state vector is [x, y, z, vx, vy, vz].
"""

from typing import Optional

import numpy as np

from .config import SimulationConfig, create_default_config
from .forces import total_acceleration


def state_derivative_vector(y: np.ndarray, thrust: np.ndarray,
                            config: Optional[SimulationConfig] = None) -> np.ndarray:
    """
    Compute dy/dt = [v, a_gravity + a_thrust (+ a_drag)].

    Thrust is held constant across the step by the caller.

    Args:
        y: State vector [x, y, z, vx, vy, vz]
        thrust: Thrust acceleration in the inertial frame (m/s^2)
        config: Simulation configuration

    Returns:
        Derivative vector [6]
    """
    if config is None:
        config = create_default_config()

    r = y[0:3]
    v = y[3:6]
    a = total_acceleration(r, v, thrust, config)
    return np.concatenate([v, a])
