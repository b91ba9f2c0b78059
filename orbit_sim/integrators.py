"""
Orbit Simulation - Numerical Integration

This module implements the fixed-step RK4 propagator. The step size is
always chosen by the caller and never adapted, so an identical initial
state, thrust sequence and dt reproduce the same trajectory regardless of
wall-clock frame rate.
"""

from typing import List, Optional

import numpy as np

from .config import SimulationConfig, create_default_config
from .state import StateVector
from .dynamics import state_derivative_vector


def _check_step_inputs(dt: float, thrust: Optional[np.ndarray]) -> np.ndarray:
    """Validate dt and thrust; return thrust as a float array."""
    if not np.isfinite(dt) or dt <= 0:
        raise ValueError(f"Time step dt must be positive and finite, got {dt}")
    if thrust is None:
        return np.zeros(3)
    thrust = np.asarray(thrust, dtype=np.float64)
    if thrust.shape != (3,):
        raise ValueError(f"Thrust must have shape (3,), got {thrust.shape}")
    if np.any(np.isnan(thrust)):
        raise ValueError("Thrust contains NaN values")
    return thrust


def rk4_step(state: StateVector, dt: float,
             thrust: Optional[np.ndarray] = None,
             config: Optional[SimulationConfig] = None) -> StateVector:
    """
    Perform a single RK4 integration step.

    The RK4 method computes:
    k1 = f(y)
    k2 = f(y + dt/2 * k1)
    k3 = f(y + dt/2 * k2)
    k4 = f(y + dt * k3)
    y_new = y + dt/6 * (k1 + 2*k2 + 2*k3 + k4)

    Args:
        state: Current state
        dt: Time step (s)
        thrust: Thrust acceleration in the inertial frame (m/s^2),
                constant over the step. Defaults to zero.
        config: Simulation configuration

    Returns:
        New state after integration

    Raises:
        ValueError: If dt <= 0 or thrust has wrong shape / NaN values
    """
    thrust = _check_step_inputs(dt, thrust)
    if config is None:
        config = create_default_config()

    y = state.to_vector()

    k1 = state_derivative_vector(y, thrust, config)
    k2 = state_derivative_vector(y + 0.5 * dt * k1, thrust, config)
    k3 = state_derivative_vector(y + 0.5 * dt * k2, thrust, config)
    k4 = state_derivative_vector(y + dt * k3, thrust, config)

    y_new = y + (dt / 6.0) * (k1 + 2*k2 + 2*k3 + k4)

    return StateVector.from_vector(y_new, state.t + dt)


def euler_step(state: StateVector, dt: float,
               thrust: Optional[np.ndarray] = None,
               config: Optional[SimulationConfig] = None) -> StateVector:
    """
    Perform a single Euler integration step.

    This is a first-order method, primarily for testing/comparison.
    """
    thrust = _check_step_inputs(dt, thrust)
    if config is None:
        config = create_default_config()

    y = state.to_vector()
    y_new = y + dt * state_derivative_vector(y, thrust, config)
    return StateVector.from_vector(y_new, state.t + dt)


def integrate(state: StateVector, dt: float,
              thrust: Optional[np.ndarray] = None,
              method: str = 'rk4',
              config: Optional[SimulationConfig] = None) -> StateVector:
    """
    Integrate the state forward by one timestep.

    Args:
        state: Current state
        dt: Time step (s)
        thrust: Thrust acceleration (m/s^2)
        method: Integration method ('rk4' or 'euler')

    Returns:
        New state after integration
    """
    if method == 'rk4':
        return rk4_step(state, dt, thrust, config)
    elif method == 'euler':
        return euler_step(state, dt, thrust, config)
    else:
        raise ValueError(f"Unknown integration method: {method}")


def propagate(state: StateVector, dt: float, n_steps: int,
              thrust: Optional[np.ndarray] = None,
              config: Optional[SimulationConfig] = None) -> List[StateVector]:
    """
    Apply `n_steps` RK4 steps with constant thrust.

    Returns:
        List of states after each step (length n_steps; input excluded)
    """
    if n_steps < 0:
        raise ValueError(f"n_steps must be non-negative, got {n_steps}")
    if config is None:
        config = create_default_config()

    states = []
    current = state
    for _ in range(n_steps):
        current = rk4_step(current, dt, thrust, config)
        states.append(current)
    return states
