"""
Orbit Simulation - Validation Checks

This module implements physics validation checks:
- Finite state components
- Nonzero position (gravity singularity)
- Reasonable speed
- Energy conservation (thrust-free flight)
"""

from typing import Optional, Tuple

import numpy as np

from . import constants as C
from .elements import specific_energy
from .state import StateVector


class ValidationError(Exception):
    """Raised when a physics validation check fails."""
    pass


def check_state_finite(state: StateVector) -> bool:
    """
    Verify position and velocity contain only finite numbers.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    if not (np.all(np.isfinite(state.r)) and np.all(np.isfinite(state.v))):
        raise ValidationError(
            f"Non-finite state: r={state.r.tolist()}, v={state.v.tolist()}"
        )
    return True


def check_position_nonzero(r: np.ndarray) -> bool:
    """
    Gravity is singular at the origin.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    r_norm = np.linalg.norm(r)
    if r_norm < C.ZERO_TOLERANCE:
        raise ValidationError(f"Position at the body center: |r| = {r_norm:.3e} m")
    return True


def check_velocity_reasonable(v: np.ndarray) -> bool:
    """
    Check that velocity is within reasonable bounds.

    Returns:
        True if valid, raises ValidationError otherwise
    """
    v_mag = np.linalg.norm(v)
    if v_mag > C.MAX_REASONABLE_SPEED:
        raise ValidationError(
            f"Velocity exceeds reasonable bounds: |v| = {v_mag:.2f} m/s, "
            f"max = {C.MAX_REASONABLE_SPEED:.2f} m/s"
        )
    return True


def validate_state(state: StateVector,
                   abort_on_error: bool = True) -> Tuple[bool, Optional[str]]:
    """
    Perform all validation checks on a state.

    Args:
        state: State to validate
        abort_on_error: If True, raise on the first error
    """
    try:
        check_state_finite(state)
        check_position_nonzero(state.r)
        check_velocity_reasonable(state.v)
        return True, None
    except ValidationError as e:
        if abort_on_error:
            raise
        return False, str(e)


def validate_energy_conservation_states(state_initial: StateVector,
                                        state_final: StateVector,
                                        tolerance: float = None,
                                        mu: float = C.MU_EARTH) -> bool:
    """
    Check specific-energy conservation between two states.

    Only meaningful for thrust-free flight without integrated drag.

    Returns:
        True if energy is conserved within tolerance
    """
    if tolerance is None:
        tolerance = C.ENERGY_TOLERANCE

    E_initial = specific_energy(state_initial, mu)
    E_final = specific_energy(state_final, mu)

    if abs(E_initial) < C.ZERO_TOLERANCE:
        return True  # Can't compute relative error

    relative_change = abs(E_final - E_initial) / abs(E_initial)

    if relative_change > tolerance:
        raise ValidationError(
            f"Energy conservation violation: ΔE/E = {relative_change:.4e}, "
            f"tolerance = {tolerance:.4e}"
        )
    return True
