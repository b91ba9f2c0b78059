"""
Orbit Simulation - Type Definitions

This module provides TypedDict definitions for structured return types,
improving type safety and IDE support.
"""

from typing import Optional, TypedDict

import numpy as np
from numpy.typing import NDArray


class ThrustCommand(TypedDict):
    """Return type for the maneuver executor."""
    thrust: NDArray[np.float64]  # Thrust acceleration, inertial frame (m/s^2)
    orientation: Optional[NDArray[np.float64]]  # Desired [w, x, y, z], None = leave attitude unchanged
    active: bool  # Whether a scripted maneuver covers the queried time
    maneuver_id: Optional[str]  # Id of the active maneuver


class Telemetry(TypedDict):
    """Return type for the telemetry snapshot."""
    time: float  # Simulation time (s)
    altitude: float  # Altitude above the mean surface (m)
    speed: float  # Inertial speed (m/s)
    apoapsis_altitude: float  # m, inf when unbound
    periapsis_altitude: float  # m
    period: float  # s, inf when unbound
    semi_major_axis: float  # m, inf when unbound
    eccentricity: float
    inclination: float  # rad
    raan: float  # rad
    argument_of_periapsis: float  # rad
    true_anomaly: float  # rad
    specific_energy: float  # J/kg
    drag_acceleration: float  # m/s^2
