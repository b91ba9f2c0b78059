"""
Orbit Simulation - State Vector

This module defines the Cartesian state dataclass passed between the
integrator, element conversion and trajectory prediction. Every physics
function returns a new StateVector; none retains or mutates its input.
"""

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from . import constants as C


@dataclass
class StateVector:
    """
    Cartesian spacecraft state in the inertial frame.

    Attributes:
        r: Position vector (m) [3]
        v: Velocity vector (m/s) [3]
        t: Simulation time (s)
    """

    # Position in inertial frame (m)
    r: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # Velocity in inertial frame (m/s)
    v: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # Simulation time (s)
    t: float = 0.0

    def __post_init__(self):
        """Ensure arrays are numpy arrays with correct dtype."""
        for attr in ['r', 'v']:
            setattr(self, attr, np.array(getattr(self, attr), dtype=np.float64))
        self.t = float(self.t)

    def copy(self) -> 'StateVector':
        """Create a deep copy of the state."""
        return StateVector(r=self.r.copy(), v=self.v.copy(), t=self.t)

    def to_vector(self) -> np.ndarray:
        """Convert state to a flat numpy array [x, y, z, vx, vy, vz]."""
        return np.concatenate([self.r, self.v])

    @classmethod
    def from_vector(cls, vec: np.ndarray, t: float = 0.0) -> 'StateVector':
        """
        Create a StateVector from a flat numpy array.

        Args:
            vec: State vector [r(3), v(3)]
            t: Simulation time
        """
        return cls(r=vec[0:3].copy(), v=vec[3:6].copy(), t=t)

    @classmethod
    def from_lists(cls, position: Sequence[float], velocity: Sequence[float],
                   t: float = 0.0) -> 'StateVector':
        """Build a state from the document's position/velocity lists."""
        return cls(r=np.asarray(position, dtype=np.float64),
                   v=np.asarray(velocity, dtype=np.float64), t=t)

    def to_lists(self) -> dict:
        """Position/velocity as plain lists (document form)."""
        return {
            'position': [float(x) for x in self.r],
            'velocity': [float(x) for x in self.v],
        }

    @property
    def radius(self) -> float:
        """Distance from the body center (m)."""
        return float(np.linalg.norm(self.r))

    @property
    def altitude(self) -> float:
        """
        Altitude above Earth's mean radius R_EARTH (m).

        Earth only; for other bodies use radius - config.body_radius.
        """
        return self.radius - C.R_EARTH

    @property
    def speed(self) -> float:
        """Magnitude of velocity (m/s)."""
        return float(np.linalg.norm(self.v))

    def __str__(self) -> str:
        return (
            f"StateVector(t={self.t:.2f}s, "
            f"r={self.radius/1000:.2f}km, "
            f"v={self.speed:.1f}m/s)"
        )


def create_circular_state(altitude: float = C.LEO_ALTITUDE,
                          inclination: float = 0.0,
                          mu: float = C.MU_EARTH,
                          body_radius: float = C.R_EARTH) -> StateVector:
    """
    Create a prograde circular orbit state on the +X axis.

    The orbit is tilted about +X by the inclination, so at zero
    inclination the velocity is along -Z (angular momentum along +Y).

    Args:
        altitude: Orbit altitude above the surface (m)
        inclination: Orbit inclination (rad)

    Returns:
        StateVector at t = 0
    """
    r = body_radius + altitude
    v = np.sqrt(mu / r)
    velocity = v * np.array([0.0, np.sin(inclination), -np.cos(inclination)])
    return StateVector(r=np.array([r, 0.0, 0.0]), v=velocity, t=0.0)
