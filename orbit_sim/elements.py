"""
Orbit Simulation - Keplerian Orbital Elements

Conversion between the Cartesian state vector and classical orbital
elements in the Y-up inertial frame (+Y polar axis, X-Z equatorial plane).

Elements are derived quantities: they are recomputed from a state vector on
every query and never stored as the source of truth.

Degenerate geometry is handled with guard branches instead of propagating
non-finite values:
- circular orbits (e < ZERO_TOLERANCE): argument of periapsis and true
  anomaly are 0
- equatorial orbits (|n| < ZERO_TOLERANCE): RAAN and argument of
  periapsis are 0
- rectilinear motion (h = 0): inclination is 0
Every inverse cosine argument is clipped to [-1, 1].
"""

import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from . import constants as C
from .frames import from_z_up
from .state import StateVector

TWO_PI = 2.0 * np.pi


@dataclass(frozen=True)
class OrbitalElements:
    """
    Classical orbital elements.

    Attributes:
        semi_major_axis: a (m), inf when the orbit is unbound
        eccentricity: e (>= 0)
        inclination: i (rad)
        raan: right ascension of the ascending node (rad)
        argument_of_periapsis: omega (rad)
        true_anomaly: nu (rad)
        semi_latus_rectum: p = h^2 / mu (m). Defined for every conic;
            derived from a(1 - e^2) when not supplied.
        mu: Gravitational parameter of the central body (m^3/s^2)
    """
    semi_major_axis: float
    eccentricity: float
    inclination: float = 0.0
    raan: float = 0.0
    argument_of_periapsis: float = 0.0
    true_anomaly: float = 0.0
    semi_latus_rectum: Optional[float] = field(default=None)
    mu: float = C.MU_EARTH

    def __post_init__(self):
        if self.semi_latus_rectum is None:
            if math.isfinite(self.semi_major_axis):
                p = self.semi_major_axis * (1.0 - self.eccentricity ** 2)
            else:
                p = math.nan
            object.__setattr__(self, 'semi_latus_rectum', p)

    @property
    def is_bound(self) -> bool:
        """True for closed (elliptical or circular) orbits."""
        return math.isfinite(self.semi_major_axis) and self.eccentricity < 1.0

    @property
    def periapsis_radius(self) -> float:
        """Periapsis distance from the body center (m)."""
        return self.semi_latus_rectum / (1.0 + self.eccentricity)

    @property
    def apoapsis_radius(self) -> float:
        """Apoapsis distance (m); inf for unbound orbits."""
        if not self.is_bound:
            return math.inf
        return self.semi_latus_rectum / (1.0 - self.eccentricity)

    @property
    def period(self) -> float:
        """Orbital period (s); inf for unbound orbits."""
        if not self.is_bound:
            return math.inf
        return orbital_period(self.semi_major_axis, self.mu)

    def to_dict(self) -> dict:
        """Elements keyed the way the document format names things."""
        return {
            'semiMajorAxis': self.semi_major_axis,
            'eccentricity': self.eccentricity,
            'inclination': self.inclination,
            'raan': self.raan,
            'argumentOfPeriapsis': self.argument_of_periapsis,
            'trueAnomaly': self.true_anomaly,
        }


def _clipped_acos(x: float) -> float:
    return float(np.arccos(np.clip(x, -1.0, 1.0)))


def orbital_period(semi_major_axis: float, mu: float = C.MU_EARTH) -> float:
    """Keplerian period T = 2*pi*sqrt(a^3 / mu) (s)."""
    return float(TWO_PI * np.sqrt(semi_major_axis ** 3 / mu))


def eccentricity_vector(r: np.ndarray, v: np.ndarray,
                        mu: float = C.MU_EARTH) -> np.ndarray:
    """
    e = ((v^2 - mu/r) * r - (r . v) * v) / mu

    Points toward periapsis with magnitude equal to the eccentricity.
    """
    r_norm = np.linalg.norm(r)
    return ((np.dot(v, v) - mu / r_norm) * r - np.dot(r, v) * v) / mu


def state_to_elements(state: StateVector, mu: float = C.MU_EARTH) -> OrbitalElements:
    """
    Convert a Cartesian state to Keplerian orbital elements.

    Pure function; the input state is not modified.

    Args:
        state: Cartesian state (Y-up inertial frame)
        mu: Gravitational parameter (m^3/s^2)

    Returns:
        OrbitalElements
    """
    r = state.r
    v = state.v
    r_norm = np.linalg.norm(r)
    if r_norm < C.ZERO_TOLERANCE:
        # Origin: no meaningful conic; report a collapsed orbit
        return OrbitalElements(semi_major_axis=0.0, eccentricity=0.0,
                               semi_latus_rectum=0.0, mu=mu)

    # Specific angular momentum
    h = np.cross(r, v)
    h_norm = np.linalg.norm(h)

    # Node vector n = Y x h
    node = np.cross(C.POLAR_AXIS, h)
    n_norm = np.linalg.norm(node)

    e_vec = eccentricity_vector(r, v, mu)
    ecc = float(np.linalg.norm(e_vec))

    v2 = np.dot(v, v)
    energy = v2 / 2.0 - mu / r_norm
    semi_major_axis = float(-mu / (2.0 * energy)) if energy < 0 else math.inf

    inclination = 0.0
    if h_norm > C.ZERO_TOLERANCE:
        inclination = _clipped_acos(h[1] / h_norm)

    raan = 0.0
    if n_norm > C.ZERO_TOLERANCE:
        raan = _clipped_acos(node[0] / n_norm)
        # Node with positive Z lies past 180 degrees
        if node[2] > 0:
            raan = TWO_PI - raan

    argument_of_periapsis = 0.0
    if n_norm > C.ZERO_TOLERANCE and ecc > C.ZERO_TOLERANCE:
        argument_of_periapsis = _clipped_acos(np.dot(node, e_vec) / (n_norm * ecc))
        # Periapsis south of the equator
        if e_vec[1] < 0:
            argument_of_periapsis = TWO_PI - argument_of_periapsis

    true_anomaly = 0.0
    rdotv = np.dot(r, v)
    if ecc > C.ZERO_TOLERANCE:
        true_anomaly = _clipped_acos(np.dot(e_vec, r) / (ecc * r_norm))
        # Moving toward periapsis
        if rdotv < 0:
            true_anomaly = TWO_PI - true_anomaly

    return OrbitalElements(
        semi_major_axis=semi_major_axis,
        eccentricity=ecc,
        inclination=inclination,
        raan=raan,
        argument_of_periapsis=argument_of_periapsis,
        true_anomaly=true_anomaly,
        semi_latus_rectum=float(h_norm ** 2 / mu),
        mu=mu,
    )


def _rotation_perifocal_to_inertial(raan: float, inclination: float,
                                    argp: float) -> np.ndarray:
    """R3(raan) @ R1(i) @ R3(argp) in the Z-up textbook frame."""
    cO, sO = np.cos(raan), np.sin(raan)
    ci, si = np.cos(inclination), np.sin(inclination)
    cw, sw = np.cos(argp), np.sin(argp)
    return np.array([
        [cO*cw - sO*sw*ci, -cO*sw - sO*cw*ci,  sO*si],
        [sO*cw + cO*sw*ci, -sO*sw + cO*cw*ci, -cO*si],
        [sw*si,             cw*si,             ci],
    ])


def elements_to_state(elements: OrbitalElements, mu: Optional[float] = None,
                      t: float = 0.0) -> StateVector:
    """
    Reconstruct the Cartesian state from orbital elements.

    Uses the semi-latus rectum, so bound and hyperbolic conics are both
    supported. Parabolic and collapsed orbits (p <= 0 or undefined) are not.
    mu defaults to the value carried by the elements.

    Raises:
        ValueError: If p is not a positive finite number, or the true
            anomaly lies beyond the asymptotes of a hyperbola.
    """
    if mu is None:
        mu = elements.mu
    p = elements.semi_latus_rectum
    e = elements.eccentricity
    nu = elements.true_anomaly
    if not math.isfinite(p) or p <= 0:
        raise ValueError(f"Semi-latus rectum must be positive and finite, got {p}")

    denom = 1.0 + e * np.cos(nu)
    if denom <= C.ZERO_TOLERANCE:
        raise ValueError(
            f"True anomaly {nu:.4f} rad is outside the conic (e={e:.4f})")

    r_pf = (p / denom) * np.array([np.cos(nu), np.sin(nu), 0.0])
    v_pf = np.sqrt(mu / p) * np.array([-np.sin(nu), e + np.cos(nu), 0.0])

    Q = _rotation_perifocal_to_inertial(
        elements.raan, elements.inclination, elements.argument_of_periapsis)

    return StateVector(r=from_z_up(Q @ r_pf), v=from_z_up(Q @ v_pf), t=t)


def specific_energy(state: StateVector, mu: float = C.MU_EARTH) -> float:
    """Specific orbital energy v^2/2 - mu/r (J/kg)."""
    return float(0.5 * np.dot(state.v, state.v) - mu / np.linalg.norm(state.r))


def angular_momentum(state: StateVector) -> np.ndarray:
    """Specific angular momentum vector h = r x v (m^2/s)."""
    return np.cross(state.r, state.v)
