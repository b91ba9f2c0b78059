"""
Orbit Simulation - Impulsive Transfer Planning

Analytic delta-v and time-of-flight calculators for transfers between
coplanar circular orbits:
- Hohmann (two impulses, one half-ellipse)
- Bi-elliptic (three impulses, two half-ellipses through an intermediate
  radius)

Burns are prograde components (m/s): positive speeds the spacecraft up
along its velocity, negative is retrograde. Pure functions over scalar
radii; no state.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from . import constants as C


@dataclass(frozen=True)
class HohmannTransfer:
    """Result of a Hohmann transfer calculation."""
    dv1: float  # Departure burn (m/s)
    dv2: float  # Arrival burn (m/s)
    transfer_time: float  # Half transfer-ellipse period (s)

    @property
    def total_delta_v(self) -> float:
        return abs(self.dv1) + abs(self.dv2)


@dataclass(frozen=True)
class BiellipticTransfer:
    """Result of a bi-elliptic transfer calculation."""
    dv1: float  # Departure burn at r1 (m/s)
    dv2: float  # Burn at the intermediate radius (m/s)
    dv3: float  # Arrival burn at r2 (m/s)
    transfer_times: Tuple[float, float]  # Half-period of each ellipse (s)

    @property
    def total_delta_v(self) -> float:
        return abs(self.dv1) + abs(self.dv2) + abs(self.dv3)

    @property
    def total_time(self) -> float:
        return self.transfer_times[0] + self.transfer_times[1]


def _check_radius(name: str, r: float) -> None:
    if not math.isfinite(r) or r <= 0:
        raise ValueError(f"{name} must be a positive finite radius, got {r}")


def circular_velocity(r: float, mu: float = C.MU_EARTH) -> float:
    """Circular orbit speed sqrt(mu / r) (m/s)."""
    return float(np.sqrt(mu / r))


def vis_viva_speed(r: float, a: float, mu: float = C.MU_EARTH) -> float:
    """Orbital speed at radius r on a conic of semi-major axis a (m/s)."""
    return float(np.sqrt(mu * (2.0 / r - 1.0 / a)))


def half_period(a: float, mu: float = C.MU_EARTH) -> float:
    """Time to traverse half an ellipse, pi * sqrt(a^3 / mu) (s)."""
    return float(np.pi * np.sqrt(a ** 3 / mu))


def _hohmann_raise(r1: float, r2: float, mu: float) -> HohmannTransfer:
    v1 = circular_velocity(r1, mu)
    v2 = circular_velocity(r2, mu)

    a_transfer = (r1 + r2) / 2.0
    v_transfer1 = vis_viva_speed(r1, a_transfer, mu)
    v_transfer2 = vis_viva_speed(r2, a_transfer, mu)

    dv1 = v_transfer1 - v1  # Prograde burn at periapsis
    dv2 = v2 - v_transfer2  # Prograde burn at apoapsis

    return HohmannTransfer(dv1=dv1, dv2=dv2, transfer_time=half_period(a_transfer, mu))


def hohmann_transfer(r1: float, r2: float, mu: float = C.MU_EARTH) -> HohmannTransfer:
    """
    Hohmann transfer between circular orbits of radius r1 and r2.

    Raising (r1 <= r2): dv1 = v_t1 - v1, dv2 = v2 - v_t2, both prograde.
    Lowering (r1 > r2): the raise from r2 to r1 run backwards, i.e. both
    burns negated with departure and arrival swapped, so
    hohmann_transfer(b, a).dv1 == -hohmann_transfer(a, b).dv2 exactly.

    Args:
        r1: Departure orbit radius (m)
        r2: Arrival orbit radius (m)
        mu: Gravitational parameter (m^3/s^2)

    Returns:
        HohmannTransfer(dv1, dv2, transfer_time)

    Raises:
        ValueError: If a radius is not positive and finite
    """
    _check_radius("r1", r1)
    _check_radius("r2", r2)

    if r1 <= r2:
        return _hohmann_raise(r1, r2, mu)

    raise_ = _hohmann_raise(r2, r1, mu)
    return HohmannTransfer(dv1=-raise_.dv2, dv2=-raise_.dv1,
                           transfer_time=raise_.transfer_time)


def bielliptic_transfer(r1: float, r_intermediate: float, r2: float,
                        mu: float = C.MU_EARTH) -> BiellipticTransfer:
    """
    Bi-elliptic transfer from r1 to r2 through r_intermediate.

    First ellipse: periapsis/apoapsis r1 and r_intermediate.
    Second ellipse: r_intermediate and r2.
    Each boundary burn is the vis-viva speed difference at that radius.

    Args:
        r1: Departure orbit radius (m)
        r_intermediate: Intermediate (turning) radius (m)
        r2: Arrival orbit radius (m)

    Returns:
        BiellipticTransfer(dv1, dv2, dv3, (t1, t2))

    Raises:
        ValueError: If a radius is not positive and finite
    """
    _check_radius("r1", r1)
    _check_radius("r_intermediate", r_intermediate)
    _check_radius("r2", r2)

    a1 = (r1 + r_intermediate) / 2.0
    a2 = (r2 + r_intermediate) / 2.0

    dv1 = vis_viva_speed(r1, a1, mu) - circular_velocity(r1, mu)
    dv2 = vis_viva_speed(r_intermediate, a2, mu) - vis_viva_speed(r_intermediate, a1, mu)
    dv3 = circular_velocity(r2, mu) - vis_viva_speed(r2, a2, mu)

    return BiellipticTransfer(
        dv1=dv1, dv2=dv2, dv3=dv3,
        transfer_times=(half_period(a1, mu), half_period(a2, mu)),
    )


def compare_transfers(r1: float, r2: float, r_intermediate: float,
                      mu: float = C.MU_EARTH) -> dict:
    """
    Compare Hohmann and bi-elliptic total delta-v for the same radii.

    Returns:
        {'best': 'hohmann' | 'bielliptic', 'hohmann': HohmannTransfer,
         'bielliptic': BiellipticTransfer, 'savings': float (m/s)}
    """
    hohmann = hohmann_transfer(r1, r2, mu)
    bielliptic = bielliptic_transfer(r1, r_intermediate, r2, mu)
    if bielliptic.total_delta_v < hohmann.total_delta_v:
        best = 'bielliptic'
    else:
        best = 'hohmann'
    return {
        'best': best,
        'hohmann': hohmann,
        'bielliptic': bielliptic,
        'savings': abs(hohmann.total_delta_v - bielliptic.total_delta_v),
    }
