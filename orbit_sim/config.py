"""
Orbit Simulation - Configuration

This module provides a SimulationConfig dataclass for dependency injection,
allowing different central-body, atmosphere and loop parameters to be passed
without modifying global constants.

Integrated drag defaults to OFF: drag is computed for telemetry only and
reentry is detected with a fixed altitude threshold.
"""

from dataclasses import dataclass

from . import constants as C


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable configuration for simulation parameters.

    Create modified configs via dataclasses.replace().

    Section grouping:
      1. Simulation timing
      2. Central body
      3. Atmosphere / drag
      4. Reentry
      5. Trajectory prediction
      6. Control
      7. Misc
    """

    # ── 1. Simulation timing ─────────────────────────────────────────────
    dt: float = C.PHYSICS_DT
    max_time: float = 86400.0
    max_steps_per_tick: int = C.MAX_STEPS_PER_TICK
    time_warp: float = C.DEFAULT_WARP

    # ── 2. Central body ──────────────────────────────────────────────────
    mu: float = C.MU_EARTH
    body_radius: float = C.R_EARTH

    # ── 3. Atmosphere / drag ─────────────────────────────────────────────
    rho_0: float = C.RHO_0
    scale_height: float = C.H_SCALE
    atmosphere_ceiling: float = C.ATMOSPHERE_CEILING
    drag_coefficient: float = C.DRAG_COEFFICIENT
    cross_section_area: float = C.CROSS_SECTION_AREA
    spacecraft_mass: float = C.SPACECRAFT_MASS
    # Feed drag into the propagated state (orbital decay). Default OFF.
    enable_drag: bool = False

    # ── 4. Reentry ───────────────────────────────────────────────────────
    reentry_altitude: float = C.REENTRY_ALTITUDE

    # ── 5. Trajectory prediction ─────────────────────────────────────────
    prediction_points: int = C.PREDICTION_POINTS
    prediction_fallback_dt: float = C.PREDICTION_FALLBACK_DT

    # ── 6. Control ───────────────────────────────────────────────────────
    thrust_accel: float = C.THRUST_ACCEL

    # ── 7. Misc ──────────────────────────────────────────────────────────
    verbose: bool = True


def create_default_config() -> SimulationConfig:
    """Create a SimulationConfig with default values from constants."""
    return SimulationConfig()


def create_test_config(dt: float = 1.0, max_time: float = 600.0,
                       **overrides) -> SimulationConfig:
    """Create a fast config suitable for testing.

    Any keyword arg accepted by SimulationConfig can be passed as an override.
    """
    defaults = dict(dt=dt, max_time=max_time, verbose=False)
    defaults.update(overrides)
    return SimulationConfig(**defaults)
