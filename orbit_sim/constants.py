"""
Orbit Simulation - Physical Constants and Model Parameters

This module defines the central-body constants, atmosphere and spacecraft
drag parameters, fixed-step loop limits and the numerical thresholds used
throughout the simulation.

Frame convention: inertial, Y-up. +Y is the polar axis and the X-Z plane
is the equatorial plane.
"""

import numpy as np

# =============================================================================
# CENTRAL BODY PARAMETERS
# =============================================================================

# Gravitational parameter (m^3/s^2)
MU_EARTH = 3.986004418e14

# Earth mean radius (m)
R_EARTH = 6.371e6

# Polar (rotation) axis of the inertial frame
POLAR_AXIS = np.array([0.0, 1.0, 0.0])

# =============================================================================
# ATMOSPHERE (exponential model)
# =============================================================================

RHO_0 = 1.225  # Sea level density (kg/m^3)
H_SCALE = 8500.0  # Scale height (m)
ATMOSPHERE_CEILING = 600e3  # Altitude above which drag is not evaluated (m)

# =============================================================================
# SPACECRAFT DRAG PROPERTIES
# =============================================================================

DRAG_COEFFICIENT = 2.2
CROSS_SECTION_AREA = 10.0  # m^2
SPACECRAFT_MASS = 1000.0  # kg

# =============================================================================
# SPACECRAFT CONTROL
# =============================================================================

# Manual thrust acceleration at full input (m/s^2)
THRUST_ACCEL = 10.0

# =============================================================================
# FIXED-STEP LOOP
# =============================================================================

PHYSICS_DT = 1.0  # Fixed physics timestep (s)
MAX_STEPS_PER_TICK = 10000  # Catch-up bound per outer tick
MAX_FRAME_DT = 0.1  # Largest wall-clock frame delta accepted (s)
WARP_LEVELS = (1, 5, 10, 50, 100, 1000)
DEFAULT_WARP = 100

# Reentry: below this altitude the spacecraft is considered destroyed (m)
REENTRY_ALTITUDE = 70e3

# =============================================================================
# TRAJECTORY PREDICTION
# =============================================================================

PREDICTION_POINTS = 1200
PREDICTION_FALLBACK_DT = 30.0  # Coarse step for unbound trajectories (s)

# =============================================================================
# PRESET ORBITS
# =============================================================================

LEO_ALTITUDE = 200e3  # m
GEO_ALTITUDE = 35786e3  # m
PRESET_BURN_START = 300.0  # s, time to observe the initial orbit
PRESET_BURN_DURATION = 60.0  # s
PRESET_OBSERVATION_TIME = 7200.0  # s after the final burn

# =============================================================================
# NUMERICAL TOLERANCES
# =============================================================================

# Node vector / eccentricity below this are treated as zero when computing
# RAAN, argument of periapsis and true anomaly (angles fall back to 0).
ZERO_TOLERANCE = 1e-10

# Below this eccentricity the periapsis direction is ill-defined; the
# predictor anchors its in-plane basis to the current radial direction.
CIRCULAR_ECCENTRICITY_TOL = 1e-4

# Below this |h| (m^2/s) the orbit plane is undefined (radial motion);
# the predictor falls back to numerical propagation.
ANGULAR_MOMENTUM_TOL = 1e-9

# Degenerate position / speed for the analytic predictor (m, m/s)
DEGENERATE_VECTOR_TOL = 1e-9

# Speed floor for drag evaluation (m/s)
SMALL_VELOCITY_TOL = 1e-6

# Below this speed the prograde frame is undefined; scripted thrust is
# zero and attitude is left unchanged (m/s).
MANEUVER_MIN_SPEED = 0.01

# Alignment of look direction with the up vector before an alternate
# up vector is used for attitude construction.
PARALLEL_TOLERANCE = 0.9999

ENERGY_TOLERANCE = 1e-6  # Relative specific-energy drift per orbit

# Escape speed at the surface is ~11.2 km/s; anything far beyond this
# indicates a corrupted state rather than a real trajectory.
MAX_REASONABLE_SPEED = 50000.0  # m/s
