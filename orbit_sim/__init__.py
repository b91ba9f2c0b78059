"""
Orbit Simulation Package

A deterministic two-body orbital simulation core for a powered
spacecraft: fixed-step RK4 propagation, orbital elements, orbit
prediction, impulsive-transfer planning and scripted maneuvers.

Modules:
    - constants: Physical constants, tolerances and loop parameters
    - config: Simulation configuration dataclass
    - state: State vector dataclass
    - frames: Quaternion operations and local orbital frame
    - forces: Gravity and atmospheric drag
    - dynamics: State derivative
    - integrators: RK4 / Euler numerical integration
    - elements: Cartesian state <-> Keplerian elements
    - trajectory: Orbit-line prediction
    - maneuver: Hohmann and bi-elliptic transfer planning
    - sequence: Maneuver sequence documents
    - executor: Scripted maneuver execution
    - presets: Built-in maneuver sequences
    - validation: Physics validation checks
    - simulation: Headless fixed-step simulation loop
    - plotting: Batch plots of a run
    - cli: Command-line entry point
"""

from .state import StateVector, create_circular_state
from .config import SimulationConfig, create_default_config, create_test_config
from .elements import OrbitalElements, state_to_elements, elements_to_state
from .integrators import rk4_step
from .trajectory import predict_orbit
from .maneuver import hohmann_transfer, bielliptic_transfer
from .sequence import ManeuverNode, ManeuverSequence, validate_sequence, serialize_sequence
from .executor import ManeuverExecutor
from .simulation import run_simulation, SimulationLog

__version__ = "1.0.0"
__author__ = "Orbit Simulation Team"

__all__ = [
    'StateVector',
    'create_circular_state',
    'SimulationConfig',
    'create_default_config',
    'create_test_config',
    'OrbitalElements',
    'state_to_elements',
    'elements_to_state',
    'rk4_step',
    'predict_orbit',
    'hohmann_transfer',
    'bielliptic_transfer',
    'ManeuverNode',
    'ManeuverSequence',
    'validate_sequence',
    'serialize_sequence',
    'ManeuverExecutor',
    'run_simulation',
    'SimulationLog',
]
