"""
Orbit Simulation - Headless Simulation Loop

This module threads the state through the fixed-step physics:
- Fixed-timestep clock with a bounded catch-up per tick
- Scripted-over-manual thrust selection per step
- Reentry (fixed altitude threshold) and max-time termination
- Data logging and telemetry snapshots

Coordinate Frames:
- Position/Velocity: Y-up inertial frame (+Y polar axis)
- Attitude quaternion convention: [w, x, y, z] (scalar-first)
"""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

import numpy as np

from . import constants as C
from .config import SimulationConfig, create_default_config
from .elements import specific_energy, state_to_elements
from .executor import ManeuverExecutor, select_thrust
from .forces import drag_magnitude
from .integrators import rk4_step
from .sequence import ManeuverSequence
from .state import StateVector, create_circular_state
from .types import Telemetry, ThrustCommand
from .validation import validate_state

logger = logging.getLogger(__name__)


@dataclass
class FixedStepClock:
    """
    Accumulates scaled wall time and releases whole physics steps.

    At most max_steps_per_tick steps are released per call; time beyond
    that stays in the accumulator.
    """
    dt: float = C.PHYSICS_DT
    max_steps_per_tick: int = C.MAX_STEPS_PER_TICK
    accumulator: float = 0.0

    def advance(self, frame_dt: float, warp: float = 1.0) -> int:
        """
        Add one frame of wall time and return the number of steps due.

        Args:
            frame_dt: Wall-clock seconds since the previous frame
                (clamped to [0, MAX_FRAME_DT])
            warp: Time-acceleration factor

        Returns:
            Number of fixed steps to run this tick
        """
        frame_dt = min(max(frame_dt, 0.0), C.MAX_FRAME_DT)
        self.accumulator += frame_dt * warp
        steps = min(int(self.accumulator // self.dt), self.max_steps_per_tick)
        self.accumulator -= steps * self.dt
        return steps

    def reset(self) -> None:
        self.accumulator = 0.0


@dataclass
class SimulationLog:
    """Container for logged simulation data."""
    time: List[float] = field(default_factory=list)
    position_x: List[float] = field(default_factory=list)
    position_y: List[float] = field(default_factory=list)
    position_z: List[float] = field(default_factory=list)
    velocity_x: List[float] = field(default_factory=list)
    velocity_y: List[float] = field(default_factory=list)
    velocity_z: List[float] = field(default_factory=list)
    altitude: List[float] = field(default_factory=list)  # km
    speed: List[float] = field(default_factory=list)  # m/s
    thrust_magnitude: List[float] = field(default_factory=list)  # m/s^2
    drag_acceleration: List[float] = field(default_factory=list)  # m/s^2
    specific_energy: List[float] = field(default_factory=list)  # J/kg
    active_maneuver: List[Optional[str]] = field(default_factory=list)

    def append(self, state: StateVector, thrust: np.ndarray,
               command: Optional[ThrustCommand], config: SimulationConfig):
        """Log data from current timestep."""
        self.time.append(state.t)
        self.position_x.append(float(state.r[0]))
        self.position_y.append(float(state.r[1]))
        self.position_z.append(float(state.r[2]))
        self.velocity_x.append(float(state.v[0]))
        self.velocity_y.append(float(state.v[1]))
        self.velocity_z.append(float(state.v[2]))
        self.altitude.append((state.radius - config.body_radius) / 1000.0)
        self.speed.append(state.speed)
        self.thrust_magnitude.append(float(np.linalg.norm(thrust)))
        self.drag_acceleration.append(drag_magnitude(state.r, state.v, config))
        self.specific_energy.append(specific_energy(state, config.mu))
        self.active_maneuver.append(command['maneuver_id'] if command else None)

    def positions(self) -> np.ndarray:
        """Logged positions as an (n, 3) array."""
        return np.column_stack([self.position_x, self.position_y, self.position_z])

    def __len__(self) -> int:
        return len(self.time)


def compute_telemetry(state: StateVector,
                      config: Optional[SimulationConfig] = None) -> Telemetry:
    """
    Snapshot of the derived quantities a display needs.

    Apsis altitudes are measured from the mean surface.
    """
    if config is None:
        config = create_default_config()
    elements = state_to_elements(state, config.mu)
    return {
        'time': state.t,
        'altitude': state.radius - config.body_radius,
        'speed': state.speed,
        'apoapsis_altitude': elements.apoapsis_radius - config.body_radius,
        'periapsis_altitude': elements.periapsis_radius - config.body_radius,
        'period': elements.period,
        'semi_major_axis': elements.semi_major_axis,
        'eccentricity': elements.eccentricity,
        'inclination': elements.inclination,
        'raan': elements.raan,
        'argument_of_periapsis': elements.argument_of_periapsis,
        'true_anomaly': elements.true_anomaly,
        'specific_energy': specific_energy(state, config.mu),
        'drag_acceleration': drag_magnitude(state.r, state.v, config),
    }


def is_reentered(state: StateVector,
                 config: Optional[SimulationConfig] = None) -> bool:
    """Spacecraft is destroyed below the reentry altitude."""
    if config is None:
        config = create_default_config()
    return state.radius - config.body_radius < config.reentry_altitude


def check_termination(state: StateVector, max_time: float,
                      config: Optional[SimulationConfig] = None) -> Tuple[bool, str]:
    """
    Check whether the run should stop.

    Returns:
        (should_terminate, reason)
    """
    if config is None:
        config = create_default_config()

    if is_reentered(state, config):
        return True, (f"Reentry: altitude {(state.radius - config.body_radius)/1000:.1f} km "
                      f"below {config.reentry_altitude/1000:.1f} km")

    # Half a step of slack for accumulated floating-point time
    if state.t >= max_time - 0.5 * config.dt:
        return True, f"Maximum simulation time reached ({max_time:.1f} s)"

    return False, ""


def simulation_step(state: StateVector, executor: Optional[ManeuverExecutor],
                    manual_thrust: Optional[np.ndarray] = None,
                    config: Optional[SimulationConfig] = None
                    ) -> Tuple[StateVector, np.ndarray, Optional[ThrustCommand]]:
    """
    Advance one fixed step.

    The executor is queried at the state's time; a scripted maneuver
    overrides the manual thrust while it is active.

    Returns:
        (new_state, applied_thrust, thrust_command) where the command is
        None without an executor
    """
    if config is None:
        config = create_default_config()

    command = None
    if executor is not None:
        command = executor.get_thrust_at_time(state.t, state)
    thrust = select_thrust(manual_thrust, command)

    return rk4_step(state, config.dt, thrust, config), thrust, command


def tick(state: StateVector, clock: FixedStepClock, frame_dt: float,
         warp: Optional[float] = None, executor: Optional[ManeuverExecutor] = None,
         manual_thrust: Optional[np.ndarray] = None,
         config: Optional[SimulationConfig] = None) -> Tuple[StateVector, int, bool]:
    """
    One outer-loop tick: drain the clock, stopping early on reentry.

    The clock's dt is used as the physics step; warp defaults to
    config.time_warp.

    Returns:
        (new_state, steps_run, reentered)
    """
    if config is None:
        config = create_default_config()
    if clock.dt != config.dt:
        config = replace(config, dt=clock.dt)
    if warp is None:
        warp = config.time_warp

    steps = clock.advance(frame_dt, warp)
    for i in range(steps):
        state, _, _ = simulation_step(state, executor, manual_thrust, config)
        if is_reentered(state, config):
            logger.info(f"Reentry at t={state.t:.1f}s")
            clock.reset()
            return state, i + 1, True
    return state, steps, False


def run_simulation(sequence: Optional[ManeuverSequence] = None,
                   initial_state: Optional[StateVector] = None,
                   dt: float = None, max_time: float = None,
                   verbose: Optional[bool] = None,
                   manual_thrust: Optional[np.ndarray] = None,
                   config: SimulationConfig = None) -> tuple:
    """
    Run a headless simulation.

    Args:
        sequence: Maneuver sequence to execute. Supplies the initial state
            and max_time when those are not given.
        initial_state: Starting state. Defaults to the sequence's initial
            state, else a 200 km circular orbit.
        dt: Time step (default from config)
        max_time: Maximum simulation time (default: the sequence's total
            duration, else config.max_time)
        verbose: Print progress (default config.verbose)
        manual_thrust: Constant manual thrust used outside maneuvers
        config: SimulationConfig instance. If None a default is created.

    Returns:
        (final_state, log, termination_reason) tuple
    """
    if config is None:
        config = create_default_config()

    if dt is not None:
        config = replace(config, dt=dt)
    if max_time is None:
        max_time = sequence.total_duration if sequence is not None else config.max_time
    if verbose is None:
        verbose = config.verbose

    if initial_state is not None:
        state = initial_state.copy()
    elif sequence is not None:
        state = sequence.initial_state
    else:
        state = create_circular_state(C.LEO_ALTITUDE, mu=config.mu,
                                      body_radius=config.body_radius)

    executor = ManeuverExecutor(sequence) if sequence is not None else None
    log = SimulationLog()

    logger.info(f"Starting simulation: dt={config.dt}s, max_time={max_time}s, "
                f"drag={'integrated' if config.enable_drag else 'telemetry only'}")
    logger.debug(f"Initial state: {state}")

    if verbose:
        print("\n" + "=" * 72)
        title = sequence.name if sequence is not None else "free flight"
        print(f"ORBIT SIMULATION | {title} | dt={config.dt}s | T_max={max_time:.0f}s")
        print("=" * 72)
        print(f"{'Time (s)':^12} | {'Alt (km)':^12} | {'Vel (m/s)':^12} | {'Maneuver':<20}")
        print("-" * 72)

    start_time = time.time()
    print_interval = max(max_time / 20.0, config.dt)
    last_print_time = -print_interval
    reason = ""

    while True:
        should_terminate, reason = check_termination(state, max_time, config)
        if should_terminate:
            break

        valid, error = validate_state(state, abort_on_error=False)
        if not valid:
            logger.error(f"Validation failed: {error}")
            reason = f"Validation failure: {error}"
            break

        new_state, thrust, command = simulation_step(state, executor, manual_thrust, config)
        log.append(state, thrust, command, config)

        if verbose and state.t - last_print_time >= print_interval:
            maneuver = command['maneuver_id'] if command and command['maneuver_id'] else '-'
            altitude_km = (state.radius - config.body_radius) / 1000
            print(f"{state.t:12.1f} | {altitude_km:12.2f} | "
                  f"{state.speed:12.1f} | {maneuver:<20}")
            last_print_time = state.t

        state = new_state

    logger.info(f"Simulation terminated: {reason} "
                f"({len(log)} steps in {time.time() - start_time:.2f}s)")
    if verbose:
        print(f"\nTermination: {reason}")
    return state, log, reason
