"""
Orbit Simulation - Scripted Maneuver Executor

Time-driven selection of the active maneuver and resolution of its
(prograde, normal, radial) delta-v into an inertial thrust acceleration.

Thrust and attitude are returned as two separate outputs; the executor
never touches the caller's state. Overlapping maneuvers: the first entry
in document order whose window covers the queried time wins.
"""

import logging
from typing import Optional

import numpy as np

from .config import SimulationConfig, create_default_config
from .frames import local_orbital_frame, look_rotation_quaternion
from .sequence import ManeuverNode, ManeuverSequence
from .state import StateVector
from .types import ThrustCommand

logger = logging.getLogger(__name__)


def _idle_command(active: bool = False,
                  maneuver_id: Optional[str] = None) -> ThrustCommand:
    return {
        'thrust': np.zeros(3),
        'orientation': None,
        'active': active,
        'maneuver_id': maneuver_id,
    }


def find_active_maneuver(sequence: ManeuverSequence,
                         sim_time: float) -> Optional[ManeuverNode]:
    """First maneuver in list order with start <= sim_time < start + duration."""
    for node in sequence.maneuvers:
        if node.is_active_at(sim_time):
            return node
    return None


def resolve_delta_v(node: ManeuverNode, r: np.ndarray,
                    v: np.ndarray) -> Optional[np.ndarray]:
    """
    Constant thrust acceleration that delivers node.delta_v over its duration.

        a = (dv_pro * prograde + dv_norm * normal + dv_rad * radial) / duration

    Returns:
        Inertial thrust vector (m/s^2), or None when the local frame is
        undefined (speed below MANEUVER_MIN_SPEED)
    """
    frame = local_orbital_frame(r, v)
    if frame is None:
        return None
    prograde, normal, radial = frame
    dv_pro, dv_norm, dv_rad = node.delta_v
    return ((dv_pro / node.duration) * prograde
            + (dv_norm / node.duration) * normal
            + (dv_rad / node.duration) * radial)


class ManeuverExecutor:
    """
    Executes a loaded maneuver sequence against simulation time.

    Holds only the loaded sequence and the currently active maneuver.
    """

    def __init__(self, sequence: Optional[ManeuverSequence] = None):
        self._sequence: Optional[ManeuverSequence] = None
        self._active: Optional[ManeuverNode] = None
        if sequence is not None:
            self.load_sequence(sequence)

    @property
    def sequence(self) -> Optional[ManeuverSequence]:
        return self._sequence

    @property
    def active_maneuver(self) -> Optional[ManeuverNode]:
        return self._active

    @property
    def is_active(self) -> bool:
        return self._active is not None

    def load_sequence(self, sequence: ManeuverSequence) -> None:
        """Replace the loaded sequence and reset the active maneuver."""
        self._sequence = sequence
        self._active = None
        logger.info(f"Loaded sequence '{sequence.name}' "
                    f"({len(sequence.maneuvers)} maneuvers)")

    def clear(self) -> None:
        self._sequence = None
        self._active = None

    def _set_active(self, node: Optional[ManeuverNode], sim_time: float) -> None:
        if node is self._active:
            return
        if self._active is not None:
            logger.info(f"Maneuver '{self._active.id}' complete at t={sim_time:.1f}s")
        if node is not None:
            logger.info(f"Maneuver '{node.id}' active at t={sim_time:.1f}s, "
                        f"dV={list(node.delta_v)} m/s over {node.duration:.1f}s")
        self._active = node

    def get_thrust_at_time(self, sim_time: float, state: StateVector) -> ThrustCommand:
        """
        Thrust command for the current simulation time.

        Args:
            sim_time: Seconds from sequence start
            state: Current spacecraft state (read only)

        Returns:
            ThrustCommand. With no active maneuver, thrust is zero and
            active is False. With an active maneuver but a degenerate frame
            (speed below MANEUVER_MIN_SPEED), thrust is zero, active stays
            True and orientation is None.
        """
        if self._sequence is None:
            return _idle_command()

        node = find_active_maneuver(self._sequence, sim_time)
        self._set_active(node, sim_time)
        if node is None:
            return _idle_command()

        thrust = resolve_delta_v(node, state.r, state.v)
        if thrust is None:
            logger.debug(f"Maneuver '{node.id}': speed too low for a prograde frame")
            return _idle_command(active=True, maneuver_id=node.id)

        return {
            'thrust': thrust,
            'orientation': look_rotation_quaternion(state.v),
            'active': True,
            'maneuver_id': node.id,
        }


def select_thrust(manual_thrust: Optional[np.ndarray],
                  command: Optional[ThrustCommand]) -> np.ndarray:
    """Scripted thrust overrides manual input while a maneuver is active."""
    if command is not None and command['active']:
        return command['thrust']
    if manual_thrust is None:
        return np.zeros(3)
    return np.asarray(manual_thrust, dtype=np.float64)


def manual_thrust_vector(intent: np.ndarray, state: StateVector,
                         config: Optional[SimulationConfig] = None) -> np.ndarray:
    """
    Resolve a manual control intent into an inertial thrust acceleration.

    Args:
        intent: (prograde, normal, radial) input, each clipped to [-1, 1]
        state: Current spacecraft state (read only)
        config: Supplies thrust_accel, the acceleration at full input

    Returns:
        Thrust acceleration (m/s^2); zero when the local frame is undefined
    """
    if config is None:
        config = create_default_config()
    frame = local_orbital_frame(state.r, state.v)
    if frame is None:
        return np.zeros(3)
    prograde, normal, radial = frame
    pro, norm, rad = np.clip(np.asarray(intent, dtype=np.float64), -1.0, 1.0)
    return config.thrust_accel * (pro * prograde + norm * normal + rad * radial)
