"""
Orbit Simulation - Maneuver Sequence Documents

Data model, validation and (de)serialization for scripted maneuver
sequences. The wire format is a JSON object:

    {
      "version": <number>,
      "name": <non-empty string>,
      "initialState": {"position": [x, y, z], "velocity": [vx, vy, vz]},
      "maneuvers": [
        {"id": <string>, "startTime": <number>, "duration": <number>,
         "deltaV": [prograde, normal, radial]}
      ],
      "totalDuration": <number>
    }

Validation is all-or-nothing: any single violation rejects the whole
document, and rejection is signalled by returning None, never by raising.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from .state import StateVector

logger = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]


class SequenceError(ValueError):
    """Raised internally when a sequence document fails a check."""
    pass


@dataclass(frozen=True)
class ManeuverNode:
    """
    A single scripted burn.

    Attributes:
        id: Non-empty label
        start_time: Seconds from sequence start (>= 0)
        duration: Burn length in seconds (>= 0)
        delta_v: (prograde, normal, radial) components (m/s)
    """
    id: str
    start_time: float
    duration: float
    delta_v: Vector3

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def is_active_at(self, sim_time: float) -> bool:
        """start_time <= t < start_time + duration (never for zero duration)."""
        return self.start_time <= sim_time < self.end_time


@dataclass(frozen=True)
class ManeuverSequence:
    """
    A validated, immutable maneuver plan.

    Maneuvers keep document order; they need not be sorted by start time.
    Replace a sequence wholesale rather than editing it.
    """
    version: float
    name: str
    position: Vector3
    velocity: Vector3
    maneuvers: Tuple[ManeuverNode, ...] = field(default_factory=tuple)
    total_duration: float = 0.0

    @property
    def initial_state(self) -> StateVector:
        """Fresh StateVector at t = 0 (callers may adopt it freely)."""
        return StateVector.from_lists(self.position, self.velocity, t=0.0)


# =============================================================================
# VALIDATION
# =============================================================================

def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass but JSON true/false are not numbers
    if not isinstance(value, Real) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # JSON integers too large for a float
        return False


def _check_number(value: Any, label: str, minimum: Optional[float] = None) -> float:
    if not _is_finite_number(value):
        if isinstance(value, int) and not isinstance(value, bool):
            raise SequenceError(f"{label} must be a finite number, got an out-of-range integer")
        raise SequenceError(f"{label} must be a finite number, got {value!r}")
    if minimum is not None and value < minimum:
        raise SequenceError(f"{label} must be >= {minimum}, got {value!r}")
    return value


def _check_string(value: Any, label: str) -> str:
    if not isinstance(value, str) or len(value) == 0:
        raise SequenceError(f"{label} must be a non-empty string")
    return value


def _check_vector3(value: Any, label: str) -> Vector3:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise SequenceError(f"{label} must be a list of exactly 3 numbers")
    for i, component in enumerate(value):
        _check_number(component, f"{label}[{i}]")
    return (value[0], value[1], value[2])


def _check_maneuver(entry: Any, index: int) -> ManeuverNode:
    if not isinstance(entry, dict):
        raise SequenceError(f"maneuvers[{index}] must be an object")
    label = f"maneuvers[{index}]"
    return ManeuverNode(
        id=_check_string(entry.get('id'), f"{label}.id"),
        start_time=_check_number(entry.get('startTime'), f"{label}.startTime", 0.0),
        duration=_check_number(entry.get('duration'), f"{label}.duration", 0.0),
        delta_v=_check_vector3(entry.get('deltaV'), f"{label}.deltaV"),
    )


def parse_sequence(document: Any) -> ManeuverSequence:
    """
    Validate a decoded document and build a ManeuverSequence.

    Raises:
        SequenceError: On the first failed check
    """
    if not isinstance(document, dict):
        raise SequenceError("Sequence document must be an object")

    version = _check_number(document.get('version'), "version")
    name = _check_string(document.get('name'), "name")

    initial = document.get('initialState')
    if not isinstance(initial, dict):
        raise SequenceError("initialState must be an object")

    maneuvers = document.get('maneuvers')
    if not isinstance(maneuvers, list):
        raise SequenceError("maneuvers must be a list")

    total_duration = _check_number(document.get('totalDuration'), "totalDuration", 0.0)

    position = _check_vector3(initial.get('position'), "initialState.position")
    velocity = _check_vector3(initial.get('velocity'), "initialState.velocity")

    nodes = tuple(_check_maneuver(entry, i) for i, entry in enumerate(maneuvers))

    return ManeuverSequence(
        version=version,
        name=name,
        position=position,
        velocity=velocity,
        maneuvers=nodes,
        total_duration=total_duration,
    )


def validate_sequence(document: Any) -> Optional[ManeuverSequence]:
    """
    Validate an externally supplied maneuver-sequence document.

    Args:
        document: Decoded JSON (dict) or an already-built ManeuverSequence

    Returns:
        The validated ManeuverSequence, or None if the document is rejected
    """
    if isinstance(document, ManeuverSequence):
        document = serialize_sequence(document)
    try:
        return parse_sequence(document)
    except SequenceError as e:
        logger.warning(f"Rejected maneuver sequence: {e}")
        return None


# =============================================================================
# SERIALIZATION
# =============================================================================

def serialize_sequence(sequence: ManeuverSequence) -> dict:
    """Convert a sequence to its document (plain dict) form."""
    return {
        'version': sequence.version,
        'name': sequence.name,
        'initialState': {
            'position': list(sequence.position),
            'velocity': list(sequence.velocity),
        },
        'maneuvers': [
            {
                'id': node.id,
                'startTime': node.start_time,
                'duration': node.duration,
                'deltaV': list(node.delta_v),
            }
            for node in sequence.maneuvers
        ],
        'totalDuration': sequence.total_duration,
    }


def sequence_to_json(sequence: ManeuverSequence) -> str:
    """Serialize a sequence as indented JSON text."""
    return json.dumps(serialize_sequence(sequence), indent=2)


def parse_sequence_json(text: str) -> Optional[ManeuverSequence]:
    """
    Decode and validate JSON text.

    Returns:
        ManeuverSequence, or None for invalid JSON or a rejected document
    """
    try:
        # NaN/Infinity literals decode to non-finite floats and are rejected
        document = json.loads(text)
    except ValueError as e:
        # JSONDecodeError, or an integer literal past the digit limit
        logger.warning(f"Rejected maneuver sequence: invalid JSON ({e})")
        return None
    return validate_sequence(document)


def load_sequence_file(path: Union[str, Path]) -> Optional[ManeuverSequence]:
    """
    Read and validate a sequence document from disk.

    Returns:
        ManeuverSequence, or None when the file is not UTF-8 text or the
        document is rejected

    Raises:
        OSError: If the file cannot be read
    """
    try:
        text = Path(path).read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        logger.warning(f"Rejected maneuver sequence: {path} is not UTF-8 text ({e})")
        return None
    return parse_sequence_json(text)


def save_sequence_file(sequence: ManeuverSequence, path: Union[str, Path]) -> Path:
    """Write a sequence document to disk and return the path."""
    path = Path(path)
    path.write_text(sequence_to_json(sequence) + "\n", encoding='utf-8')
    return path
