"""
Orbit Simulation - Preset Maneuver Sequences

Ready-made sequences starting from a circular equatorial LEO.
"""

from typing import Callable, Dict, Optional

from . import constants as C
from .elements import orbital_period
from .maneuver import bielliptic_transfer, hohmann_transfer
from .sequence import ManeuverNode, ManeuverSequence
from .state import create_circular_state

R_LEO = C.R_EARTH + C.LEO_ALTITUDE
R_GEO = C.R_EARTH + C.GEO_ALTITUDE


def _leo_sequence(name: str, maneuvers, total_duration: float) -> ManeuverSequence:
    state = create_circular_state(C.LEO_ALTITUDE)
    return ManeuverSequence(
        version=1,
        name=name,
        position=tuple(float(x) for x in state.r),
        velocity=tuple(float(x) for x in state.v),
        maneuvers=tuple(maneuvers),
        total_duration=total_duration,
    )


def leo_circular_preset() -> ManeuverSequence:
    """LEO 200 km circular orbit, no maneuvers, two orbital periods."""
    return _leo_sequence('LEO 200km Circular', [], orbital_period(R_LEO) * 2)


def hohmann_leo_geo_preset() -> ManeuverSequence:
    """
    Hohmann transfer from LEO (200 km) to GEO.

    First burn at T=300 s; second burn half a transfer period later.
    """
    transfer = hohmann_transfer(R_LEO, R_GEO)

    burn_start1 = C.PRESET_BURN_START
    burn_start2 = burn_start1 + transfer.transfer_time
    total = burn_start2 + C.PRESET_BURN_DURATION + C.PRESET_OBSERVATION_TIME

    return _leo_sequence('Hohmann LEO → GEO', [
        ManeuverNode(id='burn-1-leo-departure', start_time=burn_start1,
                     duration=C.PRESET_BURN_DURATION,
                     delta_v=(transfer.dv1, 0.0, 0.0)),
        ManeuverNode(id='burn-2-geo-insertion', start_time=burn_start2,
                     duration=C.PRESET_BURN_DURATION,
                     delta_v=(transfer.dv2, 0.0, 0.0)),
    ], total)


def bielliptic_preset(r_intermediate: float = 2.0 * R_GEO) -> ManeuverSequence:
    """Bi-elliptic transfer from LEO to GEO through r_intermediate."""
    transfer = bielliptic_transfer(R_LEO, r_intermediate, R_GEO)
    t1, t2 = transfer.transfer_times

    start1 = C.PRESET_BURN_START
    start2 = start1 + t1
    start3 = start2 + t2
    total = start3 + C.PRESET_BURN_DURATION + C.PRESET_OBSERVATION_TIME

    return _leo_sequence('Bi-elliptic LEO → GEO', [
        ManeuverNode(id='burn-1-leo-departure', start_time=start1,
                     duration=C.PRESET_BURN_DURATION,
                     delta_v=(transfer.dv1, 0.0, 0.0)),
        ManeuverNode(id='burn-2-periapsis-raise', start_time=start2,
                     duration=C.PRESET_BURN_DURATION,
                     delta_v=(transfer.dv2, 0.0, 0.0)),
        ManeuverNode(id='burn-3-geo-insertion', start_time=start3,
                     duration=C.PRESET_BURN_DURATION,
                     delta_v=(transfer.dv3, 0.0, 0.0)),
    ], total)


_PRESETS: Dict[str, Callable[[], ManeuverSequence]] = {
    'leo-circular': leo_circular_preset,
    'hohmann-leo-geo': hohmann_leo_geo_preset,
    'bielliptic-leo-geo': bielliptic_preset,
}

PRESET_NAMES = tuple(_PRESETS)


def get_preset(name: str) -> Optional[ManeuverSequence]:
    """Build a preset by name; None for unknown names."""
    builder = _PRESETS.get(name)
    if builder is None:
        return None
    return builder()
