import numpy as np
import pytest

from orbit_sim import constants as C
from orbit_sim.elements import orbital_period, state_to_elements
from orbit_sim.maneuver import hohmann_transfer
from orbit_sim.presets import (
    PRESET_NAMES,
    R_GEO,
    R_LEO,
    bielliptic_preset,
    get_preset,
    hohmann_leo_geo_preset,
    leo_circular_preset,
)
from orbit_sim.sequence import validate_sequence


@pytest.mark.parametrize("name", PRESET_NAMES)
def test_presets_pass_validation(name):
    seq = get_preset(name)
    assert validate_sequence(seq) == seq


def test_unknown_preset():
    assert get_preset("mars-direct") is None


def test_leo_circular():
    seq = leo_circular_preset()
    assert seq.maneuvers == ()
    assert seq.total_duration == pytest.approx(2 * orbital_period(R_LEO))
    el = state_to_elements(seq.initial_state)
    assert el.eccentricity < 1e-9
    assert el.semi_major_axis == pytest.approx(R_LEO)


def test_hohmann_preset_schedule():
    seq = hohmann_leo_geo_preset()
    transfer = hohmann_transfer(R_LEO, R_GEO)
    first, second = seq.maneuvers
    assert first.id == 'burn-1-leo-departure'
    assert second.id == 'burn-2-geo-insertion'
    assert first.start_time == C.PRESET_BURN_START
    assert first.duration == C.PRESET_BURN_DURATION
    assert second.start_time == pytest.approx(first.start_time + transfer.transfer_time)
    assert first.delta_v == (transfer.dv1, 0.0, 0.0)
    assert seq.total_duration == pytest.approx(
        second.start_time + C.PRESET_BURN_DURATION + C.PRESET_OBSERVATION_TIME)


def test_bielliptic_preset_schedule():
    seq = bielliptic_preset()
    assert len(seq.maneuvers) == 3
    starts = [m.start_time for m in seq.maneuvers]
    assert starts == sorted(starts)
    assert seq.maneuvers[2].delta_v[0] < 0


def test_presets_start_in_leo():
    np.testing.assert_allclose(np.linalg.norm(get_preset('hohmann-leo-geo').position), R_LEO)


def test_bielliptic_burn_ids():
    ids = [m.id for m in bielliptic_preset().maneuvers]
    assert ids == ['burn-1-leo-departure', 'burn-2-periapsis-raise', 'burn-3-geo-insertion']
