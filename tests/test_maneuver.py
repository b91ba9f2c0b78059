import math

import pytest

from orbit_sim import constants as C
from orbit_sim.maneuver import (
    BiellipticTransfer,
    HohmannTransfer,
    bielliptic_transfer,
    circular_velocity,
    compare_transfers,
    hohmann_transfer,
    vis_viva_speed,
)

R_LEO = C.R_EARTH + 200e3
R_GEO = C.R_EARTH + 35786e3


def test_hohmann_leo_to_geo():
    result = hohmann_transfer(R_LEO, R_GEO)
    assert isinstance(result, HohmannTransfer)
    assert 2300 < result.dv1 < 2600
    assert 1400 < result.dv2 < 1700
    assert 16000 < result.transfer_time < 22000
    assert result.total_delta_v == pytest.approx(result.dv1 + result.dv2)


def test_hohmann_same_radius_is_free():
    result = hohmann_transfer(R_LEO, R_LEO)
    assert abs(result.dv1) < 1e-9
    assert abs(result.dv2) < 1e-9


def test_hohmann_lowering_is_exact_negation():
    raise_ = hohmann_transfer(R_LEO, R_GEO)
    lower = hohmann_transfer(R_GEO, R_LEO)
    assert lower.dv1 == -raise_.dv2
    assert lower.dv2 == -raise_.dv1
    assert lower.transfer_time == raise_.transfer_time
    assert lower.dv1 < 0 and lower.dv2 < 0


@pytest.mark.parametrize("r1,r2", [
    (C.R_EARTH + 200e3, C.R_EARTH + 400e3),
    (C.R_EARTH + 35786e3, C.R_EARTH + 200e3),
    (7e6, 4.2e8),
])
def test_transfer_time_non_negative(r1, r2):
    assert hohmann_transfer(r1, r2).transfer_time >= 0
    for t in bielliptic_transfer(r1, 2 * max(r1, r2), r2).transfer_times:
        assert t >= 0


def test_invalid_radii_rejected():
    with pytest.raises(ValueError):
        hohmann_transfer(0.0, R_GEO)
    with pytest.raises(ValueError):
        hohmann_transfer(R_LEO, -1.0)
    with pytest.raises(ValueError):
        bielliptic_transfer(R_LEO, math.inf, R_GEO)


def test_bielliptic_leo_to_geo():
    result = bielliptic_transfer(R_LEO, 2 * R_GEO, R_GEO)
    assert isinstance(result, BiellipticTransfer)
    assert result.dv1 > 0
    assert result.dv2 > 0
    # Falling from the intermediate radius onto GEO needs a retrograde burn
    assert result.dv3 < 0
    assert result.total_time == pytest.approx(sum(result.transfer_times))
    hohmann = hohmann_transfer(R_LEO, R_GEO)
    assert result.total_time > hohmann.transfer_time


def test_bielliptic_through_target_equals_hohmann():
    hohmann = hohmann_transfer(R_LEO, R_GEO)
    bielliptic = bielliptic_transfer(R_LEO, R_GEO, R_GEO)
    assert bielliptic.dv1 == pytest.approx(hohmann.dv1)
    assert bielliptic.dv2 == pytest.approx(hohmann.dv2)
    assert bielliptic.dv3 == pytest.approx(0.0, abs=1e-9)


def test_compare_transfers_large_ratio_prefers_bielliptic():
    # Radius ratio above ~15.58 with a distant intermediate radius
    r1 = 7e6
    r2 = 20 * r1
    result = compare_transfers(r1, r2, 100 * r1)
    assert result['best'] == 'bielliptic'
    assert result['savings'] > 0


def test_compare_transfers_leo_geo_prefers_hohmann():
    result = compare_transfers(R_LEO, R_GEO, 2 * R_GEO)
    assert result['best'] == 'hohmann'


def test_speed_helpers():
    assert circular_velocity(R_LEO) == pytest.approx(math.sqrt(C.MU_EARTH / R_LEO))
    assert vis_viva_speed(R_LEO, R_LEO) == pytest.approx(circular_velocity(R_LEO))
