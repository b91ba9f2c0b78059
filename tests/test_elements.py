import math

import numpy as np
import pytest

from orbit_sim import constants as C
from orbit_sim.elements import (
    OrbitalElements,
    angular_momentum,
    elements_to_state,
    orbital_period,
    specific_energy,
    state_to_elements,
)
from orbit_sim.state import StateVector, create_circular_state


def test_circular_equatorial_elements():
    r = C.R_EARTH + 400e3
    state = StateVector(r=[r, 0.0, 0.0], v=[0.0, 0.0, -np.sqrt(C.MU_EARTH / r)])
    el = state_to_elements(state)
    assert el.semi_major_axis == pytest.approx(r, rel=1e-6)
    assert el.eccentricity < 1e-6
    assert el.inclination < 1e-6
    # Degenerate angles fall back to zero
    assert el.raan == 0.0
    assert el.argument_of_periapsis == 0.0


def test_state_not_mutated():
    state = create_circular_state(200e3)
    r0 = state.r.copy()
    state_to_elements(state)
    np.testing.assert_array_equal(state.r, r0)


def test_inclined_orbit():
    state = create_circular_state(500e3, inclination=np.radians(30.0))
    el = state_to_elements(state)
    assert el.inclination == pytest.approx(np.radians(30.0))
    # Ascending node on +X
    assert el.raan == pytest.approx(0.0, abs=1e-9)


def test_polar_orbit_inclination():
    state = create_circular_state(500e3, inclination=np.pi / 2)
    assert state_to_elements(state).inclination == pytest.approx(np.pi / 2)


def test_retrograde_orbit_inclination():
    r = C.R_EARTH + 500e3
    state = StateVector(r=[r, 0.0, 0.0], v=[0.0, 0.0, np.sqrt(C.MU_EARTH / r)])
    assert state_to_elements(state).inclination == pytest.approx(np.pi)


def test_eccentric_orbit_at_periapsis():
    rp = C.R_EARTH + 300e3
    ra = C.R_EARTH + 3000e3
    a = (rp + ra) / 2
    vp = np.sqrt(C.MU_EARTH * (2 / rp - 1 / a))
    el = state_to_elements(StateVector(r=[rp, 0.0, 0.0], v=[0.0, 0.0, -vp]))
    assert el.semi_major_axis == pytest.approx(a)
    assert el.eccentricity == pytest.approx((ra - rp) / (ra + rp))
    assert el.true_anomaly == pytest.approx(0.0, abs=1e-6)
    assert el.periapsis_radius == pytest.approx(rp)
    assert el.apoapsis_radius == pytest.approx(ra)
    assert el.is_bound


def test_true_anomaly_past_apoapsis():
    """Inbound motion (r . v < 0) places the true anomaly past pi."""
    el = OrbitalElements(semi_major_axis=9e6, eccentricity=0.2,
                         inclination=0.4, raan=1.0,
                         argument_of_periapsis=2.0, true_anomaly=4.5)
    state = elements_to_state(el)
    assert np.dot(state.r, state.v) < 0
    back = state_to_elements(state)
    assert back.true_anomaly == pytest.approx(4.5)
    assert back.raan == pytest.approx(1.0)
    assert back.argument_of_periapsis == pytest.approx(2.0)
    assert back.inclination == pytest.approx(0.4)
    assert back.semi_major_axis == pytest.approx(9e6)


def test_hyperbolic_state():
    r = C.R_EARTH + 500e3
    v_escape = np.sqrt(2 * C.MU_EARTH / r)
    el = state_to_elements(StateVector(r=[r, 0.0, 0.0], v=[0.0, 0.0, -1.2 * v_escape]))
    assert math.isinf(el.semi_major_axis)
    assert el.eccentricity > 1.0
    assert not el.is_bound
    assert math.isinf(el.apoapsis_radius)
    assert math.isinf(el.period)
    assert el.periapsis_radius == pytest.approx(r)


def test_hyperbolic_elements_to_state():
    r = C.R_EARTH + 500e3
    v_escape = np.sqrt(2 * C.MU_EARTH / r)
    state = StateVector(r=[r, 0.0, 0.0], v=[0.0, 0.0, -1.2 * v_escape])
    rebuilt = elements_to_state(state_to_elements(state))
    np.testing.assert_allclose(rebuilt.r, state.r, rtol=1e-9, atol=1e-3)
    np.testing.assert_allclose(rebuilt.v, state.v, rtol=1e-9, atol=1e-6)


def test_elements_to_state_rejects_invalid():
    with pytest.raises(ValueError):
        elements_to_state(OrbitalElements(semi_major_axis=math.inf, eccentricity=1.0))
    with pytest.raises(ValueError):
        # Beyond the asymptote of a hyperbola
        elements_to_state(OrbitalElements(semi_major_axis=math.inf, eccentricity=2.0,
                                          true_anomaly=np.pi, semi_latus_rectum=1e7))


def test_zero_angular_momentum_guard():
    el = state_to_elements(StateVector(r=[7e6, 0.0, 0.0], v=[1000.0, 0.0, 0.0]))
    assert el.inclination == 0.0
    assert el.raan == 0.0
    for value in el.to_dict().values():
        assert not math.isnan(value)


def test_origin_guard():
    el = state_to_elements(StateVector(r=np.zeros(3), v=[0.0, 0.0, 1.0]))
    assert el.semi_major_axis == 0.0
    assert el.eccentricity == 0.0


def test_orbital_period_leo():
    assert orbital_period(C.R_EARTH + 200e3) == pytest.approx(5301.0, rel=1e-3)


def test_to_dict_keys():
    el = state_to_elements(create_circular_state())
    assert set(el.to_dict()) == {
        'semiMajorAxis', 'eccentricity', 'inclination',
        'raan', 'argumentOfPeriapsis', 'trueAnomaly'}


def test_energy_and_angular_momentum():
    state = create_circular_state(200e3)
    r = state.radius
    assert specific_energy(state) == pytest.approx(-C.MU_EARTH / (2 * r))
    np.testing.assert_allclose(angular_momentum(state),
                               [0.0, r * np.sqrt(C.MU_EARTH / r), 0.0], atol=1e-3)


def test_period_uses_central_body_mu():
    mu_moon = 4.9048695e12
    r = 1.7374e6 + 100e3
    state = StateVector(r=[r, 0.0, 0.0], v=[0.0, 0.0, -np.sqrt(mu_moon / r)])
    el = state_to_elements(state, mu_moon)
    assert el.mu == mu_moon
    assert el.period == pytest.approx(orbital_period(r, mu_moon))
    assert el.period == pytest.approx(7066.0, rel=1e-3)


def test_elements_to_state_uses_carried_mu():
    mu_moon = 4.9048695e12
    el = OrbitalElements(semi_major_axis=2e6, eccentricity=0.1, true_anomaly=0.5, mu=mu_moon)
    state = elements_to_state(el)
    assert state_to_elements(state, mu_moon).semi_major_axis == pytest.approx(2e6)
