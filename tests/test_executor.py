import logging

import numpy as np
import pytest

from orbit_sim import constants as C
from orbit_sim.executor import (
    ManeuverExecutor,
    find_active_maneuver,
    resolve_delta_v,
    select_thrust,
)
from orbit_sim.frames import body_to_inertial
from orbit_sim.sequence import ManeuverNode, ManeuverSequence
from orbit_sim.state import StateVector, create_circular_state


def _sequence(*nodes):
    state = create_circular_state(200e3)
    return ManeuverSequence(
        version=1, name="exec test",
        position=tuple(state.r), velocity=tuple(state.v),
        maneuvers=tuple(nodes), total_duration=1000.0,
    )


@pytest.fixture
def leo():
    return create_circular_state(200e3)


@pytest.fixture
def executor():
    return ManeuverExecutor(_sequence(
        ManeuverNode("prograde", 100.0, 50.0, (500.0, 0.0, 0.0)),
        ManeuverNode("normal", 300.0, 10.0, (0.0, 20.0, 0.0)),
        ManeuverNode("radial", 500.0, 4.0, (0.0, 0.0, -8.0)),
    ))


def test_idle_outside_windows(executor, leo):
    cmd = executor.get_thrust_at_time(50.0, leo)
    assert cmd['active'] is False
    assert cmd['maneuver_id'] is None
    assert cmd['orientation'] is None
    np.testing.assert_array_equal(cmd['thrust'], np.zeros(3))
    assert not executor.is_active


def test_prograde_thrust(executor, leo):
    cmd = executor.get_thrust_at_time(120.0, leo)
    assert cmd['active'] is True
    assert cmd['maneuver_id'] == "prograde"
    # 500 m/s over 50 s along velocity (-Z at this state)
    np.testing.assert_allclose(cmd['thrust'], [0.0, 0.0, -10.0], atol=1e-12)
    assert executor.active_maneuver.id == "prograde"


def test_normal_and_radial_thrust(executor, leo):
    normal = executor.get_thrust_at_time(305.0, leo)
    np.testing.assert_allclose(normal['thrust'], [0.0, 2.0, 0.0], atol=1e-12)
    radial = executor.get_thrust_at_time(501.0, leo)
    np.testing.assert_allclose(radial['thrust'], [-2.0, 0.0, 0.0], atol=1e-12)


def test_orientation_faces_prograde(executor, leo):
    cmd = executor.get_thrust_at_time(120.0, leo)
    assert np.linalg.norm(cmd['orientation']) == pytest.approx(1.0)
    nose = body_to_inertial(np.array([0.0, 0.0, -1.0]), cmd['orientation'])
    np.testing.assert_allclose(nose, leo.v / np.linalg.norm(leo.v), atol=1e-12)


def test_state_not_mutated(executor, leo):
    r0, v0 = leo.r.copy(), leo.v.copy()
    executor.get_thrust_at_time(120.0, leo)
    np.testing.assert_array_equal(leo.r, r0)
    np.testing.assert_array_equal(leo.v, v0)


def test_window_end_exclusive(executor, leo):
    assert executor.get_thrust_at_time(150.0, leo)['active'] is False
    assert executor.get_thrust_at_time(100.0, leo)['active'] is True


def test_overlap_first_in_list_wins(leo):
    executor = ManeuverExecutor(_sequence(
        ManeuverNode("late-start", 20.0, 100.0, (10.0, 0.0, 0.0)),
        ManeuverNode("early-start", 0.0, 100.0, (-10.0, 0.0, 0.0)),
    ))
    assert executor.get_thrust_at_time(50.0, leo)['maneuver_id'] == "late-start"
    assert executor.get_thrust_at_time(10.0, leo)['maneuver_id'] == "early-start"


def test_low_speed_keeps_active_with_zero_thrust(executor):
    slow = StateVector(r=[C.R_EARTH + 200e3, 0.0, 0.0], v=[0.0, 0.0, 0.001])
    cmd = executor.get_thrust_at_time(120.0, slow)
    assert cmd['active'] is True
    assert cmd['maneuver_id'] == "prograde"
    assert cmd['orientation'] is None
    np.testing.assert_array_equal(cmd['thrust'], np.zeros(3))


def test_no_sequence_is_idle(leo):
    executor = ManeuverExecutor()
    assert executor.sequence is None
    assert executor.get_thrust_at_time(0.0, leo)['active'] is False


def test_load_resets_active(executor, leo):
    executor.get_thrust_at_time(120.0, leo)
    assert executor.is_active
    executor.load_sequence(_sequence())
    assert executor.active_maneuver is None
    executor.clear()
    assert executor.sequence is None


def test_transitions_logged(executor, leo, caplog):
    with caplog.at_level(logging.INFO, logger="orbit_sim.executor"):
        executor.get_thrust_at_time(120.0, leo)
        executor.get_thrust_at_time(200.0, leo)
    assert "'prograde' active" in caplog.text
    assert "'prograde' complete" in caplog.text


def test_find_active_maneuver():
    seq = _sequence(ManeuverNode("a", 0.0, 10.0, (1.0, 0.0, 0.0)))
    assert find_active_maneuver(seq, 5.0).id == "a"
    assert find_active_maneuver(seq, 10.0) is None


def test_resolve_delta_v_delivers_total(leo):
    node = ManeuverNode("n", 0.0, 20.0, (30.0, 40.0, 0.0))
    thrust = resolve_delta_v(node, leo.r, leo.v)
    assert np.linalg.norm(thrust) * node.duration == pytest.approx(50.0)


def test_select_thrust():
    manual = np.array([1.0, 2.0, 3.0])
    scripted = {'thrust': np.array([0.0, 0.0, -5.0]), 'orientation': None,
                'active': True, 'maneuver_id': 'x'}
    idle = {'thrust': np.zeros(3), 'orientation': None, 'active': False, 'maneuver_id': None}
    np.testing.assert_array_equal(select_thrust(manual, scripted), [0.0, 0.0, -5.0])
    np.testing.assert_array_equal(select_thrust(manual, idle), manual)
    np.testing.assert_array_equal(select_thrust(None, None), np.zeros(3))


def test_manual_thrust_vector(leo):
    from orbit_sim.config import create_test_config
    from orbit_sim.executor import manual_thrust_vector

    config = create_test_config(thrust_accel=4.0)
    np.testing.assert_allclose(manual_thrust_vector([1.0, 0.0, 0.0], leo, config),
                               [0.0, 0.0, -4.0], atol=1e-12)
    # Inputs beyond full scale are clipped
    np.testing.assert_allclose(manual_thrust_vector([0.0, 3.0, 0.0], leo, config),
                               [0.0, 4.0, 0.0], atol=1e-12)
    slow = StateVector(r=leo.r, v=[0.0, 0.0, 1e-4])
    np.testing.assert_array_equal(manual_thrust_vector([1.0, 0.0, 0.0], slow, config),
                                  np.zeros(3))
