import numpy as np
import pytest

from orbit_sim import constants as C
from orbit_sim import frames


def test_quaternion_normalize():
    q = frames.quaternion_normalize(np.array([2.0, 0.0, 0.0, 0.0]))
    np.testing.assert_allclose(q, [1.0, 0.0, 0.0, 0.0])


def test_body_to_inertial_rotation():
    # Body +X onto inertial +Y: 90 degrees about +Z
    R = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
    q = frames.rotation_matrix_to_quaternion(R)
    np.testing.assert_allclose(q, [np.sqrt(0.5), 0.0, 0.0, np.sqrt(0.5)], atol=1e-12)
    rotated = frames.body_to_inertial(np.array([1.0, 0.0, 0.0]), q)
    np.testing.assert_allclose(rotated, [0.0, 1.0, 0.0], atol=1e-12)


def test_matrix_quaternion_round_trip():
    q = frames.quaternion_normalize(np.array([0.3, -0.5, 0.2, 0.7]))
    R = frames.quaternion_to_rotation_matrix(q)
    q2 = frames.rotation_matrix_to_quaternion(R)
    np.testing.assert_allclose(q2, q, atol=1e-12)
    np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)


def test_look_rotation_points_nose_forward():
    forward = np.array([0.0, 0.0, -7800.0])
    q = frames.look_rotation_quaternion(forward)
    nose = frames.body_to_inertial(np.array([0.0, 0.0, -1.0]), q)
    np.testing.assert_allclose(nose, [0.0, 0.0, -1.0], atol=1e-12)
    up = frames.body_to_inertial(np.array([0.0, 1.0, 0.0]), q)
    np.testing.assert_allclose(up, C.POLAR_AXIS, atol=1e-12)


def test_look_rotation_parallel_to_up():
    q = frames.look_rotation_quaternion(np.array([0.0, 5.0, 0.0]))
    assert np.linalg.norm(q) == pytest.approx(1.0)
    nose = frames.body_to_inertial(np.array([0.0, 0.0, -1.0]), q)
    np.testing.assert_allclose(nose, [0.0, 1.0, 0.0], atol=1e-12)


def test_look_rotation_zero_forward_is_identity():
    q = frames.look_rotation_quaternion(np.zeros(3))
    np.testing.assert_array_equal(q, [1.0, 0.0, 0.0, 0.0])


def test_local_frame_equatorial():
    r = np.array([7e6, 0.0, 0.0])
    v = np.array([0.0, 0.0, -7500.0])
    prograde, normal, radial = frames.local_orbital_frame(r, v)
    np.testing.assert_allclose(prograde, [0.0, 0.0, -1.0], atol=1e-12)
    np.testing.assert_allclose(normal, [0.0, 1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(radial, [1.0, 0.0, 0.0], atol=1e-12)


def test_local_frame_orthonormal_for_eccentric_state():
    r = np.array([7e6, 1e6, -2e5])
    v = np.array([1500.0, 300.0, -7000.0])
    basis = np.array(frames.local_orbital_frame(r, v))
    np.testing.assert_allclose(basis @ basis.T, np.eye(3), atol=1e-12)


def test_local_frame_radial_motion_fallback():
    r = np.array([7e6, 0.0, 0.0])
    v = np.array([100.0, 0.0, 0.0])
    prograde, normal, radial = frames.local_orbital_frame(r, v)
    assert np.all(np.isfinite(normal))
    assert abs(np.dot(normal, prograde)) < 1e-12
    assert np.linalg.norm(radial) == pytest.approx(1.0)


def test_local_frame_undefined_at_low_speed():
    assert frames.local_orbital_frame(np.array([7e6, 0.0, 0.0]), np.array([0.0, 0.0, 1e-3])) is None


def test_z_up_relabelling_inverse():
    vec = np.array([1.0, 2.0, 3.0])
    np.testing.assert_array_equal(frames.to_z_up(vec), [1.0, -3.0, 2.0])
    np.testing.assert_array_equal(frames.from_z_up(frames.to_z_up(vec)), vec)
