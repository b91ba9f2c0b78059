"""
Orbit Simulation - Reference Frame Transformations

This module implements quaternion operations, the local orbital frame
(prograde / orbit-normal / radial) and the attitude helpers used by the
maneuver executor and by external manual-control code.

Quaternion Convention: [w, x, y, z] where w is the scalar component.
Body convention: the spacecraft nose is body -Z, body +Y is "up".
"""

from typing import Optional, Tuple

import numpy as np

from . import constants as C


def quaternion_normalize(q: np.ndarray) -> np.ndarray:
    """
    Normalize a quaternion to unit length.

    Args:
        q: Quaternion [w, x, y, z]

    Returns:
        Normalized quaternion (identity if the input is degenerate)
    """
    norm = np.linalg.norm(q)
    if norm < C.ZERO_TOLERANCE:
        return np.array([1.0, 0.0, 0.0, 0.0])
    return np.asarray(q, dtype=np.float64) / norm


def quaternion_to_rotation_matrix(q: np.ndarray) -> np.ndarray:
    """
    Convert a quaternion to a rotation matrix R(q).

    The rotation matrix transforms vectors from body frame to inertial frame:
    v_inertial = R(q) @ v_body
    """
    w, x, y, z = quaternion_normalize(q)

    xx, yy, zz = x*x, y*y, z*z
    xy, xz, yz = x*y, x*z, y*z
    wx, wy, wz = w*x, w*y, w*z

    return np.array([
        [1 - 2*(yy + zz),     2*(xy - wz),     2*(xz + wy)],
        [    2*(xy + wz), 1 - 2*(xx + zz),     2*(yz - wx)],
        [    2*(xz - wy),     2*(yz + wx), 1 - 2*(xx + yy)]
    ])


def rotation_matrix_to_quaternion(R: np.ndarray) -> np.ndarray:
    """
    Convert a rotation matrix to a quaternion.
    Uses Shepperd's method for numerical stability.
    """
    trace = np.trace(R)

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (R[2, 1] - R[1, 2]) * s
        y = (R[0, 2] - R[2, 0]) * s
        z = (R[1, 0] - R[0, 1]) * s
    elif R[0, 0] > R[1, 1] and R[0, 0] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[0, 0] - R[1, 1] - R[2, 2])
        w = (R[2, 1] - R[1, 2]) / s
        x = 0.25 * s
        y = (R[0, 1] + R[1, 0]) / s
        z = (R[0, 2] + R[2, 0]) / s
    elif R[1, 1] > R[2, 2]:
        s = 2.0 * np.sqrt(1.0 + R[1, 1] - R[0, 0] - R[2, 2])
        w = (R[0, 2] - R[2, 0]) / s
        x = (R[0, 1] + R[1, 0]) / s
        y = 0.25 * s
        z = (R[1, 2] + R[2, 1]) / s
    else:
        s = 2.0 * np.sqrt(1.0 + R[2, 2] - R[0, 0] - R[1, 1])
        w = (R[1, 0] - R[0, 1]) / s
        x = (R[0, 2] + R[2, 0]) / s
        y = (R[1, 2] + R[2, 1]) / s
        z = 0.25 * s

    q = np.array([w, x, y, z])
    # Keep the scalar part non-negative so equal rotations compare equal
    if q[0] < 0:
        q = -q
    return quaternion_normalize(q)


def body_to_inertial(vector: np.ndarray, q: np.ndarray) -> np.ndarray:
    """
    Resolve a body-frame vector (e.g. manual thrust) in the inertial frame.

    Args:
        vector: Body-frame vector [3]
        q: Attitude quaternion [w, x, y, z] (body -> inertial)

    Returns:
        Inertial-frame vector [3]
    """
    return quaternion_to_rotation_matrix(q) @ np.asarray(vector, dtype=np.float64)


def look_rotation_quaternion(forward: np.ndarray,
                             up: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Attitude whose body -Z axis (nose) points along `forward`.

    Body +Y is kept as close to `up` as possible (default: the polar axis).
    When `forward` is (anti)parallel to `up`, inertial +X is used as the
    up reference instead.

    Args:
        forward: Desired nose direction in the inertial frame
        up: Preferred up direction in the inertial frame

    Returns:
        Unit quaternion [w, x, y, z]
    """
    if up is None:
        up = C.POLAR_AXIS
    f_norm = np.linalg.norm(forward)
    if f_norm < C.ZERO_TOLERANCE:
        return np.array([1.0, 0.0, 0.0, 0.0])

    z_axis = -np.asarray(forward, dtype=np.float64) / f_norm
    up_hat = np.asarray(up, dtype=np.float64) / np.linalg.norm(up)
    if abs(np.dot(z_axis, up_hat)) > C.PARALLEL_TOLERANCE:
        up_hat = np.array([1.0, 0.0, 0.0])
        if abs(np.dot(z_axis, up_hat)) > C.PARALLEL_TOLERANCE:
            up_hat = np.array([0.0, 0.0, 1.0])

    x_axis = np.cross(up_hat, z_axis)
    x_axis /= np.linalg.norm(x_axis)
    y_axis = np.cross(z_axis, x_axis)

    R = np.column_stack([x_axis, y_axis, z_axis])
    return rotation_matrix_to_quaternion(R)


def local_orbital_frame(r: np.ndarray, v: np.ndarray
                        ) -> Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]]:
    """
    Instantaneous orthonormal (prograde, normal, radial) frame.

    prograde = v_hat
    normal   = (r_hat x prograde) normalized (orbit-normal, along h)
    radial   = prograde x normal (outward, re-orthogonalized)

    For purely radial motion the orbit normal is undefined; a normal
    perpendicular to both prograde and the polar axis is used instead.

    Returns:
        (prograde, normal, radial) unit vectors, or None when the speed is
        below MANEUVER_MIN_SPEED or the position is degenerate.
    """
    speed = np.linalg.norm(v)
    r_norm = np.linalg.norm(r)
    if speed < C.MANEUVER_MIN_SPEED or r_norm < C.ZERO_TOLERANCE:
        return None

    prograde = v / speed
    normal = np.cross(r / r_norm, prograde)
    n_norm = np.linalg.norm(normal)
    if n_norm < C.ZERO_TOLERANCE:
        normal = np.cross(prograde, C.POLAR_AXIS)
        n_norm = np.linalg.norm(normal)
        if n_norm < C.ZERO_TOLERANCE:
            normal = np.cross(prograde, np.array([1.0, 0.0, 0.0]))
            n_norm = np.linalg.norm(normal)
    normal = normal / n_norm

    radial = np.cross(prograde, normal)
    radial /= np.linalg.norm(radial)
    return prograde, normal, radial


# =============================================================================
# POLAR-AXIS RELABELLING
# The inertial frame is Y-up. The textbook Z-up frame (x', y', z') is the
# right-handed relabelling x' = X, y' = -Z, z' = Y.
# =============================================================================

def to_z_up(vec: np.ndarray) -> np.ndarray:
    """Express a Y-up inertial vector in the Z-up textbook frame."""
    x, y, z = vec
    return np.array([x, -z, y])


def from_z_up(vec: np.ndarray) -> np.ndarray:
    """Express a Z-up textbook vector in the Y-up inertial frame."""
    x, y, z = vec
    return np.array([x, z, -y])
