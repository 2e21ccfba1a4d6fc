"""
Vector helpers over numpy arrays.

Every function returns a new float64 array of shape (3,) and never
mutates its arguments.
"""

import numpy as np
from scipy.spatial.transform import Rotation

X_AXIS = np.array([1.0, 0.0, 0.0])
Y_AXIS = np.array([0.0, 1.0, 0.0])
Z_AXIS = np.array([0.0, 0.0, 1.0])


def as_vector(v) -> np.ndarray:
    """Copy `v` into a fresh float64 array of shape (3,)."""
    arr = np.array(v, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {arr.shape}")
    return arr


def norm(v) -> float:
    return float(np.linalg.norm(v))


def normalize(v) -> np.ndarray:
    """Unit vector along `v`; a zero vector is returned unchanged."""
    v = as_vector(v)
    length = np.linalg.norm(v)
    if length == 0.0:
        return v
    return v / length


def project_on_plane(v, plane_normal) -> np.ndarray:
    """Remove the component of `v` along `plane_normal`."""
    v = as_vector(v)
    n = normalize(plane_normal)
    return v - np.dot(v, n) * n


def angle_between(u, v) -> float:
    """Unsigned angle in radians, in [0, pi]."""
    denom = np.linalg.norm(u) * np.linalg.norm(v)
    if denom == 0.0:
        return np.pi / 2
    cos_theta = np.clip(np.dot(u, v) / denom, -1.0, 1.0)
    return float(np.arccos(cos_theta))


def axis_angle_rotation(axis, angle: float) -> Rotation:
    """
    Quaternion rotation of `angle` radians about `axis` (right-hand rule).

    A zero axis gives the identity rotation.
    """
    return Rotation.from_rotvec(normalize(axis) * angle)


def rotate(v, axis, angle: float) -> np.ndarray:
    return axis_angle_rotation(axis, angle).apply(as_vector(v))


def perpendicular_unit_vector(v, hint=None) -> np.ndarray:
    """
    Unit vector perpendicular to `v`.

    Uses the part of `hint` orthogonal to `v` when it is non-zero, otherwise
    the first coordinate axis that is not parallel to `v`.
    """
    v = normalize(v)
    if hint is not None:
        candidate = project_on_plane(hint, v)
        if np.linalg.norm(candidate) > 1e-6:
            return normalize(candidate)
    for test_axis in (X_AXIS, Y_AXIS, Z_AXIS):
        if abs(np.dot(test_axis, v)) < 0.999:
            break
    return normalize(test_axis - np.dot(test_axis, v) * v)
