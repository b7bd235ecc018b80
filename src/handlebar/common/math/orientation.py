"""Orientation / rotation helper functions.

All quaternions follow the ``[x, y, z, w]`` convention used by SciPy.  The
helpers never return NaN: zero-length or otherwise degenerate inputs collapse
to the identity rotation.
"""

from __future__ import annotations
from typing import Final, Tuple
import numpy as np
from scipy.spatial.transform import Rotation

from handlebar.common.math.vectorops import normalize_vector, perpendicular_vector

_EPS: Final = 1e-8
_IDENTITY: Final = (0.0, 0.0, 0.0, 1.0)


def identity_quat() -> np.ndarray:
    return np.array(_IDENTITY, dtype=np.float64)

# ---------------------------------------------------------------------------
# Quaternion helpers
# ---------------------------------------------------------------------------

def quat_normalise(q: np.ndarray) -> np.ndarray:
    """Return *unit* quaternion with the same sign as the input.

    No hemisphere enforcement here – use :pyfunc:`quat_positive` if you need a
    unique representative.
    """
    q = np.asarray(q, dtype=np.float64)
    n = np.linalg.norm(q)
    if n < _EPS:
        # treat as identity rotation
        return identity_quat()
    return q / n


def quat_positive(q: np.ndarray) -> np.ndarray:
    """Normalise quaternion and ensure ``w >= 0`` (positive hemisphere)."""
    q = quat_normalise(q)
    if q[3] < 0:
        q = -q
    return q


def quat_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Compose two rotations, ``q1 * q2`` (``q2`` applied first)."""
    rot = Rotation.from_quat(quat_normalise(q1)) * Rotation.from_quat(quat_normalise(q2))
    return rot.as_quat()

# ---------------------------------------------------------------------------
# Shortest-arc rotation
# ---------------------------------------------------------------------------

def from_to_rotation(from_dir: np.ndarray, to_dir: np.ndarray) -> np.ndarray:
    """Shortest-arc quaternion rotating *from_dir* onto *to_dir*.

    Inputs need not be unit length.  If either one is (near) zero-length the
    identity is returned.  Exactly opposite inputs get a half turn about
    :pyfunc:`perpendicular_vector` of *from_dir*.
    """
    a = normalize_vector(from_dir)
    b = normalize_vector(to_dir)
    if not a.any() or not b.any():
        return identity_quat()

    w = 1.0 + float(np.clip(np.dot(a, b), -1.0, 1.0))
    if w < _EPS:
        axis = perpendicular_vector(a)
        return np.array([axis[0], axis[1], axis[2], 0.0], dtype=np.float64)

    xyz = np.cross(a, b)
    return quat_normalise(np.concatenate([xyz, [w]]))

# ---------------------------------------------------------------------------
# Quaternion ↔ angle/axis
# ---------------------------------------------------------------------------

def quat_to_angle_axis(q: np.ndarray) -> Tuple[float, np.ndarray]:
    """Split a quaternion into ``(angle, axis)``.

    The angle is in radians within ``[0, π]`` and the axis is a unit vector.
    A rotation with no angle reports the X axis.
    """
    q = quat_positive(q)
    xyz = q[:3]
    sin_h = np.linalg.norm(xyz)
    if sin_h < _EPS:
        return 0.0, np.array([1.0, 0.0, 0.0])
    angle = 2.0 * np.arctan2(sin_h, q[3])
    return float(angle), xyz / sin_h


def angle_axis_to_quat(angle: float, axis: np.ndarray) -> np.ndarray:
    """Quaternion for a rotation of *angle* radians about *axis*.

    The axis is normalised first, so only its direction matters; a zero axis
    or zero angle gives the identity.
    """
    axis = np.asarray(axis, dtype=np.float64)
    n = np.linalg.norm(axis)
    if n < _EPS or abs(angle) < _EPS:
        return identity_quat()
    half = 0.5 * angle
    return np.concatenate([axis / n * np.sin(half), [np.cos(half)]])
