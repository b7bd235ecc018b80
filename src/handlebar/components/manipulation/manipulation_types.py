from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Sequence, Union

import numpy as np
from scipy.spatial.transform import Rotation

"""
Caller → manipulation contracts.

Notes:
- Units: positions in meters, orientations as XYZW unit quaternions.
- World space is Y-up.
- Hand positions are keyed by the stable id of their tracked input source.
"""


Vec3 = Union[Sequence[float], np.ndarray]
HandsMap = Mapping[int, Vec3]


class HandCountError(ValueError):
    """Raised when a hands map does not hold exactly two input sources."""


class SessionNotStartedError(RuntimeError):
    """Raised when a rotation session is updated before it was begun."""


class AxisConstraint(Enum):
    """Local handlebar component removed before computing the rotation."""
    NONE = "none"
    X_AXIS_ONLY = "x_axis_only"
    Y_AXIS_ONLY = "y_axis_only"
    Z_AXIS_ONLY = "z_axis_only"


def _as_vec3(value, name: str) -> np.ndarray:
    vec = np.asarray(value, dtype=np.float64).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"{name} must have 3 components, got shape {vec.shape}")
    return vec


def _as_quat(value, name: str) -> np.ndarray:
    quat = np.asarray(value, dtype=np.float64).reshape(-1)
    if quat.shape != (4,):
        raise ValueError(f"{name} must be an XYZW quaternion, got shape {quat.shape}")
    norm = np.linalg.norm(quat)
    if not np.isfinite(norm) or norm < 1e-8:
        raise ValueError(f"{name} must be a finite, non-zero quaternion, got {quat}")
    return quat / norm


@dataclass(frozen=True, eq=False)
class ReferenceFrame:
    """Viewer (camera/head) pose, read fresh every frame.

    - position: (x, y, z) in world space.
    - orientation: XYZW quaternion, local → world.
    """

    position: Vec3 = (0.0, 0.0, 0.0)
    orientation: Vec3 = (0.0, 0.0, 0.0, 1.0)
    _rotation: Rotation = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "position", _as_vec3(self.position, "position"))
        object.__setattr__(self, "orientation", _as_quat(self.orientation, "orientation"))
        object.__setattr__(self, "_rotation", Rotation.from_quat(self.orientation))

    def inverse_transform_point(self, point: Vec3) -> np.ndarray:
        """World-space point expressed in this frame's local space."""
        return self._rotation.inv().apply(_as_vec3(point, "point") - self.position)

    def transform_direction(self, direction: Vec3) -> np.ndarray:
        """Local-space direction expressed in world space (no translation)."""
        return self._rotation.apply(_as_vec3(direction, "direction"))


@dataclass(frozen=True, eq=False)
class TargetTransform:
    """Pose of the manipulated object. Never mutated by the manipulation logic."""

    position: Vec3 = (0.0, 0.0, 0.0)
    orientation: Vec3 = (0.0, 0.0, 0.0, 1.0)

    def __post_init__(self):
        object.__setattr__(self, "position", _as_vec3(self.position, "position"))
        object.__setattr__(self, "orientation", _as_quat(self.orientation, "orientation"))


__all__ = [
    "Vec3",
    "HandsMap",
    "HandCountError",
    "SessionNotStartedError",
    "AxisConstraint",
    "ReferenceFrame",
    "TargetTransform",
]
