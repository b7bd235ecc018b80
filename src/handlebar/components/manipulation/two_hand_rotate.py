import logging
from typing import Optional

import numpy as np

from handlebar.common.math.orientation import (
    angle_axis_to_quat,
    from_to_rotation,
    identity_quat,
    quat_multiply,
    quat_to_angle_axis,
)
from handlebar.components.manipulation.manipulation_types import (
    AxisConstraint,
    HandCountError,
    HandsMap,
    ReferenceFrame,
    SessionNotStartedError,
    TargetTransform,
)
from handlebar.configs.constants import manipulation
from handlebar.configs.constants.models import ManipulationConfig
from handlebar.utils.logger import RotationLogger

logger = logging.getLogger(__name__)

# Local axis index zeroed for each constraint.
_CONSTRAINED_AXIS = {
    AxisConstraint.X_AXIS_ONLY: 0,
    AxisConstraint.Y_AXIS_ONLY: 1,
    AxisConstraint.Z_AXIS_ONLY: 2,
}


def _hand_positions(hands: HandsMap):
    """Return the two hand positions in the map's iteration order."""
    if len(hands) != manipulation.NUM_HANDS:
        raise HandCountError(
            f"Handlebar rotation needs exactly {manipulation.NUM_HANDS} hands, got {len(hands)}"
        )
    positions = []
    for source_id, position in hands.items():
        point = np.asarray(position, dtype=np.float64).reshape(-1)
        if point.shape != (3,):
            raise ValueError(f"Position of input source {source_id} must have 3 components, got {point.shape}")
        if not np.all(np.isfinite(point)):
            raise ValueError(f"Position of input source {source_id} is not finite: {point}")
        positions.append(point)
    return positions


def get_handlebar_direction(hands: HandsMap, reference_frame: ReferenceFrame) -> np.ndarray:
    """Vector from the first hand to the second, in the reference frame's local space.

    Both points are relativised to the viewer so that moving the body without
    moving the hands relative to the head leaves the handlebar unchanged.
    """
    hand1, hand2 = _hand_positions(hands)
    hand1 = reference_frame.inverse_transform_point(hand1)
    hand2 = reference_frame.inverse_transform_point(hand2)
    return hand2 - hand1


def project_handlebar_given_constraint(
    constraint: AxisConstraint,
    handlebar_direction: np.ndarray,
    reference_frame: ReferenceFrame,
) -> np.ndarray:
    """Zero the constrained local component and return the result in world space."""
    result = np.array(handlebar_direction, dtype=np.float64)
    axis_index = _CONSTRAINED_AXIS.get(constraint)
    if axis_index is not None:
        result[axis_index] = 0.0
    return reference_frame.transform_direction(result)


def _log_degenerate_handlebar(previous: np.ndarray, current: np.ndarray) -> None:
    """Report inputs for which the from-to rotation falls back to a fixed result."""
    prev_norm = np.linalg.norm(previous)
    curr_norm = np.linalg.norm(current)
    if prev_norm < manipulation.VECTOR_EPS or curr_norm < manipulation.VECTOR_EPS:
        logger.debug(
            f"Zero-length handlebar (previous={prev_norm:.3g} m, current={curr_norm:.3g} m), "
            f"rotation for this frame is identity"
        )
        return
    cos_angle = np.dot(previous, current) / (prev_norm * curr_norm)
    if cos_angle <= -1.0 + manipulation.VECTOR_EPS:
        logger.debug("Antiparallel handlebar directions, using a half turn about a perpendicular axis")


class RotationSession:
    """
    Rotates a held object using the handlebar metaphor: every frame the object
    turns by the rotation taking the previous hands vector onto the current one.

    Usage: call :meth:`begin` when a two-hand manipulation starts, then
    :meth:`update` each frame to get the object's new orientation.
    """

    def __init__(
        self,
        constraint: AxisConstraint = AxisConstraint.NONE,
        rotation_multiplier: float = manipulation.ROTATION_MULTIPLIER,
        frame_logger: Optional[RotationLogger] = None,
    ):
        """
        Args:
            constraint: Local handlebar axis removed before computing rotations.
                Enum member or its string value (e.g. "y_axis_only").
            rotation_multiplier: Gain applied to each frame's rotation angle.
            frame_logger: Optional recorder receiving one entry per update.
        """
        self._configured_constraint = AxisConstraint(constraint)
        self._current_constraint = self._configured_constraint
        self.rotation_multiplier = rotation_multiplier
        self.frame_logger = frame_logger
        self._previous_direction = None

    @classmethod
    def from_config(cls, config: ManipulationConfig) -> "RotationSession":
        frame_logger = None
        if config.logging.enabled:
            frame_logger = RotationLogger(
                log_dir=config.logging.log_dir,
                prefix=config.logging.prefix,
                write_batch_size=config.logging.write_batch_size,
            )
        return cls(
            constraint=config.rotation.axis_constraint,
            rotation_multiplier=config.rotation.rotation_multiplier,
            frame_logger=frame_logger,
        )

    @property
    def configured_constraint(self) -> AxisConstraint:
        return self._configured_constraint

    @property
    def current_constraint(self) -> AxisConstraint:
        """Constraint in effect for the running manipulation."""
        return self._current_constraint

    @property
    def previous_direction(self) -> Optional[np.ndarray]:
        if self._previous_direction is None:
            return None
        return self._previous_direction.copy()

    @property
    def is_active(self) -> bool:
        return self._previous_direction is not None

    def begin(
        self,
        hands: HandsMap,
        reference_frame: ReferenceFrame,
        target_transform: Optional[TargetTransform] = None,
    ) -> None:
        """Start a manipulation from the current hand positions."""
        direction = get_handlebar_direction(hands, reference_frame)
        self._current_constraint = self._configured_constraint
        self._previous_direction = direction
        logger.debug(
            f"Handlebar rotation started: constraint={self._current_constraint.value}, "
            f"direction={direction.tolist()}"
        )

    def update(
        self,
        hands: HandsMap,
        reference_frame: ReferenceFrame,
        target_transform: Optional[TargetTransform] = None,
        current_orientation: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """
        Advance the manipulation by one frame.

        Args:
            hands: The two tracked hand positions, keyed by input source id.
            reference_frame: Current viewer pose.
            target_transform: Pose of the manipulated object (not modified).
            current_orientation: Object orientation (XYZW) before this frame.
                Defaults to identity.

        Returns:
            The object's new orientation as an XYZW quaternion.
        """
        if self._previous_direction is None:
            raise SessionNotStartedError("update() called before begin()")
        if current_orientation is None:
            current_orientation = identity_quat()

        handlebar_direction = get_handlebar_direction(hands, reference_frame)
        handlebar_projected = project_handlebar_given_constraint(
            self._current_constraint, handlebar_direction, reference_frame
        )
        prev_handlebar_projected = project_handlebar_given_constraint(
            self._current_constraint, self._previous_direction, reference_frame
        )
        previous_direction = self._previous_direction
        self._previous_direction = handlebar_direction

        _log_degenerate_handlebar(prev_handlebar_projected, handlebar_projected)
        rotation_delta = from_to_rotation(prev_handlebar_projected, handlebar_projected)
        angle, axis = quat_to_angle_axis(rotation_delta)
        angle *= self.rotation_multiplier

        if self._current_constraint is AxisConstraint.Y_AXIS_ONLY:
            # Rotate about world up. The axis from the decomposition can point
            # up or down, so keep only its signed vertical part.
            axis = manipulation.WORLD_UP * np.dot(axis, manipulation.WORLD_UP)

        new_orientation = quat_multiply(angle_axis_to_quat(angle, axis), current_orientation)

        if self.frame_logger is not None and not self.frame_logger.closed:
            self.frame_logger.log_frame(previous_direction, handlebar_direction, angle, axis, new_orientation)

        return new_orientation

    def close(self) -> None:
        """Flush and close the frame logger, if any. Updates keep working afterwards."""
        if self.frame_logger is not None:
            self.frame_logger.close()
