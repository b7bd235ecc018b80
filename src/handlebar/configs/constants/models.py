from dataclasses import dataclass, field

from handlebar.components.manipulation.manipulation_types import AxisConstraint
from handlebar.configs.constants import manipulation

# -----------------------------------------------------------------------------
# Configuration Models
# -----------------------------------------------------------------------------

@dataclass
class RotationConfig:
    """Handlebar rotation settings.

    ``min_hand_distance_for_pitch_m`` is carried for completeness only. The
    rotation never reads it, and setting it from YAML logs a warning.
    """
    constraint: str = AxisConstraint.NONE.value
    rotation_multiplier: float = manipulation.ROTATION_MULTIPLIER
    min_hand_distance_for_pitch_m: float = manipulation.MIN_HAND_DISTANCE_FOR_PITCH_M

    def __post_init__(self):
        """Lightweight validation for rotation configuration."""
        if isinstance(self.constraint, AxisConstraint):
            self.constraint = self.constraint.value
        valid = [c.value for c in AxisConstraint]
        assert self.constraint in valid, f"constraint must be one of {valid}, got: {self.constraint}"
        assert self.rotation_multiplier > 0, f"rotation_multiplier must be positive, got: {self.rotation_multiplier}"
        assert self.min_hand_distance_for_pitch_m >= 0, (
            f"min_hand_distance_for_pitch_m must be non-negative, got: {self.min_hand_distance_for_pitch_m}"
        )

    @property
    def axis_constraint(self) -> AxisConstraint:
        return AxisConstraint(self.constraint)


@dataclass
class SessionLoggingConfig:
    """Per-frame JSON recording of rotation sessions."""
    enabled: bool = False
    log_dir: str = manipulation.LOG_DIR
    prefix: str = manipulation.LOG_PREFIX
    write_batch_size: int = manipulation.LOG_WRITE_BATCH_SIZE

    def __post_init__(self):
        assert self.write_batch_size >= 1, f"write_batch_size must be >= 1, got: {self.write_batch_size}"
        assert self.prefix, "prefix must not be empty"


@dataclass
class ManipulationConfig:
    """Top-level configuration for two-hand manipulation."""
    rotation: RotationConfig = field(default_factory=RotationConfig)
    logging: SessionLoggingConfig = field(default_factory=SessionLoggingConfig)


__all__ = [
    "RotationConfig",
    "SessionLoggingConfig",
    "ManipulationConfig",
]
