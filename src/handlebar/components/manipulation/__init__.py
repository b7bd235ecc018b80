from .manipulation_types import (
    AxisConstraint,
    HandCountError,
    HandsMap,
    ReferenceFrame,
    SessionNotStartedError,
    TargetTransform,
)

__all__ = [
    "AxisConstraint",
    "HandCountError",
    "HandsMap",
    "ReferenceFrame",
    "SessionNotStartedError",
    "TargetTransform",
]
