"""
Handlebar Package

Two-hand rotation of held objects: the line between two tracked hands acts as
a handlebar, and turning the handlebar turns the object.
The main entry point is RotationSession; configuration lives in configs/constants/models.py.
"""

import logging

from handlebar.components.manipulation.manipulation_types import (
    AxisConstraint,
    HandCountError,
    ReferenceFrame,
    SessionNotStartedError,
    TargetTransform,
)
from handlebar.components.manipulation.two_hand_rotate import RotationSession
from handlebar.configs.constants.models import ManipulationConfig, RotationConfig, SessionLoggingConfig
from handlebar.utils.logger import setup_root_logger

logger = logging.getLogger(__name__)


__all__ = [
    "RotationSession",
    "AxisConstraint",
    "ReferenceFrame",
    "TargetTransform",
    "HandCountError",
    "SessionNotStartedError",
    "ManipulationConfig",
    "RotationConfig",
    "SessionLoggingConfig",
    "setup_root_logger",
]
