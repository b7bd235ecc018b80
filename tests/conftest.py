from typing import Dict, Tuple

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from handlebar.components.manipulation.manipulation_types import ReferenceFrame

LEFT_SOURCE_ID = 1
RIGHT_SOURCE_ID = 2


def _make_hands(left, right) -> Dict[int, Tuple[float, float, float]]:
    return {
        LEFT_SOURCE_ID: tuple(map(float, left)),
        RIGHT_SOURCE_ID: tuple(map(float, right)),
    }


@pytest.fixture
def make_hands():
    """Builds a two-entry hands map with a fixed source id order (left first)."""
    return _make_hands


@pytest.fixture
def identity_frame() -> ReferenceFrame:
    return ReferenceFrame()


@pytest.fixture
def tilted_frame() -> ReferenceFrame:
    """Viewer standing off-origin, turned 35° and looking 20° down."""
    rot = Rotation.from_euler("yx", [35.0, 20.0], degrees=True)
    return ReferenceFrame(position=(0.4, 1.6, -0.8), orientation=rot.as_quat())


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
