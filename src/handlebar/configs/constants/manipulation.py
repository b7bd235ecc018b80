# -----------------------------------------------------------------------------
# Two-hand Manipulation Constants
# -----------------------------------------------------------------------------

import numpy as np

# -----------------------------------------------------------------------------
# Handlebar rotation
# -----------------------------------------------------------------------------
# Gain applied to the angle produced by the handlebar calculation.
ROTATION_MULTIPLIER = 2.0

# Declared for pitch damping; the rotation calculation does not consult it.
MIN_HAND_DISTANCE_FOR_PITCH_M = 0.1

NUM_HANDS = 2

# -----------------------------------------------------------------------------
# World axes (Y up)
# -----------------------------------------------------------------------------
WORLD_RIGHT = np.array([1.0, 0.0, 0.0])
WORLD_UP = np.array([0.0, 1.0, 0.0])

# -----------------------------------------------------------------------------
# Numerics
# -----------------------------------------------------------------------------
VECTOR_EPS = 1e-8  # below this a direction is treated as zero-length
PERPENDICULAR_EPS = 1e-6

# -----------------------------------------------------------------------------
# Frame logging
# -----------------------------------------------------------------------------
LOG_DIR = "logs"
LOG_PREFIX = "rotation"
LOG_WRITE_BATCH_SIZE = 5
