import numpy as np

from handlebar.configs.constants import manipulation


def normalize_vector(vector):
    """Return *vector* scaled to unit length, or the zero vector if it has none."""
    vector = np.asarray(vector, dtype=np.float64)
    norm = np.linalg.norm(vector)
    if norm < manipulation.VECTOR_EPS:
        return np.zeros_like(vector)
    return vector / norm


def perpendicular_vector(vector):
    """Return a unit vector orthogonal to *vector*.

    Crosses with world X, or with world Y when *vector* is (anti)parallel to X,
    so the same input always gives the same axis.
    """
    unit = normalize_vector(vector)
    axis = np.cross(unit, manipulation.WORLD_RIGHT)
    if np.linalg.norm(axis) < manipulation.PERPENDICULAR_EPS:
        axis = np.cross(unit, manipulation.WORLD_UP)
    return normalize_vector(axis)
