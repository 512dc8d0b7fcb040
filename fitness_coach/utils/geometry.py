# geometry.py
"""
Joint angle helpers shared by every exercise classifier.
Angles are computed with the dot product of the two rays leaving the vertex.
"""

from typing import Iterable, Mapping, Sequence, Union

import numpy as np

from fitness_coach.models.schemas import Keypoint

# Returned when one of the rays has zero length (duplicate keypoints)
ZERO_VECTOR_ANGLE = 0.0

Point = Union[Keypoint, Sequence[float]]


def _xy(point: Point) -> np.ndarray:
    if isinstance(point, Keypoint):
        return np.array([point.x, point.y], dtype=float)
    return np.array(point[:2], dtype=float)


def angle_at(vertex: Point, point_a: Point, point_b: Point) -> float:
    """
    Unsigned interior angle at `vertex` between the rays to `point_a` and `point_b`.
    Always in [0, 180] degrees; ZERO_VECTOR_ANGLE for degenerate input.
    """
    v1 = _xy(point_a) - _xy(vertex)
    v2 = _xy(point_b) - _xy(vertex)

    norm1 = np.linalg.norm(v1)
    norm2 = np.linalg.norm(v2)
    if norm1 < 1e-6 or norm2 < 1e-6:
        return ZERO_VECTOR_ANGLE

    cosine = np.dot(v1, v2) / (norm1 * norm2)
    return float(np.degrees(np.arccos(np.clip(cosine, -1.0, 1.0))))


def all_confident(snapshot: Mapping[str, Keypoint], names: Iterable[str], min_score: float) -> bool:
    """True when every named landmark is present with score above `min_score`."""
    for name in names:
        keypoint = snapshot.get(name)
        if keypoint is None or keypoint.score <= min_score:
            return False
    return True
