"""Hand feature extraction from landmark observations."""

from dataclasses import dataclass
from typing import Literal, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import COORDS_PER_LANDMARK, LANDMARKS_PER_HAND

Point3 = tuple[float, float, float]
Handedness = Literal["Left", "Right"]

_SIDE_ORDER = {"Left": 0, "Right": 1}


@dataclass(frozen=True)
class HandPose:
    """One hand observed in one frame: 21 landmarks plus side."""
    landmarks: tuple[Point3, ...]
    handedness: Handedness = "Right"

    @classmethod
    def from_points(cls, points, handedness: Handedness = "Right") -> "HandPose":
        """Build a pose from any iterable of (x, y, z) triples."""
        return cls(
            landmarks=tuple((float(x), float(y), float(z)) for x, y, z in points),
            handedness=handedness,
        )


def is_well_formed(hands: Sequence[HandPose]) -> bool:
    """True if every hand has exactly 21 finite (x, y, z) landmarks."""
    for hand in hands:
        if len(hand.landmarks) != LANDMARKS_PER_HAND:
            return False
        for point in hand.landmarks:
            if len(point) != COORDS_PER_LANDMARK or not np.all(np.isfinite(point)):
                return False
    return True


def order_hands(hands: Sequence[HandPose]) -> list[HandPose]:
    """Left hands before right hands, stable among equals."""
    return sorted(hands, key=lambda h: _SIDE_ORDER.get(h.handedness, 1))


def landmark_array(hands: Sequence[HandPose]) -> NDArray[np.float64]:
    """Stack the landmarks of all hands, in side order, as an (n, 3) array."""
    points = [p for hand in order_hands(hands) for p in hand.landmarks]
    if not points:
        return np.empty((0, 3), dtype=np.float64)
    return np.asarray(points, dtype=np.float64).reshape(-1, 3)


def normalize_points(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Center points on their centroid and scale them into the unit sphere.

    Args:
        points: (n, 3) array of landmark coordinates

    Returns:
        Flat array x, y, z, x, y, z, ... (empty if there are no points)
    """
    if len(points) == 0:
        return np.empty(0, dtype=np.float64)

    centered = points - points.mean(axis=0)
    scale = float(np.linalg.norm(centered, axis=1).max())
    if scale == 0.0:
        scale = 1.0

    return (centered / scale).ravel()


def extract_features(hands: Sequence[HandPose]) -> NDArray[np.float64]:
    """
    Extract a position and scale invariant feature vector.

    Hands are ordered Left before Right so that two-hand vectors line up the
    same way at training and inference time.
    """
    return normalize_points(landmark_array(hands))


def euclidean_distance(a: NDArray[np.float64], b: NDArray[np.float64]) -> float:
    """Euclidean distance over the common prefix of two feature vectors."""
    n = min(len(a), len(b))
    return float(np.linalg.norm(np.asarray(a[:n]) - np.asarray(b[:n])))


def get_handedness_label(handedness, invert: bool = False) -> Handedness:
    """Extract handedness label from a MediaPipe classification, optionally inverting left/right."""
    try:
        lbl = handedness.classification[0].label
    except (AttributeError, IndexError):
        return "Right"

    if lbl not in _SIDE_ORDER:
        return "Right"
    if invert:
        return "Left" if lbl == "Right" else "Right"
    return lbl
