"""
Nearest-neighbor sign classifier with an online-trained sample store.
"""

import logging
import threading
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .config import RecognizerConfig
from .exceptions import ModelFormatError, StorageError
from .features import (
    HandPose,
    euclidean_distance,
    extract_features,
    is_well_formed,
    landmark_array,
    normalize_points,
)
from .store import MemoryStorage, ModelStorage, Sample, decode_samples, encode_samples

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    """Winning label of one k-NN vote."""
    label: str
    confidence: float
    distance: float = 0.0


class KNNClassifier:
    """
    k-nearest-neighbor classifier over user-recorded samples.

    The sample store is loaded from ``storage`` on construction and written
    back after every mutation. Storage failures are logged and the in-memory
    store stays authoritative for the rest of the session.

    Usage:
        classifier = KNNClassifier(storage=JsonFileStorage("model.json"))
        classifier.add_sample("A", hands)
        result = classifier.classify(hands)
    """

    def __init__(
        self,
        storage: ModelStorage | None = None,
        config: RecognizerConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.config = config or RecognizerConfig()
        self._storage = storage if storage is not None else MemoryStorage()
        self._rng = rng if rng is not None else np.random.default_rng()
        self._lock = threading.RLock()
        self._samples: list[Sample] = []
        self._load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> None:
        try:
            payload = self._storage.load()
        except (OSError, StorageError) as e:
            logger.warning("Model load failed, starting empty: %s", e)
            return
        if payload is None:
            return

        try:
            samples = decode_samples(payload)
        except ModelFormatError as e:
            logger.warning("Stored model is invalid, starting empty: %s", e)
            return

        self._samples = samples
        logger.info("Loaded %d samples", len(samples))

    def _save(self) -> None:
        try:
            self._storage.save(encode_samples(self._samples))
        except Exception as e:
            logger.warning(
                "Model storage failed, keeping samples in memory only: %s", e, exc_info=True
            )

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def augment(self, hands: Sequence[HandPose]) -> list[NDArray[np.float64]]:
        """
        Synthesize jittered feature vectors for a hand set.

        Every raw coordinate gets independent uniform noise of total width
        ``augmentation_noise`` before the features are normalized again.
        """
        points = landmark_array(hands)
        if len(points) == 0:
            return []

        half = self.config.augmentation_noise / 2.0
        variants = []
        for _ in range(self.config.augmentation_count):
            noisy = points + self._rng.uniform(-half, half, size=points.shape)
            variants.append(normalize_points(noisy))
        return variants

    def add_sample(self, label: str, hands: Sequence[HandPose]) -> int:
        """
        Record a labeled observation plus its augmented variants.

        Returns:
            Number of samples appended (0 if the hands carried no landmarks
            or were malformed)
        """
        if not is_well_formed(hands):
            logger.warning("Ignoring malformed hand data for %r", label)
            return 0

        features = extract_features(hands)
        if features.size == 0:
            return 0

        hand_count = len(hands)
        new = [Sample(label, tuple(features.tolist()), hand_count)]
        new.extend(
            Sample(label, tuple(variant.tolist()), hand_count)
            for variant in self.augment(hands)
        )

        with self._lock:
            self._samples.extend(new)
            self._save()

        logger.info("Added %d samples for %r (%d hand(s))", len(new), label, hand_count)
        return len(new)

    def clear_samples(self) -> None:
        with self._lock:
            self._samples = []
            self._save()
        logger.info("Cleared all samples")

    def sample_counts(self) -> dict[str, int]:
        """Number of stored samples per label."""
        with self._lock:
            return dict(Counter(s.label for s in self._samples))

    @property
    def samples(self) -> tuple[Sample, ...]:
        with self._lock:
            return tuple(self._samples)

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------

    def export_model(self) -> bytes:
        """Serialize every stored sample."""
        with self._lock:
            return encode_samples(self._samples)

    def import_model(self, data: str | bytes) -> bool:
        """
        Replace the whole store with a serialized model.

        Returns:
            True on success. On any validation failure the current store is
            left untouched and False is returned.
        """
        try:
            samples = decode_samples(data)
        except ModelFormatError as e:
            logger.warning("Failed to import model: %s", e)
            return False

        with self._lock:
            self._samples = samples
            self._save()

        logger.info("Imported %d samples", len(samples))
        return True

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def classify(self, hands: Sequence[HandPose]) -> Classification | None:
        """
        Classify a hand set by majority vote of its k nearest samples.

        Returns:
            Classification, or None if the hand data is malformed or empty, no
            sample has the same hand count, or the nearest sample is too far away.
        """
        if not is_well_formed(hands):
            return None

        features = extract_features(hands)
        if features.size == 0:
            return None

        hand_count = len(hands)
        with self._lock:
            candidates = [s for s in self._samples if s.hand_count == hand_count]
        if not candidates:
            return None

        distances = np.array([euclidean_distance(features, s.features) for s in candidates])
        order = np.argsort(distances, kind="stable")[: self.config.k]

        votes = Counter(candidates[i].label for i in order)
        # Counter keeps first-seen order, so ties go to the nearer label.
        winner = max(votes, key=votes.get)

        nearest = float(distances[order[0]])
        if nearest > self.config.max_distance(hand_count):
            logger.debug("Rejected %r: nearest distance %.3f", winner, nearest)
            return None

        return Classification(
            label=winner,
            confidence=votes[winner] / self.config.k,
            distance=nearest,
        )
