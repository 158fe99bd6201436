"""Per-frame sign recognition: k-NN vote followed by temporal debounce."""

import logging
from typing import Sequence

from .classifier import KNNClassifier
from .config import RecognizerConfig
from .features import HandPose
from .stabilizer import Stabilizer
from .store import ModelStorage

logger = logging.getLogger(__name__)


class SignRecognizer:
    """
    Composes the classifier and the stabilizer behind ``predict``.

    Training operations go straight to ``classifier`` and never touch the
    stabilizer window. The classifier and the stabilizer always share one
    configuration: a ``config`` that differs from the config of a passed-in
    ``classifier`` raises ValueError.
    """

    def __init__(
        self,
        classifier: KNNClassifier | None = None,
        config: RecognizerConfig | None = None,
        storage: ModelStorage | None = None,
    ):
        if classifier is None:
            classifier = KNNClassifier(storage=storage, config=config)
        elif config is not None and config != classifier.config:
            raise ValueError("config differs from the classifier's config")
        self.config = classifier.config
        self._classifier = classifier
        self._stabilizer = Stabilizer(
            window_size=self.config.history_size,
            min_agreement=self.config.min_agreement,
        )

    @property
    def classifier(self) -> KNNClassifier:
        return self._classifier

    @property
    def stabilizer(self) -> Stabilizer:
        return self._stabilizer

    def predict(self, hands: Sequence[HandPose]) -> str | None:
        """Return a stable label for this frame, or None."""
        if not hands:
            return None

        result = self._classifier.classify(hands)
        if result is None or result.confidence <= self.config.min_confidence:
            return None

        label = self._stabilizer.update(result.label)
        if label is not None:
            logger.debug("Stable %r (confidence %.2f)", label, result.confidence)
        return label
