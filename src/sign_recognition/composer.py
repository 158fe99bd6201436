"""
Text composition from stable sign predictions.

Turns the continuous stream of stabilizer emissions into discrete events:
a new letter becomes the pending candidate, ThumbsUp confirms it (and feeds
the confirmed observation back into the classifier), ThumbsDown drops it.
"""

import logging
from dataclasses import dataclass, field
from typing import Literal, Sequence

from .classifier import KNNClassifier
from .config import CONFIRM_LABEL, REJECT_LABEL, SPACE_LABEL
from .features import HandPose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComposerEvent:
    """A transition caused by one prediction."""
    kind: Literal["candidate", "confirmed", "rejected"]
    label: str


@dataclass
class ComposerState:
    """Tracks the pending candidate between frames."""
    text: str = ""
    pending: str | None = None
    pending_hands: list[HandPose] = field(default_factory=list)


class TextComposer:
    """Accumulates confirmed signs into text."""

    def __init__(self, classifier: KNNClassifier | None = None, reinforce: bool = True):
        self._classifier = classifier
        self.reinforce = reinforce and classifier is not None
        self.training = False
        self._state = ComposerState()

    @property
    def text(self) -> str:
        return self._state.text

    @property
    def pending(self) -> str | None:
        return self._state.pending

    def clear_text(self) -> None:
        self._state = ComposerState()

    def _drop_pending(self) -> None:
        self._state.pending = None
        self._state.pending_hands = []

    def _confirm(self) -> ComposerEvent:
        label = self._state.pending
        hands = self._state.pending_hands

        if self.reinforce and hands:
            added = self._classifier.add_sample(label, hands)
            logger.info("Reinforced %r with %d samples", label, added)

        self._state.text += " " if label == SPACE_LABEL else label
        self._drop_pending()
        return ComposerEvent("confirmed", label)

    def handle_prediction(
        self, prediction: str | None, hands: Sequence[HandPose] = ()
    ) -> ComposerEvent | None:
        """
        Apply one stabilizer emission.

        Args:
            prediction: Label emitted this frame (None = nothing stable)
            hands: The hands that produced the prediction

        Returns:
            The event caused by this prediction, or None if it changed nothing
        """
        if prediction is None or self.training:
            return None

        if prediction == CONFIRM_LABEL:
            if self._state.pending is None:
                return None
            return self._confirm()

        if prediction == REJECT_LABEL:
            if self._state.pending is None:
                return None
            label = self._state.pending
            self._drop_pending()
            logger.info("Rejected %r", label)
            return ComposerEvent("rejected", label)

        # Reinforce with the latest observation of the candidate itself,
        # never with the confirming ThumbsUp hands.
        self._state.pending_hands = list(hands)
        if self._state.pending == prediction:
            return None

        self._state.pending = prediction
        return ComposerEvent("candidate", prediction)
