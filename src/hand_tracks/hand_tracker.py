"""
MediaPipe Hands front end for sign recognition.

Turns BGR camera frames into ``HandPose`` lists ready for
``SignRecognizer.predict`` and keeps the last raw result around so the
capture loop can draw the skeleton it just classified.
"""

import cv2
import mediapipe as mp
import numpy as np
from numpy.typing import NDArray

from ..sign_recognition.config import MAX_NUM_HANDS
from ..sign_recognition.features import HandPose

from .landmarks import hands_from_results


class HandTracker:
    """
    Streaming hand detector for sign frames.

    ``invert_handedness`` swaps MediaPipe's Left/Right labels for cameras
    whose image is not mirrored, so two-hand signs keep their Left-before-Right
    feature layout.

    Usage:
        with HandTracker(max_num_hands=2) as tracker:
            hands = tracker.detect(frame)
            tracker.draw_landmarks(frame)
    """

    def __init__(
        self,
        max_num_hands: int = MAX_NUM_HANDS,
        min_detection_confidence: float = 0.7,
        min_tracking_confidence: float = 0.5,
        invert_handedness: bool = False,
    ):
        self._mp_hands = mp.solutions.hands
        self._mp_draw = mp.solutions.drawing_utils
        self._detector = self._mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        self.invert_handedness = invert_handedness
        self._results = None

    def detect(self, frame: NDArray[np.uint8]) -> list[HandPose]:
        """Run the detector on one BGR frame and return the hands it saw (maybe none)."""
        self._results = self._detector.process(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))
        return hands_from_results(self._results, self.invert_handedness)

    def draw_landmarks(self, frame: NDArray[np.uint8]) -> None:
        """Overlay the skeletons from the last ``detect`` call."""
        hands = getattr(self._results, "multi_hand_landmarks", None)
        for hand in hands or ():
            self._mp_draw.draw_landmarks(frame, hand, self._mp_hands.HAND_CONNECTIONS)

    def close(self) -> None:
        self._detector.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
