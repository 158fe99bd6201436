"""Sign language recognition and text entry package."""

from .sign_recognition import (
    HandPose,
    extract_features,
    get_handedness_label,
    RecognizerConfig,
    KNNClassifier,
    Classification,
    Stabilizer,
    SignRecognizer,
    TextComposer,
    ComposerEvent,
    JsonFileStorage,
    MemoryStorage,
)

from .hand_tracks import hands_from_results

__all__ = [
    # Recognition
    "HandPose",
    "extract_features",
    "get_handedness_label",
    "RecognizerConfig",
    "KNNClassifier",
    "Classification",
    "Stabilizer",
    "SignRecognizer",
    "TextComposer",
    "ComposerEvent",
    "JsonFileStorage",
    "MemoryStorage",
    # Tracking
    "hands_from_results",
]
