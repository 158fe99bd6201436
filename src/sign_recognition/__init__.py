"""Sign recognition: feature extraction, k-NN matching and temporal debounce."""

from .config import (
    MAX_NUM_HANDS,
    TRAINING_LABELS,
    training_labels,
    CONFIRM_LABEL,
    REJECT_LABEL,
    SPACE_LABEL,
    RecognizerConfig,
)
from .exceptions import SignRecognitionError, ModelFormatError, StorageError
from .features import HandPose, extract_features, get_handedness_label, order_hands
from .store import Sample, ModelStorage, MemoryStorage, JsonFileStorage, encode_samples, decode_samples
from .classifier import Classification, KNNClassifier
from .stabilizer import Stabilizer
from .recognizer import SignRecognizer
from .composer import ComposerEvent, TextComposer

__all__ = [
    "MAX_NUM_HANDS",
    "TRAINING_LABELS",
    "training_labels",
    "CONFIRM_LABEL",
    "REJECT_LABEL",
    "SPACE_LABEL",
    "RecognizerConfig",
    "SignRecognitionError",
    "ModelFormatError",
    "StorageError",
    "HandPose",
    "extract_features",
    "get_handedness_label",
    "order_hands",
    "Sample",
    "ModelStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "encode_samples",
    "decode_samples",
    "Classification",
    "KNNClassifier",
    "Stabilizer",
    "SignRecognizer",
    "ComposerEvent",
    "TextComposer",
]
