"""Configuration constants for sign recognition."""

from dataclasses import asdict, dataclass, fields


# =============================================================================
# HAND GEOMETRY
# =============================================================================
LANDMARKS_PER_HAND = 21
COORDS_PER_LANDMARK = 3
FEATURES_PER_HAND = LANDMARKS_PER_HAND * COORDS_PER_LANDMARK
MAX_NUM_HANDS = 2


# =============================================================================
# NEAREST NEIGHBOR MATCHING
# =============================================================================
K_NEIGHBORS = 3
ONE_HAND_MAX_DISTANCE = 1.2
TWO_HAND_MAX_DISTANCE = 1.4


# =============================================================================
# AUGMENTATION
# =============================================================================
AUGMENTATION_COUNT = 3
AUGMENTATION_NOISE = 0.01


# =============================================================================
# STABILIZATION
# =============================================================================
MIN_CONFIDENCE = 0.6
HISTORY_SIZE = 12
HISTORY_SLACK = 2


# =============================================================================
# LABEL VOCABULARY
# =============================================================================
CONFIRM_LABEL = "ThumbsUp"
REJECT_LABEL = "ThumbsDown"
SPACE_LABEL = "Space"

TRAINING_LABELS = (
    [CONFIRM_LABEL, REJECT_LABEL, SPACE_LABEL]
    + [chr(c) for c in range(ord("A"), ord("Z") + 1)]
    + [str(d) for d in range(10)]
)


def training_labels(custom=()) -> list[str]:
    """Training vocabulary followed by user phrases, blanks and duplicates dropped."""
    labels = list(TRAINING_LABELS)
    for label in custom:
        label = label.strip()
        if label and label not in labels:
            labels.append(label)
    return labels


# =============================================================================
# PERSISTENCE
# =============================================================================
DEFAULT_MODEL_PATH = "signstream_model.json"


@dataclass
class RecognizerConfig:
    """Tunable parameters for the classifier and stabilizer."""

    k: int = K_NEIGHBORS
    one_hand_max_distance: float = ONE_HAND_MAX_DISTANCE
    two_hand_max_distance: float = TWO_HAND_MAX_DISTANCE

    augmentation_count: int = AUGMENTATION_COUNT
    augmentation_noise: float = AUGMENTATION_NOISE  # full width, centered on zero

    min_confidence: float = MIN_CONFIDENCE
    history_size: int = HISTORY_SIZE
    min_agreement: int | None = None  # None = history_size - HISTORY_SLACK

    def __post_init__(self):
        """Validate configuration."""
        if self.k < 1:
            raise ValueError("k must be >= 1")
        if self.one_hand_max_distance <= 0 or self.two_hand_max_distance <= 0:
            raise ValueError("distance thresholds must be positive")
        if self.augmentation_count < 0:
            raise ValueError("augmentation_count must be >= 0")
        if self.augmentation_noise < 0:
            raise ValueError("augmentation_noise must be >= 0")
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError("min_confidence must be in [0, 1]")
        if self.history_size < 1:
            raise ValueError("history_size must be >= 1")
        if self.min_agreement is None:
            self.min_agreement = max(1, self.history_size - HISTORY_SLACK)
        if not 1 <= self.min_agreement <= self.history_size:
            raise ValueError("min_agreement must be in [1, history_size]")

    def max_distance(self, hand_count: int) -> float:
        """Nearest-neighbor distance above which a vote is rejected."""
        if hand_count == 2:
            return self.two_hand_max_distance
        return self.one_hand_max_distance

    @classmethod
    def from_dict(cls, values: dict) -> "RecognizerConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)
