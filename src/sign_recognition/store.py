"""Sample records, the model codec and storage backends."""

import json
import logging
import math
import os
import tempfile
from dataclasses import dataclass
from numbers import Real
from pathlib import Path

from .config import FEATURES_PER_HAND
from .exceptions import ModelFormatError, StorageError

logger = logging.getLogger(__name__)

_FIELDS = ("label", "features", "handCount")


@dataclass(frozen=True)
class Sample:
    """A labeled feature vector kept for nearest-neighbor matching."""
    label: str
    features: tuple[float, ...]
    hand_count: int

    def to_record(self) -> dict:
        """Serialize to JSON-friendly dict."""
        return {
            "label": self.label,
            "features": list(self.features),
            "handCount": self.hand_count,
        }


# =============================================================================
# CODEC
# =============================================================================

def encode_samples(samples) -> bytes:
    """Serialize samples as a UTF-8 JSON array of records."""
    return json.dumps([s.to_record() for s in samples]).encode("utf-8")


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def _parse_record(index: int, record) -> Sample:
    if not isinstance(record, dict):
        raise ModelFormatError(f"record {index}: expected an object, got {type(record).__name__}")

    missing = [name for name in _FIELDS if name not in record]
    if missing:
        raise ModelFormatError(f"record {index}: missing field(s) {', '.join(missing)}")

    label = record["label"]
    features = record["features"]
    hand_count = record["handCount"]

    if not isinstance(label, str) or not label:
        raise ModelFormatError(f"record {index}: label must be a non-empty string")
    if not isinstance(hand_count, int) or isinstance(hand_count, bool) or hand_count < 1:
        raise ModelFormatError(f"record {index}: handCount must be a positive integer")
    if not isinstance(features, list) or not all(_is_number(v) for v in features):
        raise ModelFormatError(f"record {index}: features must be a list of finite numbers")
    if len(features) != hand_count * FEATURES_PER_HAND:
        raise ModelFormatError(
            f"record {index}: expected {hand_count * FEATURES_PER_HAND} features "
            f"for {hand_count} hand(s), got {len(features)}"
        )

    return Sample(label=label, features=tuple(float(v) for v in features), hand_count=hand_count)


def decode_samples(data: str | bytes | bytearray) -> list[Sample]:
    """
    Parse and validate a serialized model.

    Raises:
        ModelFormatError: if the payload is not a JSON array of sample records.
            Nothing is returned for a partially valid payload.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ModelFormatError(f"model is not valid UTF-8: {e}") from e

    try:
        parsed = json.loads(data)
    except (TypeError, ValueError) as e:
        raise ModelFormatError(f"model is not valid JSON: {e}") from e

    if not isinstance(parsed, list):
        raise ModelFormatError(f"expected a list of records, got {type(parsed).__name__}")

    return [_parse_record(i, record) for i, record in enumerate(parsed)]


# =============================================================================
# STORAGE BACKENDS
# =============================================================================

class ModelStorage:
    """Where the serialized sample store lives between sessions."""

    def load(self) -> bytes | None:
        """Return the stored payload, or None if nothing has been saved yet."""
        raise NotImplementedError

    def save(self, payload: bytes) -> None:
        raise NotImplementedError


class MemoryStorage(ModelStorage):
    """Keeps the payload in memory only."""

    def __init__(self, payload: bytes | None = None):
        self.payload = payload

    def load(self) -> bytes | None:
        return self.payload

    def save(self, payload: bytes) -> None:
        self.payload = payload


class JsonFileStorage(ModelStorage):
    """Stores the model as a JSON file, replacing it atomically on save."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> bytes | None:
        try:
            return self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"cannot read {self.path}: {e}") from e

    def save(self, payload: bytes) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=self.path.name, suffix=".tmp", dir=directory)
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(payload)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"cannot write {self.path}: {e}") from e
        logger.debug("Saved %d bytes to %s", len(payload), self.path)
