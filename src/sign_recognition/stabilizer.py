"""Temporal debounce of per-frame classifications."""

from collections import Counter, deque

from .config import HISTORY_SIZE, HISTORY_SLACK


class Stabilizer:
    """
    Super-majority vote over the most recent confident labels.

    Only frames that produced a vote are pushed, so the window counts votes,
    not frames. The window is not cleared after an emission: a held sign is
    reported again on every following vote while it keeps its majority.
    """

    def __init__(self, window_size: int = HISTORY_SIZE, min_agreement: int | None = None):
        if window_size < 1:
            raise ValueError("window_size must be >= 1")
        if min_agreement is None:
            min_agreement = max(1, window_size - HISTORY_SLACK)
        self.window_size = window_size
        self.min_agreement = min_agreement
        self._history: deque[str] = deque(maxlen=window_size)

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def update(self, label: str) -> str | None:
        """Push one vote and return the label to emit, if any."""
        self._history.append(label)
        return self.decision()

    def decision(self) -> str | None:
        """Most frequent label in the window if it reaches ``min_agreement``."""
        if not self._history:
            return None
        label, count = Counter(self._history).most_common(1)[0]
        if count >= self.min_agreement:
            return label
        return None

    def reset(self) -> None:
        self._history.clear()
