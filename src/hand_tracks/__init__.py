"""Hand tracking: MediaPipe detection and landmark conversion.

``HandTracker`` needs the optional capture dependencies and is imported from
``src.hand_tracks.hand_tracker`` directly.
"""

from .landmarks import hands_from_results

__all__ = [
    "hands_from_results",
]
