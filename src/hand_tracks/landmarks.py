"""Conversion of MediaPipe Hands results into HandPose observations."""

from ..sign_recognition.features import HandPose, get_handedness_label


def hands_from_results(results, invert_handedness: bool = False) -> list[HandPose]:
    """
    Build one HandPose per detected hand.

    Args:
        results: Output of ``mediapipe.solutions.hands.Hands.process``
        invert_handedness: Swap Left/Right (mirrored or behind-hands views)

    Returns:
        Hands in detector order; empty if nothing was detected
    """
    if results is None or not results.multi_hand_landmarks:
        return []

    handedness = results.multi_handedness or []
    hands = []
    for i, hand_lms in enumerate(results.multi_hand_landmarks):
        side = get_handedness_label(handedness[i], invert_handedness) if i < len(handedness) else "Right"
        hands.append(HandPose.from_points(
            ((lm.x, lm.y, lm.z) for lm in hand_lms.landmark),
            handedness=side,
        ))
    return hands
