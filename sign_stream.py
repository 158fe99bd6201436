"""
SignStream webcam loop.

Combines:
- MediaPipe hand detection
- k-NN sign classification with temporal debounce
- Text composition with ThumbsUp confirm / ThumbsDown reject
- Training mode for recording, exporting and importing samples
"""

import json
import logging
import time
from pathlib import Path

import cv2

from src.hand_tracks.hand_tracker import HandTracker
from src.sign_recognition import (
    MAX_NUM_HANDS,
    JsonFileStorage,
    RecognizerConfig,
    SignRecognizer,
    TextComposer,
    training_labels,
)
from src.sign_recognition.config import DEFAULT_MODEL_PATH

logger = logging.getLogger("sign_stream")


INSTRUCTIONS = """
==================================================
SignStream
==================================================

Sign a letter, then ThumbsUp to confirm or ThumbsDown to reject.

Controls:
  't'        - Toggle training mode
  '[' / ']'  - Previous / next training label (add phrases with --label)
  SPACE      - Record a sample for the training label
  'c'        - Clear all samples
  'e'        - Export model to a dated JSON file
  'i'        - Import model from --import-path
  'x'        - Clear text
  'q' or ESC - Quit
"""


def _draw_overlay(frame, overlay: list[str]):
    """Draw text overlay on frame."""
    if not overlay:
        return
    x0, y0, line_h = 12, 22, 22
    max_chars = max(len(s) for s in overlay)
    box_w = min(16 + max_chars * 9, frame.shape[1] - 24)
    box_h = 12 + line_h * len(overlay)

    cv2.rectangle(frame, (8, 8), (8 + box_w, 8 + box_h), (0, 0, 0), -1)
    for i, s in enumerate(overlay):
        cv2.putText(frame, s, (x0, y0 + i * line_h),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 2, cv2.LINE_AA)


def _format_counts(counts: dict[str, int], limit: int = 8) -> str:
    if not counts:
        return "Samples: none"
    items = sorted(counts.items(), key=lambda kv: -kv[1])[:limit]
    return "Samples: " + " ".join(f"{k}={v}" for k, v in items)


def load_config(path: str | None) -> RecognizerConfig:
    """Load recognizer overrides from a JSON file, falling back to defaults."""
    if not path:
        return RecognizerConfig()
    try:
        with open(path, "r", encoding="utf-8") as f:
            return RecognizerConfig.from_dict(json.load(f))
    except (OSError, ValueError) as e:
        logger.warning("Failed to load config %s, using defaults: %s", path, e)
        return RecognizerConfig()


def export_model(recognizer: SignRecognizer, directory: Path) -> Path:
    """Write the current model next to the others as signstream_model_<date>.json."""
    path = directory / f"signstream_model_{time.strftime('%Y-%m-%d')}.json"
    path.write_bytes(recognizer.classifier.export_model())
    return path


def run_sign_stream(
    camera_index: int = 0,
    model_path: str = DEFAULT_MODEL_PATH,
    config_path: str | None = None,
    import_path: str | None = None,
    max_num_hands: int = MAX_NUM_HANDS,
    invert_handedness: bool = False,
    mirror: bool = True,
    custom_labels: list[str] | None = None,
):
    """Run the capture loop until 'q' or ESC."""
    print(INSTRUCTIONS)

    config = load_config(config_path)
    recognizer = SignRecognizer(config=config, storage=JsonFileStorage(model_path))
    composer = TextComposer(recognizer.classifier)
    labels = training_labels(custom_labels or ())
    label_idx = labels.index("A")
    status = ""

    cap = cv2.VideoCapture(camera_index)
    if not cap.isOpened():
        logger.error("Cannot open camera %d", camera_index)
        return

    try:
        with HandTracker(max_num_hands=max_num_hands, invert_handedness=invert_handedness) as tracker:
            while True:
                ok, frame = cap.read()
                if not ok:
                    logger.error("Camera stopped delivering frames")
                    break
                if mirror:
                    frame = cv2.flip(frame, 1)

                hands = tracker.detect(frame)
                prediction = recognizer.predict(hands)
                event = composer.handle_prediction(prediction, hands)
                if event is not None:
                    logger.info("%s: %s", event.kind, event.label)

                tracker.draw_landmarks(frame)
                overlay = [
                    f"Hands: {len(hands)}",
                    f"Mode: {'TRAINING' if composer.training else 'SPELLING'}",
                    f"Pending: {composer.pending or '-'}",
                    f"Text: {composer.text[-40:]}",
                ]
                if composer.training:
                    overlay.append(f"Label: {labels[label_idx]}")
                    overlay.append(_format_counts(recognizer.classifier.sample_counts()))
                if status:
                    overlay.append(status)
                _draw_overlay(frame, overlay)

                cv2.imshow("SignStream", frame)

                key = cv2.waitKey(1) & 0xFF
                if key in (ord("q"), 27):
                    break
                elif key == ord("t"):
                    composer.training = not composer.training
                elif key == ord("]"):
                    label_idx = (label_idx + 1) % len(labels)
                elif key == ord("["):
                    label_idx = (label_idx - 1) % len(labels)
                elif key == ord(" ") and composer.training:
                    added = recognizer.classifier.add_sample(labels[label_idx], hands)
                    status = f"Added {added} samples" if added else "No hands to record"
                elif key == ord("c"):
                    recognizer.classifier.clear_samples()
                    status = "Cleared samples"
                elif key == ord("e"):
                    try:
                        status = f"Exported {export_model(recognizer, Path(model_path).parent)}"
                    except OSError as e:
                        logger.warning("Export failed: %s", e)
                        status = "Export failed"
                elif key == ord("i"):
                    if not import_path:
                        status = "No --import-path given"
                    else:
                        try:
                            imported = recognizer.classifier.import_model(Path(import_path).read_bytes())
                        except OSError as e:
                            logger.warning("Cannot read %s: %s", import_path, e)
                            imported = False
                        status = "Model imported" if imported else "Import failed"
                elif key == ord("x"):
                    composer.clear_text()
    finally:
        cap.release()
        cv2.destroyAllWindows()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="SignStream sign language to text")
    parser.add_argument("-c", "--camera", type=int, default=0, help="Camera index")
    parser.add_argument("-m", "--model", type=str, default=DEFAULT_MODEL_PATH, help="Model JSON file")
    parser.add_argument("--config", type=str, default=None, help="JSON file with recognizer overrides")
    parser.add_argument("--import-path", type=str, default=None, help="Model JSON to load with 'i'")
    parser.add_argument("--max-hands", type=int, default=MAX_NUM_HANDS, help="Maximum hands to detect")
    parser.add_argument("--invert-handedness", action="store_true", help="Swap Left/Right labels")
    parser.add_argument("--no-mirror", action="store_true", help="Do not mirror the camera image")
    parser.add_argument("--label", action="append", default=[], dest="labels",
                        help="Extra training label or phrase (repeatable)")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="[%(asctime)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    run_sign_stream(
        camera_index=args.camera,
        model_path=args.model,
        config_path=args.config,
        import_path=args.import_path,
        max_num_hands=args.max_hands,
        invert_handedness=args.invert_handedness,
        mirror=not args.no_mirror,
        custom_labels=args.labels,
    )
