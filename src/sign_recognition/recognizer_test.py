"""Unit tests for the recognizer facade."""

import json
import unittest

import numpy as np

from src.sign_recognition.classifier import KNNClassifier
from src.sign_recognition.config import RecognizerConfig
from src.sign_recognition.features import HandPose, extract_features
from src.sign_recognition.recognizer import SignRecognizer


def _hand(seed: int, side: str = "Right") -> HandPose:
    rng = np.random.default_rng(seed)
    return HandPose.from_points(rng.uniform(0.0, 1.0, size=(21, 3)), handedness=side)


class TestSignRecognizer(unittest.TestCase):

    def setUp(self):
        self.recognizer = SignRecognizer(KNNClassifier(rng=np.random.default_rng(0)))
        self.hand = _hand(20)

    def test_empty_hands(self):
        self.recognizer.classifier.add_sample("A", [self.hand])
        self.assertIsNone(self.recognizer.predict([]))
        self.assertEqual(self.recognizer.stabilizer.history, [])

    def test_untrained(self):
        self.assertIsNone(self.recognizer.predict([self.hand]))

    def test_emits_after_ten_confident_frames(self):
        self.recognizer.classifier.add_sample("A", [self.hand])
        for _ in range(9):
            self.assertIsNone(self.recognizer.predict([self.hand]))
        self.assertEqual(self.recognizer.predict([self.hand]), "A")
        self.assertEqual(self.recognizer.predict([self.hand]), "A")

    def test_low_confidence_does_not_vote(self):
        features = extract_features([self.hand])
        records = [
            {"label": label, "features": features.tolist(), "handCount": 1}
            for label in ("A", "B", "C")
        ]
        self.recognizer.classifier.import_model(json.dumps(records))

        for _ in range(15):
            self.assertIsNone(self.recognizer.predict([self.hand]))
        self.assertEqual(self.recognizer.stabilizer.history, [])

    def test_confidence_gate_is_strict(self):
        # 2 of 3 neighbors agree: 0.667 passes the default 0.6 gate but not 2/3
        features = extract_features([self.hand])
        records = [
            {"label": label, "features": features.tolist(), "handCount": 1}
            for label in ("A", "A", "B")
        ]
        config = RecognizerConfig(min_confidence=2 / 3)
        recognizer = SignRecognizer(KNNClassifier(config=config), config=config)
        recognizer.classifier.import_model(json.dumps(records))

        recognizer.predict([self.hand])
        self.assertEqual(recognizer.stabilizer.history, [])

        self.recognizer.classifier.import_model(json.dumps(records))
        self.recognizer.predict([self.hand])
        self.assertEqual(self.recognizer.stabilizer.history, ["A"])

    def test_training_bypasses_stabilizer(self):
        self.recognizer.classifier.add_sample("A", [self.hand])
        self.recognizer.classifier.clear_samples()
        self.assertEqual(self.recognizer.stabilizer.history, [])

    def test_rejects_conflicting_config(self):
        classifier = KNNClassifier(config=RecognizerConfig(k=5))
        with self.assertRaises(ValueError):
            SignRecognizer(classifier, config=RecognizerConfig(min_confidence=0.9))

    def test_shares_classifier_config(self):
        classifier = KNNClassifier(config=RecognizerConfig(history_size=6))
        recognizer = SignRecognizer(classifier)
        self.assertIs(recognizer.config, classifier.config)
        self.assertEqual(recognizer.stabilizer.window_size, 6)

        same = SignRecognizer(classifier, config=RecognizerConfig(history_size=6))
        self.assertIs(same.config, classifier.config)

    def test_uses_config_window(self):
        config = RecognizerConfig(history_size=4)
        recognizer = SignRecognizer(config=config)
        self.assertEqual(recognizer.stabilizer.window_size, 4)
        self.assertEqual(recognizer.stabilizer.min_agreement, 2)

        recognizer.classifier.add_sample("A", [self.hand])
        self.assertIsNone(recognizer.predict([self.hand]))
        self.assertEqual(recognizer.predict([self.hand]), "A")


if __name__ == "__main__":
    unittest.main()
