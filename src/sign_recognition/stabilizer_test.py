"""Unit tests for the temporal stabilizer."""

import unittest

from src.sign_recognition.stabilizer import Stabilizer


class TestStabilizer(unittest.TestCase):

    def setUp(self):
        self.stabilizer = Stabilizer()

    def _feed(self, labels):
        out = None
        for label in labels:
            out = self.stabilizer.update(label)
        return out

    def test_defaults(self):
        self.assertEqual(self.stabilizer.window_size, 12)
        self.assertEqual(self.stabilizer.min_agreement, 10)

    def test_nine_of_twelve_is_not_enough(self):
        self.assertIsNone(self._feed(["A"] * 9 + ["B"] * 3))

    def test_ten_of_twelve_emits(self):
        self.assertEqual(self._feed(["A"] * 10 + ["B"] * 2), "A")

    def test_no_emission_before_enough_votes(self):
        for _ in range(9):
            self.assertIsNone(self.stabilizer.update("A"))
        self.assertEqual(self.stabilizer.update("A"), "A")

    def test_keeps_emitting_while_held(self):
        self._feed(["A"] * 10)
        for _ in range(5):
            self.assertEqual(self.stabilizer.update("A"), "A")

    def test_window_drops_oldest(self):
        self._feed(["A"] * 12)
        self.assertEqual(len(self.stabilizer.history), 12)
        self.assertEqual(self._feed(["B"] * 2), "A")
        self.assertIsNone(self.stabilizer.update("B"))
        self.assertEqual(self._feed(["B"] * 7), "B")
        self.assertEqual(self.stabilizer.history, ["A"] * 2 + ["B"] * 10)

    def test_decision_without_push(self):
        self.assertIsNone(self.stabilizer.decision())
        self._feed(["A"] * 10)
        self.assertEqual(self.stabilizer.decision(), "A")
        self.assertEqual(len(self.stabilizer.history), 10)

    def test_reset(self):
        self._feed(["A"] * 12)
        self.stabilizer.reset()
        self.assertEqual(self.stabilizer.history, [])
        self.assertIsNone(self.stabilizer.decision())

    def test_custom_window(self):
        stabilizer = Stabilizer(window_size=5, min_agreement=4)
        for label in ["A", "B", "A", "A"]:
            self.assertIsNone(stabilizer.update(label))
        self.assertEqual(stabilizer.update("A"), "A")

    def test_invalid_window(self):
        with self.assertRaises(ValueError):
            Stabilizer(window_size=0)


if __name__ == "__main__":
    unittest.main()
