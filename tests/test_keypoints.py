import math
import unittest

from posture_core.errors import LowConfidenceError, MissingLandmarksError
from posture_core.keypoints import find_required, index_landmarks
from posture_core.types import Keypoint, LandmarkName


def _torso(confidence=0.9):
    return [
        Keypoint("left_shoulder", 100, 100, confidence),
        Keypoint("right_shoulder", 300, 100, confidence),
        Keypoint("left_hip", 120, 400, confidence),
        Keypoint("right_hip", 280, 400, confidence),
    ]


class TestIndexLandmarks(unittest.TestCase):

    def test_covers_whole_vocabulary(self):
        index = index_landmarks([])
        self.assertEqual(set(index), set(LandmarkName))
        self.assertTrue(all(v is None for v in index.values()))

    def test_first_match_wins(self):
        first = Keypoint("nose", 1, 1, 0.5)
        second = Keypoint("nose", 2, 2, 0.9)
        index = index_landmarks([first, second])
        self.assertIs(index[LandmarkName.NOSE], first)

    def test_unknown_names_ignored(self):
        index = index_landmarks([Keypoint("tail", 0, 0, 1.0)])
        self.assertTrue(all(v is None for v in index.values()))


class TestFindRequired(unittest.TestCase):

    def test_complete_set(self):
        kps = _torso() + [Keypoint("nose", 200, 50, 0.99)]
        found = find_required(kps)
        self.assertEqual(found.left_shoulder.x, 100)
        self.assertEqual(found.right_hip.x, 280)

    def test_missing_landmark(self):
        kps = [kp for kp in _torso() if kp.name != "left_hip"]
        with self.assertRaises(MissingLandmarksError) as ctx:
            find_required(kps)
        self.assertEqual(ctx.exception.names, ("left_hip",))

    def test_empty_set_is_missing(self):
        with self.assertRaises(MissingLandmarksError):
            find_required([])

    def test_missing_checked_before_confidence(self):
        kps = [kp for kp in _torso(0.1) if kp.name != "right_shoulder"]
        with self.assertRaises(MissingLandmarksError):
            find_required(kps)

    def test_low_confidence(self):
        kps = _torso()
        kps[2] = Keypoint("left_hip", 120, 400, 0.1)
        with self.assertRaises(LowConfidenceError) as ctx:
            find_required(kps)
        self.assertEqual(ctx.exception.names, ("left_hip",))

    def test_absent_confidence_treated_as_zero(self):
        with self.assertRaises(LowConfidenceError):
            find_required(_torso(None))

    def test_nan_confidence_rejected(self):
        with self.assertRaises(LowConfidenceError):
            find_required(_torso(float("nan")))

    def test_threshold_is_inclusive(self):
        find_required(_torso(0.3))

    def test_custom_threshold(self):
        with self.assertRaises(LowConfidenceError):
            find_required(_torso(0.5), min_confidence=0.6)

    def test_non_finite_coordinate_rejected(self):
        kps = _torso()
        kps[0] = Keypoint("left_shoulder", math.inf, 100, 0.9)
        with self.assertRaises(LowConfidenceError):
            find_required(kps)

    def test_duplicate_uses_first_entry(self):
        kps = [Keypoint("left_shoulder", 0, 0, 0.1)] + _torso()
        with self.assertRaises(LowConfidenceError):
            find_required(kps)

        kps = _torso() + [Keypoint("left_shoulder", 0, 0, 0.1)]
        self.assertEqual(find_required(kps).left_shoulder.confidence, 0.9)


class TestKeypointFromMapping(unittest.TestCase):

    def test_score_field(self):
        kp = Keypoint.from_mapping({"name": "left_hip", "x": 1, "y": 2, "score": 0.7})
        self.assertEqual(kp, Keypoint("left_hip", 1.0, 2.0, 0.7))

    def test_confidence_field_and_absent(self):
        kp = Keypoint.from_mapping({"name": "nose", "x": 1, "y": 2, "confidence": 0.4})
        self.assertEqual(kp.confidence, 0.4)
        kp = Keypoint.from_mapping({"name": "nose", "x": 1, "y": 2})
        self.assertIsNone(kp.confidence)


if __name__ == "__main__":
    unittest.main()
