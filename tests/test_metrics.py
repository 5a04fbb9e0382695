import math
import unittest

from posture_core.config import DEGENERATE_TILT, PostureConfig
from posture_core.keypoints import RequiredLandmarks
from posture_core.metrics import compute_metrics
from posture_core.types import Keypoint


def _landmarks(ls, rs, lh, rh):
    return RequiredLandmarks(
        Keypoint("left_shoulder", *ls, 0.9),
        Keypoint("right_shoulder", *rs, 0.9),
        Keypoint("left_hip", *lh, 0.9),
        Keypoint("right_hip", *rh, 0.9),
    )


class TestComputeMetrics(unittest.TestCase):

    def test_level_upright(self):
        m = compute_metrics(_landmarks((100, 100), (300, 100), (120, 400), (280, 400)))
        self.assertEqual(m.shoulder_tilt, 0.0)
        self.assertEqual(m.hip_tilt, 0.0)
        self.assertEqual(m.spine_angle, 0.0)

    def test_shoulder_tilt(self):
        m = compute_metrics(_landmarks((0, 0), (100, 20), (10, 300), (90, 300)))
        self.assertAlmostEqual(m.shoulder_tilt, 20.0)
        self.assertEqual(m.hip_tilt, 0.0)

    def test_tilt_is_scale_invariant(self):
        near = compute_metrics(_landmarks((0, 0), (400, 40), (0, 900), (400, 900)))
        far = compute_metrics(_landmarks((0, 0), (100, 10), (0, 225), (100, 225)))
        self.assertAlmostEqual(near.shoulder_tilt, far.shoulder_tilt)

    def test_spine_lean(self):
        # 肩中点 (150,0)，髋中点 (50,100)：与竖直方向偏 45°
        m = compute_metrics(_landmarks((100, 0), (200, 0), (0, 100), (100, 100)))
        self.assertAlmostEqual(m.spine_angle, 45.0)

    def test_spine_unsigned(self):
        left = compute_metrics(_landmarks((100, 0), (200, 0), (0, 100), (100, 100)))
        right = compute_metrics(_landmarks((100, 0), (200, 0), (200, 100), (300, 100)))
        self.assertAlmostEqual(left.spine_angle, right.spine_angle)

    def test_zero_width_uses_sentinel(self):
        m = compute_metrics(_landmarks((50, 0), (50, 10), (0, 300), (100, 300)))
        self.assertEqual(m.shoulder_tilt, DEGENERATE_TILT)
        self.assertEqual(m.hip_tilt, 0.0)

    def test_sentinel_is_configurable(self):
        cfg = PostureConfig(degenerate_tilt=55.0)
        m = compute_metrics(_landmarks((0, 0), (100, 0), (40, 300), (40, 320)), cfg)
        self.assertEqual(m.hip_tilt, 55.0)

    def test_overflowing_coordinates_use_sentinel(self):
        m = compute_metrics(_landmarks((1e308, 1e308), (-1e308, -1e308), (-100, 300), (100, 300)))
        self.assertEqual(m.shoulder_tilt, DEGENERATE_TILT)
        self.assertEqual(m.hip_tilt, 0.0)
        self.assertTrue(all(math.isfinite(v) for v in (m.shoulder_tilt, m.hip_tilt, m.spine_angle)))

        m = compute_metrics(_landmarks((0, 0), (100, 0), (0, 1e308), (1, -1e308)))
        self.assertEqual(m.hip_tilt, DEGENERATE_TILT)

    def test_coincident_centers(self):
        m = compute_metrics(_landmarks((0, 0), (0, 0), (0, 0), (0, 0)))
        self.assertEqual(m.shoulder_tilt, DEGENERATE_TILT)
        self.assertEqual(m.hip_tilt, DEGENERATE_TILT)
        self.assertEqual(m.spine_angle, 90.0)


if __name__ == "__main__":
    unittest.main()
