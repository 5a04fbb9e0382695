import unittest

from posture_core.errors import DegenerateGeometryError
from posture_core.geometry import angle_deg, midpoint, polar_deg, tilt_percent
from posture_core.types import Point2D


class TestAngle(unittest.TestCase):
    """Angle at a vertex between two rays"""

    def test_right_angle(self):
        self.assertEqual(angle_deg(Point2D(1, 0), Point2D(0, 0), Point2D(0, 1)), 90.0)

    def test_straight_line(self):
        self.assertEqual(angle_deg(Point2D(-1, 0), Point2D(0, 0), Point2D(1, 0)), 180.0)

    def test_order_of_rays_does_not_matter(self):
        a = angle_deg(Point2D(3, 1), Point2D(1, 1), Point2D(2, 5))
        b = angle_deg(Point2D(2, 5), Point2D(1, 1), Point2D(3, 1))
        self.assertAlmostEqual(a, b)

    def test_reflex_difference_is_folded(self):
        # 极角 -135 与 135，差 270 -> 90
        angle = angle_deg(Point2D(-1, -1), Point2D(0, 0), Point2D(-1, 1))
        self.assertAlmostEqual(angle, 90.0)

    def test_result_stays_in_range(self):
        points = [Point2D(x, y) for x in (-3, 0, 2) for y in (-2, 1, 4)]
        vertex = Point2D(0.5, 0.5)
        for p1 in points:
            for p3 in points:
                angle = angle_deg(p1, vertex, p3)
                self.assertGreaterEqual(angle, 0.0)
                self.assertLessEqual(angle, 180.0)

    def test_zero_length_ray_returns_zero(self):
        self.assertEqual(angle_deg(Point2D(0, 0), Point2D(0, 0), Point2D(1, 1)), 0.0)
        self.assertEqual(angle_deg(Point2D(1, 1), Point2D(0, 0), Point2D(0, 0)), 0.0)


class TestPrimitives(unittest.TestCase):

    def test_polar_deg(self):
        self.assertEqual(polar_deg(Point2D(0, 0), Point2D(0, 5)), 90.0)
        self.assertEqual(polar_deg(Point2D(0, 0), Point2D(5, 0)), 0.0)

    def test_midpoint(self):
        self.assertEqual(midpoint(Point2D(0, 0), Point2D(10, 4)), Point2D(5, 2))

    def test_tilt_percent(self):
        self.assertAlmostEqual(tilt_percent(Point2D(0, 0), Point2D(100, 20)), 20.0)
        self.assertAlmostEqual(tilt_percent(Point2D(100, 20), Point2D(0, 0)), 20.0)
        self.assertEqual(tilt_percent(Point2D(0, 7), Point2D(50, 7)), 0.0)

    def test_tilt_zero_width_raises(self):
        with self.assertRaises(DegenerateGeometryError):
            tilt_percent(Point2D(10, 0), Point2D(10, 30))

    def test_tilt_overflow_raises(self):
        with self.assertRaises(DegenerateGeometryError):
            tilt_percent(Point2D(1e308, 1e308), Point2D(-1e308, -1e308))
        with self.assertRaises(DegenerateGeometryError):
            tilt_percent(Point2D(0, 1e308), Point2D(1, -1e308))


if __name__ == "__main__":
    unittest.main()
