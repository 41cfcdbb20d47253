import math
import unittest

from nxt_arm.exceptions import InvalidGeometryError
from nxt_arm.kinematics import ArmKinematics
from nxt_arm.types import ArmGeometry, CartesianPosition, JointAngles

UPPER_ARM_LENGTH = 150.0
FOREARM_LENGTH = 120.0
TOLERANCE = 0.1  # mm


class TestReach(unittest.TestCase):
    def setUp(self):
        self.ik = ArmKinematics(UPPER_ARM_LENGTH, FOREARM_LENGTH)

    def test_max_reach_is_sum_of_lengths(self):
        self.assertEqual(self.ik.max_reach, 270.0)

    def test_min_reach_is_difference_of_lengths(self):
        self.assertEqual(self.ik.min_reach, 30.0)

    def test_reach_for_other_geometries(self):
        for l1, l2 in [(1.0, 1.0), (50.0, 200.0), (0.5, 3.25)]:
            geometry = ArmGeometry(l1, l2)
            self.assertAlmostEqual(geometry.max_reach, l1 + l2)
            self.assertAlmostEqual(geometry.min_reach, abs(l1 - l2))

    def test_is_reachable(self):
        for x, y in [(100, 100), (200, 50), (270, 0), (0, 30)]:
            self.assertTrue(self.ik.is_reachable(CartesianPosition(x, y)), (x, y))
        for x, y in [(300, 0), (0, 0), (10, 10), (0, 29.9)]:
            self.assertFalse(self.ik.is_reachable(CartesianPosition(x, y)), (x, y))

    def test_is_reachable_agrees_with_calculate_angles(self):
        for x in range(-300, 301, 15):
            for y in range(-300, 301, 15):
                target = CartesianPosition(float(x), float(y))
                solved = self.ik.calculate_angles(target) is not None
                self.assertEqual(solved, self.ik.is_reachable(target), (x, y))


class TestGeometryValidation(unittest.TestCase):
    def test_non_positive_lengths_rejected(self):
        nan, inf = float("nan"), float("inf")
        for l1, l2 in [(0, 120), (150, 0), (-1, 120), (150, -5),
                       (nan, 120), (150, nan), (inf, 120), (150, inf), (-inf, 120)]:
            with self.subTest(l1=l1, l2=l2):
                with self.assertRaises(InvalidGeometryError):
                    ArmKinematics(l1, l2)

    def test_geometry_error_is_value_error(self):
        with self.assertRaises(ValueError):
            ArmGeometry(0.0, 0.0)


class TestInverseKinematics(unittest.TestCase):
    def setUp(self):
        self.ik = ArmKinematics(UPPER_ARM_LENGTH, FOREARM_LENGTH)

    def assertRoundTrip(self, x, y, elbow_up=True):
        angles = self.ik.calculate_angles(CartesianPosition(x, y), elbow_up=elbow_up)
        self.assertIsNotNone(angles, f"No solution for ({x}, {y})")
        result = self.ik.calculate_position(angles)
        self.assertLess(abs(result.x - x), TOLERANCE,
                        f"X mismatch for ({x}, {y}): got {result.x:.3f}, angles {angles}")
        self.assertLess(abs(result.y - y), TOLERANCE,
                        f"Y mismatch for ({x}, {y}): got {result.y:.3f}, angles {angles}")

    def test_round_trip(self):
        for x, y in [(270, 0), (0, 270), (150, 150), (2, 150), (100, 100), (-100, 100), (0, 150)]:
            with self.subTest(x=x, y=y):
                self.assertRoundTrip(x, y)

    def test_round_trip_near_min_reach(self):
        self.assertRoundTrip(30.0, 0.0)
        self.assertRoundTrip(0.0, -30.5)

    def test_round_trip_grid(self):
        for x in range(-260, 261, 20):
            for y in range(-260, 261, 20):
                if self.ik.is_reachable(CartesianPosition(x, y)):
                    with self.subTest(x=x, y=y):
                        self.assertRoundTrip(float(x), float(y))

    def test_unreachable_targets(self):
        for x, y in [(300, 0), (0, 300), (10, 10), (0, 0)]:
            with self.subTest(x=x, y=y):
                self.assertIsNone(self.ik.calculate_angles(CartesianPosition(x, y)))

    def test_origin_is_singular_even_when_reachable(self):
        ik = ArmKinematics(100.0, 100.0)
        self.assertTrue(ik.is_reachable(CartesianPosition(0.0, 0.0)))
        self.assertIsNone(ik.calculate_angles(CartesianPosition(0.0, 0.0)))
        self.assertIsNone(ik.calculate_angles(CartesianPosition(0.0005, 0.0)))

    def test_fully_extended_reads_zero_elbow(self):
        angles = self.ik.calculate_angles(CartesianPosition(270.0, 0.0))
        self.assertAlmostEqual(angles.shoulder, 0.0, places=6)
        self.assertAlmostEqual(angles.elbow, 0.0, places=6)

    def test_elbow_down_mirrors_elbow_up(self):
        target = CartesianPosition(150.0, 150.0)
        up = self.ik.calculate_angles(target)
        down = self.ik.calculate_angles(target, elbow_up=False)
        # Motor elbow is 180 - beta for elbow up, 180 + beta for elbow down
        self.assertAlmostEqual(up.elbow + down.elbow, 360.0, places=6)
        # Shoulders lie symmetric about the line to the target
        self.assertAlmostEqual((up.shoulder + down.shoulder) / 2, 45.0, places=6)
        self.assertGreater(up.shoulder, down.shoulder)

    def test_elbow_down_round_trip(self):
        for x, y in [(150, 150), (2, 150), (-100, 100)]:
            with self.subTest(x=x, y=y):
                self.assertRoundTrip(x, y, elbow_up=False)


class TestForwardKinematics(unittest.TestCase):
    def setUp(self):
        self.ik = ArmKinematics(UPPER_ARM_LENGTH, FOREARM_LENGTH)

    def test_home_pose(self):
        # Upper arm straight up, forearm at a right angle pointing along +x
        position = self.ik.calculate_position(JointAngles(90.0, 90.0))
        self.assertAlmostEqual(position.x, 120.0, places=6)
        self.assertAlmostEqual(position.y, 150.0, places=6)

    def test_fully_folded(self):
        position = self.ik.calculate_position(JointAngles(0.0, 180.0))
        self.assertAlmostEqual(position.x, 30.0, places=6)
        self.assertAlmostEqual(position.y, 0.0, places=6)
        self.assertAlmostEqual(math.hypot(position.x, position.y), self.ik.min_reach, places=6)


if __name__ == '__main__':
    unittest.main()
