"""
Tests for planar vectors.
"""

import math
import unittest

from dronefleet.geometry import ZERO, Vector2D


class TestVector2D(unittest.TestCase):
    """Test Vector2D class."""

    def test_length(self):
        """Test Euclidean norm."""
        self.assertEqual(Vector2D(3, 4).length(), 5.0)
        self.assertEqual(ZERO.length(), 0.0)

    def test_arithmetic(self):
        """Test addition, subtraction, negation and scaling."""
        a = Vector2D(1, 2)
        b = Vector2D(3, -1)
        self.assertEqual(a + b, Vector2D(4, 1))
        self.assertEqual(a - b, Vector2D(-2, 3))
        self.assertEqual(-a, Vector2D(-1, -2))
        self.assertEqual(2 * a, Vector2D(2, 4))
        self.assertEqual(a * 0.5, Vector2D(0.5, 1.0))

    def test_dot_and_cross(self):
        """Test dot and cross products."""
        a = Vector2D(1, 2)
        b = Vector2D(3, 4)
        self.assertEqual(a.dot(b), 11.0)
        self.assertEqual(a @ b, 11.0)
        self.assertEqual(a.cross(b), -2.0)
        self.assertEqual(b.cross(a), 2.0)

    def test_normalized(self):
        """Test normalisation keeps direction and has unit length."""
        n = Vector2D(3, 4).normalized()
        self.assertAlmostEqual(n.length(), 1.0)
        self.assertAlmostEqual(n.x, 0.6)
        self.assertAlmostEqual(n.y, 0.8)

    def test_normalized_zero_raises(self):
        """Test normalising the null vector raises."""
        with self.assertRaises(ZeroDivisionError):
            ZERO.normalized()
        with self.assertRaises(ZeroDivisionError):
            ZERO.ortho_normed()

    def test_ortho_normed(self):
        """Test the orthogonal unit vector is (y, -x) / length."""
        o = Vector2D(0, 2).ortho_normed()
        self.assertAlmostEqual(o.x, 1.0)
        self.assertAlmostEqual(o.y, 0.0)
        self.assertAlmostEqual(o.dot(Vector2D(0, 2)), 0.0)

    def test_distance_symmetry(self):
        """Test that distance is symmetric."""
        a = Vector2D(1, 2)
        b = Vector2D(4, 6)
        self.assertEqual(a.distance_to(b), 5.0)
        self.assertEqual(a.distance_to(b), b.distance_to(a))

    def test_from_str(self):
        """Test parsing of "x,y" strings."""
        self.assertEqual(Vector2D.from_str("120,80.5"), Vector2D(120, 80.5))
        self.assertEqual(Vector2D.from_str(" 1 , -2 "), Vector2D(1, -2))
        for text in ("1;2", "1,2,3", "a,b", ""):
            with self.assertRaises(ValueError):
                Vector2D.from_str(text)

    def test_unpacking(self):
        """Test iteration and indexing."""
        x, y = Vector2D(7, 9)
        self.assertEqual((x, y), (7, 9))
        self.assertEqual(Vector2D(7, 9)[1], 9)
        self.assertTrue(math.isclose(Vector2D(7, 9)[0], 7))
        self.assertEqual(Vector2D(7, 9)[-1], 9)
        self.assertEqual(Vector2D(7, 9)[-2], 7)

    def test_index_out_of_range(self):
        """Test indexes other than 0/1 (or -2/-1) raise IndexError."""
        for i in (2, 5, -3):
            with self.assertRaises(IndexError):
                Vector2D(1, 2)[i]


if __name__ == "__main__":
    unittest.main()
