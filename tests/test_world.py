"""
Tests for servers, colours and the nearest-server classifier.
"""

import unittest

import numpy as np

from dronefleet.config import BACKGROUND_COLOR
from dronefleet.geometry import Vector2D
from dronefleet.world import (
    Server,
    VoronoiClassifier,
    adjust_lightness,
    lightness,
    parse_color,
    to_hex,
)

RED = (255, 0, 0)
BLUE = (0, 0, 255)


class TestColor(unittest.TestCase):
    """Test colour helpers."""

    def test_parse_color(self):
        """Test named and hex colours."""
        self.assertEqual(parse_color("red"), RED)
        self.assertEqual(parse_color("#0000ff"), BLUE)
        with self.assertRaises(ValueError):
            parse_color("not-a-colour")

    def test_lightness(self):
        """Test HSL lightness on a 0-255 scale."""
        self.assertEqual(lightness((0, 0, 0)), 0)
        self.assertEqual(lightness((255, 255, 255)), 255)
        self.assertEqual(lightness(RED), 128)

    def test_adjust_lightness(self):
        """Test lightness shifts keep the hue and clamp."""
        lighter = adjust_lightness(RED, 20)
        darker = adjust_lightness(RED, -10)
        self.assertAlmostEqual(lightness(lighter), 148, delta=1)
        self.assertAlmostEqual(lightness(darker), 118, delta=1)
        self.assertEqual(lighter[0], max(lighter))
        self.assertEqual(adjust_lightness((255, 255, 255), 20), (255, 255, 255))
        self.assertEqual(adjust_lightness((0, 0, 0), -10), (0, 0, 0))

    def test_to_hex(self):
        self.assertEqual(to_hex((255, 128, 0)), "#ff8000")


class TestServer(unittest.TestCase):
    """Test Server class."""

    def test_clear_keeps_identity(self):
        """Test clear only drops neighbours."""
        a = Server("A", Vector2D(0, 0), RED)
        b = Server("B", Vector2D(1, 0), BLUE)
        a.add_neighbor(b)
        self.assertEqual(a.neighbors, [b])
        a.clear()
        self.assertEqual(a.neighbors, [])
        self.assertEqual((a.name, a.position, a.color), ("A", Vector2D(0, 0), RED))


class TestVoronoiClassifier(unittest.TestCase):
    """Test VoronoiClassifier class."""

    def setUp(self):
        self.a = Server("A", Vector2D(0, 0), RED)
        self.b = Server("B", Vector2D(100, 0), BLUE)
        self.voronoi = VoronoiClassifier([self.a, self.b])

    def test_two_servers(self):
        """Test classification on both sides of the bisector."""
        self.assertIs(self.voronoi.classify(Vector2D(90, 0))[0], self.b)
        self.assertIs(self.voronoi.classify(Vector2D(10, 0))[0], self.a)

    def test_tie_goes_to_first_server(self):
        """Test equidistant points go to the first server in the list."""
        self.assertIs(self.voronoi.classify(Vector2D(50, 0))[0], self.a)
        self.assertIs(self.voronoi.classify(Vector2D(50, 30))[0], self.a)
        reversed_voronoi = VoronoiClassifier([self.b, self.a])
        self.assertIs(reversed_voronoi.classify(Vector2D(50, 0))[0], self.b)

    def test_nearest_is_minimal(self):
        """Test no server is strictly closer than the returned one."""
        servers = [
            Server(f"S{i}", Vector2D(x, y), RED)
            for i, (x, y) in enumerate([(10, 10), (200, 40), (90, 300), (400, 400)])
        ]
        voronoi = VoronoiClassifier(servers)
        for point in (Vector2D(0, 0), Vector2D(150, 150), Vector2D(390, 10), Vector2D(80, 280)):
            best, distance = voronoi.nearest(point)
            for server in servers:
                self.assertLessEqual(distance, point.distance_to(server.position))
            self.assertAlmostEqual(distance, point.distance_to(best.position))

    def test_shading(self):
        """Test lighter colour near the server, darker far from it."""
        _, near = self.voronoi.classify(Vector2D(10, 0))
        _, far = self.voronoi.classify(Vector2D(0, 80))
        self.assertGreater(lightness(near), lightness(RED))
        self.assertLess(lightness(far), lightness(RED))

    def test_no_servers(self):
        """Test an empty classifier returns the background colour."""
        server, color = VoronoiClassifier().classify(Vector2D(5, 5))
        self.assertIsNone(server)
        self.assertEqual(color, BACKGROUND_COLOR)

    def test_find_by_name(self):
        """Test lookup by name, including a miss."""
        self.assertIs(self.voronoi.find_by_name("B"), self.b)
        self.assertIsNone(self.voronoi.find_by_name("Z"))

    def test_clear(self):
        """Test clear resets neighbours and keeps the servers."""
        self.a.add_neighbor(self.b)
        self.voronoi.clear()
        self.assertEqual(self.a.neighbors, [])
        self.assertEqual(len(self.voronoi), 2)
        self.assertIs(self.voronoi.classify(Vector2D(90, 0))[0], self.b)

    def test_set_servers(self):
        """Test replacing the server list."""
        self.voronoi.set_servers([self.b])
        self.assertEqual(self.voronoi.servers, (self.b,))
        self.assertIs(self.voronoi.classify(Vector2D(0, 0))[0], self.b)

    def test_coverage_map(self):
        """Test coverage map shape and raw colours."""
        image = self.voronoi.coverage_map(120, 4, shaded=False)
        self.assertEqual(image.shape, (4, 120, 3))
        self.assertEqual(image.dtype, np.uint8)
        self.assertEqual(tuple(image[0, 0]), RED)
        self.assertEqual(tuple(image[0, 119]), BLUE)

    def test_coverage_map_invalid_size(self):
        with self.assertRaises(ValueError):
            self.voronoi.coverage_map(0, 10)


if __name__ == "__main__":
    unittest.main()
