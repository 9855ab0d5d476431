"""
Tests for the command line entry point.
"""

import unittest

from dronefleet.__main__ import build_parser, run_summary
from dronefleet.geometry import Vector2D
from dronefleet.simulator import FleetSimulator
from dronefleet.unit import Millisecond


class CostClock:
    """Fake millisecond clock charging each tick the next cost of ``costs``."""

    def __init__(self, costs):
        self.now = 0.0
        self.costs = list(costs)
        self._started = False

    def __call__(self) -> float:
        if self._started:
            self.now += self.costs.pop(0)
        self._started = not self._started
        return self.now


class TestRunSummary(unittest.TestCase):
    """Test run_summary function."""

    def test_summary(self):
        """Test tick count, over-budget count and simulated clock."""
        simulator = FleetSimulator(clock=CostClock([10, 200, 10]))
        reports = [simulator.tick(Millisecond(100)) for _ in range(3)]
        self.assertEqual(
            run_summary(reports, simulator),
            "Ran 3 ticks (1 over budget), simulated time 00:00:00.300",
        )

    def test_empty_run(self):
        self.assertEqual(
            run_summary([], FleetSimulator()),
            "Ran 0 ticks (0 over budget), simulated time 00:00:00.000",
        )


class TestParser(unittest.TestCase):
    """Test build_parser function."""

    def test_launch_points(self):
        args = build_parser().parse_args(
            ["scenario.json", "--launch", "400,300", "--launch", "10,20", "--duration", "2"]
        )
        self.assertEqual(args.launch, [Vector2D(400, 300), Vector2D(10, 20)])
        self.assertEqual(args.duration, 2.0)
        self.assertIsNone(args.period)

    def test_bad_launch_point(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args(["scenario.json", "--launch", "nowhere"])


if __name__ == "__main__":
    unittest.main()
