"""
Tests for the fleet simulator tick and its step adaptation.
"""

import unittest

from dronefleet.config import SimulationConfig
from dronefleet.geometry import Vector2D
from dronefleet.simulator import FleetSimulator
from dronefleet.unit import Millisecond, Second
from dronefleet.vehicles import Drone, DroneState
from dronefleet.vehicles.drone import DEFAULT_GOAL
from dronefleet.world import Server


class CostClock:
    """Fake millisecond clock: every tick appears to take ``cost`` ms."""

    def __init__(self, cost: float = 0.0):
        self.now = 0.0
        self.cost = cost
        self._started = False

    def __call__(self) -> float:
        if self._started:
            self.now += self.cost
        self._started = not self._started
        return self.now


def make_drone(name: str, pos: Vector2D, server: str = "") -> Drone:
    drone = Drone(name)
    drone.set_initial_position(pos)
    drone.set_target_server(server)
    return drone


class TestStepAdaptation(unittest.TestCase):
    """Test the adaptive number of sub-steps."""

    def test_climbs_to_max(self):
        """Test cheap ticks add one step each up to the maximum."""
        clock = CostClock(cost=10)
        simulator = FleetSimulator(clock=clock)
        self.assertEqual(simulator.steps, 5)
        seen = []
        for _ in range(7):
            report = simulator.tick(Millisecond(100))
            seen.append(report.steps)
        self.assertEqual(seen, [5, 6, 7, 8, 9, 10, 10])
        self.assertEqual(simulator.steps, 10)

    def test_halves_when_over_budget(self):
        """Test expensive ticks halve the step count."""
        clock = CostClock(cost=120)
        simulator = FleetSimulator(clock=clock)
        report = simulator.tick(Millisecond(100))
        self.assertTrue(report.over_budget)
        self.assertEqual(report.next_steps, 2)
        simulator.tick(Millisecond(100))
        self.assertEqual(simulator.steps, 1)
        simulator.tick(Millisecond(100))
        self.assertEqual(simulator.steps, 0)

    def test_budget_boundary(self):
        """Test a tick costing exactly the budget is not over budget."""
        simulator = FleetSimulator(clock=CostClock(cost=90))
        report = simulator.tick(Millisecond(100))
        self.assertFalse(report.over_budget)
        self.assertEqual(report.next_steps, 6)

    def test_zero_steps_recovers(self):
        """Test a tick with zero steps integrates nothing and climbs back."""
        config = SimulationConfig(initial_steps=0)
        simulator = FleetSimulator(config=config, clock=CostClock(cost=1))
        drone = make_drone("D1", Vector2D(0, 0))
        simulator.add_drone(drone)
        report = simulator.tick(Millisecond(100))
        self.assertEqual(report.steps, 0)
        self.assertEqual(float(report.dt), 0.0)
        self.assertEqual(drone.power, Drone.MAX_POWER / 2)
        self.assertEqual(simulator.steps, 1)

    def test_dt_and_simulated_time(self):
        """Test dt is elapsed / steps and simulated time accumulates."""
        simulator = FleetSimulator(clock=CostClock(cost=1))
        report = simulator.tick(Millisecond(100))
        self.assertAlmostEqual(float(report.dt), 0.02)
        self.assertAlmostEqual(float(simulator.now), 0.1)
        simulator.tick(50)
        self.assertAlmostEqual(float(simulator.now), 0.15)
        self.assertIs(simulator.last_report.elapsed.__class__, Millisecond)

    def test_negative_elapsed_is_clamped(self):
        """Test a backwards clock step ticks with zero elapsed time."""
        simulator = FleetSimulator(clock=CostClock(cost=1))
        drone = make_drone("D1", Vector2D(0, 0))
        simulator.add_drone(drone)
        report = simulator.tick(Millisecond(-30))
        self.assertEqual(float(report.elapsed), 0.0)
        self.assertEqual(float(report.dt), 0.0)
        self.assertEqual(drone.power, Drone.MAX_POWER / 2)
        self.assertEqual(report.next_steps, 6)
        self.assertEqual(float(simulator.now), 0.0)

    def test_over_budget_with_zero_steps(self):
        """Test an expensive tick is reported over budget even with zero steps."""
        config = SimulationConfig(initial_steps=0)
        simulator = FleetSimulator(config=config, clock=CostClock(cost=200))
        report = simulator.tick(Millisecond(100))
        self.assertTrue(report.over_budget)
        self.assertEqual(report.steps, 0)
        self.assertEqual(report.next_steps, 0)

    def test_bare_budget_is_milliseconds(self):
        """Test a bare-number tick budget is read as milliseconds."""
        config = SimulationConfig(tick_budget=90, tick_period=100)
        self.assertIsInstance(config.tick_budget, Millisecond)
        self.assertAlmostEqual(float(config.tick_budget), 0.09)
        self.assertAlmostEqual(float(config.tick_period), 0.1)
        simulator = FleetSimulator(config=config, clock=CostClock(cost=200))
        report = simulator.tick(Millisecond(100))
        self.assertTrue(report.over_budget)
        self.assertEqual(report.next_steps, 2)

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            SimulationConfig(collision_distance=0)
        with self.assertRaises(ValueError):
            SimulationConfig(max_steps=0)


class TestFleet(unittest.TestCase):
    """Test fleet management, goal resolution and commands."""

    def setUp(self):
        self.simulator = FleetSimulator(clock=CostClock(cost=1))
        self.north = Server("north", Vector2D(400, 100), (255, 0, 0))
        self.simulator.set_servers([self.north])

    def test_name_order(self):
        """Test the fleet iterates in name order."""
        for name in ("C", "A", "B"):
            self.simulator.add_drone(make_drone(name, Vector2D(0, 0)))
        self.assertEqual(list(self.simulator.drones), ["A", "B", "C"])
        self.assertEqual([s.name for s in self.simulator.snapshots()], ["A", "B", "C"])

    def test_duplicate_name(self):
        self.simulator.add_drone(make_drone("A", Vector2D(0, 0)))
        with self.assertRaises(ValueError):
            self.simulator.add_drone(make_drone("A", Vector2D(5, 5)))

    def test_goal_resolution(self):
        """Test drones aim at their target server and keep their goal on a miss."""
        routed = make_drone("A", Vector2D(0, 0), "north")
        lost = make_drone("B", Vector2D(0, 0), "nowhere")
        self.simulator.add_drone(routed)
        self.simulator.add_drone(lost)
        self.simulator.tick(Millisecond(100))
        self.assertEqual(routed.goal_position, self.north.position)
        self.assertEqual(lost.goal_position, DEFAULT_GOAL)

    def test_launch_to(self):
        """Test launch_to starts the first landed drone in name order."""
        for name in ("B", "A"):
            self.simulator.add_drone(make_drone(name, Vector2D(0, 0)))
        target = Vector2D(300, 300)
        first = self.simulator.launch_to(target)
        self.assertEqual(first.name, "A")
        self.assertEqual(first.current_state, DroneState.TAKEOFF)
        self.assertEqual(first.goal_position, target)
        self.assertEqual(self.simulator.launch_to(target).name, "B")
        self.assertIsNone(self.simulator.launch_to(target))

    def test_launched_drone_flies_to_server(self):
        """Test a launched drone heads for its target server once airborne."""
        drone = make_drone("A", Vector2D(400, 400), "north")
        self.simulator.add_drone(drone)
        self.simulator.launch_to(Vector2D(0, 0))
        for _ in range(40):
            self.simulator.tick(Millisecond(100))
        self.assertTrue(drone.current_state.is_cruising)
        self.assertEqual(drone.goal_position, self.north.position)
        self.assertLess(drone.position.y, 400)

    def test_collision_between_airborne_drones(self):
        """Test close airborne drones are flagged and landed drones ignored."""
        a = make_drone("A", Vector2D(100, 100), "north")
        b = make_drone("B", Vector2D(150, 100), "north")
        c = make_drone("C", Vector2D(120, 100), "north")
        for drone in (a, b, c):
            self.simulator.add_drone(drone)
        a.start()
        b.start()
        self.simulator.tick(Millisecond(100))
        self.assertTrue(a.has_collision())
        self.assertTrue(b.has_collision())
        self.assertFalse(c.has_collision())
        self.assertLess(a.collision_force.x, 0)
        self.assertGreater(b.collision_force.x, 0)

    def test_load_keeps_steps(self):
        """Test reloading replaces the fleet and servers but keeps the step count."""
        self.north.add_neighbor(self.north)
        self.simulator.add_drone(make_drone("old", Vector2D(0, 0)))
        self.simulator.tick(Millisecond(100))
        steps = self.simulator.steps
        south = Server("south", Vector2D(400, 500), (0, 0, 255))
        self.simulator.load([south], [make_drone("new", Vector2D(1, 1), "south")])
        self.assertEqual(self.simulator.steps, steps)
        self.assertEqual(list(self.simulator.drones), ["new"])
        self.assertEqual(self.simulator.servers, (south,))
        self.assertEqual(self.north.neighbors, [])

    def test_landed_drones_charge(self):
        drone = make_drone("A", Vector2D(0, 0))
        self.simulator.add_drone(drone)
        self.simulator.tick(Second(1))
        self.assertAlmostEqual(drone.power, Drone.MAX_POWER / 2 + Drone.CHARGING_SPEED)


if __name__ == "__main__":
    unittest.main()
