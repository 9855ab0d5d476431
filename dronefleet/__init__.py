"""Drone fleet simulation on a plane served by nearest-server coverage.

A set of fixed, coloured servers splits the canvas into Voronoi regions; each
point belongs to its closest server. A fleet of drones takes off, cruises
toward the server it is routed to under a damped spring law, pushes away from
other airborne drones that come too close, and lands when it arrives or its
power runs low. A fixed-period tick advances the fleet with a number of
sub-steps that adapts to the measured cost of each tick.

Package Layout:
    Simulation Core:
        • dronefleet.geometry: Vector2D planar vector
        • dronefleet.world: Server, VoronoiClassifier, colour helpers
        • dronefleet.vehicles: Vehicle base class, Drone and its flight phases
        • dronefleet.simulator: FleetSimulator, realtime runner, rendering, telemetry

    Support:
        • dronefleet.unit: Type-safe time units (Second, Millisecond, ClockTime)
        • dronefleet.state: Validated state machine used by the drones
        • dronefleet.config: Defaults and SimulationConfig
        • dronefleet.loader: JSON scenario files

Usage Examples:
    Programmatic:
        >>> from dronefleet import FleetSimulator, load_scenario
        >>> scenario = load_scenario("examples/scenario.json")
        >>> simulator = FleetSimulator()
        >>> simulator.load(scenario.servers, scenario.drones)
        >>> simulator.launch_to(Vector2D(400, 300))
        >>> simulator.tick(Millisecond(100))

    Command line:
        $ python -m dronefleet examples/scenario.json --duration 20 --launch 400,300
"""

from dronefleet.config import SimulationConfig
from dronefleet.geometry import Vector2D
from dronefleet.loader import Scenario, ScenarioError, load_scenario, parse_scenario
from dronefleet.simulator import FleetSimulator, TelemetryRecorder, TickReport, run_realtime
from dronefleet.unit import Millisecond, Second
from dronefleet.vehicles import Drone, DroneState, DroneStatus
from dronefleet.world import Server, VoronoiClassifier

__version__ = "0.1.0"

__all__ = [
    "Drone",
    "DroneState",
    "DroneStatus",
    "FleetSimulator",
    "Millisecond",
    "Scenario",
    "ScenarioError",
    "Second",
    "Server",
    "SimulationConfig",
    "TelemetryRecorder",
    "TickReport",
    "Vector2D",
    "VoronoiClassifier",
    "load_scenario",
    "parse_scenario",
    "run_realtime",
]
