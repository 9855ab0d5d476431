"""Adaptive fixed-step simulation of a drone fleet.

This module provides ``FleetSimulator``, which advances every drone of a fleet
by a wall-clock interval. The interval is split into a number of equal
sub-steps; the number adapts after each tick to the measured cost of the tick
so that a tick stays within its wall-clock budget.

Simulation Flow (one tick):
    1. dt = elapsed / steps
    2. For each sub-step, for each drone in name order:
        a. Resolve the target server by name and aim at its position
        b. If airborne, rebuild the collision force against the other
           airborne drones
        c. Advance the drone by dt
    3. Measure the cost of the tick
    4. Halve the step count when over budget, otherwise climb by one up to
       the maximum

Drones are processed one after the other, so a drone sees the positions its
predecessors reached in the same sub-step.

Threading Model:
    Single-threaded. Ticks never overlap; commands (``launch_to``, ``start``,
    ``set_goal_position``) and reloads are applied between ticks only.

Usage Pattern:
    >>> simulator = FleetSimulator()
    >>> simulator.set_servers([Server("A", Vector2D(0, 0), (255, 0, 0))])
    >>> drone = Drone("D1")
    >>> drone.set_target_server("A")
    >>> simulator.add_drone(drone)
    >>> simulator.launch_to(Vector2D(300, 300))
    >>> report = simulator.tick(Millisecond(100))
    >>> report.steps
    5
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
import time
from types import MappingProxyType

from dronefleet.config import SimulationConfig
from dronefleet.geometry import Vector2D
from dronefleet.unit import Millisecond, Second, Time, as_time
from dronefleet.vehicles import Drone, DroneState, DroneStatus
from dronefleet.world import Server, VoronoiClassifier

Clock = Callable[[], float]
"""Callable returning a monotonic wall-clock reading in milliseconds."""


def wall_clock_ms() -> float:
    return time.perf_counter() * 1000.0


@dataclass(frozen=True)
class TickReport:
    """Outcome of one tick.

    Attributes:
        elapsed (Time): Wall-clock interval the fleet was advanced by.
        dt (Time): Duration of each sub-step.
        steps (int): Number of sub-steps performed.
        duration (Time): Measured wall-clock cost of the tick.
        next_steps (int): Step count chosen for the next tick.
        over_budget (bool): True if ``duration`` exceeded the tick budget.
    """

    elapsed: Time
    dt: Time
    steps: int
    duration: Time
    next_steps: int
    over_budget: bool


class FleetSimulator:
    """Owns a fleet of drones and the server classifier, and advances them.

    Attributes:
        config (SimulationConfig): Collision distance and step policy.
        _classifier (VoronoiClassifier): Servers used for goal resolution.
        _drones (dict[str, Drone]): Fleet keyed and ordered by drone name.
        _steps (int): Sub-steps per tick, adapted after every tick.
        _clock (Clock): Wall-clock source for measuring tick cost.
        _now (Second): Accumulated simulated time.
        _last_report (TickReport | None): Report of the most recent tick.
    """

    config: SimulationConfig
    _classifier: VoronoiClassifier
    _drones: dict[str, Drone]
    _steps: int
    _clock: Clock
    _now: Second
    _last_report: TickReport | None

    def __init__(
        self,
        classifier: VoronoiClassifier | None = None,
        config: SimulationConfig | None = None,
        clock: Clock | None = None,
    ):
        """Create an empty simulator.

        Args:
            classifier (VoronoiClassifier | None): Server classifier; a new empty
                one when omitted.
            config (SimulationConfig | None): Tuning; defaults from ``config``.
            clock (Clock | None): Millisecond clock used to measure tick cost.
                Inject a fake clock to make the step adaptation deterministic.
        """
        self.config = config or SimulationConfig()
        self._classifier = classifier or VoronoiClassifier()
        self._drones = {}
        self._steps = self.config.initial_steps
        self._clock = clock or wall_clock_ms
        self._now = Second(0)
        self._last_report = None

    # ------------------------------------------------------------------ fleet

    @property
    def classifier(self) -> VoronoiClassifier:
        return self._classifier

    @property
    def drones(self) -> Mapping[str, Drone]:
        """Read-only view of the fleet, iterated in name order."""
        return MappingProxyType(self._drones)

    @property
    def servers(self) -> tuple[Server, ...]:
        return tuple(self._classifier.servers)

    @property
    def steps(self) -> int:
        """Sub-steps the next tick will perform."""
        return self._steps

    @property
    def now(self) -> Second:
        """Simulated time accumulated over all ticks."""
        return self._now

    @property
    def last_report(self) -> TickReport | None:
        return self._last_report

    def add_drone(self, drone: Drone) -> None:
        """Add ``drone`` to the fleet.

        Raises:
            ValueError: If a drone with the same name is already in the fleet.
        """
        if drone.name in self._drones:
            msg = f"Duplicate drone name: {drone.name}"
            raise ValueError(msg)
        self._drones[drone.name] = drone
        self._drones = dict(sorted(self._drones.items()))

    def set_servers(self, servers: Iterable[Server]) -> None:
        self._classifier.set_servers(servers)

    def clear(self) -> None:
        """Drop the fleet and reset the servers' neighbour lists.

        The step count is kept.
        """
        self._classifier.clear()
        self._drones = {}

    def load(self, servers: Iterable[Server], drones: Iterable[Drone]) -> None:
        """Replace servers and fleet. Must be called between ticks.

        Raises:
            ValueError: If two drones share a name.
        """
        self.clear()
        self.set_servers(servers)
        for drone in drones:
            self.add_drone(drone)

    def launch_to(self, point: Vector2D) -> Drone | None:
        """Send the first landed drone (in name order) to ``point``.

        The drone's target server is left as is. Returns the launched drone,
        or None when every drone is already busy.
        """
        for drone in self._drones.values():
            if drone.current_state == DroneState.LANDED:
                drone.set_goal_position(point)
                drone.start()
                return drone
        return None

    def snapshots(self) -> list[DroneStatus]:
        return [drone.get_status() for drone in self._drones.values()]

    # ------------------------------------------------------------------- tick

    def tick(self, elapsed: Time | float) -> TickReport:
        """Advance the fleet by ``elapsed`` wall-clock time.

        A negative interval, as produced by a clock stepping backwards, is
        treated as zero: the drones do not move but the tick still completes
        and adapts the step count.

        Args:
            elapsed (Time | float): Interval since the previous tick. A bare
                number is read as milliseconds.

        Returns:
            TickReport: Sub-step size and count, measured cost, next step count.
        """
        elapsed = as_time(elapsed)
        if float(elapsed) < 0:
            elapsed = Millisecond(0)

        start = self._clock()
        steps = self._steps
        dt = Second(float(elapsed) / steps) if steps > 0 else Second(0)
        for _ in range(steps):
            self.step(dt)
        duration = Millisecond(self._clock() - start)

        over_budget = self._adapt_steps(duration)
        self._now = self._now + Second(float(dt) * steps)
        self._last_report = TickReport(
            elapsed=elapsed,
            dt=dt,
            steps=steps,
            duration=duration,
            next_steps=self._steps,
            over_budget=over_budget,
        )
        return self._last_report

    def step(self, dt: Time) -> None:
        """Run one sub-step of ``dt`` over every drone."""
        threshold = self.config.collision_distance
        for drone in self._drones.values():
            self._resolve_goal(drone)
            if drone.current_state != DroneState.LANDED:
                drone.init_collision()
                for other in self._drones.values():
                    if other is not drone and other.current_state != DroneState.LANDED:
                        drone.add_collision_force(other.position, threshold)
            drone.update(dt)

    def _resolve_goal(self, drone: Drone) -> None:
        """Aim ``drone`` at its target server; keep the last goal on a miss."""
        server = self._classifier.find_by_name(drone.target_server)
        if server is not None:
            drone.set_goal_position(server.position)

    def _adapt_steps(self, duration: Time) -> bool:
        """Halve the step count when over budget, otherwise climb by one."""
        if duration > self.config.tick_budget:
            self._steps //= 2
            return True
        if self._steps < self.config.max_steps:
            self._steps += 1
        return False
