"""Autonomous drone with flight-phase state machine and planar physics.

A drone charges while landed, climbs vertically to its hovering height, cruises
toward its goal under a damped spring law perturbed by collision forces, and
descends once it has arrived or its power runs low.

Architecture Overview:
    State Machine Framework:
        • DroneState enum: LANDED, TAKEOFF, LANDING, HOVERING, TURNING, FLYING
        • Validated transitions with entry effects (``enter_*`` methods)
        • Per-state behaviour methods (``on_*``) dispatched from ``update``

    Cruise Dynamics:
        • damp = 1 - dt * (1 - DAMPING)
        • V = damp * V + (MAX_POWER * dt / d) * (goal - position) + dt * F
        • position += dt * V
        • Azimuth derived from the direction of V (0° points toward -y, screen up)

    Collision Avoidance:
        • ``init_collision`` clears the force once per sub-step
        • ``add_collision_force`` adds a repulsion for each intruder closer
          than the threshold, proportional to the vector toward it

    Power Management:
        • Charging at CHARGING_SPEED while landed, clamped to MAX_POWER
        • Consumption at POWER_CONSUMPTION in every other phase
        • Forced landing under LOW_POWER_THRESHOLD during takeoff and cruise

State Transitions:
    LANDED → TAKEOFF → HOVERING → LANDING → LANDED
    TAKEOFF → LANDING (low power)
    TURNING and FLYING are reserved; they cruise exactly like HOVERING.

Example:
    >>> drone = Drone("D1")
    >>> drone.set_initial_position(Vector2D(10, 10))
    >>> drone.set_goal_position(Vector2D(300, 200))
    >>> drone.start()
    >>> for _ in range(100):
    ...     drone.update(Second(0.05))
    >>> drone.current_state
    <DroneState.HOVERING: 3>
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
import math
from typing import ClassVar

from dronefleet.geometry import ZERO, Vector2D
from dronefleet.state import Action, ActionFn
from dronefleet.unit import Time

from .vehicle import Vehicle

DEFAULT_POSITION = Vector2D(50.0, 50.0)
DEFAULT_GOAL = Vector2D(550.0, 600.0)
ARRIVAL_DISTANCE = 1.0
ARRIVAL_SPEED = 10.0
LOW_POWER_MARGIN = 20.0


class DroneState(IntEnum):
    """Flight phases of a drone.

    The numeric order matters: every state greater than or equal to
    ``HOVERING`` is airborne-cruising and follows the cruise dynamics.

    States:
        LANDED: On the ground, charging.
        TAKEOFF: Vertical climb to the hovering height.
        LANDING: Vertical descent to the ground.
        HOVERING: Cruising toward the goal.
        TURNING: Reserved, cruises like HOVERING.
        FLYING: Reserved, cruises like HOVERING.
    """

    LANDED = 0
    TAKEOFF = 1
    LANDING = 2
    HOVERING = 3
    TURNING = 4
    FLYING = 5

    @property
    def is_cruising(self) -> bool:
        return self >= DroneState.HOVERING


@dataclass(frozen=True)
class DroneStatus:
    """Immutable snapshot of a drone, safe to keep across ticks and reloads.

    Attributes:
        name (str): Drone name.
        state (DroneState): Flight phase at snapshot time.
        position (Vector2D): Location on the canvas plane.
        goal_position (Vector2D): Current destination.
        azimuth (float): Heading in degrees, 0 pointing toward -y (screen up).
        power (float): Remaining power on a 0-100 scale.
        speed (float): Norm of the velocity.
        height (float): Altitude in the vertical phases.
        collision (bool): True if an intruder was within the collision distance.
        target_server (str): Name of the server the drone is routed to.
    """

    name: str
    state: DroneState
    position: Vector2D
    goal_position: Vector2D
    azimuth: float
    power: float
    speed: float
    height: float
    collision: bool
    target_server: str


def heading_degrees(direction: Vector2D) -> float:
    """Azimuth in degrees of a unit direction vector, 0 pointing toward -y.

    A direction along the x axis maps to -90 when pointing to +x and to 90
    otherwise; a direction with positive y lies in (90, 270).
    """
    if direction.y == 0:
        return -90.0 if direction.x > 0 else 90.0
    if direction.y > 0:
        return 180.0 - 180.0 * math.atan(direction.x / direction.y) / math.pi
    return -180.0 * math.atan(direction.x / direction.y) / math.pi


class Drone(Vehicle):
    """Quadcopter drone driven by a flight-phase state machine.

    The class constants describe one drone type; subclasses may override them.

    Attributes:
        power (float): Remaining power in ``[0, MAX_POWER]``.
        height (float): Altitude, meaningful during TAKEOFF and LANDING.
        goal_position (Vector2D): Destination of the cruise phase.
        velocity (Vector2D): Current velocity vector.
        collision_force (Vector2D): Repulsion accumulated for the current sub-step.
        speed (float): Norm of ``velocity``.
        speed_setpoint (float): Requested speed. Stored only; the cruise law
            does not read it.
        azimuth (float): Heading in degrees. Kept unchanged while the speed is 0.
        target_server (str): Name of the server the simulator routes the drone to.
        show_collision (bool): True while an intruder is inside the threshold.
    """

    MAX_SPEED: ClassVar[float] = 50.0
    MAX_POWER: ClassVar[float] = 200.0
    TAKEOFF_SPEED: ClassVar[float] = 2.5
    HOVERING_HEIGHT: ClassVar[float] = 5.0
    COEF_COLLISION: ClassVar[float] = 1000.0
    DAMPING: ClassVar[float] = 0.2
    CHARGING_SPEED: ClassVar[float] = 10.0
    POWER_CONSUMPTION: ClassVar[float] = 5.0

    power: float
    height: float
    goal_position: Vector2D
    velocity: Vector2D
    collision_force: Vector2D
    speed: float
    speed_setpoint: float
    azimuth: float
    target_server: str
    show_collision: bool
    _on_actions: dict[DroneState, ActionFn]

    def __init__(self, name: str, pos: Vector2D = DEFAULT_POSITION):
        """Create a landed drone holding half of its maximum power.

        Args:
            name (str): Unique name within the fleet.
            pos (Vector2D): Initial position, also settable later with
                ``set_initial_position`` while landed.
        """
        super().__init__(name, pos)
        self.power = self.MAX_POWER / 2.0
        self.height = 0.0
        self.goal_position = DEFAULT_GOAL
        self.velocity = ZERO
        self.collision_force = ZERO
        self.speed = 0.0
        self.speed_setpoint = 0.0
        self.azimuth = 0.0
        self.target_server = ""
        self.show_collision = False

        cruise_exit = [Action(DroneState.LANDING, self.enter_landing)]
        self.init_state_machine(
            DroneState.LANDED,
            {
                DroneState.LANDED: [Action(DroneState.TAKEOFF, self.enter_takeoff)],
                DroneState.TAKEOFF: [
                    Action(DroneState.HOVERING, self.enter_hovering),
                    Action(DroneState.LANDING, self.enter_landing),
                ],
                DroneState.HOVERING: cruise_exit,
                DroneState.TURNING: cruise_exit,
                DroneState.FLYING: cruise_exit,
                DroneState.LANDING: [Action(DroneState.LANDED, self.enter_landed)],
            },
        )

        self._on_actions = {
            DroneState.LANDED: self.on_landed,
            DroneState.TAKEOFF: self.on_takeoff,
            DroneState.LANDING: self.on_landing,
            DroneState.HOVERING: self.on_cruise,
            DroneState.TURNING: self.on_cruise,
            DroneState.FLYING: self.on_cruise,
        }

    @classmethod
    def low_power_threshold(cls) -> float:
        """Power under which a climbing or cruising drone must land."""
        return LOW_POWER_MARGIN + cls.POWER_CONSUMPTION / cls.TAKEOFF_SPEED

    # ------------------------------------------------------------------ commands

    def start(self) -> None:
        """Take off toward the current goal. Ignored unless the drone is landed."""
        if self.can_transition(DroneState.TAKEOFF):
            self.transition_to(DroneState.TAKEOFF)

    def stop(self) -> None:
        """Land from any airborne phase. Ignored while landed or already landing."""
        if self.can_transition(DroneState.LANDING):
            self.transition_to(DroneState.LANDING)

    def set_speed(self, speed: float) -> None:
        """Record a speed setpoint clamped to ``[0, MAX_SPEED]``."""
        self.speed_setpoint = min(max(speed, 0.0), self.MAX_SPEED)

    def set_initial_position(self, pos: Vector2D) -> None:
        """Place the drone at ``pos``. Ignored unless the drone is landed."""
        if self.current_state == DroneState.LANDED:
            self.position = pos

    def set_goal_position(self, pos: Vector2D) -> None:
        self.goal_position = pos

    def set_target_server(self, server_name: str) -> None:
        self.target_server = server_name

    def get_target_server(self) -> str:
        return self.target_server

    # ----------------------------------------------------------------- collision

    def init_collision(self) -> None:
        """Clear the collision force and flag before accumulating a new sub-step."""
        self.collision_force = ZERO
        self.show_collision = False

    def add_collision_force(self, other: Vector2D, threshold: float) -> None:
        """Add the repulsion caused by a drone at ``other``.

        Nothing happens unless ``other`` is strictly closer than ``threshold``.
        The force is ``-COEF_COLLISION / threshold`` times the vector toward the
        intruder, so it pushes away from it.
        """
        to_other = other - self.position
        if to_other.length() < threshold:
            self.collision_force += (-self.COEF_COLLISION / threshold) * to_other
            self.show_collision = True

    def has_collision(self) -> bool:
        return self.show_collision

    # -------------------------------------------------------------------- update

    def update(self, dt: Time | float) -> None:
        """Advance the drone by one integration step of ``dt`` seconds.

        Dispatches to the ``on_*`` handler of the current flight phase.
        """
        self._on_actions[self.current_state](float(dt))

    def on_landed(self, dt: float) -> None:
        """Charge the battery; the drone does not move."""
        self.power = min(self.power + dt * self.CHARGING_SPEED, self.MAX_POWER)

    def on_takeoff(self, dt: float) -> None:
        """Climb at TAKEOFF_SPEED and abort to LANDING when power runs low."""
        self.height += dt * self.TAKEOFF_SPEED
        if self.height >= self.HOVERING_HEIGHT:
            self.transition_to(DroneState.HOVERING)
        self._consume(dt)
        if self.power < self.low_power_threshold():
            self.transition_to(DroneState.LANDING)

    def on_cruise(self, dt: float) -> None:
        """Integrate the damped spring law toward the goal.

        The attraction term is left out when the drone sits exactly on its
        goal, and the azimuth is kept when the resulting speed is zero.
        """
        to_goal = self.goal_position - self.position
        distance = to_goal.length()

        damp = 1.0 - dt * (1.0 - self.DAMPING)
        attraction = (self.MAX_POWER * dt / distance) * to_goal if distance > 0 else ZERO
        self.velocity = damp * self.velocity + attraction + dt * self.collision_force
        self.position = self.position + dt * self.velocity
        self.speed = self.velocity.length()
        if self.speed > 0:
            self.azimuth = heading_degrees((1.0 / self.speed) * self.velocity)

        if distance < ARRIVAL_DISTANCE and self.speed < ARRIVAL_SPEED:
            self.transition_to(DroneState.LANDING)

        self._consume(dt)
        if self.power < self.low_power_threshold() and self.current_state.is_cruising:
            self.transition_to(DroneState.LANDING)

    def on_landing(self, dt: float) -> None:
        """Descend at TAKEOFF_SPEED until touching the ground."""
        self.height -= dt * self.TAKEOFF_SPEED
        if self.height <= 0:
            self.transition_to(DroneState.LANDED)
        self._consume(dt)

    def _consume(self, dt: float) -> None:
        self.power = max(self.power - dt * self.POWER_CONSUMPTION, 0.0)

    # ------------------------------------------------------------ entry effects

    def enter_takeoff(self) -> None:
        self.height = 0.0

    def enter_hovering(self) -> None:
        self.height = self.HOVERING_HEIGHT

    def enter_landing(self) -> None:
        """Stop horizontal motion; the descent is purely vertical."""
        self.velocity = ZERO
        self.speed = 0.0

    def enter_landed(self) -> None:
        self.height = 0.0
        self.show_collision = False

    # ------------------------------------------------------------------- reading

    @property
    def status(self) -> DroneState:
        return self.current_state

    @property
    def power_percentage(self) -> float:
        """Remaining power on a 0-100 scale."""
        return 100.0 * self.power / self.MAX_POWER

    @property
    def is_busy(self) -> bool:
        return self.current_state != DroneState.LANDED

    def is_operational(self) -> bool:
        """True when the drone holds enough power to take off without aborting."""
        return self.power >= self.low_power_threshold()

    def get_status(self) -> DroneStatus:
        return DroneStatus(
            name=self.name,
            state=self.current_state,
            position=self.position,
            goal_position=self.goal_position,
            azimuth=self.azimuth,
            power=self.power_percentage,
            speed=self.speed,
            height=self.height,
            collision=self.show_collision,
            target_server=self.target_server,
        )

    def __repr__(self) -> str:
        return f"Drone(name={self.name!r}, state={self.current_state.name}, position={self.position})"
