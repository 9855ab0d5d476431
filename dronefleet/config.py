"""Global configuration for the fleet simulation.

Module-level constants hold the defaults used by the simulator, the canvas
renderer and the realtime runner. ``SimulationConfig`` bundles the ones a
``FleetSimulator`` instance can override.
"""

from dataclasses import dataclass

from dronefleet.unit import Millisecond, Time, as_time

# Canvas Configuration
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
DRONE_ICON_SIZE = 64
DRONE_COLLISION_DISTANCE = DRONE_ICON_SIZE * 1.5

# Coverage map shading (HSL lightness, 0-255 scale)
SHADE_RADIUS = 50.0
SHADE_NEAR = 20
SHADE_FAR = -10
BACKGROUND_COLOR = (255, 255, 255)

# Tick scheduling
TICK_PERIOD = Millisecond(100)
TICK_BUDGET = Millisecond(90)
INITIAL_STEPS = 5
MAX_STEPS = 10


@dataclass
class SimulationConfig:
    """Per-simulator tuning of collision detection and adaptive sub-stepping.

    Attributes:
        collision_distance (float): Distance under which two airborne drones repel.
        initial_steps (int): Sub-steps per tick before any adaptation.
        max_steps (int): Upper bound reached by the one-step-per-tick climb.
        tick_budget (Time): Wall-clock cost above which the step count is halved.
            A bare number is read as milliseconds.
        tick_period (Time): Nominal period between two ticks of the runner.
            A bare number is read as milliseconds.
    """

    collision_distance: float = DRONE_COLLISION_DISTANCE
    initial_steps: int = INITIAL_STEPS
    max_steps: int = MAX_STEPS
    tick_budget: Time = TICK_BUDGET
    tick_period: Time = TICK_PERIOD

    def __post_init__(self):
        self.tick_budget = as_time(self.tick_budget)
        self.tick_period = as_time(self.tick_period)
        if self.collision_distance <= 0:
            msg = f"Invalid collision distance: {self.collision_distance}"
            raise ValueError(msg)
        if self.initial_steps < 0 or self.max_steps < 1:
            msg = f"Invalid step bounds: initial={self.initial_steps}, max={self.max_steps}"
            raise ValueError(msg)
