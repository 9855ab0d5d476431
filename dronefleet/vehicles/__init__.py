"""Vehicle simulation framework with state machine support.

Core Architecture:
    • Vehicle (ABC): Identity, planar position and validated state machine
    • Drone: Concrete quadcopter with takeoff, cruise and landing phases

State Machine Integration:
    • Entry effects (``enter_*``) run once when a phase is entered
    • Behaviour handlers (``on_*``) run on every integration step

Usage Examples:
    >>> from dronefleet.geometry import Vector2D
    >>> from dronefleet.vehicles import Drone, DroneState
    >>> drone = Drone("D1")
    >>> drone.set_initial_position(Vector2D(120, 80))
    >>> drone.set_target_server("north")
    >>> drone.start()
    >>> drone.current_state is DroneState.TAKEOFF
    True
"""

from .drone import Drone, DroneState, DroneStatus, heading_degrees
from .vehicle import Vehicle

__all__ = ["Vehicle", "Drone", "DroneState", "DroneStatus", "heading_degrees"]
