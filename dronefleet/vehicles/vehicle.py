"""Vehicle base class with state machine integration.

This module provides the ``Vehicle`` abstract base class shared by every agent
that moves on the simulated plane. It owns the identity, the planar position
and the validated state machine, and leaves the per-step behaviour to concrete
subclasses.

Core Architecture:
    State Machine Integration:
        • Built-in StateMachine support for validated state transitions
        • Configurable state graphs with action-based entry effects

    Fixed-Step Update:
        • ``update(dt)`` advances the vehicle by one integration step
        • ``dt`` may be a ``Time`` unit or a plain float of seconds

Example Implementation:
    >>> class Rover(Vehicle):
    ...     def __init__(self, name: str):
    ...         super().__init__(name, Vector2D(0, 0))
    ...         self.init_state_machine(RoverState.IDLE, rover_graph)
    ...
    ...     def update(self, dt) -> None:
    ...         if self.current_state == RoverState.MOVING:
    ...             self._drive(float(dt))
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from dronefleet.geometry import Vector2D
from dronefleet.state import StateGraph, StateMachine
from dronefleet.unit import Time


class Vehicle(ABC):
    """Abstract base class for simulated vehicles.

    Attributes:
        name (str): Human-readable name, unique within a fleet.
        position (Vector2D): Current location on the canvas plane.
        _state_machine (StateMachine | None): Validated state transitions.
    """

    name: str
    position: Vector2D
    _state_machine: StateMachine | None = None

    def __init__(self, name: str, pos: Vector2D):
        """Initialize a vehicle at ``pos``.

        Subclasses must call ``init_state_machine`` before the first update.
        """
        self.name = name
        self.position = pos

    def init_state_machine(self, initial_state: Enum, nodes_graph: StateGraph) -> None:
        self._state_machine = StateMachine(initial_state, nodes_graph)

    def transition_to(self, next_state: Enum, *args, **kwargs) -> Any:
        """Request a state transition to the specified state.

        Returns:
            Any: The result of the transition action's effect function.

        Raises:
            NotImplementedError: If the state machine has not been initialized.
            ValueError: If the transition is not allowed by the state graph.
        """
        if not self._state_machine:
            msg = "Subclasses must initialize the state_machine"
            raise NotImplementedError(msg)

        return self._state_machine.request_transition(next_state, *args, **kwargs)

    def can_transition(self, next_state: Enum) -> bool:
        if not self._state_machine:
            msg = "Subclasses must initialize the state_machine"
            raise NotImplementedError(msg)

        return self._state_machine.can_transition(next_state)

    @property
    def current_state(self) -> Enum:
        """Current state of the vehicle's state machine.

        Raises:
            NotImplementedError: If the state machine has not been initialized.
        """
        if not self._state_machine:
            msg = "Subclasses must initialize the state_machine"
            raise NotImplementedError(msg)

        return self._state_machine.current

    @abstractmethod
    def update(self, dt: Time | float) -> None:
        """Advance the vehicle by one fixed integration step of ``dt`` seconds."""

    @property
    @abstractmethod
    def is_busy(self) -> bool:
        """True while the vehicle is engaged in a mission."""

    @abstractmethod
    def is_operational(self) -> bool:
        """True when the vehicle has the resources to start a mission."""
