"""State machine implementation for managing validated state transitions.

This module provides a finite state machine that enforces transition rules and
executes an entry action when a transition occurs. Drones use it to drive their
flight phases (landed, takeoff, hovering, landing).
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

State = TypeVar("State", bound=Enum)
"""Type variable for state enumerations that extend Enum."""

ActionFn = Callable[..., Any]
"""Type alias for action effect functions."""

StateGraph = dict[Enum, list["Action"]]
"""Mapping from a state to the actions allowed out of it."""


@dataclass(frozen=True)
class Action:
    """Represents a state transition action with an optional effect function.

    Attributes:
        state: The target state this action transitions to.
        effect: Optional function to execute when this action is performed.
    """

    state: Enum
    effect: ActionFn | None = None

    def __call__(self, *args, **kwargs) -> Any:
        """Execute the action's effect function if it exists.

        Returns:
            The result of the effect function, or None if no effect is defined.
        """
        if self.effect:
            return self.effect(*args, **kwargs)
        return None


class StateMachine:
    """A finite state machine that manages state transitions with validation.

    Attributes:
        _state: The current state of the state machine.
        _allowed: Dictionary mapping states to their allowed transitions.
    """

    _allowed: StateGraph
    _state: Enum

    def __init__(self, initial_state: Enum, nodes_graph: StateGraph):
        """Initialize the state machine with an initial state and transition rules.

        Args:
            initial_state: The starting state for the state machine.
            nodes_graph: Dictionary mapping each state to its allowed actions.
        """
        self._state = initial_state
        self._allowed = nodes_graph

    def request_transition(self, next_state: Enum, *args, **kwargs) -> Any:
        """Request a state transition to the specified next state.

        The state is switched before the action's effect runs, so the effect
        observes the new state.

        Returns:
            The result of executing the transition action's effect function.

        Raises:
            ValueError: If the transition is not allowed by the state graph.
        """
        next_action = self._validate_transition(self.current, next_state)
        self._state = next_action.state
        return next_action(*args, **kwargs)

    def can_transition(self, next_state: Enum) -> bool:
        """Return True if ``next_state`` is reachable from the current state."""
        return any(action.state == next_state for action in self._allowed.get(self.current, ()))

    @property
    def current(self) -> Enum:
        """Get the current state of the state machine."""
        return self._state

    def _validate_transition(self, frm: Enum, to: Enum) -> Action:
        """Find the action that moves ``frm`` to ``to``.

        Raises:
            ValueError: If no valid transition exists from frm to to.
        """
        for action in self._allowed.get(frm, ()):
            if action.state == to:
                return action

        msg = f"Illegal transition {frm.name} -> {to.name}"
        raise ValueError(msg)
