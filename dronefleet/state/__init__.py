"""State management module for the fleet simulation.

Exports:
    StateMachine: Finite state machine with transition validation
    State: Type variable for state enumerations
    Action: State transition action with optional effects
    StateGraph: Type alias for state transition graph definitions
    ActionFn: Type alias for action effect callables
"""

from .state_machine import Action, ActionFn, State, StateGraph, StateMachine

__all__ = ["StateMachine", "State", "Action", "StateGraph", "ActionFn"]
