"""Planar geometry utilities for the fleet simulation.

Components:
    Vector2D: Immutable 2D vector with arithmetic, dot and cross products
    ZERO: The null vector

Typical Usage:
    >>> from dronefleet.geometry import Vector2D
    >>> server = Vector2D.from_str("100,0")
    >>> drone = Vector2D(10.0, 0.0)
    >>> drone.distance_to(server)
    90.0
"""

from .vector import ZERO, Vector2D

__all__ = ["Vector2D", "ZERO"]
