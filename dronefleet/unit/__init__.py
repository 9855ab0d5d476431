"""Type-safe time units for the fleet simulation.

Tick deltas arrive in milliseconds from the wall clock, while drone physics
integrates in seconds. Carrying both as ``Time`` units keeps the two scales from
being confused: ``float()`` of any time unit is always its value in seconds.

Modules:
    - unit_base: Unit family management
    - unit_float: Float-based units with SI conversion
    - unit_time: Second, Millisecond, ClockTime and ``as_time``

Example:
    >>> from dronefleet.unit import Millisecond, Second
    >>> elapsed = Millisecond(100)
    >>> dt = elapsed / 5
    >>> float(dt)
    0.02
"""

from .unit_base import Unit
from .unit_float import UnitFloat
from .unit_time import ClockTime, Millisecond, Second, Time, as_time

__all__ = [
    "Unit",
    "UnitFloat",
    "Second",
    "Millisecond",
    "ClockTime",
    "Time",
    "as_time",
]
