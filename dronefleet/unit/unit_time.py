"""Time unit definitions for the fleet simulation.

All time units share ``Second`` as their SI root. Tick periods and wall-clock
costs are usually expressed in milliseconds, integration steps in seconds.

Classes:
    Second: Base time unit in seconds (SI unit).
    Millisecond: 1/1000 of a second, the scale of tick periods.
    ClockTime: Seconds rendered as an ``HH:MM:SS.mmm`` simulation clock.

Type Aliases:
    Time: Union type for all time units.

Example:
    >>> period = Millisecond(100)
    >>> float(period)
    0.1
    >>> str(ClockTime(3725.5))
    '01:02:05.500'
"""

from __future__ import annotations

from math import isfinite

from .unit_base import Unit
from .unit_float import UnitFloat


class Second(UnitFloat):
    """Time unit: Second (SI base unit for time)."""

    IS_FAMILY_ROOT = True
    SCALE_TO_SI = 1.0
    SYMBOL = "s"


class Millisecond(Second):
    """Time unit: Millisecond.

    Example:
        >>> Millisecond(90) < Millisecond(100)
        True
        >>> Millisecond(100).to(Second)
        0.1
    """

    SCALE_TO_SI = 0.001
    SYMBOL = "ms"


class ClockTime(Second):
    """Elapsed simulation time displayed as a 24-hour style clock."""

    SCALE_TO_SI = 1.0

    def __str__(self) -> str:
        if not isfinite(float(self)):
            return "--:--:--"
        h, r = divmod(float(self), 3600)
        m, s = divmod(r, 60)
        return f"{int(h):02d}:{int(m):02d}:{s:06.3f}"

    def __repr__(self) -> str:
        return f"{str(self)} (= {float(self):g} {self.ROOT.SYMBOL})"


Time = Second | Millisecond | ClockTime


def as_time(value: Time | float) -> Time:
    """Read a bare number as milliseconds; keep ``Time`` units as they are.

    Raises:
        TypeError: If ``value`` is a unit of another family.
    """
    if isinstance(value, Unit):
        Second._check_same_root(type(value))
        return value
    return Millisecond(value)
