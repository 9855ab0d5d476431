"""Float-based units with automatic SI conversion.

``UnitFloat`` stores its value in SI units (a ``float`` subclass), converts on
construction from the unit's native scale, and keeps the concrete unit type
through arithmetic with scalars and compatible units.

Example:
    >>> class Second(UnitFloat):
    ...     IS_FAMILY_ROOT = True
    ...     SYMBOL = "s"
    >>> class Millisecond(Second):
    ...     SCALE_TO_SI = 0.001
    ...     SYMBOL = "ms"
    >>> float(Millisecond(250))
    0.25
"""

from __future__ import annotations

from typing import ClassVar

from .unit_base import Number, Unit


class UnitFloat(float, Unit):
    """Base class for type-safe unit calculations with automatic SI conversion.

    Attributes:
        SCALE_TO_SI (ClassVar[float]): Conversion factor to SI units.
        IS_FAMILY_ROOT (ClassVar[bool]): Indicates if this class is a root unit.
    """

    SCALE_TO_SI: ClassVar[float] = 1.0
    IS_FAMILY_ROOT: ClassVar[bool] = True

    def __new__(cls, value: Number):
        """Create a new instance from a value in the unit's native scale."""
        return float.__new__(cls, float(value) * cls.SCALE_TO_SI)

    @classmethod
    def from_si(cls, si_value: float) -> UnitFloat:
        """Create an instance directly from an SI value."""
        return float.__new__(cls, si_value)

    def to(self, unit_type: type[UnitFloat]) -> float:
        """Return the value expressed in ``unit_type``'s scale.

        Raises:
            TypeError: If ``unit_type`` is not of the same family.
        """
        self._check_same_root(unit_type)
        return float(self) / unit_type.SCALE_TO_SI

    # -------------------------------- Arithmetic Operations --------------------------------

    def __add__(self, other: UnitFloat) -> UnitFloat:
        self._check_same_root(type(other))
        return type(self).from_si(float(self) + float(other))

    def __radd__(self, other: UnitFloat) -> UnitFloat:
        return self.__add__(other)

    def __sub__(self, other: UnitFloat) -> UnitFloat:
        self._check_same_root(type(other))
        return type(self).from_si(float(self) - float(other))

    def __rsub__(self, other: UnitFloat) -> UnitFloat:
        self._check_same_root(type(other))
        return type(self).from_si(float(other) - float(self))

    def __mul__(self, k: Number) -> UnitFloat:
        if isinstance(k, Unit) or not isinstance(k, Number):
            return NotImplemented
        return type(self).from_si(float(self) * float(k))

    def __rmul__(self, k: Number) -> UnitFloat:
        return self.__mul__(k)

    def __truediv__(self, k: Number) -> UnitFloat:
        """Divide by a scalar, or by a unit of the same family to get a ratio.

        Raises:
            ZeroDivisionError: If the divisor is zero.
        """
        if isinstance(k, Unit):
            self._check_same_root(type(k))
            return float(self) / float(k)
        if not isinstance(k, Number):
            return NotImplemented
        return type(self).from_si(float(self) / float(k))

    # -------------------------------- Comparison Operations --------------------------------

    def __lt__(self, other: UnitFloat) -> bool:
        self._check_same_root(type(other))
        return float(self) < float(other)

    def __le__(self, other: UnitFloat) -> bool:
        self._check_same_root(type(other))
        return float(self) <= float(other)

    def __gt__(self, other: UnitFloat) -> bool:
        self._check_same_root(type(other))
        return float(self) > float(other)

    def __ge__(self, other: UnitFloat) -> bool:
        self._check_same_root(type(other))
        return float(self) >= float(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        self._check_same_root(type(other))
        return float(self) == float(other)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = float.__hash__

    def __str__(self) -> str:
        """Return the value and symbol in the unit's native scale (e.g. ``"100.0 ms"``)."""
        return f"{self.to(type(self))} {type(self).SYMBOL}".strip()

    def __repr__(self) -> str:
        """Return the native value with its SI equivalent."""
        return f"{self.to(type(self)):g} {type(self).SYMBOL} (= {float(self):g} SI)"
