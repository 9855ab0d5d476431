"""Unit family foundation for type-safe simulation quantities.

Every unit class belongs to a family identified by its ``ROOT`` class. The
first ancestor flagged with ``IS_FAMILY_ROOT`` becomes the root, so
``Millisecond`` and ``ClockTime`` both resolve to ``Second`` and can be mixed in
arithmetic, while a value from another family is rejected at runtime.

Classes:
    Unit: Base class providing automatic ROOT assignment and family checks.

Example:
    >>> class Second(UnitFloat):
    ...     IS_FAMILY_ROOT = True
    >>> class Millisecond(Second):
    ...     pass  # ROOT is Second
"""

from __future__ import annotations

from typing import ClassVar

Number = int | float


class Unit:
    """Base class for all unit types in the simulation.

    Attributes:
        ROOT (ClassVar[type[Unit]]): Root class defining the unit family.
        SYMBOL (ClassVar[str]): Unit symbol for display purposes.
        IS_FAMILY_ROOT (ClassVar[bool]): Indicates if this class is a root unit.
    """

    __slots__ = ()

    ROOT: ClassVar[type[Unit]]
    SYMBOL: ClassVar[str] = ""
    IS_FAMILY_ROOT: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs):
        """Resolve the ROOT class of a new unit type from its MRO."""
        super().__init_subclass__(**kwargs)
        if "ROOT" in cls.__dict__ and cls.ROOT is not None:
            return

        if cls.__dict__.get("IS_FAMILY_ROOT", False):
            cls.ROOT = cls
            return

        for base in cls.mro()[1:]:
            if base.__dict__.get("IS_FAMILY_ROOT", False):
                cls.ROOT = base
                return

        cls.ROOT = cls

    @classmethod
    def _check_same_root(cls, unit_type: type) -> None:
        """Check that ``unit_type`` belongs to the same unit family.

        Plain numbers are accepted and read as SI values.

        Raises:
            TypeError: If ``unit_type`` is a unit of a different family.
        """
        if issubclass(unit_type, (int, float)) and not issubclass(unit_type, Unit):
            return
        if getattr(unit_type, "ROOT", None) is not cls.ROOT:
            msg = f"Incompatible units: {cls.ROOT.__name__} and {unit_type.__name__}"
            raise TypeError(msg)
