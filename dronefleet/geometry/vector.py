"""Planar vector arithmetic for the fleet simulation.

Positions, velocities and collision forces all live on the same 2D canvas
plane, in pixel units, with ``y`` growing downwards as on screen.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
import math

Number = int | float


@dataclass(frozen=True, slots=True)
class Vector2D:
    """Immutable 2D vector.

    Equality compares components exactly, without tolerance, so two vectors
    obtained through different arithmetic may compare unequal.

    Attributes:
        x (float): Horizontal component.
        y (float): Vertical component.

    Example:
        >>> a = Vector2D(3.0, 4.0)
        >>> a.length()
        5.0
        >>> a - Vector2D(1.0, 1.0)
        Vector2D(x=2.0, y=3.0)
        >>> 2 * a
        Vector2D(x=6.0, y=8.0)
    """

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_str(cls, text: str) -> Vector2D:
        """Parse an ``"x,y"`` coordinate string.

        Raises:
            ValueError: If the string does not hold exactly two numbers.
        """
        parts = text.split(",")
        if len(parts) != 2:
            msg = f"Expected 'x,y' coordinates, got {text!r}"
            raise ValueError(msg)
        return cls(float(parts[0]), float(parts[1]))

    def length(self) -> float:
        """Euclidean norm of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalized(self) -> Vector2D:
        """Return the unit vector with the same direction.

        Raises:
            ZeroDivisionError: If the vector has zero length.
        """
        norm = self.length()
        return Vector2D(self.x / norm, self.y / norm)

    def ortho_normed(self) -> Vector2D:
        """Return the normalized vector rotated by -90 degrees, ``(y/l, -x/l)``.

        Raises:
            ZeroDivisionError: If the vector has zero length.
        """
        norm = self.length()
        return Vector2D(self.y / norm, -self.x / norm)

    def dot(self, other: Vector2D) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2D) -> float:
        """Signed area of the parallelogram spanned by ``self`` and ``other``."""
        return self.x * other.y - self.y * other.x

    def distance_to(self, other: Vector2D) -> float:
        return (other - self).length()

    def __add__(self, other: Vector2D) -> Vector2D:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2D) -> Vector2D:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return Vector2D(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector2D:
        return Vector2D(-self.x, -self.y)

    def __mul__(self, k: Number) -> Vector2D:
        if isinstance(k, Vector2D) or not isinstance(k, Number):
            return NotImplemented
        return Vector2D(k * self.x, k * self.y)

    def __rmul__(self, k: Number) -> Vector2D:
        return self.__mul__(k)

    def __matmul__(self, other: Vector2D) -> float:
        if not isinstance(other, Vector2D):
            return NotImplemented
        return self.dot(other)

    def __getitem__(self, i: int) -> float:
        """Component access: ``[0]``/``[-2]`` is x, ``[1]``/``[-1]`` is y.

        Raises:
            IndexError: For any other index.
        """
        if i in (0, -2):
            return self.x
        if i in (1, -1):
            return self.y
        msg = f"Vector2D index out of range: {i}"
        raise IndexError(msg)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


ZERO = Vector2D(0.0, 0.0)
