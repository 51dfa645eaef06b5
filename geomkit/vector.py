from __future__ import annotations

from math import sqrt
from typing import (
    Generic,
    TypeVar
)

from attr import frozen

from geomkit.config import current_settings


T = TypeVar("T", int, float)


@frozen
class Vector2D(Generic[T]):
    """
    A pair of numbers: a point, a direction or a size.

    Y grows downwards, so `UP` is (0, -1).
    """

    x: T
    y: T

    def add(self, other: Vector2D[T]) -> Vector2D[T]:
        return Vector2D(self.x + other.x, self.y + other.y)

    def subtract(self, other: Vector2D[T]) -> Vector2D[T]:
        return self.add(-other)

    def scaled(self, factor: float) -> Vector2D:
        return Vector2D(self.x * factor, self.y * factor)

    def __neg__(self) -> Vector2D[T]:
        return Vector2D(-self.x, -self.y)

    def __truediv__(self, divisor: float) -> Vector2D[float]:
        return Vector2D(self.x / divisor, self.y / divisor)

    __add__ = add
    __sub__ = subtract
    __mul__ = __rmul__ = scaled

    def dot(self, other: Vector2D[T]) -> T:
        """
        Positive for angles narrower than 90 degrees, zero for a right angle,
        negative for wider ones. Ranges from -1.0 to 1.0 for unit vectors.

        a.dot(b) == b.dot(a)
        """
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2D[T]) -> T:
        """
        Z component of the cross product of both vectors embedded in the XY plane.

        Positive when `other` is clockwise from `self`, negative otherwise.
        """
        return self.x * other.y - self.y * other.x

    def length_squared(self) -> T:
        return self.x**2 + self.y**2

    def length(self) -> float:
        return sqrt(self.length_squared())

    def distance_squared_to(self, other: Vector2D[T]) -> T:
        return (self - other).length_squared()

    def distance_to(self, other: Vector2D[T]) -> float:
        return sqrt(self.distance_squared_to(other))

    def normalized(self) -> Vector2D:
        if self.x == self.y == 0:
            return self
        return self * (1 / self.length())

    def direction_to(self, to: Vector2D[T]) -> Vector2D:
        return (to - self).normalized()

    def lerp(self, to: Vector2D[T], weight: float) -> Vector2D:
        return self + (to - self) * weight

    def move_toward(self, to: Vector2D[T], delta: float) -> Vector2D:
        """Move at most `delta` towards `to` without overshooting it."""
        remaining = to - self
        distance = remaining.length()
        if distance <= delta or distance < current_settings().epsilon:
            return to
        return self + remaining / distance * delta

    def abs(self) -> Vector2D[T]:
        return Vector2D(abs(self.x), abs(self.y))

    def __str__(self) -> str:
        return f"<{self.x}; {self.y}>"


ZERO = Vector2D(0, 0)
ONE = Vector2D(1, 1)
LEFT = Vector2D(-1, 0)
RIGHT = Vector2D(1, 0)
UP = Vector2D(0, -1)
DOWN = Vector2D(0, 1)
