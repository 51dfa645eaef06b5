from __future__ import annotations

import random
from typing import (
    Generic,
    TypeVar
)

from attr import frozen

from geomkit.vector import Vector2D


T = TypeVar("T", int, float)


def _half(value: T) -> T:
    if isinstance(value, int):
        return value // 2 if value >= 0 else -(-value // 2)
    return value / 2


@frozen
class Rect2D(Generic[T]):
    """
    Axis-aligned rectangle given by its top-left corner and its size.

    The size may be negative; see `abs()`.
    """

    position: Vector2D[T]
    size: Vector2D[T]

    def end(self) -> Vector2D[T]:
        """Bottom-right corner"""
        return self.position + self.size

    def has_point(self, point: Vector2D[T]) -> bool:
        """Points on the right and bottom edges are outside."""
        if self.size.x < 0 or self.size.y < 0:
            return False
        end = self.end()
        return self.position.x <= point.x < end.x and self.position.y <= point.y < end.y

    def center(self) -> Vector2D[T]:
        return self.position + Vector2D(_half(self.size.x), _half(self.size.y))

    def area(self) -> T:
        return self.size.x * self.size.y

    def abs(self) -> Rect2D[T]:
        """
        Same rectangle with a non-negative size, anchored at its top-left corner.

        Rect2D(<25; 25>, <-100; -50>).abs() == Rect2D(<-75; -25>, <100; 50>)
        """
        return Rect2D(
            Vector2D(
                self.position.x + min(self.size.x, 0),
                self.position.y + min(self.size.y, 0),
            ),
            self.size.abs(),
        )

    def random_point(self, rng: random.Random | None = None) -> Vector2D[T]:
        rng = rng or random.Random()
        box = self.abs()
        if box.area() == 0:
            raise ValueError(f"Cannot pick a point inside an empty rectangle {self}")
        start, end = box.position, box.end()
        if all(isinstance(v, int) for v in (start.x, start.y, end.x, end.y)):
            return Vector2D(rng.randrange(start.x, end.x), rng.randrange(start.y, end.y))
        return Vector2D(rng.uniform(start.x, end.x), rng.uniform(start.y, end.y))

    def __str__(self) -> str:
        return f"Rect2D({self.position}, {self.size})"
