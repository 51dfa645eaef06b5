from __future__ import annotations

from attr import (
    field,
    frozen
)
from attr.validators import (
    ge,
    instance_of
)


_extent = [instance_of(int), ge(0)]


@frozen
class Shape:
    """Extent of a grid: `width` columns by `height` rows"""

    width: int = field(validator=_extent)
    height: int = field(validator=_extent)

    @property
    def size(self) -> int:
        return self.width * self.height

    def contains(self, position: Position) -> bool:
        return 0 <= position.row < self.height and 0 <= position.column < self.width

    def __str__(self) -> str:
        return f"(h:{self.height},w:{self.width})"


@frozen
class Position:
    row: int
    column: int

    def offset(self, other: Position) -> Position:
        return Position(self.row + other.row, self.column + other.column)

    def __str__(self) -> str:
        return f"(row:{self.row},col:{self.column})"
