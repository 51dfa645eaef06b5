from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import (
    Generic,
    Protocol,
    TypeVar
)

import numpy as np
from attr import frozen
from numpy.typing import DTypeLike

from geomkit.config import current_settings
from geomkit.errors import (
    InvalidRange,
    OutOfBounds,
    ShapeMismatch
)
from geomkit.grid import (
    Position,
    Shape
)


logger = logging.getLogger(__name__)

T = TypeVar("T", int, float)


def _numeric_dtype(dtype: DTypeLike | None) -> np.dtype:
    resolved = np.dtype(current_settings().default_dtype if dtype is None else dtype)
    if not (np.issubdtype(resolved, np.integer) or np.issubdtype(resolved, np.floating)):
        raise TypeError(f"Matrix elements must be integers or floats, got {resolved}")
    return resolved


def _check_cast(values: np.ndarray, dtype: np.dtype) -> None:
    if values.size == 0:
        return  # numpy guesses float64 for empty data
    integers = np.issubdtype(values.dtype, np.integer) and np.issubdtype(dtype, np.integer)
    if not integers and not np.can_cast(values.dtype, dtype, casting="same_kind"):
        raise TypeError(f"Cannot store {values.dtype} values in a {dtype} matrix")
    if np.issubdtype(dtype, np.integer):
        info = np.iinfo(dtype)
        if values.min() < info.min or values.max() > info.max:
            raise OverflowError(f"Values outside [{info.min}, {info.max}] do not fit a {dtype} matrix")


class InitPolicy(Protocol):
    def apply(self, buffer: np.ndarray, /) -> None:
        ...


@frozen
class ConstantFill(Generic[T]):
    value: T

    def apply(self, buffer: np.ndarray, /) -> None:
        if self.value == 0:
            return  # the buffer starts zeroed
        _check_cast(np.asarray(self.value), buffer.dtype)
        buffer.fill(self.value)


@frozen
class FromData(Generic[T]):
    """Copy row-major data into the matrix. Every row is checked, ragged data is rejected."""

    rows: Sequence[Sequence[T]] | None

    def apply(self, buffer: np.ndarray, /) -> None:
        height, width = buffer.shape
        if self.rows is None or len(self.rows) == 0:
            raise ShapeMismatch("Empty data is not allowed, use ConstantFill instead")
        if len(self.rows) != height:
            raise ShapeMismatch(f"Got {len(self.rows)} rows of data for a matrix of height {height}")
        for i, row in enumerate(self.rows):
            if len(row) != width:
                raise ShapeMismatch(f"Row {i} has {len(row)} values for a matrix of width {width}")

        data = np.asarray(self.rows)
        _check_cast(data, buffer.dtype)
        if data.size:
            np.copyto(buffer, data, casting="unsafe")


def infer_dtype(rows: Sequence[Sequence[int | float]]) -> DTypeLike | None:
    """float64 if any value is a float, otherwise the default dtype"""
    if any(isinstance(value, float) for row in rows for value in row):
        return np.float64
    return None


def _check_range(axis: str, bounds: tuple[int, int], dimension: int) -> None:
    start, end = bounds
    extent = end - start + 1
    if extent < 0 or extent > dimension or start < 0 or end >= dimension:
        raise InvalidRange(f"{axis} range [{start}, {end}] does not fit {dimension} {axis}s")


def _format_cell(value: int | float, width: int) -> str:
    kind = "d" if isinstance(value, int) else "g"
    return format(value, f"0{width}{kind}")


class Matrix2D(Generic[T]):
    """
    Dense 2D grid of integers or floats backed by a numpy array.

    Cells are addressed by `Position(row, column)`. Every access is bounds-checked;
    nothing is clamped and negative indices are never wrapped.

    `slice()` returns a view sharing storage with its parent: writes through either
    one are visible in the other. Nothing here is synchronized, so mutating a matrix
    and its live slices from several threads needs external locking.
    """

    __slots__ = ("_shape", "_data", "_base")

    def __init__(self, shape: Shape, *policies: InitPolicy, dtype: DTypeLike | None = None) -> None:
        self._shape = shape
        self._data = np.zeros((shape.height, shape.width), dtype=_numeric_dtype(dtype))
        self._base: Matrix2D | None = None
        for policy in policies:
            policy.apply(self._data)
        logger.debug("Allocated %s matrix of shape %s", self._data.dtype, shape)

    @classmethod
    def zeros(cls, shape: Shape, *, dtype: DTypeLike | None = None) -> Matrix2D:
        return cls(shape, dtype=dtype)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[T]], *, dtype: DTypeLike | None = None) -> Matrix2D[T]:
        """Infer the shape (and, unless given, the dtype) from the data itself."""
        if not rows:
            raise ShapeMismatch("Cannot infer a shape from empty data")
        shape = Shape(width=len(rows[0]), height=len(rows))
        if dtype is None:
            dtype = infer_dtype(rows)
        return cls(shape, FromData(rows), dtype=dtype)

    @classmethod
    def _wrap(cls, data: np.ndarray, base: Matrix2D | None) -> Matrix2D:
        matrix = cls.__new__(cls)
        height, width = data.shape
        matrix._shape = Shape(width=width, height=height)
        matrix._data = data
        matrix._base = base
        return matrix

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def is_view(self) -> bool:
        """True if the storage belongs to another matrix"""
        return self._base is not None

    def values(self) -> list[list[T]]:
        return self._data.tolist()

    def _check_position(self, position: Position) -> None:
        if not self._shape.contains(position):
            raise OutOfBounds(f"Position {position} is out of bounds for shape {self._shape}")

    def at(self, position: Position) -> T:
        self._check_position(position)
        return self._data[position.row, position.column].item()

    def set(self, position: Position, value: T) -> None:
        self._check_position(position)
        _check_cast(np.asarray(value), self._data.dtype)
        self._data[position.row, position.column] = value

    def slice(self, columns: tuple[int, int], rows: tuple[int, int]) -> Matrix2D[T]:
        """
        View over the inclusive `columns` and `rows` ranges.

        No data is copied: the result aliases this matrix.

        [1 0 0 0]
        [0 1 0 0]   slice(columns=(1, 3), rows=(0, 1))   [0 0 0]
        [0 0 1 0]  ----------------------------------->  [1 0 0]
        [0 0 0 1]
        """
        _check_range("column", columns, self._shape.width)
        _check_range("row", rows, self._shape.height)
        (col_start, col_end), (row_start, row_end) = columns, rows
        view = self._data[row_start : row_end + 1, col_start : col_end + 1]
        logger.debug("Sliced columns %s rows %s of a %s matrix", columns, rows, self._shape)
        return self._wrap(view, base=self)

    def update(self, at: Position, source: Matrix2D[T]) -> None:
        """
        Paste `source` into this matrix with its top-left corner at `at`.

        `source` is read in full before anything is written, so it may be a
        slice of this very matrix.
        """
        if not self._shape.contains(at):
            raise OutOfBounds(f"Update position {at} is out of bounds for shape {self._shape}")
        end = at.offset(Position(source.shape.height, source.shape.width))
        if end.column > self._shape.width or end.row > self._shape.height:
            raise OutOfBounds(
                f"Pasting {source.shape} at {at} does not fit in shape {self._shape}"
            )
        _check_cast(source._data, self._data.dtype)

        values = source._data
        if np.may_share_memory(values, self._data):
            logger.debug("Update source overlaps the target, copying it first")
            values = values.copy()
        self._data[at.row : end.row, at.column : end.column] = values

    def copy(self) -> Matrix2D[T]:
        return self._wrap(self._data.copy(), base=None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix2D):
            return NotImplemented
        return self._shape == other._shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix2D({self._shape!r}, dtype={self._data.dtype})"

    def render(self, cell_width: int | None = None) -> str:
        """Debug dump, one line per row, zero-padded cells and a trailing shape line"""
        width = current_settings().cell_width if cell_width is None else cell_width
        lines = [""]
        for row in self._data.tolist():
            lines.append("".join(f" {_format_cell(value, width)} " for value in row))
        lines.append(f"shape: {self._shape}")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()
