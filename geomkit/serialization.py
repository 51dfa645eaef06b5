from __future__ import annotations

from typing import (
    Any,
    TypeVar
)

from adaptix import Retort
from adaptix.load_error import ValueLoadError
from numpy.typing import DTypeLike

from geomkit.grid import Shape
from geomkit.matrix import (
    FromData,
    Matrix2D,
    infer_dtype
)


_T = TypeVar("_T")

retort = Retort()


def dump(value: Any, tp: Any = None) -> Any:
    """
    Plain-data form of a `Shape`, `Position`, `Vector2D` or `Rect2D`.

    Generic values may need an explicit type, e.g. `dump(v, Vector2D[float])`.
    """
    return retort.dump(value, tp or type(value))


def load(data: object, tp: type[_T]) -> _T:
    return retort.load(data, tp)


def dump_matrix(matrix: Matrix2D) -> dict[str, Any]:
    return {
        "shape": retort.dump(matrix.shape, Shape),
        "values": matrix.values(),
    }


def load_matrix(data: object, *, dtype: DTypeLike | None = None) -> Matrix2D:
    match data:
        case {"shape": shape, "values": list(values)}:
            return Matrix2D(
                retort.load(shape, Shape),
                FromData(values),
                dtype=infer_dtype(values) if dtype is None else dtype,
            )
    raise ValueLoadError("Expected an object with 'shape' and 'values'", data)
