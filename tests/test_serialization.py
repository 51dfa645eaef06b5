import pytest
from adaptix.load_error import LoadError

from geomkit.errors import ShapeMismatch
from geomkit.grid import (
    Position,
    Shape
)
from geomkit.matrix import Matrix2D
from geomkit.rect import Rect2D
from geomkit.serialization import (
    dump,
    dump_matrix,
    load,
    load_matrix
)
from geomkit.vector import Vector2D


def test_grid_values():
    assert dump(Shape(width=3, height=2)) == {"width": 3, "height": 2}
    assert dump(Position(row=1, column=4)) == {"row": 1, "column": 4}
    assert load({"width": 3, "height": 2}, Shape) == Shape(3, 2)
    assert load({"row": 1, "column": 4}, Position) == Position(1, 4)


def test_vector_and_rect():
    assert dump(Vector2D(1.5, -2.0), Vector2D[float]) == {"x": 1.5, "y": -2.0}
    assert load({"x": 1, "y": 2}, Vector2D[int]) == Vector2D(1, 2)

    rect = Rect2D(Vector2D(1, 2), Vector2D(3, 4))
    data = {"position": {"x": 1, "y": 2}, "size": {"x": 3, "y": 4}}
    assert dump(rect, Rect2D[int]) == data
    assert load(data, Rect2D[int]) == rect


def test_bad_payload():
    with pytest.raises(LoadError):
        load({"width": "3", "height": 2}, Shape)
    with pytest.raises(LoadError):
        load({"row": 1}, Position)


def test_matrix():
    m = Matrix2D.from_rows([[1, 2, 3], [4, 5, 6]])
    data = dump_matrix(m)
    assert data == {"shape": {"width": 3, "height": 2}, "values": [[1, 2, 3], [4, 5, 6]]}
    assert load_matrix(data) == m

    f = load_matrix({"shape": {"width": 1, "height": 1}, "values": [[0.25]]})
    assert f.at(Position(0, 0)) == 0.25


def test_bad_matrix_payload():
    with pytest.raises(LoadError):
        load_matrix({"shape": {"width": 1, "height": 1}})
    with pytest.raises(LoadError):
        load_matrix([[1]])
    with pytest.raises(ShapeMismatch):
        load_matrix({"shape": {"width": 2, "height": 1}, "values": [[1]]})
