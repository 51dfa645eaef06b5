class GeometryError(Exception):
    pass


class ShapeMismatch(GeometryError, ValueError):
    """Initialization data disagrees with the declared shape"""


class OutOfBounds(GeometryError, IndexError):
    """A cell access or paste region falls outside the matrix"""


class InvalidRange(GeometryError, ValueError):
    """A slice range is inverted or does not fit the matrix"""
