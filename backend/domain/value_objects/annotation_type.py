"""
Annotation value objects for the PDF annotator.
"""

from enum import Enum


class AnnotationType(str, Enum):
    TEXT = "text"
    HIGHLIGHT = "highlight"
    DRAWING = "drawing"
    SHAPE = "shape"
    IMAGE = "image"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class ShapeType(str, Enum):
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    LINE = "line"
    ARROW = "arrow"
    POLYGON = "polygon"

    def requires_points(self) -> bool:
        """Polygons and arrows are drawn from a point list"""
        return self in (ShapeType.POLYGON, ShapeType.ARROW)

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
