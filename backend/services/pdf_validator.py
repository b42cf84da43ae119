"""
PDF validation service - checks PDF projects and annotations
"""
from typing import Any, Dict, Optional
import re

from constants import PdfDefaults
from domain.value_objects import AnnotationType, PdfProjectStatus, ShapeType
from exceptions import AnnotationError, InvalidAnnotationTypeError, PDFPageError, ValidationError

_HEX_COLOR = re.compile(r'^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$')
_BASE64 = re.compile(r'^[A-Za-z0-9+/]*={0,2}$')
_DATA_URL_PREFIX = re.compile(r'^data:image/[a-z]+;base64,')
_IMAGE_TYPES = ("png", "jpg", "jpeg")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid_color(color: Any) -> bool:
    """``#rgb`` or ``#rrggbb``"""
    return isinstance(color, str) and bool(_HEX_COLOR.match(color))


def is_valid_base64(data: Any) -> bool:
    if not isinstance(data, str) or not data:
        return False
    return bool(_BASE64.match(_DATA_URL_PREFIX.sub('', data)))


class PdfValidator:
    """Validates PDF project fields and annotation documents"""

    @staticmethod
    def validate_project_name(name: Any) -> None:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(
                "Project name is required and must be a non-empty string",
                details={"field": "name"},
            )
        if len(name) > PdfDefaults.MAX_NAME_LENGTH:
            raise ValidationError(
                f"Project name must not exceed {PdfDefaults.MAX_NAME_LENGTH} characters",
                details={"field": "name", "length": len(name)},
            )

    @staticmethod
    def validate_project_status(status: Any) -> None:
        if status not in PdfProjectStatus.values():
            raise ValidationError("Invalid project status", details={"field": "status", "value": status})

    @staticmethod
    def validate_annotation(annotation: Dict[str, Any], page_count: Optional[int] = None) -> None:
        """
        Validate a complete annotation document (camelCase keys).

        Args:
            annotation: Annotation fields including ``type`` and ``pageNumber``
            page_count: Pages in the project; the page bound is skipped when 0 or None

        Raises:
            AnnotationError: Missing or out-of-range field
            InvalidAnnotationTypeError: Unknown annotation type
            PDFPageError: Page beyond the end of the document
        """
        annotation_type = annotation.get("type")
        if not annotation_type:
            raise AnnotationError("Annotation type is required")
        if annotation_type not in AnnotationType.values():
            raise InvalidAnnotationTypeError(str(annotation_type))

        page_number = annotation.get("pageNumber")
        if not _is_number(page_number) or page_number < 1:
            raise AnnotationError("Invalid page number", details={"pageNumber": page_number})
        if page_count and page_number > page_count:
            raise PDFPageError(
                f"Page {page_number} exceeds total pages",
                details={"pageNumber": page_number, "totalPages": page_count},
            )

        for field in ("x", "y"):
            value = annotation.get(field)
            if not _is_number(value) or value < 0:
                raise AnnotationError(f"Invalid {field} position", details={field: value})

        for field in ("width", "height"):
            value = annotation.get(field)
            if not _is_number(value) or value <= 0:
                raise AnnotationError(f"Invalid {field}", details={field: value})

        opacity = annotation.get("opacity")
        if opacity is not None and (not _is_number(opacity) or opacity < 0 or opacity > 1):
            raise AnnotationError("Opacity must be between 0 and 1", details={"opacity": opacity})

        checks = {
            AnnotationType.TEXT.value: PdfValidator._validate_text,
            AnnotationType.HIGHLIGHT.value: PdfValidator._validate_highlight,
            AnnotationType.DRAWING.value: PdfValidator._validate_drawing,
            AnnotationType.SHAPE.value: PdfValidator._validate_shape,
            AnnotationType.IMAGE.value: PdfValidator._validate_image,
        }
        checks[annotation_type](annotation)

    @staticmethod
    def _validate_text(annotation: Dict[str, Any]) -> None:
        if not isinstance(annotation.get("content"), str) or not annotation["content"]:
            raise AnnotationError("Text content is required")
        if not isinstance(annotation.get("fontFamily"), str) or not annotation["fontFamily"]:
            raise AnnotationError("Font family is required")
        font_size = annotation.get("fontSize")
        if not _is_number(font_size) or font_size <= 0:
            raise AnnotationError("Invalid font size", details={"fontSize": font_size})
        if not is_valid_color(annotation.get("color")):
            raise AnnotationError("Invalid color format", details={"color": annotation.get("color")})

    @staticmethod
    def _validate_highlight(annotation: Dict[str, Any]) -> None:
        if not is_valid_color(annotation.get("color")):
            raise AnnotationError("Invalid color format", details={"color": annotation.get("color")})

    @staticmethod
    def _validate_stroke(annotation: Dict[str, Any]) -> None:
        if not is_valid_color(annotation.get("strokeColor")):
            raise AnnotationError("Invalid stroke color", details={"color": annotation.get("strokeColor")})
        stroke_width = annotation.get("strokeWidth")
        if not _is_number(stroke_width) or stroke_width <= 0:
            raise AnnotationError("Invalid stroke width", details={"strokeWidth": stroke_width})

    @staticmethod
    def _validate_drawing(annotation: Dict[str, Any]) -> None:
        points = annotation.get("points")
        if not isinstance(points, list) or len(points) < 2:
            raise AnnotationError("Drawing must have at least 2 points")
        for point in points:
            if not isinstance(point, dict) or not _is_number(point.get("x")) or not _is_number(point.get("y")):
                raise AnnotationError("Invalid point coordinates")
        PdfValidator._validate_stroke(annotation)

    @staticmethod
    def _validate_shape(annotation: Dict[str, Any]) -> None:
        shape_type = annotation.get("shapeType")
        if shape_type not in ShapeType.values():
            raise AnnotationError("Invalid shape type", details={"shapeType": shape_type})
        PdfValidator._validate_stroke(annotation)

        points = annotation.get("points")
        if ShapeType(shape_type).requires_points() and (not isinstance(points, list) or len(points) < 2):
            raise AnnotationError(f"{shape_type} requires at least 2 points")

    @staticmethod
    def _validate_image(annotation: Dict[str, Any]) -> None:
        image_data = annotation.get("imageData")
        if not isinstance(image_data, str) or not image_data:
            raise AnnotationError("Image data is required")
        if annotation.get("imageType") not in _IMAGE_TYPES:
            raise AnnotationError("Invalid image type", details={"imageType": annotation.get("imageType")})
        if not is_valid_base64(image_data):
            raise AnnotationError("Invalid image data format (expected base64)")
