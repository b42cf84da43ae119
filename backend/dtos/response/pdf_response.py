"""
PDF Response DTOs
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from dtos.base import CamelModel


class PdfProjectDto(CamelModel):
    """Summary of a PDF project for list views."""

    id: str = Field(description="Project ID")
    name: str = Field(description="Project name")
    status: str = Field(description="Project status")
    page_count: int = Field(description="Number of pages")
    file_size: int = Field(description="Source file size in bytes")
    annotation_count: int = Field(description="Number of annotations")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")


class PdfProjectDetailDto(PdfProjectDto):
    """Full PDF project including pages, metadata and settings"""

    original_file: str = Field(description="Source PDF path")
    metadata: Dict[str, Any] = Field(description="Document metadata")
    pages: List[Dict[str, Any]] = Field(description="Per-page size and rotation")
    settings: Dict[str, Any] = Field(description="Annotation defaults")


class AnnotationDto(CamelModel):
    """
    Response DTO for an annotation.

    ``content`` is only present for text annotations.
    """

    id: str = Field(description="Annotation ID")
    type: str = Field(description="Annotation type")
    page_number: int = Field(description="1-based page number")
    created_at: datetime = Field(description="Creation timestamp")
    content: Optional[str] = Field(None, description="Text content (text annotations)")

    def to_api(self, **kwargs: Any) -> Dict[str, Any]:
        return super().to_api(exclude_none=True, **kwargs)
