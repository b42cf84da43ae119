"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations.
"""

from .base_repository import BaseRepository
from .pdf_repository import AnnotationRepository, PdfProjectRepository
from .video_project_repository import VideoProjectRepository

__all__ = [
    "BaseRepository",
    "AnnotationRepository",
    "PdfProjectRepository",
    "VideoProjectRepository",
]
