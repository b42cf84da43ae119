"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

- JobStatus: Lifecycle of an automation job
- AnnotationType / ShapeType: Kinds of PDF annotation
- VideoProjectStatus / PdfProjectStatus: Project lifecycle states
"""

from .annotation_type import AnnotationType, ShapeType
from .job_status import JobStatus
from .project_status import PdfProjectStatus, VideoProjectStatus

__all__ = [
    "AnnotationType",
    "ShapeType",
    "JobStatus",
    "PdfProjectStatus",
    "VideoProjectStatus",
]
