"""
PDF project and annotation repositories.
"""

from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from models import PdfAnnotation, PdfProject
from utils.uuid_helper import utcnow
from .base_repository import BaseRepository


class PdfProjectRepository(BaseRepository[PdfProject]):
    """Repository for PdfProject model operations."""

    def __init__(self, db: Session):
        super().__init__(db, PdfProject)

    def list_filtered(self, search: Optional[str] = None, status: Optional[str] = None) -> List[PdfProject]:
        """
        List projects newest first with optional filters.

        Args:
            search: Case-insensitive substring of the project name
            status: Exact project status

        Returns:
            Matching projects with annotations eagerly loaded
        """
        query = self.db.query(self.model).options(selectinload(self.model.annotations))
        if search:
            query = query.filter(self.model.name.ilike(f"%{search}%"))
        if status:
            query = query.filter(self.model.status == status)
        return query.order_by(self.model.created_at.desc()).all()

    def touch(self, project: PdfProject) -> PdfProject:
        """Bump ``updated_at`` after a change to a child annotation"""
        project.updated_at = utcnow()
        self.db.flush()
        return project


class AnnotationRepository(BaseRepository[PdfAnnotation]):
    """Repository for PdfAnnotation model operations."""

    def __init__(self, db: Session):
        super().__init__(db, PdfAnnotation)

    def get_for_project(self, project_id: str, annotation_id: str) -> Optional[PdfAnnotation]:
        return self.db.query(self.model).filter(
            self.model.id == annotation_id,
            self.model.project_id == project_id
        ).first()

    def list_for_project(self, project_id: str, page_number: Optional[int] = None) -> List[PdfAnnotation]:
        query = self.db.query(self.model).filter(self.model.project_id == project_id)
        if page_number is not None:
            query = query.filter(self.model.page_number == page_number)
        return query.order_by(self.model.created_at.asc()).all()
