"""
PDF Service

Business logic for PDF annotation projects. Documents are inspected with
PyMuPDF when a project is created from a file; annotations are stored one
row each, with their type-specific fields kept in a JSON document.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import fitz
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from constants import PdfDefaults
from domain.value_objects import PdfProjectStatus
from dtos.response import AnnotationDto, PdfProjectDetailDto, PdfProjectDto
from exceptions import AnnotationNotFoundError, InvalidPDFError, PDFProjectNotFoundError, PDFStorageError
from models import PdfAnnotation, PdfProject
from repositories import AnnotationRepository, PdfProjectRepository
from services.pdf_validator import PdfValidator
from utils.logging_utils import log_operation
from utils.uuid_helper import ensure_utc, generate_uuid, isoformat

logger = logging.getLogger(__name__)

# Keys kept in columns rather than the annotation's JSON document
_ANNOTATION_COLUMNS = ("id", "projectId", "type", "pageNumber", "createdAt", "updatedAt")


def read_pdf_document(file_path: str) -> Dict[str, Any]:
    """
    Read page geometry and document info from a PDF.

    Returns:
        ``{"metadata": {...}, "pages": [...]}`` where metadata carries
        pageCount, fileSize and the document info fields

    Raises:
        InvalidPDFError: File missing or not a readable PDF
    """
    path = Path(file_path).expanduser()
    if not path.is_file():
        raise InvalidPDFError("PDF file not found", details={"filePath": file_path})

    try:
        with fitz.open(path) as document:
            if not document.is_pdf:
                raise InvalidPDFError("File is not a PDF document", details={"filePath": file_path})
            info = document.metadata or {}
            pages = [
                {
                    "pageNumber": index + 1,
                    "width": round(page.rect.width, 2),
                    "height": round(page.rect.height, 2),
                    "rotation": page.rotation,
                }
                for index, page in enumerate(document)
            ]
            page_count = int(document.page_count)
    except InvalidPDFError:
        raise
    except (RuntimeError, ValueError, OSError) as e:
        logger.warning(f"Unable to read PDF {file_path}: {e}")
        raise InvalidPDFError("Invalid or corrupted PDF file", details={"filePath": file_path}) from e

    metadata = {
        "pageCount": page_count,
        "fileSize": path.stat().st_size,
        "title": info.get("title") or path.stem,
        "author": info.get("author") or None,
        "subject": info.get("subject") or None,
        "creator": info.get("creator") or None,
        "producer": info.get("producer") or None,
        "format": info.get("format") or None,
    }
    return {"metadata": metadata, "pages": pages}


def annotation_to_dict(annotation: PdfAnnotation) -> Dict[str, Any]:
    """Flatten an annotation row into the document clients send and receive"""
    return {
        "id": annotation.id,
        "projectId": annotation.project_id,
        "type": annotation.type,
        "pageNumber": annotation.page_number,
        **(annotation.data or {}),
        "createdAt": isoformat(annotation.created_at),
        "updatedAt": isoformat(annotation.updated_at),
    }


def to_annotation_dto(annotation: PdfAnnotation) -> AnnotationDto:
    return AnnotationDto(
        id=annotation.id,
        type=annotation.type,
        page_number=annotation.page_number,
        created_at=ensure_utc(annotation.created_at),
        content=(annotation.data or {}).get("content") if annotation.type == "text" else None,
    )


def to_pdf_project_dto(project: PdfProject) -> PdfProjectDto:
    metadata = project.doc_metadata or {}
    return PdfProjectDto(
        id=project.id,
        name=project.name,
        status=project.status,
        page_count=metadata.get("pageCount", 0),
        file_size=metadata.get("fileSize", 0),
        annotation_count=len(project.annotations),
        created_at=ensure_utc(project.created_at),
        updated_at=ensure_utc(project.updated_at),
    )


def to_pdf_project_detail_dto(project: PdfProject) -> PdfProjectDetailDto:
    return PdfProjectDetailDto(
        **to_pdf_project_dto(project).model_dump(),
        original_file=project.original_file,
        metadata=project.doc_metadata or {},
        pages=project.pages or [],
        settings=project.settings or {},
    )


class PdfService:
    """Service for PDF projects and their annotations."""

    def __init__(self, db: Session):
        self.db = db
        self.projects = PdfProjectRepository(db)
        self.annotations = AnnotationRepository(db)

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    @log_operation("create_pdf_project")
    def create_project(self, data: Dict[str, Any]) -> PdfProjectDto:
        """
        Create a PDF project, optionally reading an existing PDF.

        Args:
            data: ``{name, filePath?, settings?}``

        Raises:
            ValidationError: Bad name
            InvalidPDFError: ``filePath`` is not a readable PDF
        """
        PdfValidator.validate_project_name(data.get("name"))

        file_path = data.get("filePath")
        if file_path:
            document = read_pdf_document(file_path)
        else:
            document = {"metadata": {"pageCount": 0, "fileSize": 0}, "pages": []}

        project = PdfProject(
            id=generate_uuid(),
            name=data["name"].strip(),
            status=PdfProjectStatus.DRAFT.value,
            original_file=file_path or "",
            doc_metadata=document["metadata"],
            pages=document["pages"],
            settings={**PdfDefaults.settings(), **(data.get("settings") or {})},
        )
        self._commit(lambda: self.projects.create(project), "create project")
        logger.info(f"PDF project created: {project.id} ({project.doc_metadata['pageCount']} pages)")
        return to_pdf_project_dto(project)

    def list_projects(self, search: Optional[str] = None, status: Optional[str] = None) -> List[PdfProjectDto]:
        return [to_pdf_project_dto(p) for p in self.projects.list_filtered(search=search, status=status)]

    def get_project(self, project_id: str) -> PdfProjectDetailDto:
        return to_pdf_project_detail_dto(self._get_project(project_id))

    @log_operation("update_pdf_project")
    def update_project(self, project_id: str, updates: Dict[str, Any]) -> PdfProjectDetailDto:
        """Rename, change status or merge settings"""
        if "name" in updates:
            PdfValidator.validate_project_name(updates["name"])
        if "status" in updates:
            PdfValidator.validate_project_status(updates["status"])

        project = self._get_project(project_id)
        if "name" in updates:
            project.name = updates["name"].strip()
        if "status" in updates:
            project.status = updates["status"]
        if updates.get("settings"):
            project.settings = {**(project.settings or {}), **updates["settings"]}

        self._commit(lambda: self.projects.update(project), "update project")
        return to_pdf_project_detail_dto(project)

    @log_operation("delete_pdf_project")
    def delete_project(self, project_id: str) -> None:
        project = self._get_project(project_id)
        self._commit(lambda: self.projects.delete(project), "delete project")
        logger.info(f"PDF project deleted: {project_id}")

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    @log_operation("add_annotation")
    def add_annotation(self, project_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and store a new annotation on a project page.

        Raises:
            PDFProjectNotFoundError: Unknown project
            AnnotationError / InvalidAnnotationTypeError / PDFPageError: Invalid annotation
        """
        project = self._get_project(project_id)
        PdfValidator.validate_annotation(data, self._page_count(project))

        annotation = PdfAnnotation(
            id=generate_uuid(),
            project_id=project.id,
            type=data["type"],
            page_number=data["pageNumber"],
            data=self._payload(data),
        )

        def write():
            self.annotations.create(annotation)
            self.projects.touch(project)

        self._commit(write, "save annotation")
        return annotation_to_dict(annotation)

    def list_annotations(self, project_id: str, page_number: Optional[int] = None) -> Dict[str, List[Dict[str, Any]]]:
        """
        Annotations of a project grouped by page.

        Returns:
            Mapping of page number (as a string key) to that page's annotations
        """
        self._get_project(project_id)
        grouped: Dict[str, List[Dict[str, Any]]] = {}
        for annotation in self.annotations.list_for_project(project_id, page_number):
            grouped.setdefault(str(annotation.page_number), []).append(annotation_to_dict(annotation))
        return grouped

    @log_operation("update_annotation")
    def update_annotation(self, annotation_id: str, updates: Dict[str, Any]) -> AnnotationDto:
        """
        Merge ``updates`` over a stored annotation and validate the result.

        Identity fields (id, projectId, timestamps) cannot be changed.

        Raises:
            AnnotationNotFoundError: Unknown annotation
            AnnotationError / InvalidAnnotationTypeError / PDFPageError: Merged annotation is invalid
        """
        annotation = self.annotations.get_by_id(annotation_id)
        if not annotation:
            raise AnnotationNotFoundError(annotation_id)

        merged = {**annotation_to_dict(annotation), **self._payload(updates)}
        for key in ("type", "pageNumber"):
            if key in updates:
                merged[key] = updates[key]
        PdfValidator.validate_annotation(merged, self._page_count(annotation.project))

        annotation.type = merged["type"]
        annotation.page_number = merged["pageNumber"]
        annotation.data = self._payload(merged)

        def write():
            self.annotations.update(annotation)
            self.projects.touch(annotation.project)

        self._commit(write, "update annotation")
        return to_annotation_dto(annotation)

    @log_operation("remove_annotation")
    def remove_annotation(self, project_id: str, annotation_id: str) -> None:
        """
        Delete one annotation from a project.

        Raises:
            PDFProjectNotFoundError: Unknown project
            AnnotationNotFoundError: Annotation missing or on another project
        """
        project = self._get_project(project_id)
        annotation = self.annotations.get_for_project(project_id, annotation_id)
        if not annotation:
            raise AnnotationNotFoundError(annotation_id)

        def write():
            project.annotations.remove(annotation)
            self.db.flush()
            self.projects.touch(project)

        self._commit(write, "delete annotation")
        logger.info(f"Annotation {annotation_id} removed from PDF project {project_id}")

    # ------------------------------------------------------------------

    def _get_project(self, project_id: str) -> PdfProject:
        project = self.projects.get_by_id(project_id)
        if not project:
            raise PDFProjectNotFoundError(project_id)
        return project

    @staticmethod
    def _page_count(project: PdfProject) -> int:
        return (project.doc_metadata or {}).get("pageCount", 0)

    @staticmethod
    def _payload(data: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in data.items() if key not in _ANNOTATION_COLUMNS}

    def _commit(self, write, operation: str) -> None:
        try:
            write()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {operation}: {e}", exc_info=True)
            raise PDFStorageError(operation, "database error") from e
