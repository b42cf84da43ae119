from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
import logging

from constants import HTTPStatus
from dependencies import get_pdf_service
from dtos.request import CreatePdfProjectRequest, UpdatePdfProjectRequest
from services.pdf_service import PdfService
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={"success": False, "error": message},
    )


@router.get("/pdf/project")
@handle_api_errors("List PDF projects")
def list_projects(
    search: Optional[str] = Query(None, description="Case-insensitive name filter"),
    status: Optional[str] = Query(None, description="Filter by project status"),
    service: PdfService = Depends(get_pdf_service)
):
    projects = service.list_projects(search=search, status=status)
    return {"success": True, "data": [project.to_api() for project in projects]}


@router.post("/pdf/project", status_code=HTTPStatus.CREATED)
@handle_api_errors("Create PDF project")
def create_project(
    body: Optional[CreatePdfProjectRequest] = None,
    service: PdfService = Depends(get_pdf_service)
):
    """
    Create a PDF project

    When filePath points at a PDF on the server its page sizes and
    document metadata are read into the project.
    """
    if body is None or not (body.name or "").strip():
        return _bad_request("Project name is required")

    project = service.create_project(body.model_dump(exclude_none=True, by_alias=True))
    return {"success": True, "data": project.to_api()}


@router.get("/pdf/project/{project_id}")
@handle_api_errors("Get PDF project")
def get_project(project_id: str, service: PdfService = Depends(get_pdf_service)):
    return {"success": True, "data": service.get_project(project_id).to_api()}


@router.put("/pdf/project/{project_id}")
@handle_api_errors("Update PDF project")
def update_project(
    project_id: str,
    body: UpdatePdfProjectRequest,
    service: PdfService = Depends(get_pdf_service)
):
    updates = body.model_dump(exclude_unset=True, by_alias=True)
    return {"success": True, "data": service.update_project(project_id, updates).to_api()}


@router.delete("/pdf/project/{project_id}")
@handle_api_errors("Delete PDF project")
def delete_project(project_id: str, service: PdfService = Depends(get_pdf_service)):
    service.delete_project(project_id)
    return {"success": True, "message": "Project deleted successfully"}


@router.get("/pdf/project/{project_id}/annotations")
@handle_api_errors("List annotations")
def list_annotations(
    project_id: str,
    page: Optional[int] = Query(None, ge=1, description="Only annotations on this page"),
    service: PdfService = Depends(get_pdf_service)
):
    """Annotations grouped by page number"""
    return {"success": True, "data": service.list_annotations(project_id, page_number=page)}


@router.post("/pdf/project/{project_id}/annotations", status_code=HTTPStatus.CREATED)
@handle_api_errors("Add annotation")
def add_annotation(
    project_id: str,
    body: Dict[str, Any] = Body(...),
    service: PdfService = Depends(get_pdf_service)
):
    return {"success": True, "data": service.add_annotation(project_id, body)}


@router.put("/pdf/annotation/{annotation_id}")
@handle_api_errors("Update annotation")
def update_annotation(
    annotation_id: str,
    body: Dict[str, Any] = Body(...),
    service: PdfService = Depends(get_pdf_service)
):
    """
    Update an annotation

    The body is merged over the stored annotation, so partial updates
    such as {"color": "#00FF00"} are accepted.
    """
    annotation = service.update_annotation(annotation_id=annotation_id, updates=body)
    return {"success": True, "data": annotation.to_api()}


@router.delete("/pdf/annotation/{annotation_id}")
@handle_api_errors("Delete annotation")
def delete_annotation(
    annotation_id: str,
    project_id: Optional[str] = Query(None, alias="projectId"),
    service: PdfService = Depends(get_pdf_service)
):
    if not project_id or not project_id.strip():
        return _bad_request("Project ID is required")

    service.remove_annotation(project_id, annotation_id)
    return {"success": True, "message": "Annotation deleted successfully"}
