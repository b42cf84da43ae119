from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
import logging

from constants import EditorDefaults, HTTPStatus
from dependencies import get_editor_service, get_upload_service
from dtos.request import (
    AddTextOverlayRequest,
    AddTransitionRequest,
    CreateProjectRequest,
    UpdateProjectRequest,
    VideoMetadataRequest,
)
from services.editor_service import EditorService
from services.upload_service import UploadService
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()


def _bad_request(code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={"success": False, "error": {"code": code, "message": message}},
    )


@router.get("/editor/project")
@handle_api_errors("List video projects")
def list_projects(service: EditorService = Depends(get_editor_service)):
    """List every video project, newest first"""
    projects = service.list_projects()
    return {"success": True, "data": [project.to_api() for project in projects]}


@router.post("/editor/project")
@handle_api_errors("Create video project")
def create_project(
    body: Optional[CreateProjectRequest] = None,
    service: EditorService = Depends(get_editor_service)
):
    """
    Create a video project

    Missing name and description fall back to "Untitled Project" and "".
    A sourceVideoUrl is probed and added as the first clip when readable.
    """
    body = body or CreateProjectRequest()
    project = service.create_project({
        "name": body.name or EditorDefaults.PROJECT_NAME,
        "description": body.description or "",
        "sourceVideoUrl": body.source_video_url,
        "settings": body.settings,
    })
    return {"success": True, "data": project.to_api()}


@router.get("/editor/project/{project_id}")
@handle_api_errors("Get video project")
def get_project(project_id: str, service: EditorService = Depends(get_editor_service)):
    return {"success": True, "data": service.get_project(project_id).to_api()}


@router.put("/editor/project/{project_id}")
@handle_api_errors("Update video project")
def update_project(
    project_id: str,
    body: UpdateProjectRequest,
    service: EditorService = Depends(get_editor_service)
):
    """Apply a partial update; only fields present in the body change"""
    updates = body.model_dump(exclude_unset=True, by_alias=True)
    project = service.update_project(project_id, updates)
    return {"success": True, "data": project.to_api()}


@router.delete("/editor/project/{project_id}")
@handle_api_errors("Delete video project")
def delete_project(project_id: str, service: EditorService = Depends(get_editor_service)):
    service.delete_project(project_id)
    return {"success": True, "message": "Project deleted successfully"}

@router.get("/editor/project/{project_id}/text")
@handle_api_errors("List text overlays")
def list_text_overlays(project_id: str, service: EditorService = Depends(get_editor_service)):
    overlays = service.list_text_overlays(project_id)
    return {"success": True, "data": [overlay.to_api() for overlay in overlays]}


@router.post("/editor/project/{project_id}/text")
@handle_api_errors("Add text overlay")
def add_text_overlay(
    project_id: str,
    body: Optional[AddTextOverlayRequest] = None,
    service: EditorService = Depends(get_editor_service)
):
    """Add a text overlay; the preset (default "custom") fills unset fields"""
    body = body or AddTextOverlayRequest()
    if not body.content or not body.content.strip():
        return _bad_request("MISSING_CONTENT", "Text content is required")
    if body.start_time is None or body.start_time < 0:
        return _bad_request("INVALID_START_TIME", "Valid start time is required")

    overlay = service.add_text_overlay(project_id, body.model_dump(by_alias=True))
    return {"success": True, "data": overlay.to_api(), "message": "Text overlay added successfully"}


@router.get("/editor/project/{project_id}/transition")
@handle_api_errors("List transitions")
def list_transitions(project_id: str, service: EditorService = Depends(get_editor_service)):
    transitions = service.list_transitions(project_id)
    return {"success": True, "data": [transition.to_api() for transition in transitions]}


@router.post("/editor/project/{project_id}/transition")
@handle_api_errors("Add transition")
def add_transition(
    project_id: str,
    body: Optional[AddTransitionRequest] = None,
    service: EditorService = Depends(get_editor_service)
):
    body = body or AddTransitionRequest()
    transition = service.add_transition(project_id, body.model_dump(by_alias=True))
    return {"success": True, "data": transition.to_api(), "message": "Transition created successfully"}


@router.post("/editor/metadata")
@handle_api_errors("Get video metadata")
def get_video_metadata(
    body: Optional[VideoMetadataRequest] = None,
    service: EditorService = Depends(get_editor_service)
):
    """Probe a local path or URL with ffprobe"""
    if body is None or not body.video_path:
        return _bad_request("MISSING_PARAMETER", "videoPath is required")

    metadata = service.get_video_metadata(body.video_path)
    return {"success": True, "data": metadata.to_api(), "message": "Metadata retrieved successfully"}


@router.post("/editor/upload")
@handle_api_errors("Upload video")
def upload_video(
    file: Optional[UploadFile] = File(None),
    service: UploadService = Depends(get_upload_service)
):
    """Store an uploaded video in the editor temp directory"""
    if file is None:
        return _bad_request("MISSING_FILE", "No file provided")

    result = service.save_video(file.filename, file.file, file.content_type)
    return {
        "success": True,
        "data": result.to_api(),
        "message": "File uploaded successfully",
    }
