"""
Automation API

The dubbing pipeline endpoints answer with a flat ``{"error": ...}`` body
rather than the success/error envelope used elsewhere; the automation
client reads ``error`` and ``details`` directly.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
import logging

from constants import HTTPStatus, PipelineDefaults
from dependencies import get_automation_service
from domain.value_objects import JobStatus
from dtos.request import StartPipelineRequest
from dtos.response import StartPipelineResponse
from exceptions import ApplicationError, InvalidJobStateError, JobNotFoundError, ValidationError
from services.automation_service import AutomationService, build_pipeline_config
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


@router.post("/automation/start", status_code=HTTPStatus.CREATED)
@handle_api_errors("Start pipeline")
def start_pipeline(
    body: Optional[StartPipelineRequest] = None,
    service: AutomationService = Depends(get_automation_service)
):
    """
    Start a dubbing job for a YouTube video

    Returns the job id with cost and time estimates. The job is stored
    as pending.
    """
    if body is None or not body.youtube_url:
        return _error(HTTPStatus.BAD_REQUEST, "YouTube URL is required")
    if body.config is None:
        return _error(HTTPStatus.BAD_REQUEST, "Pipeline configuration is required")

    try:
        config = build_pipeline_config(body.config)
        job = service.start_pipeline(body.youtube_url, config)
        cost, duration = service.estimate(job)
    except ValidationError as e:
        return _error(HTTPStatus.BAD_REQUEST, e.message)
    except ApplicationError as e:
        if e.status_code < HTTPStatus.INTERNAL_SERVER_ERROR:
            return _error(e.status_code, e.message)
        logger.error(f"Error starting pipeline: {e.message}", exc_info=True)
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to start pipeline", details=e.message)
    except OSError as e:
        logger.error(f"Error starting pipeline: {e}", exc_info=True)
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to start pipeline", details=str(e))

    return StartPipelineResponse(
        job_id=job.id,
        status=job.status.value,
        estimated_time=duration.total_time,
        estimated_cost=cost.total_cost,
    ).to_api()


@router.get("/automation/jobs")
@handle_api_errors("List pipeline jobs")
def list_jobs(
    limit: int = Query(PipelineDefaults.DEFAULT_PAGE_SIZE, description="Page size (1-100)"),
    offset: int = Query(0, description="Jobs to skip"),
    status: Optional[str] = Query(None, description="Filter by job status"),
    service: AutomationService = Depends(get_automation_service)
):
    """List jobs newest first"""
    if not 1 <= limit <= PipelineDefaults.MAX_PAGE_SIZE:
        return _error(HTTPStatus.BAD_REQUEST, f"Limit must be between 1 and {PipelineDefaults.MAX_PAGE_SIZE}")
    if offset < 0:
        return _error(HTTPStatus.BAD_REQUEST, "Offset must be non-negative")

    status_filter = None
    if status:
        try:
            status_filter = JobStatus.from_string(status)
        except ValueError as e:
            return _error(HTTPStatus.BAD_REQUEST, str(e))

    return service.list_jobs(status=status_filter, limit=limit, offset=offset).to_api()


@router.delete("/automation/jobs/{job_id}")
@handle_api_errors("Delete pipeline job")
def delete_job(job_id: str, service: AutomationService = Depends(get_automation_service)):
    try:
        service.delete_job(job_id)
    except JobNotFoundError:
        return _error(HTTPStatus.NOT_FOUND, "Job not found")
    except InvalidJobStateError as e:
        return _error(HTTPStatus.BAD_REQUEST, e.message)

    return {"success": True, "message": "Job deleted successfully"}


@router.post("/automation/cancel/{job_id}")
@handle_api_errors("Cancel pipeline job")
def cancel_job(job_id: str, service: AutomationService = Depends(get_automation_service)):
    try:
        service.cancel_job(job_id)
    except JobNotFoundError:
        return JSONResponse(
            status_code=HTTPStatus.NOT_FOUND,
            content={"success": False, "error": "Job not found"},
        )
    except InvalidJobStateError as e:
        return JSONResponse(
            status_code=HTTPStatus.CONFLICT,
            content={"success": False, "error": e.message},
        )
    except (ApplicationError, OSError) as e:
        logger.error(f"Error cancelling job {job_id}: {e}", exc_info=True)
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Failed to cancel job", "details": str(e)},
        )

    return {"success": True, "message": "Job cancelled successfully"}


@router.get("/automation/status")
@router.get("/automation/status/")
@handle_api_errors("Get pipeline job status")
def missing_job_id():
    return _error(HTTPStatus.BAD_REQUEST, "Job ID is required")


@router.get("/automation/status/{job_id}")
@handle_api_errors("Get pipeline job status")
def get_job_status(job_id: str, service: AutomationService = Depends(get_automation_service)):
    """Full job document including progress and logs"""
    if not job_id.strip():
        return _error(HTTPStatus.BAD_REQUEST, "Job ID is required")

    try:
        job = service.get_job_status(job_id)
    except Exception as e:
        logger.error(f"Error getting job status for {job_id}: {e}", exc_info=True)
        return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to get job status", details=str(e))

    if job is None:
        return _error(HTTPStatus.NOT_FOUND, "Job not found")

    return {"job": job.to_api()}
