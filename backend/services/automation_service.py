"""
Automation Service

Creates and tracks YouTube dubbing jobs. A job is recorded as pending with
its working directories, video details and cost/time estimates; the media
pipeline that advances it through the later stages runs elsewhere.
"""

from typing import Optional, Tuple
import logging

from constants import PipelineDefaults
from domain.value_objects import JobStatus
from dtos.internal import AutomationJob, JobError, JobLogEntry, PipelineConfig, VideoInfo
from dtos.request import PipelineConfigRequest
from dtos.response import CostEstimate, ListJobsResponse, TimeEstimate
from exceptions import InvalidJobStateError, JobNotFoundError, ValidationError
from services.cost_calculator import CostCalculator
from services.job_store import JobStore
from services.temp_manager import TempManager
from services.youtube_service import YouTubeService
from utils.logging_utils import log_operation, set_logging_context
from utils.uuid_helper import generate_uuid

logger = logging.getLogger(__name__)


def build_pipeline_config(request: Optional[PipelineConfigRequest]) -> PipelineConfig:
    """
    Apply defaults to a client config and check its limits.

    Raises:
        ValidationError: Unsupported chunk duration or parallelism
    """
    supplied = request.model_dump(exclude_none=True) if request is not None else {}
    config = PipelineConfig(**supplied)

    if config.chunk_duration not in PipelineDefaults.ALLOWED_CHUNK_DURATIONS:
        raise ValidationError(
            "Chunk duration must be 30, 60, 120, or 300 seconds",
            details={"chunkDuration": config.chunk_duration},
        )
    if not PipelineDefaults.MIN_PARALLEL <= config.max_parallel_jobs <= PipelineDefaults.MAX_PARALLEL:
        raise ValidationError(
            f"Max parallel jobs must be between {PipelineDefaults.MIN_PARALLEL} "
            f"and {PipelineDefaults.MAX_PARALLEL}",
            details={"maxParallelJobs": config.max_parallel_jobs},
        )
    return config


class AutomationService:
    """Job lifecycle for the dubbing pipeline"""

    def __init__(
        self,
        job_store: JobStore,
        temp_manager: TempManager,
        youtube_service: YouTubeService,
        cost_calculator: Optional[CostCalculator] = None,
    ):
        self.job_store = job_store
        self.temp_manager = temp_manager
        self.youtube_service = youtube_service
        self.cost_calculator = cost_calculator or CostCalculator()

    @log_operation("start_pipeline")
    def start_pipeline(self, youtube_url: str, config: PipelineConfig) -> AutomationJob:
        """
        Register a new dubbing job.

        Fetches the video details, creates the job's working directories and
        stores the job as pending with a "Pipeline started" log entry.

        Raises:
            InvalidUrlError / VideoNotFoundError / ...: Video lookup failed
        """
        video = self.youtube_service.get_video_info(youtube_url)
        best = video.formats[0] if video.formats else None
        video_info = VideoInfo(
            title=video.video.title,
            duration=video.video.duration,
            thumbnail=video.video.thumbnail,
            resolution=best.quality if best else "unknown",
            codec=(best.codec if best and best.codec else "video/mp4"),
            file_size=best.filesize if best else None,
        )

        job_id = generate_uuid()
        set_logging_context(job_id=job_id)
        paths = self.temp_manager.create_job_directories(job_id)

        job = AutomationJob(
            id=job_id,
            youtube_url=youtube_url,
            video_info=video_info,
            config=config,
            paths=paths,
        )
        self.job_store.create(job)
        job = self.add_log(job_id, "download", "info", "Pipeline started")

        cost, duration = self.estimate(job)
        logger.info(
            f"Pipeline job {job_id} created for '{video_info.title}': "
            f"{cost.total_chunks} chunks, est. {self.cost_calculator.format_cost(cost.total_cost)}, "
            f"{self.cost_calculator.format_time(duration.total_time)}"
        )
        return job

    def estimate(self, job: AutomationJob) -> Tuple[CostEstimate, TimeEstimate]:
        duration = job.video_info.duration
        return (
            self.cost_calculator.calculate_cost(duration, job.config),
            self.cost_calculator.calculate_time(duration, job.config),
        )

    def get_job_status(self, job_id: str) -> Optional[AutomationJob]:
        return self.job_store.get(job_id)

    def add_log(self, job_id: str, stage: str, level: str, message: str) -> AutomationJob:
        return self.job_store.add_log(job_id, JobLogEntry(stage=stage, level=level, message=message))

    @log_operation("cancel_job")
    def cancel_job(self, job_id: str) -> AutomationJob:
        """
        Mark a job as cancelled.

        Raises:
            JobNotFoundError: Unknown job
            InvalidJobStateError: Job already complete, failed or cancelled
        """
        job = self.job_store.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        if not job.status.can_cancel():
            raise InvalidJobStateError(
                job_id, job.status.value,
                "Cannot cancel a completed, cancelled, or failed job",
            )

        stage = job.progress.stage
        self.job_store.update(job_id, {
            "status": JobStatus.CANCELLED,
            "error": JobError(
                code="CANCELLED",
                message="Job was cancelled by user",
                stage=stage,
                recoverable=False,
            ).model_dump(),
        })
        job = self.add_log(job_id, stage, "info", "Job cancelled by user")
        logger.info(f"Pipeline job {job_id} cancelled")
        return job

    @log_operation("delete_job")
    def delete_job(self, job_id: str) -> None:
        """
        Delete a job record and its working files.

        Raises:
            JobNotFoundError: Unknown job
            InvalidJobStateError: Job is still running
        """
        job = self.job_store.get(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        if job.status.is_running():
            raise InvalidJobStateError(
                job_id, job.status.value,
                "Cannot delete a job that is currently running. Please cancel it first.",
            )

        self.temp_manager.cleanup_job_files(job_id)
        self.job_store.delete(job_id)
        logger.info(f"Pipeline job {job_id} deleted")

    def list_jobs(
        self,
        status: Optional[JobStatus] = None,
        limit: int = PipelineDefaults.DEFAULT_PAGE_SIZE,
        offset: int = 0,
    ) -> ListJobsResponse:
        jobs = self.job_store.list(status=status, limit=limit, offset=offset)
        total = self.job_store.count(status=status)
        return ListJobsResponse(jobs=jobs, total=total, has_more=offset + len(jobs) < total)
