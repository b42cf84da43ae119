"""
Internal Automation Job DTOs

The persisted shape of an automation job. JobStore writes these as JSON
documents, and the status endpoint returns them verbatim.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from constants import PipelineDefaults
from domain.value_objects import JobStatus
from dtos.base import CamelModel
from utils.uuid_helper import utcnow


class PipelineConfig(CamelModel):
    """Resolved pipeline configuration (all defaults applied)."""

    chunk_duration: int = PipelineDefaults.CHUNK_DURATION
    target_language: str = PipelineDefaults.TARGET_LANGUAGE
    max_parallel_jobs: int = PipelineDefaults.MAX_PARALLEL_JOBS
    video_quality: str = PipelineDefaults.VIDEO_QUALITY
    output_format: str = PipelineDefaults.OUTPUT_FORMAT
    use_watermark: bool = False
    keep_intermediate_files: bool = False
    chunking_strategy: str = PipelineDefaults.CHUNKING_STRATEGY


class VideoInfo(CamelModel):
    title: str
    duration: float = Field(description="Seconds")
    thumbnail: str = ""
    resolution: str = "unknown"
    codec: str = "video/mp4"
    file_size: Optional[int] = None


class JobLogEntry(CamelModel):
    timestamp: datetime = Field(default_factory=utcnow)
    stage: str
    level: str = "info"
    message: str


class JobProgress(CamelModel):
    stage: str = "download"
    overall_percent: float = 0
    started_at: datetime = Field(default_factory=utcnow)
    logs: List[JobLogEntry] = Field(default_factory=list)


class JobPaths(CamelModel):
    root: str
    source: str
    chunks: str
    dubbed: str
    output: str


class JobError(CamelModel):
    code: str
    message: str
    stage: Optional[str] = None
    recoverable: bool = False
    failed_chunks: Optional[List[int]] = None


class AutomationJob(CamelModel):
    """A YouTube dubbing job and everything known about its progress."""

    id: str
    status: JobStatus = JobStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    youtube_url: str
    video_info: VideoInfo
    config: PipelineConfig
    progress: JobProgress = Field(default_factory=JobProgress)
    paths: JobPaths
    output_file: Optional[str] = None
    error: Optional[JobError] = None

    def to_api(self, **kwargs) -> dict:
        return super().to_api(exclude_none=True, **kwargs)
