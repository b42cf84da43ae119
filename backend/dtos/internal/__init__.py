"""
Internal DTOs

DTOs for service-to-service communication within the backend. The automation
job models double as the on-disk format of the job store.
"""

from .automation_job import (
    AutomationJob,
    JobError,
    JobLogEntry,
    JobPaths,
    JobProgress,
    PipelineConfig,
    VideoInfo,
)

__all__ = [
    "AutomationJob",
    "JobError",
    "JobLogEntry",
    "JobPaths",
    "JobProgress",
    "PipelineConfig",
    "VideoInfo",
]
