"""
Automation Response DTOs
"""

from typing import List

from pydantic import Field

from dtos.base import CamelModel
from dtos.internal.automation_job import AutomationJob


class CostBreakdown(CamelModel):
    dubbing_cost: float
    processing_cost: float


class CostEstimate(CamelModel):
    """Projected provider cost for dubbing a video."""

    total_cost: float = Field(description="Total cost in USD")
    cost_per_chunk: float = Field(description="Average cost per chunk in USD")
    total_chunks: int = Field(description="Number of chunks")
    video_duration: float = Field(description="Video duration in seconds")
    breakdown: CostBreakdown


class TimeBreakdown(CamelModel):
    download: int
    chunking: int
    dubbing: int
    merging: int
    finalization: int


class TimeEstimate(CamelModel):
    """Projected wall-clock time in seconds per pipeline stage."""

    total_time: int = Field(description="Total seconds")
    breakdown: TimeBreakdown


class StartPipelineResponse(CamelModel):
    job_id: str
    status: str
    estimated_time: int
    estimated_cost: float


class ListJobsResponse(CamelModel):
    jobs: List[AutomationJob]
    total: int
    has_more: bool
