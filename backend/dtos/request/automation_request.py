"""
Automation Request DTOs
"""

from typing import Optional

from pydantic import Field

from dtos.base import CamelModel


class PipelineConfigRequest(CamelModel):
    """Pipeline options as sent by the client; missing values take defaults."""

    chunk_duration: Optional[int] = Field(None, description="Seconds per chunk (30, 60, 120 or 300)")
    target_language: Optional[str] = Field(None, description="Dubbing target language code")
    max_parallel_jobs: Optional[int] = Field(None, description="Concurrent dubbing jobs (1-5)")
    video_quality: Optional[str] = Field(None, description="Source quality, e.g. 1080p")
    output_format: Optional[str] = Field(None, description="Output container")
    use_watermark: Optional[bool] = Field(None, description="Accept a watermark for a discount")
    keep_intermediate_files: Optional[bool] = Field(None, description="Keep chunks after merging")
    chunking_strategy: Optional[str] = Field(None, description="'fixed' or 'smart'")


class StartPipelineRequest(CamelModel):
    """Request DTO for starting an automation job."""

    youtube_url: Optional[str] = Field(None, description="Video to dub")
    config: Optional[PipelineConfigRequest] = Field(None, description="Pipeline configuration")
