"""
Editor Response DTOs
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from dtos.base import CamelModel


class ProjectDto(CamelModel):
    """
    Response DTO for a video project.

    The list and detail views share this summary; the full timeline is
    returned by ProjectDetailDto.
    """

    id: str = Field(description="Project ID")
    name: str = Field(description="Project name")
    description: str = Field(description="Project description")
    thumbnail: Optional[str] = Field(None, description="Thumbnail URL or path")
    status: str = Field(description="Project status")
    duration: float = Field(description="Timeline duration in seconds")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")


class ProjectDetailDto(ProjectDto):
    """Project with its settings and timeline documents"""

    source_video_url: Optional[str] = Field(None, description="Initial clip URL")
    settings: dict = Field(description="Project settings")
    timeline: dict = Field(description="Timeline document")


class UploadResultDto(CamelModel):
    """Where an uploaded file was stored"""

    file_path: str = Field(description="Absolute path of the stored file")
    filename: str = Field(description="Stored file name")
    size: int = Field(description="Size in bytes")
    type: Optional[str] = Field(None, description="Declared content type")


class VideoMetadataDto(CamelModel):
    """Stream properties read with ffprobe"""

    duration: float = Field(description="Duration in seconds")
    width: Optional[int] = Field(None, description="Frame width of the first video stream")
    height: Optional[int] = Field(None, description="Frame height of the first video stream")
    fps: Optional[float] = Field(None, description="Average frame rate")
    codec: Optional[str] = Field(None, description="Video codec name")
    has_audio: bool = Field(False, description="Whether an audio stream exists")
    format: str = Field("unknown", description="Container format name")


class TextOverlayDto(CamelModel):
    """A text overlay as stored on the timeline"""

    id: Optional[str] = Field(None, description="Overlay ID; absent on overlays saved with a whole timeline")
    text: str = Field(description="Displayed text")
    start_time: float = Field(0, description="Appears at (seconds)")
    end_time: float = Field(description="Disappears at (seconds)")
    position: Optional[dict] = Field(default_factory=dict, description="x/y in percent of the frame")
    style: Optional[dict] = Field(default_factory=dict, description="Font, colour and emphasis")
    animation: Optional[dict] = Field(None, description="fadeIn/fadeOut durations")
    preset: Optional[str] = Field(None, description="Preset the overlay was created from")


class TransitionDto(CamelModel):
    """
    A transition between two clips.

    Transitions written with a whole timeline are stored as sent, so every
    field is optional here.
    """

    id: Optional[str] = Field(None, description="Transition ID")
    type: Optional[str] = Field(None, description="Transition type")
    duration: Optional[float] = Field(None, description="Length in seconds")
    position: Optional[float] = Field(None, description="Timeline position, the end of the outgoing clip")
    from_clip_id: Optional[str] = Field(None, description="Clip the transition leaves")
    to_clip_id: Optional[str] = Field(None, description="Clip the transition enters")
    params: Optional[dict] = Field(None, description="Extra renderer parameters")
