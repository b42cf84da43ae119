"""
Editor Request DTOs

Bodies accepted by the video editor endpoints. Field contents (name length,
resolution bounds, timeline shape) are checked by EditorValidator so that
failures carry the editor's own error codes.
"""

from typing import Any, Dict, Optional

from pydantic import Field

from dtos.base import CamelModel


class CreateProjectRequest(CamelModel):
    """Request DTO for creating a video project."""

    name: Optional[str] = Field(None, description="Project name (defaults to 'Untitled Project')")
    description: Optional[str] = Field(None, description="Free-text description")
    source_video_url: Optional[str] = Field(None, description="http(s) URL of the initial clip")
    settings: Optional[Dict[str, Any]] = Field(None, description="Partial project settings")

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "name": "My Project",
                "description": "Trailer cut",
                "sourceVideoUrl": "https://example.com/video.mp4",
                "settings": {"frameRate": 60},
            }
        }


class UpdateProjectRequest(CamelModel):
    """Request DTO for updating a video project; only sent fields change."""

    name: Optional[str] = Field(None, description="New project name")
    description: Optional[str] = Field(None, description="New description")
    status: Optional[str] = Field(None, description="New project status")
    thumbnail: Optional[str] = Field(None, description="Thumbnail URL or path")
    settings: Optional[Dict[str, Any]] = Field(None, description="Settings to merge")
    timeline: Optional[Dict[str, Any]] = Field(None, description="Replacement timeline")


class AddTextOverlayRequest(CamelModel):
    """
    Request DTO for adding a text overlay.

    ``preset`` supplies position, style and duration for anything the
    request leaves out.
    """

    content: Optional[str] = Field(None, description="Text to display")
    start_time: Optional[float] = Field(None, description="When the overlay appears (seconds)")
    duration: Optional[float] = Field(None, description="How long it stays visible (seconds)")
    position: Optional[Dict[str, Any]] = Field(None, description="x/y in percent of the frame")
    style: Optional[Dict[str, Any]] = Field(None, description="Style overrides")
    preset: Optional[str] = Field(None, description="title, subtitle, lower-third, caption, watermark or custom")


class AddTransitionRequest(CamelModel):
    """Request DTO for a transition between two timeline clips."""

    type: Optional[str] = Field(None, description="Transition type, e.g. fade or wipeLeft")
    from_clip_id: Optional[str] = Field(None, description="Clip the transition leaves")
    to_clip_id: Optional[str] = Field(None, description="Clip the transition enters")
    duration: Optional[float] = Field(None, description="Length in seconds")
    params: Optional[Dict[str, Any]] = Field(None, description="Extra renderer parameters")


class VideoMetadataRequest(CamelModel):
    """Request DTO for probing a video file."""

    video_path: Optional[str] = Field(None, description="Local path or http(s) URL of the video")
