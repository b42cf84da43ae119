"""
YouTube Response DTOs
"""

from typing import List, Optional

from pydantic import Field

from dtos.base import CamelModel


class VideoDetailsDto(CamelModel):
    title: str = Field(description="Video title")
    thumbnail: str = Field(description="Highest quality thumbnail URL")
    duration: int = Field(description="Duration in seconds")
    author: str = Field(description="Channel name")
    view_count: str = Field(description="View count as a string")


class FormatDto(CamelModel):
    itag: int = Field(description="YouTube format identifier")
    quality: str = Field(description="Quality label, e.g. 720p")
    container: str = Field(description="Container extension")
    has_audio: bool = Field(description="Format carries audio")
    has_video: bool = Field(description="Format carries video")
    filesize: Optional[int] = Field(None, description="Size in bytes when known")
    fps: Optional[float] = Field(None, description="Frames per second")
    codec: Optional[str] = Field(None, description="Codec string")


class VideoInfoDto(CamelModel):
    """Video details plus the playable formats, best first."""

    video: VideoDetailsDto
    formats: List[FormatDto]


class DownloadFormatDto(CamelModel):
    """A resolved direct media URL for one format."""

    url: str = Field(description="Direct media URL")
    mime_type: str = Field(description="MIME type of the stream")
    filename: str = Field(description="Suggested download filename")
    content_length: Optional[int] = Field(None, description="Size in bytes when known")
    itag: int = Field(description="Selected format identifier")
    quality: str = Field(description="Selected quality label")
