"""
Response DTOs

DTOs for outgoing API responses. Routes wrap them in the
``{"success": true, "data": ...}`` envelope.
"""

from .automation_response import (
    CostBreakdown,
    CostEstimate,
    ListJobsResponse,
    StartPipelineResponse,
    TimeBreakdown,
    TimeEstimate,
)
from .editor_response import (
    ProjectDetailDto,
    ProjectDto,
    TextOverlayDto,
    TransitionDto,
    UploadResultDto,
    VideoMetadataDto,
)
from .pdf_response import AnnotationDto, PdfProjectDetailDto, PdfProjectDto
from .tts_response import TTSEstimateDto, TTSLimitsDto, TTSPresetsDto
from .youtube_response import DownloadFormatDto, FormatDto, VideoDetailsDto, VideoInfoDto

__all__ = [
    "CostBreakdown",
    "CostEstimate",
    "ListJobsResponse",
    "StartPipelineResponse",
    "TimeBreakdown",
    "TimeEstimate",
    "ProjectDetailDto",
    "ProjectDto",
    "TextOverlayDto",
    "TransitionDto",
    "UploadResultDto",
    "VideoMetadataDto",
    "AnnotationDto",
    "PdfProjectDetailDto",
    "PdfProjectDto",
    "TTSEstimateDto",
    "TTSLimitsDto",
    "TTSPresetsDto",
    "DownloadFormatDto",
    "FormatDto",
    "VideoDetailsDto",
    "VideoInfoDto",
]
