"""
Request DTOs

DTOs for incoming API requests. These decouple the API from database models
and provide a clear contract for what data the API expects.
"""

from .automation_request import PipelineConfigRequest, StartPipelineRequest
from .editor_request import (
    AddTextOverlayRequest,
    AddTransitionRequest,
    CreateProjectRequest,
    UpdateProjectRequest,
    VideoMetadataRequest,
)
from .pdf_request import CreatePdfProjectRequest, UpdatePdfProjectRequest
from .tts_request import EstimateRequest

__all__ = [
    "PipelineConfigRequest",
    "StartPipelineRequest",
    "AddTextOverlayRequest",
    "AddTransitionRequest",
    "CreateProjectRequest",
    "UpdateProjectRequest",
    "VideoMetadataRequest",
    "CreatePdfProjectRequest",
    "UpdatePdfProjectRequest",
    "EstimateRequest",
]
