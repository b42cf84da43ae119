"""
TTS Request DTOs
"""

from typing import Optional

from pydantic import Field

from constants import TTSPricing
from dtos.base import CamelModel


class EstimateRequest(CamelModel):
    """Request DTO for a text-to-speech cost estimate."""

    text: Optional[str] = Field(None, description="Text to be spoken")
    provider: Optional[str] = Field(TTSPricing.DEFAULT_PROVIDER, description="'fal' or 'local'")
