"""
TTS Response DTOs
"""

from typing import Dict, List

from pydantic import Field

from dtos.base import CamelModel


class TTSEstimateDto(CamelModel):
    """Estimated audio length and cost for a text."""

    text_length: int = Field(description="Characters in the submitted text")
    estimated_audio_seconds: int = Field(description="Approximate spoken duration")
    estimated_cost_usd: float = Field(description="Approximate cost in USD")
    provider: str = Field(description="Provider the estimate applies to")


class TTSLimitsDto(CamelModel):
    """Input limits for speech generation"""

    max_text_length: int = Field(description="Maximum characters per request")
    max_voice_reference_duration: int = Field(description="Longest voice reference clip (seconds)")
    emotion_vector_range: dict = Field(description="Allowed weight per emotion dimension")
    emotion_alpha_range: dict = Field(description="Allowed emotion blend strength")


class TTSPresetsDto(CamelModel):
    """Emotion presets, languages and limits offered to clients."""

    presets: Dict[str, List[float]] = Field(description="Emotion vectors by preset name")
    dimensions: List[str] = Field(description="Emotion dimension names in vector order")
    dimension_descriptions: Dict[str, str] = Field(description="What each dimension expresses")
    languages: Dict[str, str] = Field(description="Supported language codes and names")
    limits: TTSLimitsDto = Field(description="Input limits")
