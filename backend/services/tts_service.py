"""
Text-to-speech service - input validation and cost estimation
"""
import logging
import math

from constants import TTSPricing, TTSVoiceOptions
from dtos.response import TTSEstimateDto, TTSLimitsDto, TTSPresetsDto
from exceptions import InvalidTextInputError, TextTooLongError, ValidationError

logger = logging.getLogger(__name__)


class TTSValidator:
    """Validates text-to-speech input"""

    @staticmethod
    def validate_text(text) -> None:
        """
        Raises:
            InvalidTextInputError: Missing or blank text
            TextTooLongError: Trimmed text longer than the provider limit
        """
        if not text or not isinstance(text, str):
            raise InvalidTextInputError("Text is required")

        trimmed = text.strip()
        if not trimmed:
            raise InvalidTextInputError("Text cannot be empty")
        if len(trimmed) > TTSPricing.MAX_TEXT_LENGTH:
            raise TextTooLongError(len(trimmed), TTSPricing.MAX_TEXT_LENGTH)

    @staticmethod
    def validate_provider(provider) -> None:
        if provider not in TTSPricing.PROVIDERS:
            raise ValidationError(
                f"Provider must be one of: {', '.join(TTSPricing.PROVIDERS)}",
                details={"field": "provider", "value": provider},
            )


class TTSService:
    """Estimates speech length and provider cost without generating audio"""

    def estimate_cost(self, text: str, provider: str = TTSPricing.DEFAULT_PROVIDER) -> TTSEstimateDto:
        """
        Estimate audio duration and cost for ``text``.

        Duration assumes a steady speaking rate; only the hosted provider
        is billed, local synthesis is free.
        """
        TTSValidator.validate_text(text)
        TTSValidator.validate_provider(provider)

        text_length = len(text)
        seconds = math.ceil(text_length / TTSPricing.CHARS_PER_SECOND)
        cost = round(seconds * TTSPricing.FAL_COST_PER_SECOND, 4) if provider == "fal" else 0.0

        logger.info(f"TTS cost estimate: {text_length} chars, {seconds}s, ${cost} ({provider})")
        return TTSEstimateDto(
            text_length=text_length,
            estimated_audio_seconds=seconds,
            estimated_cost_usd=cost,
            provider=provider,
        )

    def get_presets(self) -> TTSPresetsDto:
        """Emotion presets, languages and input limits offered to clients"""
        vector_min, vector_max = TTSVoiceOptions.EMOTION_VECTOR_RANGE
        alpha_min, alpha_max = TTSVoiceOptions.EMOTION_ALPHA_RANGE
        return TTSPresetsDto(
            presets={name: list(vector) for name, vector in TTSVoiceOptions.EMOTION_PRESETS.items()},
            dimensions=list(TTSVoiceOptions.EMOTION_DIMENSIONS),
            dimension_descriptions=dict(TTSVoiceOptions.DIMENSION_DESCRIPTIONS),
            languages=dict(TTSVoiceOptions.LANGUAGES),
            limits=TTSLimitsDto(
                max_text_length=TTSPricing.MAX_TEXT_LENGTH,
                max_voice_reference_duration=TTSVoiceOptions.MAX_VOICE_REFERENCE_SECONDS,
                emotion_vector_range={"min": vector_min, "max": vector_max},
                emotion_alpha_range={"min": alpha_min, "max": alpha_max},
            ),
        )
