from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from constants import HTTPStatus, TTSPricing
from dependencies import get_tts_service
from dtos.request import EstimateRequest
from services.tts_service import TTSService
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/tts/estimate")
@handle_api_errors("Estimate TTS cost")
def estimate_cost(
    body: Optional[EstimateRequest] = None,
    service: TTSService = Depends(get_tts_service)
):
    """Estimate spoken duration and provider cost for a text"""
    if body is None or not body.text:
        return JSONResponse(
            status_code=HTTPStatus.BAD_REQUEST,
            content={
                "success": False,
                "error": {"code": "MISSING_PARAMETER", "message": "text is required"},
            },
        )

    estimate = service.estimate_cost(body.text, body.provider or TTSPricing.DEFAULT_PROVIDER)
    return {"success": True, "data": estimate.to_api()}


@router.get("/tts/presets")
@handle_api_errors("Get TTS presets")
def get_presets(service: TTSService = Depends(get_tts_service)):
    """Emotion presets, supported languages and input limits"""
    return {"success": True, "data": service.get_presets().to_api()}
