from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
import logging

from constants import HTTPStatus
from dependencies import get_youtube_service
from services.youtube_service import YouTubeService
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()


def _missing_url() -> JSONResponse:
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content={
            "success": False,
            "error": {"code": "MISSING_PARAMETER", "message": "URL parameter is required"},
        },
    )


@router.get("/video-info")
@handle_api_errors("Get video info")
def get_video_info(
    url: Optional[str] = Query(None, description="YouTube watch, short or embed URL"),
    service: YouTubeService = Depends(get_youtube_service)
):
    """Video details and muxed formats, best quality first"""
    if not url:
        return _missing_url()

    video_info = service.get_video_info(url)
    logger.info(f"Video info retrieved: '{video_info.video.title}' ({len(video_info.formats)} formats)")
    return {"success": True, "data": video_info.to_api()}


@router.get("/download/format")
@handle_api_errors("Resolve download format")
def get_download_format(
    url: Optional[str] = Query(None, description="YouTube watch, short or embed URL"),
    itag: Optional[int] = Query(None, description="Format to download; best muxed format when omitted"),
    service: YouTubeService = Depends(get_youtube_service)
):
    """
    Resolve the direct media URL for a video

    The returned URL is signed by YouTube and expires after a few hours.
    """
    if not url:
        return _missing_url()

    download = service.get_download_format(url, itag)
    logger.info(f"Download format resolved: itag {download.itag} ({download.quality})")
    return {"success": True, "data": download.to_api()}
