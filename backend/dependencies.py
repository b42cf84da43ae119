"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating service instances,
following the Dependency Inversion Principle. Tests replace any of them
through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from config.app_config import AUTOMATION_DIR, JOB_STORE_DIR
from constants import CacheConfig
from database import get_db
from services.automation_service import AutomationService
from services.editor_service import EditorService
from services.job_store import JobStore
from services.pdf_service import PdfService
from services.temp_manager import TempManager
from services.tts_service import TTSService
from services.upload_service import UploadService
from services.youtube_service import YouTubeService
from utils.memory_cache import MemoryCache


def get_editor_service(db: Session = Depends(get_db)) -> EditorService:
    """
    Factory function for creating EditorService instances.

    Args:
        db: Database session (injected)

    Returns:
        EditorService bound to the request's session
    """
    return EditorService(db)


def get_upload_service() -> UploadService:
    return UploadService()


def get_pdf_service(db: Session = Depends(get_db)) -> PdfService:
    """
    Factory function for creating PdfService instances.

    Args:
        db: Database session (injected)

    Returns:
        PdfService bound to the request's session
    """
    return PdfService(db)


def get_tts_service() -> TTSService:
    return TTSService()


@lru_cache(maxsize=None)
def get_video_cache() -> MemoryCache:
    """Process-wide cache of YouTube video info"""
    return MemoryCache(default_ttl=CacheConfig.VIDEO_INFO_TTL)


@lru_cache(maxsize=None)
def get_youtube_service() -> YouTubeService:
    """
    Shared YouTubeService instance.

    Note: The instance is cached so that every request sees the same
    video info cache.
    """
    return YouTubeService(cache=get_video_cache())


@lru_cache(maxsize=None)
def get_job_store() -> JobStore:
    return JobStore(JOB_STORE_DIR)


def get_automation_service(
    job_store: JobStore = Depends(get_job_store),
    youtube_service: YouTubeService = Depends(get_youtube_service),
) -> AutomationService:
    """
    Factory function for creating AutomationService instances.

    Args:
        job_store: Job persistence (injected)
        youtube_service: Video lookup (injected)

    Returns:
        AutomationService writing job directories under the automation temp dir
    """
    return AutomationService(
        job_store=job_store,
        temp_manager=TempManager(AUTOMATION_DIR),
        youtube_service=youtube_service,
    )
