"""
YouTube Service

Coordinates URL validation, caching, yt-dlp fetching and mapping for the
video info and download endpoints.
"""

from typing import Any, Dict, Optional
import logging
import re

from constants import CacheConfig, YouTubeConfig
from dtos.response import DownloadFormatDto, VideoInfoDto
from exceptions import FormatNotFoundError, VideoUnavailableError
from services.youtube_mapper import YouTubeMapper, format_itag, format_mime_type, format_quality
from services.youtube_repository import YouTubeRepository
from services.youtube_validator import YouTubeValidator
from utils.logging_utils import log_operation
from utils.memory_cache import MemoryCache

logger = logging.getLogger(__name__)

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')


def sanitize_filename(title: str) -> str:
    """Replace characters invalid in filenames, cap the length and add ``.mp4``"""
    sanitized = _INVALID_FILENAME_CHARS.sub('_', title)
    return f"{sanitized[:YouTubeConfig.MAX_FILENAME_LENGTH]}.mp4"


def video_cache_key(video_id: str) -> str:
    return f"video:{video_id}"


class YouTubeService:
    """Video metadata and download format lookup for YouTube URLs"""

    def __init__(
        self,
        repository: Optional[YouTubeRepository] = None,
        mapper: Optional[YouTubeMapper] = None,
        cache: Optional[MemoryCache] = None,
    ):
        self.repository = repository or YouTubeRepository()
        self.mapper = mapper or YouTubeMapper()
        self.cache = cache

    @log_operation("get_video_info")
    def get_video_info(self, url: str) -> VideoInfoDto:
        """
        Get video details and playable formats.

        Results are cached per video id for an hour.

        Raises:
            InvalidUrlError: Not a YouTube URL
            VideoNotFoundError / VideoUnavailableError / AllStrategiesFailedError: Fetch failed
        """
        YouTubeValidator.validate_url(url)
        video_id = YouTubeValidator.extract_video_id(url)
        cache_key = video_cache_key(video_id)

        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for video: {video_id}")
                return cached

        logger.info(f"Fetching video info from YouTube: {video_id}")
        video_info = self.mapper.map_to_video_info(self.repository.fetch_video_info(video_id))

        if self.cache is not None:
            self.cache.set(cache_key, video_info, CacheConfig.VIDEO_INFO_TTL)
        return video_info

    @log_operation("get_download_format")
    def get_download_format(self, url: str, itag: Optional[int] = None) -> DownloadFormatDto:
        """
        Resolve a direct media URL for one format.

        Without ``itag`` the best muxed (audio and video) format is chosen.
        Media URLs expire, so this always fetches fresh metadata.

        Raises:
            InvalidUrlError: Not a YouTube URL
            ValidationError: ``itag`` is not a positive integer
            FormatNotFoundError: Requested itag is not offered
            VideoUnavailableError: No muxed format exists
        """
        YouTubeValidator.validate_url(url)
        if itag is not None:
            YouTubeValidator.validate_itag(itag)
        video_id = YouTubeValidator.extract_video_id(url)

        info = self.repository.fetch_video_info(video_id)

        if itag is not None:
            selected = self.mapper.find_raw_format(info, itag)
            if selected is None:
                raise FormatNotFoundError(itag)
        else:
            best = self.mapper.filter_and_sort_formats(self.mapper.extract_formats(info))
            if not best:
                raise VideoUnavailableError("no format with both audio and video is available")
            selected = self.mapper.find_raw_format(info, best[0].itag)

        if not selected.get('url'):
            raise FormatNotFoundError(format_itag(selected) or itag)

        return DownloadFormatDto(
            url=selected['url'],
            mime_type=format_mime_type(selected),
            filename=sanitize_filename(info.get('title') or 'video'),
            content_length=selected.get('filesize') or selected.get('filesize_approx'),
            itag=format_itag(selected),
            quality=format_quality(selected),
        )

    def invalidate_video_cache(self, url: str) -> bool:
        if self.cache is None:
            return False
        YouTubeValidator.validate_url(url)
        video_id = YouTubeValidator.extract_video_id(url)
        removed = self.cache.delete(video_cache_key(video_id))
        logger.info(f"Invalidated cache for video: {video_id}")
        return removed

    def cache_stats(self) -> Optional[Dict[str, Any]]:
        return self.cache.stats() if self.cache is not None else None
