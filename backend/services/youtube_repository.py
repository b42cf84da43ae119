"""
YouTube Repository

Fetches raw video metadata with yt-dlp. YouTube throttles or blocks some
player clients at different times, so each fetch walks through a list of
clients until one returns data.
"""

from typing import Any, Callable, Dict, Iterable, Optional
import logging

import yt_dlp
from yt_dlp.utils import DownloadError, ExtractorError

from constants import YouTubeConfig
from exceptions import AllStrategiesFailedError, VideoNotFoundError, VideoUnavailableError

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

# yt-dlp wording for videos that are gone for good; HTTP errors are not matched
_UNAVAILABLE_MARKERS = ("private video", "video is private", "video unavailable", "video is unavailable")
_NOT_FOUND_MARKERS = ("does not exist",)


class YouTubeRepository:
    """Thin wrapper around ``yt_dlp.YoutubeDL`` with player-client fallback"""

    def __init__(
        self,
        player_clients: Iterable[str] = YouTubeConfig.PLAYER_CLIENTS,
        ydl_factory: Callable[[Dict[str, Any]], Any] = yt_dlp.YoutubeDL,
    ):
        self.player_clients = tuple(player_clients)
        self._ydl_factory = ydl_factory

    def _options(self, client: str) -> Dict[str, Any]:
        return {
            'quiet': True,
            'no_warnings': True,
            'noprogress': True,
            'skip_download': True,
            'extractor_args': {'youtube': {'player_client': [client]}},
        }

    def fetch_with_client(self, video_id: str, client: str) -> Dict[str, Any]:
        with self._ydl_factory(self._options(client)) as ydl:
            info = ydl.extract_info(WATCH_URL.format(video_id=video_id), download=False)
        if not info:
            raise DownloadError(f"yt-dlp returned no info for {video_id}")
        return info

    def fetch_video_info(self, video_id: str) -> Dict[str, Any]:
        """
        Fetch the yt-dlp info dict for a video.

        Private or removed videos and unknown ids stop the fallback
        immediately; any other failure moves on to the next client.

        Raises:
            VideoUnavailableError: Video is private or unavailable
            VideoNotFoundError: Video id does not exist
            AllStrategiesFailedError: Every client failed
        """
        last_error: Optional[str] = None

        for client in self.player_clients:
            logger.info(f"Trying {client} client for video: {video_id}")
            try:
                info = self.fetch_with_client(video_id, client)
                logger.info(f"Fetched video {video_id} with {client} client")
                return info
            except (DownloadError, ExtractorError) as e:
                message = str(e)
                lowered = message.lower()
                if any(marker in lowered for marker in _UNAVAILABLE_MARKERS):
                    raise VideoUnavailableError(message) from e
                if any(marker in lowered for marker in _NOT_FOUND_MARKERS):
                    raise VideoNotFoundError(video_id) from e
                logger.warning(f"{client} client failed for {video_id}: {message}")
                last_error = message

        raise AllStrategiesFailedError(video_id, last_error)
