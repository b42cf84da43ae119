"""
YouTube URL validation - recognises watch, short and embed URLs or a bare video id
"""
import re

from exceptions import InvalidUrlError, ValidationError

URL_PATTERNS = (
    re.compile(r'(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)'),
    re.compile(r'^([a-zA-Z0-9_-]{11})$'),
)


class YouTubeValidator:
    """Validates YouTube URLs and format identifiers"""

    @staticmethod
    def is_valid_youtube_url(url: str) -> bool:
        return any(pattern.search(url) for pattern in URL_PATTERNS)

    @staticmethod
    def validate_url(url) -> None:
        """
        Raises:
            InvalidUrlError: Missing, blank or unrecognised URL
        """
        if not url or not isinstance(url, str):
            raise InvalidUrlError("URL is required and must be a string")
        if not url.strip():
            raise InvalidUrlError("URL cannot be empty")
        if not YouTubeValidator.is_valid_youtube_url(url):
            raise InvalidUrlError(url)

    @staticmethod
    def extract_video_id(url: str) -> str:
        for pattern in URL_PATTERNS:
            match = pattern.search(url)
            if match and match.group(1):
                return match.group(1)
        raise InvalidUrlError(url)

    @staticmethod
    def validate_itag(itag) -> None:
        if not isinstance(itag, int) or isinstance(itag, bool) or itag <= 0:
            raise ValidationError("Invalid itag: must be a positive integer", details={"itag": itag})
