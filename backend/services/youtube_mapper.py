"""
YouTube Mapper

Turns yt-dlp info dicts into the VideoInfoDto the API returns.
"""

from typing import Any, Dict, List, Optional

from constants import YouTubeConfig
from dtos.response import FormatDto, VideoDetailsDto, VideoInfoDto


def _has_codec(value: Optional[str]) -> bool:
    return bool(value) and value != 'none'


def format_itag(raw_format: Dict[str, Any]) -> Optional[int]:
    """yt-dlp's ``format_id`` is the itag for YouTube; DASH/HLS ids are not numeric"""
    format_id = str(raw_format.get('format_id') or '')
    return int(format_id) if format_id.isdigit() else None


def format_quality(raw_format: Dict[str, Any]) -> str:
    height = raw_format.get('height')
    if height:
        return f"{height}p"
    return raw_format.get('format_note') or 'unknown'


def format_mime_type(raw_format: Dict[str, Any]) -> str:
    return f"video/{raw_format.get('ext') or 'mp4'}"


class YouTubeMapper:
    """Maps raw yt-dlp metadata to API DTOs"""

    def map_to_video_info(self, info: Dict[str, Any]) -> VideoInfoDto:
        return VideoInfoDto(
            video=self.map_video_details(info),
            formats=self.filter_and_sort_formats(self.extract_formats(info)),
        )

    def map_video_details(self, info: Dict[str, Any]) -> VideoDetailsDto:
        return VideoDetailsDto(
            title=info.get('title') or 'Unknown',
            thumbnail=self.extract_thumbnail(info),
            duration=int(info.get('duration') or 0),
            author=info.get('uploader') or info.get('channel') or 'Unknown',
            view_count=str(info.get('view_count') or 0),
        )

    @staticmethod
    def extract_thumbnail(info: Dict[str, Any]) -> str:
        if info.get('thumbnail'):
            return info['thumbnail']
        # yt-dlp orders thumbnails worst to best
        thumbnails = [t for t in info.get('thumbnails') or [] if t.get('url')]
        return thumbnails[-1]['url'] if thumbnails else ''

    def extract_formats(self, info: Dict[str, Any]) -> List[FormatDto]:
        """Every format with a numeric itag, a URL and a video stream"""
        formats = []
        for raw in info.get('formats') or []:
            itag = format_itag(raw)
            if itag is None or not raw.get('url') or not _has_codec(raw.get('vcodec')):
                continue
            formats.append(FormatDto(
                itag=itag,
                quality=format_quality(raw),
                container=raw.get('ext') or 'mp4',
                has_audio=_has_codec(raw.get('acodec')),
                has_video=True,
                filesize=raw.get('filesize') or raw.get('filesize_approx'),
                fps=raw.get('fps'),
                codec=raw.get('vcodec'),
            ))
        return formats

    @staticmethod
    def filter_and_sort_formats(formats: List[FormatDto]) -> List[FormatDto]:
        """
        Keep muxed formats only, best quality first, one per quality label.

        Unlisted qualities sort after 360p in their original order.
        """
        order = YouTubeConfig.QUALITY_ORDER
        muxed = [f for f in formats if f.has_audio and f.has_video]
        muxed.sort(key=lambda f: order.get(f.quality, -1), reverse=True)

        seen = set()
        unique = []
        for fmt in muxed:
            if fmt.quality in seen:
                continue
            seen.add(fmt.quality)
            unique.append(fmt)
        return unique

    @staticmethod
    def find_raw_format(info: Dict[str, Any], itag: int) -> Optional[Dict[str, Any]]:
        for raw in info.get('formats') or []:
            if format_itag(raw) == itag:
                return raw
        return None
