"""
Video metadata extraction utilities

Reads duration and stream properties of a local file or remote URL with
ffprobe. Only container and stream headers are read, not the media itself.
"""

import subprocess
import json
import logging
from typing import Optional, Dict

from utils.ffmpeg_helper import get_ffprobe_path

logger = logging.getLogger(__name__)

PROBE_TIMEOUT_SECONDS = 30


def _parse_frame_rate(value: str | None) -> Optional[float]:
    """Convert ffprobe's ``30000/1001`` style rate to a float"""
    if not value:
        return None
    try:
        if '/' in value:
            num, den = value.split('/', 1)
            den_f = float(den)
            return round(float(num) / den_f, 3) if den_f else None
        return float(value)
    except ValueError:
        return None


def get_video_metadata(source: str) -> Optional[Dict]:
    """
    Extract video metadata using ffprobe.

    Args:
        source: Local path or http(s) URL

    Returns:
        Dictionary containing:
        - duration: Duration in seconds
        - width / height: First video stream dimensions (None if no video)
        - fps: Frame rate of the first video stream
        - codec: Video codec name
        - hasAudio: Whether an audio stream exists
        - format: Container format name
        Or None if extraction fails
    """
    try:
        result = subprocess.run(
            [
                get_ffprobe_path(),
                '-v', 'quiet',
                '-print_format', 'json',
                '-show_format',
                '-show_streams',
                str(source)
            ],
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT_SECONDS
        )
    except FileNotFoundError as e:
        logger.warning(f"ffprobe unavailable: {e}")
        return None
    except subprocess.TimeoutExpired:
        logger.error(f"ffprobe timeout for {source}")
        return None

    if result.returncode != 0:
        logger.warning(f"ffprobe failed for {source}: {result.stderr.strip()}")
        return None

    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse ffprobe output for {source}: {e}")
        return None

    format_info = data.get('format', {})
    streams = data.get('streams', [])
    video = next((s for s in streams if s.get('codec_type') == 'video'), None)

    try:
        duration = float(format_info.get('duration') or (video or {}).get('duration') or 0)
    except (TypeError, ValueError):
        duration = 0.0

    metadata = {
        'duration': duration,
        'width': video.get('width') if video else None,
        'height': video.get('height') if video else None,
        'fps': _parse_frame_rate(video.get('avg_frame_rate')) if video else None,
        'codec': video.get('codec_name') if video else None,
        'hasAudio': any(s.get('codec_type') == 'audio' for s in streams),
        'format': format_info.get('format_name', 'unknown'),
    }
    logger.debug(f"Extracted metadata for {source}: {metadata}")
    return metadata
