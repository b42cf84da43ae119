"""
FFmpeg Binary Helper

Locates the ffprobe binary. Lookup order: the FFPROBE_PATH environment
variable, a bundled copy in ``ffmpeg_bins/`` (development checkout or a
PyInstaller bundle), then the system PATH.
"""
import shutil
import sys
import logging
from pathlib import Path

from config.app_config import FFPROBE_PATH

logger = logging.getLogger(__name__)


def _bundled_binary_path(binary_name: str) -> Path:
    if getattr(sys, 'frozen', False):
        # Running as PyInstaller bundle
        base_path = Path(sys._MEIPASS)
    else:
        base_path = Path(__file__).parent.parent.parent
    return base_path / 'ffmpeg_bins' / binary_name


def get_binary_path(binary_name: str) -> str:
    """
    Resolve an ffmpeg-family binary.

    Args:
        binary_name: 'ffmpeg' or 'ffprobe'

    Returns:
        Absolute path to the binary

    Raises:
        FileNotFoundError: If the binary cannot be found anywhere
    """
    if binary_name == 'ffprobe' and FFPROBE_PATH:
        return FFPROBE_PATH

    bundled = _bundled_binary_path(binary_name)
    if bundled.exists():
        logger.debug(f"Using bundled {binary_name}: {bundled}")
        return str(bundled)

    found = shutil.which(binary_name)
    if found:
        return found

    raise FileNotFoundError(
        f"{binary_name} not found. Install ffmpeg or set FFPROBE_PATH."
    )


def get_ffprobe_path() -> str:
    """Get path to the ffprobe binary."""
    return get_binary_path('ffprobe')
