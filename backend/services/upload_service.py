"""
Upload service - validates editor media uploads and stores them in the temp directory
"""
from pathlib import Path
from typing import BinaryIO, Optional
import logging
import os
import re
import shutil
import time

from config.app_config import EDITOR_TEMP_DIR
from dtos.response import UploadResultDto
from exceptions import UploadError
from services.editor_validator import EditorValidator

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r'[^a-zA-Z0-9._-]')


def sanitize_upload_name(filename: str) -> str:
    """Strip directories and replace anything outside ``[a-zA-Z0-9._-]`` with ``_``"""
    base = os.path.basename(filename.replace('\\', '/'))
    return _UNSAFE_CHARS.sub('_', base)


def measure_stream(stream: BinaryIO) -> int:
    """Size of a seekable stream in bytes; the position is reset to the start"""
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


class UploadService:
    """Stores uploaded video files for the editor"""

    def __init__(self, upload_dir: Optional[Path] = None):
        self.upload_dir = Path(upload_dir or EDITOR_TEMP_DIR)

    def save_video(self, filename: Optional[str], stream: BinaryIO, content_type: Optional[str] = None) -> UploadResultDto:
        """
        Validate and store an uploaded video.

        The stored name is ``{timestamp_ms}_{sanitized name}`` so repeated
        uploads of the same file never collide.

        Args:
            filename: Client-supplied file name
            stream: Seekable binary stream of the upload
            content_type: Declared MIME type, if any

        Returns:
            UploadResultDto with the stored path and the original name

        Raises:
            InvalidVideoFileError / FileSizeExceededError / UnsupportedFormatError: Rejected upload
            UploadError: The file could not be written
        """
        size = measure_stream(stream)
        EditorValidator.validate_video_file(filename, size, content_type)

        stored_name = f"{int(time.time() * 1000)}_{sanitize_upload_name(filename)}"
        destination = self.upload_dir / stored_name

        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            with open(destination, 'wb') as buffer:
                shutil.copyfileobj(stream, buffer)
        except OSError as e:
            logger.error(f"Failed to store upload {filename}: {e}", exc_info=True)
            destination.unlink(missing_ok=True)
            raise UploadError(filename, str(e)) from e

        logger.info(f"Video file uploaded: {destination} ({size} bytes)")
        return UploadResultDto(
            file_path=str(destination),
            filename=filename,
            size=size,
            type=content_type,
        )
