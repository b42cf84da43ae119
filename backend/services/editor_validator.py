"""
Editor validation service - checks project, timeline and upload input
"""
from typing import Any, Dict, Optional
from urllib.parse import urlparse
import logging

from constants import EditorDefaults, TransitionDefaults, UploadLimits
from domain.value_objects import VideoProjectStatus
from exceptions import (
    FileSizeExceededError,
    InvalidProjectDataError,
    InvalidTextOverlayError,
    InvalidTimelineError,
    InvalidTransitionError,
    InvalidVideoFileError,
    UnsupportedFormatError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_TIMELINE_LISTS = (
    ("clips", "clips"),
    ("audioTracks", "audio tracks"),
    ("textOverlays", "text overlays"),
    ("transitions", "transitions"),
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class EditorValidator:
    """Validates editor input and raises typed errors; performs no I/O"""

    @staticmethod
    def validate_video_file(name: Optional[str], size: int, content_type: Optional[str] = None) -> None:
        """
        Validate an uploaded video file.

        Checks run in order: name, size, extension, then MIME type.

        Raises:
            InvalidVideoFileError: Missing file name
            FileSizeExceededError: File larger than the upload limit
            UnsupportedFormatError: Extension or MIME type not accepted
        """
        if not name or not isinstance(name, str):
            raise InvalidVideoFileError("", "File name is required")

        if size > UploadLimits.MAX_FILE_SIZE:
            raise FileSizeExceededError(size, UploadLimits.MAX_FILE_SIZE)

        extension = name.rsplit(".", 1)[-1].lower() if "." in name else ""
        if extension not in UploadLimits.VIDEO_EXTENSIONS:
            raise UnsupportedFormatError(extension or "unknown")

        if content_type and content_type not in UploadLimits.VIDEO_MIME_TYPES:
            raise UnsupportedFormatError(content_type)

    @staticmethod
    def validate_video_url(url: Optional[str]) -> None:
        if not url or not isinstance(url, str):
            raise ValidationError("Video URL is required")

        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            raise ValidationError("Video URL must use HTTP or HTTPS protocol")
        if not parsed.netloc:
            raise ValidationError(f"Invalid video URL: {url}")

    @staticmethod
    def validate_name(name: Any) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidProjectDataError("Project name cannot be empty")
        if len(name) > EditorDefaults.MAX_NAME_LENGTH:
            raise InvalidProjectDataError(
                f"Project name must be {EditorDefaults.MAX_NAME_LENGTH} characters or less"
            )

    @staticmethod
    def validate_resolution(resolution: Any) -> None:
        """
        Validate a ``{width, height}`` resolution.

        Raises:
            ValidationError: Missing dimension or outside 1x1..7680x4320
        """
        if not isinstance(resolution, dict) or not resolution.get("width") or not resolution.get("height"):
            raise ValidationError("Resolution width and height are required")

        width, height = resolution["width"], resolution["height"]
        if not _is_number(width) or not _is_number(height):
            raise ValidationError("Resolution width and height must be numbers")
        if (
            width <= 0 or height <= 0
            or width > EditorDefaults.MAX_WIDTH
            or height > EditorDefaults.MAX_HEIGHT
        ):
            raise ValidationError(
                f"Resolution must be between 1x1 and "
                f"{EditorDefaults.MAX_WIDTH}x{EditorDefaults.MAX_HEIGHT} (8K)"
            )

    @staticmethod
    def validate_settings(settings: Dict[str, Any]) -> None:
        if "resolution" in settings and settings["resolution"] is not None:
            EditorValidator.validate_resolution(settings["resolution"])

        frame_rate = settings.get("frameRate")
        if frame_rate is not None:
            if (
                not _is_number(frame_rate)
                or frame_rate < EditorDefaults.MIN_FRAME_RATE
                or frame_rate > EditorDefaults.MAX_FRAME_RATE
            ):
                raise InvalidProjectDataError(
                    f"Frame rate must be between {EditorDefaults.MIN_FRAME_RATE} "
                    f"and {EditorDefaults.MAX_FRAME_RATE}"
                )

    @staticmethod
    def validate_create_project(data: Dict[str, Any]) -> None:
        """
        Validate a create-project payload (camelCase keys).

        Raises:
            InvalidProjectDataError: Bad name or frame rate
            ValidationError: Bad source URL or resolution
        """
        name = data.get("name")
        if not name or not isinstance(name, str):
            raise InvalidProjectDataError("Project name is required")
        EditorValidator.validate_name(name)

        if data.get("sourceVideoUrl"):
            EditorValidator.validate_video_url(data["sourceVideoUrl"])

        if data.get("settings"):
            EditorValidator.validate_settings(data["settings"])

    @staticmethod
    def validate_update_project(updates: Dict[str, Any]) -> None:
        """Validate only the fields present in ``updates``"""
        if "name" in updates:
            EditorValidator.validate_name(updates["name"])

        description = updates.get("description")
        if description is not None and not isinstance(description, str):
            raise InvalidProjectDataError("Project description must be a string")

        if "status" in updates and updates["status"] not in VideoProjectStatus.values():
            raise InvalidProjectDataError(
                f"Status must be one of: {', '.join(VideoProjectStatus.values())}"
            )

        if updates.get("settings"):
            EditorValidator.validate_settings(updates["settings"])

        if "timeline" in updates:
            EditorValidator.validate_timeline(updates["timeline"])

    @staticmethod
    def validate_timeline(timeline: Any) -> None:
        """
        Validate a full timeline document.

        Raises:
            InvalidTimelineError: Structural problem or bad clip
            InvalidTextOverlayError: Bad text overlay
        """
        if not isinstance(timeline, dict):
            raise InvalidTimelineError("Timeline data is required")

        for key, label in _TIMELINE_LISTS:
            if not isinstance(timeline.get(key), list):
                raise InvalidTimelineError(f"Timeline {label} must be an array")

        duration = timeline.get("duration")
        if not _is_number(duration) or duration < 0:
            raise InvalidTimelineError("Timeline duration must be a positive number")

        for index, clip in enumerate(timeline["clips"]):
            EditorValidator._validate_clip(clip, index)

        for index, overlay in enumerate(timeline["textOverlays"]):
            EditorValidator.validate_text_overlay(overlay, index)

    @staticmethod
    def _validate_clip(clip: Any, index: int) -> None:
        if not isinstance(clip, dict) or not clip.get("id") or not clip.get("sourceUrl"):
            raise InvalidTimelineError(f"Clip at index {index} is missing required fields")

        start, end = clip.get("startTime", 0), clip.get("endTime")
        if not _is_number(start) or not _is_number(end) or start < 0 or end <= start:
            raise InvalidTimelineError(f"Clip at index {index} has invalid time range")

        position = clip.get("position", 0)
        if not _is_number(position) or position < 0:
            raise InvalidTimelineError(f"Clip at index {index} has invalid position")

        duration = clip.get("duration")
        if duration is not None and (not _is_number(duration) or duration <= 0):
            raise InvalidTimelineError(f"Clip at index {index} has invalid duration")

        volume = clip.get("volume", 1)
        if not _is_number(volume) or volume < 0 or volume > 1:
            raise InvalidTimelineError(f"Clip at index {index} has invalid volume (must be 0-1)")

    @staticmethod
    def validate_text_overlay(overlay: Any, index: Optional[int] = None) -> None:
        prefix = f"Text overlay at index {index}" if index is not None else "Text overlay"

        if not isinstance(overlay, dict) or not isinstance(overlay.get("text"), str) or not overlay["text"]:
            raise InvalidTextOverlayError(f"{prefix}: text is required")

        start, end = overlay.get("startTime", 0), overlay.get("endTime")
        if not _is_number(start) or start < 0:
            raise InvalidTextOverlayError(f"{prefix}: start time must be non-negative")
        if not _is_number(end) or end <= start:
            raise InvalidTextOverlayError(f"{prefix}: end time must be greater than start time")

        position = overlay.get("position")
        if position is not None:
            if not isinstance(position, dict):
                raise InvalidTextOverlayError(f"{prefix}: position must be an object")
            x, y = position.get("x", 0), position.get("y", 0)
            if not _is_number(x) or not _is_number(y) or not (0 <= x <= 100 and 0 <= y <= 100):
                raise InvalidTextOverlayError(f"{prefix}: position must be between 0-100%")

        style = overlay.get("style") or {}
        if not isinstance(style, dict):
            raise InvalidTextOverlayError(f"{prefix}: style must be an object")
        opacity = style.get("opacity")
        if opacity is not None and (not _is_number(opacity) or opacity < 0 or opacity > 1):
            raise InvalidTextOverlayError(f"{prefix}: opacity must be between 0-1")
        font_size = style.get("fontSize")
        if font_size is not None and (not _is_number(font_size) or font_size <= 0):
            raise InvalidTextOverlayError(f"{prefix}: font size must be positive")

    @staticmethod
    def validate_transition_request(data: Dict[str, Any]) -> None:
        """
        Validate the type and clip references of a new transition.

        Raises:
            InvalidTransitionError: Unknown type or missing clip IDs
        """
        if data.get("type") not in TransitionDefaults.TYPES:
            raise InvalidTransitionError(
                "Invalid transition type",
                code="INVALID_TRANSITION_TYPE",
                details={"validTypes": list(TransitionDefaults.TYPES)},
            )
        if not data.get("fromClipId") or not data.get("toClipId"):
            raise InvalidTransitionError(
                "Both fromClipId and toClipId are required", code="MISSING_CLIP_IDS"
            )

    @staticmethod
    def validate_transition_duration(duration: Any, from_duration: float, to_duration: float) -> None:
        """A transition may span at most half of the shorter clip"""
        max_duration = min(from_duration, to_duration) * TransitionDefaults.MAX_CLIP_FRACTION
        if not _is_number(duration) or duration <= 0 or duration > max_duration:
            raise InvalidTransitionError(
                f"Transition duration must be between 0 and {max_duration:g} seconds",
                code="INVALID_DURATION",
                details={"maxDuration": max_duration},
            )
