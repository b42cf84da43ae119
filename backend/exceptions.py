"""
Custom exception classes for the application.

Every error the API reports to clients derives from ApplicationError, which
carries the HTTP status and a stable machine-readable code alongside the
message. The global exception handler renders them as
``{"success": false, "error": {"code": ..., "message": ...}}``.
"""

from constants import HTTPStatus


class ApplicationError(Exception):
    """Base exception for all application errors"""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        details: dict | None = None,
    ):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
            },
        }


class InternalError(ApplicationError):
    """Raised in place of an unexpected exception that escaped a route"""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)


class ValidationError(ApplicationError):
    """Raised when validation fails"""

    status_code = HTTPStatus.BAD_REQUEST
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, details=details)

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.details:
            payload["error"]["details"] = self.details
        return payload


# ============================================================
# Editor
# ============================================================

class InvalidVideoFileError(ApplicationError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "INVALID_VIDEO_FILE"

    def __init__(self, filename: str, reason: str | None = None):
        suffix = f" - {reason}" if reason else ""
        super().__init__(f"Invalid video file: {filename}{suffix}", details={"filename": filename})


class FileSizeExceededError(ApplicationError):
    status_code = HTTPStatus.PAYLOAD_TOO_LARGE
    code = "FILE_SIZE_EXCEEDED"

    def __init__(self, size: int, max_size: int):
        super().__init__(
            f"File size ({size} bytes) exceeds maximum allowed size ({max_size} bytes)",
            details={"size": size, "max_size": max_size},
        )


class UnsupportedFormatError(ApplicationError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "UNSUPPORTED_FORMAT"

    def __init__(self, format: str):
        super().__init__(f"Unsupported video format: {format}", details={"format": format})


class ProjectNotFoundError(ApplicationError):
    status_code = HTTPStatus.NOT_FOUND
    code = "PROJECT_NOT_FOUND"

    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id}", details={"project_id": project_id})


class InvalidProjectDataError(ApplicationError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "INVALID_PROJECT_DATA"

    def __init__(self, reason: str):
        super().__init__(f"Invalid project data: {reason}")


class InvalidTimelineError(ApplicationError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "INVALID_TIMELINE"

    def __init__(self, reason: str):
        super().__init__(f"Invalid timeline data: {reason}")


class InvalidTextOverlayError(ApplicationError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "INVALID_TEXT_OVERLAY"

    def __init__(self, reason: str):
        super().__init__(f"Invalid text overlay: {reason}")


class InvalidTransitionError(ValidationError):
    """Rejected transition; ``code`` narrows the failure for clients"""

    code = "INVALID_TRANSITION"

    def __init__(self, message: str, code: str | None = None, details: dict | None = None):
        super().__init__(message, details=details)
        if code is not None:
            self.code = code


class ClipNotFoundError(ApplicationError):
    status_code = HTTPStatus.NOT_FOUND
    code = "CLIP_NOT_FOUND"

    def __init__(self, message: str = "One or both clips not found"):
        super().__init__(message)


class VideoMetadataError(ApplicationError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "METADATA_UNAVAILABLE"

    def __init__(self, video_path: str):
        super().__init__(f"Could not read video metadata: {video_path}", details={"video_path": video_path})


class StorageError(ApplicationError):
    code = "STORAGE_ERROR"

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Storage {operation} failed: {reason}", details={"operation": operation})


class UploadError(ApplicationError):
    code = "UPLOAD_ERROR"

    def __init__(self, filename: str, reason: str | None = None):
        suffix = f": {reason}" if reason else ""
        super().__init__(f"Upload failed for {filename}{suffix}", details={"filename": filename})


# ============================================================
# PDF
# ============================================================

class PDFError(ApplicationError):
    """Base class for PDF project and annotation errors"""

    code = "PDF_ERROR"


class InvalidPDFError(PDFError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "INVALID_PDF"

    def __init__(self, message: str = "Invalid or corrupted PDF file", details: dict | None = None):
        super().__init__(message, details=details)


class PDFPageError(PDFError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "PDF_PAGE_ERROR"

    def __init__(self, message: str = "Invalid page number or operation", details: dict | None = None):
        super().__init__(message, details=details)


class AnnotationError(PDFError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "ANNOTATION_ERROR"

    def __init__(self, message: str = "Annotation operation failed", details: dict | None = None):
        super().__init__(message, details=details)


class InvalidAnnotationTypeError(PDFError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "INVALID_ANNOTATION_TYPE"

    def __init__(self, annotation_type: str):
        super().__init__(f"Invalid annotation type: {annotation_type}", details={"type": annotation_type})


class AnnotationNotFoundError(PDFError):
    status_code = HTTPStatus.NOT_FOUND
    code = "ANNOTATION_NOT_FOUND"

    def __init__(self, annotation_id: str):
        super().__init__(f"Annotation not found: {annotation_id}", details={"annotation_id": annotation_id})


class PDFProjectNotFoundError(PDFError):
    status_code = HTTPStatus.NOT_FOUND
    code = "PDF_PROJECT_NOT_FOUND"

    def __init__(self, project_id: str):
        super().__init__(f"PDF project not found: {project_id}", details={"project_id": project_id})


class PDFStorageError(PDFError):
    code = "PDF_STORAGE_ERROR"

    def __init__(self, operation: str, reason: str):
        super().__init__(f"PDF storage {operation} failed: {reason}", details={"operation": operation})


# ============================================================
# Text-to-speech
# ============================================================

class InvalidTextInputError(ApplicationError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "INVALID_TEXT_INPUT"

    def __init__(self, reason: str):
        super().__init__(f"Invalid text input: {reason}")


class TextTooLongError(ApplicationError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "TEXT_TOO_LONG"

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Text is too long: {length} characters (max: {max_length})",
            details={"length": length, "max_length": max_length},
        )


# ============================================================
# Automation
# ============================================================

class JobNotFoundError(ApplicationError):
    status_code = HTTPStatus.NOT_FOUND
    code = "JOB_NOT_FOUND"

    def __init__(self, job_id: str):
        super().__init__("Job not found", details={"job_id": job_id})


class InvalidJobStateError(ApplicationError):
    status_code = HTTPStatus.CONFLICT
    code = "INVALID_JOB_STATE"

    def __init__(self, job_id: str, status: str, message: str):
        super().__init__(message, details={"job_id": job_id, "status": status})


# ============================================================
# YouTube
# ============================================================

class InvalidUrlError(ApplicationError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "INVALID_URL"

    def __init__(self, url: str):
        super().__init__(f"Invalid YouTube URL: {url}", details={"url": url})


class VideoNotFoundError(ApplicationError):
    status_code = HTTPStatus.NOT_FOUND
    code = "VIDEO_NOT_FOUND"

    def __init__(self, video_id: str):
        super().__init__(f"Video not found: {video_id}", details={"video_id": video_id})


class VideoUnavailableError(ApplicationError):
    status_code = HTTPStatus.FORBIDDEN
    code = "VIDEO_UNAVAILABLE"

    def __init__(self, reason: str):
        super().__init__(f"Video unavailable: {reason}")


class FormatNotFoundError(ApplicationError):
    status_code = HTTPStatus.NOT_FOUND
    code = "FORMAT_NOT_FOUND"

    def __init__(self, itag: int):
        super().__init__(f"Format with itag {itag} not found", details={"itag": itag})


class AllStrategiesFailedError(ApplicationError):
    code = "ALL_STRATEGIES_FAILED"

    def __init__(self, video_id: str, last_error: str | None = None):
        suffix = f": {last_error}" if last_error else ""
        super().__init__(
            f"All fetching strategies failed for video {video_id}{suffix}",
            details={"video_id": video_id},
        )
