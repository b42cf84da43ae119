"""
Structured Logging Utilities

Request-scoped logging context plus a decorator that logs the start, end
and failure of service operations with the identifiers they act on.
"""

import inspect
import logging
import time
import uuid
from contextvars import ContextVar
from functools import wraps
from typing import Any, Dict, Optional

from fastapi import Request


# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Argument names worth lifting into the log context
_CONTEXT_KEYS = ("project_id", "annotation_id", "job_id", "video_id", "provider")


class StructuredLogger:
    """
    Wrapper around standard logger that merges the request context into
    ``extra`` on every call.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Project created", extra={"project_id": project.id})
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        context = get_logging_context()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Add key-value pairs to the logging context of the current request.

    Example:
        set_logging_context(request_id="abc-123", path="/api/tts/estimate")
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def get_logging_context() -> Dict[str, Any]:
    return _logging_context.get().copy()


async def request_logging_middleware(request: Request, call_next):
    """
    HTTP middleware that tags each request with an id and logs its outcome.

    The id is echoed back in the ``X-Request-ID`` response header.
    """
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    set_logging_context(request_id=request_id, path=request.url.path)
    logger = StructuredLogger("api.requests")
    started = time.perf_counter()
    try:
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)",
            extra={"status_code": response.status_code},
        )
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        clear_logging_context()


def log_operation(operation_name: str):
    """
    Decorator to log operation start/end with structured context.

    Identifiers such as ``project_id`` or ``job_id`` passed as keyword or
    positional arguments are included in the context.

    Args:
        operation_name: Name of the operation

    Example:
        @log_operation("delete_project")
        def delete_project(self, project_id: str):
            ...
    """
    def decorator(func):
        signature = inspect.signature(func)

        def _build_context(args, kwargs) -> Dict[str, Any]:
            context = {"operation": operation_name}
            try:
                bound = signature.bind_partial(*args, **kwargs)
            except TypeError:
                return context
            for key in _CONTEXT_KEYS:
                if key in bound.arguments:
                    context[key] = bound.arguments[key]
            return context

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = _build_context(args, kwargs)
            logger.debug(f"Starting {operation_name}", extra=context)
            try:
                result = await func(*args, **kwargs)
                logger.debug(f"Completed {operation_name}", extra=context)
                return result
            except Exception as e:
                context["error_type"] = type(e).__name__
                logger.warning(f"Failed {operation_name}: {e}", extra=context)
                raise

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = _build_context(args, kwargs)
            logger.debug(f"Starting {operation_name}", extra=context)
            try:
                result = func(*args, **kwargs)
                logger.debug(f"Completed {operation_name}", extra=context)
                return result
            except Exception as e:
                context["error_type"] = type(e).__name__
                logger.warning(f"Failed {operation_name}: {e}", extra=context)
                raise

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
