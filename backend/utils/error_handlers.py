"""
Error handling decorators and exception handlers for API endpoints.

Routes raise ApplicationError subclasses; the handlers registered here turn
them into the ``{"success": false, "error": {...}}`` envelope so no endpoint
formats its own failure responses.
"""

import inspect
import logging
from functools import wraps
from typing import Callable

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from constants import HTTPStatus
from exceptions import ApplicationError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def _log_application_error(operation_name: str, error: ApplicationError):
    if error.status_code < HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.warning(f"{operation_name} - {error.code}: {error.message}")
    else:
        logger.error(f"{operation_name} - {error.code}: {error.message}", exc_info=True)


def handle_api_errors(operation_name: str):
    """
    Decorator to handle API errors consistently across endpoints.

    Application errors are logged at a level matching their status and
    re-raised for the registered exception handler. HTTPException passes
    through untouched. Anything else is logged with its traceback and
    replaced by an InternalError so internals never reach the client.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Create project")

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.post("/editor/project")
        @handle_api_errors("Create project")
        def create_project(...):
            return service.create_project(request)
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except ApplicationError as e:
                _log_application_error(operation_name, e)
                raise
            except HTTPException:
                raise
            except Exception as e:
                logger.error(f"{operation_name} - Unexpected error: {e}", exc_info=True)
                raise InternalError() from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ApplicationError as e:
                _log_application_error(operation_name, e)
                raise
            except HTTPException:
                raise
            except Exception as e:
                logger.error(f"{operation_name} - Unexpected error: {e}", exc_info=True)
                raise InternalError() from e

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body/query validation failures as 400 VALIDATION_ERROR"""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    logger.warning(f"Request validation failed for {request.url.path}: {errors}")
    error = ValidationError("Request validation failed", details={"errors": errors})
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, content=InternalError().to_dict())


def register_exception_handlers(app: FastAPI):
    """Attach the envelope-producing exception handlers to the application"""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
