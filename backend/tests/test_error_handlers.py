import asyncio

import pytest
from fastapi import HTTPException

from exceptions import (
    AllStrategiesFailedError,
    FormatNotFoundError,
    InternalError,
    InvalidUrlError,
    JobNotFoundError,
    ProjectNotFoundError,
    TextTooLongError,
    ValidationError,
    VideoNotFoundError,
    VideoUnavailableError,
)
from utils.error_handlers import handle_api_errors
from utils.logging_utils import clear_logging_context, get_logging_context, log_operation


def test_application_errors_pass_through():
    @handle_api_errors("Load project")
    def load():
        raise ProjectNotFoundError("p-1")

    with pytest.raises(ProjectNotFoundError):
        load()


def test_unexpected_errors_become_internal():
    @handle_api_errors("Load project")
    def load():
        raise KeyError("settings")

    with pytest.raises(InternalError) as excinfo:
        load()
    assert excinfo.value.status_code == 500
    assert excinfo.value.to_dict() == {
        "success": False,
        "error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"},
    }


def test_async_routes_are_wrapped():
    @handle_api_errors("Upload")
    async def upload():
        raise RuntimeError("disk gone")

    with pytest.raises(InternalError):
        asyncio.run(upload())


def test_http_exceptions_untouched():
    @handle_api_errors("Auth")
    def guarded():
        raise HTTPException(status_code=418)

    with pytest.raises(HTTPException):
        guarded()


def test_validation_error_includes_details():
    error = ValidationError("Bad value", details={"field": "name"})

    assert error.to_dict()["error"] == {
        "code": "VALIDATION_ERROR",
        "message": "Bad value",
        "details": {"field": "name"},
    }


def test_log_operation_preserves_result():
    @log_operation("rename")
    def rename(project_id, name):
        return f"{project_id}:{name}"

    assert rename("p-1", name="New") == "p-1:New"


def test_malformed_body_is_validation_error(client):
    response = client.post("/api/tts/estimate", json={"text": ["not", "a", "string"]})

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "VALIDATION_ERROR"


def test_health(client):
    response = client.get("/api/health")

    assert response.json() == {"status": "ok", "service": "Media Studio API", "version": "1.0.0"}
    assert response.headers["X-Request-ID"]


def test_request_id_is_echoed(client):
    response = client.get("/api/health", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"
    clear_logging_context()
    assert get_logging_context() == {}


@pytest.mark.parametrize("error, status_code, code", [
    (InvalidUrlError("https://example.com"), 400, "INVALID_URL"),
    (VideoNotFoundError("abc"), 404, "VIDEO_NOT_FOUND"),
    (VideoUnavailableError("private"), 403, "VIDEO_UNAVAILABLE"),
    (FormatNotFoundError(22), 404, "FORMAT_NOT_FOUND"),
    (AllStrategiesFailedError("abc", "throttled"), 500, "ALL_STRATEGIES_FAILED"),
    (TextTooLongError(6000, 5000), 400, "TEXT_TOO_LONG"),
    (JobNotFoundError("job-1"), 404, "JOB_NOT_FOUND"),
])
def test_error_taxonomy(error, status_code, code):
    assert error.status_code == status_code
    assert error.to_dict()["error"]["code"] == code
