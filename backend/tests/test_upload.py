import asyncio
import io
from pathlib import Path

import pytest

from api.editor import upload_video
from dependencies import get_upload_service
from exceptions import FileSizeExceededError, InvalidVideoFileError, UnsupportedFormatError
from main import app
from services.editor_validator import EditorValidator
from services.upload_service import UploadService, sanitize_upload_name


def test_upload_stores_video(client, upload_dir):
    response = client.post(
        "/api/editor/upload",
        files={"file": ("my clip (final).mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["message"] == "File uploaded successfully"
    data = payload["data"]
    assert data["filename"] == "my clip (final).mp4"
    assert data["size"] == 12
    assert data["type"] == "video/mp4"

    stored = list(upload_dir.iterdir())
    assert len(stored) == 1
    assert stored[0].name.endswith("_my_clip__final_.mp4")
    assert str(stored[0]) == data["filePath"]


def test_upload_without_file(client):
    response = client.post("/api/editor/upload")

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": {"code": "MISSING_FILE", "message": "No file provided"},
    }


def test_upload_rejects_extension(client, upload_dir):
    response = client.post(
        "/api/editor/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "UNSUPPORTED_FORMAT"
    assert not upload_dir.exists() or not list(upload_dir.iterdir())


def test_upload_rejects_mime_type(client):
    response = client.post(
        "/api/editor/upload",
        files={"file": ("clip.mp4", b"data", "application/octet-stream")},
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Unsupported video format: application/octet-stream"


def test_validate_video_file_order():
    with pytest.raises(InvalidVideoFileError, match="File name is required"):
        EditorValidator.validate_video_file("", 10, "video/mp4")

    # size is checked before the extension
    with pytest.raises(FileSizeExceededError):
        EditorValidator.validate_video_file("huge.txt", 600 * 1024 * 1024, None)

    with pytest.raises(UnsupportedFormatError):
        EditorValidator.validate_video_file("clip", 10, None)

    EditorValidator.validate_video_file("CLIP.MKV", 10, "video/x-matroska")


def test_sanitize_upload_name():
    assert sanitize_upload_name("../../etc/pass wd.mp4") == "pass_wd.mp4"
    assert sanitize_upload_name("C:\\videos\\take#1.mov") == "take_1.mov"


def test_service_reports_size_from_stream(tmp_path):
    service = UploadService(upload_dir=tmp_path)

    result = service.save_video("take.webm", io.BytesIO(b"x" * 2048), "video/webm")

    assert result.size == 2048
    assert Path(result.file_path).read_bytes() == b"x" * 2048
    assert Path(result.file_path).parent == tmp_path


def test_upload_write_failure(client, tmp_path):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("occupied")
    app.dependency_overrides[get_upload_service] = lambda: UploadService(upload_dir=blocker)

    response = client.post(
        "/api/editor/upload",
        files={"file": ("take.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
    )

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "UPLOAD_ERROR"
    assert error["message"].startswith("Upload failed for take.mp4")
    assert blocker.read_text() == "occupied"


def test_upload_route_runs_in_threadpool():
    # the copy is blocking file I/O, so the route must not run on the event loop
    assert not asyncio.iscoroutinefunction(upload_video)
