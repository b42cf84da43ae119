import pytest

from domain.value_objects import JobStatus
from dtos.internal import PipelineConfig
from exceptions import ValidationError, VideoUnavailableError
from services.automation_service import build_pipeline_config
from services.cost_calculator import CostCalculator
from dtos.request import PipelineConfigRequest

from conftest import VIDEO_URL


def _start(client, **config):
    response = client.post("/api/automation/start", json={"youtubeUrl": VIDEO_URL, "config": config})
    assert response.status_code == 201, response.text
    return response.json()


def test_start_pipeline(client, job_store, temp_manager):
    payload = _start(client)

    expected_time = CostCalculator().calculate_time(212, PipelineConfig()).total_time
    assert payload["status"] == "pending"
    assert payload["estimatedCost"] == 0.89
    assert payload["estimatedTime"] == expected_time

    job = job_store.get(payload["jobId"])
    assert job.video_info.title == "Studio Session: Take 3"
    assert job.video_info.resolution == "720p"
    assert job.video_info.file_size == 25_000_000
    assert job.config.target_language == "es"
    assert job.progress.logs[0].message == "Pipeline started"
    assert (temp_manager.base_dir / payload["jobId"] / "chunks").is_dir()


def test_start_pipeline_applies_config(client, job_store):
    payload = _start(client, chunkDuration=120, maxParallelJobs=5, targetLanguage="fr", useWatermark=True)

    config = job_store.get(payload["jobId"]).config
    assert config.chunk_duration == 120
    assert config.max_parallel_jobs == 5
    assert config.target_language == "fr"
    assert config.use_watermark is True
    assert config.video_quality == "1080p"


@pytest.mark.parametrize("body, message", [
    ({}, "YouTube URL is required"),
    ({"config": {}}, "YouTube URL is required"),
    ({"youtubeUrl": VIDEO_URL}, "Pipeline configuration is required"),
    ({"youtubeUrl": VIDEO_URL, "config": {"chunkDuration": 45}}, "Chunk duration must be 30, 60, 120, or 300 seconds"),
    ({"youtubeUrl": VIDEO_URL, "config": {"maxParallelJobs": 9}}, "Max parallel jobs must be between 1 and 5"),
])
def test_start_pipeline_rejects_bad_requests(client, body, message):
    response = client.post("/api/automation/start", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_start_pipeline_with_invalid_url(client):
    response = client.post("/api/automation/start", json={"youtubeUrl": "https://vimeo.com/123", "config": {}})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid YouTube URL: https://vimeo.com/123"


def test_start_pipeline_with_unavailable_video(client, youtube_repository):
    youtube_repository.error = VideoUnavailableError("This video is private")

    response = client.post("/api/automation/start", json={"youtubeUrl": VIDEO_URL, "config": {}})

    assert response.status_code == 403
    assert "private" in response.json()["error"]


def test_job_status(client):
    job_id = _start(client)["jobId"]

    response = client.get(f"/api/automation/status/{job_id}")

    assert response.status_code == 200
    job = response.json()["job"]
    assert job["id"] == job_id
    assert job["youtubeUrl"] == VIDEO_URL
    assert job["videoInfo"]["duration"] == 212
    assert job["progress"]["stage"] == "download"
    assert job["paths"]["root"].endswith(job_id)
    assert "error" not in job


def test_job_status_errors(client):
    assert client.get("/api/automation/status/unknown").json() == {"error": "Job not found"}
    assert client.get("/api/automation/status/unknown").status_code == 404

    response = client.get("/api/automation/status")
    assert response.status_code == 400
    assert response.json() == {"error": "Job ID is required"}

    assert client.get("/api/automation/status/%20").status_code == 400


@pytest.mark.parametrize("failure", [ValueError("store exploded"), OSError("store exploded")])
def test_job_status_store_failure(client, job_store, monkeypatch, failure):
    def broken_get(job_id):
        raise failure

    monkeypatch.setattr(job_store, "get", broken_get)

    response = client.get("/api/automation/status/job-1")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to get job status", "details": "store exploded"}


def test_list_jobs(client):
    first = _start(client)["jobId"]
    second = _start(client)["jobId"]

    payload = client.get("/api/automation/jobs", params={"limit": 1}).json()

    assert payload["total"] == 2
    assert payload["hasMore"] is True
    assert [job["id"] for job in payload["jobs"]] == [second]

    payload = client.get("/api/automation/jobs", params={"limit": 1, "offset": 1}).json()
    assert [job["id"] for job in payload["jobs"]] == [first]
    assert payload["hasMore"] is False


@pytest.mark.parametrize("params, message", [
    ({"limit": 0}, "Limit must be between 1 and 100"),
    ({"limit": 101}, "Limit must be between 1 and 100"),
    ({"offset": -1}, "Offset must be non-negative"),
    ({"status": "paused"}, "Invalid job status: paused"),
])
def test_list_jobs_rejects_bad_params(client, params, message):
    response = client.get("/api/automation/jobs", params=params)

    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_list_jobs_by_status(client):
    job_id = _start(client)["jobId"]
    client.post(f"/api/automation/cancel/{job_id}")
    _start(client)

    payload = client.get("/api/automation/jobs", params={"status": "cancelled"}).json()

    assert payload["total"] == 1
    assert payload["jobs"][0]["id"] == job_id


def test_cancel_job(client, job_store):
    job_id = _start(client)["jobId"]

    response = client.post(f"/api/automation/cancel/{job_id}")

    assert response.json() == {"success": True, "message": "Job cancelled successfully"}
    job = job_store.get(job_id)
    assert job.status == JobStatus.CANCELLED
    assert job.error.code == "CANCELLED"
    assert job.progress.logs[-1].message == "Job cancelled by user"

    again = client.post(f"/api/automation/cancel/{job_id}")
    assert again.status_code == 409
    assert again.json() == {"success": False, "error": "Cannot cancel a completed, cancelled, or failed job"}


def test_cancel_unknown_job(client):
    response = client.post("/api/automation/cancel/ghost")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Job not found"}


def test_delete_job(client, job_store, temp_manager):
    job_id = _start(client)["jobId"]

    response = client.delete(f"/api/automation/jobs/{job_id}")

    assert response.json() == {"success": True, "message": "Job deleted successfully"}
    assert job_store.get(job_id) is None
    assert not (temp_manager.base_dir / job_id).exists()
    assert client.delete(f"/api/automation/jobs/{job_id}").status_code == 404


def test_delete_running_job_is_refused(client, job_store):
    job_id = _start(client)["jobId"]
    job_store.update(job_id, {"status": JobStatus.DUBBING})

    response = client.delete(f"/api/automation/jobs/{job_id}")

    assert response.status_code == 400
    assert response.json() == {
        "error": "Cannot delete a job that is currently running. Please cancel it first."
    }
    assert job_store.exists(job_id)


def test_build_pipeline_config_defaults():
    config = build_pipeline_config(PipelineConfigRequest())

    assert config == PipelineConfig()
    assert build_pipeline_config(None) == PipelineConfig()

    with pytest.raises(ValidationError):
        build_pipeline_config(PipelineConfigRequest(chunk_duration=90))
