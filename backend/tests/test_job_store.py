import json
from datetime import timedelta

import pytest

from domain.value_objects import JobStatus
from dtos.internal import AutomationJob, JobLogEntry, PipelineConfig, VideoInfo
from exceptions import JobNotFoundError
from utils.uuid_helper import utcnow


def _job(job_id, temp_manager, **overrides):
    fields = dict(
        id=job_id,
        youtube_url=f"https://youtu.be/{job_id}",
        video_info=VideoInfo(title=f"Video {job_id}", duration=120),
        config=PipelineConfig(),
        paths=temp_manager.create_job_directories(job_id),
    )
    fields.update(overrides)
    return AutomationJob(**fields)


def test_create_and_get_roundtrip(job_store, temp_manager):
    job = job_store.create(_job("job-1", temp_manager))

    loaded = job_store.get("job-1")

    assert loaded == job
    assert job_store.exists("job-1")
    stored = json.loads((job_store.base_dir / "job-1.json").read_text())
    assert stored["youtubeUrl"] == "https://youtu.be/job-1"
    assert stored["status"] == "pending"
    assert stored["config"]["chunkDuration"] == 60


def test_get_missing_or_corrupt(job_store):
    assert job_store.get("nope") is None

    job_store.base_dir.mkdir(parents=True)
    (job_store.base_dir / "broken.json").write_text("{not json")

    assert job_store.get("broken") is None
    assert job_store.list() == []


def test_update_bumps_updated_at(job_store, temp_manager):
    job = job_store.create(_job("job-1", temp_manager))

    updated = job_store.update("job-1", {"status": JobStatus.DOWNLOADING, "output_file": "/tmp/out.mp4"})

    assert updated.status == JobStatus.DOWNLOADING
    assert updated.output_file == "/tmp/out.mp4"
    assert updated.updated_at >= job.updated_at
    assert job_store.get("job-1").status == JobStatus.DOWNLOADING


def test_update_missing_job(job_store):
    with pytest.raises(JobNotFoundError):
        job_store.update("ghost", {"status": JobStatus.FAILED})


def test_list_filters_and_paginates(job_store, temp_manager):
    now = utcnow()
    for index in range(5):
        status = JobStatus.COMPLETE if index % 2 else JobStatus.PENDING
        job_store.create(_job(f"job-{index}", temp_manager, status=status, created_at=now + timedelta(seconds=index)))

    assert [j.id for j in job_store.list()] == ["job-4", "job-3", "job-2", "job-1", "job-0"]
    assert [j.id for j in job_store.list(limit=2, offset=1)] == ["job-3", "job-2"]
    assert [j.id for j in job_store.list(status=JobStatus.COMPLETE)] == ["job-3", "job-1"]
    assert job_store.count() == 5
    assert job_store.count(status=JobStatus.PENDING) == 3


def test_add_log_keeps_most_recent(job_store, temp_manager, monkeypatch):
    monkeypatch.setattr("constants.PipelineDefaults.MAX_JOB_LOGS", 3)
    job_store.create(_job("job-1", temp_manager))

    for index in range(5):
        job_store.add_log("job-1", JobLogEntry(stage="download", message=f"step {index}"))

    logs = job_store.get("job-1").progress.logs
    assert [entry.message for entry in logs] == ["step 2", "step 3", "step 4"]


def test_delete(job_store, temp_manager):
    job_store.create(_job("job-1", temp_manager))

    assert job_store.delete("job-1") is True
    assert job_store.delete("job-1") is False
    assert job_store.get("job-1") is None


def test_temp_manager_directories(temp_manager):
    paths = temp_manager.create_job_directories("job-9")

    for directory in (paths.source, paths.chunks, paths.dubbed, paths.output):
        assert (temp_manager.base_dir / "job-9").is_dir()
        assert directory.startswith(paths.root)

    (temp_manager.base_dir / "job-9" / "output" / "final.mp4").write_bytes(b"video")
    temp_manager.cleanup_intermediate_files(paths)

    assert not (temp_manager.base_dir / "job-9" / "chunks").exists()
    assert (temp_manager.base_dir / "job-9" / "output" / "final.mp4").exists()

    temp_manager.cleanup_job_files("job-9")
    assert not (temp_manager.base_dir / "job-9").exists()
    # removing twice is harmless
    temp_manager.cleanup_job_files("job-9")


def test_job_status_predicates():
    assert JobStatus.DUBBING.is_running()
    assert not JobStatus.PENDING.is_running()
    assert not JobStatus.CANCELLED.can_cancel()
