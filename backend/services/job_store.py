"""
Job Store

File-based persistence for automation jobs: one JSON document per job,
written atomically so a crash never leaves a half-written record.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import logging
import os
import threading

from pydantic import ValidationError as PydanticValidationError

from constants import PipelineDefaults
from domain.value_objects import JobStatus
from dtos.internal import AutomationJob, JobLogEntry
from exceptions import JobNotFoundError
from utils.uuid_helper import utcnow

logger = logging.getLogger(__name__)


class JobStore:
    """Stores AutomationJob records as ``{job_id}.json`` files"""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)
        self._lock = threading.RLock()

    def _job_path(self, job_id: str) -> Path:
        return self.base_dir / f"{job_id}.json"

    def _write(self, job: AutomationJob) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        path = self._job_path(job.id)
        tmp_path = path.with_suffix('.json.tmp')
        tmp_path.write_text(job.model_dump_json(by_alias=True, indent=2), encoding='utf-8')
        os.replace(str(tmp_path), str(path))

    def _read(self, path: Path) -> Optional[AutomationJob]:
        try:
            return AutomationJob.model_validate_json(path.read_text(encoding='utf-8'))
        except FileNotFoundError:
            return None
        except (OSError, PydanticValidationError) as e:
            logger.error(f"Error reading job file {path.name}: {e}")
            return None

    def create(self, job: AutomationJob) -> AutomationJob:
        with self._lock:
            self._write(job)
        logger.debug(f"Job record created: {job.id}")
        return job

    def get(self, job_id: str) -> Optional[AutomationJob]:
        """Load a job, or None when it is missing or unreadable"""
        return self._read(self._job_path(job_id))

    def exists(self, job_id: str) -> bool:
        return self._job_path(job_id).is_file()

    def update(self, job_id: str, changes: Dict[str, Any]) -> AutomationJob:
        """
        Apply field changes to a stored job and bump ``updated_at``.

        Args:
            job_id: Job to update
            changes: snake_case field names mapped to new values

        Returns:
            The updated job

        Raises:
            JobNotFoundError: No record for ``job_id``
        """
        with self._lock:
            job = self.get(job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            data = job.model_dump()
            data.update(changes)
            data["updated_at"] = utcnow()
            updated = AutomationJob.model_validate(data)
            self._write(updated)
            return updated

    def delete(self, job_id: str) -> bool:
        with self._lock:
            try:
                self._job_path(job_id).unlink()
                return True
            except FileNotFoundError:
                return False

    def list(
        self,
        status: Optional[JobStatus] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[AutomationJob]:
        """
        List jobs newest first.

        Unreadable records are logged and skipped.
        """
        if not self.base_dir.is_dir():
            return []

        jobs = []
        for path in self.base_dir.glob("*.json"):
            job = self._read(path)
            if job is None:
                continue
            if status is not None and job.status != status:
                continue
            jobs.append(job)

        jobs.sort(key=lambda j: j.created_at, reverse=True)
        end = offset + limit if limit is not None else None
        return jobs[offset:end]

    def count(self, status: Optional[JobStatus] = None) -> int:
        return len(self.list(status=status))

    def add_log(self, job_id: str, entry: JobLogEntry) -> AutomationJob:
        """Append a log entry, keeping only the most recent ones"""
        with self._lock:
            job = self.get(job_id)
            if job is None:
                raise JobNotFoundError(job_id)
            logs = [*job.progress.logs, entry][-PipelineDefaults.MAX_JOB_LOGS:]
            progress = job.progress.model_copy(update={"logs": logs})
            return self.update(job_id, {"progress": progress.model_dump()})
