"""
JobStatus Value Object

Lifecycle of an automation (dubbing) job.
"""

from enum import Enum
from typing import Set


class JobStatus(str, Enum):
    """
    Automation job status.

    pending, downloading, chunking, dubbing, merging, finalizing and complete
    run in pipeline order; failed and cancelled end a job early.
    """

    PENDING = "pending"
    DOWNLOADING = "downloading"
    CHUNKING = "chunking"
    DUBBING = "dubbing"
    MERGING = "merging"
    FINALIZING = "finalizing"
    COMPLETE = "complete"
    FAILED = "failed"
    CANCELLED = "cancelled"

    def is_terminal(self) -> bool:
        """Check if this status is terminal (no further transitions)."""
        return self in _TERMINAL

    def is_running(self) -> bool:
        """Check if a worker is actively processing the job."""
        return self in _RUNNING

    def can_cancel(self) -> bool:
        return not self.is_terminal()

    @classmethod
    def from_string(cls, value: str) -> "JobStatus":
        """
        Create JobStatus from string value.

        Raises:
            ValueError: If value is not a valid status
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid job status: {value}")


_TERMINAL: Set[JobStatus] = {JobStatus.COMPLETE, JobStatus.FAILED, JobStatus.CANCELLED}
_RUNNING: Set[JobStatus] = {
    JobStatus.DOWNLOADING,
    JobStatus.CHUNKING,
    JobStatus.DUBBING,
    JobStatus.MERGING,
    JobStatus.FINALIZING,
}