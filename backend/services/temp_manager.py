"""
Temporary directory management for automation jobs
"""
from pathlib import Path
import logging
import shutil

from dtos.internal import JobPaths

logger = logging.getLogger(__name__)

_STAGE_DIRS = ("source", "chunks", "dubbed", "output")


class TempManager:
    """Creates and removes the per-job working directories"""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    def create_job_directories(self, job_id: str) -> JobPaths:
        """
        Create ``{base}/{job_id}/{source,chunks,dubbed,output}``.

        Returns:
            JobPaths with absolute directory paths
        """
        root = self.base_dir / job_id
        for name in _STAGE_DIRS:
            (root / name).mkdir(parents=True, exist_ok=True)
        return JobPaths(root=str(root), **{name: str(root / name) for name in _STAGE_DIRS})

    def cleanup_intermediate_files(self, paths: JobPaths) -> None:
        """Remove source, chunk and dubbed files, keeping the output"""
        for directory in (paths.source, paths.chunks, paths.dubbed):
            self._remove(Path(directory))

    def cleanup_job_files(self, job_id: str) -> None:
        self._remove(self.base_dir / job_id)

    @staticmethod
    def _remove(directory: Path) -> None:
        # Cleanup failures are logged but never fail the caller
        try:
            shutil.rmtree(directory)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Error cleaning up {directory}: {e}")
