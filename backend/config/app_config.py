"""
Runtime Configuration

Resolves filesystem locations and server binding from environment variables.
Every path falls back to a location under the data directory so a fresh
checkout runs without any configuration.

Environment variables:
- MEDIA_STUDIO_DATA_DIR: Root for the database, logs, uploads and job files
- MEDIA_STUDIO_DB_PATH: SQLite database file
- MEDIA_STUDIO_LOG_DIR: Rotating log directory
- MEDIA_STUDIO_HOST / MEDIA_STUDIO_PORT: uvicorn bind address
- FFPROBE_PATH: Explicit ffprobe binary (otherwise bundled or PATH lookup)
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def _env_path(name: str, default: Path) -> Path:
    value = os.environ.get(name)
    return Path(value).expanduser() if value else default


DATA_DIR = _env_path('MEDIA_STUDIO_DATA_DIR', Path.home() / '.media-studio')

DB_PATH = _env_path('MEDIA_STUDIO_DB_PATH', DATA_DIR / 'studio.db')
LOG_DIR = _env_path('MEDIA_STUDIO_LOG_DIR', DATA_DIR / 'logs')

# Uploaded editor media lands here before it is attached to a project
EDITOR_TEMP_DIR = DATA_DIR / '.cache' / 'editor' / 'temp'

# Automation job working directories and the JSON job records
AUTOMATION_DIR = DATA_DIR / 'temp' / 'automation'
JOB_STORE_DIR = AUTOMATION_DIR / 'jobs'

SERVER_HOST = os.environ.get('MEDIA_STUDIO_HOST', '0.0.0.0')
SERVER_PORT = int(os.environ.get('MEDIA_STUDIO_PORT', '8888'))

FFPROBE_PATH = os.environ.get('FFPROBE_PATH')


def ensure_directories() -> None:
    """Create the data, log and temp directories if they are missing."""
    for directory in (DATA_DIR, DB_PATH.parent, LOG_DIR, EDITOR_TEMP_DIR, JOB_STORE_DIR):
        directory.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Data directory ready: {DATA_DIR}")
