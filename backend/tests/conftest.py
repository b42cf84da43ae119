import os
import sys
import tempfile
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Keep logs, the database file and temp media out of the real data directory
os.environ.setdefault("MEDIA_STUDIO_DATA_DIR", tempfile.mkdtemp(prefix="media-studio-tests-"))

# Now import after path and environment are set
import copy

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import build_engine, get_db
from dependencies import get_automation_service, get_upload_service, get_youtube_service
from init_db import init_database
from main import app
from services.automation_service import AutomationService
from services.job_store import JobStore
from services.temp_manager import TempManager
from services.upload_service import UploadService
from services.youtube_service import YouTubeService
from utils.memory_cache import MemoryCache


VIDEO_ID = "dQw4w9WgXcQ"
VIDEO_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"

SAMPLE_VIDEO_INFO = {
    "id": VIDEO_ID,
    "title": "Studio Session: Take 3",
    "duration": 212,
    "uploader": "Studio Channel",
    "view_count": 1500,
    "thumbnails": [
        {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg"},
        {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"},
    ],
    "formats": [
        {"format_id": "18", "url": "https://media.example/18", "ext": "mp4", "height": 360,
         "vcodec": "avc1.42001E", "acodec": "mp4a.40.2", "fps": 30, "filesize": 9_000_000},
        {"format_id": "22", "url": "https://media.example/22", "ext": "mp4", "height": 720,
         "vcodec": "avc1.64001F", "acodec": "mp4a.40.2", "fps": 30, "filesize_approx": 25_000_000},
        {"format_id": "137", "url": "https://media.example/137", "ext": "mp4", "height": 1080,
         "vcodec": "avc1.640028", "acodec": "none", "fps": 30},
        {"format_id": "140", "url": "https://media.example/140", "ext": "m4a",
         "vcodec": "none", "acodec": "mp4a.40.2"},
        {"format_id": "hls-301", "url": "https://media.example/hls", "ext": "mp4", "height": 1080,
         "vcodec": "avc1", "acodec": "mp4a"},
    ],
}


class FakeYouTubeRepository:
    """Serves canned yt-dlp metadata and counts fetches"""

    def __init__(self, info=None, error=None):
        self.info = copy.deepcopy(SAMPLE_VIDEO_INFO) if info is None else info
        self.error = error
        self.calls = []

    def fetch_video_info(self, video_id):
        self.calls.append(video_id)
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.info)


@pytest.fixture
def db_engine():
    """In-memory database shared across threads for the TestClient"""
    engine = build_engine('sqlite:///:memory:', poolclass=StaticPool)
    init_database(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create in-memory database for testing"""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def youtube_repository():
    return FakeYouTubeRepository()


@pytest.fixture
def youtube_service(youtube_repository):
    return YouTubeService(repository=youtube_repository, cache=MemoryCache())


@pytest.fixture
def job_store(tmp_path):
    return JobStore(tmp_path / "jobs")


@pytest.fixture
def temp_manager(tmp_path):
    return TempManager(tmp_path / "automation")


@pytest.fixture
def automation_service(job_store, temp_manager, youtube_service):
    return AutomationService(
        job_store=job_store,
        temp_manager=temp_manager,
        youtube_service=youtube_service,
    )


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(db_session, youtube_service, automation_service, upload_dir):
    """TestClient with the database, stores and yt-dlp replaced by test doubles"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_youtube_service] = lambda: youtube_service
    app.dependency_overrides[get_automation_service] = lambda: automation_service
    app.dependency_overrides[get_upload_service] = lambda: UploadService(upload_dir=upload_dir)

    yield TestClient(app)

    app.dependency_overrides.clear()
