import pytest
from yt_dlp.utils import DownloadError

from exceptions import (
    AllStrategiesFailedError,
    FormatNotFoundError,
    InvalidUrlError,
    ValidationError,
    VideoNotFoundError,
    VideoUnavailableError,
)
from services.youtube_mapper import YouTubeMapper
from services.youtube_repository import YouTubeRepository
from services.youtube_service import YouTubeService, sanitize_filename
from services.youtube_validator import YouTubeValidator
from utils.memory_cache import MemoryCache

from conftest import SAMPLE_VIDEO_INFO, VIDEO_ID, VIDEO_URL, FakeYouTubeRepository


class FakeYoutubeDL:
    """Stands in for yt_dlp.YoutubeDL; outcomes are keyed by player client"""

    def __init__(self, outcomes, opened):
        self.outcomes = outcomes
        self.opened = opened
        self.client = None

    def __call__(self, options):
        self.client = options['extractor_args']['youtube']['player_client'][0]
        self.opened.append(self.client)
        return self

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def extract_info(self, url, download=True):
        assert download is False
        outcome = self.outcomes.get(self.client)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _repository(outcomes):
    opened = []
    return YouTubeRepository(ydl_factory=FakeYoutubeDL(outcomes, opened)), opened


# Validator

@pytest.mark.parametrize("url, video_id", [
    ("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42", "dQw4w9WgXcQ"),
    ("https://youtu.be/dQw4w9WgXcQ?si=share", "dQw4w9WgXcQ"),
    ("https://www.youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("dQw4w9WgXcQ", "dQw4w9WgXcQ"),
])
def test_extract_video_id(url, video_id):
    YouTubeValidator.validate_url(url)
    assert YouTubeValidator.extract_video_id(url) == video_id


@pytest.mark.parametrize("url", ["https://vimeo.com/1234", "   ", "short", None])
def test_validate_url_rejects(url):
    with pytest.raises(InvalidUrlError):
        YouTubeValidator.validate_url(url)


@pytest.mark.parametrize("itag", [0, -5, True, "22"])
def test_validate_itag_rejects(itag):
    with pytest.raises(ValidationError):
        YouTubeValidator.validate_itag(itag)


# Mapper

def test_mapper_keeps_muxed_formats_best_first():
    info = YouTubeMapper().map_to_video_info(SAMPLE_VIDEO_INFO)

    assert info.video.title == "Studio Session: Take 3"
    assert info.video.author == "Studio Channel"
    assert info.video.view_count == "1500"
    assert info.video.thumbnail.endswith("maxresdefault.jpg")
    assert [(f.itag, f.quality) for f in info.formats] == [(22, "720p"), (18, "360p")]
    assert info.formats[0].filesize == 25_000_000
    assert info.formats[0].has_audio and info.formats[0].has_video


def test_mapper_dedupes_quality_and_orders_unknown_last():
    raw = {"formats": [
        {"format_id": "1", "url": "u1", "format_note": "tiny", "vcodec": "v", "acodec": "a"},
        {"format_id": "2", "url": "u2", "height": 1080, "vcodec": "v", "acodec": "a"},
        {"format_id": "3", "url": "u3", "height": 1080, "vcodec": "v", "acodec": "a"},
        {"format_id": "4", "url": "u4", "height": 2160, "vcodec": "v", "acodec": "a"},
    ]}

    formats = YouTubeMapper().map_to_video_info(raw).formats

    assert [f.itag for f in formats] == [4, 2, 1]
    assert formats[-1].quality == "tiny"


# Repository

def test_repository_falls_back_to_next_client():
    repository, opened = _repository({
        "android": DownloadError("HTTP Error 403: Forbidden"),
        "ios": {"id": VIDEO_ID, "title": "From iOS"},
    })

    info = repository.fetch_video_info(VIDEO_ID)

    assert info["title"] == "From iOS"
    assert opened == ["android", "ios"]


def test_repository_stops_on_private_video():
    repository, opened = _repository({"android": DownloadError("ERROR: Private video. Sign in")})

    with pytest.raises(VideoUnavailableError):
        repository.fetch_video_info(VIDEO_ID)
    assert opened == ["android"]


def test_repository_stops_on_missing_video():
    repository, _ = _repository({"android": DownloadError("This video does not exist")})

    with pytest.raises(VideoNotFoundError):
        repository.fetch_video_info(VIDEO_ID)


@pytest.mark.parametrize("message", [
    "HTTP Error 404: Not Found",
    "HTTP Error 503: Service Unavailable",
])
def test_repository_retries_transient_http_errors(message):
    repository, opened = _repository({
        "android": DownloadError(message),
        "ios": {"id": VIDEO_ID, "title": "From iOS"},
    })

    assert repository.fetch_video_info(VIDEO_ID)["title"] == "From iOS"
    assert opened == ["android", "ios"]


def test_repository_stops_on_removed_video():
    repository, opened = _repository({"android": DownloadError("ERROR: [youtube] abc: Video unavailable")})

    with pytest.raises(VideoUnavailableError):
        repository.fetch_video_info(VIDEO_ID)
    assert opened == ["android"]


def test_repository_reports_last_error_when_all_fail():
    repository, opened = _repository({
        client: DownloadError(f"{client} throttled") for client in ("android", "ios", "tv_embedded", "web")
    })

    with pytest.raises(AllStrategiesFailedError, match="web throttled"):
        repository.fetch_video_info(VIDEO_ID)
    assert opened == ["android", "ios", "tv_embedded", "web"]


# Service

def test_video_info_is_cached(youtube_service, youtube_repository):
    first = youtube_service.get_video_info(VIDEO_URL)
    second = youtube_service.get_video_info(f"https://youtu.be/{VIDEO_ID}")

    assert first == second
    assert youtube_repository.calls == [VIDEO_ID]
    assert youtube_service.cache_stats()["hits"] == 1

    assert youtube_service.invalidate_video_cache(VIDEO_URL) is True
    youtube_service.get_video_info(VIDEO_URL)
    assert youtube_repository.calls == [VIDEO_ID, VIDEO_ID]


def test_download_format_defaults_to_best(youtube_service):
    download = youtube_service.get_download_format(VIDEO_URL)

    assert download.itag == 22
    assert download.quality == "720p"
    assert download.url == "https://media.example/22"
    assert download.mime_type == "video/mp4"
    assert download.filename == "Studio Session_ Take 3.mp4"


def test_download_format_by_itag(youtube_service, youtube_repository):
    download = youtube_service.get_download_format(VIDEO_URL, itag=137)

    assert download.quality == "1080p"
    # media URLs expire, so downloads never use the cache
    youtube_service.get_download_format(VIDEO_URL, itag=137)
    assert len(youtube_repository.calls) == 2

    with pytest.raises(FormatNotFoundError):
        youtube_service.get_download_format(VIDEO_URL, itag=999)


def test_download_format_without_muxed_streams():
    repository = FakeYouTubeRepository(info={"title": "Audio only", "formats": [
        {"format_id": "140", "url": "https://media.example/140", "vcodec": "none", "acodec": "mp4a"},
    ]})
    service = YouTubeService(repository=repository, cache=MemoryCache())

    with pytest.raises(VideoUnavailableError):
        service.get_download_format(VIDEO_URL)


def test_sanitize_filename():
    assert sanitize_filename('a/b:c*d?"e"<f>|g') == "a_b_c_d__e__f__g.mp4"
    assert sanitize_filename("x" * 300) == "x" * 200 + ".mp4"


# API

def test_video_info_endpoint(client):
    response = client.get("/api/video-info", params={"url": VIDEO_URL})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["video"]["viewCount"] == "1500"
    assert data["formats"][0] == {
        "itag": 22,
        "quality": "720p",
        "container": "mp4",
        "hasAudio": True,
        "hasVideo": True,
        "filesize": 25_000_000,
        "fps": 30,
        "codec": "avc1.64001F",
    }


@pytest.mark.parametrize("path", ["/api/video-info", "/api/video-info?url=", "/api/download/format"])
def test_missing_url_parameter(client, path):
    response = client.get(path)

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "error": {"code": "MISSING_PARAMETER", "message": "URL parameter is required"},
    }


def test_video_info_errors_use_envelope(client, youtube_repository):
    invalid = client.get("/api/video-info", params={"url": "https://example.com/watch"})
    assert invalid.status_code == 400
    assert invalid.json()["error"]["code"] == "INVALID_URL"

    youtube_repository.error = VideoNotFoundError(VIDEO_ID)
    missing = client.get("/api/video-info", params={"url": VIDEO_URL})
    assert missing.status_code == 404
    assert missing.json() == {
        "success": False,
        "error": {"code": "VIDEO_NOT_FOUND", "message": f"Video not found: {VIDEO_ID}"},
    }


def test_download_format_endpoint(client):
    response = client.get("/api/download/format", params={"url": VIDEO_URL, "itag": 18})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["itag"] == 18
    assert data["contentLength"] == 9_000_000

    missing = client.get("/api/download/format", params={"url": VIDEO_URL, "itag": 5})
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "FORMAT_NOT_FOUND"
