"""
Application-wide constants.

This module centralizes the limits, defaults and pricing figures used across
the editor, PDF, TTS, automation and YouTube services so that none of them
are repeated as magic numbers.
"""


class HTTPStatus:
    """HTTP status codes used by the API layer"""
    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    PAYLOAD_TOO_LARGE = 413
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503


class ServiceInfo:
    """Identity reported by the health endpoint"""
    NAME = "Media Studio API"
    VERSION = "1.0.0"


class UploadLimits:
    """Accepted editor uploads"""
    MAX_FILE_SIZE = 500 * 1024 * 1024  # 500MB
    VIDEO_EXTENSIONS = ("mp4", "webm", "mov", "avi", "mkv", "flv")
    VIDEO_MIME_TYPES = (
        "video/mp4",
        "video/webm",
        "video/quicktime",
        "video/x-msvideo",
        "video/x-matroska",
        "video/x-flv",
    )


class EditorDefaults:
    """Defaults applied to new video projects"""
    PROJECT_NAME = "Untitled Project"
    MAX_NAME_LENGTH = 100
    MIN_FRAME_RATE = 1
    MAX_FRAME_RATE = 120
    MAX_WIDTH = 7680
    MAX_HEIGHT = 4320

    @staticmethod
    def settings() -> dict:
        return {
            "resolution": {"width": 1920, "height": 1080},
            "frameRate": 30,
            "backgroundColor": "#000000",
            "audioSampleRate": 44100,
        }

    @staticmethod
    def timeline() -> dict:
        return {
            "clips": [],
            "audioTracks": [],
            "textOverlays": [],
            "transitions": [],
            "duration": 0,
        }


class TextPresets:
    """Starting position, style and duration for new text overlays"""
    DEFAULT_PRESET = "custom"
    FULL_DURATION = -1  # overlay runs to the end of the timeline

    @staticmethod
    def default_style() -> dict:
        return {
            "fontFamily": "Inter, sans-serif",
            "fontSize": 48,
            "color": "#FFFFFF",
            "backgroundColor": None,
            "opacity": 1,
            "bold": True,
            "italic": False,
            "underline": False,
        }

    PRESETS = {
        "title": {
            "position": {"x": 50, "y": 50},
            "style": {"fontSize": 72},
            "animation": {"fadeIn": 0.5, "fadeOut": 0.5},
            "duration": 4,
        },
        "subtitle": {
            "position": {"x": 50, "y": 60},
            "style": {"fontSize": 36, "bold": False},
            "animation": {"fadeIn": 0.3, "fadeOut": 0.3},
            "duration": 3,
        },
        "lower-third": {
            "position": {"x": 10, "y": 80},
            "style": {"fontSize": 32, "backgroundColor": "rgba(0, 0, 0, 0.7)"},
            "duration": 5,
        },
        "caption": {
            "position": {"x": 50, "y": 90},
            "style": {"fontSize": 28, "bold": False, "backgroundColor": "rgba(0, 0, 0, 0.6)"},
            "animation": {"fadeIn": 0.2, "fadeOut": 0.2},
            "duration": 3,
        },
        "watermark": {
            "position": {"x": 95, "y": 5},
            "style": {"fontSize": 18, "bold": False, "opacity": 0.6},
            "duration": FULL_DURATION,
        },
        "custom": {
            "position": {"x": 50, "y": 50},
            "style": {},
            "duration": 3,
        },
    }


class TransitionDefaults:
    """Transitions allowed between two timeline clips"""
    TYPES = (
        "fade", "crossfade", "dissolve",
        "wipe", "wipeLeft", "wipeRight", "wipeUp", "wipeDown",
        "slide", "slideLeft", "slideRight", "slideUp", "slideDown",
        "zoom", "zoomIn", "zoomOut",
    )
    DEFAULT_DURATION = 1.0  # seconds
    MAX_CLIP_FRACTION = 0.5  # at most half of the shorter clip


class PdfDefaults:
    """Defaults applied to new PDF projects"""
    MAX_NAME_LENGTH = 255

    @staticmethod
    def settings() -> dict:
        return {
            "defaultFontFamily": "Helvetica",
            "defaultFontSize": 14,
            "defaultColor": "#000000",
            "defaultStrokeWidth": 2,
            "autoSave": True,
            "autoSaveInterval": 30000,
        }


class TTSPricing:
    """Text-to-speech estimation figures"""
    MAX_TEXT_LENGTH = 5000
    CHARS_PER_SECOND = 15
    FAL_COST_PER_SECOND = 0.002
    PROVIDERS = ("fal", "local")
    DEFAULT_PROVIDER = "fal"


class TTSVoiceOptions:
    """Emotion vectors and languages offered to TTS clients"""
    EMOTION_DIMENSIONS = (
        "happy", "angry", "sad", "afraid", "disgusted", "melancholic", "surprised", "calm",
    )
    DIMENSION_DESCRIPTIONS = {
        "happy": "Joy, excitement, positive energy",
        "angry": "Anger, frustration, intensity",
        "sad": "Sadness, sorrow, grief",
        "afraid": "Fear, anxiety, nervousness",
        "disgusted": "Disgust, contempt, disapproval",
        "melancholic": "Low mood, depression, wistfulness",
        "surprised": "Surprise, shock, astonishment",
        "calm": "Calm, natural, neutral",
    }
    # one weight per dimension, in EMOTION_DIMENSIONS order
    EMOTION_PRESETS = {
        "happy": (1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
        "angry": (0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
        "sad": (0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0),
        "afraid": (0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0),
        "disgusted": (0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0),
        "melancholic": (0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0),
        "surprised": (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0),
        "calm": (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0),
        "neutral": (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
        "excited": (0.8, 0.0, 0.0, 0.0, 0.0, 0.0, 0.3, 0.0),
        "nervous": (0.0, 0.0, 0.0, 0.6, 0.0, 0.3, 0.0, 0.0),
        "frustrated": (0.0, 0.6, 0.2, 0.0, 0.3, 0.0, 0.0, 0.0),
    }
    LANGUAGES = {
        "en": "English",
        "zh": "Chinese (Mandarin)",
        "ja": "Japanese",
    }
    MAX_VOICE_REFERENCE_SECONDS = 15
    EMOTION_VECTOR_RANGE = (0, 1.5)
    EMOTION_ALPHA_RANGE = (0, 1)


class PipelineDefaults:
    """Defaults and limits for automation pipeline configuration"""
    CHUNK_DURATION = 60
    ALLOWED_CHUNK_DURATIONS = (30, 60, 120, 300)
    TARGET_LANGUAGE = "es"
    MAX_PARALLEL_JOBS = 3
    MIN_PARALLEL = 1
    MAX_PARALLEL = 5
    VIDEO_QUALITY = "1080p"
    OUTPUT_FORMAT = "mp4"
    CHUNKING_STRATEGY = "fixed"
    MAX_JOB_LOGS = 1000
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 100


class DubbingPricing:
    """Dubbing provider pricing used for cost estimates"""
    PER_MINUTE = 0.24
    WATERMARK_DISCOUNT = 0.5
    PROCESSING_PER_CHUNK = 0.01


class TimeEstimates:
    """Average stage durations in seconds used for time estimates"""
    DOWNLOAD_PER_MINUTE = 45
    CHUNKING_PER_MINUTE = 1
    DUBBING_MULTIPLIER = 2.5
    MERGING_PER_MINUTE = 2
    FINALIZATION = 5


class CacheConfig:
    """In-memory cache settings"""
    VIDEO_INFO_TTL = 3600  # 1 hour
    DEFAULT_TTL = 300
    CLEANUP_INTERVAL = 600
    MAX_ENTRIES = 1000


class YouTubeConfig:
    """yt-dlp player clients tried in order when fetching video info"""
    PLAYER_CLIENTS = ("android", "ios", "tv_embedded", "web")
    QUALITY_ORDER = {
        "2160p": 5,
        "1440p": 4,
        "1080p": 3,
        "720p": 2,
        "480p": 1,
        "360p": 0,
    }
    MAX_FILENAME_LENGTH = 200
