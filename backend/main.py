from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from config.app_config import LOG_DIR, SERVER_HOST, SERVER_PORT, ensure_directories
from constants import CacheConfig, ServiceInfo
from dependencies import get_video_cache
from init_db import init_database
from api import automation, editor, pdf, tts, youtube
from utils.error_handlers import register_exception_handlers
from utils.logging_utils import request_logging_middleware
import asyncio
import logging
from logging.handlers import RotatingFileHandler
import sys

# Configure logging with rotating file handler
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_FILE = LOG_DIR / "backend.log"

log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# File handler with rotation (10MB per file, keep 5 backups)
file_handler = RotatingFileHandler(
    LOG_FILE,
    maxBytes=10 * 1024 * 1024,
    backupCount=5,
    encoding='utf-8'
)
file_handler.setFormatter(log_formatter)
file_handler.setLevel(logging.INFO)

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(log_formatter)
console_handler.setLevel(logging.INFO)

root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)
root_logger.addHandler(file_handler)
root_logger.addHandler(console_handler)

logger = logging.getLogger(__name__)
logger.info(f"Logging initialized: {LOG_FILE}")

_cache_cleanup_task = None


async def cache_cleanup_loop():
    """Evict expired video info entries so the cache does not grow unbounded"""
    cache = get_video_cache()
    while True:
        await asyncio.sleep(CacheConfig.CLEANUP_INTERVAL)
        removed = cache.cleanup()
        if removed:
            logger.info(f"Cache cleanup removed {removed} expired entries")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    global _cache_cleanup_task

    logger.info("Starting Media Studio API...")
    ensure_directories()
    init_database()

    _cache_cleanup_task = asyncio.create_task(cache_cleanup_loop())
    logger.info("✅ Cache cleanup task started")

    yield

    logger.info("Shutting down...")
    if _cache_cleanup_task and not _cache_cleanup_task.done():
        _cache_cleanup_task.cancel()
        try:
            await _cache_cleanup_task
        except asyncio.CancelledError:
            logger.info("Cache cleanup task cancelled successfully")

    logger.info("Application shutdown complete")


app = FastAPI(
    title=ServiceInfo.NAME,
    description="Video editor, PDF annotator, TTS estimates and YouTube dubbing automation",
    version=ServiceInfo.VERSION,
    lifespan=lifespan
)

# Allow all origins so the studio frontend can run on any host
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.middleware("http")(request_logging_middleware)

# Include API routers
app.include_router(editor.router, prefix="/api", tags=["editor"])
app.include_router(pdf.router, prefix="/api", tags=["pdf"])
app.include_router(tts.router, prefix="/api", tags=["tts"])
app.include_router(automation.router, prefix="/api", tags=["automation"])
app.include_router(youtube.router, prefix="/api", tags=["youtube"])


@app.get("/api/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": ServiceInfo.NAME,
        "version": ServiceInfo.VERSION
    }


if __name__ == "__main__":
    import uvicorn
    import socket

    def is_port_in_use(port: int) -> bool:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind((SERVER_HOST, port))
                return False
            except OSError:
                return True

    if is_port_in_use(SERVER_PORT):
        logger.error(f"❌ Port {SERVER_PORT} is already in use!")
        logger.error(f"   Another instance of {ServiceInfo.NAME} may be running.")
        sys.exit(1)

    logger.info(f"🚀 Starting {ServiceInfo.NAME} on http://{SERVER_HOST}:{SERVER_PORT}...")
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
