"""
SQLite engine and session factory for editor and PDF projects.

Automation jobs do not live here; they are JSON records in the job store.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config.app_config import DB_PATH

SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA busy_timeout=5000",  # wait for locks instead of failing immediately
    "PRAGMA foreign_keys=ON",
)


def build_engine(url: str, **options) -> Engine:
    """
    Create a SQLite engine usable from FastAPI's threadpool.

    Every new DBAPI connection gets WAL journaling and foreign key
    enforcement. Extra keyword arguments go straight to create_engine,
    so tests can pass ``poolclass=StaticPool`` for an in-memory database.
    """
    sqlite_engine = create_engine(
        url,
        connect_args={'check_same_thread': False},
        echo=False,
        **options,
    )

    @event.listens_for(sqlite_engine, "connect")
    def apply_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(pragma)
        cursor.close()

    return sqlite_engine


DB_PATH.parent.mkdir(parents=True, exist_ok=True)

engine = build_engine(
    f'sqlite:///{DB_PATH}',
    pool_size=10,
    max_overflow=20,
    pool_pre_ping=True,
    pool_recycle=3600,
)

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


def get_db():
    """Request-scoped session; routes and tests override this dependency"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
