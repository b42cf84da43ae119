from database import engine, Base
import models  # noqa: F401  registers tables on Base.metadata
import logging

logger = logging.getLogger(__name__)


def init_database(bind=None):
    """Create all tables that do not exist yet"""
    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info(f"✅ Database initialized ({len(Base.metadata.tables)} tables)")


if __name__ == "__main__":
    init_database()
