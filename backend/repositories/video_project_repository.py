"""
Video project repository.
"""

from sqlalchemy.orm import Session

from models import VideoProject
from .base_repository import BaseRepository


class VideoProjectRepository(BaseRepository[VideoProject]):
    """Repository for VideoProject model operations; listing is newest first via list_recent."""

    def __init__(self, db: Session):
        super().__init__(db, VideoProject)
