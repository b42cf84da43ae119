"""
Base repository providing common CRUD operations.
"""

from typing import Generic, TypeVar, List, Optional, Type
from sqlalchemy.orm import Session

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Generic base repository for models with a string ``id`` primary key.

    Writes flush but never commit; the service that owns the unit of work
    decides when to commit or roll back.
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def create(self, obj: T) -> T:
        """Add a new instance and flush so defaults (id, timestamps) are populated."""
        self.db.add(obj)
        self.db.flush()
        return obj

    def get_by_id(self, id: str) -> Optional[T]:
        return self.db.get(self.model, id)

    def list_recent(self, limit: Optional[int] = None, offset: int = 0) -> List[T]:
        """
        Retrieve records newest first.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip

        Returns:
            List of model instances ordered by ``created_at`` descending
        """
        query = self.db.query(self.model).order_by(self.model.created_at.desc())
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        return query.all()

    def update(self, obj: T) -> T:
        self.db.flush()
        return obj

    def delete(self, obj: T) -> None:
        self.db.delete(obj)
        self.db.flush()
