"""
Moment Repository - Data access layer for the meal moment catalog
"""

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Moment


class MomentRepository(BaseRepository[Moment]):
    """Repository for meal moments"""

    def __init__(self, db: Session):
        super().__init__(db, Moment)

    def list_ordered(self) -> List[Moment]:
        """Moments in their evaluation order within a day"""
        return self.db.query(Moment).order_by(Moment.sort_order, Moment.name).all()

    def get_by_name(self, name: str) -> Optional[Moment]:
        """Case-insensitive lookup by moment name"""
        return (
            self.db.query(Moment)
            .filter(func.lower(Moment.name) == name.strip().lower())
            .first()
        )
