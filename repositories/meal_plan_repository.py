"""
Meal Plan Repository - Data access layer for scheduled meals
"""

from datetime import date, timedelta
from typing import Iterable, List, Optional, Set
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from repositories.base import BaseRepository
from domain.models import Moment, ScheduledMeal
from services.plan_generator import PlannedMeal


class MealPlanRepository(BaseRepository[ScheduledMeal]):
    """
    Repository for a user's scheduled meals.
    Tracks recent recipe use and writes generated plans.
    """

    def __init__(self, db: Session):
        super().__init__(db, ScheduledMeal)

    def get_for_user(self, scheduled_meal_id: UUID, user_id: UUID) -> Optional[ScheduledMeal]:
        """Get a scheduled meal owned by a specific user"""
        return (
            self.db.query(ScheduledMeal)
            .filter(
                ScheduledMeal.scheduled_meal_id == scheduled_meal_id,
                ScheduledMeal.user_id == user_id,
            )
            .first()
        )

    def recent_recipe_ids(self, user_id: UUID, before: date, lookback_days: int) -> Set[UUID]:
        """
        Recipe IDs scheduled for the user in the ``lookback_days`` days
        before ``before`` (exclusive).
        """
        if lookback_days <= 0:
            return set()
        since = before - timedelta(days=lookback_days)
        rows = (
            self.db.query(ScheduledMeal.recipe_id)
            .filter(
                ScheduledMeal.user_id == user_id,
                ScheduledMeal.day >= since,
                ScheduledMeal.day < before,
                ScheduledMeal.recipe_id.isnot(None),
            )
            .distinct()
            .all()
        )
        return {r[0] for r in rows}

    def delete_range(self, user_id: UUID, start: date, end: date) -> int:
        """Delete the user's scheduled meals with start <= day <= end"""
        count = (
            self.db.query(ScheduledMeal)
            .filter(
                ScheduledMeal.user_id == user_id,
                ScheduledMeal.day >= start,
                ScheduledMeal.day <= end,
            )
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return count

    def add_meals(self, user_id: UUID, meals: Iterable[PlannedMeal]) -> List[ScheduledMeal]:
        """Stage one row per planned meal"""
        rows = [
            ScheduledMeal(
                user_id=user_id,
                day=m.date,
                moment_id=m.moment_id,
                recipe_id=m.recipe_id,
            )
            for m in meals
        ]
        self.db.add_all(rows)
        self.db.flush()
        return rows

    def list_range(self, user_id: UUID, start: date, end: date) -> List[ScheduledMeal]:
        """Scheduled meals in a date range, ordered by day then moment order"""
        return (
            self.db.query(ScheduledMeal)
            .join(Moment, ScheduledMeal.moment_id == Moment.moment_id)
            .options(joinedload(ScheduledMeal.moment), joinedload(ScheduledMeal.recipe))
            .filter(
                ScheduledMeal.user_id == user_id,
                ScheduledMeal.day >= start,
                ScheduledMeal.day <= end,
            )
            .order_by(ScheduledMeal.day, Moment.sort_order, Moment.name)
            .all()
        )
