from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from app.config import Settings, settings as default_settings
from app.exceptions import NoRecipesAvailableError, NotFoundError, ServiceValidationError, UnknownMomentError
from domain.mappers.plan_mapper import PlanMapper
from domain.models import Moment, ScheduledMeal, Tag
from repositories.meal_plan_repository import MealPlanRepository
from repositories.moment_repository import MomentRepository
from repositories.recipe_repository import RecipeRepository, TagRepository
from services.plan_generator import (
    DAYS_PER_WEEK,
    PlanMoment,
    PlannedMeal,
    PlanPreferences,
    SlotRequest,
    fill_requested_slots,
    generate_weekly_plan,
)


logger = logging.getLogger("familymeal.planner")


@dataclass
class PlanRequest:
    user_id: uuid.UUID
    week_start: date
    preferences: PlanPreferences = field(default_factory=PlanPreferences)
    moment_names: Optional[List[str]] = None


@dataclass
class WeekPlan:
    week_start: date
    meals: List[PlannedMeal]
    requested_slots: int
    saved: bool = False

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=DAYS_PER_WEEK - 1)

    @property
    def filled_slots(self) -> int:
        return len(self.meals)

    @property
    def partial(self) -> bool:
        return self.filled_slots < self.requested_slots


class PlannerService:
    """
    Planner:
    - samples candidate recipes (tags + average rating) from the catalog
    - collects recipes the user had scheduled in the recent lookback window
    - runs the weekly generator over the ordered moment catalog
    - previews the result or replaces the user's week with it
    - fills ad hoc slots with uniformly random recipes
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None, rng: Optional[random.Random] = None):
        self.db: Session = db
        self.settings: Settings = settings or default_settings
        self.rng = rng or random.Random()
        self.recipes = RecipeRepository(db)
        self.tags = TagRepository(db)
        self.moments = MomentRepository(db)
        self.meals = MealPlanRepository(db)

    # ---------- catalog ----------

    def list_moments(self) -> List[Moment]:
        return self.moments.list_ordered()

    def list_tags(self) -> List[Tag]:
        return self.tags.list_all()

    def _resolve_moments(self, names: Optional[Sequence[str]]) -> List[PlanMoment]:
        """Catalog moments in catalog order, optionally restricted to ``names``."""
        catalog = [PlanMapper.to_plan_moment(m) for m in self.moments.list_ordered()]
        if names is None:
            return catalog

        if not names:
            raise ServiceValidationError("At least one moment must be requested", code="NO_MOMENTS")

        wanted = {n.strip().lower() for n in names}
        known = {m.name.lower() for m in catalog}
        unknown = wanted - known
        if unknown:
            raise UnknownMomentError(unknown)
        return [m for m in catalog if m.name.lower() in wanted]

    def _check_week_start(self, week_start: date) -> None:
        if self.settings.require_monday_week_start and week_start.weekday() != 0:
            raise ServiceValidationError(
                f"Week must start on a Monday, got {week_start.isoformat()}",
                code="WEEK_START_NOT_MONDAY",
            )

    # ---------- full week ----------

    def preview_week(self, req: PlanRequest) -> WeekPlan:
        """Generate a week plan without persisting it."""
        self._check_week_start(req.week_start)
        moments = self._resolve_moments(req.moment_names)

        candidates = self.recipes.sample_candidates(req.user_id, limit=self.settings.candidate_pool_size)
        if not candidates:
            raise NoRecipesAvailableError()

        recent = self.meals.recent_recipe_ids(
            req.user_id,
            before=req.week_start,
            lookback_days=self.settings.recent_lookback_days,
        )
        logger.info(
            "User %s: %d candidates, %d recently used, moments=%s",
            req.user_id,
            len(candidates),
            len(recent),
            [m.name for m in moments],
        )

        meals = generate_weekly_plan(
            candidates,
            recent,
            moments,
            req.week_start,
            req.preferences,
            rng=self.rng,
        )
        plan = WeekPlan(
            week_start=req.week_start,
            meals=meals,
            requested_slots=DAYS_PER_WEEK * len(moments),
        )
        if plan.partial:
            logger.info(
                "Partial plan for user %s: %d of %d slots filled",
                req.user_id,
                plan.filled_slots,
                plan.requested_slots,
            )
        return plan

    def generate_week(self, req: PlanRequest) -> WeekPlan:
        """Generate a week plan and replace the user's stored week with it."""
        plan = self.preview_week(req)
        self.save_week(req.user_id, req.week_start, plan.meals)
        plan.saved = True
        return plan

    def save_week(self, user_id: uuid.UUID, week_start: date, meals: Iterable[PlannedMeal]) -> List[ScheduledMeal]:
        """
        Replace every scheduled meal of the user in the seven days starting at
        ``week_start`` with ``meals``.
        """
        week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)
        meals = list(meals)
        outside = [m.date for m in meals if not (week_start <= m.date <= week_end)]
        if outside:
            raise ServiceValidationError(
                f"Meals fall outside the week {week_start} - {week_end}",
                details={"dates": [d.isoformat() for d in outside]},
            )

        try:
            removed = self.meals.delete_range(user_id, week_start, week_end)
            rows = self.meals.add_meals(user_id, meals)
            self.meals.commit()
        except Exception:
            self.meals.rollback()
            raise

        logger.info(
            "Saved week %s for user %s: removed %d, inserted %d",
            week_start,
            user_id,
            removed,
            len(rows),
        )
        return rows

    def resolve_meals(
        self, user_id: uuid.UUID, entries: Iterable[Tuple[date, uuid.UUID, uuid.UUID]]
    ) -> List[PlannedMeal]:
        """Build planned meals from (date, moment_id, recipe_id) triples the user may plan with."""
        meals: List[PlannedMeal] = []
        for day, moment_id, recipe_id in entries:
            moment = self.moments.get_by_id(moment_id)
            if moment is None:
                raise NotFoundError(f"Moment {moment_id} not found")
            recipe = self.recipes.get_candidate(recipe_id, user_id)
            if recipe is None:
                raise NotFoundError(f"Recipe {recipe_id} not found")
            meals.append(PlannedMeal(date=day, moment=PlanMapper.to_plan_moment(moment), recipe=recipe))
        return meals

    # ---------- ad hoc slots ----------

    def fill_slots(
        self,
        user_id: uuid.UUID,
        slots: Sequence[SlotRequest],
        replace_range: Optional[Tuple[date, date]] = None,
    ) -> List[PlannedMeal]:
        """
        Fill the requested slots with random recipes and store them.
        When ``replace_range`` is given the user's meals in that range are
        removed first.
        """
        candidates = self.recipes.sample_candidates(user_id, limit=self.settings.candidate_pool_size)
        if not candidates:
            raise NoRecipesAvailableError()

        moments = [PlanMapper.to_plan_moment(m) for m in self.moments.list_ordered()]
        meals = fill_requested_slots(candidates, slots, moments, rng=self.rng)

        try:
            if replace_range is not None:
                start, end = replace_range
                self.meals.delete_range(user_id, start, end)
            self.meals.add_meals(user_id, meals)
            self.meals.commit()
        except Exception:
            self.meals.rollback()
            raise

        logger.info("Filled %d of %d requested slots for user %s", len(meals), len(slots), user_id)
        return meals

    # ---------- stored week ----------

    def get_week(self, user_id: uuid.UUID, start: date, end: Optional[date] = None) -> List[ScheduledMeal]:
        end = end or start + timedelta(days=DAYS_PER_WEEK - 1)
        if end < start:
            raise ServiceValidationError("end must not be before start")
        return self.meals.list_range(user_id, start, end)

    def replace_meal(self, user_id: uuid.UUID, scheduled_meal_id: uuid.UUID, recipe_id: uuid.UUID) -> ScheduledMeal:
        """Point one stored meal at a different recipe."""
        row = self.meals.get_for_user(scheduled_meal_id, user_id)
        if row is None:
            raise NotFoundError(f"Meal {scheduled_meal_id} not found")
        if self.recipes.get_visible(recipe_id, user_id) is None:
            raise NotFoundError(f"Recipe {recipe_id} not found")

        row.recipe_id = recipe_id
        self.meals.commit()
        self.db.refresh(row)
        logger.info("Meal %s of user %s now uses recipe %s", scheduled_meal_id, user_id, recipe_id)
        return row

    def add_meal(self, user_id: uuid.UUID, day: date, moment_id: uuid.UUID, recipe_id: uuid.UUID) -> ScheduledMeal:
        """Schedule one recipe for a day and moment, next to whatever is already planned."""
        [meal] = self.resolve_meals(user_id, [(day, moment_id, recipe_id)])
        try:
            [row] = self.meals.add_meals(user_id, [meal])
            self.meals.commit()
        except Exception:
            self.meals.rollback()
            raise

        self.db.refresh(row)
        logger.info("Added %s %s meal %s for user %s", day, meal.moment.name, recipe_id, user_id)
        return row
