"""
Weekly meal-plan generation.

Two planning paths live here:

- ``generate_weekly_plan``: fills every (day, moment) slot of a seven-day
  window, filtering by preferences and recent use, keeping recipes unique
  across the week and tag categories unique within a day, and choosing
  among the remaining candidates with a weighted shortlist pick.
- ``fill_requested_slots``: fills an explicit list of (date, moment) slots
  with a uniformly random recipe, without weighting or exclusions.

Both are pure in-memory computations over plain value objects; data access
and persistence belong to ``services.planner_service``.
"""

from __future__ import annotations

import logging
import random
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from functools import cmp_to_key
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union
from uuid import UUID

from domain.enums import MomentName, StandardTag

logger = logging.getLogger("familymeal.plan_generator")

RecipeId = Union[UUID, str, int]

DAYS_PER_WEEK = 7
QUICK_MEAL_MINUTES = 20
DEFAULT_RATING = 3.0
MOMENT_TAG_BONUS = 2.0
QUICK_MEAL_BONUS = 1.0
TIE_BREAK_MARGIN = 0.5
SHORTLIST_SIZE = 3


@dataclass(frozen=True)
class PlanTag:
    id: Optional[RecipeId]
    name: str


@dataclass(frozen=True)
class PlanRecipe:
    """Candidate recipe as seen by the generator."""

    id: RecipeId
    name: str
    cook_minutes: Optional[int] = None
    base_servings: Optional[int] = None
    tags: Tuple[PlanTag, ...] = field(default_factory=tuple)
    average_rating: Optional[float] = None

    @property
    def tag_names(self) -> Set[str]:
        return {t.name for t in self.tags}

    def has_tag(self, name: str) -> bool:
        return any(t.name == name for t in self.tags)


@dataclass(frozen=True)
class PlanMoment:
    id: Optional[RecipeId]
    name: str


@dataclass(frozen=True)
class PlanPreferences:
    """
    Dietary constraints for one generation run.
    A false/zero/None field means the constraint is not active.
    """

    vegetarian_only: bool = False
    gluten_free: bool = False
    max_cook_minutes: Optional[int] = None


@dataclass(frozen=True)
class SlotRequest:
    date: date
    moment_name: str


@dataclass(frozen=True)
class PlannedMeal:
    date: date
    moment: PlanMoment
    recipe: PlanRecipe

    @property
    def moment_id(self) -> Optional[RecipeId]:
        return self.moment.id

    @property
    def recipe_id(self) -> RecipeId:
        return self.recipe.id


# ---------- eligibility ----------


def passes_preferences(recipe: PlanRecipe, preferences: PlanPreferences) -> bool:
    if preferences.vegetarian_only and not recipe.has_tag(StandardTag.VEGETARIAN.value):
        return False
    if preferences.gluten_free and not recipe.has_tag(StandardTag.GLUTEN_FREE.value):
        return False
    if preferences.max_cook_minutes and recipe.cook_minutes is not None:
        if recipe.cook_minutes > preferences.max_cook_minutes:
            return False
    return True


def build_eligible_pool(
    candidates: Iterable[PlanRecipe],
    recently_used_ids: Set[RecipeId],
    preferences: PlanPreferences,
) -> Tuple[PlanRecipe, ...]:
    """Week-wide filter: drop recently used recipes and preference failures."""
    return tuple(
        r
        for r in candidates
        if r.id not in recently_used_ids and passes_preferences(r, preferences)
    )


def is_suitable_for_moment(
    recipe: PlanRecipe, moment_name: str, moment_names: Set[str]
) -> bool:
    """
    A recipe tagged for some other moment (and not for this one) is kept out
    of this moment. Breakfast also turns away recipes known to take longer
    than QUICK_MEAL_MINUTES.
    """
    if moment_name == MomentName.BREAKFAST.value:
        if recipe.cook_minutes is not None and recipe.cook_minutes > QUICK_MEAL_MINUTES:
            return False

    if recipe.has_tag(moment_name):
        return True
    other_moments = moment_names - {moment_name}
    return not (recipe.tag_names & other_moments)


def _known_moment_names(moments: Sequence[PlanMoment]) -> Set[str]:
    return {m.name for m in moments} | {m.value for m in MomentName}


# ---------- weighted selection ----------


def recipe_weight(recipe: PlanRecipe, moment_name: str) -> float:
    rating = recipe.average_rating
    weight = float(rating) if rating else DEFAULT_RATING

    if recipe.has_tag(moment_name):
        weight += MOMENT_TAG_BONUS
    if recipe.cook_minutes is not None and recipe.cook_minutes <= QUICK_MEAL_MINUTES:
        weight += QUICK_MEAL_BONUS

    return weight


def select_best_recipe(
    candidates: Sequence[PlanRecipe],
    moment_name: str,
    rng: Optional[random.Random] = None,
) -> Optional[PlanRecipe]:
    """
    Pick one recipe for a moment.

    Candidates are ordered by descending weight, except that two weights
    compared during the sort that lie within TIE_BREAK_MARGIN of each other
    are ordered at random. The pick is uniform over the first SHORTLIST_SIZE
    entries of that ordering.
    """
    if not candidates:
        return None
    rng = rng or random.Random()

    weighted = [(recipe_weight(r, moment_name), r) for r in candidates]

    def compare(a: Tuple[float, PlanRecipe], b: Tuple[float, PlanRecipe]) -> float:
        diff = b[0] - a[0]
        if abs(diff) < TIE_BREAK_MARGIN:
            return rng.random() - 0.5
        return diff

    weighted.sort(key=cmp_to_key(compare))

    shortlist = weighted[:SHORTLIST_SIZE]
    return shortlist[rng.randrange(len(shortlist))][1]


# ---------- full week ----------


def generate_weekly_plan(
    candidates: Sequence[PlanRecipe],
    recently_used_ids: Set[RecipeId],
    moments: Sequence[PlanMoment],
    week_start: date,
    preferences: Optional[PlanPreferences] = None,
    rng: Optional[random.Random] = None,
) -> List[PlannedMeal]:
    """
    Assign at most one recipe to each (day, moment) slot for seven
    consecutive days starting at ``week_start``.

    Slots with no remaining candidate are left out of the result, so the
    returned plan may be shorter than ``7 * len(moments)``. Moments are
    evaluated in the given order; tags claimed by earlier moments of a day
    exclude recipes from later moments of that same day.
    """
    if not isinstance(week_start, date):
        raise TypeError(f"week_start must be a date, got {type(week_start).__name__}")
    if isinstance(week_start, datetime):
        week_start = week_start.date()

    preferences = preferences or PlanPreferences()
    rng = rng or random.Random()

    if not candidates:
        return []

    eligible_pool = build_eligible_pool(candidates, set(recently_used_ids), preferences)
    moment_names = _known_moment_names(moments)
    logger.info(
        "Planning week %s: %d candidates, %d eligible, %d moments",
        week_start,
        len(candidates),
        len(eligible_pool),
        len(moments),
    )

    plan: List[PlannedMeal] = []
    used_this_week: Set[RecipeId] = set()

    for offset in range(DAYS_PER_WEEK):
        day = week_start + timedelta(days=offset)
        day_claimed_tags: Set[str] = set()

        for moment in moments:
            available = [
                r
                for r in eligible_pool
                if r.id not in used_this_week
                and not (r.tag_names & day_claimed_tags)
                and is_suitable_for_moment(r, moment.name, moment_names)
            ]
            if not available:
                logger.debug("No candidate for %s %s, slot skipped", day, moment.name)
                continue

            chosen = select_best_recipe(available, moment.name, rng)
            plan.append(PlannedMeal(date=day, moment=moment, recipe=chosen))
            used_this_week.add(chosen.id)
            day_claimed_tags.update(chosen.tag_names)

    logger.info(
        "Planned %d of %d slots for week %s",
        len(plan),
        DAYS_PER_WEEK * len(moments),
        week_start,
    )
    return plan


# ---------- ad hoc slots ----------


def fill_requested_slots(
    candidates: Sequence[PlanRecipe],
    slots: Iterable[SlotRequest],
    moments: Sequence[PlanMoment],
    rng: Optional[random.Random] = None,
) -> List[PlannedMeal]:
    """
    Fill each requested slot with a uniformly random candidate.

    No weighting and no week/day exclusions apply here; the same recipe may
    land in several slots. Slots naming an unknown moment are skipped.
    """
    rng = rng or random.Random()
    if not candidates:
        return []

    by_name: Dict[str, PlanMoment] = {m.name.lower(): m for m in moments}
    meals: List[PlannedMeal] = []

    for slot in slots:
        moment = by_name.get(slot.moment_name.strip().lower())
        if moment is None:
            logger.warning("Unknown moment %r for %s, slot skipped", slot.moment_name, slot.date)
            continue
        recipe = candidates[rng.randrange(len(candidates))]
        meals.append(PlannedMeal(date=slot.date, moment=moment, recipe=recipe))

    return meals


def group_by_day(plan: Iterable[PlannedMeal]) -> "OrderedDict[date, List[PlannedMeal]]":
    grouped: "OrderedDict[date, List[PlannedMeal]]" = OrderedDict()
    for meal in plan:
        grouped.setdefault(meal.date, []).append(meal)
    return grouped
