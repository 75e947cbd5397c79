"""
Tests for the repository classes against the in-memory SQLite database.

- RecipeRepository: candidate sampling, visibility rules, average ratings
- TagRepository: tag listing
- MomentRepository: ordering and case-insensitive lookup
- MealPlanRepository: recent-use window, range delete, inserts, range listing
"""

import uuid
from datetime import timedelta

import pytest
from sqlalchemy.orm import Session

from test_fixtures import MONDAY, add_recipe, db_session, get_moment
from repositories import MealPlanRepository, MomentRepository, RecipeRepository, TagRepository
from domain.models import ScheduledMeal
from services.plan_generator import PlanMoment, PlannedMeal, PlanRecipe


def _schedule(db: Session, user_id, day, moment_name, recipe) -> ScheduledMeal:
    row = ScheduledMeal(
        user_id=user_id,
        day=day,
        moment_id=get_moment(db, moment_name).moment_id,
        recipe_id=recipe.recipe_id,
    )
    db.add(row)
    db.commit()
    return row


# =============================================================================
# RECIPE REPOSITORY
# =============================================================================


def test_sample_candidates_maps_tags_and_ratings(db_session: Session):
    add_recipe(db_session, "Chickpea Curry", tags=["Vegetarian", "Gluten-Free"], cook_minutes=35, ratings=[4, 5])

    candidates = RecipeRepository(db_session).sample_candidates(uuid.uuid4())

    assert len(candidates) == 1
    curry = candidates[0]
    assert isinstance(curry, PlanRecipe)
    assert curry.name == "Chickpea Curry"
    assert curry.cook_minutes == 35
    assert curry.tag_names == {"Vegetarian", "Gluten-Free"}
    assert curry.average_rating == pytest.approx(4.5)


def test_unrated_recipe_has_no_average(db_session: Session):
    add_recipe(db_session, "Plain Rice")
    [rice] = RecipeRepository(db_session).sample_candidates(uuid.uuid4())
    assert rice.average_rating is None


def test_sample_candidates_visibility(db_session: Session):
    me, someone_else = uuid.uuid4(), uuid.uuid4()
    add_recipe(db_session, "Official", is_official=True)
    add_recipe(db_session, "Public", is_official=False, is_public=True)
    add_recipe(db_session, "Mine", is_official=False, owner_id=me)
    add_recipe(db_session, "Theirs", is_official=False, owner_id=someone_else)

    names = {r.name for r in RecipeRepository(db_session).sample_candidates(me)}

    assert names == {"Official", "Public", "Mine"}


def test_sample_candidates_respects_limit(db_session: Session):
    for i in range(8):
        add_recipe(db_session, f"Recipe {i}")

    assert len(RecipeRepository(db_session).sample_candidates(uuid.uuid4(), limit=5)) == 5


def test_get_candidate_missing_returns_none(db_session: Session):
    assert RecipeRepository(db_session).get_candidate(uuid.uuid4(), uuid.uuid4()) is None


def test_get_candidate_hides_other_users_private_recipe(db_session: Session):
    owner, other = uuid.uuid4(), uuid.uuid4()
    private = add_recipe(db_session, "Family Secret", tags=["Dinner"], is_official=False, owner_id=owner)
    repo = RecipeRepository(db_session)

    assert repo.get_candidate(private.recipe_id, other) is None
    assert repo.get_visible(private.recipe_id, other) is None
    mine = repo.get_candidate(private.recipe_id, owner)
    assert mine.name == "Family Secret"
    assert mine.tag_names == {"Dinner"}


def test_tag_repository_lists_seeded_tags(db_session: Session):
    names = [t.name for t in TagRepository(db_session).list_all()]
    assert {"Vegetarian", "Gluten-Free", "Breakfast", "Lunch", "Dinner"} <= set(names)
    assert names == sorted(names)


# =============================================================================
# MOMENT REPOSITORY
# =============================================================================


def test_moments_listed_in_day_order(db_session: Session):
    names = [m.name for m in MomentRepository(db_session).list_ordered()]
    assert names == ["Breakfast", "Lunch", "Dinner"]


def test_moment_lookup_by_name(db_session: Session):
    repo = MomentRepository(db_session)
    assert repo.get_by_name(" lunch ").name == "Lunch"
    assert repo.get_by_name("Brunch") is None


# =============================================================================
# MEAL PLAN REPOSITORY
# =============================================================================


def test_recent_recipe_ids_window(db_session: Session):
    user = uuid.uuid4()
    inside = add_recipe(db_session, "Inside")
    too_old = add_recipe(db_session, "Too Old")
    same_week = add_recipe(db_session, "Same Week")
    other_user = add_recipe(db_session, "Other User")

    _schedule(db_session, user, MONDAY - timedelta(days=1), "Dinner", inside)
    _schedule(db_session, user, MONDAY - timedelta(days=15), "Dinner", too_old)
    _schedule(db_session, user, MONDAY, "Dinner", same_week)
    _schedule(db_session, uuid.uuid4(), MONDAY - timedelta(days=2), "Lunch", other_user)

    recent = MealPlanRepository(db_session).recent_recipe_ids(user, before=MONDAY, lookback_days=14)

    assert recent == {inside.recipe_id}


def test_recent_recipe_ids_zero_lookback(db_session: Session):
    user = uuid.uuid4()
    _schedule(db_session, user, MONDAY - timedelta(days=1), "Dinner", add_recipe(db_session, "Soup"))
    assert MealPlanRepository(db_session).recent_recipe_ids(user, MONDAY, 0) == set()


def test_delete_range_only_touches_user_and_range(db_session: Session):
    user, other = uuid.uuid4(), uuid.uuid4()
    recipe = add_recipe(db_session, "Soup")
    _schedule(db_session, user, MONDAY, "Lunch", recipe)
    _schedule(db_session, user, MONDAY + timedelta(days=6), "Dinner", recipe)
    _schedule(db_session, user, MONDAY + timedelta(days=7), "Dinner", recipe)
    _schedule(db_session, other, MONDAY, "Lunch", recipe)

    repo = MealPlanRepository(db_session)
    removed = repo.delete_range(user, MONDAY, MONDAY + timedelta(days=6))
    repo.commit()

    assert removed == 2
    assert db_session.query(ScheduledMeal).count() == 2


def test_add_meals_and_list_range_order(db_session: Session):
    user = uuid.uuid4()
    soup = add_recipe(db_session, "Soup")
    oats = add_recipe(db_session, "Oats")
    repo = MealPlanRepository(db_session)
    dinner = get_moment(db_session, "Dinner")
    breakfast = get_moment(db_session, "Breakfast")

    repo.add_meals(
        user,
        [
            PlannedMeal(MONDAY, PlanMoment(dinner.moment_id, "Dinner"), PlanRecipe(soup.recipe_id, "Soup")),
            PlannedMeal(MONDAY, PlanMoment(breakfast.moment_id, "Breakfast"), PlanRecipe(oats.recipe_id, "Oats")),
        ],
    )
    repo.commit()

    rows = repo.list_range(user, MONDAY, MONDAY + timedelta(days=6))

    assert [(r.moment.name, r.recipe.name) for r in rows] == [("Breakfast", "Oats"), ("Dinner", "Soup")]


def test_get_for_user_checks_owner(db_session: Session):
    user = uuid.uuid4()
    row = _schedule(db_session, user, MONDAY, "Lunch", add_recipe(db_session, "Soup"))
    repo = MealPlanRepository(db_session)

    assert repo.get_for_user(row.scheduled_meal_id, user) is not None
    assert repo.get_for_user(row.scheduled_meal_id, uuid.uuid4()) is None
