"""
Tests for ad hoc slot filling (uniform random pick per requested slot).
"""

import logging
import random
from datetime import timedelta

from test_fixtures import MONDAY, make_moments, make_recipe
from services.plan_generator import SlotRequest, fill_requested_slots


def test_fills_each_requested_slot():
    moments = make_moments("Lunch", "Dinner")
    candidates = [make_recipe(f"Recipe {i}") for i in range(5)]
    slots = [
        SlotRequest(MONDAY, "Lunch"),
        SlotRequest(MONDAY, "Dinner"),
        SlotRequest(MONDAY + timedelta(days=3), "Dinner"),
    ]

    meals = fill_requested_slots(candidates, slots, moments, rng=random.Random(3))

    assert [(m.date, m.moment.name) for m in meals] == [(s.date, s.moment_name) for s in slots]
    assert all(m.recipe in candidates for m in meals)


def test_moment_lookup_is_case_insensitive():
    moments = make_moments("Lunch", "Dinner")
    meals = fill_requested_slots(
        [make_recipe()], [SlotRequest(MONDAY, " dinner ")], moments, rng=random.Random(0)
    )
    assert meals[0].moment is moments[1]


def test_unknown_moment_is_skipped_with_warning(caplog):
    moments = make_moments("Lunch", "Dinner")
    slots = [SlotRequest(MONDAY, "Brunch"), SlotRequest(MONDAY, "Lunch")]

    with caplog.at_level(logging.WARNING, logger="familymeal.plan_generator"):
        meals = fill_requested_slots([make_recipe()], slots, moments, rng=random.Random(0))

    assert [m.moment.name for m in meals] == ["Lunch"]
    assert "Brunch" in caplog.text


def test_recipes_may_repeat_and_ignore_exclusions():
    # Day/week exclusions and moment suitability do not apply here
    stew = make_recipe("Stew", tags=["Dinner"], cook_minutes=120)
    slots = [SlotRequest(MONDAY + timedelta(days=d), "Breakfast") for d in range(4)]

    meals = fill_requested_slots([stew], slots, make_moments("Breakfast"), rng=random.Random(0))

    assert len(meals) == 4
    assert {m.recipe_id for m in meals} == {stew.id}


def test_empty_candidates_gives_no_meals():
    assert fill_requested_slots([], [SlotRequest(MONDAY, "Lunch")], make_moments()) == []


def test_pick_is_uniform_over_whole_pool():
    candidates = [make_recipe(f"Recipe {i}", rating=5 if i == 0 else 1) for i in range(4)]
    slots = [SlotRequest(MONDAY, "Lunch")] * 400

    meals = fill_requested_slots(candidates, slots, make_moments("Lunch"), rng=random.Random(11))

    assert {m.recipe_id for m in meals} == {r.id for r in candidates}
