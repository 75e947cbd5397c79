from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from api.dependencies import get_planner_service
from domain.mappers.plan_mapper import PlanMapper
from domain.schemas.plan_schemas import (
    AddMealRequest,
    FillSlotsRequest,
    FillSlotsResponse,
    GeneratePlanRequest,
    PlanResponse,
    ReplaceMealRequest,
    SavePlanRequest,
    ScheduledMealResponse,
)
from services.plan_generator import PlanPreferences, SlotRequest
from services.planner_service import PlannerService, PlanRequest, WeekPlan

router = APIRouter(prefix="/plans", tags=["Meal Planning"])
logger = logging.getLogger("familymeal.api.plans")


def _current_monday() -> date:
    today = date.today()
    return today - timedelta(days=today.weekday())


def _plan_request(body: GeneratePlanRequest) -> PlanRequest:
    prefs = body.preferences
    return PlanRequest(
        user_id=body.user_id,
        week_start=body.week_start or _current_monday(),
        preferences=PlanPreferences(
            vegetarian_only=prefs.vegetarian_only,
            gluten_free=prefs.gluten_free,
            max_cook_minutes=prefs.max_cook_minutes,
        ),
        moment_names=body.moments,
    )


def _plan_response(plan: WeekPlan) -> PlanResponse:
    if plan.filled_slots == 0:
        message = "No meals could be planned for this week."
    elif plan.partial:
        message = "Some meals could not be planned."
    else:
        message = "Weekly plan successfully generated."
    return PlanResponse(
        week_start=plan.week_start,
        week_end=plan.week_end,
        meals=[PlanMapper.to_meal_response(m) for m in plan.meals],
        requested_slots=plan.requested_slots,
        filled_slots=plan.filled_slots,
        partial=plan.partial,
        saved=plan.saved,
        message=message,
    )


@router.post("/preview", response_model=PlanResponse)
def preview_week_plan(body: GeneratePlanRequest, service: PlannerService = Depends(get_planner_service)):
    """
    Generate a weekly meal plan without saving it.

    Recipes are filtered by the user's dietary preferences and recent use,
    kept unique across the week and spread across tag categories within
    each day. Slots that cannot be filled are left out and the response is
    flagged as partial.
    """
    req = _plan_request(body)
    logger.info("Previewing plan for user %s: week_start=%s", req.user_id, req.week_start)
    plan = service.preview_week(req)
    return _plan_response(plan)


@router.post("", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
def generate_week_plan(body: GeneratePlanRequest, service: PlannerService = Depends(get_planner_service)):
    """
    Generate a weekly meal plan and save it, replacing the user's meals
    for the same seven days.
    """
    req = _plan_request(body)
    logger.info("Generating plan for user %s: week_start=%s", req.user_id, req.week_start)
    plan = service.generate_week(req)
    return _plan_response(plan)


@router.put("/week", response_model=List[ScheduledMealResponse])
def save_week_plan(body: SavePlanRequest, service: PlannerService = Depends(get_planner_service)):
    """Save a previewed plan, replacing the user's meals for that week."""
    meals = service.resolve_meals(body.user_id, [(m.date, m.moment_id, m.recipe_id) for m in body.meals])
    service.save_week(body.user_id, body.week_start, meals)
    rows = service.get_week(body.user_id, body.week_start)
    return [PlanMapper.to_scheduled_response(r) for r in rows]


@router.post("/slots", response_model=FillSlotsResponse, status_code=status.HTTP_201_CREATED)
def fill_plan_slots(body: FillSlotsRequest, service: PlannerService = Depends(get_planner_service)):
    """
    Fill just the requested (date, moment) slots with random recipes.
    Unknown moment names are skipped.
    """
    slots = [SlotRequest(date=s.date, moment_name=s.moment) for s in body.slots]
    replace_range = (body.replace_from, body.replace_to) if body.replace_from else None
    logger.info("Filling %d slots for user %s", len(slots), body.user_id)

    meals = service.fill_slots(body.user_id, slots, replace_range=replace_range)
    return FillSlotsResponse(
        meals=[PlanMapper.to_meal_response(m) for m in meals],
        requested_slots=len(slots),
        filled_slots=len(meals),
    )


@router.get("/week", response_model=List[ScheduledMealResponse])
def get_week_meals(
    user_id: UUID = Query(..., description="User ID to fetch meals for"),
    start: date = Query(..., description="First day of the range"),
    end: Optional[date] = Query(None, description="Last day of the range, defaults to start + 6 days"),
    service: PlannerService = Depends(get_planner_service),
):
    """Stored meals of a user in a date range, ordered by day and moment."""
    rows = service.get_week(user_id, start, end)
    logger.info("Found %d meals for user %s from %s", len(rows), user_id, start)
    return [PlanMapper.to_scheduled_response(r) for r in rows]


@router.put("/meals/{scheduled_meal_id}", response_model=ScheduledMealResponse)
def replace_meal_recipe(scheduled_meal_id: UUID, body: ReplaceMealRequest, service: PlannerService = Depends(get_planner_service)):
    """Swap the recipe of one stored meal."""
    row = service.replace_meal(body.user_id, scheduled_meal_id, body.recipe_id)
    return PlanMapper.to_scheduled_response(row)


@router.post("/meals", response_model=ScheduledMealResponse, status_code=status.HTTP_201_CREATED)
def add_planned_meal(body: AddMealRequest, service: PlannerService = Depends(get_planner_service)):
    """Schedule one recipe for a given day and moment."""
    row = service.add_meal(body.user_id, body.date, body.moment_id, body.recipe_id)
    return PlanMapper.to_scheduled_response(row)
