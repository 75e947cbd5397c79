"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.plan_schemas import (
    PreferencesIn,
    GeneratePlanRequest,
    SlotIn,
    FillSlotsRequest,
    MealIn,
    SavePlanRequest,
    AddMealRequest,
    ReplaceMealRequest,
    PlannedMealResponse,
    PlanResponse,
    FillSlotsResponse,
    ScheduledMealResponse,
    MomentResponse,
    TagResponse,
)

__all__ = [
    # Requests
    "PreferencesIn",
    "GeneratePlanRequest",
    "SlotIn",
    "FillSlotsRequest",
    "MealIn",
    "SavePlanRequest",
    "AddMealRequest",
    "ReplaceMealRequest",
    # Responses
    "PlannedMealResponse",
    "PlanResponse",
    "FillSlotsResponse",
    "ScheduledMealResponse",
    "MomentResponse",
    "TagResponse",
]
