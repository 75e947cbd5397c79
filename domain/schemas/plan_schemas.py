import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class PreferencesIn(BaseModel):
    vegetarian_only: bool = False
    gluten_free: bool = False
    max_cook_minutes: Optional[int] = Field(default=None, ge=0)


class GeneratePlanRequest(BaseModel):
    user_id: UUID
    week_start: Optional[dt.date] = None
    preferences: PreferencesIn = Field(default_factory=PreferencesIn)
    moments: Optional[List[str]] = Field(
        default=None, description="Restrict planning to these moment names"
    )


class SlotIn(BaseModel):
    date: dt.date
    moment: str = Field(..., min_length=1)


class FillSlotsRequest(BaseModel):
    user_id: UUID
    slots: List[SlotIn] = Field(default_factory=list)
    replace_from: Optional[dt.date] = None
    replace_to: Optional[dt.date] = None

    @model_validator(mode="after")
    def check_replace_range(self):
        if (self.replace_from is None) != (self.replace_to is None):
            raise ValueError("replace_from and replace_to must be given together")
        if self.replace_from and self.replace_to and self.replace_from > self.replace_to:
            raise ValueError("replace_from must not be after replace_to")
        return self


class MealIn(BaseModel):
    date: dt.date
    moment_id: UUID
    recipe_id: UUID


class SavePlanRequest(BaseModel):
    user_id: UUID
    week_start: dt.date
    meals: List[MealIn] = Field(default_factory=list)


class AddMealRequest(MealIn):
    user_id: UUID


class ReplaceMealRequest(BaseModel):
    user_id: UUID
    recipe_id: UUID


class PlannedMealResponse(BaseModel):
    date: dt.date
    moment_id: Optional[UUID] = None
    moment: str
    recipe_id: UUID
    recipe_name: str
    cook_minutes: Optional[int] = None
    tags: List[str] = Field(default_factory=list)


class PlanResponse(BaseModel):
    week_start: dt.date
    week_end: dt.date
    meals: List[PlannedMealResponse]
    requested_slots: int
    filled_slots: int
    partial: bool
    saved: bool = False
    message: Optional[str] = None


class FillSlotsResponse(BaseModel):
    meals: List[PlannedMealResponse]
    requested_slots: int
    filled_slots: int


class ScheduledMealResponse(BaseModel):
    scheduled_meal_id: UUID
    user_id: UUID
    date: dt.date
    moment_id: UUID
    moment: Optional[str] = None
    recipe_id: Optional[UUID] = None
    recipe_name: Optional[str] = None
    recipe_description: Optional[str] = None
    recipe_image_url: Optional[str] = None
    cook_minutes: Optional[int] = None


class MomentResponse(BaseModel):
    moment_id: UUID
    name: str
    sort_order: int

    model_config = {"from_attributes": True}


class TagResponse(BaseModel):
    tag_id: UUID
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None

    model_config = {"from_attributes": True}
