"""
Plan domain mappers.
Handles transformation between catalog ORM models, planner value objects and DTOs.
"""

from typing import Optional

from domain.models import Moment, Recipe, ScheduledMeal
from domain.schemas.plan_schemas import PlannedMealResponse, ScheduledMealResponse
from services.plan_generator import PlanMoment, PlannedMeal, PlanRecipe, PlanTag


class PlanMapper:
    """Mapper for planning-related transformations."""

    @staticmethod
    def to_plan_recipe(recipe: Recipe, average_rating: Optional[float] = None) -> PlanRecipe:
        """
        Convert a Recipe ORM instance (tags loaded) to the planner's value object.

        Args:
            recipe: Recipe ORM instance
            average_rating: mean rating across users, None when unrated

        Returns:
            Immutable PlanRecipe
        """
        return PlanRecipe(
            id=recipe.recipe_id,
            name=recipe.name,
            cook_minutes=recipe.cook_minutes,
            base_servings=recipe.base_servings,
            tags=tuple(PlanTag(id=t.tag_id, name=t.name) for t in recipe.tags),
            average_rating=float(average_rating) if average_rating is not None else None,
        )

    @staticmethod
    def to_plan_moment(moment: Moment) -> PlanMoment:
        return PlanMoment(id=moment.moment_id, name=moment.name)

    @staticmethod
    def to_meal_response(meal: PlannedMeal) -> PlannedMealResponse:
        recipe = meal.recipe
        return PlannedMealResponse(
            date=meal.date,
            moment_id=meal.moment.id,
            moment=meal.moment.name,
            recipe_id=recipe.id,
            recipe_name=recipe.name,
            cook_minutes=recipe.cook_minutes,
            tags=sorted(recipe.tag_names),
        )

    @staticmethod
    def to_scheduled_response(row: ScheduledMeal) -> ScheduledMealResponse:
        recipe = row.recipe
        return ScheduledMealResponse(
            scheduled_meal_id=row.scheduled_meal_id,
            user_id=row.user_id,
            date=row.day,
            moment_id=row.moment_id,
            moment=row.moment.name if row.moment else None,
            recipe_id=row.recipe_id,
            recipe_name=recipe.name if recipe else None,
            recipe_description=recipe.description if recipe else None,
            recipe_image_url=recipe.image_url if recipe else None,
            cook_minutes=recipe.cook_minutes if recipe else None,
        )
