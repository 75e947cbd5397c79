"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.recipe_repository import RecipeRepository, TagRepository
from repositories.moment_repository import MomentRepository
from repositories.meal_plan_repository import MealPlanRepository

__all__ = [
    "BaseRepository",
    "RecipeRepository",
    "TagRepository",
    "MomentRepository",
    "MealPlanRepository",
]
