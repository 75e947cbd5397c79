"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.recipe import Recipe, Tag, RecipeRating, recipe_tag
from domain.models.meal_plan import Moment, ScheduledMeal

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Recipe catalog
    "Recipe",
    "Tag",
    "RecipeRating",
    "recipe_tag",
    # Meal planning
    "Moment",
    "ScheduledMeal",
]
