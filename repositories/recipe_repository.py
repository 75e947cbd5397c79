"""
Recipe Repository - Data access layer for the recipe catalog
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import Recipe, RecipeRating, Tag
from domain.mappers.plan_mapper import PlanMapper
from services.plan_generator import PlanRecipe

logger = logging.getLogger("familymeal.repositories.recipe")


class RecipeRepository(BaseRepository[Recipe]):
    """
    Repository for recipe reads.
    Supplies planning candidates with their tags and average rating.
    """

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def average_ratings(self, recipe_ids: List[UUID]) -> Dict[UUID, float]:
        """Mean score per recipe across all users; unrated recipes are absent"""
        if not recipe_ids:
            return {}
        rows = (
            self.db.query(RecipeRating.recipe_id, func.avg(RecipeRating.score))
            .filter(RecipeRating.recipe_id.in_(recipe_ids))
            .group_by(RecipeRating.recipe_id)
            .all()
        )
        return {rid: float(avg) for rid, avg in rows if avg is not None}

    @staticmethod
    def _visible_to(user_id: UUID):
        """Official and public recipes are visible to everyone, private ones only to their owner"""
        return or_(
            Recipe.is_official.is_(True),
            Recipe.is_public.is_(True),
            Recipe.owner_id == user_id,
        )

    def sample_candidates(self, user_id: UUID, limit: int = 50) -> List[PlanRecipe]:
        """
        Random sample of recipes the user may plan with.
        Order of the result carries no meaning.

        Args:
            user_id: Requesting user
            limit: Maximum number of candidates

        Returns:
            List of PlanRecipe value objects
        """
        recipes = (
            self.db.query(Recipe)
            .options(selectinload(Recipe.tags))
            .filter(self._visible_to(user_id))
            .order_by(func.random())
            .limit(limit)
            .all()
        )
        ratings = self.average_ratings([r.recipe_id for r in recipes])
        logger.debug("Sampled %d candidate recipes for user %s", len(recipes), user_id)
        return [PlanMapper.to_plan_recipe(r, ratings.get(r.recipe_id)) for r in recipes]

    def get_visible(self, recipe_id: UUID, user_id: UUID) -> Optional[Recipe]:
        """Recipe by id if the user may plan with it, else None"""
        return (
            self.db.query(Recipe)
            .filter(Recipe.recipe_id == recipe_id, self._visible_to(user_id))
            .first()
        )

    def get_candidate(self, recipe_id: UUID, user_id: UUID) -> Optional[PlanRecipe]:
        """Single visible recipe as a planner value object, or None"""
        recipe = self.get_visible(recipe_id, user_id)
        if recipe is None:
            return None
        ratings = self.average_ratings([recipe.recipe_id])
        return PlanMapper.to_plan_recipe(recipe, ratings.get(recipe.recipe_id))


class TagRepository(BaseRepository[Tag]):
    """Repository for tag data access"""

    def __init__(self, db: Session):
        super().__init__(db, Tag)

    def list_all(self) -> List[Tag]:
        """All tags ordered by name"""
        return self.db.query(Tag).order_by(Tag.name).all()
