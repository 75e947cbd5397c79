"""
Recipe catalog models: recipes, tags and ratings.
"""

from sqlalchemy import (
    Column,
    Text,
    TIMESTAMP,
    ForeignKey,
    Integer,
    Numeric,
    Boolean,
    String,
    Table,
    UUID,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


recipe_tag = Table(
    "recipe_tag",
    Base.metadata,
    Column(
        "recipe_id",
        UUID(as_uuid=True),
        ForeignKey("recipe.recipe_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        UUID(as_uuid=True),
        ForeignKey("tag.tag_id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Recipe(Base):
    """Recipes available for planning"""

    __tablename__ = "recipe"

    recipe_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), nullable=True, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    image_url = Column(Text)
    cook_minutes = Column(Integer)
    base_servings = Column(Integer, default=4)
    is_official = Column(Boolean, default=False)
    is_public = Column(Boolean, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    tags = relationship("Tag", secondary=recipe_tag, back_populates="recipes")
    ratings = relationship(
        "RecipeRating", back_populates="recipe", cascade="all, delete-orphan"
    )


class Tag(Base):
    """Recipe tags (dietary markers and meal moments)"""

    __tablename__ = "tag"

    tag_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    color = Column(String(32))
    icon = Column(String(64))

    recipes = relationship("Recipe", secondary=recipe_tag, back_populates="tags")


class RecipeRating(Base):
    """Per-user recipe score, 1 to 5"""

    __tablename__ = "recipe_rating"
    __table_args__ = (UniqueConstraint("user_id", "recipe_id", name="uq_rating_user_recipe"),)

    rating_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), nullable=False)
    recipe_id = Column(
        UUID(as_uuid=True),
        ForeignKey("recipe.recipe_id", ondelete="CASCADE"),
        nullable=False,
    )
    score = Column(Numeric(3, 2), default=3)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    recipe = relationship("Recipe", back_populates="ratings")
