"""
Meal planning models.
"""

from sqlalchemy import Column, Text, ForeignKey, Date, Integer, UUID
from sqlalchemy.orm import relationship
import uuid

from domain.models.database import Base


class Moment(Base):
    """Meal slots of a day (Breakfast, Lunch, Dinner)"""

    __tablename__ = "moment"

    moment_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    sort_order = Column(Integer, nullable=False, default=0)


class ScheduledMeal(Base):
    """One recipe assigned to a (day, moment) slot of a user's calendar"""

    __tablename__ = "scheduled_meal"

    scheduled_meal_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    day = Column(Date, nullable=False, index=True)
    moment_id = Column(
        UUID(as_uuid=True), ForeignKey("moment.moment_id"), nullable=False
    )
    recipe_id = Column(
        UUID(as_uuid=True), ForeignKey("recipe.recipe_id", ondelete="SET NULL")
    )

    moment = relationship("Moment")
    recipe = relationship("Recipe")
