"""
App package - settings and the service error taxonomy.
"""

from app.config import settings
from app.exceptions import (
    FamilyMealError,
    ServiceValidationError,
    UnknownMomentError,
    NoRecipesAvailableError,
    NotFoundError,
)

__all__ = [
    "settings",
    "FamilyMealError",
    "ServiceValidationError",
    "UnknownMomentError",
    "NoRecipesAvailableError",
    "NotFoundError",
]
