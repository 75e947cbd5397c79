"""
Domain enums for FamilyMeal application.
Tag and moment names carry meaning for the plan generator.
"""

import enum


class StandardTag(str, enum.Enum):
    """Tag names the planner interprets"""

    VEGETARIAN = "Vegetarian"
    GLUTEN_FREE = "Gluten-Free"
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"


class MomentName(str, enum.Enum):
    """Meal moments of a day"""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
