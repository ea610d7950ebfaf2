from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
PLAN_KEY_SEPARATOR: Final[str] = "|"

DAYS: Final[list[str]] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MEAL_TYPES: Final[list[str]] = ["Breakfast", "Lunch", "Lunch (Kids)", "Dinner", "Snack"]

UNASSIGNED_STORE: Final[str] = "Unassigned"
UNKNOWN_STORE: Final[str] = "Unknown"
DEFAULT_CATEGORY: Final[str] = "Other"

PANTRY_CATEGORIES: Final[list[str]] = [
    "Produce", "Dairy", "Meat", "Pantry", "Frozen", "Bakery", "Beverages", "Spices", "Other"
]
UNITS: Final[list[str]] = [
    "", "lbs", "oz", "kg", "g", "cups", "tbsp", "tsp", "bunch", "heads", "dozen",
    "boxes", "bags", "cans", "cloves", "slices", "pieces", "whole"
]
RECIPE_TAGS: Final[list[str]] = [
    "Breakfast", "Lunch", "Dinner", "Snack", "Dessert", "Quick", "Meal Prep", "Budget", "Healthy"
]

DEFAULT_STORES: Final[list[str]] = ["Lowe's Foods", "Harris Teeter", "Food Lion", "Whole Foods"]
DEFAULT_FAMILY_MEMBERS: Final[list[str]] = ["Adults", "Kids"]

BUDGET_EXCEEDED_PERCENT: Final[float] = 100.0
HISTORY_WEEKS: Final[int] = 8
RANKING_SIZE: Final[int] = 5
