"""Weekly plan entities: structured slot keys and the recipe snapshot stored in each slot.

A weekly plan is a plain ``dict[PlanKey, PlannedMeal]``. Keys are only turned
into ``"YYYY-MM-DD|Day|MealType"`` strings when the plan is persisted.
"""
import logging
from typing import Any, Dict, NamedTuple, Optional

from kitchen.utilities.constants import PLAN_KEY_SEPARATOR
from kitchen.utilities.validators import to_number

logger = logging.getLogger(__name__)


class PlanKey(NamedTuple):
    week_start: str
    day: str
    meal_type: str

    @classmethod
    def build(cls, week_start: str, day: str, meal_type: str) -> "PlanKey":
        for part in (week_start, day, meal_type):
            if not isinstance(part, str) or not part:
                raise ValueError(f"Plan key components must be non-empty strings: {part!r}")
            if PLAN_KEY_SEPARATOR in part:
                raise ValueError(f"Plan key component may not contain {PLAN_KEY_SEPARATOR!r}: {part!r}")
        return cls(week_start, day, meal_type)

    def encode(self) -> str:
        return PLAN_KEY_SEPARATOR.join(self)

    @classmethod
    def decode(cls, raw: str) -> Optional["PlanKey"]:
        parts = raw.split(PLAN_KEY_SEPARATOR) if isinstance(raw, str) else []
        if len(parts) != 3 or not all(parts):
            return None
        return cls(*parts)


class PlannedMeal:
    """Snapshot of a recipe taken when it was planned; later recipe edits do not reach it."""

    def __init__(self, recipe_id: Any = None, recipe_name: str = "", total_cost: float = 0, servings: int = 1):
        self.recipe_id = str(recipe_id) if recipe_id is not None else None
        self.recipe_name = recipe_name
        self.total_cost = total_cost
        self.servings = servings

    @classmethod
    def snapshot(cls, recipe) -> "PlannedMeal":
        return cls(recipe.id, recipe.name, recipe.total_cost, recipe.servings)

    def __str__(self) -> str:
        return f"{self.recipe_name} ({self.servings} servings, ${self.total_cost:.2f})"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, PlannedMeal):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return PlannedMeal(
            recipe_id=d.get("recipeId"),
            recipe_name=d.get("recipeName") or "",
            total_cost=to_number(d.get("totalCost")),
            servings=int(to_number(d.get("servings"), 1)) or 1,
        )

    def to_dict(self):
        return {
            "recipeId": self.recipe_id,
            "recipeName": self.recipe_name,
            "totalCost": self.total_cost,
            "servings": self.servings,
        }


def plan_from_dict(data) -> Dict[PlanKey, PlannedMeal]:
    plan: Dict[PlanKey, PlannedMeal] = {}
    for raw_key, entry in (data or {}).items():
        key = PlanKey.decode(raw_key)
        if key is None:
            logger.warning("Skipping unreadable plan key %r", raw_key)
            continue
        plan[key] = PlannedMeal.from_dict(entry)
    return plan


def plan_to_dict(plan: Dict[PlanKey, PlannedMeal]) -> Dict[str, dict]:
    return {key.encode(): meal.to_dict() for key, meal in plan.items()}
