"""LedgerState: the explicit state object holding every collection plus settings.

Engine operations take a state (or the collections they need) and hand back
new collections; ``replace`` builds the next state without touching the old one.
"""
import copy
import logging
from typing import Dict, List, Optional

from kitchen.domain.PantryItem import PantryItem
from kitchen.domain.Plan import PlanKey, PlannedMeal, plan_from_dict, plan_to_dict
from kitchen.domain.Receipt import Receipt
from kitchen.domain.Recipe import Recipe
from kitchen.domain.Settings import Settings
from kitchen.domain.ShoppingList import ShoppingListItem
from kitchen.logic.matching.names import normalize_name

logger = logging.getLogger(__name__)


def _clean_pantry(items: List[PantryItem]) -> List[PantryItem]:
    """Drop empty entries and fold same-name entries into the first one, keeping the newest purchase."""
    kept: List[PantryItem] = []
    by_name: Dict[str, PantryItem] = {}
    for item in items:
        if item.quantity <= 0:
            logger.warning("Dropping pantry entry %r with quantity %r", item.name, item.quantity)
            continue
        key = normalize_name(item.name)
        first = by_name.get(key) if key else None
        if first is None:
            if key:
                by_name[key] = item
            kept.append(item)
            continue
        logger.warning("Merging duplicate pantry entry %r into %s", item.name, first.id)
        first.quantity += item.quantity
        if item.last_purchase_date and (first.last_purchase_date is None
                                        or item.last_purchase_date >= first.last_purchase_date):
            first.last_purchase_date = item.last_purchase_date
            first.last_purchase_price = item.last_purchase_price
    return kept


class LedgerState:
    def __init__(self, recipes: Optional[List[Recipe]] = None, pantry: Optional[List[PantryItem]] = None,
                 shopping_list: Optional[List[ShoppingListItem]] = None, receipts: Optional[List[Receipt]] = None,
                 weekly_plan: Optional[Dict[PlanKey, PlannedMeal]] = None, meal_history: Optional[list] = None,
                 settings: Optional[Settings] = None):
        self.recipes = recipes[:] if recipes else []
        self.pantry = pantry[:] if pantry else []
        self.shopping_list = shopping_list[:] if shopping_list else []
        self.receipts = receipts[:] if receipts else []
        self.weekly_plan = dict(weekly_plan) if weekly_plan else {}
        self.meal_history = meal_history[:] if meal_history else []
        self.settings = settings or Settings()

    def replace(self, **changes) -> "LedgerState":
        """Return a deep copy of this state with the given collections swapped in."""
        fields = {
            "recipes": self.recipes,
            "pantry": self.pantry,
            "shopping_list": self.shopping_list,
            "receipts": self.receipts,
            "weekly_plan": self.weekly_plan,
            "meal_history": self.meal_history,
            "settings": self.settings,
        }
        unknown = set(changes) - set(fields)
        if unknown:
            raise TypeError(f"Unknown state fields: {sorted(unknown)}")
        fields.update(changes)
        return LedgerState(**copy.deepcopy(fields))

    def find_recipe(self, recipe_id) -> Optional[Recipe]:
        return next((r for r in self.recipes if r.id == recipe_id), None)

    def __repr__(self) -> str:
        return (f"LedgerState(recipes={len(self.recipes)}, pantry={len(self.pantry)}, "
                f"shopping_list={len(self.shopping_list)}, receipts={len(self.receipts)}, "
                f"planned_meals={len(self.weekly_plan)})")

    @staticmethod
    def from_dict(data):
        d = data if isinstance(data, dict) else {}
        return LedgerState(
            recipes=[Recipe.from_dict(r) for r in d.get("recipes") or []],
            pantry=_clean_pantry([PantryItem.from_dict(p) for p in d.get("pantry") or []]),
            shopping_list=[ShoppingListItem.from_dict(i) for i in d.get("shoppingList") or []],
            receipts=[Receipt.from_dict(r) for r in d.get("receipts") or []],
            weekly_plan=plan_from_dict(d.get("weeklyPlan")),
            meal_history=list(d.get("mealHistory") or []),
            settings=Settings.from_dict(d.get("settings")),
        )

    def to_dict(self):
        return {
            "recipes": [r.to_dict() for r in self.recipes],
            "weeklyPlan": plan_to_dict(self.weekly_plan),
            "pantry": [p.to_dict() for p in self.pantry],
            "shoppingList": [i.to_dict() for i in self.shopping_list],
            "receipts": [r.to_dict() for r in self.receipts],
            "mealHistory": list(self.meal_history),
            "settings": self.settings.to_dict(),
        }
