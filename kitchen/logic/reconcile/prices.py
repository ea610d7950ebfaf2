"""Receipt price reconciliation.

Moves the prices observed on a receipt into every recipe ingredient and pantry
item with a matching name, and reports what changed.

Recipes and pantry deliberately behave differently: an ingredient is only
touched (and logged) when its price actually differs, while a matching pantry
item always gets the new price and purchase date, so re-applying a receipt
yields no recipe changes but still refreshes the pantry.
"""
from __future__ import annotations
import copy
import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from kitchen.logic.costs.engine import with_recomputed_total
from kitchen.logic.matching.names import matches, normalize_name
from kitchen.utilities.validators import to_number

logger = logging.getLogger(__name__)

__all__ = ["RECIPE_CHANGE", "PANTRY_CHANGE", "PriceChange", "ReconciliationResult",
           "reconcile_receipt", "refresh_pantry_prices"]

RECIPE_CHANGE = "recipe"
PANTRY_CHANGE = "pantry"


@dataclass
class PriceChange:
    kind: str
    target_name: str
    old_price: float
    new_price: float
    ingredient_name: Optional[str] = None

    def to_dict(self):
        return asdict(self)


@dataclass
class ReconciliationResult:
    recipes: list
    pantry: list
    changes: List[PriceChange] = field(default_factory=list)

    @property
    def recipe_changes(self) -> List[PriceChange]:
        return [c for c in self.changes if c.kind == RECIPE_CHANGE]

    @property
    def pantry_changes(self) -> List[PriceChange]:
        return [c for c in self.changes if c.kind == PANTRY_CHANGE]


def _readable_items(receipt):
    for item in receipt.items:
        if normalize_name(item.name):
            yield item


def _apply_to_pantry(pantry, item, purchase_date, changes: List[PriceChange]):
    new_price = to_number(item.price)
    for p in pantry:
        if matches(p.name, item.name):
            changes.append(PriceChange(PANTRY_CHANGE, p.name, to_number(p.last_purchase_price), new_price))
            p.last_purchase_price = new_price
            p.last_purchase_date = purchase_date


def refresh_pantry_prices(pantry, receipt):
    """Pantry half of reconciliation: returns (new pantry, pantry changes). Quantities are untouched."""
    updated = copy.deepcopy(pantry)
    changes: List[PriceChange] = []
    for item in _readable_items(receipt):
        _apply_to_pantry(updated, item, receipt.date, changes)
    return updated, changes


def reconcile_receipt(receipt, recipes, pantry) -> ReconciliationResult:
    """Apply ``receipt`` prices to copies of ``recipes`` and ``pantry``.

    The inputs are not modified. The caller must commit the returned recipes
    and pantry together.
    """
    new_recipes = copy.deepcopy(recipes)
    new_pantry = copy.deepcopy(pantry)
    changes: List[PriceChange] = []
    store = receipt.store or None

    for item in _readable_items(receipt):
        new_price = to_number(item.price)
        for idx, recipe in enumerate(new_recipes):
            touched = False
            for ing in recipe.ingredients:
                old_price = to_number(ing.price)
                if matches(ing.name, item.name) and old_price != new_price:
                    changes.append(PriceChange(RECIPE_CHANGE, recipe.name, old_price, new_price, ing.name))
                    ing.price = new_price
                    ing.store = store
                    touched = True
            if touched:
                new_recipes[idx] = with_recomputed_total(recipe)
        _apply_to_pantry(new_pantry, item, receipt.date, changes)

    result = ReconciliationResult(new_recipes, new_pantry, changes)
    logger.info("Reconciled receipt %s (%s): %d recipe price changes, %d pantry updates",
                receipt.id, receipt.store, len(result.recipe_changes), len(result.pantry_changes))
    return result
