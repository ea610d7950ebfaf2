"""Shopping list builder and list editing helpers.

Provides build_shopping_list(weekly_plan, week_start, recipes) plus the small
pure edits the shopping screen performs (add, toggle, remove, group by store).
"""
from __future__ import annotations
import copy
import logging
from datetime import date as _date
from typing import Any, Dict, List, Optional, Tuple, Union

from kitchen.domain.ShoppingList import ShoppingListItem
from kitchen.logic.matching.names import normalize_name
from kitchen.utilities.constants import DATE_FORMAT, UNASSIGNED_STORE
from kitchen.utilities.validators import ShoppingListItemInput, to_number

logger = logging.getLogger(__name__)


def store_label(store: Optional[str]) -> str:
    return store.strip() if isinstance(store, str) and store.strip() else UNASSIGNED_STORE


def _week_key(week_start: Union[str, _date]) -> str:
    return week_start.strftime(DATE_FORMAT) if isinstance(week_start, _date) else str(week_start)


def build_shopping_list(weekly_plan: Dict[Any, Any], week_start: Union[str, _date], recipes: List[Any]) -> List[ShoppingListItem]:
    """Aggregate the ingredients of every meal planned for ``week_start``.

    Args:
        weekly_plan: mapping PlanKey -> PlannedMeal.
        week_start: Monday of the target week (date or 'YYYY-MM-DD').
        recipes: live recipes; meals whose recipe no longer exists are skipped.

    Returns:
        One unchecked ShoppingListItem per (item name, store) pair. Quantities
        are summed, price and unit come from the last ingredient seen for the
        pair. The result is meant to replace the current shopping list.
    """
    target = _week_key(week_start)
    recipe_index = {r.id: r for r in recipes}
    required: Dict[Tuple[str, str], Dict[str, Any]] = {}
    skipped = 0

    for key, meal in weekly_plan.items():
        if key.week_start != target:
            continue
        recipe = recipe_index.get(meal.recipe_id)
        if recipe is None:
            skipped += 1
            continue
        for ing in recipe.ingredients:
            name_key = normalize_name(ing.name)
            if not name_key:
                continue
            label = store_label(ing.store)
            entry = required.setdefault((name_key, label), {
                "name": ing.name.strip(), "quantity": 0.0, "unit": "", "price": 0.0,
                "store": None if label == UNASSIGNED_STORE else label,
            })
            entry["quantity"] += to_number(ing.quantity)
            entry["unit"] = ing.unit
            entry["price"] = to_number(ing.price)

    if skipped:
        logger.debug("Skipped %d planned meals whose recipe was deleted (week %s)", skipped, target)
    items = [ShoppingListItem(**entry) for entry in required.values()]
    logger.info("Generated shopping list for week %s with %d items", target, len(items))
    return items


def add_item(shopping_list: List[ShoppingListItem], data: dict) -> List[ShoppingListItem]:
    """Append a manual entry. Raises ValueError (pydantic) for a blank name."""
    valid = ShoppingListItemInput.model_validate(data)
    item = ShoppingListItem(name=valid.name, quantity=valid.quantity, unit=valid.unit,
                            price=valid.price, store=valid.store)
    return copy.deepcopy(shopping_list) + [item]


def toggle_item(shopping_list: List[ShoppingListItem], item_id) -> List[ShoppingListItem]:
    updated = copy.deepcopy(shopping_list)
    for item in updated:
        if item.id == item_id:
            item.checked = not item.checked
    return updated


def remove_item(shopping_list: List[ShoppingListItem], item_id) -> List[ShoppingListItem]:
    return [copy.deepcopy(i) for i in shopping_list if i.id != item_id]


def filter_by_store(shopping_list: List[ShoppingListItem], store: Optional[str] = None) -> List[ShoppingListItem]:
    """Items bought at ``store``; ``None`` or "All" returns everything."""
    if store is None or store == "All":
        return list(shopping_list)
    return [i for i in shopping_list if store_label(i.store) == store]


def group_by_store(shopping_list: List[ShoppingListItem]) -> Dict[str, List[ShoppingListItem]]:
    groups: Dict[str, List[ShoppingListItem]] = {}
    for item in shopping_list:
        groups.setdefault(store_label(item.store), []).append(item)
    return groups


def list_totals(shopping_list: List[ShoppingListItem]) -> Dict[str, Any]:
    checked = [i for i in shopping_list if i.checked]
    return {
        "item_count": len(shopping_list),
        "total_cost": sum(to_number(i.price) for i in shopping_list),
        "checked_count": len(checked),
        "checked_cost": sum(to_number(i.price) for i in checked),
        "store_subtotals": {store: sum(to_number(i.price) for i in items)
                            for store, items in group_by_store(shopping_list).items()},
    }


__all__ = ['build_shopping_list', 'add_item', 'toggle_item', 'remove_item', 'filter_by_store',
           'group_by_store', 'list_totals', 'store_label']
