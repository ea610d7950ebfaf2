"""Pantry quantity ledger.

Quantity changes to the pantry all go through here: shopping-list checkout,
manual adds and adjustments. Price and purchase-date refreshes from receipts
belong to the reconciler; ``merge_receipt`` only forwards to it.

Every function returns a new list and leaves its inputs alone. An entry whose
quantity would drop to zero or below is removed, never stored.
"""
from __future__ import annotations
import copy
import logging
from datetime import date as _date
from typing import Dict, List, Optional, Tuple

from kitchen.domain.Pantry import Pantry
from kitchen.domain.PantryItem import PantryItem
from kitchen.logic.reconcile.prices import refresh_pantry_prices
from kitchen.utilities.config import LOW_STOCK_QUANTITY
from kitchen.utilities.constants import DEFAULT_CATEGORY
from kitchen.utilities.validators import PantryItemInput, to_number

logger = logging.getLogger(__name__)

__all__ = [
    "merge_receipt", "checkout", "adjust_quantity", "set_quantity", "add_item", "remove_item",
    "low_stock_items", "filter_items", "group_by_category", "notify_low_stock",
]


def _find(pantry: List[PantryItem], name: str) -> Optional[PantryItem]:
    return Pantry(pantry).find_by_name(name)


def merge_receipt(pantry: List[PantryItem], receipt) -> List[PantryItem]:
    updated, changes = refresh_pantry_prices(pantry, receipt)
    logger.debug("Receipt %s refreshed %d pantry prices", receipt.id, len(changes))
    return updated


def checkout(pantry: List[PantryItem], shopping_list, today: Optional[_date] = None) -> Tuple[List[PantryItem], list]:
    """Move checked shopping-list items into the pantry.

    A checked item adds its quantity to the pantry entry with the same name, or
    becomes a new entry priced at the list price and dated ``today``. Items are
    handled one after another, so two checked lines with the same name end up
    in a single pantry entry. Checked items are dropped from the list.
    """
    today = today or _date.today()
    new_pantry = copy.deepcopy(pantry)
    remaining = []
    moved = created = 0
    for item in shopping_list:
        if not item.checked:
            remaining.append(copy.deepcopy(item))
            continue
        moved += 1
        existing = _find(new_pantry, item.name)
        if existing is not None:
            existing.quantity = to_number(existing.quantity) + to_number(item.quantity)
        else:
            created += 1
            new_pantry.append(PantryItem(
                name=item.name.strip(),
                quantity=to_number(item.quantity),
                unit=item.unit,
                category=DEFAULT_CATEGORY,
                last_purchase_price=to_number(item.price),
                last_purchase_date=today,
            ))
    # a zero-quantity checkout line must not leave a zero-quantity pantry entry
    new_pantry = [p for p in new_pantry if to_number(p.quantity) > 0]
    logger.info("Checkout moved %d items to the pantry (%d new entries)", moved, created)
    return new_pantry, remaining


def set_quantity(pantry: List[PantryItem], item_id, quantity) -> List[PantryItem]:
    """Set the quantity of one entry; zero or below removes it. Unknown ids change nothing."""
    quantity = to_number(quantity)
    updated = []
    for p in pantry:
        if p.id != item_id:
            updated.append(copy.deepcopy(p))
        elif quantity > 0:
            item = copy.deepcopy(p)
            item.quantity = quantity
            updated.append(item)
        else:
            logger.info("Pantry item %s ran out and was removed", p.name)
    return updated


def adjust_quantity(pantry: List[PantryItem], item_id, delta) -> List[PantryItem]:
    item = next((p for p in pantry if p.id == item_id), None)
    if item is None:
        return copy.deepcopy(pantry)
    return set_quantity(pantry, item_id, to_number(item.quantity) + to_number(delta))


def add_item(pantry: List[PantryItem], data: dict, today: Optional[_date] = None) -> List[PantryItem]:
    """Add a manual entry, merging its quantity into an existing entry of the same name."""
    valid = PantryItemInput.model_validate(data)
    updated = copy.deepcopy(pantry)
    existing = _find(updated, valid.name)
    if existing is not None:
        existing.quantity = to_number(existing.quantity) + valid.quantity
        updated = [p for p in updated if to_number(p.quantity) > 0]
        return updated
    if valid.quantity <= 0:
        return updated
    updated.append(PantryItem(
        name=valid.name,
        quantity=valid.quantity,
        unit=valid.unit,
        category=valid.category,
        last_purchase_price=valid.last_purchase_price,
        last_purchase_date=valid.last_purchase_date or today or _date.today(),
    ))
    return updated


def remove_item(pantry: List[PantryItem], item_id) -> List[PantryItem]:
    return [copy.deepcopy(p) for p in pantry if p.id != item_id]


def low_stock_items(pantry: List[PantryItem]) -> List[PantryItem]:
    return [p for p in pantry if to_number(p.quantity) <= LOW_STOCK_QUANTITY]


def filter_items(pantry: List[PantryItem], search: str = "", category: Optional[str] = None) -> List[PantryItem]:
    needle = (search or "").strip().lower()
    return [
        p for p in pantry
        if needle in p.name.lower() and (category in (None, "", "All") or p.category == category)
    ]


def group_by_category(pantry: List[PantryItem]) -> Dict[str, List[PantryItem]]:
    groups: Dict[str, List[PantryItem]] = {}
    for p in pantry:
        groups.setdefault(p.category or DEFAULT_CATEGORY, []).append(p)
    return groups


def notify_low_stock(pantry: List[PantryItem], item_ids=None, bus=None) -> int:
    """Publish pantry.low_stock for low entries (optionally only ``item_ids``). Returns how many were low."""
    watched = [p for p in pantry if item_ids is None or p.id in item_ids]
    aggregate = Pantry(watched)
    if bus is not None:
        aggregate.set_event_bus(bus)
    aggregate.scan_and_notify()
    return len(low_stock_items(watched))
