"""Receipt and recipe intake.

Turns already-parsed scan payloads into draft entities, edits draft receipts
and records a finished receipt into the ledger (which triggers price
reconciliation). The image scanning call itself lives outside this package.
"""
from __future__ import annotations
import copy
import logging
from datetime import date as _date
from typing import Any, Dict, List, Optional, Tuple

from kitchen.domain.Receipt import Receipt, ReceiptItem
from kitchen.logic.reconcile.prices import ReconciliationResult, reconcile_receipt
from kitchen.logic.reporting.budget import total_receipt_spend
from kitchen.utilities.validators import ReceiptItemInput, ReceiptScanInput, RecipeScanInput, to_number

logger = logging.getLogger(__name__)

__all__ = [
    "receipt_from_scan", "recipe_from_scan", "add_receipt_item", "remove_receipt_item",
    "record_receipt", "delete_receipt", "total_receipt_spend",
]


def receipt_from_scan(payload: Dict[str, Any], today: Optional[_date] = None) -> Receipt:
    """Build a draft receipt from receipt-extraction JSON.

    Unreadable quantities become 1, unreadable prices 0, a missing date is
    today, and a missing total falls back to the sum of the item prices.
    """
    scan = ReceiptScanInput.model_validate(payload if isinstance(payload, dict) else {})
    items = [ReceiptItem(name=i.name, quantity=i.quantity, unit=i.unit, price=i.price) for i in scan.items]
    total = scan.total if scan.total is not None else sum(i.price for i in items)
    receipt = Receipt(store=scan.store, date=scan.purchase_date or today or _date.today(), items=items, total=total)
    logger.debug("Scanned receipt draft from %r with %d items", receipt.store, len(items))
    return receipt


def recipe_from_scan(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Turn recipe-extraction JSON into recipe form data ready for ``create_recipe``.

    Scans never carry prices or stores; those are filled in by the user.
    """
    scan = RecipeScanInput.model_validate(payload if isinstance(payload, dict) else {})
    return {
        "name": scan.name,
        "servings": scan.servings,
        "prepTime": scan.prep_time,
        "cookTime": scan.cook_time,
        "tags": [],
        "familyMembers": [],
        "ingredients": [
            {"name": i.name, "quantity": i.quantity, "unit": i.unit, "store": None, "price": 0}
            for i in scan.ingredients
        ],
        "instructions": scan.instructions,
        "notes": scan.notes,
        "isFavorite": False,
    }


def add_receipt_item(receipt: Receipt, data: Dict[str, Any]) -> Receipt:
    """Append a manual line and add its price to the total.

    Raises:
        ValueError: blank name or a price that is not above zero.
    """
    valid = ReceiptItemInput.model_validate(data)
    if valid.price <= 0:
        raise ValueError(f"Receipt item {valid.name!r} needs a price above zero")
    updated = copy.deepcopy(receipt)
    updated.items.append(ReceiptItem(name=valid.name, quantity=valid.quantity, unit=valid.unit, price=valid.price))
    updated.total = to_number(updated.total) + valid.price
    return updated


def remove_receipt_item(receipt: Receipt, item_id) -> Receipt:
    updated = copy.deepcopy(receipt)
    removed = [i for i in updated.items if i.id == item_id]
    updated.items = [i for i in updated.items if i.id != item_id]
    updated.total = to_number(updated.total) - sum(to_number(i.price) for i in removed)
    return updated


def record_receipt(state, receipt: Receipt) -> Tuple[Any, ReconciliationResult]:
    """Store ``receipt`` and reconcile its prices into recipes and pantry.

    Returns the next state together with the reconciliation result, whose
    change log is for display only.

    Raises:
        ValueError: the receipt has no store or no items.
    """
    if not (receipt.store or "").strip():
        raise ValueError("A receipt needs a store")
    if not receipt.items:
        raise ValueError("A receipt needs at least one item")
    final = copy.deepcopy(receipt)
    final.created_at = final.created_at or Receipt.timestamp()
    if final.date is None:
        final.date = _date.today()
    result = reconcile_receipt(final, state.recipes, state.pantry)
    new_state = state.replace(
        receipts=state.receipts + [final],
        recipes=result.recipes,
        pantry=result.pantry,
    )
    logger.info("Recorded receipt %s from %s totalling %.2f", final.id, final.store, to_number(final.total))
    return new_state, result


def delete_receipt(receipts: List[Receipt], receipt_id) -> List[Receipt]:
    """Drop a stored receipt. Prices it already propagated stay as they are."""
    return [copy.deepcopy(r) for r in receipts if r.id != receipt_id]
