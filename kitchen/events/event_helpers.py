"""Event helper utilities.

Thin publishing helpers so callers never assemble payload dicts by hand:

    from kitchen.events.event_helpers import publish_reconciled, publish_budget_status
"""
from __future__ import annotations
from typing import Any

from .Event_Bus import (
    publish,
    RECEIPT_RECONCILED, SHOPPING_LIST_GENERATED, BUDGET_WARNING, BUDGET_EXCEEDED,
)

__all__ = [
    'publish_reconciled', 'publish_list_generated', 'publish_budget_status',
]


def publish_reconciled(receipt: Any, result: Any):
    """Publish a receipt.reconciled event summarising a reconciliation result."""
    publish(RECEIPT_RECONCILED, {
        'receipt_id': receipt.id,
        'store': receipt.store,
        'recipe_changes': len(result.recipe_changes),
        'pantry_changes': len(result.pantry_changes),
    })


def publish_list_generated(week_start: str, count: int):
    """Publish a shopping_list.generated event with the new item count."""
    publish(SHOPPING_LIST_GENERATED, {'week_start': week_start, 'count': count})


def publish_budget_status(status: Any):
    """Publish budget.exceeded or budget.warning when the status calls for it."""
    payload = {'spent': status.spent, 'budget': status.budget, 'used_percent': status.used_percent}
    if status.exceeded:
        publish(BUDGET_EXCEEDED, payload)
    elif status.warning:
        publish(BUDGET_WARNING, payload)
