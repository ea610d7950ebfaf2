"""Simple Event Bus / Observer implementation for ledger notifications.

Event names:
  pantry.low_stock        -> {"item": PantryItem, "remaining": float, "threshold": float}
  receipt.reconciled      -> {"receipt_id", "store", "recipe_changes": int, "pantry_changes": int}
  shopping_list.generated -> {"week_start": str, "count": int}
  budget.warning          -> {"spent", "budget", "used_percent"}
  budget.exceeded         -> {"spent", "budget", "used_percent"}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

PANTRY_LOW_STOCK = "pantry.low_stock"
RECEIPT_RECONCILED = "receipt.reconciled"
SHOPPING_LIST_GENERATED = "shopping_list.generated"
BUDGET_WARNING = "budget.warning"
BUDGET_EXCEEDED = "budget.exceeded"


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        try:
            self._subscribers[event_name].remove(callback)
        except (ValueError, KeyError):
            pass

    def publish(self, event_name: str, payload: Any):
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(event_name, payload)
            except Exception:
                # a broken listener must not abort the ledger operation that published
                logger.exception("Error delivering %s to %r", event_name, cb)


GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
    """Publish an event on the global bus."""
    GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
    'EventBus', 'GLOBAL_EVENT_BUS', 'publish',
    'PANTRY_LOW_STOCK', 'RECEIPT_RECONCILED', 'SHOPPING_LIST_GENERATED', 'BUDGET_WARNING', 'BUDGET_EXCEEDED'
]
