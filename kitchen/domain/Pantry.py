"""Pantry aggregate: read-side view over a list of PantryItem with low-stock notifications."""
from typing import List, Optional

from kitchen.domain.PantryItem import PantryItem
from kitchen.events.Event_Bus import GLOBAL_EVENT_BUS, PANTRY_LOW_STOCK
from kitchen.logic.matching.names import matches
from kitchen.utilities.config import LOW_STOCK_QUANTITY


class Pantry:
    def __init__(self, items: Optional[List[PantryItem]] = None):
        self.items: List[PantryItem] = list(items) if items else []
        self._event_bus = GLOBAL_EVENT_BUS

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    def _notify_low_stock(self, item: PantryItem):
        self._event_bus.publish(PANTRY_LOW_STOCK, {
            "item": item,
            "remaining": item.quantity,
            "threshold": LOW_STOCK_QUANTITY,
        })

    def scan_and_notify(self):
        '''Publish a low-stock event for every item at or below the threshold.'''
        for item in self.items:
            if item.quantity <= LOW_STOCK_QUANTITY:
                self._notify_low_stock(item)
        return self

    # --- Lookups ------------------------------------------------------------
    def find_by_name(self, name: str) -> Optional[PantryItem]:
        return next((p for p in self.items if matches(p.name, name)), None)

    def get_items(self):
        return self.items

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        return Pantry([PantryItem.from_dict(d) for d in data or []])

    def to_dict(self):
        return [item.to_dict() for item in self.items]
