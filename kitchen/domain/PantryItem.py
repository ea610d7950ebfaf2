"""PantryItem domain entity: stock on hand plus the last observed purchase price/date."""
from datetime import date
from uuid import uuid4
from typing import Any, Optional

from kitchen.utilities.constants import DATE_FORMAT, DEFAULT_CATEGORY
from kitchen.utilities.validators import to_date, to_number


class PantryItem:
    def __init__(self, name: str = "", quantity: float = 1, unit: str = "", category: str = DEFAULT_CATEGORY,
                 last_purchase_price: float = 0, last_purchase_date: Optional[date] = None, id: Any = None):
        self.id = str(id) if id is not None else uuid4().hex
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.category = category
        self.last_purchase_price = last_purchase_price
        self.last_purchase_date = last_purchase_date

    def __str__(self) -> str:
        parts = [f"{self.name} - {self.quantity} {self.unit}".rstrip(), self.category]
        if self.last_purchase_price:
            parts.append(f"Last bought: ${self.last_purchase_price:.2f}")
        return " - ".join(parts)

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, PantryItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        category = d.get("category")
        return PantryItem(
            id=d.get("id"),
            name=d.get("name") if isinstance(d.get("name"), str) else "",
            quantity=to_number(d.get("quantity")),
            unit=d.get("unit") if isinstance(d.get("unit"), str) else "",
            category=category if isinstance(category, str) and category else DEFAULT_CATEGORY,
            last_purchase_price=to_number(d.get("lastPurchasePrice")),
            last_purchase_date=to_date(d.get("lastPurchaseDate")),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "lastPurchasePrice": self.last_purchase_price,
            "lastPurchaseDate": self.last_purchase_date.strftime(DATE_FORMAT) if self.last_purchase_date else None,
        }
