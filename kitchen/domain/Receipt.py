"""Receipt entity: a finalized purchase (store, date, line items, total)."""
from datetime import date, datetime
from typing import Any, List, Optional
from uuid import uuid4

from kitchen.utilities.constants import DATE_FORMAT
from kitchen.utilities.validators import to_date, to_number


class ReceiptItem:
    def __init__(self, name: str = "", quantity: float = 1, unit: str = "", price: float = 0, id: Any = None):
        self.id = str(id) if id is not None else uuid4().hex
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.price = price

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity:g} {self.unit}".rstrip() + f" - ${self.price:.2f}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return ReceiptItem(
            id=d.get("id"),
            name=d.get("name") if isinstance(d.get("name"), str) else "",
            quantity=to_number(d.get("quantity"), 1.0),
            unit=d.get("unit") if isinstance(d.get("unit"), str) else "",
            price=to_number(d.get("price")),
        )

    def to_dict(self):
        return {"id": self.id, "name": self.name, "quantity": self.quantity, "unit": self.unit, "price": self.price}


class Receipt:
    def __init__(self, store: str = "", date: Optional[date] = None, items: Optional[List[ReceiptItem]] = None,
                 total: float = 0, id: Any = None, created_at: Optional[str] = None):
        self.id = str(id) if id is not None else uuid4().hex
        self.store = store
        self.date = date
        self.items = items[:] if items else []
        self.total = total
        self.created_at = created_at

    def __str__(self) -> str:
        when = self.date.strftime(DATE_FORMAT) if self.date else "?"
        return f"Receipt {self.store or '?'} {when} - {len(self.items)} items - ${self.total:.2f}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Receipt):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Receipt(
            id=d.get("id"),
            store=d.get("store") if isinstance(d.get("store"), str) else "",
            date=to_date(d.get("date")),
            items=[ReceiptItem.from_dict(i) for i in d.get("items") or []],
            total=to_number(d.get("total")),
            created_at=d.get("createdAt"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "store": self.store,
            "date": self.date.strftime(DATE_FORMAT) if self.date else None,
            "items": [i.to_dict() for i in self.items],
            "total": self.total,
            "createdAt": self.created_at,
        }

    @staticmethod
    def timestamp() -> str:
        return datetime.now().isoformat(timespec="seconds")
