"""ShoppingListItem entity: one line of the (transient) shopping list."""
from typing import Any, Optional
from uuid import uuid4

from kitchen.utilities.validators import to_number


class ShoppingListItem:
    def __init__(self, name: str = "", quantity: float = 1, unit: str = "", price: float = 0,
                 store: Optional[str] = None, checked: bool = False, id: Any = None):
        self.id = str(id) if id is not None else uuid4().hex
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.price = price
        self.store = store
        self.checked = checked

    def __str__(self) -> str:
        mark = "x" if self.checked else " "
        return f"[{mark}] {self.name} - {self.quantity} {self.unit} - {self.store or '-'} - ${self.price:.2f}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShoppingListItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        store = d.get("store")
        return ShoppingListItem(
            id=d.get("id"),
            name=d.get("name") if isinstance(d.get("name"), str) else "",
            quantity=to_number(d.get("quantity")),
            unit=d.get("unit") if isinstance(d.get("unit"), str) else "",
            price=to_number(d.get("price")),
            store=store if isinstance(store, str) and store.strip() else None,
            checked=bool(d.get("checked", False)),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "price": self.price,
            "store": self.store,
            "checked": self.checked,
        }
