"""Ingredient domain entity: one priced line of a recipe (name, quantity, unit, store, price)."""
from typing import Optional
from kitchen.utilities.validators import to_number


class Ingredient:
    def __init__(self, name: str = "", quantity: float = 0, unit: str = "",
                 store: Optional[str] = None, price: float = 0):
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.store = store
        self.price = price

    def __str__(self) -> str:
        parts = [f"{self.name} - {self.quantity} {self.unit}".rstrip()]
        if self.store:
            parts.append(f"@ {self.store}")
        parts.append(f"${to_number(self.price):.2f}")
        return " - ".join(parts)

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient from a dictionary. Ignores unknown keys, coerces numbers.'''
        d = dict(data) if isinstance(data, dict) else {}
        store = d.get("store")
        return Ingredient(
            name=d.get("name") if isinstance(d.get("name"), str) else "",
            quantity=max(to_number(d.get("quantity")), 0.0),
            unit=d.get("unit") if isinstance(d.get("unit"), str) else "",
            store=store.strip() if isinstance(store, str) and store.strip() else None,
            price=to_number(d.get("price")),
        )

    def to_dict(self):
        '''Converts the Ingredient to a dictionary for JSON persistence.'''
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "store": self.store,
            "price": self.price,
        }
