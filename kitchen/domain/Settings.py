"""User settings: monthly budget, known stores and family members. Read-only for the engine."""
from typing import List, Optional

from kitchen.utilities.config import DEFAULT_MONTHLY_BUDGET
from kitchen.utilities.constants import DEFAULT_FAMILY_MEMBERS, DEFAULT_STORES
from kitchen.utilities.validators import to_number


class Settings:
    def __init__(self, monthly_budget: float = DEFAULT_MONTHLY_BUDGET, stores: Optional[List[str]] = None,
                 family_members: Optional[List[str]] = None):
        self.monthly_budget = monthly_budget
        self.stores = list(stores) if stores is not None else list(DEFAULT_STORES)
        self.family_members = list(family_members) if family_members is not None else list(DEFAULT_FAMILY_MEMBERS)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Settings):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Settings(budget={self.monthly_budget}, stores={self.stores}, family={self.family_members})"

    # Each edit returns a new Settings; blanks and duplicates are ignored.
    def add_store(self, store: str) -> "Settings":
        name = store.strip() if isinstance(store, str) else ""
        if not name or name in self.stores:
            return self
        return Settings(self.monthly_budget, self.stores + [name], self.family_members)

    def remove_store(self, store: str) -> "Settings":
        return Settings(self.monthly_budget, [s for s in self.stores if s != store], self.family_members)

    def add_member(self, member: str) -> "Settings":
        name = member.strip() if isinstance(member, str) else ""
        if not name or name in self.family_members:
            return self
        return Settings(self.monthly_budget, self.stores, self.family_members + [name])

    def remove_member(self, member: str) -> "Settings":
        return Settings(self.monthly_budget, self.stores, [m for m in self.family_members if m != member])

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            return Settings()
        stores = data.get("stores")
        members = data.get("familyMembers")
        return Settings(
            monthly_budget=to_number(data.get("monthlyBudget"), DEFAULT_MONTHLY_BUDGET),
            stores=[s for s in stores if isinstance(s, str)] if isinstance(stores, list) else None,
            family_members=[m for m in members if isinstance(m, str)] if isinstance(members, list) else None,
        )

    def to_dict(self):
        return {
            "monthlyBudget": self.monthly_budget,
            "stores": list(self.stores),
            "familyMembers": list(self.family_members),
        }
