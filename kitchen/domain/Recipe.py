"""Recipe domain entity: servings, priced ingredients, tags and the derived total cost."""
import logging
from uuid import uuid4
from typing import Any, List, Optional

from kitchen.domain.Ingredient import Ingredient
from kitchen.logic.costs.engine import recipe_total
from kitchen.utilities.validators import to_number

logger = logging.getLogger(__name__)


class Recipe:
    def __init__(self, name: str = "", servings: int = 4, ingredients: Optional[List[Ingredient]] = None,
                 tags: Optional[List[str]] = None, id: Any = None,
                 prep_time: str = "", cook_time: str = "", instructions: str = "", notes: str = "",
                 family_members: Optional[List[str]] = None, is_favorite: bool = False,
                 created_at: Optional[str] = None, last_made: Optional[str] = None, times_made: int = 0):
        if not isinstance(servings, int) or isinstance(servings, bool) or servings < 1:
            raise ValueError(f"Servings must be a whole number of at least 1: {servings!r}")
        self.id = str(id) if id is not None else uuid4().hex
        self.name = name
        self.servings = servings
        self.ingredients = ingredients[:] if ingredients else []
        # tags behave as a set but keep their insertion order for display
        self.tags = list(dict.fromkeys(tags)) if tags else []
        self.total_cost = recipe_total(self)
        self.prep_time = prep_time
        self.cook_time = cook_time
        self.instructions = instructions
        self.notes = notes
        self.family_members = family_members[:] if family_members else []
        self.is_favorite = is_favorite
        self.created_at = created_at
        self.last_made = last_made
        self.times_made = times_made

    def __str__(self) -> str:
        return f"{self.name} - {self.servings} servings - Tags: {', '.join(self.tags)} - Total: ${self.total_cost:.2f}"

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Builds a Recipe from its persisted form. The stored totalCost is ignored and recomputed.'''
        d = dict(data) if isinstance(data, dict) else {}
        servings = int(to_number(d.get("servings"), 1))
        if servings < 1:
            logger.warning("Recipe %r has invalid servings %r; using 1", d.get("name"), d.get("servings"))
            servings = 1
        tags = d.get("tags") or []
        members = d.get("familyMembers") or []
        return Recipe(
            id=d.get("id"),
            name=d.get("name") or "",
            servings=servings,
            ingredients=[Ingredient.from_dict(i) for i in d.get("ingredients") or []],
            tags=[t for t in tags if isinstance(t, str)],
            prep_time=d.get("prepTime") or "",
            cook_time=d.get("cookTime") or "",
            instructions=d.get("instructions") or "",
            notes=d.get("notes") or "",
            family_members=[m for m in members if isinstance(m, str)],
            is_favorite=bool(d.get("isFavorite", False)),
            created_at=d.get("createdAt"),
            last_made=d.get("lastMade"),
            times_made=int(to_number(d.get("timesMade"))),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "servings": self.servings,
            "tags": list(self.tags),
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "totalCost": self.total_cost,
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "instructions": self.instructions,
            "notes": self.notes,
            "familyMembers": list(self.family_members),
            "isFavorite": self.is_favorite,
            "createdAt": self.created_at,
            "lastMade": self.last_made,
            "timesMade": self.times_made,
        }
