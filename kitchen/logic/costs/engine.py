"""Recipe cost computations: totals, per-serving cost and serving scaling.

All functions are pure. Callers that change ingredients must store the result
of ``with_recomputed_total`` instead of patching ``total_cost`` by hand.
"""
from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import Any, List, Optional

from kitchen.utilities.validators import to_number

__all__ = ["ScaledIngredient", "ScaledRecipe", "recipe_total", "per_serving",
           "with_recomputed_total", "scale", "display_quantity"]


@dataclass
class ScaledIngredient:
    name: str
    unit: str
    store: Optional[str]
    quantity: float
    price: float
    display_quantity: str
    display_price: str


@dataclass
class ScaledRecipe:
    recipe_id: Any
    name: str
    servings: float
    factor: float
    ingredients: List[ScaledIngredient] = field(default_factory=list)

    @property
    def total_cost(self) -> float:
        return sum(i.price for i in self.ingredients)


def recipe_total(recipe) -> float:
    """Sum of ingredient prices; unreadable prices count as zero."""
    return sum(to_number(getattr(ing, "price", 0)) for ing in recipe.ingredients)


def per_serving(recipe) -> float:
    return recipe_total(recipe) / recipe.servings


def with_recomputed_total(recipe):
    """Return a copy of ``recipe`` whose total_cost matches its ingredients."""
    updated = copy.deepcopy(recipe)
    updated.total_cost = recipe_total(updated)
    return updated


def display_quantity(original: float, scaled: float) -> str:
    """Whole quantities stay whole on screen, fractional ones keep one decimal."""
    decimals = 0 if float(original).is_integer() else 1
    return f"{scaled:.{decimals}f}"


def scale(recipe, target_servings) -> ScaledRecipe:
    """Scale quantities and prices of ``recipe`` to ``target_servings``.

    A missing or non-positive target leaves the recipe at its own servings.
    """
    target = to_number(target_servings)
    if target <= 0:
        target = recipe.servings
    factor = target / recipe.servings
    scaled = []
    for ing in recipe.ingredients:
        qty = to_number(ing.quantity)
        price = to_number(ing.price)
        scaled.append(ScaledIngredient(
            name=ing.name,
            unit=ing.unit,
            store=ing.store,
            quantity=qty * factor,
            price=price * factor,
            display_quantity=display_quantity(qty, qty * factor),
            display_price=f"{price * factor:.2f}",
        ))
    return ScaledRecipe(recipe_id=recipe.id, name=recipe.name, servings=target,
                        factor=factor, ingredients=scaled)
