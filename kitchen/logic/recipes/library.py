"""Recipe library operations.

Creating and editing recipes. Every path that touches ingredients hands back a
recipe built through ``with_recomputed_total`` so ``total_cost`` never goes stale.
"""
from __future__ import annotations
import copy
import logging
from datetime import date as _date, datetime
from typing import List, Optional, Tuple

from kitchen.domain.Ingredient import Ingredient
from kitchen.domain.Recipe import Recipe
from kitchen.logic.costs.engine import with_recomputed_total
from kitchen.utilities.constants import DATE_FORMAT
from kitchen.utilities.validators import IngredientInput, RecipeInput

logger = logging.getLogger(__name__)

__all__ = [
    "create_recipe", "add_ingredient", "remove_ingredient", "edit_ingredient", "delete_recipe",
    "replace_recipe", "toggle_favorite", "mark_made", "filter_recipes", "split_favorites",
]


def _ingredient(data) -> Ingredient:
    valid = data if isinstance(data, IngredientInput) else IngredientInput.model_validate(data)
    return Ingredient(name=valid.name, quantity=valid.quantity, unit=valid.unit, store=valid.store, price=valid.price)


def _check_index(recipe: Recipe, index: int):
    if not 0 <= index < len(recipe.ingredients):
        raise IndexError(f"No ingredient at position {index} in {recipe.name!r}")


def create_recipe(data: dict) -> Recipe:
    """Validate form/scan data and build a new recipe.

    Raises:
        ValueError: blank name, servings below one or a malformed ingredient.
    """
    valid = RecipeInput.model_validate(data)
    recipe = Recipe(
        name=valid.name,
        servings=valid.servings,
        ingredients=[_ingredient(i) for i in valid.ingredients],
        tags=valid.tags,
        prep_time=valid.prep_time,
        cook_time=valid.cook_time,
        instructions=valid.instructions,
        notes=valid.notes,
        family_members=valid.family_members,
        is_favorite=valid.is_favorite,
        created_at=datetime.now().isoformat(timespec="seconds"),
    )
    logger.info("Created recipe %s (%s) with %d ingredients, total %.2f",
                recipe.name, recipe.id, len(recipe.ingredients), recipe.total_cost)
    return recipe


def add_ingredient(recipe: Recipe, data) -> Recipe:
    updated = copy.deepcopy(recipe)
    updated.ingredients.append(_ingredient(data))
    return with_recomputed_total(updated)


def remove_ingredient(recipe: Recipe, index: int) -> Recipe:
    """Drop the ingredient at ``index``; an out-of-range index raises IndexError."""
    _check_index(recipe, index)
    updated = copy.deepcopy(recipe)
    del updated.ingredients[index]
    return with_recomputed_total(updated)


def edit_ingredient(recipe: Recipe, index: int, data) -> Recipe:
    _check_index(recipe, index)
    updated = copy.deepcopy(recipe)
    current = updated.ingredients[index].to_dict()
    current.update({k: v for k, v in dict(data).items() if k in current})
    updated.ingredients[index] = _ingredient(current)
    return with_recomputed_total(updated)


def delete_recipe(recipes: List[Recipe], recipe_id) -> List[Recipe]:
    return [copy.deepcopy(r) for r in recipes if r.id != recipe_id]


def replace_recipe(recipes: List[Recipe], recipe: Recipe) -> List[Recipe]:
    """Swap in ``recipe`` for the entry with the same id, recomputing its total."""
    fresh = with_recomputed_total(recipe)
    return [fresh if r.id == recipe.id else copy.deepcopy(r) for r in recipes]


def toggle_favorite(recipes: List[Recipe], recipe_id) -> List[Recipe]:
    updated = copy.deepcopy(recipes)
    for r in updated:
        if r.id == recipe_id:
            r.is_favorite = not r.is_favorite
    return updated


def mark_made(recipes: List[Recipe], recipe_id, today: Optional[_date] = None) -> List[Recipe]:
    made_on = (today or _date.today()).strftime(DATE_FORMAT)
    updated = copy.deepcopy(recipes)
    for r in updated:
        if r.id == recipe_id:
            r.last_made = made_on
            r.times_made += 1
    return updated


def filter_recipes(recipes: List[Recipe], search: str = "", tag: Optional[str] = None) -> List[Recipe]:
    needle = (search or "").strip().lower()
    return [
        r for r in recipes
        if needle in r.name.lower() and (tag in (None, "", "All") or tag in r.tags)
    ]


def split_favorites(recipes: List[Recipe]) -> Tuple[List[Recipe], List[Recipe]]:
    return [r for r in recipes if r.is_favorite], [r for r in recipes if not r.is_favorite]
