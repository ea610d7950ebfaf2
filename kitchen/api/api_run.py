from fastapi import FastAPI, Body, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from contextlib import asynccontextmanager
from datetime import date as _date
from typing import Optional
import logging

from kitchen.domain.Recipe import Recipe
from kitchen.domain.Settings import Settings
from kitchen.infra.State_Repository import StateRepository
from kitchen.logic.costs.engine import per_serving, scale
from kitchen.logic.pantry import ledger
from kitchen.logic.planning import planner
from kitchen.logic.recipes import library
from kitchen.logic.receipts import intake
from kitchen.logic.reporting.budget import budget_status, generate_report, monthly_spend, week_start_for
from kitchen.logic.shopping import list_builder
from kitchen.utilities.constants import DATE_FORMAT, DAYS, MEAL_TYPES, PANTRY_CATEGORIES, RECIPE_TAGS, UNITS
from kitchen.utilities.validators import SettingsInput, to_date
from kitchen.events.event_helpers import publish_budget_status, publish_list_generated, publish_reconciled
from kitchen.events.web_observers import start as start_event_observers, get_events as get_web_events

# Logging
logger = logging.getLogger("kitchen_app")

repository = StateRepository()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()
    logger.info("Web observers for ledger events started (data file: %s)", repository.path)
    yield


# Initialize FastAPI app
app = FastAPI(title="Kitchen Ledger API", lifespan=lifespan)


@app.exception_handler(ValueError)
async def _value_error_handler(request: Request, exc: ValueError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# -------------------- Helpers --------------------
def _load():
    return repository.load()


def _save(state):
    repository.save(state)
    return state


def _recipe_out(recipe: Recipe) -> dict:
    data = recipe.to_dict()
    data["perServing"] = per_serving(recipe)
    return data


def _require_recipe(state, recipe_id: str) -> Recipe:
    recipe = state.find_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


def _require_pantry_item(state, item_id: str):
    if not any(p.id == item_id for p in state.pantry):
        raise HTTPException(status_code=404, detail="Pantry item not found")


def _week(week: Optional[str], offset: int = 0) -> str:
    if week is None:
        return week_start_for(_date.today(), offset).strftime(DATE_FORMAT)
    parsed = to_date(week)
    if parsed is None:
        raise HTTPException(status_code=400, detail=f"Invalid week (expected YYYY-MM-DD): {week}")
    return parsed.strftime(DATE_FORMAT)


# -------------------- API: State --------------------
@app.get("/api/state")
def api_state():
    return _load().to_dict()


# -------------------- API: Recipes --------------------
@app.get("/api/recipes")
def api_recipes(search: str = Query(default=""), tag: Optional[str] = Query(default=None)):
    favorites, others = library.split_favorites(library.filter_recipes(_load().recipes, search, tag))
    return {
        "favorites": [_recipe_out(r) for r in favorites],
        "others": [_recipe_out(r) for r in others],
        "count": len(favorites) + len(others),
    }


@app.post("/api/recipes", status_code=201)
def api_create_recipe(data: dict = Body(...)):
    state = _load()
    recipe = library.create_recipe(data)
    _save(state.replace(recipes=state.recipes + [recipe]))
    return _recipe_out(recipe)


@app.post("/api/recipes/scan")
def api_recipe_from_scan(payload: dict = Body(...)):
    """Convert recipe-extraction JSON into form data; nothing is stored."""
    return intake.recipe_from_scan(payload)


@app.get("/api/recipes/{recipe_id}")
def api_recipe(recipe_id: str):
    return _recipe_out(_require_recipe(_load(), recipe_id))


@app.put("/api/recipes/{recipe_id}")
def api_update_recipe(recipe_id: str, data: dict = Body(...)):
    state = _load()
    current = _require_recipe(state, recipe_id)
    edited = library.create_recipe(data)
    edited.id = current.id
    edited.created_at = current.created_at
    edited.last_made = current.last_made
    edited.times_made = current.times_made
    state = _save(state.replace(recipes=library.replace_recipe(state.recipes, edited)))
    return _recipe_out(state.find_recipe(recipe_id))


@app.delete("/api/recipes/{recipe_id}")
def api_delete_recipe(recipe_id: str):
    state = _load()
    _require_recipe(state, recipe_id)
    _save(state.replace(recipes=library.delete_recipe(state.recipes, recipe_id)))
    return {"deleted": recipe_id}


@app.post("/api/recipes/{recipe_id}/favorite")
def api_toggle_favorite(recipe_id: str):
    state = _load()
    _require_recipe(state, recipe_id)
    state = _save(state.replace(recipes=library.toggle_favorite(state.recipes, recipe_id)))
    return _recipe_out(state.find_recipe(recipe_id))


@app.post("/api/recipes/{recipe_id}/made")
def api_mark_made(recipe_id: str):
    state = _load()
    _require_recipe(state, recipe_id)
    state = _save(state.replace(recipes=library.mark_made(state.recipes, recipe_id)))
    return _recipe_out(state.find_recipe(recipe_id))


@app.get("/api/recipes/{recipe_id}/scale")
def api_scale_recipe(recipe_id: str, servings: float = Query(...)):
    scaled = scale(_require_recipe(_load(), recipe_id), servings)
    return {
        "recipeId": scaled.recipe_id,
        "name": scaled.name,
        "servings": scaled.servings,
        "factor": scaled.factor,
        "totalCost": scaled.total_cost,
        "ingredients": [vars(i) for i in scaled.ingredients],
    }


def _edit_ingredients(recipe_id: str, edit):
    state = _load()
    recipe = _require_recipe(state, recipe_id)
    try:
        updated = edit(recipe)
    except IndexError:
        raise HTTPException(status_code=404, detail="Ingredient not found")
    _save(state.replace(recipes=library.replace_recipe(state.recipes, updated)))
    return _recipe_out(updated)


@app.post("/api/recipes/{recipe_id}/ingredients")
def api_add_ingredient(recipe_id: str, data: dict = Body(...)):
    return _edit_ingredients(recipe_id, lambda r: library.add_ingredient(r, data))


@app.put("/api/recipes/{recipe_id}/ingredients/{index}")
def api_edit_ingredient(recipe_id: str, index: int, data: dict = Body(...)):
    return _edit_ingredients(recipe_id, lambda r: library.edit_ingredient(r, index, data))


@app.delete("/api/recipes/{recipe_id}/ingredients/{index}")
def api_remove_ingredient(recipe_id: str, index: int):
    return _edit_ingredients(recipe_id, lambda r: library.remove_ingredient(r, index))


# -------------------- API: Weekly plan --------------------
@app.get("/api/plan")
def api_plan(week: Optional[str] = Query(default=None), offset: int = Query(default=0)):
    week_start = _week(week, offset)
    plan = _load().weekly_plan
    return {
        "week_start": week_start,
        "label": planner.week_label(week_start),
        "summary": planner.week_summary(plan, week_start),
        "meals": [{"day": k.day, "mealType": k.meal_type, **meal.to_dict()}
                  for k, meal in planner.week_entries(plan, week_start)],
    }


@app.put("/api/plan/{week}/{day}/{meal_type}")
def api_assign_meal(week: str, day: str, meal_type: str, data: dict = Body(...)):
    state = _load()
    recipe = _require_recipe(state, str(data.get("recipeId")))
    plan = planner.assign_meal(state.weekly_plan, _week(week), day, meal_type, recipe)
    _save(state.replace(weekly_plan=plan))
    return api_plan(week=week, offset=0)


@app.delete("/api/plan/{week}/{day}/{meal_type}")
def api_clear_meal(week: str, day: str, meal_type: str):
    state = _load()
    plan = planner.clear_meal(state.weekly_plan, _week(week), day, meal_type)
    _save(state.replace(weekly_plan=plan))
    return api_plan(week=week, offset=0)


# -------------------- API: Shopping list --------------------
def _shopping_out(items, store: Optional[str] = None):
    visible = list_builder.filter_by_store(items, store)
    return {
        "items": [i.to_dict() for i in visible],
        "by_store": {s: [i.to_dict() for i in group]
                     for s, group in list_builder.group_by_store(visible).items()},
        "totals": list_builder.list_totals(items),
    }


@app.get("/api/shopping-list")
def api_shopping_list(store: Optional[str] = Query(default=None)):
    return _shopping_out(_load().shopping_list, store)


@app.post("/api/shopping-list/generate")
def api_generate_shopping_list(data: dict = Body(default={})):
    state = _load()
    week_start = _week(data.get("week"))
    items = list_builder.build_shopping_list(state.weekly_plan, week_start, state.recipes)
    _save(state.replace(shopping_list=items))
    publish_list_generated(week_start, len(items))
    return {"week_start": week_start, "count": len(items), **_shopping_out(items)}


@app.post("/api/shopping-list/items", status_code=201)
def api_add_shopping_item(data: dict = Body(...)):
    state = _load()
    items = list_builder.add_item(state.shopping_list, data)
    _save(state.replace(shopping_list=items))
    return _shopping_out(items)


@app.post("/api/shopping-list/items/{item_id}/toggle")
def api_toggle_shopping_item(item_id: str):
    state = _load()
    if not any(i.id == item_id for i in state.shopping_list):
        raise HTTPException(status_code=404, detail="Shopping list item not found")
    items = list_builder.toggle_item(state.shopping_list, item_id)
    _save(state.replace(shopping_list=items))
    return _shopping_out(items)


@app.delete("/api/shopping-list/items/{item_id}")
def api_remove_shopping_item(item_id: str):
    state = _load()
    if not any(i.id == item_id for i in state.shopping_list):
        raise HTTPException(status_code=404, detail="Shopping list item not found")
    items = list_builder.remove_item(state.shopping_list, item_id)
    _save(state.replace(shopping_list=items))
    return _shopping_out(items)


@app.post("/api/shopping-list/checkout")
def api_checkout():
    """Move checked items into the pantry and drop them from the list."""
    state = _load()
    pantry, remaining = ledger.checkout(state.pantry, state.shopping_list)
    _save(state.replace(pantry=pantry, shopping_list=remaining))
    ledger.notify_low_stock(pantry)
    return {"pantry": [p.to_dict() for p in pantry], **_shopping_out(remaining)}


# -------------------- API: Pantry --------------------
@app.get("/api/pantry")
def api_pantry(search: str = Query(default=""), category: Optional[str] = Query(default=None)):
    state = _load()
    items = ledger.filter_items(state.pantry, search, category)
    return {
        "items": [p.to_dict() for p in items],
        "by_category": {c: [p.to_dict() for p in group] for c, group in ledger.group_by_category(items).items()},
        "low_stock": [p.to_dict() for p in ledger.low_stock_items(state.pantry)],
    }


@app.post("/api/pantry", status_code=201)
def api_add_pantry_item(data: dict = Body(...)):
    state = _load()
    pantry = ledger.add_item(state.pantry, data)
    _save(state.replace(pantry=pantry))
    return api_pantry(search="", category=None)


@app.patch("/api/pantry/{item_id}")
def api_update_pantry_item(item_id: str, data: dict = Body(...)):
    """Body ``{"delta": n}`` adjusts, ``{"quantity": n}`` sets. Zero or below removes the item."""
    state = _load()
    _require_pantry_item(state, item_id)
    if "delta" in data:
        pantry = ledger.adjust_quantity(state.pantry, item_id, data["delta"])
    elif "quantity" in data:
        pantry = ledger.set_quantity(state.pantry, item_id, data["quantity"])
    else:
        raise HTTPException(status_code=400, detail="Expected 'delta' or 'quantity'")
    _save(state.replace(pantry=pantry))
    ledger.notify_low_stock(pantry, item_ids={item_id})
    item = next((p for p in pantry if p.id == item_id), None)
    return {"item": item.to_dict() if item else None, "removed": item is None}


@app.delete("/api/pantry/{item_id}")
def api_delete_pantry_item(item_id: str):
    state = _load()
    _require_pantry_item(state, item_id)
    _save(state.replace(pantry=ledger.remove_item(state.pantry, item_id)))
    return {"deleted": item_id}


# -------------------- API: Receipts --------------------
@app.get("/api/receipts")
def api_receipts():
    receipts = _load().receipts
    return {
        "receipts": [r.to_dict() for r in receipts],
        "total_spend": intake.total_receipt_spend(receipts),
    }


@app.post("/api/receipts/scan")
def api_receipt_from_scan(payload: dict = Body(...)):
    """Convert receipt-extraction JSON into a draft receipt; nothing is stored."""
    return intake.receipt_from_scan(payload).to_dict()


@app.post("/api/receipts/draft/items")
def api_draft_add_item(data: dict = Body(...)):
    draft = intake.receipt_from_scan(data.get("receipt") or {})
    return intake.add_receipt_item(draft, data.get("item") or {}).to_dict()


@app.post("/api/receipts/draft/items/remove")
def api_draft_remove_item(data: dict = Body(...)):
    draft = intake.receipt_from_scan(data.get("receipt") or {})
    # scan parsing issues fresh ids, so the draft lines are matched by position
    index = data.get("index")
    if not isinstance(index, int) or not 0 <= index < len(draft.items):
        raise HTTPException(status_code=404, detail="Receipt item not found")
    return intake.remove_receipt_item(draft, draft.items[index].id).to_dict()


@app.post("/api/receipts", status_code=201)
def api_record_receipt(data: dict = Body(...)):
    """Store a finished receipt and push its prices into recipes and pantry."""
    state = _load()
    receipt = intake.receipt_from_scan(data)
    state, result = intake.record_receipt(state, receipt)
    _save(state)
    recorded = state.receipts[-1]
    publish_reconciled(recorded, result)
    spent = monthly_spend(state.receipts, recorded.date.month, recorded.date.year)
    publish_budget_status(budget_status(spent, state.settings.monthly_budget))
    return {"receipt": recorded.to_dict(), "changes": [c.to_dict() for c in result.changes]}


@app.delete("/api/receipts/{receipt_id}")
def api_delete_receipt(receipt_id: str):
    state = _load()
    if not any(r.id == receipt_id for r in state.receipts):
        raise HTTPException(status_code=404, detail="Receipt not found")
    _save(state.replace(receipts=intake.delete_receipt(state.receipts, receipt_id)))
    return {"deleted": receipt_id}


# -------------------- API: Budget --------------------
@app.get("/api/budget")
def api_budget(month: Optional[int] = Query(default=None, ge=1, le=12), year: Optional[int] = Query(default=None)):
    today = _date.today()
    return generate_report(_load(), month or today.month, year or today.year, today)


# -------------------- API: Settings --------------------
@app.get("/api/settings")
def api_settings():
    return _load().settings.to_dict()


@app.put("/api/settings")
def api_update_settings(data: dict = Body(...)):
    valid = SettingsInput.model_validate(data)
    state = _load()
    settings = Settings(valid.monthly_budget, valid.stores, valid.family_members)
    _save(state.replace(settings=settings))
    return settings.to_dict()


def _edit_settings(edit):
    state = _load()
    settings = edit(state.settings)
    _save(state.replace(settings=settings))
    return settings.to_dict()


@app.post("/api/settings/stores")
def api_add_store(data: dict = Body(...)):
    return _edit_settings(lambda s: s.add_store(data.get("name")))


@app.delete("/api/settings/stores/{name}")
def api_remove_store(name: str):
    return _edit_settings(lambda s: s.remove_store(name))


@app.post("/api/settings/members")
def api_add_member(data: dict = Body(...)):
    return _edit_settings(lambda s: s.add_member(data.get("name")))


@app.delete("/api/settings/members/{name}")
def api_remove_member(name: str):
    return _edit_settings(lambda s: s.remove_member(name))


# -------------------- API: Alerts --------------------
@app.get("/api/alerts")
def api_alerts(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
):
    """
    Return recent ledger events (low stock, reconciliations, budget alerts).

    Client polling strategy:
        1. First call without 'since' to load current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/alerts?since=<next_cursor>
    """
    if since is None and not get_web_events(None)['events']:
        # first poll of a fresh process: surface what is already low in the pantry
        ledger.notify_low_stock(_load().pantry)
    return get_web_events(since)


@app.get("/api/options")
def api_options():
    """Choice lists used by the entry forms."""
    return {
        "days": DAYS,
        "mealTypes": MEAL_TYPES,
        "pantryCategories": PANTRY_CATEGORIES,
        "units": UNITS,
        "recipeTags": RECIPE_TAGS,
        "stores": _load().settings.stores,
    }
