"""Weekly meal planner.

The plan maps PlanKey(week_start, day, meal_type) to a PlannedMeal snapshot.
Snapshots keep the cost the recipe had when it was planned.
"""
from __future__ import annotations
import copy
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple, Union

from kitchen.domain.Plan import PlanKey, PlannedMeal
from kitchen.utilities.constants import DATE_FORMAT, DAYS, MEAL_TYPES
from kitchen.utilities.validators import to_date, to_number

logger = logging.getLogger(__name__)

__all__ = ["assign_meal", "clear_meal", "week_entries", "week_summary", "week_label", "slot_key"]

Plan = Dict[PlanKey, PlannedMeal]


def _week_text(week_start: Union[str, date]) -> str:
    if isinstance(week_start, date):
        return week_start.strftime(DATE_FORMAT)
    parsed = to_date(week_start)
    if parsed is None:
        raise ValueError(f"Week start must be a YYYY-MM-DD date: {week_start!r}")
    return parsed.strftime(DATE_FORMAT)


def slot_key(week_start: Union[str, date], day: str, meal_type: str) -> PlanKey:
    if day not in DAYS:
        raise ValueError(f"Unknown day {day!r}")
    if meal_type not in MEAL_TYPES:
        raise ValueError(f"Unknown meal type {meal_type!r}")
    return PlanKey.build(_week_text(week_start), day, meal_type)


def assign_meal(plan: Plan, week_start, day: str, meal_type: str, recipe) -> Plan:
    """Put a snapshot of ``recipe`` in the slot, replacing whatever was there."""
    key = slot_key(week_start, day, meal_type)
    updated = copy.deepcopy(plan)
    updated[key] = PlannedMeal.snapshot(recipe)
    logger.debug("Planned %s for %s", recipe.name, key.encode())
    return updated


def clear_meal(plan: Plan, week_start, day: str, meal_type: str) -> Plan:
    key = slot_key(week_start, day, meal_type)
    return {k: copy.deepcopy(v) for k, v in plan.items() if k != key}


def week_entries(plan: Plan, week_start) -> List[Tuple[PlanKey, PlannedMeal]]:
    """Entries of one week in day then meal-type order."""
    target = _week_text(week_start)
    entries = [(k, v) for k, v in plan.items() if k.week_start == target]

    def order(entry):
        key = entry[0]
        return (DAYS.index(key.day) if key.day in DAYS else len(DAYS),
                MEAL_TYPES.index(key.meal_type) if key.meal_type in MEAL_TYPES else len(MEAL_TYPES))

    return sorted(entries, key=order)


def week_summary(plan: Plan, week_start) -> Dict[str, float]:
    entries = week_entries(plan, week_start)
    cost = sum(to_number(meal.total_cost) for _, meal in entries)
    count = len(entries)
    return {
        "week_start": _week_text(week_start),
        "planned_cost": cost,
        "meal_count": count,
        "average_per_meal": cost / count if count else 0.0,
    }


def week_label(week_start: Optional[Union[str, date]]) -> str:
    """Human label such as ``Oct 19 - Oct 25``."""
    monday = to_date(week_start)
    if monday is None:
        raise ValueError(f"Week start must be a YYYY-MM-DD date: {week_start!r}")
    sunday = monday + timedelta(days=6)
    return f"{monday:%b} {monday.day} - {sunday:%b} {sunday.day}"
