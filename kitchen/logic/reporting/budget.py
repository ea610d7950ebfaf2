"""Budget and spend rollups.

Read-only computations over receipts, recipes and the weekly plan. Nothing in
here mutates its inputs or publishes events; callers decide what to do with a
BudgetStatus (the HTTP layer turns it into budget.* alerts).
"""
from __future__ import annotations
import logging
import math
from collections import defaultdict
from dataclasses import dataclass, asdict
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from kitchen.utilities.config import BUDGET_WARNING_PERCENT
from kitchen.utilities.constants import (
    BUDGET_EXCEEDED_PERCENT, DATE_FORMAT, HISTORY_WEEKS, RANKING_SIZE, UNKNOWN_STORE,
)
from kitchen.utilities.validators import to_number

logger = logging.getLogger(__name__)


@dataclass
class BudgetStatus:
    spent: float
    budget: float
    used_percent: float
    warning: bool
    exceeded: bool

    @property
    def remaining(self) -> float:
        return self.budget - self.spent

    def to_dict(self):
        data = asdict(self)
        data['remaining'] = self.remaining
        return data


def _in_month(receipt, month: int, year: int) -> bool:
    return receipt.date is not None and receipt.date.month == month and receipt.date.year == year


def _cents(amounts) -> float:
    # money sums are exact to the cent
    return round(math.fsum(amounts), 2)


def monthly_spend(receipts, month: int, year: int) -> float:
    """Sum of receipt totals dated in ``month`` (1-12) of ``year``."""
    return _cents(to_number(r.total) for r in receipts if _in_month(r, month, year))


def total_receipt_spend(receipts) -> float:
    return _cents(to_number(r.total) for r in receipts)


def week_start_for(day: Optional[date] = None, offset: int = 0) -> date:
    """Monday of the calendar week containing ``day``, shifted by ``offset`` weeks."""
    day = day or date.today()
    return day - timedelta(days=day.weekday()) + timedelta(weeks=offset)


def current_week_planned_cost(weekly_plan, today: Optional[date] = None) -> float:
    target = week_start_for(today).strftime(DATE_FORMAT)
    return sum(to_number(meal.total_cost) for key, meal in weekly_plan.items() if key.week_start == target)


def spend_by_store(receipts, month: int, year: int) -> Dict[str, float]:
    amounts: Dict[str, List[float]] = defaultdict(list)
    for r in receipts:
        if _in_month(r, month, year):
            amounts[r.store or UNKNOWN_STORE].append(to_number(r.total))
    return {store: _cents(values) for store, values in amounts.items()}


def weekly_cost_history(weekly_plan, limit: Optional[int] = None) -> List[Tuple[str, float]]:
    """Planned cost per week start, oldest first; ``limit`` keeps the most recent weeks."""
    totals: Dict[str, float] = defaultdict(float)
    for key, meal in weekly_plan.items():
        totals[key.week_start] += to_number(meal.total_cost)
    history = sorted(totals.items())
    if limit is not None:
        history = history[-limit:] if limit > 0 else []
    return history


def rank_recipes_by_cost(recipes, n: int = RANKING_SIZE, ascending: bool = False):
    return sorted(recipes, key=lambda r: to_number(r.total_cost), reverse=not ascending)[:n]


def classify_budget(used_percent: float) -> Tuple[bool, bool]:
    """Return (warning, exceeded) for a used percentage."""
    return used_percent >= BUDGET_WARNING_PERCENT, used_percent >= BUDGET_EXCEEDED_PERCENT


def budget_status(spent: float, monthly_budget: float) -> BudgetStatus:
    budget = to_number(monthly_budget)
    spent = round(to_number(spent), 2)
    used_percent = round(spent * 100 / budget, 6) if budget > 0 else 0.0
    warning, exceeded = classify_budget(used_percent)
    return BudgetStatus(spent, budget, used_percent, warning, exceeded)


def _recipe_row(recipe) -> Dict[str, Any]:
    return {'id': recipe.id, 'name': recipe.name, 'totalCost': recipe.total_cost, 'servings': recipe.servings}


def generate_report(state, month: int, year: int, today: Optional[date] = None) -> Dict[str, Any]:
    """Assemble the budget dashboard for ``month``/``year``.

    Returns:
        {
          'month': int, 'year': int,
          'current_week': {'week_start': 'YYYY-MM-DD', 'planned_cost': float},
          'monthly_spend': float,
          'budget': BudgetStatus.to_dict(),
          'stores': [{'store': str, 'amount': float}, ...],      # largest first
          'weekly_history': [{'week_start': str, 'cost': float}, ...],
          'most_expensive': [recipe rows], 'cheapest': [recipe rows],
          'all_time_spend': float,
        }
    """
    spent = monthly_spend(state.receipts, month, year)
    status = budget_status(spent, state.settings.monthly_budget)
    stores = sorted(spend_by_store(state.receipts, month, year).items(), key=lambda kv: kv[1], reverse=True)
    report = {
        'month': month,
        'year': year,
        'current_week': {
            'week_start': week_start_for(today).strftime(DATE_FORMAT),
            'planned_cost': current_week_planned_cost(state.weekly_plan, today),
        },
        'monthly_spend': spent,
        'budget': status.to_dict(),
        'stores': [{'store': s, 'amount': a} for s, a in stores],
        'weekly_history': [{'week_start': w, 'cost': c}
                           for w, c in weekly_cost_history(state.weekly_plan, HISTORY_WEEKS)],
        'most_expensive': [_recipe_row(r) for r in rank_recipes_by_cost(state.recipes)],
        'cheapest': [_recipe_row(r) for r in rank_recipes_by_cost(state.recipes, ascending=True)],
        'all_time_spend': total_receipt_spend(state.receipts),
    }
    logger.debug("Budget report %02d/%d: spent %.2f of %.2f (%.1f%%)",
                 month, year, status.spent, status.budget, status.used_percent)
    return report


__all__ = [
    'BudgetStatus', 'monthly_spend', 'total_receipt_spend', 'week_start_for', 'current_week_planned_cost',
    'spend_by_store', 'weekly_cost_history', 'rank_recipes_by_cost', 'classify_budget', 'budget_status',
    'generate_report',
]
