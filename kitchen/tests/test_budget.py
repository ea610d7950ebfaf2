import unittest
from datetime import date
from kitchen.domain.LedgerState import LedgerState
from kitchen.domain.Plan import PlanKey, PlannedMeal
from kitchen.domain.Receipt import Receipt
from kitchen.domain.Recipe import Recipe
from kitchen.domain.Ingredient import Ingredient
from kitchen.domain.Settings import Settings
from kitchen.logic.reporting.budget import (
    budget_status, classify_budget, current_week_planned_cost, generate_report, monthly_spend,
    rank_recipes_by_cost, spend_by_store, week_start_for, weekly_cost_history,
)


def _meal(cost):
    return PlannedMeal("r", "Meal", cost, 4)


class TestBudgetClassification(unittest.TestCase):

    def test_boundaries(self):
        self.assertEqual(classify_budget(89.99), (False, False))
        self.assertEqual(classify_budget(90.0), (True, False))
        self.assertEqual(classify_budget(99.99), (True, False))
        self.assertEqual(classify_budget(100.0), (True, True))

    def test_720_of_800_is_a_warning(self):
        status = budget_status(720, 800)
        self.assertEqual(status.used_percent, 90.0)
        self.assertTrue(status.warning)
        self.assertFalse(status.exceeded)
        self.assertEqual(status.remaining, 80)

    def test_zero_budget(self):
        status = budget_status(50, 0)
        self.assertEqual(status.used_percent, 0)
        self.assertFalse(status.warning)


class TestSpendRollups(unittest.TestCase):

    def setUp(self):
        self.receipts = [
            Receipt("Food Lion", date(2024, 3, 1), total=100.0),
            Receipt("Food Lion", date(2024, 3, 31), total=50.0),
            Receipt("", date(2024, 3, 15), total=20.0),
            Receipt("Whole Foods", date(2024, 4, 1), total=70.0),
            Receipt("Whole Foods", date(2023, 3, 10), total=5.0),
        ]

    def test_monthly_spend(self):
        self.assertEqual(monthly_spend(self.receipts, 3, 2024), 170.0)
        self.assertEqual(monthly_spend(self.receipts, 4, 2024), 70.0)
        self.assertEqual(monthly_spend(self.receipts, 5, 2024), 0)

    def test_several_receipts_reach_the_warning_exactly(self):
        receipts = [
            Receipt("Food Lion", date(2024, 3, 2), total=0.27),
            Receipt("Food Lion", date(2024, 3, 9), total=674.06),
            Receipt("Harris Teeter", date(2024, 3, 16), total=45.67),
        ]
        spent = monthly_spend(receipts, 3, 2024)
        self.assertEqual(spent, 720.0)
        status = budget_status(spent, 800)
        self.assertEqual(status.used_percent, 90.0)
        self.assertTrue(status.warning)
        self.assertFalse(status.exceeded)
        self.assertEqual(spend_by_store(receipts, 3, 2024), {"Food Lion": 674.33, "Harris Teeter": 45.67})

    def test_spend_by_store_defaults_unknown(self):
        self.assertEqual(spend_by_store(self.receipts, 3, 2024), {"Food Lion": 150.0, "Unknown": 20.0})


class TestWeeklyRollups(unittest.TestCase):

    def test_week_start_is_monday(self):
        self.assertEqual(week_start_for(date(2024, 3, 4)), date(2024, 3, 4))
        self.assertEqual(week_start_for(date(2024, 3, 7)), date(2024, 3, 4))
        # Sunday belongs to the week that started the previous Monday
        self.assertEqual(week_start_for(date(2024, 3, 10)), date(2024, 3, 4))
        self.assertEqual(week_start_for(date(2024, 3, 10), offset=1), date(2024, 3, 11))

    def test_current_week_planned_cost(self):
        plan = {
            PlanKey("2024-03-04", "Monday", "Dinner"): _meal(12.5),
            PlanKey("2024-03-04", "Friday", "Lunch"): _meal(7.5),
            PlanKey("2024-02-26", "Monday", "Dinner"): _meal(99),
        }
        self.assertEqual(current_week_planned_cost(plan, today=date(2024, 3, 10)), 20.0)

    def test_weekly_history_sorted_and_truncated(self):
        plan = {
            PlanKey("2024-03-11", "Monday", "Dinner"): _meal(3),
            PlanKey("2023-12-25", "Monday", "Dinner"): _meal(1),
            PlanKey("2024-03-04", "Monday", "Dinner"): _meal(2),
            PlanKey("2024-03-04", "Sunday", "Snack"): _meal(2),
        }
        self.assertEqual(weekly_cost_history(plan),
                         [("2023-12-25", 1), ("2024-03-04", 4), ("2024-03-11", 3)])
        self.assertEqual(weekly_cost_history(plan, limit=2), [("2024-03-04", 4), ("2024-03-11", 3)])

    def test_rank_recipes(self):
        recipes = [Recipe(name=n, servings=1, ingredients=[Ingredient(n, 1, "", None, c)]) for n, c in
                   [("a", 5), ("b", 9), ("c", 1), ("d", 9)]]
        self.assertEqual([r.name for r in rank_recipes_by_cost(recipes, 3)], ["b", "d", "a"])
        self.assertEqual([r.name for r in rank_recipes_by_cost(recipes, 2, ascending=True)], ["c", "a"])


class TestGenerateReport(unittest.TestCase):

    def test_report_combines_rollups(self):
        recipe = Recipe(name="Tacos", servings=4, id="t", ingredients=[Ingredient("Beef", 1, "lbs", None, 6)])
        state = LedgerState(
            recipes=[recipe],
            receipts=[Receipt("Food Lion", date(2024, 3, 2), total=720.0)],
            weekly_plan={PlanKey("2024-03-04", "Monday", "Dinner"): PlannedMeal.snapshot(recipe)},
            settings=Settings(monthly_budget=800),
        )
        report = generate_report(state, 3, 2024, today=date(2024, 3, 6))
        self.assertEqual(report["monthly_spend"], 720.0)
        self.assertTrue(report["budget"]["warning"])
        self.assertFalse(report["budget"]["exceeded"])
        self.assertEqual(report["current_week"], {"week_start": "2024-03-04", "planned_cost": 6})
        self.assertEqual(report["stores"], [{"store": "Food Lion", "amount": 720.0}])
        self.assertEqual(report["weekly_history"], [{"week_start": "2024-03-04", "cost": 6}])
        self.assertEqual(report["most_expensive"][0]["name"], "Tacos")
