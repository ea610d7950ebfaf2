import unittest
from datetime import date
from kitchen.domain.Ingredient import Ingredient
from kitchen.domain.Plan import PlanKey, PlannedMeal, plan_from_dict, plan_to_dict
from kitchen.domain.Recipe import Recipe
from kitchen.logic.planning import planner


class TestPlanKey(unittest.TestCase):

    def test_encode_decode(self):
        key = PlanKey.build("2024-03-04", "Monday", "Lunch (Kids)")
        self.assertEqual(key.encode(), "2024-03-04|Monday|Lunch (Kids)")
        self.assertEqual(PlanKey.decode(key.encode()), key)

    def test_separator_rejected(self):
        with self.assertRaises(ValueError):
            PlanKey.build("2024-03-04", "Mon|day", "Dinner")
        with self.assertRaises(ValueError):
            PlanKey.build("", "Monday", "Dinner")

    def test_decode_bad_keys(self):
        self.assertIsNone(PlanKey.decode("2024-03-04|Monday"))
        self.assertIsNone(PlanKey.decode("a|b|c|d"))
        self.assertIsNone(PlanKey.decode("2024-03-04||Dinner"))

    def test_plan_blob_skips_unreadable_keys(self):
        plan = plan_from_dict({
            "2024-03-04|Monday|Dinner": {"recipeId": "r1", "recipeName": "Tacos", "totalCost": "8.5", "servings": 4},
            "garbage": {"recipeId": "r2"},
        })
        self.assertEqual(list(plan), [PlanKey("2024-03-04", "Monday", "Dinner")])
        self.assertEqual(plan_to_dict(plan)["2024-03-04|Monday|Dinner"]["totalCost"], 8.5)


class TestPlanner(unittest.TestCase):

    def setUp(self):
        self.recipe = Recipe(name="Tacos", servings=4, id="tacos",
                             ingredients=[Ingredient("Beef", 1, "lbs", None, 6.00)])

    def test_assign_takes_snapshot(self):
        plan = planner.assign_meal({}, "2024-03-04", "Monday", "Dinner", self.recipe)
        self.recipe.ingredients[0].price = 20
        self.recipe.total_cost = 20
        meal = plan[PlanKey("2024-03-04", "Monday", "Dinner")]
        self.assertEqual(meal, PlannedMeal("tacos", "Tacos", 6.00, 4))

    def test_assign_validates_slot(self):
        with self.assertRaises(ValueError):
            planner.assign_meal({}, "2024-03-04", "Someday", "Dinner", self.recipe)
        with self.assertRaises(ValueError):
            planner.assign_meal({}, "2024-03-04", "Monday", "Brunch", self.recipe)
        with self.assertRaises(ValueError):
            planner.assign_meal({}, "not a date", "Monday", "Dinner", self.recipe)

    def test_clear_meal(self):
        plan = planner.assign_meal({}, date(2024, 3, 4), "Monday", "Dinner", self.recipe)
        self.assertEqual(planner.clear_meal(plan, "2024-03-04", "Monday", "Dinner"), {})
        self.assertEqual(len(plan), 1)

    def test_week_entries_order_and_summary(self):
        plan = {}
        for day, meal_type in [("Friday", "Dinner"), ("Monday", "Snack"), ("Monday", "Breakfast")]:
            plan = planner.assign_meal(plan, "2024-03-04", day, meal_type, self.recipe)
        plan = planner.assign_meal(plan, "2024-03-11", "Monday", "Dinner", self.recipe)
        entries = planner.week_entries(plan, "2024-03-04")
        self.assertEqual([(k.day, k.meal_type) for k, _ in entries],
                         [("Monday", "Breakfast"), ("Monday", "Snack"), ("Friday", "Dinner")])
        summary = planner.week_summary(plan, "2024-03-04")
        self.assertEqual(summary["meal_count"], 3)
        self.assertAlmostEqual(summary["planned_cost"], 18.0)
        self.assertAlmostEqual(summary["average_per_meal"], 6.0)

    def test_empty_week_summary(self):
        self.assertEqual(planner.week_summary({}, "2024-03-04")["average_per_meal"], 0)

    def test_week_label(self):
        self.assertEqual(planner.week_label("2024-02-26"), "Feb 26 - Mar 3")
