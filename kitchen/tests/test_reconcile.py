import unittest
from datetime import date
from kitchen.domain.Ingredient import Ingredient
from kitchen.domain.PantryItem import PantryItem
from kitchen.domain.Receipt import Receipt, ReceiptItem
from kitchen.domain.Recipe import Recipe
from kitchen.logic.reconcile.prices import PANTRY_CHANGE, RECIPE_CHANGE, reconcile_receipt, refresh_pantry_prices


class TestReconcileReceipt(unittest.TestCase):

    def setUp(self):
        self.tacos = Recipe(name="Tacos", servings=4, id="tacos", ingredients=[
            Ingredient("Ground Beef", 1, "lbs", "Food Lion", 5.00),
            Ingredient("Tortillas", 1, "bags", None, 2.50),
        ])
        self.chili = Recipe(name="Chili", servings=6, id="chili", ingredients=[
            Ingredient("ground beef ", 2, "lbs", "Whole Foods", 11.00),
        ])
        self.salad = Recipe(name="Salad", servings=2, id="salad", ingredients=[
            Ingredient("Lettuce", 1, "heads", None, 1.99),
        ])
        self.recipes = [self.tacos, self.chili, self.salad]
        self.pantry = [
            PantryItem("Ground Beef", 1, "lbs", "Meat", 4.00, date(2024, 1, 2), id="p1"),
            PantryItem("Rice", 2, "bags", "Pantry", 3.00, date(2024, 1, 2), id="p2"),
        ]
        self.receipt = Receipt(store="Harris Teeter", date=date(2024, 3, 9), total=6.49,
                               items=[ReceiptItem("GROUND BEEF", 1, "lbs", 6.49)])

    def test_prices_propagate_to_every_matching_ingredient(self):
        result = reconcile_receipt(self.receipt, self.recipes, self.pantry)
        tacos, chili, salad = result.recipes
        self.assertEqual(tacos.ingredients[0].price, 6.49)
        self.assertEqual(tacos.ingredients[0].store, "Harris Teeter")
        self.assertEqual(chili.ingredients[0].price, 6.49)
        self.assertEqual(chili.ingredients[0].store, "Harris Teeter")
        self.assertAlmostEqual(tacos.total_cost, 8.99)
        self.assertAlmostEqual(chili.total_cost, 6.49)
        self.assertEqual(salad, self.salad)
        self.assertEqual(len(result.recipe_changes), 2)
        self.assertEqual(result.recipe_changes[0].old_price, 5.00)
        self.assertEqual(result.recipe_changes[0].ingredient_name, "Ground Beef")

    def test_pantry_price_and_date_refresh(self):
        result = reconcile_receipt(self.receipt, self.recipes, self.pantry)
        beef, rice = result.pantry
        self.assertEqual(beef.last_purchase_price, 6.49)
        self.assertEqual(beef.last_purchase_date, date(2024, 3, 9))
        self.assertEqual(beef.quantity, 1)
        self.assertEqual(rice, self.pantry[1])
        self.assertEqual([c.kind for c in result.pantry_changes], [PANTRY_CHANGE])

    def test_second_run_has_no_recipe_changes_but_still_touches_pantry(self):
        first = reconcile_receipt(self.receipt, self.recipes, self.pantry)
        second_receipt = Receipt(store="Harris Teeter", date=date(2024, 3, 16),
                                 items=[ReceiptItem("Ground Beef", 1, "lbs", 6.49)])
        second = reconcile_receipt(second_receipt, first.recipes, first.pantry)
        self.assertEqual(second.recipe_changes, [])
        self.assertEqual(second.recipes, first.recipes)
        self.assertEqual(len(second.pantry_changes), 1)
        self.assertEqual(second.pantry[0].last_purchase_date, date(2024, 3, 16))

    def test_inputs_are_not_mutated(self):
        before_recipes = [r.to_dict() for r in self.recipes]
        before_pantry = [p.to_dict() for p in self.pantry]
        reconcile_receipt(self.receipt, self.recipes, self.pantry)
        self.assertEqual([r.to_dict() for r in self.recipes], before_recipes)
        self.assertEqual([p.to_dict() for p in self.pantry], before_pantry)

    def test_total_invariant_after_reconciliation(self):
        result = reconcile_receipt(self.receipt, self.recipes, self.pantry)
        for recipe in result.recipes:
            self.assertAlmostEqual(recipe.total_cost, sum(i.price for i in recipe.ingredients))

    def test_unnamed_receipt_lines_are_ignored(self):
        receipt = Receipt(store="Food Lion", date=date(2024, 3, 9), items=[ReceiptItem("  ", 1, "", 1.00)])
        result = reconcile_receipt(receipt, self.recipes, self.pantry)
        self.assertEqual(result.changes, [])

    def test_change_log_kinds(self):
        result = reconcile_receipt(self.receipt, self.recipes, self.pantry)
        self.assertEqual([c.kind for c in result.changes], [RECIPE_CHANGE, RECIPE_CHANGE, PANTRY_CHANGE])
        self.assertEqual(result.changes[-1].to_dict()["target_name"], "Ground Beef")

    def test_refresh_pantry_prices_only(self):
        pantry, changes = refresh_pantry_prices(self.pantry, self.receipt)
        self.assertEqual(pantry[0].last_purchase_price, 6.49)
        self.assertEqual(len(changes), 1)
        self.assertEqual(self.pantry[0].last_purchase_price, 4.00)
