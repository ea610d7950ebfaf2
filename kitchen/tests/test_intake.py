import unittest
from datetime import date
from kitchen.domain.Ingredient import Ingredient
from kitchen.domain.LedgerState import LedgerState
from kitchen.domain.PantryItem import PantryItem
from kitchen.domain.Receipt import Receipt, ReceiptItem
from kitchen.domain.Recipe import Recipe
from kitchen.logic.receipts import intake


class TestReceiptScan(unittest.TestCase):

    def test_defaults_for_malformed_lines(self):
        receipt = intake.receipt_from_scan({
            "store": " Food Lion ",
            "date": "2024-03-09",
            "items": [
                {"name": "Milk", "quantity": "x", "unit": "gal", "price": "3.49"},
                {"name": "Bread", "price": "??"},
                {"name": "", "price": 9},
            ],
            "total": "12.00",
        })
        self.assertEqual(receipt.store, "Food Lion")
        self.assertEqual(receipt.date, date(2024, 3, 9))
        self.assertEqual([i.name for i in receipt.items], ["Milk", "Bread"])
        self.assertEqual(receipt.items[0].quantity, 1)
        self.assertEqual(receipt.items[1].price, 0)
        self.assertEqual(receipt.total, 12.0)

    def test_overlong_line_name_is_cut(self):
        receipt = intake.receipt_from_scan({
            "store": "Food Lion",
            "items": [{"name": "X" * 500, "price": 2.5}, {"name": "Milk", "price": 3.49}],
        }, today=date(2024, 3, 9))
        self.assertEqual(len(receipt.items), 2)
        self.assertEqual(receipt.items[0].name, "X" * 200)
        self.assertAlmostEqual(receipt.total, 5.99)

    def test_missing_total_and_date(self):
        receipt = intake.receipt_from_scan({"items": [{"name": "A", "price": 1.25}, {"name": "B", "price": 2}]},
                                           today=date(2024, 1, 5))
        self.assertAlmostEqual(receipt.total, 3.25)
        self.assertEqual(receipt.date, date(2024, 1, 5))
        self.assertEqual(receipt.store, "")

    def test_recipe_scan_to_form_data(self):
        draft = intake.recipe_from_scan({
            "name": "Pancakes", "servings": "two",
            "ingredients": [{"name": "Flour", "quantity": 2, "unit": "cups"}, "junk"],
        })
        self.assertEqual(draft["servings"], 4)
        self.assertEqual(draft["ingredients"], [
            {"name": "Flour", "quantity": "2", "unit": "cups", "store": None, "price": 0},
        ])


class TestDraftReceipt(unittest.TestCase):

    def setUp(self):
        self.draft = Receipt("Food Lion", date(2024, 3, 9), items=[ReceiptItem("Milk", 1, "gal", 3.49, id="m")],
                             total=3.49)

    def test_add_item_updates_total(self):
        updated = intake.add_receipt_item(self.draft, {"name": "Eggs", "price": 2.51})
        self.assertEqual(len(updated.items), 2)
        self.assertAlmostEqual(updated.total, 6.00)
        self.assertEqual(len(self.draft.items), 1)

    def test_add_item_requires_positive_price(self):
        with self.assertRaises(ValueError):
            intake.add_receipt_item(self.draft, {"name": "Eggs", "price": 0})
        with self.assertRaises(ValueError):
            intake.add_receipt_item(self.draft, {"name": " ", "price": 2})

    def test_remove_item_updates_total(self):
        updated = intake.remove_receipt_item(self.draft, "m")
        self.assertEqual(updated.items, [])
        self.assertAlmostEqual(updated.total, 0)


class TestRecordReceipt(unittest.TestCase):

    def setUp(self):
        self.recipe = Recipe(name="Cereal", servings=1, id="c", ingredients=[Ingredient("Milk", 1, "cups", None, 3.00)])
        self.state = LedgerState(
            recipes=[self.recipe],
            pantry=[PantryItem("Milk", 1, "gal", "Dairy", 3.00, date(2024, 1, 1), id="pm")],
        )
        self.receipt = Receipt("Food Lion", date(2024, 3, 9), items=[ReceiptItem("milk", 1, "gal", 3.49)], total=3.49)

    def test_record_appends_and_reconciles(self):
        new_state, result = intake.record_receipt(self.state, self.receipt)
        self.assertEqual(len(new_state.receipts), 1)
        self.assertIsNotNone(new_state.receipts[0].created_at)
        self.assertEqual(new_state.recipes[0].ingredients[0].price, 3.49)
        self.assertEqual(new_state.recipes[0].total_cost, 3.49)
        self.assertEqual(new_state.pantry[0].last_purchase_date, date(2024, 3, 9))
        self.assertEqual(len(result.recipe_changes), 1)
        self.assertEqual(self.state.receipts, [])
        self.assertEqual(self.state.recipes[0].total_cost, 3.00)

    def test_record_requires_store_and_items(self):
        with self.assertRaises(ValueError):
            intake.record_receipt(self.state, Receipt("", date(2024, 3, 9), items=self.receipt.items))
        with self.assertRaises(ValueError):
            intake.record_receipt(self.state, Receipt("Food Lion", date(2024, 3, 9)))

    def test_delete_and_total_spend(self):
        state, _ = intake.record_receipt(self.state, self.receipt)
        self.assertAlmostEqual(intake.total_receipt_spend(state.receipts), 3.49)
        self.assertEqual(intake.delete_receipt(state.receipts, state.receipts[0].id), [])
