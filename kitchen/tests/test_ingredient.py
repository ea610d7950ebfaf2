import unittest
from kitchen.domain.Ingredient import Ingredient
from kitchen.logic.matching.names import matches, normalize_name


class TestIngredient(unittest.TestCase):

    def test_from_dict_coerces_malformed_numbers(self):
        ingredient = Ingredient.from_dict({"name": "Rice", "quantity": "abc", "unit": "cups", "price": "n/a"})
        self.assertEqual(ingredient.quantity, 0)
        self.assertEqual(ingredient.price, 0)

    def test_from_dict_blank_store_is_none(self):
        ingredient = Ingredient.from_dict({"name": "Rice", "store": "  ", "price": "2.5"})
        self.assertIsNone(ingredient.store)
        self.assertEqual(ingredient.price, 2.5)

    def test_round_trip(self):
        ingredient = Ingredient("Egg", 6, "whole", "Food Lion", 3.29)
        self.assertEqual(Ingredient.from_dict(ingredient.to_dict()), ingredient)


class TestNameMatching(unittest.TestCase):

    def test_case_and_whitespace_are_ignored(self):
        names = ["Tomato ", "tomato", "TOMATO"]
        for a in names:
            for b in names:
                self.assertTrue(matches(a, b), f"{a!r} vs {b!r}")

    def test_no_stemming(self):
        self.assertFalse(matches("Tomatoes", "Tomato"))

    def test_blank_names_never_match(self):
        self.assertFalse(matches("", ""))
        self.assertFalse(matches("   ", "   "))
        self.assertFalse(matches(None, None))

    def test_normalize_name(self):
        self.assertEqual(normalize_name("  Green Onion "), "green onion")
        self.assertEqual(normalize_name(42), "")
