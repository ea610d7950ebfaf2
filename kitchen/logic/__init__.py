"""Core ledger logic layer.

Subpackages:
- matching: item name identity
- costs: recipe totals, per-serving cost and scaling
- reconcile: receipt price propagation into recipes and pantry
- shopping: building and editing the shopping list
- reporting: budget and spend rollups
- pantry: pantry quantity ledger
- recipes: recipe library edits
- planning: weekly meal plan
- receipts: receipt and recipe intake
"""
__all__ = ["matching", "costs", "reconcile", "shopping", "reporting", "pantry", "recipes", "planning", "receipts"]
