"""Item name identity shared by recipes, pantry, shopping list and receipts.

Two names denote the same item when they are equal after trimming and
lower-casing. There is deliberately no stemming: "Tomatoes" is not "Tomato".
"""
from typing import Any

__all__ = ["normalize_name", "matches"]


def normalize_name(name: Any) -> str:
    if not isinstance(name, str):
        return ""
    return name.strip().lower()


def matches(a: Any, b: Any) -> bool:
    """True when ``a`` and ``b`` name the same item. Blank names match nothing."""
    key = normalize_name(a)
    return bool(key) and key == normalize_name(b)
