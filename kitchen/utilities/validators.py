"""
Input validation schemas using Pydantic for better data integrity.

Numeric fields follow a "best effort" policy: anything that cannot be read as
a finite number is coerced instead of rejected. Structural problems (empty
names, servings below one) are still rejected with a ValidationError.
"""
import math
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kitchen.utilities.constants import DATE_FORMAT, DEFAULT_CATEGORY

INGREDIENT_NAME_LIMIT = 100
RECEIPT_ITEM_NAME_LIMIT = 200


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce a user/scan supplied value to a float, falling back to ``default``."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    return number if math.isfinite(number) else default


def to_date(value: Any, default: Optional[date] = None) -> Optional[date]:
    """Parse an ISO date (or datetime) value, returning ``default`` when unreadable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.strptime(text[:10], DATE_FORMAT).date()
        except ValueError:
            return default
    return default


def _clean_strings(values: Any) -> List[str]:
    if not isinstance(values, (list, tuple, set)):
        return []
    result: List[str] = []
    for v in values:
        if isinstance(v, str) and v.strip() and v.strip() not in result:
            result.append(v.strip())
    return result


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class IngredientInput(_CamelModel):
    """Schema for a recipe ingredient."""
    name: str = Field(..., min_length=1, max_length=INGREDIENT_NAME_LIMIT)
    quantity: float = 0.0
    unit: str = ""
    store: Optional[str] = None
    price: float = 0.0

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip()[:INGREDIENT_NAME_LIMIT] if isinstance(v, str) else v

    @field_validator('unit', mode='before')
    @classmethod
    def default_unit(cls, v):
        return v.strip() if isinstance(v, str) else ""

    @field_validator('store', mode='before')
    @classmethod
    def blank_store_is_none(cls, v):
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None

    @field_validator('quantity', 'price', mode='before')
    @classmethod
    def coerce_number(cls, v):
        """Malformed numbers count as zero; quantities are never negative."""
        return max(to_number(v), 0.0)


class RecipeInput(_CamelModel):
    """Schema for recipe creation."""
    name: str = Field(..., min_length=1, max_length=200)
    servings: int = Field(4, ge=1)
    tags: List[str] = Field(default_factory=list)
    ingredients: List[IngredientInput] = Field(default_factory=list)
    prep_time: str = Field("", alias="prepTime")
    cook_time: str = Field("", alias="cookTime")
    instructions: str = ""
    notes: str = ""
    family_members: List[str] = Field(default_factory=list, alias="familyMembers")
    is_favorite: bool = Field(False, alias="isFavorite")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate recipe name."""
        if not v.strip():
            raise ValueError('Recipe name cannot be empty')
        return v.strip()

    @field_validator('tags', 'family_members', mode='before')
    @classmethod
    def clean_lists(cls, v):
        return _clean_strings(v)

    @field_validator('ingredients', mode='before')
    @classmethod
    def drop_unnamed_ingredients(cls, v):
        """Ingredients without a name are form leftovers, not data."""
        if not isinstance(v, list):
            return []
        return [i for i in v if not isinstance(i, dict) or str(i.get('name') or '').strip()]


class ReceiptItemInput(_CamelModel):
    """Schema for a single receipt line."""
    name: str = Field(..., min_length=1, max_length=RECEIPT_ITEM_NAME_LIMIT)
    quantity: float = 1.0
    unit: str = ""
    price: float = 0.0

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        """Overlong scanned names are cut, not rejected."""
        return v.strip()[:RECEIPT_ITEM_NAME_LIMIT] if isinstance(v, str) else v

    @field_validator('unit', mode='before')
    @classmethod
    def default_unit(cls, v):
        return v.strip() if isinstance(v, str) else ""

    @field_validator('quantity', mode='before')
    @classmethod
    def quantity_defaults_to_one(cls, v):
        return to_number(v) or 1.0

    @field_validator('price', mode='before')
    @classmethod
    def coerce_price(cls, v):
        return to_number(v)


class ReceiptScanInput(_CamelModel):
    """Parsed receipt-extraction payload handed over by the scan collaborator."""
    store: str = ""
    purchase_date: Optional[date] = Field(None, alias="date")
    items: List[ReceiptItemInput] = Field(default_factory=list)
    total: Optional[float] = None

    @field_validator('store', mode='before')
    @classmethod
    def clean_store(cls, v):
        return v.strip() if isinstance(v, str) else ""

    @field_validator('purchase_date', mode='before')
    @classmethod
    def parse_date(cls, v):
        return to_date(v)

    @field_validator('items', mode='before')
    @classmethod
    def drop_unnamed_items(cls, v):
        if not isinstance(v, list):
            return []
        return [i for i in v if isinstance(i, dict) and str(i.get('name') or '').strip()]

    @field_validator('total', mode='before')
    @classmethod
    def coerce_total(cls, v):
        total = to_number(v)
        return total or None


class RecipeScanIngredient(_CamelModel):
    name: str = ""
    quantity: str = ""
    unit: str = ""

    @field_validator('name', 'unit', mode='before')
    @classmethod
    def as_text(cls, v):
        return v.strip() if isinstance(v, str) else ""

    @field_validator('quantity', mode='before')
    @classmethod
    def quantity_as_text(cls, v):
        if v is None or v == "" or v == 0:
            return ""
        return str(v)


class RecipeScanInput(_CamelModel):
    """Parsed recipe-extraction payload; prices are never part of a scan."""
    name: str = ""
    servings: int = 4
    prep_time: str = Field("", alias="prepTime")
    cook_time: str = Field("", alias="cookTime")
    ingredients: List[RecipeScanIngredient] = Field(default_factory=list)
    instructions: str = ""
    notes: str = ""

    @field_validator('name', 'prep_time', 'cook_time', 'instructions', 'notes', mode='before')
    @classmethod
    def as_text(cls, v):
        return v if isinstance(v, str) else ""

    @field_validator('servings', mode='before')
    @classmethod
    def servings_default(cls, v):
        servings = int(to_number(v))
        return servings if servings >= 1 else 4

    @field_validator('ingredients', mode='before')
    @classmethod
    def only_dicts(cls, v):
        return [i for i in v if isinstance(i, dict)] if isinstance(v, list) else []


class PantryItemInput(_CamelModel):
    """Schema for a manually added pantry item."""
    name: str = Field(..., min_length=1, max_length=100)
    quantity: float = 1.0
    unit: str = ""
    category: str = DEFAULT_CATEGORY
    last_purchase_price: float = Field(0.0, alias="lastPurchasePrice")
    last_purchase_date: Optional[date] = Field(None, alias="lastPurchaseDate")

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('unit', mode='before')
    @classmethod
    def default_unit(cls, v):
        return v.strip() if isinstance(v, str) else ""

    @field_validator('category', mode='before')
    @classmethod
    def default_category(cls, v):
        return v.strip() if isinstance(v, str) and v.strip() else DEFAULT_CATEGORY

    @field_validator('quantity', 'last_purchase_price', mode='before')
    @classmethod
    def coerce_number(cls, v):
        return to_number(v)

    @field_validator('last_purchase_date', mode='before')
    @classmethod
    def parse_date(cls, v):
        return to_date(v)


class ShoppingListItemInput(_CamelModel):
    """Schema for a manual shopping list entry."""
    name: str = Field(..., min_length=1, max_length=100)
    quantity: float = 1.0
    unit: str = ""
    price: float = 0.0
    store: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('unit', mode='before')
    @classmethod
    def default_unit(cls, v):
        return v.strip() if isinstance(v, str) else ""

    @field_validator('store', mode='before')
    @classmethod
    def blank_store_is_none(cls, v):
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None

    @field_validator('quantity', 'price', mode='before')
    @classmethod
    def coerce_number(cls, v):
        return to_number(v)


class SettingsInput(_CamelModel):
    """Schema for user settings."""
    monthly_budget: float = Field(..., ge=0, alias="monthlyBudget")
    stores: List[str] = Field(default_factory=list)
    family_members: List[str] = Field(default_factory=list, alias="familyMembers")

    @field_validator('stores', 'family_members', mode='before')
    @classmethod
    def clean_lists(cls, v):
        return _clean_strings(v)
