from typing import Dict

SETTLE_CATEGORY = "settle"
DEFAULT_CATEGORY = "other"

EXPENSE_CATEGORIES: Dict[str, str] = {
    "food": "Food & Dining",
    "travel": "Travel",
    "utilities": "Utilities",
    "entertainment": "Entertainment",
    SETTLE_CATEGORY: "Settle Up",
    DEFAULT_CATEGORY: "Other",
}

def category_name(category_id: str | None) -> str:
    return EXPENSE_CATEGORIES.get(category_id, EXPENSE_CATEGORIES[DEFAULT_CATEGORY])
