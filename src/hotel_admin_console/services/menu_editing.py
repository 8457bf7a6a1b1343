"""Pure category and item editing functions.

Each function takes the current category sequence and returns a new one; the
inputs are never mutated. The result is committed by the caller through
``EntityStore.update_menu_categories``.

Ordering rules:
- new categories and items are appended
- edits keep their position
- deletions filter by id and keep the order of the survivors
- an unknown category or item id leaves the sequence unchanged
"""

import math
import re

from hotel_admin_console.exceptions import ValidationError
from hotel_admin_console.models.hotel_models import (
    MenuCategory,
    MenuItem,
    MenuItemDraft,
    format_price,
    generate_id,
)

__all__ = [
    "add_category",
    "add_item",
    "delete_category",
    "delete_item",
    "format_price",
    "parse_price",
    "rename_category",
    "update_item",
]

# Plain decimal notation only: no exponents, digit separators or inf/nan
DECIMAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


def parse_price(raw: str) -> float:
    """Parse a decimal price string into a non-negative float.

    Args:
        raw: Price as typed by the operator (e.g., "4.5")

    Returns:
        float: Parsed price

    Raises:
        ValidationError: If the input is blank, not a number, not finite or negative
    """
    text = (raw or "").strip()
    if not text:
        raise ValidationError("Price is required")

    if not DECIMAL_PATTERN.fullmatch(text):
        raise ValidationError(f"Price must be a decimal number, got {raw!r}")

    price = float(text)

    # Overflowing digit strings parse to inf
    if not math.isfinite(price):
        raise ValidationError(f"Price must be finite, got {raw!r}")

    if price < 0:
        raise ValidationError(f"Price must be non-negative, got {raw!r}")

    # Folds -0.0 into 0.0
    return price + 0.0


def _copy(categories: list[MenuCategory]) -> list[MenuCategory]:
    return [category.model_copy(deep=True) for category in categories]


def _item_from_draft(item_id: str, draft: MenuItemDraft) -> MenuItem:
    return MenuItem(
        id=item_id,
        name=draft.name,
        description=draft.description,
        price=parse_price(draft.price),
        image=draft.image or None,
    )


def add_category(categories: list[MenuCategory], name: str) -> list[MenuCategory]:
    """Append a new empty category.

    Args:
        categories: Current category sequence
        name: Name of the new category

    Returns:
        New category sequence with the category appended
    """
    return _copy(categories) + [MenuCategory(id=generate_id("cat"), name=name, items=[])]


def rename_category(
    categories: list[MenuCategory], category_id: str, name: str
) -> list[MenuCategory]:
    """Rename a category in place, keeping its items and position."""
    updated = _copy(categories)
    for category in updated:
        if category.id == category_id:
            category.name = name
    return updated


def delete_category(categories: list[MenuCategory], category_id: str) -> list[MenuCategory]:
    """Remove a category and all of its items."""
    return [category for category in _copy(categories) if category.id != category_id]


def add_item(
    categories: list[MenuCategory], category_id: str, draft: MenuItemDraft
) -> list[MenuCategory]:
    """Append a new item to a category.

    The price is parsed before anything changes, so an invalid price leaves
    the caller's categories untouched.

    Args:
        categories: Current category sequence
        category_id: Category receiving the item
        draft: Raw item input

    Returns:
        New category sequence

    Raises:
        ValidationError: If the draft price cannot be parsed
    """
    new_item = _item_from_draft(generate_id("item"), draft)

    updated = _copy(categories)
    for category in updated:
        if category.id == category_id:
            category.items.append(new_item)
    return updated


def update_item(
    categories: list[MenuCategory], category_id: str, item_id: str, draft: MenuItemDraft
) -> list[MenuCategory]:
    """Replace an item's fields, keeping its id and position.

    Raises:
        ValidationError: If the draft price cannot be parsed
    """
    replacement = _item_from_draft(item_id, draft)

    updated = _copy(categories)
    for category in updated:
        if category.id == category_id:
            category.items = [
                replacement if item.id == item_id else item for item in category.items
            ]
    return updated


def delete_item(
    categories: list[MenuCategory], category_id: str, item_id: str
) -> list[MenuCategory]:
    """Remove an item from a category."""
    updated = _copy(categories)
    for category in updated:
        if category.id == category_id:
            category.items = [item for item in category.items if item.id != item_id]
    return updated
