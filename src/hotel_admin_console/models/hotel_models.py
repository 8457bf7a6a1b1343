"""Hotel and menu data models.

These models represent hotel properties and their menus as held by the entity
store and as persisted to the key-value store. Field names are exposed in
camelCase (``createdAt``, ``hotelId``) to match the persisted layout.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


def generate_id(prefix: str) -> str:
    """Generate a random unique identifier.

    Args:
        prefix: Entity prefix (e.g., 'hotel', 'menu')

    Returns:
        str: Identifier such as ``hotel_4f1c...``
    """
    return f"{prefix}_{uuid.uuid4().hex}"


def format_price(price: float) -> str:
    """Format a price with two decimal places (e.g., 4.5 -> '4.50')."""
    return f"{price:.2f}"


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases while accepting field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HotelDraft(CamelModel):
    """Caller-supplied mutable fields of a hotel."""

    name: str = Field(..., description="Hotel name")
    location: str = Field(..., description="Hotel location")
    description: str = Field(default="", description="Free-text description, may be empty")


class Hotel(CamelModel):
    """Hotel property registered in the console.

    ``id`` and ``created_at`` are assigned once at creation and never change.
    """

    id: str = Field(..., description="Unique identifier for the hotel")
    name: str = Field(..., description="Hotel name")
    location: str = Field(..., description="Hotel location")
    description: str = Field(default="", description="Free-text description, may be empty")
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_draft(cls, draft: HotelDraft) -> "Hotel":
        """Create a new hotel from a draft with a fresh id and timestamp.

        Args:
            draft: Mutable hotel fields

        Returns:
            Hotel: New hotel instance
        """
        return cls(
            id=generate_id("hotel"),
            name=draft.name,
            location=draft.location,
            description=draft.description,
            created_at=datetime.now(UTC),
        )

    def to_storage_item(self) -> dict[str, Any]:
        """Convert to the persisted JSON item format.

        Returns:
            dict: JSON-compatible representation
        """
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "description": self.description,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_storage_item(cls, item: dict[str, Any]) -> "Hotel":
        """Create Hotel from a persisted JSON item.

        Args:
            item: Persisted item dictionary

        Returns:
            Hotel: Parsed model instance
        """
        return cls(
            id=item["id"],
            name=item["name"],
            location=item["location"],
            description=item.get("description", ""),
            created_at=datetime.fromisoformat(item["createdAt"]),
        )


class MenuItemDraft(CamelModel):
    """Raw item form input; ``price`` is still an unparsed decimal string."""

    name: str
    description: str = ""
    price: str
    image: str = ""


class MenuItem(CamelModel):
    """Priced item within a menu category."""

    id: str = Field(..., description="Unique identifier within its category")
    name: str = Field(..., description="Item name")
    description: str = Field(default="", description="Item description")
    price: float = Field(..., description="Item price", ge=0, allow_inf_nan=False)
    image: str | None = Field(None, description="Opaque image URL")

    @field_validator("price")
    @classmethod
    def normalize_negative_zero(cls, value: float) -> float:
        """Store -0.0 as 0.0 so it never displays as '-0.00'."""
        return value + 0.0

    @computed_field(alias="displayPrice")  # type: ignore[prop-decorator]
    @property
    def display_price(self) -> str:
        """Price rendered with two decimal places."""
        return format_price(self.price)

    def to_storage_item(self) -> dict[str, Any]:
        """Convert to the persisted JSON item format.

        ``image`` is omitted when absent so it stays distinct from an empty string.
        """
        item: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
        }

        if self.image is not None:
            item["image"] = self.image

        return item

    @classmethod
    def from_storage_item(cls, item: dict[str, Any]) -> "MenuItem":
        """Create MenuItem from a persisted JSON item."""
        data: dict[str, Any] = {
            "id": item["id"],
            "name": item["name"],
            "description": item.get("description", ""),
            "price": item["price"],
        }

        if "image" in item:
            data["image"] = item["image"]

        return cls(**data)


class MenuCategory(CamelModel):
    """Named, ordered group of menu items."""

    id: str = Field(..., description="Unique identifier within its menu")
    name: str = Field(..., description="Category name")
    items: list[MenuItem] = Field(default_factory=list, description="Items in display order")

    def to_storage_item(self) -> dict[str, Any]:
        """Convert to the persisted JSON item format."""
        return {
            "id": self.id,
            "name": self.name,
            "items": [item.to_storage_item() for item in self.items],
        }

    @classmethod
    def from_storage_item(cls, item: dict[str, Any]) -> "MenuCategory":
        """Create MenuCategory from a persisted JSON item."""
        return cls(
            id=item["id"],
            name=item["name"],
            items=[MenuItem.from_storage_item(i) for i in item.get("items", [])],
        )


class HotelMenu(CamelModel):
    """Menu belonging to exactly one hotel.

    ``hotel_id`` is a relation, not ownership; the hotel does not reference its menu.
    """

    id: str = Field(..., description="Unique identifier for the menu")
    hotel_id: str = Field(..., description="Hotel this menu belongs to")
    categories: list[MenuCategory] = Field(
        default_factory=list, description="Categories in display order"
    )

    @property
    def item_count(self) -> int:
        """Number of items across all categories."""
        return sum(len(category.items) for category in self.categories)

    def to_storage_item(self) -> dict[str, Any]:
        """Convert to the persisted JSON item format."""
        return {
            "id": self.id,
            "hotelId": self.hotel_id,
            "categories": [category.to_storage_item() for category in self.categories],
        }

    @classmethod
    def from_storage_item(cls, item: dict[str, Any]) -> "HotelMenu":
        """Create HotelMenu from a persisted JSON item."""
        return cls(
            id=item["id"],
            hotel_id=item["hotelId"],
            categories=[MenuCategory.from_storage_item(c) for c in item.get("categories", [])],
        )


class DashboardStats(CamelModel):
    """Totals shown on the dashboard summary cards."""

    hotel_count: int = Field(..., ge=0)
    menu_count: int = Field(..., ge=0)
    item_count: int = Field(..., ge=0)
