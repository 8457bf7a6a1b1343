"""Unit tests for hotel and menu models."""

from datetime import UTC, datetime

import pytest

from hotel_admin_console.models.hotel_models import (
    Hotel,
    HotelDraft,
    HotelMenu,
    MenuCategory,
    MenuItem,
    format_price,
    generate_id,
)


@pytest.mark.unit
class TestGenerateId:
    """Test suite for identifier generation."""

    def test_id_has_prefix(self) -> None:
        """Test that generated ids carry the entity prefix."""
        assert generate_id("hotel").startswith("hotel_")

    def test_ids_are_unique_under_rapid_generation(self) -> None:
        """Test that ids do not collide when created back to back."""
        ids = {generate_id("item") for _ in range(1000)}
        assert len(ids) == 1000


@pytest.mark.unit
class TestFormatPrice:
    """Test suite for two-decimal price formatting."""

    @pytest.mark.parametrize(
        ("price", "expected"),
        [(4.5, "4.50"), (0.0, "0.00"), (12.999, "13.00"), (3, "3.00")],
    )
    def test_format_price(self, price: float, expected: str) -> None:
        """Test that prices render with two decimals."""
        assert format_price(price) == expected


@pytest.mark.unit
class TestHotel:
    """Test suite for the Hotel model."""

    def test_from_draft_assigns_id_and_timestamp(self) -> None:
        """Test that a new hotel gets an id and a UTC creation time."""
        before = datetime.now(UTC)
        hotel = Hotel.from_draft(HotelDraft(name="Grand", location="Lisbon"))

        assert hotel.id.startswith("hotel_")
        assert hotel.created_at >= before
        assert hotel.description == ""

    def test_to_storage_item_uses_camel_case(self) -> None:
        """Test the persisted item layout."""
        created = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
        hotel = Hotel(id="h1", name="Grand", location="Lisbon", created_at=created)

        assert hotel.to_storage_item() == {
            "id": "h1",
            "name": "Grand",
            "location": "Lisbon",
            "description": "",
            "createdAt": "2024-01-15T10:30:00+00:00",
        }

    def test_from_storage_item_rehydrates_timestamp(self) -> None:
        """Test that createdAt is parsed back into a datetime, not left a string."""
        hotel = Hotel.from_storage_item(
            {
                "id": "h1",
                "name": "Grand",
                "location": "Lisbon",
                "description": "",
                "createdAt": "2024-01-15T10:30:00+00:00",
            }
        )

        assert isinstance(hotel.created_at, datetime)
        assert hotel.created_at == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)

    def test_empty_description_is_kept_as_empty_string(self) -> None:
        """Test that an empty description survives as '' rather than None."""
        hotel = Hotel.from_draft(HotelDraft(name="Inn", location="Porto", description=""))
        restored = Hotel.from_storage_item(hotel.to_storage_item())

        assert restored.description == ""
        assert restored.description is not None

    def test_api_dump_uses_aliases(self) -> None:
        """Test that field names are exposed in camelCase."""
        hotel = Hotel.from_draft(HotelDraft(name="Grand", location="Lisbon"))
        data = hotel.model_dump(by_alias=True)

        assert "createdAt" in data
        assert "created_at" not in data


@pytest.mark.unit
class TestMenuItem:
    """Test suite for the MenuItem model."""

    def test_price_must_be_non_negative(self) -> None:
        """Test that negative prices are rejected."""
        with pytest.raises(ValueError):
            MenuItem(id="i1", name="Soup", price=-1.0)

    def test_price_must_be_finite(self) -> None:
        """Test that NaN prices are rejected."""
        with pytest.raises(ValueError):
            MenuItem(id="i1", name="Soup", price=float("nan"))

    def test_negative_zero_price_is_normalized(self) -> None:
        """Test that -0.0 is stored as 0.0 from both field and dict input."""
        item = MenuItem(id="i1", name="Water", price=-0.0)
        from_dict = MenuItem.model_validate({"id": "i2", "name": "Water", "price": -0.0})

        assert item.display_price == "0.00"
        assert from_dict.to_storage_item()["price"] == 0.0
        assert str(from_dict.to_storage_item()["price"]) == "0.0"

    def test_display_price(self) -> None:
        """Test the two-decimal display price."""
        assert MenuItem(id="i1", name="Soup", price=4.5).display_price == "4.50"

    def test_absent_image_is_omitted_from_storage(self) -> None:
        """Test that a missing image is not serialized at all."""
        item = MenuItem(id="i1", name="Soup", price=4.5)

        assert "image" not in item.to_storage_item()
        assert MenuItem.from_storage_item(item.to_storage_item()).image is None

    def test_empty_image_is_distinct_from_absent(self) -> None:
        """Test that an explicit empty image string round-trips as ''."""
        item = MenuItem(id="i1", name="Soup", price=4.5, image="")

        assert item.to_storage_item()["image"] == ""
        assert MenuItem.from_storage_item(item.to_storage_item()).image == ""


@pytest.mark.unit
class TestHotelMenu:
    """Test suite for the HotelMenu model."""

    def test_storage_round_trip_keeps_order(self) -> None:
        """Test that nested categories and items keep their order."""
        menu = HotelMenu(
            id="m1",
            hotel_id="h1",
            categories=[
                MenuCategory(
                    id="c1",
                    name="Starters",
                    items=[
                        MenuItem(id="i2", name="Bread", price=2.0),
                        MenuItem(id="i1", name="Soup", price=4.5, image="https://img/soup.jpg"),
                    ],
                ),
                MenuCategory(id="c0", name="Desserts"),
            ],
        )

        item = menu.to_storage_item()
        restored = HotelMenu.from_storage_item(item)

        assert item["hotelId"] == "h1"
        assert restored == menu
        assert [c.id for c in restored.categories] == ["c1", "c0"]
        assert [i.id for i in restored.categories[0].items] == ["i2", "i1"]

    def test_item_count(self) -> None:
        """Test counting items across categories."""
        menu = HotelMenu(
            id="m1",
            hotel_id="h1",
            categories=[
                MenuCategory(id="c1", name="A", items=[MenuItem(id="i1", name="x", price=1)]),
                MenuCategory(
                    id="c2",
                    name="B",
                    items=[
                        MenuItem(id="i1", name="y", price=1),
                        MenuItem(id="i2", name="z", price=1),
                    ],
                ),
            ],
        )

        assert menu.item_count == 3
