"""Shared pytest fixtures and configuration for all tests."""

import os

# Keeps src/main.py from building the real application at import time
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402

from hotel_admin_console.models.hotel_models import HotelDraft, MenuItemDraft  # noqa: E402
from hotel_admin_console.repositories.kv_store import InMemoryKeyValueStore  # noqa: E402
from hotel_admin_console.services.entity_store import EntityStore  # noqa: E402


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    """Fixture providing an empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def entity_store(kv_store: InMemoryKeyValueStore) -> EntityStore:
    """Fixture providing an entity store backed by the in-memory store."""
    return EntityStore(kv_store=kv_store)


@pytest.fixture
def grand_hotel_draft() -> HotelDraft:
    """Fixture providing a sample hotel draft."""
    return HotelDraft(
        name="Grand Hotel",
        location="Lisbon",
        description="Riverside rooms and a rooftop restaurant",
    )


@pytest.fixture
def harbor_inn_draft() -> HotelDraft:
    """Fixture providing a second hotel draft with an empty description."""
    return HotelDraft(name="Harbor Inn", location="Porto", description="")


@pytest.fixture
def soup_draft() -> MenuItemDraft:
    """Fixture providing a sample item draft as typed into the item form."""
    return MenuItemDraft(name="Soup", price="4.5")
