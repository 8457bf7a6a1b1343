"""Entity store owning the authoritative hotel and menu collections."""

import json
import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from hotel_admin_console.exceptions import ValidationError
from hotel_admin_console.models.hotel_models import (
    DashboardStats,
    Hotel,
    HotelDraft,
    HotelMenu,
    MenuCategory,
    generate_id,
)
from hotel_admin_console.observability.decorators import traced
from hotel_admin_console.observability.metrics import (
    record_entity_mutation,
    record_persistence_failure,
)
from hotel_admin_console.repositories.kv_store import HOTELS_KEY, MENUS_KEY, KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CATEGORY_LIST = TypeAdapter(list[MenuCategory])


class EntityStore:
    """In-memory store of hotels and menus with cascade and lookup rules.

    All mutations go through this class. Each successful mutation is followed
    by a full re-serialization of the affected collection to the key-value
    store. The presentation layer only ever receives deep copies.

    Missing-key policy: updates and deletes on an unknown id are silent
    no-ops that return None/False and persist nothing.

    One menu per hotel: ``create_menu`` returns the hotel's existing menu
    instead of creating a second one.
    """

    def __init__(self, kv_store: KeyValueStore) -> None:
        """Initialize the store and rehydrate it from the key-value store.

        Args:
            kv_store: Persistence adapter for the ``hotels`` and ``menus`` blobs
        """
        self.kv_store = kv_store
        self._hotels: list[Hotel] = []
        self._menus: list[HotelMenu] = []
        self.last_persist_ok = True
        self.load()

    # ------------------------------------------------------------------ persistence

    def load(self) -> None:
        """Rehydrate both collections, defaulting to empty on absence or parse failure.

        Menus pointing at a missing hotel, and second menus for the same hotel,
        are dropped.
        """
        hotels = self._load_collection(HOTELS_KEY, Hotel.from_storage_item)
        menus = self._load_collection(MENUS_KEY, HotelMenu.from_storage_item)

        hotel_ids = {hotel.id for hotel in hotels}
        seen_hotel_ids: set[str] = set()
        kept_menus: list[HotelMenu] = []
        for menu in menus:
            if menu.hotel_id not in hotel_ids or menu.hotel_id in seen_hotel_ids:
                logger.warning(f"Dropping menu {menu.id} for hotel {menu.hotel_id} on load")
                continue
            seen_hotel_ids.add(menu.hotel_id)
            kept_menus.append(menu)

        self._hotels = hotels
        self._menus = kept_menus
        logger.info(f"Loaded {len(self._hotels)} hotels and {len(self._menus)} menus")

    def _load_collection(self, key: str, parse: Callable[[dict[str, Any]], T]) -> list[T]:
        raw = self.kv_store.load(key)
        if raw is None:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return [parse(item) for item in data]

        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring malformed '{key}' data: {e}")
            return []

    def persist(self, keys: Sequence[str] = (HOTELS_KEY, MENUS_KEY)) -> bool:
        """Serialize collections to the key-value store.

        A failed write keeps the in-memory state and sets ``last_persist_ok``
        to False so the caller can surface a non-blocking warning.

        Args:
            keys: Which collections to write

        Returns:
            bool: True if every write succeeded, False otherwise
        """
        ok = True
        for key in keys:
            if key == HOTELS_KEY:
                payload = [hotel.to_storage_item() for hotel in self._hotels]
            elif key == MENUS_KEY:
                payload = [menu.to_storage_item() for menu in self._menus]
            else:
                raise ValueError(f"Unknown collection key: {key}")

            if not self.kv_store.save(key, json.dumps(payload)):
                logger.error(f"Failed to persist '{key}', keeping in-memory state")
                record_persistence_failure(key)
                ok = False

        self.last_persist_ok = ok
        return ok

    # ------------------------------------------------------------------ reads

    def list_hotels(self) -> list[Hotel]:
        """Return a snapshot of all hotels in insertion order."""
        return [hotel.model_copy(deep=True) for hotel in self._hotels]

    def get_hotel(self, hotel_id: str) -> Hotel | None:
        """Return a snapshot of one hotel, or None if not found."""
        hotel = self._find_hotel(hotel_id)
        return hotel.model_copy(deep=True) if hotel else None

    def list_menus(self) -> list[HotelMenu]:
        """Return a snapshot of all menus in insertion order."""
        return [menu.model_copy(deep=True) for menu in self._menus]

    def get_menu(self, menu_id: str) -> HotelMenu | None:
        """Return a snapshot of one menu, or None if not found."""
        menu = self._find_menu(menu_id)
        return menu.model_copy(deep=True) if menu else None

    def find_menu_for_hotel(self, hotel_id: str) -> HotelMenu | None:
        """Return a snapshot of the hotel's menu, or None if it has none."""
        for menu in self._menus:
            if menu.hotel_id == hotel_id:
                return menu.model_copy(deep=True)
        return None

    def stats(self) -> DashboardStats:
        """Count hotels, menus and items across all menus."""
        return DashboardStats(
            hotel_count=len(self._hotels),
            menu_count=len(self._menus),
            item_count=sum(menu.item_count for menu in self._menus),
        )

    def _find_hotel(self, hotel_id: str) -> Hotel | None:
        return next((hotel for hotel in self._hotels if hotel.id == hotel_id), None)

    def _find_menu(self, menu_id: str) -> HotelMenu | None:
        return next((menu for menu in self._menus if menu.id == menu_id), None)

    # ------------------------------------------------------------------ hotels

    @traced("entity_store.create_hotel")
    def create_hotel(self, draft: HotelDraft) -> Hotel:
        """Create a hotel with a generated id and the current time.

        Required-field checks are the caller's job.

        Args:
            draft: Mutable hotel fields

        Returns:
            Hotel: Snapshot of the created hotel
        """
        hotel = Hotel.from_draft(draft)
        self._hotels = [*self._hotels, hotel]
        self.persist([HOTELS_KEY])
        record_entity_mutation("hotel", "create")

        logger.info(f"Created hotel {hotel.id} ({hotel.name})")
        return hotel.model_copy(deep=True)

    @traced("entity_store.update_hotel")
    def update_hotel(self, hotel_id: str, draft: HotelDraft) -> Hotel | None:
        """Replace the mutable fields of a hotel, keeping id and created_at.

        Args:
            hotel_id: Hotel to update
            draft: New mutable fields

        Returns:
            Snapshot of the updated hotel, or None if the id is unknown
        """
        current = self._find_hotel(hotel_id)
        if current is None:
            logger.debug(f"update_hotel: unknown hotel {hotel_id}, ignoring")
            return None

        updated = current.model_copy(
            update={
                "name": draft.name,
                "location": draft.location,
                "description": draft.description,
            }
        )
        self._hotels = [updated if hotel.id == hotel_id else hotel for hotel in self._hotels]
        self.persist([HOTELS_KEY])
        record_entity_mutation("hotel", "update")

        return updated.model_copy(deep=True)

    @traced("entity_store.delete_hotel")
    def delete_hotel(self, hotel_id: str) -> bool:
        """Delete a hotel and, in the same operation, every menu referencing it.

        Args:
            hotel_id: Hotel to delete

        Returns:
            bool: True if the hotel existed, False otherwise
        """
        if self._find_hotel(hotel_id) is None:
            logger.debug(f"delete_hotel: unknown hotel {hotel_id}, ignoring")
            return False

        remaining_menus = [menu for menu in self._menus if menu.hotel_id != hotel_id]
        removed_menus = len(self._menus) - len(remaining_menus)

        self._hotels = [hotel for hotel in self._hotels if hotel.id != hotel_id]
        self._menus = remaining_menus
        self.persist([HOTELS_KEY, MENUS_KEY] if removed_menus else [HOTELS_KEY])
        record_entity_mutation("hotel", "delete")

        logger.info(f"Deleted hotel {hotel_id} and {removed_menus} menu(s)")
        return True

    # ------------------------------------------------------------------ menus

    @traced("entity_store.create_menu")
    def create_menu(self, hotel_id: str) -> HotelMenu | None:
        """Create an empty menu for a hotel.

        Args:
            hotel_id: Hotel the menu belongs to

        Returns:
            The new menu, the hotel's existing menu if it already has one,
            or None if the hotel does not exist
        """
        if self._find_hotel(hotel_id) is None:
            logger.warning(f"create_menu: unknown hotel {hotel_id}, no menu created")
            return None

        existing = self.find_menu_for_hotel(hotel_id)
        if existing is not None:
            logger.debug(f"create_menu: hotel {hotel_id} already has menu {existing.id}")
            return existing

        menu = HotelMenu(id=generate_id("menu"), hotel_id=hotel_id, categories=[])
        self._menus = [*self._menus, menu]
        self.persist([MENUS_KEY])
        record_entity_mutation("menu", "create")

        logger.info(f"Created menu {menu.id} for hotel {hotel_id}")
        return menu.model_copy(deep=True)

    def get_or_create_menu(self, hotel_id: str) -> HotelMenu | None:
        """Return the hotel's menu, creating an empty one when it has none.

        Returns:
            The hotel's menu, or None if the hotel does not exist
        """
        return self.find_menu_for_hotel(hotel_id) or self.create_menu(hotel_id)

    @traced("entity_store.update_menu_categories")
    def update_menu_categories(
        self, menu_id: str, categories: Sequence[MenuCategory | dict[str, Any]]
    ) -> HotelMenu | None:
        """Replace the whole category sequence of a menu.

        No merge happens: ``categories`` must be the complete desired sequence.

        Args:
            menu_id: Menu to update
            categories: Complete new category sequence

        Returns:
            Snapshot of the updated menu, or None if the id is unknown

        Raises:
            ValidationError: If a price is not a finite non-negative number or
                ids repeat within a menu or category; nothing is committed
        """
        validated = self._validate_categories(categories)

        current = self._find_menu(menu_id)
        if current is None:
            logger.debug(f"update_menu_categories: unknown menu {menu_id}, ignoring")
            return None

        updated = current.model_copy(update={"categories": validated})
        self._menus = [updated if menu.id == menu_id else menu for menu in self._menus]
        self.persist([MENUS_KEY])
        record_entity_mutation("menu", "update")

        return updated.model_copy(deep=True)

    @traced("entity_store.delete_menu")
    def delete_menu(self, menu_id: str) -> bool:
        """Delete a menu.

        Returns:
            bool: True if the menu existed, False otherwise
        """
        if self._find_menu(menu_id) is None:
            logger.debug(f"delete_menu: unknown menu {menu_id}, ignoring")
            return False

        self._menus = [menu for menu in self._menus if menu.id != menu_id]
        self.persist([MENUS_KEY])
        record_entity_mutation("menu", "delete")

        logger.info(f"Deleted menu {menu_id}")
        return True

    def _validate_categories(
        self, categories: Sequence[MenuCategory | dict[str, Any]]
    ) -> list[MenuCategory]:
        payload = [c.model_dump() if isinstance(c, BaseModel) else c for c in categories]
        try:
            validated = _CATEGORY_LIST.validate_python(payload)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid menu categories: {e}") from e

        category_ids = [category.id for category in validated]
        if len(set(category_ids)) != len(category_ids):
            raise ValidationError("Category ids must be unique within a menu")

        for category in validated:
            item_ids = [item.id for item in category.items]
            if len(set(item_ids)) != len(item_ids):
                raise ValidationError(f"Item ids must be unique within category {category.id}")

        return validated
