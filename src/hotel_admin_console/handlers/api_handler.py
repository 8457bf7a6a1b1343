"""FastAPI application for the hotel admin console.

Routes translate operator actions into entity store calls. Required-field
checks and price parsing happen here, before anything reaches the store.
"""

import logging
from decimal import Decimal

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from hotel_admin_console.auth.api_dependencies import require_authenticated_session
from hotel_admin_console.exceptions import ValidationError
from hotel_admin_console.models.hotel_models import (
    DashboardStats,
    Hotel,
    HotelDraft,
    HotelMenu,
    MenuCategory,
    MenuItemDraft,
)
from hotel_admin_console.services import menu_editing
from hotel_admin_console.services.entity_store import EntityStore
from hotel_admin_console.services.session_gate import SessionGate

logger = logging.getLogger(__name__)

PERSISTENCE_WARNING_HEADER = "X-Persistence-Warning"


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class SessionResponse(BaseModel):
    """Current session gate state."""

    authenticated: bool


class LoginRequest(BaseModel):
    """Login form submission."""

    secret: str


class HotelRequest(BaseModel):
    """Hotel form submission; name and location are required."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    description: str = ""

    def to_draft(self) -> HotelDraft:
        return HotelDraft(name=self.name, location=self.location, description=self.description)


class CategoryRequest(BaseModel):
    """Category form submission."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)


class ItemRequest(BaseModel):
    """Item form submission; price arrives as typed by the operator."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    description: str = ""
    price: str | float
    image: str = ""

    def to_draft(self) -> MenuItemDraft:
        price = self.price
        if not isinstance(price, str):
            # JSON numbers like 1e-05 become plain decimal text
            price = format(Decimal(repr(price)), "f")

        return MenuItemDraft(
            name=self.name,
            description=self.description,
            price=price,
            image=self.image,
        )


def create_app(entity_store: EntityStore, session_gate: SessionGate) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        entity_store: Store owning hotels and menus
        session_gate: Gate guarding the admin routes

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Hotel Admin Console API",
        description="Admin API for registering hotels and authoring their menus",
        version="1.0.0",
    )

    # Store services in app state for access in route handlers
    app.state.entity_store = entity_store
    app.state.session_gate = session_gate

    @app.exception_handler(ValidationError)
    async def handle_validation_error(_request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    def store() -> EntityStore:
        return app.state.entity_store  # type: ignore[no-any-return]

    def flag_persistence(response: Response) -> None:
        if not store().last_persist_ok:
            response.headers[PERSISTENCE_WARNING_HEADER] = "Changes could not be saved to storage"

    def load_menu(menu_id: str) -> HotelMenu:
        menu = store().get_menu(menu_id)
        if menu is None:
            raise HTTPException(status_code=404, detail=f"Menu {menu_id} not found")
        return menu

    def load_category(menu: HotelMenu, category_id: str) -> MenuCategory:
        for category in menu.categories:
            if category.id == category_id:
                return category
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")

    def commit(menu: HotelMenu, categories: list[MenuCategory], response: Response) -> HotelMenu:
        updated = store().update_menu_categories(menu.id, categories)
        if updated is None:
            raise HTTPException(status_code=404, detail=f"Menu {menu.id} not found")
        flag_persistence(response)
        return updated

    # ------------------------------------------------------------------ health & session

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get("/auth/session", response_model=SessionResponse, tags=["Session"])
    async def get_session() -> SessionResponse:
        """Report whether an admin session is open."""
        return SessionResponse(authenticated=app.state.session_gate.is_authenticated)

    @app.post("/auth/login", response_model=SessionResponse, tags=["Session"])
    async def login(body: LoginRequest) -> SessionResponse:
        """Open the admin session with the shared secret.

        Raises:
            HTTPException: 401 if the secret is wrong
        """
        if not app.state.session_gate.login(body.secret):
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return SessionResponse(authenticated=True)

    @app.post("/auth/logout", response_model=SessionResponse, tags=["Session"])
    async def logout() -> SessionResponse:
        """Close the admin session."""
        app.state.session_gate.logout()
        return SessionResponse(authenticated=False)

    # ------------------------------------------------------------------ dashboard

    @app.get("/admin/stats", response_model=DashboardStats, tags=["Dashboard"])
    async def get_stats(
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> DashboardStats:
        """Totals for the dashboard summary cards."""
        return store().stats()

    # ------------------------------------------------------------------ hotels

    @app.get("/admin/hotels", response_model=list[Hotel], tags=["Hotels"])
    async def list_hotels(
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> list[Hotel]:
        """List hotels in registration order."""
        return store().list_hotels()

    @app.post("/admin/hotels", response_model=Hotel, status_code=201, tags=["Hotels"])
    async def create_hotel(
        body: HotelRequest,
        response: Response,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> Hotel:
        """Register a new hotel."""
        hotel = store().create_hotel(body.to_draft())
        flag_persistence(response)
        return hotel

    @app.put("/admin/hotels/{hotel_id}", response_model=Hotel, tags=["Hotels"])
    async def update_hotel(
        hotel_id: str,
        body: HotelRequest,
        response: Response,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> Hotel:
        """Replace a hotel's name, location and description.

        Raises:
            HTTPException: 404 if the hotel does not exist
        """
        hotel = store().update_hotel(hotel_id, body.to_draft())
        if hotel is None:
            raise HTTPException(status_code=404, detail=f"Hotel {hotel_id} not found")
        flag_persistence(response)
        return hotel

    @app.delete("/admin/hotels/{hotel_id}", status_code=204, tags=["Hotels"])
    async def delete_hotel(
        hotel_id: str,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> Response:
        """Delete a hotel together with its menu.

        Raises:
            HTTPException: 404 if the hotel does not exist
        """
        if not store().delete_hotel(hotel_id):
            raise HTTPException(status_code=404, detail=f"Hotel {hotel_id} not found")

        response = Response(status_code=204)
        flag_persistence(response)
        return response

    @app.get("/admin/hotels/{hotel_id}/menu", response_model=HotelMenu, tags=["Menus"])
    async def get_hotel_menu(
        hotel_id: str,
        response: Response,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> HotelMenu:
        """Open a hotel's menu, creating an empty one on first selection.

        Raises:
            HTTPException: 404 if the hotel does not exist
        """
        menu = store().get_or_create_menu(hotel_id)
        if menu is None:
            raise HTTPException(status_code=404, detail=f"Hotel {hotel_id} not found")
        flag_persistence(response)
        return menu

    # ------------------------------------------------------------------ menus

    @app.get("/admin/menus", response_model=list[HotelMenu], tags=["Menus"])
    async def list_menus(
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> list[HotelMenu]:
        """List all menus."""
        return store().list_menus()

    @app.get("/admin/menus/{menu_id}", response_model=HotelMenu, tags=["Menus"])
    async def get_menu(
        menu_id: str,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> HotelMenu:
        """Read one menu."""
        return load_menu(menu_id)

    @app.delete("/admin/menus/{menu_id}", status_code=204, tags=["Menus"])
    async def delete_menu(
        menu_id: str,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> Response:
        """Delete a menu; the hotel is kept."""
        if not store().delete_menu(menu_id):
            raise HTTPException(status_code=404, detail=f"Menu {menu_id} not found")

        response = Response(status_code=204)
        flag_persistence(response)
        return response

    @app.put("/admin/menus/{menu_id}/categories", response_model=HotelMenu, tags=["Menus"])
    async def replace_categories(
        menu_id: str,
        categories: list[MenuCategory],
        response: Response,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> HotelMenu:
        """Replace the complete category sequence of a menu."""
        return commit(load_menu(menu_id), categories, response)

    # ------------------------------------------------------------------ categories

    @app.post(
        "/admin/menus/{menu_id}/categories",
        response_model=HotelMenu,
        status_code=201,
        tags=["Categories"],
    )
    async def add_category(
        menu_id: str,
        body: CategoryRequest,
        response: Response,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> HotelMenu:
        """Append a category to a menu."""
        menu = load_menu(menu_id)
        return commit(menu, menu_editing.add_category(menu.categories, body.name), response)

    @app.put(
        "/admin/menus/{menu_id}/categories/{category_id}",
        response_model=HotelMenu,
        tags=["Categories"],
    )
    async def rename_category(
        menu_id: str,
        category_id: str,
        body: CategoryRequest,
        response: Response,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> HotelMenu:
        """Rename a category."""
        menu = load_menu(menu_id)
        load_category(menu, category_id)
        categories = menu_editing.rename_category(menu.categories, category_id, body.name)
        return commit(menu, categories, response)

    @app.delete(
        "/admin/menus/{menu_id}/categories/{category_id}",
        response_model=HotelMenu,
        tags=["Categories"],
    )
    async def delete_category(
        menu_id: str,
        category_id: str,
        response: Response,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> HotelMenu:
        """Delete a category and its items."""
        menu = load_menu(menu_id)
        load_category(menu, category_id)
        return commit(menu, menu_editing.delete_category(menu.categories, category_id), response)

    # ------------------------------------------------------------------ items

    @app.post(
        "/admin/menus/{menu_id}/categories/{category_id}/items",
        response_model=HotelMenu,
        status_code=201,
        tags=["Items"],
    )
    async def add_item(
        menu_id: str,
        category_id: str,
        body: ItemRequest,
        response: Response,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> HotelMenu:
        """Append an item to a category.

        Raises:
            ValidationError: If the price cannot be parsed (answered as 422)
        """
        menu = load_menu(menu_id)
        load_category(menu, category_id)
        categories = menu_editing.add_item(menu.categories, category_id, body.to_draft())
        return commit(menu, categories, response)

    @app.put(
        "/admin/menus/{menu_id}/categories/{category_id}/items/{item_id}",
        response_model=HotelMenu,
        tags=["Items"],
    )
    async def update_item(
        menu_id: str,
        category_id: str,
        item_id: str,
        body: ItemRequest,
        response: Response,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> HotelMenu:
        """Edit an item in place."""
        menu = load_menu(menu_id)
        category = load_category(menu, category_id)
        if not any(item.id == item_id for item in category.items):
            raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

        categories = menu_editing.update_item(
            menu.categories, category_id, item_id, body.to_draft()
        )
        return commit(menu, categories, response)

    @app.delete(
        "/admin/menus/{menu_id}/categories/{category_id}/items/{item_id}",
        response_model=HotelMenu,
        tags=["Items"],
    )
    async def delete_item(
        menu_id: str,
        category_id: str,
        item_id: str,
        response: Response,
        _gate: SessionGate = Depends(require_authenticated_session),
    ) -> HotelMenu:
        """Delete an item from a category."""
        menu = load_menu(menu_id)
        category = load_category(menu, category_id)
        if not any(item.id == item_id for item in category.items):
            raise HTTPException(status_code=404, detail=f"Item {item_id} not found")

        categories = menu_editing.delete_item(menu.categories, category_id, item_id)
        return commit(menu, categories, response)

    return app
