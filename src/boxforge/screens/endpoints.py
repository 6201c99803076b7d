"""Screen and meta box API endpoints."""

from typing import Any, Callable

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from boxforge.metaboxes.service import MetaBoxService
from boxforge.screens.loader import ScreenConfigLoader
from boxforge.screens.types import ScreenConfig


class MetaBoxOrderRequest(BaseModel):
    """Saved box ordering, context → box ids."""

    order: dict[str, list[str]] = Field(default_factory=dict)


def _require_screen(
    screen_loader: ScreenConfigLoader | None,
    meta_box_service: MetaBoxService | None,
    screen_id: str,
) -> ScreenConfig:
    if not screen_loader or not meta_box_service:
        raise HTTPException(500, "Service not initialized")

    screen = screen_loader.get_screen(screen_id)
    if not screen:
        raise HTTPException(404, f"Screen not found: {screen_id}")
    return screen


def create_screens_router(
    get_screen_loader: Callable[[], ScreenConfigLoader | None],
    get_meta_box_service: Callable[[], MetaBoxService | None],
) -> APIRouter:
    """Create the screens/meta boxes router with injected dependencies."""
    router = APIRouter(prefix="/api", tags=["screens"])

    @router.get("/screens")
    async def list_screens() -> dict[str, Any]:
        """Return all configured screens."""
        screen_loader = get_screen_loader()
        if not screen_loader:
            raise HTTPException(500, "Service not initialized")
        return {"data": [s.to_dict() for s in screen_loader.list_screens()]}

    @router.get("/screens/{screen_id}")
    async def get_screen(screen_id: str) -> dict[str, Any]:
        """Return the full screen definition."""
        screen = _require_screen(get_screen_loader(), get_meta_box_service(), screen_id)
        return {"data": screen.to_dict()}

    @router.get("/screens/{screen_id}/meta-boxes")
    async def get_meta_boxes(screen_id: str) -> dict[str, Any]:
        """Build the screen's meta box layout for this request."""
        service = get_meta_box_service()
        screen = _require_screen(get_screen_loader(), service, screen_id)
        registry = service.build(screen)
        return {"data": service.layout(registry, screen.id)}

    @router.post("/screens/{screen_id}/meta-boxes/layout")
    async def layout_meta_boxes(
        screen_id: str, request: MetaBoxOrderRequest
    ) -> dict[str, Any]:
        """Build the layout with a user's saved box order applied."""
        service = get_meta_box_service()
        screen = _require_screen(get_screen_loader(), service, screen_id)
        registry = service.build(screen, saved_order=request.order)
        return {"data": service.layout(registry, screen.id)}

    return router
