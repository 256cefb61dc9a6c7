"""
Viewport session API endpoints.

Each session owns one ViewportController. The host forwards pointer, wheel
and control events in arrival order and reads back the visible region.
"""

import uuid
from collections import OrderedDict
from typing import Dict, Literal, Optional

import structlog
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, ValidationError, model_validator

from ..config import ViewportConfig, WorldCanvas, settings
from ..core.viewport import ViewportController

logger = structlog.get_logger()

# Create router for viewport endpoints
router = APIRouter(prefix="/viewports", tags=["Viewports"])


class ViewportSessionNotFound(KeyError):
    """No viewport session with the requested id."""


class ViewportSessions:
    """In-memory registry of viewport controllers, oldest evicted first when full."""

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, ViewportController]" = OrderedDict()

    def create(self, controller: ViewportController) -> str:
        session_id = str(uuid.uuid4())
        self._sessions[session_id] = controller
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Viewport session evicted", session_id=evicted)
        return session_id

    def get(self, session_id: str) -> ViewportController:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise ViewportSessionNotFound(session_id) from None

    def drop(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise ViewportSessionNotFound(session_id)

    def __len__(self) -> int:
        return len(self._sessions)


sessions = ViewportSessions(settings.max_viewport_sessions)


# Pydantic models for viewport operations
class ViewportCreateRequest(BaseModel):
    """Model for opening a viewport session."""

    world_width: Optional[float] = Field(default=None, gt=0, description="World canvas width")
    world_height: Optional[float] = Field(default=None, gt=0, description="World canvas height")
    screen_width: Optional[float] = Field(default=None, gt=0, description="Drawing surface width in pixels")
    screen_height: Optional[float] = Field(default=None, gt=0, description="Drawing surface height in pixels")


EventType = Literal[
    "pointer_down", "pointer_move", "pointer_up", "pointer_leave",
    "wheel", "zoom_in", "zoom_out", "zoom", "reset",
    "hover", "unhover", "resize",
]

_NEEDS_POINTER = {"pointer_down", "pointer_move", "wheel"}


class ViewportEvent(BaseModel):
    """Model for one input event."""

    type: EventType = Field(description="Event type")
    x: Optional[float] = Field(default=None, description="Pointer X in surface pixels")
    y: Optional[float] = Field(default=None, description="Pointer Y in surface pixels")
    button: int = Field(default=0, description="Pointer button, 0 is primary")
    delta_y: float = Field(default=0, description="Wheel delta, positive zooms out")
    factor: Optional[float] = Field(default=None, gt=0, description="Scale factor for centered zoom")
    node_id: Optional[str] = Field(default=None, description="Node under the pointer")
    width: Optional[float] = Field(default=None, gt=0, description="New surface width")
    height: Optional[float] = Field(default=None, gt=0, description="New surface height")

    @model_validator(mode="after")
    def check_arguments(self) -> "ViewportEvent":
        if self.type in _NEEDS_POINTER and (self.x is None or self.y is None):
            raise ValueError(f"{self.type} requires x and y")
        if self.type == "zoom" and self.factor is None:
            raise ValueError("zoom requires factor")
        if self.type == "hover" and not self.node_id:
            raise ValueError("hover requires node_id")
        if self.type == "resize" and (self.width is None or self.height is None):
            raise ValueError("resize requires width and height")
        return self


class ViewportModel(BaseModel):
    origin_x: float
    origin_y: float
    width: float
    height: float


class ViewportResponse(BaseModel):
    """Response with the session's current view."""

    session_id: str
    viewport: ViewportModel
    view_box: str
    mode: str
    hovered_node_id: Optional[str] = None
    changed: bool = False


def _response(session_id: str, controller: ViewportController, changed: bool = False) -> ViewportResponse:
    snapshot = controller.snapshot()
    return ViewportResponse(
        session_id=session_id,
        viewport=ViewportModel(**snapshot["viewport"]),
        view_box=snapshot["view_box"],
        mode=snapshot["mode"],
        hovered_node_id=snapshot["hovered_node_id"],
        changed=changed,
    )


def get_session_or_404(session_id: str) -> ViewportController:
    """Get viewport controller by ID or raise 404."""
    try:
        return sessions.get(session_id)
    except ViewportSessionNotFound:
        raise HTTPException(status_code=404, detail="Viewport session not found")


def apply_event(controller: ViewportController, event: ViewportEvent) -> bool:
    """
    Feed one event to a controller.

    Returns:
        True if the visible region changed
    """
    before = controller.state.to_dict()
    pointer = (event.x, event.y)

    if event.type == "pointer_down":
        controller.begin_pan(pointer, event.button)
    elif event.type == "pointer_move":
        controller.update_pan(pointer)
    elif event.type == "pointer_up":
        controller.end_pan()
    elif event.type == "pointer_leave":
        controller.pointer_leave()
    elif event.type == "wheel":
        controller.wheel(event.delta_y, pointer)
    elif event.type == "zoom_in":
        controller.zoom_in()
    elif event.type == "zoom_out":
        controller.zoom_out()
    elif event.type == "zoom":
        controller.zoom_centered(event.factor)
    elif event.type == "reset":
        controller.reset()
    elif event.type == "hover":
        controller.hover(event.node_id)
    elif event.type == "unhover":
        controller.unhover(event.node_id)
    elif event.type == "resize":
        controller.resize_screen(event.width, event.height)

    return controller.state.to_dict() != before


@router.post("", response_model=ViewportResponse)
async def create_viewport(request: ViewportCreateRequest):
    """Open a viewport session showing the whole world."""
    try:
        config = ViewportConfig.from_settings(
            world=WorldCanvas(
                width=request.world_width or settings.world_width,
                height=request.world_height or settings.world_height,
            )
        )
    except ValidationError as e:
        logger.warning("Viewport config rejected", errors=e.error_count())
        raise HTTPException(status_code=422, detail=[err["msg"] for err in e.errors()])
    controller = ViewportController(
        config,
        screen_width=request.screen_width or settings.screen_width,
        screen_height=request.screen_height or settings.screen_height,
    )
    session_id = sessions.create(controller)
    logger.info("Viewport session opened", session_id=session_id, view_box=controller.state.view_box)
    return _response(session_id, controller)


@router.get("/{session_id}", response_model=ViewportResponse)
async def get_viewport(session_id: str):
    """Current view of a session."""
    return _response(session_id, get_session_or_404(session_id))


@router.post("/{session_id}/events", response_model=ViewportResponse)
async def post_viewport_event(session_id: str, event: ViewportEvent):
    """Apply one input event to a session."""
    controller = get_session_or_404(session_id)
    changed = apply_event(controller, event)
    logger.debug("Viewport event", session_id=session_id, event_type=event.type, changed=changed)
    return _response(session_id, controller, changed)


@router.delete("/{session_id}")
async def close_viewport(session_id: str) -> Dict[str, str]:
    """Drop a session when its view unmounts."""
    try:
        sessions.drop(session_id)
    except ViewportSessionNotFound:
        raise HTTPException(status_code=404, detail="Viewport session not found")
    logger.info("Viewport session closed", session_id=session_id)
    return {"status": "closed", "session_id": session_id}
