"""
Pan/zoom controller for the map drawing surface.

The controller owns one ``ViewportState`` (the visible sub-rectangle of the
world canvas) and one ``InteractionState`` (drag and hover bookkeeping). It is
driven by discrete transitions that any UI event loop can call:

    Idle --begin_pan--> Panning --update_pan--> Panning --end_pan--> Idle

Zooming is a separate, stateless operation. Events must be fed in arrival
order from a single thread; a controller is never shared between views.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Optional, Tuple

import structlog

from ..config.viewport_settings import ViewportConfig

logger = structlog.get_logger()

Point = Tuple[float, float]

PRIMARY_BUTTON = 0


class PanMode(str, Enum):
    """Drag state of the controller."""

    IDLE = "idle"
    PANNING = "panning"


@dataclass
class ViewportState:
    """Visible region of the world canvas, in world units."""
    origin_x: float
    origin_y: float
    width: float
    height: float

    @property
    def view_box(self) -> str:
        """SVG viewBox attribute value."""
        return f"{self.origin_x} {self.origin_y} {self.width} {self.height}"

    @property
    def center(self) -> Point:
        return (self.origin_x + self.width / 2, self.origin_y + self.height / 2)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class InteractionState:
    """Transient pointer bookkeeping."""
    is_panning: bool = False
    last_pointer: Optional[Point] = None
    hovered_node_id: Optional[str] = None


class ViewportController:
    """
    Cursor-anchored zoom and drag-pan over a fixed-size world canvas.

    Zoom requests that would push the visible width outside
    ``[config.min_dim, config.max_dim]`` are ignored.
    """

    def __init__(
        self,
        config: Optional[ViewportConfig] = None,
        screen_width: Optional[float] = None,
        screen_height: Optional[float] = None,
    ):
        """
        Initialize the controller showing the whole world.

        Args:
            config: World size and zoom limits
            screen_width: Drawing surface width in pixels, defaults to world width
            screen_height: Drawing surface height in pixels, defaults to world height
        """
        self.config = config or ViewportConfig()
        self.screen_width = float(screen_width or self.config.world.width)
        self.screen_height = float(screen_height or self.config.world.height)
        self.state = self._initial_state()
        self.interaction = InteractionState()

    def _initial_state(self) -> ViewportState:
        world = self.config.world
        return ViewportState(0.0, 0.0, float(world.width), float(world.height))

    @property
    def mode(self) -> PanMode:
        return PanMode.PANNING if self.interaction.is_panning else PanMode.IDLE

    def resize_screen(self, width: float, height: float) -> None:
        """Record a new drawing surface size in pixels."""
        if width <= 0 or height <= 0:
            raise ValueError("Screen size must be positive")
        self.screen_width = float(width)
        self.screen_height = float(height)

    # Coordinate conversion

    def screen_to_world(self, point: Point) -> Point:
        """Convert a surface pixel position to world coordinates under the current view."""
        s = self.state
        return (
            s.origin_x + (point[0] / self.screen_width) * s.width,
            s.origin_y + (point[1] / self.screen_height) * s.height,
        )

    def world_to_screen(self, point: Point) -> Point:
        """Convert world coordinates to a surface pixel position."""
        s = self.state
        return (
            (point[0] - s.origin_x) / s.width * self.screen_width,
            (point[1] - s.origin_y) / s.height * self.screen_height,
        )

    # Zoom

    def _within_limits(self, width: float) -> bool:
        return self.config.min_dim <= width <= self.config.max_dim

    def zoom_at(self, screen_point: Point, factor: float) -> bool:
        """
        Scale the view by ``factor`` keeping the world point under the pointer fixed.

        A factor above 1 zooms out, below 1 zooms in.

        Returns:
            True if the viewport changed
        """
        s = self.state
        new_width = s.width * factor
        new_height = s.height * factor
        if not self._within_limits(new_width):
            logger.debug("Zoom rejected", factor=factor, width=new_width, height=new_height)
            return False

        anchor_x, anchor_y = self.screen_to_world(screen_point)
        s.origin_x = anchor_x - (anchor_x - s.origin_x) * factor
        s.origin_y = anchor_y - (anchor_y - s.origin_y) * factor
        s.width = new_width
        s.height = new_height
        return True

    def wheel(self, delta_y: float, screen_point: Point) -> bool:
        """Zoom one wheel step at the pointer: positive delta zooms out."""
        if delta_y > 0:
            factor = self.config.wheel_zoom_out_factor
        else:
            factor = self.config.wheel_zoom_in_factor
        return self.zoom_at(screen_point, factor)

    def zoom_centered(self, factor: float) -> bool:
        """Scale the view by ``factor`` around its current center."""
        s = self.state
        new_width = s.width * factor
        new_height = s.height * factor
        if not self._within_limits(new_width):
            logger.debug("Zoom rejected", factor=factor, width=new_width, height=new_height)
            return False

        s.origin_x += (s.width - new_width) / 2
        s.origin_y += (s.height - new_height) / 2
        s.width = new_width
        s.height = new_height
        return True

    def zoom_in(self) -> bool:
        return self.zoom_centered(self.config.button_zoom_in_factor)

    def zoom_out(self) -> bool:
        return self.zoom_centered(self.config.button_zoom_out_factor)

    def reset(self) -> None:
        """Show the whole world canvas again."""
        world = self.config.world
        s = self.state
        s.origin_x, s.origin_y = 0.0, 0.0
        s.width, s.height = float(world.width), float(world.height)

    # Pan

    def begin_pan(self, pointer: Point, button: int = PRIMARY_BUTTON) -> bool:
        """Start dragging; only the primary button pans."""
        if button != PRIMARY_BUTTON:
            return False
        self.interaction.is_panning = True
        self.interaction.last_pointer = (float(pointer[0]), float(pointer[1]))
        logger.debug("Pan started", pointer=pointer)
        return True

    def update_pan(self, pointer: Point) -> bool:
        """
        Move the view by the pointer delta since the last event.

        Dragging right moves the view left: the screen delta is converted to
        world units and subtracted from the origin.

        Returns:
            True if the viewport moved
        """
        if not self.interaction.is_panning or self.interaction.last_pointer is None:
            return False

        last_x, last_y = self.interaction.last_pointer
        dx = pointer[0] - last_x
        dy = pointer[1] - last_y

        s = self.state
        s.origin_x -= dx * (s.width / self.screen_width)
        s.origin_y -= dy * (s.height / self.screen_height)
        self.interaction.last_pointer = (float(pointer[0]), float(pointer[1]))
        return dx != 0 or dy != 0

    def end_pan(self) -> None:
        """Stop dragging (pointer up)."""
        if self.interaction.is_panning:
            logger.debug("Pan ended", view_box=self.state.view_box)
        self.interaction.is_panning = False
        self.interaction.last_pointer = None

    def pointer_leave(self) -> None:
        """Pointer left the surface: stop dragging and drop hover."""
        self.end_pan()
        self.interaction.hovered_node_id = None

    # Hover

    def hover(self, node_id: str) -> None:
        self.interaction.hovered_node_id = node_id

    def unhover(self, node_id: Optional[str] = None) -> None:
        """Clear hover, or only if ``node_id`` is the hovered node."""
        if node_id is None or self.interaction.hovered_node_id == node_id:
            self.interaction.hovered_node_id = None

    def snapshot(self) -> Dict[str, object]:
        """Plain-data view of the controller for the host."""
        return {
            "viewport": self.state.to_dict(),
            "view_box": self.state.view_box,
            "mode": self.mode.value,
            "hovered_node_id": self.interaction.hovered_node_id,
            "screen": {"width": self.screen_width, "height": self.screen_height},
        }
