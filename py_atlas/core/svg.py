"""SVG document output for a rendered map scene."""

from typing import List, Optional
from xml.sax.saxutils import escape, quoteattr

import structlog

from .paths import format_number
from .render_model import MapScene, NodeMarker
from .viewport import ViewportState

logger = structlog.get_logger()

GRID_SIZE = 40


def _marker_svg(marker: NodeMarker) -> str:
    x, y = format_number(marker.x), format_number(marker.y)
    return (
        f'<g class="node" data-node-id={quoteattr(marker.node_id)}>'
        f'<a href={quoteattr(marker.href)}>'
        f'<title>{escape(marker.tooltip)}</title>'
        f'<circle cx="{x}" cy="{y}" r="{marker.radius}" fill="{marker.fill}" '
        f'stroke="{marker.stroke}" stroke-width="{marker.stroke_width}"/>'
        f'<text x="{x}" y="{format_number(marker.y + 8)}" text-anchor="middle" font-size="28">'
        f'{escape(marker.glyph)}</text>'
        f'<text x="{x}" y="{format_number(marker.y + 48)}" text-anchor="middle" font-size="13" '
        f'font-weight="{marker.font_weight}">{escape(marker.name)}</text>'
        f'<text x="{x}" y="{format_number(marker.y + 64)}" text-anchor="middle" font-size="10">'
        f'{escape(marker.resident_label)}</text>'
        '</a></g>'
    )


def render_svg(
    scene: MapScene,
    viewport: ViewportState,
    world_width: float,
    world_height: float,
    pixel_width: Optional[float] = None,
    pixel_height: Optional[float] = None,
) -> str:
    """
    Render a scene as a standalone SVG document.

    The viewport becomes the ``viewBox``. Paths with non-finite coordinates
    are left out.

    Args:
        scene: Render primitives
        viewport: Visible region
        world_width: World canvas width, for the background
        world_height: World canvas height, for the background
        pixel_width: Optional document width attribute
        pixel_height: Optional document height attribute

    Returns:
        SVG markup
    """
    size = ""
    if pixel_width and pixel_height:
        size = f' width="{format_number(pixel_width)}" height="{format_number(pixel_height)}"'

    w, h = format_number(world_width), format_number(world_height)
    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{viewport.view_box}"{size} '
        'role="img" aria-label="World map">',
        '<defs><pattern id="map-grid" width="40" height="40" patternUnits="userSpaceOnUse">'
        f'<path d="M {GRID_SIZE} 0 L 0 0 0 {GRID_SIZE}" fill="none" '
        'stroke="rgba(120, 120, 120, 0.15)" stroke-width="1"/></pattern></defs>',
        f'<rect width="{w}" height="{h}" fill="url(#map-grid)"/>',
    ]

    skipped = 0
    for region in scene.regions:
        if not region.path.is_finite():
            skipped += 1
            continue
        style = region.style
        dash = f' stroke-dasharray="{style.stroke_dasharray}"' if style.stroke_dasharray else ""
        parts.append(
            f'<path class="region region-{region.kind}" d="{region.path}" fill="{style.fill}" '
            f'stroke="{style.stroke}" stroke-width="{style.stroke_width}"{dash}/>'
        )

    for road in scene.roads:
        if not road.path.is_finite():
            skipped += 1
            continue
        parts.append(
            f'<path class="road" d="{road.path}" stroke="#8B7355" stroke-width="6" '
            'fill="none" stroke-linecap="round"/>'
        )

    parts.extend(_marker_svg(marker) for marker in scene.markers)
    parts.append("</svg>")

    if skipped:
        logger.warning("Skipped non-finite paths", count=skipped)
    return "".join(parts)
