"""
Render model for the node-link world map.

Turns the read-only location graph supplied by the data layer into drawable
primitives: organic region outlines, winding roads, and node markers whose
look depends on hover state. Everything is recomputed from seeds on every
render pass, so the same graph always renders identically.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import structlog

from .paths import PathString, points_to_path
from .prng import hash_string, seeded_random
from .roads import generate_road_path
from .shapes import generate_organic_shape
from .styles import LocationKind, RegionStyle, default_location_icon, location_colors

logger = structlog.get_logger()

DEFAULT_HREF_TEMPLATE = "/archive/locations/{id}"


@dataclass(frozen=True)
class MapResident:
    """Character living at a location."""
    id: str
    name: str


@dataclass(frozen=True)
class MapNode:
    """A location as placed on the map. Owned by the data layer."""
    id: str
    name: str
    x: float
    y: float
    residents: Tuple[MapResident, ...] = ()
    icon_glyph: Optional[str] = None
    location_kind: Optional[str] = None
    parent_id: Optional[str] = None

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def glyph(self) -> str:
        """Custom icon, or the default icon for the location kind."""
        return self.icon_glyph or default_location_icon(self.location_kind)

    @property
    def resident_names(self) -> List[str]:
        return [r.name for r in self.residents]


@dataclass(frozen=True)
class MapLink:
    """Connector between two nodes. Duplicate links are kept as-is."""
    source: MapNode
    target: MapNode


@dataclass(frozen=True)
class NavigationIntent:
    """Request for the host to open a location's detail page."""
    entity_id: str
    href: str


@dataclass
class ShapeParams:
    """Tuning knobs for region outlines and roads."""
    country_sides: int = 18
    province_sides: int = 12
    city_sides: int = 8
    country_radius: float = 160.0
    province_radius: float = 90.0
    city_radius: float = 40.0
    randomness: float = 0.3
    path_straight_percent: float = 40
    road_curviness: float = 0.35
    road_segments: int = 4


@dataclass
class RegionShape:
    node_id: str
    kind: str
    outline: np.ndarray
    path: PathString
    style: RegionStyle


@dataclass
class RoadPath:
    from_id: str
    to_id: str
    index: int
    path: PathString


@dataclass
class NodeMarker:
    """Visual state of one node for the current pass."""
    node_id: str
    name: str
    x: float
    y: float
    glyph: str
    active: bool
    radius: float
    stroke_width: float
    fill: str
    stroke: str
    font_weight: str
    resident_label: str
    tooltip: str
    href: str


@dataclass
class MapScene:
    """All render primitives of one pass."""
    regions: List[RegionShape] = field(default_factory=list)
    roads: List[RoadPath] = field(default_factory=list)
    markers: List[NodeMarker] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "regions": [
                {
                    "node_id": r.node_id,
                    "kind": r.kind,
                    "path": str(r.path),
                    "finite": r.path.is_finite(),
                    "fill": r.style.fill,
                    "stroke": r.style.stroke,
                    "stroke_width": r.style.stroke_width,
                    "stroke_dasharray": r.style.stroke_dasharray,
                }
                for r in self.regions
            ],
            "roads": [
                {
                    "from_id": r.from_id,
                    "to_id": r.to_id,
                    "index": r.index,
                    "path": str(r.path),
                    "finite": r.path.is_finite(),
                }
                for r in self.roads
            ],
            "markers": [vars(m).copy() for m in self.markers],
        }


def resident_count_label(count: int) -> str:
    if not count:
        return "no residents"
    return f"{count} resident{'' if count == 1 else 's'}"


def node_tooltip(node: MapNode) -> str:
    """Node name followed by its residents, or an explicit empty label."""
    names = ", ".join(node.resident_names)
    if names:
        return f"{node.name}: {names}"
    return f"{node.name}: no residents yet"


class MapRenderModel:
    """
    Node-link graph plus the generators that draw it.

    Args:
        nodes: Positioned locations
        links: Connectors between locations
        seed: Map-wide seed added to every per-entity seed
        params: Shape and road tuning
        href_template: Detail page pattern for navigation intents
    """

    def __init__(
        self,
        nodes: Sequence[MapNode],
        links: Sequence[MapLink],
        seed: int = 0,
        params: Optional[ShapeParams] = None,
        href_template: str = DEFAULT_HREF_TEMPLATE,
    ):
        self.nodes = list(nodes)
        self.links = list(links)
        self.seed = seed
        self.params = params or ShapeParams()
        self.href_template = href_template
        self._by_id = {node.id: node for node in self.nodes}

    def node(self, node_id: str) -> MapNode:
        """Look up a node; raises KeyError for unknown ids."""
        try:
            return self._by_id[node_id]
        except KeyError:
            raise KeyError(f"Unknown map node: {node_id}") from None

    def href_for(self, node_id: str) -> str:
        return self.href_template.format(id=node_id)

    def node_seed(self, node: MapNode) -> int:
        return hash_string(node.id) + self.seed

    def region_for(self, node: MapNode) -> Optional[RegionShape]:
        """Organic outline around a country, province or city; None for other kinds."""
        p = self.params
        seed = self.node_seed(node)
        if node.location_kind == LocationKind.COUNTRY.value:
            sides = p.country_sides + math.floor(seeded_random(seed) * 8)
            radius = p.country_radius
        elif node.location_kind == LocationKind.PROVINCE.value:
            sides = p.province_sides + math.floor(seeded_random(seed) * 6)
            radius = p.province_radius
        elif node.location_kind == LocationKind.CITY.value:
            sides = p.city_sides
            radius = p.city_radius
        else:
            return None

        outline = generate_organic_shape(node.x, node.y, radius, sides, p.randomness, seed)
        return RegionShape(
            node_id=node.id,
            kind=node.location_kind,
            outline=outline,
            path=points_to_path(outline, seed, p.path_straight_percent),
            style=location_colors(node.location_kind),
        )

    def road_for(self, link: MapLink, index: int) -> RoadPath:
        seed = hash_string(f"{link.source.id}:{link.target.id}") + self.seed + index
        path = generate_road_path(
            link.source.position,
            link.target.position,
            seed,
            self.params.road_curviness,
            self.params.road_segments,
        )
        return RoadPath(link.source.id, link.target.id, index, path)

    def marker_for(self, node: MapNode, active: bool = False) -> NodeMarker:
        return NodeMarker(
            node_id=node.id,
            name=node.name,
            x=node.x,
            y=node.y,
            glyph=node.glyph,
            active=active,
            radius=36 if active else 32,
            stroke_width=3 if active else 2,
            fill="rgba(99, 102, 241, 0.15)" if active else "rgba(255, 255, 255, 0.9)",
            stroke="rgba(99, 102, 241, 1)" if active else "rgba(99, 102, 241, 0.4)",
            font_weight="600" if active else "500",
            resident_label=resident_count_label(len(node.residents)),
            tooltip=node_tooltip(node),
            href=self.href_for(node.id),
        )

    def render(self, hovered_node_id: Optional[str] = None) -> MapScene:
        """
        Build the scene for one render pass.

        Regions are ordered from the largest kind down so smaller regions draw
        on top; roads and markers keep input order.
        """
        order = {LocationKind.COUNTRY.value: 0, LocationKind.PROVINCE.value: 1, LocationKind.CITY.value: 2}
        regions = [r for r in (self.region_for(n) for n in self.nodes) if r is not None]
        regions.sort(key=lambda r: order[r.kind])

        scene = MapScene(
            regions=regions,
            roads=[self.road_for(link, i) for i, link in enumerate(self.links)],
            markers=[self.marker_for(n, n.id == hovered_node_id) for n in self.nodes],
        )
        logger.debug(
            "Scene rendered",
            regions=len(scene.regions),
            roads=len(scene.roads),
            markers=len(scene.markers),
        )
        return scene

    def select(self, node_id: str) -> NavigationIntent:
        """Node clicked: emit a navigation intent for the host."""
        node = self.node(node_id)
        return NavigationIntent(entity_id=node.id, href=self.href_for(node.id))


def links_from_pairs(nodes: Iterable[MapNode], pairs: Iterable[Tuple[str, str]]) -> List[MapLink]:
    """Resolve (from_id, to_id) pairs into links; unknown ids raise KeyError."""
    by_id = {n.id: n for n in nodes}
    links = []
    for from_id, to_id in pairs:
        if from_id not in by_id or to_id not in by_id:
            missing = from_id if from_id not in by_id else to_id
            raise KeyError(f"Unknown map node: {missing}")
        links.append(MapLink(by_id[from_id], by_id[to_id]))
    return links
