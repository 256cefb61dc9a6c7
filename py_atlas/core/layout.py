"""
Deterministic hierarchical placement of locations on the world canvas.

Countries sit on an outer ring, provinces around their country, cities and
towns around their parent, and locations without a kind on a ring of their
own. Locations described as coastal are pushed further out. Placement only
depends on the records and their names, never on a random stream.
"""

import math
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import structlog

from ..config.viewport_settings import WorldCanvas
from .prng import hash_string
from .render_model import MapLink, MapNode, MapResident
from .styles import LocationKind

logger = structlog.get_logger()

INLAND_KEYWORDS = [
    'inland', 'interior', 'landlocked', 'mountain', 'mountainous', 'highland',
    'hilltop', 'hill town', 'valley', 'forest', 'woodland', 'woods',
    'plains', 'prairie', 'grassland', 'meadow', 'pasture',
    'desert', 'mesa', 'canyon', 'cave', 'underground', 'subterranean',
    'central', 'heartland', 'midland', 'upland', 'farmland', 'agricultural',
    'rural', 'countryside', 'village', 'hamlet', 'farming', 'ranching',
    'trade hub', 'trading post', 'crossroads', 'market town', 'merchant',
]

COASTAL_KEYWORDS = [
    'port city', 'port town', 'seaport', 'harbor', 'harbour',
    'coastal', 'coast', 'seaside', 'waterfront', 'seafront',
    'bay', 'dock', 'wharf', 'marina', 'beach', 'shoreline',
    'nautical', 'maritime', 'naval', 'naval base',
    'fishing village', 'fishing port', 'fishing harbor',
    'ocean', 'oceanside', 'lakeside', 'lakefront',
    'estuary', 'peninsula', 'island', 'archipelago', 'reef',
    'lighthouse', 'pier', 'boardwalk', 'cove', 'inlet',
]

# Distances in world units
PROVINCE_DISTANCE = 150.0
CHILD_DISTANCE = 50.0
COAST_DISTANCE = 310.0


@dataclass(frozen=True)
class LocationRecord:
    """Location as delivered by the data layer, before placement."""
    id: str
    name: str
    location_kind: Optional[str] = None
    parent_id: Optional[str] = None
    icon_glyph: Optional[str] = None
    summary: Optional[str] = None
    overview: Optional[str] = None
    tags: str = ""
    residents: Tuple[MapResident, ...] = ()


def is_coastal_location(summary: Optional[str], overview: Optional[str], tags: str) -> bool:
    """
    Guess from descriptive text whether a location lies on the water.

    Any inland keyword wins over coastal ones. Single-word coastal keywords
    must match as whole words.
    """
    text = f"{summary or ''} {overview or ''} {tags or ''}".lower()
    if not text.strip():
        return False

    if any(keyword in text for keyword in INLAND_KEYWORDS):
        return False

    for keyword in COASTAL_KEYWORDS:
        if ' ' in keyword:
            if keyword in text:
                return True
        elif re.search(rf"\b{re.escape(keyword)}\b", text):
            return True
    return False


def _coastal(record: LocationRecord) -> bool:
    return is_coastal_location(record.summary, record.overview, record.tags)


def _place(record: LocationRecord, x: float, y: float) -> MapNode:
    return MapNode(
        id=record.id,
        name=record.name,
        x=x,
        y=y,
        residents=tuple(record.residents),
        icon_glyph=record.icon_glyph,
        location_kind=record.location_kind,
        parent_id=record.parent_id,
    )


def _sibling_angle(record: LocationRecord, group: Sequence[LocationRecord]) -> float:
    """Even spread of the records sharing ``record``'s parent."""
    siblings = [r for r in group if r.parent_id == record.parent_id]
    index = next(i for i, s in enumerate(siblings) if s.id == record.id)
    return (index / max(len(siblings), 1)) * math.pi * 2


def _ring_position(center: Tuple[float, float], index: int, count: int, radius: float) -> Tuple[float, float]:
    angle = (index / max(count, 1)) * math.pi * 2
    return (center[0] + math.cos(angle) * radius, center[1] + math.sin(angle) * radius)


def build_map_nodes(
    locations: Sequence[LocationRecord], canvas: Optional[WorldCanvas] = None
) -> List[MapNode]:
    """
    Place every location on the canvas.

    Args:
        locations: Location records in display order
        canvas: World canvas size

    Returns:
        Positioned nodes: countries first, then provinces, cities, towns and
        standalone locations
    """
    canvas = canvas or WorldCanvas()
    center = (canvas.width / 2, canvas.height / 2)
    short_side = min(canvas.width, canvas.height)
    placed: Dict[str, MapNode] = {}

    by_kind: Dict[Optional[str], List[LocationRecord]] = defaultdict(list)
    known_kinds = {k.value for k in LocationKind}
    for record in locations:
        kind = record.location_kind if record.location_kind in known_kinds else None
        by_kind[kind].append(record)

    countries = by_kind[LocationKind.COUNTRY.value]
    provinces = by_kind[LocationKind.PROVINCE.value]
    cities = by_kind[LocationKind.CITY.value]
    towns = by_kind[LocationKind.TOWN.value]
    standalone = by_kind[None]

    # Countries on the outer ring, coastal ones 35% further out
    for index, country in enumerate(countries):
        seed = hash_string(country.name)
        jitter = ((seed % 100) / 100 - 0.5) * 0.2
        multiplier = 1.35 if _coastal(country) else 1.0
        radius = short_side * 0.35 * (1 + jitter) * multiplier
        placed[country.id] = _place(country, *_ring_position(center, index, len(countries), radius))

    for index, province in enumerate(provinces):
        coastal = _coastal(province)
        parent = placed.get(province.parent_id) if province.parent_id else None
        if parent is not None:
            angle = _sibling_angle(province, provinces)
            distance = PROVINCE_DISTANCE * (1.5 if coastal else 1.0)
            x = parent.x + math.cos(angle) * distance
            y = parent.y + math.sin(angle) * distance
        else:
            radius = short_side * 0.25 * (1.4 if coastal else 1.0)
            x, y = _ring_position(center, index, len(provinces), radius)
        placed[province.id] = _place(province, x, y)

    for index, city in enumerate(cities):
        coastal = _coastal(city)
        parent = placed.get(city.parent_id) if city.parent_id else None
        if parent is not None:
            angle = _sibling_angle(city, cities) + (hash_string(city.name) % 100) / 100
            x, y = _city_position(city, parent, placed, angle, coastal)
        else:
            radius = short_side * 0.2 * (1.5 if coastal else 1.0)
            x, y = _ring_position(center, index, len(cities), radius)
        placed[city.id] = _place(city, x, y)

    for index, town in enumerate(towns):
        coastal = _coastal(town)
        parent = placed.get(town.parent_id) if town.parent_id else None
        if parent is not None:
            angle = _sibling_angle(town, towns) + (hash_string(town.name) % 100) / 100
            distance = CHILD_DISTANCE * (1.3 if coastal else 1.0)
            x = parent.x + math.cos(angle) * distance
            y = parent.y + math.sin(angle) * distance
        else:
            radius = short_side * 0.15 * (1.3 if coastal else 1.0)
            x, y = _ring_position(center, index, len(towns), radius)
        placed[town.id] = _place(town, x, y)

    for index, record in enumerate(standalone):
        seed = hash_string(record.name)
        jitter = ((seed % 100) / 100 - 0.5) * 0.15
        multiplier = 1.35 if _coastal(record) else 1.0
        radius = short_side * 0.3 * (1 + jitter) * multiplier
        placed[record.id] = _place(record, *_ring_position(center, index, len(standalone), radius))

    logger.debug("Locations placed", count=len(placed))
    return list(placed.values())


def _city_position(
    city: LocationRecord,
    parent: MapNode,
    placed: Dict[str, MapNode],
    angle: float,
    coastal: bool,
) -> Tuple[float, float]:
    """Inland cities hug their province; coastal ones move to the country's edge."""
    if not coastal:
        return (
            parent.x + math.cos(angle) * CHILD_DISTANCE,
            parent.y + math.sin(angle) * CHILD_DISTANCE,
        )

    country = placed.get(parent.parent_id) if parent.parent_id else None
    if country is not None:
        dir_x = parent.x - country.x
        dir_y = parent.y - country.y
        length = math.hypot(dir_x, dir_y)
        if length > 0:
            offset_angle = angle * 0.3
            return (
                country.x + dir_x / length * COAST_DISTANCE + math.cos(offset_angle) * 30,
                country.y + dir_y / length * COAST_DISTANCE + math.sin(offset_angle) * 30,
            )

    return (
        parent.x + math.cos(angle) * PROVINCE_DISTANCE,
        parent.y + math.sin(angle) * PROVINCE_DISTANCE,
    )


def build_map_links(nodes: Sequence[MapNode]) -> List[MapLink]:
    """
    Connect locations with roads.

    Every child links from its parent, except provinces to their country.
    Provinces of the same country also link to their nearest sibling (two
    nearest when the country has more than three provinces), skipping pairs
    already linked in either direction.
    """
    by_id = {node.id: node for node in nodes}
    links: List[MapLink] = []

    for node in nodes:
        parent = by_id.get(node.parent_id) if node.parent_id else None
        if parent is None:
            continue
        if (node.location_kind == LocationKind.PROVINCE.value
                and parent.location_kind == LocationKind.COUNTRY.value):
            continue
        links.append(MapLink(parent, node))

    provinces_by_country: Dict[str, List[MapNode]] = defaultdict(list)
    for node in nodes:
        if node.location_kind == LocationKind.PROVINCE.value and node.parent_id:
            provinces_by_country[node.parent_id].append(node)

    linked = {(link.source.id, link.target.id) for link in links}
    for provinces in provinces_by_country.values():
        if len(provinces) < 2:
            continue
        connect_to = 2 if len(provinces) > 3 else 1
        for province in provinces:
            others = sorted(
                (p for p in provinces if p is not province),
                key=lambda p: math.hypot(province.x - p.x, province.y - p.y),
            )
            for other in others[:connect_to]:
                if (province.id, other.id) in linked or (other.id, province.id) in linked:
                    continue
                links.append(MapLink(province, other))
                linked.add((province.id, other.id))

    return links
