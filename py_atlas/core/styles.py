"""
Visual conventions per location kind: colors, default glyphs, labels.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union


class LocationKind(str, Enum):
    """Hierarchy level of a location."""

    COUNTRY = "country"
    PROVINCE = "province"
    CITY = "city"
    TOWN = "town"


KindLike = Union[LocationKind, str, None]


def _kind(kind: KindLike) -> Optional[LocationKind]:
    if kind is None or isinstance(kind, LocationKind):
        return kind
    try:
        return LocationKind(kind)
    except ValueError:
        return None


@dataclass(frozen=True)
class RegionStyle:
    """Fill and stroke of a region outline."""
    fill: str
    stroke: str
    stroke_width: float
    stroke_dasharray: Optional[str] = None


_REGION_STYLES: Dict[Optional[LocationKind], RegionStyle] = {
    LocationKind.COUNTRY: RegionStyle(fill="url(#grass-texture)", stroke="#16A34A", stroke_width=4),
    LocationKind.PROVINCE: RegionStyle(
        fill="url(#grass-texture-province)", stroke="#22C55E", stroke_width=3, stroke_dasharray="10,5"
    ),
    LocationKind.CITY: RegionStyle(fill="#FDE047", stroke="#CA8A04", stroke_width=2),
    LocationKind.TOWN: RegionStyle(fill="#FCA5A5", stroke="#DC2626", stroke_width=1.5),
    None: RegionStyle(fill="#F3F4F6", stroke="#9CA3AF", stroke_width=1),
}

_DEFAULT_ICONS = {
    LocationKind.COUNTRY: "🌍",
    LocationKind.PROVINCE: "🏛️",
    LocationKind.CITY: "🏙️",
    LocationKind.TOWN: "🏘️",
    None: "📍",
}

_TYPE_LABELS = {
    LocationKind.COUNTRY: "Country",
    LocationKind.PROVINCE: "Province/State/Region",
    LocationKind.CITY: "City",
    LocationKind.TOWN: "Town/Village",
    None: "Standalone Location",
}

# World level is 0, each step down the hierarchy adds one
_ZOOM_LEVELS = {
    LocationKind.COUNTRY: 0,
    LocationKind.PROVINCE: 1,
    LocationKind.CITY: 2,
    LocationKind.TOWN: 3,
    None: 0,
}

COMMON_LOCATION_EMOJIS: List[str] = [
    # Places
    "🌍", "🌎", "🌏", "🗺️", "🗾",
    # Buildings & Structures
    "🏛️", "🏰", "🏯", "🏟️", "🗼", "🗽", "⛪", "🕌", "🛕", "🕍",
    # Urban
    "🏙️", "🌆", "🌃", "🌇", "🏘️", "🏚️",
    # Nature
    "🏔️", "⛰️", "🗻", "🏕️", "🏞️", "🏝️", "🏖️", "🏜️",
    # Water
    "🌊", "💧", "🌀",
    # Transport
    "🚢", "⚓", "🛥️", "⛵", "🚂", "🚉", "✈️", "🛩️",
    # Markers
    "📍", "📌", "🚩", "⭐", "✨", "💫",
]


def location_colors(kind: KindLike) -> RegionStyle:
    """Region style for a location kind; unknown kinds get the neutral style."""
    return _REGION_STYLES[_kind(kind)]


def default_location_icon(kind: KindLike) -> str:
    return _DEFAULT_ICONS[_kind(kind)]


def location_type_label(kind: KindLike) -> str:
    return _TYPE_LABELS[_kind(kind)]


def zoom_level_for_type(kind: KindLike) -> int:
    """Hierarchy zoom level at which a location kind is introduced."""
    return _ZOOM_LEVELS[_kind(kind)]


def location_type_options() -> List[Dict[str, Optional[str]]]:
    """Choices for a location kind picker."""
    return [
        {"value": None, "label": location_type_label(None), "icon": default_location_icon(None)}
    ] + [
        {"value": k.value, "label": location_type_label(k), "icon": default_location_icon(k)}
        for k in LocationKind
    ]
