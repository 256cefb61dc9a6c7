"""
Core map generation functionality.
"""

from .prng import seeded_random, hash_string, seed_for
from .shapes import generate_organic_shape, get_bounds, Bounds
from .paths import PathString, points_to_path
from .roads import generate_road_path
from .viewport import ViewportController, ViewportState, InteractionState, PanMode
from .render_model import (
    MapNode, MapLink, MapResident, MapRenderModel, MapScene, NavigationIntent, ShapeParams
)
from .layout import LocationRecord, build_map_nodes, build_map_links

__all__ = ['seeded_random', 'hash_string', 'seed_for',
           'generate_organic_shape', 'get_bounds', 'Bounds',
           'PathString', 'points_to_path', 'generate_road_path',
           'ViewportController', 'ViewportState', 'InteractionState', 'PanMode',
           'MapNode', 'MapLink', 'MapResident', 'MapRenderModel', 'MapScene',
           'NavigationIntent', 'ShapeParams',
           'LocationRecord', 'build_map_nodes', 'build_map_links']
