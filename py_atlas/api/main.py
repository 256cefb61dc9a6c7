"""FastAPI main application."""

import json
import logging
from typing import List, Optional, Tuple, Union

import structlog
from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .. import __version__
from ..config import WorldCanvas, settings
from ..core.layout import LocationRecord, build_map_links, build_map_nodes
from ..core.paths import points_to_path
from ..core.prng import seed_for
from ..core.render_model import (
    MapNode, MapRenderModel, MapResident, ShapeParams, links_from_pairs
)
from ..core.roads import generate_road_path
from ..core.shapes import generate_organic_shape
from ..core.styles import COMMON_LOCATION_EMOJIS, location_type_options, zoom_level_for_type
from ..core.svg import render_svg
from ..core.viewport import ViewportState
from . import viewports

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


class AsciiJSONResponse(JSONResponse):
    """JSON with non-ASCII escaped, so ids holding lone surrogates still encode."""

    def render(self, content) -> bytes:
        return json.dumps(
            content, ensure_ascii=True, allow_nan=False, indent=None, separators=(",", ":")
        ).encode("ascii")


# Initialize FastAPI app
app = FastAPI(
    title="World Atlas Map API",
    description="Procedural world map shapes, roads and viewports",
    version=__version__,
    default_response_class=AsciiJSONResponse,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(viewports.router)

Seed = Union[int, str]


# Request/Response models
class ResidentModel(BaseModel):
    id: str
    name: str


class NodeModel(BaseModel):
    """Positioned location."""

    id: str
    name: str
    x: float
    y: float
    residents: List[ResidentModel] = Field(default_factory=list)
    icon_glyph: Optional[str] = Field(None, description="Custom icon, defaults by location kind")
    location_kind: Optional[str] = Field(None, description="country, province, city, town or empty")
    parent_id: Optional[str] = None

    def to_node(self) -> MapNode:
        return MapNode(
            id=self.id,
            name=self.name,
            x=self.x,
            y=self.y,
            residents=tuple(MapResident(r.id, r.name) for r in self.residents),
            icon_glyph=self.icon_glyph,
            location_kind=self.location_kind,
            parent_id=self.parent_id,
        )

    @classmethod
    def from_node(cls, node: MapNode) -> "NodeModel":
        return cls(
            id=node.id,
            name=node.name,
            x=node.x,
            y=node.y,
            residents=[ResidentModel(id=r.id, name=r.name) for r in node.residents],
            icon_glyph=node.icon_glyph,
            location_kind=node.location_kind,
            parent_id=node.parent_id,
        )


class LinkModel(BaseModel):
    """Connector between two node ids."""

    model_config = ConfigDict(populate_by_name=True)

    from_id: str = Field(..., alias="from")
    to_id: str = Field(..., alias="to")


class ShapeParamsModel(BaseModel):
    country_sides: int = 18
    province_sides: int = 12
    city_sides: int = 8
    country_radius: float = 160.0
    province_radius: float = 90.0
    city_radius: float = 40.0
    randomness: float = 0.3
    path_straight_percent: float = Field(40, ge=0, le=100)
    road_curviness: float = 0.35
    road_segments: int = 4


class MapRenderRequest(BaseModel):
    """Request to render a node-link graph."""

    nodes: List[NodeModel]
    links: List[LinkModel] = Field(default_factory=list)
    seed: Seed = Field(0, description="Map seed, integer or string")
    hovered_node_id: Optional[str] = None
    params: ShapeParamsModel = Field(default_factory=ShapeParamsModel)


class ViewBoxModel(BaseModel):
    origin_x: float = 0
    origin_y: float = 0
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class MapSvgRequest(MapRenderRequest):
    """Request to render a graph as an SVG document."""

    viewport: Optional[ViewBoxModel] = None
    world_width: float = Field(settings.world_width, gt=0)
    world_height: float = Field(settings.world_height, gt=0)
    pixel_width: Optional[float] = Field(None, gt=0)
    pixel_height: Optional[float] = Field(None, gt=0)


class SelectRequest(BaseModel):
    nodes: List[NodeModel]
    node_id: str


class OrganicShapeRequest(BaseModel):
    """Request for a single organic outline."""

    center_x: float
    center_y: float
    base_radius: float
    sides: int = 8
    randomness: float = 0.3
    seed: Seed = 0
    straight_percent: float = 40


class OrganicShapeResponse(BaseModel):
    points: List[Tuple[float, float]]
    path: str


class RoadRequest(BaseModel):
    """Request for a single road between two points."""

    start: Tuple[float, float]
    end: Tuple[float, float]
    seed: Seed = 0
    curviness: float = 0.3
    segments: int = 3


class PathResponse(BaseModel):
    path: str
    finite: bool


class LocationModel(BaseModel):
    """Location record before placement."""

    id: str
    name: str
    location_kind: Optional[str] = None
    parent_id: Optional[str] = None
    icon_glyph: Optional[str] = None
    summary: Optional[str] = None
    overview: Optional[str] = None
    tags: str = ""
    residents: List[ResidentModel] = Field(default_factory=list)


class LayoutRequest(BaseModel):
    locations: List[LocationModel]
    world_width: float = Field(settings.world_width, gt=0)
    world_height: float = Field(settings.world_height, gt=0)


class LayoutResponse(BaseModel):
    nodes: List[NodeModel]
    links: List[LinkModel]


class LocationKindModel(BaseModel):
    value: Optional[str]
    label: str
    icon: str
    zoom_level: int


class LocationKindsResponse(BaseModel):
    """Picker choices for location kinds plus the icon palette."""

    kinds: List[LocationKindModel]
    emojis: List[str]


def _build_model(request: MapRenderRequest) -> MapRenderModel:
    nodes = [n.to_node() for n in request.nodes]
    try:
        links = links_from_pairs(nodes, [(link.from_id, link.to_id) for link in request.links])
    except KeyError as e:
        raise HTTPException(status_code=422, detail=str(e.args[0]))
    return MapRenderModel(
        nodes, links, seed=seed_for(request.seed), params=ShapeParams(**request.params.model_dump())
    )


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "World Atlas Map API",
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "viewport_sessions": len(viewports.sessions)}


@app.get("/locations/kinds", response_model=LocationKindsResponse)
async def location_kinds():
    """Location kinds with labels, default icons and zoom levels."""
    kinds = [
        LocationKindModel(**option, zoom_level=zoom_level_for_type(option["value"]))
        for option in location_type_options()
    ]
    return LocationKindsResponse(kinds=kinds, emojis=COMMON_LOCATION_EMOJIS)


@app.post("/shapes/organic", response_model=OrganicShapeResponse)
async def organic_shape(request: OrganicShapeRequest):
    """Generate one organic outline and its path."""
    seed = seed_for(request.seed)
    points = generate_organic_shape(
        request.center_x, request.center_y, request.base_radius,
        request.sides, request.randomness, seed,
    )
    path = points_to_path(points, seed, request.straight_percent)
    return OrganicShapeResponse(points=[tuple(p) for p in points.tolist()], path=str(path))


@app.post("/roads", response_model=PathResponse)
async def road(request: RoadRequest):
    """Generate one winding road."""
    path = generate_road_path(
        request.start, request.end, seed_for(request.seed), request.curviness, request.segments
    )
    return PathResponse(path=str(path), finite=path.is_finite())


@app.post("/maps/layout", response_model=LayoutResponse, response_model_by_alias=True)
async def layout_map(request: LayoutRequest):
    """Place location records on the canvas and connect them."""
    logger.info("Map layout requested", locations=len(request.locations))
    records = [
        LocationRecord(
            id=loc.id,
            name=loc.name,
            location_kind=loc.location_kind,
            parent_id=loc.parent_id,
            icon_glyph=loc.icon_glyph,
            summary=loc.summary,
            overview=loc.overview,
            tags=loc.tags,
            residents=tuple(MapResident(r.id, r.name) for r in loc.residents),
        )
        for loc in request.locations
    ]
    canvas = WorldCanvas(width=request.world_width, height=request.world_height)
    nodes = build_map_nodes(records, canvas)
    links = build_map_links(nodes)
    return LayoutResponse(
        nodes=[NodeModel.from_node(n) for n in nodes],
        links=[LinkModel(from_id=link.source.id, to_id=link.target.id) for link in links],
    )


@app.post("/maps/render")
async def render_map(request: MapRenderRequest):
    """Render primitives for a node-link graph."""
    logger.info("Map render requested", nodes=len(request.nodes), links=len(request.links))
    model = _build_model(request)
    return model.render(request.hovered_node_id).to_dict()


@app.post("/maps/svg")
async def render_map_svg(request: MapSvgRequest):
    """Render a node-link graph as an SVG document."""
    model = _build_model(request)
    if request.viewport is not None:
        view = ViewportState(**request.viewport.model_dump())
    else:
        view = ViewportState(0.0, 0.0, request.world_width, request.world_height)

    svg = render_svg(
        model.render(request.hovered_node_id),
        view,
        request.world_width,
        request.world_height,
        request.pixel_width,
        request.pixel_height,
    )
    return Response(content=svg, media_type="image/svg+xml")


@app.post("/maps/select")
async def select_node(request: SelectRequest):
    """Resolve a node click into a navigation intent."""
    model = MapRenderModel([n.to_node() for n in request.nodes], [])
    try:
        intent = model.select(request.node_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Node not found")
    return {"entity_id": intent.entity_id, "href": intent.href}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
