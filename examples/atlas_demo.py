#!/usr/bin/env python3
"""
Demo script: lay out a small world, render it, and drive a viewport.
"""

from pathlib import Path

from py_atlas.config import ViewportConfig
from py_atlas.core import (
    LocationRecord, MapRenderModel, MapResident, ViewportController,
    build_map_links, build_map_nodes, hash_string,
)
from py_atlas.core.svg import render_svg


def main():
    """Demonstrate layout, rendering and viewport control."""
    print("Py-Atlas Map Demo")
    print("=" * 40)

    locations = [
        LocationRecord("c1", "Aurelia", "country"),
        LocationRecord("c2", "Brakka", "country", summary="A maritime nation"),
        LocationRecord("p1", "North March", "province", parent_id="c1"),
        LocationRecord("p2", "South March", "province", parent_id="c1"),
        LocationRecord("ci1", "Neo Seoul", "city", parent_id="p1",
                       residents=(MapResident("r1", "Ada"), MapResident("r2", "Kim"))),
        LocationRecord("t1", "Atelier 9", "town", parent_id="ci1"),
    ]

    nodes = build_map_nodes(locations)
    links = build_map_links(nodes)
    print(f"\nPlaced {len(nodes)} locations, {len(links)} roads")
    for node in nodes:
        print(f"  {node.glyph} {node.name:<12} ({node.x:7.1f}, {node.y:7.1f})")

    model = MapRenderModel(nodes, links, seed=hash_string("demo world"))
    controller = ViewportController(ViewportConfig())

    print("\nZooming in at Neo Seoul...")
    city = model.node("ci1")
    for _ in range(3):
        controller.wheel(-1, controller.world_to_screen(city.position))
    controller.hover("ci1")
    print(f"  viewBox: {controller.state.view_box}")

    scene = model.render(controller.interaction.hovered_node_id)
    svg = render_svg(scene, controller.state, 1000, 600)
    output = Path("atlas_demo.svg")
    output.write_text(svg, encoding="utf-8")
    print(f"\nWrote {output} ({len(scene.regions)} regions, {len(scene.roads)} roads)")

    intent = model.select("ci1")
    print(f"Clicking Neo Seoul navigates to {intent.href}")


if __name__ == "__main__":
    main()
