"""Tests for hierarchical location placement and road links."""

import math

import pytest

from py_atlas.config import WorldCanvas
from py_atlas.core.layout import (
    LocationRecord, build_map_links, build_map_nodes, is_coastal_location,
)


def _world():
    return [
        LocationRecord("c1", "Aurelia", "country"),
        LocationRecord("c2", "Brakka", "country", summary="A maritime nation of harbors"),
        LocationRecord("p1", "North March", "province", parent_id="c1"),
        LocationRecord("p2", "South March", "province", parent_id="c1"),
        LocationRecord("p3", "East March", "province", parent_id="c1"),
        LocationRecord("p4", "West March", "province", parent_id="c1"),
        LocationRecord("ci1", "Highgate", "city", parent_id="p1"),
        LocationRecord("ci2", "Saltmere", "city", parent_id="p1", summary="A busy seaport"),
        LocationRecord("t1", "Brookby", "town", parent_id="ci1"),
        LocationRecord("s1", "The Wanderer's Rest"),
        LocationRecord("x1", "Oddity", "moon"),
    ]


class TestCoastalDetection:
    """Test the description keyword heuristic."""

    def test_empty(self):
        assert not is_coastal_location(None, None, "")

    def test_coastal(self):
        assert is_coastal_location("A fishing port on the bay", None, "")
        assert is_coastal_location(None, "Ships crowd the harbor", "")
        assert is_coastal_location(None, None, "island")

    def test_inland_wins(self):
        assert not is_coastal_location("A coastal town in the valley", None, "")

    def test_word_boundaries(self):
        """Test that single words do not match inside other words."""
        assert not is_coastal_location("An embayment of reeds", None, "")
        assert not is_coastal_location("Pierre's shop", None, "")


class TestBuildMapNodes:
    """Test node placement."""

    def test_all_locations_placed(self):
        nodes = build_map_nodes(_world())
        assert sorted(n.id for n in nodes) == sorted(r.id for r in _world())

    def test_order_by_hierarchy(self):
        nodes = build_map_nodes(_world())
        assert [n.id for n in nodes][:2] == ["c1", "c2"]

    def test_deterministic(self):
        assert build_map_nodes(_world()) == build_map_nodes(_world())

    def test_country_ring(self):
        """Test that countries sit near 35% of the short side from center."""
        nodes = {n.id: n for n in build_map_nodes(_world())}
        c1 = nodes["c1"]
        distance = math.hypot(c1.x - 500, c1.y - 300)
        assert 600 * 0.35 * 0.9 <= distance <= 600 * 0.35 * 1.1

    def test_coastal_country_pushed_out(self):
        nodes = {n.id: n for n in build_map_nodes(_world())}
        c2 = nodes["c2"]
        distance = math.hypot(c2.x - 500, c2.y - 300)
        assert distance >= 600 * 0.35 * 0.9 * 1.35

    def test_province_around_parent(self):
        nodes = {n.id: n for n in build_map_nodes(_world())}
        p1, c1 = nodes["p1"], nodes["c1"]
        assert math.hypot(p1.x - c1.x, p1.y - c1.y) == pytest.approx(150)

    def test_inland_city_near_province(self):
        nodes = {n.id: n for n in build_map_nodes(_world())}
        ci1, p1 = nodes["ci1"], nodes["p1"]
        assert math.hypot(ci1.x - p1.x, ci1.y - p1.y) == pytest.approx(50)

    def test_coastal_city_at_country_edge(self):
        nodes = {n.id: n for n in build_map_nodes(_world())}
        ci2, c1 = nodes["ci2"], nodes["c1"]
        distance = math.hypot(ci2.x - c1.x, ci2.y - c1.y)
        assert 310 - 30 <= distance <= 310 + 30

    def test_unknown_kind_is_standalone(self):
        nodes = {n.id: n for n in build_map_nodes(_world())}
        assert nodes["x1"].location_kind == "moon"
        distance = math.hypot(nodes["x1"].x - 500, nodes["x1"].y - 300)
        assert distance == pytest.approx(180, rel=0.1)

    def test_canvas_size(self):
        nodes = build_map_nodes([LocationRecord("s1", "Solo")], WorldCanvas(width=2000, height=1000))
        assert nodes[0].y == pytest.approx(500, abs=1e-9)
        assert nodes[0].x > 1000

    def test_empty(self):
        assert build_map_nodes([]) == []


class TestBuildMapLinks:
    """Test road network links."""

    def test_parent_links(self):
        links = build_map_links(build_map_nodes(_world()))
        pairs = {(l.source.id, l.target.id) for l in links}

        assert ("p1", "ci1") in pairs
        assert ("ci1", "t1") in pairs
        # Provinces never link up to their country
        assert not any(source == "c1" for source, _ in pairs)

    def test_province_network(self):
        """Test that provinces link to their two nearest siblings without reverse duplicates."""
        links = build_map_links(build_map_nodes(_world()))
        province_pairs = [
            (l.source.id, l.target.id) for l in links
            if l.source.location_kind == "province" and l.target.location_kind == "province"
        ]

        assert province_pairs
        unordered = {frozenset(p) for p in province_pairs}
        assert len(unordered) == len(province_pairs)
        for pid in ("p1", "p2", "p3", "p4"):
            assert any(pid in p for p in unordered)

    def test_single_province_has_no_network(self):
        records = [
            LocationRecord("c1", "Aurelia", "country"),
            LocationRecord("p1", "North March", "province", parent_id="c1"),
        ]
        assert build_map_links(build_map_nodes(records)) == []
