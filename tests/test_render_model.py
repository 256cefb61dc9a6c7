"""Tests for the map render model."""

import pytest

from py_atlas.core.render_model import (
    MapLink, MapNode, MapRenderModel, MapResident, NavigationIntent,
    links_from_pairs, node_tooltip, resident_count_label,
)

ALICE = MapResident("c1", "Alice")
BORIS = MapResident("c2", "Boris")


@pytest.fixture
def nodes():
    return [
        MapNode("n1", "Neo Seoul", 300, 200, (ALICE, BORIS), location_kind="country"),
        MapNode("n2", "Atelier 9", 600, 350, (ALICE,), icon_glyph="🏰", location_kind="city"),
        MapNode("n3", "Lonely Pier", 820, 500),
        MapNode("n4", "Harbor Ward", 450, 260, location_kind="province"),
        MapNode("n5", "Old Mill", 640, 380, location_kind="town"),
    ]


@pytest.fixture
def model(nodes):
    links = [MapLink(nodes[0], nodes[1]), MapLink(nodes[0], nodes[1]), MapLink(nodes[1], nodes[2])]
    return MapRenderModel(nodes, links, seed=17)


class TestLabels:
    """Test tooltip and label text."""

    def test_tooltip_with_residents(self, nodes):
        assert node_tooltip(nodes[0]) == "Neo Seoul: Alice, Boris"

    def test_tooltip_without_residents(self, nodes):
        assert node_tooltip(nodes[2]) == "Lonely Pier: no residents yet"

    def test_resident_count(self):
        assert resident_count_label(0) == "no residents"
        assert resident_count_label(1) == "1 resident"
        assert resident_count_label(4) == "4 residents"

    def test_glyph_defaults(self, nodes):
        assert nodes[0].glyph == "🌍"
        assert nodes[1].glyph == "🏰"
        assert nodes[2].glyph == "📍"


class TestScene:
    """Test scene construction."""

    def test_regions_for_region_kinds_only(self, model):
        scene = model.render()
        kinds = [r.kind for r in scene.regions]

        # Largest kinds first so smaller regions draw on top
        assert kinds == ["country", "province", "city"]
        assert all(r.path.is_closed for r in scene.regions)

    def test_duplicate_links_kept(self, model):
        scene = model.render()
        assert len(scene.roads) == 3
        assert [r.index for r in scene.roads] == [0, 1, 2]

    def test_roads_connect_nodes(self, model, nodes):
        for road in model.render().roads:
            source = model.node(road.from_id)
            target = model.node(road.to_id)
            assert road.path.start == source.position
            assert road.path.end == target.position

    def test_render_is_deterministic(self, nodes):
        links = [MapLink(nodes[0], nodes[1])]
        first = MapRenderModel(nodes, links, seed=5).render().to_dict()
        second = MapRenderModel(nodes, links, seed=5).render().to_dict()
        assert first == second

    def test_map_seed_changes_shapes(self, nodes):
        a = MapRenderModel(nodes, [], seed=1).render()
        b = MapRenderModel(nodes, [], seed=2).render()
        assert str(a.regions[0].path) != str(b.regions[0].path)

    def test_hover_changes_only_the_hovered_marker(self, model):
        scene = model.render(hovered_node_id="n2")
        markers = {m.node_id: m for m in scene.markers}

        assert markers["n2"].active
        assert markers["n2"].radius == 36
        assert markers["n2"].stroke_width == 3
        assert not markers["n1"].active
        assert markers["n1"].radius == 32
        assert markers["n1"].stroke_width == 2

        # Geometry does not depend on hover
        plain = model.render()
        assert [str(r.path) for r in plain.regions] == [str(r.path) for r in scene.regions]

    def test_to_dict(self, model):
        data = model.render().to_dict()
        assert set(data) == {"regions", "roads", "markers"}
        assert data["markers"][0]["tooltip"] == "Neo Seoul: Alice, Boris"
        assert data["roads"][0]["path"].startswith("M 300 200")


class TestNavigation:
    """Test node selection."""

    def test_select(self, model):
        assert model.select("n3") == NavigationIntent("n3", "/archive/locations/n3")

    def test_custom_href(self, nodes):
        model = MapRenderModel(nodes, [], href_template="/places/{id}")
        assert model.select("n1").href == "/places/n1"

    def test_unknown_node(self, model):
        with pytest.raises(KeyError):
            model.select("missing")


class TestLinksFromPairs:
    def test_resolve(self, nodes):
        links = links_from_pairs(nodes, [("n1", "n2"), ("n1", "n2")])
        assert len(links) == 2
        assert links[0].source is nodes[0]

    def test_unknown_id(self, nodes):
        with pytest.raises(KeyError):
            links_from_pairs(nodes, [("n1", "nope")])
