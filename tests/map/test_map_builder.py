"""Tests for building the map graph from documents."""

import pytest

from mapvalidator.map.builder import build_map_graph
from mapvalidator.map.node_types import NodeType
from mapvalidator.schema.errors import SchemaValidationError
from mapvalidator.schema.loader import parse_map_from_string


class TestBuildMapGraph:
    def test_builds_all_layers(self, traffic_light_map):
        summary = traffic_light_map.summary()

        assert summary["point"] == 8
        assert summary["linestring"] == 4
        assert summary["lanelet"] == 1
        assert summary["regulatory_element"] == 1

    def test_lanelet_bounds(self, traffic_light_map):
        assert traffic_light_map.get_left_bound(100) == 11
        assert traffic_light_map.get_right_bound(100) == 12

    def test_regulatory_element_links(self, traffic_light_map):
        assert traffic_light_map.get_lanelet_regulatory_elements(100) == [200]
        assert traffic_light_map.get_referring_lanelets(200) == [100]

    def test_parameters_resolved_to_layers(self, traffic_light_map):
        assert traffic_light_map.get_parameters(200, "refers") == [
            (NodeType.LINESTRING, 14)
        ]

    def test_undefined_point_reference(self):
        yaml = """
points:
  - {id: 1, x: 0, y: 0}
linestrings:
  - {id: 10, points: [1, 2]}
"""
        with pytest.raises(SchemaValidationError) as exc_info:
            build_map_graph(parse_map_from_string(yaml))

        assert exc_info.value.errors[0]["loc"] == "linestrings.0.points"
        assert "point 2" in exc_info.value.errors[0]["msg"]

    def test_undefined_bound_and_parameter(self):
        yaml = """
lanelets:
  - {id: 100, left: 11, right: 12, regulatory_elements: [200]}
regulatory_elements:
  - {id: 200, parameters: {refers: [99]}}
"""
        with pytest.raises(SchemaValidationError) as exc_info:
            build_map_graph(parse_map_from_string(yaml))

        locs = {e["loc"] for e in exc_info.value.errors}
        assert locs == {
            "lanelets.0.left",
            "lanelets.0.right",
            "regulatory_elements.0.parameters.refers",
        }

    def test_duplicate_ids(self):
        yaml = """
points:
  - {id: 1, x: 0, y: 0}
  - {id: 1, x: 1, y: 1}
"""
        with pytest.raises(SchemaValidationError) as exc_info:
            build_map_graph(parse_map_from_string(yaml))

        assert "Duplicate id 1" in exc_info.value.errors[0]["msg"]

    def test_empty_document(self):
        graph = build_map_graph(parse_map_from_string(""))

        assert graph.get_linestring_ids() == []
