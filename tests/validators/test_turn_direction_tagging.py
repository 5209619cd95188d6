"""Tests for the intersection turn direction validator."""

import pytest

from mapvalidator.config import ValidatorParameters
from mapvalidator.map.builder import build_map_graph
from mapvalidator.schema.loader import parse_map_from_string
from mapvalidator.validators.intersection import check_turn_direction_tagging

INTERSECTION_MAP = """
points:
  - {id: 1, x: 0.0, y: 0.0}
  - {id: 2, x: 10.0, y: 0.0}
  - {id: 3, x: 0.0, y: 4.0}
  - {id: 4, x: 10.0, y: 4.0}
  - {id: 5, x: 50.0, y: 0.0}
  - {id: 6, x: 60.0, y: 0.0}
  - {id: 7, x: -1.0, y: -1.0}
  - {id: 8, x: 11.0, y: -1.0}
  - {id: 9, x: 11.0, y: 5.0}
  - {id: 10, x: -1.0, y: 5.0}

linestrings:
  - {id: 21, points: [3, 4]}
  - {id: 22, points: [1, 2]}
  - {id: 23, points: [5, 6]}

polygons:
  - {id: 40, points: [7, 8, 9, 10], attributes: {type: intersection_area}}

lanelets:
  - {id: 100, left: 21, right: 22, attributes: {turn_direction: TURN}}
  - {id: 101, left: 21, right: 23}
"""


def build(turn_direction: str | None, polygon_type: str = "intersection_area"):
    yaml = INTERSECTION_MAP.replace("type: intersection_area", f"type: {polygon_type}")
    if turn_direction is None:
        yaml = yaml.replace(", attributes: {turn_direction: TURN}", "")
    else:
        yaml = yaml.replace("TURN", turn_direction)
    return build_map_graph(parse_map_from_string(yaml))


class TestTurnDirectionTagging:
    @pytest.mark.parametrize("turn_direction", ["left", "straight", "right"])
    def test_valid_tags(self, turn_direction, parameters):
        assert check_turn_direction_tagging(build(turn_direction), parameters).is_valid

    def test_missing_tag(self, parameters):
        result = check_turn_direction_tagging(build(None), parameters)

        assert [(i.id, i.code) for i in result.issues] == [(100, "TurnDirectionTagging-001")]

    def test_invalid_tag(self, parameters):
        result = check_turn_direction_tagging(build("backwards"), parameters)

        assert [(i.id, i.code) for i in result.issues] == [(100, "TurnDirectionTagging-002")]
        assert result.issues[0].message == "Invalid turn_direction tag is found (backwards)."

    def test_lanelet_outside_area_not_checked(self, parameters):
        # Lanelet 101 reaches x=60, outside the area, and has no tag
        result = check_turn_direction_tagging(build("left"), parameters)

        assert 101 not in [i.id for i in result.issues]

    def test_other_polygon_types_ignored(self, parameters):
        result = check_turn_direction_tagging(build(None, "parking_lot"), parameters)

        assert result.is_valid

    def test_configurable_area_type(self):
        parameters = ValidatorParameters(intersection_area_type="junction")

        result = check_turn_direction_tagging(build(None, "junction"), parameters)

        assert [i.id for i in result.issues] == [100]

    def test_lanelet_with_one_linestring_as_both_bounds(self, parameters):
        yaml = INTERSECTION_MAP.replace("left: 21, right: 22", "left: 22, right: 22")
        lanelet_map = build_map_graph(parse_map_from_string(yaml))

        result = check_turn_direction_tagging(lanelet_map, parameters)

        assert [(i.id, i.code) for i in result.issues] == [(100, "TurnDirectionTagging-002")]
