"""Turn direction tags of lanelets inside intersection areas."""

from loguru import logger

from ...config import ValidatorParameters
from ...geometry import bounding_box_2d, box_contains
from ...map.map_graph import LaneletMapGraph
from ...map.node_types import NodeType
from ..base import Primitive, ValidationResult, issue_code
from ..registry import register_validator

NAME = "mapping.intersection.turn_direction_tagging"

TURN_DIRECTIONS = frozenset({"left", "straight", "right"})


def lanelet_is_within_box(lanelet_map: LaneletMapGraph, lanelet_id: int, box) -> bool:
    """Check if both bounds of a lanelet lie inside a 2D box."""
    for bound_id in (
        lanelet_map.get_left_bound(lanelet_id),
        lanelet_map.get_right_bound(lanelet_id),
    ):
        points = lanelet_map.get_points(bound_id)
        if len(points) == 0:
            return False
        if not all(box_contains(box, point) for point in points):
            return False
    return True


@register_validator(NAME)
def check_turn_direction_tagging(
    lanelet_map: LaneletMapGraph, parameters: ValidatorParameters
) -> ValidationResult:
    """Check that lanelets inside intersection areas carry a turn direction.

    The intersection area is approximated by its 2D bounding box.

    Returns:
        ValidationResult with errors for missing or invalid turn_direction tags.
    """
    result = ValidationResult()
    # A lanelet inside overlapping areas is reported once
    checked: set[int] = set()

    for polygon_id in lanelet_map.get_polygon_ids():
        polygon_type = lanelet_map.get_attribute(NodeType.POLYGON, polygon_id, "type")
        if polygon_type != parameters.intersection_area_type:
            continue

        points = lanelet_map.get_points(polygon_id, NodeType.POLYGON)
        if len(points) == 0:
            logger.warning("Intersection area {} has no points", polygon_id)
            continue
        box = bounding_box_2d(points)

        for lanelet_id in lanelet_map.get_lanelet_ids():
            if lanelet_id in checked:
                continue
            if not lanelet_is_within_box(lanelet_map, lanelet_id, box):
                continue
            checked.add(lanelet_id)

            turn_direction = lanelet_map.get_attribute(
                NodeType.LANELET, lanelet_id, "turn_direction"
            )
            if turn_direction is None:
                result.add_error(
                    Primitive.LANELET,
                    lanelet_id,
                    "This lanelet is missing a turn_direction tag.",
                    issue_code(NAME, 1),
                )
            elif turn_direction not in TURN_DIRECTIONS:
                result.add_error(
                    Primitive.LANELET,
                    lanelet_id,
                    f"Invalid turn_direction tag is found ({turn_direction}).",
                    issue_code(NAME, 2),
                )

    return result
