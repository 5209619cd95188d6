"""Traffic light facing validator.

A traffic light linestring is drawn from the left end to the right end of the
light as seen by a driver waiting at the stop line, so its point order encodes
which way the light faces. The stop line of the owning regulatory element
tells where drivers approach from: walking along the light (start to end), the
stop line must lie to the right, i.e. the sine of the angle from the light
direction to the vector (stop line midpoint -> light midpoint) is close to +1.
A sine close to -1 means the light was drawn backwards.

A light can be referred by several regulatory elements. Evidence is
accumulated over all of them and decoded once per light at the end.
"""

from dataclasses import dataclass

import numpy as np
from loguru import logger

from ...config import ValidatorParameters
from ...geometry import (
    GeometryError,
    cosine_of_angle,
    direction_2d,
    midpoint_2d,
    sine_of_angle,
)
from ...map.map_graph import LaneletMapGraph
from ...map.node_types import AttributeValue, NodeType, RoleName
from ..base import Primitive, ValidationResult, issue_code
from ..registry import register_validator

NAME = "mapping.traffic_light.correct_facing"


@dataclass
class LightJudgment:
    """Evidence gathered for one traffic light during a single pass."""

    referred: bool = False
    seen_correct: bool = False
    seen_wrong: bool = False
    geometry_failed: bool = False


def is_red_yellow_green_traffic_light(
    lanelet_map: LaneletMapGraph, linestring_id: int
) -> bool:
    """Check if a linestring is a red/yellow/green traffic light."""
    attributes = lanelet_map.get_attributes(NodeType.LINESTRING, linestring_id)
    return (
        attributes.get("type") == AttributeValue.TRAFFIC_LIGHT
        and attributes.get("subtype") == AttributeValue.RED_YELLOW_GREEN
    )


def get_stop_line(lanelet_map: LaneletMapGraph, reg_elem_id: int) -> int | None:
    """Get the stop line of a regulatory element.

    Only one stop line is expected; the first ref_line tagged as one wins.
    """
    for linestring_id in lanelet_map.get_parameter_linestrings(
        reg_elem_id, RoleName.REF_LINE
    ):
        if (
            lanelet_map.get_attribute(NodeType.LINESTRING, linestring_id, "type")
            == AttributeValue.STOP_LINE
        ):
            return linestring_id
    return None


def get_starting_edge(
    lanelet_map: LaneletMapGraph, lanelet_id: int, stop_line_id: int
) -> np.ndarray:
    """Get the lanelet end (front or back) that lies on the stop line side.

    Each end is the pair of left/right bound endpoints; the one whose summed
    distance to the stop line endpoints is smaller wins, trying both pairings.

    Returns:
        A (2, 3) array: left point, right point.
    """
    left = lanelet_map.get_points(lanelet_map.get_left_bound(lanelet_id))
    right = lanelet_map.get_points(lanelet_map.get_right_bound(lanelet_id))
    reference = lanelet_map.get_points(stop_line_id)
    if len(left) == 0 or len(right) == 0 or len(reference) == 0:
        raise GeometryError(
            f"Lanelet {lanelet_id} or stop line {stop_line_id} has no points.",
            stop_line_id,
        )
    ref_1, ref_2 = reference[0], reference[-1]

    def norm_sum(vec_1: np.ndarray, vec_2: np.ndarray) -> float:
        return float(np.linalg.norm(vec_1 - ref_1) + np.linalg.norm(vec_2 - ref_2))

    front_min = min(norm_sum(left[0], right[0]), norm_sum(right[0], left[0]))
    back_min = min(norm_sum(left[-1], right[-1]), norm_sum(right[-1], left[-1]))

    if front_min <= back_min:
        return np.array([left[0], right[0]])
    return np.array([left[-1], right[-1]])


def judge_facing(
    lanelet_map: LaneletMapGraph,
    light_id: int,
    stop_line_id: int,
    tolerance: float,
) -> bool | None:
    """Judge a light against one stop line.

    Returns:
        True when facing correctly, False when facing the opposite way, None
        when this stop line does not constrain the light.

    Raises:
        GeometryError: If either linestring is degenerate.
    """
    light = lanelet_map.get_points(light_id)
    stop_line = lanelet_map.get_points(stop_line_id)

    light_direction = direction_2d(light, light_id)
    offset = midpoint_2d(light, light_id) - midpoint_2d(stop_line, stop_line_id)
    sine = sine_of_angle(light_direction, offset, light_id)
    logger.debug(
        "Traffic light {} vs stop line {}: sine={:.4f}", light_id, stop_line_id, sine
    )

    if abs(sine - 1.0) <= tolerance:
        return True
    if abs(sine + 1.0) <= tolerance:
        return False
    return None


def divergent_lanelets(
    lanelet_map: LaneletMapGraph,
    lanelet_ids: list[int],
    stop_line_id: int,
) -> list[int]:
    """Get the lanelets approaching the stop line opposite to the first one.

    Each lanelet after the first is compared with the first by the cosine of
    their starting edges; a negative cosine marks it as divergent.
    """
    first = direction_2d(get_starting_edge(lanelet_map, lanelet_ids[0], stop_line_id))
    divergent = []
    for lanelet_id in lanelet_ids[1:]:
        edge = direction_2d(get_starting_edge(lanelet_map, lanelet_id, stop_line_id))
        if cosine_of_angle(first, edge, stop_line_id) < 0:
            divergent.append(lanelet_id)
    return divergent


@register_validator(NAME)
def check_traffic_light_facing(
    lanelet_map: LaneletMapGraph, parameters: ValidatorParameters
) -> ValidationResult:
    """Check that every red/yellow/green traffic light faces its stop line.

    Args:
        lanelet_map: The map to check.
        parameters: Provides the facing angle tolerance.

    Returns:
        ValidationResult with one terminal verdict per light plus warnings
        about regulatory elements the verdict cannot fully rely on.
    """
    result = ValidationResult()
    tolerance = parameters.facing_sine_tolerance

    judgments = {
        light_id: LightJudgment()
        for light_id in lanelet_map.iter_linestrings(
            AttributeValue.TRAFFIC_LIGHT, AttributeValue.RED_YELLOW_GREEN
        )
    }

    for reg_elem_id in lanelet_map.iter_regulatory_elements(
        subtype=AttributeValue.TRAFFIC_LIGHT
    ):
        stop_line_id = get_stop_line(lanelet_map, reg_elem_id)
        lanelet_ids = lanelet_map.get_referring_lanelets(reg_elem_id)
        light_ids = [
            lid
            for lid in lanelet_map.get_parameter_linestrings(reg_elem_id, RoleName.REFERS)
            if is_red_yellow_green_traffic_light(lanelet_map, lid)
        ]
        logger.debug(
            "Regulatory element {}: stop line {}, lanelets {}, lights {}",
            reg_elem_id,
            stop_line_id,
            lanelet_ids,
            light_ids,
        )

        divergent: list[int] = []
        if stop_line_id is not None and len(lanelet_ids) > 1:
            try:
                divergent = divergent_lanelets(lanelet_map, lanelet_ids, stop_line_id)
            except GeometryError as e:
                logger.warning("Skipping starting edge check: {}", e)

        for light_id in light_ids:
            judgment = judgments[light_id]
            judgment.referred = True

            if not lanelet_ids:
                result.add_warning(
                    Primitive.LINESTRING,
                    light_id,
                    "Regulatory element of traffic light must be referred by at "
                    "least one lanelet.",
                    issue_code(NAME, 2),
                )
            # One warning per divergent lanelet
            for _ in divergent:
                result.add_warning(
                    Primitive.LINESTRING,
                    light_id,
                    "Lanelets referring this traffic_light has several divergent "
                    "starting points.",
                    issue_code(NAME, 1),
                )

            if stop_line_id is None:
                continue

            try:
                verdict = judge_facing(lanelet_map, light_id, stop_line_id, tolerance)
            except GeometryError as e:
                judgment.geometry_failed = True
                result.add_error(
                    Primitive.LINESTRING,
                    light_id,
                    f"The facing of this traffic light cannot be judged: {e}",
                    issue_code(NAME, 7),
                )
                continue

            if verdict is None:
                continue
            if verdict:
                judgment.seen_correct = True
            else:
                judgment.seen_wrong = True

    for light_id, judgment in judgments.items():
        _decode(result, light_id, judgment)

    return result


def _decode(result: ValidationResult, light_id: int, judgment: LightJudgment) -> None:
    """Turn the evidence for one light into at most one terminal issue."""
    if not judgment.referred:
        result.add_error(
            Primitive.LINESTRING,
            light_id,
            "This traffic light is not referred by any traffic light regulatory "
            "element.",
            issue_code(NAME, 3),
        )
    elif judgment.seen_correct and judgment.seen_wrong:
        result.add_warning(
            Primitive.LINESTRING,
            light_id,
            "The traffic light facing has been judged as both correct and wrong. "
            "Please check it manually.",
            issue_code(NAME, 5),
        )
    elif judgment.seen_wrong:
        result.add_error(
            Primitive.LINESTRING,
            light_id,
            "The linestring direction of this traffic light facing seems to be "
            "opposite.",
            issue_code(NAME, 4),
        )
    elif judgment.seen_correct or judgment.geometry_failed:
        return
    else:
        result.add_error(
            Primitive.LINESTRING,
            light_id,
            "This traffic light cannot find a corresponding stop line.",
            issue_code(NAME, 6),
        )
