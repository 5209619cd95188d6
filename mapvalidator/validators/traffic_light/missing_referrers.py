"""Traffic light regulatory elements that no lanelet refers to."""

from ...config import ValidatorParameters
from ...map.map_graph import LaneletMapGraph
from ...map.node_types import AttributeValue
from ..base import Primitive, ValidationResult, issue_code
from ..registry import register_validator

NAME = "mapping.traffic_light.missing_referrers"


@register_validator(NAME)
def check_missing_referrers(
    lanelet_map: LaneletMapGraph, parameters: ValidatorParameters
) -> ValidationResult:
    """Check that every traffic light regulatory element is used by a lanelet."""
    result = ValidationResult()

    for reg_elem_id in lanelet_map.iter_regulatory_elements(
        subtype=AttributeValue.TRAFFIC_LIGHT
    ):
        if not lanelet_map.get_referring_lanelets(reg_elem_id):
            result.add_error(
                Primitive.REGULATORY_ELEMENT,
                reg_elem_id,
                "Traffic light regulatory element is not referred by any lanelet.",
                issue_code(NAME, 1),
            )

    return result
