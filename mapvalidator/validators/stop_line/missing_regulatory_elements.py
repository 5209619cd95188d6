"""Stop lines that no regulatory element uses."""

from ...config import ValidatorParameters
from ...map.map_graph import LaneletMapGraph
from ...map.node_types import AttributeValue, RoleName
from ..base import Primitive, ValidationResult, issue_code
from ..registry import register_validator

NAME = "mapping.stop_line.missing_regulatory_elements"


@register_validator(NAME)
def check_missing_regulatory_elements_for_stop_lines(
    lanelet_map: LaneletMapGraph, parameters: ValidatorParameters
) -> ValidationResult:
    """Check that every stop_line linestring is a ref_line somewhere."""
    result = ValidationResult()

    for linestring_id in lanelet_map.iter_linestrings(AttributeValue.STOP_LINE):
        if not lanelet_map.get_referring_regulatory_elements(
            linestring_id, RoleName.REF_LINE
        ):
            result.add_error(
                Primitive.LINESTRING,
                linestring_id,
                "No regulatory element refers to this stop line.",
                issue_code(NAME, 1),
            )

    return result
