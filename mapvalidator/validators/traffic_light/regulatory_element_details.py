"""Contents of traffic light regulatory elements."""

from ...config import ValidatorParameters
from ...map.map_graph import LaneletMapGraph
from ...map.node_types import AttributeValue, NodeType, RoleName
from ..base import Primitive, ValidationResult, issue_code
from ..registry import register_validator

NAME = "mapping.traffic_light.regulatory_element_details"


@register_validator(NAME)
def check_regulatory_element_details(
    lanelet_map: LaneletMapGraph, parameters: ValidatorParameters
) -> ValidationResult:
    """Check the roles of every traffic light regulatory element.

    This validator checks:
    - Every ``refers`` parameter is a traffic_light linestring
    - There is at least one ``ref_line``
    - Every ``ref_line`` is a stop_line linestring

    Args:
        lanelet_map: The map to check.
        parameters: Unused.

    Returns:
        ValidationResult with errors for malformed regulatory elements.
    """
    result = ValidationResult()

    for reg_elem_id in lanelet_map.iter_regulatory_elements(
        subtype=AttributeValue.TRAFFIC_LIGHT
    ):
        for node_type, primitive_id in lanelet_map.get_parameters(
            reg_elem_id, RoleName.REFERS
        ):
            light_type = lanelet_map.get_attribute(node_type, primitive_id, "type")
            if node_type != NodeType.LINESTRING or light_type != AttributeValue.TRAFFIC_LIGHT:
                result.add_error(
                    Primitive.REGULATORY_ELEMENT,
                    reg_elem_id,
                    f"Refers of traffic light regulatory element must have type of "
                    f"traffic_light (found {node_type.value} {primitive_id}).",
                    issue_code(NAME, 1),
                )

        ref_lines = lanelet_map.get_parameters(reg_elem_id, RoleName.REF_LINE)
        if not ref_lines:
            result.add_error(
                Primitive.REGULATORY_ELEMENT,
                reg_elem_id,
                "Traffic light regulatory element must have a ref_line.",
                issue_code(NAME, 2),
            )

        for node_type, primitive_id in ref_lines:
            line_type = lanelet_map.get_attribute(node_type, primitive_id, "type")
            if node_type != NodeType.LINESTRING or line_type != AttributeValue.STOP_LINE:
                result.add_error(
                    Primitive.REGULATORY_ELEMENT,
                    reg_elem_id,
                    f"Ref_line of traffic light regulatory element must have type of "
                    f"stop_line (found {node_type.value} {primitive_id}).",
                    issue_code(NAME, 3),
                )

    return result
