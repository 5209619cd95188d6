"""Node and edge type definitions for the map graph."""

from enum import Enum


class NodeType(str, Enum):
    """Types of primitives in the map graph."""

    POINT = "point"
    LINESTRING = "linestring"
    POLYGON = "polygon"
    LANELET = "lanelet"
    REGULATORY_ELEMENT = "regulatory_element"


class EdgeType(str, Enum):
    """Types of references between primitives."""

    HAS_POINT = "has_point"  # LineString/Polygon -> Point
    LEFT_BOUND = "left_bound"  # Lanelet -> LineString
    RIGHT_BOUND = "right_bound"  # Lanelet -> LineString
    HAS_REGULATORY_ELEMENT = "has_regulatory_element"  # Lanelet -> RegElem
    PARAMETER = "parameter"  # RegElem -> any primitive, with a role


class RoleName(str, Enum):
    """Well-known regulatory element parameter roles."""

    REFERS = "refers"
    REF_LINE = "ref_line"
    CANCELS = "cancels"
    CANCEL_LINE = "cancel_line"


class AttributeValue:
    """Attribute values the validators look for."""

    TRAFFIC_LIGHT = "traffic_light"
    RED_YELLOW_GREEN = "red_yellow_green"
    STOP_LINE = "stop_line"
    INTERSECTION_AREA = "intersection_area"
