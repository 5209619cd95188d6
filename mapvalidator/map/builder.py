"""Builder for converting LaneletMapDocument to LaneletMapGraph."""

from loguru import logger

from ..schema.errors import SchemaValidationError
from ..schema.models import LaneletMapDocument
from .map_graph import LaneletMapGraph
from .node_types import NodeType

# Parameter ids carry no layer, so they resolve against the layers in this order.
_PARAMETER_LAYERS = (
    NodeType.LINESTRING,
    NodeType.POLYGON,
    NodeType.LANELET,
    NodeType.REGULATORY_ELEMENT,
    NodeType.POINT,
)


def build_map_graph(document: LaneletMapDocument) -> LaneletMapGraph:
    """Build a LaneletMapGraph from a LaneletMapDocument.

    Args:
        document: The parsed map document.

    Returns:
        A LaneletMapGraph representing the map.

    Raises:
        SchemaValidationError: If ids are duplicated within a layer or a
            primitive references an undefined one.
    """
    errors: list[dict] = []
    layer_ids: dict[NodeType, set[int]] = {}

    layers = (
        (NodeType.POINT, "points", document.points),
        (NodeType.LINESTRING, "linestrings", document.linestrings),
        (NodeType.POLYGON, "polygons", document.polygons),
        (NodeType.LANELET, "lanelets", document.lanelets),
        (NodeType.REGULATORY_ELEMENT, "regulatory_elements", document.regulatory_elements),
    )
    for node_type, layer_name, primitives in layers:
        seen: set[int] = set()
        for index, primitive in enumerate(primitives):
            if primitive.id in seen:
                errors.append(
                    _error(f"{layer_name}.{index}.id", f"Duplicate id {primitive.id}")
                )
            seen.add(primitive.id)
        layer_ids[node_type] = seen

    def check_refs(loc: str, node_type: NodeType, ids: list[int]) -> None:
        for ref in ids:
            if ref not in layer_ids[node_type]:
                errors.append(
                    _error(loc, f"References undefined {node_type.value} {ref}")
                )

    for index, linestring in enumerate(document.linestrings):
        check_refs(f"linestrings.{index}.points", NodeType.POINT, linestring.points)
    for index, polygon in enumerate(document.polygons):
        check_refs(f"polygons.{index}.points", NodeType.POINT, polygon.points)
    for index, lanelet in enumerate(document.lanelets):
        check_refs(f"lanelets.{index}.left", NodeType.LINESTRING, [lanelet.left])
        check_refs(f"lanelets.{index}.right", NodeType.LINESTRING, [lanelet.right])
        check_refs(
            f"lanelets.{index}.regulatory_elements",
            NodeType.REGULATORY_ELEMENT,
            lanelet.regulatory_elements,
        )

    resolved_parameters: dict[int, dict[str, list[tuple[NodeType, int]]]] = {}
    for index, reg_elem in enumerate(document.regulatory_elements):
        resolved: dict[str, list[tuple[NodeType, int]]] = {}
        for role, ids in reg_elem.parameters.items():
            members = []
            for ref in ids:
                node_type = _resolve_layer(ref, layer_ids)
                if node_type is None:
                    errors.append(
                        _error(
                            f"regulatory_elements.{index}.parameters.{role}",
                            f"References undefined primitive {ref}",
                        )
                    )
                    continue
                members.append((node_type, ref))
            resolved[role] = members
        resolved_parameters[reg_elem.id] = resolved

    if errors:
        raise SchemaValidationError(
            f"Map references failed with {len(errors)} error(s)", errors
        )

    graph = LaneletMapGraph()

    # Points first so that every later edge lands on an existing node
    for point in document.points:
        graph.add_point(point.id, point.x, point.y, point.z)

    for linestring in document.linestrings:
        graph.add_linestring(linestring.id, linestring.points, linestring.attributes)

    for polygon in document.polygons:
        graph.add_linestring(
            polygon.id, polygon.points, polygon.attributes, node_type=NodeType.POLYGON
        )

    for lanelet in document.lanelets:
        graph.add_lanelet(lanelet.id, lanelet.left, lanelet.right, lanelet.attributes)

    for reg_elem in document.regulatory_elements:
        graph.add_regulatory_element(
            reg_elem.id, resolved_parameters[reg_elem.id], reg_elem.attributes
        )

    for lanelet in document.lanelets:
        for reg_elem_id in lanelet.regulatory_elements:
            graph.link_regulatory_element(lanelet.id, reg_elem_id)

    logger.debug("Built map graph: {}", graph.summary())
    return graph


def _resolve_layer(ref: int, layer_ids: dict[NodeType, set[int]]) -> NodeType | None:
    for node_type in _PARAMETER_LAYERS:
        if ref in layer_ids[node_type]:
            return node_type
    return None


def _error(loc: str, msg: str) -> dict:
    return {"loc": loc, "msg": msg, "type": "reference_error"}
