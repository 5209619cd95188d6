"""LaneletMapGraph wrapper around networkx for lanelet maps."""

from typing import Any, Iterator

import networkx as nx
import numpy as np

from .node_types import EdgeType, NodeType, RoleName


def node_id(node_type: NodeType, primitive_id: int) -> str:
    """Build the graph node id of a primitive."""
    return f"{node_type.value}:{primitive_id}"


class LaneletMapGraph:
    """A graph representation of a lanelet map.

    Wraps a networkx MultiDiGraph whose nodes are map primitives and whose
    edges are the references between them (bounds, points, regulatory element
    parameters). Two primitives can be linked more than once, e.g. a lanelet
    using one linestring as both bounds, so every edge is keyed by its edge
    type or role. The graph is read-only once built.
    """

    def __init__(self):
        """Initialize an empty map graph."""
        self._graph = nx.MultiDiGraph()

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Node management
    # -------------------------------------------------------------------------

    def add_point(self, point_id: int, x: float, y: float, z: float = 0.0) -> str:
        """Add a point node to the graph.

        Returns:
            The node ID.
        """
        nid = node_id(NodeType.POINT, point_id)
        self._graph.add_node(
            nid,
            node_type=NodeType.POINT,
            id=point_id,
            coords=(x, y, z),
        )
        return nid

    def add_linestring(
        self,
        linestring_id: int,
        point_ids: list[int],
        attributes: dict[str, str] | None = None,
        node_type: NodeType = NodeType.LINESTRING,
    ) -> str:
        """Add a linestring (or polygon) node with ordered point edges.

        Args:
            linestring_id: The primitive id.
            point_ids: Ids of the points, in order.
            attributes: The type/subtype and other tags.
            node_type: LINESTRING or POLYGON.

        Returns:
            The node ID.
        """
        nid = node_id(node_type, linestring_id)
        self._graph.add_node(
            nid,
            node_type=node_type,
            id=linestring_id,
            attributes=dict(attributes or {}),
            point_ids=list(point_ids),
        )

        for index, point_id in enumerate(point_ids):
            self._graph.add_edge(
                nid,
                node_id(NodeType.POINT, point_id),
                key=index,
                edge_type=EdgeType.HAS_POINT,
                index=index,
            )

        return nid

    def add_lanelet(
        self,
        lanelet_id: int,
        left: int,
        right: int,
        attributes: dict[str, str] | None = None,
    ) -> str:
        """Add a lanelet node with its left and right bounds.

        Returns:
            The node ID.
        """
        nid = node_id(NodeType.LANELET, lanelet_id)
        self._graph.add_node(
            nid,
            node_type=NodeType.LANELET,
            id=lanelet_id,
            attributes=dict(attributes or {}),
            left=left,
            right=right,
            regulatory_element_ids=[],
        )
        for edge_type, bound in ((EdgeType.LEFT_BOUND, left), (EdgeType.RIGHT_BOUND, right)):
            self._graph.add_edge(
                nid,
                node_id(NodeType.LINESTRING, bound),
                key=edge_type.value,
                edge_type=edge_type,
            )
        return nid

    def add_regulatory_element(
        self,
        reg_elem_id: int,
        parameters: dict[str, list[tuple[NodeType, int]]],
        attributes: dict[str, str] | None = None,
    ) -> str:
        """Add a regulatory element node with its role parameters.

        Args:
            reg_elem_id: The primitive id.
            parameters: Role name to list of (node type, primitive id).
            attributes: The type/subtype and other tags.

        Returns:
            The node ID.
        """
        nid = node_id(NodeType.REGULATORY_ELEMENT, reg_elem_id)
        self._graph.add_node(
            nid,
            node_type=NodeType.REGULATORY_ELEMENT,
            id=reg_elem_id,
            attributes=dict(attributes or {}),
            parameters={
                role: [node_id(ntype, pid) for ntype, pid in members]
                for role, members in parameters.items()
            },
        )

        for role, members in parameters.items():
            for ntype, pid in members:
                self._graph.add_edge(
                    nid,
                    node_id(ntype, pid),
                    key=role,
                    edge_type=EdgeType.PARAMETER,
                    role=role,
                )

        return nid

    def link_regulatory_element(self, lanelet_id: int, reg_elem_id: int) -> None:
        """Add a reference from a lanelet to a regulatory element."""
        lanelet_nid = node_id(NodeType.LANELET, lanelet_id)
        self._graph.add_edge(
            lanelet_nid,
            node_id(NodeType.REGULATORY_ELEMENT, reg_elem_id),
            key=EdgeType.HAS_REGULATORY_ELEMENT.value,
            edge_type=EdgeType.HAS_REGULATORY_ELEMENT,
        )
        self._graph.nodes[lanelet_nid]["regulatory_element_ids"].append(reg_elem_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_primitive(self, node_type: NodeType, primitive_id: int) -> bool:
        """Check if a primitive exists."""
        return self._graph.has_node(node_id(node_type, primitive_id))

    def _ids_of_type(self, node_type: NodeType) -> list[int]:
        return sorted(
            data["id"]
            for _, data in self._graph.nodes(data=True)
            if data.get("node_type") == node_type
        )

    def get_linestring_ids(self) -> list[int]:
        """Get all linestring ids in ascending order."""
        return self._ids_of_type(NodeType.LINESTRING)

    def get_polygon_ids(self) -> list[int]:
        """Get all polygon ids in ascending order."""
        return self._ids_of_type(NodeType.POLYGON)

    def get_lanelet_ids(self) -> list[int]:
        """Get all lanelet ids in ascending order."""
        return self._ids_of_type(NodeType.LANELET)

    def get_attributes(self, node_type: NodeType, primitive_id: int) -> dict[str, str]:
        """Get the attributes of a primitive (empty for unknown primitives)."""
        nid = node_id(node_type, primitive_id)
        if not self._graph.has_node(nid):
            return {}
        return dict(self._graph.nodes[nid].get("attributes", {}))

    def get_attribute(
        self, node_type: NodeType, primitive_id: int, key: str
    ) -> str | None:
        """Get a single attribute value of a primitive."""
        return self.get_attributes(node_type, primitive_id).get(key)

    def get_points(
        self, primitive_id: int, node_type: NodeType = NodeType.LINESTRING
    ) -> np.ndarray:
        """Get the ordered point coordinates of a linestring or polygon.

        Returns:
            An (N, 3) array of x, y, z.
        """
        nid = node_id(node_type, primitive_id)
        point_ids = self._graph.nodes[nid].get("point_ids", [])
        coords = [
            self._graph.nodes[node_id(NodeType.POINT, pid)]["coords"]
            for pid in point_ids
        ]
        return np.array(coords, dtype=float).reshape(-1, 3)

    def get_left_bound(self, lanelet_id: int) -> int:
        """Get the id of the left bound linestring of a lanelet."""
        return self._graph.nodes[node_id(NodeType.LANELET, lanelet_id)]["left"]

    def get_right_bound(self, lanelet_id: int) -> int:
        """Get the id of the right bound linestring of a lanelet."""
        return self._graph.nodes[node_id(NodeType.LANELET, lanelet_id)]["right"]

    def get_lanelet_regulatory_elements(self, lanelet_id: int) -> list[int]:
        """Get the regulatory elements a lanelet refers to, in declaration order."""
        nid = node_id(NodeType.LANELET, lanelet_id)
        return list(self._graph.nodes[nid]["regulatory_element_ids"])

    def get_parameters(
        self, reg_elem_id: int, role: RoleName | str
    ) -> list[tuple[NodeType, int]]:
        """Get the primitives a regulatory element holds under a role.

        Returns:
            (node type, primitive id) pairs in declaration order.
        """
        role_name = role.value if isinstance(role, RoleName) else role
        nid = node_id(NodeType.REGULATORY_ELEMENT, reg_elem_id)
        members = self._graph.nodes[nid]["parameters"].get(role_name, [])
        return [
            (self._graph.nodes[m]["node_type"], self._graph.nodes[m]["id"])
            for m in members
        ]

    def get_parameter_linestrings(
        self, reg_elem_id: int, role: RoleName | str
    ) -> list[int]:
        """Get the linestring ids a regulatory element holds under a role."""
        return [
            pid
            for ntype, pid in self.get_parameters(reg_elem_id, role)
            if ntype == NodeType.LINESTRING
        ]

    def get_referring_lanelets(self, reg_elem_id: int) -> list[int]:
        """Get the lanelets that refer to a regulatory element."""
        nid = node_id(NodeType.REGULATORY_ELEMENT, reg_elem_id)
        return sorted(
            {
                self._graph.nodes[source]["id"]
                for source, _, data in self._graph.in_edges(nid, data=True)
                if data.get("edge_type") == EdgeType.HAS_REGULATORY_ELEMENT
            }
        )

    def get_referring_regulatory_elements(
        self, linestring_id: int, role: RoleName | str | None = None
    ) -> list[int]:
        """Get the regulatory elements holding a linestring as a parameter.

        Args:
            linestring_id: The linestring id.
            role: Only count references under this role.
        """
        role_name = role.value if isinstance(role, RoleName) else role
        nid = node_id(NodeType.LINESTRING, linestring_id)
        # One edge per role, so a linestring held under two roles is seen twice
        return sorted(
            {
                self._graph.nodes[source]["id"]
                for source, _, data in self._graph.in_edges(nid, data=True)
                if data.get("edge_type") == EdgeType.PARAMETER
                and (role_name is None or data.get("role") == role_name)
            }
        )

    def iter_linestrings(
        self, type_: str | None = None, subtype: str | None = None
    ) -> Iterator[int]:
        """Iterate over linestring ids, optionally filtered by type/subtype."""
        for linestring_id in self.get_linestring_ids():
            attributes = self.get_attributes(NodeType.LINESTRING, linestring_id)
            if type_ is not None and attributes.get("type") != type_:
                continue
            if subtype is not None and attributes.get("subtype") != subtype:
                continue
            yield linestring_id

    def iter_regulatory_elements(self, subtype: str | None = None) -> Iterator[int]:
        """Iterate over regulatory element ids, optionally filtered by subtype."""
        for reg_elem_id in self._ids_of_type(NodeType.REGULATORY_ELEMENT):
            attributes = self.get_attributes(NodeType.REGULATORY_ELEMENT, reg_elem_id)
            if subtype is not None and attributes.get("subtype") != subtype:
                continue
            yield reg_elem_id

    def summary(self) -> dict[str, Any]:
        """Count primitives per layer."""
        return {
            node_type.value: len(self._ids_of_type(node_type))
            for node_type in NodeType
        }
