"""Map layer for representing lanelet maps as networkx graphs."""

from .node_types import AttributeValue, EdgeType, NodeType, RoleName
from .map_graph import LaneletMapGraph
from .builder import build_map_graph

__all__ = [
    "AttributeValue",
    "EdgeType",
    "NodeType",
    "RoleName",
    "LaneletMapGraph",
    "build_map_graph",
]
