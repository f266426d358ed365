"""Graph snapshot, adjacency index, and document loading."""

from callscope.graph.index import AdjacencyIndex, build_index, owner_node
from callscope.graph.loader import load_graph, parse_graph
from callscope.graph.models import (
    Cell,
    CellKind,
    Cluster,
    Edge,
    EdgeKind,
    GraphModel,
    Node,
    Position,
    Rect,
)

__all__ = [
    "AdjacencyIndex",
    "Cell",
    "CellKind",
    "Cluster",
    "Edge",
    "EdgeKind",
    "GraphModel",
    "Node",
    "Position",
    "Rect",
    "build_index",
    "load_graph",
    "owner_node",
    "parse_graph",
]
