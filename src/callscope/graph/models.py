"""Data models for a rendered call graph snapshot."""

from __future__ import annotations

from collections.abc import Iterator, KeysView
from enum import Enum

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator


class Rect(BaseModel):
    """Axis-aligned bounding box in graph coordinates."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_bounds(cls, left: float, top: float, right: float, bottom: float) -> Rect:
        return cls(x=left, y=top, width=right - left, height=bottom - top)

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains_strict(self, other: Rect) -> bool:
        """True if `other` lies strictly inside this rect on all four sides.

        Touching edges do not count, and a zero-area rect on either side
        never contains or is contained.
        """
        if self.is_degenerate or other.is_degenerate:
            return False
        return (
            self.left < other.left
            and self.top < other.top
            and self.right > other.right
            and self.bottom > other.bottom
        )

    def contains(self, other: Rect) -> bool:
        """Non-strict containment, used for viewport visibility checks."""
        return (
            self.left <= other.left
            and self.top <= other.top
            and self.right >= other.right
            and self.bottom >= other.bottom
        )


class Position(BaseModel):
    """Zero-based source position used for go-to-definition."""

    model_config = ConfigDict(frozen=True)

    line: int = 0
    character: int = 0


class CellKind(str, Enum):
    """Kinds of symbols a cell can represent."""

    FUNCTION = "function"
    METHOD = "method"
    INTERFACE = "interface"
    MODULE = "module"
    CONSTRUCTOR = "constructor"
    STRUCT = "struct"
    CLASS = "class"
    ENUM = "enum"
    FIELD = "field"
    PROPERTY = "property"
    OTHER = "other"

    @classmethod
    def from_lsp(cls, number: int) -> CellKind:
        """Map an LSP SymbolKind number to a cell kind."""
        return _LSP_KINDS.get(number, cls.OTHER)


# LSP SymbolKind numbering
_LSP_KINDS: dict[int, CellKind] = {
    2: CellKind.MODULE,
    3: CellKind.MODULE,
    4: CellKind.MODULE,
    5: CellKind.CLASS,
    6: CellKind.METHOD,
    7: CellKind.PROPERTY,
    8: CellKind.FIELD,
    9: CellKind.CONSTRUCTOR,
    10: CellKind.ENUM,
    11: CellKind.INTERFACE,
    12: CellKind.FUNCTION,
    23: CellKind.STRUCT,
}


class EdgeKind(str, Enum):
    """Types of relations an edge can encode."""

    CALL = "call"
    IMPL = "impl"
    INHERIT = "inherit"


class Cell(BaseModel):
    """A symbol box nested inside a node, possibly containing child cells."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    kind: CellKind = CellKind.OTHER
    rect: Rect = Field(default_factory=Rect)
    position: Position | None = None
    children: tuple[Cell, ...] = ()
    highlighted: bool = False

    @field_validator("kind", mode="before")
    @classmethod
    def _coerce_kind(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return CellKind.from_lsp(value)
        if isinstance(value, str) and value not in CellKind._value2member_map_:
            return CellKind.OTHER
        return value

    def iter_tree(self) -> Iterator[Cell]:
        """Yield this cell and every nested cell, depth-first."""
        yield self
        for child in self.children:
            yield from child.iter_tree()


class Node(BaseModel):
    """A file/module box."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    rect: Rect = Field(default_factory=Rect)
    path: str | None = None
    cells: tuple[Cell, ...] = ()

    @model_validator(mode="after")
    def _check_cell_ids(self) -> Node:
        prefix = f"{self.id}:"
        for cell in self.iter_cells():
            if not cell.id.startswith(prefix):
                raise ValueError(
                    f"Cell id '{cell.id}' does not start with its node id '{prefix}'"
                )
        return self

    def iter_cells(self) -> Iterator[Cell]:
        for cell in self.cells:
            yield from cell.iter_tree()


class Edge(BaseModel):
    """A directed relation between two cells."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_id: str = Field(default="", alias="from")
    to_id: str = Field(default="", alias="to")
    kind: EdgeKind = EdgeKind.CALL

    @property
    def id(self) -> str:
        return f"{self.from_id} -> {self.to_id}"

    @staticmethod
    def parse_id(edge_id: str) -> tuple[str, str] | None:
        """Split an edge id back into its (from, to) cell ids."""
        from_id, sep, to_id = edge_id.partition(" -> ")
        if not sep:
            return None
        return from_id, to_id


class Cluster(BaseModel):
    """A group of nodes (typically a directory) with an optional label."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    rect: Rect = Field(default_factory=Rect)
    label_rect: Rect | None = None
    clusters: tuple[Cluster, ...] = ()

    @property
    def label_id(self) -> str:
        """Scene id of the clickable label element."""
        return f"{self.id}#label"

    def iter_tree(self) -> Iterator[Cluster]:
        yield self
        for child in self.clusters:
            yield from child.iter_tree()


class GraphModel(BaseModel):
    """Immutable snapshot of one rendered call graph.

    A reload never mutates a snapshot; it builds a new one with a higher
    `generation`.
    """

    model_config = ConfigDict(frozen=True)

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    clusters: tuple[Cluster, ...] = ()
    focus: str | None = None
    generation: int = 0

    _nodes: dict[str, Node] = PrivateAttr(default_factory=dict)
    _cells: dict[str, Cell] = PrivateAttr(default_factory=dict)
    _edges: dict[str, Edge] = PrivateAttr(default_factory=dict)
    _clusters: dict[str, Cluster] = PrivateAttr(default_factory=dict)
    _resolved: tuple[Edge, ...] = PrivateAttr(default=())

    def model_post_init(self, __context: object) -> None:
        for node in self.nodes:
            self._nodes[node.id] = node
            for cell in node.iter_cells():
                self._cells[cell.id] = cell
        for edge in self.edges:
            self._edges.setdefault(edge.id, edge)
        for cluster in self.all_clusters():
            self._clusters[cluster.id] = cluster
        self._resolved = tuple(
            e for e in self.edges if e.from_id in self._cells and e.to_id in self._cells
        )

    def node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def cell(self, cell_id: str) -> Cell | None:
        return self._cells.get(cell_id)

    def edge(self, edge_id: str) -> Edge | None:
        return self._edges.get(edge_id)

    def cell_ids(self) -> KeysView[str]:
        return self._cells.keys()

    def resolved_edges(self) -> tuple[Edge, ...]:
        """Edges whose endpoints both name a cell of this snapshot.

        Anything else points outside the rendered graph and is never
        traversed, kept or highlighted.
        """
        return self._resolved

    def cluster(self, cluster_id: str) -> Cluster | None:
        return self._clusters.get(cluster_id)

    def all_clusters(self) -> Iterator[Cluster]:
        for cluster in self.clusters:
            yield from cluster.iter_tree()

    def all_cells(self) -> Iterator[Cell]:
        for node in self.nodes:
            yield from node.iter_cells()

    def with_focus(self, focus: str | None) -> GraphModel:
        return GraphModel(
            nodes=self.nodes,
            edges=self.edges,
            clusters=self.clusters,
            focus=focus,
            generation=self.generation,
        )

    def with_generation(self, generation: int) -> GraphModel:
        return GraphModel(
            nodes=self.nodes,
            edges=self.edges,
            clusters=self.clusters,
            focus=self.focus,
            generation=generation,
        )

    def to_networkx(self) -> nx.DiGraph:
        """Export the snapshot as a NetworkX graph.

        File nodes carry type="file", symbol nodes type="symbol"; nesting is
        expressed with kind="contains" edges and relations keep their kind.
        """
        graph = nx.DiGraph()
        for node in self.nodes:
            graph.add_node(node.id, type="file", path=node.path or "", name=node.label)
            for cell in node.cells:
                self._add_cell(graph, node, node.id, cell)

        for edge in self.edges:
            if not edge.from_id or not edge.to_id:
                continue
            graph.add_edge(edge.from_id, edge.to_id, kind=edge.kind.value)

        return graph

    def _add_cell(self, graph: nx.DiGraph, node: Node, parent: str, cell: Cell) -> None:
        graph.add_node(
            cell.id,
            type="symbol",
            name=cell.label,
            kind=cell.kind.value,
            file_path=node.path or "",
            line=cell.position.line if cell.position else 0,
        )
        graph.add_edge(parent, cell.id, kind="contains")
        for child in cell.children:
            self._add_cell(graph, node, cell.id, child)

    def stats(self) -> dict:
        """Summary counts for display."""
        graph = self.to_networkx()
        edge_types: dict[str, int] = {}
        for _, _, data in graph.edges(data=True):
            kind = data.get("kind", "unknown")
            if kind == "contains":
                continue
            edge_types[kind] = edge_types.get(kind, 0) + 1

        symbols = [d for _, d in graph.nodes(data=True) if d.get("type") == "symbol"]
        return {
            "files": sum(1 for _, d in graph.nodes(data=True) if d.get("type") == "file"),
            "symbols": len(symbols),
            "functions": sum(
                1 for d in symbols
                if d.get("kind") in (CellKind.FUNCTION.value, CellKind.METHOD.value)
            ),
            "edges": sum(edge_types.values()),
            "clusters": len(self._clusters),
            "edge_types": edge_types,
            "focus": self.focus or "",
            "generation": self.generation,
        }


Cell.model_rebuild()
Cluster.model_rebuild()
