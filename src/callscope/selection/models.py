"""Selection state and the kept/faded partition it produces."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SelectionKind(str, Enum):
    """What kind of element is selected."""

    NONE = "none"
    NODE = "node"
    CELL = "cell"
    EDGE = "edge"
    CLUSTER = "cluster"


@dataclass(frozen=True)
class Selection:
    """The current selection: at most one element at a time."""

    kind: SelectionKind = SelectionKind.NONE
    target_id: str = ""

    @classmethod
    def none(cls) -> Selection:
        return cls()

    @classmethod
    def node(cls, node_id: str) -> Selection:
        return cls(SelectionKind.NODE, node_id)

    @classmethod
    def cell(cls, cell_id: str) -> Selection:
        return cls(SelectionKind.CELL, cell_id)

    @classmethod
    def edge(cls, edge_id: str) -> Selection:
        return cls(SelectionKind.EDGE, edge_id)

    @classmethod
    def cluster(cls, cluster_id: str) -> Selection:
        return cls(SelectionKind.CLUSTER, cluster_id)

    @property
    def is_none(self) -> bool:
        return self.kind is SelectionKind.NONE


@dataclass(frozen=True)
class Partition:
    """Split of every scene element into kept and faded groups.

    Orders follow the graph's original order so a renderer can restore
    z-order. `incoming`/`outgoing` hold edge ids to mark, `selected` the
    id of the element the user picked.
    """

    selection: Selection = field(default_factory=Selection)
    kept_nodes: tuple[str, ...] = ()
    faded_nodes: tuple[str, ...] = ()
    kept_edges: tuple[str, ...] = ()
    faded_edges: tuple[str, ...] = ()
    kept_clusters: tuple[str, ...] = ()
    faded_clusters: tuple[str, ...] = ()
    incoming: frozenset[str] = frozenset()
    outgoing: frozenset[str] = frozenset()
    selected: frozenset[str] = frozenset()

    @property
    def is_idle(self) -> bool:
        return self.selection.is_none

    def is_faded(self, element_id: str) -> bool:
        return (
            element_id in self.faded_nodes
            or element_id in self.faded_edges
            or element_id in self.faded_clusters
        )

    def to_dict(self) -> dict:
        return {
            "selection": {"kind": self.selection.kind.value, "id": self.selection.target_id},
            "kept_nodes": list(self.kept_nodes),
            "faded_nodes": list(self.faded_nodes),
            "kept_edges": list(self.kept_edges),
            "faded_edges": list(self.faded_edges),
            "kept_clusters": list(self.kept_clusters),
            "faded_clusters": list(self.faded_clusters),
            "incoming": sorted(self.incoming),
            "outgoing": sorted(self.outgoing),
            "selected": sorted(self.selected),
        }
