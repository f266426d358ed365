"""Incoming/outgoing edge lookup keyed by cell id."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Container, Iterable
from dataclasses import dataclass, field

from callscope.graph.models import Edge


def owner_node(cell_id: str) -> str:
    """Return the id of the node that owns `cell_id`.

    Cell ids are "<node id>:<suffix>"; a plain node id maps to itself.
    """
    return cell_id.partition(":")[0]


@dataclass(frozen=True)
class AdjacencyIndex:
    """Edges grouped by endpoint, built once per graph snapshot."""

    incoming: dict[str, tuple[Edge, ...]] = field(default_factory=dict)
    outgoing: dict[str, tuple[Edge, ...]] = field(default_factory=dict)

    def incoming_of(self, cell_id: str) -> tuple[Edge, ...]:
        return self.incoming.get(cell_id, ())

    def outgoing_of(self, cell_id: str) -> tuple[Edge, ...]:
        return self.outgoing.get(cell_id, ())


def build_index(edges: Iterable[Edge], cells: Container[str] | None = None) -> AdjacencyIndex:
    """Build the adjacency index in one pass over `edges`.

    Edges missing either endpoint cannot take part in a traversal and are
    skipped. With `cells`, so are edges whose endpoint names no known cell.
    """
    incoming: dict[str, list[Edge]] = defaultdict(list)
    outgoing: dict[str, list[Edge]] = defaultdict(list)

    for edge in edges:
        if not edge.from_id or not edge.to_id:
            continue
        if cells is not None and (edge.from_id not in cells or edge.to_id not in cells):
            continue
        outgoing[edge.from_id].append(edge)
        incoming[edge.to_id].append(edge)

    return AdjacencyIndex(
        incoming={k: tuple(v) for k, v in incoming.items()},
        outgoing={k: tuple(v) for k, v in outgoing.items()},
    )
