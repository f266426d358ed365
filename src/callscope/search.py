"""Substring search over cell and node labels."""

from __future__ import annotations

from dataclasses import dataclass

from callscope.graph.models import CellKind, GraphModel
from callscope.selection.models import Selection


@dataclass
class SearchHit:
    """A single search result."""

    kind: str  # "cell" or "node"
    id: str
    label: str
    node_id: str
    path: str = ""
    cell_kind: str = ""

    def to_selection(self) -> Selection:
        if self.kind == "cell":
            return Selection.cell(self.id)
        return Selection.node(self.id)


class SearchIndex:
    """Label search for one graph snapshot.

    Cells are matched by label, nodes by label or path. Results come back
    in document order, cells before nodes.
    """

    def __init__(self, graph: GraphModel, max_results: int = 50) -> None:
        self.graph = graph
        self.max_results = max_results

    def search(self, query: str, case_sensitive: bool = False) -> list[SearchHit]:
        if not query:
            return []
        needle = query if case_sensitive else query.lower()

        def matches(text: str | None) -> bool:
            if not text:
                return False
            return needle in (text if case_sensitive else text.lower())

        results: list[SearchHit] = []
        for node in self.graph.nodes:
            for cell in node.iter_cells():
                if matches(cell.label):
                    results.append(SearchHit(
                        kind="cell",
                        id=cell.id,
                        label=cell.label,
                        node_id=node.id,
                        path=node.path or "",
                        cell_kind=cell.kind.value,
                    ))

        for node in self.graph.nodes:
            if matches(node.label) or matches(node.path):
                results.append(SearchHit(
                    kind="node",
                    id=node.id,
                    label=node.label or node.path or node.id,
                    node_id=node.id,
                    path=node.path or "",
                ))

        return results[: self.max_results]

    def search_by_kind(self, kind: CellKind | str) -> list[SearchHit]:
        """All cells of the given kind."""
        kind = CellKind(kind)
        return [
            SearchHit(
                kind="cell",
                id=cell.id,
                label=cell.label,
                node_id=node.id,
                path=node.path or "",
                cell_kind=cell.kind.value,
            )
            for node in self.graph.nodes
            for cell in node.iter_cells()
            if cell.kind is kind
        ]

    def search_files(self, query: str, case_sensitive: bool = False) -> list[SearchHit]:
        """Nodes whose path contains `query`."""
        needle = query if case_sensitive else query.lower()
        return [
            SearchHit(kind="node", id=node.id, label=node.label or node.path, node_id=node.id,
                      path=node.path)
            for node in self.graph.nodes
            if node.path and needle in (node.path if case_sensitive else node.path.lower())
        ]

    def first(self, query: str, case_sensitive: bool = False) -> Selection | None:
        hits = self.search(query, case_sensitive=case_sensitive)
        return hits[0].to_selection() if hits else None
