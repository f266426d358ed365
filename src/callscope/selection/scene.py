"""Scene tree used to map a raw pointer target to a selectable element."""

from __future__ import annotations

from callscope.graph.models import Cell, Cluster, GraphModel
from callscope.selection.models import Selection


class SceneTree:
    """Parent links between scene element ids.

    Nodes, cells, edges and cluster labels are selectable. Cluster bodies
    and decorations (titles, icons, arrow heads) are not; a click on them
    resolves to the nearest selectable ancestor, if any.
    """

    def __init__(self) -> None:
        self._parents: dict[str, str] = {}
        self._targets: dict[str, Selection] = {}

    @classmethod
    def from_graph(cls, graph: GraphModel) -> SceneTree:
        scene = cls()
        for cluster in graph.clusters:
            scene._add_cluster(cluster, parent=None)
        for node in graph.nodes:
            scene._targets[node.id] = Selection.node(node.id)
            for cell in node.cells:
                scene._add_cell(cell, node.id)
        for edge in graph.resolved_edges():
            scene._targets[edge.id] = Selection.edge(edge.id)
        return scene

    def _add_cluster(self, cluster: Cluster, parent: str | None) -> None:
        if parent is not None:
            self._parents[cluster.id] = parent
        self._parents[cluster.label_id] = cluster.id
        self._targets[cluster.label_id] = Selection.cluster(cluster.id)
        for child in cluster.clusters:
            self._add_cluster(child, cluster.id)

    def _add_cell(self, cell: Cell, parent: str) -> None:
        self._parents[cell.id] = parent
        self._targets[cell.id] = Selection.cell(cell.id)
        for child in cell.children:
            self._add_cell(child, cell.id)

    def add_decoration(self, element_id: str, parent_id: str) -> None:
        """Register a non-selectable element drawn inside `parent_id`."""
        self._parents[element_id] = parent_id

    def parent(self, element_id: str) -> str | None:
        return self._parents.get(element_id)

    def resolve(self, raw_id: str | None) -> Selection | None:
        """Walk up from `raw_id` to the most specific selectable element."""
        seen: set[str] = set()
        current = raw_id
        while current is not None and current not in seen:
            target = self._targets.get(current)
            if target is not None:
                return target
            seen.add(current)
            current = self._parents.get(current)
        return None
