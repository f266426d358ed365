"""Selection engine: turns a selection into a kept/faded partition.

Every selection kind reduces to two things:

- a seed set of node ids that stay visible, and
- a judge `edge -> (is_incoming, is_outgoing)`.

Edges with at least one true judgment survive and pull the owner nodes of
both endpoints into the kept set; everything else fades. Edge selection is
the exception and simply isolates the one edge. Edges that point at a cell
missing from the snapshot take no part in any of this.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from callscope.graph.index import AdjacencyIndex, build_index, owner_node
from callscope.graph.models import Cluster, Edge, GraphModel, Rect
from callscope.selection.models import Partition, Selection, SelectionKind
from callscope.selection.scene import SceneTree

logger = logging.getLogger("callscope.selection")

Judge = Callable[[Edge], tuple[bool, bool]]


class SelectionEngine:
    """Selection state machine for one graph snapshot.

    The engine is single-threaded: each `select` call computes the whole
    partition before returning, and a new call supersedes the previous one.
    """

    def __init__(
        self,
        graph: GraphModel,
        index: AdjacencyIndex | None = None,
        scene: SceneTree | None = None,
    ) -> None:
        self.graph = graph
        if index is None:
            index = build_index(graph.edges, cells=graph.cell_ids())
        self.index = index
        self.scene = scene if scene is not None else SceneTree.from_graph(graph)
        self._state = Selection.none()
        self._partition = self._idle()

    @property
    def state(self) -> Selection:
        return self._state

    @property
    def partition(self) -> Partition:
        return self._partition

    @property
    def focus(self) -> str | None:
        return self.graph.focus

    def clear(self) -> Partition:
        """Return to Idle: nothing selected, nothing faded."""
        self._state = Selection.none()
        self._partition = self._idle()
        return self._partition

    def select(self, selection: Selection | None) -> Partition:
        """Select an element and recompute the partition.

        Unknown ids degrade to Idle instead of raising.
        """
        if selection is None or selection.is_none:
            return self.clear()

        handlers = {
            SelectionKind.NODE: self._select_node,
            SelectionKind.CELL: self._select_cell,
            SelectionKind.EDGE: self._select_edge,
            SelectionKind.CLUSTER: self._select_cluster,
        }
        partition = handlers[selection.kind](selection)
        if partition is None:
            logger.debug("No %s with id %r; clearing selection", selection.kind.value,
                         selection.target_id)
            return self.clear()

        logger.debug(
            "Selected %s %r: %d kept nodes, %d faded nodes",
            selection.kind.value, selection.target_id,
            len(partition.kept_nodes), len(partition.faded_nodes),
        )
        self._state = selection
        self._partition = partition
        return partition

    def select_target(self, raw_id: str | None) -> Partition:
        """Select whatever element sits under a raw pointer target."""
        return self.select(self.scene.resolve(raw_id))

    # ------------------------------------------------------------------
    # Per-kind algorithms
    # ------------------------------------------------------------------

    def _select_node(self, selection: Selection) -> Partition | None:
        node_id = selection.target_id
        if self.graph.node(node_id) is None:
            return None
        prefix = f"{node_id}:"

        def judge(edge: Edge) -> tuple[bool, bool]:
            return edge.to_id.startswith(prefix), edge.from_id.startswith(prefix)

        return self._fade(selection, {node_id}, judge, {node_id})

    def _select_cell(self, selection: Selection) -> Partition | None:
        cell_id = selection.target_id
        cell = self.graph.cell(cell_id)
        if cell is None:
            return None

        if self.focus:
            incoming = self._closure(cell_id, self.index.incoming_of, lambda e: e.from_id)
            outgoing = self._closure(cell_id, self.index.outgoing_of, lambda e: e.to_id)

            def judge(edge: Edge) -> tuple[bool, bool]:
                return edge.id in incoming, edge.id in outgoing
        else:
            ids = {c.id for c in cell.iter_tree()}

            def judge(edge: Edge) -> tuple[bool, bool]:
                return edge.to_id in ids, edge.from_id in ids

        return self._fade(selection, {owner_node(cell_id)}, judge, {cell_id})

    def _select_edge(self, selection: Selection) -> Partition | None:
        edge = self.graph.edge(selection.target_id)
        if edge is None:
            return None
        if self.graph.cell(edge.from_id) is None or self.graph.cell(edge.to_id) is None:
            return None

        edge_ids = [e.id for e in self.graph.resolved_edges()]
        kept = {owner_node(edge.from_id), owner_node(edge.to_id)}
        kept_nodes, faded_nodes = self._split_nodes(kept)
        kept_clusters, faded_clusters = self._split_clusters(kept_nodes)
        return Partition(
            selection=selection,
            kept_nodes=kept_nodes,
            faded_nodes=faded_nodes,
            kept_edges=(edge.id,),
            faded_edges=tuple(eid for eid in edge_ids if eid != edge.id),
            kept_clusters=kept_clusters,
            faded_clusters=faded_clusters,
            selected=frozenset({edge.id}),
        )

    def _select_cluster(self, selection: Selection) -> Partition | None:
        cluster = self.graph.cluster(selection.target_id)
        if cluster is None:
            return None

        members = {
            node.id for node in self.graph.nodes if cluster.rect.contains_strict(node.rect)
        }

        def judge(edge: Edge) -> tuple[bool, bool]:
            return owner_node(edge.to_id) in members, owner_node(edge.from_id) in members

        return self._fade(selection, members, judge, {cluster.label_id})

    # ------------------------------------------------------------------
    # Shared passes
    # ------------------------------------------------------------------

    def _closure(
        self,
        start: str,
        step: Callable[[str], tuple[Edge, ...]],
        endpoint: Callable[[Edge], str],
    ) -> frozenset[str]:
        """Breadth-first closure from `start` in one direction.

        Returns the ids of every edge touched. The visited set starts with
        the start cell and the focus root, so the walk never passes back
        through the root.
        """
        visited = {start, self.focus}
        touched: dict[str, None] = {}
        frontier: tuple[str, ...] = (start,)
        while frontier:
            next_frontier: list[str] = []
            for cell_id in frontier:
                for edge in step(cell_id):
                    touched[edge.id] = None
                    nxt = endpoint(edge)
                    if nxt not in visited:
                        visited.add(nxt)
                        next_frontier.append(nxt)
            frontier = tuple(next_frontier)
        return frozenset(touched)

    def _fade(
        self,
        selection: Selection,
        seed: Iterable[str],
        judge: Judge,
        selected: set[str],
    ) -> Partition:
        kept = set(seed)
        incoming: set[str] = set()
        outgoing: set[str] = set()
        kept_edges: list[str] = []
        faded_edges: list[str] = []

        for edge in self.graph.resolved_edges():
            is_incoming, is_outgoing = judge(edge)
            if is_incoming:
                incoming.add(edge.id)
            if is_outgoing:
                outgoing.add(edge.id)
            if is_incoming or is_outgoing:
                kept_edges.append(edge.id)
                kept.add(owner_node(edge.from_id))
                kept.add(owner_node(edge.to_id))
            else:
                faded_edges.append(edge.id)

        kept_nodes, faded_nodes = self._split_nodes(kept)
        kept_clusters, faded_clusters = self._split_clusters(kept_nodes)
        return Partition(
            selection=selection,
            kept_nodes=kept_nodes,
            faded_nodes=faded_nodes,
            kept_edges=tuple(kept_edges),
            faded_edges=tuple(faded_edges),
            kept_clusters=kept_clusters,
            faded_clusters=faded_clusters,
            incoming=frozenset(incoming),
            outgoing=frozenset(outgoing),
            selected=frozenset(selected),
        )

    def _split_nodes(self, kept: set[str]) -> tuple[tuple[str, ...], tuple[str, ...]]:
        kept_nodes = tuple(n.id for n in self.graph.nodes if n.id in kept)
        faded_nodes = tuple(n.id for n in self.graph.nodes if n.id not in kept)
        return kept_nodes, faded_nodes

    def _split_clusters(
        self, kept_nodes: tuple[str, ...]
    ) -> tuple[tuple[str, ...], tuple[str, ...]]:
        rects = [self.graph.node(node_id).rect for node_id in kept_nodes]
        kept: list[str] = []
        faded: list[str] = []
        for cluster in self.graph.all_clusters():
            if _contains_any(cluster, rects):
                kept.append(cluster.id)
            else:
                faded.append(cluster.id)
        return tuple(kept), tuple(faded)

    def _idle(self) -> Partition:
        return Partition(
            kept_nodes=tuple(n.id for n in self.graph.nodes),
            kept_edges=tuple(e.id for e in self.graph.resolved_edges()),
            kept_clusters=tuple(c.id for c in self.graph.all_clusters()),
        )


def _contains_any(cluster: Cluster, rects: list[Rect]) -> bool:
    return any(cluster.rect.contains_strict(rect) for rect in rects)
