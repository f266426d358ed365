"""A viewer session: one graph snapshot plus the interactive state around it."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from callscope.camera import Camera
from callscope.config import ViewerConfig
from callscope.graph.index import build_index, owner_node
from callscope.graph.models import GraphModel, Rect
from callscope.search import SearchHit, SearchIndex
from callscope.selection.engine import SelectionEngine
from callscope.selection.models import Partition, Selection, SelectionKind
from callscope.selection.scene import SceneTree

logger = logging.getLogger("callscope.session")


@dataclass(frozen=True)
class NavigationRequest:
    """Ask the editor to open `file_path` at (line, character)."""

    file_path: str
    line: int = 0
    character: int = 0


class ViewerSession:
    """Ties a graph snapshot to its engine, camera and search index.

    Pointer events come in as raw scene element ids (or None for the
    background). `viewport` is the rendering surface in screen coordinates.
    """

    def __init__(
        self,
        graph: GraphModel,
        config: ViewerConfig | None = None,
        viewport: Rect | None = None,
        on_navigate: Callable[[NavigationRequest], None] | None = None,
        root: Path | None = None,
    ) -> None:
        self.config = config or ViewerConfig()
        self.viewport = viewport or Rect(width=800, height=600)
        self.on_navigate = on_navigate
        self.root = root
        self.camera = Camera(self.config.camera)
        self._install(graph)

    def _install(self, graph: GraphModel) -> None:
        self.graph = graph
        self.index = build_index(graph.edges, cells=graph.cell_ids())
        self.scene = SceneTree.from_graph(graph)
        self.engine = SelectionEngine(graph, self.index, self.scene)
        self.search_index = SearchIndex(graph, max_results=self.config.search.max_results)

    @property
    def partition(self) -> Partition:
        return self.engine.partition

    @property
    def selection(self) -> Selection:
        return self.engine.state

    def reload(self, graph: GraphModel) -> None:
        """Install a freshly built graph as the next generation."""
        self._install(graph.with_generation(self.graph.generation + 1))
        logger.debug("Reloaded graph, generation %d", self.graph.generation)

    def select(self, selection: Selection | None) -> Partition:
        partition = self.engine.select(selection)
        if not partition.is_idle and self.config.selection.auto_center:
            rect = self.element_rect(partition.selection)
            if rect is not None:
                self.camera.ensure_visible(rect, self.viewport)
        return partition

    def click(self, raw_target: str | None) -> Partition:
        """Primary click on a scene element; None clears the selection."""
        return self.select(self.scene.resolve(raw_target))

    def double_click(self, raw_target: str | None) -> NavigationRequest | None:
        """Go to definition for cells and nodes; reset the camera on background."""
        selection = self.scene.resolve(raw_target)
        if selection is None:
            self.camera.reset()
            return None

        request = self.navigation_request(selection)
        if request is not None and self.on_navigate is not None:
            self.on_navigate(request)
        return request

    def search(self, query: str) -> list[SearchHit]:
        """Search labels and select the first hit, if any."""
        hits = self.search_index.search(query, case_sensitive=self.config.search.case_sensitive)
        if hits:
            self.select(hits[0].to_selection())
        return hits

    def navigation_request(self, selection: Selection) -> NavigationRequest | None:
        if selection.kind is SelectionKind.CELL:
            node = self.graph.node(owner_node(selection.target_id))
            cell = self.graph.cell(selection.target_id)
            if node is None or cell is None or not node.path:
                return None
            line = cell.position.line if cell.position else 0
            character = cell.position.character if cell.position else 0
            return NavigationRequest(self._resolve_path(node.path), line, character)
        if selection.kind is SelectionKind.NODE:
            node = self.graph.node(selection.target_id)
            if node is None or not node.path:
                return None
            return NavigationRequest(self._resolve_path(node.path))
        return None

    def _resolve_path(self, path: str) -> str:
        if self.root is None or Path(path).is_absolute():
            return path
        return str(self.root / path)

    def element_rect(self, selection: Selection) -> Rect | None:
        """Bounding rect of the selected element, in graph coordinates."""
        if selection.kind is SelectionKind.NODE:
            node = self.graph.node(selection.target_id)
            return node.rect if node else None
        if selection.kind is SelectionKind.CELL:
            cell = self.graph.cell(selection.target_id)
            return cell.rect if cell else None
        if selection.kind is SelectionKind.CLUSTER:
            cluster = self.graph.cluster(selection.target_id)
            if cluster is None:
                return None
            return cluster.label_rect if cluster.label_rect is not None else cluster.rect
        if selection.kind is SelectionKind.EDGE:
            edge = self.graph.edge(selection.target_id)
            if edge is None:
                return None
            return _edge_rect(self.graph, edge.from_id, edge.to_id)
        return None


def _edge_rect(graph: GraphModel, from_id: str, to_id: str) -> Rect | None:
    """Box spanning both endpoint cells; layout does not give edge geometry."""
    rects = [c.rect for c in (graph.cell(from_id), graph.cell(to_id)) if c is not None]
    if not rects:
        return None
    return Rect.from_bounds(
        min(r.left for r in rects),
        min(r.top for r in rects),
        max(r.right for r in rects),
        max(r.bottom for r in rects),
    )
