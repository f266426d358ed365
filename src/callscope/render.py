"""Renderer-facing view of a partition.

The renderer is stateless: given a graph and a partition it gets the
paint order and the CSS classes for every element.
"""

from __future__ import annotations

from callscope.graph.models import GraphModel
from callscope.selection.models import Partition

FADE = "fade"
INCOMING = "incoming"
OUTGOING = "outgoing"
SELECTED = "selected"


def layers(partition: Partition) -> list[str]:
    """Element ids in paint order, bottom first.

    The faded group is painted beneath everything else; within each group
    clusters and nodes sit beneath edges.
    """
    return [
        *partition.faded_clusters,
        *partition.faded_nodes,
        *partition.faded_edges,
        *partition.kept_clusters,
        *partition.kept_nodes,
        *partition.kept_edges,
    ]


def element_classes(graph: GraphModel, partition: Partition) -> dict[str, set[str]]:
    """CSS classes per element id."""
    classes: dict[str, set[str]] = {}

    for node in graph.nodes:
        classes[node.id] = {"node"}
        for cell in node.iter_cells():
            classes[cell.id] = {"cell", cell.kind.value}
            if cell.highlighted:
                classes[cell.id].add("highlight")
    for edge in graph.resolved_edges():
        classes[edge.id] = {"edge", edge.kind.value}
    for cluster in graph.all_clusters():
        classes[cluster.id] = {"cluster"}
        classes[cluster.label_id] = {"cluster-label"}

    for element_id in (
        *partition.faded_nodes, *partition.faded_edges, *partition.faded_clusters
    ):
        classes.setdefault(element_id, set()).add(FADE)
    for edge_id in partition.incoming:
        classes.setdefault(edge_id, set()).add(INCOMING)
    for edge_id in partition.outgoing:
        classes.setdefault(edge_id, set()).add(OUTGOING)
    for element_id in partition.selected:
        classes.setdefault(element_id, set()).add(SELECTED)

    return classes
