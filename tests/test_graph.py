"""Tests for the graph model, adjacency index and loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from callscope.exceptions import GraphError
from callscope.graph.index import build_index, owner_node
from callscope.graph.loader import load_graph, parse_graph
from callscope.graph.models import CellKind, Edge, GraphModel, Node, Rect


class TestRect:
    def test_strict_containment(self):
        cluster = Rect.from_bounds(0, 0, 100, 100)
        assert cluster.contains_strict(Rect.from_bounds(10, 10, 20, 20))

    def test_identical_rect_not_strictly_contained(self):
        cluster = Rect.from_bounds(0, 0, 100, 100)
        assert not cluster.contains_strict(Rect.from_bounds(0, 0, 100, 100))

    def test_partial_overlap_not_contained(self):
        cluster = Rect.from_bounds(0, 0, 100, 100)
        assert not cluster.contains_strict(Rect.from_bounds(90, 90, 120, 120))

    def test_touching_one_side_not_contained(self):
        cluster = Rect.from_bounds(0, 0, 100, 100)
        assert not cluster.contains_strict(Rect.from_bounds(10, 10, 100, 50))

    def test_degenerate_rects_never_contain(self):
        assert not Rect().contains_strict(Rect.from_bounds(0, 0, 0, 0))
        assert not Rect.from_bounds(0, 0, 100, 100).contains_strict(
            Rect.from_bounds(10, 10, 10, 50)
        )

    def test_non_strict_contains_boundary(self):
        view = Rect(width=800, height=600)
        assert view.contains(Rect(width=800, height=600))
        assert not view.contains(Rect(x=700, width=200, height=10))

    def test_center(self):
        assert Rect.from_bounds(10, 20, 30, 60).center == (20, 40)


class TestOwnerNode:
    def test_cell_id(self):
        assert owner_node("fileA:f1") == "fileA"

    def test_splits_on_first_colon(self):
        assert owner_node("12:3_4:extra") == "12"

    def test_plain_node_id(self):
        assert owner_node("fileA") == "fileA"


class TestAdjacencyIndex:
    def test_every_edge_indexed_once_per_direction(self, sample_graph: GraphModel):
        index = build_index(sample_graph.edges)

        for edge in sample_graph.edges:
            assert edge in index.outgoing[edge.from_id]
            assert edge in index.incoming[edge.to_id]

        for cell_id, edges in index.outgoing.items():
            assert all(e.from_id == cell_id for e in edges)
        for cell_id, edges in index.incoming.items():
            assert all(e.to_id == cell_id for e in edges)

        assert sum(len(v) for v in index.outgoing.values()) == len(sample_graph.edges)
        assert sum(len(v) for v in index.incoming.values()) == len(sample_graph.edges)

    def test_insertion_order_is_stable(self):
        edges = [Edge(from_id="a:x", to_id=f"b:{i}") for i in range(5)]
        index = build_index(edges)
        assert index.outgoing_of("a:x") == tuple(edges)

    def test_missing_entry_is_empty(self, sample_graph: GraphModel):
        index = build_index(sample_graph.edges)
        assert index.incoming_of("fileA:f1") == ()
        assert index.outgoing_of("nope:nothing") == ()

    def test_edges_to_unknown_cells_skipped(self, dangling_graph: GraphModel):
        index = build_index(dangling_graph.edges, cells=dangling_graph.cell_ids())

        assert index.incoming_of("ghost:x") == ()
        assert [e.id for e in index.outgoing_of("b:fn")] == []
        assert [e.id for e in index.outgoing_of("a:fn")] == ["a:fn -> b:fn"]

    def test_malformed_edges_skipped(self):
        index = build_index([Edge(from_id="a:x"), Edge(to_id="b:y"), Edge(from_id="a:x", to_id="b:y")])
        assert len(index.outgoing_of("a:x")) == 1
        assert "" not in index.incoming
        assert "" not in index.outgoing


class TestGraphModel:
    def test_lookups(self, sample_graph: GraphModel):
        assert sample_graph.node("fileA").path == "src/a.py"
        assert sample_graph.cell("fileA:Thing.method_m").kind is CellKind.METHOD
        assert sample_graph.edge("fileA:f1 -> fileB:g1") is not None
        assert sample_graph.cluster("lib").label == "lib"
        assert sample_graph.node("missing") is None

    def test_edge_id_round_trip(self):
        edge = Edge(from_id="1:3_4", to_id="2:0_0")
        assert edge.id == "1:3_4 -> 2:0_0"
        assert Edge.parse_id(edge.id) == ("1:3_4", "2:0_0")
        assert Edge.parse_id("not an edge") is None

    def test_cell_id_must_start_with_node_id(self):
        with pytest.raises(ValidationError):
            Node(id="fileA", cells=[{"id": "fileB:f1"}])

    def test_nested_cell_id_checked(self):
        with pytest.raises(ValidationError):
            Node(id="a", cells=[{"id": "a:T", "children": [{"id": "b:m"}]}])

    def test_snapshot_is_frozen(self, sample_graph: GraphModel):
        with pytest.raises(ValidationError):
            sample_graph.focus = "fileA:f1"

    def test_resolved_edges(self, dangling_graph: GraphModel):
        assert [e.id for e in dangling_graph.resolved_edges()] == ["a:fn -> b:fn"]
        assert len(dangling_graph.edges) == 2

    def test_with_generation_builds_new_snapshot(self, sample_graph: GraphModel):
        reloaded = sample_graph.with_generation(3)
        assert reloaded is not sample_graph
        assert reloaded.generation == 3
        assert sample_graph.generation == 0
        assert reloaded.cell("fileA:f1") is not None

    def test_to_networkx(self, sample_graph: GraphModel):
        graph = sample_graph.to_networkx()
        assert graph.nodes["fileA"]["type"] == "file"
        assert graph.nodes["fileA:f1"]["type"] == "symbol"
        assert graph.edges["fileA", "fileA:Thing"]["kind"] == "contains"
        assert graph.edges["fileA:Thing", "fileA:Thing.method_m"]["kind"] == "contains"
        assert graph.edges["fileA:f1", "fileB:g1"]["kind"] == "call"

    def test_stats(self, sample_graph: GraphModel):
        stats = sample_graph.stats()
        assert stats["files"] == 3
        assert stats["symbols"] == 6
        assert stats["edges"] == 3
        assert stats["clusters"] == 2
        assert stats["edge_types"] == {"call": 3}


class TestLoader:
    def test_load_graph(self, graph_file: Path):
        graph = load_graph(graph_file)
        assert len(graph.nodes) == 3
        assert len(graph.edges) == 3

    def test_lsp_kind_numbers(self, sample_graph: GraphModel):
        assert sample_graph.cell("fileA:Thing").kind is CellKind.CLASS

    def test_unknown_kind_is_other(self):
        graph = parse_graph({"nodes": [{"id": "n", "cells": [
            {"id": "n:a", "kind": 26}, {"id": "n:b", "kind": "macro"},
        ]}]})
        assert graph.cell("n:a").kind is CellKind.OTHER
        assert graph.cell("n:b").kind is CellKind.OTHER

    def test_edge_kinds(self):
        graph = parse_graph({"edges": [{"from": "a:1", "to": "b:1", "kind": "impl"}]})
        assert graph.edges[0].kind.value == "impl"

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(GraphError):
            load_graph(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(GraphError):
            load_graph(tmp_path / "missing.json")

    def test_bad_cell_prefix_reported_as_graph_error(self, tmp_path: Path):
        path = tmp_path / "graph.json"
        path.write_text(json.dumps({"nodes": [{"id": "a", "cells": [{"id": "b:x"}]}]}))
        with pytest.raises(GraphError):
            load_graph(path)

    def test_not_an_object(self):
        with pytest.raises(GraphError):
            parse_graph([1, 2, 3])

    def test_edge_without_endpoint_loads(self):
        graph = parse_graph({"edges": [{"from": "a:1"}]})
        assert graph.edges[0].to_id == ""
        assert build_index(graph.edges).outgoing == {}
