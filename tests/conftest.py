"""Shared test fixtures for callscope."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from callscope.graph.loader import parse_graph
from callscope.graph.models import GraphModel


def bounds(left: float, top: float, right: float, bottom: float) -> dict:
    return {"x": left, "y": top, "width": right - left, "height": bottom - top}


@pytest.fixture
def sample_document() -> dict:
    """Three files in two directory clusters.

    src/a.py  f1 ------------------> src/b.py g1
              Thing.method_m --> lib/c.py h1 --> src/b.py g2
    """
    return {
        "nodes": [
            {
                "id": "fileA",
                "label": "a.py",
                "path": "src/a.py",
                "rect": bounds(10, 10, 110, 110),
                "cells": [
                    {
                        "id": "fileA:f1",
                        "label": "f1",
                        "kind": "function",
                        "rect": bounds(20, 30, 100, 50),
                        "position": {"line": 3, "character": 4},
                    },
                    {
                        "id": "fileA:Thing",
                        "label": "Thing",
                        "kind": 5,
                        "rect": bounds(20, 60, 100, 105),
                        "position": {"line": 10, "character": 6},
                        "children": [
                            {
                                "id": "fileA:Thing.method_m",
                                "label": "method_m",
                                "kind": 6,
                                "rect": bounds(30, 80, 90, 100),
                                "position": {"line": 12, "character": 8},
                            }
                        ],
                    },
                ],
            },
            {
                "id": "fileB",
                "label": "b.py",
                "path": "src/b.py",
                "rect": bounds(210, 10, 310, 110),
                "cells": [
                    {"id": "fileB:g1", "label": "g1", "kind": "function",
                     "rect": bounds(220, 30, 300, 50)},
                    {"id": "fileB:g2", "label": "g2", "kind": "function",
                     "rect": bounds(220, 60, 300, 80)},
                ],
            },
            {
                "id": "fileC",
                "label": "c.py",
                "path": "lib/c.py",
                "rect": bounds(10, 210, 110, 310),
                "cells": [
                    {"id": "fileC:h1", "label": "h1", "kind": "function",
                     "rect": bounds(20, 230, 100, 250)},
                ],
            },
        ],
        "edges": [
            {"from": "fileA:f1", "to": "fileB:g1"},
            {"from": "fileA:Thing.method_m", "to": "fileC:h1"},
            {"from": "fileC:h1", "to": "fileB:g2"},
        ],
        "clusters": [
            {"id": "src", "label": "src", "rect": bounds(0, 0, 320, 120)},
            {"id": "lib", "label": "lib", "rect": bounds(0, 200, 120, 320)},
        ],
    }


@pytest.fixture
def sample_graph(sample_document: dict) -> GraphModel:
    return parse_graph(sample_document)


@pytest.fixture
def graph_file(tmp_path: Path, sample_document: dict) -> Path:
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(sample_document))
    return path


def chain_document(focus: str | None = "a:fn") -> dict:
    """Linear call chain a -> b -> c -> d, one file per symbol."""
    names = ["a", "b", "c", "d"]
    nodes = [
        {
            "id": name,
            "path": f"{name}.py",
            "rect": bounds(i * 200, 0, i * 200 + 100, 100),
            "cells": [{"id": f"{name}:fn", "label": f"{name}_fn", "kind": "function",
                       "rect": bounds(i * 200 + 10, 10, i * 200 + 90, 30)}],
        }
        for i, name in enumerate(names)
    ]
    edges = [
        {"from": f"{src}:fn", "to": f"{dst}:fn"}
        for src, dst in zip(names, names[1:])
    ]
    return {"nodes": nodes, "edges": edges, "focus": focus}


@pytest.fixture
def chain_graph() -> GraphModel:
    """Chain a -> b -> c -> d viewed in focus mode rooted at a."""
    return parse_graph(chain_document())


@pytest.fixture
def plain_chain_graph() -> GraphModel:
    """The same chain without a focus root."""
    return parse_graph(chain_document(focus=None))


@pytest.fixture
def chain_file(tmp_path: Path) -> Path:
    """The unfocused chain written to disk."""
    path = tmp_path / "chain.json"
    path.write_text(json.dumps(chain_document(focus=None)))
    return path


@pytest.fixture
def dangling_graph() -> GraphModel:
    """a -> b in focus mode, plus an edge from b to a cell no node declares."""
    return parse_graph({
        "nodes": [
            {"id": n, "rect": bounds(i * 200, 0, i * 200 + 100, 100),
             "cells": [{"id": f"{n}:fn", "rect": bounds(i * 200 + 10, 10, i * 200 + 90, 30)}]}
            for i, n in enumerate(("a", "b"))
        ],
        "edges": [{"from": "a:fn", "to": "b:fn"}, {"from": "b:fn", "to": "ghost:x"}],
        "focus": "a:fn",
    })
