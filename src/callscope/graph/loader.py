"""Read graph documents produced by the external layout step."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from callscope.exceptions import GraphError
from callscope.graph.models import GraphModel

logger = logging.getLogger("callscope.graph")


def parse_graph(data: dict[str, Any], generation: int = 0) -> GraphModel:
    """Validate a graph document (already decoded from JSON).

    Expected shape::

        {
          "nodes": [{"id": "1", "path": "src/a.py", "rect": {...},
                     "cells": [{"id": "1:3_4", "kind": 12, ...}]}],
          "edges": [{"from": "1:3_4", "to": "2:0_0", "kind": "call"}],
          "clusters": [{"id": "src", "rect": {...}, "label_rect": {...}}],
          "focus": "1:3_4"
        }
    """
    if not isinstance(data, dict):
        raise GraphError("Graph document must be a JSON object")
    try:
        graph = GraphModel.model_validate({**data, "generation": generation})
    except ValidationError as e:
        raise GraphError(f"Invalid graph document: {e}") from e

    logger.debug(
        "Loaded graph generation %d: %d nodes, %d edges, %d clusters",
        graph.generation, len(graph.nodes), len(graph.edges), len(graph.clusters),
    )
    return graph


def load_graph(path: str | Path, generation: int = 0) -> GraphModel:
    """Load a graph document from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise GraphError(f"Cannot read graph file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise GraphError(f"Graph file {path} is not valid JSON: {e}") from e
    return parse_graph(data, generation=generation)
