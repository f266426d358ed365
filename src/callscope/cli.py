"""Command-line interface for callscope."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from callscope import __version__
from callscope.config import (
    ViewerConfig,
    find_project_root,
    load_config,
    save_config,
    set_config_value,
)
from callscope.exceptions import CallScopeError
from callscope.ui.console import Console

console = Console()


def _get_project_root(path: str | None = None) -> Path:
    """Find the project root or error."""
    if path:
        root = Path(path).resolve()
        if not root.exists():
            console.error(f"Path does not exist: {path}")
            sys.exit(1)
        return root

    root = find_project_root()
    if root is None:
        console.error(
            "No callscope project found. Run 'callscope init' first, "
            "or specify a path with --path."
        )
        sys.exit(1)
    return root


def _load_viewer_config(path: str | None) -> ViewerConfig:
    """Project config if one is found, defaults otherwise."""
    root = Path(path).resolve() if path else find_project_root()
    if root is None:
        return ViewerConfig()
    try:
        return load_config(root)
    except CallScopeError as e:
        console.error(str(e))
        sys.exit(1)


def _load_graph(graph_file: str):
    """Load a graph document or error."""
    from callscope.graph.loader import load_graph

    try:
        return load_graph(graph_file)
    except CallScopeError as e:
        console.error(str(e))
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="callscope")
def main():
    """callscope - explore call graphs by selection and highlighting."""
    pass


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option("--fit-to-window", is_flag=True, help="Use a 1.0 zoom floor with no ceiling.")
def init(path: str | None, fit_to_window: bool):
    """Initialize callscope configuration for a directory."""
    root = Path(path or ".").resolve()
    if not root.exists():
        console.error(f"Path does not exist: {root}")
        sys.exit(1)

    console.banner()
    console.info(f"Initializing callscope for: {root}")

    config = _load_viewer_config(str(root))
    config.name = root.name
    config.root_path = str(root)
    if fit_to_window:
        from callscope.config import CameraConfig

        config.camera = CameraConfig.fit_to_window()

    save_config(root, config)
    console.success("Configuration saved to .callscope/")


@main.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False))
def stats(graph_file: str):
    """Show statistics for a graph document."""
    graph = _load_graph(graph_file)
    console.show_stats(graph.stats())


@main.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--node", "node_id", default=None, help="Select a node (file) by id.")
@click.option("--cell", "cell_id", default=None, help="Select a cell (symbol) by id.")
@click.option("--edge", "edge_id", default=None, help='Select an edge ("<from> -> <to>").')
@click.option("--cluster", "cluster_id", default=None, help="Select a cluster label by id.")
@click.option("--focus", "-f", default=None, help="Treat this cell as the focus root.")
@click.option("--json", "as_json", is_flag=True, help="Print the partition as JSON.")
def select(
    graph_file: str,
    node_id: str | None,
    cell_id: str | None,
    edge_id: str | None,
    cluster_id: str | None,
    focus: str | None,
    as_json: bool,
):
    """Select an element and show what stays visible and what fades."""
    from callscope.selection import Selection, SelectionEngine

    given = [
        s for s in (
            Selection.node(node_id) if node_id else None,
            Selection.cell(cell_id) if cell_id else None,
            Selection.edge(edge_id) if edge_id else None,
            Selection.cluster(cluster_id) if cluster_id else None,
        )
        if s is not None
    ]
    if len(given) != 1:
        console.error("Pass exactly one of --node, --cell, --edge, --cluster.")
        sys.exit(1)

    graph = _load_graph(graph_file)
    if focus:
        graph = graph.with_focus(focus)

    engine = SelectionEngine(graph)
    partition = engine.select(given[0])

    if as_json:
        click.echo(json.dumps(partition.to_dict(), indent=2))
        return

    if partition.is_idle:
        console.warning(f"No {given[0].kind.value} with id '{given[0].target_id}'")
        return
    console.show_partition(partition)


@main.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("query")
@click.option("--kind", "-k", default="", help="Only cells of this kind (ignores QUERY text).")
@click.option("--case-sensitive/--ignore-case", default=None, help="Override case matching.")
@click.option("--path", "-p", default=None, help="Path to the project root.")
def search(graph_file: str, query: str, kind: str, case_sensitive: bool | None, path: str | None):
    """Search cells and nodes by label."""
    from callscope.graph.models import CellKind
    from callscope.search import SearchIndex

    config = _load_viewer_config(path)
    graph = _load_graph(graph_file)
    index = SearchIndex(graph, max_results=config.search.max_results)

    if kind:
        if kind not in CellKind._value2member_map_:
            console.error(f"Unknown kind: {kind}")
            sys.exit(1)
        results = index.search_by_kind(kind)
    else:
        if case_sensitive is None:
            case_sensitive = config.search.case_sensitive
        results = index.search(query, case_sensitive=case_sensitive)

    if results:
        console.info(f"Found {len(results)} match(es) for '{query}':")
        console.show_search_results(results)
    else:
        console.warning(f"No results found for '{query}'")


@main.command("map")
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--path", "-p", default=None, help="Path to the project root.")
def graph_map(graph_file: str, path: str | None):
    """Launch the interactive graph map TUI.

    Requires: pip install callscope[map]

    Keybindings:
      /      - Search labels
      escape - Clear selection
      q      - Quit
    """
    from callscope.map.app import launch_map
    from callscope.session import ViewerSession

    config = _load_viewer_config(path)
    graph = _load_graph(graph_file)
    session = ViewerSession(graph, config=config)
    launch_map(session)


# =========================================================================
# Config Management
# =========================================================================

@main.command("config")
@click.argument("action", type=click.Choice(["set", "get", "show"]))
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_cmd(action: str, key: str | None, value: str | None, path: str | None):
    """Manage callscope configuration."""
    root = _get_project_root(path)
    try:
        config = load_config(root)
    except CallScopeError as e:
        console.error(str(e))
        sys.exit(1)

    if action == "show":
        console.console.print_json(json.dumps(config.model_dump(), indent=2))
    elif action == "get":
        if not key:
            console.error("Usage: callscope config get <key>")
            sys.exit(1)
        data = config.model_dump()
        parts = key.split(".")
        for part in parts:
            if isinstance(data, dict) and part in data:
                data = data[part]
            else:
                console.error(f"Unknown key: {key}")
                sys.exit(1)
        console.console.print(f"{key} = {data}")
    elif action == "set":
        if not key or value is None:
            console.error("Usage: callscope config set <key> <value>")
            sys.exit(1)
        try:
            # Try to parse as JSON for non-string values
            try:
                parsed_value = json.loads(value)
            except json.JSONDecodeError:
                parsed_value = value

            config = set_config_value(config, key, parsed_value)
            save_config(root, config)
            console.success(f"Set {key} = {parsed_value}")
        except KeyError:
            console.error(f"Unknown config key: {key}")
            sys.exit(1)
        except CallScopeError as e:
            console.error(str(e))
            sys.exit(1)


if __name__ == "__main__":
    main()
