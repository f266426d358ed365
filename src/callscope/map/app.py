"""Call graph map: interactive terminal UI over a viewer session.

A Textual-powered TUI that lists files and their symbols. Selecting one
runs the selection engine and shows the resulting partition: kept and
faded nodes, and the incoming/outgoing edges.

Requires: pip install callscope[map]  (installs textual)
"""

from __future__ import annotations

import sys

from callscope.graph.models import Cell
from callscope.selection.models import Partition, Selection
from callscope.session import ViewerSession

try:
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Footer, Header, Input, RichLog, Static, Tree
    from textual.widgets.tree import TreeNode

    HAS_TEXTUAL = True
except ImportError:
    HAS_TEXTUAL = False


KIND_ICONS = {
    "class": "●",
    "struct": "●",
    "interface": "◇",
    "function": "ƒ",
    "method": "→",
    "constructor": "+",
}


def check_textual():
    """Check if Textual is available."""
    if not HAS_TEXTUAL:
        print("The graph map requires Textual. Install it with:")
        print("  pip install callscope[map]")
        print("  # or: pip install textual")
        sys.exit(1)


if HAS_TEXTUAL:

    class SelectionPanel(Static):
        """Panel describing the current selection."""

        def show_selection(self, session: ViewerSession) -> None:
            selection = session.selection
            if selection.is_none:
                self.update("[dim]Select a file or symbol to highlight its calls[/dim]")
                return

            camera = session.camera
            lines = [
                f"[bold cyan]{selection.kind.value}[/bold cyan]  [bold]{selection.target_id}[/bold]",
                f"[dim]zoom {camera.scale:.2f}  pan ({camera.translate_x:.0f}, "
                f"{camera.translate_y:.0f})[/dim]",
            ]
            if session.graph.focus:
                lines.append(f"[dim]focus root: {session.graph.focus}[/dim]")
            self.update("\n".join(lines))

    class PartitionPanel(RichLog):
        """Panel showing what the selection keeps and fades."""

        def show_partition(self, partition: Partition) -> None:
            self.clear()
            if partition.is_idle:
                self.write("[dim]Nothing faded[/dim]")
                return

            incoming = [e for e in partition.kept_edges if e in partition.incoming]
            outgoing = [e for e in partition.kept_edges if e in partition.outgoing]

            if incoming:
                self.write("[bold green]Incoming:[/bold green]")
                for edge_id in incoming:
                    self.write(f"  ← {edge_id}")
                self.write("")

            if outgoing:
                self.write("[bold blue]Outgoing:[/bold blue]")
                for edge_id in outgoing:
                    self.write(f"  → {edge_id}")
                self.write("")

            self.write(f"[bold]Kept nodes:[/bold] {', '.join(partition.kept_nodes) or '-'}")
            self.write(f"[dim]Faded nodes: {', '.join(partition.faded_nodes) or '-'}[/dim]")
            if partition.faded_clusters:
                self.write(f"[dim]Faded clusters: {', '.join(partition.faded_clusters)}[/dim]")

    class GraphMapApp(App):
        """The graph map TUI application."""

        TITLE = "callscope - Graph Map"

        CSS = """
        #graph-tree {
            width: 40%;
            border: solid $accent;
            height: 100%;
        }
        #main-area {
            width: 60%;
        }
        #selection-detail {
            height: 25%;
            border: solid $accent;
            padding: 1;
        }
        #partition {
            height: 75%;
            border: solid $accent;
        }
        #search-bar {
            dock: top;
            height: 3;
            padding: 0 1;
        }
        """

        BINDINGS = [
            Binding("q", "quit", "Quit"),
            Binding("/", "focus_search", "Search"),
            Binding("escape", "clear_selection", "Clear"),
        ]

        def __init__(self, session: ViewerSession, **kwargs):
            super().__init__(**kwargs)
            self.session = session

        def compose(self) -> ComposeResult:
            yield Header()
            yield Input(placeholder="Search labels... (press /)", id="search-bar")
            with Horizontal():
                yield Tree("Graph", id="graph-tree")
                with Vertical(id="main-area"):
                    yield SelectionPanel(id="selection-detail")
                    yield PartitionPanel(id="partition")
            yield Footer()

        def on_mount(self) -> None:
            tree = self.query_one("#graph-tree", Tree)
            for node in self.session.graph.nodes:
                file_node = tree.root.add(
                    f"[cyan]{node.label or node.path or node.id}[/cyan]",
                    data=Selection.node(node.id),
                )
                for cell in node.cells:
                    self._add_cell(file_node, cell)
            tree.root.expand_all()
            self._refresh()

        def _add_cell(self, parent: TreeNode, cell: Cell) -> None:
            icon = KIND_ICONS.get(cell.kind.value, "·")
            label = f"{icon} {cell.label or cell.id}"
            if cell.children:
                branch = parent.add(label, data=Selection.cell(cell.id))
                for child in cell.children:
                    self._add_cell(branch, child)
            else:
                parent.add_leaf(label, data=Selection.cell(cell.id))

        def _refresh(self) -> None:
            self.query_one("#selection-detail", SelectionPanel).show_selection(self.session)
            self.query_one("#partition", PartitionPanel).show_partition(self.session.partition)

        def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
            if isinstance(event.node.data, Selection):
                self.session.select(event.node.data)
                self._refresh()

        def on_input_submitted(self, event: Input.Submitted) -> None:
            query_text = event.value.strip()
            if not query_text:
                return
            if not self.session.search(query_text):
                self.notify(f"No match for '{query_text}'", severity="warning")
            self._refresh()
            self.query_one("#search-bar", Input).value = ""

        def action_focus_search(self) -> None:
            self.query_one("#search-bar", Input).focus()

        def action_clear_selection(self) -> None:
            self.session.select(None)
            self._refresh()


def launch_map(session: ViewerSession) -> None:
    """Launch the graph map TUI."""
    check_textual()
    app = GraphMapApp(session=session)
    app.run()
