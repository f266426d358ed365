"""Rich-powered console output for callscope."""

from __future__ import annotations

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from callscope import __version__
from callscope.search import SearchHit
from callscope.selection.models import Partition


class Console:
    """Terminal output for callscope using Rich."""

    def __init__(self) -> None:
        self.console = RichConsole()

    def banner(self) -> None:
        """Show the callscope banner."""
        self.console.print(
            Panel(
                f"[bold cyan]callscope[/bold cyan] [dim]v{__version__}[/dim]\n"
                "[dim]Explore call graphs one selection at a time[/dim]",
                border_style="cyan",
                padding=(1, 2),
            )
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def show_stats(self, stats: dict) -> None:
        """Display graph statistics in a table."""
        table = Table(title="Call Graph Statistics", border_style="cyan")
        table.add_column("Metric", style="bold")
        table.add_column("Count", justify="right", style="cyan")

        table.add_row("Files", str(stats.get("files", 0)))
        table.add_row("Symbols", str(stats.get("symbols", 0)))
        table.add_row("Functions/Methods", str(stats.get("functions", 0)))
        table.add_row("Edges", str(stats.get("edges", 0)))
        table.add_row("Clusters", str(stats.get("clusters", 0)))
        if stats.get("focus"):
            table.add_row("Focus", stats["focus"])

        edge_types = stats.get("edge_types", {})
        if edge_types:
            table.add_section()
            for kind, count in sorted(edge_types.items(), key=lambda x: -x[1]):
                table.add_row(f"  {kind} edges", str(count))

        self.console.print(table)

    def show_partition(self, partition: Partition) -> None:
        """Display which elements a selection keeps and fades."""
        selection = partition.selection
        if partition.is_idle:
            self.info("Nothing selected; every element is visible")
            return

        tree = Tree(
            f"[bold cyan]{selection.kind.value}[/bold cyan] [bold]{selection.target_id}[/bold]"
        )

        nodes = tree.add(f"[bold]Nodes[/bold] [dim]({len(partition.kept_nodes)} kept)[/dim]")
        for node_id in partition.kept_nodes:
            nodes.add(f"[green]{node_id}[/green]")
        for node_id in partition.faded_nodes:
            nodes.add(f"[dim]{node_id} (faded)[/dim]")

        edges = tree.add(f"[bold]Edges[/bold] [dim]({len(partition.kept_edges)} kept)[/dim]")
        for edge_id in partition.kept_edges:
            marks = []
            if edge_id in partition.incoming:
                marks.append("[green]incoming[/green]")
            if edge_id in partition.outgoing:
                marks.append("[blue]outgoing[/blue]")
            suffix = f" {' '.join(marks)}" if marks else ""
            edges.add(f"{edge_id}{suffix}")

        if partition.kept_clusters or partition.faded_clusters:
            clusters = tree.add("[bold]Clusters[/bold]")
            for cluster_id in partition.kept_clusters:
                clusters.add(f"[green]{cluster_id}[/green]")
            for cluster_id in partition.faded_clusters:
                clusters.add(f"[dim]{cluster_id} (faded)[/dim]")

        self.console.print(tree)

    def show_search_results(self, results: list[SearchHit]) -> None:
        """Display search results."""
        for r in results:
            kind = r.cell_kind or r.kind
            self.console.print(
                f"  [bold]{r.label}[/bold] [dim]({kind})[/dim] "
                f"[cyan]{r.id}[/cyan]"
                + (f" in [cyan]{r.path}[/cyan]" if r.path else "")
            )
