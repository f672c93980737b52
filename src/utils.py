"""Shared console helpers for the plugin scaffolder.

Provides the Rich console used for all user-facing output, message helpers,
a key/value summary table, a file tree view and duration formatting.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

console = Console()


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(0.42)   -> "0.4s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def build_file_tree(root_label: str, paths: Iterable[Path]) -> Tree:
    """Build a Rich ``Tree`` from relative file paths."""
    tree = Tree(f"[bold]{root_label}[/bold]")
    nodes: dict[tuple[str, ...], Tree] = {(): tree}
    for path in sorted(paths):
        parts = path.parts
        for depth in range(1, len(parts) + 1):
            key = parts[:depth]
            if key in nodes:
                continue
            label = parts[depth - 1]
            if depth < len(parts):
                label = f"[blue]{label}/[/blue]"
            nodes[key] = nodes[parts[: depth - 1]].add(label)
    return tree


def print_file_tree(root_label: str, paths: Iterable[Path]) -> None:
    """Print relative *paths* as a tree rooted at *root_label*."""
    console.print(build_file_tree(root_label, paths))
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
