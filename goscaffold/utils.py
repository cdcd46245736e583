"""Console helpers for the goscaffold command line.

Everything printed to the terminal goes through the shared Rich ``console``
so output styling stays consistent between the summary table, warnings and
error hints.
"""

from __future__ import annotations

import logging
from typing import Iterable

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table
from rich.tree import Tree

console = Console()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> None:
    """Route library log records through Rich.

    Args:
        verbose: Emit DEBUG records (every planned directory and file)
            instead of INFO.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_file_count(count: int) -> str:
    """Format a file count for display.

    Examples::

        format_file_count(1)  -> "1 file"
        format_file_count(42) -> "42 files"
    """
    return f"{count} file" if count == 1 else f"{count} files"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str) -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold bright_cyan] {title} [/bold bright_cyan]", style="bright_cyan"))
    console.print()


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


def print_file_tree(root_label: str, paths: Iterable[str]) -> None:
    """Print project-relative *paths* as a tree under *root_label*."""
    tree = Tree(f"[bold]{root_label}[/bold]")
    nodes: dict[str, Tree] = {}
    for path in sorted(paths):
        parent = tree
        parts = path.split("/")
        for depth, part in enumerate(parts):
            key = "/".join(parts[: depth + 1])
            if key not in nodes:
                nodes[key] = parent.add(part)
            parent = nodes[key]
    console.print(tree)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_hint(message: str) -> None:
    console.print(f"  [cyan]-[/cyan] {escape(message)}")
