"""Rich rendering utilities for CLI commands."""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from depsort._result import ErrorCycle, ErrorNonexistent, Sorted, SortResult

if TYPE_CHECKING:
    from rich.console import Console


def _fmt(node: Hashable) -> str:
    return escape(str(node))


def render_order(order: list[Hashable], console: Console) -> None:
    """Render a topological order as a numbered table."""
    if not order:
        console.print("[dim]Graph is empty[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Node", style="bold")

    for i, node in enumerate(order, start=1):
        table.add_row(str(i), _fmt(node))

    console.print(table)


def render_missing(missing: list[tuple[Hashable, list[Hashable]]], console: Console) -> None:
    """Render undeclared dependencies per node."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Node", style="bold")
    table.add_column("Missing dependencies", style="yellow")

    for node, deps in missing:
        table.add_row(_fmt(node), ", ".join(_fmt(dep) for dep in deps))

    console.print(table)


def render_components(components: list[list[Hashable]], console: Console) -> None:
    """Render strongly connected components, highlighting the cyclic ones."""
    if not components:
        console.print("[dim]Graph is empty[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Members")
    table.add_column("Size", justify="right")

    for i, members in enumerate(components, start=1):
        text = ", ".join(_fmt(node) for node in members)
        if len(members) > 1:
            text = f"[magenta]{text}[/magenta]"
        table.add_row(str(i), text, str(len(members)))

    console.print(table)
    console.print(f"\n[dim]Total: {len(components)} components[/dim]")


def render_sort_result(result: SortResult[Hashable], console: Console, err_console: Console) -> None:
    """Render a sort result: the order on ``console``, failures on ``err_console``."""
    match result:
        case Sorted(order=order):
            render_order(order, console)
        case ErrorCycle(residue=residue):
            err_console.print("[red]✗ Cycle detected; these nodes could not be ordered:[/red]")
            for node in residue:
                err_console.print(f"  [red]•[/red] {_fmt(node)}")
        case ErrorNonexistent(missing=missing):
            err_console.print("[red]✗ Graph references undeclared nodes:[/red]")
            render_missing(missing, err_console)
