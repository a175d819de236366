import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from depsort._errors import DepsortError, NodeNotFoundError
from depsort._graph import DependencyGraph, closure, find_nonexistent, partition, sort, sort_components
from depsort._io import (
    Node,
    export_components_to_toml,
    export_nodes_to_toml,
    export_result_to_toml,
    load_graph,
)
from depsort._result import MissingPolicy, Sorted

from .config import DepsortConfig, get_config
from .render import render_components, render_missing, render_order, render_sort_result

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

GraphOption = Annotated[
    Path | None,
    typer.Option("-g", "--graph", help="Path to graph TOML file (defaults to [tool.depsort].graph)"),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("-o", "--output", help="Also write the result to this TOML file"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Depsort CLI: order dependency graphs and diagnose cycles."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    return typer.Exit(code=1)


def _load_config() -> DepsortConfig:
    try:
        return get_config()
    except DepsortError as e:
        raise _fail(str(e)) from e


def _load_pairs(graph: Path | None, config: DepsortConfig) -> list[tuple[Node, list[Node]]]:
    """Load the graph given on the command line, falling back to the configured one."""
    graph_path = graph if graph is not None else config.graph
    if graph_path is None:
        msg = "No graph file given. Pass --graph or set [tool.depsort].graph in pyproject.toml"
        raise _fail(msg)

    logger.debug(f"Loading graph from {graph_path}")
    try:
        return load_graph(graph_path)
    except DepsortError as e:
        raise _fail(str(e)) from e


def _resolve_node(pairs: list[tuple[Node, list[Node]]], name: str) -> Node:
    """Find the graph node whose text form is ``name``."""
    for node in DependencyGraph.from_pairs(pairs):
        if str(node) == name:
            return node
    raise _fail(str(NodeNotFoundError(name)))


@app.command("sort")
def sort_command(
    graph: GraphOption = None,
    *,
    policy: Annotated[
        MissingPolicy | None,
        typer.Option("--policy", help="How to report undeclared dependencies if sorting stalls"),
    ] = None,
    output: OutputOption = None,
) -> None:
    """Print the nodes in dependency order (dependencies first)."""
    config = _load_config()
    pairs = _load_pairs(graph, config)
    policy = policy or config.policy or MissingPolicy.STRICT
    logger.debug(f"Sorting {len(pairs)} node entries with policy '{policy}'")

    result = sort(pairs, policy=policy)
    render_sort_result(result, out_console, err_console)

    if output is not None:
        export_result_to_toml(result, output)
        err_console.print(f"[cyan]Result written to:[/cyan] {output}")

    if not isinstance(result, Sorted):
        raise typer.Exit(code=1)


@app.command()
def components(
    graph: GraphOption = None,
    *,
    output: OutputOption = None,
) -> None:
    """Print the strongly connected components in input order."""
    config = _load_config()
    result = partition(_load_pairs(graph, config))
    render_components(result, out_console)

    if output is not None:
        export_components_to_toml(result, output)
        err_console.print(f"[cyan]Result written to:[/cyan] {output}")


@app.command("sort-components")
def sort_components_command(
    graph: GraphOption = None,
    *,
    output: OutputOption = None,
) -> None:
    """Print the strongly connected components in dependency order.

    Works on cyclic graphs: nodes on a cycle are grouped into one component.
    """
    config = _load_config()
    result = sort_components(_load_pairs(graph, config))
    render_components(result, out_console)

    if output is not None:
        export_components_to_toml(result, output)
        err_console.print(f"[cyan]Result written to:[/cyan] {output}")


@app.command()
def deps(
    node: Annotated[str, typer.Argument(help="Node whose transitive dependencies are listed")],
    graph: GraphOption = None,
    *,
    output: OutputOption = None,
) -> None:
    """Print every node that NODE depends on, directly or transitively."""
    config = _load_config()
    pairs = _load_pairs(graph, config)
    start = _resolve_node(pairs, node)

    result = closure(pairs, start)
    if result:
        render_order(result, out_console)
    else:
        err_console.print(f"[dim]{escape(node)} has no dependencies[/dim]")

    if output is not None:
        export_nodes_to_toml(result, output, key="dependencies")
        err_console.print(f"[cyan]Result written to:[/cyan] {output}")


@app.command()
def missing(
    graph: GraphOption = None,
) -> None:
    """List dependencies that are never declared as nodes."""
    config = _load_config()
    result = find_nonexistent(_load_pairs(graph, config))
    if not result:
        err_console.print("[green]✓ All dependencies are declared[/green]")
        return
    render_missing(result, out_console)


@app.command()
def check(
    graph: GraphOption = None,
) -> None:
    """Validate a graph: undeclared dependencies and cycles."""
    config = _load_config()
    dependency_graph = DependencyGraph.from_pairs(_load_pairs(graph, config))

    err_console.print("[cyan]Validating dependencies...[/cyan]")
    errors = dependency_graph.validate()
    if errors:
        for error in errors:
            err_console.print(f"  [red]•[/red] {escape(error)}")
        err_console.print()
        err_console.print(f"[red]✗ Graph has {len(errors)} problem(s)[/red]")
        raise typer.Exit(code=1)

    err_console.print(f"[green]✓ Graph is valid ({len(dependency_graph)} nodes)[/green]")


def main() -> None:
    app()
