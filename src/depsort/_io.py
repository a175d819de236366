"""Reading graph files and writing results as TOML.

A graph file lists nodes as an array of tables, which keeps their order and
allows the same node to be declared more than once:

    [[node]]
    name = "app"
    depends = ["lib", "util"]

    [[node]]
    name = "lib"
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from ._errors import GraphFileError
from ._result import ErrorCycle, ErrorNonexistent, Sorted, SortResult

logger = logging.getLogger(__name__)

# Booleans and floats are rejected rather than coerced into node names.
Node = StrictStr | StrictInt


class NodeEntry(BaseModel):
    """One ``[[node]]`` table of a graph file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Node
    depends: list[Node] = Field(default_factory=list)


class GraphFile(BaseModel):
    """Schema of a whole graph file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    node: list[NodeEntry] = Field(default_factory=list)

    def pairs(self) -> list[tuple[Node, list[Node]]]:
        return [(entry.name, list(entry.depends)) for entry in self.node]


def toml_to_pairs(toml_contents: dict[str, Any]) -> list[tuple[Node, list[Node]]]:
    """Validate parsed TOML contents and return them as ``(node, dependencies)`` pairs.

    Raises:
        GraphFileError: If the contents do not match the graph file schema.

    """
    try:
        graph_file = GraphFile.model_validate(toml_contents)
    except ValidationError as e:
        msg = f"Invalid graph definition: {e}"
        raise GraphFileError(msg) from e
    return graph_file.pairs()


def load_graph(input_path: Path | str) -> list[tuple[Node, list[Node]]]:
    """Load ``(node, dependencies)`` pairs from a TOML graph file.

    Args:
        input_path: Path to the graph file.

    Returns:
        The pairs in file order.

    Raises:
        GraphFileError: If the file is missing, is not valid TOML, or does not
            match the graph file schema.

    """
    input_path = Path(input_path)
    try:
        with input_path.open("rb") as f:
            toml_contents = tomllib.load(f)
    except FileNotFoundError as e:
        msg = f"Graph file not found: {input_path}"
        raise GraphFileError(msg) from e
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {input_path}: {e}"
        raise GraphFileError(msg) from e

    pairs = toml_to_pairs(toml_contents)
    logger.debug("Loaded %d node entries from %s", len(pairs), input_path)
    return pairs


def result_to_dict(result: SortResult[Node]) -> dict[str, Any]:
    """Convert a sort result to a TOML-serializable dictionary."""
    match result:
        case Sorted(order=order):
            return {"status": "sorted", "order": list(order)}
        case ErrorCycle(residue=residue):
            return {"status": "cycle", "residue": list(residue)}
        case ErrorNonexistent(missing=missing):
            return {
                "status": "nonexistent",
                "missing": [{"node": node, "depends": list(deps)} for node, deps in missing],
            }
    msg = f"Unsupported sort result: {result!r}"
    raise TypeError(msg)


def _write_toml(data: dict[str, Any], output_path: Path | str) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("wb") as f:
        tomli_w.dump(data, f)
    logger.debug("Exported results to %s", output_path)


def export_result_to_toml(result: SortResult[Node], output_path: Path | str) -> None:
    """Write a sort result to a TOML file."""
    _write_toml(result_to_dict(result), output_path)


def export_components_to_toml(components: list[list[Node]], output_path: Path | str) -> None:
    """Write a list of components to a TOML file as ``components = [[...], ...]``."""
    _write_toml({"components": [list(members) for members in components]}, output_path)


def export_nodes_to_toml(nodes: list[Node], output_path: Path | str, *, key: str = "nodes") -> None:
    """Write a flat list of nodes to a TOML file under ``key``."""
    _write_toml({key: list(nodes)}, output_path)
