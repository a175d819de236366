"""Exception types raised by depsort.

Orderability problems (cycles, dangling references) are normally reported as
``SortResult`` values, not exceptions. The types here cover caller errors,
invalid input files, and internal bugs.
"""

from collections.abc import Hashable, Sequence


class DepsortError(Exception):
    """Base class for caller-facing depsort errors."""


class NodeNotFoundError(DepsortError, KeyError):
    """Raised when a node is looked up that is not part of the graph."""

    def __init__(self, node: Hashable) -> None:
        self.node = node
        super().__init__(f"Node {node!r} not found in graph")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0])


class CycleError(DepsortError, ValueError):
    """Raised by the raising sort helpers when the graph cannot be ordered."""

    def __init__(self, residue: Sequence[Hashable]) -> None:
        self.residue = list(residue)
        super().__init__(f"Cycle detected in graph among {len(self.residue)} node(s): {self.residue!r}")


class InternalInvariantError(RuntimeError):
    """An internal consistency check failed. This is a bug in depsort."""


class GraphFileError(DepsortError):
    """Error reading or validating a graph file."""


class ConfigError(DepsortError):
    """Error in depsort configuration."""
