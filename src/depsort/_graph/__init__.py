"""Graph module providing dependency graph algorithms.

This module contains:
- normalize / find_nonexistent: canonical adjacency mapping and diagnostics
- sort: topological sort with Kahn's algorithm
- partition / sort_components: strongly connected components (Kosaraju)
- closure: transitive dependencies of one node
- DependencyGraph[T]: an immutable graph object wrapping all of the above
"""

from ._closure import closure, find_dependencies
from ._components import (
    find_strongly_connected_components,
    partition,
    sort_components,
    sort_strongly_connected_components,
    transpose,
)
from ._dependency_graph import DependencyGraph
from ._kahn import sort
from ._normalize import Edges, add_missing_nodes, deduplicate, find_nonexistent, normalize

__all__ = [
    "DependencyGraph",
    "Edges",
    "add_missing_nodes",
    "closure",
    "deduplicate",
    "find_dependencies",
    "find_nonexistent",
    "find_strongly_connected_components",
    "normalize",
    "partition",
    "sort",
    "sort_components",
    "sort_strongly_connected_components",
    "transpose",
]
