"""Dependency ordering for directed graphs: topological sort, SCCs, and diagnostics."""

__all__ = [
    "ConfigError",
    "CycleError",
    "DependencyGraph",
    "DepsortError",
    "ErrorCycle",
    "ErrorNonexistent",
    "GraphFileError",
    "InternalInvariantError",
    "MissingPolicy",
    "NodeNotFoundError",
    "SortResult",
    "Sorted",
    "StrEnumWithDoc",
    "add_missing_nodes",
    "closure",
    "deduplicate",
    "export_components_to_toml",
    "export_result_to_toml",
    "find_dependencies",
    "find_nonexistent",
    "find_strongly_connected_components",
    "load_graph",
    "normalize",
    "partition",
    "sort",
    "sort_components",
    "sort_strongly_connected_components",
    "transpose",
]

from ._errors import (
    ConfigError,
    CycleError,
    DepsortError,
    GraphFileError,
    InternalInvariantError,
    NodeNotFoundError,
)
from ._graph import (
    DependencyGraph,
    add_missing_nodes,
    closure,
    deduplicate,
    find_dependencies,
    find_nonexistent,
    find_strongly_connected_components,
    normalize,
    partition,
    sort,
    sort_components,
    sort_strongly_connected_components,
    transpose,
)
from ._io import export_components_to_toml, export_result_to_toml, load_graph
from ._result import ErrorCycle, ErrorNonexistent, MissingPolicy, Sorted, SortResult
from ._str_enum_with_doc import StrEnumWithDoc
