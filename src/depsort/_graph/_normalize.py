"""Normalization of raw ``(node, dependencies)`` pairs into an adjacency mapping."""

from collections.abc import Hashable, Iterable, Mapping

type Edges[T: Hashable] = Iterable[tuple[T, Iterable[T]]] | Mapping[T, Iterable[T]]


def iter_pairs[T: Hashable](edges: Edges[T]) -> list[tuple[T, list[T]]]:
    """Materialize edges as a list of ``(node, dependencies)`` pairs.

    A mapping is read through ``.items()``, so an already normalized graph can
    be passed anywhere raw pairs are accepted.
    """
    items = edges.items() if isinstance(edges, Mapping) else edges
    return [(node, list(deps)) for node, deps in items]


def deduplicate[T: Hashable](items: Iterable[T]) -> list[T]:
    """Remove duplicates, keeping the first occurrence of each item.

    Example:
        >>> deduplicate([1, 2, 3, 1])
        [1, 2, 3]

    """
    return list(dict.fromkeys(items))


def _merge_entries[T: Hashable](pairs: list[tuple[T, list[T]]]) -> dict[T, list[T]]:
    merged: dict[T, list[T]] = {}
    for node, deps in pairs:
        # Repeated source nodes extend the earlier entry
        merged.setdefault(node, []).extend(deps)
    return {node: deduplicate(deps) for node, deps in merged.items()}


def _undeclared[T: Hashable](pairs: list[tuple[T, list[T]]], declared: Mapping[T, object]) -> list[T]:
    """Dependencies absent from ``declared``, in the order they are first met."""
    found: dict[T, None] = {}
    for _, deps in pairs:
        for dep in deps:
            if dep not in declared:
                found.setdefault(dep)
    return list(found)


def normalize[T: Hashable](edges: Edges[T]) -> dict[T, list[T]]:
    """Build the canonical adjacency mapping of a graph.

    - Entries for the same source node are merged.
    - Dependency lists are deduplicated, keeping first-seen order.
    - Dependencies never declared as a source node are appended as keys with
      no dependencies, in the order they are first referenced.

    Key order follows the first appearance of each node, which later drives
    tie-breaking in the sorting functions. The input is not modified.

    Args:
        edges: ``(node, dependencies)`` pairs, or a mapping of the same shape.

    Returns:
        Mapping from every node to its ordered list of dependencies.

    Example:
        >>> normalize([(1, [2]), (3, [1]), (1, [4, 2])])
        {1: [2, 4], 3: [1], 2: [], 4: []}

    """
    pairs = iter_pairs(edges)
    graph = _merge_entries(pairs)
    for node in _undeclared(pairs, graph):
        graph[node] = []
    return graph


def add_missing_nodes[T: Hashable](edges: Edges[T]) -> list[tuple[T, list[T]]]:
    """Append an empty entry for every dependency that is never declared.

    Unlike :func:`normalize` the original pairs are kept as given: repeated
    source entries are not merged and dependency lists are not deduplicated.

    Example:
        >>> add_missing_nodes([(1, [2])])
        [(1, [2]), (2, [])]

    """
    pairs = iter_pairs(edges)
    declared = dict.fromkeys(node for node, _ in pairs)
    return pairs + [(node, []) for node in _undeclared(pairs, declared)]


def find_nonexistent[T: Hashable](edges: Edges[T]) -> list[tuple[T, list[T]]]:
    """Report dependencies that never occur as a source node.

    One report entry is produced per input pair, in input order, so a source
    node declared several times can appear several times. Missing dependencies
    are deduplicated within an entry. Entries without missing dependencies are
    left out.

    Example:
        >>> find_nonexistent([(1, []), (2, [3]), (4, [5, 6, 7, 5]), (6, [2])])
        [(2, [3]), (4, [5, 7])]

    """
    pairs = iter_pairs(edges)
    declared = dict.fromkeys(node for node, _ in pairs)
    report: list[tuple[T, list[T]]] = []
    for node, deps in pairs:
        missing = deduplicate(dep for dep in deps if dep not in declared)
        if missing:
            report.append((node, missing))
    return report
