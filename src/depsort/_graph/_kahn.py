"""Topological sorting with Kahn's algorithm."""

import logging
from collections import deque
from collections.abc import Hashable

from depsort._result import ErrorCycle, ErrorNonexistent, MissingPolicy, Sorted, SortResult

from ._normalize import Edges, find_nonexistent, iter_pairs, normalize

logger = logging.getLogger(__name__)


def _dependents_index[T: Hashable](graph: dict[T, list[T]]) -> dict[T, list[T]]:
    """Map each node to the nodes that depend on it, in graph key order."""
    index: dict[T, list[T]] = {node: [] for node in graph}
    for node, deps in graph.items():
        for dep in deps:
            index[dep].append(node)
    return index


def sort[T: Hashable](edges: Edges[T], *, policy: MissingPolicy = MissingPolicy.STRICT) -> SortResult[T]:
    """Sort a graph so that every node comes after its dependencies.

    Nodes without dependencies are taken first, in the order they were
    declared. Each ordered node is then removed from the dependency lists of
    the remaining nodes, first in, first out; nodes left without dependencies
    by one removal follow in declaration order.

    Args:
        edges: ``(node, dependencies)`` pairs. ``(u, [v])`` means u depends on v.
        policy: How undeclared dependencies of unordered nodes are reported if
            sorting stalls.

    Returns:
        ``Sorted`` with the full order, or ``ErrorNonexistent`` / ``ErrorCycle``
        when some nodes cannot be ordered.

    Example:
        >>> sort([("basement", ["foundation"]), ("foundation", [])])
        Sorted(order=['foundation', 'basement'])

    """
    pairs = iter_pairs(edges)
    graph = normalize(pairs)
    dependents = _dependents_index(graph)
    pending = {node: len(deps) for node, deps in graph.items()}

    order = [node for node, count in pending.items() if count == 0]
    frontier = deque(order)
    while frontier:
        node = frontier.popleft()
        for dependent in dependents[node]:
            pending[dependent] -= 1
            if pending[dependent] == 0:
                order.append(dependent)
                frontier.append(dependent)

    if len(order) == len(graph):
        return Sorted(order)

    residue = [node for node, count in pending.items() if count > 0]
    logger.debug("Sort stalled with %d of %d nodes unordered", len(residue), len(graph))

    return stalled_result(residue, find_nonexistent(pairs), policy)


def stalled_result[T: Hashable](
    residue: list[T],
    missing: list[tuple[T, list[T]]],
    policy: MissingPolicy,
) -> ErrorNonexistent[T] | ErrorCycle[T]:
    """Pick the report for a stalled sort.

    Under the strict policy, undeclared dependencies of nodes left in
    ``residue`` are reported instead of the cycle. References from nodes that
    were ordered are ignored.
    """
    if policy == MissingPolicy.STRICT:
        unresolved = set(residue)
        blocking = [(node, deps) for node, deps in missing if node in unresolved]
        if blocking:
            return ErrorNonexistent(blocking)
    return ErrorCycle(residue)
