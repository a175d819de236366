"""Transitive dependencies of a single node."""

from collections.abc import Hashable, Iterator

from depsort._errors import NodeNotFoundError

from ._normalize import Edges, normalize


def closure[T: Hashable](edges: Edges[T], start: T) -> list[T]:
    """Collect every node that ``start`` depends on, directly or transitively.

    Nodes are listed in the order they are discovered: the direct dependencies
    of a node come first, then the walk descends into each of them in turn.
    Each node is expanded once, so cycles terminate. ``start`` itself is never
    part of the result, even when it lies on a cycle.

    The result is not topologically sorted.

    Args:
        edges: ``(node, dependencies)`` pairs, or a mapping of the same shape.
        start: Node whose dependencies are collected. Nodes that only appear
            as a dependency are accepted and have no dependencies.

    Returns:
        The transitive dependencies of ``start``, without duplicates.

    Raises:
        NodeNotFoundError: If ``start`` does not occur in the graph.

    Example:
        >>> closure([(1, [2, 3]), (2, [3, 5]), (3, [5, 8])], 1)
        [2, 3, 5, 8]

    """
    graph = normalize(edges)
    if start not in graph:
        raise NodeNotFoundError(start)

    found = dict.fromkeys(graph[start])
    expanded = {start}
    stack: list[Iterator[T]] = [iter(graph[start])]
    while stack:
        for node in stack[-1]:
            if node not in expanded:
                expanded.add(node)
                found.update(dict.fromkeys(graph[node]))
                stack.append(iter(graph[node]))
                break
        else:
            stack.pop()

    found.pop(start, None)
    return list(found)


find_dependencies = closure
