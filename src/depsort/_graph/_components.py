"""Strongly connected components and sorting of cyclic graphs.

Components are found with Kosaraju's algorithm: a depth-first pass over the
graph records nodes in post-order, then a second pass over the transposed
graph, in reverse post-order, collects everything reachable from each
unassigned node. Both passes use explicit stacks.

A cyclic graph is sorted by contracting each component into a single node
(the condensation), sorting that acyclic graph, and expanding the components
back into their members.
"""

import logging
from collections.abc import Hashable, Iterator

from depsort._errors import InternalInvariantError
from depsort._result import Sorted

from ._kahn import sort
from ._normalize import Edges, normalize

logger = logging.getLogger(__name__)


def transpose[T: Hashable](graph: dict[T, list[T]]) -> dict[T, list[T]]:
    """Reverse every edge of a normalized graph.

    Every key of ``graph`` is a key of the result, so nodes without incoming
    edges map to an empty list.

    Example:
        >>> transpose({1: [2, 3], 2: [3], 3: []})
        {1: [], 2: [1], 3: [1, 2]}

    """
    reversed_graph: dict[T, list[T]] = {node: [] for node in graph}
    for node, deps in graph.items():
        for dep in deps:
            reversed_graph.setdefault(dep, []).append(node)
    return reversed_graph


def _post_order[T: Hashable](graph: dict[T, list[T]]) -> list[T]:
    """Depth-first finishing order of all nodes, roots taken in key order."""
    visited: set[T] = set()
    finished: list[T] = []
    for root in graph:
        if root in visited:
            continue
        visited.add(root)
        stack: list[tuple[T, Iterator[T]]] = [(root, iter(graph[root]))]
        while stack:
            node, neighbors = stack[-1]
            for neighbor in neighbors:
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append((neighbor, iter(graph[neighbor])))
                    break
            else:
                stack.pop()
                finished.append(node)
    return finished


def _assign_roots[T: Hashable](reversed_graph: dict[T, list[T]], finished: list[T]) -> dict[T, T]:
    """Map every node to the root of its component."""
    assignments: dict[T, T] = {}
    for root in reversed(finished):
        if root in assignments:
            continue
        stack = [root]
        while stack:
            node = stack.pop()
            if node in assignments:
                continue
            assignments[node] = root
            stack.extend(n for n in reversed_graph[node] if n not in assignments)
    return assignments


def _components_of[T: Hashable](graph: dict[T, list[T]]) -> list[list[T]]:
    assignments = _assign_roots(transpose(graph), _post_order(graph))

    clusters: dict[T, list[T]] = {}
    # Iterating in key order keeps members sorted by first appearance.
    for node in graph:
        clusters.setdefault(assignments[node], []).append(node)

    position = {node: i for i, node in enumerate(graph)}
    return sorted(clusters.values(), key=lambda members: position[members[0]])


def partition[T: Hashable](edges: Edges[T]) -> list[list[T]]:
    """Partition a graph into its strongly connected components.

    Two nodes share a component if and only if each can reach the other by
    following dependencies. Undeclared dependencies are added as nodes first.

    Members of a component, and the components themselves, are ordered by the
    first appearance of their nodes in the input.

    Args:
        edges: ``(node, dependencies)`` pairs, or a mapping of the same shape.

    Returns:
        The components. Every node belongs to exactly one of them.

    Example:
        >>> partition([(1, [2]), (2, [3, 4]), (3, [4]), (4, [2, 5])])
        [[1], [2, 3, 4], [5]]

    """
    components = _components_of(normalize(edges))
    logger.debug("Found %d strongly connected components", len(components))
    return components


def sort_components[T: Hashable](edges: Edges[T]) -> list[list[T]]:
    """Topologically sort a graph that may contain cycles.

    Each strongly connected component is treated as a single node. The result
    lists components so that a component comes after every component it
    depends on.

    Raises:
        InternalInvariantError: If the condensation of the graph cannot be
            sorted, which means the partitioning is inconsistent.

    Example:
        >>> sort_components([(1, [2]), (2, [3, 4]), (3, [4]), (4, [2, 5])])
        [[5], [2, 3, 4], [1]]

    """
    graph = normalize(edges)
    components = _components_of(graph)
    component_of = {node: i for i, members in enumerate(components) for node in members}

    condensation: dict[int, list[int]] = {i: [] for i in range(len(components))}
    for node, deps in graph.items():
        source = component_of[node]
        # Edges inside a component become self-loops; drop them.
        condensation[source].extend(component_of[dep] for dep in deps if component_of[dep] != source)

    result = sort(condensation)
    if not isinstance(result, Sorted):
        msg = (
            f"Sorting the condensation of {len(components)} strongly connected components failed with {result!r}. "
            "Please report this as a bug in depsort."
        )
        raise InternalInvariantError(msg)

    return [components[i] for i in result.order]


find_strongly_connected_components = partition
sort_strongly_connected_components = sort_components
