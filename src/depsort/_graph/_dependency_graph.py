"""Generic dependency graph abstraction."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field

from depsort._errors import CycleError, NodeNotFoundError
from depsort._result import ErrorCycle, MissingPolicy, Sorted, SortResult

from ._closure import closure
from ._components import partition, sort_components, transpose
from ._kahn import sort, stalled_result
from ._normalize import Edges, find_nonexistent, iter_pairs, normalize


@dataclass(frozen=True, slots=True)
class DependencyGraph[T: Hashable]:
    """A directed graph of "depends on" relationships.

    This is an immutable wrapper around a normalized adjacency mapping, generic
    over the node type T (e.g., str, int, tuple). Every node that is referenced
    anywhere is a node of the graph.

    - dependencies(b) = [a] means "b depends on a", so a is ordered first
    - dependents(a) = [b] means "a is depended on by b"

    Attributes:
        _dependencies: Normalized mapping from node to its direct dependencies.
        _missing: Dependencies that were referenced but never declared, per node.

    """

    _dependencies: dict[T, list[T]] = field(default_factory=dict)
    _missing: list[tuple[T, list[T]]] = field(default_factory=list)

    @classmethod
    def from_pairs(cls, edges: Edges[T]) -> DependencyGraph[T]:
        """Build a graph from ``(node, dependencies)`` pairs.

        Args:
            edges: Pairs, or a mapping of the same shape. Repeated nodes are merged.

        Returns:
            A new DependencyGraph instance.

        Example:
            >>> graph = DependencyGraph.from_pairs([("b", ["a"]), ("c", ["b"])])
            >>> graph.dependencies("b")
            ('a',)
            >>> graph.nodes
            ('b', 'c', 'a')

        """
        pairs = iter_pairs(edges)
        return cls(_dependencies=normalize(pairs), _missing=find_nonexistent(pairs))

    @property
    def nodes(self) -> tuple[T, ...]:
        """All nodes in the graph, in order of first appearance."""
        return tuple(self._dependencies)

    @property
    def missing(self) -> list[tuple[T, list[T]]]:
        """Dependencies that were referenced but never declared as nodes."""
        return [(node, list(deps)) for node, deps in self._missing]

    def _require(self, node: T) -> list[T]:
        try:
            return self._dependencies[node]
        except KeyError:
            raise NodeNotFoundError(node) from None

    def dependencies(self, node: T) -> tuple[T, ...]:
        """Get direct dependencies of a node (nodes it depends on).

        Raises:
            NodeNotFoundError: If the node is not in the graph.

        """
        return tuple(self._require(node))

    def dependents(self, node: T) -> tuple[T, ...]:
        """Get direct dependents of a node (nodes that depend on it).

        Raises:
            NodeNotFoundError: If the node is not in the graph.

        """
        self._require(node)
        return tuple(n for n, deps in self._dependencies.items() if node in deps)

    def roots(self) -> tuple[T, ...]:
        """Get nodes with no dependencies."""
        return tuple(n for n, deps in self._dependencies.items() if not deps)

    def leaves(self) -> tuple[T, ...]:
        """Get nodes that nothing depends on."""
        depended_on = {dep for deps in self._dependencies.values() for dep in deps}
        return tuple(n for n in self._dependencies if n not in depended_on)

    def closure(self, node: T) -> list[T]:
        """Get all transitive dependencies of a node, in discovery order."""
        return closure(self._dependencies, node)

    def dependents_closure(self, node: T) -> list[T]:
        """Get all nodes that transitively depend on a node."""
        return closure(transpose(self._dependencies), node)

    def sort(self, policy: MissingPolicy = MissingPolicy.STRICT) -> SortResult[T]:
        """Sort the graph, dependencies first.

        The missing-node policy is applied to the references recorded when the
        graph was built, not to the normalized mapping.
        """
        result = sort(self._dependencies, policy=policy)
        if isinstance(result, ErrorCycle):
            return stalled_result(result.residue, self.missing, policy)
        return result

    def topological_order(self) -> list[T]:
        """Return nodes in topological order (dependencies before dependents).

        Raises:
            CycleError: If the graph contains a cycle.

        """
        result = sort(self._dependencies, policy=MissingPolicy.PERMISSIVE)
        if isinstance(result, Sorted):
            return result.order
        raise CycleError(result.residue if isinstance(result, ErrorCycle) else [])

    def has_cycle(self) -> bool:
        """Check if the graph contains a cycle."""
        return not sort(self._dependencies).success

    def components(self) -> list[list[T]]:
        """Strongly connected components, in order of first appearance."""
        return partition(self._dependencies)

    def sorted_components(self) -> list[list[T]]:
        """Strongly connected components, dependencies first."""
        return sort_components(self._dependencies)

    def transpose(self) -> DependencyGraph[T]:
        """Return the graph with every edge reversed."""
        return DependencyGraph(_dependencies=transpose(self._dependencies))

    def subgraph(self, nodes: frozenset[T] | set[T]) -> DependencyGraph[T]:
        """Create a subgraph containing only the specified nodes.

        Edges are kept only if both endpoints are in the node set. Node order
        is preserved.
        """
        return DependencyGraph(
            _dependencies={
                n: [dep for dep in deps if dep in nodes] for n, deps in self._dependencies.items() if n in nodes
            },
        )

    def validate(self) -> list[str]:
        """Validate the graph and return a list of error messages.

        Checks for:
        - Dependencies that were never declared as nodes
        - Cycles in the graph

        Returns:
            List of error messages. Empty list if graph is valid.

        """
        errors = [f"Node {node!r} has missing dependencies: {deps!r}" for node, deps in self._missing]

        result = sort(self._dependencies)
        if isinstance(result, ErrorCycle):
            cyclic = [members for members in self.components() if _is_cyclic(members, self._dependencies)]
            errors.extend(f"Graph contains a cycle: {members!r}" for members in cyclic)

        return errors

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._dependencies)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._dependencies

    def __iter__(self) -> Iterator[T]:
        return iter(self._dependencies)


def _is_cyclic[T: Hashable](members: list[T], graph: dict[T, list[T]]) -> bool:
    """A component is cyclic if it has several members or a self-dependency."""
    return len(members) > 1 or members[0] in graph[members[0]]
