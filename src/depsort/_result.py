"""Result types returned by the sorting functions."""

from collections.abc import Hashable
from dataclasses import dataclass, field

from ._str_enum_with_doc import StrEnumWithDoc


class MissingPolicy(StrEnumWithDoc):
    """How ``sort`` reports dependencies that are never declared as nodes."""

    STRICT = (
        "strict",
        "Materialize missing nodes, but if sorting stalls report the missing references "
        "instead of the cycle.",
    )
    PERMISSIVE = (
        "permissive",
        "Materialize missing nodes silently; a stalled sort is always reported as a cycle.",
    )


@dataclass(frozen=True, slots=True)
class Sorted[T: Hashable]:
    """A complete dependency order: every dependency precedes its dependents."""

    order: list[T] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ErrorNonexistent[T: Hashable]:
    """Sorting stalled and the input references undeclared nodes.

    Attributes:
        missing: ``(node, missing_dependencies)`` pairs in input order.

    """

    missing: list[tuple[T, list[T]]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class ErrorCycle[T: Hashable]:
    """Sorting stalled on a cycle.

    Attributes:
        residue: Nodes left unordered, in graph key order. Includes the nodes on
            cycles and every node that depends on one of them.

    """

    residue: list[T] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return False


type SortResult[T: Hashable] = Sorted[T] | ErrorNonexistent[T] | ErrorCycle[T]
