"""Cycle detection and validation for BOM graphs."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .arena import Arena
from .errors import CircularDependencyError


class CycleDetector:
    """Finds cycles in the child-edge structure of an arena."""

    def __init__(self, arena: Arena) -> None:
        self.arena = arena

    def _child_indices(self, node: int) -> Iterator[int]:
        return (child for child, _ in self.arena.children(node))

    def _iter_cycles(self) -> Iterator[list[int]]:
        visited: set[int] = set()
        on_stack: set[int] = set()
        path: list[int] = []

        for start in range(self.arena.node_count()):
            if start in visited:
                continue
            visited.add(start)
            on_stack.add(start)
            path.append(start)
            stack = [(start, self._child_indices(start))]
            while stack:
                node, children = stack[-1]
                for child in children:
                    if child not in visited:
                        visited.add(child)
                        on_stack.add(child)
                        path.append(child)
                        stack.append((child, self._child_indices(child)))
                        break
                    if child in on_stack:
                        yield path[path.index(child):]
                else:
                    stack.pop()
                    path.pop()
                    on_stack.discard(node)

    def has_cycle(self) -> bool:
        """Whether the graph contains any cycle."""
        return next(self._iter_cycles(), None) is not None

    def find_cycles(self) -> list[list[int]]:
        """Every cycle found by depth-first search, as lists of node indices."""
        return list(self._iter_cycles())

    def would_create_cycle(self, source: int, target: int) -> bool:
        """Whether adding an edge source -> target would close a cycle."""
        return self.arena.has_path(target, source)

    def describe_cycle(self, cycle: Sequence[int]) -> list[str]:
        """Component ids of the nodes in a cycle."""
        return [
            node.component_id
            for node in (self.arena.node(index) for index in cycle)
            if node is not None
        ]


def validate_graph(arena: Arena) -> None:
    """Raise CircularDependencyError if the arena contains any cycle."""
    detector = CycleDetector(arena)
    cycles = detector.find_cycles()
    if cycles:
        descriptions = "; ".join(
            " -> ".join(detector.describe_cycle(cycle)) for cycle in cycles
        )
        raise CircularDependencyError(f"Found {len(cycles)} cycle(s): {descriptions}")