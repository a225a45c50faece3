"""The BOM graph: building from repositories, validation and statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .arena import Arena, NodeCache
from .errors import CircularDependencyError, ComponentNotFoundError
from .models import BomItem
from .repository import BomRepository


@dataclass(frozen=True)
class GraphStats:
    """Size and shape of a BOM graph."""

    node_count: int
    edge_count: int
    root_count: int
    max_depth: int


class BomGraph:
    """Acyclic graph of components connected by BOM items."""

    def __init__(self) -> None:
        self._arena = Arena()
        self._roots: list[int] = []

    @classmethod
    def from_repository(cls, repo: BomRepository) -> BomGraph:
        """Build a graph from every BOM item in the repository."""
        graph = cls()
        for item in repo.get_all_bom_items():
            graph.add_bom_item(item)
        graph._identify_roots()
        return graph

    @classmethod
    def from_component(
        cls,
        repo: BomRepository,
        component_id: str,
        effective_date: datetime | None = None,
    ) -> BomGraph:
        """Build a graph holding only the BOM tree below one component."""
        graph = cls()
        graph._arena.add_node(component_id)
        pending = [component_id]
        while pending:
            parent = pending.pop()
            for item in repo.get_bom_items(parent, effective_date):
                is_new = graph._arena.find_node(item.child_id) is None
                graph.add_bom_item(item)
                if is_new:
                    pending.append(item.child_id)
        graph._identify_roots()
        return graph

    def add_bom_item(self, item: BomItem) -> int:
        """Add an item as an edge and return the parent's node index.

        Raises CircularDependencyError if the item references itself or
        would close a cycle.
        """
        parent = self._arena.add_node(item.parent_id)
        child = self._arena.add_node(item.child_id)
        if parent == child:
            raise CircularDependencyError(f"Self-reference detected: {item.parent_id}")
        if self._arena.has_path(child, parent):
            raise CircularDependencyError(
                f"Circular dependency: {item.parent_id} -> {item.child_id} would create a cycle"
            )
        self._arena.add_edge(parent, child, item)
        return parent

    def _identify_roots(self) -> None:
        self._roots = [
            index for index, node in enumerate(self._arena.nodes()) if not node.incoming
        ]

    def arena(self) -> Arena:
        """The underlying node and edge storage."""
        return self._arena

    def roots(self) -> tuple[int, ...]:
        """Node indices without parents, as of the last build."""
        return tuple(self._roots)

    def find_node(self, component_id: str) -> int | None:
        """Node index of a component, or None."""
        return self._arena.find_node(component_id)

    def stats(self) -> GraphStats:
        """Counts of nodes, edges and roots and the maximum depth."""
        return GraphStats(
            node_count=self._arena.node_count(),
            edge_count=self._arena.edge_count(),
            root_count=len(self._roots),
            max_depth=max((self._depth(root) for root in self._roots), default=0),
        )

    def _depth(self, root: int) -> int:
        """Longest number of edges from root down to a leaf."""
        memo: dict[int, int] = {}
        stack = [root]
        while stack:
            node = stack[-1]
            if node in memo:
                stack.pop()
                continue
            children = [child for child, _ in self._arena.children(node)]
            missing = [child for child in children if child not in memo]
            if missing:
                stack.extend(missing)
                continue
            stack.pop()
            memo[node] = max((memo[child] + 1 for child in children), default=0)
        return memo[root]

    def clear_cache(self) -> None:
        """Reset the cached computation results on every node."""
        for node in self._arena.nodes():
            node.cache = NodeCache()

    def mark_dirty(self, component_id: str) -> None:
        """Mark a component and its ancestors for recomputation."""
        node = self.find_node(component_id)
        if node is None:
            raise ComponentNotFoundError(component_id)
        self._arena.mark_dirty_recursive(node)