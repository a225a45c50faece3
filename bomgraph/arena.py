"""Index-based storage of BOM graph nodes and edges."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from decimal import Decimal

from .models import BomItem


@dataclass
class NodeCache:
    """Cached computation results kept on a node."""

    total_material_cost: Decimal | None = None
    explosion_quantity: Decimal | None = None
    level: int | None = None


@dataclass
class Node:
    """A component in the graph with its adjacent edge indices."""

    component_id: str
    incoming: list[int] = field(default_factory=list)
    outgoing: list[int] = field(default_factory=list)
    cache: NodeCache = field(default_factory=NodeCache)
    dirty: bool = True
    version: int = 0


@dataclass
class Edge:
    """A parent-child relationship between two node indices."""

    source: int
    target: int
    bom_item: BomItem
    effective_quantity: Decimal


class Arena:
    """Graph storage where nodes and edges are addressed by integer index."""

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._edges: list[Edge] = []
        self._index: dict[str, int] = {}

    def add_node(self, component_id: str) -> int:
        """Return the index of the component's node, creating it if needed."""
        existing = self._index.get(component_id)
        if existing is not None:
            return existing
        index = len(self._nodes)
        self._nodes.append(Node(component_id=component_id))
        self._index[component_id] = index
        return index

    def add_edge(self, parent: int, child: int, bom_item: BomItem) -> int:
        """Connect parent to child and mark the parent and its ancestors dirty."""
        if self.node(parent) is None or self.node(child) is None:
            raise IndexError(f"no such node: {parent if self.node(parent) is None else child}")
        index = len(self._edges)
        self._edges.append(
            Edge(
                source=parent,
                target=child,
                bom_item=bom_item,
                effective_quantity=bom_item.effective_quantity(),
            )
        )
        self._nodes[parent].outgoing.append(index)
        self._nodes[child].incoming.append(index)
        self.mark_dirty_recursive(parent)
        return index

    def node(self, index: int) -> Node | None:
        """Return the node at an index, or None."""
        if 0 <= index < len(self._nodes):
            return self._nodes[index]
        return None

    def edge(self, index: int) -> Edge | None:
        """Return the edge at an index, or None."""
        if 0 <= index < len(self._edges):
            return self._edges[index]
        return None

    def find_node(self, component_id: str) -> int | None:
        """Return the node index of a component, or None."""
        return self._index.get(component_id)

    def nodes(self) -> tuple[Node, ...]:
        """All nodes in index order."""
        return tuple(self._nodes)

    def edges(self) -> tuple[Edge, ...]:
        """All edges in index order."""
        return tuple(self._edges)

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def mark_dirty_recursive(self, node: int) -> None:
        """Mark a node and all its ancestors dirty, bumping their versions.

        Propagation stops at nodes that are already dirty.
        """
        pending = [node]
        while pending:
            current = self.node(pending.pop())
            if current is None or current.dirty:
                continue
            current.dirty = True
            current.version += 1
            pending.extend(
                reversed([self._edges[e].source for e in current.incoming])
            )

    def clear_dirty_flags(self) -> None:
        for node in self._nodes:
            node.dirty = False

    def children(self, node: int) -> Iterator[tuple[int, Edge]]:
        """Yield (child index, edge) for each outgoing edge."""
        current = self.node(node)
        if current is None:
            return
        for edge_index in current.outgoing:
            edge = self._edges[edge_index]
            yield edge.target, edge

    def parents(self, node: int) -> Iterator[tuple[int, Edge]]:
        """Yield (parent index, edge) for each incoming edge."""
        current = self.node(node)
        if current is None:
            return
        for edge_index in current.incoming:
            edge = self._edges[edge_index]
            yield edge.source, edge

    def has_path(self, source: int, target: int) -> bool:
        """Whether target can be reached from source along child edges."""
        visited: set[int] = set()
        stack = [source]
        while stack:
            current = stack.pop()
            if current == target:
                return True
            if current in visited:
                continue
            visited.add(current)
            stack.extend(child for child, _ in self.children(current) if child not in visited)
        return False