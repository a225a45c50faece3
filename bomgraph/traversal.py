"""Traversal orders, topological sorting and path search over an arena."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from enum import Enum

from .arena import Arena


class TraversalOrder(Enum):
    """Order in which graph nodes are visited."""

    DEPTH_FIRST = "depth_first"
    BREADTH_FIRST = "breadth_first"
    TOPOLOGICAL_BOTTOM_UP = "topological_bottom_up"
    TOPOLOGICAL_TOP_DOWN = "topological_top_down"


def _children(arena: Arena, node: int) -> Iterator[int]:
    return (child for child, _ in arena.children(node))


def _depth_first(arena: Arena, roots: list[int]) -> Iterator[int]:
    visited: set[int] = set()
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        stack.extend(child for child in _children(arena, node) if child not in visited)
        yield node


def _breadth_first(arena: Arena, roots: list[int]) -> Iterator[int]:
    visited: set[int] = set()
    queue = deque(roots)
    while queue:
        node = queue.popleft()
        if node in visited:
            continue
        visited.add(node)
        queue.extend(child for child in _children(arena, node) if child not in visited)
        yield node


def _unique(nodes: Iterable[int]) -> Iterator[int]:
    seen: set[int] = set()
    for node in nodes:
        if node not in seen:
            seen.add(node)
            yield node


def traverse(
    arena: Arena, roots: Iterable[int], order: TraversalOrder = TraversalOrder.DEPTH_FIRST
) -> Iterator[int]:
    """Yield each node reachable from the roots once, in the requested order."""
    roots = list(roots)
    if order is TraversalOrder.DEPTH_FIRST:
        return _depth_first(arena, roots)
    if order is TraversalOrder.BREADTH_FIRST:
        return _breadth_first(arena, roots)
    topo = topological_sort(arena, roots)
    if order is TraversalOrder.TOPOLOGICAL_BOTTOM_UP:
        return _unique(topo)
    return _unique(reversed(topo))


def _reachable(arena: Arena, roots: Iterable[int]) -> list[int]:
    """Nodes reachable from the roots, in discovery order."""
    seen: set[int] = set()
    order: list[int] = []
    stack = list(roots)
    while stack:
        node = stack.pop()
        if node in seen or arena.node(node) is None:
            continue
        seen.add(node)
        order.append(node)
        stack.extend(child for child in _children(arena, node) if child not in seen)
    return order


def topological_sort(arena: Arena, roots: Iterable[int]) -> list[int]:
    """Nodes reachable from the roots, leaves first (Kahn's algorithm).

    Nodes that lie on a cycle are left out.
    """
    reachable = _reachable(arena, roots)
    members = set(reachable)

    in_degree: dict[int, int] = {}
    queue: deque[int] = deque()
    for index in reachable:
        degree = sum(1 for parent, _ in arena.parents(index) if parent in members)
        in_degree[index] = degree
        if degree == 0:
            queue.append(index)

    result: list[int] = []
    while queue:
        node = queue.popleft()
        result.append(node)
        for child in _children(arena, node):
            if child not in in_degree:
                continue
            in_degree[child] -= 1
            if in_degree[child] == 0:
                queue.append(child)

    result.reverse()
    return result


def level_grouping(arena: Arena, roots: Iterable[int]) -> list[list[int]]:
    """Group reachable nodes by level: 0 for leaves, rising towards the roots."""
    levels: dict[int, int] = {}
    for node in topological_sort(arena, roots):
        child_levels = [levels[child] for child in _children(arena, node) if child in levels]
        levels[node] = max(child_levels) + 1 if child_levels else 0

    max_level = max(levels.values(), default=0)
    groups: list[list[int]] = [[] for _ in range(max_level + 1)]
    for node, level in levels.items():
        groups[level].append(node)
    return groups


def find_all_paths(arena: Arena, source: int, target: int) -> list[list[int]]:
    """Every simple path from source to target along child edges."""
    paths: list[list[int]] = []
    path = [source]
    on_path = {source}
    stack: list[Iterator[int]] = []

    if source == target:
        return [[source]]
    stack.append(_children(arena, source))

    while stack:
        for child in stack[-1]:
            if child in on_path:
                continue
            if child == target:
                paths.append(path + [child])
                continue
            path.append(child)
            on_path.add(child)
            stack.append(_children(arena, child))
            break
        else:
            stack.pop()
            on_path.discard(path.pop())
    return paths