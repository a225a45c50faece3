import pytest

from bomgraph.arena import Arena
from bomgraph.models import BomItem
from bomgraph.traversal import (
    TraversalOrder,
    find_all_paths,
    level_grouping,
    topological_sort,
    traverse,
)


def _item(parent, child):
    return BomItem(parent_id=parent, child_id=child, quantity=1, sequence=10)


@pytest.fixture
def diamond():
    arena = Arena()
    a = arena.add_node("A")
    b = arena.add_node("B")
    c = arena.add_node("C")
    d = arena.add_node("D")
    arena.add_edge(a, b, _item("A", "B"))
    arena.add_edge(a, c, _item("A", "C"))
    arena.add_edge(b, d, _item("B", "D"))
    arena.add_edge(c, d, _item("C", "D"))
    return arena, a, b, c, d


def test_topological_sort(diamond):
    arena, a, b, c, d = diamond
    topo = topological_sort(arena, [a])
    assert topo.index(d) < topo.index(b)
    assert topo.index(d) < topo.index(c)
    assert topo.index(b) < topo.index(a)
    assert topo.index(c) < topo.index(a)
    assert sorted(topo) == sorted([a, b, c, d])


def test_topological_sort_only_reachable(diamond):
    arena, a, b, c, d = diamond
    topo = topological_sort(arena, [b])
    assert topo == [d, b]


def test_level_grouping(diamond):
    arena, a, b, c, d = diamond
    levels = level_grouping(arena, [a])
    assert len(levels) == 3
    assert d in levels[0]
    assert b in levels[1]
    assert c in levels[1]
    assert a in levels[2]


def test_level_grouping_without_roots():
    arena = Arena()
    arena.add_node("A")
    assert level_grouping(arena, []) == [[]]


def test_find_all_paths(diamond):
    arena, a, b, c, d = diamond
    paths = find_all_paths(arena, a, d)
    assert len(paths) == 2
    assert any(len(p) == 3 and p[1] == b for p in paths)
    assert any(len(p) == 3 and p[1] == c for p in paths)
    assert all(p[0] == a and p[-1] == d for p in paths)


def test_find_all_paths_none(diamond):
    arena, a, b, c, d = diamond
    assert find_all_paths(arena, d, a) == []
    assert find_all_paths(arena, b, c) == []


def test_depth_first_order(diamond):
    arena, a, b, c, d = diamond
    assert list(traverse(arena, [a], TraversalOrder.DEPTH_FIRST)) == [a, c, d, b]


def test_breadth_first_order(diamond):
    arena, a, b, c, d = diamond
    assert list(traverse(arena, [a], TraversalOrder.BREADTH_FIRST)) == [a, b, c, d]


def test_topological_traversals(diamond):
    arena, a, b, c, d = diamond
    bottom_up = list(traverse(arena, [a], TraversalOrder.TOPOLOGICAL_BOTTOM_UP))
    top_down = list(traverse(arena, [a], TraversalOrder.TOPOLOGICAL_TOP_DOWN))
    assert bottom_up[0] == d
    assert bottom_up[-1] == a
    assert top_down == list(reversed(bottom_up))


def test_traversal_visits_each_node_once(diamond):
    arena, a, b, c, d = diamond
    for order in TraversalOrder:
        visited = list(traverse(arena, [a, b], order))
        assert sorted(visited) == sorted([a, b, c, d])