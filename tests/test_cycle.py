from decimal import Decimal

import pytest

from bomgraph.arena import Arena
from bomgraph.cycle import CycleDetector, validate_graph
from bomgraph.errors import CircularDependencyError
from bomgraph.models import BomItem


def make_item(parent, child):
    return BomItem(parent_id=parent, child_id=child, quantity=Decimal(1), sequence=10)


def build(names, links):
    arena = Arena()
    index = {name: arena.add_node(name) for name in names}
    for parent, child in links:
        arena.add_edge(index[parent], index[child], make_item(parent, child))
    return arena, index


def test_no_cycle():
    arena, _ = build("ABC", [("A", "B"), ("B", "C")])
    detector = CycleDetector(arena)
    assert detector.has_cycle() is False
    assert detector.find_cycles() == []
    assert validate_graph(arena) is None


def test_simple_cycle():
    arena, idx = build("AB", [("A", "B"), ("B", "A")])
    detector = CycleDetector(arena)
    assert detector.has_cycle() is True
    cycles = detector.find_cycles()
    assert cycles == [[idx["A"], idx["B"]]]
    assert detector.describe_cycle(cycles[0]) == ["A", "B"]


def test_complex_cycle():
    arena, idx = build(
        "ABCD", [("A", "B"), ("B", "C"), ("C", "D"), ("D", "B")]
    )
    detector = CycleDetector(arena)
    assert detector.has_cycle() is True
    cycles = detector.find_cycles()
    assert len(cycles) == 1
    assert detector.describe_cycle(cycles[0]) == ["B", "C", "D"]


def test_would_create_cycle():
    arena, idx = build("ABC", [("A", "B"), ("B", "C")])
    detector = CycleDetector(arena)
    assert detector.would_create_cycle(idx["C"], idx["A"]) is True
    assert detector.would_create_cycle(idx["C"], idx["B"]) is True
    assert detector.would_create_cycle(idx["A"], idx["C"]) is False


def test_describe_cycle_skips_unknown_indices():
    arena, idx = build("AB", [("A", "B")])
    detector = CycleDetector(arena)
    assert detector.describe_cycle([idx["B"], 42, idx["A"]]) == ["B", "A"]


def test_validate_graph_reports_cycles():
    arena, _ = build("AB", [("A", "B"), ("B", "A")])
    with pytest.raises(CircularDependencyError) as info:
        validate_graph(arena)
    assert str(info.value) == (
        "Circular dependency detected in BOM: Found 1 cycle(s): A -> B"
    )


def test_validate_graph_reports_every_cycle():
    arena, _ = build(
        "ABCD", [("A", "B"), ("B", "A"), ("C", "D"), ("D", "C")]
    )
    with pytest.raises(CircularDependencyError) as info:
        validate_graph(arena)
    assert info.value.detail == "Found 2 cycle(s): A -> B; C -> D"


def test_long_chain_does_not_hit_recursion_limit():
    names = [f"N{i}" for i in range(3000)]
    links = list(zip(names, names[1:]))
    arena, _ = build(names, links)
    assert CycleDetector(arena).has_cycle() is False
    arena.add_edge(arena.find_node(names[-1]), arena.find_node(names[0]), make_item(names[-1], names[0]))
    cycles = CycleDetector(arena).find_cycles()
    assert len(cycles) == 1
    assert len(cycles[0]) == 3000