# bomgraph

Bill-of-materials (BOM) modelling for manufacturing data: components, BOM
headers and parent/child items, a thread-safe in-memory repository, and a
graph that rejects circular structures and supports traversal, topological
ordering, level grouping and path finding. It has no dependencies beyond the
standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Data model

`bomgraph.models` holds the records, all dataclasses:

- `Component`: an item with a `ComponentType`, a `ProcurementType`, unit of
  measure, organization, optional standard cost and lead time.
- `BomItem`: one parent/child link with quantity, scrap factor, phantom flag,
  optional effectivity dates and alternative-group fields. An `id` (UUID) is
  generated when none is given. `effective_quantity()` returns
  `quantity * (1 + scrap_factor)`; `is_effective_at(date)` checks the date
  range, both ends inclusive.
- `BomHeader`: a BOM for a component, with `BomUsage`, `BomStatus`, base
  quantity (default 1) and an optional alternative.
- `CostBreakdown` (with `sum()` of its four cost elements),
  `ExplosionResult`/`ExplosionItem` and `WhereUsedResult`/`WhereUsedItem`:
  result records.

`Component`, `BomItem` and `BomHeader` convert to and from plain
dictionaries with `to_dict()` and `from_dict(data)`. Quantities and costs
are `decimal.Decimal` and are written as strings; timestamps are UTC and
written in ISO 8601 with a `Z` suffix. Bad input to `from_dict` raises
`SerializationError`.

## Errors

`bomgraph.errors` defines `BomError` and its subclasses, among them
`CircularDependencyError`, `ComponentNotFoundError`, `BomNotFoundError`,
`SerializationError`, `VersionConflictError` and
`InvalidEffectivityRangeError`.

## Repository

`bomgraph.repository.BomRepository` is the abstract data-access interface;
`InMemoryRepository` implements it:

```python
from decimal import Decimal
from bomgraph.repository import InMemoryRepository
from bomgraph.models import BomItem

repo = InMemoryRepository()
repo.add_bom_item(BomItem(parent_id="A", child_id="B", quantity=Decimal(2)))
repo.add_bom_item(BomItem(parent_id="A", child_id="C", quantity=Decimal(1)))

repo.get_bom_items("A", None)   # children of A effective now
repo.find_parents("B")          # items where B is the child
repo.get_all_bom_items()
```

`get_component` and `get_components` raise `ComponentNotFoundError` for an
unknown id. `get_bom_header(component_id, alternative, effective_date)`
returns the first header whose alternative matches and whose effectivity
range contains the date (now, when none is given), and raises
`BomNotFoundError` otherwise.

## Graph

```python
from bomgraph.graph import BomGraph

graph = BomGraph.from_repository(repo)
stats = graph.stats()
print(stats.node_count, stats.edge_count, stats.root_count, stats.max_depth)
```

`BomGraph.from_component(repo, component_id, effective_date)` loads only the
tree below one component. `add_bom_item` raises `CircularDependencyError`
when a link refers to itself or would close a cycle. `roots()` gives the
nodes without parents, `find_node(component_id)` a node index,
`mark_dirty(component_id)` marks a component and its ancestors for
recomputation, and `clear_cache()` resets every node's `NodeCache`.

The lower-level `bomgraph.arena.Arena` stores `Node` and `Edge` records by
integer index, with `children(node)`, `parents(node)` and
`has_path(source, target)`. `bomgraph.cycle.CycleDetector` finds cycles in
an arena (`has_cycle`, `find_cycles`, `would_create_cycle`,
`describe_cycle`), and `validate_graph(arena)` raises
`CircularDependencyError` listing them.

## Traversal

`bomgraph.traversal` works on an arena and an iterable of root indices:

- `traverse(arena, roots, order)` yields each reachable node once in a
  `TraversalOrder`: depth-first (the default), breadth-first, or
  topological bottom-up / top-down.
- `topological_sort(arena, roots)` returns reachable nodes, leaves first;
  nodes on a cycle are left out.
- `level_grouping(arena, roots)` groups nodes by level, leaves at level 0.
- `find_all_paths(arena, source, target)` lists every simple path.

## What it does not do

The package stores and walks BOM structures but does not compute material
explosions, roll up costs or answer where-used queries: `ExplosionResult`,
`CostBreakdown` and `WhereUsedResult` are records only, with nothing here
that fills them. There is no command-line program and no persistent
storage; data lives only in an `InMemoryRepository` or in a
`BomRepository` you implement.