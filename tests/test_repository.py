from datetime import datetime, timedelta, timezone

import pytest

from bomgraph.errors import BomNotFoundError, ComponentNotFoundError
from bomgraph.models import (
    BomHeader,
    BomItem,
    BomStatus,
    BomUsage,
    Component,
    ComponentType,
    ProcurementType,
)
from bomgraph.repository import InMemoryRepository


def _component(cid):
    return Component(
        id=cid,
        description=f"Component {cid}",
        component_type=ComponentType.FINISHED_PRODUCT,
        uom="EA",
        procurement_type=ProcurementType.MAKE,
        organization="ORG01",
    )


def _header(cid, alternative=None, start=None, end=None, bom_id=None):
    return BomHeader(
        id=bom_id or f"BOM-{cid}",
        component_id=cid,
        usage=BomUsage.PRODUCTION,
        status=BomStatus.RELEASED,
        organization="ORG01",
        alternative=alternative,
        effective_from=start,
        effective_to=end,
    )


def _dt(year):
    return datetime(year, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def repo():
    r = InMemoryRepository()
    for cid in "ABCD":
        r.add_component(_component(cid))
    r.add_bom_item(BomItem("A", "B", 2))
    r.add_bom_item(BomItem("A", "C", 1))
    r.add_bom_item(BomItem("B", "D", 2))
    r.add_bom_item(BomItem("C", "D", 3))
    return r


def test_get_component(repo):
    assert repo.get_component("B").description == "Component B"


def test_get_component_missing(repo):
    with pytest.raises(ComponentNotFoundError) as info:
        repo.get_component("Z")
    assert info.value.detail == "Z"


def test_get_components_keeps_order(repo):
    assert [c.id for c in repo.get_components(["D", "A", "C"])] == ["D", "A", "C"]


def test_get_components_fails_on_any_missing(repo):
    with pytest.raises(ComponentNotFoundError):
        repo.get_components(["A", "Q"])


def test_add_component_replaces_same_id(repo):
    replacement = _component("A")
    replacement.description = "Replaced"
    repo.add_component(replacement)
    assert repo.get_component("A").description == "Replaced"


def test_get_bom_items_filters_by_parent(repo):
    assert sorted(i.child_id for i in repo.get_bom_items("A")) == ["B", "C"]
    assert repo.get_bom_items("D") == []


def test_get_bom_items_respects_effectivity(repo):
    repo.add_bom_item(BomItem("A", "OLD", 1, effective_to=_dt(2000)))
    repo.add_bom_item(BomItem("A", "NEW", 1, effective_from=_dt(2030)))
    now_children = {i.child_id for i in repo.get_bom_items("A")}
    assert "OLD" not in now_children
    assert "NEW" not in now_children
    assert "OLD" in {i.child_id for i in repo.get_bom_items("A", _dt(1999))}
    assert "NEW" in {i.child_id for i in repo.get_bom_items("A", _dt(2031))}


def test_get_all_bom_items(repo):
    assert len(repo.get_all_bom_items()) == 4


def test_find_parents(repo):
    assert sorted(i.parent_id for i in repo.find_parents("D")) == ["B", "C"]
    assert repo.find_parents("A") == []


def test_get_bom_header_default_alternative(repo):
    repo.add_bom_header(_header("A", alternative="02", bom_id="ALT"))
    repo.add_bom_header(_header("A", bom_id="MAIN"))
    assert repo.get_bom_header("A").id == "MAIN"
    assert repo.get_bom_header("A", "02").id == "ALT"


def test_get_bom_header_effectivity(repo):
    repo.add_bom_header(_header("A", start=_dt(2000), end=_dt(2010), bom_id="OLD"))
    repo.add_bom_header(_header("A", start=_dt(2011), bom_id="CUR"))
    assert repo.get_bom_header("A", None, _dt(2005)).id == "OLD"
    assert repo.get_bom_header("A", None, _dt(2011)).id == "CUR"
    with pytest.raises(BomNotFoundError):
        repo.get_bom_header("A", None, _dt(1990))


def test_get_bom_header_unknown_component(repo):
    with pytest.raises(BomNotFoundError) as info:
        repo.get_bom_header("A")
    assert info.value.detail == "A"


def test_get_bom_header_unknown_alternative(repo):
    repo.add_bom_header(_header("A"))
    with pytest.raises(BomNotFoundError):
        repo.get_bom_header("A", "99")


def test_default_date_is_now(repo):
    soon = datetime.now(timezone.utc) + timedelta(days=1)
    repo.add_bom_item(BomItem("B", "LATER", 1, effective_from=soon))
    assert [i.child_id for i in repo.get_bom_items("B")] == ["D"]