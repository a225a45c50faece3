"""Data access for BOM structures and an in-memory implementation."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime, timezone

from .errors import BomNotFoundError, ComponentNotFoundError
from .models import BomHeader, BomItem, Component


class BomRepository(ABC):
    """Source of components and BOM structures."""

    @abstractmethod
    def get_component(self, component_id: str) -> Component:
        """Return the component with the given id."""

    @abstractmethod
    def get_components(self, component_ids: Iterable[str]) -> list[Component]:
        """Return the components with the given ids, in order."""

    @abstractmethod
    def get_bom_header(
        self,
        component_id: str,
        alternative: str | None = None,
        effective_date: datetime | None = None,
    ) -> BomHeader:
        """Return the BOM header for a component."""

    @abstractmethod
    def get_bom_items(
        self, component_id: str, effective_date: datetime | None = None
    ) -> list[BomItem]:
        """Return the direct children of a component."""

    @abstractmethod
    def get_all_bom_items(self) -> list[BomItem]:
        """Return every parent-child relationship."""

    @abstractmethod
    def find_parents(self, component_id: str) -> list[BomItem]:
        """Return every item that has the component as child."""


def _within(moment: datetime, start: datetime | None, end: datetime | None) -> bool:
    return (start is None or moment >= start) and (end is None or moment <= end)


def _moment(effective_date: datetime | None) -> datetime:
    if effective_date is None:
        return datetime.now(timezone.utc)
    if effective_date.tzinfo is None:
        return effective_date.replace(tzinfo=timezone.utc)
    return effective_date


class InMemoryRepository(BomRepository):
    """Thread-safe repository that keeps everything in memory."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._components: dict[str, Component] = {}
        self._headers: defaultdict[str, list[BomHeader]] = defaultdict(list)
        self._items: list[BomItem] = []

    def add_component(self, component: Component) -> None:
        """Store a component, replacing any with the same id."""
        with self._lock:
            self._components[component.id] = component

    def add_bom_header(self, header: BomHeader) -> None:
        """Store a BOM header for its component."""
        with self._lock:
            self._headers[header.component_id].append(header)

    def add_bom_item(self, item: BomItem) -> None:
        """Store a parent-child relationship."""
        with self._lock:
            self._items.append(item)

    def get_component(self, component_id: str) -> Component:
        with self._lock:
            try:
                return self._components[component_id]
            except KeyError:
                raise ComponentNotFoundError(component_id) from None

    def get_components(self, component_ids: Iterable[str]) -> list[Component]:
        with self._lock:
            return [self.get_component(cid) for cid in component_ids]

    def get_bom_header(
        self,
        component_id: str,
        alternative: str | None = None,
        effective_date: datetime | None = None,
    ) -> BomHeader:
        moment = _moment(effective_date)
        with self._lock:
            headers = self._headers.get(component_id)
            if not headers:
                raise BomNotFoundError(component_id)
            for header in headers:
                if header.alternative == alternative and _within(
                    moment, header.effective_from, header.effective_to
                ):
                    return header
        raise BomNotFoundError(component_id)

    def get_bom_items(
        self, component_id: str, effective_date: datetime | None = None
    ) -> list[BomItem]:
        moment = _moment(effective_date)
        with self._lock:
            return [
                item
                for item in self._items
                if item.parent_id == component_id and item.is_effective_at(moment)
            ]

    def get_all_bom_items(self) -> list[BomItem]:
        with self._lock:
            return list(self._items)

    def find_parents(self, component_id: str) -> list[BomItem]:
        with self._lock:
            return [item for item in self._items if item.child_id == component_id]