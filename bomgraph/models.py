"""Data model for components, BOM structures and calculation results."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from .errors import SerializationError

_FRACTION = re.compile(r"\.(\d+)")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"not a decimal: {value!r}")
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str):
        raise TypeError(f"not a timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return _as_utc(datetime.fromisoformat(text))


def _format_datetime(value: datetime) -> str:
    return _as_utc(value).isoformat().replace("+00:00", "Z")


def _optional(value: Any, convert):
    return None if value is None else convert(value)


_PARSE_ERRORS = (KeyError, ValueError, TypeError, InvalidOperation)


class ComponentType(Enum):
    """Kind of material."""

    FINISHED_PRODUCT = "FinishedProduct"
    SEMI_FINISHED = "SemiFinished"
    RAW_MATERIAL = "RawMaterial"
    PACKAGING = "Packaging"
    SERVICE = "Service"


class ProcurementType(Enum):
    """Whether a component is made, bought or either."""

    MAKE = "Make"
    BUY = "Buy"
    BOTH = "Both"


class BomUsage(Enum):
    """Purpose a BOM is maintained for."""

    PRODUCTION = "Production"
    ENGINEERING = "Engineering"
    COSTING = "Costing"
    MAINTENANCE = "Maintenance"
    SALES = "Sales"


class BomStatus(Enum):
    """Lifecycle status of a BOM."""

    DRAFT = "Draft"
    RELEASED = "Released"
    FROZEN = "Frozen"
    OBSOLETE = "Obsolete"


@dataclass
class Component:
    """Master data of a material or item."""

    id: str
    description: str
    component_type: ComponentType
    uom: str
    procurement_type: ProcurementType
    organization: str
    standard_cost: Decimal | None = None
    lead_time_days: int | None = None
    version: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        self.standard_cost = _optional(self.standard_cost, _as_decimal)
        self.created_at = _as_utc(self.created_at)
        self.updated_at = _as_utc(self.updated_at)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping."""
        return {
            "id": self.id,
            "description": self.description,
            "component_type": self.component_type.value,
            "uom": self.uom,
            "standard_cost": _optional(self.standard_cost, str),
            "lead_time_days": self.lead_time_days,
            "procurement_type": self.procurement_type.value,
            "organization": self.organization,
            "version": self.version,
            "created_at": _format_datetime(self.created_at),
            "updated_at": _format_datetime(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Component:
        """Build a component from a mapping as produced by to_dict."""
        try:
            return cls(
                id=str(data["id"]),
                description=data["description"],
                component_type=ComponentType(data["component_type"]),
                uom=data["uom"],
                standard_cost=_optional(data.get("standard_cost"), _as_decimal),
                lead_time_days=_optional(data.get("lead_time_days"), int),
                procurement_type=ProcurementType(data["procurement_type"]),
                organization=data["organization"],
                version=int(data["version"]),
                created_at=_parse_datetime(data["created_at"]),
                updated_at=_parse_datetime(data["updated_at"]),
            )
        except _PARSE_ERRORS as exc:
            raise SerializationError(f"invalid component: {exc}") from exc


@dataclass
class BomItem:
    """A parent-child relationship with its quantity and attributes."""

    parent_id: str
    child_id: str
    quantity: Decimal
    scrap_factor: Decimal = Decimal(0)
    sequence: int = 0
    operation_sequence: str | None = None
    is_phantom: bool = False
    effective_from: datetime | None = None
    effective_to: datetime | None = None
    alternative_group: str | None = None
    alternative_priority: int | None = None
    reference_designator: str | None = None
    position: str | None = None
    notes: str | None = None
    version: int = 0
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        self.quantity = _as_decimal(self.quantity)
        self.scrap_factor = _as_decimal(self.scrap_factor)
        self.effective_from = _optional(self.effective_from, _as_utc)
        self.effective_to = _optional(self.effective_to, _as_utc)

    def effective_quantity(self) -> Decimal:
        """Quantity including scrap."""
        return self.quantity * (Decimal(1) + self.scrap_factor)

    def is_effective_at(self, date: datetime) -> bool:
        """Whether the item is valid at the given moment (bounds inclusive)."""
        date = _as_utc(date)
        after_start = self.effective_from is None or date >= self.effective_from
        before_end = self.effective_to is None or date <= self.effective_to
        return after_start and before_end

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping."""
        return {
            "id": str(self.id),
            "parent_id": self.parent_id,
            "child_id": self.child_id,
            "quantity": str(self.quantity),
            "scrap_factor": str(self.scrap_factor),
            "sequence": self.sequence,
            "operation_sequence": self.operation_sequence,
            "is_phantom": self.is_phantom,
            "effective_from": _optional(self.effective_from, _format_datetime),
            "effective_to": _optional(self.effective_to, _format_datetime),
            "alternative_group": self.alternative_group,
            "alternative_priority": self.alternative_priority,
            "reference_designator": self.reference_designator,
            "position": self.position,
            "notes": self.notes,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BomItem:
        """Build an item from a mapping; optional keys may be absent."""
        try:
            return cls(
                id=UUID(str(data["id"])),
                parent_id=str(data["parent_id"]),
                child_id=str(data["child_id"]),
                quantity=_as_decimal(data["quantity"]),
                scrap_factor=_as_decimal(data["scrap_factor"]),
                sequence=int(data["sequence"]),
                operation_sequence=data.get("operation_sequence"),
                is_phantom=bool(data["is_phantom"]),
                effective_from=_optional(data.get("effective_from"), _parse_datetime),
                effective_to=_optional(data.get("effective_to"), _parse_datetime),
                alternative_group=data.get("alternative_group"),
                alternative_priority=_optional(data.get("alternative_priority"), int),
                reference_designator=data.get("reference_designator"),
                position=data.get("position"),
                notes=data.get("notes"),
                version=int(data["version"]),
            )
        except _PARSE_ERRORS as exc:
            raise SerializationError(f"invalid BOM item: {exc}") from exc


@dataclass
class BomHeader:
    """Header of a complete BOM for one component."""

    id: str
    component_id: str
    usage: BomUsage
    status: BomStatus
    organization: str
    base_quantity: Decimal = Decimal(1)
    alternative: str | None = None
    effective_from: datetime | None = None
    effective_to: datetime | None = None
    version: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        self.base_quantity = _as_decimal(self.base_quantity)
        self.effective_from = _optional(self.effective_from, _as_utc)
        self.effective_to = _optional(self.effective_to, _as_utc)
        self.created_at = _as_utc(self.created_at)
        self.updated_at = _as_utc(self.updated_at)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping."""
        return {
            "id": self.id,
            "component_id": self.component_id,
            "usage": self.usage.value,
            "status": self.status.value,
            "base_quantity": str(self.base_quantity),
            "alternative": self.alternative,
            "effective_from": _optional(self.effective_from, _format_datetime),
            "effective_to": _optional(self.effective_to, _format_datetime),
            "organization": self.organization,
            "version": self.version,
            "created_at": _format_datetime(self.created_at),
            "updated_at": _format_datetime(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BomHeader:
        """Build a header from a mapping as produced by to_dict."""
        try:
            return cls(
                id=str(data["id"]),
                component_id=str(data["component_id"]),
                usage=BomUsage(data["usage"]),
                status=BomStatus(data["status"]),
                base_quantity=_as_decimal(data["base_quantity"]),
                alternative=data.get("alternative"),
                effective_from=_optional(data.get("effective_from"), _parse_datetime),
                effective_to=_optional(data.get("effective_to"), _parse_datetime),
                organization=data["organization"],
                version=int(data["version"]),
                created_at=_parse_datetime(data["created_at"]),
                updated_at=_parse_datetime(data["updated_at"]),
            )
        except _PARSE_ERRORS as exc:
            raise SerializationError(f"invalid BOM header: {exc}") from exc


@dataclass
class CostBreakdown:
    """Cost of a component split by cost element."""

    component_id: str
    material_cost: Decimal
    labor_cost: Decimal
    overhead_cost: Decimal
    subcontract_cost: Decimal
    total_cost: Decimal
    calculated_at: datetime = field(default_factory=_utcnow)

    def sum(self) -> Decimal:
        """Sum of the four cost elements."""
        return self.material_cost + self.labor_cost + self.overhead_cost + self.subcontract_cost


@dataclass
class ExplosionItem:
    """One component in a flattened material explosion."""

    component_id: str
    total_quantity: Decimal
    level: int
    paths: list[list[str]] = field(default_factory=list)
    is_phantom: bool = False


@dataclass
class ExplosionResult:
    """Flattened material requirements of a root component."""

    root_component: str
    items: list[ExplosionItem]
    unique_component_count: int
    max_depth: int
    calculated_at: datetime = field(default_factory=_utcnow)


@dataclass
class WhereUsedItem:
    """One parent assembly that uses a queried component."""

    parent_id: str
    quantity: Decimal
    level: int
    paths: list[list[str]] = field(default_factory=list)


@dataclass
class WhereUsedResult:
    """Parent assemblies that use a component."""

    component: str
    used_in: list[WhereUsedItem]
    queried_at: datetime = field(default_factory=_utcnow)