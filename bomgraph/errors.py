"""Exception hierarchy for bill-of-materials operations."""

from __future__ import annotations


class BomError(Exception):
    """Base class for every error raised by the BOM engine."""


class _DetailError(BomError):
    """An error whose message is a fixed prefix followed by one detail."""

    template = "{}"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(self.template.format(detail))


class CircularDependencyError(_DetailError):
    """The BOM structure contains, or would contain, a cycle."""

    template = "Circular dependency detected in BOM: {}"


class ComponentNotFoundError(_DetailError):
    """A component id is not known."""

    template = "Component not found: {}"


class BomNotFoundError(_DetailError):
    """No BOM header matches the request."""

    template = "BOM structure not found: {}"


class InvalidQuantityError(_DetailError):
    """A quantity is not acceptable."""

    template = "Invalid quantity: {}"


class InvalidEffectivityRangeError(BomError):
    """An effectivity range ends before it starts."""

    def __init__(self, valid_from: str, valid_to: str) -> None:
        self.valid_from = valid_from
        self.valid_to = valid_to
        super().__init__(f"Invalid effectivity date range: {valid_from} to {valid_to}")


class PhantomWithCostError(_DetailError):
    """A phantom component was given a cost."""

    template = "Phantom component cannot have cost: {}"


class AlternativeGroupNotFoundError(_DetailError):
    """An alternative group is not known."""

    template = "Alternative group not found: {}"


class VersionConflictError(BomError):
    """Optimistic locking found a different version than expected."""

    def __init__(self, expected: int, found: int) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"Version conflict: expected {expected}, found {found}")


class CacheError(_DetailError):
    """A cache operation failed."""

    template = "Cache error: {}"


class SerializationError(_DetailError):
    """Data could not be converted to or from its serialized form."""

    template = "Serialization error: {}"


class RepositoryError(_DetailError):
    """The data source failed."""

    template = "Repository error: {}"


class CalculationError(_DetailError):
    """A calculation could not be completed."""

    template = "Calculation error: {}"