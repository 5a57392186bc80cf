"""
glenair.reference - Contract between the builder and the catalog store.

The builder only ever talks to an object satisfying ReferenceData; the
SQLAlchemy-backed implementation lives in services.catalog_service.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from glenair.models import Arrangement, Contact, WireSystem


class QueryFailure(Exception):
    """A reference-data lookup failed.  The original error is __cause__."""

    def __init__(self, operation: str, message: str = ""):
        self.operation = operation
        super().__init__(f"{operation} failed: {message}" if message else f"{operation} failed")


@runtime_checkable
class ReferenceData(Protocol):
    def get_compatible_contact_sizes(
        self, wire_value: str, wire_system: WireSystem,
    ) -> Sequence[str]:
        """Contact sizes accepting this wire.  Empty when none are known."""
        ...

    def get_contacts_by_size(self, size: str) -> Sequence[Contact]:
        ...

    def get_arrangements_by_contact_count(
        self, count: int, size: str,
    ) -> Sequence[Arrangement]:
        """Arrangements with exactly `count` contacts that include `size`."""
        ...
