"""
services.catalog_service - Lookups over the Glenair reference catalog.

CatalogService methods take an open session (caller manages it), in the
same way as the rest of the service layer.  SqlReferenceData wraps them
behind the builder's ReferenceData contract and opens one short-lived
session per call, so concurrent lookups never share a session.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db.engine import get_session
from db.models import GlenairArrangement, GlenairContact, GlenairWireContact
from glenair.models import Arrangement, Contact, WireSystem
from glenair.units import STANDARD_WIRE_SIZES, normalize_wire_value, parse_range, parse_value

logger = logging.getLogger(__name__)

# Gauges considered when expanding a contact's AWG range into mappings
_AWG_GAUGES = STANDARD_WIRE_SIZES[WireSystem.AWG] + ["2", "1", "1/0", "2/0", "3/0", "4/0"]
_RANGE_TOLERANCE = 1e-9


class CatalogService:

    # ── Wire → contact size ────────────────────────────────────────────

    @staticmethod
    def compatible_contact_sizes(session: Session, wire_value: str,
                                 system: WireSystem | str) -> list[str]:
        system = WireSystem.coerce(system)
        key = normalize_wire_value(wire_value, system)
        rows = session.execute(
            select(GlenairWireContact.contact_size)
            .where(GlenairWireContact.wire_size == key,
                   GlenairWireContact.system == system.value)
            .distinct()
            .order_by(GlenairWireContact.contact_size)
        ).scalars().all()
        return list(rows)

    @staticmethod
    def add_wire_mapping(session: Session, wire_size: str,
                         system: WireSystem | str, contact_size: str) -> bool:
        """
        Insert a mapping unless the same (wire_size, system, contact_size)
        already exists.  Returns True if a row was added.
        """
        system = WireSystem.coerce(system)
        key = normalize_wire_value(wire_size, system)
        contact_size = str(contact_size).strip()

        existing = session.execute(
            select(GlenairWireContact.id).where(
                GlenairWireContact.wire_size == key,
                GlenairWireContact.system == system.value,
                GlenairWireContact.contact_size == contact_size,
            )
        ).first()
        if existing:
            return False

        session.add(GlenairWireContact(
            wire_size=key, system=system.value, contact_size=contact_size,
        ))
        session.flush()
        return True

    @staticmethod
    def derive_wire_mappings(session: Session) -> int:
        """
        Expand every contact's awg_range / mm2_range into wire mappings
        for the standard sizes inside the range.  Returns rows added.
        """
        added = 0
        for contact in session.execute(select(GlenairContact)).scalars():
            for system, text, sizes in (
                (WireSystem.AWG, contact.awg_range, _AWG_GAUGES),
                (WireSystem.MM2, contact.mm2_range, STANDARD_WIRE_SIZES[WireSystem.MM2]),
            ):
                bounds = parse_range(text)
                if bounds is None:
                    continue
                lo, hi = bounds
                for size in sizes:
                    num = parse_value(size)
                    if lo - _RANGE_TOLERANCE <= num <= hi + _RANGE_TOLERANCE:
                        if CatalogService.add_wire_mapping(
                            session, size, system, contact.contact_size,
                        ):
                            added += 1
        logger.info(f"Derived {added} wire-contact mappings from contact ranges")
        return added

    # ── Contacts ───────────────────────────────────────────────────────

    @staticmethod
    def contacts_by_size(session: Session, size: str) -> list[GlenairContact]:
        return list(session.execute(
            select(GlenairContact)
            .where(GlenairContact.contact_size == size)
            .order_by(GlenairContact.type, GlenairContact.part_number)
        ).scalars())

    @staticmethod
    def contact_by_part_number(session: Session, part_number: str) -> Optional[GlenairContact]:
        return session.execute(
            select(GlenairContact)
            .where(GlenairContact.part_number == part_number.strip())
            .order_by(GlenairContact.type)
        ).scalars().first()

    @staticmethod
    def contact_sizes(session: Session) -> list[str]:
        """Every contact size present in the contact table."""
        return list(session.execute(
            select(GlenairContact.contact_size).distinct()
            .order_by(GlenairContact.contact_size)
        ).scalars())

    # ── Arrangements ───────────────────────────────────────────────────

    @staticmethod
    def arrangements_by_contact_count(session: Session, count: int,
                                      size: str) -> list[GlenairArrangement]:
        """Arrangements with exactly `count` contacts that include `size`."""
        return list(session.execute(
            select(GlenairArrangement)
            .where(GlenairArrangement.total_contacts == int(count),
                   GlenairArrangement.contact_size == size)
            .order_by(GlenairArrangement.arrangement)
        ).scalars())

    @staticmethod
    def arrangement_details(session: Session, arrangement: str) -> list[GlenairArrangement]:
        """All contact-size rows of one arrangement."""
        return list(session.execute(
            select(GlenairArrangement)
            .where(GlenairArrangement.arrangement == arrangement.strip())
            .order_by(GlenairArrangement.contact_size)
        ).scalars())

    @staticmethod
    def arrangement_violations(session: Session,
                               arrangements: Optional[set[str]] = None) -> list[dict]:
        """
        Arrangements whose contact_count rows do not add up to
        total_contacts, or whose rows disagree on total_contacts.
        """
        stmt = (
            select(
                GlenairArrangement.arrangement,
                func.min(GlenairArrangement.total_contacts),
                func.max(GlenairArrangement.total_contacts),
                func.sum(GlenairArrangement.contact_count),
            )
            .group_by(GlenairArrangement.arrangement)
            .order_by(GlenairArrangement.arrangement)
        )
        if arrangements:
            stmt = stmt.where(GlenairArrangement.arrangement.in_(arrangements))

        violations = []
        for arr, tmin, tmax, counted in session.execute(stmt):
            if tmin != tmax or counted != tmax:
                violations.append({
                    "arrangement": arr,
                    "total_contacts": tmax,
                    "counted": counted,
                    "reason": (
                        "rows disagree on total_contacts" if tmin != tmax
                        else f"contact counts sum to {counted}, expected {tmax}"
                    ),
                })
        return violations


class SqlReferenceData:
    """ReferenceData backed by the catalog tables."""

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self._session_factory = session_factory

    def get_compatible_contact_sizes(self, wire_value: str,
                                      wire_system: WireSystem) -> list[str]:
        session = self._session_factory()
        try:
            return CatalogService.compatible_contact_sizes(session, wire_value, wire_system)
        finally:
            session.close()

    def get_contacts_by_size(self, size: str) -> list[Contact]:
        session = self._session_factory()
        try:
            return [c.to_domain() for c in CatalogService.contacts_by_size(session, size)]
        finally:
            session.close()

    def get_arrangements_by_contact_count(self, count: int, size: str) -> list[Arrangement]:
        session = self._session_factory()
        try:
            return [
                a.to_domain()
                for a in CatalogService.arrangements_by_contact_count(session, count, size)
            ]
        finally:
            session.close()
