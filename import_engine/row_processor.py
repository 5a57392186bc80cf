"""
import_engine.row_processor - Validate and store one catalog CSV row.

Single-responsibility: given a dict-row and a session, add the catalog
records it describes and say what happened, or raise RowError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models import GlenairArrangement, GlenairContact
from glenair.models import ContactType, WireSystem
from glenair.units import parse_value
from import_engine.field_map import (
    COLUMN_MAPS, REQUIRED, resolve_columns, wide_size_columns,
)
from services.catalog_service import CatalogService


class RowError(Exception):
    """Raised when a row cannot be imported."""
    pass


@dataclass
class RowOutcome:
    added: int = 0
    replaced: int = 0
    ignored: int = 0


class RowProcessor:
    """
    Column mapping is resolved once from the header row; process() is
    then called per data row.  Raises RowError from __init__ when the
    header lacks a required column.
    """

    def __init__(self, kind: str, fieldnames: list[str], *,
                 contact_type: Optional[ContactType | str] = None):
        self.kind = kind
        self.columns = resolve_columns(fieldnames, COLUMN_MAPS[kind])
        self.wide_sizes = wide_size_columns(fieldnames) if kind == "arrangements" else {}
        self.contact_type = ContactType.coerce(contact_type) if contact_type else None
        self.arrangements_seen: set[str] = set()

        required = set(REQUIRED[kind])
        if kind == "contacts" and self.contact_type is None:
            required.add("type")
        if kind == "arrangements" and not self.wide_sizes:
            required |= {"total_contacts", "contact_size", "contact_count"}
        missing = sorted(required - set(self.columns))
        if missing:
            raise RowError(f"Missing column(s) for {kind}: {', '.join(missing)}")

    def process(self, session: Session, row: dict, replace: bool) -> RowOutcome:
        if self.kind == "contacts":
            return self._contact(session, row, replace)
        if self.kind == "arrangements":
            return self._arrangement(session, row, replace)
        return self._wire_contact(session, row)

    # ── Per-kind handlers ──────────────────────────────────────────────

    def _contact(self, session: Session, row: dict, replace: bool) -> RowOutcome:
        pn = self._value(row, "part_number", required=True)
        size = self._value(row, "contact_size", required=True)
        try:
            ctype = self.contact_type or ContactType.coerce(self._value(row, "type", required=True))
        except ValueError as exc:
            raise RowError(str(exc)) from exc

        outcome = RowOutcome()
        existing = session.execute(
            select(GlenairContact).where(
                GlenairContact.part_number == pn,
                GlenairContact.type == ctype.value,
            )
        ).scalars().first()
        if existing and not replace:
            raise RowError(f"Duplicate contact {pn} ({ctype.value}) (enable replace to overwrite)")
        if existing:
            session.delete(existing)
            session.flush()
            outcome.replaced += 1
        else:
            outcome.added += 1

        session.add(GlenairContact(
            part_number=pn,
            type=ctype.value,
            contact_size=size,
            awg_range=self._value(row, "awg_range") or None,
            mm2_range=self._value(row, "mm2_range") or None,
            description=self._value(row, "description") or None,
        ))
        session.flush()
        return outcome

    def _arrangement(self, session: Session, row: dict, replace: bool) -> RowOutcome:
        arr = self._value(row, "arrangement", required=True)

        if self.wide_sizes:
            breakdown = []
            for size, header in self.wide_sizes.items():
                cell = (row.get(header) or "").strip()
                if cell:
                    breakdown.append((size, _to_int(cell, header)))
            if not breakdown:
                raise RowError(f"Arrangement {arr} has no contact-size counts")
        else:
            size = self._value(row, "contact_size", required=True)
            breakdown = [(size, _to_int(self._value(row, "contact_count", required=True),
                                        "contact_count"))]

        total_raw = self._value(row, "total_contacts")
        total = (_to_int(total_raw, "total_contacts") if total_raw
                 else sum(count for _, count in breakdown))

        # Check the whole breakdown first so a rejected row adds nothing
        existing = {
            a.contact_size: a
            for a in session.execute(
                select(GlenairArrangement).where(
                    GlenairArrangement.arrangement == arr,
                    GlenairArrangement.contact_size.in_([s for s, _ in breakdown]),
                )
            ).scalars()
        }
        if existing and not replace:
            sizes = ", ".join(sorted(existing))
            raise RowError(f"Duplicate arrangement {arr} size {sizes} (enable replace to overwrite)")

        outcome = RowOutcome()
        for old in existing.values():
            session.delete(old)
            outcome.replaced += 1
        session.flush()

        for size, count in breakdown:
            if size not in existing:
                outcome.added += 1
            session.add(GlenairArrangement(
                arrangement=arr, total_contacts=total,
                contact_size=size, contact_count=count,
            ))
        session.flush()
        self.arrangements_seen.add(arr)
        return outcome

    def _wire_contact(self, session: Session, row: dict) -> RowOutcome:
        wire = self._value(row, "wire_size", required=True)
        try:
            system = WireSystem.coerce(self._value(row, "system", required=True))
        except ValueError as exc:
            raise RowError(str(exc)) from exc
        if parse_value(wire) is None:
            raise RowError(f"Unparseable wire size {wire!r}")

        # One cell may list several sizes: "16, 16S"
        sizes = [s.strip() for s in
                 self._value(row, "contact_size", required=True).replace(";", ",").split(",")]
        outcome = RowOutcome()
        for size in filter(None, sizes):
            if CatalogService.add_wire_mapping(session, wire, system, size):
                outcome.added += 1
            else:
                outcome.ignored += 1
        return outcome

    # ── Private helpers ────────────────────────────────────────────────

    def _value(self, row: dict, attr: str, *, required: bool = False) -> str:
        header = self.columns.get(attr)
        val = (row.get(header) or "").strip() if header else ""
        if required and not val:
            raise RowError(f"Missing value for {attr}")
        return val


def _to_int(raw: str, label: str) -> int:
    try:
        num = float(raw)
    except ValueError:
        raise RowError(f"{label} is not a number: {raw!r}") from None
    if not num.is_integer() or num < 0:
        raise RowError(f"{label} must be a whole number: {raw!r}")
    return int(num)
