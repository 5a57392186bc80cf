"""
import_engine.field_map - Column-name ↔ model-attribute mapping.

Headers are matched case-insensitively after whitespace cleanup, so
"Contact\\nSize", "contact size" and "CONTACT SIZE" all hit the same alias.
"""

from __future__ import annotations

from typing import Iterable

# model attribute  →  accepted CSV headers (lower-case, cleaned)
CONTACT_COLUMNS: dict[str, tuple[str, ...]] = {
    "part_number":  ("part number", "part_number", "pn"),
    "type":         ("type", "contact type"),
    "contact_size": ("contact size", "contact_size", "size"),
    "awg_range":    ("wire size - awg", "awg range", "awg_range", "awg"),
    "mm2_range":    ("wire size - mm2", "mm2 range", "mm2_range", "mm2"),
    "description":  ("description",),
}

ARRANGEMENT_COLUMNS: dict[str, tuple[str, ...]] = {
    "arrangement":    ("arrangement", "insert arrangement"),
    "total_contacts": ("contact number", "total contacts", "total_contacts"),
    "contact_size":   ("contact size", "contact_size"),
    "contact_count":  ("contact count", "contact_count", "count"),
}

# Wide arrangement exports carry one column per size: "Contact Size - 20"
WIDE_SIZE_PREFIX = "contact size - "

WIRE_CONTACT_COLUMNS: dict[str, tuple[str, ...]] = {
    "wire_size":    ("wire size", "wire_size", "wire"),
    "system":       ("system", "wire system"),
    "contact_size": ("contact size", "contact_size", "contact sizes"),
}

COLUMN_MAPS: dict[str, dict[str, tuple[str, ...]]] = {
    "contacts":      CONTACT_COLUMNS,
    "arrangements":  ARRANGEMENT_COLUMNS,
    "wire_contacts": WIRE_CONTACT_COLUMNS,
}

# Columns that must be present per kind (contact type may come from the caller)
REQUIRED: dict[str, frozenset[str]] = {
    "contacts":      frozenset({"part_number", "contact_size"}),
    "arrangements":  frozenset({"arrangement"}),
    "wire_contacts": frozenset({"wire_size", "system", "contact_size"}),
}

KINDS = tuple(COLUMN_MAPS)


def resolve_columns(fieldnames: Iterable[str],
                    aliases: dict[str, tuple[str, ...]]) -> dict[str, str]:
    """Return {model attribute: actual header} for every alias found."""
    by_key = {h.lower(): h for h in fieldnames}
    resolved: dict[str, str] = {}
    for attr, names in aliases.items():
        for name in names:
            if name in by_key:
                resolved[attr] = by_key[name]
                break
    return resolved


def wide_size_columns(fieldnames: Iterable[str]) -> dict[str, str]:
    """Return {contact size: header} for "Contact Size - <size>" columns."""
    sizes: dict[str, str] = {}
    for h in fieldnames:
        if h.lower().startswith(WIDE_SIZE_PREFIX):
            size = h[len(WIDE_SIZE_PREFIX):].strip()
            if size:
                sizes[size] = h
    return sizes
