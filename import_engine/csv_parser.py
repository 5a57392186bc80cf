"""
import_engine.csv_parser - Turn an uploaded catalog file into a DictReader.

Vendor exports come as UTF-8 with or without BOM, separated by comma,
semicolon or tab, and with line-wrapped headers such as "Contact\\nSize".
"""

from __future__ import annotations

import csv
import io
from typing import Optional

_BOM = "\ufeff"
_DELIMITERS = ",;\t"


def prepare_reader(raw: str | bytes) -> Optional[csv.DictReader]:
    """DictReader with cleaned header names, or None for an empty file."""
    text = _decode(raw)
    if not text.strip():
        return None

    first_line = text.splitlines()[0]
    reader = csv.DictReader(io.StringIO(text), delimiter=_delimiter(first_line))
    if not reader.fieldnames:
        return None
    reader.fieldnames = [clean_header(name) for name in reader.fieldnames]
    return reader


def clean_header(header: Optional[str]) -> str:
    """Collapse line breaks and runs of spaces inside a header cell."""
    return " ".join((header or "").split())


def _delimiter(header_line: str) -> str:
    # Comma unless semicolons or tabs outnumber it
    return max(_DELIMITERS, key=header_line.count) if header_line else ","


def _decode(raw: str | bytes) -> str:
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    return text[1:] if text.startswith(_BOM) else text
