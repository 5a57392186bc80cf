"""
glenair.units - Wire-size parsing, formatting and AWG/mm² reference data.

AWG sizes larger than gauge 1 use the "zero series" (1/0 … 4/0).  They are
carried internally as negative numbers: "1/0" → -1, "4/0" → -4.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from glenair.models import WireSystem


# Whole AWG gauge → cross-section in mm².  Display/reference only; contact
# compatibility comes from the wire-contact mapping table.
AWG_TO_MM2: dict[int, float] = {
    4: 21.15, 6: 13.30, 8: 8.37, 10: 5.26, 12: 3.31, 14: 2.08, 16: 1.31,
    18: 0.82, 20: 0.52, 22: 0.33, 24: 0.20, 26: 0.13, 28: 0.08, 30: 0.05,
    32: 0.03, 34: 0.02, 36: 0.013, 40: 0.005,
}

# Values offered to the user, thinnest first
STANDARD_WIRE_SIZES: dict[WireSystem, list[str]] = {
    WireSystem.AWG: [
        "40", "36", "34", "32", "30", "28", "26", "24", "22",
        "20", "18", "16", "14", "12", "10", "8", "6", "4",
    ],
    WireSystem.MM2: [
        "0.005", "0.013", "0.02", "0.03", "0.05", "0.08", "0.13", "0.20",
        "0.33", "0.52", "0.82", "1.31", "2.08", "3.31", "5.26", "8.37",
        "13.30", "21.15",
    ],
}

_ZERO_SERIES = re.compile(r"^(\d+)\s*/\s*0$")
_RANGE_SPLIT = re.compile(r"\s*(?:÷|–|—|\bto\b|~)\s*|(?<=\d)\s*-\s*(?=\d)")


def parse_value(raw: str | int | float | None) -> Optional[float]:
    """
    Parse a wire-size value.  Returns None when the input is not a number.

    Accepts plain numbers ("20", "0.52", 18) and the AWG zero series
    ("2/0" → -2).  Never raises for malformed input.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw) if math.isfinite(raw) else None

    v = str(raw).strip()
    if not v:
        return None

    m = _ZERO_SERIES.match(v)
    if m:
        return -float(int(m.group(1)))

    try:
        num = float(v)
    except ValueError:
        return None
    return num if math.isfinite(num) else None


def format_value(value: float, system: WireSystem | str) -> str:
    """
    Render a wire size for display.

    AWG: negative values render as "N/0", whole numbers without decimals.
    MM2: two decimals below 1 mm², one decimal otherwise, rounded half-up
    on the decimal representation (21.15 → "21.2", 0.005 → "0.01").
    """
    system = WireSystem.coerce(system)

    if system is WireSystem.AWG:
        if value < 0 and float(value).is_integer():
            return f"{int(abs(value))}/0"
        if float(value).is_integer():
            return str(int(value))
        return str(value)

    places = Decimal("0.01") if abs(value) < 1 else Decimal("0.1")
    return str(Decimal(str(value)).quantize(places, rounding=ROUND_HALF_UP))


def normalize_wire_value(raw: str, system: WireSystem | str) -> str:
    """
    Canonical text form used as the wire-size key in the mapping table.

    AWG values are re-formatted ("20.0" → "20", "-1" → "1/0").  MM2 values
    drop trailing zeros but keep every significant digit ("0.20" → "0.2",
    "0.013" stays "0.013"), so display rounding never merges two sizes.
    Text that is not a number is returned stripped.
    """
    system = WireSystem.coerce(system)
    text = str(raw).strip()
    if system is WireSystem.AWG:
        num = parse_value(text)
        if num is not None:
            return format_value(num, system)
        return text

    try:
        num = Decimal(text)
    except InvalidOperation:
        return text
    if not num.is_finite():
        return text
    return format(num.normalize(), "f")


def awg_to_mm2(gauge: str | int | float) -> Optional[float]:
    """Look up the mm² cross-section of a whole AWG gauge (None if unknown)."""
    num = parse_value(gauge)
    if num is None or not num.is_integer():
        return None
    return AWG_TO_MM2.get(int(num))


def parse_range(text: Optional[str]) -> Optional[tuple[float, float]]:
    """
    Parse a catalog range such as "26÷20", "26-20", "0.13 to 0.52" or a
    single value "20".  Returns (low, high) sorted numerically, or None.
    """
    if text is None:
        return None
    text = str(text).strip()
    if not text:
        return None

    pieces = [p for p in _RANGE_SPLIT.split(text) if p and p.strip()]
    values = [parse_value(p) for p in pieces]
    if not values or len(values) > 2 or any(v is None for v in values):
        return None
    return min(values), max(values)
