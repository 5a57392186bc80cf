"""
glenair.numbering - Series 80 connector part-number construction and parsing.

Format:  80<shell>-<arrangement>-<P|S><suffix>
         e.g. 806-10SL-3-P20

<suffix> is the last dash segment of the primary contact's vendor part
number with '*' markers removed ("10-375-20" → "20"), or "A" when the
contact part number has no dash.  A trailing dash ("10-375-") gives an
empty suffix, which parse_part_number accepts.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from glenair.models import BuilderResult, Contact, ContactType, WireSystem

SERIES_PREFIX = "80"
FALLBACK_SUFFIX = "A"

_TYPE_LETTER = {ContactType.PIN: "P", ContactType.SOCKET: "S"}
_LETTER_TYPE = {v: k for k, v in _TYPE_LETTER.items()}

# The arrangement may itself contain dashes ("10SL-3"), so anchor on the
# shell code after "80" and the final "-P…" / "-S…" segment.
_PN_RE = re.compile(r"^80(?P<shell>[^-]+)-(?P<arr>.+)-(?P<letter>[PS])(?P<suffix>[^-]*)$")


def contact_suffix(part_number: str) -> str:
    """Derive the suffix from a vendor contact part number."""
    segments = part_number.split("-")
    if len(segments) < 2:
        return FALLBACK_SUFFIX
    return segments[-1].replace("*", "")


def build_part_number(shell_style: str, arrangement: str,
                      contact_type: ContactType | str, suffix: str) -> str:
    """Assemble a canonical Series 80 part number."""
    letter = _TYPE_LETTER[ContactType.coerce(contact_type)]
    return f"{SERIES_PREFIX}{shell_style}-{arrangement}-{letter}{suffix}"


def synthesize(
    shell_style: str,
    arrangement: str,
    contacts: Sequence[Contact],
    *,
    wire_value: str = "",
    wire_system: WireSystem | str = WireSystem.AWG,
) -> BuilderResult:
    """
    Encode a complete selection into a BuilderResult.

    Only the first contact drives the type letter and suffix.
    Raises ValueError if `contacts` is empty.
    """
    if not contacts:
        raise ValueError("at least one contact is required")

    # TODO: compose multi-contact part numbers once the vendor encoding for
    # mixed pin/socket inserts is confirmed; until then contacts[1:] are ignored.
    primary = contacts[0]
    part_number = build_part_number(
        shell_style, arrangement, primary.type, contact_suffix(primary.part_number),
    )
    description = (
        f"Glenair Series 80 Connector - Shell Style {shell_style}, "
        f"Arrangement {arrangement}, {primary.type.value} Contacts"
    )
    return BuilderResult(
        part_number=part_number,
        description=description,
        metadata={
            "wire_size": wire_value,
            "wire_system": WireSystem.coerce(wire_system).value,
            "contact_part_number": primary.part_number,
        },
    )


def parse_part_number(pn: str) -> Optional[dict]:
    """
    Parse '80<shell>-<arr>-<P|S><suffix>' → {shell_style, arrangement,
    contact_type, suffix}.  Returns None on any format violation.
    """
    m = _PN_RE.match(pn.strip().upper())
    if not m:
        return None
    return {
        "shell_style": m.group("shell"),
        "arrangement": m.group("arr"),
        "contact_type": _LETTER_TYPE[m.group("letter")],
        "suffix": m.group("suffix"),
    }
