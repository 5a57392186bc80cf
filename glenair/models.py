"""Builder dataclasses - typed views of catalog rows and configurator state."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class WireSystem(str, Enum):
    AWG = "AWG"
    MM2 = "MM2"

    @classmethod
    def coerce(cls, value: "WireSystem | str") -> "WireSystem":
        """Accept an enum member or its name in any case ("awg", "mm2")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown wire system {value!r}") from None


class ContactType(str, Enum):
    PIN = "Pin"
    SOCKET = "Socket"

    @classmethod
    def coerce(cls, value: "ContactType | str") -> "ContactType":
        if isinstance(value, cls):
            return value
        v = str(value).strip().lower()
        if v in ("pin", "p", "male"):
            return cls.PIN
        if v in ("socket", "s", "female"):
            return cls.SOCKET
        raise ValueError(f"Unknown contact type {value!r}")


class Stage(int, Enum):
    WIRE_SELECTION = 1
    CONTACT_SIZE_SELECTION = 2
    CONTACT_SELECTION = 3
    ARRANGEMENT_SELECTION = 4
    SHELL_STYLE_SELECTION = 5
    SYNTHESIS = 6
    COMPLETE = 7


@dataclass(frozen=True)
class Contact:
    part_number: str
    type: ContactType
    contact_size: str
    awg_range: Optional[str] = None      # None = no data, not "accepts nothing"
    mm2_range: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "part_number": self.part_number,
            "type": self.type.value,
            "contact_size": self.contact_size,
            "awg_range": self.awg_range,
            "mm2_range": self.mm2_range,
            "description": self.description,
        }


@dataclass(frozen=True)
class Arrangement:
    arrangement: str                     # unique only together with contact_size
    total_contacts: int
    contact_size: str
    contact_count: int

    def to_dict(self) -> dict:
        return {
            "arrangement": self.arrangement,
            "total_contacts": self.total_contacts,
            "contact_size": self.contact_size,
            "contact_count": self.contact_count,
        }


@dataclass(frozen=True)
class WireContactMapping:
    wire_size: str
    system: WireSystem
    contact_size: str


@dataclass(frozen=True)
class BuilderSelection:
    """Committed configurator choices.  Replaced, never mutated."""

    wire_system: WireSystem = WireSystem.AWG
    wire_value: str = ""
    conductor_count: int = 1
    contact_size: Optional[str] = None
    selected_contacts: tuple[Contact, ...] = ()
    arrangement: Optional[str] = None
    shell_style: Optional[str] = None

    def toggle_contact(self, contact: Contact) -> "BuilderSelection":
        """Add the contact, or remove it if its part number is already selected."""
        pn = contact.part_number
        if any(c.part_number == pn for c in self.selected_contacts):
            kept = tuple(c for c in self.selected_contacts if c.part_number != pn)
            return replace(self, selected_contacts=kept)
        return replace(self, selected_contacts=self.selected_contacts + (contact,))

    def to_dict(self) -> dict:
        return {
            "wire_system": self.wire_system.value,
            "wire_value": self.wire_value,
            "conductor_count": self.conductor_count,
            "contact_size": self.contact_size,
            "selected_contacts": [c.to_dict() for c in self.selected_contacts],
            "arrangement": self.arrangement,
            "shell_style": self.shell_style,
        }


@dataclass(frozen=True)
class Candidates:
    """Choices unlocked by the stages committed so far."""

    contact_sizes: tuple[str, ...] = ()
    contacts: tuple[Contact, ...] = ()
    arrangements: tuple[Arrangement, ...] = ()

    def find_contact(self, part_number: str) -> Optional[Contact]:
        for c in self.contacts:
            if c.part_number == part_number:
                return c
        return None

    def to_dict(self) -> dict:
        return {
            "contact_sizes": list(self.contact_sizes),
            "contacts": [c.to_dict() for c in self.contacts],
            "arrangements": [a.to_dict() for a in self.arrangements],
        }


@dataclass(frozen=True)
class BuilderResult:
    part_number: str
    description: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the mapping so a result can be shared safely
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> dict:
        return {
            "part_number": self.part_number,
            "description": self.description,
            "metadata": dict(self.metadata),
        }


# Series 80 shell styles, for display.  The builder accepts any code.
SHELL_STYLES: dict[str, str] = {
    "0": "Square Flange Receptacle",
    "1": "In-Line Receptacle",
    "2": "Front Mount Jam Nut",
    "5": "Plug with Ratchet Mechanism",
    "7": "Rear Mount Jam Nut",
}
