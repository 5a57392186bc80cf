"""
db.models - SQLAlchemy ORM declarations.

Tables
------
glenair_contacts       - one row per contact part number and type (Pin/Socket).
glenair_arrangements   - one row per arrangement + contact size.  An
                         arrangement with mixed sizes spans several rows whose
                         contact_count values sum to total_contacts.
glenair_wire_contacts  - wire size/system → contact size mapping (many-to-many).
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, DateTime, Text, Index, UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase

from glenair.models import Arrangement, Contact, ContactType, WireContactMapping, WireSystem


class Base(DeclarativeBase):
    pass


class GlenairContact(Base):
    __tablename__ = "glenair_contacts"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    part_number  = Column(String(100), nullable=False, index=True)
    type         = Column(String(10), nullable=False)                 # Pin | Socket
    contact_size = Column(String(10), nullable=False, index=True)     # "16", "16S", "20"
    awg_range    = Column(String(50), nullable=True)
    mm2_range    = Column(String(50), nullable=True)
    description  = Column(Text, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("part_number", "type", name="uq_contact_pn_type"),
    )

    def to_domain(self) -> Contact:
        return Contact(
            part_number=self.part_number,
            type=ContactType.coerce(self.type),
            contact_size=self.contact_size,
            awg_range=self.awg_range,
            mm2_range=self.mm2_range,
            description=self.description,
        )

    def to_dict(self) -> dict:
        return self.to_domain().to_dict()


class GlenairArrangement(Base):
    __tablename__ = "glenair_arrangements"

    id             = Column(Integer, primary_key=True, autoincrement=True)
    arrangement    = Column(String(50), nullable=False, index=True)   # "10SL-3"
    total_contacts = Column(Integer, nullable=False)
    contact_size   = Column(String(10), nullable=False)
    contact_count  = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("arrangement", "contact_size", name="uq_arrangement_size"),
        Index("ix_arrangement_total_size", "total_contacts", "contact_size"),
    )

    def to_domain(self) -> Arrangement:
        return Arrangement(
            arrangement=self.arrangement,
            total_contacts=self.total_contacts,
            contact_size=self.contact_size,
            contact_count=self.contact_count,
        )

    def to_dict(self) -> dict:
        return self.to_domain().to_dict()


class GlenairWireContact(Base):
    __tablename__ = "glenair_wire_contacts"

    id           = Column(Integer, primary_key=True, autoincrement=True)
    wire_size    = Column(String(20), nullable=False)                 # AWG "20", "1/0"; mm² "0.52"
    system       = Column(String(5), nullable=False)                  # AWG | MM2
    contact_size = Column(String(10), nullable=False)

    __table_args__ = (
        UniqueConstraint("wire_size", "system", "contact_size", name="uq_wire_contact"),
        Index("ix_wire_lookup", "wire_size", "system"),
    )

    def to_domain(self) -> WireContactMapping:
        return WireContactMapping(
            wire_size=self.wire_size,
            system=WireSystem.coerce(self.system),
            contact_size=self.contact_size,
        )

    def to_dict(self) -> dict:
        return {
            "wire_size": self.wire_size,
            "system": self.system,
            "contact_size": self.contact_size,
        }
