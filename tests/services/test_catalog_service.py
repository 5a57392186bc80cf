from collections import defaultdict

from db.models import GlenairArrangement, GlenairWireContact
from glenair.models import Contact, ContactType, WireSystem
from glenair.reference import ReferenceData
from services.catalog_service import CatalogService, SqlReferenceData
from tests.factories import ArrangementFactory, ContactFactory, WireContactFactory


def test_compatible_contact_sizes(session):
    WireContactFactory(wire_size="16", contact_size="16")
    WireContactFactory(wire_size="16", contact_size="16S")
    WireContactFactory(wire_size="16", system="MM2", contact_size="12")
    WireContactFactory(wire_size="20", contact_size="20")

    assert CatalogService.compatible_contact_sizes(session, "16", "AWG") == ["16", "16S"]
    assert CatalogService.compatible_contact_sizes(session, "16.0", WireSystem.AWG) == ["16", "16S"]
    assert CatalogService.compatible_contact_sizes(session, "18", "AWG") == []


def test_zero_series_wire_lookup(session):
    WireContactFactory(wire_size="1/0", contact_size="0")
    assert CatalogService.compatible_contact_sizes(session, "-1", "AWG") == ["0"]


def test_add_wire_mapping_ignores_duplicates(session):
    assert CatalogService.add_wire_mapping(session, "20", "AWG", "20") is True
    assert CatalogService.add_wire_mapping(session, "20.0", "awg", "20") is False
    session.commit()
    assert session.query(GlenairWireContact).count() == 1


def test_mm2_lookup_ignores_trailing_zeros(session):
    assert CatalogService.add_wire_mapping(session, "0.20", "MM2", "22") is True
    assert CatalogService.add_wire_mapping(session, "0.2", "MM2", "22") is False
    CatalogService.add_wire_mapping(session, "0.013", "MM2", "26")
    session.commit()

    for typed in ("0.2", "0.20", "0.200"):
        assert CatalogService.compatible_contact_sizes(session, typed, "MM2") == ["22"]
    assert CatalogService.compatible_contact_sizes(session, "0.01", "MM2") == []
    assert CatalogService.compatible_contact_sizes(session, "0.0130", "MM2") == ["26"]


def test_arrangements_filter_on_exact_total_and_size(session):
    ArrangementFactory(arrangement="12S-4", total_contacts=4, contact_size="20")
    ArrangementFactory(arrangement="14S-5", total_contacts=5, contact_size="20")
    ArrangementFactory(arrangement="14-4M", total_contacts=4, contact_size="16")

    rows = CatalogService.arrangements_by_contact_count(session, 4, "20")
    assert [r.arrangement for r in rows] == ["12S-4"]


def test_arrangement_details_lists_every_size(session):
    ArrangementFactory(arrangement="10SL-4", total_contacts=4, contact_size="20", contact_count=3)
    ArrangementFactory(arrangement="10SL-4", total_contacts=4, contact_size="16", contact_count=1)

    rows = CatalogService.arrangement_details(session, "10SL-4")
    assert [(r.contact_size, r.contact_count) for r in rows] == [("16", 1), ("20", 3)]


def test_arrangement_counts_sum_to_total(session):
    ArrangementFactory(arrangement="10SL-4", total_contacts=4, contact_size="20", contact_count=3)
    ArrangementFactory(arrangement="10SL-4", total_contacts=4, contact_size="16", contact_count=1)
    ArrangementFactory(arrangement="12S-3", total_contacts=3, contact_size="20")

    sums = defaultdict(int)
    totals = {}
    for row in session.query(GlenairArrangement):
        sums[row.arrangement] += row.contact_count
        totals[row.arrangement] = row.total_contacts
    assert sums == totals
    assert CatalogService.arrangement_violations(session) == []


def test_arrangement_violations_reported(session):
    ArrangementFactory(arrangement="12-7", total_contacts=7, contact_size="20", contact_count=5)
    ArrangementFactory(arrangement="14-2", total_contacts=2, contact_size="16", contact_count=1)
    ArrangementFactory(arrangement="14-2", total_contacts=3, contact_size="20", contact_count=1)
    ArrangementFactory(arrangement="10-1", total_contacts=1, contact_size="20")

    violations = {v["arrangement"]: v for v in CatalogService.arrangement_violations(session)}
    assert set(violations) == {"12-7", "14-2"}
    assert violations["12-7"]["counted"] == 5
    assert "disagree" in violations["14-2"]["reason"]

    only = CatalogService.arrangement_violations(session, {"10-1", "12-7"})
    assert [v["arrangement"] for v in only] == ["12-7"]


def test_contact_lookups(session):
    ContactFactory(part_number="10-375-20", type="Pin", contact_size="20")
    ContactFactory(part_number="10-376-20", type="Socket", contact_size="20")
    ContactFactory(part_number="10-375-16", type="Pin", contact_size="16")

    rows = CatalogService.contacts_by_size(session, "20")
    assert [(r.type, r.part_number) for r in rows] == [
        ("Pin", "10-375-20"), ("Socket", "10-376-20"),
    ]
    assert CatalogService.contact_by_part_number(session, "10-376-20").type == "Socket"
    assert CatalogService.contact_by_part_number(session, "nope") is None
    assert CatalogService.contact_sizes(session) == ["16", "20"]


def test_derive_wire_mappings_from_ranges(session):
    ContactFactory(contact_size="20", awg_range="26÷20", mm2_range="0.13-0.52")
    ContactFactory(contact_size="16", awg_range="20-16", mm2_range=None)
    ContactFactory(contact_size="8", awg_range=None, mm2_range=None)

    added = CatalogService.derive_wire_mappings(session)
    session.commit()

    # 20,22,24,26 + 0.13,0.20,0.33,0.52 for size 20; 16,18,20 for size 16
    assert added == 11
    assert CatalogService.compatible_contact_sizes(session, "22", "AWG") == ["20"]
    assert CatalogService.compatible_contact_sizes(session, "20", "AWG") == ["16", "20"]
    assert CatalogService.compatible_contact_sizes(session, "0.33", "MM2") == ["20"]
    assert CatalogService.derive_wire_mappings(session) == 0


def test_sql_reference_data_returns_domain_objects(session):
    WireContactFactory(wire_size="20", contact_size="20")
    ContactFactory(part_number="10-375-20", type="Pin", contact_size="20",
                   awg_range="26÷20", mm2_range=None, description=None)
    ArrangementFactory(arrangement="12S-4", total_contacts=4, contact_size="20")

    ref = SqlReferenceData()
    assert isinstance(ref, ReferenceData)
    assert ref.get_compatible_contact_sizes("20", WireSystem.AWG) == ["20"]
    assert ref.get_contacts_by_size("20") == [
        Contact("10-375-20", ContactType.PIN, "20", "26÷20", None, None),
    ]
    arrangements = ref.get_arrangements_by_contact_count(4, "20")
    assert [a.arrangement for a in arrangements] == ["12S-4"]
    assert ref.get_contacts_by_size("99") == []
