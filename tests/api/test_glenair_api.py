import pytest

from services.catalog_service import CatalogService
from tests.factories import ArrangementFactory, ContactFactory, WireContactFactory


@pytest.fixture
def catalog(session):
    """Small Series 80 catalog: size-20 and size-16 contacts, 4-way inserts."""
    WireContactFactory(wire_size="20", contact_size="20")
    WireContactFactory(wire_size="16", contact_size="16")
    ContactFactory(part_number="10-375-20", type="Pin", contact_size="20")
    ContactFactory(part_number="10-376-20", type="Socket", contact_size="20")
    ContactFactory(part_number="10-375-16", type="Pin", contact_size="16")
    ArrangementFactory(arrangement="10SL-4", total_contacts=4, contact_size="20", contact_count=3)
    ArrangementFactory(arrangement="10SL-4", total_contacts=4, contact_size="16", contact_count=1)
    ArrangementFactory(arrangement="14S-5", total_contacts=5, contact_size="20")
    return session


def _new_session(client):
    resp = client.post("/api/v1/glenair/builder")
    assert resp.status_code == 201
    return resp.get_json()["id"]


def test_wire_sizes(client):
    data = client.get("/api/v1/glenair/wire-sizes?system=AWG").get_json()
    assert data["system"] == "AWG"
    assert "20" in data["sizes"]
    assert data["awg_to_mm2"]["20"] == 0.52

    mm2 = client.get("/api/v1/glenair/wire-sizes?system=mm2").get_json()
    assert "0.52" in mm2["sizes"]

    assert client.get("/api/v1/glenair/wire-sizes?system=SWG").status_code == 400


def test_shell_styles(client):
    styles = client.get("/api/v1/glenair/shell-styles").get_json()
    assert {"value": "0", "label": "Square Flange Receptacle"} in styles


def test_contact_sizes(client, catalog):
    assert client.get("/api/v1/glenair/contact-sizes").get_json()["sizes"] == ["16", "20"]
    data = client.get("/api/v1/glenair/contact-sizes?wire=20&system=AWG").get_json()
    assert data["sizes"] == ["20"]


def test_contacts_by_size_and_part_number(client, catalog):
    data = client.get("/api/v1/glenair/contacts?size=20").get_json()
    assert [c["part_number"] for c in data["contacts"]] == ["10-375-20", "10-376-20"]

    assert client.get("/api/v1/glenair/contacts").status_code == 400

    contact = client.get("/api/v1/glenair/contacts/10-376-20").get_json()
    assert contact["type"] == "Socket"
    assert client.get("/api/v1/glenair/contacts/NOPE").status_code == 404


def test_arrangement_details(client, catalog):
    data = client.get("/api/v1/glenair/arrangements/10SL-4").get_json()
    assert data["total_contacts"] == 4
    assert sum(s["contact_count"] for s in data["sizes"]) == 4
    assert client.get("/api/v1/glenair/arrangements/99-9").status_code == 404


def test_arrangement_audit(client, catalog):
    assert client.get("/api/v1/glenair/audit/arrangements").get_json() == {"violations": []}


def test_builder_flow(client, catalog):
    sid = _new_session(client)
    base = f"/api/v1/glenair/builder/{sid}"

    state = client.post(f"{base}/wire", json={"system": "AWG", "value": "20", "conductors": 4}).get_json()
    assert state["applied"] is True
    assert state["stage"] == "CONTACT_SIZE_SELECTION"
    assert state["candidates"]["contact_sizes"] == ["20"]

    state = client.post(f"{base}/contact-size", json={"size": "20"}).get_json()
    assert state["stage"] == "CONTACT_SELECTION"
    assert len(state["candidates"]["contacts"]) == 2
    assert [a["arrangement"] for a in state["candidates"]["arrangements"]] == ["10SL-4"]

    state = client.post(f"{base}/contacts/toggle", json={"part_number": "10-375-20"}).get_json()
    assert [c["part_number"] for c in state["selection"]["selected_contacts"]] == ["10-375-20"]

    client.post(f"{base}/contacts/confirm")
    client.post(f"{base}/arrangement", json={"arrangement": "10SL-4"})
    client.post(f"{base}/shell-style", json={"shell_style": "6"})
    state = client.post(f"{base}/build").get_json()

    assert state["applied"] is True
    assert state["stage"] == "COMPLETE"
    assert state["result"]["part_number"] == "806-10SL-4-P20"
    assert state["result"]["metadata"] == {
        "wire_size": "20", "wire_system": "AWG", "contact_part_number": "10-375-20",
    }


def test_build_with_incomplete_selection_not_applied(client, catalog):
    sid = _new_session(client)
    state = client.post(f"/api/v1/glenair/builder/{sid}/build").get_json()
    assert state["applied"] is False
    assert state["result"] is None
    assert state["stage"] == "WIRE_SELECTION"


def test_toggle_requires_candidate_contact(client, catalog):
    sid = _new_session(client)
    base = f"/api/v1/glenair/builder/{sid}"
    client.post(f"{base}/wire", json={"system": "AWG", "value": "20", "conductors": 4})
    client.post(f"{base}/contact-size", json={"size": "20"})

    resp = client.post(f"{base}/contacts/toggle", json={"part_number": "10-375-16"})
    assert resp.status_code == 404


def test_bad_wire_payload(client):
    sid = _new_session(client)
    resp = client.post(f"/api/v1/glenair/builder/{sid}/wire",
                       json={"system": "AWG", "value": "20", "conductors": "many"})
    assert resp.status_code == 400


def test_reset_and_delete(client, catalog):
    sid = _new_session(client)
    base = f"/api/v1/glenair/builder/{sid}"
    client.post(f"{base}/wire", json={"system": "AWG", "value": "20", "conductors": 4})

    state = client.post(f"{base}/reset").get_json()
    assert state["stage"] == "WIRE_SELECTION"
    assert state["selection"]["wire_value"] == ""

    assert client.delete(base).status_code == 200
    assert client.get(base).status_code == 404
    assert client.delete(base).status_code == 404


def test_lookup_failure_maps_to_503(client, catalog, monkeypatch):
    def boom(*_args, **_kwargs):
        raise RuntimeError("database is locked")

    monkeypatch.setattr(CatalogService, "compatible_contact_sizes", boom)
    sid = _new_session(client)
    resp = client.post(f"/api/v1/glenair/builder/{sid}/wire",
                       json={"system": "AWG", "value": "20", "conductors": 4})

    assert resp.status_code == 503
    body = resp.get_json()
    assert body["operation"] == "get_compatible_contact_sizes"
    assert "database is locked" in body["error"]

    state = client.get(f"/api/v1/glenair/builder/{sid}").get_json()
    assert state["stage"] == "WIRE_SELECTION"
    assert "database is locked" in state["error"]


def test_import_endpoint_raw_body(client, session):
    csv = "wire_size,system,contact_size\n20,AWG,20\n20,AWG,20\n"
    resp = client.post("/api/v1/import/wire_contacts", data=csv, content_type="text/csv")
    assert resp.status_code == 200
    report = resp.get_json()
    assert report["imported"] == 1
    assert report["ignored"] == 1


def test_import_endpoint_rejects_unknown_kind(client):
    resp = client.post("/api/v1/import/phm", data="a,b\n", content_type="text/csv")
    assert resp.status_code == 404
