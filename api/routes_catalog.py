"""
api.routes_catalog - /api/v1/glenair/* read-only catalog endpoints.

Expose the reference catalog so the front end (or scripts) can fill the
builder's pick lists without touching the database directly.
"""

from flask import request, jsonify

from api import api_bp
from db import get_session
from glenair.models import SHELL_STYLES, WireSystem
from glenair.units import AWG_TO_MM2, STANDARD_WIRE_SIZES
from services.catalog_service import CatalogService


@api_bp.route("/glenair/wire-sizes")
def wire_sizes():
    """GET /api/v1/glenair/wire-sizes?system=AWG|MM2"""
    try:
        system = WireSystem.coerce(request.args.get("system", "AWG"))
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({
        "system": system.value,
        "sizes": STANDARD_WIRE_SIZES[system],
        "awg_to_mm2": {str(k): v for k, v in AWG_TO_MM2.items()},
    })


@api_bp.route("/glenair/shell-styles")
def shell_styles():
    """List known Series 80 shell-style codes."""
    return jsonify([{"value": k, "label": v} for k, v in SHELL_STYLES.items()])


@api_bp.route("/glenair/contact-sizes")
def contact_sizes():
    """
    GET /api/v1/glenair/contact-sizes[?wire=20&system=AWG]

    Without `wire`: every size in the contact table.
    With `wire`: sizes compatible with that wire.
    """
    wire = request.args.get("wire", "").strip()
    session = get_session()
    try:
        if not wire:
            return jsonify({"sizes": CatalogService.contact_sizes(session)})
        try:
            system = WireSystem.coerce(request.args.get("system", "AWG"))
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
        sizes = CatalogService.compatible_contact_sizes(session, wire, system)
        return jsonify({"wire": wire, "system": system.value, "sizes": sizes})
    finally:
        session.close()


@api_bp.route("/glenair/contacts")
def list_contacts():
    """GET /api/v1/glenair/contacts?size=20"""
    size = request.args.get("size", "").strip()
    if not size:
        return jsonify({"error": "size is required"}), 400
    session = get_session()
    try:
        contacts = CatalogService.contacts_by_size(session, size)
        return jsonify({"size": size, "contacts": [c.to_dict() for c in contacts]})
    finally:
        session.close()


@api_bp.route("/glenair/contacts/<path:part_number>")
def get_contact(part_number: str):
    """GET /api/v1/glenair/contacts/{part number}"""
    session = get_session()
    try:
        contact = CatalogService.contact_by_part_number(session, part_number)
        if not contact:
            return jsonify({"error": "not found"}), 404
        return jsonify(contact.to_dict())
    finally:
        session.close()


@api_bp.route("/glenair/arrangements/<arrangement>")
def get_arrangement(arrangement: str):
    """GET /api/v1/glenair/arrangements/{arrangement} - per-size breakdown"""
    session = get_session()
    try:
        rows = CatalogService.arrangement_details(session, arrangement)
        if not rows:
            return jsonify({"error": "not found"}), 404
        return jsonify({
            "arrangement": arrangement,
            "total_contacts": rows[0].total_contacts,
            "sizes": [r.to_dict() for r in rows],
        })
    finally:
        session.close()


@api_bp.route("/glenair/audit/arrangements")
def audit_arrangements():
    """Arrangements whose per-size counts do not add up to their total."""
    session = get_session()
    try:
        return jsonify({"violations": CatalogService.arrangement_violations(session)})
    finally:
        session.close()
